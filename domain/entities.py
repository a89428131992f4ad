from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


@dataclass
class Department:
    """Подразделение"""

    name: str
    parent_id: int | None
    id: int | None = None
    created_at: datetime | None = None


@dataclass
class Employee:
    """Сотрудник"""

    department_id: int
    full_name: str
    position: str
    hired_at: date | None
    id: int | None = None
    created_at: datetime | None = None


@dataclass
class DepartmentNode:
    """Узел дерева подразделений, собирается заново на каждый запрос.

    children и employees заполняются только при сборке дерева и в БД не хранятся.
    """

    id: int
    name: str
    parent_id: int | None
    created_at: datetime | None = None
    children: list[DepartmentNode] = field(default_factory=list)
    employees: list[Employee] = field(default_factory=list)


class EmployeeSort(str, Enum):
    """Ключ сортировки сотрудников внутри подразделения"""

    FULL_NAME = 'full_name'
    CREATED_AT = 'created_at'


# ============ Режимы удаления ============

@dataclass(frozen=True)
class CascadeDelete:
    """Удалить подразделение вместе со всем поддеревом и сотрудниками."""


@dataclass(frozen=True)
class ReassignDelete:
    """Перевести прямых потомков и сотрудников в target_id, затем удалить."""

    target_id: int


DeleteMode = CascadeDelete | ReassignDelete
