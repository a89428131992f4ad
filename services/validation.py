"""Проверки сущностей перед записью.

Строковые поля обрезаются по краям прямо в переданном объекте,
после чего проверяются на пустоту и длину.
"""

from database.models import NAME_MAX_LENGTH
from database.repositories.department_repo import DepartmentRepo
from domain.entities import Department, Employee
from domain.exceptions import ValidationError


def clean_text(value: str | None, field: str, max_length: int = NAME_MAX_LENGTH) -> str:
    value = (value or '').strip()
    if not value:
        raise ValidationError(f'{field} не может быть пустым')
    if len(value) > max_length:
        raise ValidationError(f'{field} слишком длинное (максимум {max_length})')
    return value


def validate_employee(employee: Employee) -> Employee:
    employee.full_name = clean_text(employee.full_name, 'full_name')
    employee.position = clean_text(employee.position, 'position')
    return employee


async def validate_department(repo: DepartmentRepo, department: Department) -> Department:
    """Нормализует имя и проверяет уникальность среди соседей (точное совпадение)."""
    department.name = clean_text(department.name, 'name')

    if await repo.name_exists_in_parent(
        department.name, department.parent_id, exclude_id=department.id
    ):
        raise ValidationError('Подразделение с таким именем уже существует в данном родителе')
    return department
