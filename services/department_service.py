from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import logger
from database.repositories.department_repo import DepartmentRepo
from database.repositories.employee_repo import EmployeeRepo
from domain.entities import Department, DepartmentNode, DeleteMode, Employee, EmployeeSort
from domain.exceptions import NotFoundError, StoreError

from .cycle_checker import CycleChecker
from .deletion import DeletionOrchestrator
from .tree_assembler import TreeAssembler
from .validation import validate_department, validate_employee

_UNSET = object()


class DepartmentService:
    """Сценарии работы с подразделениями поверх одной сессии (одной транзакции)."""

    def __init__(self, session: AsyncSession):
        self.departments = DepartmentRepo(session)
        self.employees = EmployeeRepo(session)

    async def create_department(self, name: str, parent_id: int | None = None) -> Department:
        if parent_id is not None and not await self.departments.exists(parent_id):
            raise NotFoundError('Родительское подразделение не найдено')

        department = Department(name=name, parent_id=parent_id)
        await validate_department(self.departments, department)
        return await self.departments.save(department)

    async def create_employee(
        self,
        department_id: int,
        full_name: str,
        position: str,
        hired_at: date | None = None,
    ) -> Employee:
        if not await self.departments.exists(department_id):
            raise NotFoundError('Подразделение не найдено')

        employee = Employee(
            department_id=department_id,
            full_name=full_name,
            position=position,
            hired_at=hired_at,
        )
        validate_employee(employee)
        return await self.employees.save(employee)

    async def get_tree(
        self,
        department_id: int,
        depth: int,
        include_employees: bool = True,
        sort: EmployeeSort = EmployeeSort.FULL_NAME,
    ) -> DepartmentNode:
        tree = await TreeAssembler(self.departments, self.employees).assemble(
            department_id, depth, include_employees, sort
        )
        logger.debug(f'Подразделение ID={department_id} получено (depth={depth}, employees={include_employees})')
        return tree

    async def list_employees(
        self,
        department_id: int,
        sort: EmployeeSort = EmployeeSort.FULL_NAME,
    ) -> list[Employee]:
        if not await self.departments.exists(department_id):
            raise NotFoundError('Подразделение не найдено')
        return await self.employees.list_by_departments([department_id], sort)

    async def update_department(
        self,
        department_id: int,
        name: str | None = None,
        parent_id=_UNSET,
    ) -> Department:
        """Переименование и/или перемещение. parent_id=None переносит в корень,
        отсутствие аргумента оставляет родителя прежним."""
        department = await self.departments.get(department_id)
        if department is None:
            raise NotFoundError('Подразделение не найдено')

        if parent_id is not _UNSET and parent_id != department.parent_id:
            if parent_id is not None and parent_id != department_id:
                if not await self.departments.exists(parent_id):
                    raise NotFoundError('Родительское подразделение не найдено')
            await CycleChecker(self.departments).check(department_id, parent_id)
            department.parent_id = parent_id

        if name is not None:
            department.name = name

        await validate_department(self.departments, department)

        updated = await self.departments.update(department)
        if updated is None:
            raise StoreError('Подразделение исчезло во время обновления')
        return updated

    async def delete_department(self, department_id: int, mode: DeleteMode) -> None:
        await DeletionOrchestrator(self.departments, self.employees).delete(department_id, mode)
