from database.repositories.department_repo import DepartmentRepo
from database.repositories.employee_repo import EmployeeRepo
from domain.entities import CascadeDelete, DeleteMode, ReassignDelete
from domain.exceptions import CycleError, NotFoundError, ValidationError

from .cycle_checker import CycleChecker


def parse_delete_mode(mode: str, reassign_to_department_id: int | None) -> DeleteMode:
    """Разбор query-параметров до любых обращений к БД. Пустой mode означает cascade."""
    if mode in ('', 'cascade'):
        return CascadeDelete()
    if mode == 'reassign':
        if reassign_to_department_id is None:
            raise ValidationError('reassign_to_department_id обязателен при mode=reassign')
        return ReassignDelete(target_id=reassign_to_department_id)
    raise ValidationError('mode должен быть "cascade" или "reassign"')


class DeletionOrchestrator:
    """
    Удаление подразделения в рамках одной транзакции сессии.

    Транзакцию открывает и закрывает вызывающий код; любое исключение отсюда
    приводит к полному откату, частичный перевод сотрудников не фиксируется.
    """

    def __init__(self, departments: DepartmentRepo, employees: EmployeeRepo):
        self.departments = departments
        self.employees = employees

    async def delete(self, department_id: int, mode: DeleteMode) -> None:
        if not isinstance(mode, (CascadeDelete, ReassignDelete)):
            raise ValidationError(f'Неизвестный режим удаления: {mode!r}')
        if not await self.departments.exists(department_id):
            raise NotFoundError('Подразделение не найдено')

        if isinstance(mode, ReassignDelete):
            await self._reassign(department_id, mode.target_id)

        if not await self.departments.delete(department_id):
            raise NotFoundError('Подразделение не найдено')

    async def _reassign(self, department_id: int, target_id: int) -> None:
        if target_id == department_id:
            raise ValidationError('Нельзя переводить в удаляемое подразделение')
        if not await self.departments.exists(target_id):
            raise NotFoundError('Целевое подразделение для reassign не найдено')

        if target_id in await CycleChecker(self.departments).subtree_ids(department_id):
            raise CycleError('Целевое подразделение находится в поддереве удаляемого')

        moving = set(await self.departments.list_child_names(department_id))
        existing = await self.departments.list_child_names(target_id)
        # сам удаляемый узел может быть ребёнком target; его имя освободится
        deleted = await self.departments.get(department_id)
        if deleted.parent_id == target_id:
            existing.remove(deleted.name)
        if moving & set(existing):
            raise ValidationError(
                'В целевом подразделении уже есть подразделения с такими же именами'
            )

        await self.employees.reassign(department_id, target_id)
        await self.departments.reassign_children(department_id, target_id)
