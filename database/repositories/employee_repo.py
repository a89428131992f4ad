from collections.abc import Iterable

from sqlalchemy import select, update as sql_update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import logger
from domain.entities import Employee, EmployeeSort

from ..mappers import EmployeeMapper
from ..models import Employee as EmployeeORM

_SORT_COLUMNS = {
    EmployeeSort.FULL_NAME: EmployeeORM.full_name,
    EmployeeSort.CREATED_AT: EmployeeORM.created_at,
}


class EmployeeRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, employee: Employee) -> Employee:
        try:
            # 1. Конвертация доменной сущности в ORM-объект
            orm_employee = EmployeeMapper.to_orm(employee)

            # 2. Добавление в сессию
            self.session.add(orm_employee)

            # 3. flush() — отправляем в БД, получаем ID; refresh() — подтягиваем created_at
            await self.session.flush()
            await self.session.refresh(orm_employee)

            # 4. Обновляем доменный объект
            employee.id = orm_employee.id
            employee.created_at = orm_employee.created_at

            logger.info(f'Сотрудник сохранён. ID - {employee.id}')
            return employee

        except SQLAlchemyError as e:
            logger.error(f'Ошибка при сохранении. {e}')
            raise

    async def list_by_departments(
        self,
        department_ids: Iterable[int],
        sort: EmployeeSort = EmployeeSort.FULL_NAME,
    ) -> list[Employee]:
        """Сотрудники набора подразделений одним запросом; id — вторичный ключ для стабильного порядка."""
        stmt = (
            select(EmployeeORM)
            .where(EmployeeORM.department_id.in_(list(department_ids)))
            .order_by(_SORT_COLUMNS[sort], EmployeeORM.id)
        )
        result = await self.session.execute(stmt)
        return [EmployeeMapper.to_domain(e) for e in result.scalars().all()]

    async def reassign(self, from_department_id: int, to_department_id: int) -> int:
        try:
            result = await self.session.execute(
                sql_update(EmployeeORM)
                .where(EmployeeORM.department_id == from_department_id)
                .values(department_id=to_department_id)
            )
            logger.info(
                f'Сотрудники ID={from_department_id} переведены в ID={to_department_id} '
                f'({result.rowcount} чел.)'
            )
            return result.rowcount

        except SQLAlchemyError as e:
            logger.error(f'Ошибка при переводе сотрудников ID={from_department_id}: {e}')
            raise
