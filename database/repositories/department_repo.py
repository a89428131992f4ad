from collections.abc import Iterable

from sqlalchemy import delete as sql_delete, select, update as sql_update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import logger
from domain.entities import Department, DepartmentNode

from ..mappers import DepartmentMapper
from ..models import Department as DepartmentORM


class DepartmentRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, department: Department) -> Department:
        try:
            orm_department = DepartmentMapper.to_orm(department)
            self.session.add(orm_department)
            await self.session.flush()
            # created_at выставляется сервером
            await self.session.refresh(orm_department)
            department.id = orm_department.id
            department.created_at = orm_department.created_at
            logger.info(f'Департамент сохранён. ID={department.id}')
            return department
        except SQLAlchemyError as e:
            logger.error(f'Ошибка при сохранении департамента: {e}')
            raise

    async def update(self, upd_department: Department) -> Department | None:
        try:
            stmt = select(DepartmentORM).where(DepartmentORM.id == upd_department.id)
            result = await self.session.execute(stmt)
            orm_department = result.scalars().first()

            if not orm_department:
                logger.error(f'Департамент с ID={upd_department.id} не найден.')
                return None

            orm_department.name = upd_department.name
            orm_department.parent_id = upd_department.parent_id
            await self.session.flush()

            logger.info(f'Департамент обновлён. ID={orm_department.id}')
            return DepartmentMapper.to_domain(orm_department)

        except SQLAlchemyError as e:
            logger.error(f'Ошибка БД при обновлении департамента ID={upd_department.id}: {e}')
            raise

    async def get(self, id: int) -> Department | None:
        try:
            stmt = select(DepartmentORM).where(DepartmentORM.id == id)
            result = await self.session.execute(stmt)
            orm_department = result.scalars().first()

            if not orm_department:
                return None

            return DepartmentMapper.to_domain(orm_department)

        except SQLAlchemyError as e:
            logger.error(f'Ошибка БД при получении департамента ID={id}: {e}')
            raise

    async def get_node(self, id: int) -> DepartmentNode | None:
        result = await self.session.execute(select(DepartmentORM).where(DepartmentORM.id == id))
        orm_department = result.scalars().first()
        return DepartmentMapper.to_node(orm_department) if orm_department else None

    async def exists(self, id: int) -> bool:
        result = await self.session.execute(select(DepartmentORM.id).where(DepartmentORM.id == id))
        return result.scalar_one_or_none() is not None

    async def delete(self, id: int) -> bool:
        """Удаляет строку одним DELETE; поддерево и сотрудники уходят по ON DELETE CASCADE."""
        try:
            result = await self.session.execute(
                sql_delete(DepartmentORM).where(DepartmentORM.id == id)
            )
            deleted = result.rowcount > 0
            if deleted:
                logger.info(f'Департамент ID={id} удалён')
            else:
                logger.warning(f'Департамент ID={id} не найден при удалении')
            return deleted

        except SQLAlchemyError as e:
            logger.error(f'Ошибка при удалении департамента ID={id}: {e}')
            raise

    async def name_exists_in_parent(
        self,
        name: str,
        parent_id: int | None,
        exclude_id: int | None = None,
    ) -> bool:
        """Проверяет уникальность имени в пределах одного parent (включая корень)."""
        stmt = select(DepartmentORM.id).where(DepartmentORM.name == name)
        if parent_id is None:
            stmt = stmt.where(DepartmentORM.parent_id.is_(None))
        else:
            stmt = stmt.where(DepartmentORM.parent_id == parent_id)
        if exclude_id is not None:
            stmt = stmt.where(DepartmentORM.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_child_ids(self, parent_ids: Iterable[int]) -> list[int]:
        result = await self.session.execute(
            select(DepartmentORM.id).where(DepartmentORM.parent_id.in_(list(parent_ids)))
        )
        return list(result.scalars().all())

    async def list_children(self, parent_ids: Iterable[int]) -> list[DepartmentNode]:
        """Все прямые потомки набора подразделений в порядке создания."""
        result = await self.session.execute(
            select(DepartmentORM)
            .where(DepartmentORM.parent_id.in_(list(parent_ids)))
            .order_by(DepartmentORM.id)
        )
        return [DepartmentMapper.to_node(d) for d in result.scalars().all()]

    async def list_child_names(self, parent_id: int) -> list[str]:
        result = await self.session.execute(
            select(DepartmentORM.name).where(DepartmentORM.parent_id == parent_id)
        )
        return list(result.scalars().all())

    async def reassign_children(self, from_parent_id: int, to_parent_id: int) -> int:
        """Переносит прямых потомков from_parent_id к to_parent_id. Возвращает число строк."""
        try:
            result = await self.session.execute(
                sql_update(DepartmentORM)
                .where(DepartmentORM.parent_id == from_parent_id)
                .values(parent_id=to_parent_id)
            )
            logger.info(
                f'Дочерние подразделения ID={from_parent_id} переведены в ID={to_parent_id} '
                f'({result.rowcount} шт.)'
            )
            return result.rowcount

        except SQLAlchemyError as e:
            logger.error(f'Ошибка при переводе дочерних подразделений ID={from_parent_id}: {e}')
            raise
