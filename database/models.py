from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimeStampMixin

NAME_MAX_LENGTH = 200


class Department(TimeStampMixin, Base):
    __tablename__ = 'departments'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    # FK - на саму себя; удаление родителя удаляет всё поддерево на стороне БД
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey('departments.id', ondelete='CASCADE'),
        nullable=True,
        index=True,
    )

    parent: Mapped[Optional['Department']] = relationship(
        back_populates='children',
        remote_side='Department.id',
    )

    children: Mapped[list['Department']] = relationship(
        back_populates='parent',
        passive_deletes=True,
    )

    employees: Mapped[list['Employee']] = relationship(
        back_populates='department',
        passive_deletes=True,
    )


class Employee(TimeStampMixin, Base):
    __tablename__ = 'employees'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    department_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('departments.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    position: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    hired_at: Mapped[date | None] = mapped_column(Date, nullable=True)

    department: Mapped['Department'] = relationship(back_populates='employees')
