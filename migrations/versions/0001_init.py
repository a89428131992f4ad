"""init departments and employees

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'departments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('parent_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['parent_id'], ['departments.id'],
            name='fk_departments_parent_id_departments',
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_departments'),
    )
    # уникальность name в пределах parent_id обеспечивается приложением
    op.create_index('ix_departments_parent_id', 'departments', ['parent_id'])

    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('position', sa.String(length=200), nullable=False),
        sa.Column('hired_at', sa.Date(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['department_id'], ['departments.id'],
            name='fk_employees_department_id_departments',
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_employees'),
    )
    op.create_index('ix_employees_department_id', 'employees', ['department_id'])


def downgrade() -> None:
    op.drop_index('ix_employees_department_id', table_name='employees')
    op.drop_table('employees')
    op.drop_index('ix_departments_parent_id', table_name='departments')
    op.drop_table('departments')
