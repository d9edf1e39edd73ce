"""create funcionarios table

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2025-09-20 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'funcionarios',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nome_completo', sa.String(length=255), nullable=False),
        sa.Column('cpf', sa.String(length=20), nullable=False),
        sa.Column('salario_base', sa.Numeric(12, 2), nullable=False),
        sa.UniqueConstraint('cpf', name='uq_funcionarios_cpf'),
    )
    op.create_index('ix_funcionarios_nome', 'funcionarios', ['nome_completo'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_funcionarios_nome', table_name='funcionarios')
    op.drop_table('funcionarios')
