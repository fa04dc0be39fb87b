"""create idiom_minor_types table

Revision ID: 20260301_1010_create_idiom_minor_types
Revises: 20260301_1000_create_idiom_major_types
Create Date: 2026-03-01 10:10:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260301_1010_create_idiom_minor_types'
down_revision = '20260301_1000_create_idiom_major_types'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'idiom_minor_types',
        sa.Column('type_code', sa.String(64), primary_key=True),
        sa.Column('major_type_code', sa.String(64), sa.ForeignKey('idiom_major_types.type_code'), nullable=False),
        sa.Column('type_name', sa.String(128), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index('ix_idiom_minor_types_major_type_code', 'idiom_minor_types', ['major_type_code'])

def downgrade() -> None:
    op.drop_index('ix_idiom_minor_types_major_type_code', table_name='idiom_minor_types')
    op.drop_table('idiom_minor_types')
