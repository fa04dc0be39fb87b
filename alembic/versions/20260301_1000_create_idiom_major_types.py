"""create idiom_major_types table

Revision ID: 20260301_1000_create_idiom_major_types
Revises:
Create Date: 2026-03-01 10:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260301_1000_create_idiom_major_types'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'idiom_major_types',
        sa.Column('type_code', sa.String(64), primary_key=True),
        sa.Column('type_name', sa.String(128), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )

def downgrade() -> None:
    op.drop_table('idiom_major_types')
