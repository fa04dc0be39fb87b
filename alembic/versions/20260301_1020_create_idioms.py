"""create idioms table

Revision ID: 20260301_1020_create_idioms
Revises: 20260301_1010_create_idiom_minor_types
Create Date: 2026-03-01 10:20:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260301_1020_create_idioms'
down_revision = '20260301_1010_create_idiom_minor_types'
branch_labels = None
depends_on = None

def upgrade() -> None:
    # examples / exam_images hold JSON-encoded arrays; category codes carry no FK
    op.create_table(
        'idioms',
        sa.Column('idiom', sa.String(64), primary_key=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('examples', sa.Text(), nullable=False),
        sa.Column('exam_images', sa.Text(), nullable=True),
        sa.Column('major_type_code', sa.String(64), nullable=True),
        sa.Column('minor_type_code', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_idioms_major_type_code', 'idioms', ['major_type_code'])
    op.create_index('ix_idioms_minor_type_code', 'idioms', ['minor_type_code'])

def downgrade() -> None:
    op.drop_index('ix_idioms_minor_type_code', table_name='idioms')
    op.drop_index('ix_idioms_major_type_code', table_name='idioms')
    op.drop_table('idioms')
