"""Initial migration

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-18 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create campus_boundaries table
    op.create_table(
        'campus_boundaries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=64), nullable=False, unique=True, comment="Имя контура (по умолчанию 'campus')"),
        sa.Column('points', sa.JSON(), nullable=False, comment="Упорядоченный список точек [[lat, lng], …] границы кампуса"),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
    )
    op.create_index('ix_campus_boundaries_id', 'campus_boundaries', ['id'])


def downgrade():
    op.drop_index('ix_campus_boundaries_id', table_name='campus_boundaries')
    op.drop_table('campus_boundaries')
