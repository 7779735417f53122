"""Add collaboration_group.network_id

Revision ID: 006
Revises: 005
Create Date: 2026-10-17 09:50:00.000000

Only needed where communities are enabled. Without this column feed posts
for groups fall back to DEFAULT_NETWORK_ID.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '006'
down_revision = '005'
branch_labels = None
depends_on = None


def upgrade():
    op.add_column(
        'collaboration_group',
        sa.Column('network_id', sa.String(18), nullable=True)
    )


def downgrade():
    op.drop_column('collaboration_group', 'network_id')
