"""Create feed_item table

Revision ID: 004
Revises: 003
Create Date: 2026-10-17 09:30:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '004'
down_revision = '003'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'feed_item',
        sa.Column('id', sa.String(18), nullable=False),
        sa.Column('parent_id', sa.String(18), nullable=False),
        sa.Column('network_id', sa.String(18), nullable=True),
        sa.Column('created_by_id', sa.String(18), nullable=False),
        sa.Column('type', sa.Text(), nullable=False, server_default='TextPost'),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('message_segments', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='[]'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index(
        'idx_feed_item_parent_created',
        'feed_item',
        ['parent_id', 'created_at']
    )


def downgrade():
    op.drop_index('idx_feed_item_parent_created', table_name='feed_item')
    op.drop_table('feed_item')
