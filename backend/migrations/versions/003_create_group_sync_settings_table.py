"""Create group_sync_settings table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17 09:20:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '003'
down_revision = '002'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'group_sync_settings',
        sa.Column('id', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('allow_public_groups', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_private_groups', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_unlisted_groups', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('id = 1', name='ck_group_sync_settings_singleton')
    )

    op.execute("""
        CREATE TRIGGER update_group_sync_settings_updated_at
        BEFORE UPDATE ON group_sync_settings
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column();
    """)


def downgrade():
    op.execute('DROP TRIGGER IF EXISTS update_group_sync_settings_updated_at ON group_sync_settings')
    op.drop_table('group_sync_settings')
