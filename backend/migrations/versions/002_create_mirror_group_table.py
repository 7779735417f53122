"""Create mirror_group table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17 09:10:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade():
    # No foreign key to collaboration_group: group_id may hold the 15-character
    # form, and the group sync removes mirrors itself on delete.
    op.create_table(
        'mirror_group',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.String(18), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.String(18), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('member_count', sa.Integer(), nullable=True),
        sa.Column('full_photo_url', sa.Text(), nullable=True),
        sa.Column('medium_photo_url', sa.Text(), nullable=True),
        sa.Column('small_photo_url', sa.Text(), nullable=True),
        sa.Column('banner_photo_url', sa.Text(), nullable=True),
        sa.Column('collaboration_type', sa.Text(), nullable=True),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_broadcast', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_synced_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('group_id', name='uq_mirror_group_group_id')
    )

    op.create_index('idx_mirror_group_active', 'mirror_group', ['active'])

    op.execute("""
        CREATE TRIGGER update_mirror_group_updated_at
        BEFORE UPDATE ON mirror_group
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column();
    """)


def downgrade():
    op.execute('DROP TRIGGER IF EXISTS update_mirror_group_updated_at ON mirror_group')
    op.drop_index('idx_mirror_group_active', table_name='mirror_group')
    op.drop_table('mirror_group')
