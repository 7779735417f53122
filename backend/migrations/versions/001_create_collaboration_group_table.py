"""Create collaboration_group table

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Reusable updated_at trigger function
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
          NEW.updated_at = NOW();
          RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.create_table(
        'collaboration_group',
        sa.Column('id', sa.String(18), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.String(18), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('group_email', sa.Text(), nullable=True),
        sa.Column('member_count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('collaboration_type', sa.Text(), nullable=False, server_default="Public"),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_broadcast', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('photo_id', sa.String(18), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_collaboration_group_name'),
        sa.CheckConstraint(
            "collaboration_type IN ('Public', 'Private', 'Unlisted')",
            name='ck_collaboration_group_type'
        )
    )

    op.execute("""
        CREATE TRIGGER update_collaboration_group_updated_at
        BEFORE UPDATE ON collaboration_group
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column();
    """)


def downgrade():
    op.execute('DROP TRIGGER IF EXISTS update_collaboration_group_updated_at ON collaboration_group')
    op.drop_table('collaboration_group')
    op.execute('DROP FUNCTION IF EXISTS update_updated_at_column()')
