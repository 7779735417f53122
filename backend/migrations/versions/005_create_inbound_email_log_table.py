"""Create inbound_email_log table

Revision ID: 005
Revises: 004
Create Date: 2026-10-17 09:40:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '005'
down_revision = '004'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'inbound_email_log',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('source', sa.Text(), nullable=False, server_default='SMTP'),
        sa.Column('message_id', sa.Text(), nullable=True),
        sa.Column('from_address', sa.Text(), nullable=True),
        sa.Column('to_address', sa.Text(), nullable=True),
        sa.Column('subject', sa.Text(), nullable=True),
        sa.Column('subject_id', sa.String(18), nullable=True),
        sa.Column('feed_item_id', sa.String(18), nullable=True),
        sa.Column('status', sa.Text(), nullable=False, server_default="RECEIVED"),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('received_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("source IN ('SMTP', 'API')", name='ck_inbound_email_log_source'),
        sa.CheckConstraint(
            "status IN ('RECEIVED', 'POSTED', 'FAILED')",
            name='ck_inbound_email_log_status'
        )
    )

    op.create_index(
        'idx_inbound_email_log_status',
        'inbound_email_log',
        ['status', 'received_at']
    )

    op.execute("""
        CREATE TRIGGER update_inbound_email_log_updated_at
        BEFORE UPDATE ON inbound_email_log
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column();
    """)


def downgrade():
    op.execute('DROP TRIGGER IF EXISTS update_inbound_email_log_updated_at ON inbound_email_log')
    op.drop_index('idx_inbound_email_log_status', table_name='inbound_email_log')
    op.drop_table('inbound_email_log')
