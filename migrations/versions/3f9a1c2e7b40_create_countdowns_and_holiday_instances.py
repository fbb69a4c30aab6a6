"""create countdowns and holiday_instances

Revision ID: 3f9a1c2e7b40
Revises:
Create Date: 2026-10-18 12:04:37.418220

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # 1. countdowns (target_date is naive UTC+3)
    op.create_table(
        'countdowns',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('target_date', sa.DateTime(timezone=False), nullable=False),
        sa.Column('icon', sa.String(length=16), nullable=False),
        sa.Column('theme', sa.String(length=32), nullable=False, server_default='default'),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('recurrence_json', sa.JSON(), nullable=True),
        sa.Column('is_starred', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('reminder_timing_json', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=False), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_countdowns_target_date', 'countdowns', ['target_date'])

    # 2. holiday_instances
    op.create_table(
        'holiday_instances',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.String(length=64), nullable=False),
        sa.Column('hijri_year', sa.Integer(), nullable=False),
        sa.Column('calculated_date', sa.Date(), nullable=False),
        sa.Column('override_date', sa.Date(), nullable=True),
        sa.Column('override_reason', sa.Text(), nullable=True),
        sa.Column('last_calculated_at', sa.DateTime(timezone=False), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'hijri_year', name='uq_holiday_instance_event_year')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('holiday_instances')
    op.drop_index('ix_countdowns_target_date', table_name='countdowns')
    op.drop_table('countdowns')
