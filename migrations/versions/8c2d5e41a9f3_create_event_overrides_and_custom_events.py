"""create event_overrides and custom_events

Revision ID: 8c2d5e41a9f3
Revises: 3f9a1c2e7b40
Create Date: 2026-10-18 15:22:09.731604

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c2d5e41a9f3'
down_revision: Union[str, Sequence[str], None] = '3f9a1c2e7b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # 1. event_overrides (admin edits keyed by catalog base id)
    op.create_table(
        'event_overrides',
        sa.Column('base_id', sa.String(length=64), nullable=False),
        sa.Column('changes_json', sa.JSON(), nullable=False),
        sa.Column('overridden_at', sa.DateTime(timezone=False), nullable=False),
        sa.PrimaryKeyConstraint('base_id')
    )

    # 2. custom_events (target_date is naive UTC+3)
    op.create_table(
        'custom_events',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('title_ar', sa.String(length=255), nullable=False),
        sa.Column('target_date', sa.DateTime(timezone=False), nullable=False),
        sa.Column('icon', sa.String(length=16), nullable=False),
        sa.Column('theme', sa.String(length=32), nullable=False, server_default='default'),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('date_confidence', sa.String(length=32), nullable=True),
        sa.Column('date_source', sa.String(length=255), nullable=True),
        sa.Column('is_hijri_derived', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('recurrence_json', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=False), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=False), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('custom_events')
    op.drop_table('event_overrides')
