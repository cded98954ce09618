"""profiles and tasks

Revision ID: 4b1f6c2d9a10
Revises:
Create Date: 2026-01-01 00:00:00.000000+00:00

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '4b1f6c2d9a10'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False, comment='Auth provider user id'),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('mobile', sa.String(length=32), nullable=True),
        sa.Column('timezone', sa.String(length=64), nullable=True, comment='IANA timezone name'),
        sa.Column('current_streak', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_streak_updated', sa.Date(), nullable=True),
        sa.Column('email_notifications_enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('current_streak >= 0', name=op.f('ck_profiles_current_streak_non_negative')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_profiles')),
    )
    op.create_index(op.f('ix_profiles_email'), 'profiles', ['email'], unique=False)

    op.create_table(
        'tasks',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            'end_time IS NULL OR start_time IS NULL OR end_time >= start_time',
            name=op.f('ck_tasks_end_after_start'),
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['profiles.id'],
            name=op.f('fk_tasks_user_id_profiles'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tasks')),
    )
    op.create_index(op.f('ix_tasks_user_id'), 'tasks', ['user_id'], unique=False)
    op.create_index(op.f('ix_tasks_due_date'), 'tasks', ['due_date'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f('ix_tasks_due_date'), table_name='tasks')
    op.drop_index(op.f('ix_tasks_user_id'), table_name='tasks')
    op.drop_table('tasks')
    op.drop_index(op.f('ix_profiles_email'), table_name='profiles')
    op.drop_table('profiles')
