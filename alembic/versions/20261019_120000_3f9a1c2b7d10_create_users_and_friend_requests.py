"""Create users, user_friends and friend_requests tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_pic', sa.Text(), nullable=True),
        sa.Column('native_language', sa.String(64), nullable=True),
        sa.Column('learning_language', sa.String(64), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('is_onboarded', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_is_onboarded', 'users', ['is_onboarded'])

    # Friend set: one row per direction
    op.create_table(
        'user_friends',
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('friend_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('user_id <> friend_id', name='ck_user_friends_no_self'),
    )
    op.create_index('ix_user_friends_friend_id', 'user_friends', ['friend_id'])

    op.create_table(
        'friend_requests',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('sender_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('pair_key', sa.String(80), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('sender_id <> recipient_id', name='ck_friend_requests_no_self'),
        sa.CheckConstraint("status IN ('pending', 'accepted')", name='ck_friend_requests_status'),
    )
    op.create_index('ix_friend_requests_sender_id', 'friend_requests', ['sender_id'])
    op.create_index('ix_friend_requests_recipient_id', 'friend_requests', ['recipient_id'])
    op.create_index('ix_friend_requests_pair_key', 'friend_requests', ['pair_key'])

    # At most one pending request per unordered pair
    op.create_index(
        'uq_friend_requests_pending_pair',
        'friend_requests',
        ['pair_key'],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
        sqlite_where=sa.text("status = 'pending'"),
    )


def downgrade() -> None:
    op.drop_index('uq_friend_requests_pending_pair', table_name='friend_requests')
    op.drop_index('ix_friend_requests_pair_key', table_name='friend_requests')
    op.drop_index('ix_friend_requests_recipient_id', table_name='friend_requests')
    op.drop_index('ix_friend_requests_sender_id', table_name='friend_requests')
    op.drop_table('friend_requests')
    op.drop_index('ix_user_friends_friend_id', table_name='user_friends')
    op.drop_table('user_friends')
    op.drop_index('ix_users_is_onboarded', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
