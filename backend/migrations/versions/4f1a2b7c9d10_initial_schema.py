"""initial schema: users, subscriptions, videos, watch history

Revision ID: 4f1a2b7c9d10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4f1a2b7c9d10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('avatar_url', sa.String(length=512), nullable=False),
        sa.Column('cover_image_url', sa.String(length=512), nullable=False, server_default=''),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'])
    op.create_index(op.f('ix_users_email'), 'users', ['email'])

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('subscriber_id', sa.Integer(), nullable=False),
        sa.Column('channel_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('subscriber_id <> channel_id', name=op.f('ck_subscriptions_no_self_subscription')),
        sa.ForeignKeyConstraint(
            ['subscriber_id'], ['users.id'],
            name=op.f('fk_subscriptions_subscriber_id_users'), ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['channel_id'], ['users.id'],
            name=op.f('fk_subscriptions_channel_id_users'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_subscriptions')),
        sa.UniqueConstraint(
            'subscriber_id', 'channel_id', name='uq_subscriptions_subscriber_id_channel_id'
        ),
    )
    op.create_index(op.f('ix_subscriptions_subscriber_id'), 'subscriptions', ['subscriber_id'])
    op.create_index(op.f('ix_subscriptions_channel_id'), 'subscriptions', ['channel_id'])

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('video_file_url', sa.String(length=512), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=512), nullable=False, server_default=''),
        sa.Column('duration_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['users.id'], name=op.f('fk_videos_owner_id_users'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_videos')),
    )
    op.create_index(op.f('ix_videos_owner_id'), 'videos', ['owner_id'])

    op.create_table(
        'watch_history',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('watched_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name=op.f('fk_watch_history_user_id_users'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['video_id'], ['videos.id'], name=op.f('fk_watch_history_video_id_videos'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('user_id', 'video_id', name=op.f('pk_watch_history')),
        sa.UniqueConstraint('user_id', 'position', name='uq_watch_history_user_id_position'),
    )


def downgrade():
    op.drop_table('watch_history')
    op.drop_index(op.f('ix_videos_owner_id'), table_name='videos')
    op.drop_table('videos')
    op.drop_index(op.f('ix_subscriptions_channel_id'), table_name='subscriptions')
    op.drop_index(op.f('ix_subscriptions_subscriber_id'), table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
