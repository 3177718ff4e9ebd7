"""initial_schema

Revision ID: c4d1e2f3a5b6
Revises:
Create Date: 2026-10-19 10:00:00.000000

미디어 공유 서비스 초기 스키마: users, videos, tweets, comments, playlists,
playlist_videos, likes, subscriptions.
Initial media-sharing schema.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c4d1e2f3a5b6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — 계정 + 리프레시 토큰 슬롯
    # Accounts and the single refresh-token slot
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('refresh_token', sa.String(1024), nullable=True),
        sa.Column('avatar', sa.String(1024), nullable=False),
        sa.Column('cover_image', sa.String(1024), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    # watch_history — 조회 한 번에 한 행, id 순서 = 방문 순서
    # One row per visit; id order is visit order
    op.create_table(
        'watch_history',
        sa.Column('id', sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_id', sa.Uuid(), nullable=False),
        sa.Column('watched_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_watch_history_user_id', 'watch_history', ['user_id'])

    op.create_table(
        'videos',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_file', sa.String(1024), nullable=False),
        sa.Column('thumbnail', sa.String(1024), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_videos_owner_id', 'videos', ['owner_id'])
    op.create_index('ix_videos_created_at', 'videos', ['created_at'])

    op.create_table(
        'tweets',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_tweets_owner_id', 'tweets', ['owner_id'])
    op.create_index('ix_tweets_created_at', 'tweets', ['created_at'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('video_id', sa.Uuid(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_comments_video_id', 'comments', ['video_id'])

    op.create_table(
        'playlists',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_playlists_owner_id', 'playlists', ['owner_id'])

    # playlist_videos — 재생목록 멤버십, (playlist, video) 당 1행
    # Playlist membership, one row per (playlist, video)
    op.create_table(
        'playlist_videos',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('playlist_id', sa.Uuid(), sa.ForeignKey('playlists.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_id', sa.Uuid(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True)),
        sa.UniqueConstraint('playlist_id', 'video_id', name='uq_playlist_video'),
    )

    # likes — 좋아요 엣지, 대상은 다형 참조 (no FK on target_id)
    # Like edges; the unique triple backs the atomic toggle
    op.create_table(
        'likes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('actor_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('target_kind', sa.String(16), nullable=False),
        sa.Column('target_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.UniqueConstraint('actor_id', 'target_kind', 'target_id', name='uq_like_actor_target'),
    )
    op.create_index('ix_likes_target', 'likes', ['target_kind', 'target_id'])

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('subscriber_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('channel_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscription_pair'),
    )
    op.create_index('ix_subscriptions_channel_id', 'subscriptions', ['channel_id'])


def downgrade() -> None:
    op.drop_table('subscriptions')
    op.drop_table('likes')
    op.drop_table('playlist_videos')
    op.drop_table('playlists')
    op.drop_table('comments')
    op.drop_table('tweets')
    op.drop_table('videos')
    op.drop_table('watch_history')
    op.drop_table('users')
