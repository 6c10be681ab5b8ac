"""Create initial schema

Revision ID: initial_schema
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = 'initial_schema'
down_revision = None
branch_labels = None
depends_on = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    """Create users, sessions, profiles, posts, comments, connections, messaging and jobs."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('headline', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('reset_password_token', sa.String(length=64), nullable=True),
        sa.Column('reset_password_expires_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_is_active', 'users', ['is_active'])
    op.create_index('ix_users_reset_password_token', 'users', ['reset_password_token'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'user_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('session_token', sa.TEXT(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('last_activity', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_user_sessions_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_user_sessions'),
    )
    op.create_index('ix_user_sessions_user_id', 'user_sessions', ['user_id'])
    op.create_index('ix_user_sessions_session_token', 'user_sessions', ['session_token'], unique=True)
    op.create_index('ix_user_sessions_expires_at', 'user_sessions', ['expires_at'])
    op.create_index('ix_user_sessions_last_activity', 'user_sessions', ['last_activity'])
    op.create_index('ix_user_sessions_created_at', 'user_sessions', ['created_at'])

    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('avatar', sa.String(length=1024), nullable=True),
        sa.Column('background_image', sa.String(length=1024), nullable=True),
        sa.Column('about', sa.Text(), nullable=True),
        sa.Column('experience', JSONType, nullable=False),
        sa.Column('education', JSONType, nullable=False),
        sa.Column('skills', JSONType, nullable=False),
        sa.Column('certifications', JSONType, nullable=False),
        sa.Column('languages', JSONType, nullable=False),
        sa.Column('social_links', JSONType, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_profiles_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_profiles'),
    )
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'], unique=True)
    op.create_index('ix_profiles_created_at', 'profiles', ['created_at'])

    op.create_table(
        'posts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('media', JSONType, nullable=False),
        sa.Column('likes', JSONType, nullable=False),
        sa.Column('privacy', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_posts_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_posts'),
        sa.CheckConstraint("privacy IN ('public', 'connections', 'private')", name=op.f('ck_posts_privacy')),
    )
    op.create_index('ix_posts_user_id', 'posts', ['user_id'])
    op.create_index('ix_posts_privacy', 'posts', ['privacy'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('post_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['post_id'], ['posts.id'], name='fk_comments_post_id_posts', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_comments_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_comments'),
    )
    op.create_index('ix_comments_post_id', 'comments', ['post_id'])
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])
    op.create_index('ix_comments_created_at', 'comments', ['created_at'])

    op.create_table(
        'connections',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('requester_id', sa.Uuid(), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('pair_key', sa.String(length=80), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['requester_id'], ['users.id'], name='fk_connections_requester_id_users', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_id'], ['users.id'], name='fk_connections_recipient_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_connections'),
        sa.UniqueConstraint('pair_key', name='uq_connections_pair_key'),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name=op.f('ck_connections_status')),
    )
    op.create_index('ix_connections_requester_id', 'connections', ['requester_id'])
    op.create_index('ix_connections_recipient_id', 'connections', ['recipient_id'])
    op.create_index('ix_connections_status', 'connections', ['status'])
    op.create_index('ix_connections_created_at', 'connections', ['created_at'])

    op.create_table(
        'conversations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('participant_one_id', sa.Uuid(), nullable=False),
        sa.Column('participant_two_id', sa.Uuid(), nullable=False),
        sa.Column('last_message_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['participant_one_id'], ['users.id'], name='fk_conversations_participant_one_id_users', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['participant_two_id'], ['users.id'], name='fk_conversations_participant_two_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_conversations'),
        sa.UniqueConstraint('participant_one_id', 'participant_two_id', name='uq_conversations_participants'),
    )
    op.create_index('ix_conversations_participant_one_id', 'conversations', ['participant_one_id'])
    op.create_index('ix_conversations_participant_two_id', 'conversations', ['participant_two_id'])
    op.create_index('ix_conversations_created_at', 'conversations', ['created_at'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('conversation_id', sa.Uuid(), nullable=False),
        sa.Column('sender_id', sa.Uuid(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['conversation_id'], ['conversations.id'], name='fk_messages_conversation_id_conversations', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], name='fk_messages_sender_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_messages'),
    )
    op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('employment_type', sa.String(length=50), nullable=False),
        sa.Column('experience_level', sa.String(length=50), nullable=False),
        sa.Column('skills', JSONType, nullable=False),
        sa.Column('salary', JSONType, nullable=False),
        sa.Column('applicants', JSONType, nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['users.id'], name='fk_jobs_company_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_jobs'),
        sa.CheckConstraint(
            "employment_type IN ('Full-time', 'Part-time', 'Contract', 'Temporary', 'Internship')",
            name=op.f('ck_jobs_employment_type'),
        ),
        sa.CheckConstraint(
            "experience_level IN ('Entry level', 'Mid-Senior level', 'Senior level', 'Director', 'Executive')",
            name=op.f('ck_jobs_experience_level'),
        ),
    )
    op.create_index('ix_jobs_company_id', 'jobs', ['company_id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_employment_type', 'jobs', ['employment_type'])
    op.create_index('ix_jobs_experience_level', 'jobs', ['experience_level'])
    op.create_index('ix_jobs_active', 'jobs', ['active'])
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])


def downgrade():
    """Drop every table created by upgrade()."""
    for table in (
        'jobs',
        'messages',
        'conversations',
        'connections',
        'comments',
        'posts',
        'profiles',
        'user_sessions',
        'users',
    ):
        op.drop_table(table)
