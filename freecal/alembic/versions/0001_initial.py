"""initial

Revision ID: 0001
Revises: 
Create Date: 2025-11-02 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table('profiles',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('display_name', sa.String(255), nullable=False),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('calendar_color', sa.String(64), nullable=False, server_default='hsl(217, 91%, 60%)'),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('approval_status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_by', sa.Uuid, nullable=True),
        sa.Column('reset_token', sa.String(128), nullable=True),
        sa.Column('reset_token_expires', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)
    op.create_index('ix_profiles_reset_token', 'profiles', ['reset_token'])

    op.create_table('relationships',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('user_id', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('related_user_id', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'related_user_id', name='uix_relationship_pair'),
    )
    op.create_index('ix_relationships_user_id', 'relationships', ['user_id'])
    op.create_index('ix_relationships_related_user_id', 'relationships', ['related_user_id'])

    op.create_table('events',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('user_id', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_all_day', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('color', sa.String(64), nullable=False),
        sa.Column('recurrence_rule', sa.Text(), nullable=True),
        sa.Column('recurrence_type', sa.String(16), nullable=True, server_default='none'),
        sa.Column('recurrence_days', sa.JSON(), nullable=True),
        sa.Column('recurrence_interval', sa.Integer(), nullable=True, server_default='1'),
        sa.Column('recurrence_end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('recurrence_exceptions', sa.JSON(), nullable=True),
        sa.Column('imported_from_device', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('location', sa.String(500), nullable=True),
        sa.Column('url', sa.String(2048), nullable=True),
        sa.Column('is_tentative', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('alerts', sa.JSON(), nullable=True),
        sa.Column('travel_time', sa.String(64), nullable=True),
        sa.Column('original_calendar_id', sa.String(255), nullable=True),
        sa.Column('structured_metadata', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_events_user_id', 'events', ['user_id'])
    op.create_index('ix_events_start_time', 'events', ['start_time'])

    op.create_table('event_attendees',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('event_id', sa.Uuid, sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('is_attendee', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('event_id', 'user_id', name='uix_event_attendee'),
    )
    op.create_index('ix_event_attendees_event_id', 'event_attendees', ['event_id'])
    op.create_index('ix_event_attendees_user_id', 'event_attendees', ['user_id'])

    op.create_table('event_viewers',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('event_id', sa.Uuid, sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('event_id', 'user_id', name='uix_event_viewer'),
    )
    op.create_index('ix_event_viewers_event_id', 'event_viewers', ['event_id'])
    op.create_index('ix_event_viewers_user_id', 'event_viewers', ['user_id'])

    op.create_table('travel_locations',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('user_id', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('country', sa.String(255), nullable=True),
        sa.Column('city', sa.String(255), nullable=True),
        sa.Column('visited_date', sa.Date(), nullable=True),
        sa.Column('with_relationship_id', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_wishlist', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_travel_locations_user_id', 'travel_locations', ['user_id'])
    op.create_index('ix_travel_locations_with_relationship_id', 'travel_locations', ['with_relationship_id'])

    op.create_table('feature_wishes',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('created_by', sa.Uuid, sa.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade():
    op.drop_table('feature_wishes')
    op.drop_table('travel_locations')
    op.drop_table('event_viewers')
    op.drop_table('event_attendees')
    op.drop_table('events')
    op.drop_table('relationships')
    op.drop_table('profiles')
