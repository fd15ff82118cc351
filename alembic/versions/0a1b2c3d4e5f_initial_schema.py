"""initial_schema

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-19 09:00:00.000000

초기 스키마:
1. 인증: roles, users, user_roles, refresh_tokens
2. 콘텐츠: news, events, partners, foundation_infos, contacts, site_info
3. 사회 지원: prestations, demandes, attachments, avis
4. 알림: notifications
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # ── 1. 인증 ──
    op.create_table(
        'roles',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('matricule', sa.String(10), nullable=False, unique=True),
        sa.Column('service_code', sa.String(50), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('family_status', sa.String(50), nullable=True),
        sa.Column('children_count', sa.Integer(), nullable=True),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('notif_email', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('notif_news', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('notif_events', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_matricule', 'users', ['matricule'])
    op.create_table(
        'user_roles',
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('role_id', UUID(as_uuid=True), sa.ForeignKey('roles.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])

    # ── 2. 콘텐츠 ──
    op.create_table(
        'news',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(20), server_default='DRAFT', nullable=False),
        sa.Column('published', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('featured', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('view_count', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('author_id', UUID(as_uuid=True), nullable=True),
        sa.Column('author_name', sa.String(120), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_news_slug', 'news', ['slug'])
    op.create_table(
        'events',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('event_type', sa.String(50), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('current_participants', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('registration_required', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('registration_deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(20), server_default='DRAFT', nullable=False),
        sa.Column('published', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('organizer', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_events_start_date', 'events', ['start_date'])
    op.create_table(
        'partners',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('logo_url', sa.String(500), nullable=True),
        sa.Column('website', sa.String(500), nullable=True),
        sa.Column('sector', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_partners_sector', 'partners', ['sector'])
    op.create_table(
        'foundation_infos',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('info_type', sa.String(20), nullable=False),
        sa.Column('display_order', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_foundation_infos_info_type', 'foundation_infos', ['info_type'])
    op.create_table(
        'contacts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), server_default='NEW', nullable=False),
        sa.Column('response_message', sa.Text(), nullable=True),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('responded_by', sa.String(255), nullable=True),
        sa.Column('sender_ip', sa.String(64), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_contacts_status', 'contacts', ['status'])
    op.create_table(
        'site_info',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('mission', sa.Text(), nullable=False),
        sa.Column('stats', sa.JSON(), nullable=True),
        sa.Column('ministry_content', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ── 3. 사회 지원 ──
    op.create_table(
        'prestations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('short_description', sa.String(500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('prestation_type', sa.String(30), nullable=False),
        sa.Column('category', sa.String(30), nullable=False),
        sa.Column('min_amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('max_amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('duration_label', sa.String(100), nullable=True),
        sa.Column('conditions', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('requires_documents', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('required_documents', sa.Text(), nullable=True),
        sa.Column('eligibility_criteria', sa.Text(), nullable=True),
        sa.Column('processing_time_days', sa.Integer(), nullable=True),
        sa.Column('max_requests_per_year', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('display_order', sa.Integer(), server_default=sa.text('1'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_prestations_category', 'prestations', ['category'])
    op.create_table(
        'demandes',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_email', sa.String(255), nullable=False),
        sa.Column('user_name', sa.String(120), nullable=False),
        sa.Column('employee_id', sa.String(20), nullable=True),
        sa.Column('prestation_id', UUID(as_uuid=True), sa.ForeignKey('prestations.id'), nullable=False),
        sa.Column('prestation_title', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), server_default='DRAFT', nullable=False),
        sa.Column('requested_amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('approved_amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('justification', sa.Text(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('documents_uploaded', sa.JSON(), nullable=True),
        sa.Column('priority_level', sa.String(10), server_default='NORMAL', nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('processed_by', UUID(as_uuid=True), nullable=True),
        sa.Column('processed_by_name', sa.String(120), nullable=True),
        sa.Column('expected_processing_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_reference', sa.String(100), nullable=True),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('admin_comment', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_demandes_user_id', 'demandes', ['user_id'])
    op.create_index('ix_demandes_prestation_id', 'demandes', ['prestation_id'])
    op.create_index('ix_demandes_status', 'demandes', ['status'])
    op.create_index('ix_demandes_created_at', 'demandes', ['created_at'])
    op.create_table(
        'attachments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('demande_id', UUID(as_uuid=True), sa.ForeignKey('demandes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('path', sa.String(500), nullable=False),
        sa.Column('content_type', sa.String(100), nullable=True),
        sa.Column('size_bytes', sa.Integer(), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_attachments_demande_id', 'attachments', ['demande_id'])
    op.create_table(
        'avis',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_name', sa.String(120), nullable=False),
        sa.Column('user_email', sa.String(255), nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('prestation_id', UUID(as_uuid=True), sa.ForeignKey('prestations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('demande_id', UUID(as_uuid=True), sa.ForeignKey('demandes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('avis_type', sa.String(20), server_default='GENERAL', nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), server_default='PENDING', nullable=False),
        sa.Column('is_approved', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('is_featured', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('moderated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_by', sa.String(255), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('admin_response', sa.Text(), nullable=True),
        sa.Column('response_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_avis_user_id', 'avis', ['user_id'])
    op.create_index('ix_avis_prestation_id', 'avis', ['prestation_id'])
    op.create_index('ix_avis_status', 'avis', ['status'])

    # ── 4. 알림 ──
    op.create_table(
        'notifications',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('recipient_email', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('kind', sa.String(30), server_default='manual', nullable=False),
        sa.Column('status', sa.String(10), server_default='LOGGED', nullable=False),
        sa.Column('error', sa.Text(), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('is_read', sa.Boolean(), server_default=sa.text('false'), nullable=False),
    )
    op.create_index('ix_notifications_recipient_email', 'notifications', ['recipient_email'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('avis')
    op.drop_table('attachments')
    op.drop_table('demandes')
    op.drop_table('prestations')
    op.drop_table('site_info')
    op.drop_table('contacts')
    op.drop_table('foundation_infos')
    op.drop_table('partners')
    op.drop_table('events')
    op.drop_table('news')
    op.drop_table('refresh_tokens')
    op.drop_table('user_roles')
    op.drop_table('users')
    op.drop_table('roles')
