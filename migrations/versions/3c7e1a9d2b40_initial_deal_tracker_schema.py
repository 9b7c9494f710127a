"""initial_deal_tracker_schema

Revision ID: 3c7e1a9d2b40
Revises:
Create Date: 2026-10-18 21:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '3c7e1a9d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('username', sa.Text, nullable=False, unique=True),
        sa.Column('password', sa.Text, nullable=False),
        sa.Column('full_name', sa.Text, nullable=False),
        sa.Column('email', sa.Text, nullable=False),
        sa.Column('role', sa.Text, nullable=False, server_default='bizdev'),
        sa.Column('avatar_url', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'business_units',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False, unique=True),
        sa.Column('color', sa.Text, nullable=False),
    )

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False, unique=True),
    )

    op.create_table(
        'custom_fields',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False, unique=True),
        sa.Column('type', sa.Text, nullable=False),  # text, number, enum
        sa.Column('required', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('options', JSONB, nullable=True),
    )

    op.create_table(
        'deals',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('company', sa.Text, nullable=False),
        sa.Column('website', sa.Text, nullable=True),
        sa.Column('internal_contact', sa.Text, nullable=True),
        sa.Column('business_unit_id', sa.Integer, sa.ForeignKey('business_units.id', ondelete='SET NULL'), nullable=True),
        sa.Column('deal_type', sa.Text, nullable=False),
        sa.Column('investment_size', sa.BigInteger, nullable=True),
        sa.Column('use_case', sa.Text, nullable=True),
        sa.Column('lead_owner_id', sa.Integer, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('stage', sa.Text, nullable=False, server_default='Following'),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('ai_summary', sa.Text, nullable=True),
        sa.Column('ai_market_report_link', sa.Text, nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('custom_field_values', JSONB, nullable=True),
    )
    op.create_index('idx_deals_last_updated', 'deals', ['last_updated'])

    op.create_table(
        'deal_tags',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('deal_id', sa.Integer, sa.ForeignKey('deals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tag_id', sa.Integer, sa.ForeignKey('tags.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('deal_id', 'tag_id', name='uq_deal_tag'),
    )

    op.create_table(
        'resources',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('deal_id', sa.Integer, sa.ForeignKey('deals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('url', sa.Text, nullable=False),
        sa.Column('type', sa.Text, nullable=False),  # file, link
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_resources_deal_id', 'resources', ['deal_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('deal_id', sa.Integer, sa.ForeignKey('deals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_comments_deal_id', 'comments', ['deal_id'])

    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('deal_id', sa.Integer, sa.ForeignKey('deals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=True),
        sa.Column('action', sa.Text, nullable=False),
        sa.Column('details', JSONB, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_activity_logs_created_at', 'activity_logs', ['created_at'])


def downgrade() -> None:
    op.drop_index('idx_activity_logs_created_at', 'activity_logs')
    op.drop_table('activity_logs')
    op.drop_index('idx_comments_deal_id', 'comments')
    op.drop_table('comments')
    op.drop_index('idx_resources_deal_id', 'resources')
    op.drop_table('resources')
    op.drop_table('deal_tags')
    op.drop_index('idx_deals_last_updated', 'deals')
    op.drop_table('deals')
    op.drop_table('custom_fields')
    op.drop_table('tags')
    op.drop_table('business_units')
    op.drop_table('users')
