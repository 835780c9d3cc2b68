"""Create pricing catalog and quote tables

Revision ID: 001_create_pricing_and_quotes
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_create_pricing_and_quotes'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'pricing_plans',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('description', sa.Text, nullable=True),

        # Pricing
        sa.Column('price_per_area', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='PEN'),

        # Delivery window
        sa.Column('min_days', sa.Integer, nullable=True),
        sa.Column('max_days', sa.Integer, nullable=True),
        sa.Column('effective_from', sa.Date, nullable=True),

        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_pricing_plans_id', 'pricing_plans', ['id'])
    op.create_index('idx_pricing_plans_active', 'pricing_plans', ['is_active'])

    op.create_table(
        'services',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('icon', sa.String(100), nullable=True),
        sa.Column('display_order', sa.Integer, nullable=False, server_default='0'),

        # Pricing
        sa.Column('pricing_mode', sa.String(20), nullable=False, server_default='flat'),
        sa.Column('price', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(3), nullable=False, server_default='PEN'),

        # Flags
        sa.Column('is_addon', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_public', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("pricing_mode IN ('flat', 'per_area', 'percent')", name='ck_services_pricing_mode'),
    )
    op.create_index('ix_services_id', 'services', ['id'])
    op.create_index('idx_services_active_order', 'services', ['is_active', 'display_order'])

    op.create_table(
        'quotes',
        sa.Column('id', sa.Integer, primary_key=True),

        # Customer
        sa.Column('full_name', sa.String(150), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('document_type', sa.String(30), nullable=True),
        sa.Column('document_number', sa.String(50), nullable=True),

        # Project
        sa.Column('project_name', sa.String(255), nullable=False),
        sa.Column('project_address', sa.String(255), nullable=True),

        # Areas
        sa.Column('total_area', sa.Numeric(12, 2), nullable=False),
        sa.Column('uncovered_percent', sa.Numeric(5, 2), nullable=False, server_default='30'),
        sa.Column('covered_area', sa.Numeric(12, 2), nullable=False),
        sa.Column('floor_count', sa.Integer, nullable=False, server_default='1'),

        # Plan snapshot
        sa.Column('pricing_plan_id', sa.Integer, sa.ForeignKey('pricing_plans.id', ondelete='SET NULL'), nullable=True),
        sa.Column('rate_per_area', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='PEN'),
        sa.Column('plan_name', sa.String(150), nullable=True),
        sa.Column('plan_min_days', sa.Integer, nullable=True),
        sa.Column('plan_max_days', sa.Integer, nullable=True),

        # Totals
        sa.Column('base_cost', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('extras_cost', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('total_cost', sa.Numeric(12, 2), nullable=False, server_default='0'),

        sa.Column('status', sa.String(20), nullable=False, server_default='new'),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('expires_at', sa.Date, nullable=True),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('uncovered_percent >= 0 AND uncovered_percent <= 100', name='ck_quotes_uncovered_percent'),
        sa.CheckConstraint('floor_count >= 1', name='ck_quotes_floor_count'),
    )
    op.create_index('ix_quotes_id', 'quotes', ['id'])
    op.create_index('ix_quotes_pricing_plan_id', 'quotes', ['pricing_plan_id'])
    op.create_index('ix_quotes_status', 'quotes', ['status'])
    op.create_index('idx_quotes_created_at', 'quotes', ['created_at'])

    op.create_table(
        'quote_line_items',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('quote_id', sa.Integer, sa.ForeignKey('quotes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id'), nullable=False),
        sa.Column('quantity', sa.Integer, nullable=False, server_default='1'),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('line_total', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('quantity >= 1', name='ck_quote_line_items_quantity'),
    )
    op.create_index('ix_quote_line_items_id', 'quote_line_items', ['id'])
    op.create_index('ix_quote_line_items_quote_id', 'quote_line_items', ['quote_id'])
    op.create_index('ix_quote_line_items_service_id', 'quote_line_items', ['service_id'])


def downgrade() -> None:
    op.drop_table('quote_line_items')
    op.drop_table('quotes')
    op.drop_table('services')
    op.drop_table('pricing_plans')
