"""create scheduling tables

Revision ID: 4c2a9f1d7b3e
Revises:
Create Date: 2026-10-17 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4c2a9f1d7b3e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Businesses
    op.create_table(
        'businesses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('business_name', sa.String(255), nullable=False),
        sa.Column('owner_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('service_types', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_businesses_email', 'businesses', ['email'], unique=True)

    # 2. Weekly availability template, one row per business and weekday
    op.create_table(
        'availability',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('business_id', sa.Uuid(), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('morning_available', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('afternoon_available', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('evening_available', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('business_id', 'day_of_week', name='uq_availability_business_day'),
        sa.CheckConstraint('day_of_week >= 0 AND day_of_week <= 6', name='ck_availability_day_of_week'),
    )
    op.create_index('ix_availability_business_id', 'availability', ['business_id'])

    # 3. Bookings
    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('business_id', sa.Uuid(), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=False),
        sa.Column('customer_phone', sa.String(20), nullable=True),
        sa.Column('customer_address', sa.Text(), nullable=True),
        sa.Column('service_type', sa.String(255), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('time_slot', sa.String(20), nullable=False),
        sa.Column('service_description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("time_slot IN ('morning', 'afternoon', 'evening')", name='ck_bookings_time_slot'),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'cancelled')",
            name='ck_bookings_status'
        ),
    )
    op.create_index('ix_bookings_business_date', 'bookings', ['business_id', 'booking_date'])

    # One active booking per (business, date, slot); cancelled rows free the slot
    op.create_index(
        'uq_bookings_active_slot',
        'bookings',
        ['business_id', 'booking_date', 'time_slot'],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'"),
        sqlite_where=sa.text("status <> 'cancelled'"),
    )


def downgrade() -> None:
    """Downgrade schema."""

    # Drop tables in reverse order (due to foreign keys)
    op.drop_index('uq_bookings_active_slot', 'bookings')
    op.drop_index('ix_bookings_business_date', 'bookings')
    op.drop_table('bookings')

    op.drop_index('ix_availability_business_id', 'availability')
    op.drop_table('availability')

    op.drop_index('ix_businesses_email', 'businesses')
    op.drop_table('businesses')
