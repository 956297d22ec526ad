"""Initial back-office schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Employees and their portal sessions, leads, bookings and payments, the
package catalog, itineraries and the CMS reference tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.Numeric(12, 2)


def _id():
    return sa.Column('id', sa.Integer(), autoincrement=True, nullable=False)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _audit():
    return [
        sa.Column('status', sa.String(length=20), server_default='Active', nullable=False),
        sa.Column('created_by', sa.String(length=100), server_default='Travloger.in', nullable=False),
    ]


def upgrade() -> None:
    # Employees
    op.create_table('employees',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('destination', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=50), server_default='employee', nullable=False),
        sa.Column('status', sa.String(length=20), server_default='Active', nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('is_first_login', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('supabase_user_id', sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_employees_email', 'employees', ['email'], unique=True)
    op.create_index('ix_employees_destination', 'employees', ['destination'])

    op.create_table('employee_sessions',
        _id(),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('last_activity', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('employee_id')
    )
    op.create_index('ix_employee_sessions_last_activity', 'employee_sessions', ['last_activity'])

    # Package catalog
    for table in ('hotel_locations', 'fixed_locations'):
        op.create_table(table,
            _id(),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('city', sa.String(length=100), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(f'ix_{table}_city', table, ['city'])

    op.create_table('vehicle_locations',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('rates', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_vehicle_locations_city', 'vehicle_locations', ['city'])

    op.create_table('vehicles',
        _id(),
        sa.Column('vehicle_type', sa.String(length=100), nullable=False),
        sa.Column('rate', MONEY, nullable=True),
        sa.Column('ac_extra', MONEY, nullable=True),
        sa.Column('location_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['location_id'], ['vehicle_locations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_vehicles_location_id', 'vehicles', ['location_id'])

    op.create_table('fixed_days',
        _id(),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('days', sa.Integer(), nullable=False),
        sa.Column('label', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_fixed_days_city', 'fixed_days', ['city'])

    op.create_table('fixed_plans',
        _id(),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('fixed_location_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['fixed_location_id'], ['fixed_locations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_fixed_plans_city', 'fixed_plans', ['city'])

    op.create_table('fixed_plan_options',
        _id(),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('fixed_location_id', sa.Integer(), nullable=False),
        sa.Column('fixed_plan_id', sa.Integer(), nullable=False),
        sa.Column('adults', sa.Integer(), nullable=False),
        sa.Column('price_per_person', MONEY, nullable=False),
        sa.Column('rooms_vehicle', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['fixed_location_id'], ['fixed_locations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['fixed_plan_id'], ['fixed_plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_fixed_plan_options_city', 'fixed_plan_options', ['city'])
    op.create_index('ix_fixed_plan_options_fixed_plan_id', 'fixed_plan_options', ['fixed_plan_id'])

    # Hotels
    op.create_table('hotels',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('destination', sa.String(length=100), nullable=False),
        sa.Column('category', sa.Integer(), server_default='3', nullable=True),
        sa.Column('price', MONEY, nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('icon_url', sa.String(length=500), nullable=True),
        sa.Column('map_rate', MONEY, nullable=True),
        sa.Column('eb', MONEY, nullable=True),
        sa.Column('location_id', sa.Integer(), nullable=True),
        *_audit(),
        *_timestamps(),
        sa.ForeignKeyConstraint(['location_id'], ['hotel_locations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_hotels_destination', 'hotels', ['destination'])
    op.create_index('ix_hotels_location_id', 'hotels', ['location_id'])

    op.create_table('hotel_rates',
        _id(),
        sa.Column('hotel_id', sa.Integer(), nullable=False),
        sa.Column('from_date', sa.Date(), nullable=False),
        sa.Column('to_date', sa.Date(), nullable=False),
        sa.Column('room_type', sa.String(length=100), nullable=False),
        sa.Column('meal_plan', sa.String(length=20), server_default='APAI', nullable=True),
        sa.Column('single', MONEY, nullable=True),
        sa.Column('double', MONEY, nullable=True),
        sa.Column('triple', MONEY, nullable=True),
        sa.Column('quad', MONEY, nullable=True),
        sa.Column('cwb', MONEY, nullable=True),
        sa.Column('cnb', MONEY, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_hotel_rates_hotel_id', 'hotel_rates', ['hotel_id'])

    # Packages
    op.create_table('packages',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('destination', sa.String(length=100), nullable=False),
        sa.Column('route', sa.String(length=255), nullable=True),
        sa.Column('city_slug', sa.String(length=120), nullable=True),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('nights', sa.Integer(), nullable=True),
        sa.Column('days', sa.Integer(), nullable=True),
        sa.Column('price', MONEY, nullable=True),
        sa.Column('original_price', MONEY, nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('highlights', sa.JSON(), nullable=True),
        sa.Column('includes', sa.JSON(), nullable=True),
        sa.Column('category', sa.String(length=50), server_default='Adventure', nullable=True),
        sa.Column('status', sa.String(length=20), server_default='Active', nullable=True),
        sa.Column('featured', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('bookings_count', sa.Integer(), server_default='0', nullable=True),
        sa.Column('trip_type', sa.String(length=20), nullable=True),
        sa.Column('plan_type', sa.String(length=20), server_default='Custom Plan', nullable=False),
        sa.Column('service_type', sa.String(length=50), nullable=True),
        sa.Column('hotel_location_id', sa.Integer(), nullable=True),
        sa.Column('vehicle_location_id', sa.Integer(), nullable=True),
        sa.Column('selected_hotel_id', sa.Integer(), nullable=True),
        sa.Column('selected_vehicle_id', sa.Integer(), nullable=True),
        sa.Column('fixed_days_id', sa.Integer(), nullable=True),
        sa.Column('fixed_location_id', sa.Integer(), nullable=True),
        sa.Column('fixed_plan_id', sa.Integer(), nullable=True),
        sa.Column('fixed_variant_id', sa.Integer(), nullable=True),
        sa.Column('fixed_adults', sa.Integer(), nullable=True),
        sa.Column('fixed_price_per_person', MONEY, nullable=True),
        sa.Column('fixed_rooms_vehicle', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['hotel_location_id'], ['hotel_locations.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['vehicle_location_id'], ['vehicle_locations.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['selected_hotel_id'], ['hotels.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['selected_vehicle_id'], ['vehicles.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['fixed_days_id'], ['fixed_days.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['fixed_location_id'], ['fixed_locations.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['fixed_plan_id'], ['fixed_plans.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['fixed_variant_id'], ['fixed_plan_options.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_packages_destination', 'packages', ['destination'])
    op.create_index('ix_packages_city_slug', 'packages', ['city_slug'])
    op.create_index('ix_packages_plan_type', 'packages', ['plan_type'])

    # Leads and sales
    op.create_table('leads',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('number_of_travelers', sa.String(length=20), nullable=True),
        sa.Column('travel_dates', sa.String(length=100), nullable=True),
        sa.Column('source', sa.String(length=100), nullable=True),
        sa.Column('destination', sa.String(length=100), nullable=True),
        sa.Column('custom_notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=30), server_default='New', nullable=False),
        sa.Column('assigned_employee_id', sa.Integer(), nullable=True),
        sa.Column('assigned_employee_name', sa.String(length=255), nullable=True),
        sa.Column('assigned_employee_email', sa.String(length=255), nullable=True),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('assigned_package_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['assigned_employee_id'], ['employees.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assigned_package_id'], ['packages.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_leads_email', 'leads', ['email'])
    op.create_index('ix_leads_destination', 'leads', ['destination'])
    op.create_index('ix_leads_assigned_employee_id', 'leads', ['assigned_employee_id'])

    op.create_table('bookings',
        _id(),
        sa.Column('lead_id', sa.Integer(), nullable=True),
        sa.Column('customer', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('package_id', sa.Integer(), nullable=True),
        sa.Column('package_name', sa.String(length=255), nullable=False),
        sa.Column('destination', sa.String(length=100), nullable=False),
        sa.Column('travelers', sa.Integer(), server_default='1', nullable=False),
        sa.Column('travel_date', sa.String(length=100), nullable=True),
        sa.Column('itinerary_details', sa.JSON(), nullable=True),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column(
            'status',
            sa.Enum('Pending', 'Confirmed', 'Cancelled', name='booking_status'),
            server_default='Pending',
            nullable=False,
        ),
        sa.Column(
            'payment_status',
            sa.Enum('Pending', 'Paid', 'Failed', name='booking_payment_status'),
            server_default='Pending',
            nullable=False,
        ),
        sa.Column('assigned_agent', sa.String(length=255), nullable=True),
        sa.Column('payment_link_id', sa.String(length=100), nullable=True),
        sa.Column('payment_link_url', sa.String(length=500), nullable=True),
        sa.Column('payment_id', sa.String(length=100), nullable=True),
        sa.Column('booking_date', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['package_id'], ['packages.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bookings_lead_id', 'bookings', ['lead_id'])
    op.create_index('ix_bookings_assigned_agent', 'bookings', ['assigned_agent'])
    op.create_index('ix_bookings_payment_link_id', 'bookings', ['payment_link_id'])

    op.create_table('query_payments',
        _id(),
        sa.Column('query_id', sa.Integer(), nullable=False),
        sa.Column('trans_id', sa.String(length=100), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=True),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='Pending', nullable=False),
        sa.Column('convenience_fee', MONEY, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['query_id'], ['leads.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_query_payments_query_id', 'query_payments', ['query_id'])

    # Itineraries
    op.create_table('itineraries',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('adults', sa.Integer(), server_default='1', nullable=True),
        sa.Column('children', sa.Integer(), server_default='0', nullable=True),
        sa.Column('destinations', sa.String(length=500), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('price', MONEY, nullable=True),
        sa.Column('marketplace_shared', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('cover_photo', sa.String(length=500), nullable=True),
        sa.Column('package_terms', sa.JSON(), nullable=True),
        sa.Column('pricing_data', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=True),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('lead_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_itineraries_lead_id', 'itineraries', ['lead_id'])

    op.create_table('itinerary_days',
        _id(),
        sa.Column('itinerary_id', sa.Integer(), nullable=False),
        sa.Column('day_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['itinerary_id'], ['itineraries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_itinerary_days_itinerary_id', 'itinerary_days', ['itinerary_id'])

    op.create_table('itinerary_events',
        _id(),
        sa.Column('day_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), server_default='New Event', nullable=True),
        sa.Column('subtitle', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_time', sa.String(length=10), nullable=True),
        sa.Column('end_time', sa.String(length=10), nullable=True),
        sa.Column('sort_order', sa.Integer(), server_default='0', nullable=True),
        sa.Column('event_data', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['day_id'], ['itinerary_days.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_itinerary_events_day_id', 'itinerary_events', ['day_id'])

    # Transfers
    op.create_table('transfers',
        _id(),
        sa.Column('query_name', sa.String(length=255), nullable=False),
        sa.Column('destination', sa.String(length=100), nullable=False),
        sa.Column('price', MONEY, nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        *_audit(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_transfers_destination', 'transfers', ['destination'])

    op.create_table('transfer_rates',
        _id(),
        sa.Column('transfer_id', sa.Integer(), nullable=False),
        sa.Column('from_date', sa.Date(), nullable=False),
        sa.Column('to_date', sa.Date(), nullable=False),
        sa.Column('type', sa.String(length=3), nullable=False),
        sa.Column('adult_count', sa.Integer(), server_default='1', nullable=True),
        sa.Column('child_count', sa.Integer(), server_default='0', nullable=True),
        sa.Column('vehicle', sa.String(length=100), nullable=True),
        sa.Column('adult_price', MONEY, nullable=True),
        sa.Column('child_price', MONEY, nullable=True),
        *_timestamps(),
        sa.CheckConstraint("type IN ('SIC', 'PVT')", name='ck_transfer_rates_type'),
        sa.ForeignKeyConstraint(['transfer_id'], ['transfers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_transfer_rates_transfer_id', 'transfer_rates', ['transfer_id'])

    # CMS reference tables
    op.create_table('suppliers',
        _id(),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=20), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('mobile_country_code', sa.String(length=8), server_default='+91', nullable=True),
        sa.Column('mobile_number', sa.String(length=20), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        *_audit(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_suppliers_city', 'suppliers', ['city'])

    op.create_table('destinations',
        _id(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=120), nullable=False),
        *_audit(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_index('ix_destinations_slug', 'destinations', ['slug'], unique=True)

    for table in ('activities', 'meal_plans'):
        columns = [
            _id(),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('destination', sa.String(length=100), nullable=False),
        ]
        if table == 'meal_plans':
            columns.append(sa.Column('meal_type', sa.String(length=50), nullable=False))
        columns.append(sa.Column('price', MONEY, nullable=True))
        op.create_table(table,
            *columns,
            *_audit(),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(f'ix_{table}_destination', table, ['destination'])

    for table in ('room_types', 'package_themes'):
        op.create_table(table,
            _id(),
            sa.Column('name', sa.String(length=100), nullable=False),
            *_audit(),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('name')
        )

    op.create_table('query_statuses',
        _id(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('color', sa.String(length=7), server_default='#3B82F6', nullable=True),
        sa.Column('take_note', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('lock_status', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('dashboard', sa.Boolean(), server_default='false', nullable=True),
        *_audit(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('day_itineraries',
        _id(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('detail', sa.Text(), nullable=True),
        *_audit(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('city_content',
        sa.Column('slug', sa.String(length=120), nullable=False),
        sa.Column('hero', sa.JSON(), nullable=True),
        sa.Column('header', sa.JSON(), nullable=True),
        sa.Column('contact', sa.JSON(), nullable=True),
        sa.Column('trip_options', sa.JSON(), nullable=True),
        sa.Column('trip_highlights', sa.JSON(), nullable=True),
        sa.Column('usp', sa.JSON(), nullable=True),
        sa.Column('faq', sa.JSON(), nullable=True),
        sa.Column('group_cta', sa.JSON(), nullable=True),
        sa.Column('reviews', sa.JSON(), nullable=True),
        sa.Column('brands', sa.JSON(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('slug')
    )


def downgrade() -> None:
    for table in (
        'city_content',
        'day_itineraries',
        'query_statuses',
        'package_themes',
        'room_types',
        'meal_plans',
        'activities',
        'destinations',
        'suppliers',
        'transfer_rates',
        'transfers',
        'itinerary_events',
        'itinerary_days',
        'itineraries',
        'query_payments',
        'bookings',
        'leads',
        'packages',
        'hotel_rates',
        'hotels',
        'fixed_plan_options',
        'fixed_plans',
        'fixed_days',
        'vehicles',
        'vehicle_locations',
        'fixed_locations',
        'hotel_locations',
        'employee_sessions',
        'employees',
    ):
        op.drop_table(table)
    sa.Enum(name='booking_payment_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='booking_status').drop(op.get_bind(), checkfirst=True)
