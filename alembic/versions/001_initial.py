"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create restaurants table
    op.create_table(
        'restaurants',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(100), unique=True, nullable=False),
        sa.Column('address', sa.Text()),
        sa.Column('phone', sa.String(30)),
        sa.Column('email', sa.String(255)),
        sa.Column('time_slot_duration_minutes', sa.Integer(), default=120),
        sa.Column('stripe_publishable_key', sa.String(255)),
        sa.Column('stripe_secret_key', sa.String(255)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id')),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255)),
        sa.Column('role', sa.Enum('OWNER', 'MANAGER', 'STAFF', name='userrole'), default='STAFF'),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('last_login', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    
    # Create restaurant_tables table
    op.create_table(
        'restaurant_tables',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('table_number', sa.String(20), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False, default=2),
        sa.Column('status', sa.String(20), nullable=False, default='available'),
        sa.Column('location_notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.UniqueConstraint('restaurant_id', 'table_number', name='uq_restaurant_table_number'),
    )
    
    # Create customers table
    op.create_table(
        'customers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.UniqueConstraint('restaurant_id', 'phone', name='uq_customer_phone_per_restaurant'),
    )
    
    # Create bookings table
    op.create_table(
        'bookings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('table_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurant_tables.id')),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('booking_time', sa.Time(), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, default='pending'),
        sa.Column('is_walk_in', sa.Boolean(), default=False),
        sa.Column('assignment_method', sa.String(20), default='manual'),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    
    # Create order_sessions table
    op.create_table(
        'order_sessions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('table_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurant_tables.id'), nullable=False),
        sa.Column('booking_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('bookings.id')),
        sa.Column('session_token', sa.String(64), unique=True, nullable=False),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    
    # Create waiting_list table
    op.create_table(
        'waiting_list',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('booking_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('bookings.id')),
        sa.Column('requested_date', sa.Date(), nullable=False),
        sa.Column('requested_time', sa.Time(), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, default='waiting'),
        sa.Column('priority_order', sa.Integer(), nullable=False, default=1),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    
    # Create loyalty_settings table
    op.create_table(
        'loyalty_settings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), unique=True, nullable=False),
        sa.Column('discount_threshold', sa.Numeric(10, 2), default=100),
        sa.Column('discount_percentage', sa.Numeric(5, 2), default=10),
        sa.Column('points_per_dollar', sa.Integer(), default=1),
        sa.Column('welcome_bonus', sa.Integer(), default=0),
        sa.Column('birthday_bonus', sa.Integer(), default=0),
        sa.Column('referral_bonus', sa.Integer(), default=0),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    
    # Create discount_codes table
    op.create_table(
        'discount_codes',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('discount_type', sa.String(20), nullable=False, default='percentage'),
        sa.Column('discount_value', sa.Numeric(10, 2), nullable=False),
        sa.Column('min_order_amount', sa.Numeric(10, 2), default=0),
        sa.Column('max_uses', sa.Integer()),
        sa.Column('current_uses', sa.Integer(), default=0),
        sa.Column('valid_from', sa.DateTime()),
        sa.Column('valid_until', sa.DateTime()),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.UniqueConstraint('restaurant_id', 'code', name='uq_discount_code_per_restaurant'),
    )
    
    # Create loyalty_users table
    op.create_table(
        'loyalty_users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('email', sa.String(255)),
        sa.Column('phone', sa.String(50)),
        sa.Column('total_spent', sa.Numeric(10, 2), default=0),
        sa.Column('order_count', sa.Integer(), default=0),
        sa.Column('discount_eligible', sa.Boolean(), default=False),
        sa.Column('last_order_date', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    
    # Create indexes
    op.create_index('ix_restaurant_tables_restaurant_id', 'restaurant_tables', ['restaurant_id'])
    op.create_index('ix_bookings_restaurant_id', 'bookings', ['restaurant_id'])
    op.create_index('ix_bookings_booking_date', 'bookings', ['booking_date'])
    op.create_index('ix_bookings_table_id', 'bookings', ['table_id'])
    op.create_index('ix_order_sessions_table_id', 'order_sessions', ['table_id'])
    op.create_index('ix_loyalty_users_restaurant_id', 'loyalty_users', ['restaurant_id'])
    op.create_index('ix_customers_restaurant_id', 'customers', ['restaurant_id'])
    op.create_index('ix_waiting_list_slot', 'waiting_list', ['restaurant_id', 'requested_date', 'requested_time'])


def downgrade() -> None:
    op.drop_table('loyalty_users')
    op.drop_table('discount_codes')
    op.drop_table('loyalty_settings')
    op.drop_table('waiting_list')
    op.drop_table('order_sessions')
    op.drop_table('bookings')
    op.drop_table('customers')
    op.drop_table('restaurant_tables')
    op.drop_table('users')
    op.drop_table('restaurants')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
