"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('business_id', sa.BigInteger(), index=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255)),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_superuser', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('refresh_token', sa.String(500)),
        sa.Column('last_login', sa.DateTime(timezone=True)),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create tables table
    op.create_table(
        'tables',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('business_id', sa.BigInteger(), nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(32), nullable=False, server_default='AVAILABLE'),
    )

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('business_id', sa.BigInteger(), nullable=False, index=True),
        sa.Column('customer_name', sa.String(255)),
        sa.Column('customer_phone', sa.String(32)),
        sa.Column('customer_note', sa.Text()),
        sa.Column('appointment_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('guest_number', sa.Integer(), nullable=False),
        sa.Column('table_id', sa.BigInteger(), sa.ForeignKey('tables.id', ondelete='SET NULL'), index=True),
        sa.Column('assigned_employee', sa.BigInteger()),
        sa.Column('status', sa.String(32), nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.BigInteger(), nullable=False),
    )

    # Create reservation_items table
    op.create_table(
        'reservation_items',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('reservation_id', sa.BigInteger(), sa.ForeignKey('reservations.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('item_id', sa.BigInteger(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('discount_id', sa.BigInteger()),
        sa.Column('notes', sa.Text()),
    )

    # Create roles table
    op.create_table(
        'roles',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('business_id', sa.BigInteger(), nullable=False, index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('status', sa.String(32), nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # Create permissions table
    op.create_table(
        'permissions',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(100), unique=True, nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    # Create role_permissions table
    op.create_table(
        'role_permissions',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('role_id', sa.BigInteger(), sa.ForeignKey('roles.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('permission_id', sa.BigInteger(), sa.ForeignKey('permissions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('role_id', 'permission_id', name='uq_role_permission'),
    )

    # Create user_roles table
    op.create_table(
        'user_roles',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('role_id', sa.BigInteger(), sa.ForeignKey('roles.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'role_id', name='uq_user_role'),
    )

    # Sorting and filtering indexes
    op.create_index('ix_reservations_created_at', 'reservations', ['created_at'])
    op.create_index('ix_reservations_appointment_time', 'reservations', ['appointment_time'])
    op.create_index('ix_tables_name', 'tables', ['name'])


def downgrade() -> None:
    op.drop_index('ix_tables_name')
    op.drop_index('ix_reservations_appointment_time')
    op.drop_index('ix_reservations_created_at')
    op.drop_table('user_roles')
    op.drop_table('role_permissions')
    op.drop_table('permissions')
    op.drop_table('roles')
    op.drop_table('reservation_items')
    op.drop_table('reservations')
    op.drop_table('tables')
    op.drop_table('users')
