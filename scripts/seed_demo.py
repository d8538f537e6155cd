#!/usr/bin/env python3
"""
Seed script to create a demo business: users, roles, tables and reservations
"""

import asyncio
from datetime import timedelta

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

DEMO_BUSINESS_ID = 1


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from sales_api.database import SessionLocal, engine, Base, utcnow
    from sales_api.models.user import User
    from sales_api.models.access import Role, Permission, RolePermission, UserRole
    from sales_api.models.table import Table, TableStatus
    from sales_api.models.reservation import Reservation, ReservationItem, ReservationStatus
    from sales_api.services.access import MANAGE_ROLES

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo data already exists
        result = await db.execute(select(User).where(User.email == "admin@sales.local"))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        now = utcnow()

        print("Creating users...")

        admin_user = User(
            email="admin@sales.local",
            hashed_password=pwd_context.hash("admin123"),
            full_name="System Admin",
            is_active=True,
            is_superuser=True,
        )
        manager = User(
            business_id=DEMO_BUSINESS_ID,
            email="manager@sales.local",
            hashed_password=pwd_context.hash("manager123"),
            full_name="Floor Manager",
            is_active=True,
        )
        db.add_all([admin_user, manager])
        await db.flush()

        print("Creating roles and permissions...")

        manage_roles = Permission(code=MANAGE_ROLES, description="Manage roles and assignments", created_at=now)
        db.add(manage_roles)
        manager_role = Role(
            business_id=DEMO_BUSINESS_ID,
            title="Manager",
            description="Runs the floor and manages staff access",
            created_at=now,
            updated_at=now,
        )
        db.add(manager_role)
        await db.flush()

        db.add(RolePermission(role_id=manager_role.id, permission_id=manage_roles.id, created_at=now, updated_at=now))
        db.add(UserRole(user_id=manager.id, role_id=manager_role.id, assigned_at=now))

        print("Creating tables...")

        tables = [
            Table(business_id=DEMO_BUSINESS_ID, name=f"T{number}", capacity=capacity, status=TableStatus.AVAILABLE)
            for number, capacity in enumerate([2, 2, 4, 4, 4, 6, 8], start=1)
        ]
        db.add_all(tables)
        await db.flush()

        print("Creating reservations...")

        reservations = [
            Reservation(
                business_id=DEMO_BUSINESS_ID,
                customer_name="Ada Lovelace",
                customer_phone="+15551230001",
                customer_note="Window seat if possible",
                appointment_time=now + timedelta(days=1, hours=2),
                created_at=now,
                created_by=manager.id,
                guest_number=2,
                table_id=tables[0].id,
                status=ReservationStatus.CONFIRMED,
                items=[ReservationItem(item_id=101, quantity=1, notes="Sparkling water")],
            ),
            Reservation(
                business_id=DEMO_BUSINESS_ID,
                customer_name="Alan Turing",
                customer_phone="+15551230002",
                appointment_time=now + timedelta(days=2),
                created_at=now,
                created_by=manager.id,
                guest_number=6,
                table_id=tables[5].id,
                status=ReservationStatus.PENDING,
            ),
        ]
        db.add_all(reservations)

        await db.commit()

        print(f"""
Demo data created successfully!

Business ID: {DEMO_BUSINESS_ID}

Users:
  Superuser:
    Email: admin@sales.local
    Password: admin123

  Manager (role "Manager", permission {MANAGE_ROLES}):
    Email: manager@sales.local
    Password: manager123

Tables: {len(tables)} created
Reservations: {len(reservations)} created
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
