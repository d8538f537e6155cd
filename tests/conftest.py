"""Test configuration and fixtures"""

import os

# Point the application engine at SQLite before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from sales_api.main import app
from sales_api.database import Base, get_db, utcnow
from sales_api.models.user import User
from sales_api.models.table import Table, TableStatus
from sales_api.models.access import Role, Permission, RolePermission, UserRole
from sales_api.api.auth import get_password_hash, create_access_token
from sales_api.services.access import MANAGE_ROLES


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_user(test_db):
    """Create a regular staff user"""
    user = User(
        business_id=1,
        email="staff@example.com",
        hashed_password=get_password_hash("testpass123"),
        full_name="Test User",
        is_active=True,
        is_superuser=False,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def test_admin_user(test_db):
    """Create a superuser"""
    user = User(
        email="admin@example.com",
        hashed_password=get_password_hash("adminpass123"),
        full_name="Admin User",
        is_active=True,
        is_superuser=True,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def test_manager_user(test_db):
    """Create a user holding roles:manage through an active role"""
    now = utcnow()
    user = User(
        business_id=1,
        email="manager@example.com",
        hashed_password=get_password_hash("managerpass123"),
        full_name="Manager User",
        is_active=True,
    )
    permission = Permission(code=MANAGE_ROLES, description="Manage roles", created_at=now)
    role = Role(business_id=1, title="Manager", created_at=now, updated_at=now)
    test_db.add_all([user, permission, role])
    await test_db.flush()

    test_db.add(RolePermission(role_id=role.id, permission_id=permission.id, created_at=now, updated_at=now))
    test_db.add(UserRole(user_id=user.id, role_id=role.id, assigned_at=now))
    await test_db.commit()

    return user


@pytest.fixture
async def test_tables(test_db):
    """Create a spread of tables for listing tests"""
    tables = [
        Table(business_id=1, name="Patio 1", capacity=2, status=TableStatus.AVAILABLE),
        Table(business_id=1, name="Patio 2", capacity=4, status=TableStatus.OCCUPIED),
        Table(business_id=1, name="Patio 3", capacity=4, status=TableStatus.AVAILABLE),
        Table(business_id=1, name="Bar 1", capacity=2, status=TableStatus.RESERVED),
        Table(business_id=1, name="Bar 2", capacity=4, status=TableStatus.OCCUPIED),
        Table(business_id=2, name="Hall 1", capacity=6, status=TableStatus.AVAILABLE),
        Table(business_id=2, name="Hall 2", capacity=8, status=TableStatus.OCCUPIED),
    ]
    test_db.add_all(tables)
    await test_db.commit()

    return tables


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(client, test_user):
    """Create authenticated test client"""
    token = create_access_token(test_user)
    client.headers["Authorization"] = f"Bearer {token}"

    return client


@pytest.fixture
async def admin_client(client, test_admin_user):
    """Create superuser authenticated test client"""
    token = create_access_token(test_admin_user)
    client.headers["Authorization"] = f"Bearer {token}"

    return client


@pytest.fixture
async def manager_client(client, test_manager_user):
    """Create test client for a user with the roles:manage permission"""
    token = create_access_token(test_manager_user)
    client.headers["Authorization"] = f"Bearer {token}"

    return client
