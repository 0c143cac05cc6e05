"""Test configuration and fixtures"""

import os

# Point the app's engine at SQLite before anything imports it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from uuid import uuid4

from tableside.main import app
from tableside.database import Base, get_db
from tableside.models.restaurant import Restaurant
from tableside.models.table import RestaurantTable
from tableside.models.user import User, UserRole
from tableside.api.auth import get_password_hash, create_access_token


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def auth_headers(user: User) -> dict:
    """Bearer header for a user"""
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    
    async with session_factory() as session:
        yield session
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    
    await engine.dispose()


@pytest.fixture
async def test_restaurant(test_db):
    """Create a test restaurant"""
    restaurant = Restaurant(
        id=uuid4(),
        name="Test Bistro",
        slug="test-bistro",
        address="1 Harbour Road",
        time_slot_duration_minutes=120,
    )
    test_db.add(restaurant)
    await test_db.commit()
    
    return restaurant


@pytest.fixture
async def test_owner(test_db, test_restaurant):
    """Create the restaurant owner"""
    user = User(
        id=uuid4(),
        restaurant_id=test_restaurant.id,
        email="owner@example.com",
        hashed_password=get_password_hash("ownerpass123"),
        full_name="Olive Owner",
        role=UserRole.OWNER,
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()
    
    return user


@pytest.fixture
async def test_staff(test_db, test_restaurant):
    """Create a floor staff member"""
    user = User(
        id=uuid4(),
        restaurant_id=test_restaurant.id,
        email="staff@example.com",
        hashed_password=get_password_hash("staffpass123"),
        full_name="Sam Staff",
        role=UserRole.STAFF,
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()
    
    return user


@pytest.fixture
async def test_tables(test_db, test_restaurant):
    """Create three available tables of capacity 2, 4 and 6"""
    tables = [
        RestaurantTable(
            restaurant_id=test_restaurant.id,
            table_number=str(number),
            capacity=capacity,
            status="available",
        )
        for number, capacity in [(1, 2), (2, 4), (3, 6)]
    ]
    
    for table in tables:
        test_db.add(table)
    
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
async def authenticated_client(client, test_owner):
    """Create a client authenticated as the owner"""
    client.headers.update(auth_headers(test_owner))
    return client


@pytest.fixture
async def staff_client(client, test_staff):
    """Create a client authenticated as floor staff"""
    client.headers.update(auth_headers(test_staff))
    return client


@pytest.fixture
async def staff_headers(test_staff):
    """Bearer header for the staff member, for one-off requests"""
    return auth_headers(test_staff)
