"""Tests for restaurant scoping and access control"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

from tableside.api.auth import get_password_hash, create_access_token
from tableside.models.restaurant import Restaurant
from tableside.models.table import RestaurantTable
from tableside.models.user import User, UserRole


@pytest.mark.asyncio
async def test_login_and_me(client: AsyncClient, test_owner):
    """Password login issues a token that identifies the user"""
    response = await client.post(
        "/auth/login",
        data={"username": "owner@example.com", "password": "ownerpass123"},
    )
    
    assert response.status_code == 200
    token = response.json()["access_token"]
    
    response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "owner@example.com"
    assert response.json()["role"] == "owner"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_owner):
    """Wrong password is rejected"""
    response = await client.post(
        "/auth/login",
        data={"username": "owner@example.com", "password": "nope"},
    )
    
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_requires_token(client: AsyncClient, test_restaurant):
    """Restaurant routes need a bearer token"""
    response = await client.get(f"/restaurants/{test_restaurant.id}/tables")
    
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_other_restaurant_is_forbidden(test_db, authenticated_client: AsyncClient):
    """Users only reach their own restaurant's data"""
    other = Restaurant(id=uuid4(), name="Rival Diner", slug="rival-diner")
    test_db.add(other)
    await test_db.flush()
    test_db.add(RestaurantTable(restaurant_id=other.id, table_number="1", capacity=2))
    await test_db.commit()
    
    for path in ["tables", "bookings", "waiting_list", "customers", "qr_codes/sessions", "loyalty/settings"]:
        response = await authenticated_client.get(f"/restaurants/{other.id}/{path}")
        assert response.status_code == 403


@pytest.mark.asyncio
async def test_table_ids_are_scoped(test_db, test_restaurant, authenticated_client: AsyncClient):
    """A table of another restaurant cannot be booked through this one"""
    other = Restaurant(id=uuid4(), name="Rival Diner", slug="rival-diner")
    test_db.add(other)
    await test_db.flush()
    foreign_table = RestaurantTable(restaurant_id=other.id, table_number="1", capacity=4)
    test_db.add(foreign_table)
    await test_db.commit()
    
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/bookings",
        json={
            "table_id": str(foreign_table.id),
            "name": "Eve",
            "phone": "+6599999999",
            "booking_date": "2026-11-02",
            "booking_time": "20:00",
            "party_size": 2,
        },
    )
    
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_customers_are_private_to_a_restaurant(
    test_db, test_restaurant, test_tables, authenticated_client: AsyncClient
):
    """The same phone number is a separate customer at each restaurant"""
    other = Restaurant(id=uuid4(), name="Rival Diner", slug="rival-diner")
    test_db.add(other)
    await test_db.flush()
    other_table = RestaurantTable(restaurant_id=other.id, table_number="1", capacity=4)
    other_owner = User(
        id=uuid4(),
        restaurant_id=other.id,
        email="rival@example.com",
        hashed_password=get_password_hash("rivalpass123"),
        role=UserRole.OWNER,
    )
    test_db.add_all([other_table, other_owner])
    await test_db.commit()
    rival_headers = {"Authorization": f"Bearer {create_access_token(other_owner)}"}
    
    ours = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/bookings",
        json={
            "table_id": str(test_tables[0].id),
            "name": "Ada Lovelace",
            "phone": "+6591234567",
            "email": "ada@example.com",
            "booking_date": "2026-11-02",
            "booking_time": "19:30",
            "party_size": 2,
        },
    )
    assert ours.status_code == 201
    
    lookup = await authenticated_client.get(
        f"/restaurants/{other.id}/customers/lookup",
        params={"phone": "+6591234567"},
        headers=rival_headers,
    )
    assert lookup.status_code == 404
    
    theirs = await authenticated_client.post(
        f"/restaurants/{other.id}/bookings",
        json={
            "table_id": str(other_table.id),
            "name": "Mallory",
            "phone": "+6591234567",
            "email": "mallory@example.com",
            "booking_date": "2026-11-02",
            "booking_time": "19:30",
            "party_size": 2,
        },
        headers=rival_headers,
    )
    assert theirs.status_code == 201
    assert theirs.json()["customer"]["name"] == "Mallory"
    assert theirs.json()["customer_id"] != ours.json()["customer_id"]
    
    customers = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/customers")
    assert [(c["name"], c["email"]) for c in customers.json()] == [("Ada Lovelace", "ada@example.com")]


@pytest.mark.asyncio
async def test_create_restaurant_makes_owner(test_db, client: AsyncClient):
    """The user who sets up a restaurant becomes its owner"""
    user = User(
        id=uuid4(),
        email="founder@example.com",
        hashed_password=get_password_hash("founderpass123"),
        role=UserRole.STAFF,
    )
    test_db.add(user)
    await test_db.commit()
    headers = {"Authorization": f"Bearer {create_access_token(user)}"}
    
    response = await client.post(
        "/restaurants",
        json={"name": "Noodle Bar", "slug": "noodle-bar", "phone": "+6561234567"},
        headers=headers,
    )
    assert response.status_code == 201
    restaurant_id = response.json()["id"]
    
    me = await client.get("/auth/me", headers=headers)
    assert me.json()["restaurant_id"] == restaurant_id
    assert me.json()["role"] == "owner"
    
    settings = await client.get(f"/restaurants/{restaurant_id}/loyalty/settings", headers=headers)
    assert settings.status_code == 200


@pytest.mark.asyncio
async def test_update_restaurant(test_restaurant, authenticated_client: AsyncClient):
    """Managers can edit restaurant details"""
    response = await authenticated_client.put(
        f"/restaurants/{test_restaurant.id}",
        json={"name": "Test Bistro & Bar", "time_slot_duration_minutes": 90},
    )
    
    assert response.status_code == 200
    assert response.json()["name"] == "Test Bistro & Bar"
    assert response.json()["time_slot_duration_minutes"] == 90
    assert response.json()["slug"] == "test-bistro"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """Health check responds without auth"""
    response = await client.get("/health")
    
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
