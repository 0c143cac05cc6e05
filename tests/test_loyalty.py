"""Tests for loyalty program configuration"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from httpx import AsyncClient

from tableside.models.loyalty import LoyaltyUser


@pytest.mark.asyncio
async def test_default_settings(test_restaurant, authenticated_client: AsyncClient):
    """Settings are created with program defaults on first read"""
    response = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/loyalty/settings")
    
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["discount_threshold"]) == 100
    assert Decimal(data["discount_percentage"]) == 10
    assert data["points_per_dollar"] == 1
    assert data["welcome_bonus"] == 0


@pytest.mark.asyncio
async def test_update_settings(test_restaurant, authenticated_client: AsyncClient):
    """Settings updates persist"""
    response = await authenticated_client.put(
        f"/restaurants/{test_restaurant.id}/loyalty/settings",
        json={"discount_percentage": "15", "welcome_bonus": 50},
    )
    assert response.status_code == 200
    
    response = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/loyalty/settings")
    data = response.json()
    assert Decimal(data["discount_percentage"]) == 15
    assert data["welcome_bonus"] == 50
    assert Decimal(data["discount_threshold"]) == 100


@pytest.mark.asyncio
async def test_settings_reject_out_of_range(test_restaurant, authenticated_client: AsyncClient):
    """A discount over 100% is rejected"""
    response = await authenticated_client.put(
        f"/restaurants/{test_restaurant.id}/loyalty/settings",
        json={"discount_percentage": "120"},
    )
    
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_discount_code_lifecycle(test_restaurant, authenticated_client: AsyncClient):
    """Discount codes can be created, edited and deleted"""
    base = f"/restaurants/{test_restaurant.id}/loyalty/discount_codes"
    
    created = await authenticated_client.post(
        base,
        json={
            "code": "welcome10",
            "description": "First visit",
            "discount_type": "percentage",
            "discount_value": "10",
            "max_uses": 100,
        },
    )
    assert created.status_code == 201
    code = created.json()
    assert code["code"] == "WELCOME10"
    assert code["current_uses"] == 0
    assert code["is_active"] is True
    
    duplicate = await authenticated_client.post(
        base,
        json={"code": "WELCOME10", "discount_value": "5"},
    )
    assert duplicate.status_code == 409
    
    updated = await authenticated_client.put(
        f"{base}/{code['id']}",
        json={"discount_type": "fixed", "discount_value": "5", "is_active": False},
    )
    assert updated.status_code == 200
    assert updated.json()["discount_type"] == "fixed"
    assert updated.json()["is_active"] is False
    
    active = await authenticated_client.get(base, params={"active_only": True})
    assert active.json()["total"] == 0
    
    deleted = await authenticated_client.delete(f"{base}/{code['id']}")
    assert deleted.status_code == 204
    
    listing = await authenticated_client.get(base)
    assert listing.json()["total"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"code": "BIG", "discount_type": "percentage", "discount_value": "150"},
        {"code": "NEG", "discount_value": "-5"},
        {
            "code": "BACKWARDS",
            "discount_value": "5",
            "valid_from": "2026-12-01T00:00:00",
            "valid_until": "2026-11-01T00:00:00",
        },
    ],
)
async def test_discount_code_validation(test_restaurant, authenticated_client: AsyncClient, payload):
    """Out-of-range discount codes are rejected"""
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/loyalty/discount_codes",
        json=payload,
    )
    
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_staff_cannot_edit_loyalty(test_restaurant, staff_client: AsyncClient):
    """Only managers change the loyalty program"""
    response = await staff_client.put(
        f"/restaurants/{test_restaurant.id}/loyalty/settings",
        json={"welcome_bonus": 10},
    )
    
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_loyalty_stats(test_db, test_restaurant, authenticated_client: AsyncClient):
    """Membership statistics summarise loyalty members"""
    now = datetime.utcnow()
    test_db.add_all([
        LoyaltyUser(
            restaurant_id=test_restaurant.id,
            name="Regular",
            total_spent=Decimal("150.00"),
            order_count=5,
            discount_eligible=True,
            last_order_date=now - timedelta(days=3),
        ),
        LoyaltyUser(
            restaurant_id=test_restaurant.id,
            name="Lapsed",
            total_spent=Decimal("50.00"),
            order_count=3,
            discount_eligible=False,
            last_order_date=now - timedelta(days=90),
        ),
    ])
    await test_db.commit()
    
    response = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/loyalty/stats")
    
    assert response.status_code == 200
    data = response.json()
    assert data["total_members"] == 2
    assert data["active_members"] == 1
    assert Decimal(data["total_spent"]) == Decimal("200.00")
    assert Decimal(data["avg_order_value"]) == Decimal("25.00")
    assert data["discount_eligible_count"] == 1


@pytest.mark.asyncio
async def test_loyalty_stats_empty(test_restaurant, authenticated_client: AsyncClient):
    """A restaurant without members reports zeros"""
    response = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/loyalty/stats")
    
    data = response.json()
    assert data["total_members"] == 0
    assert Decimal(data["avg_order_value"]) == 0
