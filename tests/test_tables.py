"""Tests for the table manager"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_table(test_restaurant, authenticated_client: AsyncClient):
    """A new table starts out available"""
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/tables",
        json={"table_number": "12", "capacity": 4, "location_notes": "Patio"},
    )
    
    assert response.status_code == 201
    data = response.json()
    assert data["table_number"] == "12"
    assert data["capacity"] == 4
    assert data["status"] == "available"
    assert data["location_notes"] == "Patio"


@pytest.mark.asyncio
async def test_duplicate_table_number(test_restaurant, test_tables, authenticated_client: AsyncClient):
    """Table numbers are unique within a restaurant"""
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/tables",
        json={"table_number": "1", "capacity": 2},
    )
    
    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize("capacity", [0, 21])
async def test_capacity_bounds(test_restaurant, authenticated_client: AsyncClient, capacity):
    """Capacity must be between 1 and 20"""
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/tables",
        json={"table_number": "9", "capacity": capacity},
    )
    
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_bulk_generate(test_restaurant, authenticated_client: AsyncClient):
    """Bulk generate creates N available tables with the shared capacity"""
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/tables/bulk",
        json={"count": 8, "capacity": 4},
    )
    
    assert response.status_code == 201
    data = response.json()
    assert data["total"] == 8
    assert [t["table_number"] for t in data["items"]] == [str(i) for i in range(1, 9)]
    assert all(t["capacity"] == 4 and t["status"] == "available" for t in data["items"])
    
    listing = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/tables")
    assert listing.json()["total"] == 8
    assert listing.json()["status_counts"]["available"] == 8


@pytest.mark.asyncio
async def test_bulk_generate_conflict(test_restaurant, test_tables, authenticated_client: AsyncClient):
    """Bulk generate refuses to overwrite existing table numbers"""
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/tables/bulk",
        json={"count": 5, "capacity": 2},
    )
    
    assert response.status_code == 409
    assert "1, 2, 3" in response.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [0, 51])
async def test_bulk_generate_bounds(test_restaurant, authenticated_client: AsyncClient, count):
    """Between 1 and 50 tables can be generated at once"""
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/tables/bulk",
        json={"count": count, "capacity": 4},
    )
    
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_tables_in_numeric_order(test_restaurant, authenticated_client: AsyncClient):
    """Numbered tables sort numerically, named tables after them"""
    for number in ["10", "Bar", "2"]:
        await authenticated_client.post(
            f"/restaurants/{test_restaurant.id}/tables",
            json={"table_number": number, "capacity": 2},
        )
    
    response = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/tables")
    
    assert [t["table_number"] for t in response.json()["items"]] == ["2", "10", "Bar"]


@pytest.mark.asyncio
async def test_non_ascii_digit_table_numbers(test_restaurant, authenticated_client: AsyncClient):
    """Digit-like table numbers that are not decimal sort with the named tables"""
    for number in ["\u00b2", "3"]:
        created = await authenticated_client.post(
            f"/restaurants/{test_restaurant.id}/tables",
            json={"table_number": number, "capacity": 2},
        )
        assert created.status_code == 201
    
    response = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/tables")
    assert response.status_code == 200
    assert [t["table_number"] for t in response.json()["items"]] == ["3", "\u00b2"]
    
    response = await authenticated_client.post(
        f"/restaurants/{test_restaurant.id}/qr_codes",
        json={},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_table(test_restaurant, test_tables, authenticated_client: AsyncClient):
    """Capacity, notes and status can be edited"""
    table = test_tables[0]
    response = await authenticated_client.put(
        f"/restaurants/{test_restaurant.id}/tables/{table.id}",
        json={"capacity": 3, "location_notes": "By the window", "status": "maintenance"},
    )
    
    assert response.status_code == 200
    data = response.json()
    assert data["capacity"] == 3
    assert data["location_notes"] == "By the window"
    assert data["status"] == "maintenance"
    
    listing = await authenticated_client.get(
        f"/restaurants/{test_restaurant.id}/tables",
        params={"status": "maintenance"},
    )
    assert [t["id"] for t in listing.json()["items"]] == [str(table.id)]


@pytest.mark.asyncio
async def test_set_table_status(test_restaurant, test_tables, staff_client: AsyncClient):
    """Floor staff can change a table's status"""
    table = test_tables[2]
    response = await staff_client.put(
        f"/restaurants/{test_restaurant.id}/tables/{table.id}/status",
        json={"status": "occupied"},
    )
    
    assert response.status_code == 200
    assert response.json()["status"] == "occupied"


@pytest.mark.asyncio
async def test_invalid_table_status(test_restaurant, test_tables, authenticated_client: AsyncClient):
    """Only the four floor statuses are accepted"""
    response = await authenticated_client.put(
        f"/restaurants/{test_restaurant.id}/tables/{test_tables[0].id}/status",
        json={"status": "dirty"},
    )
    
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_table(test_restaurant, test_tables, authenticated_client: AsyncClient):
    """Deleted tables disappear from the list"""
    table = test_tables[0]
    response = await authenticated_client.delete(
        f"/restaurants/{test_restaurant.id}/tables/{table.id}"
    )
    assert response.status_code == 204
    
    response = await authenticated_client.get(
        f"/restaurants/{test_restaurant.id}/tables/{table.id}"
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_staff_cannot_manage_tables(test_restaurant, test_tables, staff_client: AsyncClient):
    """Creating and deleting tables needs a manager"""
    response = await staff_client.post(
        f"/restaurants/{test_restaurant.id}/tables",
        json={"table_number": "7", "capacity": 2},
    )
    assert response.status_code == 403
    
    response = await staff_client.delete(
        f"/restaurants/{test_restaurant.id}/tables/{test_tables[0].id}"
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_owner_and_staff_share_tables(test_restaurant, test_tables, staff_headers, authenticated_client: AsyncClient):
    """Every user of the restaurant sees the same tables"""
    owner_view = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/tables")
    staff_view = await authenticated_client.get(
        f"/restaurants/{test_restaurant.id}/tables",
        headers=staff_headers,
    )
    
    assert owner_view.status_code == 200
    assert owner_view.json() == staff_view.json()
