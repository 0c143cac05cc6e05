"""Tests for the waiting list"""

import pytest
from httpx import AsyncClient


def waiting_payload(name="Grace Hopper", phone="+6598765432", party_size=4, **overrides):
    payload = {
        "name": name,
        "phone": phone,
        "requested_date": "2026-11-02",
        "requested_time": "19:30",
        "party_size": party_size,
    }
    payload.update(overrides)
    return payload


def booking_payload(table, phone, party_size=2):
    return {
        "table_id": str(table.id),
        "name": "Booked Guest",
        "phone": phone,
        "booking_date": "2026-11-02",
        "booking_time": "19:30",
        "party_size": party_size,
    }


@pytest.mark.asyncio
async def test_parties_queue_in_order(test_restaurant, authenticated_client: AsyncClient):
    """Entries for the same slot line up behind each other"""
    base = f"/restaurants/{test_restaurant.id}/waiting_list"
    first = await authenticated_client.post(base, json=waiting_payload())
    second = await authenticated_client.post(
        base,
        json=waiting_payload(name="Alan Turing", phone="+6591111111", party_size=2),
    )
    
    assert first.status_code == 201
    assert first.json()["status"] == "waiting"
    assert first.json()["priority_order"] == 1
    assert first.json()["customer"]["name"] == "Grace Hopper"
    assert second.json()["priority_order"] == 2
    
    listing = await authenticated_client.get(base)
    assert listing.json()["total"] == 2
    assert [e["customer"]["name"] for e in listing.json()["items"]] == ["Grace Hopper", "Alan Turing"]


@pytest.mark.asyncio
async def test_promote_entry(test_restaurant, test_tables, authenticated_client: AsyncClient):
    """Promoting books the party onto the smallest free table"""
    base = f"/restaurants/{test_restaurant.id}/waiting_list"
    entry = await authenticated_client.post(base, json=waiting_payload(party_size=3))
    entry_id = entry.json()["id"]
    
    promoted = await authenticated_client.post(f"{base}/{entry_id}/promote")
    
    assert promoted.status_code == 201
    booking = promoted.json()
    assert booking["status"] == "confirmed"
    assert booking["assignment_method"] == "waitlist"
    assert booking["table_id"] == str(test_tables[1].id)
    assert booking["table"]["status"] == "reserved"
    assert booking["booking_time"] == "19:30:00"
    
    confirmed = await authenticated_client.get(base, params={"status": "confirmed"})
    assert confirmed.json()["items"][0]["booking_id"] == booking["id"]
    
    again = await authenticated_client.post(f"{base}/{entry_id}/promote")
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_promote_without_free_table(test_restaurant, test_tables, authenticated_client: AsyncClient):
    """A party larger than every free table stays on the list"""
    base = f"/restaurants/{test_restaurant.id}/waiting_list"
    entry = await authenticated_client.post(base, json=waiting_payload(party_size=10))
    
    response = await authenticated_client.post(f"{base}/{entry.json()['id']}/promote")
    
    assert response.status_code == 400
    listing = await authenticated_client.get(base)
    assert listing.json()["items"][0]["status"] == "waiting"


@pytest.mark.asyncio
async def test_cancel_entry(test_restaurant, authenticated_client: AsyncClient):
    """Cancelled parties leave the waiting list"""
    base = f"/restaurants/{test_restaurant.id}/waiting_list"
    entry = await authenticated_client.post(base, json=waiting_payload())
    entry_id = entry.json()["id"]
    
    cancelled = await authenticated_client.post(f"{base}/{entry_id}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    
    listing = await authenticated_client.get(base)
    assert listing.json()["total"] == 0
    
    again = await authenticated_client.post(f"{base}/{entry_id}/cancel")
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_freed_table_goes_to_waiting_party(
    test_restaurant, test_tables, authenticated_client: AsyncClient
):
    """Cancelling a booking hands its table to the next party waiting for the slot"""
    bookings = []
    for number, table in enumerate(test_tables):
        response = await authenticated_client.post(
            f"/restaurants/{test_restaurant.id}/bookings",
            json=booking_payload(table, phone=f"+659000000{number}"),
        )
        bookings.append(response.json())
    
    base = f"/restaurants/{test_restaurant.id}/waiting_list"
    entry = await authenticated_client.post(base, json=waiting_payload(party_size=4))
    
    stuck = await authenticated_client.post(f"{base}/{entry.json()['id']}/promote")
    assert stuck.status_code == 400
    
    cancelled = await authenticated_client.put(
        f"/restaurants/{test_restaurant.id}/bookings/{bookings[2]['id']}/status",
        json={"status": "cancelled"},
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["table"]["status"] == "reserved"
    
    notified = await authenticated_client.get(base, params={"status": "notified"})
    assert notified.json()["total"] == 1
    booking_id = notified.json()["items"][0]["booking_id"]
    
    booking = await authenticated_client.get(f"/restaurants/{test_restaurant.id}/bookings/{booking_id}")
    assert booking.json()["table_id"] == str(test_tables[2].id)
    assert booking.json()["assignment_method"] == "waitlist"
    assert booking.json()["customer"]["name"] == "Grace Hopper"
