"""
Table and time slot availability.

A table is free for a slot when it is available on the floor and no
pending, confirmed or seated booking holds it at that date and time.
"""

from datetime import date, time, datetime, timedelta
from typing import List
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from tableside.models.booking import Booking, BookingStatus
from tableside.models.restaurant import Restaurant
from tableside.models.table import RestaurantTable, TableStatus, table_sort_key
from tableside.models.waiting_list import WaitingListEntry, WaitingListStatus

# Bookings that hold their table for the slot
HOLDING_STATUSES = (
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
    BookingStatus.SEATED.value,
)

# Tables counted towards a slot's seating capacity
IN_SERVICE_STATUSES = (
    TableStatus.AVAILABLE.value,
    TableStatus.RESERVED.value,
    TableStatus.OCCUPIED.value,
)

DEFAULT_SLOT_MINUTES = 15


async def find_available_tables(
    db: AsyncSession,
    restaurant_id: UUID,
    booking_date: date,
    booking_time: time,
    party_size: int,
) -> List[RestaurantTable]:
    """Free tables that seat the party, smallest first"""
    held = select(Booking.table_id).where(
        Booking.restaurant_id == restaurant_id,
        Booking.booking_date == booking_date,
        Booking.booking_time == booking_time,
        Booking.table_id.isnot(None),
        Booking.status.in_(HOLDING_STATUSES),
    )

    result = await db.execute(
        select(RestaurantTable).where(
            RestaurantTable.restaurant_id == restaurant_id,
            RestaurantTable.capacity >= party_size,
            RestaurantTable.status == TableStatus.AVAILABLE.value,
            RestaurantTable.id.not_in(held),
        )
    )
    tables = result.scalars().all()
    return sorted(tables, key=lambda t: (t.capacity, table_sort_key(t)))


async def slot_availability(
    db: AsyncSession,
    restaurant: Restaurant,
    booking_date: date,
    opens: time,
    closes: time,
) -> List[dict]:
    """Seating capacity per time slot between opening and closing.

    Slots start at the opening time and are spaced by the restaurant's
    time slot duration.
    """
    total_result = await db.execute(
        select(func.coalesce(func.sum(RestaurantTable.capacity), 0)).where(
            RestaurantTable.restaurant_id == restaurant.id,
            RestaurantTable.status.in_(IN_SERVICE_STATUSES),
        )
    )
    total_capacity = int(total_result.scalar())

    booked_result = await db.execute(
        select(Booking.booking_time, func.sum(Booking.party_size))
        .where(
            Booking.restaurant_id == restaurant.id,
            Booking.booking_date == booking_date,
            Booking.status.in_(HOLDING_STATUSES),
        )
        .group_by(Booking.booking_time)
    )
    booked = {row[0]: int(row[1]) for row in booked_result}

    waiting_result = await db.execute(
        select(WaitingListEntry.requested_time, func.count(WaitingListEntry.id))
        .where(
            WaitingListEntry.restaurant_id == restaurant.id,
            WaitingListEntry.requested_date == booking_date,
            WaitingListEntry.status == WaitingListStatus.WAITING.value,
        )
        .group_by(WaitingListEntry.requested_time)
    )
    waiting = {row[0]: row[1] for row in waiting_result}

    step = timedelta(minutes=restaurant.time_slot_duration_minutes or DEFAULT_SLOT_MINUTES)
    slot = datetime.combine(booking_date, opens)
    end = datetime.combine(booking_date, closes)

    slots = []
    while slot < end:
        slot_time = slot.time()
        booked_capacity = booked.get(slot_time, 0)
        slots.append({
            "slot_time": slot_time,
            "total_capacity": total_capacity,
            "booked_capacity": booked_capacity,
            "available_capacity": max(0, total_capacity - booked_capacity),
            "waiting_count": waiting.get(slot_time, 0),
        })
        slot += step

    return slots
