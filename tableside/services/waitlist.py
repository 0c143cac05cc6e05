"""
Waiting list for fully booked time slots.

Parties queue per date and time in priority order. When a booking frees a
table the first waiting party of that slot that fits a free table is booked
onto it; staff can also promote or cancel an entry by hand.
"""

from datetime import date, time
from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.exceptions import BookingError, ConflictError, NotFoundError
from tableside.models.booking import Booking, BookingStatus, AssignmentMethod
from tableside.models.table import RestaurantTable, TableStatus
from tableside.models.waiting_list import WaitingListEntry, WaitingListStatus
from tableside.services.availability import find_available_tables
from tableside.services.booking import find_or_create_customer

logger = structlog.get_logger()


async def get_entry(db: AsyncSession, restaurant_id: UUID, entry_id: UUID) -> WaitingListEntry:
    """Load a waiting list entry of the restaurant"""
    result = await db.execute(
        select(WaitingListEntry).where(
            WaitingListEntry.id == entry_id,
            WaitingListEntry.restaurant_id == restaurant_id,
        )
    )
    entry = result.scalar_one_or_none()
    if not entry:
        raise NotFoundError("Waiting list entry not found")
    return entry


def _check_waiting(entry: WaitingListEntry) -> None:
    if entry.status != WaitingListStatus.WAITING.value:
        raise ConflictError(f"Waiting list entry is already {entry.status}")


async def add_to_waiting_list(
    db: AsyncSession,
    restaurant_id: UUID,
    name: str,
    phone: str,
    requested_date: date,
    requested_time: time,
    party_size: int,
    email: Optional[str] = None,
    notes: Optional[str] = None,
) -> WaitingListEntry:
    """Queue a party behind everyone already waiting for the slot"""
    customer, _ = await find_or_create_customer(db, restaurant_id, phone, name, email)

    result = await db.execute(
        select(func.max(WaitingListEntry.priority_order)).where(
            WaitingListEntry.restaurant_id == restaurant_id,
            WaitingListEntry.requested_date == requested_date,
            WaitingListEntry.requested_time == requested_time,
            WaitingListEntry.status == WaitingListStatus.WAITING.value,
        )
    )
    last_position = result.scalar() or 0

    entry = WaitingListEntry(
        restaurant_id=restaurant_id,
        customer_id=customer.id,
        requested_date=requested_date,
        requested_time=requested_time,
        party_size=party_size,
        notes=notes or None,
        status=WaitingListStatus.WAITING.value,
        priority_order=last_position + 1,
    )
    db.add(entry)
    await db.commit()

    logger.info(
        "Party added to waiting list",
        entry_id=str(entry.id),
        requested_date=str(requested_date),
        requested_time=str(requested_time),
        position=entry.priority_order,
    )
    return entry


async def _book_from_waiting_list(
    db: AsyncSession,
    entry: WaitingListEntry,
    table: RestaurantTable,
    entry_status: WaitingListStatus,
) -> Booking:
    booking = Booking(
        restaurant_id=entry.restaurant_id,
        table_id=table.id,
        customer_id=entry.customer_id,
        booking_date=entry.requested_date,
        booking_time=entry.requested_time,
        party_size=entry.party_size,
        notes=entry.notes,
        status=BookingStatus.CONFIRMED.value,
        is_walk_in=False,
        assignment_method=AssignmentMethod.WAITLIST.value,
    )
    db.add(booking)
    await db.flush()

    entry.status = entry_status.value
    entry.booking_id = booking.id
    table.status = TableStatus.RESERVED.value
    await db.flush()

    logger.info(
        "Waiting party booked",
        entry_id=str(entry.id),
        booking_id=str(booking.id),
        table_id=str(table.id),
    )
    return booking


async def promote_entry(db: AsyncSession, restaurant_id: UUID, entry_id: UUID) -> Booking:
    """Book a waiting party onto the smallest free table for its slot"""
    entry = await get_entry(db, restaurant_id, entry_id)
    _check_waiting(entry)

    tables = await find_available_tables(
        db, restaurant_id, entry.requested_date, entry.requested_time, entry.party_size
    )
    if not tables:
        raise BookingError("No available tables for this party size")

    booking = await _book_from_waiting_list(db, entry, tables[0], WaitingListStatus.CONFIRMED)
    await db.commit()
    return booking


async def cancel_entry(db: AsyncSession, restaurant_id: UUID, entry_id: UUID) -> WaitingListEntry:
    """Take a party off the waiting list"""
    entry = await get_entry(db, restaurant_id, entry_id)
    _check_waiting(entry)

    entry.status = WaitingListStatus.CANCELLED.value
    await db.commit()

    logger.info("Waiting list entry cancelled", entry_id=str(entry.id))
    return entry


async def process_waiting_list(
    db: AsyncSession,
    restaurant_id: UUID,
    booking_date: date,
    booking_time: time,
) -> Optional[Booking]:
    """Offer a freed slot to the first waiting party that fits a free table.

    The promoted entry is marked notified. Changes are flushed, not committed.
    """
    result = await db.execute(
        select(WaitingListEntry)
        .where(
            WaitingListEntry.restaurant_id == restaurant_id,
            WaitingListEntry.requested_date == booking_date,
            WaitingListEntry.requested_time == booking_time,
            WaitingListEntry.status == WaitingListStatus.WAITING.value,
        )
        .order_by(WaitingListEntry.priority_order, WaitingListEntry.created_at)
    )

    for entry in result.scalars().all():
        tables = await find_available_tables(
            db, restaurant_id, booking_date, booking_time, entry.party_size
        )
        if tables:
            return await _book_from_waiting_list(db, entry, tables[0], WaitingListStatus.NOTIFIED)

    return None
