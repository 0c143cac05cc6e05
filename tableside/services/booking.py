"""
Booking, walk-in and table status workflows.

A reservation and a walk-in follow the same path: resolve the customer,
insert the booking, move the table to its new status. Everything happens in
one transaction, so a failure part way through leaves nothing behind.
"""

import secrets
import time as time_module
from datetime import date, datetime, time
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.exceptions import BookingError, NotFoundError
from tableside.models.booking import Booking, BookingStatus, AssignmentMethod
from tableside.models.customer import Customer
from tableside.models.order_session import OrderSession
from tableside.models.table import RestaurantTable, TableStatus
from tableside.services.availability import find_available_tables
from tableside.services.sessions import open_order_session, deactivate_table_sessions

logger = structlog.get_logger()

WALK_IN_CUSTOMER_NAME = "Walk-in Customer"
DEFAULT_WALK_IN_PARTY_SIZE = 2

# Table status that follows a booking status change
TABLE_STATUS_FOR_BOOKING = {
    BookingStatus.CONFIRMED: TableStatus.RESERVED,
    BookingStatus.SEATED: TableStatus.OCCUPIED,
    BookingStatus.COMPLETED: TableStatus.AVAILABLE,
    BookingStatus.CANCELLED: TableStatus.AVAILABLE,
    BookingStatus.NO_SHOW: TableStatus.AVAILABLE,
}

ENDED_STATUSES = (BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW)


def _db_error_message(exc: SQLAlchemyError) -> str:
    return str(getattr(exc, "orig", None) or exc)


async def get_table(db: AsyncSession, restaurant_id: UUID, table_id: UUID) -> RestaurantTable:
    """Load a table that belongs to the restaurant"""
    result = await db.execute(
        select(RestaurantTable).where(
            RestaurantTable.id == table_id,
            RestaurantTable.restaurant_id == restaurant_id,
        )
    )
    table = result.scalar_one_or_none()
    if not table:
        raise NotFoundError("Table not found")
    return table


def check_party_size(table: RestaurantTable, party_size: int) -> None:
    """Party must fit the table"""
    if party_size < 1:
        raise BookingError("Party size must be at least 1")
    if party_size > table.capacity:
        raise BookingError(
            f"Party of {party_size} exceeds the capacity of table {table.table_number} ({table.capacity})"
        )


async def find_or_create_customer(
    db: AsyncSession,
    restaurant_id: UUID,
    phone: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
) -> Tuple[Customer, bool]:
    """Reuse the restaurant's customer with this phone number or create one.

    Name and email on an existing customer are refreshed when given.
    Returns the customer and whether it was created.
    """
    result = await db.execute(
        select(Customer).where(
            Customer.restaurant_id == restaurant_id,
            Customer.phone == phone,
        )
    )
    customer = result.scalar_one_or_none()

    if customer:
        if name:
            customer.name = name
        if email:
            customer.email = email
        await db.flush()
        return customer, False

    customer = Customer(
        restaurant_id=restaurant_id,
        name=name or WALK_IN_CUSTOMER_NAME,
        phone=phone,
        email=email or None,
    )
    db.add(customer)
    await db.flush()
    return customer, True


async def create_anonymous_customer(db: AsyncSession, restaurant_id: UUID) -> Customer:
    """Stub customer for a walk-in who left no contact details"""
    phone = f"walkin-{int(time_module.time() * 1000)}-{secrets.token_hex(3)}"
    customer = Customer(restaurant_id=restaurant_id, name=WALK_IN_CUSTOMER_NAME, phone=phone)
    db.add(customer)
    await db.flush()
    return customer


async def choose_table(
    db: AsyncSession,
    restaurant_id: UUID,
    booking_date: date,
    booking_time: time,
    party_size: int,
) -> RestaurantTable:
    """Smallest free table that seats the party at the requested slot"""
    tables = await find_available_tables(db, restaurant_id, booking_date, booking_time, party_size)
    if not tables:
        raise BookingError(
            f"No table available for a party of {party_size} on {booking_date} at {booking_time:%H:%M}"
        )
    return tables[0]


async def _book_table(
    db: AsyncSession,
    table: RestaurantTable,
    customer: Customer,
    booking_date: date,
    booking_time: time,
    party_size: int,
    notes: Optional[str],
    is_walk_in: bool,
    assignment_method: AssignmentMethod = AssignmentMethod.MANUAL,
) -> Tuple[Booking, Optional[OrderSession]]:
    booking = Booking(
        restaurant_id=table.restaurant_id,
        table_id=table.id,
        customer_id=customer.id,
        booking_date=booking_date,
        booking_time=booking_time,
        party_size=party_size,
        notes=notes or None,
        is_walk_in=is_walk_in,
        status=(BookingStatus.SEATED if is_walk_in else BookingStatus.PENDING).value,
        assignment_method=assignment_method.value,
    )
    db.add(booking)
    await db.flush()

    session = None
    if is_walk_in:
        table.status = TableStatus.OCCUPIED.value
        session = await open_order_session(db, table.restaurant_id, table.id, booking.id)
    elif table.status != TableStatus.OCCUPIED.value:
        # A reservation never displaces the party eating at the table now
        table.status = TableStatus.RESERVED.value

    return booking, session


async def create_booking(
    db: AsyncSession,
    restaurant_id: UUID,
    table_id: Optional[UUID],
    name: str,
    phone: str,
    booking_date: date,
    booking_time: time,
    party_size: int,
    email: Optional[str] = None,
    notes: Optional[str] = None,
    is_walk_in: bool = False,
) -> Tuple[Booking, Optional[OrderSession]]:
    """Book a table for a named customer.

    A reservation leaves the booking pending and the table reserved; a
    walk-in is seated straight away on an occupied table. Without a table
    id the smallest free table for the slot is assigned.
    """
    if table_id:
        table = await get_table(db, restaurant_id, table_id)
        assignment_method = AssignmentMethod.MANUAL
    else:
        table = await choose_table(db, restaurant_id, booking_date, booking_time, party_size)
        assignment_method = AssignmentMethod.AUTO
    check_party_size(table, party_size)

    try:
        customer, created = await find_or_create_customer(db, restaurant_id, phone, name, email)
        booking, session = await _book_table(
            db,
            table,
            customer,
            booking_date,
            booking_time,
            party_size,
            notes,
            is_walk_in,
            assignment_method,
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Booking failed", table_id=str(table_id), error=_db_error_message(exc))
        raise BookingError(f"Failed to create booking: {_db_error_message(exc)}") from exc

    logger.info(
        "Booking created",
        booking_id=str(booking.id),
        table_id=str(booking.table_id),
        is_walk_in=is_walk_in,
        assignment_method=assignment_method.value,
        new_customer=created,
    )
    return booking, session


async def seat_walk_in(
    db: AsyncSession,
    restaurant_id: UUID,
    table_id: UUID,
    party_size: int = DEFAULT_WALK_IN_PARTY_SIZE,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    email: Optional[str] = None,
    notes: Optional[str] = None,
) -> Tuple[Booking, OrderSession]:
    """Seat a walk-in party now.

    With a phone number the customer is resolved like any booking; without
    one an anonymous stub customer is recorded.
    """
    now = datetime.utcnow()

    if phone:
        return await create_booking(
            db,
            restaurant_id,
            table_id,
            name=name,
            phone=phone,
            email=email,
            booking_date=now.date(),
            booking_time=now.time().replace(microsecond=0),
            party_size=party_size,
            notes=notes,
            is_walk_in=True,
        )

    table = await get_table(db, restaurant_id, table_id)
    check_party_size(table, party_size)

    try:
        customer = await create_anonymous_customer(db, restaurant_id)
        booking, session = await _book_table(
            db,
            table,
            customer,
            now.date(),
            now.time().replace(microsecond=0),
            party_size,
            notes,
            is_walk_in=True,
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Walk-in failed", table_id=str(table_id), error=_db_error_message(exc))
        raise BookingError(f"Failed to log walk-in: {_db_error_message(exc)}") from exc

    logger.info("Walk-in seated", booking_id=str(booking.id), table_id=str(table.id), party_size=party_size)
    return booking, session


async def set_table_status(db: AsyncSession, table: RestaurantTable, status: TableStatus) -> RestaurantTable:
    """Change a table's status.

    Freeing a table completes the walk-in seated at it and closes its
    ordering sessions. Changes are flushed, not committed.
    """
    status = TableStatus(status)

    if status == TableStatus.AVAILABLE:
        await db.execute(
            update(Booking)
            .where(
                Booking.table_id == table.id,
                Booking.status == BookingStatus.SEATED.value,
                Booking.is_walk_in == True,
            )
            .values(status=BookingStatus.COMPLETED.value)
            .execution_options(synchronize_session="fetch")
        )
        await deactivate_table_sessions(db, table.id)

    table.status = status.value
    await db.flush()

    logger.info("Table status changed", table_id=str(table.id), status=status.value)
    return table


async def _other_party_seated(db: AsyncSession, booking: Booking) -> bool:
    result = await db.execute(
        select(Booking.id).where(
            Booking.table_id == booking.table_id,
            Booking.id != booking.id,
            Booking.status == BookingStatus.SEATED.value,
        ).limit(1)
    )
    return result.first() is not None


async def set_booking_status(db: AsyncSession, booking: Booking, status: BookingStatus) -> Booking:
    """Change a booking's status and carry the table along with it.

    While another party is seated at the table only seating this booking
    moves the table. A table freed by this booking is offered to the next
    party waiting for the same slot.
    """
    from tableside.services.waitlist import process_waiting_list

    status = BookingStatus(status)
    booking.status = status.value
    await db.flush()

    if status in ENDED_STATUSES:
        await db.execute(
            update(OrderSession)
            .where(OrderSession.booking_id == booking.id, OrderSession.is_active == True)
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )

    table_status = TABLE_STATUS_FOR_BOOKING.get(status)
    table = await db.get(RestaurantTable, booking.table_id) if booking.table_id else None

    if table and table_status:
        if status == BookingStatus.SEATED or not await _other_party_seated(db, booking):
            table.status = table_status.value
            await db.flush()
            logger.info("Table status changed", table_id=str(table.id), status=table_status.value)

            if table_status == TableStatus.AVAILABLE:
                await process_waiting_list(
                    db, booking.restaurant_id, booking.booking_date, booking.booking_time
                )

    await db.commit()
    logger.info("Booking status changed", booking_id=str(booking.id), status=status.value)
    return booking


async def assign_table(db: AsyncSession, booking: Booking, table: RestaurantTable) -> Booking:
    """Give a booking a table and hold the table for it"""
    booking.table_id = table.id
    booking.assignment_method = AssignmentMethod.MANUAL.value
    table.status = TableStatus.RESERVED.value
    await db.commit()

    logger.info("Table assigned", booking_id=str(booking.id), table_id=str(table.id))
    return booking
