"""Booking and walk-in API endpoints"""

from datetime import date, time
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tableside.database import get_db
from tableside.models.booking import Booking, BookingStatus
from tableside.models.restaurant import Restaurant
from tableside.models.user import User
from tableside.schemas.booking import (
    BookingCreate,
    WalkInCreate,
    BookingStatusUpdate,
    TableAssignment,
    BookingDetailResponse,
    BookingListResponse,
    WalkInResponse,
    TimeSlotListResponse,
)
from tableside.api.auth import get_current_user, verify_restaurant_access
from tableside.services import booking as booking_service
from tableside.services.availability import DEFAULT_SLOT_MINUTES, slot_availability
from tableside.services.qr import build_order_url

router = APIRouter()


async def _load_booking(db: AsyncSession, restaurant_id: UUID, booking_id: UUID) -> Booking:
    result = await db.execute(
        select(Booking)
        .where(Booking.id == booking_id, Booking.restaurant_id == restaurant_id)
        .options(selectinload(Booking.customer), selectinload(Booking.table))
        .execution_options(populate_existing=True)
    )
    booking = result.scalar_one_or_none()
    
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    
    return booking


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    restaurant_id: UUID,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    booking_date: Optional[date] = None,
    is_walk_in: Optional[bool] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List bookings with pagination"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    query = select(Booking).where(Booking.restaurant_id == restaurant_id)
    count_query = select(func.count(Booking.id)).where(Booking.restaurant_id == restaurant_id)
    
    if status:
        query = query.where(Booking.status == status.value)
        count_query = count_query.where(Booking.status == status.value)
    
    if booking_date:
        query = query.where(Booking.booking_date == booking_date)
        count_query = count_query.where(Booking.booking_date == booking_date)
    
    if is_walk_in is not None:
        query = query.where(Booking.is_walk_in == is_walk_in)
        count_query = count_query.where(Booking.is_walk_in == is_walk_in)
    
    total_result = await db.execute(count_query)
    total = total_result.scalar()
    
    offset = (page - 1) * page_size
    query = (
        query.options(selectinload(Booking.customer), selectinload(Booking.table))
        .order_by(Booking.booking_date.desc(), Booking.booking_time.desc())
        .offset(offset)
        .limit(page_size)
        .execution_options(populate_existing=True)
    )
    
    result = await db.execute(query)
    bookings = result.scalars().all()
    
    return BookingListResponse(
        items=bookings,
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=BookingDetailResponse, status_code=201)
async def create_booking(
    restaurant_id: UUID,
    booking_data: BookingCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Book a table, or the smallest free one; walk-ins are seated immediately"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    booking, _ = await booking_service.create_booking(
        db,
        restaurant_id,
        booking_data.table_id,
        name=booking_data.name,
        phone=booking_data.phone,
        email=booking_data.email,
        booking_date=booking_data.booking_date,
        booking_time=booking_data.booking_time,
        party_size=booking_data.party_size,
        notes=booking_data.notes,
        is_walk_in=booking_data.is_walk_in,
    )
    
    return await _load_booking(db, restaurant_id, booking.id)


@router.post("/walk_in", response_model=WalkInResponse, status_code=201)
async def log_walk_in(
    restaurant_id: UUID,
    walk_in: WalkInCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Seat a walk-in party and open its ordering session"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    booking, session = await booking_service.seat_walk_in(
        db,
        restaurant_id,
        walk_in.table_id,
        party_size=walk_in.party_size,
        name=walk_in.name,
        phone=walk_in.phone,
        email=walk_in.email,
        notes=walk_in.notes,
    )
    
    return WalkInResponse(
        booking=await _load_booking(db, restaurant_id, booking.id),
        session_token=session.session_token,
        order_url=build_order_url(session.session_token),
    )


@router.get("/availability", response_model=TimeSlotListResponse)
async def get_availability(
    restaurant_id: UUID,
    booking_date: date,
    opens: time = time(11, 0),
    closes: time = time(22, 0),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Seating capacity and waiting parties per time slot of a day"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    if closes <= opens:
        raise HTTPException(status_code=400, detail="Closing time must be after opening time")
    
    restaurant = await db.get(Restaurant, restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    
    slots = await slot_availability(db, restaurant, booking_date, opens, closes)
    
    return TimeSlotListResponse(
        booking_date=booking_date,
        slot_minutes=restaurant.time_slot_duration_minutes or DEFAULT_SLOT_MINUTES,
        slots=slots,
    )


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    restaurant_id: UUID,
    booking_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get booking details"""
    await verify_restaurant_access(restaurant_id, current_user)
    return await _load_booking(db, restaurant_id, booking_id)


@router.put("/{booking_id}/status", response_model=BookingDetailResponse)
async def update_booking_status(
    restaurant_id: UUID,
    booking_id: UUID,
    status_data: BookingStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move a booking along; its table follows"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    booking = await _load_booking(db, restaurant_id, booking_id)
    await booking_service.set_booking_status(db, booking, status_data.status)
    
    return await _load_booking(db, restaurant_id, booking_id)


@router.put("/{booking_id}/table", response_model=BookingDetailResponse)
async def assign_booking_table(
    restaurant_id: UUID,
    booking_id: UUID,
    assignment: TableAssignment,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Assign a table to a booking"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    booking = await _load_booking(db, restaurant_id, booking_id)
    table = await booking_service.get_table(db, restaurant_id, assignment.table_id)
    booking_service.check_party_size(table, booking.party_size)
    await booking_service.assign_table(db, booking, table)
    
    return await _load_booking(db, restaurant_id, booking_id)
