"""Waiting list API endpoints"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tableside.database import get_db
from tableside.models.booking import Booking
from tableside.models.user import User
from tableside.models.waiting_list import WaitingListEntry, WaitingListStatus
from tableside.schemas.booking import BookingDetailResponse
from tableside.schemas.waiting_list import (
    WaitingListCreate,
    WaitingListEntryResponse,
    WaitingListResponse,
)
from tableside.api.auth import get_current_user, verify_restaurant_access
from tableside.services import waitlist as waitlist_service

router = APIRouter()


async def _load_entry(db: AsyncSession, entry_id: UUID) -> WaitingListEntry:
    result = await db.execute(
        select(WaitingListEntry)
        .where(WaitingListEntry.id == entry_id)
        .options(selectinload(WaitingListEntry.customer))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.get("", response_model=WaitingListResponse)
async def list_waiting_list(
    restaurant_id: UUID,
    status: Optional[WaitingListStatus] = WaitingListStatus.WAITING,
    requested_date: Optional[date] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Waiting parties in slot and priority order"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    query = select(WaitingListEntry).where(WaitingListEntry.restaurant_id == restaurant_id)
    
    if status:
        query = query.where(WaitingListEntry.status == status.value)
    
    if requested_date:
        query = query.where(WaitingListEntry.requested_date == requested_date)
    
    result = await db.execute(
        query.options(selectinload(WaitingListEntry.customer))
        .order_by(
            WaitingListEntry.requested_date,
            WaitingListEntry.requested_time,
            WaitingListEntry.priority_order,
        )
    )
    entries = result.scalars().all()
    
    return WaitingListResponse(items=entries, total=len(entries))


@router.post("", response_model=WaitingListEntryResponse, status_code=201)
async def add_to_waiting_list(
    restaurant_id: UUID,
    entry_data: WaitingListCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Queue a party for a fully booked slot"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    entry = await waitlist_service.add_to_waiting_list(
        db,
        restaurant_id,
        name=entry_data.name,
        phone=entry_data.phone,
        email=entry_data.email,
        requested_date=entry_data.requested_date,
        requested_time=entry_data.requested_time,
        party_size=entry_data.party_size,
        notes=entry_data.notes,
    )
    
    return await _load_entry(db, entry.id)


@router.post("/{entry_id}/promote", response_model=BookingDetailResponse, status_code=201)
async def promote_from_waiting_list(
    restaurant_id: UUID,
    entry_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Book a waiting party onto a free table"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    booking = await waitlist_service.promote_entry(db, restaurant_id, entry_id)
    
    result = await db.execute(
        select(Booking)
        .where(Booking.id == booking.id)
        .options(selectinload(Booking.customer), selectinload(Booking.table))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.post("/{entry_id}/cancel", response_model=WaitingListEntryResponse)
async def cancel_waiting_list_entry(
    restaurant_id: UUID,
    entry_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Take a party off the waiting list"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    entry = await waitlist_service.cancel_entry(db, restaurant_id, entry_id)
    return await _load_entry(db, entry.id)
