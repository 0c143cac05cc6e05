"""Waiting list schemas"""

from datetime import date, time, datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from tableside.models.waiting_list import WaitingListStatus
from tableside.schemas.booking import CustomerResponse


class WaitingListCreate(BaseModel):
    """Queue a party for a fully booked slot"""
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    email: Optional[str] = None
    requested_date: date
    requested_time: time
    party_size: int = Field(..., ge=1)
    notes: Optional[str] = None


class WaitingListEntryResponse(BaseModel):
    """Waiting list entry with its customer"""
    id: UUID
    restaurant_id: UUID
    customer_id: UUID
    booking_id: Optional[UUID]
    requested_date: date
    requested_time: time
    party_size: int
    notes: Optional[str]
    status: WaitingListStatus
    priority_order: int
    customer: CustomerResponse
    created_at: datetime

    class Config:
        from_attributes = True


class WaitingListResponse(BaseModel):
    """Waiting list of a restaurant"""
    items: List[WaitingListEntryResponse]
    total: int
