"""Booking and customer schemas"""

from datetime import date, time, datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from tableside.models.booking import BookingStatus, AssignmentMethod
from tableside.schemas.table import TableResponse


class BookingCreate(BaseModel):
    """Reservation (or walk-in); without a table id a free table is assigned"""
    table_id: Optional[UUID] = None
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    email: Optional[str] = None
    booking_date: date
    booking_time: time
    party_size: int = Field(..., ge=1)
    notes: Optional[str] = None
    is_walk_in: bool = False


class WalkInCreate(BaseModel):
    """Seat a party that arrived without a reservation"""
    table_id: UUID
    party_size: int = Field(2, ge=1)
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    """Move a booking along its lifecycle"""
    status: BookingStatus

    class Config:
        use_enum_values = True


class TableAssignment(BaseModel):
    """Assign a table to an existing booking"""
    table_id: UUID


class CustomerResponse(BaseModel):
    """Customer response"""
    id: UUID
    name: str
    phone: str
    email: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class BookingResponse(BaseModel):
    """Booking response"""
    id: UUID
    restaurant_id: UUID
    table_id: Optional[UUID]
    customer_id: UUID
    booking_date: date
    booking_time: time
    party_size: int
    notes: Optional[str]
    status: BookingStatus
    is_walk_in: bool
    assignment_method: AssignmentMethod
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BookingDetailResponse(BookingResponse):
    """Booking with its customer and table"""
    customer: CustomerResponse
    table: Optional[TableResponse] = None


class BookingListResponse(BaseModel):
    """Paginated booking list"""
    items: List[BookingDetailResponse]
    total: int
    page: int
    page_size: int


class WalkInResponse(BaseModel):
    """Result of seating a walk-in"""
    booking: BookingDetailResponse
    session_token: str
    order_url: str


class TimeSlotAvailability(BaseModel):
    """Seating capacity of one time slot"""
    slot_time: time
    total_capacity: int
    booked_capacity: int
    available_capacity: int
    waiting_count: int


class TimeSlotListResponse(BaseModel):
    """Time slots of a day"""
    booking_date: date
    slot_minutes: int
    slots: List[TimeSlotAvailability]
