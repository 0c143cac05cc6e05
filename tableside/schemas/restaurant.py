"""Restaurant schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class RestaurantCreate(BaseModel):
    """Create restaurant request"""
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    time_slot_duration_minutes: int = Field(120, ge=15, le=480)


class RestaurantUpdate(BaseModel):
    """Update restaurant request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    time_slot_duration_minutes: Optional[int] = Field(None, ge=15, le=480)


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: UUID
    name: str
    slug: str
    address: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    time_slot_duration_minutes: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
