"""Waiting list model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, Time, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from tableside.database import Base


class WaitingListStatus(str, enum.Enum):
    """Lifecycle of a waiting list entry"""
    WAITING = "waiting"
    NOTIFIED = "notified"
    CONFIRMED = "confirmed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class WaitingListEntry(Base):
    """A party waiting for a table in a fully booked time slot"""
    __tablename__ = "waiting_list"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False)
    booking_id = Column(UUID(as_uuid=True), ForeignKey("bookings.id"))
    
    requested_date = Column(Date, nullable=False)
    requested_time = Column(Time, nullable=False)
    party_size = Column(Integer, nullable=False)
    notes = Column(Text)
    
    status = Column(String(20), nullable=False, default=WaitingListStatus.WAITING.value)
    # Position within the requested slot, lowest first
    priority_order = Column(Integer, nullable=False, default=1)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    customer = relationship("Customer", back_populates="waiting_list_entries")
