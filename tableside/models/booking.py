"""Booking model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, Date, Time, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from tableside.database import Base


class BookingStatus(str, enum.Enum):
    """Lifecycle of a booking"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class AssignmentMethod(str, enum.Enum):
    """How the booking got its table"""
    AUTO = "auto"
    MANUAL = "manual"
    WAITLIST = "waitlist"


class Booking(Base):
    """Reservations and walk-ins"""
    __tablename__ = "bookings"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    table_id = Column(UUID(as_uuid=True), ForeignKey("restaurant_tables.id"))
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False)
    
    # Booking details
    booking_date = Column(Date, nullable=False)
    booking_time = Column(Time, nullable=False)
    party_size = Column(Integer, nullable=False)
    notes = Column(Text)
    
    # Status
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    is_walk_in = Column(Boolean, default=False)
    assignment_method = Column(String(20), default=AssignmentMethod.MANUAL.value)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    customer = relationship("Customer", back_populates="bookings")
    table = relationship("RestaurantTable", back_populates="bookings")
