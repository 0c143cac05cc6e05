"""Restaurant model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from tableside.database import Base


class Restaurant(Base):
    """A restaurant and its payment configuration"""
    __tablename__ = "restaurants"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False)
    address = Column(Text)
    phone = Column(String(30))
    email = Column(String(255))
    time_slot_duration_minutes = Column(Integer, default=120)
    
    # Stripe
    stripe_publishable_key = Column(String(255))
    stripe_secret_key = Column(String(255))
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    tables = relationship("RestaurantTable", back_populates="restaurant")
    users = relationship("User", back_populates="restaurant")
    loyalty_settings = relationship("LoyaltySettings", back_populates="restaurant", uselist=False)
