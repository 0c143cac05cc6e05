"""Loyalty program models"""

import uuid
from datetime import datetime
from sqlalchemy import (
    Column, String, Integer, Boolean, Numeric, DateTime, ForeignKey, Text, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from tableside.database import Base


class LoyaltySettings(Base):
    """Per-restaurant loyalty program rules"""
    __tablename__ = "loyalty_settings"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), unique=True, nullable=False)
    
    # Spend threshold before the member discount unlocks
    discount_threshold = Column(Numeric(10, 2), default=100)
    discount_percentage = Column(Numeric(5, 2), default=10)
    points_per_dollar = Column(Integer, default=1)
    welcome_bonus = Column(Integer, default=0)
    birthday_bonus = Column(Integer, default=0)
    referral_bonus = Column(Integer, default=0)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="loyalty_settings")


class DiscountCode(Base):
    """Promotional discount codes"""
    __tablename__ = "discount_codes"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "code", name="uq_discount_code_per_restaurant"),
    )
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    code = Column(String(50), nullable=False)
    description = Column(Text)
    discount_type = Column(String(20), nullable=False, default="percentage")  # percentage, fixed
    discount_value = Column(Numeric(10, 2), nullable=False)
    min_order_amount = Column(Numeric(10, 2), default=0)
    max_uses = Column(Integer)
    current_uses = Column(Integer, default=0)
    valid_from = Column(DateTime)
    valid_until = Column(DateTime)
    is_active = Column(Boolean, default=True)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class LoyaltyUser(Base):
    """Loyalty members enrolled through table-side ordering"""
    __tablename__ = "loyalty_users"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    name = Column(String(255))
    email = Column(String(255))
    phone = Column(String(50))
    total_spent = Column(Numeric(10, 2), default=0)
    order_count = Column(Integer, default=0)
    discount_eligible = Column(Boolean, default=False)
    last_order_date = Column(DateTime)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
