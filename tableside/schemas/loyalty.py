"""Loyalty program schemas"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, Field, model_validator


class LoyaltySettingsUpdate(BaseModel):
    """Update loyalty program rules"""
    discount_threshold: Optional[Decimal] = Field(None, ge=0)
    discount_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    points_per_dollar: Optional[int] = Field(None, ge=0)
    welcome_bonus: Optional[int] = Field(None, ge=0)
    birthday_bonus: Optional[int] = Field(None, ge=0)
    referral_bonus: Optional[int] = Field(None, ge=0)


class LoyaltySettingsResponse(BaseModel):
    """Loyalty program rules"""
    restaurant_id: UUID
    discount_threshold: Decimal
    discount_percentage: Decimal
    points_per_dollar: int
    welcome_bonus: int
    birthday_bonus: int
    referral_bonus: int
    updated_at: datetime

    class Config:
        from_attributes = True


class DiscountCodeBase(BaseModel):
    """Fields shared by discount code create and update"""
    description: Optional[str] = None
    discount_type: Literal["percentage", "fixed"] = "percentage"
    discount_value: Decimal = Field(..., gt=0)
    min_order_amount: Decimal = Field(Decimal("0"), ge=0)
    max_uses: Optional[int] = Field(None, ge=1)
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None

    @model_validator(mode="after")
    def check_bounds(self):
        if self.discount_type == "percentage" and self.discount_value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        if self.valid_from and self.valid_until and self.valid_until < self.valid_from:
            raise ValueError("valid_until must not be before valid_from")
        return self


class DiscountCodeCreate(DiscountCodeBase):
    """Create discount code request"""
    code: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_-]+$")


class DiscountCodeUpdate(DiscountCodeBase):
    """Replace a discount code's terms"""
    is_active: bool = True


class DiscountCodeResponse(BaseModel):
    """Discount code response"""
    id: UUID
    restaurant_id: UUID
    code: str
    description: Optional[str]
    discount_type: str
    discount_value: Decimal
    min_order_amount: Decimal
    max_uses: Optional[int]
    current_uses: int
    valid_from: Optional[datetime]
    valid_until: Optional[datetime]
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class LoyaltyStatsResponse(BaseModel):
    """Loyalty membership overview"""
    total_members: int
    active_members: int
    total_spent: Decimal
    avg_order_value: Decimal
    discount_eligible_count: int


class DiscountCodeListResponse(BaseModel):
    """Discount codes for a restaurant"""
    items: List[DiscountCodeResponse]
    total: int
