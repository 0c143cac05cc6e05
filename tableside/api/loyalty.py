"""Loyalty program API endpoints"""

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.database import get_db
from tableside.models.loyalty import LoyaltySettings, DiscountCode, LoyaltyUser
from tableside.models.user import User, UserRole
from tableside.schemas.loyalty import (
    LoyaltySettingsUpdate,
    LoyaltySettingsResponse,
    DiscountCodeCreate,
    DiscountCodeUpdate,
    DiscountCodeResponse,
    DiscountCodeListResponse,
    LoyaltyStatsResponse,
)
from tableside.api.auth import get_current_user, require_role, verify_restaurant_access

router = APIRouter()
logger = structlog.get_logger()

# Members who ordered within this window count as active
ACTIVE_MEMBER_WINDOW = timedelta(days=30)


async def _get_or_create_settings(db: AsyncSession, restaurant_id: UUID) -> LoyaltySettings:
    result = await db.execute(
        select(LoyaltySettings).where(LoyaltySettings.restaurant_id == restaurant_id)
    )
    loyalty_settings = result.scalar_one_or_none()
    
    if not loyalty_settings:
        loyalty_settings = LoyaltySettings(restaurant_id=restaurant_id)
        db.add(loyalty_settings)
        await db.commit()
        await db.refresh(loyalty_settings)
    
    return loyalty_settings


async def _get_code(db: AsyncSession, restaurant_id: UUID, code_id: UUID) -> DiscountCode:
    result = await db.execute(
        select(DiscountCode).where(
            DiscountCode.id == code_id,
            DiscountCode.restaurant_id == restaurant_id,
        )
    )
    code = result.scalar_one_or_none()
    
    if not code:
        raise HTTPException(status_code=404, detail="Discount code not found")
    
    return code


@router.get("/settings", response_model=LoyaltySettingsResponse)
async def get_loyalty_settings(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get loyalty program rules"""
    await verify_restaurant_access(restaurant_id, current_user)
    return await _get_or_create_settings(db, restaurant_id)


@router.put("/settings", response_model=LoyaltySettingsResponse)
async def update_loyalty_settings(
    restaurant_id: UUID,
    settings_data: LoyaltySettingsUpdate,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Update loyalty program rules"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    loyalty_settings = await _get_or_create_settings(db, restaurant_id)
    
    for field, value in settings_data.model_dump(exclude_unset=True).items():
        setattr(loyalty_settings, field, value)
    
    await db.commit()
    await db.refresh(loyalty_settings)
    
    logger.info("Loyalty settings updated", restaurant_id=str(restaurant_id))
    return loyalty_settings


@router.get("/discount_codes", response_model=DiscountCodeListResponse)
async def list_discount_codes(
    restaurant_id: UUID,
    active_only: bool = False,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List discount codes"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    query = select(DiscountCode).where(DiscountCode.restaurant_id == restaurant_id)
    if active_only:
        query = query.where(DiscountCode.is_active == True)
    
    result = await db.execute(query.order_by(DiscountCode.created_at.desc()))
    codes = result.scalars().all()
    
    return DiscountCodeListResponse(items=codes, total=len(codes))


@router.post("/discount_codes", response_model=DiscountCodeResponse, status_code=201)
async def create_discount_code(
    restaurant_id: UUID,
    code_data: DiscountCodeCreate,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Create a discount code"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    code_value = code_data.code.upper()
    existing = await db.execute(
        select(DiscountCode.id).where(
            DiscountCode.restaurant_id == restaurant_id,
            DiscountCode.code == code_value,
        )
    )
    if existing.first():
        raise HTTPException(status_code=409, detail=f"Discount code {code_value} already exists")
    
    code = DiscountCode(
        restaurant_id=restaurant_id,
        **{**code_data.model_dump(), "code": code_value},
    )
    db.add(code)
    await db.commit()
    await db.refresh(code)
    
    logger.info("Discount code created", restaurant_id=str(restaurant_id), code=code_value)
    return code


@router.put("/discount_codes/{code_id}", response_model=DiscountCodeResponse)
async def update_discount_code(
    restaurant_id: UUID,
    code_id: UUID,
    code_data: DiscountCodeUpdate,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Replace a discount code's terms"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    code = await _get_code(db, restaurant_id, code_id)
    
    for field, value in code_data.model_dump().items():
        setattr(code, field, value)
    
    await db.commit()
    await db.refresh(code)
    
    return code


@router.delete("/discount_codes/{code_id}", status_code=204)
async def delete_discount_code(
    restaurant_id: UUID,
    code_id: UUID,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a discount code"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    code = await _get_code(db, restaurant_id, code_id)
    await db.delete(code)
    await db.commit()


@router.get("/stats", response_model=LoyaltyStatsResponse)
async def get_loyalty_stats(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Membership overview"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    active_since = datetime.utcnow() - ACTIVE_MEMBER_WINDOW
    
    result = await db.execute(
        select(
            func.count(LoyaltyUser.id),
            func.count(LoyaltyUser.id).filter(LoyaltyUser.last_order_date > active_since),
            func.coalesce(func.sum(LoyaltyUser.total_spent), 0),
            func.coalesce(func.sum(LoyaltyUser.order_count), 0),
            func.count(LoyaltyUser.id).filter(LoyaltyUser.discount_eligible == True),
        ).where(LoyaltyUser.restaurant_id == restaurant_id)
    )
    total_members, active_members, total_spent, total_orders, eligible = result.one()
    
    total_spent = Decimal(str(total_spent))
    
    return LoyaltyStatsResponse(
        total_members=total_members,
        active_members=active_members,
        total_spent=total_spent,
        avg_order_value=(total_spent / max(int(total_orders), 1)).quantize(Decimal("0.01")),
        discount_eligible_count=eligible,
    )
