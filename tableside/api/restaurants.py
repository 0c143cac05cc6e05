"""Restaurant setup API endpoints"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.database import get_db
from tableside.models.restaurant import Restaurant
from tableside.models.loyalty import LoyaltySettings
from tableside.models.user import User, UserRole
from tableside.schemas.restaurant import RestaurantCreate, RestaurantUpdate, RestaurantResponse
from tableside.api.auth import get_current_user, require_role, verify_restaurant_access

router = APIRouter()
logger = structlog.get_logger()


@router.post("", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a restaurant; the creating user becomes its owner"""
    if current_user.restaurant_id is not None:
        raise HTTPException(status_code=409, detail="User already belongs to a restaurant")
    
    result = await db.execute(select(Restaurant).where(Restaurant.slug == restaurant_data.slug))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Slug already in use")
    
    restaurant = Restaurant(**restaurant_data.model_dump())
    db.add(restaurant)
    await db.flush()
    
    # Default loyalty program
    db.add(LoyaltySettings(restaurant_id=restaurant.id))
    
    current_user.restaurant_id = restaurant.id
    current_user.role = UserRole.OWNER
    await db.commit()
    await db.refresh(restaurant)
    
    logger.info("Restaurant created", restaurant_id=str(restaurant.id), slug=restaurant.slug)
    return restaurant


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get restaurant details"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    restaurant = await db.get(Restaurant, restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    
    return restaurant


@router.put("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    restaurant_id: UUID,
    restaurant_data: RestaurantUpdate,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Update restaurant details"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    restaurant = await db.get(Restaurant, restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    
    for field, value in restaurant_data.model_dump(exclude_unset=True).items():
        setattr(restaurant, field, value)
    
    await db.commit()
    await db.refresh(restaurant)
    
    return restaurant
