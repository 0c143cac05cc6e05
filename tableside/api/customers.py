"""Customer lookup API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tableside.database import get_db
from tableside.models.customer import Customer
from tableside.models.user import User
from tableside.schemas.booking import CustomerResponse
from tableside.api.auth import get_current_user, verify_restaurant_access

router = APIRouter()


@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    restaurant_id: UUID,
    phone: Optional[str] = None,
    include_walk_ins: bool = False,
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Customers of this restaurant"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    query = select(Customer).where(Customer.restaurant_id == restaurant_id)
    
    if phone:
        query = query.where(Customer.phone == phone)
    
    if not include_walk_ins:
        query = query.where(Customer.phone.not_like("walkin-%"))
    
    result = await db.execute(query.order_by(Customer.name).offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/lookup", response_model=CustomerResponse)
async def lookup_customer(
    restaurant_id: UUID,
    phone: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Find a customer by phone number before booking"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    result = await db.execute(
        select(Customer).where(
            Customer.restaurant_id == restaurant_id,
            Customer.phone == phone,
        )
    )
    customer = result.scalar_one_or_none()
    
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    
    return customer
