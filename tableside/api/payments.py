"""Stripe API key configuration endpoints"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.database import get_db
from tableside.models.restaurant import Restaurant
from tableside.models.user import User, UserRole
from tableside.schemas.payment import StripeConfigUpdate, StripeConfigResponse
from tableside.api.auth import require_role, verify_restaurant_access

router = APIRouter()
logger = structlog.get_logger()


def mask_secret_key(key: Optional[str]) -> Optional[str]:
    """Keep the key prefix and last four characters, e.g. sk_live_••••1234"""
    if not key:
        return None
    prefix, _, rest = key.rpartition("_")
    if not prefix or len(rest) <= 4:
        return "••••"
    return f"{prefix}_••••{rest[-4:]}"


def _to_response(restaurant: Restaurant) -> StripeConfigResponse:
    publishable = restaurant.stripe_publishable_key
    secret = restaurant.stripe_secret_key
    return StripeConfigResponse(
        publishable_key=publishable,
        secret_key_masked=mask_secret_key(secret),
        publishable_key_configured=bool(publishable),
        secret_key_configured=bool(secret),
        live_mode=bool(publishable and publishable.startswith("pk_live_")),
    )


async def _get_restaurant(db: AsyncSession, restaurant_id: UUID) -> Restaurant:
    restaurant = await db.get(Restaurant, restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return restaurant


@router.get("/stripe", response_model=StripeConfigResponse)
async def get_stripe_config(
    restaurant_id: UUID,
    current_user: User = Depends(require_role(UserRole.OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Get Stripe configuration (owner only)"""
    await verify_restaurant_access(restaurant_id, current_user)
    return _to_response(await _get_restaurant(db, restaurant_id))


@router.put("/stripe", response_model=StripeConfigResponse)
async def update_stripe_config(
    restaurant_id: UUID,
    config: StripeConfigUpdate,
    current_user: User = Depends(require_role(UserRole.OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Save Stripe API keys (owner only); an empty string clears a key"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    restaurant = await _get_restaurant(db, restaurant_id)
    changes = config.model_dump(exclude_unset=True)
    
    if "publishable_key" in changes:
        restaurant.stripe_publishable_key = changes["publishable_key"] or None
    if "secret_key" in changes:
        restaurant.stripe_secret_key = changes["secret_key"] or None
    
    if restaurant.stripe_publishable_key and restaurant.stripe_secret_key:
        publishable_live = restaurant.stripe_publishable_key.startswith("pk_live_")
        secret_live = "_live_" in restaurant.stripe_secret_key
        if publishable_live != secret_live:
            await db.rollback()
            raise HTTPException(
                status_code=400,
                detail="Publishable and secret keys must both be test keys or both be live keys",
            )
    
    await db.commit()
    
    logger.info(
        "Stripe configuration updated",
        restaurant_id=str(restaurant_id),
        fields=sorted(changes),
    )
    return _to_response(restaurant)
