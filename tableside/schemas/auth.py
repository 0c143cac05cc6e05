"""Authentication schemas"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from tableside.models.user import UserRole


class Token(BaseModel):
    """JWT access token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserResponse(BaseModel):
    """Dashboard user"""
    id: UUID
    restaurant_id: Optional[UUID]
    email: str
    full_name: Optional[str]
    role: UserRole
    is_active: bool

    class Config:
        from_attributes = True
