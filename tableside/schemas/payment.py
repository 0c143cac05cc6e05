"""Stripe configuration schemas"""

from typing import Optional
from pydantic import BaseModel, field_validator


class StripeConfigUpdate(BaseModel):
    """Set or clear Stripe API keys; an empty string clears a key"""
    publishable_key: Optional[str] = None
    secret_key: Optional[str] = None

    @field_validator("publishable_key")
    @classmethod
    def check_publishable_key(cls, value):
        value = value.strip() if value is not None else None
        if value and not value.startswith(("pk_test_", "pk_live_")):
            raise ValueError("Publishable key must start with pk_test_ or pk_live_")
        return value

    @field_validator("secret_key")
    @classmethod
    def check_secret_key(cls, value):
        value = value.strip() if value is not None else None
        if value and not value.startswith(("sk_test_", "sk_live_", "rk_test_", "rk_live_")):
            raise ValueError("Secret key must start with sk_test_ or sk_live_")
        return value


class StripeConfigResponse(BaseModel):
    """Stripe configuration with the secret key masked"""
    publishable_key: Optional[str]
    secret_key_masked: Optional[str]
    publishable_key_configured: bool
    secret_key_configured: bool
    live_mode: bool
