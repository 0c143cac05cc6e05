"""Pydantic schemas for request/response validation"""

from tableside.schemas.auth import Token, UserResponse
from tableside.schemas.restaurant import (
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantResponse,
)
from tableside.schemas.table import (
    TableCreate,
    TableUpdate,
    TableStatusUpdate,
    TableBulkCreate,
    TableResponse,
    TableListResponse,
)
from tableside.schemas.booking import (
    BookingCreate,
    WalkInCreate,
    BookingStatusUpdate,
    TableAssignment,
    CustomerResponse,
    BookingResponse,
    BookingDetailResponse,
    BookingListResponse,
    WalkInResponse,
    TimeSlotAvailability,
    TimeSlotListResponse,
)
from tableside.schemas.qr_code import (
    QRCodeRequest,
    TableQRCode,
    QRCodeBatchResponse,
    OrderSessionResponse,
)
from tableside.schemas.loyalty import (
    LoyaltySettingsUpdate,
    LoyaltySettingsResponse,
    DiscountCodeCreate,
    DiscountCodeUpdate,
    DiscountCodeResponse,
    DiscountCodeListResponse,
    LoyaltyStatsResponse,
)
from tableside.schemas.payment import StripeConfigUpdate, StripeConfigResponse
from tableside.schemas.waiting_list import (
    WaitingListCreate,
    WaitingListEntryResponse,
    WaitingListResponse,
)

__all__ = [
    "Token",
    "UserResponse",
    "RestaurantCreate",
    "RestaurantUpdate",
    "RestaurantResponse",
    "TableCreate",
    "TableUpdate",
    "TableStatusUpdate",
    "TableBulkCreate",
    "TableResponse",
    "TableListResponse",
    "BookingCreate",
    "WalkInCreate",
    "BookingStatusUpdate",
    "TableAssignment",
    "CustomerResponse",
    "BookingResponse",
    "BookingDetailResponse",
    "BookingListResponse",
    "WalkInResponse",
    "TimeSlotAvailability",
    "TimeSlotListResponse",
    "QRCodeRequest",
    "TableQRCode",
    "QRCodeBatchResponse",
    "OrderSessionResponse",
    "LoyaltySettingsUpdate",
    "LoyaltySettingsResponse",
    "DiscountCodeCreate",
    "DiscountCodeUpdate",
    "DiscountCodeResponse",
    "DiscountCodeListResponse",
    "LoyaltyStatsResponse",
    "StripeConfigUpdate",
    "StripeConfigResponse",
    "WaitingListCreate",
    "WaitingListEntryResponse",
    "WaitingListResponse",
]
