"""Database models"""

from tableside.models.restaurant import Restaurant
from tableside.models.table import RestaurantTable, TableStatus
from tableside.models.customer import Customer
from tableside.models.booking import Booking, BookingStatus, AssignmentMethod
from tableside.models.order_session import OrderSession
from tableside.models.loyalty import LoyaltySettings, DiscountCode, LoyaltyUser
from tableside.models.waiting_list import WaitingListEntry, WaitingListStatus
from tableside.models.user import User, UserRole

__all__ = [
    "Restaurant",
    "RestaurantTable",
    "TableStatus",
    "Customer",
    "Booking",
    "BookingStatus",
    "AssignmentMethod",
    "OrderSession",
    "LoyaltySettings",
    "DiscountCode",
    "LoyaltyUser",
    "WaitingListEntry",
    "WaitingListStatus",
    "User",
    "UserRole",
]
