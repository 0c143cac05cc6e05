"""QR code schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel

from tableside.services.qr import QRSize


class QRCodeRequest(BaseModel):
    """Tables to issue ordering QR codes for; empty means every table"""
    table_ids: List[UUID] = []
    size: Optional[QRSize] = None


class TableQRCode(BaseModel):
    """Ordering QR code for one table"""
    table_id: UUID
    table_number: str
    session_id: UUID
    url: str
    size_px: int
    image_data_url: str


class QRCodeBatchResponse(BaseModel):
    """Generated QR codes"""
    size: QRSize
    codes: List[TableQRCode]


class OrderSessionResponse(BaseModel):
    """Ordering session behind a QR code"""
    id: UUID
    restaurant_id: UUID
    table_id: UUID
    booking_id: Optional[UUID]
    session_token: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
