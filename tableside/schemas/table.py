"""Restaurant table schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from tableside.models.table import TableStatus


class TableCreate(BaseModel):
    """Create table request"""
    table_number: str = Field(..., min_length=1, max_length=20)
    capacity: int = Field(2, ge=1, le=20)
    location_notes: Optional[str] = None


class TableUpdate(BaseModel):
    """Update table request"""
    table_number: Optional[str] = Field(None, min_length=1, max_length=20)
    capacity: Optional[int] = Field(None, ge=1, le=20)
    status: Optional[TableStatus] = None
    location_notes: Optional[str] = None

    class Config:
        use_enum_values = True


class TableStatusUpdate(BaseModel):
    """Change a table's floor status"""
    status: TableStatus

    class Config:
        use_enum_values = True


class TableBulkCreate(BaseModel):
    """Generate tables numbered 1..count"""
    count: int = Field(..., ge=1, le=50)
    capacity: int = Field(4, ge=1, le=20)


class TableResponse(BaseModel):
    """Restaurant table response"""
    id: UUID
    restaurant_id: UUID
    table_number: str
    capacity: int
    status: TableStatus
    location_notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TableListResponse(BaseModel):
    """Tables with a per-status tally"""
    items: List[TableResponse]
    total: int
    status_counts: dict
