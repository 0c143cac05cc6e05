"""Table manager API endpoints"""

from collections import Counter
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.database import get_db
from tableside.models.booking import Booking
from tableside.models.order_session import OrderSession
from tableside.models.table import RestaurantTable, TableStatus, table_sort_key
from tableside.models.user import User, UserRole
from tableside.schemas.table import (
    TableCreate,
    TableUpdate,
    TableStatusUpdate,
    TableBulkCreate,
    TableResponse,
    TableListResponse,
)
from tableside.api.auth import get_current_user, require_role, verify_restaurant_access
from tableside.services.booking import get_table, set_table_status

router = APIRouter()
logger = structlog.get_logger()


@router.get("", response_model=TableListResponse)
async def list_tables(
    restaurant_id: UUID,
    status: Optional[TableStatus] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List a restaurant's tables"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    result = await db.execute(
        select(RestaurantTable).where(RestaurantTable.restaurant_id == restaurant_id)
    )
    tables = sorted(result.scalars().all(), key=table_sort_key)
    
    status_counts = {s.value: 0 for s in TableStatus}
    status_counts.update(Counter(t.status for t in tables))
    
    if status:
        tables = [t for t in tables if t.status == status.value]
    
    return TableListResponse(items=tables, total=len(tables), status_counts=status_counts)


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(
    restaurant_id: UUID,
    table_data: TableCreate,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Add a table"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    existing = await db.execute(
        select(RestaurantTable.id).where(
            RestaurantTable.restaurant_id == restaurant_id,
            RestaurantTable.table_number == table_data.table_number,
        )
    )
    if existing.first():
        raise HTTPException(
            status_code=409,
            detail=f"Table {table_data.table_number} already exists",
        )
    
    table = RestaurantTable(
        restaurant_id=restaurant_id,
        status=TableStatus.AVAILABLE.value,
        **table_data.model_dump(),
    )
    db.add(table)
    await db.commit()
    await db.refresh(table)
    
    logger.info("Table created", restaurant_id=str(restaurant_id), table_number=table.table_number)
    return table


@router.post("/bulk", response_model=TableListResponse, status_code=status.HTTP_201_CREATED)
async def bulk_create_tables(
    restaurant_id: UUID,
    bulk_data: TableBulkCreate,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Generate tables numbered 1..count with a shared capacity"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    table_numbers = [str(i) for i in range(1, bulk_data.count + 1)]
    
    existing = await db.execute(
        select(RestaurantTable.table_number).where(
            RestaurantTable.restaurant_id == restaurant_id,
            RestaurantTable.table_number.in_(table_numbers),
        )
    )
    existing_numbers = [row[0] for row in existing]
    
    if existing_numbers:
        raise HTTPException(
            status_code=409,
            detail=f"Table numbers already exist: {', '.join(sorted(existing_numbers, key=int))}",
        )
    
    tables = []
    for number in table_numbers:
        table = RestaurantTable(
            restaurant_id=restaurant_id,
            table_number=number,
            capacity=bulk_data.capacity,
            status=TableStatus.AVAILABLE.value,
            location_notes=None,
        )
        db.add(table)
        tables.append(table)
    
    await db.commit()
    
    logger.info("Tables generated", restaurant_id=str(restaurant_id), count=len(tables))
    return TableListResponse(
        items=tables,
        total=len(tables),
        status_counts={TableStatus.AVAILABLE.value: len(tables)},
    )


@router.get("/{table_id}", response_model=TableResponse)
async def get_table_details(
    restaurant_id: UUID,
    table_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get table details"""
    await verify_restaurant_access(restaurant_id, current_user)
    return await get_table(db, restaurant_id, table_id)


@router.put("/{table_id}", response_model=TableResponse)
async def update_table(
    restaurant_id: UUID,
    table_id: UUID,
    table_data: TableUpdate,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Update a table"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    table = await get_table(db, restaurant_id, table_id)
    
    changes = table_data.model_dump(exclude_unset=True)
    new_status = changes.pop("status", None)
    
    for field, value in changes.items():
        setattr(table, field, value)
    
    try:
        if new_status:
            await set_table_status(db, table, new_status)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=409,
            detail=f"Table {changes.get('table_number')} already exists",
        )
    
    await db.refresh(table)
    return table


@router.put("/{table_id}/status", response_model=TableResponse)
async def update_table_status(
    restaurant_id: UUID,
    table_id: UUID,
    status_data: TableStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Change a table's floor status"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    table = await get_table(db, restaurant_id, table_id)
    await set_table_status(db, table, status_data.status)
    await db.commit()
    await db.refresh(table)
    
    return table


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_table(
    restaurant_id: UUID,
    table_id: UUID,
    current_user: User = Depends(require_role(UserRole.MANAGER)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a table"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    table = await get_table(db, restaurant_id, table_id)
    
    booking_ref = await db.execute(select(Booking.id).where(Booking.table_id == table.id).limit(1))
    session_ref = await db.execute(select(OrderSession.id).where(OrderSession.table_id == table.id).limit(1))
    if booking_ref.first() or session_ref.first():
        raise HTTPException(
            status_code=409,
            detail="Table is referenced by bookings or ordering sessions",
        )
    
    await db.delete(table)
    await db.commit()
    
    logger.info("Table deleted", restaurant_id=str(restaurant_id), table_id=str(table_id))
