"""QR code generation API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.config import settings
from tableside.database import get_db
from tableside.models.order_session import OrderSession
from tableside.models.table import RestaurantTable, table_sort_key
from tableside.models.user import User
from tableside.schemas.qr_code import (
    QRCodeRequest,
    TableQRCode,
    QRCodeBatchResponse,
    OrderSessionResponse,
)
from tableside.api.auth import get_current_user, verify_restaurant_access
from tableside.services.booking import get_table
from tableside.services.qr import QRSize, SIZE_PIXELS, build_order_url, render_qr_png, to_data_url
from tableside.services.sessions import open_order_session

router = APIRouter()
logger = structlog.get_logger()


@router.post("", response_model=QRCodeBatchResponse)
async def generate_qr_codes(
    restaurant_id: UUID,
    request: QRCodeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Issue a fresh ordering session and QR code for each selected table"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    size = QRSize(request.size or settings.qr_default_size)
    
    query = select(RestaurantTable).where(RestaurantTable.restaurant_id == restaurant_id)
    if request.table_ids:
        query = query.where(RestaurantTable.id.in_(request.table_ids))
    
    result = await db.execute(query)
    tables = sorted(result.scalars().all(), key=table_sort_key)
    
    if request.table_ids:
        missing = set(request.table_ids) - {t.id for t in tables}
        if missing:
            raise HTTPException(
                status_code=404,
                detail=f"Tables not found: {', '.join(sorted(str(m) for m in missing))}",
            )
    
    codes = []
    for table in tables:
        session = await open_order_session(db, restaurant_id, table.id)
        url = build_order_url(session.session_token)
        codes.append(TableQRCode(
            table_id=table.id,
            table_number=table.table_number,
            session_id=session.id,
            url=url,
            size_px=SIZE_PIXELS[size],
            image_data_url=to_data_url(render_qr_png(url, size)),
        ))
    
    await db.commit()
    
    logger.info("QR codes generated", restaurant_id=str(restaurant_id), count=len(codes), size=size.value)
    return QRCodeBatchResponse(size=size, codes=codes)


@router.get("/sessions", response_model=List[OrderSessionResponse])
async def list_active_sessions(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Active ordering sessions, one per table at most"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    result = await db.execute(
        select(OrderSession)
        .where(
            OrderSession.restaurant_id == restaurant_id,
            OrderSession.is_active == True,
        )
        .order_by(OrderSession.created_at.desc())
    )
    return result.scalars().all()


@router.delete("/sessions/{session_id}", status_code=204)
async def deactivate_session(
    restaurant_id: UUID,
    session_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Retire a QR code so its URL stops working"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    result = await db.execute(
        select(OrderSession).where(
            OrderSession.id == session_id,
            OrderSession.restaurant_id == restaurant_id,
        )
    )
    session = result.scalar_one_or_none()
    
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    
    session.is_active = False
    await db.commit()


@router.get("/tables/{table_id}/qr.png")
async def download_table_qr(
    restaurant_id: UUID,
    table_id: UUID,
    size: QRSize = QRSize.PRINT,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Download the QR code of a table's active session as a PNG file"""
    await verify_restaurant_access(restaurant_id, current_user)
    
    table = await get_table(db, restaurant_id, table_id)
    
    result = await db.execute(
        select(OrderSession)
        .where(OrderSession.table_id == table.id, OrderSession.is_active == True)
        .order_by(OrderSession.created_at.desc())
        .limit(1)
    )
    session = result.scalar_one_or_none()
    
    if not session:
        raise HTTPException(status_code=404, detail="Table has no active QR code")
    
    png = render_qr_png(build_order_url(session.session_token), size)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="table-{table.table_number}-qr.png"'},
    )
