"""Ordering sessions behind table QR codes"""

import uuid
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tableside.models.order_session import OrderSession

logger = structlog.get_logger()


def new_session_token() -> str:
    """Random token embedded in a table's ordering URL"""
    return str(uuid.uuid4())


async def deactivate_table_sessions(db: AsyncSession, table_id: UUID) -> None:
    """Close every active ordering session of a table"""
    await db.execute(
        update(OrderSession)
        .where(OrderSession.table_id == table_id, OrderSession.is_active == True)
        .values(is_active=False)
        .execution_options(synchronize_session="fetch")
    )


async def open_order_session(
    db: AsyncSession,
    restaurant_id: UUID,
    table_id: UUID,
    booking_id: Optional[UUID] = None,
) -> OrderSession:
    """Start a fresh ordering session for a table, replacing the active one.

    Changes are flushed, not committed.
    """
    await deactivate_table_sessions(db, table_id)

    session = OrderSession(
        restaurant_id=restaurant_id,
        table_id=table_id,
        booking_id=booking_id,
        session_token=new_session_token(),
        is_active=True,
    )
    db.add(session)
    await db.flush()

    logger.info("Order session opened", table_id=str(table_id), session_id=str(session.id))
    return session
