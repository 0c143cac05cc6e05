"""
Domain errors raised by the workflow services and their API handlers.

Routes raise HTTPException directly; the services below the routes raise
these instead so they stay usable outside a request.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger()


class TablesideError(Exception):
    """Base class for domain errors"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "BAD_REQUEST"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(TablesideError):
    """Referenced row does not exist"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ConflictError(TablesideError):
    """Row would collide with an existing one"""

    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class BookingError(TablesideError):
    """Booking or walk-in could not be completed"""

    error_code = "BOOKING_FAILED"


async def handle_tableside_error(request: Request, exc: TablesideError) -> JSONResponse:
    """Convert a domain error to a JSON error response"""
    logger.warning(
        "Request failed",
        path=request.url.path,
        error_code=exc.error_code,
        detail=exc.detail,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
    )


def register_exception_handlers(app) -> None:
    """Register domain error handlers with the FastAPI app"""
    app.add_exception_handler(TablesideError, handle_tableside_error)
