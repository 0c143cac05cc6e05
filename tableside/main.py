"""
Tableside - FastAPI Backend Application
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
import structlog

from tableside import __version__
from tableside.config import settings
from tableside.exceptions import register_exception_handlers
from tableside.api import (
    auth,
    restaurants,
    tables,
    bookings,
    waiting_list,
    customers,
    qr_codes,
    loyalty,
    payments,
)

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Tableside API", version=__version__)
    yield
    logger.info("Shutting down Tableside API")


# Create FastAPI application
app = FastAPI(
    title="Tableside",
    description="Front-of-house management for restaurants: tables, bookings, QR ordering",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": __version__}


@app.get("/health/ready")
async def ready():
    """Readiness check with database verification"""
    from tableside.database import SessionLocal
    
    checks = {}
    
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"failed: {str(e)}"
    
    all_ok = all(v == "ok" for v in checks.values())
    
    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(restaurants.router, prefix="/restaurants", tags=["Restaurants"])
app.include_router(tables.router, prefix="/restaurants/{restaurant_id}/tables", tags=["Tables"])
app.include_router(bookings.router, prefix="/restaurants/{restaurant_id}/bookings", tags=["Bookings"])
app.include_router(waiting_list.router, prefix="/restaurants/{restaurant_id}/waiting_list", tags=["Waiting List"])
app.include_router(customers.router, prefix="/restaurants/{restaurant_id}/customers", tags=["Customers"])
app.include_router(qr_codes.router, prefix="/restaurants/{restaurant_id}/qr_codes", tags=["QR Codes"])
app.include_router(loyalty.router, prefix="/restaurants/{restaurant_id}/loyalty", tags=["Loyalty"])
app.include_router(payments.router, prefix="/restaurants/{restaurant_id}/payments", tags=["Payments"])


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "tableside.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
