"""FastAPI application setup and configuration."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from seating_rules.config import settings
from seating_rules.api import api_router
from seating_rules.database import init_database, close_database, ping_database
from seating_rules.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    request_validation_exception_handler
)
from seating_rules.utils.logging_config import setup_logging

# Set up logging
setup_logging(
    log_level="DEBUG" if settings.debug else settings.log_level,
    enable_json_logging=settings.enable_json_logging or settings.environment == "production"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting Seating Rules service")
    await init_database()
    yield
    # Shutdown
    logger.info("Shutting down Seating Rules service")
    await close_database()

app = FastAPI(
    title="Seating Rules API",
    description="""
    ## Seating Rules

    Validates seats picked for a booking against the seat inventory before
    the booking is confirmed.

    ### Rules

    * **Seat counts**: a row cannot be asked for more seats than it has available
    * **Full group events**: some seating plans only sell complete rows
    * **Fragmentation**: a booking may not leave a single empty seat in a row,
      unless the request is small compared to its price category

    ### Error Handling

    Rejected requests return structured error responses:

    ```json
    {
      "error": {
        "error_code": "SEAT_FRAGMENTATION",
        "message": "seating plan fragmentation detected",
        "details": {"conflicting_seat_id": "seat-a4"},
        "suggestions": ["Choose seats that do not leave a single empty seat"]
      },
      "error_id": "...",
      "timestamp": "..."
    }
    ```
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "seat-rules",
            "description": "Seat rule validation for booking requests"
        },
        {
            "name": "health",
            "description": "System health and monitoring endpoints"
        }
    ],
    lifespan=lifespan,
)

# 1. Logging middleware (first to capture all requests)
if settings.enable_request_logging:
    app.add_middleware(LoggingMiddleware)

# 2. Error handling middleware (catch all errors)
app.add_middleware(
    ErrorHandlerMiddleware,
    debug=settings.debug
)

# Malformed bodies never reach the middleware
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# Include API routes
app.include_router(api_router)


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for API information.
    """
    return {
        "message": "Seating Rules API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "status": "operational"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Basic health check endpoint.

    Use this endpoint for simple uptime monitoring.
    """
    return {"status": "healthy", "service": "seating-rules"}


@app.get("/health/detailed", tags=["health"])
async def detailed_health_check():
    """
    Health check including a round trip to the seat inventory database.

    An unreachable database is reported in the body, not raised.
    """
    started = time.perf_counter()
    database = {"healthy": True}
    try:
        await ping_database()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database = {"healthy": False, "error": str(e), "error_type": type(e).__name__}
    database["response_time"] = time.perf_counter() - started

    return {
        "status": "healthy" if database["healthy"] else "unhealthy",
        "service": "seating-rules",
        "database": database
    }
