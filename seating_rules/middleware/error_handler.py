"""
Error handling middleware for the Seating Rules service.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, List
from uuid import uuid4

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import OperationalError, TimeoutError as SQLTimeoutError

from ..utils.exceptions import (
    SeatingRulesError,
    ErrorCode,
    ValidationError,
    SeatRuleViolation,
    DataAccessError,
)

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware turning exceptions into structured JSON error responses."""

    STATUS_MAP = {
        ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_CONTENT,
        ErrorCode.OVER_REQUEST: status.HTTP_409_CONFLICT,
        ErrorCode.FULL_GROUP_RESTRICTION: status.HTTP_409_CONFLICT,
        ErrorCode.SEAT_FRAGMENTATION: status.HTTP_409_CONFLICT,
        ErrorCode.SEAT_INVENTORY_INCONSISTENT: status.HTTP_409_CONFLICT,
        ErrorCode.DATA_ACCESS_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """Process request and handle any exceptions."""
        error_id = str(uuid4())

        try:
            response = await call_next(request)
            return response

        except Exception as exc:
            return self._handle_exception(request, exc, error_id)

    def _handle_exception(self, request: Request, exc: Exception, error_id: str) -> JSONResponse:
        """Handle different types of exceptions and return appropriate responses."""
        self._log_error(request, exc, error_id)

        if isinstance(exc, SeatingRulesError):
            return self._handle_seating_rules_error(exc, error_id)
        elif isinstance(exc, (OperationalError, SQLTimeoutError)):
            return self._handle_database_error(exc, error_id)
        else:
            return self._handle_unexpected_error(exc, error_id)

    def _handle_seating_rules_error(self, exc: SeatingRulesError, error_id: str) -> JSONResponse:
        """Handle errors raised by the service itself."""
        headers = {}
        if exc.retry_after:
            headers["Retry-After"] = str(exc.retry_after)

        return JSONResponse(
            status_code=self.STATUS_MAP.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR),
            content=error_body(exc, error_id),
            headers=headers
        )

    def _handle_database_error(self, exc: Exception, error_id: str) -> JSONResponse:
        """Handle database connection and operational errors."""
        data_access_error = DataAccessError(
            "Database service temporarily unavailable",
            details={"error_type": type(exc).__name__}
        )

        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error_body(data_access_error, error_id),
            headers={"Retry-After": str(data_access_error.retry_after)}
        )

    def _handle_unexpected_error(self, exc: Exception, error_id: str) -> JSONResponse:
        """Handle unexpected errors."""
        unexpected_error = SeatingRulesError(
            "An unexpected error occurred",
            error_code=ErrorCode.INTERNAL_ERROR,
            details={"error_type": type(exc).__name__} if self.debug else None
        )

        response_data = error_body(unexpected_error, error_id)
        if self.debug:
            response_data["debug"] = {
                "exception": str(exc),
                "traceback": traceback.format_exc()
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response_data
        )

    def _log_error(self, request: Request, exc: Exception, error_id: str):
        """Log error with request context."""
        request_info = {
            "method": request.method,
            "url": str(request.url),
            "client_ip": request.client.host if request.client else None,
        }

        if isinstance(exc, SeatRuleViolation):
            logger.info(
                f"Seat rule violation [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        elif isinstance(exc, SeatingRulesError):
            logger.error(
                f"Service error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        else:
            logger.error(
                f"Unexpected error [{error_id}]: {str(exc)}",
                extra={
                    "error_id": error_id,
                    "error_type": type(exc).__name__,
                    "request": request_info,
                    "traceback": traceback.format_exc()
                }
            )


def error_body(exc: SeatingRulesError, error_id: str) -> dict:
    """Build the JSON body shared by every error response."""
    return {
        "error": exc.to_dict(),
        "error_id": error_id,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed request bodies with the service's error body."""
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        field_errors.setdefault(field_path, []).append(error["msg"])

    validation_error = ValidationError("Request validation failed", field_errors=field_errors)
    logger.info(
        f"Rejected malformed request: {request.method} {request.url.path}",
        extra={"field_errors": field_errors}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content=error_body(validation_error, str(uuid4()))
    )
