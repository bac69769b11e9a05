"""Middleware components for the Seating Rules service."""

from .error_handler import ErrorHandlerMiddleware, request_validation_exception_handler
from .logging import LoggingMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",
    "request_validation_exception_handler"
]
