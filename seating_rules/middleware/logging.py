"""
Request id and timing for every request.
"""

import contextvars
import logging
import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

NO_REQUEST_ID = "no-request-id"

# Read by RequestIDFilter so every log line of a request carries its id
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default=NO_REQUEST_ID)

# Polled by the platform, logged at debug only
QUIET_PATHS = ("/", "/health", "/health/detailed")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its status and duration.

    An incoming ``X-Request-ID`` header is reused so the id of the booking
    flow that called the validator shows up in these logs too.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        token = request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.warning(
                f"{request.method} {request.url.path} raised {type(exc).__name__} "
                f"after {time.perf_counter() - started:.4f}s"
            )
            raise
        finally:
            request_id_var.reset(token)

        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.4f}s)",
            extra={"request_id": request_id, "status_code": response.status_code, "process_time": elapsed}
        )
        return response
