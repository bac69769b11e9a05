"""
Logging setup for the Seating Rules service.

All output goes to stdout. With JSON logging on, each line is one object
so seat rule outcomes can be filtered by ``event_type``.
"""

import json
import logging
import logging.config
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from ..middleware.logging import request_id_var

BUSINESS_LOGGER = "seating_rules.business"


class RequestIDFilter(logging.Filter):
    """Stamp records with the id of the request being served."""

    def filter(self, record):
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object, with its ``extra`` fields inlined."""

    STANDARD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
        "message", "asctime", "request_id"
    }

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in self.STANDARD_ATTRS
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(log_level: str = "INFO", enable_json_logging: bool = False) -> None:
    """
    Configure the console handler and logger levels.

    Args:
        log_level: Level for the service's own loggers
        enable_json_logging: Emit JSON lines instead of plain text
    """
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {
                "format": "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "json": {"()": JSONFormatter},
        },
        "filters": {
            "request_id": {"()": RequestIDFilter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "json" if enable_json_logging else "text",
                "filters": ["request_id"]
            }
        },
        "loggers": {
            "seating_rules": {"level": log_level},
            # LoggingMiddleware already logs every request
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {"level": log_level, "handlers": ["console"]},
    })


def log_business_event(event_type: str, details: Dict[str, Any]) -> None:
    """Record a seat rule outcome on the business event logger."""
    logging.getLogger(BUSINESS_LOGGER).info(
        f"Business event: {event_type}",
        extra={"event_type": event_type, "business_event": True, **details}
    )
