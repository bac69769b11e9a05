"""
Custom exceptions for the Seating Rules service.
"""

from typing import Any, Dict, Optional, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the service."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Seat rule violations
    OVER_REQUEST = "OVER_REQUEST"
    FULL_GROUP_RESTRICTION = "FULL_GROUP_RESTRICTION"
    SEAT_FRAGMENTATION = "SEAT_FRAGMENTATION"

    # Inventory errors
    SEAT_INVENTORY_INCONSISTENT = "SEAT_INVENTORY_INCONSISTENT"
    DATA_ACCESS_ERROR = "DATA_ACCESS_ERROR"


class SeatingRulesError(Exception):
    """Base exception class for the Seating Rules service."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        retry_after: Optional[int] = None
    ):
        """Initialize the exception with comprehensive error information."""
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []
        self.retry_after = retry_after
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if self.suggestions:
            result["suggestions"] = self.suggestions

        if self.retry_after:
            result["retry_after"] = self.retry_after

        return result


class ValidationError(SeatingRulesError):
    """Exception raised for request validation errors."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, List[str]]] = None, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"field_errors": field_errors} if field_errors else None,
            **kwargs
        )
        self.field_errors = field_errors or {}


class SeatRuleViolation(SeatingRulesError):
    """Base exception for seat rule violations of a booking request."""
    pass


class OverRequestError(SeatRuleViolation):
    """Exception raised when a row is asked for more seats than it has available."""

    def __init__(self, requested: int, available: int, row_id: Optional[str] = None, **kwargs):
        super().__init__(
            "requested amount of tickets exceed available seats",
            error_code=ErrorCode.OVER_REQUEST,
            details={"requested": requested, "available": available, "row_id": row_id},
            suggestions=["Request fewer seats in this row", "Refresh seat availability"],
            **kwargs
        )
        self.requested = requested
        self.available = available


class FullGroupRestrictionError(SeatRuleViolation):
    """Exception raised when a full-group-only row is booked partially."""

    def __init__(self, event_title: str, row_id: Optional[str] = None, **kwargs):
        super().__init__(
            f"violate event restriction for event {event_title}, only full group seats ordering allowed",
            error_code=ErrorCode.FULL_GROUP_RESTRICTION,
            details={"event_title": event_title, "row_id": row_id},
            suggestions=["Book every available seat of the row"],
            **kwargs
        )
        self.event_title = event_title


class FragmentationError(SeatRuleViolation):
    """Exception raised when a booking would strand a single seat in a row.

    ``conflicting_seat_id`` names the requested seat responsible for the
    fragmentation, or is ``None`` when the gap existed before this request.
    """

    def __init__(self, conflicting_seat_id: Optional[str] = None, **kwargs):
        super().__init__(
            "seating plan fragmentation detected",
            error_code=ErrorCode.SEAT_FRAGMENTATION,
            details={"conflicting_seat_id": conflicting_seat_id} if conflicting_seat_id else None,
            suggestions=["Choose seats that do not leave a single empty seat"],
            **kwargs
        )
        self.conflicting_seat_id = conflicting_seat_id


class SeatInventoryConsistencyError(SeatingRulesError):
    """Exception raised when a requested seat is missing from the row snapshot."""

    def __init__(self, seat_num: int, **kwargs):
        super().__init__(
            f"something went wrong. requested seat num {seat_num} is unavailable",
            error_code=ErrorCode.SEAT_INVENTORY_INCONSISTENT,
            details={"seat_num": seat_num},
            suggestions=["Refresh seat availability and retry"],
            **kwargs
        )
        self.seat_num = seat_num


class DataAccessError(SeatingRulesError):
    """Exception raised when the seat inventory cannot be read."""

    def __init__(self, message: str, retry_after: int = 30, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.DATA_ACCESS_ERROR,
            retry_after=retry_after,
            suggestions=["Try again later", "Contact support if problem persists"],
            **kwargs
        )
