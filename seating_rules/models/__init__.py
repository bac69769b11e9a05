"""
Database models and inventory snapshots for the Seating Rules service.
"""

from .base import Base
from .seat import Seat, SeatStatus
from .snapshots import (
    FullGroupRestrictions,
    MappedRow,
    MappedRowSeat,
    RequestedSeats,
    RowKey,
    SeatSnapshot,
    SeatsPerPriceCategory,
)

__all__ = [
    "Base",
    "Seat",
    "SeatStatus",
    "SeatSnapshot",
    "RowKey",
    "RequestedSeats",
    "FullGroupRestrictions",
    "SeatsPerPriceCategory",
    "MappedRowSeat",
    "MappedRow",
]
