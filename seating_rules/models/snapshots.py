"""
Read-only seat inventory snapshots handed to the seat rules.

These are plain values with no persistence concerns. The SQLAlchemy
inventory model lives in models/seat.py.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional


@dataclass(frozen=True)
class SeatSnapshot:
    """A seat as seen at validation time."""

    id: str
    row_id: str
    num: int
    price_category_id: Optional[str] = None
    linked_seat_id: Optional[str] = None


class RowKey(NamedTuple):
    """Identity of a row, scoped by its seating plan."""

    seating_plan_id: str
    row_id: str


# seating plan id -> row id -> seats requested in that row
RequestedSeats = Dict[str, Dict[str, List[SeatSnapshot]]]

# seating plan id -> title of the event that only sells complete rows
FullGroupRestrictions = Dict[str, str]


@dataclass(frozen=True)
class SeatsPerPriceCategory:
    """Seat count of one price category within a seating plan."""

    seating_plan_id: str
    price_category_id: Optional[str]
    count: int
    only_available: bool


@dataclass
class MappedRowSeat:
    """Availability of one seat number in a mapped row."""

    available: bool
    requested_now: bool = False
    seat: Optional[SeatSnapshot] = None

    @property
    def availability_indicator(self) -> int:
        return 1 if self.available else 0


@dataclass
class MappedRow:
    """Dense, index-addressable row running from its first to last available seat number."""

    first_seat_num: int
    seats: List[MappedRowSeat] = field(default_factory=list)

    def seat_num_at(self, index: int) -> int:
        return self.first_seat_num + index

    def index_of(self, seat_num: int) -> int:
        return seat_num - self.first_seat_num

    def __len__(self) -> int:
        return len(self.seats)

    def __getitem__(self, index: int) -> MappedRowSeat:
        return self.seats[index]

    def __iter__(self) -> Iterator[MappedRowSeat]:
        return iter(self.seats)
