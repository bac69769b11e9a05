"""
Shared fixtures for the seat rules tests.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from seating_rules.models import MappedRow, MappedRowSeat, SeatSnapshot, SeatsPerPriceCategory
from seating_rules.services.seat_inventory_store import SeatInventoryStore

ORG_ID = "org-1"


def make_seat(num: int, row_id: str = "A", price_category_id: Optional[str] = "standard", seat_id: Optional[str] = None) -> SeatSnapshot:
    return SeatSnapshot(
        id=seat_id or f"{row_id}-{num}",
        row_id=row_id,
        num=num,
        price_category_id=price_category_id,
    )


def make_seats(nums: Iterable[int], row_id: str = "A", price_category_id: Optional[str] = "standard") -> List[SeatSnapshot]:
    return [make_seat(num, row_id, price_category_id) for num in nums]


def mapped_row_from_pattern(pattern: str) -> MappedRow:
    """
    Build a mapped row from a pattern string.

    ``A`` is an available seat, ``U`` an unavailable one and ``R`` a seat
    requested now. Seat ids are ``seat-<index>``.
    """
    row = MappedRow(first_seat_num=1)
    for index, symbol in enumerate(pattern):
        seat = None if symbol == "U" else make_seat(index + 1, seat_id=f"seat-{index}")
        row.seats.append(MappedRowSeat(
            available=symbol == "A",
            requested_now=symbol == "R",
            seat=seat,
        ))
    return row


class InMemorySeatInventoryStore(SeatInventoryStore):
    """Seat inventory kept in memory for tests."""

    def __init__(self):
        # (org_id, seating_plan_id) -> [(seat, available)]
        self.seats: Dict[Tuple[str, str], List[Tuple[SeatSnapshot, bool]]] = defaultdict(list)
        self.row_failure: Optional[Exception] = None
        self.aggregate_failure: Optional[Exception] = None
        self.row_loads: List[Tuple[str, str]] = []

    def add_row(
        self,
        seating_plan_id: str,
        row_id: str,
        nums: Iterable[int],
        unavailable: Iterable[int] = (),
        price_category_id: Optional[str] = "standard",
        org_id: str = ORG_ID,
    ) -> List[SeatSnapshot]:
        """Add a row and return its available seats."""
        unavailable = set(unavailable)
        available = []
        for num in nums:
            seat = SeatSnapshot(
                id=f"{seating_plan_id}-{row_id}-{num}",
                row_id=row_id,
                num=num,
                price_category_id=price_category_id,
            )
            is_available = num not in unavailable
            self.seats[(org_id, seating_plan_id)].append((seat, is_available))
            if is_available:
                available.append(seat)
        return available

    def seat(self, seating_plan_id: str, row_id: str, num: int, org_id: str = ORG_ID) -> SeatSnapshot:
        for seat, _ in self.seats[(org_id, seating_plan_id)]:
            if seat.row_id == row_id and seat.num == num:
                return seat
        raise KeyError(f"no seat {row_id}{num} in {seating_plan_id}")

    async def load_row_seats(self, seating_plan_id: str, org_id: str, row_id: str) -> List[SeatSnapshot]:
        if self.row_failure is not None:
            raise self.row_failure
        self.row_loads.append((seating_plan_id, row_id))
        return sorted(
            (seat for seat, available in self.seats[(org_id, seating_plan_id)]
             if available and seat.row_id == row_id),
            key=lambda seat: seat.num
        )

    async def load_price_category_aggregates(
        self,
        seating_plan_id: str,
        org_id: str,
        only_available: bool
    ) -> List[SeatsPerPriceCategory]:
        if self.aggregate_failure is not None:
            raise self.aggregate_failure
        counts: Dict[Optional[str], int] = defaultdict(int)
        for seat, available in self.seats[(org_id, seating_plan_id)]:
            if available or not only_available:
                counts[seat.price_category_id] += 1
        return [
            SeatsPerPriceCategory(
                seating_plan_id=seating_plan_id,
                price_category_id=price_category_id,
                count=count,
                only_available=only_available,
            )
            for price_category_id, count in counts.items()
        ]


@pytest.fixture
def store():
    """Empty in-memory seat inventory."""
    return InMemorySeatInventoryStore()
