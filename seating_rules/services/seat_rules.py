"""
Seat rules applied to a single row of a booking request.

Everything here is synchronous and works on in-memory snapshots only;
loading the snapshots is the job of SeatRulesService.
"""

from typing import Callable, Dict, List, Optional, Sequence

from seating_rules.models import (
    FullGroupRestrictions,
    MappedRow,
    MappedRowSeat,
    RequestedSeats,
    RowKey,
    SeatSnapshot,
    SeatsPerPriceCategory,
)
from seating_rules.utils.exceptions import (
    FragmentationError,
    FullGroupRestrictionError,
    OverRequestError,
    SeatInventoryConsistencyError,
)

# How many positions past the first free seat are inspected when sizing a gap
FREE_SEATS_WINDOW = 2

DEFAULT_SKIP_DIVISOR = 10


def check_full_group_restriction(
    row_key: RowKey,
    available_row_seats: Sequence[SeatSnapshot],
    requested_row_seats: Sequence[SeatSnapshot],
    full_group_restrictions: FullGroupRestrictions,
) -> None:
    """
    Enforce seat counts for a row, including "full group only" events.

    Raises:
        OverRequestError: If more seats are requested than the row has available
        FullGroupRestrictionError: If the row's seating plan only sells complete
            rows and the request does not take every available seat
    """
    if len(requested_row_seats) > len(available_row_seats):
        raise OverRequestError(
            requested=len(requested_row_seats),
            available=len(available_row_seats),
            row_id=row_key.row_id,
        )

    event_title = full_group_restrictions.get(row_key.seating_plan_id)
    if event_title is not None and len(requested_row_seats) != len(available_row_seats):
        raise FullGroupRestrictionError(event_title, row_id=row_key.row_id)


def skip_fragmentation_check(
    requested_row_seats: Sequence[SeatSnapshot],
    available_per_category: Sequence[SeatsPerPriceCategory],
    all_per_category: Sequence[SeatsPerPriceCategory],
    divisor: int = DEFAULT_SKIP_DIVISOR,
) -> bool:
    """
    Decide whether the fragmentation check can be waived for a row.

    A price category waives the check when the request is negligible compared
    to the category's size in the seating plan, or when it leaves at most one
    seat of the category available anyway.

    Args:
        requested_row_seats: Seats requested in the row
        available_per_category: Available seat counts of the row's seating plan
        all_per_category: Total seat counts of the row's seating plan
        divisor: Requests below total / divisor seats are negligible

    Returns:
        True if the fragmentation check should be skipped
    """
    requested_per_category: Dict[str, int] = {}
    for seat in requested_row_seats:
        if seat.price_category_id is not None:
            requested_per_category[seat.price_category_id] = (
                requested_per_category.get(seat.price_category_id, 0) + 1
            )

    for category in available_per_category:
        if category.price_category_id is None:
            continue
        requested = requested_per_category.get(category.price_category_id)
        if requested is None:
            continue

        total_in_plan = _count_for_category(all_per_category, category.price_category_id)
        if requested < total_in_plan / divisor:
            return True
        if requested == category.count - 1:
            # the single leftover seat is plan-wide, not caused by this row
            return True
        if requested == category.count:
            return True

    return False


def _count_for_category(per_category: Sequence[SeatsPerPriceCategory], price_category_id: str) -> int:
    for category in per_category:
        if category.price_category_id == price_category_id:
            return category.count
    return 0


def map_row_seats_for_availability(
    available_row_seats: Sequence[SeatSnapshot],
    requested_row_seats: Sequence[SeatSnapshot],
) -> MappedRow:
    """
    Map a row onto a dense sequence from its first to its last available seat number.

    Seat numbers missing from the available seats are unavailable, whether they
    are booked, held or simply absent. Requested seats become unavailable and
    are flagged as requested now.

    Raises:
        SeatInventoryConsistencyError: If a requested seat is not among the
            available seats of the row
    """
    seats_by_num = {seat.num: seat for seat in available_row_seats}
    if not seats_by_num:
        if requested_row_seats:
            raise SeatInventoryConsistencyError(requested_row_seats[0].num)
        return MappedRow(first_seat_num=0)

    first_seat_num = min(seats_by_num)
    last_seat_num = max(seats_by_num)

    mapped = MappedRow(first_seat_num=first_seat_num)
    for seat_num in range(first_seat_num, last_seat_num + 1):
        seat = seats_by_num.get(seat_num)
        if seat is not None:
            mapped.seats.append(MappedRowSeat(available=True, seat=seat))
        else:
            mapped.seats.append(MappedRowSeat(available=False))

    for requested_seat in requested_row_seats:
        if requested_seat.num not in seats_by_num:
            raise SeatInventoryConsistencyError(requested_seat.num)
        mapped_seat = mapped[mapped.index_of(requested_seat.num)]
        mapped_seat.available = False
        mapped_seat.requested_now = True

    return mapped


def _count_free_seats(row: Sequence[MappedRowSeat], index: int, step: int) -> Optional[int]:
    """
    Size the gap next to the unavailable block containing ``index``.

    Walks away from ``index`` in direction ``step``, skipping the unavailable
    block, then spends FREE_SEATS_WINDOW moves counting available seats.
    Returns None when no available seat was reached before the row boundary.
    """
    moves_left = FREE_SEATS_WINDOW
    free_seats = 0
    counting = False
    position = index + step
    while 0 <= position < len(row) and moves_left > 0:
        if row[position].available:
            counting = True
            free_seats += 1
            moves_left -= 1
        elif counting:
            moves_left -= 1
        position += step
    return free_seats if counting else None


def _find_conflicting_seat_id(row: Sequence[MappedRowSeat], index: int, step: int) -> Optional[str]:
    """Return the first seat from ``index`` toward ``step`` whose neighbour on that side is also requested now."""
    position = index
    while 0 <= position + step < len(row):
        current, neighbour = row[position], row[position + step]
        if current.requested_now and neighbour.requested_now:
            return current.seat.id if current.seat is not None else None
        position += step
    return None


def check_seat_for_fragmentation(row: Sequence[MappedRowSeat], index: int) -> None:
    """
    Check both sides of an unavailable seat for a lone free seat.

    Raises:
        FragmentationError: If exactly one free seat is left between the
            unavailable block and the next unavailable seat or row boundary
    """
    for step in (-1, 1):
        free_seats = _count_free_seats(row, index, step)
        if free_seats is not None and free_seats != FREE_SEATS_WINDOW:
            raise FragmentationError(_find_conflicting_seat_id(row, index, step))


def check_mapped_row_for_fragmentation(row: Sequence[MappedRowSeat]) -> None:
    """
    Check every unavailable seat of a mapped row for fragmentation.

    Raises:
        FragmentationError: On the first lone free seat found
    """
    for index, mapped_seat in enumerate(row):
        if not mapped_seat.available:
            check_seat_for_fragmentation(row, index)


def check_mapped_row_for_fragmentation_at_run_starts(row: Sequence[MappedRowSeat]) -> None:
    """
    Check only the first seat of each unavailable run.

    Every seat of an unavailable run sees the same gaps on both sides, and the
    run's first seat is always reached first, so this raises exactly what
    check_mapped_row_for_fragmentation raises.
    """
    for index, mapped_seat in enumerate(row):
        if mapped_seat.available:
            continue
        if index == 0 or row[index - 1].available:
            check_seat_for_fragmentation(row, index)


FRAGMENTATION_SCANS: Dict[str, Callable[[Sequence[MappedRowSeat]], None]] = {
    "every_index": check_mapped_row_for_fragmentation,
    "run_starts": check_mapped_row_for_fragmentation_at_run_starts,
}


def group_requested_seats_by_row(requested_seats: RequestedSeats) -> Dict[RowKey, List[SeatSnapshot]]:
    """Flatten seating plan -> row -> seats into row keys that keep the seating plan."""
    return {
        RowKey(seating_plan_id, row_id): list(seats)
        for seating_plan_id, rows in requested_seats.items()
        for row_id, seats in rows.items()
    }
