"""
Seat rules service for validating booking requests against the seat inventory.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from seating_rules.config import Settings, get_settings
from seating_rules.models import (
    FullGroupRestrictions,
    RequestedSeats,
    RowKey,
    SeatSnapshot,
    SeatsPerPriceCategory,
)
from seating_rules.services.seat_inventory_store import SeatInventoryStore
from seating_rules.services.seat_rules import (
    FRAGMENTATION_SCANS,
    check_full_group_restriction,
    group_requested_seats_by_row,
    map_row_seats_for_availability,
    skip_fragmentation_check,
)
from seating_rules.utils.exceptions import DataAccessError, SeatingRulesError
from seating_rules.utils.logging_config import log_business_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeatRulesSummary:
    """Outcome of a successful validation."""

    rows_checked: int
    rows_fragmentation_skipped: int


class SeatRulesService:
    """Service class validating seat bookings against the seat rules."""

    def __init__(self, store: SeatInventoryStore, settings: Optional[Settings] = None):
        """Initialize the seat rules service with a seat inventory store."""
        self.store = store
        self.settings = settings or get_settings()

    async def validate_seat_rules(
        self,
        org_id: str,
        requested_seats: RequestedSeats,
        full_group_restrictions: Optional[FullGroupRestrictions] = None
    ) -> SeatRulesSummary:
        """
        Validate the seats requested in a booking.

        Rows are checked in request order and validation stops at the first
        violation.

        Args:
            org_id: Organization owning the seating plans
            requested_seats: Seating plan id -> row id -> requested seats
            full_group_restrictions: Seating plan id -> title of an event that
                only sells complete rows

        Returns:
            Summary of the checked rows

        Raises:
            DataAccessError: If the seat inventory cannot be loaded
            OverRequestError: If a row is asked for more seats than it has available
            FullGroupRestrictionError: If a full-group-only row is booked partially
            SeatInventoryConsistencyError: If a requested seat is no longer available
            FragmentationError: If the booking leaves a lone seat in a row
        """
        restrictions = full_group_restrictions or {}
        requested_rows = group_requested_seats_by_row(requested_seats)
        seating_plan_ids = list(requested_seats)

        available_rows = await self._load_available_rows(org_id, requested_rows)
        available_per_plan = await self._load_price_category_aggregates(
            org_id, seating_plan_ids, only_available=True
        )
        all_per_plan = await self._load_price_category_aggregates(
            org_id, seating_plan_ids, only_available=False
        )
        check_fragmentation = FRAGMENTATION_SCANS[self.settings.fragmentation_scan_strategy]

        rows_skipped = 0
        row_key: Optional[RowKey] = None
        try:
            for row_key, requested_row_seats in requested_rows.items():
                available_row_seats = available_rows[row_key]
                check_full_group_restriction(
                    row_key, available_row_seats, requested_row_seats, restrictions
                )

                if skip_fragmentation_check(
                    requested_row_seats,
                    available_per_plan[row_key.seating_plan_id],
                    all_per_plan[row_key.seating_plan_id],
                    divisor=self.settings.fragmentation_skip_divisor
                ):
                    logger.debug(f"Fragmentation check skipped for row {row_key.row_id}")
                    rows_skipped += 1
                    continue

                mapped_row = map_row_seats_for_availability(available_row_seats, requested_row_seats)
                check_fragmentation(mapped_row)
        except SeatingRulesError as e:
            log_business_event(
                "seat_rules_rejected",
                {
                    "org_id": org_id,
                    "seating_plan_id": row_key.seating_plan_id if row_key else None,
                    "row_id": row_key.row_id if row_key else None,
                    "error_code": e.error_code.value,
                }
            )
            raise

        summary = SeatRulesSummary(
            rows_checked=len(requested_rows),
            rows_fragmentation_skipped=rows_skipped
        )
        log_business_event(
            "seat_rules_passed",
            {
                "org_id": org_id,
                "rows_checked": summary.rows_checked,
                "rows_fragmentation_skipped": summary.rows_fragmentation_skipped,
            }
        )
        return summary

    async def _load_available_rows(
        self,
        org_id: str,
        requested_rows: Dict[RowKey, List[SeatSnapshot]]
    ) -> Dict[RowKey, List[SeatSnapshot]]:
        available_rows = {}
        for row_key in requested_rows:
            try:
                available_rows[row_key] = await self.store.load_row_seats(
                    row_key.seating_plan_id, org_id, row_key.row_id
                )
            except Exception as e:
                raise DataAccessError(
                    f"Error while querying seats: {str(e)}",
                    details={"seating_plan_id": row_key.seating_plan_id, "row_id": row_key.row_id}
                ) from e
        return available_rows

    async def _load_price_category_aggregates(
        self,
        org_id: str,
        seating_plan_ids: Iterable[str],
        only_available: bool
    ) -> Dict[str, List[SeatsPerPriceCategory]]:
        per_plan = {}
        for seating_plan_id in seating_plan_ids:
            try:
                per_plan[seating_plan_id] = await self.store.load_price_category_aggregates(
                    seating_plan_id, org_id, only_available
                )
            except Exception as e:
                raise DataAccessError(
                    f"Error while querying seats price categories: {str(e)}",
                    details={"seating_plan_id": seating_plan_id, "only_available": only_available}
                ) from e
        return per_plan
