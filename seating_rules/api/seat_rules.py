"""
Seat rule validation API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from seating_rules.database import get_db
from seating_rules.models import RequestedSeats, SeatSnapshot
from seating_rules.services import SeatInventoryStore, SeatRulesService, SqlAlchemySeatInventoryStore
from seating_rules.schemas.seat_rules import (
    SeatRulesValidationRequest,
    SeatRulesValidationResponse,
)

router = APIRouter(prefix="/seat-rules", tags=["seat-rules"])


async def get_seat_inventory_store(db: AsyncSession = Depends(get_db)) -> SeatInventoryStore:
    """Provide the seat inventory store backed by the request's database session."""
    return SqlAlchemySeatInventoryStore(db)


def to_requested_seats(request: SeatRulesValidationRequest) -> RequestedSeats:
    """Convert the request body into seat snapshots, taking row ids from the row keys."""
    return {
        seating_plan_id: {
            row_id: [
                SeatSnapshot(
                    id=seat.id,
                    row_id=row_id,
                    num=seat.num,
                    price_category_id=seat.price_category_id,
                    linked_seat_id=seat.linked_seat_id
                )
                for seat in seats
            ]
            for row_id, seats in rows.items()
        }
        for seating_plan_id, rows in request.requested_seats.items()
    }


@router.post("/validate", response_model=SeatRulesValidationResponse)
async def validate_seat_rules(
    request: SeatRulesValidationRequest,
    store: SeatInventoryStore = Depends(get_seat_inventory_store)
):
    """
    Validate requested seats against the seat rules.

    Rule violations are returned as 409 responses by the error handler
    middleware, and inventory read failures as 503.

    Args:
        request: Requested seats grouped by seating plan and row
        store: Seat inventory store

    Returns:
        Summary of the checked rows
    """
    service = SeatRulesService(store)
    summary = await service.validate_seat_rules(
        request.org_id,
        to_requested_seats(request),
        request.full_group_restrictions
    )
    return SeatRulesValidationResponse(
        valid=True,
        rows_checked=summary.rows_checked,
        rows_fragmentation_skipped=summary.rows_fragmentation_skipped
    )
