"""
Read access to the seat inventory.

The seat rules depend only on the SeatInventoryStore interface, so the
inventory can come from the database or from memory.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from seating_rules.models import Seat, SeatSnapshot, SeatStatus, SeatsPerPriceCategory
from seating_rules.utils.exceptions import DataAccessError

logger = logging.getLogger(__name__)


class SeatInventoryStore(ABC):
    """Interface for reading seat inventory."""

    @abstractmethod
    async def load_row_seats(
        self,
        seating_plan_id: str,
        org_id: str,
        row_id: str
    ) -> List[SeatSnapshot]:
        """Return the currently available seats of a row, ordered by seat number."""
        ...

    @abstractmethod
    async def load_price_category_aggregates(
        self,
        seating_plan_id: str,
        org_id: str,
        only_available: bool
    ) -> List[SeatsPerPriceCategory]:
        """Return seat counts of a seating plan grouped by price category."""
        ...


class SqlAlchemySeatInventoryStore(SeatInventoryStore):
    """PostgreSQL-backed seat inventory using SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        """Initialize the store with database session."""
        self.db = db

    async def load_row_seats(
        self,
        seating_plan_id: str,
        org_id: str,
        row_id: str
    ) -> List[SeatSnapshot]:
        """
        Load the available seats of a row.

        Args:
            seating_plan_id: Seating plan the row belongs to
            org_id: Organization owning the seating plan
            row_id: Row identifier

        Returns:
            Available seats of the row ordered by seat number

        Raises:
            DataAccessError: If the query fails
        """
        try:
            result = await self.db.execute(
                select(Seat)
                .where(
                    and_(
                        Seat.seating_plan_id == seating_plan_id,
                        Seat.org_id == org_id,
                        Seat.row_id == row_id,
                        Seat.status == SeatStatus.AVAILABLE
                    )
                )
                .order_by(Seat.num)
            )
        except SQLAlchemyError as e:
            raise DataAccessError(f"query row seats: {str(e)}") from e

        seats = [_to_snapshot(seat) for seat in result.scalars().all()]
        logger.debug(f"Loaded {len(seats)} available seats for row {row_id} of seating plan {seating_plan_id}")
        return seats

    async def load_price_category_aggregates(
        self,
        seating_plan_id: str,
        org_id: str,
        only_available: bool
    ) -> List[SeatsPerPriceCategory]:
        """
        Count the seats of a seating plan per price category.

        Args:
            seating_plan_id: Seating plan to aggregate
            org_id: Organization owning the seating plan
            only_available: Count only available seats instead of all seats

        Returns:
            One entry per price category, including seats without a category

        Raises:
            DataAccessError: If the query fails
        """
        conditions = [
            Seat.seating_plan_id == seating_plan_id,
            Seat.org_id == org_id,
        ]
        if only_available:
            conditions.append(Seat.status == SeatStatus.AVAILABLE)

        try:
            result = await self.db.execute(
                select(Seat.price_category_id, func.count(Seat.id).label("count"))
                .where(and_(*conditions))
                .group_by(Seat.price_category_id)
            )
        except SQLAlchemyError as e:
            raise DataAccessError(f"query count of seats per price categories: {str(e)}") from e

        return [
            SeatsPerPriceCategory(
                seating_plan_id=seating_plan_id,
                price_category_id=price_category_id,
                count=count,
                only_available=only_available
            )
            for price_category_id, count in result.all()
        ]


def _to_snapshot(seat: Seat) -> SeatSnapshot:
    return SeatSnapshot(
        id=str(seat.id),
        row_id=seat.row_id,
        num=seat.num,
        price_category_id=seat.price_category_id,
        linked_seat_id=str(seat.linked_seat_id) if seat.linked_seat_id else None
    )
