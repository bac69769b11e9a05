"""
Seat inventory model read by the seat rules.
"""

import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class SeatStatus(enum.Enum):
    """Enumeration for seat status."""
    AVAILABLE = "available"
    HELD = "held"
    BOOKED = "booked"
    BLOCKED = "blocked"


class Seat(Base):
    """Seat of a seating plan row."""

    __tablename__ = "seats"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Ownership and placement
    org_id: Mapped[str] = mapped_column(String(64), nullable=False)
    seating_plan_id: Mapped[str] = mapped_column(String(64), nullable=False)
    row_id: Mapped[str] = mapped_column(String(64), nullable=False)
    num: Mapped[int] = mapped_column(Integer, nullable=False)

    # Pricing and grouping
    price_category_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    linked_seat_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("seats.id", ondelete="SET NULL"),
        nullable=True
    )

    status: Mapped[SeatStatus] = mapped_column(
        Enum(SeatStatus),
        default=SeatStatus.AVAILABLE,
        nullable=False,
        index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "seating_plan_id", "row_id", "num",
            name="uq_seats_plan_row_num"
        ),
        CheckConstraint("num >= 0", name="num_non_negative"),
        Index("ix_seats_org_plan_row", "org_id", "seating_plan_id", "row_id"),
    )

    def __repr__(self) -> str:
        """String representation of the seat."""
        return (
            f"<Seat(id={self.id}, seating_plan_id={self.seating_plan_id}, "
            f"row_id={self.row_id}, num={self.num}, status={self.status.value})>"
        )
