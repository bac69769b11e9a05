"""
Pydantic schemas for seat rule validation.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict


class RequestedSeat(BaseModel):
    """A seat picked by the customer."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1, description="Seat identifier")
    num: int = Field(..., ge=0, description="Seat number within its row")
    price_category_id: Optional[str] = Field(None, description="Price category of the seat")
    linked_seat_id: Optional[str] = Field(None, description="Seat sold together with this one")


class SeatRulesValidationRequest(BaseModel):
    """Schema for a seat rule validation request."""
    org_id: str = Field(..., min_length=1, description="Organization owning the seating plans")
    requested_seats: Dict[str, Dict[str, List[RequestedSeat]]] = Field(
        ...,
        description="Seating plan id -> row id -> requested seats"
    )
    full_group_restrictions: Dict[str, str] = Field(
        default_factory=dict,
        description="Seating plan id -> title of an event that only sells complete rows"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "org_id": "org-1",
                "requested_seats": {
                    "plan-1": {
                        "A": [
                            {"id": "seat-a3", "num": 3, "price_category_id": "standard"},
                            {"id": "seat-a4", "num": 4, "price_category_id": "standard"}
                        ]
                    }
                },
                "full_group_restrictions": {}
            }
        }
    )


class SeatRulesValidationResponse(BaseModel):
    """Schema for a passed seat rule validation."""
    valid: bool = True
    rows_checked: int = Field(..., ge=0)
    rows_fragmentation_skipped: int = Field(..., ge=0)
