"""
Unit tests for check_full_group_restriction.
"""

import pytest

from seating_rules.models import RowKey
from seating_rules.services.seat_rules import check_full_group_restriction
from seating_rules.utils.exceptions import (
    ErrorCode,
    FullGroupRestrictionError,
    OverRequestError,
)

from conftest import make_seats

ROW = RowKey("plan-1", "A")


@pytest.mark.unit
class TestFullGroupRestriction:

    def test_over_request_without_restriction(self):
        with pytest.raises(OverRequestError) as exc_info:
            check_full_group_restriction(ROW, make_seats([1, 2]), make_seats([1, 2, 3]), {})

        assert str(exc_info.value) == "requested amount of tickets exceed available seats"
        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2

    def test_over_request_wins_over_restriction(self):
        with pytest.raises(OverRequestError):
            check_full_group_restriction(
                ROW, make_seats([1]), make_seats([1, 2]), {"plan-1": "Gala Night"}
            )

    def test_partial_request_on_restricted_plan(self):
        with pytest.raises(FullGroupRestrictionError) as exc_info:
            check_full_group_restriction(
                ROW, make_seats(range(1, 5)), make_seats([1, 2]), {"plan-1": "Gala Night"}
            )

        assert exc_info.value.event_title == "Gala Night"
        assert "Gala Night" in str(exc_info.value)
        assert exc_info.value.error_code == ErrorCode.FULL_GROUP_RESTRICTION

    def test_full_request_on_restricted_plan_passes(self):
        seats = make_seats(range(1, 5))

        check_full_group_restriction(ROW, seats, seats, {"plan-1": "Gala Night"})

    def test_partial_request_on_unrestricted_plan_passes(self):
        check_full_group_restriction(
            ROW, make_seats(range(1, 5)), make_seats([1]), {"plan-2": "Gala Night"}
        )

    def test_empty_request_passes(self):
        check_full_group_restriction(ROW, make_seats([1, 2]), [], {})
