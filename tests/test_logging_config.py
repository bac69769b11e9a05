"""
Tests for structured logging helpers.
"""

import json
import logging

from seating_rules.middleware.logging import request_id_var
from seating_rules.utils.logging_config import JSONFormatter, RequestIDFilter
from seating_rules.utils.exceptions import FragmentationError, OverRequestError


def make_record(**extra):
    record = logging.LogRecord(
        name="seating_rules.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Business event: %s",
        args=("seat_rules_passed",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    record = make_record(request_id="req-1", rows_checked=2)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "Business event: seat_rules_passed"
    assert entry["level"] == "INFO"
    assert entry["request_id"] == "req-1"
    assert entry["rows_checked"] == 2
    assert "pathname" not in entry


def test_request_id_filter_uses_context_variable():
    token = request_id_var.set("req-42")
    try:
        record = make_record()
        assert RequestIDFilter().filter(record) is True
        assert record.request_id == "req-42"
    finally:
        request_id_var.reset(token)


def test_request_id_filter_keeps_explicit_request_id():
    record = make_record(request_id="req-7")

    RequestIDFilter().filter(record)

    assert record.request_id == "req-7"


def test_error_to_dict():
    error = OverRequestError(requested=3, available=2, row_id="A")

    assert error.to_dict()["error_code"] == "OVER_REQUEST"
    assert error.to_dict()["details"] == {"requested": 3, "available": 2, "row_id": "A"}
    assert "details" not in FragmentationError().to_dict()
