"""
Tests for the service settings.
"""

import pytest
from pydantic import ValidationError

from seating_rules.config import Settings


@pytest.mark.unit
class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.fragmentation_skip_divisor == 10
        assert settings.fragmentation_scan_strategy == "every_index"

    @pytest.mark.parametrize("divisor", [0, -10])
    def test_skip_divisor_must_be_positive(self, divisor):
        with pytest.raises(ValidationError):
            Settings(fragmentation_skip_divisor=divisor)

    def test_unknown_scan_strategy_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(fragmentation_scan_strategy="every_other_index")
