"""Unit tests for management metrics."""

import pytest

from statdrop.metrics import delta, management_percent, per_unit, rounded


class TestManagementPercent:
    """Tests for actual / max percentages."""

    def test_scenario(self):
        """Test 110.5 of 140.0 possible is 78.93%."""
        assert rounded(management_percent(110.5, 140.0)) == 78.93

    def test_zero_max(self):
        """Test a zero maximum gives 0 rather than dividing by zero."""
        assert management_percent(0.0, 0.0) == 0.0
        assert management_percent(12.0, 0.0) == 0.0

    def test_negative_max(self):
        """Test a non-positive maximum gives 0."""
        assert management_percent(-3.0, -1.0) == 0.0

    @pytest.mark.parametrize('actual,maximum', [(0, 10), (5, 10), (10, 10), (99.9, 100)])
    def test_bounds(self, actual, maximum):
        """Test 0 <= pct <= 100 whenever 0 <= actual <= max."""
        assert 0.0 <= management_percent(actual, maximum) <= 100.0


class TestHelpers:
    """Tests for delta, rounding and averages."""

    def test_delta(self):
        """Test percentage-point difference."""
        assert delta(80.0, 75.5) == pytest.approx(4.5)
        assert delta(70.0, 75.0) == pytest.approx(-5.0)

    def test_rounded(self):
        """Test rounding digits."""
        assert rounded(12.3456) == 12.35
        assert rounded(12.3456, 1) == 12.3

    def test_per_unit(self):
        """Test averages with zero denominators."""
        assert per_unit(30.0, 3) == pytest.approx(10.0)
        assert per_unit(30.0, 0) == 0.0
