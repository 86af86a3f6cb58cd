"""
Unit tests for utils.py module.

Tests numeric sanitizing, arithmetic helpers and calendar arithmetic.
"""

import pytest
import numpy as np
from datetime import date, datetime

from finsight.utils import (
    add_months,
    clamp,
    round_half_up,
    safe_divide,
    sanitize_amount,
    sanitize_rate,
)


class TestSanitize:
    """Test input normalization."""

    def test_valid_values_pass_through(self):
        """Finite non-negative values are returned as floats."""
        assert sanitize_amount(0) == 0.0
        assert sanitize_amount(1_500) == 1_500.0
        assert isinstance(sanitize_amount(3), float)

    @pytest.mark.parametrize("value", [None, -1, -0.01, np.nan, np.inf, -np.inf, "abc", object()])
    def test_invalid_values_become_zero(self, value):
        """Missing, negative, non-finite or non-numeric values become 0."""
        assert sanitize_amount(value, name="test") == 0.0

    def test_numeric_strings(self):
        assert sanitize_amount("2500") == 2_500.0

    def test_sanitize_rate(self):
        assert sanitize_rate(0.18) == 0.18
        assert sanitize_rate(-0.05) == 0.0


class TestArithmetic:
    """Test clamp, division and rounding helpers."""

    def test_clamp(self):
        assert clamp(-5) == 0.0
        assert clamp(150) == 100.0
        assert clamp(42.5) == 42.5
        assert clamp(5, lower=10, upper=20) == 10

    def test_clamp_nan(self):
        assert clamp(float("nan")) == 0.0

    def test_safe_divide(self):
        assert safe_divide(10, 4) == 2.5
        assert safe_divide(10, 0) == 0.0
        assert safe_divide(10, 0, default=-1) == -1
        assert safe_divide(10, np.inf) == 0.0

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.4999, 2),
        (61.5, 62),
        (99.5, 100),
    ])
    def test_round_half_up(self, value, expected):
        """Halves round up, unlike Python's round()."""
        assert round_half_up(value) == expected


class TestAddMonths:
    """Test calendar month arithmetic."""

    def test_simple(self):
        assert add_months(date(2025, 1, 15), 3) == date(2025, 4, 15)

    def test_year_rollover(self):
        assert add_months(date(2025, 11, 10), 14) == date(2027, 1, 10)

    def test_month_end_clipped(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_zero(self):
        assert add_months(date(2025, 6, 1), 0) == date(2025, 6, 1)

    def test_datetime_input(self):
        result = add_months(datetime(2025, 3, 31, 12, 0), 1)

        assert result == date(2025, 4, 30)
        assert type(result) is date
