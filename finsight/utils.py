"""General utilities for FinSight

Contents
--------
- Sanitizing helpers (sanitize_amount, sanitize_rate)
- Arithmetic helpers (clamp, safe_divide, round_half_up)
- Calendar helpers (add_months)
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Optional, Union

import numpy as np
import pandas as pd

__all__ = [
    # Sanitizing
    "sanitize_amount",
    "sanitize_rate",
    # Arithmetic
    "clamp",
    "safe_divide",
    "round_half_up",
    # Calendar
    "add_months",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Sanitizing helpers
# ---------------------------------------------------------------------------

def sanitize_amount(value: Optional[float], *, name: str = "value") -> float:
    """Return *value* as a finite, non-negative float.

    None, NaN, infinities and negative numbers collapse to 0.0. The engine
    normalizes such inputs instead of raising.
    """
    if value is None:
        return 0.0
    try:
        v = float(value)
    except (TypeError, ValueError):
        logger.debug("%s=%r is not numeric; using 0", name, value)
        return 0.0
    if not np.isfinite(v) or v < 0:
        logger.debug("%s=%r normalized to 0", name, value)
        return 0.0
    return v


def sanitize_rate(value: Optional[float], *, name: str = "rate") -> float:
    """Annual rates share the amount rules: finite and >= 0."""
    return sanitize_amount(value, name=name)


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------

def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp *value* into [lower, upper]; NaN maps to *lower*."""
    if math.isnan(value):
        return lower
    return float(min(upper, max(lower, value)))


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning *default* when the denominator is zero or non-finite."""
    if denominator == 0 or not np.isfinite(denominator):
        return default
    return numerator / denominator


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def add_months(start: Union[date, datetime], months: int) -> date:
    """Return the calendar date *months* months after *start*.

    Month ends are clipped (Jan 31 + 1 month -> Feb 28/29).

    Examples
    --------
    >>> add_months(date(2025, 1, 31), 1)
    datetime.date(2025, 2, 28)
    """
    shifted = pd.Timestamp(start) + pd.DateOffset(months=int(months))
    return shifted.date()
