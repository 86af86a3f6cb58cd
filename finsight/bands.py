# finsight/bands.py
"""
Piecewise-linear scoring bands.

Purpose
-------
One interpolation routine shared by every health factor. A band table is an
ordered tuple of ``Band`` rows covering a contiguous ratio range; each row
maps its [lower, upper] interval linearly onto [score_at_lower,
score_at_upper] and carries the status label for that interval.

Because the score and the label are read from the same row, a factor's
status always agrees with its score.

Conventions
-----------
- Rows are ordered by ascending ``lower`` and must be contiguous.
- A value on a shared boundary belongs to the earlier row, unless that row
  is ``lower_inclusive`` (half-open [lower, upper)), in which case it moves
  on to the next row. Savings runway reads "12 months or more", so its rows
  are lower-inclusive; the ratio tables read "0.4 or less".
- Values below the first row or above the last row clamp to the table ends.

Example
-------
>>> from finsight.bands import evaluate_band, CASH_FLOW_BANDS
>>> evaluate_band(0.5, CASH_FLOW_BANDS)
BandResult(score=75.0, label='Good', description=...)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

__all__ = [
    "Band",
    "BandResult",
    "evaluate_band",
    "classify",
    "CASH_FLOW_BANDS",
    "SAVINGS_BANDS",
    "DEBT_BANDS",
    "GOAL_STATUS_BANDS",
]


@dataclass(frozen=True)
class Band:
    """One row of a band table."""
    lower: float
    upper: float
    score_at_lower: float
    score_at_upper: float
    label: str
    description: str = ""
    lower_inclusive: bool = False

    def __post_init__(self):
        if self.upper <= self.lower:
            raise ValueError(
                f"Band upper ({self.upper}) must be > lower ({self.lower})"
            )


@dataclass(frozen=True)
class BandResult:
    """Score and status read from a single band."""
    score: float
    label: str
    description: str


def classify(value: float, bands: Sequence[Band]) -> Band:
    """Return the band row that *value* falls into (clamped to the ends)."""
    if not bands:
        raise ValueError("band table cannot be empty")
    if np.isnan(value):
        return bands[0]
    for band in bands:
        if value < band.upper or (value == band.upper and not band.lower_inclusive):
            return band
    return bands[-1]


def evaluate_band(value: float, bands: Sequence[Band]) -> BandResult:
    """
    Interpolate *value* inside its band.

    Parameters
    ----------
    value : float
        Ratio to score (expense ratio, months covered, DTI, ...).
    bands : sequence of Band
        Ordered, contiguous band table.

    Returns
    -------
    BandResult
        Score in the band's range plus the band's label and description.
    """
    band = classify(value, bands)
    x = float(np.clip(value, band.lower, band.upper)) if not np.isnan(value) else band.lower
    score = float(np.interp(
        x,
        [band.lower, band.upper],
        [band.score_at_lower, band.score_at_upper],
    ))
    return BandResult(score=score, label=band.label, description=band.description)


# ---------------------------------------------------------------------------
# Band tables
# ---------------------------------------------------------------------------

CASH_FLOW_BANDS: Tuple[Band, ...] = (
    Band(0.0, 0.40, 100.0, 85.0, "Excellent", "Spending is well under income"),
    Band(0.40, 0.60, 85.0, 65.0, "Good", "Healthy monthly surplus"),
    Band(0.60, 0.80, 65.0, 45.0, "Fair", "Moderate surplus"),
    Band(0.80, 0.95, 45.0, 20.0, "Tight", "Little room left each month"),
    Band(0.95, 1.00, 20.0, 5.0, "Strained", "Spending almost equals income"),
    Band(1.00, 2.00, 5.0, 0.0, "Critical", "Spending exceeds income"),
)
"""Expense ratio (expenses / income) to cash-flow score."""

SAVINGS_BANDS: Tuple[Band, ...] = (
    Band(0.0, 1.0, 0.0, 25.0, "Critical", "Less than a month of runway", lower_inclusive=True),
    Band(1.0, 3.0, 25.0, 50.0, "Low", "One to three months of runway", lower_inclusive=True),
    Band(3.0, 6.0, 50.0, 75.0, "Fair", "Three to six months of runway", lower_inclusive=True),
    Band(6.0, 12.0, 75.0, 95.0, "Good", "Six to twelve months of runway", lower_inclusive=True),
    Band(12.0, 24.0, 95.0, 100.0, "Excellent", "A year or more of runway", lower_inclusive=True),
)
"""Months of expenses covered by savings to savings-buffer score."""

DEBT_BANDS: Tuple[Band, ...] = (
    Band(0.0, 0.10, 100.0, 85.0, "Low", "Debt payments are a small share of income"),
    Band(0.10, 0.20, 85.0, 65.0, "Manageable", "Debt payments are manageable"),
    Band(0.20, 0.35, 65.0, 40.0, "Moderate", "Watch your debt-to-income ratio"),
    Band(0.35, 0.50, 40.0, 15.0, "High", "Heavy debt burden"),
    Band(0.50, 1.00, 15.0, 0.0, "Critical", "Debt payments dominate income"),
)
"""Debt-to-income ratio to debt-pressure score."""

GOAL_STATUS_BANDS: Tuple[Band, ...] = (
    Band(0.0, 40.0, 0.0, 40.0, "Starting", "Goals need momentum"),
    Band(40.0, 70.0, 40.0, 70.0, "On Track", "Steady progress on goals"),
    Band(70.0, 100.0, 70.0, 100.0, "Crushing It", "Consistent goal progress"),
)
"""Goal-progress score to status (identity scoring, labels only)."""
