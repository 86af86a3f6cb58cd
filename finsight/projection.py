# finsight/projection.py
"""
Wealth projection module.

Purpose
-------
Closed-form projection of an investment corpus plus a fixed monthly
contribution (SIP) under one of three fixed risk profiles.

Mathematical Framework
----------------------
With annual rate r, monthly rate i = r/12, horizon n = 12·years:

Lump sum:
    FV_lump = C0 · (1 + r)^years
Contributions (annuity due, monthly compounding):
    FV_sip  = c · ((1 + i)^n - 1) / i · (1 + i)       (i > 0)
    FV_sip  = c · n                                    (i = 0)
Totals:
    nominal  = FV_lump + FV_sip
    invested = C0 + c · n
    gain     = nominal - invested
    real     = nominal / (1 + π)^years,  π = INFLATION_RATE (6%)

The growth curve is a coarser, year-by-year approximation used only for
chart shape:
    V_0 = C0,   V_{y+1} = (V_y + 12c) · (1 + r)

Example
-------
>>> from finsight.projection import project_wealth, growth_curve
>>> result = project_wealth(0, 5_000, 5, "balanced")
>>> result.invested_amount
300000.0
>>> [p.year for p in growth_curve(0, 5_000, 3, "balanced")]
[0, 1, 2, 3]
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Dict, Iterator, Union

import numpy as np
import pandas as pd

from .constants import (
    AGGRESSIVE_RATE,
    BALANCED_RATE,
    CONSERVATIVE_RATE,
    INFLATION_RATE,
    MAX_PROJECTION_YEARS,
    MONTHS_PER_YEAR,
)
from .exceptions import ValidationError
from .utils import sanitize_amount

__all__ = [
    "RiskProfile",
    "RiskProfileParams",
    "RISK_PROFILES",
    "ProjectionResult",
    "GrowthPoint",
    "WealthProjectionCalculator",
    "project_wealth",
    "growth_curve",
    "growth_curve_frame",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Risk Profiles
# ---------------------------------------------------------------------------

class RiskProfile(str, Enum):
    """Closed set of investment risk profiles."""

    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"

    @classmethod
    def parse(cls, value: Union[str, "RiskProfile"]) -> "RiskProfile":
        """Resolve a profile name; unknown names raise ValidationError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            options = ", ".join(p.value for p in cls)
            raise ValidationError(
                f"Unknown risk profile {value!r}. Expected one of: {options}"
            ) from None

    @property
    def annual_rate(self) -> float:
        return RISK_PROFILES[self].annual_rate


@dataclass(frozen=True)
class RiskProfileParams:
    """Policy parameters attached to a risk profile."""
    label: str
    annual_rate: float
    description: str
    equity_pct: int
    debt_pct: int


RISK_PROFILES: Dict[RiskProfile, RiskProfileParams] = {
    RiskProfile.CONSERVATIVE: RiskProfileParams(
        label="Conservative",
        annual_rate=CONSERVATIVE_RATE,
        description="Low risk, steady growth. Focus on capital preservation.",
        equity_pct=20,
        debt_pct=80,
    ),
    RiskProfile.BALANCED: RiskProfileParams(
        label="Balanced",
        annual_rate=BALANCED_RATE,
        description="Moderate risk, a mix of stability and performance.",
        equity_pct=50,
        debt_pct=50,
    ),
    RiskProfile.AGGRESSIVE: RiskProfileParams(
        label="Aggressive",
        annual_rate=AGGRESSIVE_RATE,
        description="High risk, maximum growth. Focus on long-term wealth creation.",
        equity_pct=80,
        debt_pct=20,
    ),
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectionResult:
    """
    Projected value of a corpus plus monthly contributions.

    Attributes
    ----------
    nominal_value : float
        Future value in nominal terms.
    real_value : float
        Nominal value deflated by INFLATION_RATE over the horizon.
    invested_amount : float
        Corpus plus all contributions.
    gain : float
        nominal_value - invested_amount (signed).
    annual_rate : float
        Return rate of the risk profile used.
    years : float
        Projection horizon.
    """
    nominal_value: float
    real_value: float
    invested_amount: float
    gain: float
    annual_rate: float
    years: float


@dataclass(frozen=True)
class GrowthPoint:
    """One yearly point of the growth curve."""
    year: int
    projected_value: float
    invested_value: float


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def _horizon(years: float) -> float:
    """Sanitized horizon, capped at MAX_PROJECTION_YEARS."""
    horizon = sanitize_amount(years, name="years")
    if horizon > MAX_PROJECTION_YEARS:
        logger.debug("Horizon of %.1f years capped at %d", horizon, MAX_PROJECTION_YEARS)
        return float(MAX_PROJECTION_YEARS)
    return horizon


def _sip_future_value(contribution: float, monthly_rate: float, months: float) -> float:
    """Annuity-due future value of a monthly contribution."""
    if contribution <= 0 or months <= 0:
        return 0.0
    if monthly_rate == 0:
        return contribution * months
    growth = np.power(1.0 + monthly_rate, months)
    return float(contribution * (growth - 1.0) / monthly_rate * (1.0 + monthly_rate))


def project_wealth(
    current_corpus: float,
    monthly_contribution: float,
    years: float,
    risk_profile: Union[str, RiskProfile] = RiskProfile.BALANCED,
) -> ProjectionResult:
    """
    Project corpus and SIP contributions over *years*.

    Parameters
    ----------
    current_corpus : float
        Amount invested today (lump sum).
    monthly_contribution : float
        Fixed monthly investment.
    years : float
        Horizon in years.
    risk_profile : {"conservative", "balanced", "aggressive"} or RiskProfile

    Returns
    -------
    ProjectionResult

    Notes
    -----
    Horizons beyond MAX_PROJECTION_YEARS (50) are capped there.
    Negative or non-finite inputs are treated as 0, so
    ``project_wealth(0, 0, y)`` is all zeros and
    ``project_wealth(c, 0, 0).nominal_value == c``.
    """
    profile = RiskProfile.parse(risk_profile)
    corpus = sanitize_amount(current_corpus, name="current_corpus")
    contribution = sanitize_amount(monthly_contribution, name="monthly_contribution")
    horizon = _horizon(years)

    annual_rate = profile.annual_rate
    monthly_rate = annual_rate / MONTHS_PER_YEAR
    months = horizon * MONTHS_PER_YEAR

    fv_lump = corpus * float(np.power(1.0 + annual_rate, horizon))
    fv_sip = _sip_future_value(contribution, monthly_rate, months)

    nominal = fv_lump + fv_sip
    invested = corpus + contribution * months
    real = nominal / float(np.power(1.0 + INFLATION_RATE, horizon))

    logger.debug(
        "Projected %s over %.1f years: nominal=%.2f invested=%.2f",
        profile.value, horizon, nominal, invested,
    )

    return ProjectionResult(
        nominal_value=nominal,
        real_value=real,
        invested_amount=invested,
        gain=nominal - invested,
        annual_rate=annual_rate,
        years=horizon,
    )


def growth_curve(
    current_corpus: float,
    monthly_contribution: float,
    years: int,
    risk_profile: Union[str, RiskProfile] = RiskProfile.BALANCED,
) -> Iterator[GrowthPoint]:
    """
    Yield one GrowthPoint per year from 0 to *years* inclusive.

    Uses simple annual re-compounding, ``V <- (V + 12c)(1 + r)``. The curve
    is for trend shape only; final figures come from project_wealth().
    """
    annual_rate = RiskProfile.parse(risk_profile).annual_rate
    corpus = sanitize_amount(current_corpus, name="current_corpus")
    contribution = sanitize_amount(monthly_contribution, name="monthly_contribution")
    yearly = contribution * MONTHS_PER_YEAR
    n_years = int(_horizon(years))

    value = corpus
    invested = corpus
    yield GrowthPoint(year=0, projected_value=value, invested_value=invested)
    for year in range(1, n_years + 1):
        value = (value + yearly) * (1.0 + annual_rate)
        invested += yearly
        yield GrowthPoint(year=year, projected_value=value, invested_value=invested)


def growth_curve_frame(
    current_corpus: float,
    monthly_contribution: float,
    years: int,
    risk_profile: Union[str, RiskProfile] = RiskProfile.BALANCED,
) -> pd.DataFrame:
    """Growth curve as a DataFrame indexed by year."""
    points = growth_curve(current_corpus, monthly_contribution, years, risk_profile)
    frame = pd.DataFrame(
        [(p.year, p.projected_value, p.invested_value) for p in points],
        columns=["year", "projected_value", "invested_value"],
    )
    return frame.set_index("year")


class WealthProjectionCalculator:
    """
    Projection calculator bound to a risk profile.

    Examples
    --------
    >>> calc = WealthProjectionCalculator("aggressive")
    >>> result = calc.project(100_000, 10_000, 10)
    >>> list(calc.curve(100_000, 10_000, 10))[-1].year
    10
    """

    def __init__(self, risk_profile: Union[str, RiskProfile] = RiskProfile.BALANCED):
        self.risk_profile = RiskProfile.parse(risk_profile)

    @property
    def params(self) -> RiskProfileParams:
        return RISK_PROFILES[self.risk_profile]

    def project(
        self,
        current_corpus: float,
        monthly_contribution: float,
        years: float,
    ) -> ProjectionResult:
        return project_wealth(current_corpus, monthly_contribution, years, self.risk_profile)

    def curve(
        self,
        current_corpus: float,
        monthly_contribution: float,
        years: int,
    ) -> Iterator[GrowthPoint]:
        return growth_curve(current_corpus, monthly_contribution, years, self.risk_profile)

    def __repr__(self) -> str:
        return f"WealthProjectionCalculator(risk_profile={self.risk_profile.value!r})"
