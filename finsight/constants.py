"""
Global constants for FinSight.

Purpose
-------
Centralizes the policy constants of the engine: iteration caps, model
assumptions (inflation, return rates), scoring weights and thresholds.
These are fixed model parameters, not user input.

Usage
-----
>>> from finsight.constants import MAX_PAYOFF_MONTHS, INFLATION_RATE
>>>
>>> result = simulate_payoff(debts, max_months=MAX_PAYOFF_MONTHS)
>>> real = nominal / (1 + INFLATION_RATE) ** years

Categories
----------
- Time: months per year, debt simulation cap
- Projection: inflation assumption, risk-profile return rates
- Health score: factor weights, fallbacks, bonus thresholds
- Time machine: long-range projection assumptions
"""

from typing import Dict, Tuple

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    "MAX_PAYOFF_MONTHS",
    # Projection
    "MAX_PROJECTION_YEARS",
    "INFLATION_RATE",
    "CONSERVATIVE_RATE",
    "BALANCED_RATE",
    "AGGRESSIVE_RATE",
    # Health score
    "FACTOR_WEIGHTS",
    "FACTOR_COLORS",
    "FALLBACK_MONTHLY_BURN",
    "INCOME_BURN_FRACTION",
    "SAVINGS_GOAL_BONUS",
    "NO_INCOME_DEBT_SCORE",
    "UNKNOWN_CASH_FLOW_SCORE",
    "NO_GOALS_SCORE",
    "GOAL_PROGRESS_SCALE",
    "GOAL_COMPLETION_BONUS",
    "GOAL_COMPLETION_BONUS_CAP",
    "STABILITY_THRESHOLDS",
    "COVERAGE_BONUS_START",
    "COVERAGE_BONUS_MAX",
    # Time machine
    "TIME_MACHINE_YEARS",
    "TIME_MACHINE_INFLATION",
    "TIME_MACHINE_SAFE_RATE",
    "TIME_MACHINE_GROWTH_RATE",
    "TIME_MACHINE_FLEXIBLE_CUT",
    "TIME_MACHINE_DEBT_DECAY",
    "TIME_MACHINE_DEBT_GROWTH",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (rate and horizon conversions)."""

MAX_PAYOFF_MONTHS: int = 360
"""Debt simulation cap (30 years). Reaching it means the plan is insufficient."""


# =============================================================================
# Projection
# =============================================================================

MAX_PROJECTION_YEARS: int = 50
"""Longest projection horizon; longer horizons are shortened to it."""

INFLATION_RATE: float = 0.06
"""Annual inflation used to deflate nominal projections to real values."""

CONSERVATIVE_RATE: float = 0.07
"""Annual nominal return of the conservative risk profile."""

BALANCED_RATE: float = 0.10
"""Annual nominal return of the balanced risk profile."""

AGGRESSIVE_RATE: float = 0.14
"""Annual nominal return of the aggressive risk profile."""


# =============================================================================
# Health Score
# =============================================================================

FACTOR_WEIGHTS: Dict[str, float] = {
    "cashflow": 0.40,
    "savings": 0.20,
    "debt": 0.20,
    "goals": 0.20,
}
"""Composite weights per health factor id (sum to 1)."""

FACTOR_COLORS: Dict[str, str] = {
    "cashflow": "#10b981",
    "savings": "#3b82f6",
    "debt": "#f59e0b",
    "goals": "#a855f7",
}
"""Display color per health factor id."""

FALLBACK_MONTHLY_BURN: float = 10_000.0
"""Monthly burn assumed when neither expenses nor income are known."""

INCOME_BURN_FRACTION: float = 0.6
"""Share of income assumed as burn when expenses are not filled in."""

SAVINGS_GOAL_BONUS: float = 10.0
"""Savings-factor bonus when current savings reach a positive savings goal."""

NO_INCOME_DEBT_SCORE: float = 10.0
"""Debt-factor score when debt exists but there is no income."""

UNKNOWN_CASH_FLOW_SCORE: float = 50.0
"""Cash-flow score when income is zero (ratio undefined)."""

NO_GOALS_SCORE: float = 40.0
"""Goal-factor score when no goals exist."""

GOAL_PROGRESS_SCALE: float = 80.0
"""Points awarded for 100% average goal progress."""

GOAL_COMPLETION_BONUS: float = 10.0
"""Points per completed goal."""

GOAL_COMPLETION_BONUS_CAP: float = 20.0
"""Maximum completion bonus."""

STABILITY_THRESHOLDS: Tuple[Tuple[float, float], ...] = (
    (500_000.0, 15.0),
    (100_000.0, 10.0),
    (50_000.0, 5.0),
)
"""(minimum monthly surplus, bonus) pairs, checked from the top."""

COVERAGE_BONUS_START: float = 2.0
"""Surplus-to-expense coverage above which the coverage bonus starts."""

COVERAGE_BONUS_MAX: float = 5.0
"""Maximum coverage bonus, reached at twice COVERAGE_BONUS_START."""


# =============================================================================
# Time Machine
# =============================================================================

TIME_MACHINE_YEARS: int = 10
"""Default horizon of the current-vs-optimized projection."""

TIME_MACHINE_INFLATION: float = 0.05
"""Yearly growth of income, expenses and surplus in the long-range view."""

TIME_MACHINE_SAFE_RATE: float = 0.035
"""Return on savings along the current path."""

TIME_MACHINE_GROWTH_RATE: float = 0.12
"""Return on savings along the optimized path."""

TIME_MACHINE_FLEXIBLE_CUT: float = 0.15
"""Reduction applied to flexible (non-rent) expenses on the optimized path."""

TIME_MACHINE_DEBT_DECAY: float = 0.10
"""Yearly debt reduction along the current path."""

TIME_MACHINE_DEBT_GROWTH: float = 0.05
"""Yearly growth of debt that the optimized surplus could not retire."""
