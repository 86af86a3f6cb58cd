# finsight/health.py
"""
Financial health scoring module.

Purpose
-------
Composite 0-100 health score built from four independently computed
factors, each scored through the shared band tables in ``finsight.bands``.

Factors
-------
- Cash flow (40%):       expense ratio = expenses / income
- Savings buffer (20%):  months covered = savings / monthly burn
- Debt pressure (20%):   DTI = monthly debt payment / income
- Goal progress (20%):   average goal progress plus completion bonus

Composite:
    total = clamp(Σ w_k · s_k + stability_bonus, 0, 100), rounded half-up

The stability bonus rewards large absolute surpluses, which pure ratios
undervalue: 5/10/15 points at 50k/100k/500k monthly surplus, plus up to 5
more as the surplus grows from 2x to 4x monthly expenses.

Degenerate inputs never raise. Zero income yields an "Unknown" cash-flow
factor (50); debt with zero income yields a fixed debt score (10); no
goals yields a neutral goal score (40).

Example
-------
>>> from finsight.profile import FinancialProfile
>>> from finsight.health import score_health
>>> profile = FinancialProfile(monthly_income=50_000, expenses={"rent": 20_000})
>>> health = score_health(profile)
>>> [f.score for f in health.breakdown]
[85.0, 0.0, 100.0, 40.0]
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Optional, Tuple

from .bands import (
    CASH_FLOW_BANDS,
    DEBT_BANDS,
    GOAL_STATUS_BANDS,
    SAVINGS_BANDS,
    classify,
    evaluate_band,
)
from .constants import (
    COVERAGE_BONUS_MAX,
    COVERAGE_BONUS_START,
    FACTOR_COLORS,
    FACTOR_WEIGHTS,
    FALLBACK_MONTHLY_BURN,
    GOAL_COMPLETION_BONUS,
    GOAL_COMPLETION_BONUS_CAP,
    GOAL_PROGRESS_SCALE,
    INCOME_BURN_FRACTION,
    NO_GOALS_SCORE,
    NO_INCOME_DEBT_SCORE,
    SAVINGS_GOAL_BONUS,
    STABILITY_THRESHOLDS,
    UNKNOWN_CASH_FLOW_SCORE,
)
from .profile import FinancialProfile
from .utils import clamp, round_half_up, safe_divide, sanitize_amount

__all__ = [
    "HealthFactor",
    "HealthScore",
    "FinancialHealthScorer",
    "score_health",
    "cash_flow_factor",
    "savings_factor",
    "debt_factor",
    "goal_factor",
    "stability_bonus",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthFactor:
    """
    One component of the health score.

    Attributes
    ----------
    id : str
        Stable identifier ("cashflow", "savings", "debt", "goals").
    label : str
        Display name.
    score : float
        Factor score in [0, 100].
    status : str
        Qualitative band label ("Excellent", "Critical", ...).
    description : str
        Short explanation of the band.
    weight : float
        Weight in the composite, in [0, 1].
    color : str
        Display color.
    """
    id: str
    label: str
    score: float
    status: str
    description: str
    weight: float
    color: str


@dataclass(frozen=True)
class HealthScore:
    """Composite score with its four-factor breakdown."""
    total_score: int
    breakdown: Tuple[HealthFactor, ...]
    stability_bonus: float = 0.0

    def factor(self, factor_id: str) -> HealthFactor:
        """Look up a factor by id."""
        for f in self.breakdown:
            if f.id == factor_id:
                return f
        raise KeyError(factor_id)


def _factor(factor_id: str, label: str, score: float, status: str, description: str) -> HealthFactor:
    return HealthFactor(
        id=factor_id,
        label=label,
        score=clamp(score),
        status=status,
        description=description,
        weight=FACTOR_WEIGHTS[factor_id],
        color=FACTOR_COLORS[factor_id],
    )


# ---------------------------------------------------------------------------
# Factors
# ---------------------------------------------------------------------------

def cash_flow_factor(profile: FinancialProfile) -> HealthFactor:
    """Score expenses against income."""
    income = profile.income
    if income <= 0:
        return _factor(
            "cashflow", "Cash Flow", UNKNOWN_CASH_FLOW_SCORE,
            "Unknown", "Add income to track cash flow",
        )
    ratio = profile.total_expenses / income
    band = evaluate_band(ratio, CASH_FLOW_BANDS)
    return _factor("cashflow", "Cash Flow", band.score, band.label, band.description)


def _monthly_burn(profile: FinancialProfile) -> float:
    expenses = profile.total_expenses
    if expenses > 0:
        return expenses
    if profile.income > 0:
        return INCOME_BURN_FRACTION * profile.income
    return FALLBACK_MONTHLY_BURN


def savings_factor(profile: FinancialProfile) -> HealthFactor:
    """Score savings runway in months of burn."""
    savings = profile.savings
    months_covered = safe_divide(savings, _monthly_burn(profile))
    band = evaluate_band(months_covered, SAVINGS_BANDS)

    score = band.score
    goal = sanitize_amount(profile.savings_goal, name="savings_goal")
    if goal > 0 and savings >= goal:
        score = min(100.0, score + SAVINGS_GOAL_BONUS)

    return _factor("savings", "Savings", score, band.label, band.description)


def debt_factor(profile: FinancialProfile) -> HealthFactor:
    """Score debt service against income."""
    if not profile.has_debt:
        return _factor("debt", "Debt Mgmt", 100.0, "Debt Free", "No outstanding debt")

    income = profile.income
    if income <= 0:
        return _factor(
            "debt", "Debt Mgmt", NO_INCOME_DEBT_SCORE,
            "Critical", "Debt without income",
        )

    payment = sanitize_amount(profile.debt_payment_monthly, name="debt_payment_monthly")
    band = evaluate_band(payment / income, DEBT_BANDS)
    return _factor("debt", "Debt Mgmt", band.score, band.label, band.description)


def goal_factor(profile: FinancialProfile) -> HealthFactor:
    """Score average goal progress plus a completion bonus."""
    goals = profile.all_goals
    if not goals:
        return _factor("goals", "Goals", NO_GOALS_SCORE, "No Goals", "Set goals to track")

    average = sum(g.progress for g in goals) / len(goals)
    completed = sum(1 for g in goals if g.is_completed)
    bonus = min(GOAL_COMPLETION_BONUS_CAP, GOAL_COMPLETION_BONUS * completed)
    score = clamp(average * GOAL_PROGRESS_SCALE + bonus)

    status = classify(score, GOAL_STATUS_BANDS)
    return _factor("goals", "Goals", score, status.label, status.description)


def stability_bonus(profile: FinancialProfile) -> float:
    """
    Bonus points for large absolute surpluses.

    Returns
    -------
    float
        0, 5, 10 or 15 by surplus tier, plus up to COVERAGE_BONUS_MAX when
        the surplus covers expenses more than COVERAGE_BONUS_START times.
    """
    surplus = profile.monthly_surplus
    if surplus <= 0:
        return 0.0

    bonus = 0.0
    for threshold, points in STABILITY_THRESHOLDS:
        if surplus >= threshold:
            bonus = points
            break

    expenses = profile.total_expenses
    if expenses <= 0:
        bonus += COVERAGE_BONUS_MAX
    else:
        coverage = surplus / expenses
        if coverage > COVERAGE_BONUS_START:
            excess = (coverage - COVERAGE_BONUS_START) / COVERAGE_BONUS_START
            bonus += min(COVERAGE_BONUS_MAX, COVERAGE_BONUS_MAX * excess)

    return bonus


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

def score_health(profile: Optional[FinancialProfile]) -> HealthScore:
    """
    Compute the composite health score of *profile*.

    Parameters
    ----------
    profile : FinancialProfile or None
        A missing profile scores as an empty one.

    Returns
    -------
    HealthScore
        ``total_score`` is an int in [0, 100]; ``breakdown`` holds the
        cash-flow, savings, debt and goal factors in that order.
    """
    if profile is None:
        profile = FinancialProfile()

    breakdown = (
        cash_flow_factor(profile),
        savings_factor(profile),
        debt_factor(profile),
        goal_factor(profile),
    )
    weighted = sum(f.score * f.weight for f in breakdown)
    bonus = stability_bonus(profile)
    total = round_half_up(clamp(weighted + bonus))

    logger.debug(
        "Health score %d (weighted=%.2f, bonus=%.1f)", total, weighted, bonus
    )

    return HealthScore(total_score=total, breakdown=breakdown, stability_bonus=bonus)


class FinancialHealthScorer:
    """
    Callable wrapper around score_health().

    Examples
    --------
    >>> scorer = FinancialHealthScorer()
    >>> scorer.score(profile).total_score
    """

    def score(self, profile: Optional[FinancialProfile]) -> HealthScore:
        return score_health(profile)

    def __call__(self, profile: Optional[FinancialProfile]) -> HealthScore:
        return self.score(profile)
