# finsight/sandbox.py
"""
What-if sandbox module.

Purpose
-------
Lets a user move individual profile figures (income, savings, debt
payment, spending) and see the health score and goal timeline recomputed
on the changed snapshot, next to the unchanged one. The stored profile is
never touched: every run works on a copy made with ``dataclasses.replace``.

Overridable Fields
------------------
- Scalar profile fields: OVERRIDABLE_FIELDS
- One expense category by name: any of EXPENSE_CATEGORIES
- ``total_expenses``: sets the "other" category to whatever the other
  categories leave of the new total (never below 0), so fixed categories
  keep their values. Applied after the category overrides.

A field counts as changed when its sanitized value differs from the base
profile's, so setting a field back to its original value clears it.

Example
-------
>>> from finsight.sandbox import simulate_what_if
>>> result = simulate_what_if(profile, monthly_income=90_000, total_expenses=30_000)
>>> sorted(result.changed_fields)
['monthly_income', 'total_expenses']
>>> result.score_delta
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date
import logging
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from .exceptions import ValidationError
from .health import HealthScore, score_health
from .profile import EXPENSE_CATEGORIES, FinancialProfile
from .timeline import GoalTimeline, aggregate_goals
from .utils import sanitize_amount

__all__ = [
    "OVERRIDABLE_FIELDS",
    "WhatIfResult",
    "WhatIfSandbox",
    "apply_overrides",
    "field_value",
    "simulate_what_if",
]

logger = logging.getLogger(__name__)


OVERRIDABLE_FIELDS: Tuple[str, ...] = (
    "monthly_income",
    "current_savings",
    "savings_goal",
    "total_debt",
    "debt_payment_monthly",
    "monthly_budget",
)
"""Scalar FinancialProfile fields a what-if run may replace."""

TOTAL_EXPENSES = "total_expenses"
FLEX_CATEGORY = "other"


def _check_names(overrides: Mapping[str, float]) -> None:
    known = set(OVERRIDABLE_FIELDS) | set(EXPENSE_CATEGORIES) | {TOTAL_EXPENSES}
    unknown = sorted(set(overrides) - known)
    if unknown:
        options = ", ".join(OVERRIDABLE_FIELDS + EXPENSE_CATEGORIES + (TOTAL_EXPENSES,))
        raise ValidationError(
            f"Unknown what-if field(s) {', '.join(unknown)}. Expected one of: {options}"
        )


def field_value(profile: FinancialProfile, name: str) -> float:
    """Sanitized value of an overridable field."""
    if name == TOTAL_EXPENSES:
        return profile.total_expenses
    if name in EXPENSE_CATEGORIES:
        return profile.expense(name)
    return sanitize_amount(getattr(profile, name), name=name)


def apply_overrides(profile: FinancialProfile, overrides: Mapping[str, float]) -> FinancialProfile:
    """
    Return a copy of *profile* with *overrides* applied.

    Parameters
    ----------
    profile : FinancialProfile
        Base snapshot. Not modified.
    overrides : mapping of str to float
        Field name to new value (see module docstring for the names).

    Returns
    -------
    FinancialProfile

    Raises
    ------
    ValidationError
        If a name is not an overridable field.
    """
    _check_names(overrides)

    fields = {k: v for k, v in overrides.items() if k in OVERRIDABLE_FIELDS}
    expenses: Dict[str, float] = dict(profile.expenses)
    for category in EXPENSE_CATEGORIES:
        if category in overrides:
            expenses[category] = overrides[category]

    if TOTAL_EXPENSES in overrides:
        fixed = sum(
            sanitize_amount(amount, name=f"expenses[{category}]")
            for category, amount in expenses.items()
            if category != FLEX_CATEGORY
        )
        target = sanitize_amount(overrides[TOTAL_EXPENSES], name=TOTAL_EXPENSES)
        expenses[FLEX_CATEGORY] = max(0.0, target - fixed)

    return replace(profile, expenses=expenses, **fields)


@dataclass(frozen=True)
class WhatIfResult:
    """
    Outcome of a what-if run.

    Attributes
    ----------
    profile : FinancialProfile
        The changed snapshot.
    health : HealthScore
        Score of the changed snapshot.
    baseline_health : HealthScore
        Score of the unchanged snapshot.
    timeline : GoalTimeline
        Goal timeline of the changed snapshot.
    changed_fields : frozenset of str
        Fields whose value differs from the base profile.
    """
    profile: FinancialProfile
    health: HealthScore
    baseline_health: HealthScore
    timeline: GoalTimeline
    changed_fields: FrozenSet[str]

    @property
    def score_delta(self) -> int:
        """Change in total score (positive is better)."""
        return self.health.total_score - self.baseline_health.total_score

    @property
    def has_changes(self) -> bool:
        return bool(self.changed_fields)


def simulate_what_if(
    profile: FinancialProfile,
    overrides: Optional[Mapping[str, float]] = None,
    *,
    monthly_contribution: Optional[float] = None,
    today: Optional[date] = None,
    **kwargs: float,
) -> WhatIfResult:
    """
    Recompute health and goal timeline on a changed copy of *profile*.

    Parameters
    ----------
    profile : FinancialProfile
        Base snapshot.
    overrides : mapping, optional
        Field overrides; merged with keyword overrides (keywords win).
    monthly_contribution : float, optional
        Savings added per month for goal dates. Defaults to the changed
        profile's positive surplus.
    today : datetime.date, optional
        Reference date for projected goal dates.

    Returns
    -------
    WhatIfResult
    """
    merged: Dict[str, float] = dict(overrides or {})
    merged.update(kwargs)

    simulated = apply_overrides(profile, merged)
    changed = frozenset(
        name for name in merged
        if field_value(simulated, name) != field_value(profile, name)
    )

    if monthly_contribution is None:
        monthly_contribution = max(0.0, simulated.monthly_surplus)
    timeline = aggregate_goals(
        simulated.savings,
        simulated.short_term_goals,
        simulated.long_term_goals,
        monthly_contribution=monthly_contribution,
        today=today,
    )

    result = WhatIfResult(
        profile=simulated,
        health=score_health(simulated),
        baseline_health=score_health(profile),
        timeline=timeline,
        changed_fields=changed,
    )
    logger.debug(
        "What-if on %s: score %d -> %d",
        sorted(changed), result.baseline_health.total_score, result.health.total_score,
    )
    return result


class WhatIfSandbox:
    """
    Stateful sandbox that accumulates overrides on one base profile.

    Parameters
    ----------
    profile : FinancialProfile
        Base snapshot; kept unchanged.
    today : datetime.date, optional
        Reference date for projected goal dates.

    Examples
    --------
    >>> sandbox = WhatIfSandbox(profile)
    >>> sandbox.update(monthly_income=90_000).score_delta
    >>> sorted(sandbox.update(current_savings=200_000).changed_fields)
    ['current_savings', 'monthly_income']
    >>> sandbox.reset().has_changes
    False
    """

    def __init__(self, profile: FinancialProfile, today: Optional[date] = None):
        self.profile = profile
        self.today = today
        self._overrides: Dict[str, float] = {}

    @property
    def overrides(self) -> Dict[str, float]:
        return dict(self._overrides)

    def update(self, **overrides: float) -> WhatIfResult:
        """Add overrides and return the recomputed result."""
        _check_names(overrides)
        self._overrides.update(overrides)
        return self.result()

    def reset(self) -> WhatIfResult:
        """Drop every override."""
        self._overrides.clear()
        return self.result()

    def result(self) -> WhatIfResult:
        return simulate_what_if(self.profile, self._overrides, today=self.today)

    def __repr__(self) -> str:
        return f"WhatIfSandbox(overrides={sorted(self._overrides)})"
