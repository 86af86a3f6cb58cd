# finsight/time_machine.py
"""
Long-range "time machine" projection.

Purpose
-------
Contrasts two deterministic ten-year paths for the same profile:

- Current path: today's habits continue. The monthly surplus grows with
  inflation, savings earn a safe rate and debt shrinks slowly.
- Optimized path: flexible (non-rent) spending is trimmed, the surplus
  clears debt first and the rest is invested at a growth rate.

Yearly Step
-----------
For year y = 1..N, with inflation π, surplus S (monthly):

Current:
    D ← D · (1 - decay)
    W ← W · (1 + r_safe) + 12·S·(1 + π)^{y-1}

Optimized (S' from trimmed expenses):
    X  = 12·S'·(1 + π)^{y-1}
    if X ≥ D:  X ← X - D,  D ← 0
    else:      D ← (D - X)·(1 + g_debt),  X ← 0
    W ← W · (1 + r_growth) + X

The horizon cards inflate today's income and expenses by (1 + π)^N.

Example
-------
>>> from finsight.time_machine import project_time_machine
>>> tm = project_time_machine(profile, years=10, start_year=2026)
>>> tm.optimized_path[-1].year
2036
>>> tm.wealth_gap
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
import logging
from typing import Dict, List, Optional, Tuple

from .constants import (
    MONTHS_PER_YEAR,
    TIME_MACHINE_DEBT_DECAY,
    TIME_MACHINE_DEBT_GROWTH,
    TIME_MACHINE_FLEXIBLE_CUT,
    TIME_MACHINE_GROWTH_RATE,
    TIME_MACHINE_INFLATION,
    TIME_MACHINE_SAFE_RATE,
    TIME_MACHINE_YEARS,
)
from .profile import FinancialProfile
from .utils import sanitize_amount

__all__ = [
    "YearSnapshot",
    "BudgetCard",
    "TimeMachineProjection",
    "project_time_machine",
]

logger = logging.getLogger(__name__)

FIXED_CATEGORIES = ("rent",)


@dataclass(frozen=True)
class YearSnapshot:
    """Balances at the end of a projected year."""
    year: int
    savings: float
    debt: float
    net_worth: float


@dataclass(frozen=True)
class BudgetCard:
    """Monthly budget at the end of the horizon, in future money."""
    monthly_income: float
    monthly_expenses: float
    net_balance: float
    savings: float
    debt: float
    net_worth: float
    breakdown: Dict[str, float]


@dataclass(frozen=True)
class TimeMachineProjection:
    """
    Current-habits vs optimized projection.

    Attributes
    ----------
    current_path, optimized_path : tuple of YearSnapshot
        One snapshot per projected year.
    current_card, optimized_card : BudgetCard
        Budget and balances at the horizon.
    monthly_savings_unlocked : float
        Extra monthly surplus created by trimming flexible spending.
    wealth_gap : float
        Optimized minus current net worth at the horizon (signed).
    """
    current_path: Tuple[YearSnapshot, ...]
    optimized_path: Tuple[YearSnapshot, ...]
    current_card: BudgetCard
    optimized_card: BudgetCard
    monthly_savings_unlocked: float
    wealth_gap: float


def _optimized_breakdown(breakdown: Dict[str, float]) -> Dict[str, float]:
    return {
        category: amount if category in FIXED_CATEGORIES
        else amount * (1.0 - TIME_MACHINE_FLEXIBLE_CUT)
        for category, amount in breakdown.items()
    }


def _card(
    income: float,
    breakdown: Dict[str, float],
    fallback_expenses: float,
    inflation_factor: float,
    final: YearSnapshot,
) -> BudgetCard:
    expenses = sum(breakdown.values()) or fallback_expenses
    future_income = income * inflation_factor
    future_expenses = expenses * inflation_factor
    return BudgetCard(
        monthly_income=future_income,
        monthly_expenses=future_expenses,
        net_balance=future_income - future_expenses,
        savings=final.savings,
        debt=final.debt,
        net_worth=final.net_worth,
        breakdown={k: v * inflation_factor for k, v in breakdown.items()},
    )


def project_time_machine(
    profile: FinancialProfile,
    years: int = TIME_MACHINE_YEARS,
    start_year: Optional[int] = None,
) -> TimeMachineProjection:
    """
    Project the current and optimized paths of *profile*.

    Parameters
    ----------
    profile : FinancialProfile
    years : int, default 10
        Number of projected years (at least 1).
    start_year : int, optional
        Calendar year of "today"; snapshots are labeled start_year + y.
        Defaults to the current year.

    Returns
    -------
    TimeMachineProjection
    """
    n_years = max(1, int(years))
    base_year = start_year if start_year is not None else date.today().year

    income = profile.income
    breakdown = {
        category: sanitize_amount(amount, name=f"expenses[{category}]")
        for category, amount in profile.expenses.items()
    }
    expenses = profile.effective_expenses
    surplus = max(0.0, income - expenses)

    optimized = _optimized_breakdown(breakdown)
    optimized_expenses = sum(optimized.values()) if sum(breakdown.values()) > 0 else expenses
    optimized_surplus = max(0.0, income - optimized_expenses)

    start_debt = sanitize_amount(profile.total_debt, name="total_debt")
    c_savings, c_debt = profile.savings, start_debt
    o_savings, o_debt = profile.savings, start_debt
    current_path: List[YearSnapshot] = []
    optimized_path: List[YearSnapshot] = []

    for year in range(1, n_years + 1):
        growth = (1.0 + TIME_MACHINE_INFLATION) ** (year - 1)

        # Current habits
        if c_debt > 0:
            c_debt = max(0.0, c_debt * (1.0 - TIME_MACHINE_DEBT_DECAY))
        c_savings = c_savings * (1.0 + TIME_MACHINE_SAFE_RATE) + surplus * MONTHS_PER_YEAR * growth
        current_path.append(YearSnapshot(base_year + year, c_savings, c_debt, c_savings - c_debt))

        # Optimized: debt first, then invest
        available = optimized_surplus * MONTHS_PER_YEAR * growth
        if o_debt > 0:
            if available >= o_debt:
                available -= o_debt
                o_debt = 0.0
            else:
                o_debt = (o_debt - available) * (1.0 + TIME_MACHINE_DEBT_GROWTH)
                available = 0.0
        o_savings = o_savings * (1.0 + TIME_MACHINE_GROWTH_RATE) + available
        optimized_path.append(YearSnapshot(base_year + year, o_savings, o_debt, o_savings - o_debt))

    inflation_factor = (1.0 + TIME_MACHINE_INFLATION) ** n_years
    current_card = _card(income, breakdown, expenses, inflation_factor, current_path[-1])
    optimized_card = _card(income, optimized, optimized_expenses, inflation_factor, optimized_path[-1])
    wealth_gap = optimized_path[-1].net_worth - current_path[-1].net_worth

    logger.debug("Time machine over %d years: wealth gap %.2f", n_years, wealth_gap)

    return TimeMachineProjection(
        current_path=tuple(current_path),
        optimized_path=tuple(optimized_path),
        current_card=current_card,
        optimized_card=optimized_card,
        monthly_savings_unlocked=optimized_surplus - surplus,
        wealth_gap=wealth_gap,
    )
