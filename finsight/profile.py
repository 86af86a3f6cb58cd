# finsight/profile.py
"""
Financial profile data model.

Purpose
-------
Plain, immutable records describing a user's financial snapshot as supplied
by the surrounding application: income, per-category expenses, savings,
debts and goals. Every calculator in FinSight consumes these records and
nothing else.

Design Principles
-----------------
- Immutable snapshots: all records are frozen dataclasses
- Read-only: the engine never mutates or persists a profile
- Tolerant: numeric fields are sanitized where they are consumed, so a
  profile with missing or negative values still scores and projects

Example
-------
>>> from finsight.profile import FinancialProfile, Goal, Debt
>>> profile = FinancialProfile(
...     monthly_income=80_000,
...     expenses={"rent": 20_000, "food": 8_000},
...     current_savings=150_000,
...     short_term_goals=(Goal(id="g1", title="Laptop", target_amount=60_000),),
...     debts=(Debt("Card", balance=40_000, annual_rate=0.36, min_payment=2_000),),
... )
>>> profile.total_expenses
28000.0
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping, Optional, Tuple

from .utils import sanitize_amount

__all__ = [
    "EXPENSE_CATEGORIES",
    "Debt",
    "Goal",
    "GoalType",
    "FinancialProfile",
]


EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "rent",
    "food",
    "transportation",
    "utilities",
    "other",
)
"""Expense categories tracked by the dashboard. Others are still summed."""


class GoalType(str, Enum):
    """Which goal list a goal came from."""

    SHORT_TERM = "Short-term"
    LONG_TERM = "Long-term"


@dataclass(frozen=True)
class Debt:
    """
    A single debt line.

    Parameters
    ----------
    name : str
        Display name (e.g., "Credit card").
    balance : float
        Outstanding balance, expected >= 0.
    annual_rate : float
        Annual interest rate as a decimal (0.18 for 18% APR).
    min_payment : float
        Required minimum monthly payment, expected >= 0.
    category : str, default "other"
        Free-form category (credit_card, student_loan, ...).
    id : str, default ""
        Identifier assigned by the profile store.
    """
    name: str
    balance: float
    annual_rate: float
    min_payment: float
    category: str = "other"
    id: str = ""


@dataclass(frozen=True)
class Goal:
    """
    A savings goal.

    Parameters
    ----------
    id : str
        Identifier assigned by the profile store.
    title : str
        Display title.
    target_amount : float
        Amount to reach. Goals with target <= 0 are ignored by the timeline.
    current_amount : float, default 0.0
        Amount already set aside for this goal.
    is_completed : bool, default False
        Completion flag; completed goals count as full progress.
    deadline : datetime.date, optional
        User-chosen deadline, carried through for display.
    priority : str, default "medium"
    category : str, default "savings"
    """
    id: str
    title: str
    target_amount: float
    current_amount: float = 0.0
    is_completed: bool = False
    deadline: Optional[date] = None
    priority: str = "medium"
    category: str = "savings"

    @property
    def progress(self) -> float:
        """Fraction of the target reached, in [0, 1]. Completed goals are 1."""
        if self.is_completed:
            return 1.0
        target = sanitize_amount(self.target_amount, name="target_amount")
        if target <= 0:
            return 0.0
        current = sanitize_amount(self.current_amount, name="current_amount")
        return min(1.0, current / target)


@dataclass(frozen=True)
class FinancialProfile:
    """
    Snapshot of a user's finances.

    Parameters
    ----------
    monthly_income : float
        Net monthly income.
    expenses : Mapping[str, float]
        Monthly expenses per category (see EXPENSE_CATEGORIES).
    current_savings : float
        Liquid savings today.
    savings_goal : float
        Overall savings target (0 when not set).
    total_debt : float
        Sum of outstanding debt balances.
    debt_payment_monthly : float
        Total monthly debt service.
    short_term_goals, long_term_goals : tuple of Goal
    debts : tuple of Debt
        Individual debt lines for payoff simulation.
    monthly_budget : float
        Planned monthly spending; stands in for expenses when no category
        is filled in.
    """
    monthly_income: float = 0.0
    expenses: Mapping[str, float] = field(default_factory=dict)
    current_savings: float = 0.0
    savings_goal: float = 0.0
    total_debt: float = 0.0
    debt_payment_monthly: float = 0.0
    short_term_goals: Tuple[Goal, ...] = ()
    long_term_goals: Tuple[Goal, ...] = ()
    debts: Tuple[Debt, ...] = ()
    monthly_budget: float = 0.0

    @property
    def income(self) -> float:
        """Sanitized monthly income."""
        return sanitize_amount(self.monthly_income, name="monthly_income")

    @property
    def savings(self) -> float:
        """Sanitized current savings."""
        return sanitize_amount(self.current_savings, name="current_savings")

    @property
    def total_expenses(self) -> float:
        """Sum of sanitized per-category monthly expenses."""
        return float(sum(
            sanitize_amount(amount, name=f"expenses[{category}]")
            for category, amount in self.expenses.items()
        ))

    @property
    def effective_expenses(self) -> float:
        """Category total, or the monthly budget when no category is set."""
        total = self.total_expenses
        if total > 0:
            return total
        return sanitize_amount(self.monthly_budget, name="monthly_budget")

    @property
    def monthly_surplus(self) -> float:
        """Income minus expenses (signed)."""
        return self.income - self.total_expenses

    @property
    def has_debt(self) -> bool:
        return (
            sanitize_amount(self.total_debt, name="total_debt") > 0
            or sanitize_amount(self.debt_payment_monthly, name="debt_payment_monthly") > 0
        )

    @property
    def all_goals(self) -> Tuple[Goal, ...]:
        """Short-term goals followed by long-term goals."""
        return tuple(self.short_term_goals) + tuple(self.long_term_goals)

    def expense(self, category: str) -> float:
        """Sanitized expense for one category (0 when absent)."""
        return sanitize_amount(self.expenses.get(category), name=f"expenses[{category}]")
