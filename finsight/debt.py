# finsight/debt.py
"""
Debt payoff simulation module.

Purpose
-------
Month-by-month amortization of a set of debts under a payment-ordering
strategy. Produces the payoff horizon, the total interest paid and one
history snapshot per simulated month for payoff charts.

Monthly Step
------------
For each month t (while any balance is positive and t < max_months):

1. Accrue interest on every positive balance:
       B_i ← B_i · (1 + r_i / 12)
2. Pay minimums out of the month's budget  P = Σ min_i + extra:
       p_i = min(B_i, min_i),  B_i ← B_i - p_i,  P ← P - p_i
3. Order debts by strategy (a new view each month):
       avalanche: descending annual_rate
       snowball : ascending current balance
   Ties keep the caller's input order (stable sort).
4. Apply the leftover budget greedily in that order.
5. Record (t, Σ B_i, cumulative interest).

Minimum payments freed by paid-off debts stay in the budget, so they roll
over to the next debt in line.

Month Cap
---------
The loop is bounded at MAX_PAYOFF_MONTHS (360). A plan that cannot clear
its debts within the cap is returned as an ordinary result with
``months_to_payoff == 360`` and a non-zero final ``remaining_debt``
(``PayoffResult.hit_month_cap`` is True). Callers must read that as "plan
is insufficient", not as a real payoff month. No exception is raised.

Example
-------
>>> from finsight.profile import Debt
>>> from finsight.debt import simulate_payoff
>>> debts = [
...     Debt("Card", balance=50_000, annual_rate=0.36, min_payment=2_500),
...     Debt("Loan", balance=200_000, annual_rate=0.11, min_payment=6_000),
... ]
>>> plan = simulate_payoff(debts, extra_monthly_payment=5_000, strategy="avalanche")
>>> baseline = simulate_payoff(debts, extra_monthly_payment=0, strategy="avalanche")
>>> baseline.total_interest_paid - plan.total_interest_paid  # interest saved
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Iterable, List, Tuple, Union

import pandas as pd

from .constants import MAX_PAYOFF_MONTHS, MONTHS_PER_YEAR
from .exceptions import ValidationError
from .profile import Debt
from .utils import sanitize_amount, sanitize_rate

__all__ = [
    "Strategy",
    "PayoffHistoryPoint",
    "PayoffResult",
    "DebtPayoffSimulator",
    "simulate_payoff",
]

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    """Payment-ordering strategy for the leftover monthly budget."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"

    @classmethod
    def parse(cls, value: Union[str, "Strategy"]) -> "Strategy":
        """Resolve a strategy name; unknown names raise ValidationError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            options = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Unknown strategy {value!r}. Expected one of: {options}"
            ) from None


@dataclass(frozen=True)
class PayoffHistoryPoint:
    """Snapshot at the end of a simulated month."""
    month: int
    remaining_debt: float
    cumulative_interest: float


@dataclass(frozen=True)
class PayoffResult:
    """
    Outcome of a payoff simulation.

    Attributes
    ----------
    months_to_payoff : int
        Number of simulated months (equals len(history)).
    total_interest_paid : float
        Interest accrued over the whole simulation.
    history : tuple of PayoffHistoryPoint
        One point per month, in order.
    strategy : Strategy
        Strategy used for the run.
    opening_balance : float
        Sanitized total balance before the first month.
    """
    months_to_payoff: int
    total_interest_paid: float
    history: Tuple[PayoffHistoryPoint, ...]
    strategy: Strategy = Strategy.AVALANCHE
    opening_balance: float = 0.0

    @property
    def remaining_balance(self) -> float:
        """Total balance left after the last simulated month (opening balance if none ran)."""
        if not self.history:
            return self.opening_balance
        return self.history[-1].remaining_debt

    @property
    def is_paid_off(self) -> bool:
        return self.remaining_balance <= 0.0

    @property
    def hit_month_cap(self) -> bool:
        """True when the run stopped at the cap with debt still outstanding."""
        return not self.is_paid_off

    def to_frame(self) -> pd.DataFrame:
        """History as a DataFrame indexed by month."""
        frame = pd.DataFrame(
            [(p.month, p.remaining_debt, p.cumulative_interest) for p in self.history],
            columns=["month", "remaining_debt", "cumulative_interest"],
        )
        return frame.set_index("month")


@dataclass
class _WorkingDebt:
    """Mutable per-run copy of a Debt."""
    position: int
    annual_rate: float
    min_payment: float
    balance: float


def _ordered(working: List[_WorkingDebt], strategy: Strategy) -> List[_WorkingDebt]:
    """New ordered view of the working debts; *working* keeps input order."""
    if strategy is Strategy.AVALANCHE:
        return sorted(working, key=lambda d: -d.annual_rate)
    return sorted(working, key=lambda d: d.balance)


def simulate_payoff(
    debts: Iterable[Debt],
    extra_monthly_payment: float = 0.0,
    strategy: Union[str, Strategy] = Strategy.AVALANCHE,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> PayoffResult:
    """
    Simulate paying off *debts* month by month.

    Parameters
    ----------
    debts : iterable of Debt
        Debts to repay. Never mutated.
    extra_monthly_payment : float, default 0.0
        Budget on top of the minimum payments. Negative or non-finite
        values are treated as 0.
    strategy : {"avalanche", "snowball"} or Strategy
        Ordering used for the leftover budget.
    max_months : int, default 360
        Iteration cap.

    Returns
    -------
    PayoffResult

    Raises
    ------
    ValidationError
        If *strategy* is not a known strategy.
    """
    strategy = Strategy.parse(strategy)
    extra = sanitize_amount(extra_monthly_payment, name="extra_monthly_payment")

    working = [
        _WorkingDebt(
            position=i,
            annual_rate=sanitize_rate(d.annual_rate, name=f"{d.name}.annual_rate"),
            min_payment=sanitize_amount(d.min_payment, name=f"{d.name}.min_payment"),
            balance=sanitize_amount(d.balance, name=f"{d.name}.balance"),
        )
        for i, d in enumerate(debts)
    ]

    monthly_budget = sum(d.min_payment for d in working) + extra
    opening_balance = sum(d.balance for d in working)
    history: List[PayoffHistoryPoint] = []
    total_interest = 0.0
    month = 0

    while any(d.balance > 0 for d in working) and month < max_months:
        month += 1

        # 1. Accrue interest
        for d in working:
            if d.balance > 0:
                interest = d.balance * d.annual_rate / MONTHS_PER_YEAR
                d.balance += interest
                total_interest += interest

        # 2. Pay minimums
        budget = monthly_budget
        for d in working:
            if d.balance > 0:
                payment = min(d.balance, d.min_payment)
                d.balance -= payment
                budget -= payment

        # 3-4. Leftover budget in strategy order
        for d in _ordered(working, strategy):
            if budget <= 0:
                break
            if d.balance > 0:
                payment = min(d.balance, budget)
                d.balance -= payment
                budget -= payment

        history.append(PayoffHistoryPoint(
            month=month,
            remaining_debt=sum(d.balance for d in working),
            cumulative_interest=total_interest,
        ))

    result = PayoffResult(
        months_to_payoff=month,
        total_interest_paid=total_interest,
        history=tuple(history),
        strategy=strategy,
        opening_balance=opening_balance,
    )

    if result.hit_month_cap:
        logger.info(
            "Debts not cleared within %d months (%s, extra=%.2f); "
            "%.2f still outstanding",
            max_months, strategy.value, extra, result.remaining_balance,
        )
    else:
        logger.debug(
            "Debts cleared in %d months (%s), interest %.2f",
            month, strategy.value, total_interest,
        )

    return result


class DebtPayoffSimulator:
    """
    Reusable payoff simulator bound to a strategy.

    Parameters
    ----------
    strategy : {"avalanche", "snowball"} or Strategy, default "avalanche"
    max_months : int, default 360

    Examples
    --------
    >>> simulator = DebtPayoffSimulator("snowball")
    >>> result = simulator.simulate(debts, extra_monthly_payment=3_000)
    >>> result.months_to_payoff
    """

    def __init__(
        self,
        strategy: Union[str, Strategy] = Strategy.AVALANCHE,
        max_months: int = MAX_PAYOFF_MONTHS,
    ):
        self.strategy = Strategy.parse(strategy)
        self.max_months = max_months

    def simulate(
        self,
        debts: Iterable[Debt],
        extra_monthly_payment: float = 0.0,
    ) -> PayoffResult:
        return simulate_payoff(
            debts,
            extra_monthly_payment=extra_monthly_payment,
            strategy=self.strategy,
            max_months=self.max_months,
        )

    def __repr__(self) -> str:
        return (
            f"DebtPayoffSimulator(strategy={self.strategy.value!r}, "
            f"max_months={self.max_months})"
        )
