"""
Pytest configuration and fixtures for FinSight test suite.

This module provides reusable fixtures for testing all FinSight components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

from datetime import date
from typing import List

import pytest

from finsight.profile import Debt, FinancialProfile, Goal


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def today() -> date:
    """Fixed reference date for goal projections."""
    return date(2025, 1, 15)


# ---------------------------------------------------------------------------
# Debt Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def single_debt() -> Debt:
    """
    One 50,000 debt at 18% APR with a 2,000 minimum.

    Pays off in 32 months with no extra payment.
    """
    return Debt(name="Card", balance=50_000, annual_rate=0.18, min_payment=2_000)


@pytest.fixture
def mixed_debts() -> List[Debt]:
    """
    Three debts where avalanche and snowball orders differ.

    Avalanche targets Card (36%) first; snowball targets Student
    (smallest balance) first. Minimums total 11,000.
    """
    return [
        Debt(name="Car", balance=300_000, annual_rate=0.09, min_payment=7_000),
        Debt(name="Card", balance=80_000, annual_rate=0.36, min_payment=3_000),
        Debt(name="Student", balance=20_000, annual_rate=0.06, min_payment=1_000),
    ]


# ---------------------------------------------------------------------------
# Goal Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def short_goals() -> List[Goal]:
    return [
        Goal(id="trip", title="Trip", target_amount=10_000),
        Goal(id="phone", title="Phone", target_amount=30_000, current_amount=15_000),
    ]


@pytest.fixture
def long_goals() -> List[Goal]:
    return [
        Goal(id="car", title="Car", target_amount=90_000, is_completed=True),
    ]


# ---------------------------------------------------------------------------
# Profile Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def empty_profile() -> FinancialProfile:
    return FinancialProfile()


@pytest.fixture
def sample_profile(mixed_debts, short_goals, long_goals) -> FinancialProfile:
    """
    A mid-income profile with debts and goals.

    Income 80,000; expenses 38,000; savings 150,000.
    """
    return FinancialProfile(
        monthly_income=80_000,
        expenses={
            "rent": 20_000,
            "food": 8_000,
            "transportation": 3_000,
            "utilities": 2_000,
            "other": 5_000,
        },
        current_savings=150_000,
        savings_goal=300_000,
        total_debt=sum(d.balance for d in mixed_debts),
        debt_payment_monthly=sum(d.min_payment for d in mixed_debts),
        short_term_goals=tuple(short_goals),
        long_term_goals=tuple(long_goals),
        debts=tuple(mixed_debts),
    )


@pytest.fixture
def profile_dict() -> dict:
    """Profile file content as written by `finsight config create`."""
    return {
        "schema_version": "0.1.0",
        "monthly_income": 80000,
        "expenses": {"rent": 20000, "food": 8000},
        "current_savings": 50000,
        "savings_goal": 100000,
        "short_term_goals": [
            {"id": "g1", "title": "Emergency fund", "target_amount": 40000, "deadline": "2025-12-31"}
        ],
        "long_term_goals": [
            {"id": "g2", "title": "House", "target_amount": 500000}
        ],
        "debts": [
            {"id": "d1", "name": "Card", "balance": 50000, "annual_rate": 0.36, "min_payment": 2500},
            {"id": "d2", "name": "Loan", "balance": 100000, "annual_rate": 0.11, "min_payment": 4000}
        ],
    }
