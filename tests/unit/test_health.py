"""
Unit tests for health.py module.

Tests the four health factors, the stability bonus and the composite score.
"""

from dataclasses import replace
import math

import pytest

from finsight.constants import FACTOR_WEIGHTS
from finsight.health import (
    FinancialHealthScorer,
    cash_flow_factor,
    debt_factor,
    goal_factor,
    savings_factor,
    score_health,
    stability_bonus,
)
from finsight.profile import Debt, FinancialProfile, Goal


@pytest.fixture
def starter_profile() -> FinancialProfile:
    """Income 50,000, expenses 20,000, nothing else."""
    return FinancialProfile(monthly_income=50_000, expenses={"rent": 20_000})


class TestCompositeScore:
    """Tests for score_health()."""

    def test_starter_profile_breakdown(self, starter_profile):
        health = score_health(starter_profile)

        cash = health.factor("cashflow")
        assert 85 <= cash.score <= 100
        assert cash.status == "Excellent"
        assert health.factor("debt").score == 100
        assert health.factor("savings").score == 0
        assert health.factor("goals").score == 40

    def test_starter_profile_total(self, starter_profile):
        # 85*0.4 + 0*0.2 + 100*0.2 + 40*0.2, no stability bonus
        assert score_health(starter_profile).total_score == 62

    def test_breakdown_order(self, sample_profile):
        ids = [f.id for f in score_health(sample_profile).breakdown]

        assert ids == ["cashflow", "savings", "debt", "goals"]

    def test_weights_sum_to_one(self, sample_profile):
        weights = [f.weight for f in score_health(sample_profile).breakdown]

        assert sum(weights) == pytest.approx(1.0)
        assert sum(FACTOR_WEIGHTS.values()) == pytest.approx(1.0)

    def test_total_is_int_in_range(self, sample_profile, empty_profile):
        for profile in (sample_profile, empty_profile):
            total = score_health(profile).total_score
            assert isinstance(total, int)
            assert 0 <= total <= 100

    def test_empty_profile(self, empty_profile):
        health = score_health(empty_profile)

        # 50*0.4 + 0*0.2 + 100*0.2 + 40*0.2
        assert health.total_score == 48
        assert health.factor("cashflow").status == "Unknown"

    def test_none_profile_scores_as_empty(self, empty_profile):
        assert score_health(None) == score_health(empty_profile)

    def test_wealthy_profile_clamped(self):
        profile = FinancialProfile(
            monthly_income=1_000_000,
            expenses={"rent": 100_000},
            current_savings=10_000_000,
        )
        health = score_health(profile)

        assert health.stability_bonus == pytest.approx(20.0)
        assert health.total_score == 100

    def test_struggling_profile(self):
        profile = FinancialProfile(
            monthly_income=30_000,
            expenses={"rent": 25_000, "food": 10_000},
            total_debt=200_000,
            debt_payment_monthly=18_000,
        )
        health = score_health(profile)

        assert health.factor("cashflow").status == "Critical"
        assert health.factor("debt").status == "Critical"
        assert health.total_score < 30

    def test_nan_income_sanitized(self):
        profile = FinancialProfile(monthly_income=float("nan"), expenses={"rent": 1_000})

        assert score_health(profile).factor("cashflow").score == 50

    def test_factor_lookup_missing(self, starter_profile):
        with pytest.raises(KeyError):
            score_health(starter_profile).factor("taxes")

    def test_factor_colors(self, starter_profile):
        colors = {f.id: f.color for f in score_health(starter_profile).breakdown}

        assert colors["cashflow"] == "#10b981"
        assert colors["goals"] == "#a855f7"



BAD_AMOUNTS = [-50_000.0, float("nan"), float("inf"), float("-inf")]
NUMERIC_FIELDS = [
    "monthly_income",
    "current_savings",
    "savings_goal",
    "total_debt",
    "debt_payment_monthly",
    "monthly_budget",
]


def _assert_bounded(score):
    assert isinstance(score.total_score, int)
    assert 0 <= score.total_score <= 100
    assert len(score.breakdown) == 4
    for factor in score.breakdown:
        assert 0.0 <= factor.score <= 100.0, factor.id
    assert math.isfinite(score.stability_bonus)


class TestScoreBounds:
    """Scores stay in [0, 100] whatever the numeric input."""

    @pytest.mark.parametrize("field", NUMERIC_FIELDS)
    @pytest.mark.parametrize("value", BAD_AMOUNTS)
    def test_bad_profile_field(self, sample_profile, field, value):
        _assert_bounded(score_health(replace(sample_profile, **{field: value})))

    @pytest.mark.parametrize("value", BAD_AMOUNTS)
    def test_bad_expense(self, sample_profile, value):
        expenses = dict(sample_profile.expenses, rent=value)

        _assert_bounded(score_health(replace(sample_profile, expenses=expenses)))

    @pytest.mark.parametrize("value", BAD_AMOUNTS)
    def test_bad_goal_amounts(self, value):
        goals = (
            Goal(id="a", title="A", target_amount=value, current_amount=1_000),
            Goal(id="b", title="B", target_amount=5_000, current_amount=value),
        )
        profile = FinancialProfile(monthly_income=40_000, short_term_goals=goals)

        _assert_bounded(score_health(profile))

    @pytest.mark.parametrize("value", BAD_AMOUNTS)
    def test_every_field_bad_at_once(self, value):
        profile = FinancialProfile(
            monthly_income=value,
            expenses={"rent": value, "food": value},
            current_savings=value,
            savings_goal=value,
            total_debt=value,
            debt_payment_monthly=value,
            monthly_budget=value,
            debts=(Debt("Card", balance=value, annual_rate=value, min_payment=value),),
        )

        _assert_bounded(score_health(profile))

    def test_debt_payment_far_above_income(self):
        profile = FinancialProfile(monthly_income=1.0, debt_payment_monthly=1e12, total_debt=1e15)

        _assert_bounded(score_health(profile))


class TestCashFlowFactor:
    """Tests for cash_flow_factor()."""

    def test_zero_income(self):
        factor = cash_flow_factor(FinancialProfile(expenses={"rent": 5_000}))

        assert factor.score == 50
        assert factor.status == "Unknown"

    def test_overspending(self):
        factor = cash_flow_factor(FinancialProfile(monthly_income=10_000, expenses={"rent": 15_000}))

        assert factor.score == pytest.approx(2.5)
        assert factor.status == "Critical"


class TestSavingsFactor:
    """Tests for savings_factor()."""

    def test_runway_from_expenses(self):
        profile = FinancialProfile(
            monthly_income=50_000,
            expenses={"rent": 10_000},
            current_savings=90_000,
        )
        factor = savings_factor(profile)

        # 9 months of runway
        assert factor.score == pytest.approx(85.0)
        assert factor.status == "Good"

    def test_runway_from_income_when_no_expenses(self):
        profile = FinancialProfile(monthly_income=50_000, current_savings=60_000)

        # Burn = 0.6 * 50,000 = 30,000 -> 2 months
        assert savings_factor(profile).score == pytest.approx(37.5)

    def test_fallback_burn(self):
        profile = FinancialProfile(current_savings=30_000)

        # Burn = 10,000 -> 3 months
        assert savings_factor(profile).score == pytest.approx(50.0)

    def test_goal_bonus(self):
        profile = FinancialProfile(
            monthly_income=50_000,
            expenses={"rent": 20_000},
            current_savings=60_000,
            savings_goal=50_000,
        )
        factor = savings_factor(profile)

        assert factor.score == pytest.approx(60.0)
        assert factor.status == "Low"

    def test_goal_bonus_capped(self):
        profile = FinancialProfile(
            monthly_income=50_000,
            expenses={"rent": 10_000},
            current_savings=500_000,
            savings_goal=100_000,
        )

        assert savings_factor(profile).score == 100.0

    def test_no_bonus_without_goal(self):
        profile = FinancialProfile(
            monthly_income=50_000,
            expenses={"rent": 20_000},
            current_savings=60_000,
        )

        assert savings_factor(profile).score == pytest.approx(50.0)


class TestDebtFactor:
    """Tests for debt_factor()."""

    def test_debt_free(self):
        factor = debt_factor(FinancialProfile(monthly_income=50_000))

        assert factor.score == 100
        assert factor.status == "Debt Free"

    def test_debt_without_income(self):
        factor = debt_factor(FinancialProfile(total_debt=10_000, debt_payment_monthly=500))

        assert factor.score == 10
        assert factor.status == "Critical"

    def test_dti_band(self):
        profile = FinancialProfile(
            monthly_income=100_000,
            total_debt=500_000,
            debt_payment_monthly=20_000,
        )
        factor = debt_factor(profile)

        assert factor.score == pytest.approx(65.0)
        assert factor.status == "Manageable"

    def test_debt_without_payment_scores_as_zero_dti(self):
        profile = FinancialProfile(monthly_income=100_000, total_debt=50_000)
        factor = debt_factor(profile)

        assert factor.score == 100
        assert factor.status == "Low"


class TestGoalFactor:
    """Tests for goal_factor()."""

    def test_no_goals(self):
        factor = goal_factor(FinancialProfile())

        assert factor.score == 40
        assert factor.status == "No Goals"

    def test_progress_and_completion_bonus(self):
        profile = FinancialProfile(
            short_term_goals=(Goal(id="a", title="A", target_amount=100, current_amount=50),),
            long_term_goals=(Goal(id="b", title="B", target_amount=100, is_completed=True),),
        )
        factor = goal_factor(profile)

        # avg progress 0.75 * 80 + 10
        assert factor.score == pytest.approx(70.0)
        assert factor.status == "On Track"

    def test_completion_bonus_capped(self):
        goals = tuple(
            Goal(id=str(i), title=f"G{i}", target_amount=100, is_completed=True)
            for i in range(4)
        )
        factor = goal_factor(FinancialProfile(short_term_goals=goals))

        assert factor.score == 100.0
        assert factor.status == "Crushing It"

    def test_zero_target_goal_counts_as_no_progress(self):
        profile = FinancialProfile(
            short_term_goals=(Goal(id="z", title="Zero", target_amount=0, current_amount=10),),
        )
        factor = goal_factor(profile)

        assert factor.score == 0.0
        assert factor.status == "Starting"


class TestStabilityBonus:
    """Tests for stability_bonus()."""

    def test_no_surplus(self):
        profile = FinancialProfile(monthly_income=10_000, expenses={"rent": 12_000})

        assert stability_bonus(profile) == 0.0

    @pytest.mark.parametrize("income,expected", [
        (120_000, 5.0),
        (220_000, 10.0),
        (1_100_000, 15.0),
    ])
    def test_surplus_tiers(self, income, expected):
        # Expenses large enough that coverage stays under 2x
        profile = FinancialProfile(monthly_income=income, expenses={"rent": income / 2})

        assert stability_bonus(profile) == pytest.approx(expected)

    def test_coverage_bonus_scales(self):
        # Surplus 30,000 = 3x expenses -> half of the coverage bonus
        profile = FinancialProfile(monthly_income=40_000, expenses={"rent": 10_000})

        assert stability_bonus(profile) == pytest.approx(2.5)

    def test_coverage_bonus_without_expenses(self):
        profile = FinancialProfile(monthly_income=20_000)

        assert stability_bonus(profile) == pytest.approx(5.0)


class TestFinancialHealthScorer:
    """Tests for the scorer wrapper."""

    def test_callable(self, sample_profile):
        scorer = FinancialHealthScorer()

        assert scorer(sample_profile) == scorer.score(sample_profile) == score_health(sample_profile)
