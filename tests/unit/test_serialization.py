"""
Unit tests for serialization.py module.

Tests profile persistence, result encoders and the combined report.
"""

import json
import warnings
from datetime import date

import pytest

from finsight.config import PlanConfig
from finsight.debt import simulate_payoff
from finsight.exceptions import ConfigurationError
from finsight.health import score_health
from finsight.profile import Debt, FinancialProfile, Goal
from finsight.projection import project_wealth
from finsight.sandbox import simulate_what_if
from finsight.serialization import (
    SCHEMA_VERSION,
    build_report,
    health_to_dict,
    load_plan,
    load_profile,
    payoff_to_dict,
    plan_from_dict,
    profile_from_dict,
    profile_to_dict,
    projection_to_dict,
    save_profile,
    time_machine_to_dict,
    timeline_to_dict,
    what_if_to_dict,
)
from finsight.time_machine import project_time_machine
from finsight.timeline import aggregate_goals


# ============================================================================
# PROFILE SERIALIZATION TESTS
# ============================================================================

class TestProfileSerialization:
    """Test profile serialization."""

    def test_profile_from_dict(self, profile_dict):
        profile = profile_from_dict(profile_dict)

        assert isinstance(profile, FinancialProfile)
        assert profile.monthly_income == 80_000
        assert profile.expenses["rent"] == 20_000
        assert profile.short_term_goals[0].deadline == date(2025, 12, 31)
        assert profile.debts[0] == Debt(
            name="Card", balance=50_000, annual_rate=0.36, min_payment=2_500, id="d1", category="other"
        )

    def test_debt_totals_derived(self, profile_dict):
        profile = profile_from_dict(profile_dict)

        assert profile.total_debt == 150_000
        assert profile.debt_payment_monthly == 6_500

    def test_explicit_debt_totals_kept(self, profile_dict):
        profile_dict["total_debt"] = 10_000
        profile_dict["debt_payment_monthly"] = 1_000
        profile = profile_from_dict(profile_dict)

        assert profile.total_debt == 10_000
        assert profile.debt_payment_monthly == 1_000

    def test_invalid_profile_raises(self):
        with pytest.raises(ConfigurationError, match="Invalid profile"):
            profile_from_dict({"monthly_income": -10})

    def test_unknown_field_raises(self):
        with pytest.raises(ConfigurationError):
            profile_from_dict({"salary": 10})

    def test_roundtrip(self, sample_profile):
        data = profile_to_dict(sample_profile)

        assert data["schema_version"] == SCHEMA_VERSION
        assert profile_from_dict(data) == sample_profile

    def test_to_dict_is_json_ready(self):
        profile = FinancialProfile(
            short_term_goals=(Goal(id="a", title="A", target_amount=1, deadline=date(2026, 1, 1)),),
        )
        data = profile_to_dict(profile)

        assert data["short_term_goals"][0]["deadline"] == "2026-01-01"
        json.dumps(data)


class TestProfileFiles:
    """Test save_profile / load_profile."""

    def test_save_and_load(self, tmp_path, sample_profile):
        path = tmp_path / "nested" / "profile.json"
        save_profile(sample_profile, path)

        assert path.exists()
        assert load_profile(path) == sample_profile

    def test_schema_version_warning(self, tmp_path, profile_dict):
        profile_dict["schema_version"] = "0.0.1"
        path = tmp_path / "old.json"
        path.write_text(json.dumps(profile_dict))

        with pytest.warns(UserWarning, match="schema version"):
            load_profile(path)

    def test_current_schema_no_warning(self, tmp_path, profile_dict):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps(profile_dict))

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            load_profile(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_profile(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="JSON object"):
            load_profile(path)


class TestPlanSerialization:
    """Test plan parsing."""

    def test_plan_from_dict(self):
        plan = plan_from_dict({"schema_version": SCHEMA_VERSION, "strategy": "snowball", "years": 10})

        assert plan.strategy == "snowball"
        assert plan.years == 10

    def test_invalid_plan(self):
        with pytest.raises(ConfigurationError, match="Invalid plan"):
            plan_from_dict({"strategy": "minimum"})

    def test_load_plan(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({"extra_monthly_payment": 5000}))

        assert load_plan(path).extra_monthly_payment == 5_000


# ============================================================================
# RESULT ENCODER TESTS
# ============================================================================

class TestResultEncoders:
    """Test JSON encoders for engine results."""

    def test_payoff_to_dict(self, single_debt):
        result = simulate_payoff([single_debt])
        data = payoff_to_dict(result)

        assert data["strategy"] == "avalanche"
        assert data["months_to_payoff"] == 32
        assert data["is_paid_off"] is True
        assert len(data["history"]) == 32
        assert set(data["history"][0]) == {"month", "remaining_debt", "cumulative_interest"}

    def test_payoff_without_history(self, single_debt):
        data = payoff_to_dict(simulate_payoff([single_debt]), include_history=False)

        assert "history" not in data

    def test_projection_to_dict(self):
        data = projection_to_dict(project_wealth(0, 5_000, 5, "balanced"), "balanced")

        assert data["risk_profile"] == "balanced"
        assert data["invested_amount"] == pytest.approx(300_000)

    def test_health_to_dict(self, sample_profile):
        data = health_to_dict(score_health(sample_profile))

        assert 0 <= data["total_score"] <= 100
        assert [f["id"] for f in data["breakdown"]] == ["cashflow", "savings", "debt", "goals"]

    def test_timeline_to_dict(self, short_goals, today):
        data = timeline_to_dict(aggregate_goals(0, short_goals, monthly_contribution=5_000, today=today))

        assert data["has_goals"] is True
        assert data["milestones"][0]["goal_type"] == "Short-term"
        assert data["milestones"][0]["projected_date"] == "2025-03-15"
        json.dumps(data)

    def test_time_machine_to_dict(self, sample_profile):
        data = time_machine_to_dict(project_time_machine(sample_profile, years=3, start_year=2025))

        assert [s["year"] for s in data["current_path"]] == [2026, 2027, 2028]
        assert "breakdown" in data["optimized_card"]
        json.dumps(data)

    def test_what_if_to_dict(self, sample_profile, today):
        result = simulate_what_if(sample_profile, total_expenses=50_000, rent=20_000, today=today)
        data = what_if_to_dict(result)

        assert data["changed_fields"] == ["total_expenses"]
        assert data["overrides"] == {"total_expenses": pytest.approx(50_000)}
        assert data["score_delta"] == (
            data["health"]["total_score"] - data["baseline_health"]["total_score"]
        )
        assert data["timeline"]["has_goals"] is True
        json.dumps(data)


# ============================================================================
# REPORT TESTS
# ============================================================================

class TestBuildReport:
    """Test the combined report."""

    def test_sections(self, sample_profile, today):
        report = build_report(sample_profile, today=today, start_year=2025)

        assert set(report) == {
            "schema_version", "debt", "projection", "health", "timeline", "time_machine",
        }
        json.dumps(report)

    def test_baseline_savings(self, sample_profile):
        report = build_report(sample_profile, PlanConfig(extra_monthly_payment=10_000))
        debt = report["debt"]

        assert debt["months_saved"] > 0
        assert debt["interest_saved"] > 0
        assert debt["baseline"]["months_to_payoff"] - debt["plan"]["months_to_payoff"] == debt["months_saved"]

    def test_zero_extra_saves_nothing(self, sample_profile):
        report = build_report(sample_profile, PlanConfig())

        assert report["debt"]["months_saved"] == 0
        assert report["debt"]["interest_saved"] == 0

    def test_corpus_defaults_to_savings(self, sample_profile):
        report = build_report(sample_profile, PlanConfig(years=0))

        assert report["projection"]["nominal_value"] == pytest.approx(150_000)

    def test_explicit_corpus(self, sample_profile):
        report = build_report(sample_profile, PlanConfig(current_corpus=0, monthly_investment=5_000))

        assert report["projection"]["invested_amount"] == pytest.approx(300_000)

    def test_timeline_contribution_defaults_to_surplus(self, sample_profile, today):
        report = build_report(sample_profile, today=today)
        # Surplus 42,000; 130,000 - 150,000 savings leaves nothing unreached
        assert all(m["is_reached"] for m in report["timeline"]["milestones"])

        plan = PlanConfig(monthly_contribution=0)
        poor = FinancialProfile(monthly_income=50_000, short_term_goals=sample_profile.short_term_goals)
        report = build_report(poor, plan, today=today)
        assert all(m["projected_date"] is None for m in report["timeline"]["milestones"])

    def test_without_history(self, sample_profile):
        report = build_report(sample_profile, include_history=False)

        assert "history" not in report["debt"]["plan"]
