"""
Serialization module for FinSight.

Purpose
-------
JSON persistence of profiles and plans, and JSON-ready encoders for every
engine result. Encoded results are what the chart layer and the narrative
layer receive; the engine itself never calls either.

Supports:
- FinancialProfile (income, expenses, savings, goals, debts)
- PlanConfig (what-if parameters)
- PayoffResult, ProjectionResult, HealthScore, GoalTimeline,
  TimeMachineProjection
- WhatIfResult (profile overrides with recomputed health and timeline)
- A combined report built from one profile and one plan

Design Principles
-----------------
- Type-safe: files are validated through the Pydantic configs
- Human-readable: indented JSON, ISO dates
- Versioned: files carry SCHEMA_VERSION; mismatches warn, not fail

Example
-------
>>> from pathlib import Path
>>> from finsight.serialization import load_profile, build_report
>>> profile = load_profile(Path("profile.json"))
>>> report = build_report(profile, PlanConfig(extra_monthly_payment=5_000))
>>> report["health"]["total_score"]
"""

from __future__ import annotations
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import warnings

from pydantic import ValidationError as PydanticValidationError

from .config import DebtConfig, GoalConfig, PlanConfig, ProfileConfig
from .debt import PayoffResult, simulate_payoff
from .exceptions import ConfigurationError
from .health import HealthScore, score_health
from .profile import Debt, FinancialProfile, Goal
from .projection import ProjectionResult, RiskProfile, project_wealth
from .sandbox import WhatIfResult, field_value
from .time_machine import TimeMachineProjection, project_time_machine
from .timeline import GoalTimeline, aggregate_goals
from .types import (
    HealthScoreDict,
    PayoffDict,
    ProjectionDict,
    TimelineDict,
    WhatIfDict,
)

__all__ = [
    "SCHEMA_VERSION",
    "profile_to_dict",
    "profile_from_dict",
    "save_profile",
    "load_profile",
    "plan_from_dict",
    "load_plan",
    "payoff_to_dict",
    "projection_to_dict",
    "health_to_dict",
    "timeline_to_dict",
    "time_machine_to_dict",
    "what_if_to_dict",
    "build_report",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema(data: Dict[str, Any], source: str) -> None:
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"{source} schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return data


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# ---------------------------------------------------------------------------
# Profile Serialization
# ---------------------------------------------------------------------------

def _goal_from_config(config: GoalConfig) -> Goal:
    return Goal(
        id=config.id,
        title=config.title,
        target_amount=config.target_amount,
        current_amount=config.current_amount,
        is_completed=config.is_completed,
        deadline=config.deadline,
        priority=config.priority,
        category=config.category,
    )


def _debt_from_config(config: DebtConfig) -> Debt:
    return Debt(
        name=config.name,
        balance=config.balance,
        annual_rate=config.annual_rate,
        min_payment=config.min_payment,
        category=config.category,
        id=config.id,
    )


def profile_to_dict(profile: FinancialProfile) -> Dict[str, Any]:
    """
    Convert FinancialProfile to a JSON-ready dictionary.

    Parameters
    ----------
    profile : FinancialProfile

    Returns
    -------
    dict
        Dictionary accepted by profile_from_dict()
    """
    def goal_dict(goal: Goal) -> Dict[str, Any]:
        data = asdict(goal)
        data["deadline"] = _iso(goal.deadline)
        return data

    return {
        "schema_version": SCHEMA_VERSION,
        "monthly_income": profile.monthly_income,
        "expenses": dict(profile.expenses),
        "current_savings": profile.current_savings,
        "savings_goal": profile.savings_goal,
        "total_debt": profile.total_debt,
        "debt_payment_monthly": profile.debt_payment_monthly,
        "monthly_budget": profile.monthly_budget,
        "short_term_goals": [goal_dict(g) for g in profile.short_term_goals],
        "long_term_goals": [goal_dict(g) for g in profile.long_term_goals],
        "debts": [asdict(d) for d in profile.debts],
    }


def profile_from_dict(data: Dict[str, Any]) -> FinancialProfile:
    """
    Create FinancialProfile from a dictionary.

    When ``debts`` are listed but ``total_debt`` / ``debt_payment_monthly``
    are absent or zero, they are derived from the debt lines.

    Raises
    ------
    ConfigurationError
        If the dictionary fails ProfileConfig validation.
    """
    payload = {k: v for k, v in data.items() if k != "schema_version"}
    try:
        config = ProfileConfig.model_validate(payload)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid profile: {e}") from e

    debts = tuple(_debt_from_config(d) for d in config.debts)
    total_debt = config.total_debt or sum(d.balance for d in debts)
    debt_payment = config.debt_payment_monthly or sum(d.min_payment for d in debts)

    return FinancialProfile(
        monthly_income=config.monthly_income,
        expenses=dict(config.expenses),
        current_savings=config.current_savings,
        savings_goal=config.savings_goal,
        total_debt=total_debt,
        debt_payment_monthly=debt_payment,
        short_term_goals=tuple(_goal_from_config(g) for g in config.short_term_goals),
        long_term_goals=tuple(_goal_from_config(g) for g in config.long_term_goals),
        debts=debts,
        monthly_budget=config.monthly_budget,
    )


def save_profile(profile: FinancialProfile, path: Path) -> None:
    """
    Save FinancialProfile to a JSON file.

    Examples
    --------
    >>> save_profile(profile, Path("profile.json"))
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(profile_to_dict(profile), f, indent=2)


def load_profile(path: Path) -> FinancialProfile:
    """
    Load FinancialProfile from a JSON file.

    Raises
    ------
    ConfigurationError
        If the file is not a JSON object or fails validation.
    """
    data = _read_json(path)
    _check_schema(data, "Profile")
    return profile_from_dict(data)


def plan_from_dict(data: Dict[str, Any]) -> PlanConfig:
    """Validate a plan dictionary into PlanConfig."""
    payload = {k: v for k, v in data.items() if k != "schema_version"}
    try:
        return PlanConfig.model_validate(payload)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid plan: {e}") from e


def load_plan(path: Path) -> PlanConfig:
    """Load PlanConfig from a JSON file."""
    return plan_from_dict(_read_json(path))


# ---------------------------------------------------------------------------
# Result Encoders
# ---------------------------------------------------------------------------

def payoff_to_dict(result: PayoffResult, include_history: bool = True) -> PayoffDict:
    """Encode a PayoffResult."""
    data: PayoffDict = {
        "strategy": result.strategy.value,
        "months_to_payoff": result.months_to_payoff,
        "total_interest_paid": result.total_interest_paid,
        "remaining_balance": result.remaining_balance,
        "is_paid_off": result.is_paid_off,
    }
    if include_history:
        data["history"] = [asdict(p) for p in result.history]
    return data


def projection_to_dict(result: ProjectionResult, risk_profile: RiskProfile) -> ProjectionDict:
    """Encode a ProjectionResult with the profile that produced it."""
    return {
        "risk_profile": RiskProfile.parse(risk_profile).value,
        "annual_rate": result.annual_rate,
        "years": result.years,
        "nominal_value": result.nominal_value,
        "real_value": result.real_value,
        "invested_amount": result.invested_amount,
        "gain": result.gain,
    }


def health_to_dict(score: HealthScore) -> HealthScoreDict:
    """Encode a HealthScore."""
    return {
        "total_score": score.total_score,
        "stability_bonus": score.stability_bonus,
        "breakdown": [asdict(f) for f in score.breakdown],
    }


def timeline_to_dict(timeline: GoalTimeline) -> TimelineDict:
    """Encode a GoalTimeline (dates as ISO strings)."""
    return {
        "has_goals": timeline.has_goals,
        "total_target": timeline.total_target,
        "progress": timeline.progress,
        "raw_progress": timeline.raw_progress,
        "current_savings": timeline.current_savings,
        "milestones": [
            {
                "id": m.id,
                "title": m.title,
                "target_amount": m.target_amount,
                "current_amount": m.current_amount,
                "cumulative_target": m.cumulative_target,
                "position_percent": m.position_percent,
                "is_reached": m.is_reached,
                "goal_type": m.goal_type.value,
                "deadline": _iso(m.deadline),
                "projected_date": _iso(m.projected_date),
            }
            for m in timeline.milestones
        ],
    }


def time_machine_to_dict(projection: TimeMachineProjection) -> Dict[str, Any]:
    """Encode a TimeMachineProjection."""
    return {
        "current_path": [asdict(s) for s in projection.current_path],
        "optimized_path": [asdict(s) for s in projection.optimized_path],
        "current_card": asdict(projection.current_card),
        "optimized_card": asdict(projection.optimized_card),
        "monthly_savings_unlocked": projection.monthly_savings_unlocked,
        "wealth_gap": projection.wealth_gap,
    }


# ---------------------------------------------------------------------------
# Combined Report
# ---------------------------------------------------------------------------

def what_if_to_dict(result: WhatIfResult) -> WhatIfDict:
    """Encode a WhatIfResult; overrides are read back from the changed profile."""
    changed = sorted(result.changed_fields)
    return {
        "changed_fields": changed,
        "overrides": {name: field_value(result.profile, name) for name in changed},
        "score_delta": result.score_delta,
        "baseline_health": health_to_dict(result.baseline_health),
        "health": health_to_dict(result.health),
        "timeline": timeline_to_dict(result.timeline),
    }


def build_report(
    profile: FinancialProfile,
    plan: Optional[PlanConfig] = None,
    today: Optional[date] = None,
    start_year: Optional[int] = None,
    include_history: bool = True,
) -> Dict[str, Any]:
    """
    Run every calculator on *profile* and collect JSON-ready results.

    The debt simulator runs twice, once with the plan's extra payment and
    once with none, so the report can state months and interest saved.

    Parameters
    ----------
    profile : FinancialProfile
    plan : PlanConfig, optional
        What-if parameters; defaults to PlanConfig().
    today : datetime.date, optional
        Reference date for goal projections.
    start_year : int, optional
        First calendar year of the time-machine projection.
    include_history : bool, default True
        Include month-by-month payoff histories.

    Returns
    -------
    dict
        Keys: "schema_version", "debt", "projection", "health", "timeline",
        "time_machine".
    """
    plan = plan or PlanConfig()

    payoff = simulate_payoff(profile.debts, plan.extra_monthly_payment, plan.strategy)
    baseline = simulate_payoff(profile.debts, 0.0, plan.strategy)

    corpus = plan.current_corpus if plan.current_corpus is not None else profile.savings
    projection = project_wealth(corpus, plan.monthly_investment, plan.years, plan.risk_profile)

    contribution = plan.monthly_contribution
    if contribution is None:
        contribution = max(0.0, profile.monthly_surplus)
    timeline = aggregate_goals(
        profile.savings,
        profile.short_term_goals,
        profile.long_term_goals,
        monthly_contribution=contribution,
        today=today,
    )

    logger.info(
        "Built report: %d debts, %d goals, plan strategy=%s",
        len(profile.debts), len(profile.all_goals), plan.strategy,
    )

    return {
        "schema_version": SCHEMA_VERSION,
        "debt": {
            "plan": payoff_to_dict(payoff, include_history),
            "baseline": payoff_to_dict(baseline, include_history),
            "months_saved": baseline.months_to_payoff - payoff.months_to_payoff,
            "interest_saved": baseline.total_interest_paid - payoff.total_interest_paid,
        },
        "projection": projection_to_dict(projection, plan.risk_profile),
        "health": health_to_dict(score_health(profile)),
        "timeline": timeline_to_dict(timeline),
        "time_machine": time_machine_to_dict(project_time_machine(profile, start_year=start_year)),
    }
