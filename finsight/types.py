"""
Type definitions for FinSight.

Purpose
-------
TypedDict definitions for the JSON-ready dictionaries produced by
``finsight.serialization``. They document the shapes consumed by the chart
layer and by the narrative layer, which receive engine outputs as plain
structured facts.

Type Definitions
----------------
PayoffHistoryDict
    One month of a payoff run: {"month", "remaining_debt", "cumulative_interest"}
PayoffDict
    Payoff run: {"strategy", "months_to_payoff", "total_interest_paid", ...}
ProjectionDict
    Wealth projection: {"nominal_value", "real_value", "invested_amount", "gain", ...}
HealthFactorDict
    One health factor: {"id", "label", "score", "status", ...}
HealthScoreDict
    Composite score: {"total_score", "stability_bonus", "breakdown"}
MilestoneDict
    One goal milestone on the cumulative timeline
TimelineDict
    Goal timeline: {"has_goals", "total_target", "progress", "milestones", ...}
WhatIfDict
    What-if run: {"changed_fields", "overrides", "score_delta", "health", ...}
"""

from typing import Dict, List, Optional
from typing_extensions import TypedDict, NotRequired

__all__ = [
    "PayoffHistoryDict",
    "PayoffDict",
    "ProjectionDict",
    "HealthFactorDict",
    "HealthScoreDict",
    "MilestoneDict",
    "TimelineDict",
    "WhatIfDict",
]


class PayoffHistoryDict(TypedDict):
    month: int
    remaining_debt: float
    cumulative_interest: float


class PayoffDict(TypedDict):
    """
    Serialized PayoffResult.

    ``history`` is omitted when the caller asks for a summary only.
    """

    strategy: str
    months_to_payoff: int
    total_interest_paid: float
    remaining_balance: float
    is_paid_off: bool
    history: NotRequired[List[PayoffHistoryDict]]


class ProjectionDict(TypedDict):
    risk_profile: str
    annual_rate: float
    years: float
    nominal_value: float
    real_value: float
    invested_amount: float
    gain: float


class HealthFactorDict(TypedDict):
    id: str
    label: str
    score: float
    status: str
    description: str
    weight: float
    color: str


class HealthScoreDict(TypedDict):
    total_score: int
    stability_bonus: float
    breakdown: List[HealthFactorDict]


class MilestoneDict(TypedDict):
    id: str
    title: str
    target_amount: float
    current_amount: float
    cumulative_target: float
    position_percent: float
    is_reached: bool
    goal_type: str
    deadline: Optional[str]
    projected_date: Optional[str]


class TimelineDict(TypedDict):
    has_goals: bool
    total_target: float
    progress: float
    raw_progress: float
    current_savings: float
    milestones: List[MilestoneDict]


class WhatIfDict(TypedDict):
    """
    Serialized WhatIfResult.

    ``overrides`` holds the sanitized value of every changed field.
    """

    changed_fields: List[str]
    overrides: Dict[str, float]
    score_delta: int
    baseline_health: HealthScoreDict
    health: HealthScoreDict
    timeline: TimelineDict
