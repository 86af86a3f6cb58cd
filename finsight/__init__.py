"""
FinSight - Personal Finance Simulation and Scoring

Deterministic calculators behind a personal finance dashboard: debt payoff
simulation, wealth projection, financial health scoring and goal timelines.
Every calculator takes plain profile records and returns immutable results;
nothing here renders, persists or calls external services.

Modules
-------
- profile      : Financial profile, debt and goal records
- debt         : Month-by-month payoff simulation (avalanche / snowball)
- projection   : Corpus + SIP projection under fixed risk profiles
- bands        : Band tables and the shared piecewise scoring routine
- health       : Four-factor composite health score
- timeline     : Cumulative goal timeline with projected dates
- time_machine : Current vs optimized ten-year paths
- sandbox      : What-if overrides with recomputed health and timeline
- config       : Pydantic models for profile/plan files and settings
- serialization: JSON persistence, result encoders, combined report
- utils        : Numeric sanitizing and calendar helpers

"""

from .profile import Debt, FinancialProfile, Goal, GoalType
from .debt import DebtPayoffSimulator, PayoffResult, Strategy, simulate_payoff
from .projection import (
    ProjectionResult,
    RiskProfile,
    WealthProjectionCalculator,
    growth_curve,
    project_wealth,
)
from .health import FinancialHealthScorer, HealthFactor, HealthScore, score_health
from .timeline import GoalTimeline, GoalTimelineAggregator, Milestone, aggregate_goals
from .time_machine import TimeMachineProjection, project_time_machine
from .sandbox import WhatIfResult, WhatIfSandbox, simulate_what_if
from .exceptions import ConfigurationError, FinSightError, ValidationError
from . import utils

__version__ = "0.1.0"

__all__ = [
    "Debt",
    "FinancialProfile",
    "Goal",
    "GoalType",
    "DebtPayoffSimulator",
    "PayoffResult",
    "Strategy",
    "simulate_payoff",
    "ProjectionResult",
    "RiskProfile",
    "WealthProjectionCalculator",
    "growth_curve",
    "project_wealth",
    "FinancialHealthScorer",
    "HealthFactor",
    "HealthScore",
    "score_health",
    "GoalTimeline",
    "GoalTimelineAggregator",
    "Milestone",
    "aggregate_goals",
    "TimeMachineProjection",
    "project_time_machine",
    "WhatIfResult",
    "WhatIfSandbox",
    "simulate_what_if",
    "ConfigurationError",
    "FinSightError",
    "ValidationError",
    "utils",
]
