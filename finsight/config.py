"""
Configuration management module for FinSight.

Purpose
-------
Pydantic models that validate profile and plan files at the I/O boundary,
plus environment-driven application settings. The calculators themselves
take plain dataclasses (``finsight.profile``) and never raise on numeric
input; these models are where malformed files are rejected.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: model_dump()/model_validate() round-trip JSON files
- Environment-aware: FINSIGHT_* variables and .env files for settings

Example
-------
>>> from finsight.config import ProfileConfig, PlanConfig
>>> profile = ProfileConfig(monthly_income=80_000, expenses={"rent": 20_000})
>>> plan = PlanConfig(extra_monthly_payment=5_000, strategy="snowball")
>>> plan.model_dump()["strategy"]
'snowball'
"""

from __future__ import annotations
from typing import Dict, List, Literal, Optional
import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import MAX_PROJECTION_YEARS

__all__ = [
    "DebtConfig",
    "GoalConfig",
    "ProfileConfig",
    "PlanConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Profile Configuration
# ---------------------------------------------------------------------------

class DebtConfig(BaseModel):
    """
    Configuration for a single debt line.

    Attributes
    ----------
    name : str
        Display name.
    balance : float
        Outstanding balance (>= 0).
    annual_rate : float
        Annual interest rate as a decimal (0.18 for 18%).
    min_payment : float
        Minimum monthly payment (>= 0).
    category : str
        Debt category.

    Examples
    --------
    >>> debt = DebtConfig(name="Card", balance=50_000, annual_rate=0.36, min_payment=2_500)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default="", max_length=100, description="Identifier")
    name: str = Field(min_length=1, max_length=100, description="Debt name")
    balance: float = Field(default=0.0, ge=0, description="Outstanding balance")
    annual_rate: float = Field(
        default=0.12,
        ge=0,
        le=1.0,
        description="Annual interest rate as a decimal"
    )
    min_payment: float = Field(default=0.0, ge=0, description="Minimum monthly payment")
    category: Literal[
        "credit_card", "student_loan", "personal_loan", "car_loan", "mortgage", "other"
    ] = Field(default="other", description="Debt category")


class GoalConfig(BaseModel):
    """Configuration for a savings goal."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default="", max_length=100, description="Identifier")
    title: str = Field(min_length=1, max_length=200, description="Goal title")
    target_amount: float = Field(default=0.0, ge=0, description="Target amount")
    current_amount: float = Field(default=0.0, ge=0, description="Amount saved so far")
    is_completed: bool = Field(default=False, description="Completion flag")
    deadline: Optional[datetime.date] = Field(default=None, description="Deadline")
    priority: Literal["low", "medium", "high"] = Field(default="medium")
    category: Literal[
        "savings", "purchase", "investment", "education", "travel",
        "emergency", "debt_repayment", "other"
    ] = Field(default="savings")


class ProfileConfig(BaseModel):
    """
    Configuration for a complete financial profile.

    Attributes
    ----------
    monthly_income : float
    expenses : dict
        Monthly amount per expense category.
    current_savings, savings_goal : float
    total_debt, debt_payment_monthly : float
        When ``debts`` is given and these are left at 0, they are derived
        from the debt lines (sum of balances / sum of minimums).
    monthly_budget : float
    short_term_goals, long_term_goals : list of GoalConfig
    debts : list of DebtConfig

    Examples
    --------
    >>> config = ProfileConfig(
    ...     monthly_income=50_000,
    ...     expenses={"rent": 15_000, "food": 5_000},
    ...     short_term_goals=[GoalConfig(title="Phone", target_amount=20_000)],
    ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    monthly_income: float = Field(default=0.0, ge=0, description="Net monthly income")
    expenses: Dict[str, float] = Field(
        default_factory=dict,
        description="Monthly expenses per category"
    )
    current_savings: float = Field(default=0.0, ge=0, description="Current savings")
    savings_goal: float = Field(default=0.0, ge=0, description="Overall savings goal")
    total_debt: float = Field(default=0.0, ge=0, description="Total outstanding debt")
    debt_payment_monthly: float = Field(default=0.0, ge=0, description="Monthly debt service")
    monthly_budget: float = Field(default=0.0, ge=0, description="Planned monthly spending")
    short_term_goals: List[GoalConfig] = Field(default_factory=list)
    long_term_goals: List[GoalConfig] = Field(default_factory=list)
    debts: List[DebtConfig] = Field(default_factory=list)

    @field_validator("expenses")
    @classmethod
    def validate_expenses(cls, v):
        """Ensure expense amounts are non-negative."""
        negative = {k: a for k, a in v.items() if a < 0}
        if negative:
            raise ValueError(f"Expenses must be non-negative, got {negative}")
        return v


# ---------------------------------------------------------------------------
# Plan Configuration
# ---------------------------------------------------------------------------

class PlanConfig(BaseModel):
    """
    What-if parameters applied to a profile.

    Attributes
    ----------
    extra_monthly_payment : float
        Budget above the debt minimums.
    strategy : str
        Debt ordering: "avalanche" or "snowball".
    risk_profile : str
        Investment profile: "conservative", "balanced" or "aggressive".
    years : int
        Investment horizon (0-50 years).
    current_corpus : float, optional
        Invested corpus today; defaults to the profile's current savings.
    monthly_investment : float
        Monthly SIP amount.
    monthly_contribution : float, optional
        Monthly addition to savings for the goal timeline; defaults to the
        profile's monthly surplus.

    Examples
    --------
    >>> plan = PlanConfig(extra_monthly_payment=3_000, risk_profile="aggressive", years=15)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    extra_monthly_payment: float = Field(default=0.0, ge=0, description="Extra debt payment")
    strategy: Literal["avalanche", "snowball"] = Field(default="avalanche")
    risk_profile: Literal["conservative", "balanced", "aggressive"] = Field(default="balanced")
    years: int = Field(default=5, ge=0, le=MAX_PROJECTION_YEARS, description="Investment horizon in years")
    current_corpus: Optional[float] = Field(default=None, ge=0, description="Invested corpus")
    monthly_investment: float = Field(default=0.0, ge=0, description="Monthly SIP amount")
    monthly_contribution: Optional[float] = Field(
        default=None,
        ge=0,
        description="Monthly savings contribution for goal projections"
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Environment variables are prefixed with FINSIGHT_ (e.g.
    FINSIGHT_LOG_LEVEL=DEBUG). A local .env file is read when present.

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging).
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR".

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="FINSIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
