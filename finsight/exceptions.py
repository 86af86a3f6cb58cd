"""
Custom exceptions for FinSight.

Purpose
-------
Provides a unified exception hierarchy for the few genuinely exceptional
paths of the engine. Numeric inputs are never rejected: negative or
non-finite amounts are normalized (see ``finsight.utils``) and degenerate
outcomes such as an unpayable debt plan are returned as ordinary results.
Exceptions are reserved for values outside a closed enumeration and for
malformed configuration files.

Exception Hierarchy
-------------------
FinSightError (base)
├── ConfigurationError - Invalid configuration files or settings
└── ValidationError - Values outside a closed set (strategy, risk profile)

Usage
-----
>>> from finsight.exceptions import ValidationError
>>> from finsight.debt import simulate_payoff
>>>
>>> try:
...     simulate_payoff(debts, strategy="fastest")
... except ValidationError as e:
...     print(f"FinSight error: {e}")
"""


class FinSightError(Exception):
    """
    Base exception for all FinSight errors.

    Examples
    --------
    >>> try:
    ...     load_profile(path)
    ... except FinSightError as e:
    ...     logger.error("Could not load profile: %s", e)
    """
    pass


class ConfigurationError(FinSightError):
    """
    Invalid configuration or settings.

    Raised when a profile or plan file cannot be turned into engine inputs:
    - File content is not a JSON object
    - Pydantic validation of a config model fails
    - Required sections are missing

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "profile.monthly_income must be >= 0, got -5000"
    ... )
    """
    pass


class ValidationError(FinSightError):
    """
    Value outside a closed enumeration.

    Raised when a strategy, risk profile or goal type is given as a free-form
    string that does not name a known member.

    Examples
    --------
    >>> raise ValidationError(
    ...     "Unknown strategy 'fastest'. Expected one of: avalanche, snowball"
    ... )
    """
    pass
