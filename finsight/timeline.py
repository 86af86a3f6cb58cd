# finsight/timeline.py
"""
Goal timeline aggregation module.

Purpose
-------
Merges short-term and long-term goals into one cumulative savings timeline
with a milestone per goal, its position on a 0-100% rail, whether current
savings already reach it, and a projected completion date.

Allocation Policy
-----------------
Goals are sorted by ascending target (smallest first) and satisfied in that
order out of a single pool of current savings:

    cumulative_k = Σ_{j ≤ k} target_j
    position_k   = cumulative_k / total_target · 100
    reached_k    = current_savings ≥ cumulative_k

This is a spending-priority policy, not per-goal earmarking: a goal's own
``current_amount`` does not affect its milestone. Milestone copy in the
dashboard depends on this reading.

Projection
----------
For an unreached milestone and a positive monthly contribution:

    months_k    = ceil((cumulative_k - current_savings) / contribution)
    projected_k = today + months_k calendar months

Example
-------
>>> from finsight.profile import Goal
>>> from finsight.timeline import aggregate_goals
>>> goals = [Goal(id="a", title="Trip", target_amount=10_000),
...          Goal(id="b", title="Car", target_amount=90_000)]
>>> timeline = aggregate_goals(15_000, goals, [], monthly_contribution=5_000)
>>> [(m.cumulative_target, m.is_reached) for m in timeline.milestones]
[(10000.0, True), (100000.0, False)]
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
import logging
import math
from typing import Iterable, List, Optional, Tuple

from .profile import Goal, GoalType
from .utils import add_months, clamp, safe_divide, sanitize_amount

__all__ = [
    "Milestone",
    "GoalTimeline",
    "GoalTimelineAggregator",
    "aggregate_goals",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Milestone:
    """
    A goal placed on the cumulative timeline.

    Attributes
    ----------
    id : str
    title : str
    target_amount : float
        The goal's own target.
    current_amount : float
        The goal's own tracked amount (display only).
    cumulative_target : float
        Running sum of targets up to and including this goal.
    position_percent : float
        cumulative_target / total_target · 100.
    is_reached : bool
        current_savings ≥ cumulative_target.
    goal_type : GoalType
    deadline : datetime.date or None
    projected_date : datetime.date or None
        Estimated completion date; None when reached or when there is no
        positive monthly contribution.
    """
    id: str
    title: str
    target_amount: float
    current_amount: float
    cumulative_target: float
    position_percent: float
    is_reached: bool
    goal_type: GoalType
    deadline: Optional[date]
    projected_date: Optional[date]


@dataclass(frozen=True)
class GoalTimeline:
    """
    Aggregated goal timeline.

    ``has_goals`` is False (with zeroed fields) when no goal has a positive
    target; callers should render nothing rather than treat it as an error.
    """
    has_goals: bool
    total_target: float
    progress: float
    raw_progress: float
    current_savings: float
    milestones: Tuple[Milestone, ...]

    @property
    def next_milestone(self) -> Optional[Milestone]:
        """First milestone not yet reached."""
        for m in self.milestones:
            if not m.is_reached:
                return m
        return None


def _tagged(goals: Iterable[Goal], goal_type: GoalType) -> List[Tuple[Goal, GoalType]]:
    return [(g, goal_type) for g in goals]


def aggregate_goals(
    current_savings: float,
    short_term_goals: Iterable[Goal] = (),
    long_term_goals: Iterable[Goal] = (),
    monthly_contribution: float = 0.0,
    today: Optional[date] = None,
) -> GoalTimeline:
    """
    Build the cumulative goal timeline.

    Parameters
    ----------
    current_savings : float
        Single savings pool matched against cumulative targets.
    short_term_goals, long_term_goals : iterable of Goal
    monthly_contribution : float, default 0.0
        Monthly amount added to savings; drives projected dates.
    today : datetime.date, optional
        Reference date for projections (defaults to date.today()).

    Returns
    -------
    GoalTimeline
    """
    savings = sanitize_amount(current_savings, name="current_savings")
    contribution = sanitize_amount(monthly_contribution, name="monthly_contribution")

    tagged = (
        _tagged(short_term_goals, GoalType.SHORT_TERM)
        + _tagged(long_term_goals, GoalType.LONG_TERM)
    )
    qualifying = [
        (g, t) for g, t in tagged
        if sanitize_amount(g.target_amount, name="target_amount") > 0
    ]
    # Stable: equal targets keep short-term before long-term, input order within.
    qualifying.sort(key=lambda pair: float(pair[0].target_amount))

    if not qualifying:
        return GoalTimeline(
            has_goals=False,
            total_target=0.0,
            progress=0.0,
            raw_progress=0.0,
            current_savings=savings,
            milestones=(),
        )

    total_target = float(sum(g.target_amount for g, _ in qualifying))
    raw_progress = safe_divide(savings, total_target) * 100.0
    progress = clamp(raw_progress)
    reference = today or date.today()

    milestones: List[Milestone] = []
    running_total = 0.0
    for index, (goal, goal_type) in enumerate(qualifying):
        target = float(goal.target_amount)
        running_total += target
        is_reached = savings >= running_total

        projected_date = None
        if not is_reached and contribution > 0:
            months_needed = math.ceil((running_total - savings) / contribution)
            projected_date = add_months(reference, months_needed)

        milestones.append(Milestone(
            id=goal.id or f"goal-{index + 1}",
            title=goal.title,
            target_amount=target,
            current_amount=sanitize_amount(goal.current_amount, name="current_amount"),
            cumulative_target=running_total,
            position_percent=clamp(running_total / total_target * 100.0),
            is_reached=is_reached,
            goal_type=goal_type,
            deadline=goal.deadline,
            projected_date=projected_date,
        ))

    logger.debug(
        "Goal timeline: %d milestones, total target %.2f, progress %.1f%%",
        len(milestones), total_target, progress,
    )

    return GoalTimeline(
        has_goals=True,
        total_target=total_target,
        progress=progress,
        raw_progress=raw_progress,
        current_savings=savings,
        milestones=tuple(milestones),
    )


class GoalTimelineAggregator:
    """
    Timeline aggregator with a fixed reference date.

    Parameters
    ----------
    today : datetime.date, optional
        Reference date for projected completion dates. Defaults to the date
        of each call.
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def aggregate(
        self,
        current_savings: float,
        short_term_goals: Iterable[Goal] = (),
        long_term_goals: Iterable[Goal] = (),
        monthly_contribution: float = 0.0,
    ) -> GoalTimeline:
        return aggregate_goals(
            current_savings,
            short_term_goals,
            long_term_goals,
            monthly_contribution=monthly_contribution,
            today=self.today,
        )
