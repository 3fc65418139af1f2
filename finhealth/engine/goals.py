"""Goal progress calculations."""

import math
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from finhealth.core.models import (
    FinancialGoal,
    GoalContribution,
    GoalsOverview,
    GoalStatus,
)

FULL_PROGRESS = Decimal(100)


def calculate_progress(current_amount: Decimal, target_amount: Decimal) -> Decimal:
    """Progress percentage clamped to [0, 100].

    A goal with a target of zero or less counts as fully reached.
    """
    if target_amount <= 0:
        return FULL_PROGRESS
    progress = current_amount / target_amount * 100
    return max(Decimal(0), min(progress, FULL_PROGRESS))


def calculate_goal_progress(
    goal: FinancialGoal,
    contributions: Iterable[GoalContribution],
) -> FinancialGoal:
    """Recompute a goal from its contributions.

    Only contributions whose goal_id matches the goal are summed. Status
    is forced to COMPLETED once progress reaches 100 and otherwise left
    untouched, so a completed goal is never reverted.

    Args:
        goal: Goal to update.
        contributions: Contributions, possibly for several goals.

    Returns:
        New FinancialGoal with current_amount, progress and status set.
    """
    current_amount = sum(
        (c.amount for c in contributions if c.goal_id == goal.id),
        Decimal(0),
    )
    progress = calculate_progress(current_amount, goal.target_amount)
    status = GoalStatus.COMPLETED if progress >= FULL_PROGRESS else goal.status

    return goal.model_copy(
        update={
            "current_amount": current_amount,
            "progress": progress,
            "status": status,
        }
    )


def calculate_goals_overview(goals: Iterable[FinancialGoal]) -> GoalsOverview:
    """Aggregate counts and amounts across goals."""
    goals = list(goals)
    total_target = sum((g.target_amount for g in goals), Decimal(0))
    total_current = sum((g.current_amount for g in goals), Decimal(0))
    overall = total_current / total_target * 100 if total_target > 0 else Decimal(0)

    return GoalsOverview(
        total_goals=len(goals),
        active_goals=sum(1 for g in goals if g.status == GoalStatus.ACTIVE),
        completed_goals=sum(1 for g in goals if g.status == GoalStatus.COMPLETED),
        total_target=total_target,
        total_current=total_current,
        overall_progress=overall,
    )


def days_until_target(goal: FinancialGoal, today: date | None = None) -> int:
    """Days left until the goal's target date (negative once passed)."""
    today = today or date.today()
    return (goal.target_date - today).days


def months_to_goal(
    target_amount: Decimal,
    current_amount: Decimal,
    monthly_contribution: Decimal | None,
) -> int:
    """Whole months of contributions needed to reach the target.

    Returns 0 when nothing remains or there is no positive contribution.
    """
    remaining = target_amount - current_amount
    if not monthly_contribution or monthly_contribution <= 0 or remaining <= 0:
        return 0
    return math.ceil(remaining / monthly_contribution)
