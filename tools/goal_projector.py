"""
Goal Projector
Predicts spending from transaction history and works out whether a goal
can be reached by a deadline
"""
import math
from datetime import date, datetime
from typing import Optional, Protocol, Sequence, Union
from dateutil.relativedelta import relativedelta
from models.errors import (
    DegenerateProjectionError,
    InsufficientDataError,
    ValidationError,
)
from models.schemas import Goal, GoalProjection, ProjectedCompletion, SavingsPlan


DECAY_FACTOR = 0.9          # Weight multiplier per older transaction
EXPENSE_CUT_GOAL_SHARE = 0.1
EXPENSE_CUT_SPENDING_SHARE = 0.2
DAYS_PER_MONTH = 30


class HistoryPoint(Protocol):
    date: date
    amount: float


def parse_deadline(deadline: Union[date, str]) -> date:
    """Accept a date or an ISO YYYY-MM-DD string"""
    if isinstance(deadline, datetime):
        return deadline.date()
    if isinstance(deadline, date):
        return deadline
    if isinstance(deadline, str) and deadline.strip():
        try:
            return date.fromisoformat(deadline.strip())
        except ValueError:
            pass
    raise ValidationError(f"Please enter a valid deadline (YYYY-MM-DD), got {deadline!r}")


def parse_future_deadline(deadline: Union[date, str], today: date) -> date:
    """Parse a deadline and require it to fall after today"""
    deadline = parse_deadline(deadline)
    if deadline <= today:
        raise ValidationError("Please enter a valid future date")
    return deadline


class GoalProjector:
    """Read-only savings forecast for a single goal"""

    def __init__(self, decay_factor: float = DECAY_FACTOR):
        if not 0 < decay_factor <= 1:
            raise ValueError("Decay factor must be in (0, 1]")
        self.decay_factor = decay_factor

    def predict_spending(self, history: Sequence[HistoryPoint]) -> float:
        """
        Recency weighted average of transaction amounts

        Most recent transaction has weight 1, each older one is multiplied
        by the decay factor. Decay is by rank, not by elapsed time.
        """
        if not history:
            raise InsufficientDataError("No transaction history available for analysis")

        ordered = sorted(history, key=lambda t: t.date, reverse=True)

        weighted_sum = 0.0
        total_weight = 0.0
        weight = 1.0
        for point in ordered:
            weighted_sum += point.amount * weight
            total_weight += weight
            weight *= self.decay_factor

        return weighted_sum / total_weight

    def project(
        self,
        goal: Goal,
        deadline: Union[date, str],
        history: Sequence[HistoryPoint],
        today: Optional[date] = None,
    ) -> GoalProjection:
        """Build the savings plan and deadline verdict for a goal"""
        today = today or date.today()
        deadline = parse_future_deadline(deadline, today)

        if not history:
            raise InsufficientDataError("No transaction history available for analysis")

        days_left = max(1, (deadline - today).days)
        remaining = goal.target - goal.saved

        if remaining <= 0:
            return GoalProjection(
                goal_id=goal.id,
                goal_name=goal.name,
                target=goal.target,
                saved=goal.saved,
                remaining=0.0,
                deadline=deadline,
                days_left=days_left,
                will_meet_deadline=True,
                already_achieved=True,
            )

        predicted_spending = self.predict_spending(history)

        daily = remaining / days_left
        cut_expense = round(min(
            remaining * EXPENSE_CUT_GOAL_SHARE,
            predicted_spending * EXPENSE_CUT_SPENDING_SHARE,
        ), 2)

        completion = self._projected_completion(remaining, cut_expense, today)

        return GoalProjection(
            goal_id=goal.id,
            goal_name=goal.name,
            target=goal.target,
            saved=goal.saved,
            remaining=round(remaining, 2),
            deadline=deadline,
            days_left=days_left,
            predicted_spending=round(predicted_spending, 2),
            savings_plan=SavingsPlan(
                daily_micro_savings=round(daily, 2),
                weekly_savings=round(daily * 7, 2),
                monthly_savings=round(daily * DAYS_PER_MONTH, 2),
                cut_expense_suggestion=cut_expense,
            ),
            projected_completion=completion,
            will_meet_deadline=completion.date <= deadline,
        )

    def _projected_completion(
        self,
        remaining: float,
        cut_expense: float,
        today: date,
    ) -> ProjectedCompletion:
        """Months until done if the suggested cut is saved every day"""
        monthly_rate = cut_expense * DAYS_PER_MONTH
        if monthly_rate <= 0:
            raise DegenerateProjectionError(
                "Cannot meet goal under current plan: savings rate is zero"
            )

        months = math.ceil(remaining / monthly_rate)
        return ProjectedCompletion(
            months=months,
            date=today + relativedelta(months=months),
        )


# Convenience function for collaborators that want plain data
def project_goal(
    goal: Goal,
    deadline: Union[date, str],
    history: Sequence[HistoryPoint],
    today: Optional[date] = None,
) -> dict:
    """Project a goal against its deadline - wrapper for UI usage"""
    return GoalProjector().project(goal, deadline, history, today=today).model_dump()
