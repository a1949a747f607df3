"""
Priority Allocator
Splits a savings delta across individual goals weighted by priority
(High=3, Medium=2, Low=1)
"""
import math
from typing import Optional, Sequence
from models.errors import NoEligibleGoalsError, ValidationError
from models.schemas import AllocationPlan, Goal
from tools.money import from_cents, to_cents


class PriorityAllocator:
    """
    Weighted split using the largest-remainder method

    Each goal gets the whole-rupee floor of its quota, leftover rupees go to
    the largest fractional remainders (ties: higher weight, then list order)
    and leftover paise go to the primary goal. The shares always add up to
    the delta exactly.
    """

    def eligible_goals(self, goals: Sequence[Goal]) -> list[Goal]:
        """Only individual goals take part in automatic distribution"""
        return [g for g in goals if g.is_individual]

    def primary_goal(self, goals: Sequence[Goal]) -> Optional[Goal]:
        """Highest priority weight, first one wins a tie"""
        primary = None
        for goal in goals:
            if primary is None or goal.priority.weight > primary.priority.weight:
                primary = goal
        return primary

    def allocate(self, delta: float, goals: Sequence[Goal]) -> AllocationPlan:
        """Build an allocation plan; nothing is mutated"""
        if isinstance(delta, bool) or not math.isfinite(delta) or delta < 0:
            raise ValidationError("delta must be a finite non-negative amount")

        eligible = self.eligible_goals(goals)
        cents = to_cents(delta)

        if cents == 0:
            return AllocationPlan(delta=0.0)

        if not eligible:
            raise NoEligibleGoalsError(
                "No individual goals to allocate savings to"
            )

        primary = self.primary_goal(eligible)
        total_weight = sum(g.priority.weight for g in eligible)

        # Quotas in whole rupees: cents * weight / (100 * total_weight)
        denominator = 100 * total_weight
        rupees, paise = divmod(cents, 100)

        units = {}
        remainders = []
        for index, goal in enumerate(eligible):
            numerator = cents * goal.priority.weight
            units[goal.id] = numerator // denominator
            remainders.append((numerator % denominator, goal.priority.weight, -index, goal.id))

        leftover = rupees - sum(units.values())
        for _, _, _, goal_id in sorted(remainders, reverse=True)[:leftover]:
            units[goal_id] += 1

        shares = {goal_id: count * 100 for goal_id, count in units.items()}
        shares[primary.id] += paise

        return AllocationPlan(
            delta=from_cents(cents),
            shares={goal_id: from_cents(c) for goal_id, c in shares.items()},
            primary_goal_id=primary.id,
            primary_goal_name=primary.name,
        )


# Convenience function for collaborators that want plain data
def allocate_round_up(delta: float, goals: list[Goal]) -> dict:
    """Split a delta across goals - wrapper for UI usage"""
    return PriorityAllocator().allocate(delta, goals).model_dump()
