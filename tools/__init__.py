"""
PennyWise Tools
"""
from tools.roundup_calculator import calculate_round_up, RoundUpCalculator
from tools.priority_allocator import allocate_round_up, PriorityAllocator
from tools.goal_projector import project_goal, GoalProjector
from tools.transaction_source import (
    get_transaction_source,
    TransactionSource,
    LiveTransactionSource,
    FallbackTransactionSource,
)

__all__ = [
    # Round-up
    "calculate_round_up",
    "RoundUpCalculator",
    # Allocation
    "allocate_round_up",
    "PriorityAllocator",
    # Projection
    "project_goal",
    "GoalProjector",
    # Transaction history
    "get_transaction_source",
    "TransactionSource",
    "LiveTransactionSource",
    "FallbackTransactionSource",
]
