"""PennyWise Data Models"""
from models.schemas import (
    Priority,
    PRIORITY_WEIGHTS,
    TransactionType,
    GoalStatus,
    Goal,
    GoalCreate,
    Transaction,
    SpendingRecord,
    RoundUpResult,
    AllocationPlan,
    SavingsPlan,
    ProjectedCompletion,
    GoalProjection,
    TransactionSummary,
    TransactionGroup,
)
from models.errors import (
    SavingsError,
    ValidationError,
    NoEligibleGoalsError,
    NotFoundError,
    InsufficientDataError,
    DegenerateProjectionError,
)

__all__ = [
    "Priority",
    "PRIORITY_WEIGHTS",
    "TransactionType",
    "GoalStatus",
    "Goal",
    "GoalCreate",
    "Transaction",
    "SpendingRecord",
    "RoundUpResult",
    "AllocationPlan",
    "SavingsPlan",
    "ProjectedCompletion",
    "GoalProjection",
    "TransactionSummary",
    "TransactionGroup",
    # Errors
    "SavingsError",
    "ValidationError",
    "NoEligibleGoalsError",
    "NotFoundError",
    "InsufficientDataError",
    "DegenerateProjectionError",
]
