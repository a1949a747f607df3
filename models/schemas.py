"""
Pydantic models for PennyWise
"""
from pydantic import BaseModel, Field, computed_field
from typing import Optional
from datetime import datetime, date
from enum import Enum


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def weight(self) -> int:
        return PRIORITY_WEIGHTS[self]


PRIORITY_WEIGHTS = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    ACHIEVED = "achieved"


class Goal(BaseModel):
    """Savings goal owned by the ledger"""
    id: str
    name: str = Field(min_length=1)
    target: float = Field(gt=0, allow_inf_nan=False)
    saved: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    priority: Priority = Priority.MEDIUM
    is_individual: bool = True
    due_date: Optional[date] = None
    members: int = Field(default=1, ge=1)
    created_at: Optional[datetime] = None

    model_config = {"str_strip_whitespace": True, "validate_assignment": True}

    @property
    def remaining(self) -> float:
        return round(max(0.0, self.target - self.saved), 2)

    @property
    def progress_percentage(self) -> float:
        """Progress shown on goal cards, capped at 100%"""
        return min(100.0, self.saved / self.target * 100)

    @property
    def is_achieved(self) -> bool:
        return self.saved >= self.target

    @property
    def status(self) -> GoalStatus:
        # Derived, never stored: saved only grows so Achieved is terminal
        return GoalStatus.ACHIEVED if self.is_achieved else GoalStatus.ACTIVE


class GoalCreate(BaseModel):
    """Input for creating a goal"""
    name: str
    target: float
    priority: Priority = Priority.MEDIUM
    is_individual: bool = True
    members: int = 1
    due_date: Optional[date] = None


class Transaction(BaseModel):
    """Single ledger entry"""
    id: str
    type: TransactionType
    amount: float = Field(gt=0)
    category: str
    description: str
    date: date
    goal_name: Optional[str] = None
    rounded_savings: Optional[float] = Field(default=None, ge=0)  # Only on round-up payments


class SpendingRecord(BaseModel):
    """Historical spending point supplied by a transaction source"""
    date: date
    amount: float
    category: Optional[str] = None


class RoundUpResult(BaseModel):
    """Outcome of rounding a single payment"""
    amount: float
    step: int
    round_up: float
    delta: float


class AllocationPlan(BaseModel):
    """How a savings delta is split across goals"""
    delta: float
    shares: dict[str, float] = Field(default_factory=dict)
    primary_goal_id: Optional[str] = None
    primary_goal_name: Optional[str] = None

    @computed_field
    @property
    def total_allocated(self) -> float:
        return round(sum(self.shares.values()), 2)

    @computed_field
    @property
    def residual(self) -> float:
        return round(self.delta - self.total_allocated, 2)


class SavingsPlan(BaseModel):
    """Recommended savings cadences"""
    daily_micro_savings: float
    weekly_savings: float
    monthly_savings: float
    cut_expense_suggestion: float


class ProjectedCompletion(BaseModel):
    months: int
    date: date

    @computed_field
    @property
    def month_label(self) -> str:
        return self.date.strftime("%B %Y")


class GoalProjection(BaseModel):
    """Complete feasibility assessment for one goal"""
    goal_id: str
    goal_name: str
    target: float
    saved: float
    remaining: float
    deadline: date
    days_left: int
    predicted_spending: Optional[float] = None
    savings_plan: Optional[SavingsPlan] = None
    projected_completion: Optional[ProjectedCompletion] = None
    will_meet_deadline: bool
    already_achieved: bool = False


class TransactionSummary(BaseModel):
    """Totals for the transaction history screen"""
    income: float = 0.0
    expense: float = 0.0
    balance: float = 0.0
    transaction_count: int = 0


class TransactionGroup(BaseModel):
    """Transactions sharing one calendar date"""
    date: date
    transactions: list[Transaction] = Field(default_factory=list)
