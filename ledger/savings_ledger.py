"""
PennyWise - Savings Ledger
Owns goals and transactions; the only place savings state is written
"""
import json
import logging
import math
import threading
import uuid
from collections import defaultdict
from datetime import date, datetime
from pathlib import Path
from typing import Literal, Optional, Sequence, Union
from pydantic import ValidationError as PydanticValidationError
from models.errors import NotFoundError, ValidationError
from models.schemas import (
    AllocationPlan,
    Goal,
    GoalCreate,
    GoalProjection,
    RoundUpResult,
    Transaction,
    TransactionGroup,
    TransactionSummary,
    TransactionType,
)
from tools.goal_projector import GoalProjector, parse_future_deadline
from tools.money import from_cents, parse_amount, quantize, to_cents
from tools.priority_allocator import PriorityAllocator
from tools.roundup_calculator import RoundUpCalculator
from tools.transaction_source import TransactionSource

logger = logging.getLogger(__name__)

SAMPLE_DATA_PATH = Path(__file__).parent.parent / "tools" / "data" / "sample_ledger.json"

TransactionFilter = Literal["all", "income", "expense"]
GoalType = Literal["individual", "collaborative"]


def _new_id() -> str:
    return uuid.uuid4().hex


class SavingsLedger:
    """
    Mutable aggregate of goals and transactions

    Every mutation is validated and planned before anything is written, then
    committed under the instance lock, so a failed call leaves state as it was.
    Reads hand out copies.
    """

    def __init__(
        self,
        goals: Optional[Sequence[Goal]] = None,
        transactions: Optional[Sequence[Transaction]] = None,
        history_source: Optional[TransactionSource] = None,
        calculator: Optional[RoundUpCalculator] = None,
        allocator: Optional[PriorityAllocator] = None,
        projector: Optional[GoalProjector] = None,
    ):
        self._goals: list[Goal] = [g.model_copy(deep=True) for g in goals or []]
        self._transactions: list[Transaction] = [t.model_copy(deep=True) for t in transactions or []]

        ids = [g.id for g in self._goals]
        if len(ids) != len(set(ids)):
            raise ValidationError("Goal ids must be unique")

        self.history_source = history_source
        self.calculator = calculator or RoundUpCalculator()
        self.allocator = allocator or PriorityAllocator()
        self.projector = projector or GoalProjector()
        self._lock = threading.RLock()

    @classmethod
    def with_sample_data(
        cls,
        history_source: Optional[TransactionSource] = None,
        path: Path = SAMPLE_DATA_PATH,
    ) -> "SavingsLedger":
        """Ledger seeded with the demo goals and transactions"""
        with open(path) as f:
            data = json.load(f)

        return cls(
            goals=[Goal.model_validate(g) for g in data["goals"]],
            transactions=[Transaction.model_validate(t) for t in data["transactions"]],
            history_source=history_source,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def goals(self) -> list[Goal]:
        with self._lock:
            return [g.model_copy(deep=True) for g in self._goals]

    @property
    def transactions(self) -> list[Transaction]:
        """Newest first by insertion"""
        with self._lock:
            return [t.model_copy(deep=True) for t in self._transactions]

    @property
    def total_saved(self) -> float:
        with self._lock:
            return from_cents(sum(to_cents(g.saved) for g in self._goals))

    def get_goal(self, goal_id: str) -> Goal:
        with self._lock:
            return self._find_goal(goal_id).model_copy(deep=True)

    def goals_by_type(self, goal_type: GoalType = "individual") -> list[Goal]:
        individual = goal_type == "individual"
        return [g for g in self.goals if g.is_individual == individual]

    def filter_transactions(self, kind: TransactionFilter = "all") -> list[Transaction]:
        if kind == "all":
            return self.transactions
        return [t for t in self.transactions if t.type == TransactionType(kind)]

    def group_transactions_by_date(self, kind: TransactionFilter = "all") -> list[TransactionGroup]:
        """Date groups newest first, insertion order kept inside a group"""
        grouped = defaultdict(list)
        for t in self.filter_transactions(kind):
            grouped[t.date].append(t)

        return [
            TransactionGroup(date=day, transactions=grouped[day])
            for day in sorted(grouped, reverse=True)
        ]

    def summarize(self, kind: TransactionFilter = "all") -> TransactionSummary:
        txs = self.filter_transactions(kind)

        income = sum(t.amount for t in txs if t.type == TransactionType.INCOME)
        expense = sum(t.amount for t in txs if t.type == TransactionType.EXPENSE)

        return TransactionSummary(
            income=round(income, 2),
            expense=round(expense, 2),
            balance=round(income - expense, 2),
            transaction_count=len(txs),
        )

    def round_up_history(self) -> list[Transaction]:
        """Payments that put round-up savings into goals"""
        return [
            t for t in self.transactions
            if t.type == TransactionType.EXPENSE and t.rounded_savings
        ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def preview_round_up(self, amount) -> tuple[RoundUpResult, AllocationPlan]:
        """What a payment would save and where it would go, without committing"""
        result = self.calculator.calculate(amount)
        with self._lock:
            plan = self.allocator.allocate(result.delta, self._goals)
        return result, plan

    def apply_round_up(
        self,
        amount,
        category: str = "General",
        description: str = "Payment",
        on_date: Optional[date] = None,
    ) -> Transaction:
        """Record a payment and spread its round-up across individual goals"""
        with self._lock:
            result, plan = self.preview_round_up(amount)
            saved_something = result.delta > 0

            transaction = Transaction(
                id=_new_id(),
                type=TransactionType.EXPENSE,
                amount=result.amount,
                category=category,
                description=description,
                date=on_date or date.today(),
                goal_name=plan.primary_goal_name if saved_something else None,
                rounded_savings=result.delta if saved_something else None,
            )

            self._commit(plan.shares, transaction)

        logger.info(
            "Round-up payment %.2f -> %.2f saved %.2f across %d goals",
            result.amount, result.round_up, result.delta, len(plan.shares),
        )
        return transaction.model_copy(deep=True)

    def apply_manual_transfer(
        self,
        amount,
        target_goal_id: Optional[str] = None,
        description: str = "Manual transfer",
        on_date: Optional[date] = None,
    ) -> Transaction:
        """Top up one goal, or split across individual goals when no goal is given"""
        value = float(quantize(parse_amount(amount)))
        if value <= 0:
            raise ValidationError("amount must be at least 0.01")

        with self._lock:
            if target_goal_id is not None:
                goal = self._find_goal(target_goal_id)
                shares = {goal.id: value}
                goal_name = goal.name
            else:
                plan = self.allocator.allocate(value, self._goals)
                shares = plan.shares
                goal_name = plan.primary_goal_name

            transaction = Transaction(
                id=_new_id(),
                type=TransactionType.INCOME,
                amount=value,
                category="Savings",
                description=description,
                date=on_date or date.today(),
                goal_name=goal_name,
            )

            self._commit(shares, transaction)

        logger.info("Manual transfer of %.2f to %s", value, goal_name)
        return transaction.model_copy(deep=True)

    def create_goal(self, goal_in: GoalCreate) -> Goal:
        """Validate and add a new goal with nothing saved yet"""
        name = (goal_in.name or "").strip()
        if not name:
            raise ValidationError("Please enter a goal name")
        if not math.isfinite(goal_in.target) or goal_in.target <= 0:
            raise ValidationError("Please enter a valid target amount greater than 0")
        if not goal_in.is_individual and goal_in.members < 2:
            raise ValidationError("Please enter at least 2 members for collaborative goals")

        try:
            goal = Goal(
                id=_new_id(),
                name=name,
                target=goal_in.target,
                saved=0.0,
                priority=goal_in.priority,
                is_individual=goal_in.is_individual,
                members=1 if goal_in.is_individual else goal_in.members,
                due_date=goal_in.due_date,
                created_at=datetime.now(),
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        with self._lock:
            self._goals.append(goal)

        logger.info("Created goal %r (%s, target %.2f)", goal.name, goal.priority.value, goal.target)
        return goal.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def project(
        self,
        goal_id: str,
        deadline: Union[date, str],
        today: Optional[date] = None,
    ) -> GoalProjection:
        """Forecast a goal against a deadline using the ledger's history"""
        goal = self.get_goal(goal_id)
        today = today or date.today()
        deadline = parse_future_deadline(deadline, today)

        if self.history_source is not None:
            history = self.history_source.fetch()
        else:
            history = self.filter_transactions("expense")

        return self.projector.project(goal, deadline, history, today=today)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_goal(self, goal_id: str) -> Goal:
        for goal in self._goals:
            if goal.id == goal_id:
                return goal
        raise NotFoundError(f"Goal {goal_id!r} not found")

    def _commit(self, shares: dict[str, float], transaction: Transaction):
        """Apply goal credits and append the transaction as one unit"""
        updates = {}
        for goal_id, share in shares.items():
            goal = self._find_goal(goal_id)
            updates[goal_id] = from_cents(to_cents(goal.saved) + to_cents(share))

        for goal in self._goals:
            if goal.id in updates:
                goal.saved = updates[goal.id]

        self._transactions.insert(0, transaction)
