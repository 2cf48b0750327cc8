"""Savings goal domain service."""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from moneyjar.domain.entities import SAVINGS_CATEGORY, SavingsGoal, TransactionType
from moneyjar.domain.errors import NotFoundError, ValidationError, entity_not_found
from moneyjar.domain.state import StateStore, new_id
from moneyjar.domain.transaction import TransactionService
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SavingsPlan:
    """Amount to put aside each day to reach a goal by its deadline."""

    daily: float
    days_left: int


def goal_progress(goal: SavingsGoal) -> float:
    """Percent of the target reached, capped at 100."""
    if goal.target_amount <= 0:
        return 0.0
    return min(goal.current_amount / goal.target_amount * 100, 100.0)


def daily_savings_plan(goal: SavingsGoal, today: Optional[date] = None) -> Optional[SavingsPlan]:
    """Daily amount needed to hit the target on time.

    Returns:
        None when the goal has no deadline, the deadline has passed or the
        target is already reached
    """
    if goal.deadline is None:
        return None
    today = today or date.today()
    days_left = (goal.deadline - today).days
    if days_left <= 0:
        return None
    remaining = goal.target_amount - goal.current_amount
    if remaining <= 0:
        return None
    return SavingsPlan(daily=remaining / days_left, days_left=days_left)


class SavingsService:
    """Service for savings goals and the transactions that fund them."""

    def __init__(self, store: StateStore):
        """Initialize savings service.

        Args:
            store: StateStore instance
        """
        self.store = store
        self.transactions = TransactionService(store)

    def create_goal(
        self,
        name: str,
        target_amount: float,
        deadline: Optional[date] = None,
        current_amount: float = 0.0,
        image: Optional[str] = None,
    ) -> SavingsGoal:
        """Create a savings goal.

        Raises:
            ValidationError: If the target is not positive or the starting amount is negative
        """
        if target_amount <= 0:
            raise ValidationError("Target amount must be positive")
        if current_amount < 0:
            raise ValidationError("Current amount must not be negative")

        goal = SavingsGoal(
            id=new_id(),
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            deadline=deadline,
            image=image,
        )
        self.store.commit(savings_goals=self.store.state.savings_goals + (goal,))
        logger.info("Created savings goal %s (%s)", goal.id, name)
        return goal

    def get_goal(self, goal_id: str) -> Optional[SavingsGoal]:
        for goal in self.store.state.savings_goals:
            if goal.id == goal_id:
                return goal
        return None

    def list_goals(self) -> list[SavingsGoal]:
        return list(self.store.state.savings_goals)

    def delete_goal(self, goal_id: str) -> None:
        if self.get_goal(goal_id) is None:
            raise NotFoundError(entity_not_found("Savings goal", goal_id))
        self.store.commit(
            savings_goals=tuple(g for g in self.store.state.savings_goals if g.id != goal_id)
        )
        logger.info("Deleted savings goal %s", goal_id)

    def _require_goal(self, goal_id: str) -> SavingsGoal:
        goal = self.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(entity_not_found("Savings goal", goal_id))
        return goal

    def _goals_with(self, goal: SavingsGoal) -> tuple[SavingsGoal, ...]:
        return tuple(goal if g.id == goal.id else g for g in self.store.state.savings_goals)

    def deposit(self, goal_id: str, amount: float, wallet_id: Optional[str] = None) -> SavingsGoal:
        """Move money into a goal, booked as an expense from a wallet.

        Raises:
            NotFoundError: If the goal doesn't exist
            ValidationError: If the amount is not positive or the wallet is unknown
        """
        goal = self._require_goal(goal_id)
        if amount <= 0:
            raise ValidationError("Deposit amount must be positive")

        updated = replace(goal, current_amount=goal.current_amount + amount)
        txn = self.transactions.build_transaction(
            amount=amount,
            type=TransactionType.EXPENSE,
            category=SAVINGS_CATEGORY,
            note=f"Nạp tiết kiệm: {goal.name}",
            wallet_id=wallet_id,
        )
        self.store.commit(
            savings_goals=self._goals_with(updated), transactions=self.transactions.prepend(txn)
        )
        logger.info("Deposited %s into goal %s", amount, goal_id)
        return updated

    def withdraw(self, goal_id: str, amount: float, wallet_id: Optional[str] = None) -> SavingsGoal:
        """Take money out of a goal, booked as income to a wallet.

        The goal's amount never drops below zero; the income transaction
        still records the full requested amount.
        """
        goal = self._require_goal(goal_id)
        if amount <= 0:
            raise ValidationError("Withdrawal amount must be positive")

        updated = replace(goal, current_amount=max(0.0, goal.current_amount - amount))
        txn = self.transactions.build_transaction(
            amount=amount,
            type=TransactionType.INCOME,
            category=SAVINGS_CATEGORY,
            note=f"Rút từ mục tiêu: {goal.name}",
            wallet_id=wallet_id,
        )
        self.store.commit(
            savings_goals=self._goals_with(updated), transactions=self.transactions.prepend(txn)
        )
        logger.info("Withdrew %s from goal %s", amount, goal_id)
        return updated
