"""Tests for savings goals."""

from datetime import date

import pytest

from moneyjar.domain.entities import SAVINGS_CATEGORY, SavingsGoal, TransactionType
from moneyjar.domain.errors import NotFoundError, ValidationError
from moneyjar.domain.savings import daily_savings_plan, goal_progress


def test_create_goal(savings_service, reopen):
    """Test creating and persisting a goal."""
    goal = savings_service.create_goal("Mua xe", 50_000_000, deadline=date(2027, 6, 1))

    assert goal.current_amount == 0
    assert reopen().savings_goals == (goal,)


def test_create_goal_validation(savings_service):
    """Test that targets are positive and starting amounts non-negative."""
    with pytest.raises(ValidationError):
        savings_service.create_goal("Bad", 0)
    with pytest.raises(ValidationError):
        savings_service.create_goal("Bad", 1_000, current_amount=-1)


def test_deposit(savings_service, transaction_service, reopen):
    """Test that a deposit grows the goal and books an expense."""
    goal = savings_service.create_goal("Du lịch Nhật", 40_000_000)

    updated = savings_service.deposit(goal.id, 5_000_000)

    assert updated.current_amount == 5_000_000
    txn = transaction_service.list_transactions()[0]
    assert txn.type == TransactionType.EXPENSE
    assert txn.category == SAVINGS_CATEGORY
    assert txn.amount == 5_000_000
    assert txn.note == "Nạp tiết kiệm: Du lịch Nhật"
    assert reopen().savings_goals[0].current_amount == 5_000_000


def test_withdraw_is_clamped_at_zero(savings_service, transaction_service):
    """Test that over-withdrawal empties the goal but books the full income."""
    goal = savings_service.create_goal("Quỹ", 10_000_000, current_amount=3_000_000)

    updated = savings_service.withdraw(goal.id, 5_000_000)

    assert updated.current_amount == 0
    txn = transaction_service.list_transactions()[0]
    assert txn.type == TransactionType.INCOME
    assert txn.amount == 5_000_000
    assert txn.note == "Rút từ mục tiêu: Quỹ"


def test_deposit_requires_positive_amount(savings_service):
    """Test that zero deposits and withdrawals are refused."""
    goal = savings_service.create_goal("Quỹ", 10_000_000)
    with pytest.raises(ValidationError):
        savings_service.deposit(goal.id, 0)
    with pytest.raises(ValidationError):
        savings_service.withdraw(goal.id, -1)
    assert savings_service.store.state.transactions == ()


def test_missing_goal(savings_service):
    """Test operations on a goal that doesn't exist."""
    with pytest.raises(NotFoundError):
        savings_service.deposit("missing", 1_000)
    with pytest.raises(NotFoundError):
        savings_service.delete_goal("missing")


def test_delete_goal_keeps_transactions(savings_service):
    """Test that deleting a goal leaves its transactions in the ledger."""
    goal = savings_service.create_goal("Quỹ", 10_000_000)
    savings_service.deposit(goal.id, 1_000_000)

    savings_service.delete_goal(goal.id)

    assert savings_service.list_goals() == []
    assert len(savings_service.store.state.transactions) == 1


def test_goal_progress():
    """Test progress is capped at 100 percent."""
    assert goal_progress(SavingsGoal("g", "G", 1_000, 250)) == 25
    assert goal_progress(SavingsGoal("g", "G", 1_000, 5_000)) == 100


class TestDailySavingsPlan:
    """Tests for the amount to save each day."""

    def test_plan(self):
        """Test the daily amount until the deadline."""
        goal = SavingsGoal("g", "G", 10_000_000, 1_000_000, deadline=date(2026, 11, 18))

        plan = daily_savings_plan(goal, today=date(2026, 10, 19))

        assert plan.days_left == 30
        assert plan.daily == pytest.approx(300_000)

    def test_no_deadline(self):
        """Test that goals without a deadline have no plan."""
        assert daily_savings_plan(SavingsGoal("g", "G", 1_000), today=date(2026, 10, 19)) is None

    def test_past_deadline(self):
        """Test that an expired deadline has no plan."""
        goal = SavingsGoal("g", "G", 1_000, deadline=date(2026, 10, 1))
        assert daily_savings_plan(goal, today=date(2026, 10, 19)) is None

    def test_reached_target(self):
        """Test that a completed goal has no plan."""
        goal = SavingsGoal("g", "G", 1_000, 1_000, deadline=date(2027, 1, 1))
        assert daily_savings_plan(goal, today=date(2026, 10, 19)) is None


def test_deposit_unknown_wallet_changes_nothing(savings_service, reopen):
    """Test that a deposit to an unknown wallet leaves goal and ledger untouched."""
    goal = savings_service.create_goal("Mua xe", 50_000_000)

    with pytest.raises(ValidationError):
        savings_service.deposit(goal.id, 100_000, wallet_id="nope")

    assert savings_service.get_goal(goal.id).current_amount == 0
    state = reopen()
    assert state.savings_goals[0].current_amount == 0
    assert state.transactions == ()


def test_withdraw_unknown_wallet_changes_nothing(savings_service, reopen):
    """Test that a failed withdrawal keeps the saved amount."""
    goal = savings_service.create_goal("Quỹ", 10_000_000, current_amount=3_000_000)

    with pytest.raises(ValidationError):
        savings_service.withdraw(goal.id, 1_000_000, wallet_id="nope")

    state = reopen()
    assert state.savings_goals[0].current_amount == 3_000_000
    assert state.transactions == ()
