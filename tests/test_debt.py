"""Tests for the debt ledger."""

from datetime import date

import pytest

from moneyjar.domain.entities import (
    BORROW_CATEGORY,
    COLLECT_DEBT_CATEGORY,
    LEND_CATEGORY,
    REPAY_DEBT_CATEGORY,
    DebtType,
    TransactionType,
)
from moneyjar.domain.errors import ConflictError, NotFoundError, ValidationError


def test_lend_books_expense(debt_service, transaction_service, reopen):
    """Test that lending money records a debt and an expense."""
    debt = debt_service.add_debt("Nam", 2_000_000, DebtType.LEND, due_date=date(2026, 12, 1))

    assert not debt.is_paid
    txn = transaction_service.list_transactions()[0]
    assert txn.type == TransactionType.EXPENSE
    assert txn.category == LEND_CATEGORY
    assert txn.note == "Cho Nam vay"
    assert reopen().debts == (debt,)


def test_borrow_books_income(debt_service, transaction_service):
    """Test that borrowing records an income."""
    debt_service.add_debt("Lan", 5_000_000, DebtType.BORROW, note="Tiền nhà")

    txn = transaction_service.list_transactions()[0]
    assert txn.type == TransactionType.INCOME
    assert txn.category == BORROW_CATEGORY
    assert txn.note == "Vay từ Lan"


def test_amount_must_be_positive(debt_service):
    """Test that debts need a positive amount."""
    with pytest.raises(ValidationError):
        debt_service.add_debt("Nam", 0, DebtType.LEND)
    assert debt_service.store.state.debts == ()


def test_settle_lend(debt_service, transaction_service):
    """Test that collecting a loan books an income."""
    debt = debt_service.add_debt("Nam", 2_000_000, DebtType.LEND)

    settled = debt_service.settle_debt(debt.id)

    assert settled.is_paid
    txn = transaction_service.list_transactions()[0]
    assert txn.type == TransactionType.INCOME
    assert txn.category == COLLECT_DEBT_CATEGORY
    assert txn.note == "Thu nợ từ Nam"


def test_settle_borrow(debt_service, transaction_service):
    """Test that repaying a loan books an expense."""
    debt = debt_service.add_debt("Lan", 5_000_000, DebtType.BORROW)

    debt_service.settle_debt(debt.id)

    txn = transaction_service.list_transactions()[0]
    assert txn.type == TransactionType.EXPENSE
    assert txn.category == REPAY_DEBT_CATEGORY
    assert txn.note == "Trả nợ cho Lan"


def test_settle_only_once(debt_service):
    """Test that a settled debt cannot be settled again."""
    debt = debt_service.add_debt("Nam", 1_000, DebtType.LEND)
    debt_service.settle_debt(debt.id)

    with pytest.raises(ConflictError, match="already settled"):
        debt_service.settle_debt(debt.id)
    assert len(debt_service.store.state.transactions) == 2


def test_settle_missing_debt(debt_service):
    """Test settling a debt that doesn't exist."""
    with pytest.raises(NotFoundError):
        debt_service.settle_debt("missing")


def test_list_and_totals(debt_service):
    """Test filtering debts and totalling what is still open."""
    lent = debt_service.add_debt("Nam", 2_000_000, DebtType.LEND)
    debt_service.add_debt("Hoa", 1_000_000, DebtType.LEND)
    debt_service.add_debt("Lan", 5_000_000, DebtType.BORROW)
    debt_service.settle_debt(lent.id)

    assert len(debt_service.list_debts()) == 3
    assert len(debt_service.list_debts(include_paid=False)) == 2
    assert [d.person for d in debt_service.list_debts(type=DebtType.BORROW)] == ["Lan"]

    totals = debt_service.totals()
    assert totals.receivable == 1_000_000
    assert totals.payable == 5_000_000
    assert totals.net == -4_000_000


def test_delete_debt(debt_service):
    """Test deleting a debt record."""
    debt = debt_service.add_debt("Nam", 1_000, DebtType.LEND)
    debt_service.delete_debt(debt.id)

    assert debt_service.get_debt(debt.id) is None
    assert len(debt_service.store.state.transactions) == 1


def test_debt_and_transaction_persist_together(debt_service, reopen):
    """Test that adding and settling write the debt and its transaction in one go."""
    debt = debt_service.add_debt("Nam", 2_000_000, DebtType.LEND)
    state = reopen()
    assert state.debts == (debt,)
    assert [t.category for t in state.transactions] == [LEND_CATEGORY]

    settled = debt_service.settle_debt(debt.id)

    state = reopen()
    assert state.debts == (settled,)
    assert [t.category for t in state.transactions] == [COLLECT_DEBT_CATEGORY, LEND_CATEGORY]
