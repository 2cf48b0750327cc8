"""Debt domain service.

Lending and borrowing move real money, so every debt is created and settled
together with a transaction on the first wallet.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from moneyjar.domain.entities import (
    BORROW_CATEGORY,
    COLLECT_DEBT_CATEGORY,
    LEND_CATEGORY,
    REPAY_DEBT_CATEGORY,
    Debt,
    DebtType,
    TransactionType,
)
from moneyjar.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    debt_already_settled,
    entity_not_found,
)
from moneyjar.domain.state import StateStore, new_id
from moneyjar.domain.transaction import TransactionService
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DebtTotals:
    """Outstanding amounts over unpaid debts."""

    receivable: float
    payable: float

    @property
    def net(self) -> float:
        return self.receivable - self.payable


class DebtService:
    """Service for money lent and borrowed."""

    def __init__(self, store: StateStore):
        """Initialize debt service.

        Args:
            store: StateStore instance
        """
        self.store = store
        self.transactions = TransactionService(store)

    def add_debt(
        self,
        person: str,
        amount: float,
        type: DebtType,
        due_date: Optional[date] = None,
        note: Optional[str] = None,
    ) -> Debt:
        """Record a debt and the cash movement it causes.

        Lending books an expense; borrowing books an income.

        Raises:
            ValidationError: If the amount is not positive
        """
        if amount <= 0:
            raise ValidationError("Debt amount must be positive")

        debt = Debt(
            id=new_id(),
            person=person,
            amount=amount,
            type=type,
            is_paid=False,
            due_date=due_date,
            note=note,
        )
        if type == DebtType.LEND:
            txn = self.transactions.build_transaction(
                amount=amount,
                type=TransactionType.EXPENSE,
                category=LEND_CATEGORY,
                note=f"Cho {person} vay",
            )
        else:
            txn = self.transactions.build_transaction(
                amount=amount,
                type=TransactionType.INCOME,
                category=BORROW_CATEGORY,
                note=f"Vay từ {person}",
            )
        self.store.commit(
            debts=self.store.state.debts + (debt,), transactions=self.transactions.prepend(txn)
        )
        logger.info("Added %s debt %s with %s", type.value, debt.id, person)
        return debt

    def get_debt(self, debt_id: str) -> Optional[Debt]:
        for debt in self.store.state.debts:
            if debt.id == debt_id:
                return debt
        return None

    def list_debts(
        self, type: Optional[DebtType] = None, include_paid: bool = True
    ) -> list[Debt]:
        return [
            d
            for d in self.store.state.debts
            if (type is None or d.type == type) and (include_paid or not d.is_paid)
        ]

    def settle_debt(self, debt_id: str) -> Debt:
        """Mark a debt as paid and book the reverse cash movement.

        Raises:
            NotFoundError: If the debt doesn't exist
            ConflictError: If the debt is already settled
        """
        debt = self.get_debt(debt_id)
        if debt is None:
            raise NotFoundError(entity_not_found("Debt", debt_id))
        if debt.is_paid:
            raise ConflictError(debt_already_settled(debt.person))

        settled = replace(debt, is_paid=True)
        if debt.type == DebtType.LEND:
            txn = self.transactions.build_transaction(
                amount=debt.amount,
                type=TransactionType.INCOME,
                category=COLLECT_DEBT_CATEGORY,
                note=f"Thu nợ từ {debt.person}",
            )
        else:
            txn = self.transactions.build_transaction(
                amount=debt.amount,
                type=TransactionType.EXPENSE,
                category=REPAY_DEBT_CATEGORY,
                note=f"Trả nợ cho {debt.person}",
            )
        self.store.commit(
            debts=tuple(settled if d.id == debt_id else d for d in self.store.state.debts),
            transactions=self.transactions.prepend(txn),
        )
        logger.info("Settled debt %s", debt_id)
        return settled

    def delete_debt(self, debt_id: str) -> None:
        """Delete a debt record. Its transactions stay in the ledger."""
        if self.get_debt(debt_id) is None:
            raise NotFoundError(entity_not_found("Debt", debt_id))
        self.store.commit(debts=tuple(d for d in self.store.state.debts if d.id != debt_id))
        logger.info("Deleted debt %s", debt_id)

    def totals(self) -> DebtTotals:
        unpaid = [d for d in self.store.state.debts if not d.is_paid]
        return DebtTotals(
            receivable=sum(d.amount for d in unpaid if d.type == DebtType.LEND),
            payable=sum(d.amount for d in unpaid if d.type == DebtType.BORROW),
        )
