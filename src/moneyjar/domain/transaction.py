"""Transaction domain service."""

from dataclasses import replace
from datetime import date as Date, datetime, UTC
from typing import Optional

from moneyjar.domain.entities import Transaction, TransactionType
from moneyjar.domain.errors import NotFoundError, ValidationError, entity_not_found
from moneyjar.domain.state import StateStore, new_id
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, store: StateStore):
        """Initialize transaction service.

        Args:
            store: StateStore instance
        """
        self.store = store

    def add_transaction(
        self,
        amount: float,
        type: TransactionType,
        category: str,
        note: str = "",
        date: Optional[datetime] = None,
        wallet_id: Optional[str] = None,
        recurring_bill_id: Optional[str] = None,
    ) -> Transaction:
        """Record a transaction.

        Args:
            amount: Positive amount; ``type`` gives its direction
            type: INCOME or EXPENSE
            category: Category label
            note: Free-text note
            date: Transaction time (defaults to now)
            wallet_id: Wallet to book against (defaults to the first wallet)
            recurring_bill_id: Bill this transaction pays, if any

        Returns:
            The created transaction

        Raises:
            ValidationError: If the amount is negative or the wallet is unknown
        """
        txn = self.build_transaction(
            amount, type, category, note, date, wallet_id, recurring_bill_id
        )
        self.store.commit(transactions=self.prepend(txn))
        logger.info("Added %s transaction %s (%s)", type.value, txn.id, category)
        return txn

    def build_transaction(
        self,
        amount: float,
        type: TransactionType,
        category: str,
        note: str = "",
        date: Optional[datetime] = None,
        wallet_id: Optional[str] = None,
        recurring_bill_id: Optional[str] = None,
    ) -> Transaction:
        """Validate and create a transaction without storing it.

        Services that change another collection alongside the ledger use
        this with ``prepend`` to write both in one commit.

        Raises:
            ValidationError: If the amount is negative or the wallet is unknown
        """
        if amount < 0:
            raise ValidationError("Transaction amount must not be negative")

        wallets = self.store.state.wallets
        if wallet_id is None:
            wallet_id = wallets[0].id if wallets else None
        elif not any(w.id == wallet_id for w in wallets):
            raise ValidationError(entity_not_found("Wallet", wallet_id))

        return Transaction(
            id=new_id(),
            amount=amount,
            type=type,
            category=category,
            date=date or datetime.now(UTC),
            note=note,
            wallet_id=wallet_id,
            recurring_bill_id=recurring_bill_id,
        )

    def prepend(self, *transactions: Transaction) -> tuple[Transaction, ...]:
        """Ledger with ``transactions`` added in front, newest first as displayed."""
        return tuple(transactions) + self.store.state.transactions

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        for txn in self.store.state.transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def update_transaction(self, transaction_id: str, **changes) -> Transaction:
        """Edit fields of a transaction.

        Args:
            transaction_id: Transaction ID
            **changes: Transaction fields to replace (amount, type, category,
                note, date, wallet_id)

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the new amount is negative
        """
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(entity_not_found("Transaction", transaction_id))
        if changes.get("amount", 0) < 0:
            raise ValidationError("Transaction amount must not be negative")

        updated = replace(txn, **changes)
        self.store.commit(
            transactions=tuple(
                updated if t.id == transaction_id else t for t in self.store.state.transactions
            )
        )
        logger.info("Updated transaction %s", transaction_id)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.get_transaction(transaction_id) is None:
            raise NotFoundError(entity_not_found("Transaction", transaction_id))
        self.store.commit(
            transactions=tuple(
                t for t in self.store.state.transactions if t.id != transaction_id
            )
        )
        logger.info("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        month: Optional[str] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        wallet_id: Optional[str] = None,
        search: Optional[str] = None,
        start_date: Optional[Date] = None,
        end_date: Optional[Date] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first.

        Args:
            month: Optional YYYY-MM filter
            type: Optional INCOME/EXPENSE filter
            category: Optional category label filter
            wallet_id: Optional wallet filter
            search: Optional case-insensitive substring of the note
            start_date: Optional inclusive start day (UTC)
            end_date: Optional inclusive end day (UTC)
        """
        result = list(self.store.state.transactions)
        if month is not None:
            result = [t for t in result if t.month == month]
        if type is not None:
            result = [t for t in result if t.type == type]
        if category is not None:
            result = [t for t in result if t.category == category]
        if wallet_id is not None:
            result = [t for t in result if t.wallet_id == wallet_id]
        if search:
            needle = search.lower()
            result = [t for t in result if needle in t.note.lower()]
        if start_date is not None:
            result = [t for t in result if t.date.astimezone(UTC).date() >= start_date]
        if end_date is not None:
            result = [t for t in result if t.date.astimezone(UTC).date() <= end_date]
        return sorted(result, key=lambda t: t.date, reverse=True)

    def month_totals(self, month: str) -> tuple[float, float]:
        """Return (income, expense) totals for a YYYY-MM month."""
        transactions = self.list_transactions(month=month)
        income = sum(t.amount for t in transactions if t.type == TransactionType.INCOME)
        expense = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
        return income, expense
