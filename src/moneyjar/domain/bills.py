"""Recurring bill domain service."""

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional

from moneyjar.domain.entities import RecurringBill, Transaction, TransactionType
from moneyjar.domain.errors import NotFoundError, ValidationError, entity_not_found
from moneyjar.domain.state import StateStore, new_id
from moneyjar.domain.transaction import TransactionService
from moneyjar.utils.date_parser import month_key
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)

URGENT_WINDOW_DAYS = 7


class BillStatus(str, Enum):
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    TODAY = "TODAY"
    UPCOMING = "UPCOMING"


@dataclass(frozen=True)
class BillStats:
    total: float
    paid: float
    remaining: float
    overdue_count: int

    @property
    def paid_percent(self) -> float:
        return self.paid / self.total * 100 if self.total > 0 else 0.0


def _validate_due_day(due_day: int) -> None:
    if not 1 <= due_day <= 31:
        raise ValidationError("Due day must be between 1 and 31")


class BillService:
    """Service for recurring bills and their monthly payment status."""

    def __init__(self, store: StateStore):
        """Initialize bill service.

        Args:
            store: StateStore instance
        """
        self.store = store
        self.transactions = TransactionService(store)

    def add_bill(self, name: str, amount: float, category: str, due_day: int) -> RecurringBill:
        """Register a bill due on the same day every month.

        Raises:
            ValidationError: If the amount is not positive or the day is out of range
        """
        if amount <= 0:
            raise ValidationError("Bill amount must be positive")
        _validate_due_day(due_day)

        bill = RecurringBill(
            id=new_id(), name=name, amount=amount, category=category, due_day=due_day
        )
        self.store.commit(recurring_bills=self.store.state.recurring_bills + (bill,))
        logger.info("Added recurring bill %s (%s)", bill.id, name)
        return bill

    def get_bill(self, bill_id: str) -> Optional[RecurringBill]:
        for bill in self.store.state.recurring_bills:
            if bill.id == bill_id:
                return bill
        return None

    def _require_bill(self, bill_id: str) -> RecurringBill:
        bill = self.get_bill(bill_id)
        if bill is None:
            raise NotFoundError(entity_not_found("Bill", bill_id))
        return bill

    def list_bills(self) -> list[RecurringBill]:
        """Bills ordered by due day."""
        return sorted(self.store.state.recurring_bills, key=lambda b: b.due_day)

    def update_bill(self, bill_id: str, **changes) -> RecurringBill:
        bill = self._require_bill(bill_id)
        if "due_day" in changes:
            _validate_due_day(changes["due_day"])
        if changes.get("amount", 1) <= 0:
            raise ValidationError("Bill amount must be positive")

        updated = replace(bill, **changes)
        self.store.commit(
            recurring_bills=tuple(
                updated if b.id == bill_id else b for b in self.store.state.recurring_bills
            )
        )
        logger.info("Updated recurring bill %s", bill_id)
        return updated

    def delete_bill(self, bill_id: str) -> None:
        self._require_bill(bill_id)
        self.store.commit(
            recurring_bills=tuple(b for b in self.store.state.recurring_bills if b.id != bill_id)
        )
        logger.info("Deleted recurring bill %s", bill_id)

    def is_paid_this_month(self, bill: RecurringBill, today: Optional[date] = None) -> bool:
        """Whether an expense this month pays the bill.

        An expense counts when it links the bill explicitly, or when its note
        contains the bill name (case-insensitive) for entries made without a link.
        """
        month = month_key(today or date.today())
        name = bill.name.lower()
        for txn in self.store.state.transactions:
            if txn.type != TransactionType.EXPENSE or txn.month != month:
                continue
            if txn.recurring_bill_id == bill.id or name in txn.note.lower():
                return True
        return False

    def status(self, bill: RecurringBill, today: Optional[date] = None) -> BillStatus:
        today = today or date.today()
        if self.is_paid_this_month(bill, today):
            return BillStatus.PAID
        if bill.due_day < today.day:
            return BillStatus.OVERDUE
        if bill.due_day == today.day:
            return BillStatus.TODAY
        return BillStatus.UPCOMING

    def stats(self, today: Optional[date] = None) -> BillStats:
        """Paid and outstanding totals for the current month."""
        today = today or date.today()
        total = paid = remaining = 0.0
        overdue_count = 0
        for bill in self.store.state.recurring_bills:
            total += bill.amount
            if self.is_paid_this_month(bill, today):
                paid += bill.amount
            else:
                remaining += bill.amount
                if bill.due_day < today.day:
                    overdue_count += 1
        return BillStats(total=total, paid=paid, remaining=remaining, overdue_count=overdue_count)

    def urgent_bills(self, today: Optional[date] = None) -> list[RecurringBill]:
        """Unpaid bills that are overdue or due within the next week."""
        today = today or date.today()
        urgent = [
            bill
            for bill in self.store.state.recurring_bills
            if not self.is_paid_this_month(bill, today)
            and bill.due_day <= today.day + URGENT_WINDOW_DAYS
        ]
        return sorted(urgent, key=lambda b: b.due_day)

    def pay_bill(self, bill_id: str, wallet_id: Optional[str] = None) -> Transaction:
        """Record this month's payment of a bill as an expense."""
        bill = self._require_bill(bill_id)
        txn = self.transactions.add_transaction(
            amount=bill.amount,
            type=TransactionType.EXPENSE,
            category=bill.category,
            note=f"Thanh toán {bill.name}",
            wallet_id=wallet_id,
            recurring_bill_id=bill.id,
        )
        logger.info("Paid recurring bill %s", bill_id)
        return txn
