"""Small-business profit and loss over sales and business-cost transactions."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from moneyjar.domain.entities import StandardCategory, Transaction, TransactionType
from moneyjar.domain.errors import ValidationError
from moneyjar.domain.state import StateStore
from moneyjar.domain.transaction import TransactionService
from moneyjar.utils.date_parser import month_key, shift_month

REVENUE_CATEGORY = StandardCategory.SELLING.value
COST_CATEGORY = StandardCategory.BUSINESS_COST.value
DEFAULT_REVENUE_NOTE = "Doanh thu bán hàng"
DEFAULT_COST_NOTE = "Chi phí nhập hàng/vận hành"


@dataclass(frozen=True)
class ProfitAndLoss:
    revenue: float
    cost: float

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    @property
    def margin(self) -> float:
        """Profit as a percentage of revenue, 0 without revenue."""
        return self.profit / self.revenue * 100 if self.revenue > 0 else 0.0


@dataclass(frozen=True)
class MonthlyProfitAndLoss:
    month: str
    result: ProfitAndLoss


def profit_and_loss(transactions: Iterable[Transaction]) -> ProfitAndLoss:
    revenue = cost = 0.0
    for txn in transactions:
        if txn.category == REVENUE_CATEGORY:
            revenue += txn.amount
        elif txn.category == COST_CATEGORY:
            cost += txn.amount
    return ProfitAndLoss(revenue=revenue, cost=cost)


class BusinessService:
    """Service for recording and summarising business income and costs."""

    def __init__(self, store: StateStore):
        """Initialize business service.

        Args:
            store: StateStore instance
        """
        self.store = store
        self.transactions = TransactionService(store)

    def record_revenue(
        self,
        amount: float,
        note: str = DEFAULT_REVENUE_NOTE,
        date: Optional[datetime] = None,
        wallet_id: Optional[str] = None,
    ) -> Transaction:
        """Book a sale as income in the selling category."""
        return self.transactions.add_transaction(
            amount=amount,
            type=TransactionType.INCOME,
            category=REVENUE_CATEGORY,
            note=note,
            date=date,
            wallet_id=wallet_id,
        )

    def record_cost(
        self,
        amount: float,
        note: str = DEFAULT_COST_NOTE,
        date: Optional[datetime] = None,
        wallet_id: Optional[str] = None,
    ) -> Transaction:
        """Book a stock or operating cost as a business expense."""
        return self.transactions.add_transaction(
            amount=amount,
            type=TransactionType.EXPENSE,
            category=COST_CATEGORY,
            note=note,
            date=date,
            wallet_id=wallet_id,
        )

    def business_transactions(self) -> list[Transaction]:
        """Sales and business costs, newest first."""
        return sorted(
            (
                t
                for t in self.store.state.transactions
                if t.category in (REVENUE_CATEGORY, COST_CATEGORY)
            ),
            key=lambda t: t.date,
            reverse=True,
        )

    def summary(self) -> ProfitAndLoss:
        """All-time revenue, cost, profit and margin."""
        return profit_and_loss(self.business_transactions())

    def monthly(self, months: int = 6, today: Optional[date] = None) -> list[MonthlyProfitAndLoss]:
        """Profit and loss for the last ``months`` months, oldest first.

        Raises:
            ValidationError: If ``months`` is not positive
        """
        if months <= 0:
            raise ValidationError("Number of months must be positive")
        current = month_key(today or date.today())
        business = self.business_transactions()
        result = []
        for offset in range(months - 1, -1, -1):
            month = shift_month(current, -offset)
            result.append(
                MonthlyProfitAndLoss(
                    month=month,
                    result=profit_and_loss(t for t in business if t.month == month),
                )
            )
        return result
