"""Harvest and sowing report: net flow per category and period settlement.

Categories whose income covers their spending are the "harvest"; the rest
are "sowing". Sowing in education, health, business costs, insurance,
giving and housing counts as good seed rather than consumption. The
period's profit can then be split between savings and investment.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from moneyjar.domain.entities import StandardCategory, Transaction, TransactionType
from moneyjar.domain.errors import ValidationError
from moneyjar.domain.state import StateStore
from moneyjar.utils.date_parser import month_key, shift_month

GOOD_SEED_CATEGORIES = frozenset(
    c.value
    for c in (
        StandardCategory.EDUCATION,
        StandardCategory.HEALTH,
        StandardCategory.BUSINESS_COST,
        StandardCategory.INSURANCE,
        StandardCategory.GIVING,
        StandardCategory.HOUSING,
    )
)


@dataclass(frozen=True)
class CategoryFlow:
    category: str
    income: float
    expense: float
    previous_net: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense

    @property
    def growth(self) -> float:
        """Change of the net flow against the previous period in percent, 0 without one."""
        if self.previous_net == 0:
            return 0.0
        return (self.net - self.previous_net) / abs(self.previous_net) * 100

    @property
    def is_good_seed(self) -> bool:
        return self.category in GOOD_SEED_CATEGORIES


@dataclass(frozen=True)
class HarvestReport:
    period: str
    harvest: list[CategoryFlow]
    sowing: list[CategoryFlow]
    income: float
    expense: float

    @property
    def profit(self) -> float:
        return self.income - self.expense

    @property
    def harvest_ratio(self) -> float:
        """Income per unit of spending, 0 without spending."""
        return self.income / self.expense if self.expense > 0 else 0.0

    @property
    def good_seed_total(self) -> float:
        return sum(-f.net for f in self.sowing if f.is_good_seed)

    @property
    def consumption_total(self) -> float:
        return sum(-f.net for f in self.sowing if not f.is_good_seed)


@dataclass(frozen=True)
class Settlement:
    savings: float
    investment: float


def settle_profit(profit: float, savings_percent: float = 50) -> Settlement:
    """Split a period's profit between savings and investment.

    A loss leaves nothing to split.

    Raises:
        ValidationError: If ``savings_percent`` is outside 0-100
    """
    if not 0 <= savings_percent <= 100:
        raise ValidationError("Savings share must be between 0 and 100 percent")
    distributable = max(0.0, profit)
    savings = distributable * savings_percent / 100
    return Settlement(savings=savings, investment=distributable - savings)


def _net_by_category(transactions: Iterable[Transaction]) -> dict[str, tuple[float, float]]:
    flows: dict[str, tuple[float, float]] = {}
    for txn in transactions:
        income, expense = flows.get(txn.category, (0.0, 0.0))
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
        flows[txn.category] = (income, expense)
    return flows


def build_report(
    period: str,
    transactions: Iterable[Transaction],
    previous: Iterable[Transaction] = (),
) -> HarvestReport:
    """Classify the period's categories into harvest and sowing.

    Harvest is sorted by net flow descending, sowing with the largest
    outflow first. ``previous`` supplies the comparison period.
    """
    current = _net_by_category(transactions)
    previous_net = {
        category: income - expense
        for category, (income, expense) in _net_by_category(previous).items()
    }
    flows = [
        CategoryFlow(
            category=category,
            income=income,
            expense=expense,
            previous_net=previous_net.get(category, 0.0),
        )
        for category, (income, expense) in current.items()
    ]
    return HarvestReport(
        period=period,
        harvest=sorted((f for f in flows if f.net >= 0), key=lambda f: f.net, reverse=True),
        sowing=sorted((f for f in flows if f.net < 0), key=lambda f: f.net),
        income=sum(f.income for f in flows),
        expense=sum(f.expense for f in flows),
    )


class ReportService:
    """Service for monthly and yearly harvest reports."""

    def __init__(self, store: StateStore):
        self.store = store

    def monthly_report(self, month: str) -> HarvestReport:
        """Report a YYYY-MM month, compared with the month before."""
        previous_month = shift_month(month, -1)
        transactions = self.store.state.transactions
        return build_report(
            month,
            [t for t in transactions if t.month == month],
            [t for t in transactions if t.month == previous_month],
        )

    def yearly_report(self, year: int) -> HarvestReport:
        """Report a calendar year without a comparison period."""
        return build_report(
            str(year), [t for t in self.store.state.transactions if t.date.year == year]
        )

    def profit_trend(self, months: int = 6, today: Optional[date] = None) -> list[tuple[str, float]]:
        """(month, income minus expense) for the last ``months`` months, oldest first."""
        current = month_key(today or date.today())
        keys = [shift_month(current, -offset) for offset in range(months - 1, -1, -1)]
        profit = dict.fromkeys(keys, 0.0)
        for txn in self.store.state.transactions:
            if txn.month in profit:
                sign = 1 if txn.type == TransactionType.INCOME else -1
                profit[txn.month] += sign * txn.amount
        return list(profit.items())
