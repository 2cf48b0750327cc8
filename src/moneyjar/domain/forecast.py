"""Month-end cashflow forecast.

Projects this month's spending to its last day from the average daily
variable spend plus the recurring bills still to be paid, and derives how
much can be spent per day without breaking the budget.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from moneyjar.domain.bills import BillService
from moneyjar.domain.entities import RecurringBill, StandardCategory, TransactionType
from moneyjar.domain.state import StateStore
from moneyjar.utils.date_parser import month_key

# Spending outside these categories counts as day-to-day variable spend
FIXED_COST_CATEGORIES = frozenset(
    {
        StandardCategory.BILLS.value,
        StandardCategory.HOUSING.value,
        StandardCategory.INSURANCE.value,
    }
)

WARNING_THRESHOLD = 0.9


class Scenario(str, Enum):
    SAVER = "SAVER"
    AVERAGE = "AVERAGE"
    SPENDER = "SPENDER"

    @property
    def multiplier(self) -> float:
        return SCENARIO_MULTIPLIERS[self]


SCENARIO_MULTIPLIERS = {
    Scenario.SAVER: 0.8,
    Scenario.AVERAGE: 1.0,
    Scenario.SPENDER: 1.2,
}


class ForecastStatus(str, Enum):
    SAFE = "SAFE"
    WARNING = "WARNING"
    DANGER = "DANGER"


@dataclass(frozen=True)
class ForecastDay:
    day: int
    cumulative: float
    projected: bool


@dataclass(frozen=True)
class CashflowForecast:
    month: str
    scenario: Scenario
    budget: float
    day: int
    days_remaining: int
    spent: float
    average_daily_variable: float
    remaining_bills: list[RecurringBill]
    remaining_bills_total: float
    disposable: float
    safe_daily_spend: float
    days: list[ForecastDay]
    final_projection: float
    savings_potential: float
    status: ForecastStatus


def forecast_status(projection: float, budget: float) -> ForecastStatus:
    """DANGER above the budget, WARNING above 90% of it, SAFE otherwise."""
    if projection > budget:
        return ForecastStatus.DANGER
    if projection > budget * WARNING_THRESHOLD:
        return ForecastStatus.WARNING
    return ForecastStatus.SAFE


class ForecastService:
    """Service projecting the current month's spending."""

    def __init__(self, store: StateStore):
        self.store = store
        self.bills = BillService(store)

    def forecast(
        self, scenario: Scenario = Scenario.AVERAGE, today: Optional[date] = None
    ) -> CashflowForecast:
        """Forecast the month containing ``today`` against the monthly budget.

        The average daily variable spend is this month's expenses outside
        bills, housing and insurance divided by the days elapsed, scaled by
        the scenario multiplier for the days ahead. Unpaid bills due after
        today are added on their due day.

        Args:
            scenario: Spending behaviour assumed for the rest of the month
            today: Reference day (defaults to today)
        """
        today = today or date.today()
        month = month_key(today)
        budget = self.store.state.budget
        days_in_month = calendar.monthrange(today.year, today.month)[1]
        days_remaining = days_in_month - today.day

        expenses = [
            t
            for t in self.store.state.transactions
            if t.type == TransactionType.EXPENSE and t.month == month
        ]
        spent = sum(t.amount for t in expenses)
        variable = sum(t.amount for t in expenses if t.category not in FIXED_COST_CATEGORIES)
        average_daily_variable = variable / today.day

        remaining_bills = sorted(
            (
                bill
                for bill in self.store.state.recurring_bills
                if bill.due_day > today.day and not self.bills.is_paid_this_month(bill, today)
            ),
            key=lambda b: b.due_day,
        )
        remaining_bills_total = sum(b.amount for b in remaining_bills)

        disposable = budget - spent - remaining_bills_total
        safe_daily_spend = max(0.0, disposable / days_remaining) if days_remaining > 0 else 0.0

        by_day: dict[int, float] = {}
        for txn in expenses:
            by_day[txn.date.day] = by_day.get(txn.date.day, 0.0) + txn.amount
        days = []
        cumulative = 0.0
        for day in range(1, today.day + 1):
            cumulative += by_day.get(day, 0.0)
            days.append(ForecastDay(day=day, cumulative=cumulative, projected=False))
        for day in range(today.day + 1, days_in_month + 1):
            due = sum(b.amount for b in remaining_bills if b.due_day == day)
            cumulative += due + average_daily_variable * scenario.multiplier
            days.append(ForecastDay(day=day, cumulative=cumulative, projected=True))

        # On the last day the projection is what was actually spent
        final_projection = days[-1].cumulative if days_remaining > 0 else spent
        return CashflowForecast(
            month=month,
            scenario=scenario,
            budget=budget,
            day=today.day,
            days_remaining=days_remaining,
            spent=spent,
            average_daily_variable=average_daily_variable,
            remaining_bills=remaining_bills,
            remaining_bills_total=remaining_bills_total,
            disposable=disposable,
            safe_daily_spend=safe_daily_spend,
            days=days,
            final_projection=final_projection,
            savings_potential=max(0.0, budget - final_projection),
            status=forecast_status(final_projection, budget),
        )
