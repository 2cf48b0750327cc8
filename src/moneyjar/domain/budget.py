"""Budget domain service."""

from dataclasses import dataclass
from typing import Mapping, Optional

from moneyjar.domain.entities import TransactionType
from moneyjar.domain.errors import ValidationError
from moneyjar.domain.jars import get_jar
from moneyjar.domain.state import StateStore
from moneyjar.utils.date_parser import shift_month
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CategoryBudgetLine:
    category: str
    limit: float
    spent: float
    spent_last_month: float

    @property
    def remaining(self) -> float:
        return self.limit - self.spent

    @property
    def percent(self) -> float:
        return self.spent / self.limit * 100 if self.limit > 0 else 0.0


@dataclass(frozen=True)
class BudgetReport:
    month: str
    lines: list[CategoryBudgetLine]
    total_budget: float
    total_spent: float


class BudgetService:
    """Service for the monthly budget, category limits and planned income."""

    def __init__(self, store: StateStore):
        """Initialize budget service.

        Args:
            store: StateStore instance
        """
        self.store = store

    def set_budget(self, amount: float) -> None:
        """Set the overall monthly spending limit."""
        if amount < 0:
            raise ValidationError("Budget must not be negative")
        self.store.commit(budget=amount)
        logger.info("Set monthly budget to %s", amount)

    def set_planned_income(self, amount: float) -> None:
        """Set the monthly income the six jars are computed from."""
        if amount < 0:
            raise ValidationError("Planned income must not be negative")
        self.store.commit(planned_income=amount)
        logger.info("Set planned income to %s", amount)

    def set_category_limit(self, category: str, limit: float) -> None:
        """Set a category's monthly limit. A limit of 0 removes it."""
        if limit < 0:
            raise ValidationError("Category limit must not be negative")
        budgets = dict(self.store.state.category_budgets)
        if limit == 0:
            budgets.pop(category, None)
        else:
            budgets[category] = limit
        self.store.commit(category_budgets=budgets)
        logger.info("Set limit for '%s' to %s", category, limit)

    def distribute_jar(self, jar_id: str, limits: Mapping[str, float]) -> None:
        """Assign category limits within one jar in a single change.

        Raises:
            ValidationError: If the jar is unknown or a category is outside it
        """
        try:
            jar = get_jar(jar_id)
        except KeyError:
            raise ValidationError(f"Unknown jar '{jar_id}'")
        outside = [c for c in limits if c not in jar.categories]
        if outside:
            raise ValidationError(
                f"Categories not in jar {jar.id}: {', '.join(outside)}"
            )

        budgets = dict(self.store.state.category_budgets)
        for category, limit in limits.items():
            if limit < 0:
                raise ValidationError("Category limit must not be negative")
            budgets[category] = limit
        self.store.commit(category_budgets=budgets)
        logger.info("Distributed jar %s across %d categories", jar.id, len(limits))

    def category_report(self, month: str, categories: Optional[list[str]] = None) -> BudgetReport:
        """Spending per category this month and last month against its limit.

        Totals only count categories with a limit above zero.

        Args:
            month: YYYY-MM month key
            categories: Categories to report; defaults to every category with
                a limit or spending this month
        """
        last_month = shift_month(month, -1)
        spent: dict[str, float] = {}
        spent_last: dict[str, float] = {}
        for txn in self.store.state.transactions:
            if txn.type != TransactionType.EXPENSE:
                continue
            if txn.month == month:
                spent[txn.category] = spent.get(txn.category, 0.0) + txn.amount
            elif txn.month == last_month:
                spent_last[txn.category] = spent_last.get(txn.category, 0.0) + txn.amount

        limits = self.store.state.category_budgets
        if categories is None:
            categories = list(limits) + [c for c in spent if c not in limits]

        lines = [
            CategoryBudgetLine(
                category=category,
                limit=limits.get(category, 0.0),
                spent=spent.get(category, 0.0),
                spent_last_month=spent_last.get(category, 0.0),
            )
            for category in categories
        ]
        total_budget = sum(limit for limit in limits.values() if limit > 0)
        total_spent = sum(spent.get(c, 0.0) for c, limit in limits.items() if limit > 0)
        return BudgetReport(
            month=month, lines=lines, total_budget=total_budget, total_spent=total_spent
        )
