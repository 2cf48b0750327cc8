"""Six-jar money management.

Planned monthly income is split into six jars; each jar owns a set of expense
categories whose spending counts against it.
"""

from dataclasses import dataclass
from typing import Mapping, Sequence

from moneyjar.domain.entities import (
    EXPENSE_CATEGORY_GROUPS,
    StandardCategory,
    Transaction,
    TransactionType,
)


@dataclass(frozen=True)
class Jar:
    id: str
    name: str
    pct: float
    description: str
    categories: tuple[str, ...]


def _labels(*categories: StandardCategory) -> tuple[str, ...]:
    return tuple(c.value for c in categories)


JARS: tuple[Jar, ...] = (
    Jar(
        "NEC",
        "Nhu cầu thiết yếu",
        0.55,
        "Living essentials",
        _labels(*EXPENSE_CATEGORY_GROUPS["essentials"]),
    ),
    Jar("LTSS", "Tiết kiệm dài hạn", 0.10, "Long-term savings for big goals", ()),
    Jar("EDUC", "Giáo dục", 0.10, "Self-development", _labels(StandardCategory.EDUCATION)),
    Jar(
        "PLAY",
        "Hưởng thụ",
        0.10,
        "Treating yourself",
        _labels(*EXPENSE_CATEGORY_GROUPS["personal"]),
    ),
    Jar(
        "FFA",
        "Tự do tài chính",
        0.10,
        "Financial freedom and investing",
        _labels(*EXPENSE_CATEGORY_GROUPS["financial"], StandardCategory.BUSINESS_COST),
    ),
    Jar("GIVE", "Cho đi", 0.05, "Charity and gifts", _labels(StandardCategory.GIVING)),
)


@dataclass(frozen=True)
class JarStatus:
    jar: Jar
    target: float
    spent: float
    percent: float

    @property
    def is_over(self) -> bool:
        return self.spent > self.target


@dataclass(frozen=True)
class JarAllocation:
    """Jar target compared with the category budgets already assigned to it."""

    jar: Jar
    target: float
    planned: float

    @property
    def unallocated(self) -> float:
        return self.target - self.planned


def get_jar(jar_id: str) -> Jar:
    """Look up a jar by id (case-insensitive).

    Raises:
        KeyError: If no jar has that id
    """
    for jar in JARS:
        if jar.id == jar_id.upper():
            return jar
    raise KeyError(jar_id)


def jar_status(
    transactions: Sequence[Transaction], monthly_income: float, month: str
) -> list[JarStatus]:
    """Spending against each jar's share of income for a YYYY-MM month."""
    result = []
    for jar in JARS:
        target = monthly_income * jar.pct
        spent = sum(
            t.amount
            for t in transactions
            if t.type == TransactionType.EXPENSE
            and t.month == month
            and t.category in jar.categories
        )
        percent = spent / target * 100 if target > 0 else 0.0
        result.append(JarStatus(jar=jar, target=target, spent=spent, percent=percent))
    return result


def jar_budget_allocation(
    monthly_income: float, category_budgets: Mapping[str, float]
) -> list[JarAllocation]:
    """Each jar's target next to the sum of its category budget limits."""
    return [
        JarAllocation(
            jar=jar,
            target=monthly_income * jar.pct,
            planned=sum(category_budgets.get(c, 0.0) for c in jar.categories),
        )
        for jar in JARS
    ]
