"""Financial health scoring.

Five sub-scores, each normalized to 0-100 against a fixed target, are
averaged into one overall score:

    savings     (income - expense) / income       100 at 20%
    runway      liquid assets / average burn      100 at 6 months
    debt        debt / assets                     100 at 0, 0 at 60% and above
    budget      expense / budget limit            100 / 80 / 40 / 0 steps
    investment  invested assets / total assets    100 at 40%
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from moneyjar.domain.entities import (
    Asset,
    AssetType,
    Debt,
    DebtType,
    INVESTED_ASSET_TYPES,
    LIQUID_ASSET_TYPES,
    Transaction,
    TransactionType,
)
from moneyjar.utils.numeric import clamp, round_half_up

SAVINGS_TARGET = 0.2
RUNWAY_TARGET_MONTHS = 6
DEBT_CEILING = 0.6
INVESTMENT_TARGET = 0.4
BURN_HISTORY_MONTHS = 3


class AdviceLevel(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    GOOD = "good"


@dataclass(frozen=True)
class HealthSnapshot:
    """Aggregated totals the scorer works from."""

    income: float
    expense: float
    liquid_assets: float
    invested_assets: float
    total_assets: float
    total_debt: float
    budget_limit: float
    avg_monthly_burn: float


@dataclass(frozen=True)
class HealthScore:
    savings: float
    runway: float
    debt: float
    budget: float
    investment: float
    overall: int
    defense: int
    offense: int
    # Raw metrics behind the scores
    savings_rate: float
    runway_months: float
    debt_ratio: float
    budget_usage: float
    investment_ratio: float


@dataclass(frozen=True)
class Advice:
    level: AdviceLevel
    text: str


def average_monthly_burn(
    all_transactions: Sequence[Transaction], current_expense: float, today: Optional[date] = None
) -> float:
    """Mean expense of the last three months before the current one.

    Months without expenses are skipped. Without any history, falls back to the
    current month's expense, then to 1 so the runway never divides by zero.
    """
    today = today or date.today()
    expenses = [t for t in all_transactions if t.type == TransactionType.EXPENSE]
    if not expenses:
        return current_expense or 1

    total = 0.0
    months_counted = 0
    first_of_month = today.replace(day=1)
    for offset in range(1, BURN_HISTORY_MONTHS + 1):
        key = (first_of_month - relativedelta(months=offset)).strftime("%Y-%m")
        month_expense = sum(t.amount for t in expenses if t.month == key)
        if month_expense > 0:
            total += month_expense
            months_counted += 1

    if months_counted > 0:
        return total / months_counted
    return current_expense if current_expense > 0 else 1


def build_snapshot(
    month_transactions: Sequence[Transaction],
    all_transactions: Sequence[Transaction],
    budget: float,
    assets: Sequence[Asset],
    debts: Sequence[Debt],
    today: Optional[date] = None,
) -> HealthSnapshot:
    """Aggregate ledger data into a HealthSnapshot."""
    income = sum(t.amount for t in month_transactions if t.type == TransactionType.INCOME)
    expense = sum(t.amount for t in month_transactions if t.type == TransactionType.EXPENSE)

    total_assets = sum(a.value for a in assets if a.type != AssetType.DEBT)
    liquid = sum(a.value for a in assets if a.type in LIQUID_ASSET_TYPES)
    invested = sum(a.value for a in assets if a.type in INVESTED_ASSET_TYPES)
    total_debt = sum(
        d.amount for d in debts if d.type == DebtType.BORROW and not d.is_paid
    ) + sum(a.value for a in assets if a.type == AssetType.DEBT)

    return HealthSnapshot(
        income=income,
        expense=expense,
        liquid_assets=liquid,
        invested_assets=invested,
        total_assets=total_assets,
        total_debt=total_debt,
        budget_limit=budget,
        avg_monthly_burn=average_monthly_burn(all_transactions, expense, today),
    )


def _budget_score(usage: float) -> float:
    if usage <= 0.9:
        return 100.0
    if usage <= 1.0:
        return 80.0
    if usage <= 1.2:
        return 40.0
    return 0.0


def score_health(snapshot: HealthSnapshot) -> HealthScore:
    """Score a snapshot. Every sub-score and aggregate lies in [0, 100]."""
    income = snapshot.income
    savings_rate = (income - snapshot.expense) / income if income > 0 else 0.0
    savings = 0.0 if savings_rate < 0 else clamp(savings_rate / SAVINGS_TARGET * 100)

    burn = snapshot.avg_monthly_burn
    runway_months = snapshot.liquid_assets / burn if burn > 0 else 0.0
    runway = clamp(runway_months / RUNWAY_TARGET_MONTHS * 100)

    assets = snapshot.total_assets
    debt_ratio = snapshot.total_debt / assets if assets > 0 else 0.0
    if debt_ratio > DEBT_CEILING:
        debt = 0.0
    elif debt_ratio > 0:
        debt = clamp(100 - debt_ratio / DEBT_CEILING * 100)
    else:
        debt = 100.0

    limit = snapshot.budget_limit
    budget_usage = snapshot.expense / limit if limit > 0 else 1.0
    budget = _budget_score(budget_usage)

    investment_ratio = snapshot.invested_assets / assets if assets > 0 else 0.0
    investment = clamp(investment_ratio / INVESTMENT_TARGET * 100)

    return HealthScore(
        savings=savings,
        runway=runway,
        debt=debt,
        budget=budget,
        investment=investment,
        overall=round_half_up((savings + runway + debt + budget + investment) / 5),
        defense=round_half_up((runway + debt + budget) / 3),
        offense=round_half_up((savings + investment) / 2),
        savings_rate=savings_rate,
        runway_months=runway_months,
        debt_ratio=debt_ratio,
        budget_usage=budget_usage,
        investment_ratio=investment_ratio,
    )


def grade(overall: int) -> str:
    if overall >= 90:
        return "S"
    if overall >= 80:
        return "A"
    if overall >= 65:
        return "B"
    if overall >= 50:
        return "C"
    return "D"


def defense_assessment(defense: int) -> str:
    if defense >= 80:
        return "Fortress"
    if defense >= 50:
        return "Needs reinforcement"
    return "Highly vulnerable"


def offense_assessment(offense: int) -> str:
    if offense >= 80:
        return "Accelerating"
    if offense >= 50:
        return "Growing"
    return "Stalled"


def health_advice(score: HealthScore, income: float) -> list[Advice]:
    """Actionable advice derived from the raw metrics."""
    advice = []
    if score.runway_months < 3:
        advice.append(
            Advice(
                AdviceLevel.CRITICAL,
                "Emergency fund covers less than 3 months of spending. "
                "Pause risky investments and build cash first.",
            )
        )
    if score.debt_ratio > 0.5:
        advice.append(
            Advice(
                AdviceLevel.CRITICAL,
                "Debt exceeds 50% of assets. Pay down the highest-interest loan first.",
            )
        )
    if score.budget_usage > 1.0:
        advice.append(
            Advice(
                AdviceLevel.WARNING,
                "Spending is over budget. Cut variable costs such as eating out.",
            )
        )
    if score.savings_rate < 0.1 and income > 0:
        advice.append(
            Advice(
                AdviceLevel.WARNING,
                "Savings rate is low. Set aside 10% of income as soon as it arrives.",
            )
        )
    if score.investment_ratio < 0.2 and score.runway_months > 6:
        advice.append(
            Advice(
                AdviceLevel.GOOD,
                "Plenty of idle cash. Consider gold or fund certificates to beat inflation.",
            )
        )
    if not advice:
        advice.append(Advice(AdviceLevel.GOOD, "Finances are healthy. Keep up the discipline!"))
    return advice
