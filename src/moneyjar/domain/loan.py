"""Loan amortization engine.

Pure functions over floats. Preconditions (``term_months >= 1``,
non-negative principal and rates) are the caller's responsibility; invalid
input produces ``inf``/``nan`` rather than an exception.
"""

import math
from dataclasses import dataclass
from typing import Optional

from moneyjar.utils.numeric import ieee_divide

# Reference VND rates for the currency converter
EXCHANGE_RATES_VND: dict[str, float] = {
    "USD": 25450,
    "EUR": 27500,
    "JPY": 165,
    "KRW": 18.5,
    "GBP": 32100,
}

DEFAULT_STRESS_RATE_PCT = 12.0


@dataclass(frozen=True)
class SplitRateLoan:
    """Payments of a loan with a preferential period followed by a floating rate."""

    payment_pref: float
    balance_after_pref: float
    payment_float: float
    pref_months: int
    remaining_months: int


@dataclass(frozen=True)
class ScheduleRow:
    month: int
    payment: float
    interest: float
    principal: float
    balance: float


@dataclass(frozen=True)
class StressTestResult:
    payment_pref: float
    payment_float: float
    balance_after_pref: float
    net_cashflow: float
    is_negative: bool
    runway_months: float
    has_pref: bool


def monthly_rate(annual_rate_pct: float) -> float:
    """Convert a nominal annual percentage to a monthly fraction."""
    return annual_rate_pct / 100 / 12


def monthly_payment(principal: float, annual_rate_pct: float, term_months: int) -> float:
    """Fixed monthly payment that fully amortizes ``principal`` over ``term_months``."""
    r = monthly_rate(annual_rate_pct)
    if r > 0:
        growth = (1 + r) ** term_months
        return ieee_divide(principal * r * growth, growth - 1)
    return ieee_divide(principal, term_months)


def remaining_balance(
    principal: float, annual_rate_pct: float, total_months: int, elapsed_months: int
) -> float:
    """Outstanding balance after ``elapsed_months`` payments of a fixed-rate loan."""
    r = monthly_rate(annual_rate_pct)
    if r > 0:
        growth_total = (1 + r) ** total_months
        growth_elapsed = (1 + r) ** elapsed_months
        return ieee_divide(principal * (growth_total - growth_elapsed), growth_total - 1)
    return principal - monthly_payment(principal, annual_rate_pct, total_months) * elapsed_months


def split_rate_loan(
    principal: float,
    pref_rate_pct: float,
    float_rate_pct: float,
    term_months: int,
    pref_months: int,
) -> SplitRateLoan:
    """Compute the two payment phases of a teaser-rate loan.

    The preferential payment amortizes the full principal over the whole term.
    When the preferential period ends, the outstanding balance is re-amortized
    at the floating rate over the months that remain. With no floating phase
    the floating payment is 0.
    """
    pref_months = min(pref_months, term_months)
    payment_pref = monthly_payment(principal, pref_rate_pct, term_months)
    balance = remaining_balance(principal, pref_rate_pct, term_months, pref_months)
    remaining_months = term_months - pref_months

    if remaining_months > 0:
        payment_float = monthly_payment(balance, float_rate_pct, remaining_months)
    else:
        payment_float = 0.0

    return SplitRateLoan(
        payment_pref=payment_pref,
        balance_after_pref=balance,
        payment_float=payment_float,
        pref_months=pref_months,
        remaining_months=remaining_months,
    )


def amortization_schedule(
    principal: float, annual_rate_pct: float, term_months: int
) -> list[ScheduleRow]:
    """Month-by-month schedule of a fixed-rate loan."""
    r = monthly_rate(annual_rate_pct)
    payment = monthly_payment(principal, annual_rate_pct, term_months)
    balance = principal
    rows = []
    for month in range(1, term_months + 1):
        interest = balance * r
        principal_part = payment - interest
        balance -= principal_part
        rows.append(
            ScheduleRow(
                month=month,
                payment=payment,
                interest=interest,
                principal=principal_part,
                balance=balance,
            )
        )
    return rows


def simple_interest(principal: float, annual_rate_pct: float, months: float) -> float:
    """Interest earned on a term deposit without compounding."""
    return principal * (annual_rate_pct / 100) * (months / 12)


def convert_to_vnd(amount: float, currency: str) -> float:
    """Convert a foreign amount to VND at the reference rate.

    Raises:
        ValueError: If the currency is not supported
    """
    code = currency.upper()
    if code not in EXCHANGE_RATES_VND:
        raise ValueError(
            f"Unsupported currency '{currency}'. Supported: {', '.join(EXCHANGE_RATES_VND)}"
        )
    return amount * EXCHANGE_RATES_VND[code]


def stress_test(
    loan_amount: float,
    term_years: float,
    rental_income: float,
    emergency_fund: float,
    pref_rate_pct: float,
    pref_years: float,
    simulated_rate_pct: float = DEFAULT_STRESS_RATE_PCT,
) -> Optional[StressTestResult]:
    """Check whether rental income still covers the loan once the teaser rate ends.

    Returns:
        None if loan amount or term is zero, otherwise the stress result
    """
    if loan_amount == 0 or term_years == 0:
        return None

    loan = split_rate_loan(
        loan_amount,
        pref_rate_pct,
        simulated_rate_pct,
        round(term_years * 12),
        round(pref_years * 12),
    )
    net_cashflow = rental_income - loan.payment_float
    is_negative = net_cashflow < 0
    runway = emergency_fund / abs(net_cashflow) if is_negative else math.inf

    return StressTestResult(
        payment_pref=loan.payment_pref,
        payment_float=loan.payment_float,
        balance_after_pref=loan.balance_after_pref,
        net_cashflow=net_cashflow,
        is_negative=is_negative,
        runway_months=runway,
        has_pref=0 < pref_years < term_years,
    )
