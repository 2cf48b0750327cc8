"""Leveraged real-estate deal evaluator.

Three layers, all of which must pass for a favorable verdict:

1. Valuation: intrinsic value from rent and market cap rate.
2. Debt service: coverage of the floating-rate payment by rent plus income.
3. Efficiency: NPV of a three-year hold against an opportunity-cost rate.

The reported ``proxy_irr`` is a simple annualized return, not a true IRR.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from moneyjar.domain.loan import monthly_rate, split_rate_loan
from moneyjar.utils.numeric import ieee_divide

HOLDING_YEARS = 3
DEFAULT_EXIT_GROWTH = 1.15
# Coverage reported when there is no payment to cover
NO_DEBT_DSCR = 999.0

DSCR_HEALTHY = 1.25
DSCR_MINIMUM = 1.0
DSCR_VERDICT = 1.1


class DSCRRating(str, Enum):
    HEALTHY = "healthy"
    MARGINAL = "marginal"
    INSUFFICIENT = "insufficient"


@dataclass(frozen=True)
class DealInputs:
    """Parameters of a leveraged purchase.

    ``exit_price`` defaults to the purchase price grown by 15%.
    """

    purchase_price: float
    monthly_rent: float
    cap_rate_pct: float = 4.0
    personal_income: float = 0.0
    opportunity_cost_pct: float = 6.0
    loan_term_years: float = 20.0
    pref_rate_pct: float = 6.5
    pref_years: float = 2.0
    float_rate_pct: float = 11.5
    ltv_pct: float = 70.0
    exit_price: Optional[float] = None


@dataclass(frozen=True)
class DealAssessment:
    # Layer 1
    intrinsic_value: float
    margin_of_safety: float
    margin_percent: float
    # Layer 2
    loan_amount: float
    payment_pref: float
    payment_float: float
    dscr: float
    dscr_pref: float
    dscr_rating: DSCRRating
    # Layer 3
    down_payment: float
    yearly_payments: tuple[float, float, float]
    yearly_cashflows: tuple[float, float, float]
    balance_at_exit: float
    exit_price: float
    sale_proceeds: float
    npv: float
    total_profit: float
    proxy_irr: float
    # Verdict
    is_favorable: bool
    has_pref: bool


def intrinsic_value(monthly_rent: float, cap_rate_pct: float) -> float:
    """Capitalized value of a rent stream at the market cap rate."""
    return ieee_divide(monthly_rent * 12, cap_rate_pct / 100)


def rate_dscr(dscr: float) -> DSCRRating:
    """Classify a debt-service coverage ratio."""
    if dscr > DSCR_HEALTHY:
        return DSCRRating.HEALTHY
    if dscr >= DSCR_MINIMUM:
        return DSCRRating.MARGINAL
    return DSCRRating.INSUFFICIENT


def coverage_ratio(income: float, payment: float) -> float:
    if payment > 0:
        return income / payment
    return NO_DEBT_DSCR


def net_present_value(
    initial_outlay: float, cashflows: tuple[float, ...], discount_rate: float
) -> float:
    """NPV of yearly cashflows (year 1 first) after an upfront outlay."""
    return -initial_outlay + sum(
        cashflow / (1 + discount_rate) ** year for year, cashflow in enumerate(cashflows, start=1)
    )


def evaluate_deal(inputs: DealInputs) -> Optional[DealAssessment]:
    """Run the three-layer assessment.

    Returns:
        None when price, rent or cap rate is zero, otherwise the assessment
    """
    price = inputs.purchase_price
    rent = inputs.monthly_rent
    if not price or not rent or not inputs.cap_rate_pct:
        return None

    annual_rent = rent * 12
    discount_rate = inputs.opportunity_cost_pct / 100
    exit_price = inputs.exit_price if inputs.exit_price is not None else price * DEFAULT_EXIT_GROWTH

    # Layer 1: valuation
    value = intrinsic_value(rent, inputs.cap_rate_pct)
    margin = value - price
    margin_percent = ieee_divide(margin, value) * 100

    # Layer 2: debt service under the split-rate loan
    loan_amount = price * (inputs.ltv_pct / 100)
    total_months = round(inputs.loan_term_years * 12)
    pref_months = round(inputs.pref_years * 12)
    loan = split_rate_loan(
        loan_amount, inputs.pref_rate_pct, inputs.float_rate_pct, total_months, pref_months
    )
    # A loan without a floating phase keeps its preferential payment
    payment_float = loan.payment_float if loan.remaining_months > 0 else loan.payment_pref
    total_income = rent + inputs.personal_income
    dscr = coverage_ratio(total_income, payment_float)
    dscr_pref = coverage_ratio(total_income, loan.payment_pref)

    # Layer 3: month-by-month hold
    rate_pref = monthly_rate(inputs.pref_rate_pct)
    rate_float = monthly_rate(inputs.float_rate_pct)
    balance = loan_amount
    yearly_payments = [0.0] * HOLDING_YEARS
    for month in range(1, HOLDING_YEARS * 12 + 1):
        in_pref = month <= pref_months
        rate = rate_pref if in_pref else rate_float
        payment = loan.payment_pref if in_pref else payment_float
        interest = balance * rate
        balance -= payment - interest
        yearly_payments[(month - 1) // 12] += payment

    cashflows = tuple(annual_rent - paid for paid in yearly_payments)
    down_payment = price - loan_amount
    sale_proceeds = exit_price - balance
    npv = net_present_value(
        down_payment, cashflows[:-1] + (cashflows[-1] + sale_proceeds,), discount_rate
    )
    total_profit = sum(cashflows) + sale_proceeds - down_payment
    proxy_irr = ieee_divide(total_profit, down_payment) / HOLDING_YEARS * 100

    return DealAssessment(
        intrinsic_value=value,
        margin_of_safety=margin,
        margin_percent=margin_percent,
        loan_amount=loan_amount,
        payment_pref=loan.payment_pref,
        payment_float=payment_float,
        dscr=dscr,
        dscr_pref=dscr_pref,
        dscr_rating=rate_dscr(dscr),
        down_payment=down_payment,
        yearly_payments=tuple(yearly_payments),
        yearly_cashflows=cashflows,
        balance_at_exit=balance,
        exit_price=exit_price,
        sale_proceeds=sale_proceeds,
        npv=npv,
        total_profit=total_profit,
        proxy_irr=proxy_irr,
        is_favorable=margin_percent > 0 and dscr > DSCR_VERDICT and npv > 0,
        has_pref=pref_months > 0,
    )


def deal_warnings(assessment: DealAssessment) -> list[str]:
    """Explain which layers hold the deal back."""
    warnings = []
    if assessment.margin_percent <= 0:
        warnings.append("Purchase price is above intrinsic value.")
    if assessment.dscr <= DSCR_HEALTHY:
        warnings.append("Debt service is tight once the preferential rate ends.")
    if assessment.npv <= 0:
        warnings.append("Returns trail the opportunity-cost rate.")
    return warnings
