"""Financial calculator commands."""

import math

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.domain.deal import DealInputs, deal_warnings, evaluate_deal
from moneyjar.domain.loan import (
    DEFAULT_STRESS_RATE_PCT,
    EXCHANGE_RATES_VND,
    amortization_schedule,
    convert_to_vnd,
    simple_interest,
    stress_test,
)
from moneyjar.utils.amount_parser import parse_amount


class AmountType(click.ParamType):
    """Click parameter accepting VND shorthand such as 500k or 2,5tỷ."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return parse_amount(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


AMOUNT = AmountType()


@click.group("tools")
def tools_group():
    """Loan, deposit, currency and property-deal calculators."""
    pass


@tools_group.command("interest")
@click.argument("principal", type=AMOUNT)
@click.option("--rate", type=float, required=True, help="Annual interest rate in percent")
@click.option("--months", type=float, required=True, help="Deposit term in months")
def interest(principal: float, rate: float, months: float):
    """Simple interest on a term deposit.

    Examples:
        moneyjar tools interest 100tr --rate 6 --months 12
    """
    earned = simple_interest(principal, rate, months)
    click.echo(f"Interest: {format_vnd(earned)}")
    click.echo(f"Total at maturity: {format_vnd(principal + earned)}")


@tools_group.command("exchange")
@click.argument("amount", type=float)
@click.argument("currency")
@click.pass_context
def exchange(ctx, amount: float, currency: str):
    """Convert a foreign amount to VND at reference rates.

    Supported currencies: USD, EUR, JPY, KRW, GBP.
    """
    try:
        converted = convert_to_vnd(amount, currency)
    except ValueError as e:
        handle_domain_error(ctx, e)
    rate = EXCHANGE_RATES_VND[currency.upper()]
    click.echo(f"{amount:g} {currency.upper()} = {format_vnd(converted)} (rate {rate:g})")


@tools_group.command("schedule")
@click.argument("principal", type=AMOUNT)
@click.option("--rate", type=float, required=True, help="Annual interest rate in percent")
@click.option("--years", type=float, required=True, help="Loan term in years")
@click.option("--yearly", is_flag=True, help="Show year-end rows only")
def schedule(principal: float, rate: float, years: float, yearly: bool):
    """Amortization schedule of a fixed-rate loan."""
    rows = amortization_schedule(principal, rate, round(years * 12))
    if not rows:
        click.echo("Loan term must be at least one month.")
        return

    click.echo(f"Monthly payment: {format_vnd(rows[0].payment)}")
    click.echo("-" * 80)
    click.echo(f"{'Month':>5} | {'Interest':>16} | {'Principal':>16} | {'Balance':>16}")
    for row in rows:
        if yearly and row.month % 12 != 0 and row.month != len(rows):
            continue
        click.echo(
            f"{row.month:5d} | {format_vnd(row.interest):>16} | "
            f"{format_vnd(row.principal):>16} | {format_vnd(max(row.balance, 0.0)):>16}"
        )
    click.echo("-" * 80)
    total_interest = sum(row.interest for row in rows)
    click.echo(f"Total interest: {format_vnd(total_interest)}")


@tools_group.command("stress-test")
@click.option("--loan", "loan_amount", type=AMOUNT, required=True, help="Loan amount")
@click.option("--years", type=float, required=True, help="Loan term in years")
@click.option("--income", "rental_income", type=AMOUNT, default=0.0, help="Monthly rental income")
@click.option("--fund", "emergency_fund", type=AMOUNT, default=0.0, help="Emergency fund")
@click.option("--pref-rate", type=float, default=0.0, help="Preferential rate in percent")
@click.option("--pref-years", type=float, default=0.0, help="Preferential period in years")
@click.option(
    "--rate",
    "simulated_rate",
    type=float,
    default=DEFAULT_STRESS_RATE_PCT,
    show_default=True,
    help="Floating rate to simulate after the preferential period",
)
def stress(
    loan_amount: float,
    years: float,
    rental_income: float,
    emergency_fund: float,
    pref_rate: float,
    pref_years: float,
    simulated_rate: float,
):
    """Check whether income still covers the loan once the teaser rate ends.

    Examples:
        moneyjar tools stress-test --loan 2tỷ --years 20 --income 12tr --fund 200tr \\
            --pref-rate 6.5 --pref-years 2
    """
    result = stress_test(
        loan_amount, years, rental_income, emergency_fund, pref_rate, pref_years, simulated_rate
    )
    if result is None:
        click.echo("Enter a loan amount and term to run the stress test.")
        return

    if result.has_pref:
        click.echo(f"Payment during preferential period: {format_vnd(result.payment_pref)}")
        click.echo(f"Balance when it ends: {format_vnd(result.balance_after_pref)}")
    click.echo(f"Payment at {simulated_rate:g}%: {format_vnd(result.payment_float)}")
    click.echo(f"Net monthly cashflow: {format_vnd(result.net_cashflow)}")
    if result.is_negative:
        click.echo(f"WARNING: negative cashflow; the fund lasts {result.runway_months:.1f} months")
    else:
        click.echo("Income covers the payment.")


@tools_group.command("deal")
@click.option("--price", type=AMOUNT, required=True, help="Purchase price")
@click.option("--rent", type=AMOUNT, required=True, help="Monthly rent")
@click.option("--cap-rate", type=float, default=4.0, show_default=True, help="Market cap rate %")
@click.option("--income", type=AMOUNT, default=0.0, help="Personal monthly income")
@click.option("--discount", type=float, default=6.0, show_default=True, help="Opportunity cost %")
@click.option("--years", type=float, default=20.0, show_default=True, help="Loan term in years")
@click.option("--pref-rate", type=float, default=6.5, show_default=True, help="Preferential rate %")
@click.option("--pref-years", type=float, default=2.0, show_default=True, help="Preferential years")
@click.option("--float-rate", type=float, default=11.5, show_default=True, help="Floating rate %")
@click.option("--ltv", type=float, default=70.0, show_default=True, help="Loan-to-value %")
@click.option("--exit-price", type=AMOUNT, help="Sale price after 3 years (default price +15%)")
def deal(
    price: float,
    rent: float,
    cap_rate: float,
    income: float,
    discount: float,
    years: float,
    pref_rate: float,
    pref_years: float,
    float_rate: float,
    ltv: float,
    exit_price: float | None,
):
    """Three-layer assessment of a leveraged property purchase.

    Examples:
        moneyjar tools deal --price 3tỷ --rent 15tr --income 30tr
    """
    assessment = evaluate_deal(
        DealInputs(
            purchase_price=price,
            monthly_rent=rent,
            cap_rate_pct=cap_rate,
            personal_income=income,
            opportunity_cost_pct=discount,
            loan_term_years=years,
            pref_rate_pct=pref_rate,
            pref_years=pref_years,
            float_rate_pct=float_rate,
            ltv_pct=ltv,
            exit_price=exit_price,
        )
    )
    if assessment is None:
        click.echo("Enter a price, rent and cap rate to evaluate the deal.")
        return

    click.echo("\n1. Valuation")
    click.echo(f"   Intrinsic value: {format_vnd(assessment.intrinsic_value)}")
    click.echo(
        f"   Margin of safety: {format_vnd(assessment.margin_of_safety)} "
        f"({assessment.margin_percent:.1f}%)"
    )
    click.echo("\n2. Debt service")
    click.echo(f"   Loan: {format_vnd(assessment.loan_amount)}")
    if assessment.has_pref:
        click.echo(
            f"   Preferential payment: {format_vnd(assessment.payment_pref)} "
            f"(DSCR {assessment.dscr_pref:.2f})"
        )
    click.echo(f"   Floating payment: {format_vnd(assessment.payment_float)}")
    click.echo(f"   DSCR: {assessment.dscr:.2f} ({assessment.dscr_rating.value})")
    click.echo("\n3. Three-year hold")
    for year, cashflow in enumerate(assessment.yearly_cashflows, start=1):
        click.echo(f"   Year {year} cashflow: {format_vnd(cashflow)}")
    click.echo(f"   Sale proceeds: {format_vnd(assessment.sale_proceeds)}")
    click.echo(f"   NPV: {format_vnd(assessment.npv)}")
    irr = assessment.proxy_irr
    irr_text = f"{irr:.1f}%" if math.isfinite(irr) else str(irr)
    click.echo(f"   Approximate annual return: {irr_text}")

    click.echo("")
    if assessment.is_favorable:
        click.echo("Verdict: FAVORABLE")
    else:
        click.echo("Verdict: NOT FAVORABLE")
        for warning in deal_warnings(assessment):
            click.echo(f"  - {warning}")


def register_commands(cli):
    """Register tool commands with main CLI."""
    cli.add_command(tools_group)
