"""Harvest and sowing report command."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import current_month, format_vnd
from moneyjar.domain.report import ReportService, settle_profit
from moneyjar.utils.date_parser import parse_month


@click.command("report")
@click.option("--month", help="Month (YYYY-MM, defaults to this month)")
@click.option("--year", type=int, help="Report a whole year instead of a month")
@click.option(
    "--savings-share",
    type=float,
    default=50,
    show_default=True,
    help="Percent of the profit to put into savings; the rest goes to investment",
)
@click.pass_context
def report(ctx, month: str | None, year: int | None, savings_share: float):
    """Net flow per category (harvest and sowing) and how to settle the profit."""
    if month and year:
        handle_domain_error(ctx, ValueError("--month cannot be combined with --year"))
    service = ReportService(ctx.obj["store"])
    try:
        if year:
            result = service.yearly_report(year)
        else:
            key = parse_month(month).strftime("%Y-%m") if month else current_month()
            result = service.monthly_report(key)
        settlement = settle_profit(result.profit, savings_share)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nHarvest report for {result.period}")
    click.echo("-" * 70)
    click.echo("Harvest:")
    for flow in result.harvest:
        growth = f" ({flow.growth:+.1f}%)" if flow.previous_net else ""
        click.echo(f"  {flow.category:25s} | {format_vnd(flow.net):>16s}{growth}")
    click.echo("Sowing:")
    for flow in result.sowing:
        seed = "good seed" if flow.is_good_seed else "consumption"
        click.echo(f"  {flow.category:25s} | {format_vnd(flow.net):>16s} | {seed}")

    click.echo("-" * 70)
    click.echo(f"Income:       {format_vnd(result.income):>18s}")
    click.echo(f"Expense:      {format_vnd(result.expense):>18s}")
    click.echo(f"Profit:       {format_vnd(result.profit):>18s}")
    click.echo(f"Harvest ratio: {result.harvest_ratio:.2f}")
    click.echo(f"Good seed:    {format_vnd(result.good_seed_total):>18s}")
    click.echo(f"Consumption:  {format_vnd(result.consumption_total):>18s}")
    click.echo(f"\nTo savings:    {format_vnd(settlement.savings):>18s}")
    click.echo(f"To investment: {format_vnd(settlement.investment):>18s}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
