"""Cashflow forecast command."""

import click
from moneyjar.cli.formatting import format_vnd
from moneyjar.domain.forecast import ForecastService, Scenario


@click.command("forecast")
@click.option(
    "--scenario",
    type=click.Choice([s.value for s in Scenario], case_sensitive=False),
    default=Scenario.AVERAGE.value,
    show_default=True,
    help="Spending behaviour for the rest of the month",
)
@click.option("--daily", is_flag=True, help="Show the cumulative spending for every day")
@click.pass_context
def forecast(ctx, scenario: str, daily: bool):
    """Project this month's spending and show how much is safe to spend per day."""
    result = ForecastService(ctx.obj["store"]).forecast(Scenario(scenario.upper()))

    click.echo(f"\nCashflow forecast for {result.month} ({result.scenario.value.lower()})")
    click.echo(f"{result.days_remaining} days left in the month")
    click.echo("-" * 60)
    click.echo(f"Budget:              {format_vnd(result.budget):>20s}")
    click.echo(f"Spent so far:        {format_vnd(result.spent):>20s}")
    click.echo(f"Upcoming bills:      {format_vnd(result.remaining_bills_total):>20s}")
    click.echo(f"Disposable:          {format_vnd(result.disposable):>20s}")
    click.echo(f"Avg daily spending:  {format_vnd(result.average_daily_variable):>20s}")
    click.echo(f"Safe to spend/day:   {format_vnd(result.safe_daily_spend):>20s}")
    click.echo(f"Month-end estimate:  {format_vnd(result.final_projection):>20s}")
    click.echo(f"Savings potential:   {format_vnd(result.savings_potential):>20s}")
    click.echo(f"Status: {result.status.value}")

    if result.remaining_bills:
        click.echo("\nBills still due:")
        for bill in result.remaining_bills:
            click.echo(f"  day {bill.due_day:2d} | {bill.name:25s} | {format_vnd(bill.amount):>14s}")

    if daily:
        click.echo("\nDay | Cumulative")
        for day in result.days:
            marker = "*" if day.projected else " "
            click.echo(f"{day.day:3d}{marker}| {format_vnd(day.cumulative):>16s}")
        click.echo("* projected")


def register_commands(cli):
    """Register forecast command with main CLI."""
    cli.add_command(forecast)
