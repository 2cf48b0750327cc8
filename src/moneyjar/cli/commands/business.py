"""Business commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.cli.wallet_resolution import resolve_wallet_or_exit
from moneyjar.domain.business import DEFAULT_COST_NOTE, DEFAULT_REVENUE_NOTE, BusinessService
from moneyjar.domain.wallet import WalletService
from moneyjar.utils.amount_parser import parse_amount


@click.group("business")
def business_group():
    """Track sales and business costs."""
    pass


@business_group.command("sell")
@click.argument("amount")
@click.option("--note", default=DEFAULT_REVENUE_NOTE, show_default=True, help="Note")
@click.option("--wallet", help="Wallet name or ID")
@click.pass_context
def sell(ctx, amount: str, note: str, wallet: str | None):
    """Record sales revenue.

    Examples:
        moneyjar business sell 3.5tr --note "Bán 10 áo"
    """
    store = ctx.obj["store"]
    wallet_id = resolve_wallet_or_exit(ctx, WalletService(store), wallet)
    try:
        txn = BusinessService(store).record_revenue(parse_amount(amount), note=note, wallet_id=wallet_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded revenue {format_vnd(txn.amount)} (ID: {txn.id})")


@business_group.command("cost")
@click.argument("amount")
@click.option("--note", default=DEFAULT_COST_NOTE, show_default=True, help="Note")
@click.option("--wallet", help="Wallet name or ID")
@click.pass_context
def cost(ctx, amount: str, note: str, wallet: str | None):
    """Record a stock or operating cost."""
    store = ctx.obj["store"]
    wallet_id = resolve_wallet_or_exit(ctx, WalletService(store), wallet)
    try:
        txn = BusinessService(store).record_cost(parse_amount(amount), note=note, wallet_id=wallet_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded cost {format_vnd(txn.amount)} (ID: {txn.id})")


@business_group.command("summary")
@click.option("--months", type=click.Choice(["3", "6", "12"]), default="6", show_default=True)
@click.pass_context
def summary(ctx, months: str):
    """Show revenue, cost, profit and margin, overall and per month."""
    service = BusinessService(ctx.obj["store"])
    total = service.summary()

    click.echo("\nBusiness summary")
    click.echo("-" * 60)
    click.echo(f"Revenue: {format_vnd(total.revenue):>20s}")
    click.echo(f"Cost:    {format_vnd(total.cost):>20s}")
    click.echo(f"Profit:  {format_vnd(total.profit):>20s}")
    click.echo(f"Margin:  {total.margin:19.1f}%")

    click.echo(f"\nLast {months} months:")
    for row in service.monthly(int(months)):
        click.echo(
            f"{row.month} | {format_vnd(row.result.revenue):>14s} | "
            f"{format_vnd(row.result.cost):>14s} | {format_vnd(row.result.profit):>14s}"
        )

    recent = service.business_transactions()[:10]
    if recent:
        click.echo("\nRecent:")
        for txn in recent:
            click.echo(
                f"{txn.date.strftime('%Y-%m-%d')} | {txn.category:22s} | "
                f"{format_vnd(txn.amount):>14s} | {txn.note}"
            )


def register_commands(cli):
    """Register business commands with main CLI."""
    cli.add_command(business_group)
