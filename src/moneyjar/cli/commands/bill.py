"""Recurring bill commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.cli.wallet_resolution import resolve_wallet_or_exit
from moneyjar.domain.bills import BillService
from moneyjar.domain.category import CategoryService, category_name
from moneyjar.domain.entities import StandardCategory
from moneyjar.domain.errors import DomainError
from moneyjar.domain.wallet import WalletService
from moneyjar.utils.amount_parser import parse_amount


@click.group("bill")
def bill_group():
    """Manage recurring monthly bills."""
    pass


@bill_group.command("add")
@click.argument("name")
@click.argument("amount")
@click.option("--day", "due_day", type=int, required=True, help="Day of month the bill is due")
@click.option("--category", default=StandardCategory.BILLS.value, help="Category label or name")
@click.pass_context
def add_bill(ctx, name: str, amount: str, due_day: int, category: str):
    """Add a recurring bill.

    Examples:
        moneyjar bill add "Tiền điện" 800k --day 15
        moneyjar bill add "Netflix" 260k --day 3 --category ENTERTAINMENT
    """
    store = ctx.obj["store"]
    label = category_name(CategoryService(store).resolve(category))
    try:
        bill = BillService(store).add_bill(name, parse_amount(amount), label, due_day)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added bill '{bill.name}' (ID: {bill.id}), due on day {bill.due_day}")


@bill_group.command("list")
@click.pass_context
def list_bills(ctx):
    """List bills with this month's status."""
    service = BillService(ctx.obj["store"])
    bills = service.list_bills()
    if not bills:
        click.echo("No recurring bills found.")
        return

    click.echo("\nRecurring bills:")
    click.echo("-" * 80)
    for bill in bills:
        click.echo(
            f"{bill.id:12s} | day {bill.due_day:2d} | {bill.name:20s} | "
            f"{format_vnd(bill.amount):>12s} | {service.status(bill).value}"
        )
    stats = service.stats()
    click.echo("-" * 80)
    click.echo(
        f"Paid {format_vnd(stats.paid)} of {format_vnd(stats.total)} "
        f"({stats.paid_percent:.0f}%), {stats.overdue_count} overdue"
    )


@bill_group.command("upcoming")
@click.pass_context
def upcoming(ctx):
    """Unpaid bills that are overdue or due within a week."""
    service = BillService(ctx.obj["store"])
    bills = service.urgent_bills()
    if not bills:
        click.echo("No urgent bills.")
        return
    for bill in bills:
        click.echo(
            f"day {bill.due_day:2d} | {bill.name:20s} | {format_vnd(bill.amount):>12s} | "
            f"{service.status(bill).value}"
        )


@bill_group.command("pay")
@click.argument("bill_id")
@click.option("--wallet", help="Wallet to pay from")
@click.pass_context
def pay_bill(ctx, bill_id: str, wallet: str | None):
    """Record this month's payment of a bill."""
    store = ctx.obj["store"]
    wallet_id = resolve_wallet_or_exit(ctx, WalletService(store), wallet)
    try:
        txn = BillService(store).pay_bill(bill_id, wallet_id=wallet_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{txn.note}: {format_vnd(txn.amount)}")


@bill_group.command("edit")
@click.argument("bill_id")
@click.option("--name", help="New name")
@click.option("--amount", help="New amount")
@click.option("--day", "due_day", type=int, help="New due day")
@click.pass_context
def edit_bill(ctx, bill_id: str, name: str | None, amount: str | None, due_day: int | None):
    """Edit a recurring bill."""
    changes = {}
    if name is not None:
        changes["name"] = name
    if due_day is not None:
        changes["due_day"] = due_day
    try:
        if amount is not None:
            changes["amount"] = parse_amount(amount)
        if not changes:
            click.echo("Nothing to update.")
            return
        BillService(ctx.obj["store"]).update_bill(bill_id, **changes)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated bill {bill_id}")


@bill_group.command("delete")
@click.argument("bill_id")
@click.pass_context
def delete_bill(ctx, bill_id: str):
    """Delete a recurring bill."""
    try:
        BillService(ctx.obj["store"]).delete_bill(bill_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted bill {bill_id}")


def register_commands(cli):
    """Register bill commands with main CLI."""
    cli.add_command(bill_group)
