"""Debt commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.domain.debt import DebtService
from moneyjar.domain.entities import DebtType
from moneyjar.domain.errors import DomainError
from moneyjar.utils.amount_parser import parse_amount
from moneyjar.utils.date_parser import parse_date

DEBT_TYPE_CHOICE = click.Choice([t.value for t in DebtType], case_sensitive=False)


@click.group("debt")
def debt_group():
    """Track money lent and borrowed."""
    pass


@debt_group.command("add")
@click.argument("person")
@click.argument("amount")
@click.option("--type", "debt_type", type=DEBT_TYPE_CHOICE, required=True, help="LEND or BORROW")
@click.option("--due", help="Due date")
@click.option("--note", help="Note")
@click.pass_context
def add_debt(ctx, person: str, amount: str, debt_type: str, due: str | None, note: str | None):
    """Record a debt and the cash it moves.

    Examples:
        moneyjar debt add "Minh" 2tr --type LEND --due 2026-01-31
        moneyjar debt add "Ngân hàng" 50tr --type BORROW
    """
    try:
        debt = DebtService(ctx.obj["store"]).add_debt(
            person=person,
            amount=parse_amount(amount),
            type=DebtType(debt_type.upper()),
            due_date=parse_date(due) if due else None,
            note=note,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded {debt.type.value} with {debt.person} (ID: {debt.id})")


@debt_group.command("list")
@click.option("--open", "only_open", is_flag=True, help="Hide settled debts")
@click.pass_context
def list_debts(ctx, only_open: bool):
    """List debts."""
    service = DebtService(ctx.obj["store"])
    debts = service.list_debts(include_paid=not only_open)
    if not debts:
        click.echo("No debts found.")
        return

    click.echo("\nDebts:")
    click.echo("-" * 80)
    for debt in debts:
        status = "settled" if debt.is_paid else "open"
        due = f" | due {debt.due_date}" if debt.due_date else ""
        click.echo(
            f"{debt.id:12s} | {debt.type.value:6s} | {debt.person:20s} | "
            f"{format_vnd(debt.amount):>14s} | {status}{due}"
        )
    totals = service.totals()
    click.echo("-" * 80)
    click.echo(f"Owed to you: {format_vnd(totals.receivable)}")
    click.echo(f"You owe:     {format_vnd(totals.payable)}")


@debt_group.command("settle")
@click.argument("debt_id")
@click.pass_context
def settle_debt(ctx, debt_id: str):
    """Mark a debt as paid back."""
    try:
        debt = DebtService(ctx.obj["store"]).settle_debt(debt_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Settled debt with {debt.person}")


@debt_group.command("delete")
@click.argument("debt_id")
@click.pass_context
def delete_debt(ctx, debt_id: str):
    """Delete a debt record."""
    try:
        DebtService(ctx.obj["store"]).delete_debt(debt_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted debt {debt_id}")


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group)
