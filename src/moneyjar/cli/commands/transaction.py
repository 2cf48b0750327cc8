"""Transaction commands."""

import click
from moneyjar.cli.date_filters import PERIODS, resolve_cli_date_range
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.cli.wallet_resolution import resolve_wallet_or_exit
from moneyjar.domain.category import CategoryService, category_name
from moneyjar.domain.entities import TransactionType
from moneyjar.domain.errors import DomainError
from moneyjar.domain.transaction import TransactionService
from moneyjar.domain.wallet import WalletService
from moneyjar.utils.amount_parser import parse_amount
from moneyjar.utils.date_parser import at_current_time, parse_date, parse_month

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group("transaction")
def transaction_group():
    """Record and browse transactions."""
    pass


@transaction_group.command("add")
@click.argument("amount")
@click.option("--type", "txn_type", type=TYPE_CHOICE, default="EXPENSE", help="INCOME or EXPENSE")
@click.option("--category", required=True, help="Category label or name (e.g. 'Ăn uống', FOOD)")
@click.option("--note", default="", help="Note")
@click.option("--date", "date_str", help="Date (YYYY-MM-DD, DD/MM/YYYY, 'today', 'yesterday')")
@click.option("--wallet", help="Wallet name or ID (defaults to the first wallet)")
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    txn_type: str,
    category: str,
    note: str,
    date_str: str | None,
    wallet: str | None,
):
    """Add a transaction.

    Examples:
        moneyjar transaction add 50k --category FOOD --note "Phở"
        moneyjar transaction add 15tr --type INCOME --category SALARY --wallet Vietcombank
    """
    store = ctx.obj["store"]
    service = TransactionService(store)
    wallet_id = resolve_wallet_or_exit(ctx, WalletService(store), wallet)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    txn_date = None
    if date_str:
        try:
            txn_date = at_current_time(parse_date(date_str))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    label = category_name(CategoryService(store).resolve(category))
    try:
        txn = service.add_transaction(
            amount=txn_amount,
            type=TransactionType(txn_type.upper()),
            category=label,
            note=note,
            date=txn_date,
            wallet_id=wallet_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date:%Y-%m-%d}")
    click.echo(f"  Amount: {format_vnd(txn.amount)} ({txn.type.value})")
    click.echo(f"  Category: {txn.category}")
    if note:
        click.echo(f"  Note: {note}")


@transaction_group.command("list")
@click.option("--month", help="Month (YYYY-MM or 'this month')")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only INCOME or EXPENSE")
@click.option("--category", help="Category label or name")
@click.option("--wallet", help="Wallet name or ID")
@click.option("--search", help="Text to look for in notes")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.option("--period", type=click.Choice(PERIODS), help="Named period such as last-month")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum rows")
@click.pass_context
def list_transactions(
    ctx,
    month: str | None,
    txn_type: str | None,
    category: str | None,
    wallet: str | None,
    search: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    limit: int,
):
    """List transactions, newest first.

    Examples:
        moneyjar transaction list --month 2024-05 --type EXPENSE
        moneyjar transaction list --period last-week --search grab
    """
    store = ctx.obj["store"]
    wallet_service = WalletService(store)
    wallet_id = resolve_wallet_or_exit(ctx, wallet_service, wallet)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    month_key = None
    if month:
        try:
            month_key = parse_month(month).strftime("%Y-%m")
        except ValueError as e:
            click.echo(f"Error: Invalid month: {e}", err=True)
            ctx.exit(1)

    transactions = TransactionService(store).list_transactions(
        month=month_key,
        type=TransactionType(txn_type.upper()) if txn_type else None,
        category=category_name(CategoryService(store).resolve(category)) if category else None,
        wallet_id=wallet_id,
        search=search,
        start_date=start,
        end_date=end,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    wallets = {w.id: w.name for w in wallet_service.list_wallets()}
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    for txn in transactions[:limit]:
        sign = "+" if txn.type == TransactionType.INCOME else "-"
        click.echo(
            f"{txn.id:12s} | {txn.date:%Y-%m-%d} | {sign}{format_vnd(txn.amount):>16s} | "
            f"{txn.category:20s} | {wallets.get(txn.wallet_id, '?'):12s} | {txn.note}"
        )


@transaction_group.command("edit")
@click.argument("transaction_id")
@click.option("--amount", help="New amount")
@click.option("--category", help="New category")
@click.option("--note", help="New note")
@click.option("--date", "date_str", help="New date")
@click.option("--wallet", help="New wallet name or ID")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: str,
    amount: str | None,
    category: str | None,
    note: str | None,
    date_str: str | None,
    wallet: str | None,
):
    """Edit a transaction."""
    store = ctx.obj["store"]
    changes = {}
    try:
        if amount is not None:
            changes["amount"] = parse_amount(amount)
        if date_str is not None:
            changes["date"] = at_current_time(parse_date(date_str))
    except ValueError as e:
        handle_domain_error(ctx, e)
    if category is not None:
        changes["category"] = category_name(CategoryService(store).resolve(category))
    if note is not None:
        changes["note"] = note
    if wallet is not None:
        changes["wallet_id"] = resolve_wallet_or_exit(ctx, WalletService(store), wallet)

    if not changes:
        click.echo("Nothing to update.")
        return
    try:
        TransactionService(store).update_transaction(transaction_id, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str):
    """Delete a transaction."""
    try:
        TransactionService(ctx.obj["store"]).delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
