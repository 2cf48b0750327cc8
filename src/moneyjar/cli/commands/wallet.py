"""Wallet management commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.cli.wallet_resolution import resolve_wallet_or_exit
from moneyjar.domain.entities import TransactionType, WalletType
from moneyjar.domain.errors import DomainError
from moneyjar.domain.wallet import WalletService
from moneyjar.utils.amount_parser import parse_amount


@click.group("wallet")
def wallet_group():
    """Manage wallets."""
    pass


@wallet_group.command("create")
@click.argument("name", metavar="WALLET_NAME")
@click.option(
    "--type",
    "wallet_type",
    type=click.Choice([t.value for t in WalletType], case_sensitive=False),
    default=WalletType.CASH.value,
    help="Wallet type",
)
@click.option("--balance", default="0", help="Opening balance (e.g. 2tr, 1.500.000)")
@click.option("--credit-limit", help="Credit limit for credit cards")
@click.option("--bank", help="Bank name")
@click.option("--account-number", help="Bank account number")
@click.option("--description", help="Free-text description")
@click.pass_context
def create_wallet(
    ctx,
    name: str,
    wallet_type: str,
    balance: str,
    credit_limit: str | None,
    bank: str | None,
    account_number: str | None,
    description: str | None,
):
    """Create a new wallet.

    Examples:
        moneyjar wallet create "Vietcombank" --type BANK --balance 10tr
        moneyjar wallet create "Visa" --type CREDIT --credit-limit 50tr
    """
    service = WalletService(ctx.obj["store"])
    try:
        wallet = service.create_wallet(
            name=name,
            type=WalletType(wallet_type.upper()),
            initial_balance=parse_amount(balance),
            credit_limit=parse_amount(credit_limit) if credit_limit else None,
            account_number=account_number,
            bank_name=bank,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created wallet '{wallet.name}' (ID: {wallet.id})")


@wallet_group.command("list")
@click.pass_context
def list_wallets(ctx):
    """List wallets with their computed balances."""
    service = WalletService(ctx.obj["store"])
    wallets = service.list_wallets()
    if not wallets:
        click.echo("No wallets found.")
        return

    click.echo("\nWallets:")
    click.echo("-" * 72)
    for wallet in wallets:
        line = (
            f"ID: {wallet.id:12s} | {wallet.name:20s} | {wallet.type.value:8s} | "
            f"{format_vnd(service.calculate_balance(wallet))}"
        )
        if wallet.type == WalletType.CREDIT and wallet.credit_limit:
            line += f" | used {service.credit_usage_percent(wallet):.1f}%"
        click.echo(line)
    click.echo("-" * 72)
    click.echo(f"Total: {format_vnd(service.total_wealth())}")


@wallet_group.command("rename")
@click.argument("wallet", metavar="WALLET")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_wallet(ctx, wallet: str, new_name: str) -> None:
    """Rename a wallet.

    WALLET can be a wallet name or ID.
    """
    service = WalletService(ctx.obj["store"])
    wallet_id = resolve_wallet_or_exit(ctx, service, wallet)
    try:
        service.update_wallet(wallet_id, name=new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed wallet to '{new_name}'")


@wallet_group.command("delete")
@click.argument("wallet", metavar="WALLET")
@click.pass_context
def delete_wallet(ctx, wallet: str) -> None:
    """Delete a wallet.

    The wallet can only be deleted if no transaction is booked against it.
    """
    service = WalletService(ctx.obj["store"])
    wallet_id = resolve_wallet_or_exit(ctx, service, wallet)
    try:
        service.delete_wallet(wallet_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted wallet '{wallet}'")


@wallet_group.command("transfer")
@click.argument("source", metavar="FROM_WALLET")
@click.argument("destination", metavar="TO_WALLET")
@click.argument("amount")
@click.option("--fee", default="0", help="Transfer fee charged to the source wallet")
@click.option("--note", default="", help="Note attached to both sides")
@click.pass_context
def transfer(ctx, source: str, destination: str, amount: str, fee: str, note: str) -> None:
    """Move money between two wallets.

    Examples:
        moneyjar wallet transfer "Tiền mặt" "Vietcombank" 2tr
        moneyjar wallet transfer w1 Momo 500k --fee 1k --note "top up"
    """
    service = WalletService(ctx.obj["store"])
    source_id = resolve_wallet_or_exit(ctx, service, source)
    destination_id = resolve_wallet_or_exit(ctx, service, destination)
    try:
        created = service.transfer(
            source_id, destination_id, parse_amount(amount), fee=parse_amount(fee), note=note
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transferred {format_vnd(created[0].amount)} ({len(created)} transactions)")


@wallet_group.command("adjust")
@click.argument("wallet", metavar="WALLET")
@click.argument("actual_balance", metavar="ACTUAL_BALANCE")
@click.pass_context
def adjust(ctx, wallet: str, actual_balance: str) -> None:
    """Reconcile a wallet with its real balance."""
    service = WalletService(ctx.obj["store"])
    wallet_id = resolve_wallet_or_exit(ctx, service, wallet)
    try:
        txn = service.adjust_balance(wallet_id, parse_amount(actual_balance))
    except ValueError as e:
        handle_domain_error(ctx, e)
    if txn is None:
        click.echo("Balance already matches.")
    else:
        sign = "+" if txn.type == TransactionType.INCOME else "-"
        click.echo(f"Adjusted balance by {sign}{format_vnd(txn.amount)}")


@wallet_group.command("refresh")
@click.pass_context
def refresh(ctx) -> None:
    """Store the computed balance of every wallet."""
    service = WalletService(ctx.obj["store"])
    wallets = service.refresh_balances()
    click.echo(f"Refreshed {len(wallets)} wallet(s)")


def register_commands(cli):
    """Register wallet commands with main CLI."""
    cli.add_command(wallet_group)
