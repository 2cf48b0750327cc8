"""AI assistant commands."""

import mimetypes
from pathlib import Path

import click
from moneyjar.ai import gemini
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import current_month, format_vnd
from moneyjar.cli.wallet_resolution import resolve_wallet_or_exit
from moneyjar.domain.entities import TransactionType
from moneyjar.domain.errors import AI_UNAVAILABLE_MESSAGE, AIUnavailableError, DomainError
from moneyjar.domain.transaction import TransactionService
from moneyjar.domain.wallet import WalletService
from moneyjar.utils.date_parser import at_current_time


@click.group("ai")
def ai_group():
    """AI helpers (requires GEMINI_API_KEY)."""
    pass


@ai_group.command("receipt")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--save", is_flag=True, help="Record the receipt as an expense")
@click.option("--wallet", help="Wallet to book the expense against")
@click.pass_context
def receipt(ctx, image: Path, save: bool, wallet: str | None):
    """Read a receipt photo."""
    mime_type = mimetypes.guess_type(image.name)[0] or "image/jpeg"
    try:
        data = gemini.parse_receipt(image.read_bytes(), mime_type)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Merchant: {data.merchant}")
    click.echo(f"Amount:   {format_vnd(data.amount)}")
    click.echo(f"Date:     {data.date or 'unknown'}")
    click.echo(f"Category: {data.category}")
    if data.note:
        click.echo(f"Note:     {data.note}")

    if save:
        store = ctx.obj["store"]
        wallet_id = resolve_wallet_or_exit(ctx, WalletService(store), wallet)
        try:
            txn = TransactionService(store).add_transaction(
                amount=data.amount,
                type=TransactionType.EXPENSE,
                category=data.category,
                note=data.note or data.merchant,
                date=at_current_time(data.date) if data.date else None,
                wallet_id=wallet_id,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Saved as transaction {txn.id}")


@ai_group.command("categorize")
@click.argument("note")
def categorize(note: str):
    """Suggest a category for an expense note."""
    click.echo(gemini.auto_categorize(note))


@ai_group.command("voice")
@click.argument("transcript")
@click.option("--save", is_flag=True, help="Record the parsed transaction")
@click.pass_context
def voice(ctx, transcript: str, save: bool):
    """Parse a spoken sentence such as "ăn phở 50k" into a transaction."""
    command = gemini.parse_voice_command(transcript)
    if command is None:
        handle_domain_error(ctx, AIUnavailableError(AI_UNAVAILABLE_MESSAGE))

    click.echo(f"{command.type.value}: {format_vnd(command.amount)} | {command.category} | {command.note}")
    if save:
        try:
            txn = TransactionService(ctx.obj["store"]).add_transaction(
                amount=command.amount,
                type=command.type,
                category=command.category,
                note=command.note,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Saved as transaction {txn.id}")


@ai_group.command("portfolio")
@click.pass_context
def portfolio(ctx):
    """Ask for a diversification review of your assets."""
    assets = ctx.obj["store"].state.assets
    if not assets:
        click.echo("No assets to analyse.")
        return
    analysis = gemini.analyze_portfolio(assets)
    if analysis is None:
        handle_domain_error(ctx, AIUnavailableError(AI_UNAVAILABLE_MESSAGE))

    click.echo(f"Diversification score: {analysis.health_score:.0f}/100")
    click.echo(f"Cash ratio: {analysis.cash_ratio * 100:.1f}%")
    click.echo(analysis.summary)
    for warning in analysis.warnings:
        click.echo(f"  ! {warning}")
    for suggestion in analysis.suggestions:
        click.echo(f"  > {suggestion}")


@ai_group.command("chat")
@click.argument("message", required=False)
@click.pass_context
def chat(ctx, message: str | None):
    """Talk to the financial advisor.

    With MESSAGE, asks one question; without it, starts an interactive
    session (empty line to quit).
    """
    store = ctx.obj["store"]
    state = store.state
    month = current_month()
    _, spent = TransactionService(store).month_totals(month)
    advisor = gemini.FinancialAdvisor(
        transactions=TransactionService(store).list_transactions(),
        budget_limit=state.budget,
        spent=spent,
        month=month,
        assets=state.assets,
    )

    try:
        if message:
            click.echo(advisor.ask(message))
            return
        while True:
            question = click.prompt("You", default="", show_default=False)
            if not question.strip():
                return
            click.echo(advisor.ask(question))
    except AIUnavailableError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register AI commands with main CLI."""
    cli.add_command(ai_group)
