"""Savings goal commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.cli.wallet_resolution import resolve_wallet_or_exit
from moneyjar.domain.errors import DomainError
from moneyjar.domain.savings import SavingsService, daily_savings_plan, goal_progress
from moneyjar.domain.wallet import WalletService
from moneyjar.utils.amount_parser import parse_amount
from moneyjar.utils.date_parser import parse_date


@click.group("goal")
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.argument("target")
@click.option("--deadline", help="Deadline date (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--current", default="0", help="Amount already saved")
@click.pass_context
def create_goal(ctx, name: str, target: str, deadline: str | None, current: str):
    """Create a savings goal.

    Examples:
        moneyjar goal create "Mua xe" 500tr --deadline 2026-12-31
    """
    try:
        goal = SavingsService(ctx.obj["store"]).create_goal(
            name=name,
            target_amount=parse_amount(target),
            deadline=parse_date(deadline) if deadline else None,
            current_amount=parse_amount(current),
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created goal '{goal.name}' (ID: {goal.id})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List savings goals with progress."""
    goals = SavingsService(ctx.obj["store"]).list_goals()
    if not goals:
        click.echo("No savings goals found.")
        return

    click.echo("\nSavings goals:")
    click.echo("-" * 90)
    for goal in goals:
        line = (
            f"{goal.id:12s} | {goal.name:20s} | {format_vnd(goal.current_amount):>15s} / "
            f"{format_vnd(goal.target_amount):>15s} | {goal_progress(goal):5.1f}%"
        )
        plan = daily_savings_plan(goal)
        if plan is not None:
            line += f" | {format_vnd(plan.daily)}/day for {plan.days_left} days"
        click.echo(line)


def _move(ctx, goal_id: str, amount: str, wallet: str | None, deposit: bool):
    store = ctx.obj["store"]
    wallet_id = resolve_wallet_or_exit(ctx, WalletService(store), wallet)
    service = SavingsService(store)
    try:
        value = parse_amount(amount)
        if deposit:
            goal = service.deposit(goal_id, value, wallet_id=wallet_id)
        else:
            goal = service.withdraw(goal_id, value, wallet_id=wallet_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"'{goal.name}' now holds {format_vnd(goal.current_amount)}")


@goal_group.command("deposit")
@click.argument("goal_id")
@click.argument("amount")
@click.option("--wallet", help="Wallet the money comes from")
@click.pass_context
def deposit(ctx, goal_id: str, amount: str, wallet: str | None):
    """Put money into a goal."""
    _move(ctx, goal_id, amount, wallet, deposit=True)


@goal_group.command("withdraw")
@click.argument("goal_id")
@click.argument("amount")
@click.option("--wallet", help="Wallet the money goes to")
@click.pass_context
def withdraw(ctx, goal_id: str, amount: str, wallet: str | None):
    """Take money out of a goal."""
    _move(ctx, goal_id, amount, wallet, deposit=False)


@goal_group.command("delete")
@click.argument("goal_id")
@click.pass_context
def delete_goal(ctx, goal_id: str):
    """Delete a savings goal."""
    try:
        SavingsService(ctx.obj["store"]).delete_goal(goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted goal {goal_id}")


def register_commands(cli):
    """Register savings goal commands with main CLI."""
    cli.add_command(goal_group)
