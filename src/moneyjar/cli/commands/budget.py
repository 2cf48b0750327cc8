"""Budget commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import current_month, format_vnd
from moneyjar.domain.budget import BudgetService
from moneyjar.domain.category import CategoryService, category_name
from moneyjar.utils.amount_parser import parse_amount
from moneyjar.utils.date_parser import parse_month


@click.group("budget")
def budget_group():
    """Plan monthly spending."""
    pass


@budget_group.command("set")
@click.argument("amount")
@click.pass_context
def set_budget(ctx, amount: str):
    """Set the overall monthly budget."""
    try:
        value = parse_amount(amount)
        BudgetService(ctx.obj["store"]).set_budget(value)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Monthly budget set to {format_vnd(value)}")


@budget_group.command("income")
@click.argument("amount")
@click.pass_context
def set_income(ctx, amount: str):
    """Set planned monthly income (the base for the six jars)."""
    try:
        value = parse_amount(amount)
        BudgetService(ctx.obj["store"]).set_planned_income(value)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Planned income set to {format_vnd(value)}")


@budget_group.command("limit")
@click.argument("category")
@click.argument("amount")
@click.pass_context
def set_limit(ctx, category: str, amount: str):
    """Set a category's monthly limit (0 removes it).

    Examples:
        moneyjar budget limit FOOD 4tr
        moneyjar budget limit "Giải trí" 1.5tr
    """
    store = ctx.obj["store"]
    label = category_name(CategoryService(store).resolve(category))
    try:
        value = parse_amount(amount)
        BudgetService(store).set_category_limit(label, value)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Limit for '{label}' set to {format_vnd(value)}")


@budget_group.command("report")
@click.option("--month", help="Month (YYYY-MM, defaults to this month)")
@click.pass_context
def report(ctx, month: str | None):
    """Spending per category against its limit, with last month for comparison."""
    try:
        month_key = parse_month(month).strftime("%Y-%m") if month else current_month()
    except ValueError as e:
        handle_domain_error(ctx, e)

    store = ctx.obj["store"]
    result = BudgetService(store).category_report(month_key)

    click.echo(f"\nBudget report for {month_key}")
    if store.state.budget > 0:
        click.echo(f"Monthly budget: {format_vnd(store.state.budget)}")
    click.echo("-" * 90)
    if not result.lines:
        click.echo("No limits or spending this month.")
    for line in result.lines:
        limit = format_vnd(line.limit) if line.limit > 0 else "-"
        flag = "  OVER" if line.limit > 0 and line.spent > line.limit else ""
        click.echo(
            f"{line.category:25s} | spent {format_vnd(line.spent):>15s} | limit {limit:>15s} | "
            f"last month {format_vnd(line.spent_last_month):>15s}{flag}"
        )
    click.echo("-" * 90)
    click.echo(
        f"Total (limited categories): {format_vnd(result.total_spent)} / "
        f"{format_vnd(result.total_budget)}"
    )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group)
