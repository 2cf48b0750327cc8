"""Six-jar commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import current_month, format_vnd
from moneyjar.domain.budget import BudgetService
from moneyjar.domain.category import CategoryService, category_name
from moneyjar.domain.jars import jar_budget_allocation, jar_status
from moneyjar.utils.amount_parser import parse_amount
from moneyjar.utils.date_parser import parse_month


@click.group("jars")
def jars_group():
    """Six-jar money management."""
    pass


@jars_group.command("status")
@click.option("--month", help="Month (YYYY-MM, defaults to this month)")
@click.pass_context
def status(ctx, month: str | None):
    """Spending in each jar against its share of planned income."""
    state = ctx.obj["store"].state
    if state.planned_income <= 0:
        click.echo("Set planned income first: moneyjar budget income AMOUNT")
        return
    try:
        month_key = parse_month(month).strftime("%Y-%m") if month else current_month()
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nJars for {month_key} (income {format_vnd(state.planned_income)})")
    click.echo("-" * 70)
    for item in jar_status(state.transactions, state.planned_income, month_key):
        flag = "  OVER" if item.is_over else ""
        click.echo(
            f"{item.jar.id:5s} {item.jar.pct * 100:4.0f}% | {format_vnd(item.spent):>15s} / "
            f"{format_vnd(item.target):>15s} | {item.percent:5.1f}%{flag}"
        )


@jars_group.command("plan")
@click.pass_context
def plan(ctx):
    """Each jar's target next to the category limits already assigned to it."""
    state = ctx.obj["store"].state
    click.echo("\nJar allocation")
    click.echo("-" * 70)
    for item in jar_budget_allocation(state.planned_income, state.category_budgets):
        click.echo(
            f"{item.jar.id:5s} {item.jar.name:20s} | target {format_vnd(item.target):>15s} | "
            f"planned {format_vnd(item.planned):>15s} | free {format_vnd(item.unallocated):>15s}"
        )


@jars_group.command("distribute")
@click.argument("jar_id")
@click.argument("limits", nargs=-1, required=True, metavar="CATEGORY=AMOUNT...")
@click.pass_context
def distribute(ctx, jar_id: str, limits: tuple[str, ...]):
    """Set the category limits inside one jar.

    Examples:
        moneyjar jars distribute PLAY SHOPPING=1tr ENTERTAINMENT=500k
    """
    store = ctx.obj["store"]
    categories = CategoryService(store)
    parsed = {}
    try:
        for item in limits:
            name, sep, amount = item.partition("=")
            if not sep:
                raise ValueError(f"Expected CATEGORY=AMOUNT, got '{item}'")
            parsed[category_name(categories.resolve(name.strip()))] = parse_amount(amount)
        BudgetService(store).distribute_jar(jar_id, parsed)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated {len(parsed)} limit(s) in jar {jar_id.upper()}")


def register_commands(cli):
    """Register jar commands with main CLI."""
    cli.add_command(jars_group)
