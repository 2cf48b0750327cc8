"""Category management commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.domain.category import CategoryService, category_name
from moneyjar.domain.entities import CustomCategory, TransactionType
from moneyjar.domain.errors import DomainError

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group("category")
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only categories for INCOME or EXPENSE")
@click.pass_context
def list_categories(ctx, txn_type: str | None):
    """List standard and custom categories."""
    service = CategoryService(ctx.obj["store"])
    categories = service.list_categories(TransactionType(txn_type.upper()) if txn_type else None)

    click.echo("\nCategories:")
    click.echo("-" * 50)
    for category in categories:
        if isinstance(category, CustomCategory):
            click.echo(f"  {category.name} (custom)")
        else:
            click.echo(f"  {category_name(category):25s} [{category.name}]")


@category_group.command("add")
@click.argument("name")
@click.option("--type", "txn_type", type=TYPE_CHOICE, default="EXPENSE", help="INCOME or EXPENSE")
@click.pass_context
def add_category(ctx, name: str, txn_type: str):
    """Add a custom category.

    Examples:
        moneyjar category add "Thú cưng"
        moneyjar category add "Freelance" --type INCOME
    """
    service = CategoryService(ctx.obj["store"])
    try:
        category = service.add_custom_category(name, TransactionType(txn_type.upper()))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{category.name}'")


@category_group.command("delete")
@click.argument("name")
@click.pass_context
def delete_category(ctx, name: str):
    """Delete a custom category. Existing transactions keep their label."""
    try:
        CategoryService(ctx.obj["store"]).delete_custom_category(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group)
