"""Main CLI entry point."""

import click
from moneyjar.database.factories import create_sqlite_storage
from moneyjar.domain.state import StateStore

# Import and register all commands at module level
from moneyjar.cli.commands import (
    wallet,
    transaction,
    category,
    budget,
    jars,
    goal,
    bill,
    asset,
    debt,
    tools,
    health,
    forecast,
    business,
    report,
    data,
    ai,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides MONEYJAR_DB_PATH environment variable)",
    envvar="MONEYJAR_DB_PATH",
)
@click.pass_context
def cli(ctx, db_path: str | None):
    """moneyjar - Personal finance ledger.

    Track wallets, spending, budgets, savings goals, bills, assets and debts,
    and run loan, property-deal and financial-health analysis.
    """
    ctx.ensure_object(dict)

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        storage.initialize_schema()
        ctx.obj["store"] = StateStore(storage)
        ctx.call_on_close(storage.disconnect)


# Register all commands
wallet.register_commands(cli)
transaction.register_commands(cli)
category.register_commands(cli)
budget.register_commands(cli)
jars.register_commands(cli)
goal.register_commands(cli)
bill.register_commands(cli)
asset.register_commands(cli)
debt.register_commands(cli)
tools.register_commands(cli)
health.register_commands(cli)
forecast.register_commands(cli)
business.register_commands(cli)
report.register_commands(cli)
data.register_commands(cli)
ai.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
