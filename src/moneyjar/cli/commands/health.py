"""Financial health command."""

import click
from moneyjar.cli.formatting import current_month
from moneyjar.domain.health import (
    build_snapshot,
    defense_assessment,
    grade,
    health_advice,
    offense_assessment,
    score_health,
)
from moneyjar.domain.transaction import TransactionService


@click.command("health")
@click.pass_context
def health(ctx):
    """Score this month's financial health and suggest next steps."""
    store = ctx.obj["store"]
    state = store.state
    month_transactions = TransactionService(store).list_transactions(month=current_month())
    snapshot = build_snapshot(
        month_transactions, state.transactions, state.budget, state.assets, state.debts
    )
    score = score_health(snapshot)

    click.echo(f"\nFinancial health: {score.overall}/100 (grade {grade(score.overall)})")
    click.echo("-" * 60)
    click.echo(f"Defense {score.defense:3d}: {defense_assessment(score.defense)}")
    click.echo(f"Offense {score.offense:3d}: {offense_assessment(score.offense)}")
    click.echo("-" * 60)
    click.echo(f"Savings     {score.savings:5.0f}  (rate {score.savings_rate * 100:.1f}%)")
    click.echo(f"Runway      {score.runway:5.0f}  ({score.runway_months:.1f} months)")
    click.echo(f"Debt        {score.debt:5.0f}  (ratio {score.debt_ratio * 100:.1f}%)")
    click.echo(f"Budget      {score.budget:5.0f}  (usage {score.budget_usage * 100:.1f}%)")
    click.echo(f"Investment  {score.investment:5.0f}  (ratio {score.investment_ratio * 100:.1f}%)")
    click.echo("")
    for advice in health_advice(score, snapshot.income):
        click.echo(f"[{advice.level.value}] {advice.text}")


def register_commands(cli):
    """Register health command with main CLI."""
    cli.add_command(health)
