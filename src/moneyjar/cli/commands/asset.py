"""Asset portfolio commands."""

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.cli.formatting import format_vnd
from moneyjar.domain.asset import AssetService, next_milestone
from moneyjar.domain.entities import AssetType
from moneyjar.domain.errors import DomainError
from moneyjar.utils.amount_parser import parse_amount

ASSET_TYPE_CHOICE = click.Choice(list(AssetType.__members__), case_sensitive=False)


def _optional_amount(value: str | None) -> float | None:
    return parse_amount(value) if value is not None else None


@click.group("asset")
def asset_group():
    """Track assets and liabilities."""
    pass


@asset_group.command("add")
@click.argument("name")
@click.option("--type", "asset_type", type=ASSET_TYPE_CHOICE, required=True, help="Asset kind")
@click.option("--value", help="Current value (kinds without units)")
@click.option("--initial", help="Amount originally invested (defaults to value)")
@click.option("--quantity", type=float, help="Units held (gold, stock, crypto, fund)")
@click.option("--buy-price", help="Unit purchase price")
@click.option("--price", help="Current unit price (defaults to buy price)")
@click.option("--note", help="Note")
@click.pass_context
def add_asset(
    ctx,
    name: str,
    asset_type: str,
    value: str | None,
    initial: str | None,
    quantity: float | None,
    buy_price: str | None,
    price: str | None,
    note: str | None,
):
    """Add an asset.

    Examples:
        moneyjar asset add "Sổ ACB" --type SAVINGS --value 200tr
        moneyjar asset add "FPT" --type STOCK --quantity 1000 --buy-price 95k --price 120k
        moneyjar asset add "Vay mua nhà" --type DEBT --value 1.2tỷ
    """
    try:
        asset = AssetService(ctx.obj["store"]).add_asset(
            name=name,
            type=AssetType[asset_type.upper()],
            value=_optional_amount(value) or 0.0,
            initial_value=_optional_amount(initial),
            quantity=quantity,
            buy_price=_optional_amount(buy_price),
            current_price=_optional_amount(price),
            note=note,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added asset '{asset.name}' (ID: {asset.id}) worth {format_vnd(asset.value)}")


@asset_group.command("list")
@click.pass_context
def list_assets(ctx):
    """List assets grouped by kind, with the portfolio summary."""
    summary = AssetService(ctx.obj["store"]).summary()
    if not summary.groups:
        click.echo("No assets found.")
        return

    for group in summary.groups:
        click.echo(f"\n{group.type.value} ({format_vnd(group.total)}, ROI {group.roi:.1f}%)")
        for asset in group.assets:
            click.echo(
                f"  {asset.id:12s} | {asset.name:20s} | {format_vnd(asset.value):>16s} | "
                f"P/L {format_vnd(asset.value - asset.initial_value)}"
            )

    click.echo("-" * 60)
    click.echo(f"Total assets:  {format_vnd(summary.total_assets)}")
    click.echo(f"Liabilities:   {format_vnd(summary.total_liabilities)}")
    click.echo(f"Net worth:     {format_vnd(summary.net_worth)}")
    click.echo(f"Profit:        {format_vnd(summary.total_profit)} ({summary.roi:.1f}%)")
    click.echo(f"Next milestone: {format_vnd(next_milestone(summary.net_worth))}")


@asset_group.command("price")
@click.argument("asset_id")
@click.argument("price")
@click.pass_context
def update_price(ctx, asset_id: str, price: str):
    """Update an asset's market price (unit price for unit-based kinds)."""
    try:
        asset = AssetService(ctx.obj["store"]).update_price(asset_id, parse_amount(price))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"'{asset.name}' is now worth {format_vnd(asset.value)}")


@asset_group.command("delete")
@click.argument("asset_id")
@click.pass_context
def delete_asset(ctx, asset_id: str):
    """Delete an asset."""
    try:
        AssetService(ctx.obj["store"]).delete_asset(asset_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted asset {asset_id}")


def register_commands(cli):
    """Register asset commands with main CLI."""
    cli.add_command(asset_group)
