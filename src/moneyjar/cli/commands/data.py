"""Backup, export and reset commands."""

from datetime import date
from pathlib import Path

import click
from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.domain.backup import export_csv, export_json, import_json
from moneyjar.domain.errors import DomainError


@click.group("data")
def data_group():
    """Export, back up and restore data."""
    pass


@data_group.command("export-csv")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default moneyjar_export_<date>.csv)",
)
@click.pass_context
def export_csv_cmd(ctx, output: Path | None):
    """Export transactions as a spreadsheet-friendly CSV file."""
    output = output or Path(f"moneyjar_export_{date.today().isoformat()}.csv")
    state = ctx.obj["store"].state
    output.write_text(export_csv(state), encoding="utf-8")
    click.echo(f"Exported {len(state.transactions)} transaction(s) to {output}")


@data_group.command("export-json")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("moneyjar_backup.json"),
    show_default=True,
    help="Output file",
)
@click.pass_context
def export_json_cmd(ctx, output: Path):
    """Write a full JSON backup."""
    output.write_text(export_json(ctx.obj["store"].state), encoding="utf-8")
    click.echo(f"Backup written to {output}")


@data_group.command("import-json")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_json_cmd(ctx, backup_file: Path):
    """Restore data from a JSON backup, replacing what is stored."""
    try:
        restored = import_json(ctx.obj["store"], backup_file.read_text(encoding="utf-8"))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Restored: {', '.join(restored)}")


@data_group.command("reset")
@click.confirmation_option(prompt="This erases all data. Continue?")
@click.pass_context
def reset(ctx):
    """Erase all data and start over with the default wallet."""
    ctx.obj["store"].reset()
    click.echo("All data erased.")


def register_commands(cli):
    """Register data commands with main CLI."""
    cli.add_command(data_group)
