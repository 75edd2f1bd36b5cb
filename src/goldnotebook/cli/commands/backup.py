"""Backup, restore and CSV export commands."""

from pathlib import Path

import click
from goldnotebook.cli.error_handling import handle_domain_error
from goldnotebook.domain.backup import (
    BackupService,
    default_backup_filename,
    default_csv_filename,
)
from goldnotebook.domain.errors import DomainError, ImportFormatError


@click.command("backup")
@click.argument("output", type=click.Path(dir_okay=False), required=False)
@click.pass_context
def backup(ctx, output: str | None):
    """Write a JSON backup of all transactions and the summary."""
    service = BackupService(ctx.obj["transactions"])
    path = Path(output or default_backup_filename())
    path.write_text(service.export_backup(), encoding="utf-8")
    click.echo(f"Backup written to {path}")


@click.command("restore")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def restore(ctx, backup_file: str, yes: bool):
    """Replace all transactions with those from a JSON backup."""
    service = BackupService(ctx.obj["transactions"])

    if not yes and not click.confirm(
        "Restoring replaces all current transactions. Continue?"
    ):
        click.echo("Restore cancelled.")
        return

    try:
        count = service.restore_backup(Path(backup_file).read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        handle_domain_error(ctx, ImportFormatError(f"Invalid backup file: not UTF-8 text ({e})"))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Restored {count} transactions from {backup_file}")


@click.command("export-csv")
@click.argument("output", type=click.Path(dir_okay=False), required=False)
@click.pass_context
def export_csv(ctx, output: str | None):
    """Export transactions as CSV, newest first."""
    service = BackupService(ctx.obj["transactions"])
    path = Path(output or default_csv_filename())
    path.write_text(service.export_csv(), encoding="utf-8")
    click.echo(f"Exported {len(service.transaction_service.ledger)} transactions to {path}")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup)
    cli.add_command(restore)
    cli.add_command(export_csv)
