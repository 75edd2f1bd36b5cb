"""CLI helpers for parsing option values or exiting with an error."""

from datetime import date
from decimal import Decimal

import click

from goldnotebook.domain.transaction import TransactionService
from goldnotebook.domain.errors import NotFoundError
from goldnotebook.utils.parsers import parse_amount, parse_date


def parse_date_or_exit(ctx: click.Context, value: str) -> date:
    """Parse a --date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, label: str, value: str) -> Decimal:
    """Parse a price or quantity option, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_transaction_or_exit(
    ctx: click.Context, service: TransactionService, id_or_prefix: str
) -> str:
    """Resolve a transaction id or unique prefix, or exit with a CLI error."""
    try:
        return service.resolve_transaction_id(id_or_prefix)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
