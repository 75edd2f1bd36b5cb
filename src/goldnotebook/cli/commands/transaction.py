"""Transaction management commands."""

import click
from goldnotebook.cli.error_handling import handle_domain_error
from goldnotebook.cli.formatting import format_grams, format_myr, format_signed_myr
from goldnotebook.cli.inputs import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_transaction_or_exit,
)
from goldnotebook.domain.entities import TransactionType, TransactionUpdate
from goldnotebook.domain.errors import DomainError
from goldnotebook.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--verbose", "-v", is_flag=True, help="Show full ids, creation time and average cost")
@click.pass_context
def list_transactions(ctx, verbose: bool):
    """List transactions, newest first."""
    service: TransactionService = ctx.obj["transactions"]
    transactions = service.list_transactions()

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")

    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date}")
            click.echo(f"  Type: {txn.type.value.upper()}")
            click.echo(f"  Price: {format_myr(txn.price)}/g")
            click.echo(f"  Quantity: {format_grams(txn.quantity)}")
            click.echo(f"  Total: {format_myr(txn.total_value)}")
            if txn.is_sell:
                avg = txn.average_cost_at_sale
                click.echo(f"  Average cost at sale: {format_myr(avg) if avg is not None else '-'}/g")
                click.echo(f"  Profit/Loss: {format_signed_myr(txn.profit_loss)}")
            if txn.notes:
                click.echo(f"  Notes: {txn.notes}")
            click.echo(f"  Created: {txn.created_at.isoformat()}")
            click.echo("-" * 100)
        return

    click.echo("-" * 100)
    click.echo(
        f"{'ID':<10} {'Date':<12} {'Type':<5} {'Price/g':>12} {'Qty (g)':>12} "
        f"{'Total':>14} {'P/L':>14}  {'Notes':<20}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        profit_loss = format_signed_myr(txn.profit_loss) if txn.is_sell else "-"
        click.echo(
            f"{txn.id[:8]:<10} {str(txn.date):<12} {txn.type.value.upper():<5} "
            f"{format_myr(txn.price):>12} {txn.quantity:>12.4f} "
            f"{format_myr(txn.total_value):>14} {profit_loss:>14}  {txn.notes[:20]:<20}"
        )
    click.echo("-" * 100)
    click.echo(f"Balance: {format_grams(service.current_balance())}")


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str):
    """Show one transaction by id or unique id prefix."""
    service: TransactionService = ctx.obj["transactions"]
    resolved = resolve_transaction_or_exit(ctx, service, transaction_id)
    txn = service.get_transaction(resolved)

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.type.value.upper()}")
    click.echo(f"  Price: {format_myr(txn.price)}/g")
    click.echo(f"  Quantity: {format_grams(txn.quantity)}")
    click.echo(f"  Total: {format_myr(txn.total_value)}")
    if txn.is_sell:
        click.echo(f"  Profit/Loss: {format_signed_myr(txn.profit_loss)}")
    click.echo(f"  Notes: {txn.notes}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--date", "date_str", help="Transaction date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="Transaction type",
)
@click.option("--price", help="Price per gram in RM")
@click.option("--quantity", help="Grams transacted")
@click.option("--notes", help="Notes (use \"\" to clear)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    date_str: str | None,
    txn_type: str | None,
    price: str | None,
    quantity: str | None,
    notes: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. A sale's recorded profit/loss
    is kept as it was, even if its price or quantity changes.

    Examples:
        goldnotebook transaction update 3f2a --price 355.00
        goldnotebook transaction update 3f2a --notes ""
    """
    service: TransactionService = ctx.obj["transactions"]
    resolved = resolve_transaction_or_exit(ctx, service, transaction_id)

    changes = TransactionUpdate(
        date=parse_date_or_exit(ctx, date_str) if date_str is not None else None,
        type=TransactionType(txn_type) if txn_type is not None else None,
        price=parse_amount_or_exit(ctx, "price", price) if price is not None else None,
        quantity=(
            parse_amount_or_exit(ctx, "quantity", quantity) if quantity is not None else None
        ),
        notes=notes.strip() if notes is not None else None,
    )

    if changes.is_empty():
        click.echo("Nothing to update.")
        return

    try:
        service.update_transaction(resolved, changes)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {resolved[:8]}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        goldnotebook transaction delete 3f2a
    """
    service: TransactionService = ctx.obj["transactions"]
    resolved = resolve_transaction_or_exit(ctx, service, transaction_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {resolved[:8]}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(resolved)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {resolved[:8]}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
