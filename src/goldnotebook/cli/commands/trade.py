"""Buy and sell commands."""

import click
from goldnotebook.cli.error_handling import handle_domain_error
from goldnotebook.cli.formatting import format_grams, format_myr, format_signed_myr
from goldnotebook.cli.inputs import parse_amount_or_exit, parse_date_or_exit
from goldnotebook.domain.errors import DomainError
from goldnotebook.domain.transaction import TransactionService

DATE_HELP = "Transaction date (YYYY-MM-DD or 'today', 'yesterday')"


@click.command("buy")
@click.option("--date", "date_str", default="today", show_default=True, help=DATE_HELP)
@click.option("--price", required=True, help="Price per gram in RM (e.g., 350.50)")
@click.option("--quantity", required=True, help="Grams bought (e.g., 10 or 2.5g)")
@click.option("--notes", default="", help="Free-text notes")
@click.pass_context
def buy(ctx, date_str: str, price: str, quantity: str, notes: str):
    """Record a gold purchase.

    Examples:
        goldnotebook buy --date 2024-01-15 --price 300 --quantity 10
        goldnotebook buy --price RM305.20 --quantity 2.5g --notes "Public Gold"
    """
    service: TransactionService = ctx.obj["transactions"]

    txn_date = parse_date_or_exit(ctx, date_str)
    txn_price = parse_amount_or_exit(ctx, "price", price)
    txn_quantity = parse_amount_or_exit(ctx, "quantity", quantity)

    try:
        txn = service.record_buy(
            date=txn_date, price=txn_price, quantity=txn_quantity, notes=notes.strip()
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded buy {txn.id[:8]}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Price: {format_myr(txn.price)}/g")
    click.echo(f"  Quantity: {format_grams(txn.quantity)}")
    click.echo(f"  Total: {format_myr(txn.total_value)}")
    click.echo(f"  Balance: {format_grams(service.current_balance())}")


@click.command("sell")
@click.option("--date", "date_str", default="today", show_default=True, help=DATE_HELP)
@click.option("--price", required=True, help="Price per gram in RM (e.g., 380.00)")
@click.option("--quantity", help="Grams sold (e.g., 5 or 1.25g)")
@click.option("--all", "sell_all", is_flag=True, help="Sell the entire current balance")
@click.option("--notes", default="", help="Free-text notes")
@click.pass_context
def sell(ctx, date_str: str, price: str, quantity: str | None, sell_all: bool, notes: str):
    """Record a gold sale.

    The sale is priced against the current average cost; its profit/loss is
    fixed at the moment it is recorded.

    Examples:
        goldnotebook sell --price 380 --quantity 5
        goldnotebook sell --date yesterday --price 390 --all
    """
    service: TransactionService = ctx.obj["transactions"]

    if sell_all == (quantity is not None):
        click.echo("Error: Specify exactly one of --quantity or --all.", err=True)
        ctx.exit(1)

    txn_date = parse_date_or_exit(ctx, date_str)
    txn_price = parse_amount_or_exit(ctx, "price", price)
    if sell_all:
        txn_quantity = service.current_balance()
        if txn_quantity <= 0:
            click.echo("Error: No gold to sell (current balance is 0).", err=True)
            ctx.exit(1)
    else:
        txn_quantity = parse_amount_or_exit(ctx, "quantity", quantity)

    try:
        txn = service.record_sell(
            date=txn_date, price=txn_price, quantity=txn_quantity, notes=notes.strip()
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded sell {txn.id[:8]}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Price: {format_myr(txn.price)}/g")
    click.echo(f"  Quantity: {format_grams(txn.quantity)}")
    click.echo(f"  Average cost: {format_myr(txn.average_cost_at_sale)}/g")
    click.echo(f"  Profit/Loss: {format_signed_myr(txn.profit_loss)}")
    click.echo(f"  Balance: {format_grams(service.current_balance())}")


def register_commands(cli):
    """Register buy and sell commands with main CLI."""
    cli.add_command(buy)
    cli.add_command(sell)
