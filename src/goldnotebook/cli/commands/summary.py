"""Summary command."""

import click
from goldnotebook.cli.formatting import format_grams, format_myr, format_signed_myr
from goldnotebook.domain.transaction import TransactionService


@click.command("summary")
@click.pass_context
def summary(ctx):
    """Show holdings, average cost and realized profit/loss."""
    service: TransactionService = ctx.obj["transactions"]
    result = service.get_summary()

    rows = [
        ("Gold balance", format_grams(result.current_balance)),
        ("Average buy price", f"{format_myr(result.average_buy_price)}/g"),
        ("Total invested", format_myr(result.total_invested)),
        ("Total sold", format_myr(result.total_sold)),
        ("Realized profit/loss", format_signed_myr(result.total_realized_profit_loss)),
        (
            "Win rate",
            f"{result.win_rate:.1f}% ({result.win_count}W / {result.loss_count}L)",
        ),
        ("Buy transactions", str(result.total_buy_transactions)),
        ("Sell transactions", str(result.total_sell_transactions)),
    ]

    click.echo("\nSummary")
    click.echo("-" * 50)
    for label, value in rows:
        click.echo(f"{label:<25} {value:>24}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
