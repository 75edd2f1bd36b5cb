"""Performance chart command."""

import click
from goldnotebook.cli.formatting import format_myr, format_signed_myr
from goldnotebook.domain.entities import TimeFilter
from goldnotebook.domain.transaction import TransactionService


@click.command("chart")
@click.option(
    "--window",
    type=click.Choice([f.value for f in TimeFilter], case_sensitive=False),
    default=TimeFilter.ONE_MONTH.value,
    show_default=True,
    help="Time window to show",
)
@click.pass_context
def chart(ctx, window: str):
    """Show the performance series: balance and cumulative profit/loss.

    Running totals include every transaction before the window, so the first
    row already reflects earlier history.
    """
    service: TransactionService = ctx.obj["transactions"]
    points = service.get_chart_series(TimeFilter(window.upper()))

    if not points:
        click.echo(f"No transactions in the last {window.upper()}.")
        return

    click.echo(f"\nPerformance ({window.upper()})")
    click.echo("-" * 80)
    click.echo(
        f"{'Date':<12} {'Type':<5} {'Price/g':>12} {'P/L':>14} "
        f"{'Balance (g)':>14} {'Cumulative P/L':>18}"
    )
    click.echo("-" * 80)
    for point in points:
        profit_loss = format_signed_myr(point.profit_loss)
        click.echo(
            f"{str(point.date):<12} {point.type.value.upper():<5} "
            f"{format_myr(point.price):>12} {profit_loss:>14} "
            f"{point.gold_balance:>14.4f} {format_signed_myr(point.cumulative_profit_loss):>18}"
        )


def register_commands(cli):
    """Register chart command with main CLI."""
    cli.add_command(chart)
