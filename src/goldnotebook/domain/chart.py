"""Time-filtered performance series."""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from goldnotebook.domain.cost_basis import ZERO, chronological
from goldnotebook.domain.entities import ChartPoint, TimeFilter, Transaction

WINDOWS: dict[TimeFilter, relativedelta] = {
    TimeFilter.ONE_DAY: relativedelta(days=1),
    TimeFilter.ONE_WEEK: relativedelta(weeks=1),
    TimeFilter.ONE_MONTH: relativedelta(months=1),
    TimeFilter.ONE_YEAR: relativedelta(years=1),
}


def cutoff_for(time_filter: TimeFilter, now: datetime) -> Optional[datetime]:
    """Return the window start for a filter, or None for ALL."""
    window = WINDOWS.get(TimeFilter(time_filter))
    if window is None:
        return None
    return now - window


def chart_series(
    transactions: Iterable[Transaction],
    time_filter: TimeFilter = TimeFilter.ONE_MONTH,
    now: Optional[datetime] = None,
) -> list[ChartPoint]:
    """Build the chart series for a window.

    The walk always covers the full log so running totals include history
    before the window; only the emitted points are filtered. A point is kept
    when its date is strictly after the day the cutoff falls on, in local time
    like the dates entered on the command line.
    """
    if now is None:
        now = datetime.now().astimezone()

    cutoff = cutoff_for(time_filter, now)
    cutoff_day = cutoff.date() if cutoff is not None else None

    gold_balance = ZERO
    cumulative = ZERO
    points: list[ChartPoint] = []

    for txn in chronological(transactions):
        profit_loss: Optional[Decimal] = None
        if txn.is_buy:
            gold_balance += txn.quantity
        else:
            gold_balance = max(ZERO, gold_balance - txn.quantity)
            profit_loss = txn.profit_loss if txn.profit_loss is not None else ZERO
            cumulative += profit_loss

        if cutoff_day is not None and txn.date <= cutoff_day:
            continue

        points.append(
            ChartPoint(
                date=txn.date,
                gold_balance=gold_balance,
                cumulative_profit_loss=cumulative,
                type=txn.type,
                price=txn.price,
                profit_loss=profit_loss,
            )
        )

    return points
