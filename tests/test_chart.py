"""Tests for the time-filtered performance series."""

from dataclasses import replace
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal

import pytest

from goldnotebook.domain import ledger as engine
from goldnotebook.domain.chart import chart_series, cutoff_for
from goldnotebook.domain.entities import Ledger, TimeFilter, TransactionType

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


def _at(minutes: int) -> datetime:
    return datetime(2024, 1, 1, 9, 0, tzinfo=UTC) + timedelta(minutes=minutes)


@pytest.fixture
def history():
    """Buy in January, sell on the 1M cutoff day, buy and sell inside the window.

    2024-01-10 buy 10g @ 100
    2024-05-15 sell 2g @ 150   -> P/L 100
    2024-05-16 buy 8g @ 100
    2024-06-10 sell 3g @ 200   -> P/L 300
    """
    ledger = Ledger()
    ledger, _ = engine.record_buy(ledger, date(2024, 1, 10), Decimal("100"), Decimal("10"), now=_at(0))
    ledger, _ = engine.record_sell(ledger, date(2024, 5, 15), Decimal("150"), Decimal("2"), now=_at(1))
    ledger, _ = engine.record_buy(ledger, date(2024, 5, 16), Decimal("100"), Decimal("8"), now=_at(2))
    ledger, _ = engine.record_sell(ledger, date(2024, 6, 10), Decimal("200"), Decimal("3"), now=_at(3))
    return ledger.transactions


def test_all_emits_every_transaction(history):
    points = chart_series(history, TimeFilter.ALL, now=NOW)

    assert [p.date for p in points] == [
        date(2024, 1, 10),
        date(2024, 5, 15),
        date(2024, 5, 16),
        date(2024, 6, 10),
    ]
    assert [p.gold_balance for p in points] == [
        Decimal("10"),
        Decimal("8"),
        Decimal("16"),
        Decimal("13"),
    ]
    assert [p.cumulative_profit_loss for p in points] == [
        Decimal("0"),
        Decimal("100"),
        Decimal("100"),
        Decimal("400"),
    ]


def test_window_keeps_pre_window_history_in_running_totals(history):
    points = chart_series(history, TimeFilter.ONE_MONTH, now=NOW)

    assert [p.date for p in points] == [date(2024, 5, 16), date(2024, 6, 10)]
    first = points[0]
    assert first.gold_balance == Decimal("16")
    assert first.cumulative_profit_loss == Decimal("100")
    assert points[-1].cumulative_profit_loss == Decimal("400")


def test_cutoff_day_itself_is_excluded(history):
    """Comparison is by day: a transaction on the cutoff day is outside the window."""
    points = chart_series(history, TimeFilter.ONE_MONTH, now=NOW)
    assert date(2024, 5, 15) not in [p.date for p in points]


def test_short_windows(history):
    assert chart_series(history, TimeFilter.ONE_DAY, now=NOW) == []

    week = chart_series(history, TimeFilter.ONE_WEEK, now=NOW)
    assert [p.date for p in week] == [date(2024, 6, 10)]
    assert week[0].gold_balance == Decimal("13")
    assert week[0].cumulative_profit_loss == Decimal("400")

    later = NOW + timedelta(days=5)
    assert chart_series(history, TimeFilter.ONE_WEEK, now=later) == []


def test_year_window(history):
    points = chart_series(history, TimeFilter.ONE_YEAR, now=NOW)
    assert len(points) == 4


def test_points_carry_event_details(history):
    points = chart_series(history, TimeFilter.ALL, now=NOW)

    assert points[0].type == TransactionType.BUY
    assert points[0].profit_loss is None
    assert points[1].type == TransactionType.SELL
    assert points[1].price == Decimal("150")
    assert points[1].profit_loss == Decimal("100")


def test_accumulation_is_chronological_not_insertion_order(history):
    shuffled = (history[3], history[1], history[0], history[2])
    assert chart_series(shuffled, TimeFilter.ALL, now=NOW) == chart_series(
        history, TimeFilter.ALL, now=NOW
    )


def test_oversold_log_clamps_balance():
    ledger = Ledger()
    ledger, buy = engine.record_buy(ledger, date(2024, 6, 1), Decimal("100"), Decimal("1"), now=_at(0))
    ledger, sell = engine.record_sell(ledger, date(2024, 6, 2), Decimal("100"), Decimal("1"), now=_at(1))
    # Double the sell, as a corrupted restore might
    bad = (buy, sell, replace(sell, id="dup", created_at=_at(2)))
    points = chart_series(bad, TimeFilter.ALL, now=NOW)
    assert [p.gold_balance for p in points] == [Decimal("1"), Decimal("0"), Decimal("0")]


def test_empty_log():
    assert chart_series((), TimeFilter.ALL, now=NOW) == []


def test_cutoff_for():
    assert cutoff_for(TimeFilter.ALL, NOW) is None
    assert cutoff_for(TimeFilter.ONE_DAY, NOW) == datetime(2024, 6, 14, 12, 0, tzinfo=UTC)
    assert cutoff_for(TimeFilter.ONE_WEEK, NOW) == datetime(2024, 6, 8, 12, 0, tzinfo=UTC)
    assert cutoff_for(TimeFilter.ONE_MONTH, NOW) == datetime(2024, 5, 15, 12, 0, tzinfo=UTC)
    assert cutoff_for(TimeFilter.ONE_YEAR, NOW) == datetime(2023, 6, 15, 12, 0, tzinfo=UTC)


def test_cutoff_accepts_tag_strings():
    assert cutoff_for("1M", NOW) == datetime(2024, 5, 15, 12, 0, tzinfo=UTC)


def test_month_window_clamps_to_month_end():
    now = datetime(2024, 3, 31, tzinfo=UTC)
    assert cutoff_for(TimeFilter.ONE_MONTH, now) == datetime(2024, 2, 29, tzinfo=UTC)


def test_default_clock_matches_entered_dates():
    """Without an explicit now, windows are measured from the local calendar day."""
    today = date.today()
    ledger, _ = engine.record_buy(Ledger(), today - timedelta(days=1), Decimal("100"), Decimal("1"))
    ledger, _ = engine.record_buy(ledger, today, Decimal("100"), Decimal("2"))

    points = chart_series(ledger.transactions, TimeFilter.ONE_DAY)

    assert [p.date for p in points] == [today]
    assert points[0].gold_balance == Decimal("3")
