"""Tests for date and amount parsing."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from goldnotebook.utils.parsers import parse_amount, parse_date


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_written_date():
    assert parse_date("15 Jan 2024") == date(2024, 1, 15)


def test_parse_today():
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    assert parse_date(" Yesterday ") == date.today() - timedelta(days=1)


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not a date")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("350", Decimal("350")),
        ("350.50", Decimal("350.50")),
        ("RM350.50", Decimal("350.50")),
        ("rm 1,234.56", Decimal("1234.56")),
        ("2.5g", Decimal("2.5")),
        (" 10 G ", Decimal("10")),
        ("-1", Decimal("-1")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "RM", "NaN", "Infinity"])
def test_parse_invalid_amount(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)
