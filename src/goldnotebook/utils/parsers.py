"""Parsing helpers for user-entered dates and amounts."""

import re
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation

from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts "today", "yesterday" and anything dateutil can parse
    ("2024-01-15", "15 Jan 2024", ...).

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    if date_str == "today":
        return today
    if date_str == "yesterday":
        return today - timedelta(days=1)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a price or quantity string into a Decimal.

    Handles "1234.56", "RM1,234.56", "RM 300" and gram quantities like "12.5g".

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()
    cleaned = re.sub(r"^rm", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"g$", "", cleaned, flags=re.IGNORECASE)
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount
