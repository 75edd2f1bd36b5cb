"""Display formatting for ledger figures."""

from decimal import Decimal
from typing import Optional


def format_myr(value: Decimal) -> str:
    """Format a currency amount, e.g. RM1,234.50 or -RM12.00."""
    sign = "-" if value < 0 else ""
    return f"{sign}RM{abs(value):,.2f}"


def format_signed_myr(value: Optional[Decimal]) -> str:
    """Format a profit/loss with an explicit plus sign; a dash when absent."""
    if value is None:
        return "-"
    prefix = "+" if value >= 0 else ""
    return f"{prefix}{format_myr(value)}"


def format_grams(value: Decimal) -> str:
    return f"{value:,.4f}g"
