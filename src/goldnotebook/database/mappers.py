"""Mapper functions between domain entities and stored records.

Stored records are plain dicts with camelCase keys, the same shape used in
backup documents. Decimal values are written as strings so prices and grams
survive a round trip exactly; numbers are accepted on the way back in.
"""

from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from goldnotebook.domain import entities as domain


def _decimal_to_record(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _decimal_from_record(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Field '{field_name}' must be a number, got {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Field '{field_name}' must be a number, got {value!r}")
    if not result.is_finite():
        raise ValueError(f"Field '{field_name}' must be a finite number, got {value!r}")
    return result


def _optional_decimal_from_record(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None:
        return None
    return _decimal_from_record(value, field_name)


def _created_at_from_record(value: Any) -> datetime:
    created_at = datetime.fromisoformat(str(value))
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return created_at


def transaction_to_record(txn: domain.Transaction) -> dict[str, Any]:
    """Convert a domain Transaction to a serializable record."""
    record: dict[str, Any] = {
        "id": txn.id,
        "date": txn.date.isoformat(),
        "type": txn.type.value,
        "price": _decimal_to_record(txn.price),
        "quantity": _decimal_to_record(txn.quantity),
        "notes": txn.notes,
        "createdAt": txn.created_at.isoformat(),
    }
    if txn.is_sell:
        record["averageCostAtSale"] = _decimal_to_record(txn.average_cost_at_sale)
        record["profitLoss"] = _decimal_to_record(txn.profit_loss)
    return record


def transaction_from_record(record: Any) -> domain.Transaction:
    """Convert a stored record back to a domain Transaction.

    Raises:
        ValueError: If the record is not a mapping or a field is missing or malformed
    """
    if not isinstance(record, dict):
        raise ValueError(f"Transaction record must be an object, got {type(record).__name__}")

    try:
        return domain.Transaction(
            id=str(record["id"]),
            date=date.fromisoformat(str(record["date"])[:10]),
            type=domain.TransactionType(record["type"]),
            price=_decimal_from_record(record["price"], "price"),
            quantity=_decimal_from_record(record["quantity"], "quantity"),
            notes=str(record.get("notes") or ""),
            created_at=_created_at_from_record(record["createdAt"]),
            average_cost_at_sale=_optional_decimal_from_record(
                record.get("averageCostAtSale"), "averageCostAtSale"
            ),
            profit_loss=_optional_decimal_from_record(
                record.get("profitLoss"), "profitLoss"
            ),
        )
    except KeyError as e:
        raise ValueError(f"Transaction record is missing field {e}")


def summary_to_record(summary: domain.LedgerSummary) -> dict[str, Any]:
    """Convert a LedgerSummary to a serializable record."""
    return {
        "currentBalance": str(summary.current_balance),
        "averageBuyPrice": str(summary.average_buy_price),
        "totalInvested": str(summary.total_invested),
        "totalRealizedProfitLoss": str(summary.total_realized_profit_loss),
        "totalBuyTransactions": summary.total_buy_transactions,
        "totalSellTransactions": summary.total_sell_transactions,
        "totalSold": str(summary.total_sold),
        "winCount": summary.win_count,
        "lossCount": summary.loss_count,
    }
