"""Ledger engine operations.

Each operation takes a ``Ledger`` and returns a new one; the input is never
mutated. All validation runs before the new state is built, so a failing
operation leaves the caller's ledger exactly as it was.
"""

import uuid
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Iterable, Optional

from goldnotebook.domain import errors
from goldnotebook.domain.cost_basis import average_cost, current_balance
from goldnotebook.domain.entities import (
    Ledger,
    Transaction,
    TransactionType,
    TransactionUpdate,
)


def generate_id() -> str:
    """Return a fresh transaction id."""
    return uuid.uuid4().hex


def validate_positive(field_name: str, value: Decimal) -> None:
    """Raise ValidationError unless value is above zero."""
    if not value > 0:
        raise errors.ValidationError(errors.non_positive_field(field_name, value))


def record_buy(
    ledger: Ledger,
    date: date,
    price: Decimal,
    quantity: Decimal,
    notes: str = "",
    now: Optional[datetime] = None,
) -> tuple[Ledger, Transaction]:
    """Append a buy. Buys are always legal once price and quantity are positive.

    Returns:
        Tuple of (new ledger, created transaction)

    Raises:
        ValidationError: If price or quantity is not positive
    """
    validate_positive("price", price)
    validate_positive("quantity", quantity)

    txn = Transaction(
        id=generate_id(),
        date=date,
        type=TransactionType.BUY,
        price=price,
        quantity=quantity,
        notes=notes,
        created_at=now or datetime.now(UTC),
    )
    return Ledger(ledger.transactions + (txn,)), txn


def record_sell(
    ledger: Ledger,
    date: date,
    price: Decimal,
    quantity: Decimal,
    notes: str = "",
    now: Optional[datetime] = None,
) -> tuple[Ledger, Transaction]:
    """Append a sell, freezing its average cost and realized profit/loss.

    Balance and average cost are taken over the full log as it stands before
    this sell, regardless of the sell's own date.

    Returns:
        Tuple of (new ledger, created transaction)

    Raises:
        ValidationError: If price or quantity is not positive
        InsufficientBalanceError: If quantity exceeds the current balance
    """
    validate_positive("price", price)
    validate_positive("quantity", quantity)

    balance = current_balance(ledger.transactions)
    if quantity > balance:
        raise errors.InsufficientBalanceError(quantity, balance)

    avg_cost = average_cost(ledger.transactions)
    txn = Transaction(
        id=generate_id(),
        date=date,
        type=TransactionType.SELL,
        price=price,
        quantity=quantity,
        notes=notes,
        created_at=now or datetime.now(UTC),
        average_cost_at_sale=avg_cost,
        profit_loss=(price - avg_cost) * quantity,
    )
    return Ledger(ledger.transactions + (txn,)), txn


def update_transaction(
    ledger: Ledger, transaction_id: str, changes: TransactionUpdate
) -> Ledger:
    """Overwrite the supplied fields of one transaction.

    The frozen sell fields are left as they are even when price, quantity or
    type change.

    Raises:
        NotFoundError: If no transaction has the given id
        ValidationError: If a supplied price or quantity is not positive
    """
    if ledger.find(transaction_id) is None:
        raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
    if changes.price is not None:
        validate_positive("price", changes.price)
    if changes.quantity is not None:
        validate_positive("quantity", changes.quantity)

    overrides = {
        name: value
        for name, value in (
            ("date", changes.date),
            ("type", changes.type),
            ("price", changes.price),
            ("quantity", changes.quantity),
            ("notes", changes.notes),
        )
        if value is not None
    }

    return Ledger(
        tuple(
            replace(txn, **overrides) if txn.id == transaction_id else txn
            for txn in ledger.transactions
        )
    )


def delete_transaction(ledger: Ledger, transaction_id: str) -> Ledger:
    """Remove one transaction without touching any other sell's frozen fields.

    Raises:
        NotFoundError: If no transaction has the given id
    """
    if ledger.find(transaction_id) is None:
        raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
    return Ledger(
        tuple(txn for txn in ledger.transactions if txn.id != transaction_id)
    )


def replace_transactions(
    ledger: Ledger, transactions: Iterable[Transaction]
) -> Ledger:
    """Wholesale replacement of the log, used when restoring a backup."""
    return Ledger(tuple(transactions))
