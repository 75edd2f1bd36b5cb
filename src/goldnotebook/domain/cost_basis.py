"""Weighted-average cost basis derivation.

Everything here is a pure function of the transaction collection. The
collection carries no ordering of its own; the one chronological order for
cost-basis purposes is ascending by date, tie-broken by creation time.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from goldnotebook.domain.entities import LedgerSummary, Transaction

ZERO = Decimal("0")


def chronological(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return transactions sorted by date, then by creation time (oldest first)."""
    return sorted(transactions, key=lambda txn: (txn.date, txn.created_at))


def newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return transactions in display order (newest date first)."""
    return sorted(
        transactions, key=lambda txn: (txn.date, txn.created_at), reverse=True
    )


def walk_holdings(transactions: Iterable[Transaction]) -> tuple[Decimal, Decimal]:
    """Walk the log chronologically and return (balance, total_cost).

    ``total_cost`` is the cost basis of the units still held. A sell removes
    cost at the running average; both figures are clamped at zero so a log
    that oversells (e.g. from a corrupted backup) still derives.
    """
    balance = ZERO
    total_cost = ZERO

    for txn in chronological(transactions):
        if txn.is_buy:
            total_cost += txn.price * txn.quantity
            balance += txn.quantity
        elif balance > 0:
            avg_cost = total_cost / balance
            total_cost = max(ZERO, total_cost - avg_cost * txn.quantity)
            balance = max(ZERO, balance - txn.quantity)

    return balance, total_cost


def average_cost(transactions: Iterable[Transaction]) -> Decimal:
    """Weighted-average cost per unit of the holdings at the end of the log.

    Used to price a new sell before it is appended.
    """
    balance, total_cost = walk_holdings(transactions)
    if balance > 0:
        return total_cost / balance
    return ZERO


def current_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Units held at the end of the log."""
    balance, _ = walk_holdings(transactions)
    return balance


def derive_summary(transactions: Sequence[Transaction]) -> LedgerSummary:
    """Derive the ledger summary from the full collection.

    Realized profit/loss is the sum of each sell's frozen ``profit_loss``,
    not a recomputation, so it stays consistent with what was recorded at
    sale time. ``total_invested`` is the lifetime sum of buy amounts, not the
    cost basis of current holdings.
    """
    balance, total_cost = walk_holdings(transactions)

    total_invested = ZERO
    total_sold = ZERO
    realized = ZERO
    buy_count = 0
    sell_count = 0
    win_count = 0
    loss_count = 0

    for txn in transactions:
        if txn.is_buy:
            buy_count += 1
            total_invested += txn.total_value
            continue

        sell_count += 1
        total_sold += txn.total_value
        profit_loss = txn.profit_loss if txn.profit_loss is not None else ZERO
        realized += profit_loss
        if profit_loss > 0:
            win_count += 1
        elif profit_loss < 0:
            loss_count += 1

    return LedgerSummary(
        current_balance=balance,
        average_buy_price=total_cost / balance if balance > 0 else ZERO,
        total_invested=total_invested,
        total_realized_profit_loss=realized,
        total_buy_transactions=buy_count,
        total_sell_transactions=sell_count,
        total_sold=total_sold,
        win_count=win_count,
        loss_count=loss_count,
    )
