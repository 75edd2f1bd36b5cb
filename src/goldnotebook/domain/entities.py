"""Domain model entities for goldnotebook.

These are pure data classes representing the ledger, independent of how the
log is stored. Engine operations never mutate them; updates produce new
instances.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a gold transaction."""

    BUY = "buy"
    SELL = "sell"


class TimeFilter(str, Enum):
    """Chart window tags."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    ONE_YEAR = "1Y"
    ALL = "ALL"


@dataclass(frozen=True)
class Transaction:
    """Gold transaction domain entity.

    ``average_cost_at_sale`` and ``profit_loss`` are only set on sells and are
    frozen at the moment the sell is recorded.
    """

    id: str
    date: date
    type: TransactionType
    price: Decimal
    quantity: Decimal
    notes: str
    created_at: datetime
    average_cost_at_sale: Optional[Decimal] = None
    profit_loss: Optional[Decimal] = None

    @property
    def is_buy(self) -> bool:
        return self.type == TransactionType.BUY

    @property
    def is_sell(self) -> bool:
        return self.type == TransactionType.SELL

    @property
    def total_value(self) -> Decimal:
        """Price times quantity."""
        return self.price * self.quantity


@dataclass(frozen=True)
class TransactionUpdate:
    """Per-field overrides for an existing transaction.

    A field left as None is not touched. ``id`` and ``created_at`` are not
    editable, and neither are the frozen sell fields.
    """

    date: Optional[date] = None
    type: Optional[TransactionType] = None
    price: Optional[Decimal] = None
    quantity: Optional[Decimal] = None
    notes: Optional[str] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.date, self.type, self.price, self.quantity, self.notes)
        )


@dataclass(frozen=True)
class Ledger:
    """Owned state container for the transaction log.

    Transactions are kept in insertion order; chronological and newest-first
    orderings are derived views.
    """

    transactions: tuple[Transaction, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.transactions)

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """Return the transaction with the given id, or None."""
        for txn in self.transactions:
            if txn.id == transaction_id:
                return txn
        return None


@dataclass(frozen=True)
class LedgerSummary:
    """Derived figures over the whole log."""

    current_balance: Decimal
    average_buy_price: Decimal
    total_invested: Decimal
    total_realized_profit_loss: Decimal
    total_buy_transactions: int
    total_sell_transactions: int
    total_sold: Decimal = Decimal("0")
    win_count: int = 0
    loss_count: int = 0

    @property
    def win_rate(self) -> Decimal:
        """Percentage of profitable sells among sells with a non-zero result."""
        decided = self.win_count + self.loss_count
        if decided == 0:
            return Decimal("0")
        return Decimal(self.win_count) * 100 / Decimal(decided)


@dataclass(frozen=True)
class ChartPoint:
    """One point of the performance series, carrying running totals."""

    date: date
    gold_balance: Decimal
    cumulative_profit_loss: Decimal
    type: TransactionType
    price: Decimal
    profit_loss: Optional[Decimal] = None
