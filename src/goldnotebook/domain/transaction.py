"""Transaction domain service."""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from goldnotebook.database.base import Database
from goldnotebook.domain import chart, cost_basis, errors, ledger as engine
from goldnotebook.domain.entities import (
    ChartPoint,
    Ledger,
    LedgerSummary,
    TimeFilter,
    Transaction,
    TransactionUpdate,
)


class TransactionService:
    """Service for recording and querying gold transactions.

    Holds the current ``Ledger``, applies engine operations to it and writes
    every new state back to the store through ``_commit``.
    """

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self._ledger: Optional[Ledger] = None

    @property
    def ledger(self) -> Ledger:
        """Current ledger, loaded from the store on first use."""
        if self._ledger is None:
            self._ledger = self.db.load_ledger()
        return self._ledger

    def _commit(self, new_ledger: Ledger) -> None:
        """Adopt a new ledger state and write it to the store."""
        self._ledger = new_ledger
        self.db.save_ledger(new_ledger)

    def record_buy(
        self,
        date: date,
        price: Decimal,
        quantity: Decimal,
        notes: str = "",
        now: Optional[datetime] = None,
    ) -> Transaction:
        """Record a gold purchase.

        Raises:
            ValidationError: If price or quantity is not positive
        """
        new_ledger, txn = engine.record_buy(
            self.ledger, date=date, price=price, quantity=quantity, notes=notes, now=now
        )
        self._commit(new_ledger)
        return txn

    def record_sell(
        self,
        date: date,
        price: Decimal,
        quantity: Decimal,
        notes: str = "",
        now: Optional[datetime] = None,
    ) -> Transaction:
        """Record a gold sale, freezing its realized profit/loss.

        Raises:
            ValidationError: If price or quantity is not positive
            InsufficientBalanceError: If quantity exceeds the current balance
        """
        new_ledger, txn = engine.record_sell(
            self.ledger, date=date, price=price, quantity=quantity, notes=notes, now=now
        )
        self._commit(new_ledger)
        return txn

    def update_transaction(self, transaction_id: str, changes: TransactionUpdate) -> Transaction:
        """Overwrite the supplied fields of a transaction.

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If a supplied price or quantity is not positive
        """
        new_ledger = engine.update_transaction(self.ledger, transaction_id, changes)
        self._commit(new_ledger)
        return new_ledger.find(transaction_id)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self._commit(engine.delete_transaction(self.ledger, transaction_id))

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        """Replace the whole log."""
        self._commit(engine.replace_transactions(self.ledger, transactions))

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, or None if not found."""
        return self.ledger.find(transaction_id)

    def resolve_transaction_id(self, id_or_prefix: str) -> str:
        """Resolve a full id or a unique id prefix to a transaction id.

        Raises:
            NotFoundError: If nothing matches or the prefix is ambiguous
        """
        id_or_prefix = id_or_prefix.strip()
        if not id_or_prefix:
            raise errors.NotFoundError(errors.transaction_not_found("''"))
        if self.ledger.find(id_or_prefix) is not None:
            return id_or_prefix

        matches = [
            txn.id for txn in self.ledger.transactions if txn.id.startswith(id_or_prefix)
        ]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise errors.NotFoundError(
                errors.ambiguous_transaction_id(id_or_prefix, len(matches))
            )
        raise errors.NotFoundError(errors.transaction_not_found(id_or_prefix))

    def list_transactions(self) -> list[Transaction]:
        """List transactions newest first."""
        return cost_basis.newest_first(self.ledger.transactions)

    def current_balance(self) -> Decimal:
        """Grams currently held."""
        return cost_basis.current_balance(self.ledger.transactions)

    def average_cost(self) -> Decimal:
        """Average cost per gram a new sell would be priced against."""
        return cost_basis.average_cost(self.ledger.transactions)

    def get_summary(self) -> LedgerSummary:
        """Derive the summary over the full log."""
        return cost_basis.derive_summary(self.ledger.transactions)

    def get_chart_series(
        self, time_filter: TimeFilter = TimeFilter.ONE_MONTH, now: Optional[datetime] = None
    ) -> list[ChartPoint]:
        """Chart series for the requested window."""
        return chart.chart_series(self.ledger.transactions, time_filter, now=now)
