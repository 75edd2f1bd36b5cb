"""Backup, restore and CSV export domain service."""

import json
import logging
from datetime import datetime, UTC
from typing import Any, Optional

from goldnotebook.database.mappers import (
    summary_to_record,
    transaction_from_record,
    transaction_to_record,
)
from goldnotebook.domain.errors import ImportFormatError
from goldnotebook.domain.transaction import TransactionService

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Date",
    "Type",
    "Price (RM/g)",
    "Quantity (g)",
    "Total Value (RM)",
    "Profit/Loss (RM)",
    "Notes",
]


def default_backup_filename(today: Optional[datetime] = None) -> str:
    """Return the default backup file name for a given day."""
    today = today or datetime.now(UTC)
    return f"gold-backup-{today.date().isoformat()}.json"


def default_csv_filename(today: Optional[datetime] = None) -> str:
    """Return the default CSV export file name for a given day."""
    today = today or datetime.now(UTC)
    return f"gold-transactions-{today.date().isoformat()}.csv"


class BackupService:
    """Service for backing up, restoring and exporting the transaction log."""

    def __init__(self, transaction_service: TransactionService):
        """Initialize backup service.

        Args:
            transaction_service: TransactionService owning the ledger
        """
        self.transaction_service = transaction_service

    def build_backup(self, now: Optional[datetime] = None) -> dict[str, Any]:
        """Build the backup document: export time, transactions and summary."""
        now = now or datetime.now(UTC)
        ledger = self.transaction_service.ledger
        return {
            "exportedAt": now.isoformat(),
            "transactions": [transaction_to_record(t) for t in ledger.transactions],
            "summary": summary_to_record(self.transaction_service.get_summary()),
        }

    def export_backup(self, now: Optional[datetime] = None) -> str:
        """Serialize the backup document as JSON text."""
        return json.dumps(self.build_backup(now), indent=2)

    def restore_backup(self, document_text: str) -> int:
        """Replace the whole log with the transactions of a backup document.

        Every record is decoded before the log is touched, so a bad document
        leaves the current ledger unchanged.

        Returns:
            Number of transactions restored

        Raises:
            ImportFormatError: If the document is not JSON, has no
                ``transactions`` list, or contains an unreadable record
        """
        try:
            document = json.loads(document_text)
        except ValueError as e:
            raise ImportFormatError(f"Invalid backup file: not valid JSON ({e})")

        if not isinstance(document, dict) or "transactions" not in document:
            raise ImportFormatError("Invalid backup file: missing 'transactions' field")

        records = document["transactions"]
        if not isinstance(records, list):
            raise ImportFormatError(
                "Invalid backup file: 'transactions' must be a list"
            )

        transactions = []
        seen_ids = set()
        for index, record in enumerate(records):
            try:
                txn = transaction_from_record(record)
            except ValueError as e:
                raise ImportFormatError(
                    f"Invalid backup file: transaction {index + 1}: {e}"
                )
            if txn.id in seen_ids:
                raise ImportFormatError(
                    f"Invalid backup file: transaction {index + 1}: duplicate id '{txn.id}'"
                )
            seen_ids.add(txn.id)
            transactions.append(txn)

        self.transaction_service.replace_all(transactions)
        logger.info("Restored %d transactions from backup", len(transactions))
        return len(transactions)

    def export_csv(self) -> str:
        """Render the log as CSV text, newest first.

        Notes are always quoted; the file is meant for spreadsheets and is not
        read back in.
        """
        lines = [",".join(CSV_HEADERS)]

        for txn in self.transaction_service.list_transactions():
            profit_loss = ""
            if txn.is_sell and txn.profit_loss is not None:
                profit_loss = f"{txn.profit_loss:.2f}"
            lines.append(
                ",".join(
                    [
                        txn.date.isoformat(),
                        txn.type.value.upper(),
                        f"{txn.price:.2f}",
                        f"{txn.quantity:.4f}",
                        f"{txn.total_value:.2f}",
                        profit_loss,
                        quote_field(txn.notes),
                    ]
                )
            )

        return "\n".join(lines) + "\n"


def quote_field(value: str) -> str:
    """Wrap a CSV field in quotes, doubling any embedded quotes."""
    return '"' + value.replace('"', '""') + '"'
