"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

from goldnotebook.domain.entities import Ledger

STORAGE_KEY = "gold-transactions"


class Database(ABC):
    """Abstract store for the transaction log.

    The log is kept as one serialized blob under a fixed key. The store knows
    nothing about cost basis; it only loads and saves ``Ledger`` instances.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def load_blob(self, key: str) -> Optional[str]:
        """Return the payload stored under key, or None if absent."""
        pass

    @abstractmethod
    def save_blob(self, key: str, payload: str) -> None:
        """Store payload under key, replacing any previous value."""
        pass

    @abstractmethod
    def load_ledger(self) -> Ledger:
        """Load the transaction log.

        Never raises for missing or unreadable data; returns an empty ledger
        instead.
        """
        pass

    @abstractmethod
    def save_ledger(self, ledger: Ledger) -> None:
        """Persist the full transaction log."""
        pass
