"""Generic SQLAlchemy database implementation."""

import json
import logging
from typing import Optional
from sqlalchemy.orm import Session

from goldnotebook.database.base import Database, STORAGE_KEY
from goldnotebook.database.models import StoredBlob, create_session_factory
from goldnotebook.database.mappers import (
    transaction_from_record,
    transaction_to_record,
)
from goldnotebook.domain.entities import Ledger

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str, storage_key: str = STORAGE_KEY):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
            storage_key: Key the transaction log is stored under
        """
        self.database_url = database_url
        self.storage_key = storage_key
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def load_blob(self, key: str) -> Optional[str]:
        """Return the payload stored under key, or None if absent."""
        session = self._get_session()
        blob = session.get(StoredBlob, key)
        if blob is None:
            return None
        return blob.payload

    def save_blob(self, key: str, payload: str) -> None:
        """Store payload under key, replacing any previous value."""
        session = self._get_session()
        blob = session.get(StoredBlob, key)
        if blob is None:
            session.add(StoredBlob(key=key, payload=payload))
        else:
            blob.payload = payload
        session.commit()

    def load_ledger(self) -> Ledger:
        """Load the transaction log, degrading to an empty ledger on bad data."""
        payload = self.load_blob(self.storage_key)
        if payload is None:
            return Ledger()

        try:
            records = json.loads(payload)
            if not isinstance(records, list):
                raise ValueError(f"expected a list, got {type(records).__name__}")
            transactions = tuple(transaction_from_record(r) for r in records)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning(
                "Stored transactions under '%s' could not be read (%s); "
                "starting with an empty ledger",
                self.storage_key,
                e,
            )
            return Ledger()

        logger.debug("Loaded %d transactions", len(transactions))
        return Ledger(transactions)

    def save_ledger(self, ledger: Ledger) -> None:
        """Persist the full transaction log as one JSON blob."""
        payload = json.dumps([transaction_to_record(t) for t in ledger.transactions])
        self.save_blob(self.storage_key, payload)
        logger.debug("Saved %d transactions", len(ledger))
