"""Shared pytest fixtures for goldnotebook tests."""

import os
import tempfile

import pytest

from goldnotebook.database.factories import create_sqlite_database
from goldnotebook.domain.backup import BackupService
from goldnotebook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def backup_service(transaction_service):
    """Create a BackupService over the temporary ledger."""
    return BackupService(transaction_service)


@pytest.fixture
def reopen(temp_db):
    """Return a function that builds a fresh TransactionService on the same file."""
    opened = []

    def _reopen() -> TransactionService:
        db = create_sqlite_database(database_path=temp_db.database_path)
        opened.append(db)
        return TransactionService(db)

    yield _reopen

    for db in opened:
        db.disconnect()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
