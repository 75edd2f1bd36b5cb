"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid input, such as a non-positive price or quantity."""


class InsufficientBalanceError(DomainError):
    """A sell asks for more gold than the ledger currently holds."""

    def __init__(self, requested: Decimal, balance: Decimal):
        super().__init__(insufficient_balance(requested, balance))
        self.requested = requested
        self.balance = balance


class NotFoundError(DomainError):
    """Requested transaction does not exist."""


class ImportFormatError(DomainError):
    """A backup document could not be restored."""


def non_positive_field(field_name: str, value: Decimal) -> str:
    """Return message for a price or quantity that is not above zero."""
    return f"{field_name.capitalize()} must be greater than zero (got {value})"


def insufficient_balance(requested: Decimal, balance: Decimal) -> str:
    """Return message for a sell larger than the current balance."""
    return (
        f"Cannot sell {requested:.4f}g: more than current balance "
        f"({balance:.4f}g)"
    )


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def ambiguous_transaction_id(prefix: str, count: int) -> str:
    """Return message for an id prefix matching several transactions."""
    return f"Transaction id '{prefix}' is ambiguous ({count} matches)"
