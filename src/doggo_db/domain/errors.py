"""Error taxonomy for the document store.

Every failure is raised synchronously to the caller; the engine never
retries. Each error carries a default message that callers may override.
"""

from __future__ import annotations


class DoggoDBError(Exception):
    """Base class for all document store errors."""

    default_message = "Document store error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NoDatabaseName(DoggoDBError):
    """Raised when a database is opened without a name."""

    default_message = "No Database Name provided."


class NoTableName(DoggoDBError):
    """Raised when a table operation is issued without a name."""

    default_message = "No Table Name provided."


class DatabaseAlreadyExists(DoggoDBError):
    """Raised when explicit creation targets a stored database."""

    default_message = "A Database with that name already exists."


class TableAlreadyExists(DoggoDBError):
    """Raised when create() targets an existing table."""

    default_message = "A Table with that name already exists."


class NoActiveTable(DoggoDBError):
    """Raised when a row operation runs without a selected table."""

    default_message = "No ref to table created."


class NoDataProvided(DoggoDBError):
    """Raised when an insert or update payload is missing or empty."""

    default_message = "No Data provided."


class NotAValidObject(DoggoDBError):
    """Raised when an insert payload is not a mapping."""

    default_message = "Data provided is not a valid object."


class InvalidIterableOperand(DoggoDBError):
    """Raised when $in / $notIn is given a non-array comparison value."""

    default_message = "Operand of $in / $notIn must be an array."


class UnsupportedOperation(DoggoDBError):
    """Raised for unknown or malformed filter operators."""

    default_message = "Unsupported filter operation."


class PersistenceError(DoggoDBError):
    """Raised when the storage backend rejects a write or holds a corrupt blob."""

    default_message = "Database could not be persisted."


class TransactionInProgress(DoggoDBError):
    """Raised when a transaction is started while another is open."""

    default_message = "A transaction is already in progress."


class NoActiveTransaction(DoggoDBError):
    """Raised when commit or abort is issued outside a transaction."""

    default_message = "No transaction in progress."
