"""Transaction Manager port.

This inbound port defines the contract the database engine uses to track
its transaction window. Implementations only manage state; saving on
commit and reloading on abort are the engine's job.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol

from doggo_db.domain.value_objects import TransactionState


@dataclass
class TransactionStats:
    """Statistics for transaction monitoring."""

    active: bool
    committed_total: int
    aborted_total: int
    avg_duration_ms: float


class TransactionManager(Protocol):
    """Protocol for transaction state management."""

    @property
    @abstractmethod
    def state(self) -> TransactionState:
        """Return the current state."""
        ...

    @abstractmethod
    def is_active(self) -> bool:
        """Return True while a transaction is open."""
        ...

    @abstractmethod
    def begin(self) -> None:
        """Move IDLE -> TRANSACTING.

        Raises:
            TransactionInProgress: If already transacting.
        """
        ...

    @abstractmethod
    def commit(self) -> None:
        """Move TRANSACTING -> IDLE for a commit.

        Raises:
            NoActiveTransaction: If idle.
        """
        ...

    @abstractmethod
    def abort(self) -> None:
        """Move TRANSACTING -> IDLE for an abort.

        Raises:
            NoActiveTransaction: If idle.
        """
        ...

    @abstractmethod
    def get_stats(self) -> TransactionStats:
        """Return transaction statistics."""
        ...
