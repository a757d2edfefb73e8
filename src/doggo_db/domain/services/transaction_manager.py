"""Snapshot transaction manager.

Transactions in the document store are a save-suppression window:

    - begin():  IDLE -> TRANSACTING. No data effect.
    - commit(): TRANSACTING -> IDLE. The caller then performs a normal save,
      making everything accumulated in memory durable.
    - abort():  TRANSACTING -> IDLE. The caller then reloads the last
      durable snapshot from the storage backend, discarding every in-memory
      mutation since the last save (including ones made before begin()).

There is no isolation. Reads and writes inside a transaction see and
mutate live state; the only guarantee is that nothing reaches the backend
until commit, and that abort restores the last persisted snapshot.
"""

from __future__ import annotations

import time

from doggo_db.domain.errors import NoActiveTransaction, TransactionInProgress
from doggo_db.domain.value_objects import TransactionOutcome, TransactionState
from doggo_db.ports.inbound.transaction_manager import TransactionStats


class SnapshotTransactionManager:
    """Two-state transaction manager for a single database engine.

    Usage:
        txn_mgr = SnapshotTransactionManager()
        txn_mgr.begin()
        ...                      # mutate, saves are deferred
        txn_mgr.commit()         # caller saves afterwards
    """

    def __init__(self) -> None:
        self._state = TransactionState.IDLE
        self._started_at: float | None = None

        # Statistics
        self._committed_total = 0
        self._aborted_total = 0
        self._total_duration_ms = 0.0

    @property
    def state(self) -> TransactionState:
        return self._state

    def is_active(self) -> bool:
        """Return True while a transaction is open."""
        return self._state.is_active()

    def begin(self) -> None:
        """Open a transaction.

        Raises:
            TransactionInProgress: If a transaction is already open.
        """
        if not self._state.can_start():
            raise TransactionInProgress()
        self._state = TransactionState.TRANSACTING
        self._started_at = time.monotonic()

    def commit(self) -> None:
        """Close the transaction so the next save is durable.

        Raises:
            NoActiveTransaction: If no transaction is open.
        """
        self._finish(TransactionOutcome.COMMIT)

    def abort(self) -> None:
        """Close the transaction; the caller must reload the last snapshot.

        Raises:
            NoActiveTransaction: If no transaction is open.
        """
        self._finish(TransactionOutcome.ABORT)

    def get_stats(self) -> TransactionStats:
        """Get transaction statistics."""
        finished = self._committed_total + self._aborted_total
        avg_duration = self._total_duration_ms / finished if finished > 0 else 0.0
        return TransactionStats(
            active=self.is_active(),
            committed_total=self._committed_total,
            aborted_total=self._aborted_total,
            avg_duration_ms=avg_duration,
        )

    def _finish(self, outcome: TransactionOutcome) -> None:
        if not self._state.can_finish():
            raise NoActiveTransaction()

        if self._started_at is not None:
            self._total_duration_ms += (time.monotonic() - self._started_at) * 1000
        self._started_at = None
        self._state = TransactionState.IDLE

        if outcome == TransactionOutcome.COMMIT:
            self._committed_total += 1
        else:
            self._aborted_total += 1
