"""Transaction-related types.

A transaction here is a save-suppression window, not an isolation unit.
"""

from __future__ import annotations

from enum import Enum, auto


class TransactionState(Enum):
    """Transaction lifecycle states.

    State machine:

        IDLE ──start()──> TRANSACTING
          ^                    │
          │                    │
          └──commit()/abort()──┘

    commit() returns to IDLE and then saves; abort() returns to IDLE and
    then reloads the last durable snapshot.
    """

    IDLE = auto()
    """No transaction open. Every mutation is saved immediately."""

    TRANSACTING = auto()
    """Transaction open. save() is a no-op until commit."""

    def is_active(self) -> bool:
        """Check if a transaction is open."""
        return self == TransactionState.TRANSACTING

    def can_start(self) -> bool:
        return self == TransactionState.IDLE

    def can_finish(self) -> bool:
        """Check if commit or abort is allowed."""
        return self == TransactionState.TRANSACTING


class TransactionOutcome(Enum):
    """How a transaction ended. Used for metrics and logging."""

    COMMIT = "commit"
    ABORT = "abort"
