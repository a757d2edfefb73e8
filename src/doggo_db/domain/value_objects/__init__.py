"""Value objects for the document store domain.

Exports:
    Identifiers:
        - EntryId: Type-safe row identifier
        - ENTRY_ID_FIELD, RESERVED_FIELDS: Reserved row field names
        - Row: Schema-less row alias
        - strip_reserved, invalid_field, utc_now: Helpers

    Filters:
        - FieldOperator: $not, $in, $any, $notIn, $includes, $notIncludes
        - Equals, Pattern, Or, FieldOp: Parsed filter clauses
        - Clause: Union of the clause variants

    Transaction Types:
        - TransactionState: IDLE / TRANSACTING
        - TransactionOutcome: COMMIT / ABORT
"""

from doggo_db.domain.value_objects.filters import (
    OPERATOR_PREFIX,
    OR_OPERATOR,
    Clause,
    Equals,
    FieldOp,
    FieldOperator,
    Or,
    Pattern,
)
from doggo_db.domain.value_objects.identifiers import (
    ENTRY_ID_FIELD,
    INVALID_ENTRY_ID,
    RESERVED_FIELDS,
    EntryId,
    Row,
    invalid_field,
    strip_reserved,
    utc_now,
)
from doggo_db.domain.value_objects.transaction_types import (
    TransactionOutcome,
    TransactionState,
)

__all__ = [
    # Identifiers
    "EntryId",
    "INVALID_ENTRY_ID",
    "ENTRY_ID_FIELD",
    "RESERVED_FIELDS",
    "Row",
    "strip_reserved",
    "invalid_field",
    "utc_now",
    # Filters
    "OPERATOR_PREFIX",
    "OR_OPERATOR",
    "FieldOperator",
    "Equals",
    "Pattern",
    "Or",
    "FieldOp",
    "Clause",
    # Transaction types
    "TransactionState",
    "TransactionOutcome",
]
