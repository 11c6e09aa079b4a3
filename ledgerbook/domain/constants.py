"""Domain constants for the ledger."""

EXPENSE_CATEGORIES = (
    "need",
    "wants",
    "pride",
    "unexpected",
)

PARTY = "party"
EXPENSE_HEAD = "expense_head"
PARTY_TRANSACTION = "party_transaction"
EXPENSE_TRANSACTION = "expense_transaction"

ENTITY_KINDS = (PARTY, EXPENSE_HEAD)
TRANSACTION_KINDS = (PARTY_TRANSACTION, EXPENSE_TRANSACTION)
ALL_KINDS = ENTITY_KINDS + TRANSACTION_KINDS

# Transaction kind referencing each deletable entity kind, and the foreign key
# field carrying the reference.
REFERENCING_TRANSACTIONS = {
    PARTY: (PARTY_TRANSACTION, "party_id"),
    EXPENSE_HEAD: (EXPENSE_TRANSACTION, "expense_head_id"),
}

REPORT_PARTY = "party"
REPORT_EXPENSE = "expense"
REPORT_COMBINED = "combined"
REPORT_KINDS = (REPORT_PARTY, REPORT_EXPENSE, REPORT_COMBINED)

ALL_FILTER = "all"
UNKNOWN_LABEL = "Unknown"

# Amounts are stored as integer ten-thousandths in a signed 64-bit column.
AMOUNT_SCALE = 4
AMOUNT_MAX_INTEGER_DIGITS = 14


__all__ = [
    "EXPENSE_CATEGORIES",
    "PARTY",
    "EXPENSE_HEAD",
    "PARTY_TRANSACTION",
    "EXPENSE_TRANSACTION",
    "ENTITY_KINDS",
    "TRANSACTION_KINDS",
    "ALL_KINDS",
    "REFERENCING_TRANSACTIONS",
    "REPORT_PARTY",
    "REPORT_EXPENSE",
    "REPORT_COMBINED",
    "REPORT_KINDS",
    "ALL_FILTER",
    "UNKNOWN_LABEL",
    "AMOUNT_SCALE",
    "AMOUNT_MAX_INTEGER_DIGITS",
]
