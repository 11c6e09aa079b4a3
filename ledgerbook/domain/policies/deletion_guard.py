"""Deletion guard for parties and expense heads.

A party or expense head stays in the ledger while any transaction still
references it. The check is advisory: the store performs the delete and may
still refuse it if a referencing transaction appears in between.
"""

from collections.abc import Iterable


def count_references(
    entity_id: str,
    transactions: Iterable,
    reference_field: str,
) -> int:
    """Count transactions whose ``reference_field`` equals ``entity_id``.

    Args:
        entity_id: Identifier of the party or expense head.
        transactions: Transactions of the kind that may reference it.
        reference_field: Foreign key attribute name on the transactions.

    Returns:
        int: Number of referencing transactions.
    """
    return sum(
        1
        for transaction in transactions
        if getattr(transaction, reference_field, None) == entity_id
    )


def can_delete(
    entity_id: str,
    transactions: Iterable,
    reference_field: str,
) -> bool:
    """Return True when no transaction references ``entity_id``."""
    return not any(
        getattr(transaction, reference_field, None) == entity_id
        for transaction in transactions
    )


def can_delete_party(party_id: str, party_transactions: Iterable) -> bool:
    return can_delete(party_id, party_transactions, "party_id")


def can_delete_expense_head(
    expense_head_id: str,
    expense_transactions: Iterable,
) -> bool:
    return can_delete(
        expense_head_id,
        expense_transactions,
        "expense_head_id",
    )


__all__ = [
    "count_references",
    "can_delete",
    "can_delete_party",
    "can_delete_expense_head",
]
