"""Tests for the deletion guard."""

from datetime import date
from decimal import Decimal

from ledgerbook.domain.models import ExpenseTransaction, PartyTransaction
from ledgerbook.domain.policies import (
    can_delete,
    can_delete_expense_head,
    can_delete_party,
    count_references,
)


def _party_tx(tx_id: str, party_id: str) -> PartyTransaction:
    return PartyTransaction(
        id=tx_id,
        party_id=party_id,
        amount=Decimal("10"),
        is_paid=True,
        date=date(2024, 1, 1),
        user_id="u1",
    )


def _expense_tx(tx_id: str, head_id: str) -> ExpenseTransaction:
    return ExpenseTransaction(
        id=tx_id,
        expense_head_id=head_id,
        amount=Decimal("10"),
        date=date(2024, 1, 1),
        user_id="u1",
    )


def test_party_with_transaction_cannot_be_deleted() -> None:
    """A single referencing transaction blocks the delete."""
    transactions = [_party_tx("t1", "p2"), _party_tx("t2", "p1")]

    assert can_delete_party("p1", transactions) is False


def test_party_without_transactions_can_be_deleted() -> None:
    """Transactions of other parties do not block."""
    assert can_delete_party("p1", [_party_tx("t1", "p2")]) is True
    assert can_delete_party("p1", []) is True


def test_expense_head_guard_checks_expense_transactions() -> None:
    """Expense heads are guarded by expense transactions."""
    transactions = [_expense_tx("e1", "h1")]

    assert can_delete_expense_head("h1", transactions) is False
    assert can_delete_expense_head("h2", transactions) is True


def test_guard_matches_reference_count() -> None:
    """can_delete is True exactly when the reference count is zero."""
    transactions = [
        _party_tx("t1", "p1"),
        _party_tx("t2", "p1"),
        _party_tx("t3", "p3"),
    ]

    for party_id, expected in (("p1", 2), ("p2", 0), ("p3", 1)):
        count = count_references(party_id, transactions, "party_id")
        assert count == expected
        assert can_delete(party_id, transactions, "party_id") is (count == 0)


def test_guard_is_deterministic_for_a_snapshot() -> None:
    """Re-running the check on the same snapshot gives the same answer."""
    transactions = (_party_tx("t1", "p1"),)

    first = can_delete_party("p1", transactions)
    second = can_delete_party("p1", transactions)

    assert first == second is False
