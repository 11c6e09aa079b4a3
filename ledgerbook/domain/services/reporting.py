"""Domain services joining transactions to entities and computing totals."""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from logging import Logger
from types import MappingProxyType
from typing import TypeVar

from ledgerbook.domain.constants import (
    EXPENSE_TRANSACTION,
    PARTY_TRANSACTION,
)
from ledgerbook.domain.models import (
    UNKNOWN_EXPENSE_HEAD,
    UNKNOWN_PARTY,
    ExpenseHead,
    ExpenseReportSection,
    ExpenseTransaction,
    JoinedExpenseTransaction,
    JoinedPartyTransaction,
    Party,
    PartyReportSection,
    PartyTotals,
    PartyTransaction,
    ReferentialGap,
)
from ledgerbook.utils.decimal_utils import coerce_decimal


T = TypeVar("T")


def build_entity_index(entities: Iterable[T]) -> Mapping[str, T]:
    """Return a read-only ``id -> entity`` map built once per report."""
    return MappingProxyType({entity.id: entity for entity in entities})


def within_range(
    transactions: Iterable[T],
    date_from: date,
    date_to: date,
) -> list[T]:
    """Keep transactions dated inside the inclusive ``[date_from, date_to]``.

    An inverted range matches nothing.
    """
    return [
        transaction
        for transaction in transactions
        if date_from <= transaction.date <= date_to
    ]


def matching_dimension(
    transactions: Iterable[T],
    reference_field: str,
    dimension_id: str | None,
) -> list[T]:
    """Keep transactions referencing ``dimension_id`` (all when None)."""
    if dimension_id is None:
        return list(transactions)
    return [
        transaction
        for transaction in transactions
        if getattr(transaction, reference_field) == dimension_id
    ]


def order_transactions(transactions: Iterable[T]) -> list[T]:
    """Order transactions newest first.

    Same-day transactions are ordered by creation time, newest first, then by
    id so the order is total for any snapshot.
    """
    return sorted(transactions, key=_ordering_key, reverse=True)


def _ordering_key(transaction) -> tuple:
    created_at = transaction.created_at
    return (
        transaction.date,
        created_at is not None,
        created_at,
        transaction.id,
    )


def compute_party_totals(
    transactions: Iterable[PartyTransaction],
) -> PartyTotals:
    """Sum paid and received amounts with Decimal accumulators."""
    total_paid = Decimal("0")
    total_received = Decimal("0")
    for transaction in transactions:
        amount = coerce_decimal(transaction.amount)
        if transaction.is_paid:
            total_paid += amount
        else:
            total_received += amount
    return PartyTotals(total_paid=total_paid, total_received=total_received)


def compute_expense_total(
    transactions: Iterable[ExpenseTransaction],
) -> Decimal:
    """Sum expense amounts regardless of category."""
    total = Decimal("0")
    for transaction in transactions:
        total += coerce_decimal(transaction.amount)
    return total


def join_party_transactions(
    transactions: Iterable[PartyTransaction],
    parties: Mapping[str, Party],
) -> tuple[list[JoinedPartyTransaction], list[ReferentialGap]]:
    """Attach each transaction to its party or the unknown placeholder."""
    rows: list[JoinedPartyTransaction] = []
    gaps: list[ReferentialGap] = []
    for transaction in transactions:
        party = parties.get(transaction.party_id)
        if party is None:
            party = UNKNOWN_PARTY
            gaps.append(
                ReferentialGap(
                    kind=PARTY_TRANSACTION,
                    transaction_id=transaction.id,
                    missing_id=transaction.party_id,
                )
            )
        rows.append(JoinedPartyTransaction(transaction=transaction, party=party))
    return rows, gaps


def join_expense_transactions(
    transactions: Iterable[ExpenseTransaction],
    expense_heads: Mapping[str, ExpenseHead],
) -> tuple[list[JoinedExpenseTransaction], list[ReferentialGap]]:
    """Attach each transaction to its expense head or the placeholder."""
    rows: list[JoinedExpenseTransaction] = []
    gaps: list[ReferentialGap] = []
    for transaction in transactions:
        head = expense_heads.get(transaction.expense_head_id)
        if head is None:
            head = UNKNOWN_EXPENSE_HEAD
            gaps.append(
                ReferentialGap(
                    kind=EXPENSE_TRANSACTION,
                    transaction_id=transaction.id,
                    missing_id=transaction.expense_head_id,
                )
            )
        rows.append(
            JoinedExpenseTransaction(transaction=transaction, expense_head=head)
        )
    return rows, gaps


def build_party_section(
    transactions: Iterable[PartyTransaction],
    parties: Iterable[Party],
    *,
    date_from: date,
    date_to: date,
    party_id: str | None,
    logger: Logger,
) -> tuple[PartyReportSection, list[ReferentialGap]]:
    """Filter, order, join, and total party transactions.

    Args:
        transactions: Party transactions retrieved for the user.
        parties: Every party owned by the user, regardless of dates.
        date_from: Inclusive lower date bound.
        date_to: Inclusive upper date bound.
        party_id: Optional party filter.
        logger: Logger used for referential gap warnings.

    Returns:
        Tuple of the report section and the referential gaps found.
    """
    selected = matching_dimension(
        within_range(transactions, date_from, date_to),
        "party_id",
        party_id,
    )
    ordered = order_transactions(selected)
    rows, gaps = join_party_transactions(ordered, build_entity_index(parties))
    _log_gaps(gaps, logger)
    section = PartyReportSection(
        rows=tuple(rows),
        totals=compute_party_totals(row.transaction for row in rows),
    )
    return section, gaps


def build_expense_section(
    transactions: Iterable[ExpenseTransaction],
    expense_heads: Iterable[ExpenseHead],
    *,
    date_from: date,
    date_to: date,
    expense_head_id: str | None,
    logger: Logger,
) -> tuple[ExpenseReportSection, list[ReferentialGap]]:
    """Filter, order, join, and total expense transactions."""
    selected = matching_dimension(
        within_range(transactions, date_from, date_to),
        "expense_head_id",
        expense_head_id,
    )
    ordered = order_transactions(selected)
    rows, gaps = join_expense_transactions(
        ordered,
        build_entity_index(expense_heads),
    )
    _log_gaps(gaps, logger)
    section = ExpenseReportSection(
        rows=tuple(rows),
        total_expense=compute_expense_total(row.transaction for row in rows),
    )
    return section, gaps


def _log_gaps(gaps: list[ReferentialGap], logger: Logger) -> None:
    for gap in gaps:
        logger.warning(
            f"Unresolved reference on {gap.kind} {gap.transaction_id}: "
            f"{gap.missing_id}"
        )


__all__ = [
    "build_entity_index",
    "within_range",
    "matching_dimension",
    "order_transactions",
    "compute_party_totals",
    "compute_expense_total",
    "join_party_transactions",
    "join_expense_transactions",
    "build_party_section",
    "build_expense_section",
]
