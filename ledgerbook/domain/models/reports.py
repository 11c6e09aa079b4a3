"""Domain models for report filters and report views."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ledgerbook.domain.constants import (
    ALL_FILTER,
    REPORT_COMBINED,
    REPORT_EXPENSE,
    REPORT_PARTY,
    UNKNOWN_LABEL,
)
from ledgerbook.domain.errors import RetrievalFailure
from ledgerbook.domain.models.entities import (
    ExpenseHead,
    ExpenseTransaction,
    Party,
    PartyTransaction,
)


UNKNOWN_PARTY = Party(id="", name=UNKNOWN_LABEL, town="", user_id="")
UNKNOWN_EXPENSE_HEAD = ExpenseHead(
    id="",
    name=UNKNOWN_LABEL,
    category=UNKNOWN_LABEL,
    user_id="",
)


def _normalize_dimension(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned or cleaned == ALL_FILTER:
        return None
    return cleaned


@dataclass(frozen=True)
class ReportFilter:
    """Filter selecting which transactions a report covers.

    Attributes:
        report_kind: party, expense, or combined.
        date_from: Inclusive lower bound on transaction dates.
        date_to: Inclusive upper bound on transaction dates.
        party_id: Optional party id; ``"all"`` means no filter.
        expense_head_id: Optional expense head id; ``"all"`` means no filter.
    """

    report_kind: str
    date_from: date
    date_to: date
    party_id: str | None = None
    expense_head_id: str | None = None

    @property
    def includes_party(self) -> bool:
        return self.report_kind in (REPORT_PARTY, REPORT_COMBINED)

    @property
    def includes_expense(self) -> bool:
        return self.report_kind in (REPORT_EXPENSE, REPORT_COMBINED)

    @property
    def party_dimension(self) -> str | None:
        return _normalize_dimension(self.party_id)

    @property
    def expense_head_dimension(self) -> str | None:
        return _normalize_dimension(self.expense_head_id)


@dataclass(frozen=True)
class ReferentialGap:
    """Transaction whose foreign key matched no known entity."""

    kind: str
    transaction_id: str
    missing_id: str


@dataclass(frozen=True)
class JoinedPartyTransaction:
    """Party transaction annotated with its resolved party."""

    transaction: PartyTransaction
    party: Party

    @property
    def is_unknown(self) -> bool:
        return self.party is UNKNOWN_PARTY

    @property
    def party_label(self) -> str:
        return self.party.label


@dataclass(frozen=True)
class JoinedExpenseTransaction:
    """Expense transaction annotated with its resolved expense head."""

    transaction: ExpenseTransaction
    expense_head: ExpenseHead

    @property
    def is_unknown(self) -> bool:
        return self.expense_head is UNKNOWN_EXPENSE_HEAD


@dataclass(frozen=True)
class PartyTotals:
    """Totals over a set of party transactions."""

    total_paid: Decimal
    total_received: Decimal

    @property
    def net_balance(self) -> Decimal:
        """Return total_received minus total_paid."""
        return self.total_received - self.total_paid


@dataclass(frozen=True)
class PartyReportSection:
    """Joined party rows and their totals."""

    rows: tuple[JoinedPartyTransaction, ...]
    totals: PartyTotals

    @property
    def total_paid(self) -> Decimal:
        return self.totals.total_paid

    @property
    def total_received(self) -> Decimal:
        return self.totals.total_received

    @property
    def net_balance(self) -> Decimal:
        return self.totals.net_balance


@dataclass(frozen=True)
class ExpenseReportSection:
    """Joined expense rows and their total."""

    rows: tuple[JoinedExpenseTransaction, ...]
    total_expense: Decimal

    def totals_by_category(self) -> dict[str, Decimal]:
        """Return expense totals keyed by expense head category."""
        totals: dict[str, Decimal] = {}
        for row in self.rows:
            category = row.expense_head.category
            totals[category] = (
                totals.get(category, Decimal("0")) + row.transaction.amount
            )
        return dict(sorted(totals.items()))


@dataclass(frozen=True)
class ReportView:
    """Report produced for one filter.

    A section is None when its kind was not requested or its retrieval
    failed; failures are listed in ``failures``.
    """

    report_filter: ReportFilter
    party: PartyReportSection | None = None
    expense: ExpenseReportSection | None = None
    failures: tuple[RetrievalFailure, ...] = field(default_factory=tuple)
    gaps: tuple[ReferentialGap, ...] = field(default_factory=tuple)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def failure_for(self, kind: str) -> RetrievalFailure | None:
        for failure in self.failures:
            if failure.kind == kind:
                return failure
        return None

    @property
    def is_empty(self) -> bool:
        party_rows = self.party.rows if self.party else ()
        expense_rows = self.expense.rows if self.expense else ()
        return not party_rows and not expense_rows


@dataclass(frozen=True)
class TransactionLedger:
    """Every transaction of the acting user, newest first, joined."""

    party_rows: tuple[JoinedPartyTransaction, ...]
    expense_rows: tuple[JoinedExpenseTransaction, ...]


@dataclass(frozen=True)
class EntityCatalog:
    """Parties and expense heads owned by the acting user."""

    parties: tuple[Party, ...]
    expense_heads: tuple[ExpenseHead, ...]


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of a guarded delete.

    Attributes:
        deleted: True when the store removed the record.
        blocked: True when the guard refused the delete.
        reference_count: Transactions still referencing the entity.
    """

    kind: str
    entity_id: str
    deleted: bool
    blocked: bool = False
    reference_count: int = 0


__all__ = [
    "UNKNOWN_PARTY",
    "UNKNOWN_EXPENSE_HEAD",
    "ReportFilter",
    "ReferentialGap",
    "JoinedPartyTransaction",
    "JoinedExpenseTransaction",
    "PartyTotals",
    "PartyReportSection",
    "ExpenseReportSection",
    "ReportView",
    "TransactionLedger",
    "EntityCatalog",
    "DeletionResult",
]
