"""Domain models package."""

from .entities import (
    ExpenseHead,
    ExpenseTransaction,
    Party,
    PartyTransaction,
    UserIdentity,
)
from .reports import (
    UNKNOWN_EXPENSE_HEAD,
    UNKNOWN_PARTY,
    DeletionResult,
    EntityCatalog,
    ExpenseReportSection,
    JoinedExpenseTransaction,
    JoinedPartyTransaction,
    PartyReportSection,
    PartyTotals,
    ReferentialGap,
    ReportFilter,
    ReportView,
    TransactionLedger,
)

__all__ = [
    "UserIdentity",
    "Party",
    "ExpenseHead",
    "PartyTransaction",
    "ExpenseTransaction",
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
    "EntityCatalog",
    "TransactionLedger",
    "DeletionResult",
]
