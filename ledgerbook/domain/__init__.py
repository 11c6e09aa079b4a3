"""Domain package for ledger rules and core models."""

from .constants import (
    EXPENSE_CATEGORIES,
    REPORT_COMBINED,
    REPORT_EXPENSE,
    REPORT_KINDS,
    REPORT_PARTY,
)
from .models import (
    ExpenseHead,
    ExpenseTransaction,
    Party,
    PartyTransaction,
    ReportFilter,
    ReportView,
    UserIdentity,
)
from .policies import can_delete, can_delete_expense_head, can_delete_party

__all__ = [
    "EXPENSE_CATEGORIES",
    "REPORT_COMBINED",
    "REPORT_EXPENSE",
    "REPORT_KINDS",
    "REPORT_PARTY",
    "ExpenseHead",
    "ExpenseTransaction",
    "Party",
    "PartyTransaction",
    "ReportFilter",
    "ReportView",
    "UserIdentity",
    "can_delete",
    "can_delete_party",
    "can_delete_expense_head",
]
