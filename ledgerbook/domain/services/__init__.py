"""Domain services package."""

from .reporting import (
    build_entity_index,
    build_expense_section,
    build_party_section,
    compute_expense_total,
    compute_party_totals,
    join_expense_transactions,
    join_party_transactions,
    matching_dimension,
    order_transactions,
    within_range,
)
from .validation import (
    normalize_description,
    parse_iso_date,
    require_text,
    validate_amount,
    validate_category,
    validate_report_filter,
)

__all__ = [
    "build_entity_index",
    "build_expense_section",
    "build_party_section",
    "compute_expense_total",
    "compute_party_totals",
    "join_expense_transactions",
    "join_party_transactions",
    "matching_dimension",
    "order_transactions",
    "within_range",
    "normalize_description",
    "parse_iso_date",
    "require_text",
    "validate_amount",
    "validate_category",
    "validate_report_filter",
]
