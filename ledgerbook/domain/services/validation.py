"""Domain validation helpers."""

from datetime import date, datetime
from decimal import Decimal

from ledgerbook.domain.constants import (
    AMOUNT_MAX_INTEGER_DIGITS,
    AMOUNT_SCALE,
    EXPENSE_CATEGORIES,
    REPORT_KINDS,
)
from ledgerbook.domain.errors import ValidationFailure
from ledgerbook.domain.models import ReportFilter
from ledgerbook.utils.decimal_utils import coerce_decimal


def validate_report_filter(report_filter: ReportFilter) -> None:
    """Reject filters that cannot drive a report.

    An inverted date range is accepted and simply selects nothing.

    Raises:
        ValidationFailure: On an unknown report kind or a missing date.
    """
    if report_filter.report_kind not in REPORT_KINDS:
        raise ValidationFailure(
            f"Unknown report kind: {report_filter.report_kind!r}. "
            f"Expected one of {', '.join(REPORT_KINDS)}."
        )
    if not _is_calendar_date(report_filter.date_from):
        raise ValidationFailure("Report filter requires a start date")
    if not _is_calendar_date(report_filter.date_to):
        raise ValidationFailure("Report filter requires an end date")


def _is_calendar_date(value) -> bool:
    # datetime subclasses date but cannot be compared with one.
    return isinstance(value, date) and not isinstance(value, datetime)


def require_text(value: str | None, field_name: str) -> str:
    """Return the trimmed value or raise when it is blank."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailure(f"{field_name} is required")
    return cleaned


def normalize_description(value: str | None) -> str | None:
    """Return the trimmed description, or None when blank."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def validate_category(category: str | None) -> str:
    cleaned = require_text(category, "category").lower()
    if cleaned not in EXPENSE_CATEGORIES:
        raise ValidationFailure(
            f"Unknown expense category: {category!r}. "
            f"Expected one of {', '.join(EXPENSE_CATEGORIES)}."
        )
    return cleaned


def validate_amount(value) -> Decimal:
    """Return the amount as a non-negative Decimal.

    Raises:
        ValidationFailure: When the amount is missing, malformed, negative,
            or does not fit the stored precision.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationFailure("amount is required")
    try:
        amount = coerce_decimal(value)
    except ValueError as exc:
        raise ValidationFailure(str(exc)) from exc
    if not amount.is_finite():
        raise ValidationFailure(f"amount must be finite: {value!r}")
    if amount < 0:
        raise ValidationFailure(f"amount must not be negative: {amount}")
    if amount.normalize().as_tuple().exponent < -AMOUNT_SCALE:
        raise ValidationFailure(
            f"amount has more than {AMOUNT_SCALE} decimal places: {amount}"
        )
    if amount >= Decimal(10) ** AMOUNT_MAX_INTEGER_DIGITS:
        raise ValidationFailure(f"amount is too large: {amount}")
    return amount


def parse_iso_date(value, field_name: str) -> date:
    """Parse a ``YYYY-MM-DD`` string, passing dates through unchanged."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationFailure(
            f"Invalid {field_name} '{value}'. Expected format YYYY-MM-DD."
        ) from exc


__all__ = [
    "validate_report_filter",
    "require_text",
    "normalize_description",
    "validate_category",
    "validate_amount",
    "parse_iso_date",
]
