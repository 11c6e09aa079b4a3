"""CLI adapter printing a party/expense report for a date range."""

from datetime import date
from decimal import Decimal
import os

from ledgerbook.domain.constants import ALL_FILTER
from ledgerbook.domain.errors import ValidationFailure
from ledgerbook.domain.models import ReportFilter, ReportView
from ledgerbook.domain.services.validation import parse_iso_date
from ledgerbook.infrastructure.container import build_report_use_case
from ledgerbook.infrastructure.logging.logger import get_app_logger
from ledgerbook.infrastructure.settings import LedgerSettings


def _parse_date(name: str, default: date) -> date:
    """Read an ISO date from the environment variable ``name``.

    Args:
        name: Environment variable holding a YYYY-MM-DD date.
        default: Date used when the variable is unset or blank.

    Returns:
        date: Parsed date or the default.

    Raises:
        ValidationFailure: When the variable is set but malformed.
    """
    value = (os.getenv(name) or "").strip()
    if not value:
        return default
    return parse_iso_date(value, name)


def _format_amount(value: Decimal) -> str:
    return f"{value:,.2f}"


def _print_report(view: ReportView) -> None:
    report_filter = view.report_filter
    print(
        f"Report {report_filter.report_kind} "
        f"({report_filter.date_from} .. {report_filter.date_to})"
    )
    for failure in view.failures:
        print(f"[error] {failure.kind} section unavailable: {failure}")

    if view.party is not None:
        print("Party transactions")
        for row in view.party.rows:
            status = "Paid (Given)" if row.transaction.is_paid else "Received"
            print(
                f"  {row.transaction.date}  {row.party_label:<30} "
                f"{_format_amount(row.transaction.amount):>14}  {status:<12} "
                f"{row.transaction.description or '-'}"
            )
        if not view.party.rows:
            print("  No party transactions in this date range")
        print(f"  Total paid:     {_format_amount(view.party.total_paid)}")
        print(f"  Total received: {_format_amount(view.party.total_received)}")
        print(f"  Net balance:    {_format_amount(view.party.net_balance)}")

    if view.expense is not None:
        print("Expense transactions")
        for row in view.expense.rows:
            print(
                f"  {row.transaction.date}  {row.expense_head.name:<30} "
                f"{_format_amount(row.transaction.amount):>14}  "
                f"{row.expense_head.category:<12} "
                f"{row.transaction.description or '-'}"
            )
        if not view.expense.rows:
            print("  No expense transactions in this date range")
        print(
            f"  Total expenses: {_format_amount(view.expense.total_expense)}"
        )


def main() -> None:
    """Build the report selected by REPORT_* variables and print it."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    today = date.today()

    try:
        report_filter = ReportFilter(
            report_kind=os.getenv(
                "REPORT_KIND",
                settings.default_report_kind,
            ).strip().lower(),
            date_from=_parse_date("REPORT_FROM", today.replace(day=1)),
            date_to=_parse_date("REPORT_TO", today),
            party_id=os.getenv("REPORT_PARTY", ALL_FILTER),
            expense_head_id=os.getenv("REPORT_EXPENSE_HEAD", ALL_FILTER),
        )
        use_case = build_report_use_case(settings=settings)
        view = use_case.execute(report_filter)
    except ValidationFailure as exc:
        logger.error(str(exc))
        print(f"Cannot build report: {exc}")
        return

    _print_report(view)


if __name__ == "__main__":  # pragma: no cover
    main()
