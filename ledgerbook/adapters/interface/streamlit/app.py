"""Streamlit ledger entry point."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

import altair as alt
import streamlit as st

from ledgerbook.application.use_cases.report_supersession import (
    ReportRequestTracker,
)
from ledgerbook.domain.constants import (
    ALL_FILTER,
    EXPENSE_CATEGORIES,
    EXPENSE_HEAD,
    EXPENSE_TRANSACTION,
    PARTY,
    PARTY_TRANSACTION,
    REPORT_EXPENSE,
    REPORT_KINDS,
    REPORT_PARTY,
)
from ledgerbook.domain.errors import (
    ConcurrentDeletionRace,
    EntityStoreError,
    ValidationFailure,
)
from ledgerbook.domain.models import (
    EntityCatalog,
    ExpenseReportSection,
    JoinedExpenseTransaction,
    JoinedPartyTransaction,
    ReportFilter,
    ReportView,
    TransactionLedger,
)
from ledgerbook.infrastructure.container import (
    build_delete_use_case,
    build_list_use_case,
    build_record_use_case,
    build_report_use_case,
    build_transactions_use_case,
)
from ledgerbook.infrastructure.logging.logger import get_usage_logger


_REPORT_LABELS = {
    "party": "Party Transactions",
    "expense": "Expense Transactions",
    "combined": "Combined",
}


def _fetch_catalog() -> EntityCatalog:
    """Fetch parties and expense heads for the signed-in user."""
    use_case = build_list_use_case()
    return use_case.execute()


@st.cache_data(show_spinner=False)
def _load_catalog(schema_version: int = 1) -> EntityCatalog:
    """Cached wrapper around _fetch_catalog for Streamlit sessions."""
    _ = schema_version
    return _fetch_catalog()


def _fetch_report(report_filter: ReportFilter) -> ReportView:
    """Build the report for the filter."""
    use_case = build_report_use_case()
    return use_case.execute(report_filter)


def _fetch_transactions() -> TransactionLedger:
    """Fetch every transaction of the signed-in user, newest first."""
    use_case = build_transactions_use_case()
    return use_case.execute()


def _get_tracker() -> ReportRequestTracker:
    """Return the per-session report tracker."""
    if "report_tracker" not in st.session_state:
        st.session_state["report_tracker"] = ReportRequestTracker()
    return st.session_state["report_tracker"]


def _format_currency(value: Decimal) -> str:
    """Format amounts for display."""
    return f"{value:,.2f}"


def _month_start(today: date) -> date:
    return date(today.year, today.month, 1)


def _party_rows(
    rows: Iterable[JoinedPartyTransaction],
) -> list[dict[str, str]]:
    """Return table rows for joined party transactions."""
    return [
        {
            "Date": row.transaction.date.isoformat(),
            "Party": row.party_label,
            "Amount": _format_currency(row.transaction.amount),
            "Status": "Paid (Given)" if row.transaction.is_paid else "Received",
            "Description": row.transaction.description or "-",
        }
        for row in rows
    ]


def _expense_rows(
    rows: Iterable[JoinedExpenseTransaction],
) -> list[dict[str, str]]:
    """Return table rows for joined expense transactions."""
    return [
        {
            "Date": row.transaction.date.isoformat(),
            "Expense Head": row.expense_head.name,
            "Amount": _format_currency(row.transaction.amount),
            "Category": row.expense_head.category,
            "Description": row.transaction.description or "-",
        }
        for row in rows
    ]


def _ledger_line(row: dict[str, str]) -> str:
    """Join a table row into one line for the transaction lists."""
    return " | ".join(row.values())


def _category_chart_data(
    section: ExpenseReportSection,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready totals per expense category."""
    return [
        {
            "category": category,
            "amount": float(amount),
            "amount_label": _format_currency(amount),
        }
        for category, amount in section.totals_by_category().items()
    ]


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check the dataframe libraries Altair needs are importable and whole."""
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Charts unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "Charts unavailable: numpy is missing ndarray"
    if not hasattr(pandas, "Timestamp"):
        return False, "Charts unavailable: pandas is missing Timestamp"
    return True, None


def _render_category_chart(section: ExpenseReportSection) -> None:
    """Render a bar chart of expenses by category."""
    data = _category_chart_data(section)
    if not data:
        return
    ok, message = _check_altair_dependencies()
    if not ok:
        st.caption(message)
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("category:N", title=None, sort=list(EXPENSE_CATEGORIES)),
        y=alt.Y("amount:Q", title="Amount"),
        color=alt.Color("category:N", legend=None),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
        ],
    )
    st.subheader("Expenses by Category")
    st.altair_chart(chart, width="stretch")


def _render_report_view(view: ReportView) -> None:
    """Render metric cards and line-by-line tables."""
    report_filter = view.report_filter
    if report_filter.includes_party:
        failure = view.failure_for(REPORT_PARTY)
        if failure is not None:
            st.error(f"Party transactions unavailable: {failure}")
        section = view.party
        paid_col, received_col, net_col = st.columns(3)
        paid_col.metric(
            "Total Paid (Given)",
            _format_currency(section.total_paid if section else Decimal("0")),
        )
        received_col.metric(
            "Total Received",
            _format_currency(
                section.total_received if section else Decimal("0")
            ),
        )
        net_col.metric(
            "Net Balance",
            _format_currency(section.net_balance if section else Decimal("0")),
        )
        st.subheader("Party Transactions")
        if section is None or not section.rows:
            st.info("No party transactions in this date range")
        else:
            st.dataframe(
                _party_rows(section.rows),
                width="stretch",
                hide_index=True,
            )

    if report_filter.includes_expense:
        failure = view.failure_for(REPORT_EXPENSE)
        if failure is not None:
            st.error(f"Expense transactions unavailable: {failure}")
        section = view.expense
        st.metric(
            "Total Expenses",
            _format_currency(
                section.total_expense if section else Decimal("0")
            ),
        )
        st.subheader("Expense Transactions")
        if section is None or not section.rows:
            st.info("No expense transactions in this date range")
        else:
            st.dataframe(
                _expense_rows(section.rows),
                width="stretch",
                hide_index=True,
            )
            _render_category_chart(section)

    if view.gaps:
        st.caption(
            f"{len(view.gaps)} transactions reference a deleted record and "
            "are shown as Unknown."
        )


def _render_reports(catalog: EntityCatalog) -> None:
    """Render the report filters and the resulting report."""
    st.subheader("Reports")
    report_kind = st.selectbox(
        "Report Type",
        options=list(REPORT_KINDS),
        index=list(REPORT_KINDS).index("combined"),
        format_func=lambda kind: _REPORT_LABELS[kind],
    )
    party_names = {party.id: party.name for party in catalog.parties}
    head_names = {head.id: head.name for head in catalog.expense_heads}
    party_id = ALL_FILTER
    expense_head_id = ALL_FILTER
    if report_kind in ("party", "combined"):
        party_id = st.selectbox(
            "Filter by Party",
            options=[ALL_FILTER, *party_names],
            format_func=lambda key: party_names.get(key, "All Parties"),
        )
    if report_kind in ("expense", "combined"):
        expense_head_id = st.selectbox(
            "Filter by Expense Head",
            options=[ALL_FILTER, *head_names],
            format_func=lambda key: head_names.get(key, "All Expense Heads"),
        )
    today = date.today()
    from_col, to_col = st.columns(2)
    date_from = from_col.date_input("From Date", value=_month_start(today))
    date_to = to_col.date_input("To Date", value=today)

    report_filter = ReportFilter(
        report_kind=report_kind,
        date_from=date_from,
        date_to=date_to,
        party_id=party_id,
        expense_head_id=expense_head_id,
    )
    tracker = _get_tracker()
    ticket = tracker.begin(report_filter)
    try:
        view = _fetch_report(report_filter)
    except ValidationFailure as exc:
        st.warning(str(exc))
        return
    if not tracker.publish(ticket, view):
        return
    get_usage_logger().info(
        f"Report {report_kind} {date_from}..{date_to} "
        f"party={party_id} expense_head={expense_head_id}"
    )
    _render_report_view(tracker.latest_view)


def _render_delete_button(kind: str, entity_id: str, blocked: bool) -> None:
    if blocked:
        st.caption("Cannot delete: has transactions")
        return
    if not st.button("Delete", key=f"delete-{kind}-{entity_id}"):
        return
    try:
        result = build_delete_use_case().execute(kind, entity_id)
    except (ConcurrentDeletionRace, EntityStoreError) as exc:
        st.error(f"Failed to delete: {exc}")
        return
    if result.blocked:
        st.error("Cannot delete: has transactions")
        return
    if not result.deleted:
        st.warning("Record was already deleted")
        return
    get_usage_logger().info(f"Deleted {kind} {entity_id}")
    _load_catalog.clear()
    st.success("Deleted successfully")
    st.rerun()


def _render_parties(catalog: EntityCatalog) -> None:
    """Render the party form and list."""
    st.subheader("Parties")
    with st.form("add-party", clear_on_submit=True):
        name = st.text_input("Name")
        town = st.text_input("Town")
        submitted = st.form_submit_button("Add Party")
    if submitted:
        _submit(lambda use_case: use_case.add_party(name, town), "Party added")

    references = build_delete_use_case().reference_counts(PARTY)
    for party in catalog.parties:
        label_col, action_col = st.columns([4, 1])
        label_col.write(party.label)
        with action_col:
            _render_delete_button(PARTY, party.id, references[party.id] > 0)


def _render_expense_heads(catalog: EntityCatalog) -> None:
    """Render the expense head form and list."""
    st.subheader("Expense Heads")
    with st.form("add-expense-head", clear_on_submit=True):
        name = st.text_input("Name")
        category = st.selectbox("Category", options=list(EXPENSE_CATEGORIES))
        submitted = st.form_submit_button("Add Expense Head")
    if submitted:
        _submit(
            lambda use_case: use_case.add_expense_head(name, category),
            "Expense head added",
        )

    references = build_delete_use_case().reference_counts(EXPENSE_HEAD)
    for head in catalog.expense_heads:
        label_col, action_col = st.columns([4, 1])
        label_col.write(f"{head.name} ({head.category})")
        with action_col:
            _render_delete_button(
                EXPENSE_HEAD,
                head.id,
                references[head.id] > 0,
            )


def _render_transactions(catalog: EntityCatalog) -> None:
    """Render the party and expense transaction forms."""
    st.subheader("Transactions")
    party_names = {party.id: party.label for party in catalog.parties}
    head_names = {head.id: head.name for head in catalog.expense_heads}

    with st.form("add-party-transaction", clear_on_submit=True):
        st.markdown("**Party Transaction**")
        party_id = st.selectbox(
            "Party",
            options=list(party_names),
            format_func=party_names.get,
        )
        amount = st.text_input("Amount", key="party-amount")
        is_paid = st.radio(
            "Direction",
            options=[True, False],
            format_func=lambda paid: "Paid (Given)" if paid else "Received",
            horizontal=True,
        )
        when = st.date_input("Date", value=date.today(), key="party-date")
        description = st.text_input("Description", key="party-description")
        submitted = st.form_submit_button("Add Party Transaction")
    if submitted:
        _submit(
            lambda use_case: use_case.add_party_transaction(
                party_id,
                amount,
                is_paid,
                when,
                description,
            ),
            "Transaction added",
        )

    with st.form("add-expense-transaction", clear_on_submit=True):
        st.markdown("**Expense Transaction**")
        head_id = st.selectbox(
            "Expense Head",
            options=list(head_names),
            format_func=head_names.get,
        )
        expense_party_id = st.selectbox(
            "Party (optional)",
            options=["", *party_names],
            format_func=lambda key: party_names.get(key, "No party"),
            key="expense-party",
        )
        expense_amount = st.text_input("Amount", key="expense-amount")
        expense_date = st.date_input(
            "Date",
            value=date.today(),
            key="expense-date",
        )
        expense_description = st.text_input(
            "Description",
            key="expense-description",
        )
        expense_submitted = st.form_submit_button("Add Expense Transaction")
    if expense_submitted:
        _submit(
            lambda use_case: use_case.add_expense_transaction(
                head_id,
                expense_party_id,
                expense_amount,
                expense_date,
                expense_description,
            ),
            "Transaction added",
        )

    try:
        ledger = _fetch_transactions()
    except EntityStoreError as exc:
        st.error(f"Transactions unavailable: {exc}")
        return
    _render_transaction_list(
        "Party Transactions",
        PARTY_TRANSACTION,
        [row.transaction.id for row in ledger.party_rows],
        _party_rows(ledger.party_rows),
    )
    _render_transaction_list(
        "Expense Transactions",
        EXPENSE_TRANSACTION,
        [row.transaction.id for row in ledger.expense_rows],
        _expense_rows(ledger.expense_rows),
    )


def _render_transaction_list(
    title: str,
    kind: str,
    ids: list[str],
    rows: list[dict[str, str]],
) -> None:
    """Render one line per transaction with an unguarded delete button."""
    st.markdown(f"**{title}**")
    if not rows:
        st.info(f"No {title.lower()} yet")
        return
    for transaction_id, row in zip(ids, rows):
        line_col, action_col = st.columns([4, 1])
        line_col.write(_ledger_line(row))
        with action_col:
            _render_delete_button(kind, transaction_id, blocked=False)


def _submit(action, success_message: str) -> None:
    """Run a record use case action and report the outcome."""
    try:
        action(build_record_use_case())
    except ValidationFailure as exc:
        st.error(f"Validation Error: {exc}")
        return
    except EntityStoreError as exc:
        st.error(f"Error: {exc}")
        return
    get_usage_logger().info(success_message)
    _load_catalog.clear()
    st.success(success_message)


_PAGES = {
    "Reports": _render_reports,
    "Transactions": _render_transactions,
    "Parties": _render_parties,
    "Expense Heads": _render_expense_heads,
}


def _page_names() -> Sequence[str]:
    return list(_PAGES)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Ledgerbook", layout="wide")
    st.title("Ledgerbook")

    page = st.sidebar.selectbox("Page", _page_names())
    try:
        catalog = _load_catalog(schema_version=1)
    except ValidationFailure as exc:
        st.warning(f"{exc}. Set LEDGER_USER_ID to sign in.")
        return
    except EntityStoreError as exc:
        st.error(f"Ledger store unavailable: {exc}")
        return
    _PAGES[page](catalog)


if __name__ == "__main__":  # pragma: no cover
    main()
