"""Tests for the BuildReportUseCase."""

from datetime import date, datetime
from decimal import Decimal
import threading
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from ledgerbook.application.use_cases.build_report import BuildReportUseCase
from ledgerbook.domain.errors import (
    StoreUnavailableError,
    ValidationFailure,
)
from ledgerbook.domain.models import (
    ExpenseHead,
    ExpenseTransaction,
    Party,
    PartyTransaction,
    ReportFilter,
    UserIdentity,
)
from ledgerbook.infrastructure.sqlalchemy_entity_store import (
    SqlAlchemyEntityStore,
)


class FakeEntityStore:
    """In-memory store keyed by kind, with optional per-kind failures."""

    def __init__(self, entities=None, transactions=None, failing=()):
        self.entities = entities or {}
        self.transactions = transactions or {}
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    def _record(self, call) -> None:
        with self._lock:
            self.calls.append(call)

    def list_entities(self, kind, user_id):
        self._record(("list_entities", kind, user_id))
        if kind in self.failing:
            raise StoreUnavailableError(f"{kind} store offline")
        return [
            entity
            for entity in self.entities.get(kind, [])
            if entity.user_id == user_id
        ]

    def list_transactions(
        self,
        kind,
        user_id,
        date_from=None,
        date_to=None,
        dimension_id=None,
    ):
        self._record(
            ("list_transactions", kind, user_id, date_from, date_to, dimension_id)
        )
        if kind in self.failing:
            raise StoreUnavailableError(f"{kind} store offline")
        return [
            transaction
            for transaction in self.transactions.get(kind, [])
            if transaction.user_id == user_id
        ]


def _identity(user_id: str | None = "u1") -> MagicMock:
    provider = MagicMock()
    provider.current_user.return_value = (
        UserIdentity(id=user_id) if user_id else None
    )
    return provider


def _store(failing=()) -> FakeEntityStore:
    return FakeEntityStore(
        entities={
            "party": [
                Party(id="p1", name="Acme", town="Springfield", user_id="u1"),
                Party(id="p2", name="Beta", town="Shelbyville", user_id="u1"),
                Party(id="px", name="Other", town="Elsewhere", user_id="u2"),
            ],
            "expense_head": [
                ExpenseHead(
                    id="h1",
                    name="Groceries",
                    category="need",
                    user_id="u1",
                ),
            ],
        },
        transactions={
            "party_transaction": [
                PartyTransaction(
                    id="t1",
                    party_id="p1",
                    amount=Decimal("100"),
                    is_paid=True,
                    date=date(2024, 1, 5),
                    user_id="u1",
                ),
                PartyTransaction(
                    id="t2",
                    party_id="p1",
                    amount=Decimal("60"),
                    is_paid=False,
                    date=date(2024, 1, 10),
                    user_id="u1",
                ),
                PartyTransaction(
                    id="t3",
                    party_id="p2",
                    amount=Decimal("5"),
                    is_paid=False,
                    date=date(2024, 1, 12),
                    user_id="u1",
                ),
                PartyTransaction(
                    id="tx",
                    party_id="px",
                    amount=Decimal("999"),
                    is_paid=False,
                    date=date(2024, 1, 12),
                    user_id="u2",
                ),
            ],
            "expense_transaction": [
                ExpenseTransaction(
                    id="e1",
                    expense_head_id="h1",
                    amount=Decimal("45.50"),
                    date=date(2024, 2, 1),
                    user_id="u1",
                ),
                ExpenseTransaction(
                    id="e2",
                    expense_head_id="h1",
                    amount=Decimal("12.25"),
                    date=date(2024, 1, 20),
                    user_id="u1",
                    party_id="p1",
                ),
            ],
        },
        failing=failing,
    )


def _filter(kind: str = "combined", **kwargs) -> ReportFilter:
    return ReportFilter(
        report_kind=kind,
        date_from=kwargs.pop("date_from", date(2024, 1, 1)),
        date_to=kwargs.pop("date_to", date(2024, 1, 31)),
        **kwargs,
    )


def test_combined_report_computes_both_sections() -> None:
    """Combined reports hold party and expense sections with totals."""
    use_case = BuildReportUseCase(_store(), _identity(), logger=MagicMock())

    view = use_case.execute(_filter())

    assert view.party is not None and view.expense is not None
    assert view.party.total_paid == Decimal("100")
    assert view.party.total_received == Decimal("65")
    assert view.party.net_balance == Decimal("-35")
    assert [row.transaction.id for row in view.party.rows] == ["t3", "t2", "t1"]
    assert view.expense.total_expense == Decimal("12.25")
    assert [row.transaction.id for row in view.expense.rows] == ["e2"]
    assert view.failures == ()
    assert view.gaps == ()


def test_party_report_skips_expense_retrievals() -> None:
    """A party report never touches expense data."""
    store = _store()
    use_case = BuildReportUseCase(store, _identity(), logger=MagicMock())

    view = use_case.execute(_filter("party"))

    assert view.expense is None
    assert view.party is not None
    kinds = {call[1] for call in store.calls}
    assert kinds == {"party", "party_transaction"}


def test_dimension_filter_is_forwarded_and_applied() -> None:
    """A selected party narrows rows and is passed to the store."""
    store = _store()
    use_case = BuildReportUseCase(store, _identity(), logger=MagicMock())

    view = use_case.execute(_filter("party", party_id="p2"))

    assert [row.transaction.id for row in view.party.rows] == ["t3"]
    assert view.party.total_received == Decimal("5")
    assert (
        "list_transactions",
        "party_transaction",
        "u1",
        date(2024, 1, 1),
        date(2024, 1, 31),
        "p2",
    ) in store.calls


def test_other_users_records_are_never_included() -> None:
    """Only the signed-in user's transactions contribute."""
    use_case = BuildReportUseCase(_store(), _identity(), logger=MagicMock())

    view = use_case.execute(_filter("party"))

    assert "tx" not in [row.transaction.id for row in view.party.rows]


def test_missing_user_fails_before_retrieval() -> None:
    """Without a signed-in user the store is not queried."""
    store = _store()
    use_case = BuildReportUseCase(store, _identity(None), logger=MagicMock())

    with pytest.raises(ValidationFailure):
        use_case.execute(_filter())

    assert store.calls == []


def test_invalid_kind_fails_before_retrieval() -> None:
    """Unknown report kinds are rejected up front."""
    store = _store()
    use_case = BuildReportUseCase(store, _identity(), logger=MagicMock())

    with pytest.raises(ValidationFailure):
        use_case.execute(_filter("weekly"))

    assert store.calls == []


def test_failing_kind_does_not_abort_the_other() -> None:
    """An expense store failure still yields the party section."""
    logger = MagicMock()
    use_case = BuildReportUseCase(
        _store(failing={"expense_transaction"}),
        _identity(),
        logger=logger,
    )

    view = use_case.execute(_filter())

    assert view.party is not None
    assert view.party.net_balance == Decimal("-35")
    assert view.expense is None
    assert [failure.kind for failure in view.failures] == ["expense"]
    assert view.has_failures is True
    assert view.failure_for("expense") is view.failures[0]
    assert view.failure_for("party") is None
    logger.error.assert_called_once()


def test_both_kinds_failing_reports_two_failures() -> None:
    """Each failing kind is reported separately."""
    use_case = BuildReportUseCase(
        _store(failing={"party", "expense_head"}),
        _identity(),
        logger=MagicMock(),
    )

    view = use_case.execute(_filter())

    assert view.party is None and view.expense is None
    assert sorted(failure.kind for failure in view.failures) == [
        "expense",
        "party",
    ]


def test_inverted_range_returns_empty_sections() -> None:
    """from > to produces empty sections and zero totals."""
    use_case = BuildReportUseCase(_store(), _identity(), logger=MagicMock())

    view = use_case.execute(
        _filter(date_from=date(2024, 1, 31), date_to=date(2024, 1, 1))
    )

    assert view.party.rows == ()
    assert view.expense.rows == ()
    assert view.party.net_balance == Decimal("0")
    assert view.expense.total_expense == Decimal("0")
    assert view.is_empty is True


def test_deleted_party_is_reported_as_gap() -> None:
    """Transactions of a vanished party join to the unknown placeholder."""
    store = _store()
    store.entities["party"] = [
        party for party in store.entities["party"] if party.id != "p2"
    ]
    use_case = BuildReportUseCase(store, _identity(), logger=MagicMock())

    view = use_case.execute(_filter("party"))

    assert [row.party_label for row in view.party.rows] == [
        "Unknown",
        "Acme (Springfield)",
        "Acme (Springfield)",
    ]
    assert [gap.missing_id for gap in view.gaps] == ["p2"]
    assert view.party.total_received == Decimal("65")


def test_retrievals_run_concurrently() -> None:
    """Entity and transaction retrievals overlap in time."""
    barrier = threading.Barrier(4, timeout=5)
    store = _store()
    original_entities = store.list_entities
    original_transactions = store.list_transactions

    def list_entities(kind, user_id):
        barrier.wait()
        return original_entities(kind, user_id)

    def list_transactions(kind, user_id, *args):
        barrier.wait()
        return original_transactions(kind, user_id, *args)

    store.list_entities = list_entities
    store.list_transactions = list_transactions
    use_case = BuildReportUseCase(
        store,
        _identity(),
        logger=MagicMock(),
        max_workers=4,
    )

    view = use_case.execute(_filter())

    assert view.failures == ()
    assert view.party.total_paid == Decimal("100")


def test_unconfigured_sql_store_yields_failure_per_kind() -> None:
    """A store without a database URL fails each kind, not the call."""

    def _no_engine():
        raise RuntimeError("Missing environment variable: LEDGER_DB_URL")

    store = SqlAlchemyEntityStore(SimpleNamespace(get_ledger_engine=_no_engine))
    use_case = BuildReportUseCase(store, _identity(), logger=MagicMock())

    view = use_case.execute(_filter())

    assert view.party is None and view.expense is None
    assert sorted(failure.kind for failure in view.failures) == [
        "expense",
        "party",
    ]
    assert "LEDGER_DB_URL" in str(view.failure_for("party"))


def test_datetime_bound_is_rejected_before_retrieval() -> None:
    """A timestamp bound fails validation instead of the date comparison."""
    store = _store()
    use_case = BuildReportUseCase(store, _identity(), logger=MagicMock())

    with pytest.raises(ValidationFailure):
        use_case.execute(_filter(date_to=datetime(2024, 1, 31, 18, 0)))

    assert store.calls == []
