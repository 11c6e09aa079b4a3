"""Use case to build party and expense reports for a date range."""

from concurrent.futures import Future, ThreadPoolExecutor

from ledgerbook.application.ports.entity_store import EntityStorePort
from ledgerbook.application.ports.identity import IdentityProviderPort
from ledgerbook.application.use_cases.user_context import (
    require_current_user,
)
from ledgerbook.domain.constants import (
    EXPENSE_HEAD,
    EXPENSE_TRANSACTION,
    PARTY,
    PARTY_TRANSACTION,
    REPORT_EXPENSE,
    REPORT_PARTY,
)
from ledgerbook.domain.errors import EntityStoreError, RetrievalFailure
from ledgerbook.domain.models import ReferentialGap, ReportFilter, ReportView
from ledgerbook.domain.services.reporting import (
    build_expense_section,
    build_party_section,
)
from ledgerbook.domain.services.validation import validate_report_filter
from ledgerbook.infrastructure.logging.logger import get_app_logger


DEFAULT_MAX_WORKERS = 4


class BuildReportUseCase:
    """Join transactions to their entities and compute report totals.

    Entity and transaction retrievals for every requested kind are issued
    concurrently; each kind is joined once both of its retrievals are done.
    A failing kind is reported in ``ReportView.failures`` without aborting
    the other kind.
    """

    def __init__(
        self,
        entity_store: EntityStorePort,
        identity_provider: IdentityProviderPort,
        logger=None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        """Initialize the use case.

        Args:
            entity_store: Port providing ledger records.
            identity_provider: Port resolving the acting user.
            logger: Optional logger compatible with logging.Logger-like API.
            max_workers: Thread count for concurrent retrievals.
        """
        self._entity_store = entity_store
        self._identity_provider = identity_provider
        self._logger = logger or get_app_logger()
        self._max_workers = max(1, max_workers)

    def execute(self, report_filter: ReportFilter) -> ReportView:
        """Return the report for the filter.

        Args:
            report_filter: Report kind, date range, and dimension filters.

        Returns:
            ReportView: Joined rows and totals for each requested kind.

        Raises:
            ValidationFailure: On a malformed filter or a missing user.
        """
        validate_report_filter(report_filter)
        user = require_current_user(self._identity_provider)

        failures: list[RetrievalFailure] = []
        gaps: list[ReferentialGap] = []
        party_section = None
        expense_section = None

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            party_futures = None
            expense_futures = None
            if report_filter.includes_party:
                party_futures = (
                    executor.submit(
                        self._entity_store.list_entities,
                        PARTY,
                        user.id,
                    ),
                    executor.submit(
                        self._entity_store.list_transactions,
                        PARTY_TRANSACTION,
                        user.id,
                        report_filter.date_from,
                        report_filter.date_to,
                        report_filter.party_dimension,
                    ),
                )
            if report_filter.includes_expense:
                expense_futures = (
                    executor.submit(
                        self._entity_store.list_entities,
                        EXPENSE_HEAD,
                        user.id,
                    ),
                    executor.submit(
                        self._entity_store.list_transactions,
                        EXPENSE_TRANSACTION,
                        user.id,
                        report_filter.date_from,
                        report_filter.date_to,
                        report_filter.expense_head_dimension,
                    ),
                )

            if party_futures is not None:
                try:
                    parties, transactions = self._collect(
                        REPORT_PARTY,
                        *party_futures,
                    )
                except RetrievalFailure as failure:
                    failures.append(failure)
                else:
                    party_section, party_gaps = build_party_section(
                        transactions,
                        parties,
                        date_from=report_filter.date_from,
                        date_to=report_filter.date_to,
                        party_id=report_filter.party_dimension,
                        logger=self._logger,
                    )
                    gaps.extend(party_gaps)

            if expense_futures is not None:
                try:
                    heads, transactions = self._collect(
                        REPORT_EXPENSE,
                        *expense_futures,
                    )
                except RetrievalFailure as failure:
                    failures.append(failure)
                else:
                    expense_section, expense_gaps = build_expense_section(
                        transactions,
                        heads,
                        date_from=report_filter.date_from,
                        date_to=report_filter.date_to,
                        expense_head_id=report_filter.expense_head_dimension,
                        logger=self._logger,
                    )
                    gaps.extend(expense_gaps)

        if party_section is not None:
            self._logger.info(
                f"Party report: {len(party_section.rows)} rows, "
                f"paid={party_section.total_paid}, "
                f"received={party_section.total_received}, "
                f"net={party_section.net_balance}"
            )
        if expense_section is not None:
            self._logger.info(
                f"Expense report: {len(expense_section.rows)} rows, "
                f"total={expense_section.total_expense}"
            )

        return ReportView(
            report_filter=report_filter,
            party=party_section,
            expense=expense_section,
            failures=tuple(failures),
            gaps=tuple(gaps),
        )

    def _collect(
        self,
        kind: str,
        entities_future: Future,
        transactions_future: Future,
    ) -> tuple[list, list]:
        """Wait for both retrievals of one kind.

        Raises:
            RetrievalFailure: When either retrieval raised a store error.
        """
        errors: list[EntityStoreError] = []
        results = []
        for future in (entities_future, transactions_future):
            try:
                results.append(future.result())
            except EntityStoreError as exc:
                errors.append(exc)
        if errors:
            self._logger.error(
                f"Retrieval failed for the {kind} report: {errors[0]}"
            )
            raise RetrievalFailure(
                kind,
                f"Could not retrieve {kind} data: {errors[0]}",
            ) from errors[0]
        entities, transactions = results
        return list(entities), list(transactions)


__all__ = ["BuildReportUseCase", "DEFAULT_MAX_WORKERS"]
