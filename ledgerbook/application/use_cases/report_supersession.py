"""Track the latest report request so stale results are discarded."""

from dataclasses import dataclass
import threading

from ledgerbook.domain.models import ReportFilter, ReportView


@dataclass(frozen=True)
class ReportTicket:
    """Handle returned when a report computation starts."""

    report_filter: ReportFilter
    generation: int


class ReportRequestTracker:
    """Apply a computed report only while its filter is still the latest.

    Supersession is decided by filter identity: a result is applied when its
    filter equals the most recently requested one, whatever order the
    computations finish in.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self._latest_filter: ReportFilter | None = None
        self._latest_view: ReportView | None = None

    def begin(self, report_filter: ReportFilter) -> ReportTicket:
        with self._lock:
            self._generation += 1
            self._latest_filter = report_filter
            return ReportTicket(
                report_filter=report_filter,
                generation=self._generation,
            )

    def is_current(self, ticket: ReportTicket) -> bool:
        with self._lock:
            return ticket.report_filter == self._latest_filter

    def publish(self, ticket: ReportTicket, view: ReportView) -> bool:
        """Store ``view`` as the latest report unless it was superseded.

        Returns:
            bool: True when the view was applied, False when discarded.
        """
        with self._lock:
            if ticket.report_filter != self._latest_filter:
                return False
            self._latest_view = view
            return True

    @property
    def latest_view(self) -> ReportView | None:
        with self._lock:
            return self._latest_view


__all__ = ["ReportTicket", "ReportRequestTracker"]
