"""Tests for the ReportRequestTracker."""

from datetime import date
from unittest.mock import MagicMock

from ledgerbook.application.use_cases.report_supersession import (
    ReportRequestTracker,
)
from ledgerbook.domain.models import ReportFilter


def _filter(day: int) -> ReportFilter:
    return ReportFilter(
        report_kind="party",
        date_from=date(2024, 1, day),
        date_to=date(2024, 1, 31),
    )


def test_stale_result_is_discarded() -> None:
    """A result finishing after a newer request is not applied."""
    tracker = ReportRequestTracker()
    old_ticket = tracker.begin(_filter(1))
    new_ticket = tracker.begin(_filter(2))
    old_view = MagicMock(name="old")
    new_view = MagicMock(name="new")

    assert tracker.publish(new_ticket, new_view) is True
    assert tracker.publish(old_ticket, old_view) is False
    assert tracker.latest_view is new_view
    assert tracker.is_current(old_ticket) is False
    assert tracker.is_current(new_ticket) is True


def test_same_filter_requested_again_stays_current() -> None:
    """Supersession compares filters, not request order."""
    tracker = ReportRequestTracker()
    first = tracker.begin(_filter(1))
    second = tracker.begin(_filter(1))
    view = MagicMock()

    assert first.generation < second.generation
    assert tracker.publish(first, view) is True
    assert tracker.latest_view is view


def test_latest_view_starts_empty() -> None:
    """No view is available before the first publish."""
    assert ReportRequestTracker().latest_view is None
