"""Application use cases package."""

from .build_report import BuildReportUseCase
from .delete_entity import DeleteEntityUseCase
from .record_entities import (
    ListEntitiesUseCase,
    ListTransactionsUseCase,
    RecordEntitiesUseCase,
)
from .report_supersession import ReportRequestTracker, ReportTicket

__all__ = [
    "BuildReportUseCase",
    "DeleteEntityUseCase",
    "ListEntitiesUseCase",
    "ListTransactionsUseCase",
    "RecordEntitiesUseCase",
    "ReportRequestTracker",
    "ReportTicket",
]
