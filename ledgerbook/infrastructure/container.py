"""Composition root for wiring infrastructure adapters."""

from ledgerbook.application.ports.database import DatabaseEnginePort
from ledgerbook.application.ports.entity_store import EntityStorePort
from ledgerbook.application.ports.identity import IdentityProviderPort
from ledgerbook.application.use_cases.build_report import BuildReportUseCase
from ledgerbook.application.use_cases.delete_entity import (
    DeleteEntityUseCase,
)
from ledgerbook.application.use_cases.record_entities import (
    ListEntitiesUseCase,
    ListTransactionsUseCase,
    RecordEntitiesUseCase,
)
from ledgerbook.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledgerbook.infrastructure.identity import SettingsIdentityProvider
from ledgerbook.infrastructure.logging.logger import get_app_logger
from ledgerbook.infrastructure.settings import LedgerSettings
from ledgerbook.infrastructure.sqlalchemy_entity_store import (
    SqlAlchemyEntityStore,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_entity_store(
    db_port: DatabaseEnginePort | None = None,
) -> EntityStorePort:
    """Return the SQL-backed entity store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyEntityStore(resolved_db)


def build_identity_provider(
    settings: LedgerSettings | None = None,
) -> IdentityProviderPort:
    """Return the identity provider for the configured user."""
    return SettingsIdentityProvider(settings or LedgerSettings.from_env())


def build_report_use_case(
    entity_store: EntityStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> BuildReportUseCase:
    """Return the report use case wired to the configured adapters."""
    resolved_settings = settings or LedgerSettings.from_env()
    return BuildReportUseCase(
        entity_store or build_entity_store(),
        build_identity_provider(resolved_settings),
        logger=get_app_logger(),
        max_workers=resolved_settings.report_workers,
    )


def build_delete_use_case(
    entity_store: EntityStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> DeleteEntityUseCase:
    """Return the guarded delete use case."""
    return DeleteEntityUseCase(
        entity_store or build_entity_store(),
        build_identity_provider(settings),
        logger=get_app_logger(),
    )


def build_record_use_case(
    entity_store: EntityStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> RecordEntitiesUseCase:
    """Return the use case creating ledger records."""
    return RecordEntitiesUseCase(
        entity_store or build_entity_store(),
        build_identity_provider(settings),
        logger=get_app_logger(),
    )


def build_list_use_case(
    entity_store: EntityStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> ListEntitiesUseCase:
    """Return the use case listing parties and expense heads."""
    return ListEntitiesUseCase(
        entity_store or build_entity_store(),
        build_identity_provider(settings),
    )


def build_transactions_use_case(
    entity_store: EntityStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> ListTransactionsUseCase:
    """Return the use case listing joined transactions."""
    return ListTransactionsUseCase(
        entity_store or build_entity_store(),
        build_identity_provider(settings),
    )


__all__ = [
    "build_database_adapter",
    "build_entity_store",
    "build_identity_provider",
    "build_report_use_case",
    "build_delete_use_case",
    "build_record_use_case",
    "build_list_use_case",
    "build_transactions_use_case",
]
