"""CLI adapter creating the ledger tables.

This module wires the schema helper to the concrete database adapter and
provides a simple command-line entry point for first-time setup.
"""

from ledgerbook.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledgerbook.infrastructure.logging.logger import get_app_logger
from ledgerbook.infrastructure.schema import prepare_schema


def main() -> None:
    """Create any missing ledger table."""
    logger = get_app_logger()
    adapter = SqlAlchemyDatabaseEngineAdapter()
    engine = adapter.get_ledger_engine()
    logger.info(f"Ledger DB: {engine.url}")

    tables = prepare_schema(engine)

    print(f"Ledger schema ready: {', '.join(tables)}")


if __name__ == "__main__":  # pragma: no cover
    main()
