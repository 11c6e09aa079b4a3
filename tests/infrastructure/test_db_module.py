"""Tests for ledger engine configuration."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import text
from sqlalchemy.pool import QueuePool

from ledgerbook.infrastructure import db as db_module


@pytest.fixture
def fresh_engine_cache(monkeypatch):
    """Start each test without a cached engine and without a .env file."""
    monkeypatch.setattr(db_module, "_ledger_engine", None)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)


@pytest.mark.parametrize(
    "db_url",
    ["sqlite://", "sqlite:///:memory:", "sqlite+pysqlite://"],
)
def test_sqlite_engine_is_usable_from_worker_threads(db_url) -> None:
    """In-memory SQLite engines can be opened outside the creating thread."""
    engine = db_module._create_engine(db_url)

    assert engine.dialect.name == "sqlite"
    def _select_one():
        with engine.connect() as connection:
            return connection.execute(text("select 1")).scalar()

    with ThreadPoolExecutor(max_workers=1) as executor:
        assert executor.submit(_select_one).result() == 1


def test_server_engine_uses_bounded_queue_pool(monkeypatch) -> None:
    """Non-SQLite URLs get a five plus five connection queue pool."""
    calls = []
    monkeypatch.setattr(
        db_module,
        "create_engine",
        lambda url, **options: calls.append((url, options)),
    )

    db_module._create_engine("postgresql://ledger@db/ledger")

    url, options = calls[0]
    assert url == "postgresql://ledger@db/ledger"
    assert options["poolclass"] is QueuePool
    assert (options["pool_size"], options["max_overflow"]) == (5, 5)
    assert "connect_args" not in options


@pytest.mark.usefixtures("fresh_engine_cache")
def test_ledger_engine_is_created_once(monkeypatch) -> None:
    """Repeated lookups reuse the engine built from LEDGER_DB_URL."""
    monkeypatch.setenv("LEDGER_DB_URL", "sqlite://")

    first = db_module.get_ledger_engine()

    monkeypatch.setenv("LEDGER_DB_URL", "sqlite:///elsewhere.db")
    assert db_module.get_ledger_engine() is first
    assert str(first.url) == "sqlite://"


@pytest.mark.usefixtures("fresh_engine_cache")
@pytest.mark.parametrize("value", [None, ""])
def test_ledger_engine_requires_a_url(monkeypatch, value) -> None:
    """An unset or empty LEDGER_DB_URL is a configuration error."""
    if value is None:
        monkeypatch.delenv("LEDGER_DB_URL", raising=False)
    else:
        monkeypatch.setenv("LEDGER_DB_URL", value)

    with pytest.raises(RuntimeError, match="LEDGER_DB_URL"):
        db_module.get_ledger_engine()

    assert db_module._ledger_engine is None


@pytest.mark.usefixtures("fresh_engine_cache")
def test_adapter_serves_the_shared_engine(monkeypatch) -> None:
    """Every adapter instance hands out the same cached engine."""
    monkeypatch.setenv("LEDGER_DB_URL", "sqlite://")

    engine = db_module.SqlAlchemyDatabaseEngineAdapter().get_ledger_engine()

    other = db_module.SqlAlchemyDatabaseEngineAdapter()
    assert other.get_ledger_engine() is engine
    assert engine is db_module.get_ledger_engine()
