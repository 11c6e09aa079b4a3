"""Tests for the init_store_cli adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from ledgerbook.adapters import init_store_cli


def test_main_prepares_schema_and_prints_tables(monkeypatch, capsys):
    """The CLI should create tables on the configured engine."""
    engine = SimpleNamespace(url="sqlite:///ledger.db")
    adapter = MagicMock()
    adapter.get_ledger_engine.return_value = engine
    prepared = []

    monkeypatch.setattr(init_store_cli, "get_app_logger", MagicMock)
    monkeypatch.setattr(
        init_store_cli,
        "SqlAlchemyDatabaseEngineAdapter",
        lambda: adapter,
    )

    def _fake_prepare(target):
        prepared.append(target)
        return ["expense_heads", "parties"]

    monkeypatch.setattr(init_store_cli, "prepare_schema", _fake_prepare)

    init_store_cli.main()

    assert prepared == [engine]
    captured = capsys.readouterr()
    assert "Ledger schema ready: expense_heads, parties" in captured.out
