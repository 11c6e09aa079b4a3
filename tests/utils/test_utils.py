"""Tests for generic helpers."""

from ledgerbook.utils.utils import get_project_root


def test_get_project_root_contains_package() -> None:
    """The project root should hold the ledgerbook package."""
    root = get_project_root()

    assert (root / "ledgerbook" / "__init__.py").exists()
