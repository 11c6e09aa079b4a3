"""Generic helpers shared across layers."""

from pathlib import Path


_PROJECT_MARKERS = ("pyproject.toml", ".git")


def get_project_root() -> Path:
    """Return the repository root directory.

    The root is the closest parent of this file containing a project marker
    (pyproject.toml or .git). Falls back to the parent of the package.

    Returns:
        Path: Absolute path to the project root.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if any((parent / marker).exists() for marker in _PROJECT_MARKERS):
            return parent
    return current.parents[2]


__all__ = ["get_project_root"]
