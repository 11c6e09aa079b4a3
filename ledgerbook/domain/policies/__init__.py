"""Domain policies package."""

from .deletion_guard import (
    can_delete,
    can_delete_expense_head,
    can_delete_party,
    count_references,
)

__all__ = [
    "can_delete",
    "can_delete_party",
    "can_delete_expense_head",
    "count_references",
]
