"""Port for the document store holding ledger entities.

Every call is scoped to one owning user. Adapters raise subclasses of
``EntityStoreError`` for unavailable stores, user mismatches, and missing
records.
"""

from datetime import date
from typing import Any, Protocol


class EntityStorePort(Protocol):
    """Port exposing CRUD and range queries over ledger records."""

    def list_transactions(
        self,
        kind: str,
        user_id: str,
        date_from: date | None = None,
        date_to: date | None = None,
        dimension_id: str | None = None,
    ) -> list[Any]:
        """Return the user's transactions of ``kind``, newest first.

        Args:
            kind: party_transaction or expense_transaction.
            user_id: Owning user identifier.
            date_from: Optional inclusive lower date bound.
            date_to: Optional inclusive upper date bound.
            dimension_id: Optional party id (party transactions) or expense
                head id (expense transactions).
        """

    def list_entities(self, kind: str, user_id: str) -> list[Any]:
        """Return every entity of ``kind`` owned by the user."""

    def create_entity(
        self,
        kind: str,
        user_id: str,
        fields: dict[str, Any],
    ) -> str:
        """Insert a record and return its store-assigned id."""

    def delete_entity(self, kind: str, user_id: str, entity_id: str) -> bool:
        """Delete a record; return False when the store refused it."""


__all__ = ["EntityStorePort"]
