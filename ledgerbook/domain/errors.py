"""Domain error taxonomy."""


class LedgerError(Exception):
    """Base class for ledger errors."""


class ValidationFailure(LedgerError, ValueError):
    """Malformed or missing input, rejected before any retrieval."""


class RetrievalFailure(LedgerError):
    """The entity store failed while retrieving data for one kind.

    Attributes:
        kind: Report section (party or expense) that could not be built.
    """

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class EntityStoreError(LedgerError, RuntimeError):
    """Error surfaced by an entity store adapter."""


class StoreUnavailableError(EntityStoreError):
    """The store could not be reached or failed while executing a query."""


class StoreAuthorizationError(EntityStoreError):
    """The record belongs to another user."""


class EntityNotFoundError(EntityStoreError):
    """A record or one of its references does not exist."""


class ConcurrentDeletionRace(LedgerError):
    """The deletion guard passed but the store refused the delete.

    A referencing transaction was most likely created between the check and
    the delete. Not retried.
    """

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(
            f"Delete of {kind} {entity_id} failed after the reference "
            "check passed"
        )
        self.kind = kind
        self.entity_id = entity_id


__all__ = [
    "LedgerError",
    "ValidationFailure",
    "RetrievalFailure",
    "EntityStoreError",
    "StoreUnavailableError",
    "StoreAuthorizationError",
    "EntityNotFoundError",
    "ConcurrentDeletionRace",
]
