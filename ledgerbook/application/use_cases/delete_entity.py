"""Use case to delete ledger records behind the deletion guard."""

from collections import Counter

from ledgerbook.application.ports.entity_store import EntityStorePort
from ledgerbook.application.ports.identity import IdentityProviderPort
from ledgerbook.application.use_cases.user_context import (
    require_current_user,
)
from ledgerbook.domain.constants import (
    ALL_KINDS,
    REFERENCING_TRANSACTIONS,
)
from ledgerbook.domain.errors import ConcurrentDeletionRace, ValidationFailure
from ledgerbook.domain.models import DeletionResult
from ledgerbook.domain.policies.deletion_guard import (
    can_delete,
    count_references,
)
from ledgerbook.infrastructure.logging.logger import get_app_logger


class DeleteEntityUseCase:
    """Delete parties, expense heads, and transactions.

    Parties and expense heads are only deleted when no transaction references
    them. Transactions are deleted without a check.
    """

    def __init__(
        self,
        entity_store: EntityStorePort,
        identity_provider: IdentityProviderPort,
        logger=None,
    ) -> None:
        self._entity_store = entity_store
        self._identity_provider = identity_provider
        self._logger = logger or get_app_logger()

    def can_delete(self, kind: str, entity_id: str) -> bool:
        """Return True when the record is not referenced by a transaction."""
        self._validate_kind(kind)
        if kind not in REFERENCING_TRANSACTIONS:
            return True
        user = require_current_user(self._identity_provider)
        transactions = self._referencing_transactions(kind, user.id)
        reference_field = REFERENCING_TRANSACTIONS[kind][1]
        return can_delete(entity_id, transactions, reference_field)

    def reference_counts(self, kind: str) -> Counter:
        """Return how many transactions reference each entity of ``kind``.

        Used by list views to flag rows that cannot be deleted.
        """
        self._validate_kind(kind)
        if kind not in REFERENCING_TRANSACTIONS:
            return Counter()
        user = require_current_user(self._identity_provider)
        reference_field = REFERENCING_TRANSACTIONS[kind][1]
        return Counter(
            getattr(transaction, reference_field)
            for transaction in self._referencing_transactions(kind, user.id)
        )

    def execute(self, kind: str, entity_id: str) -> DeletionResult:
        """Delete the record unless the deletion guard blocks it.

        Args:
            kind: Kind of the record to delete.
            entity_id: Identifier of the record.

        Returns:
            DeletionResult: Whether the record was deleted or blocked.

        Raises:
            ValidationFailure: On an unknown kind or a missing user.
            ConcurrentDeletionRace: When the guard passed but the store
                refused the delete.
        """
        self._validate_kind(kind)
        user = require_current_user(self._identity_provider)

        if kind in REFERENCING_TRANSACTIONS:
            transactions = self._referencing_transactions(kind, user.id)
            reference_field = REFERENCING_TRANSACTIONS[kind][1]
            references = count_references(
                entity_id,
                transactions,
                reference_field,
            )
            if references:
                self._logger.warning(
                    f"Refusing to delete {kind} {entity_id}: "
                    f"{references} transactions reference it"
                )
                return DeletionResult(
                    kind=kind,
                    entity_id=entity_id,
                    deleted=False,
                    blocked=True,
                    reference_count=references,
                )

        deleted = self._entity_store.delete_entity(kind, user.id, entity_id)
        if not deleted:
            if kind in REFERENCING_TRANSACTIONS:
                self._logger.error(
                    f"Store refused delete of {kind} {entity_id} after the "
                    "reference check passed"
                )
                raise ConcurrentDeletionRace(kind, entity_id)
            self._logger.warning(f"No {kind} {entity_id} to delete")
            return DeletionResult(kind=kind, entity_id=entity_id, deleted=False)

        self._logger.info(f"Deleted {kind} {entity_id}")
        return DeletionResult(kind=kind, entity_id=entity_id, deleted=True)

    def _referencing_transactions(self, kind: str, user_id: str) -> list:
        transaction_kind = REFERENCING_TRANSACTIONS[kind][0]
        return self._entity_store.list_transactions(transaction_kind, user_id)

    @staticmethod
    def _validate_kind(kind: str) -> None:
        if kind not in ALL_KINDS:
            raise ValidationFailure(f"Unknown record kind: {kind!r}")


__all__ = ["DeleteEntityUseCase"]
