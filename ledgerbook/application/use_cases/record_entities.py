"""Use cases to record and list ledger entities."""

from datetime import date

from ledgerbook.application.ports.entity_store import EntityStorePort
from ledgerbook.application.ports.identity import IdentityProviderPort
from ledgerbook.application.use_cases.user_context import (
    require_current_user,
)
from ledgerbook.domain.constants import (
    EXPENSE_HEAD,
    EXPENSE_TRANSACTION,
    PARTY,
    PARTY_TRANSACTION,
)
from ledgerbook.domain.models import EntityCatalog, TransactionLedger
from ledgerbook.domain.services.reporting import (
    build_entity_index,
    join_expense_transactions,
    join_party_transactions,
    order_transactions,
)
from ledgerbook.domain.services.validation import (
    normalize_description,
    parse_iso_date,
    require_text,
    validate_amount,
    validate_category,
)
from ledgerbook.infrastructure.logging.logger import get_app_logger


class RecordEntitiesUseCase:
    """Validate form input and create ledger records in the store."""

    def __init__(
        self,
        entity_store: EntityStorePort,
        identity_provider: IdentityProviderPort,
        logger=None,
    ) -> None:
        self._entity_store = entity_store
        self._identity_provider = identity_provider
        self._logger = logger or get_app_logger()

    def add_party(self, name: str, town: str) -> str:
        """Create a party; both name and town are required."""
        fields = {
            "name": require_text(name, "name"),
            "town": require_text(town, "town"),
        }
        return self._create(PARTY, fields)

    def add_expense_head(self, name: str, category: str) -> str:
        """Create an expense head in one of the fixed categories."""
        fields = {
            "name": require_text(name, "name"),
            "category": validate_category(category),
        }
        return self._create(EXPENSE_HEAD, fields)

    def add_party_transaction(
        self,
        party_id: str,
        amount,
        is_paid: bool,
        transaction_date: date | str,
        description: str | None = None,
    ) -> str:
        """Record money given to (``is_paid``) or received from a party."""
        fields = {
            "party_id": require_text(party_id, "party_id"),
            "amount": validate_amount(amount),
            "is_paid": bool(is_paid),
            "date": parse_iso_date(transaction_date, "date"),
            "description": normalize_description(description),
        }
        return self._create(PARTY_TRANSACTION, fields)

    def add_expense_transaction(
        self,
        expense_head_id: str,
        party_id: str | None,
        amount,
        transaction_date: date | str,
        description: str | None = None,
    ) -> str:
        """Record an expense against an expense head and optional party."""
        fields = {
            "expense_head_id": require_text(expense_head_id, "expense_head_id"),
            "party_id": (party_id or "").strip() or None,
            "amount": validate_amount(amount),
            "date": parse_iso_date(transaction_date, "date"),
            "description": normalize_description(description),
        }
        return self._create(EXPENSE_TRANSACTION, fields)

    def _create(self, kind: str, fields: dict) -> str:
        user = require_current_user(self._identity_provider)
        entity_id = self._entity_store.create_entity(kind, user.id, fields)
        self._logger.info(f"Created {kind} {entity_id}")
        return entity_id


class ListEntitiesUseCase:
    """Return the user's parties and expense heads sorted by name."""

    def __init__(
        self,
        entity_store: EntityStorePort,
        identity_provider: IdentityProviderPort,
    ) -> None:
        self._entity_store = entity_store
        self._identity_provider = identity_provider

    def execute(self) -> EntityCatalog:
        user = require_current_user(self._identity_provider)
        parties = self._entity_store.list_entities(PARTY, user.id)
        heads = self._entity_store.list_entities(EXPENSE_HEAD, user.id)
        return EntityCatalog(
            parties=tuple(sorted(parties, key=_name_key)),
            expense_heads=tuple(sorted(heads, key=_name_key)),
        )


class ListTransactionsUseCase:
    """Return the user's transactions joined to their parties and heads.

    Rows whose party or expense head is gone are joined to the Unknown
    placeholders so they can still be deleted.
    """

    def __init__(
        self,
        entity_store: EntityStorePort,
        identity_provider: IdentityProviderPort,
    ) -> None:
        self._entity_store = entity_store
        self._identity_provider = identity_provider

    def execute(self) -> TransactionLedger:
        user = require_current_user(self._identity_provider)
        store = self._entity_store
        party_rows, _ = join_party_transactions(
            order_transactions(
                store.list_transactions(PARTY_TRANSACTION, user.id)
            ),
            build_entity_index(store.list_entities(PARTY, user.id)),
        )
        expense_rows, _ = join_expense_transactions(
            order_transactions(
                store.list_transactions(EXPENSE_TRANSACTION, user.id)
            ),
            build_entity_index(store.list_entities(EXPENSE_HEAD, user.id)),
        )
        return TransactionLedger(
            party_rows=tuple(party_rows),
            expense_rows=tuple(expense_rows),
        )


def _name_key(entity) -> tuple[str, str]:
    return (entity.name.lower(), entity.id)


__all__ = [
    "RecordEntitiesUseCase",
    "ListEntitiesUseCase",
    "ListTransactionsUseCase",
]
