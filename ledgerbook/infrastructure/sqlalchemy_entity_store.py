"""SQLAlchemy-backed entity store for ledger records."""

from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any
import uuid

from sqlalchemy import delete, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ledgerbook.application.ports.database import DatabaseEnginePort
from ledgerbook.application.ports.entity_store import EntityStorePort
from ledgerbook.domain.constants import (
    EXPENSE_HEAD,
    EXPENSE_TRANSACTION,
    PARTY,
    PARTY_TRANSACTION,
    TRANSACTION_KINDS,
)
from ledgerbook.domain.errors import (
    EntityNotFoundError,
    StoreAuthorizationError,
    StoreUnavailableError,
    ValidationFailure,
)
from ledgerbook.domain.models import (
    ExpenseHead,
    ExpenseTransaction,
    Party,
    PartyTransaction,
)
from ledgerbook.domain.services.validation import validate_amount
from ledgerbook.infrastructure.schema import (
    DIMENSION_COLUMNS,
    TABLES,
    expense_transactions,
    party_transactions,
)
from ledgerbook.utils.decimal_utils import coerce_decimal


# Entity kinds referenced by each transaction kind: column -> (kind, required)
_REFERENCES = {
    PARTY_TRANSACTION: {"party_id": (PARTY, True)},
    EXPENSE_TRANSACTION: {
        "expense_head_id": (EXPENSE_HEAD, True),
        "party_id": (PARTY, False),
    },
}

# Transactions whose presence blocks deleting an entity.
_GUARDS = {
    PARTY: (party_transactions, "party_id"),
    EXPENSE_HEAD: (expense_transactions, "expense_head_id"),
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyEntityStore(EntityStorePort):
    """Entity store backed by SQLAlchemy Core tables."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            clock: Source of creation timestamps.
            id_factory: Source of record identifiers.
        """
        self._db_port = db_port
        self._clock = clock
        self._id_factory = id_factory

    def list_transactions(
        self,
        kind: str,
        user_id: str,
        date_from: date | None = None,
        date_to: date | None = None,
        dimension_id: str | None = None,
    ) -> list[PartyTransaction | ExpenseTransaction]:
        if kind not in TRANSACTION_KINDS:
            raise ValidationFailure(f"Not a transaction kind: {kind!r}")
        table = TABLES[kind]
        query = select(table).where(table.c.user_id == user_id)
        if date_from is not None:
            query = query.where(table.c.date >= date_from)
        if date_to is not None:
            query = query.where(table.c.date <= date_to)
        if dimension_id is not None:
            column = table.c[DIMENSION_COLUMNS[kind]]
            query = query.where(column == dimension_id)
        query = query.order_by(
            table.c.date.desc(),
            table.c.created_at.desc(),
            table.c.id.desc(),
        )
        rows = self._fetch_all(query)
        return [_to_model(kind, row) for row in rows]

    def list_entities(
        self,
        kind: str,
        user_id: str,
    ) -> list[Party | ExpenseHead]:
        if kind not in (PARTY, EXPENSE_HEAD):
            raise ValidationFailure(f"Not an entity kind: {kind!r}")
        table = TABLES[kind]
        query = (
            select(table)
            .where(table.c.user_id == user_id)
            .order_by(table.c.name, table.c.id)
        )
        rows = self._fetch_all(query)
        return [_to_model(kind, row) for row in rows]

    def create_entity(
        self,
        kind: str,
        user_id: str,
        fields: dict[str, Any],
    ) -> str:
        table = self._table_for(kind)
        allowed = set(table.c.keys()) - {"id", "user_id", "created_at"}
        unknown = set(fields) - allowed
        if unknown:
            raise ValidationFailure(
                f"Unknown fields for {kind}: {', '.join(sorted(unknown))}"
            )
        if "amount" in fields:
            fields = {**fields, "amount": validate_amount(fields["amount"])}
        entity_id = self._id_factory()
        values = {
            **fields,
            "id": entity_id,
            "user_id": user_id,
            "created_at": self._clock(),
        }
        try:
            with self._engine().begin() as conn:
                self._check_references(conn, kind, user_id, fields)
                conn.execute(table.insert().values(**values))
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(
                f"Could not create {kind}: {exc}"
            ) from exc
        return entity_id

    def delete_entity(self, kind: str, user_id: str, entity_id: str) -> bool:
        """Delete a record owned by the user.

        Parties and expense heads are removed with a conditional delete that
        skips them while a transaction references them.

        Returns:
            bool: False when a referencing transaction blocked the delete.

        Raises:
            EntityNotFoundError: When the record does not exist.
            StoreAuthorizationError: When another user owns the record.
        """
        table = self._table_for(kind)
        try:
            with self._engine().begin() as conn:
                self._check_owner(conn, kind, entity_id, user_id)
                stmt = delete(table).where(
                    table.c.id == entity_id,
                    table.c.user_id == user_id,
                )
                if kind in _GUARDS:
                    guard_table, guard_column = _GUARDS[kind]
                    stmt = stmt.where(
                        ~select(guard_table.c.id)
                        .where(guard_table.c[guard_column] == entity_id)
                        .exists()
                    )
                deleted = conn.execute(stmt).rowcount == 1
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(
                f"Could not delete {kind} {entity_id}: {exc}"
            ) from exc
        return deleted

    def _engine(self) -> Engine:
        """Return the ledger engine, or raise when it cannot be configured."""
        try:
            return self._db_port.get_ledger_engine()
        except (RuntimeError, SQLAlchemyError) as exc:
            raise StoreUnavailableError(
                f"Ledger store is not available: {exc}"
            ) from exc

    def _fetch_all(self, query) -> list:
        try:
            with self._engine().connect() as conn:
                return conn.execute(query).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Ledger query failed: {exc}") from exc

    def _check_references(
        self,
        conn: Connection,
        kind: str,
        user_id: str,
        fields: dict[str, Any],
    ) -> None:
        for column, (ref_kind, required) in _REFERENCES.get(kind, {}).items():
            ref_id = fields.get(column)
            if ref_id is None:
                if required:
                    raise ValidationFailure(f"{column} is required")
                continue
            self._check_owner(conn, ref_kind, ref_id, user_id)

    @staticmethod
    def _check_owner(
        conn: Connection,
        kind: str,
        entity_id: str,
        user_id: str,
    ) -> None:
        table = TABLES[kind]
        owner = conn.execute(
            select(table.c.user_id).where(table.c.id == entity_id)
        ).scalar_one_or_none()
        if owner is None:
            raise EntityNotFoundError(f"No {kind} with id {entity_id}")
        if owner != user_id:
            raise StoreAuthorizationError(
                f"{kind} {entity_id} belongs to another user"
            )

    @staticmethod
    def _table_for(kind: str):
        if kind not in TABLES:
            raise ValidationFailure(f"Unknown record kind: {kind!r}")
        return TABLES[kind]


def _to_model(kind: str, row) -> Any:
    """Map a result row to its domain model."""
    if kind == PARTY:
        return Party(
            id=row.id,
            name=row.name,
            town=row.town,
            user_id=row.user_id,
            created_at=row.created_at,
        )
    if kind == EXPENSE_HEAD:
        return ExpenseHead(
            id=row.id,
            name=row.name,
            category=row.category,
            user_id=row.user_id,
            created_at=row.created_at,
        )
    if kind == PARTY_TRANSACTION:
        return PartyTransaction(
            id=row.id,
            party_id=row.party_id,
            amount=coerce_decimal(row.amount),
            is_paid=bool(row.is_paid),
            date=row.date,
            user_id=row.user_id,
            description=row.description,
            created_at=row.created_at,
        )
    return ExpenseTransaction(
        id=row.id,
        expense_head_id=row.expense_head_id,
        amount=coerce_decimal(row.amount),
        date=row.date,
        user_id=row.user_id,
        party_id=row.party_id,
        description=row.description,
        created_at=row.created_at,
    )


__all__ = ["SqlAlchemyEntityStore"]
