"""SQLAlchemy table definitions for the ledger store."""

from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.types import TypeDecorator

from ledgerbook.domain.constants import (
    AMOUNT_SCALE,
    EXPENSE_HEAD,
    EXPENSE_TRANSACTION,
    PARTY,
    PARTY_TRANSACTION,
)
from ledgerbook.utils.decimal_utils import coerce_decimal


class ScaledAmount(TypeDecorator):
    """Exact Decimal stored as an integer count of ten-thousandths.

    Values are never converted through float, so SQLite and PostgreSQL read
    back the Decimal that was written.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        scaled = coerce_decimal(value).scaleb(AMOUNT_SCALE)
        if scaled != scaled.to_integral_value():
            raise ValueError(
                f"Amount {value} has more than {AMOUNT_SCALE} decimal places"
            )
        return int(scaled)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(int(value)).scaleb(-AMOUNT_SCALE)


metadata = MetaData()

parties = Table(
    "parties",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("town", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

expense_heads = Table(
    "expense_heads",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("category", String(32), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

party_transactions = Table(
    "party_transactions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("party_id", String(36), nullable=False, index=True),
    Column("amount", ScaledAmount(), nullable=False),
    Column("is_paid", Boolean, nullable=False),
    Column("date", Date, nullable=False, index=True),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

expense_transactions = Table(
    "expense_transactions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("expense_head_id", String(36), nullable=False, index=True),
    Column("party_id", String(36), nullable=True),
    Column("amount", ScaledAmount(), nullable=False),
    Column("date", Date, nullable=False, index=True),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

TABLES = {
    PARTY: parties,
    EXPENSE_HEAD: expense_heads,
    PARTY_TRANSACTION: party_transactions,
    EXPENSE_TRANSACTION: expense_transactions,
}

# Column narrowed by a report's dimension filter.
DIMENSION_COLUMNS = {
    PARTY_TRANSACTION: "party_id",
    EXPENSE_TRANSACTION: "expense_head_id",
}


def prepare_schema(engine: Engine) -> list[str]:
    """Create missing ledger tables and return every table name."""
    metadata.create_all(engine)
    return sorted(metadata.tables)


__all__ = [
    "ScaledAmount",
    "metadata",
    "parties",
    "expense_heads",
    "party_transactions",
    "expense_transactions",
    "TABLES",
    "DIMENSION_COLUMNS",
    "prepare_schema",
]
