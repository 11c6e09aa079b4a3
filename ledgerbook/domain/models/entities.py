"""Domain models for ledger entities and transactions."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class UserIdentity:
    """Acting user returned by the identity provider."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class Party:
    """Counterparty for money exchanged outside expenses."""

    id: str
    name: str
    town: str
    user_id: str
    created_at: datetime | None = None

    @property
    def label(self) -> str:
        """Return ``"Name (Town)"``, or just the name without a town."""
        if self.town:
            return f"{self.name} ({self.town})"
        return self.name


@dataclass(frozen=True)
class ExpenseHead:
    """Named expense category with a fixed classification."""

    id: str
    name: str
    category: str
    user_id: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class PartyTransaction:
    """Money given to (``is_paid``) or received from a party.

    Attributes:
        amount: Non-negative amount; direction is carried by ``is_paid``.
        is_paid: True when money was given to the party.
    """

    id: str
    party_id: str
    amount: Decimal
    is_paid: bool
    date: date
    user_id: str
    description: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ExpenseTransaction:
    """Expense booked against an expense head and, optionally, a party."""

    id: str
    expense_head_id: str
    amount: Decimal
    date: date
    user_id: str
    party_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None


__all__ = [
    "UserIdentity",
    "Party",
    "ExpenseHead",
    "PartyTransaction",
    "ExpenseTransaction",
]
