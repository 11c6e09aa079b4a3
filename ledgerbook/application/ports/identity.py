"""Port for resolving the acting user."""

from typing import Protocol

from ledgerbook.domain.models import UserIdentity


class IdentityProviderPort(Protocol):
    """Port exposing the signed-in user."""

    def current_user(self) -> UserIdentity | None:
        """Return the current user, or None without a session."""


__all__ = ["IdentityProviderPort"]
