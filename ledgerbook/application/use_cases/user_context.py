"""Shared helper resolving the acting user for use cases."""

from ledgerbook.application.ports.identity import IdentityProviderPort
from ledgerbook.domain.errors import ValidationFailure
from ledgerbook.domain.models import UserIdentity


def require_current_user(
    identity_provider: IdentityProviderPort,
) -> UserIdentity:
    """Return the signed-in user or raise before touching the store.

    Raises:
        ValidationFailure: When no user is signed in.
    """
    user = identity_provider.current_user()
    if user is None or not user.id:
        raise ValidationFailure("No signed-in user; a user context is required")
    return user


__all__ = ["require_current_user"]
