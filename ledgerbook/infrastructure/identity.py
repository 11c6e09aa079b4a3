"""Identity provider for the single account holder."""

from ledgerbook.application.ports.identity import IdentityProviderPort
from ledgerbook.domain.models import UserIdentity
from ledgerbook.infrastructure.settings import LedgerSettings


class SettingsIdentityProvider(IdentityProviderPort):
    """Resolve the acting user from ledger settings.

    There is no sign-in flow: the configured user is always signed in, and
    no user is signed in when ``LEDGER_USER_ID`` is unset.
    """

    def __init__(self, settings: LedgerSettings) -> None:
        self._settings = settings

    def current_user(self) -> UserIdentity | None:
        if not self._settings.user_id:
            return None
        return UserIdentity(
            id=self._settings.user_id,
            email=self._settings.user_email,
        )


__all__ = ["SettingsIdentityProvider"]
