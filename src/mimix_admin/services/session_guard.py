"""Session guard for protected pages."""

import logging
from dataclasses import dataclass

from mimix_admin.adapters.credential_store import CredentialStore
from mimix_admin.services.ui import Navigator

_logger = logging.getLogger(__name__)


@dataclass
class SessionGuard:
    """Gatekeeper for stored credentials and redirects to the login page."""

    credential_store: CredentialStore
    navigator: Navigator
    login_page: str = "index.html"

    def require_session(self) -> bool:
        """Return True when a token is stored, otherwise redirect to login."""
        if self.credential_store.get_token():
            return True
        self.navigator.redirect(self.login_page)
        return False

    def display_name(self) -> str:
        """Return the stored user's name for the page header."""
        user = self.credential_store.get_user()
        return user.username if user and user.username else "User"

    def authorization_header(self) -> dict[str, str]:
        """Return the bearer header for the stored token."""
        token = self.credential_store.get_token()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def handle_unauthorized(self) -> None:
        """Drop the expired session and send the user back to login."""
        _logger.warning("Session rejected by backend; clearing credentials")
        self.credential_store.clear()
        self.navigator.redirect(self.login_page)

    def logout(self) -> None:
        """Clear all stored state and go to the login page."""
        self.credential_store.clear()
        self.navigator.redirect(self.login_page)
