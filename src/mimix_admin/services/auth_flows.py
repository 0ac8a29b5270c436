"""Login and registration form flows."""

import asyncio
import logging
from dataclasses import dataclass, field

from mimix_admin.adapters.credential_store import CredentialStore
from mimix_admin.adapters.mimix_api_client import MimixApiClient, MimixApiError
from mimix_admin.services.ui import Navigator, UserPrompter

_logger = logging.getLogger(__name__)


@dataclass
class AuthFormState:
    """Visible state of a login or registration card."""

    submit_label: str
    submit_disabled: bool = False
    succeeded: bool = False
    error_message: str = ""
    shake_count: int = 0

    @property
    def error_visible(self) -> bool:
        """Return True while an error message is shown."""
        return bool(self.error_message)

    def clear_error(self) -> None:
        """Hide the error message."""
        self.error_message = ""

    def start_loading(self, label: str) -> str:
        """Disable the submit control and return the label it replaced."""
        original = self.submit_label
        self.submit_label = label
        self.submit_disabled = True
        return original

    def fail(self, message: str, original_label: str) -> None:
        """Restore the submit control and show a shaking error."""
        self.submit_label = original_label
        self.submit_disabled = False
        self.error_message = message
        self.shake_count += 1


@dataclass
class LoginFlow:
    """Submit handler for the login form."""

    api_client: MimixApiClient
    credential_store: CredentialStore
    navigator: Navigator
    dashboard_page: str = "dashboard.html"
    redirect_delay_seconds: float = 0.5
    form: AuthFormState = field(default_factory=lambda: AuthFormState("Login"))

    async def submit(self, username: str, password: str) -> bool:
        """Log in, persist the session and open the dashboard."""
        self.form.clear_error()
        original_label = self.form.start_loading("Logging in...")
        try:
            result = await self.api_client.login(username, password)
        except MimixApiError as exc:
            _logger.warning("Login failed for %s: %s", username, exc.message)
            self.form.fail(exc.message, original_label)
            return False
        self.credential_store.save(result.access_token, result.user)
        self.form.submit_label = "Success!"
        self.form.succeeded = True
        await asyncio.sleep(self.redirect_delay_seconds)
        self.navigator.redirect(self.dashboard_page)
        return True


@dataclass
class RegistrationFlow:
    """Submit handler for the registration form."""

    api_client: MimixApiClient
    navigator: Navigator
    prompter: UserPrompter
    login_page: str = "index.html"
    redirect_delay_seconds: float = 0.5
    form: AuthFormState = field(
        default_factory=lambda: AuthFormState("Create Account")
    )

    async def submit(
        self, username: str, job: str, password: str, confirm_password: str
    ) -> bool:
        """Register a user, then send them to the login page."""
        self.form.clear_error()
        if password != confirm_password:
            self.form.error_message = "Passwords do not match!"
            return False
        original_label = self.form.start_loading("Creating Account...")
        try:
            await self.api_client.create_user(
                username, job, password, confirm_password
            )
        except MimixApiError as exc:
            _logger.warning("Registration failed for %s: %s", username, exc.message)
            self.form.fail(exc.message, original_label)
            return False
        self.form.submit_label = "Success!"
        self.form.succeeded = True
        await asyncio.sleep(self.redirect_delay_seconds)
        self.prompter.alert("Account Created Successfully! Please Log In.")
        self.navigator.redirect(self.login_page)
        return True
