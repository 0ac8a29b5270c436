"""User-facing ports implemented by the embedding UI."""

from typing import Protocol


class UserPrompter(Protocol):
    """Blocking notices and confirmations."""

    def alert(self, message: str) -> None:
        """Show a blocking notice."""

    def confirm(self, message: str) -> bool:
        """Ask the user to confirm an action."""


class Navigator(Protocol):
    """Page navigation."""

    def redirect(self, page: str) -> None:
        """Navigate to a page."""
