"""Terminal implementations of the user-facing ports."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)


@dataclass
class ConsolePrompter:
    """Blocking notices and confirmations on a terminal."""

    read: Callable[[str], str] = input
    write: Callable[[str], None] = print

    def alert(self, message: str) -> None:
        """Show a blocking notice."""
        self.write(message)

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; anything but ``y``/``yes`` declines."""
        answer = self.read(f"{message} [y/N] ")
        return answer.strip().lower() in {"y", "yes"}


@dataclass
class HistoryNavigator:
    """Navigator that records visited pages."""

    history: list[str] = field(default_factory=list)

    @property
    def current_page(self) -> str | None:
        """Return the last page navigated to."""
        return self.history[-1] if self.history else None

    def redirect(self, page: str) -> None:
        """Navigate to a page."""
        _logger.info("Navigating to %s", page)
        self.history.append(page)
