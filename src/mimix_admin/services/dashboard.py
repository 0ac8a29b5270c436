"""Dashboard page: both tables, both creation dialogs and the tab bar."""

from dataclasses import dataclass

from mimix_admin.services.modal_forms import ModalFormController
from mimix_admin.services.objects import ObjectListController
from mimix_admin.services.requests import RequestListController
from mimix_admin.services.session_guard import SessionGuard

OBJECTS_TAB = "objects"
REQUESTS_TAB = "requests"


@dataclass
class DashboardController:
    """Wires the page-level interactions of the dashboard."""

    session_guard: SessionGuard
    objects: ObjectListController
    requests: RequestListController
    object_form: ModalFormController
    request_form: ModalFormController
    active_tab: str = OBJECTS_TAB
    user_display: str = ""

    async def load(self) -> bool:
        """Guard the page, show the user and load the objects table."""
        if not self.session_guard.require_session():
            return False
        self.user_display = self.session_guard.display_name()
        await self.objects.fetch()
        return True

    async def switch_tab(self, tab: str) -> None:
        """Activate a tab; the requests tab is re-fetched on every switch."""
        if tab not in {OBJECTS_TAB, REQUESTS_TAB}:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab
        if tab == REQUESTS_TAB:
            await self.requests.fetch()

    async def search(self, text: str) -> bool:
        """Search the table of the active tab (button click or Enter)."""
        if self.active_tab == REQUESTS_TAB:
            return await self.requests.fetch(text)
        return await self.objects.fetch(text)

    async def object_created(self) -> None:
        """Show the objects tab with fresh data after a creation."""
        await self.switch_tab(OBJECTS_TAB)
        await self.objects.fetch()

    async def request_created(self) -> None:
        """Show the requests tab (which re-fetches) after a creation."""
        await self.switch_tab(REQUESTS_TAB)

    def logout(self) -> None:
        """Clear the session and return to login."""
        self.session_guard.logout()
