"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mimix_admin.adapters.console_ui import ConsolePrompter, HistoryNavigator
from mimix_admin.adapters.credential_store import (
    CredentialStore,
    JsonFileCredentialStore,
)
from mimix_admin.adapters.mimix_api_client import HttpxMimixApiClient, MimixApiClient
from mimix_admin.app_logging import configure_logging
from mimix_admin.config import Settings, normalize_base_url
from mimix_admin.services.auth_flows import LoginFlow, RegistrationFlow
from mimix_admin.services.dashboard import DashboardController
from mimix_admin.services.dates import DisplayFormatter
from mimix_admin.services.modal_forms import (
    OBJECT_FORM_FIELDS,
    REQUEST_FORM_FIELDS,
    ModalFormController,
)
from mimix_admin.services.objects import ObjectListController
from mimix_admin.services.requests import RequestListController
from mimix_admin.services.session_guard import SessionGuard
from mimix_admin.services.ui import Navigator, UserPrompter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    api_client: MimixApiClient
    credential_store: CredentialStore
    session_guard: SessionGuard
    dashboard: DashboardController
    login_flow: LoginFlow
    registration_flow: RegistrationFlow
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    prompter: UserPrompter | None = None,
    navigator: Navigator | None = None,
    settings: Settings | None = None,
    credential_store: CredentialStore | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    prompter = prompter or ConsolePrompter()
    navigator = navigator or HistoryNavigator()
    store = credential_store or JsonFileCredentialStore.create(
        resolved_settings.credentials_path
    )
    session_guard = SessionGuard(
        credential_store=store,
        navigator=navigator,
        login_page=resolved_settings.login_page,
    )
    api_client = HttpxMimixApiClient.create(
        base_url=normalize_base_url(resolved_settings.api_base_url),
        auth_headers=session_guard.authorization_header,
        timeout=resolved_settings.http_timeout_seconds,
    )
    formatter = DisplayFormatter(
        date_format=resolved_settings.date_display_format,
        datetime_format=resolved_settings.datetime_display_format,
    )
    objects = ObjectListController(
        api_client=api_client,
        session_guard=session_guard,
        prompter=prompter,
        formatter=formatter,
        page_size=resolved_settings.page_size,
    )
    requests = RequestListController(
        api_client=api_client,
        session_guard=session_guard,
        prompter=prompter,
        formatter=formatter,
        page_size=resolved_settings.page_size,
    )

    async def object_created() -> None:
        await dashboard.object_created()

    async def request_created() -> None:
        await dashboard.request_created()

    object_form = ModalFormController(
        field_names=OBJECT_FORM_FIELDS,
        create=api_client.create_object,
        on_created=object_created,
        session_guard=session_guard,
        prompter=prompter,
        success_message="Object created successfully!",
        failure_log="Error creating object",
    )
    request_form = ModalFormController(
        field_names=REQUEST_FORM_FIELDS,
        create=api_client.create_request,
        on_created=request_created,
        session_guard=session_guard,
        prompter=prompter,
        success_message="Request created successfully!",
        failure_log="Error creating request",
    )
    dashboard = DashboardController(
        session_guard=session_guard,
        objects=objects,
        requests=requests,
        object_form=object_form,
        request_form=request_form,
    )
    login_flow = LoginFlow(
        api_client=api_client,
        credential_store=store,
        navigator=navigator,
        dashboard_page=resolved_settings.dashboard_page,
        redirect_delay_seconds=resolved_settings.redirect_delay_seconds,
    )
    registration_flow = RegistrationFlow(
        api_client=api_client,
        navigator=navigator,
        prompter=prompter,
        login_page=resolved_settings.login_page,
        redirect_delay_seconds=resolved_settings.redirect_delay_seconds,
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        api_client=api_client,
        credential_store=store,
        session_guard=session_guard,
        dashboard=dashboard,
        login_flow=login_flow,
        registration_flow=registration_flow,
        close_resources=close_resources,
    )
