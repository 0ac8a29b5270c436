"""Tests for dashboard wiring."""

import asyncio

import pytest

from mimix_admin.services.dashboard import DashboardController
from mimix_admin.services.modal_forms import (
    OBJECT_FORM_FIELDS,
    REQUEST_FORM_FIELDS,
    ModalFormController,
)
from tests.conftest import InMemoryCredentialStore, make_object, make_request


@pytest.fixture
def dashboard(
    api_client, session_guard, prompter, objects_controller, requests_controller
) -> DashboardController:
    async def object_created() -> None:
        await board.object_created()

    async def request_created() -> None:
        await board.request_created()

    board = DashboardController(
        session_guard=session_guard,
        objects=objects_controller,
        requests=requests_controller,
        object_form=ModalFormController(
            field_names=OBJECT_FORM_FIELDS,
            create=api_client.create_object,
            on_created=object_created,
            session_guard=session_guard,
            prompter=prompter,
            success_message="Object created successfully!",
        ),
        request_form=ModalFormController(
            field_names=REQUEST_FORM_FIELDS,
            create=api_client.create_request,
            on_created=request_created,
            session_guard=session_guard,
            prompter=prompter,
            success_message="Request created successfully!",
        ),
    )
    return board


def test_load_shows_user_and_fetches_objects(api_client, dashboard) -> None:
    api_client.objects = [make_object()]

    assert asyncio.run(dashboard.load())

    assert dashboard.user_display == "alice"
    assert api_client.call_names() == ["search_objects"]


def test_load_without_token_redirects_before_fetching(
    api_client, dashboard, navigator
) -> None:
    dashboard.session_guard.credential_store = InMemoryCredentialStore()

    assert asyncio.run(dashboard.load()) is False

    assert navigator.pages == ["index.html"]
    assert api_client.calls == []


def test_switching_to_requests_fetches_requests(api_client, dashboard) -> None:
    api_client.requests = [make_request()]

    asyncio.run(dashboard.switch_tab("requests"))
    asyncio.run(dashboard.search("pgm"))

    assert dashboard.active_tab == "requests"
    assert api_client.calls == [("search_requests", ""), ("search_requests", "pgm")]


def test_created_request_switches_to_requests_tab(api_client, dashboard) -> None:
    dashboard.request_form.set_field("obj_name", "PGM001")

    asyncio.run(dashboard.request_form.submit())

    assert dashboard.active_tab == "requests"
    assert api_client.call_names() == ["create_request", "search_requests"]


def test_created_object_refreshes_objects_tab(api_client, dashboard) -> None:
    asyncio.run(dashboard.switch_tab("requests"))
    dashboard.object_form.set_field("obj", "PGM002")

    asyncio.run(dashboard.object_form.submit())

    assert dashboard.active_tab == "objects"
    assert api_client.call_names() == [
        "search_requests",
        "create_object",
        "search_objects",
    ]


def test_unknown_tab_is_rejected(dashboard) -> None:
    with pytest.raises(ValueError):
        asyncio.run(dashboard.switch_tab("settings"))
