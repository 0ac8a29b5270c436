"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from mimix_admin.adapters.credential_store import CredentialStore
from mimix_admin.adapters.mimix_api_client import MimixApiClient
from mimix_admin.config import Settings
from mimix_admin.domain.auth import LoginResult, UserRecord
from mimix_admin.domain.records import MimixObject, ObjectRequest
from mimix_admin.services.objects import ObjectListController
from mimix_admin.services.requests import RequestListController
from mimix_admin.services.session_guard import SessionGuard


def make_object(name: str = "PGM001", **overrides: object) -> MimixObject:
    values: dict[str, object] = {
        "id": uuid4(),
        "obj": name,
        "obj_type": "*PGM",
        "promote_date": datetime(2024, 3, 15, tzinfo=UTC),
        "lib": "PRODLIB",
        "obj_ver": "1.0",
        "mimix_status": "pending",
        "developer": "alice",
        "keterangan": "",
    }
    values.update(overrides)
    return MimixObject(**values)  # type: ignore[arg-type]


def make_request(name: str = "PGM001", **overrides: object) -> ObjectRequest:
    values: dict[str, object] = {
        "id": uuid4(),
        "obj_name": name,
        "requester": "bob",
        "updated_at": datetime(2024, 3, 1, 9, 30, tzinfo=UTC),
        "lib": "PRODLIB",
        "obj_ver": "1.0",
        "obj_type": "*PGM",
        "promote_date": datetime(2024, 3, 15, tzinfo=UTC),
        "developer": "alice",
        "promote_status": "",
        "req_status": "pending",
    }
    values.update(overrides)
    return ObjectRequest(**values)  # type: ignore[arg-type]


@dataclass
class FakeMimixApiClient(MimixApiClient):
    """In-memory Mimix API that records every call."""

    objects: list[MimixObject] = field(default_factory=list)
    requests: list[ObjectRequest] = field(default_factory=list)
    calls: list[tuple[str, object]] = field(default_factory=list)
    failures: dict[str, Exception] = field(default_factory=dict)
    login_result: LoginResult = field(
        default_factory=lambda: LoginResult(
            access_token="jwt-token",
            user=UserRecord(id=uuid4(), username="alice", job="dev"),
        )
    )

    def _record(self, name: str, argument: object = None) -> None:
        self.calls.append((name, argument))
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def login(self, username: str, password: str) -> LoginResult:
        self._record("login", (username, password))
        return self.login_result

    async def create_user(
        self, username: str, job: str, password: str, confirm_password: str
    ) -> UserRecord:
        self._record("create_user", (username, job, password, confirm_password))
        return UserRecord(id=uuid4(), username=username, job=job)

    async def search_objects(self, query: str = "") -> list[MimixObject]:
        self._record("search_objects", query)
        return [item for item in self.objects if query.lower() in item.obj.lower()]

    async def search_requests(self, query: str = "") -> list[ObjectRequest]:
        self._record("search_requests", query)
        return [
            item for item in self.requests if query.lower() in item.obj_name.lower()
        ]

    async def create_object(self, payload: dict[str, object]) -> dict[str, object]:
        self._record("create_object", payload)
        return dict(payload)

    async def update_object_info(
        self, object_id: UUID, payload: dict[str, object]
    ) -> dict[str, object]:
        self._record("update_object_info", (object_id, payload))
        return dict(payload)

    async def update_object_status(
        self, object_name: str, status: str
    ) -> dict[str, object]:
        self._record("update_object_status", (object_name, status))
        return {"obj": object_name, "mimix_status": status}

    async def delete_object(self, object_id: UUID) -> None:
        self._record("delete_object", object_id)
        self.objects = [item for item in self.objects if item.id != object_id]

    async def add_object_to_request(self, object_id: UUID) -> None:
        self._record("add_object_to_request", object_id)

    async def create_request(self, payload: dict[str, object]) -> dict[str, object]:
        self._record("create_request", payload)
        return dict(payload)

    async def update_request_info(
        self, request_id: UUID, payload: dict[str, object]
    ) -> dict[str, object]:
        self._record("update_request_info", (request_id, payload))
        return dict(payload)

    async def delete_request(self, request_id: UUID) -> None:
        self._record("delete_request", request_id)
        self.requests = [item for item in self.requests if item.id != request_id]

    async def convert_request(self, request_id: UUID) -> dict[str, object]:
        self._record("convert_request", request_id)
        return {"id": str(request_id)}


@dataclass
class InMemoryCredentialStore(CredentialStore):
    """Credential store kept in memory."""

    token: str | None = None
    user: UserRecord | None = None

    def get_token(self) -> str | None:
        return self.token

    def get_user(self) -> UserRecord | None:
        return self.user

    def save(self, token: str, user: UserRecord) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None


@dataclass
class RecordingPrompter:
    """Prompter that records notices and answers confirmations."""

    answer: bool = True
    alerts: list[str] = field(default_factory=list)
    confirmations: list[str] = field(default_factory=list)

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.answer


@dataclass
class RecordingNavigator:
    """Navigator that records redirects."""

    pages: list[str] = field(default_factory=list)

    def redirect(self, page: str) -> None:
        self.pages.append(page)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://mimix.test",
        redirect_delay_seconds=0,
        credentials_path="/tmp/mimix-admin-test/credentials.json",
    )


@pytest.fixture
def api_client() -> FakeMimixApiClient:
    return FakeMimixApiClient()


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore(
        token="jwt-token", user=UserRecord(id=uuid4(), username="alice", job="dev")
    )


@pytest.fixture
def prompter() -> RecordingPrompter:
    return RecordingPrompter()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def session_guard(
    credential_store: InMemoryCredentialStore, navigator: RecordingNavigator
) -> SessionGuard:
    return SessionGuard(credential_store=credential_store, navigator=navigator)


@pytest.fixture
def objects_controller(
    api_client: FakeMimixApiClient,
    session_guard: SessionGuard,
    prompter: RecordingPrompter,
) -> ObjectListController:
    return ObjectListController(
        api_client=api_client, session_guard=session_guard, prompter=prompter
    )


@pytest.fixture
def requests_controller(
    api_client: FakeMimixApiClient,
    session_guard: SessionGuard,
    prompter: RecordingPrompter,
) -> RequestListController:
    return RequestListController(
        api_client=api_client, session_guard=session_guard, prompter=prompter
    )
