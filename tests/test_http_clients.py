"""Tests for the HTTP-based Mimix API client."""

import asyncio
import json
from uuid import uuid4

import httpx
import pytest

from mimix_admin.adapters.mimix_api_client import (
    HttpxMimixApiClient,
    MimixApiError,
    MimixDecodeError,
    MimixTransportError,
    MimixUnauthorizedError,
)


def _client(handler, token: str | None = "jwt-token") -> HttpxMimixApiClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return HttpxMimixApiClient(
        base_url="https://mimix.test",
        http_client=httpx.AsyncClient(transport=transport),
        auth_headers=lambda: headers,
    )


def _object_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "obj": "PGM001",
        "obj_type": "*PGM",
        "promote_date": "2024-03-15T00:00:00Z",
        "obj_ver": "1.0",
        "lib": "PRODLIB",
        "lib_id": "00000000-0000-0000-0000-000000000000",
        "mimix_status": "on progress",
        "developer": "alice",
        "keterangan": "",
        "updated_at": "0001-01-01T00:00:00Z",
    }
    row.update(overrides)
    return row


def test_login_posts_credentials_without_bearer() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/login"
        assert "Authorization" not in request.headers
        assert json.loads(request.content) == {"username": "alice", "pass": "pw"}
        return httpx.Response(
            200,
            json={
                "access_token": "jwt",
                "user": {"id": str(uuid4()), "username": "alice", "job": "dev"},
            },
        )

    result = asyncio.run(_client(handler, token=None).login("alice", "pw"))

    assert result.access_token == "jwt"
    assert result.user.username == "alice"


def test_login_rejection_is_not_treated_as_expired_session() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "invalid username or password"})

    with pytest.raises(MimixApiError) as excinfo:
        asyncio.run(_client(handler, token=None).login("alice", "bad"))

    assert not isinstance(excinfo.value, MimixUnauthorizedError)
    assert excinfo.value.message == "invalid username or password"


def test_create_user_unwraps_user_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        assert payload["confirm_password"] == "pw"
        return httpx.Response(201, json={"user": {"username": "carol", "job": "cmt"}})

    user = asyncio.run(
        _client(handler, token=None).create_user("carol", "cmt", "pw", "pw")
    )

    assert user.username == "carol"
    assert user.id is None


def test_search_objects_sends_bearer_and_encodes_query() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[_object_row()])

    objects = asyncio.run(_client(handler).search_objects(" my lib/pgm "))

    assert seen[0].headers["Authorization"] == "Bearer jwt-token"
    assert seen[0].url.raw_path == b"/api/obj/search/my%20lib%2Fpgm"
    assert objects[0].mimix_status == "on progress"
    assert objects[0].promote_date is not None
    assert objects[0].updated_at is None
    assert objects[0].lib_id is None


def test_search_without_query_and_null_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/obj_req/search"
        return httpx.Response(200, content=b"null")

    assert asyncio.run(_client(handler).search_requests("   ")) == []


def test_null_text_columns_are_read_as_empty_strings() -> None:
    request_row = {
        "id": str(uuid4()),
        "obj_name": "PGM001",
        "requester": "bob",
        "developer": None,
        "req_status": "pending",
        "promote_status": None,
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if "obj_req" in request.url.path:
            return httpx.Response(200, json=[request_row])
        return httpx.Response(200, json=[_object_row(), _object_row(keterangan=None)])

    client = _client(handler)
    objects = asyncio.run(client.search_objects())
    requests = asyncio.run(client.search_requests())

    assert len(objects) == 2
    assert objects[1].keterangan == ""
    assert requests[0].developer == ""
    assert requests[0].promote_status == ""


def test_unauthorized_response_raises_dedicated_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401)

    with pytest.raises(MimixUnauthorizedError):
        asyncio.run(_client(handler).delete_object(uuid4()))


def test_error_body_message_and_fallback() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "PATCH":
            return httpx.Response(404, json={"error": "object not found"})
        return httpx.Response(500, text="boom")

    client = _client(handler)
    with pytest.raises(MimixApiError) as patch_error:
        asyncio.run(client.update_object_info(uuid4(), {"obj": "X"}))
    with pytest.raises(MimixApiError) as delete_error:
        asyncio.run(client.delete_request(uuid4()))

    assert patch_error.value.message == "object not found"
    assert patch_error.value.status_code == 404
    assert delete_error.value.message == "Failed to delete request"


def test_transport_failure_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MimixTransportError) as excinfo:
        asyncio.run(_client(handler).search_objects())

    assert "connection refused" in excinfo.value.message


def test_invalid_json_is_a_decode_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(MimixDecodeError):
        asyncio.run(_client(handler).search_objects())


def test_mutation_paths() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json={"message": "ok"})

    client = _client(handler)
    object_id = uuid4()
    asyncio.run(client.create_object({"obj": "PGM001"}))
    asyncio.run(client.create_request({"obj_name": "PGM001"}))
    asyncio.run(client.update_request_info(object_id, {"req_status": "completed"}))
    asyncio.run(client.add_object_to_request(object_id))
    asyncio.run(client.convert_request(object_id))
    asyncio.run(client.update_object_status("PGM001", "done"))

    assert seen == [
        ("POST", "/api/add_mimix_obj"),
        ("POST", "/api/create_obj_req"),
        ("PATCH", f"/api/update_obj_req_info/{object_id}"),
        ("POST", f"/api/add_obj_to_obj_req/{object_id}"),
        ("POST", f"/api/convert_obj_req/{object_id}"),
        ("PATCH", "/api/update_mimix_obj_status/PGM001"),
    ]
