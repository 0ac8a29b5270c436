"""Mimix backend REST API client."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote
from uuid import UUID

import httpx
from pydantic import ValidationError

from mimix_admin.adapters.api_models import (
    CreateUserResponse,
    ErrorBody,
    LoginResponse,
    MimixObjectPayload,
    ObjectRequestPayload,
)
from mimix_admin.domain.auth import LoginResult, UserRecord
from mimix_admin.domain.records import MimixObject, ObjectRequest


class MimixApiError(Exception):
    """Raised when the backend rejects a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MimixUnauthorizedError(MimixApiError):
    """Raised when an authenticated call is answered with 401."""


class MimixTransportError(MimixApiError):
    """Raised when a request could not be sent or answered."""


class MimixDecodeError(MimixApiError):
    """Raised when a response body cannot be decoded."""


class MimixApiClient(Protocol):
    """Interface for Mimix backend interactions."""

    async def login(self, username: str, password: str) -> LoginResult:
        """Exchange credentials for an access token."""

    async def create_user(
        self, username: str, job: str, password: str, confirm_password: str
    ) -> UserRecord:
        """Register a new user account."""

    async def search_objects(self, query: str = "") -> list[MimixObject]:
        """Return Mimix objects matching the query."""

    async def search_requests(self, query: str = "") -> list[ObjectRequest]:
        """Return object requests matching the query."""

    async def create_object(self, payload: dict[str, object]) -> dict[str, object]:
        """Create a Mimix object."""

    async def update_object_info(
        self, object_id: UUID, payload: dict[str, object]
    ) -> dict[str, object]:
        """Update the editable fields of a Mimix object."""

    async def update_object_status(
        self, object_name: str, status: str
    ) -> dict[str, object]:
        """Update only the status of a Mimix object."""

    async def delete_object(self, object_id: UUID) -> None:
        """Delete a Mimix object."""

    async def add_object_to_request(self, object_id: UUID) -> None:
        """Create an object request from an existing object."""

    async def create_request(self, payload: dict[str, object]) -> dict[str, object]:
        """Create an object request."""

    async def update_request_info(
        self, request_id: UUID, payload: dict[str, object]
    ) -> dict[str, object]:
        """Update the editable fields of an object request."""

    async def delete_request(self, request_id: UUID) -> None:
        """Delete an object request."""

    async def convert_request(self, request_id: UUID) -> dict[str, object]:
        """Convert an object request into a Mimix object."""


@dataclass
class HttpxMimixApiClient(MimixApiClient):
    """HTTPX-backed Mimix API client."""

    base_url: str
    http_client: httpx.AsyncClient
    auth_headers: Callable[[], dict[str, str]]
    timeout: float = 10

    @classmethod
    def create(
        cls,
        base_url: str,
        auth_headers: Callable[[], dict[str, str]],
        timeout: float = 10,
    ) -> "HttpxMimixApiClient":
        """Create an API client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            auth_headers=auth_headers,
            timeout=timeout,
        )

    async def login(self, username: str, password: str) -> LoginResult:
        """Exchange credentials for an access token."""
        response = await self._request(
            "POST",
            "/api/login",
            fallback="Login failed",
            json={"username": username, "pass": password},
            authenticated=False,
        )
        body = _validate(LoginResponse, _json(response))
        return LoginResult(access_token=body.access_token, user=body.user.to_domain())

    async def create_user(
        self, username: str, job: str, password: str, confirm_password: str
    ) -> UserRecord:
        """Register a new user account."""
        response = await self._request(
            "POST",
            "/api/create_user",
            fallback="Registration failed",
            json={
                "username": username,
                "job": job,
                "password": password,
                "confirm_password": confirm_password,
            },
            authenticated=False,
        )
        return _validate(CreateUserResponse, _json(response)).user.to_domain()

    async def search_objects(self, query: str = "") -> list[MimixObject]:
        """Return Mimix objects matching the query."""
        response = await self._request(
            "GET",
            _search_path("/api/obj/search", query),
            fallback="Failed to fetch objects",
        )
        rows = _json(response) or []
        return [_validate(MimixObjectPayload, row).to_domain() for row in _rows(rows)]

    async def search_requests(self, query: str = "") -> list[ObjectRequest]:
        """Return object requests matching the query."""
        response = await self._request(
            "GET",
            _search_path("/api/obj_req/search", query),
            fallback="Failed to fetch requests",
        )
        rows = _json(response) or []
        return [_validate(ObjectRequestPayload, row).to_domain() for row in _rows(rows)]

    async def create_object(self, payload: dict[str, object]) -> dict[str, object]:
        """Create a Mimix object."""
        response = await self._request(
            "POST",
            "/api/add_mimix_obj",
            fallback="Failed to create object",
            json=payload,
        )
        return _json(response) or {}

    async def update_object_info(
        self, object_id: UUID, payload: dict[str, object]
    ) -> dict[str, object]:
        """Update the editable fields of a Mimix object."""
        response = await self._request(
            "PATCH",
            f"/api/update_mimix_obj_info/{object_id}",
            fallback="Failed to update info",
            json=payload,
        )
        return _json(response) or {}

    async def update_object_status(
        self, object_name: str, status: str
    ) -> dict[str, object]:
        """Update only the status of a Mimix object."""
        response = await self._request(
            "PATCH",
            f"/api/update_mimix_obj_status/{quote(object_name, safe='')}",
            fallback="Failed to update status",
            json={"mimix_status": status},
        )
        return _json(response) or {}

    async def delete_object(self, object_id: UUID) -> None:
        """Delete a Mimix object."""
        await self._request(
            "DELETE",
            f"/api/delete_mimix_obj/{object_id}",
            fallback="Failed to delete object",
        )

    async def add_object_to_request(self, object_id: UUID) -> None:
        """Create an object request from an existing object."""
        await self._request(
            "POST",
            f"/api/add_obj_to_obj_req/{object_id}",
            fallback="Failed to add to request",
        )

    async def create_request(self, payload: dict[str, object]) -> dict[str, object]:
        """Create an object request."""
        response = await self._request(
            "POST",
            "/api/create_obj_req",
            fallback="Failed to create request",
            json=payload,
        )
        return _json(response) or {}

    async def update_request_info(
        self, request_id: UUID, payload: dict[str, object]
    ) -> dict[str, object]:
        """Update the editable fields of an object request."""
        response = await self._request(
            "PATCH",
            f"/api/update_obj_req_info/{request_id}",
            fallback="Failed to update request",
            json=payload,
        )
        return _json(response) or {}

    async def delete_request(self, request_id: UUID) -> None:
        """Delete an object request."""
        await self._request(
            "DELETE",
            f"/api/delete_obj_req/{request_id}",
            fallback="Failed to delete request",
        )

    async def convert_request(self, request_id: UUID) -> dict[str, object]:
        """Convert an object request into a Mimix object."""
        response = await self._request(
            "POST",
            f"/api/convert_obj_req/{request_id}",
            fallback="Failed to convert request",
        )
        return _json(response) or {}

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(  # noqa: PLR0913
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        json: dict[str, object] | None = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        headers = dict(self.auth_headers()) if authenticated else {}
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise MimixTransportError(str(exc) or fallback) from exc
        if authenticated and response.status_code == httpx.codes.UNAUTHORIZED:
            raise MimixUnauthorizedError(
                _error_message(response, "Unauthorized"), status_code=401
            )
        if response.is_error:
            raise MimixApiError(
                _error_message(response, fallback), status_code=response.status_code
            )
        return response


def _search_path(base: str, query: str) -> str:
    """Append the URL-encoded query as a path segment when present."""
    cleaned = query.strip()
    if not cleaned:
        return base
    return f"{base}/{quote(cleaned, safe='')}"


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Return the backend's error text, or the fallback when absent."""
    try:
        body = ErrorBody.model_validate(response.json())
    except ValueError:
        return fallback
    return body.error or fallback


def _json(response: httpx.Response):  # type: ignore[no-untyped-def]
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise MimixDecodeError(f"Invalid JSON response: {exc}") from exc


def _rows(data: object) -> list[object]:
    if not isinstance(data, list):
        raise MimixDecodeError("Expected a list of records")
    return data


def _validate(model, data):  # type: ignore[no-untyped-def]
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MimixDecodeError(f"Unexpected response payload: {exc}") from exc
