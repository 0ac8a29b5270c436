"""Pydantic models for Mimix backend payloads."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator

from mimix_admin.domain.auth import UserRecord
from mimix_admin.domain.records import MimixObject, ObjectRequest

_ZERO_UUID = UUID(int=0)


def _null_zero_time(value: datetime | None) -> datetime | None:
    """Map Go's zero time (used for NULL columns) to None."""
    if value is None or value.year <= 1:
        return None
    return value


def _blank_null(value: object) -> object:
    """Read a JSON null string column as an empty string."""
    return "" if value is None else value


def _null_zero_uuid(value: UUID | None) -> UUID | None:
    if value is None or value == _ZERO_UUID:
        return None
    return value


class ErrorBody(BaseModel):
    """Error payload returned by the backend."""

    error: str | None = None


class UserPayload(BaseModel):
    """User payload."""

    id: UUID | None = None
    username: str = ""
    job: str = ""

    @field_validator("username", "job", mode="before")
    @classmethod
    def blank_null(cls, value: object) -> object:
        return _blank_null(value)

    def to_domain(self) -> UserRecord:
        """Convert to a domain user record."""
        return UserRecord(id=self.id, username=self.username, job=self.job)


class LoginResponse(BaseModel):
    """Successful login payload."""

    access_token: str
    user: UserPayload


class CreateUserResponse(BaseModel):
    """Successful registration payload."""

    user: UserPayload


class MimixObjectPayload(BaseModel):
    """Mimix object payload."""

    id: UUID
    obj: str = ""
    obj_type: str = ""
    promote_date: datetime | None = None
    obj_ver: str = ""
    lib: str = ""
    lib_id: UUID | None = None
    mimix_status: str = ""
    developer: str = ""
    keterangan: str = ""
    updated_at: datetime | None = None

    @field_validator(
        "obj",
        "obj_type",
        "obj_ver",
        "lib",
        "mimix_status",
        "developer",
        "keterangan",
        mode="before",
    )
    @classmethod
    def blank_null(cls, value: object) -> object:
        return _blank_null(value)

    @field_validator("promote_date", "updated_at")
    @classmethod
    def drop_zero_time(cls, value: datetime | None) -> datetime | None:
        return _null_zero_time(value)

    @field_validator("lib_id")
    @classmethod
    def drop_zero_id(cls, value: UUID | None) -> UUID | None:
        return _null_zero_uuid(value)

    def to_domain(self) -> MimixObject:
        """Convert to a domain object."""
        return MimixObject(
            id=self.id,
            obj=self.obj,
            obj_type=self.obj_type,
            promote_date=self.promote_date,
            lib=self.lib,
            obj_ver=self.obj_ver,
            mimix_status=self.mimix_status,
            developer=self.developer,
            keterangan=self.keterangan,
            updated_at=self.updated_at,
            lib_id=self.lib_id,
        )


class ObjectRequestPayload(BaseModel):
    """Object request payload."""

    id: UUID
    obj_name: str = ""
    requester: str = ""
    developer: str = ""
    req_status: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    lib: str = ""
    obj_ver: str = ""
    obj_type: str = ""
    promote_date: datetime | None = None
    source_obj_id: UUID | None = None
    promote_status: str = ""

    @field_validator(
        "obj_name",
        "requester",
        "developer",
        "req_status",
        "lib",
        "obj_ver",
        "obj_type",
        "promote_status",
        mode="before",
    )
    @classmethod
    def blank_null(cls, value: object) -> object:
        return _blank_null(value)

    @field_validator("promote_date", "created_at", "updated_at")
    @classmethod
    def drop_zero_time(cls, value: datetime | None) -> datetime | None:
        return _null_zero_time(value)

    @field_validator("source_obj_id")
    @classmethod
    def drop_zero_id(cls, value: UUID | None) -> UUID | None:
        return _null_zero_uuid(value)

    def to_domain(self) -> ObjectRequest:
        """Convert to a domain object request."""
        return ObjectRequest(
            id=self.id,
            obj_name=self.obj_name,
            requester=self.requester,
            updated_at=self.updated_at,
            lib=self.lib,
            obj_ver=self.obj_ver,
            obj_type=self.obj_type,
            promote_date=self.promote_date,
            developer=self.developer,
            promote_status=self.promote_status,
            req_status=self.req_status,
            created_at=self.created_at,
            source_obj_id=self.source_obj_id,
        )
