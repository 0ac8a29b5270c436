"""Domain models for Mimix objects and object requests."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class MimixStatus(StrEnum):
    """Statuses offered when editing a Mimix object."""

    PENDING = "pending"
    ON_PROGRESS = "on progress"
    DONE = "done"
    ERROR = "error"


class PromoteStatus(StrEnum):
    """Promotion progress of an object request."""

    UNSET = ""
    IN_PROGRESS = "in_progress"
    DEPLOYED = "deployed"


class RequestStatus(StrEnum):
    """Lifecycle status of an object request."""

    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class MimixObject:
    """A promoted software artifact tracked by Mimix."""

    id: UUID
    obj: str
    obj_type: str
    promote_date: datetime | None
    lib: str
    obj_ver: str
    mimix_status: str
    developer: str
    keterangan: str
    updated_at: datetime | None = None
    lib_id: UUID | None = None


@dataclass(frozen=True)
class ObjectRequest:
    """A request to promote or create an artifact."""

    id: UUID
    obj_name: str
    requester: str
    updated_at: datetime | None
    lib: str
    obj_ver: str
    obj_type: str
    promote_date: datetime | None
    developer: str
    promote_status: str
    req_status: str
    created_at: datetime | None = None
    source_obj_id: UUID | None = None


Record = MimixObject | ObjectRequest
