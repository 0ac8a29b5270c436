"""Object request table."""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from mimix_admin.domain.records import ObjectRequest, PromoteStatus, RequestStatus
from mimix_admin.services.dates import format_date_to_ddmmyyyy
from mimix_admin.services.list_controller import ListController
from mimix_admin.services.rendering import Cell, EditField, RowAction, RowModel

_PROMOTE_STATUS_OPTIONS = (
    (PromoteStatus.UNSET.value, "-"),
    (PromoteStatus.IN_PROGRESS.value, "In Progress"),
    (PromoteStatus.DEPLOYED.value, "Deployed"),
)

_REQUEST_STATUS_OPTIONS = (
    (RequestStatus.PENDING.value, "Pending"),
    (RequestStatus.COMPLETED.value, "Completed"),
)

_ROW_ACTIONS = (
    RowAction(name="convert", title="Convert to Object"),
    RowAction(name="edit", title="Edit"),
    RowAction(name="delete", title="Delete", danger=True),
)


@dataclass
class RequestListController(ListController):
    """Table of object requests."""

    noun: ClassVar[str] = "request"
    plural: ClassVar[str] = "requests"
    column_count: ClassVar[int] = 11
    empty_message: ClassVar[str] = "No requests found."
    load_error_prefix: ClassVar[str] = "Error loading requests"

    async def convert(self, request_id: UUID) -> bool:
        """Convert a request into a Mimix object, then re-fetch."""
        if not self.prompter.confirm(
            "Are you sure you want to convert this request to an object?"
        ):
            return False
        converted = await self._run(
            self.api_client.convert_request(request_id), "Error"
        )
        if not converted:
            return False
        self.prompter.alert("Request converted successfully!")
        await self.fetch(self.state.query)
        return True

    async def _search(self, query: str) -> list[ObjectRequest]:
        return await self.api_client.search_requests(query)

    def _row_model(self, record: ObjectRequest) -> RowModel:
        return RowModel(
            record_id=record.id,
            cells=(
                Cell(record.obj_name, "title"),
                Cell(record.requester),
                Cell(self.formatter.timestamp(record.updated_at)),
                Cell(record.lib),
                Cell(record.obj_ver),
                Cell(record.obj_type),
                Cell(self.formatter.date(record.promote_date)),
                Cell(record.developer),
                Cell(record.promote_status or "-", "badge"),
                Cell(record.req_status, "badge"),
            ),
            actions=_ROW_ACTIONS,
        )

    def _edit_fields(self, record: ObjectRequest) -> tuple[EditField, ...]:
        return (
            EditField("obj_name", record.obj_name),
            EditField("requester", record.requester, "static"),
            EditField(
                "updated_at", self.formatter.timestamp(record.updated_at), "static"
            ),
            EditField("lib", record.lib),
            EditField("obj_ver", record.obj_ver),
            EditField("obj_type", record.obj_type),
            EditField(
                "promote_date",
                format_date_to_ddmmyyyy(record.promote_date),
                placeholder="dd/mm/yyyy",
            ),
            EditField("developer", record.developer),
            EditField(
                "promote_status",
                record.promote_status,
                "select",
                options=_PROMOTE_STATUS_OPTIONS,
            ),
            EditField(
                "req_status",
                record.req_status,
                "select",
                options=_REQUEST_STATUS_OPTIONS,
            ),
        )

    def _update_payload(
        self, values: dict[str, str], promote_date: str | None
    ) -> dict[str, object]:
        payload: dict[str, object] = {
            "obj_name": values["obj_name"],
            "lib": values["lib"],
            "obj_ver": values["obj_ver"],
            "obj_type": values["obj_type"],
            "developer": values["developer"],
            "req_status": values["req_status"],
            "promote_status": values["promote_status"] or "",
        }
        if promote_date is not None:
            payload["promote_date"] = promote_date
        return payload

    async def _update(self, record_id: UUID, payload: dict[str, object]) -> None:
        await self.api_client.update_request_info(record_id, payload)

    async def _delete(self, record_id: UUID) -> None:
        await self.api_client.delete_request(record_id)
