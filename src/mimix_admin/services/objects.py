"""Mimix object table."""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from mimix_admin.domain.records import MimixObject, MimixStatus
from mimix_admin.services.dates import format_date_to_ddmmyyyy
from mimix_admin.services.list_controller import ListController
from mimix_admin.services.rendering import Cell, EditField, RowAction, RowModel

_STATUS_OPTIONS = (
    (MimixStatus.PENDING.value, "Pending"),
    (MimixStatus.ON_PROGRESS.value, "On Progress"),
    (MimixStatus.DONE.value, "Done"),
    (MimixStatus.ERROR.value, "Error"),
)

_ROW_ACTIONS = (
    RowAction(name="add_to_request", title="Add to Mimix Request"),
    RowAction(name="edit", title="Edit"),
    RowAction(name="delete", title="Delete", danger=True),
)


@dataclass
class ObjectListController(ListController):
    """Table of Mimix objects."""

    noun: ClassVar[str] = "object"
    plural: ClassVar[str] = "objects"
    column_count: ClassVar[int] = 9
    empty_message: ClassVar[str] = "No objects found."
    load_error_prefix: ClassVar[str] = "Error loading data"

    async def add_to_request(self, object_id: UUID) -> bool:
        """Open an object request for an existing object."""
        if not self.prompter.confirm("Add this object to Mimix Request?"):
            return False
        added = await self._run(
            self.api_client.add_object_to_request(object_id), "Error"
        )
        if added:
            self.prompter.alert("Object added to request successfully")
        return added

    async def update_status(self, object_id: UUID, status: str) -> bool:
        """Change only the status of an object, then re-fetch."""
        record = self._find_record(object_id)
        if record is None:
            return False
        if not self.prompter.confirm(f"Change status of {record.obj} to {status}?"):
            return False
        updated = await self._run(
            self.api_client.update_object_status(record.obj, status),
            "Error updating status",
        )
        if not updated:
            return False
        await self.fetch(self.state.query)
        return True

    async def _search(self, query: str) -> list[MimixObject]:
        return await self.api_client.search_objects(query)

    def _row_model(self, record: MimixObject) -> RowModel:
        return RowModel(
            record_id=record.id,
            cells=(
                Cell(record.obj, "title"),
                Cell(record.obj_type),
                Cell(self.formatter.date(record.promote_date)),
                Cell(record.lib),
                Cell(record.obj_ver),
                Cell(record.mimix_status, "badge"),
                Cell(record.developer),
                Cell(record.keterangan or "-", "muted"),
            ),
            actions=_ROW_ACTIONS,
        )

    def _edit_fields(self, record: MimixObject) -> tuple[EditField, ...]:
        return (
            EditField("obj", record.obj),
            EditField("obj_type", record.obj_type),
            EditField(
                "promote_date",
                format_date_to_ddmmyyyy(record.promote_date),
                placeholder="dd/mm/yyyy",
            ),
            EditField("lib", record.lib),
            EditField("obj_ver", record.obj_ver),
            EditField(
                "mimix_status", record.mimix_status, "select", options=_STATUS_OPTIONS
            ),
            EditField("developer", record.developer),
            EditField("keterangan", record.keterangan),
        )

    def _update_payload(
        self, values: dict[str, str], promote_date: str | None
    ) -> dict[str, object]:
        return {
            "obj": values["obj"],
            "obj_type": values["obj_type"],
            "promote_date": promote_date,
            "lib": values["lib"],
            "obj_ver": values["obj_ver"],
            "developer": values["developer"],
            "keterangan": values["keterangan"],
            "mimix_status": values["mimix_status"],
        }

    async def _update(self, record_id: UUID, payload: dict[str, object]) -> None:
        await self.api_client.update_object_info(record_id, payload)

    async def _delete(self, record_id: UUID) -> None:
        await self.api_client.delete_object(record_id)
