"""Paginated record tables with a single-row inline editor.

Each table keeps its own :class:`ListState`: the cached collection, the
pagination cursor, the rendered rows and the edit state machine. The edit
state is either :class:`Viewing` or :class:`Editing`; ``begin_edit`` on a new
row first cancels the active edit, so at most one row is ever in edit mode.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import ClassVar
from uuid import UUID

from mimix_admin.adapters.mimix_api_client import (
    MimixApiClient,
    MimixApiError,
    MimixUnauthorizedError,
)
from mimix_admin.domain.records import Record
from mimix_admin.services.dates import (
    DATE_FORMAT_NOTICE,
    DisplayFormatter,
    parse_ddmmyyyy_to_iso,
)
from mimix_admin.services.rendering import (
    EditField,
    EditRowModel,
    PageButton,
    RowModel,
    build_pagination,
    page_window,
    render_edit_row,
    render_message_row,
    render_row,
    total_pages,
)
from mimix_admin.services.session_guard import SessionGuard
from mimix_admin.services.ui import UserPrompter

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewing:
    """No row is being edited."""


@dataclass
class Editing:
    """One row is in edit mode."""

    record_id: UUID
    original_markup: str
    values: dict[str, str]


EditState = Viewing | Editing


@dataclass(frozen=True)
class RowView:
    """A rendered table row; message rows carry no record id."""

    record_id: UUID | None
    markup: str


@dataclass
class ListState:
    """Per-table view state."""

    records: list[Record] = field(default_factory=list)
    page: int = 1
    query: str = ""
    edit: EditState = field(default_factory=Viewing)
    rows: list[RowView] = field(default_factory=list)
    pagination: tuple[PageButton, ...] = ()
    error_message: str | None = None


@dataclass
class ListController(ABC):
    """Fetch, paginate, render and edit one record table."""

    api_client: MimixApiClient
    session_guard: SessionGuard
    prompter: UserPrompter
    formatter: DisplayFormatter = field(default_factory=DisplayFormatter)
    page_size: int = 8
    state: ListState = field(default_factory=ListState)

    noun: ClassVar[str] = "record"
    plural: ClassVar[str] = "records"
    column_count: ClassVar[int] = 1
    empty_message: ClassVar[str] = "No records found."
    load_error_prefix: ClassVar[str] = "Error loading data"
    date_field: ClassVar[str] = "promote_date"

    @property
    def page_count(self) -> int:
        """Return the number of pages for the cached collection."""
        return total_pages(len(self.state.records), self.page_size)

    async def fetch(self, query: str = "") -> bool:
        """Replace the cache with the backend's matches for ``query``."""
        cleaned = query.strip()
        self.state.query = cleaned
        try:
            records = await self._search(cleaned)
        except MimixUnauthorizedError:
            self.session_guard.handle_unauthorized()
            return False
        except MimixApiError as exc:
            _logger.warning("Failed to fetch %s: %s", self.plural, exc.message)
            self._show_load_error(exc.message)
            return False
        _logger.info(
            "Fetched %s: query=%s results=%s", self.plural, cleaned, len(records)
        )
        self.state.records = list(records)
        self.state.page = 1
        self.render()
        return True

    def render(self) -> None:
        """Rebuild the rows for the current page and the pagination strip."""
        self.state.edit = Viewing()
        self.state.error_message = None
        if not self.state.records:
            markup = render_message_row(self.empty_message, self.column_count)
            self.state.rows = [RowView(record_id=None, markup=markup)]
            self.state.pagination = ()
            return
        page_items = self.state.records[page_window(self.state.page, self.page_size)]
        self.state.rows = [
            RowView(record_id=record.id, markup=render_row(self._row_model(record)))
            for record in page_items
        ]
        self.state.pagination = build_pagination(self.state.page, self.page_count)

    def go_to_page(self, page: int) -> bool:
        """Move the cursor and re-render without re-fetching."""
        if not 1 <= page <= self.page_count:
            return False
        self.state.page = page
        self.render()
        return True

    def next_page(self) -> bool:
        """Advance one page."""
        return self.go_to_page(self.state.page + 1)

    def previous_page(self) -> bool:
        """Go back one page."""
        return self.go_to_page(self.state.page - 1)

    def begin_edit(self, record_id: UUID) -> bool:
        """Switch a row to edit mode, cancelling any other active edit."""
        if isinstance(self.state.edit, Editing):
            self.cancel_edit(self.state.edit.record_id)
        index = self._row_index(record_id)
        record = self._find_record(record_id)
        if index is None or record is None:
            return False
        fields = self._edit_fields(record)
        original_markup = self.state.rows[index].markup
        self.state.rows[index] = RowView(
            record_id=record_id,
            markup=render_edit_row(EditRowModel(record_id=record_id, fields=fields)),
        )
        self.state.edit = Editing(
            record_id=record_id,
            original_markup=original_markup,
            values={f.name: f.value for f in fields if f.kind != "static"},
        )
        return True

    def set_edit_value(self, record_id: UUID, name: str, value: str) -> bool:
        """Update an edit field of the row being edited."""
        edit = self.state.edit
        if not isinstance(edit, Editing) or edit.record_id != record_id:
            return False
        if name not in edit.values:
            raise KeyError(name)
        edit.values[name] = value
        return True

    def cancel_edit(self, record_id: UUID) -> bool:
        """Restore the row's original markup if it is the one being edited."""
        edit = self.state.edit
        if not isinstance(edit, Editing) or edit.record_id != record_id:
            return False
        index = self._row_index(record_id)
        if index is not None:
            self.state.rows[index] = RowView(
                record_id=record_id, markup=edit.original_markup
            )
        self.state.edit = Viewing()
        return True

    async def save_edit(self, record_id: UUID) -> bool:
        """Send the edited fields and re-fetch on success."""
        edit = self.state.edit
        if not isinstance(edit, Editing) or edit.record_id != record_id:
            return False
        values = dict(edit.values)
        promote_date = None
        raw_date = values.get(self.date_field, "")
        if raw_date:
            promote_date = parse_ddmmyyyy_to_iso(raw_date)
            if promote_date is None:
                self.prompter.alert(DATE_FORMAT_NOTICE)
                return False
        payload = self._update_payload(values, promote_date)
        saved = await self._run(
            self._update(record_id, payload), f"Error saving {self.noun}"
        )
        if not saved:
            return False
        self.state.edit = Viewing()
        await self.fetch(self.state.query)
        return True

    async def delete(self, record_id: UUID) -> bool:
        """Delete a record after confirmation and re-fetch."""
        if not self.prompter.confirm(
            f"Are you sure you want to delete this {self.noun}?"
        ):
            return False
        deleted = await self._run(
            self._delete(record_id), f"Error deleting {self.noun}"
        )
        if not deleted:
            return False
        await self.fetch(self.state.query)
        return True

    async def _run(self, call: Awaitable[object], failure: str) -> bool:
        """Await a mutation and turn failures into notices."""
        try:
            await call
        except MimixUnauthorizedError:
            self.session_guard.handle_unauthorized()
            return False
        except MimixApiError as exc:
            _logger.warning("%s: %s", failure, exc.message)
            self.prompter.alert(f"{failure}: {exc.message}")
            return False
        return True

    def _show_load_error(self, message: str) -> None:
        self.state.edit = Viewing()
        self.state.error_message = message
        markup = render_message_row(
            f"{self.load_error_prefix}: {message}", self.column_count, error=True
        )
        self.state.rows = [RowView(record_id=None, markup=markup)]
        self.state.pagination = ()

    def _row_index(self, record_id: UUID) -> int | None:
        for index, row in enumerate(self.state.rows):
            if row.record_id == record_id:
                return index
        return None

    def _find_record(self, record_id: UUID) -> Record | None:
        return next((r for r in self.state.records if r.id == record_id), None)

    @abstractmethod
    async def _search(self, query: str) -> list[Record]:
        """Return the records matching the query."""

    @abstractmethod
    def _row_model(self, record: Record) -> RowModel:
        """Build the display row for a record."""

    @abstractmethod
    def _edit_fields(self, record: Record) -> tuple[EditField, ...]:
        """Build the pre-filled edit fields for a record."""

    @abstractmethod
    def _update_payload(
        self, values: dict[str, str], promote_date: str | None
    ) -> dict[str, object]:
        """Build the update body from the edit values."""

    @abstractmethod
    async def _update(self, record_id: UUID, payload: dict[str, object]) -> None:
        """Send the update for a record."""

    @abstractmethod
    async def _delete(self, record_id: UUID) -> None:
        """Delete a record."""
