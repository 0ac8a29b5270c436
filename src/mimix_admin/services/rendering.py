"""Row and pagination view models and their HTML rendering."""

from dataclasses import dataclass
from html import escape
from math import ceil
from uuid import UUID


@dataclass(frozen=True)
class Cell:
    """A display cell; ``style`` is one of text, title, badge or muted."""

    text: str
    style: str = "text"


@dataclass(frozen=True)
class RowAction:
    """A row-level action button."""

    name: str
    title: str
    danger: bool = False


@dataclass(frozen=True)
class RowModel:
    """Display row for one record."""

    record_id: UUID
    cells: tuple[Cell, ...]
    actions: tuple[RowAction, ...]


@dataclass(frozen=True)
class EditField:
    """An editable (or static) cell of a row in edit mode."""

    name: str
    value: str
    kind: str = "input"
    options: tuple[tuple[str, str], ...] = ()
    placeholder: str | None = None


@dataclass(frozen=True)
class EditRowModel:
    """Row for one record in edit mode."""

    record_id: UUID
    fields: tuple[EditField, ...]


@dataclass(frozen=True)
class PageButton:
    """A pagination control."""

    label: str
    page: int
    disabled: bool = False
    active: bool = False


SAVE_ACTION = RowAction(name="save", title="Save")
CANCEL_ACTION = RowAction(name="cancel", title="Cancel")


def total_pages(item_count: int, page_size: int) -> int:
    """Return the number of pages needed for ``item_count`` items."""
    return ceil(item_count / page_size) if item_count > 0 else 0


def page_window(page: int, page_size: int) -> slice:
    """Return the slice of the collection shown on a 1-based page."""
    start = (page - 1) * page_size
    return slice(start, start + page_size)


def build_pagination(current_page: int, page_count: int) -> tuple[PageButton, ...]:
    """Build the pagination strip; empty when everything fits on one page."""
    if page_count <= 1:
        return ()
    buttons = [PageButton("<", current_page - 1, disabled=current_page == 1)]
    buttons.extend(
        PageButton(str(page), page, active=page == current_page)
        for page in range(1, page_count + 1)
    )
    buttons.append(
        PageButton(">", current_page + 1, disabled=current_page == page_count)
    )
    return tuple(buttons)


def _action_button(record_id: UUID, action: RowAction) -> str:
    css = "action-btn delete" if action.danger else f"action-btn {action.name}"
    return (
        f'<button class="{css}" data-action="{action.name}" '
        f'data-id="{record_id}" title="{escape(action.title)}">'
        f"{escape(action.title)}</button>"
    )


def _cell(cell: Cell) -> str:
    text = escape(cell.text)
    if cell.style == "badge":
        return f'<td><span class="status-badge status-temp">{text}</span></td>'
    if cell.style == "title":
        return f'<td class="cell-title">{text}</td>'
    if cell.style == "muted":
        return f'<td class="cell-muted">{text}</td>'
    return f"<td>{text}</td>"


def render_row(model: RowModel) -> str:
    """Render a display row."""
    cells = "".join(_cell(cell) for cell in model.cells)
    actions = "".join(_action_button(model.record_id, a) for a in model.actions)
    return f'<tr data-id="{model.record_id}">{cells}<td>{actions}</td></tr>'


def _edit_field(record_id: UUID, field: EditField) -> str:
    value = escape(field.value)
    if field.kind == "static":
        return f"<td>{value}</td>"
    element_id = f"edit-{field.name}-{record_id}"
    if field.kind == "select":
        options = "".join(
            f'<option value="{escape(option)}"'
            f'{" selected" if option == field.value else ""}>{escape(label)}</option>'
            for option, label in field.options
        )
        return (
            f'<td><select class="edit-input" id="{element_id}" '
            f'name="{field.name}">{options}</select></td>'
        )
    placeholder = (
        f' placeholder="{escape(field.placeholder)}"' if field.placeholder else ""
    )
    return (
        f'<td><input class="edit-input" id="{element_id}" name="{field.name}" '
        f'value="{value}"{placeholder}></td>'
    )


def render_edit_row(model: EditRowModel) -> str:
    """Render a row in edit mode."""
    cells = "".join(_edit_field(model.record_id, field) for field in model.fields)
    actions = _action_button(model.record_id, SAVE_ACTION) + _action_button(
        model.record_id, CANCEL_ACTION
    )
    return f'<tr data-id="{model.record_id}">{cells}<td>{actions}</td></tr>'


def render_message_row(text: str, colspan: int, error: bool = False) -> str:
    """Render a full-width message row (empty table or load failure)."""
    css = "table-message error" if error else "table-message"
    return f'<tr><td colspan="{colspan}" class="{css}">{escape(text)}</td></tr>'


def render_pagination(buttons: tuple[PageButton, ...]) -> str:
    """Render the pagination strip."""
    rendered = []
    for button in buttons:
        css = "page-btn active" if button.active else "page-btn"
        disabled = " disabled" if button.disabled else ""
        rendered.append(
            f'<button class="{css}" data-page="{button.page}"{disabled}>'
            f"{escape(button.label)}</button>"
        )
    return "".join(rendered)
