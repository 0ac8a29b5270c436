"""Creation dialogs for objects and requests."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field

from mimix_admin.adapters.mimix_api_client import (
    MimixApiError,
    MimixUnauthorizedError,
)
from mimix_admin.services.dates import (
    DATE_FORMAT_NOTICE,
    InvalidDateError,
    normalize_form_date,
)
from mimix_admin.services.session_guard import SessionGuard
from mimix_admin.services.ui import UserPrompter

_logger = logging.getLogger(__name__)

OBJECT_FORM_FIELDS = (
    "obj",
    "obj_type",
    "promote_date",
    "lib",
    "obj_ver",
    "mimix_status",
    "developer",
    "keterangan",
)
REQUEST_FORM_FIELDS = (
    "obj_name",
    "lib",
    "obj_ver",
    "obj_type",
    "promote_date",
    "developer",
)


@dataclass
class ModalFormController:
    """A creation dialog that posts one new record."""

    field_names: tuple[str, ...]
    create: Callable[[dict[str, object]], Awaitable[object]]
    on_created: Callable[[], Awaitable[object]]
    session_guard: SessionGuard
    prompter: UserPrompter
    success_message: str
    failure_log: str = "Error creating record"
    visible: bool = False
    fields: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.reset()

    def open(self) -> None:
        """Show the dialog."""
        self.visible = True

    def close(self) -> None:
        """Hide the dialog; entered values are kept."""
        self.visible = False

    def handle_backdrop_click(self) -> None:
        """A click outside the dialog surface closes it."""
        self.close()

    def set_field(self, name: str, value: str) -> None:
        """Set a form field value."""
        if name not in self.field_names:
            raise KeyError(name)
        self.fields[name] = value

    def reset(self) -> None:
        """Clear every form field."""
        self.fields = {name: "" for name in self.field_names}

    async def submit(self, form_fields: Mapping[str, str] | None = None) -> bool:
        """Post the form; the dialog stays open with its values on failure."""
        if form_fields is not None:
            self.fields.update(form_fields)
        data: dict[str, object] = dict(self.fields)
        raw_date = data.get("promote_date")
        if isinstance(raw_date, str) and raw_date:
            try:
                data["promote_date"] = normalize_form_date(raw_date)
            except InvalidDateError:
                self.prompter.alert(DATE_FORMAT_NOTICE)
                return False
        try:
            await self.create(data)
        except MimixUnauthorizedError:
            self.session_guard.handle_unauthorized()
            return False
        except MimixApiError as exc:
            _logger.warning("%s: %s", self.failure_log, exc.message)
            self.prompter.alert(f"Error: {exc.message}")
            return False
        self.prompter.alert(self.success_message)
        self.close()
        self.reset()
        await self.on_created()
        return True
