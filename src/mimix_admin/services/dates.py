"""Date parsing and formatting for the dd/mm/yyyy input convention."""

from dataclasses import dataclass
from datetime import UTC, datetime

DATE_FORMAT_NOTICE = "Invalid date format. Please use dd/mm/yyyy."


class InvalidDateError(ValueError):
    """Raised when a dd/mm/yyyy value is not a real calendar date."""


def parse_iso_timestamp(value: str) -> datetime | None:
    """Generic timestamp parse; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def to_iso(moment: datetime) -> str:
    """Render a timestamp as RFC 3339 in UTC."""
    return moment.astimezone(UTC).isoformat().replace("+00:00", "Z")


def format_date_to_ddmmyyyy(value: datetime | str | None) -> str:
    """Format a timestamp for an edit field, or return an empty string."""
    if not value:
        return ""
    moment = value if isinstance(value, datetime) else parse_iso_timestamp(value)
    if moment is None:
        return ""
    return f"{moment.day:02d}/{moment.month:02d}/{moment.year}"


def _parse_literal_date(parts: list[str]) -> datetime | None:
    try:
        day, month, year = (int(part.strip()) for part in parts)
        return datetime(year, month, day, tzinfo=UTC)
    except (ValueError, OverflowError):
        return None


def parse_ddmmyyyy_to_iso(value: str | None) -> str | None:
    """Parse dd/mm/yyyy (falling back to ISO input) into an ISO timestamp."""
    if not value:
        return None
    parts = value.split("/")
    if len(parts) == 3:
        parsed = _parse_literal_date(parts)
        if parsed is not None:
            return to_iso(parsed)
    fallback = parse_iso_timestamp(value)
    return to_iso(fallback) if fallback else None


def normalize_form_date(value: str) -> str:
    """Normalize a creation-form date.

    A value with three slash-separated parts must be a valid dd/mm/yyyy date,
    otherwise :class:`InvalidDateError` is raised. Any other value is parsed
    as an ISO timestamp when possible and passed through unchanged when not.
    """
    if not value:
        return value
    parts = value.split("/")
    if len(parts) == 3:
        parsed = _parse_literal_date(parts)
        if parsed is None:
            raise InvalidDateError(value)
        return to_iso(parsed)
    fallback = parse_iso_timestamp(value)
    return to_iso(fallback) if fallback else value


@dataclass(frozen=True)
class DisplayFormatter:
    """Locale rendering of dates in table cells."""

    date_format: str = "%d/%m/%Y"
    datetime_format: str = "%d/%m/%Y, %H:%M:%S"
    placeholder: str = "-"

    def date(self, value: datetime | None) -> str:
        """Format a calendar date."""
        if value is None:
            return self.placeholder
        return value.strftime(self.date_format)

    def timestamp(self, value: datetime | None) -> str:
        """Format a date and time."""
        if value is None:
            return self.placeholder
        return value.strftime(self.datetime_format)
