"""UTC wall-clock formatting for timeline labels."""

from __future__ import annotations

from datetime import UTC, datetime

__all__ = ["InvalidInstant", "format_hms", "format_hms_or_none", "parse_instant"]


class InvalidInstant(ValueError):
    """Raised when a value cannot be interpreted as an absolute instant."""


def parse_instant(value: object) -> datetime:
    """Return *value* as a timezone-aware UTC datetime.

    Accepts :class:`~datetime.datetime` objects and ISO-8601 strings (a
    trailing ``Z`` is allowed).  Naive values are taken to be UTC because the
    upstream files record UTC wall-clock time.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise InvalidInstant(f"Unparseable timestamp: {value!r}") from None
    else:
        raise InvalidInstant(f"Unparseable timestamp: {value!r}")
    try:
        if dt.tzinfo is None:
            return dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)
    except OverflowError:
        raise InvalidInstant(f"Timestamp out of range in UTC: {value!r}") from None


def format_hms(value: object) -> str:
    """Format *value* as zero-padded ``HH:MM:SS`` in UTC.

    Sub-second parts are truncated, never rounded.
    """
    return parse_instant(value).strftime("%H:%M:%S")


def format_hms_or_none(value: object) -> str | None:
    try:
        return format_hms(value)
    except InvalidInstant:
        return None
