"""Total file count and the share of recent files for the summary cards."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from ..constants import (
    ARCHIVE_PLACEHOLDER_TIMESTAMP,
    DECODED_FILE_MARKER,
    RECENT_VOLUME_WINDOW_DAYS,
)
from ..json_utils import as_list
from .window import RecencyWindow

LOGGER = logging.getLogger(__name__)

__all__ = [
    "RecentVolume",
    "classify_recent_volume",
    "iter_source_files",
    "parse_listing_date",
    "round_half_up",
]

# Listing timestamps look like ``20250827_013909``; only the date is used.
_LISTING_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})_")


@dataclass(slots=True, frozen=True)
class RecentVolume:
    total: int = 0
    recent: int = 0
    recent_percent: int = 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 → 13)."""
    return int(math.floor(value + 0.5))


def parse_listing_date(
    timestamp: object,
    *,
    archive_placeholder: str = ARCHIVE_PLACEHOLDER_TIMESTAMP,
) -> datetime | None:
    """Return the UTC midnight encoded in a ``YYYYMMDD_HHMMSS`` timestamp.

    The archive placeholder, empty values, non-matching strings and impossible
    calendar dates (``20251340_…``) yield ``None``.
    """
    if not isinstance(timestamp, str) or not timestamp or timestamp == archive_placeholder:
        return None
    match = _LISTING_DATE_RE.match(timestamp)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, tzinfo=UTC)
    except ValueError:
        return None


def _file_name(descriptor: dict[str, Any]) -> str:
    name = descriptor.get("fullname") or descriptor.get("name") or ""
    return name if isinstance(name, str) else str(name)


def iter_source_files(
    rows: Iterable[Any],
    *,
    decoded_marker: str = DECODED_FILE_MARKER,
) -> Iterable[dict[str, Any]]:
    """Yield the file descriptors of every row, skipping decoded artifacts."""
    for row in rows:
        if not isinstance(row, dict):
            continue
        files = row.get("files")
        if not isinstance(files, list):
            continue
        for descriptor in files:
            if not isinstance(descriptor, dict):
                continue
            if decoded_marker in _file_name(descriptor):
                continue
            yield descriptor


def classify_recent_volume(
    response: Any,
    *,
    now: datetime | None = None,
    window_days: float = RECENT_VOLUME_WINDOW_DAYS,
    decoded_marker: str = DECODED_FILE_MARKER,
    archive_placeholder: str = ARCHIVE_PLACEHOLDER_TIMESTAMP,
) -> RecentVolume:
    """Count listed source files and the percentage dated within *window_days*.

    *response* is the metadata listing, bare or wrapped in ``{"data": ...}``.
    Files with a missing or unparseable timestamp still count towards the
    total.  ``recent_percent`` is 0 when there are no files.
    """
    rows = as_list(response)
    if rows is None:
        LOGGER.warning("File metadata listing is not a list; reporting no files")
        return RecentVolume()

    window = RecencyWindow(days=window_days, now=now) if now else RecencyWindow(days=window_days)
    total = 0
    recent = 0
    for descriptor in iter_source_files(rows, decoded_marker=decoded_marker):
        total += 1
        listed = parse_listing_date(
            descriptor.get("timestamp"), archive_placeholder=archive_placeholder
        )
        if listed is not None and window.contains(listed):
            recent += 1

    percent = round_half_up(100.0 * recent / total) if total else 0
    LOGGER.debug("Files: %d total, %d recent (%d%%)", total, recent, percent)
    return RecentVolume(total=total, recent=recent, recent_percent=percent)
