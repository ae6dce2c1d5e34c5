"""Synthetic payload builders shared by the test modules.

Public API
----------
- ``FIXED_NOW``       – reference instant used by recency tests
- ``file_entry``      – one ``file_timestamps`` record
- ``file_payload``    – a per-file chart payload
- ``listing_row``     – one row of the nested file metadata listing
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


def file_entry(
    timestamp: Any,
    *,
    filename: str = "file.csv",
    accel_samples: int | None = None,
    downsampled_samples: int | None = None,
    start: int | None = None,
    end: int | None = None,
) -> dict[str, Any]:
    entry: dict[str, Any] = {"filename": filename, "timestamp": timestamp}
    if accel_samples is not None:
        entry["accel_samples"] = accel_samples
    if downsampled_samples is not None:
        entry["downsampled_samples"] = downsampled_samples
    if start is not None:
        entry["downsampled_start_index"] = start
    if end is not None:
        entry["downsampled_end_index"] = end
    return entry


def file_payload(
    values: list[Any],
    files: list[dict[str, Any]] | None = None,
    *,
    uwb_count: int | None = None,
    wrapped: bool = False,
) -> dict[str, Any]:
    data: dict[str, Any] = {"accel_wr_absolute_downsampled": values}
    if files is not None:
        data["file_timestamps"] = files
    if uwb_count is not None:
        data["uwb_dis_non_zero_count"] = uwb_count
    return {"data": data, "error": None} if wrapped else data


def listing_row(*files: tuple[str, str]) -> dict[str, Any]:
    """Listing row holding ``(fullname, timestamp)`` descriptors."""
    return {"files": [{"fullname": name, "timestamp": ts} for name, ts in files]}
