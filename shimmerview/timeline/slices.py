"""Map per-file metadata onto index ranges of the combined downsampled signal.

Each source file contributes one contiguous slice.  Files either carry
explicit ``downsampled_start_index`` / ``downsampled_end_index`` boundaries or
only sample counts, in which case the slice is inferred to start right after
the previous file's slice.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, NamedTuple

from ..constants import DOWNSAMPLE_RATIO

LOGGER = logging.getLogger(__name__)

__all__ = [
    "FileMetadata",
    "ResolvedSlice",
    "SliceResolution",
    "parse_file_metadata",
    "resolve_slices",
]


def _as_index_or_none(value: object) -> int | None:
    """Return *value* as an int index, or ``None`` when absent/non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(out):
        return None
    return int(out)


@dataclass(slots=True, frozen=True)
class FileMetadata:
    """One ingested source file contributing a slice of the combined signal."""

    filename: str
    start_timestamp: str | datetime | None
    original_sample_count: int | None = None
    downsampled_sample_count: int | None = None
    downsampled_start_index: int | None = None
    downsampled_end_index: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileMetadata:
        timestamp = data.get("timestamp")
        return cls(
            filename=str(data.get("filename") or ""),
            start_timestamp=timestamp if isinstance(timestamp, (str, datetime)) else None,
            original_sample_count=_as_index_or_none(data.get("accel_samples")),
            downsampled_sample_count=_as_index_or_none(data.get("downsampled_samples")),
            downsampled_start_index=_as_index_or_none(data.get("downsampled_start_index")),
            downsampled_end_index=_as_index_or_none(data.get("downsampled_end_index")),
        )

    def downsampled_count(self, downsample_ratio: int = DOWNSAMPLE_RATIO) -> int | None:
        """Number of downsampled points, explicit or derived from the raw count."""
        if self.downsampled_sample_count is not None and self.downsampled_sample_count > 0:
            return self.downsampled_sample_count
        if self.original_sample_count is None or self.original_sample_count < 0:
            return None
        return math.ceil(self.original_sample_count / downsample_ratio)


def parse_file_metadata(entries: object) -> tuple[FileMetadata, ...]:
    """Build :class:`FileMetadata` records from a ``file_timestamps`` payload.

    Non-dict entries are dropped; a non-list payload yields no records.
    """
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
        return ()
    out: list[FileMetadata] = []
    for position, entry in enumerate(entries):
        if isinstance(entry, FileMetadata):
            out.append(entry)
        elif isinstance(entry, dict):
            out.append(FileMetadata.from_dict(entry))
        else:
            LOGGER.debug("Ignoring file_timestamps[%d]: not an object (%r)", position, entry)
    return tuple(out)


class ResolvedSlice(NamedTuple):
    """Inclusive index range of one file; empty when ``end_index < start_index``."""

    file_index: int
    start_index: int
    end_index: int

    @property
    def length(self) -> int:
        return max(0, self.end_index - self.start_index + 1)


class SliceResolution(NamedTuple):
    """Resolved slices plus validation findings about the metadata."""

    slices: tuple[ResolvedSlice, ...]
    issues: tuple[str, ...]

    @property
    def is_contiguous(self) -> bool:
        return not self.issues


def resolve_slices(
    files: Sequence[FileMetadata],
    total_length: int,
    *,
    downsample_ratio: int = DOWNSAMPLE_RATIO,
) -> SliceResolution:
    """Resolve each file's index range within a combined signal of *total_length*.

    Never raises for malformed metadata.  Overlaps, gaps, slices reaching past
    the end of the signal and missing sample counts are reported in
    :attr:`SliceResolution.issues`; consumers drop indices outside
    ``[0, total_length)``.
    """
    if not files:
        return SliceResolution(slices=(), issues=())

    slices: list[ResolvedSlice] = []
    issues: list[str] = []
    previous: ResolvedSlice | None = None
    for file_index, meta in enumerate(files):
        if meta.downsampled_start_index is not None:
            start = meta.downsampled_start_index
        elif previous is None:
            start = 0
        else:
            start = previous.end_index + 1

        if meta.downsampled_end_index is not None:
            end = meta.downsampled_end_index
        else:
            count = meta.downsampled_count(downsample_ratio)
            if count is None:
                issues.append(f"file {file_index} ({meta.filename!r}) has no usable sample count")
                count = 0
            end = start + count - 1

        current = ResolvedSlice(file_index=file_index, start_index=start, end_index=end)
        if end < start:
            if meta.downsampled_end_index is not None:
                issues.append(f"file {file_index} ({meta.filename!r}) ends before it starts")
        elif end >= total_length:
            issues.append(
                f"file {file_index} ({meta.filename!r}) ends at {end}, "
                f"beyond signal length {total_length}"
            )
        if start < 0:
            issues.append(f"file {file_index} ({meta.filename!r}) starts at negative index {start}")

        expected_start = 0 if previous is None else previous.end_index + 1
        if start > expected_start:
            issues.append(f"gap of {start - expected_start} points before file {file_index}")
        elif start < expected_start:
            issues.append(f"file {file_index} overlaps the previous slice by {expected_start - start}")

        slices.append(current)
        previous = current

    covered_until = max((s.end_index for s in slices), default=-1)
    if total_length > 0 and covered_until < total_length - 1:
        issues.append(f"{total_length - 1 - covered_until} trailing points are not covered")

    if issues:
        LOGGER.warning(
            "File metadata does not partition %d points cleanly: %s",
            total_length,
            "; ".join(issues),
        )
    return SliceResolution(slices=tuple(slices), issues=tuple(issues))
