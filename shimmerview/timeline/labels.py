"""Wall-clock label reconstruction for the combined downsampled signal.

Every downsampled point ``i`` of a file is labelled with
``file_start + i * seconds_per_point`` formatted as UTC ``HH:MM:SS``.
Indices that no file covers are repaired by copying the preceding label, so
the result always has exactly one label per sample.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timedelta
from typing import Literal, NamedTuple

from ..constants import DOWNSAMPLE_RATIO, FALLBACK_LABEL, SECONDS_PER_DOWNSAMPLED_POINT
from .formatting import InvalidInstant, parse_instant
from .slices import FileMetadata, SliceResolution, resolve_slices

LOGGER = logging.getLogger(__name__)

__all__ = ["LabelMode", "LabelResult", "index_labels", "reconstruct_labels"]

LabelMode = Literal["time", "index", "empty"]


class LabelResult(NamedTuple):
    labels: list[str]
    repaired_count: int
    mode: LabelMode


def index_labels(total_length: int) -> list[str]:
    """Plain ``"0" … "N-1"`` labels used when no file metadata is available."""
    return [str(i) for i in range(max(0, total_length))]


def _fill_slice(
    labels: list[str | None],
    meta: FileMetadata,
    start_index: int,
    end_index: int,
    seconds_per_point: float,
) -> None:
    total_length = len(labels)
    try:
        file_start = parse_instant(meta.start_timestamp)
    except InvalidInstant:
        LOGGER.warning(
            "Skipping labels for %r: invalid start timestamp %r",
            meta.filename,
            meta.start_timestamp,
        )
        return
    # Local offsets whose global index lands inside [0, total_length).
    first = max(0, -start_index)
    last = min(end_index, total_length - 1) - start_index
    for i in range(first, last + 1):
        try:
            sample_time = file_start + timedelta(seconds=i * seconds_per_point)
        except OverflowError:
            LOGGER.warning("Timestamp overflow while labelling %r at offset %d", meta.filename, i)
            return
        labels[start_index + i] = sample_time.strftime("%H:%M:%S")


def _repair_gaps(labels: list[str | None]) -> int:
    repaired = 0
    for i, label in enumerate(labels):
        if not label:
            labels[i] = labels[i - 1] if i > 0 else FALLBACK_LABEL
            repaired += 1
    return repaired


def reconstruct_labels(
    files: Sequence[FileMetadata],
    total_length: int,
    *,
    resolution: SliceResolution | None = None,
    downsample_ratio: int = DOWNSAMPLE_RATIO,
    seconds_per_point: float = SECONDS_PER_DOWNSAMPLED_POINT,
) -> LabelResult:
    """Assign a label to every index of a combined signal of *total_length*.

    With no *files* the labels fall back to sample indices.  A precomputed
    *resolution* may be passed to avoid resolving the slices twice.
    """
    if total_length <= 0:
        return LabelResult(labels=[], repaired_count=0, mode="empty")
    if not files:
        return LabelResult(labels=index_labels(total_length), repaired_count=0, mode="index")

    if resolution is None:
        resolution = resolve_slices(files, total_length, downsample_ratio=downsample_ratio)

    labels: list[str | None] = [None] * total_length
    for resolved in resolution.slices:
        if resolved.length == 0:
            continue
        _fill_slice(
            labels,
            files[resolved.file_index],
            resolved.start_index,
            resolved.end_index,
            seconds_per_point,
        )

    repaired = _repair_gaps(labels)
    if repaired:
        LOGGER.warning(
            "%d of %d points had no file coverage; labels copied from the preceding point",
            repaired,
            total_length,
        )
    # _repair_gaps leaves no None behind.
    return LabelResult(labels=labels, repaired_count=repaired, mode="time")  # type: ignore[arg-type]
