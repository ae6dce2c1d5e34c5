"""Sparse axis ticks: one label per source-file boundary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

from ..constants import EXTRA_AXIS_TICKS
from .formatting import format_hms_or_none
from .slices import FileMetadata, SliceResolution

__all__ = ["AxisTick", "TickMap", "select_ticks"]


class AxisTick(NamedTuple):
    index: int
    label: str


@dataclass(slots=True, frozen=True)
class TickMap:
    """Tick labels keyed by sample index.

    :meth:`lookup` returns ``None`` for suppressed indices so callers can tell
    "draw nothing" apart from "draw an empty string".
    """

    ticks: tuple[AxisTick, ...] = ()
    max_ticks: int = EXTRA_AXIS_TICKS
    _by_index: dict[int, str] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_index: dict[int, str] = {}
        for tick in self.ticks:
            by_index.setdefault(tick.index, tick.label)
        object.__setattr__(self, "_by_index", by_index)

    def lookup(self, index: int) -> str | None:
        return self._by_index.get(index)

    def __len__(self) -> int:
        return len(self.ticks)


def select_ticks(
    files: Sequence[FileMetadata],
    resolution: SliceResolution,
    labels: Sequence[str],
) -> TickMap:
    """Place one tick at the start index of every resolved slice.

    The tick text is formatted from the file's own start timestamp rather
    than read back from *labels*.  Empty slices, starts outside the labelled
    range and unparseable timestamps get no tick; when two files start at the
    same index the first one keeps the tick.
    """
    if not files or not labels:
        return TickMap()
    ticks: list[AxisTick] = []
    seen: set[int] = set()
    for resolved in resolution.slices:
        if resolved.length == 0:
            continue
        index = resolved.start_index
        if index < 0 or index >= len(labels) or index in seen:
            continue
        label = format_hms_or_none(files[resolved.file_index].start_timestamp)
        if label is None:
            continue
        seen.add(index)
        ticks.append(AxisTick(index=index, label=label))
    return TickMap(ticks=tuple(ticks), max_ticks=len(files) + EXTRA_AXIS_TICKS)
