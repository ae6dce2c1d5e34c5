"""Assemble the chart view payload from a per-file API response.

Pipeline: ``file_timestamps`` → :func:`resolve_slices` →
:func:`reconstruct_labels` / :func:`select_ticks` → :func:`summarize_signal`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ..json_utils import unwrap_data
from .formatting import InvalidInstant, parse_instant
from .labels import LabelMode, reconstruct_labels
from .slices import FileMetadata, parse_file_metadata, resolve_slices
from .stats import SignalSummary, coerce_values, summarize_signal
from .ticks import TickMap, select_ticks

LOGGER = logging.getLogger(__name__)

VALUES_FIELD = "accel_wr_absolute_downsampled"
FILE_TIMESTAMPS_FIELD = "file_timestamps"
FILE_AUX_COUNT_FIELD = "uwb_dis_non_zero_count"

AXIS_TITLE_TIME = "Time"
AXIS_TITLE_INDEX = "Sample Index"


@dataclass(slots=True, frozen=True)
class Timeline:
    """Start/end of the recording window shown above the chart."""

    start: str | None = None
    end: str | None = None
    start_formatted: str = ""
    end_formatted: str = ""

    @property
    def is_known(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(slots=True, frozen=True)
class ChartPayload:
    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)
    ticks: TickMap = field(default_factory=TickMap)
    summary: SignalSummary = field(default_factory=SignalSummary)
    timeline: Timeline = field(default_factory=Timeline)
    x_axis_title: str = AXIS_TITLE_INDEX
    label_mode: LabelMode = "empty"
    repaired_count: int = 0
    slice_issues: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "values": list(self.values),
            "ticks": [{"index": t.index, "label": t.label} for t in self.ticks.ticks],
            "maxTicks": self.ticks.max_ticks,
            "stats": self.summary.to_dict(),
            "timelineStart": self.timeline.start,
            "timelineEnd": self.timeline.end,
            "timelineStartFormatted": self.timeline.start_formatted,
            "timelineEndFormatted": self.timeline.end_formatted,
            "xAxisTitle": self.x_axis_title,
            "repairedLabels": self.repaired_count,
            "sliceIssues": list(self.slice_issues),
        }


def compute_timeline(files: tuple[FileMetadata, ...], *, tail_seconds: float) -> Timeline:
    """Derive the recording window from the first and last file.

    The end is the last file's start plus *tail_seconds*; either side is
    ``None`` when its timestamp cannot be parsed.
    """
    if not files:
        return Timeline()
    start: str | None = None
    start_formatted = ""
    end: str | None = None
    end_formatted = ""
    try:
        first = parse_instant(files[0].start_timestamp)
        start = first.isoformat().replace("+00:00", "Z")
        start_formatted = first.strftime("%H:%M:%S")
    except InvalidInstant:
        LOGGER.debug("Timeline start unavailable: %r", files[0].start_timestamp)
    try:
        last = parse_instant(files[-1].start_timestamp) + timedelta(seconds=tail_seconds)
        end = last.isoformat().replace("+00:00", "Z")
        end_formatted = last.strftime("%H:%M:%S")
    except (InvalidInstant, OverflowError):
        LOGGER.debug("Timeline end unavailable: %r", files[-1].start_timestamp)
    return Timeline(start=start, end=end, start_formatted=start_formatted, end_formatted=end_formatted)


def build_chart_payload(
    file_payload: Any,
    *,
    row_aux_count: int | None = None,
    config: EngineConfig | None = None,
) -> ChartPayload:
    """Build labels, values, ticks and statistics for one combined data file.

    *file_payload* is the decoded API response, bare or wrapped in
    ``{"data": ...}``.  A missing or non-object payload produces an empty,
    zero-valued chart (the row-level auxiliary count is still honoured).
    """
    cfg = config or DEFAULT_ENGINE_CONFIG
    data = unwrap_data(file_payload)
    if not isinstance(data, dict):
        LOGGER.warning("Chart payload is not an object (%s); returning empty chart", type(data).__name__)
        return ChartPayload(summary=summarize_signal([], row_aux_count=row_aux_count))

    raw_values = data.get(VALUES_FIELD)
    if not isinstance(raw_values, list):
        raw_values = []
    files = parse_file_metadata(data.get(FILE_TIMESTAMPS_FIELD) or [])
    total_length = len(raw_values)

    resolution = resolve_slices(
        files, total_length, downsample_ratio=cfg.timeline.downsample_ratio
    )
    label_result = reconstruct_labels(
        files,
        total_length,
        resolution=resolution,
        downsample_ratio=cfg.timeline.downsample_ratio,
        seconds_per_point=cfg.timeline.seconds_per_point,
    )
    ticks = select_ticks(files, resolution, label_result.labels)
    summary = summarize_signal(
        raw_values,
        row_aux_count=row_aux_count,
        file_aux_count=data.get(FILE_AUX_COUNT_FIELD),
    )
    timeline = compute_timeline(files, tail_seconds=cfg.timeline.timeline_tail_seconds)

    has_time_axis = bool(files and label_result.labels) or timeline.is_known
    x_axis_title = AXIS_TITLE_TIME if has_time_axis else AXIS_TITLE_INDEX

    LOGGER.debug(
        "Chart built: %d points, %d files, %d ticks, %d repaired labels",
        total_length,
        len(files),
        len(ticks),
        label_result.repaired_count,
    )
    return ChartPayload(
        labels=label_result.labels,
        values=coerce_values(raw_values),
        ticks=ticks,
        summary=summary,
        timeline=timeline,
        x_axis_title=x_axis_title,
        label_mode=label_result.mode,
        repaired_count=label_result.repaired_count,
        slice_issues=resolution.issues,
    )
