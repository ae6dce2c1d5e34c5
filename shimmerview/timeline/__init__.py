"""Time-series reconstruction for the combined downsampled signal.

- :mod:`~shimmerview.timeline.formatting`: UTC ``HH:MM:SS`` formatting.
- :mod:`~shimmerview.timeline.slices`: per-file index ranges.
- :mod:`~shimmerview.timeline.labels`: per-sample wall-clock labels.
- :mod:`~shimmerview.timeline.ticks`: sparse file-boundary axis ticks.
- :mod:`~shimmerview.timeline.stats`: mean/min/max and auxiliary counts.
- :mod:`~shimmerview.timeline.chart`: the assembled chart payload.
"""

from .chart import ChartPayload, Timeline, build_chart_payload
from .formatting import InvalidInstant, format_hms, format_hms_or_none, parse_instant
from .labels import LabelResult, index_labels, reconstruct_labels
from .slices import (
    FileMetadata,
    ResolvedSlice,
    SliceResolution,
    parse_file_metadata,
    resolve_slices,
)
from .stats import SignalSummary, coerce_values, resolve_auxiliary_count, summarize_signal
from .ticks import AxisTick, TickMap, select_ticks

__all__ = [
    "AxisTick",
    "ChartPayload",
    "FileMetadata",
    "InvalidInstant",
    "LabelResult",
    "ResolvedSlice",
    "SignalSummary",
    "SliceResolution",
    "TickMap",
    "Timeline",
    "build_chart_payload",
    "coerce_values",
    "format_hms",
    "format_hms_or_none",
    "index_labels",
    "parse_file_metadata",
    "parse_instant",
    "reconstruct_labels",
    "resolve_auxiliary_count",
    "resolve_slices",
    "select_ticks",
    "summarize_signal",
]
