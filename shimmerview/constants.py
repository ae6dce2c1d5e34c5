"""Shared timeline and activity constants.

Every numeric literal that appears in more than one module should live here
so that a change only needs to happen in one place.
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Downsampled signal geometry
# ---------------------------------------------------------------------------
DOWNSAMPLE_RATIO: Final[int] = 50
"""Original high-rate samples summarised by one downsampled point."""

SAMPLE_RATE_HZ: Final[float] = 51.2
"""Native sample rate of the wearable accelerometer."""

SECONDS_PER_DOWNSAMPLED_POINT: Final[float] = DOWNSAMPLE_RATIO / SAMPLE_RATE_HZ
"""Wall-clock spacing between consecutive downsampled points (0.9765625 s)."""

# ---------------------------------------------------------------------------
# Labels and ticks
# ---------------------------------------------------------------------------
FALLBACK_LABEL: Final[str] = "00:00:00"
"""Label used when the very first index could not be labelled from metadata."""

EXTRA_AXIS_TICKS: Final[int] = 2
"""Slack added to the per-file tick count for the axis min/max ticks."""

TIMELINE_TAIL_SECONDS: Final[float] = 3600.0
"""Assumed duration of the last file when estimating the end of a timeline."""

# ---------------------------------------------------------------------------
# Recency windows
# ---------------------------------------------------------------------------
ACTIVE_SENSOR_WINDOW_DAYS: Final[float] = 2.0
"""A sensor with a file newer than this (inclusive) counts as active."""

RECENT_VOLUME_WINDOW_DAYS: Final[float] = 5.0
"""Files dated within this many days count towards the recent share."""

# ---------------------------------------------------------------------------
# File listing markers
# ---------------------------------------------------------------------------
DECODED_FILE_MARKER: Final[str] = "_decode"
"""Substring marking a derived/decoded artifact that is not a source file."""

ARCHIVE_PLACEHOLDER_TIMESTAMP: Final[str] = "files.zip"
"""Timestamp value used by the listing for bulk-archive placeholders."""

MISSING_PLACEHOLDER: Final[str] = "-"
"""Grid placeholder for a sensor or file that is not present in a row."""
