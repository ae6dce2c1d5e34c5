from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .constants import (
    ACTIVE_SENSOR_WINDOW_DAYS,
    ARCHIVE_PLACEHOLDER_TIMESTAMP,
    DECODED_FILE_MARKER,
    DOWNSAMPLE_RATIO,
    RECENT_VOLUME_WINDOW_DAYS,
    SAMPLE_RATE_HZ,
    TIMELINE_TAIL_SECONDS,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "timeline": {
        "downsample_ratio": DOWNSAMPLE_RATIO,
        "sample_rate_hz": SAMPLE_RATE_HZ,
        "timeline_tail_seconds": TIMELINE_TAIL_SECONDS,
    },
    "activity": {
        "active_window_days": ACTIVE_SENSOR_WINDOW_DAYS,
        "recent_window_days": RECENT_VOLUME_WINDOW_DAYS,
        "decoded_marker": DECODED_FILE_MARKER,
        "archive_placeholder": ARCHIVE_PLACEHOLDER_TIMESTAMP,
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _positive_or_default(section: str, name: str, value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        LOGGER.warning("%s.%s=%r is not a number; using default %s", section, name, value, default)
        return float(default)
    if number <= 0:
        LOGGER.warning("%s.%s=%s is not positive; using default %s", section, name, value, default)
        return float(default)
    return number


@dataclass(slots=True, frozen=True)
class TimelineConfig:
    downsample_ratio: int = DOWNSAMPLE_RATIO
    sample_rate_hz: float = SAMPLE_RATE_HZ
    timeline_tail_seconds: float = TIMELINE_TAIL_SECONDS

    def __post_init__(self) -> None:
        ratio = _positive_or_default(
            "timeline", "downsample_ratio", self.downsample_ratio, DOWNSAMPLE_RATIO
        )
        object.__setattr__(self, "downsample_ratio", max(1, int(ratio)))
        object.__setattr__(
            self,
            "sample_rate_hz",
            _positive_or_default("timeline", "sample_rate_hz", self.sample_rate_hz, SAMPLE_RATE_HZ),
        )
        object.__setattr__(
            self,
            "timeline_tail_seconds",
            _positive_or_default(
                "timeline",
                "timeline_tail_seconds",
                self.timeline_tail_seconds,
                TIMELINE_TAIL_SECONDS,
            ),
        )

    @property
    def seconds_per_point(self) -> float:
        """Wall-clock spacing between consecutive downsampled points."""
        return self.downsample_ratio / self.sample_rate_hz


@dataclass(slots=True, frozen=True)
class ActivityConfig:
    active_window_days: float = ACTIVE_SENSOR_WINDOW_DAYS
    recent_window_days: float = RECENT_VOLUME_WINDOW_DAYS
    decoded_marker: str = DECODED_FILE_MARKER
    archive_placeholder: str = ARCHIVE_PLACEHOLDER_TIMESTAMP

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "active_window_days",
            _positive_or_default(
                "activity", "active_window_days", self.active_window_days, ACTIVE_SENSOR_WINDOW_DAYS
            ),
        )
        object.__setattr__(
            self,
            "recent_window_days",
            _positive_or_default(
                "activity", "recent_window_days", self.recent_window_days, RECENT_VOLUME_WINDOW_DAYS
            ),
        )
        if not isinstance(self.decoded_marker, str) or not self.decoded_marker:
            LOGGER.warning(
                "activity.decoded_marker=%r is empty; using default %r",
                self.decoded_marker,
                DECODED_FILE_MARKER,
            )
            object.__setattr__(self, "decoded_marker", DECODED_FILE_MARKER)
        if not isinstance(self.archive_placeholder, str):
            object.__setattr__(self, "archive_placeholder", str(self.archive_placeholder))


@dataclass(slots=True, frozen=True)
class EngineConfig:
    timeline: TimelineConfig
    activity: ActivityConfig
    config_path: Path | None = None


DEFAULT_ENGINE_CONFIG = EngineConfig(timeline=TimelineConfig(), activity=ActivityConfig())


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from None
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a YAML object at the top level.")
        return data


def load_config(config_path: Path | None = None) -> EngineConfig:
    """Load engine settings from *config_path*, falling back to defaults.

    A missing file is not an error; it simply yields the defaults.
    """
    if config_path is None:
        return DEFAULT_ENGINE_CONFIG
    path = config_path.resolve()
    merged = _deep_merge(deepcopy(DEFAULT_CONFIG), _read_config_file(path))
    timeline_cfg = merged.get("timeline") or {}
    activity_cfg = merged.get("activity") or {}
    if not isinstance(timeline_cfg, dict) or not isinstance(activity_cfg, dict):
        raise ValueError(f"{path}: 'timeline' and 'activity' must be YAML objects.")
    defaults_timeline = DEFAULT_CONFIG["timeline"]
    defaults_activity = DEFAULT_CONFIG["activity"]
    return EngineConfig(
        timeline=TimelineConfig(
            downsample_ratio=timeline_cfg.get(
                "downsample_ratio", defaults_timeline["downsample_ratio"]
            ),
            sample_rate_hz=timeline_cfg.get("sample_rate_hz", defaults_timeline["sample_rate_hz"]),
            timeline_tail_seconds=timeline_cfg.get(
                "timeline_tail_seconds", defaults_timeline["timeline_tail_seconds"]
            ),
        ),  # NOTE: __post_init__ validates & clamps all fields
        activity=ActivityConfig(
            active_window_days=activity_cfg.get(
                "active_window_days", defaults_activity["active_window_days"]
            ),
            recent_window_days=activity_cfg.get(
                "recent_window_days", defaults_activity["recent_window_days"]
            ),
            decoded_marker=activity_cfg.get("decoded_marker", defaults_activity["decoded_marker"]),
            archive_placeholder=activity_cfg.get(
                "archive_placeholder", defaults_activity["archive_placeholder"]
            ),
        ),
        config_path=path,
    )
