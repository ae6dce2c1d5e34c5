"""Summary-card counters shown above the data grid."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .sensors import classify_sensor_activity, parse_activity_records, parse_sensor_records
from .volume import classify_recent_volume
from .window import utc_now

__all__ = ["SummaryCards", "build_summary_cards", "count_users"]


@dataclass(slots=True, frozen=True)
class SummaryCards:
    active_sensors: int = 0
    expected_sensors: int = 0
    users_count: int = 0
    data_points_total: int = 0
    data_points_recent_percent: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "activeSensors": self.active_sensors,
            "expectedSensors": self.expected_sensors,
            "usersCount": self.users_count,
            "dataPointsTotal": self.data_points_total,
            "dataPointsRecentPercent": self.data_points_recent_percent,
        }


def count_users(patients: Any) -> int:
    return len(patients) if isinstance(patients, list) else 0


def build_summary_cards(
    *,
    sensor_records: Any,
    activity_listing: Any,
    file_listing: Any,
    patients: Any = None,
    now: datetime | None = None,
    config: EngineConfig | None = None,
) -> SummaryCards:
    """Compute all summary counters from the raw listing payloads.

    Each input is the decoded API response; every classifier tolerates
    missing or malformed payloads and contributes zeros for them.
    """
    cfg = (config or DEFAULT_ENGINE_CONFIG).activity
    now = now or utc_now()
    activity = classify_sensor_activity(
        parse_sensor_records(sensor_records),
        parse_activity_records(activity_listing),
        now=now,
        window_days=cfg.active_window_days,
    )
    volume = classify_recent_volume(
        file_listing,
        now=now,
        window_days=cfg.recent_window_days,
        decoded_marker=cfg.decoded_marker,
        archive_placeholder=cfg.archive_placeholder,
    )
    return SummaryCards(
        active_sensors=activity.active_count,
        expected_sensors=activity.expected_count,
        users_count=count_users(patients),
        data_points_total=volume.total,
        data_points_recent_percent=volume.recent_percent,
    )
