"""Active vs expected sensor counts for the summary cards."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..constants import ACTIVE_SENSOR_WINDOW_DAYS
from ..json_utils import as_list
from ..timeline.formatting import InvalidInstant, parse_instant
from .window import RecencyWindow

LOGGER = logging.getLogger(__name__)

__all__ = [
    "FileActivityRecord",
    "SensorActivity",
    "SensorRecord",
    "classify_sensor_activity",
    "parse_activity_records",
    "parse_sensor_records",
]


def _text_or_none(value: object) -> str | None:
    return str(value) if value not in (None, "") else None


def _id_set(value: object) -> frozenset[str]:
    if not isinstance(value, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(str(item) for item in value if item not in (None, ""))


@dataclass(slots=True, frozen=True)
class SensorRecord:
    """Declared sensors of one device, split over its two channels."""

    device: str
    sensor_ids_a: frozenset[str] = frozenset()
    sensor_ids_b: frozenset[str] = frozenset()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SensorRecord:
        return cls(
            device=str(data.get("device") or ""),
            sensor_ids_a=_id_set(data.get("shimmer1")),
            sensor_ids_b=_id_set(data.get("shimmer2")),
        )

    @property
    def sensor_ids(self) -> frozenset[str]:
        return frozenset(self.sensor_ids_a) | frozenset(self.sensor_ids_b)


@dataclass(slots=True, frozen=True)
class FileActivityRecord:
    """One listed file: the sensor that produced it and when."""

    device: str | None
    date: str | None
    time: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileActivityRecord:
        device = data.get("shimmer_device") or data.get("device")
        return cls(
            device=_text_or_none(device),
            date=_text_or_none(data.get("date")),
            time=_text_or_none(data.get("time")),
        )

    def instant(self) -> datetime | None:
        """Combined ``date`` + ``time`` instant, or ``None`` if incomplete/invalid."""
        if not (self.device and self.date and self.time):
            return None
        try:
            return parse_instant(f"{self.date}T{self.time}")
        except InvalidInstant:
            return None


@dataclass(slots=True, frozen=True)
class SensorActivity:
    active_sensors: frozenset[str]
    expected_sensors: frozenset[str]

    @property
    def active_count(self) -> int:
        return len(self.active_sensors)

    @property
    def expected_count(self) -> int:
        return len(self.expected_sensors)


def parse_sensor_records(response: Any) -> list[SensorRecord]:
    items = as_list(response) or []
    return [SensorRecord.from_dict(item) for item in items if isinstance(item, dict)]


def parse_activity_records(response: Any) -> list[FileActivityRecord] | None:
    """Activity records from a list or ``{"data": [...]}``; ``None`` if neither."""
    items = as_list(response)
    if items is None:
        return None
    return [FileActivityRecord.from_dict(item) for item in items if isinstance(item, dict)]


def classify_sensor_activity(
    sensor_records: Iterable[SensorRecord],
    activity_records: Iterable[FileActivityRecord] | None,
    *,
    now: datetime | None = None,
    window_days: float = ACTIVE_SENSOR_WINDOW_DAYS,
) -> SensorActivity:
    """Count sensors seen within *window_days* against all declared sensors.

    Records missing ``device``, ``date`` or ``time`` (or with an unparseable
    combination) are skipped.  ``activity_records=None`` means the listing
    could not be read; no sensor is then considered active.
    """
    expected: set[str] = set()
    for record in sensor_records:
        expected.update(record.sensor_ids)

    active: set[str] = set()
    if activity_records is None:
        LOGGER.error("File activity listing is not a list; reporting no active sensors")
    else:
        window = RecencyWindow(days=window_days, now=now) if now else RecencyWindow(days=window_days)
        skipped = 0
        for activity in activity_records:
            instant = activity.instant()
            if instant is None:
                skipped += 1
                continue
            if window.contains(instant) and activity.device:
                active.add(activity.device)
        if skipped:
            LOGGER.debug("Skipped %d incomplete file activity records", skipped)

    return SensorActivity(active_sensors=frozenset(active), expected_sensors=frozenset(expected))
