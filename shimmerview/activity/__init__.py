"""Sensor activity and data-volume counters for the dashboard summary cards."""

from .cards import SummaryCards, build_summary_cards, count_users
from .sensors import (
    FileActivityRecord,
    SensorActivity,
    SensorRecord,
    classify_sensor_activity,
    parse_activity_records,
    parse_sensor_records,
)
from .volume import RecentVolume, classify_recent_volume, parse_listing_date, round_half_up
from .window import RecencyWindow

__all__ = [
    "FileActivityRecord",
    "RecencyWindow",
    "RecentVolume",
    "SensorActivity",
    "SensorRecord",
    "SummaryCards",
    "build_summary_cards",
    "classify_recent_volume",
    "classify_sensor_activity",
    "count_users",
    "parse_activity_records",
    "parse_listing_date",
    "parse_sensor_records",
    "round_half_up",
]
