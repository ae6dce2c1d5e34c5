from __future__ import annotations

from datetime import datetime

from builders import listing_row

from shimmerview.activity.cards import SummaryCards, build_summary_cards, count_users
from shimmerview.config import ActivityConfig, EngineConfig, TimelineConfig


def _inputs() -> dict:
    return {
        "sensor_records": {"data": [{"device": "D1", "shimmer1": ["S1"], "shimmer2": ["S2"]}]},
        "activity_listing": [{"shimmer_device": "S1", "date": "2026-10-19", "time": "06:00:00"}],
        "file_listing": [
            listing_row(("a.bin", "20261019_060000"), ("b.bin", "20200101_000000"))
        ],
        "patients": [{"id": "P1"}, {"id": "P2"}, {"id": "P3"}],
    }


class TestSummaryCards:
    def test_all_counters(self, now: datetime) -> None:
        cards = build_summary_cards(**_inputs(), now=now)
        assert cards == SummaryCards(
            active_sensors=1,
            expected_sensors=2,
            users_count=3,
            data_points_total=2,
            data_points_recent_percent=50,
        )

    def test_to_dict_keys(self, now: datetime) -> None:
        data = build_summary_cards(**_inputs(), now=now).to_dict()
        assert data == {
            "activeSensors": 1,
            "expectedSensors": 2,
            "usersCount": 3,
            "dataPointsTotal": 2,
            "dataPointsRecentPercent": 50,
        }

    def test_malformed_inputs_give_zeros(self, now: datetime) -> None:
        cards = build_summary_cards(
            sensor_records=None, activity_listing=None, file_listing="x", patients={"n": 1}, now=now
        )
        assert cards == SummaryCards()

    def test_config_windows_are_used(self, now: datetime) -> None:
        config = EngineConfig(
            timeline=TimelineConfig(),
            activity=ActivityConfig(active_window_days=0.1, recent_window_days=0.1),
        )
        cards = build_summary_cards(**_inputs(), now=now, config=config)
        assert cards.active_sensors == 0
        assert cards.data_points_recent_percent == 0

    def test_count_users(self) -> None:
        assert count_users([1, 2]) == 2
        assert count_users(None) == 0
