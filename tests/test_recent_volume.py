from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest
from builders import listing_row

from shimmerview.activity.volume import (
    classify_recent_volume,
    iter_source_files,
    parse_listing_date,
    round_half_up,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"), [(12.5, 13), (12.49, 12), (0.5, 1), (2.5, 3), (99.5, 100), (0.0, 0)]
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestParseListingDate:
    def test_date_prefix_only(self) -> None:
        assert parse_listing_date("20250827_013909") == datetime(2025, 8, 27, tzinfo=UTC)

    @pytest.mark.parametrize(
        "value", ["files.zip", "", None, 20250827, "2025-08-27", "20251340_000000", "20250827"]
    )
    def test_unusable_values(self, value: object) -> None:
        assert parse_listing_date(value) is None

    def test_custom_archive_placeholder(self) -> None:
        assert parse_listing_date("20250827_x", archive_placeholder="20250827_x") is None


class TestIterSourceFiles:
    def test_decoded_files_are_skipped(self) -> None:
        rows = [
            listing_row(("a.bin", "20261018_000000"), ("a_decode.csv", "20261018_000000")),
            {"files": "not-a-list"},
            "junk",
        ]
        assert [d["fullname"] for d in iter_source_files(rows)] == ["a.bin"]

    def test_name_is_used_when_fullname_missing(self) -> None:
        rows = [{"files": [{"name": "b_decode.csv"}, {"name": "b.bin"}]}]
        assert [d["name"] for d in iter_source_files(rows)] == ["b.bin"]


class TestClassifyRecentVolume:
    def test_three_of_ten_recent(self, now: datetime) -> None:
        recent = [(f"r{i}.bin", "20261018_120000") for i in range(3)]
        old = [(f"o{i}.bin", "20250101_000000") for i in range(7)]
        result = classify_recent_volume([listing_row(*recent), listing_row(*old)], now=now)
        assert (result.total, result.recent, result.recent_percent) == (10, 3, 30)

    def test_wrapped_response(self, now: datetime) -> None:
        response = {"data": [listing_row(("a.bin", "20261019_000000"))]}
        assert classify_recent_volume(response, now=now).recent_percent == 100

    def test_date_only_comparison(self, now: datetime) -> None:
        # Cutoff is 2026-10-14T12:00Z; the time of day is ignored.
        rows = [
            listing_row(("late.bin", "20261014_235959"), ("next.bin", "20261015_000000"))
        ]
        result = classify_recent_volume(rows, now=now)
        assert (result.total, result.recent) == (2, 1)

    def test_placeholder_and_invalid_dates_count_towards_total(self, now: datetime) -> None:
        rows = [
            listing_row(
                ("archive", "files.zip"),
                ("bad.bin", "20261340_000000"),
                ("none.bin", ""),
                ("ok.bin", "20261019_000000"),
            )
        ]
        result = classify_recent_volume(rows, now=now)
        assert (result.total, result.recent, result.recent_percent) == (4, 1, 25)

    def test_half_percent_rounds_up(self, now: datetime) -> None:
        files = [("new.bin", "20261019_000000")] + [(f"o{i}", "20200101_000000") for i in range(7)]
        assert classify_recent_volume([listing_row(*files)], now=now).recent_percent == 13

    def test_decoded_excluded_from_both_counts(self, now: datetime) -> None:
        rows = [listing_row(("x_decode.csv", "20261019_000000"), ("x.bin", "20200101_000000"))]
        result = classify_recent_volume(rows, now=now)
        assert (result.total, result.recent, result.recent_percent) == (1, 0, 0)

    def test_no_files(self, now: datetime) -> None:
        result = classify_recent_volume([], now=now)
        assert (result.total, result.recent_percent) == (0, 0)

    def test_non_list_response(self, now: datetime, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="shimmerview.activity.volume"):
            result = classify_recent_volume({"error": "timeout"}, now=now)
        assert result.total == 0
        assert "not a list" in caplog.text

    def test_custom_marker_and_window(self, now: datetime) -> None:
        rows = [listing_row(("a.raw", "20261010_000000"), ("b.tmp", "20261010_000000"))]
        result = classify_recent_volume(rows, now=now, window_days=10, decoded_marker=".tmp")
        assert (result.total, result.recent) == (1, 1)
