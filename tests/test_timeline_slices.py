"""Unit tests for file-slice resolution."""

from __future__ import annotations

from builders import file_entry

from shimmerview.timeline.slices import (
    FileMetadata,
    ResolvedSlice,
    parse_file_metadata,
    resolve_slices,
)

TS = "2025-01-01T00:00:00Z"


def _files(*entries: dict) -> tuple[FileMetadata, ...]:
    return parse_file_metadata(list(entries))


class TestParseFileMetadata:
    def test_payload_keys_are_mapped(self) -> None:
        (meta,) = _files(
            file_entry(TS, filename="a.csv", accel_samples=5000, downsampled_samples=100, start=0, end=99)
        )
        assert meta.filename == "a.csv"
        assert meta.start_timestamp == TS
        assert meta.original_sample_count == 5000
        assert meta.downsampled_sample_count == 100
        assert meta.downsampled_start_index == 0
        assert meta.downsampled_end_index == 99

    def test_null_fields_are_absent(self) -> None:
        (meta,) = parse_file_metadata(
            [{"timestamp": TS, "downsampled_start_index": None, "accel_samples": "n/a"}]
        )
        assert meta.downsampled_start_index is None
        assert meta.original_sample_count is None

    def test_non_list_and_non_dict_entries(self) -> None:
        assert parse_file_metadata(None) == ()
        assert parse_file_metadata("oops") == ()
        assert len(parse_file_metadata([file_entry(TS), 42, "x"])) == 1


class TestResolveSlices:
    def test_empty_metadata_returns_empty_resolution(self) -> None:
        result = resolve_slices((), 10)
        assert result.slices == ()
        assert result.issues == ()

    def test_count_derived_from_original_samples(self) -> None:
        result = resolve_slices(_files(file_entry(TS, accel_samples=5000)), 100)
        assert result.slices == (ResolvedSlice(0, 0, 99),)
        assert result.is_contiguous

    def test_partial_block_rounds_up(self) -> None:
        result = resolve_slices(_files(file_entry(TS, accel_samples=5001)), 101)
        assert result.slices[0].end_index == 100

    def test_inferred_contiguity(self) -> None:
        files = _files(
            file_entry(TS, accel_samples=5000),
            file_entry(TS, accel_samples=250),
            file_entry(TS, downsampled_samples=3),
        )
        result = resolve_slices(files, 108)
        assert [(s.start_index, s.end_index) for s in result.slices] == [(0, 99), (100, 104), (105, 107)]
        assert result.is_contiguous

    def test_explicit_indices_win(self) -> None:
        files = _files(
            file_entry(TS, accel_samples=5000, start=0, end=9),
            file_entry(TS, accel_samples=5000, start=10, end=19),
        )
        result = resolve_slices(files, 20)
        assert [(s.start_index, s.end_index) for s in result.slices] == [(0, 9), (10, 19)]
        assert result.is_contiguous

    def test_inferred_start_follows_previous_explicit_end(self) -> None:
        files = _files(
            file_entry(TS, start=0, end=4),
            file_entry(TS, downsampled_samples=2),
        )
        result = resolve_slices(files, 7)
        assert result.slices[1] == ResolvedSlice(1, 5, 6)

    def test_zero_downsampled_count_falls_back_to_original(self) -> None:
        result = resolve_slices(_files(file_entry(TS, accel_samples=100, downsampled_samples=0)), 2)
        assert result.slices[0] == ResolvedSlice(0, 0, 1)

    def test_missing_counts_give_empty_slice_and_issue(self) -> None:
        files = _files(file_entry(TS, filename="bad.csv"), file_entry(TS, accel_samples=100))
        result = resolve_slices(files, 2)
        assert result.slices[0].length == 0
        assert result.slices[1] == ResolvedSlice(1, 0, 1)
        assert any("bad.csv" in issue for issue in result.issues)

    def test_end_beyond_signal_is_reported_not_raised(self) -> None:
        result = resolve_slices(_files(file_entry(TS, accel_samples=5000)), 10)
        assert result.slices[0] == ResolvedSlice(0, 0, 99)
        assert any("beyond signal length" in issue for issue in result.issues)

    def test_gap_and_overlap_are_reported(self) -> None:
        gap = resolve_slices(_files(file_entry(TS, start=0, end=2), file_entry(TS, start=5, end=6)), 7)
        assert any("gap of 2" in issue for issue in gap.issues)
        overlap = resolve_slices(
            _files(file_entry(TS, start=0, end=4), file_entry(TS, start=3, end=6)), 7
        )
        assert any("overlaps" in issue for issue in overlap.issues)

    def test_uncovered_tail_is_reported(self) -> None:
        result = resolve_slices(_files(file_entry(TS, accel_samples=100)), 5)
        assert any("3 trailing points" in issue for issue in result.issues)

    def test_issues_are_logged(self, caplog) -> None:
        with caplog.at_level("WARNING", logger="shimmerview.timeline.slices"):
            resolve_slices(_files(file_entry(TS, accel_samples=5000)), 10)
        assert "does not partition" in caplog.text
