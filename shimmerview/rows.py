"""Normalisation of the per-date combined-data rows shown in the grid.

The listing endpoint has shipped both snake_case and camelCase field names
over time, so each field is read from the first alternate that is present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

from .constants import MISSING_PLACEHOLDER
from .json_utils import unwrap_data
from .timeline.stats import parse_numeric

LOGGER = logging.getLogger(__name__)

__all__ = ["Channel", "CombinedDataRow", "device_from_filename", "parse_combined_rows"]

Channel = Literal["shimmer1", "shimmer2"]
CHANNELS: tuple[Channel, ...] = ("shimmer1", "shimmer2")

UNKNOWN_DEVICE = "Unknown"
UNKNOWN_PATIENT = "Unknown"


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None


def _count(data: dict[str, Any], *keys: str) -> int:
    parsed = parse_numeric(_first(data, *keys))
    return int(parsed) if parsed is not None and parsed > 0 else 0


def device_from_filename(filename: str | None) -> str | None:
    """Device id prefix of a combined filename.

    ``a9ae0f999916e210_2025-12-11_Shimmer_DCFF_combined.json`` → ``a9ae0f999916e210``
    """
    if not filename or filename == MISSING_PLACEHOLDER:
        return None
    return filename.split("_", 1)[0] or None


@dataclass(slots=True, frozen=True)
class CombinedDataRow:
    date: str
    patient: str
    device: str
    shimmer1: str
    shimmer2: str
    shimmer1_file: str
    shimmer2_file: str
    shimmer1_accel_points: int = 0
    shimmer2_accel_points: int = 0
    shimmer1_uwb_non_zero: int = 0
    shimmer2_uwb_non_zero: int = 0

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> CombinedDataRow:
        file1 = str(_first(item, "shimmer1_file", "shimmer1File") or MISSING_PLACEHOLDER)
        file2 = str(_first(item, "shimmer2_file", "shimmer2File") or MISSING_PLACEHOLDER)
        device = device_from_filename(file1) or device_from_filename(file2) or UNKNOWN_DEVICE
        return cls(
            date=str(item.get("date") or ""),
            patient=str(item.get("patient") or UNKNOWN_PATIENT),
            device=device,
            shimmer1=str(item.get("shimmer1") or MISSING_PLACEHOLDER),
            shimmer2=str(item.get("shimmer2") or MISSING_PLACEHOLDER),
            shimmer1_file=file1,
            shimmer2_file=file2,
            shimmer1_accel_points=_count(item, "shimmer1_accel_points", "shimmer1AccelPoints"),
            shimmer2_accel_points=_count(item, "shimmer2_accel_points", "shimmer2AccelPoints"),
            shimmer1_uwb_non_zero=_count(
                item,
                "shimmer1_uwb_dis_non_zero_count",
                "shimmer1_uwb_non_zero",
                "shimmer1UwbNonZero",
            ),
            shimmer2_uwb_non_zero=_count(
                item,
                "shimmer2_uwb_dis_non_zero_count",
                "shimmer2_uwb_non_zero",
                "shimmer2UwbNonZero",
            ),
        )

    def default_channel(self) -> Channel:
        """The channel charted first: shimmer1 unless that sensor is absent."""
        return "shimmer1" if self.shimmer1 != MISSING_PLACEHOLDER else "shimmer2"

    def file_for(self, channel: Channel) -> str | None:
        filename = self.shimmer1_file if channel == "shimmer1" else self.shimmer2_file
        return None if filename == MISSING_PLACEHOLDER else filename

    def uwb_count_for(self, channel: Channel) -> int:
        return self.shimmer1_uwb_non_zero if channel == "shimmer1" else self.shimmer2_uwb_non_zero

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "patient": self.patient,
            "device": self.device,
            "shimmer1": self.shimmer1,
            "shimmer2": self.shimmer2,
            "shimmer1File": self.shimmer1_file,
            "shimmer2File": self.shimmer2_file,
            "shimmer1AccelPoints": self.shimmer1_accel_points,
            "shimmer2AccelPoints": self.shimmer2_accel_points,
            "shimmer1UwbNonZero": self.shimmer1_uwb_non_zero,
            "shimmer2UwbNonZero": self.shimmer2_uwb_non_zero,
        }


def parse_combined_rows(response: Any) -> list[CombinedDataRow]:
    """Rows from a list or ``{"data": [...]}`` response; anything else yields none."""
    items = unwrap_data(response)
    if not isinstance(items, list):
        LOGGER.warning("Combined data listing is not a list (%s)", type(items).__name__)
        return []
    return [CombinedDataRow.from_dict(item) for item in items if isinstance(item, dict)]
