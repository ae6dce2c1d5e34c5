"""Summary statistics over the combined acceleration signal."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np

__all__ = [
    "SignalSummary",
    "coerce_values",
    "parse_numeric",
    "resolve_auxiliary_count",
    "summarize_signal",
]


@dataclass(slots=True, frozen=True)
class SignalSummary:
    mean: float = 0.0
    min: float = 0.0
    max: float = 0.0
    auxiliary_non_zero_count: int = 0
    point_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "mean": self.mean,
            "min": self.min,
            "max": self.max,
            "uwbNonZero": self.auxiliary_non_zero_count,
            "accelPoints": self.point_count,
        }


def parse_numeric(value: object) -> float | None:
    """Return *value* as a finite float, or ``None`` when it is not numeric.

    Numbers and numeric strings (``"4"``, ``" 2.5 "``) parse; booleans,
    non-numeric strings, NaN and infinities do not.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(out):
        return None
    return out


def coerce_values(values: Iterable[object]) -> list[float]:
    """Map every entry to a float, substituting ``0.0`` for non-numeric ones."""
    out: list[float] = []
    for value in values:
        parsed = parse_numeric(value)
        out.append(0.0 if parsed is None else parsed)
    return out


def _as_count(value: object) -> int:
    parsed = parse_numeric(value)
    if parsed is None or parsed < 0:
        return 0
    return int(parsed)


def resolve_auxiliary_count(row_count: object | None, file_count: object | None) -> int:
    """Merge the row-level and file-embedded UWB non-zero counts.

    The row-level count wins whenever it is greater than zero.  A row count
    of exactly zero is indistinguishable from "not provided", so the file
    count is used in that case; ``None`` is accepted for either argument and
    behaves like zero.
    """
    row = _as_count(row_count)
    if row > 0:
        return row
    return _as_count(file_count)


def summarize_signal(
    values: Iterable[object] | None,
    *,
    row_aux_count: object | None = None,
    file_aux_count: object | None = None,
) -> SignalSummary:
    """Compute mean/min/max and point count over *values*.

    The mean runs over the plotted series, where non-numeric entries are
    drawn as ``0``.  Min and max only consider entries that were numeric in
    the payload, and fall back to ``0`` when there are none.
    """
    aux_count = resolve_auxiliary_count(row_aux_count, file_aux_count)
    raw = list(values) if values is not None else []
    if not raw:
        return SignalSummary(auxiliary_non_zero_count=aux_count)

    numbers = [parse_numeric(v) for v in raw]
    parsed = np.array([np.nan if n is None else n for n in numbers], dtype=np.float64)
    numeric_mask = ~np.isnan(parsed)
    plotted = np.where(numeric_mask, parsed, 0.0)
    if numeric_mask.any():
        lo = float(np.min(parsed[numeric_mask]))
        hi = float(np.max(parsed[numeric_mask]))
    else:
        lo = hi = 0.0
    return SignalSummary(
        mean=float(np.mean(plotted)),
        min=lo,
        max=hi,
        auxiliary_non_zero_count=aux_count,
        point_count=len(raw),
    )
