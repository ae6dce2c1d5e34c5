"""Fixed look-back windows anchored at a single "now"."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

__all__ = ["RecencyWindow", "utc_now"]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class RecencyWindow:
    """Look-back of *days* ending at *now*; the cutoff is computed once.

    An instant is inside the window when ``now - instant <= days``, so the
    boundary itself and any instant in the future count as recent.
    A cutoff that would fall before ``datetime.min`` is clamped to it.
    """

    days: float
    now: datetime = field(default_factory=utc_now)
    cutoff: datetime = field(init=False)

    def __post_init__(self) -> None:
        now = self.now if self.now.tzinfo is not None else self.now.replace(tzinfo=UTC)
        object.__setattr__(self, "now", now)
        try:
            cutoff = now - timedelta(days=self.days)
        except OverflowError:
            cutoff = datetime.min.replace(tzinfo=UTC)
        object.__setattr__(self, "cutoff", cutoff)

    def contains(self, instant: datetime) -> bool:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return instant >= self.cutoff
