"""Pydantic models for the JSON handed to the dashboard views.

Separated from the engine modules to keep computation distinct from the
serialised contract.  Field names follow the dashboard's camelCase keys.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .activity.cards import SummaryCards
from .rows import CombinedDataRow
from .timeline.chart import ChartPayload


class AxisTickResponse(BaseModel):
    index: int = Field(ge=0)
    label: str


class ChartStatsResponse(BaseModel):
    mean: float
    min: float
    max: float
    uwbNonZero: int = Field(ge=0)
    accelPoints: int = Field(ge=0)


class ChartResponse(BaseModel):
    labels: list[str]
    values: list[float]
    ticks: list[AxisTickResponse]
    maxTicks: int = Field(ge=0)
    stats: ChartStatsResponse
    timelineStart: str | None = None
    timelineEnd: str | None = None
    timelineStartFormatted: str = ""
    timelineEndFormatted: str = ""
    xAxisTitle: str
    repairedLabels: int = Field(default=0, ge=0)
    sliceIssues: list[str] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: ChartPayload) -> ChartResponse:
        return cls.model_validate(payload.to_dict())


class SummaryCardsResponse(BaseModel):
    activeSensors: int = Field(ge=0)
    expectedSensors: int = Field(ge=0)
    usersCount: int = Field(ge=0)
    dataPointsTotal: int = Field(ge=0)
    dataPointsRecentPercent: int = Field(ge=0, le=100)

    @classmethod
    def from_cards(cls, cards: SummaryCards) -> SummaryCardsResponse:
        return cls.model_validate(cards.to_dict())


class CombinedRowResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: str
    patient: str
    device: str
    shimmer1: str
    shimmer2: str
    shimmer1File: str
    shimmer2File: str
    shimmer1AccelPoints: int = 0
    shimmer2AccelPoints: int = 0
    shimmer1UwbNonZero: int = 0
    shimmer2UwbNonZero: int = 0

    @classmethod
    def from_row(cls, row: CombinedDataRow) -> CombinedRowResponse:
        return cls.model_validate(row.to_dict())
