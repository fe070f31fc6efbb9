from __future__ import annotations

import math
from datetime import date
from typing import List

from pydantic import BaseModel, Field

from clubstats.scoring import ComparisonRow, TrendInfo


class ComparisonRowResponse(BaseModel):
    player: str
    value: float
    measured_on: str
    trend: float
    is_first_measurement: bool
    measurement_count: int
    date_range_label: str | None = None
    # null when the player has no benchmark
    benchmark_distance: float | None = None
    benchmark_status: str

    @classmethod
    def from_row(cls, row: ComparisonRow) -> "ComparisonRowResponse":
        distance = None if math.isinf(row.benchmark_distance) else row.benchmark_distance
        return cls(
            player=row.player,
            value=row.value,
            measured_on=row.measured_on,
            trend=row.trend,
            is_first_measurement=row.is_first_measurement,
            measurement_count=row.measurement_count,
            date_range_label=row.date_range_label,
            benchmark_distance=distance,
            benchmark_status=row.benchmark_status,
        )


class ComparisonResponse(BaseModel):
    metric: str
    sort_by: str
    average: float
    rows: List[ComparisonRowResponse] = Field(default_factory=list)


class SeriesPointResponse(BaseModel):
    measured_on: date
    value: float


class TrendResponse(BaseModel):
    player: str
    metric: str
    delta: float
    is_first_measurement: bool
    count: int
    date_range_label: str | None = None
    series: List[SeriesPointResponse] = Field(default_factory=list)

    @classmethod
    def from_trend(
        cls,
        player: str,
        metric: str,
        info: TrendInfo,
        series: List[SeriesPointResponse],
    ) -> "TrendResponse":
        return cls(
            player=player,
            metric=metric,
            delta=info.delta,
            is_first_measurement=info.is_first_measurement,
            count=info.count,
            date_range_label=info.date_range_label,
            series=series,
        )


class UploadSummaryResponse(BaseModel):
    stored: int
    players: int
    unresolved_players: List[str] = Field(default_factory=list)
