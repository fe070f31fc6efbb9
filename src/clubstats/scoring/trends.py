"""Body-composition trends and distance from per-player targets."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Sequence

from clubstats.config import FAT_BENCHMARKS, Benchmark
from clubstats.identity import IdentityResolver, normalize_identity, player_resolver
from clubstats.ingest.body_composition import format_measurement_date
from clubstats.models import Measurement


SortKey = Literal["value", "trend", "benchmark"]
BenchmarkStatus = Literal["below", "on_target", "above", "no_benchmark"]

BENCHMARK_METRIC = "fat"


@dataclass(frozen=True)
class TrendInfo:
    delta: float
    is_first_measurement: bool
    count: int
    date_range_label: Optional[str]


def trend_info(series: Sequence[Measurement], metric: str = BENCHMARK_METRIC) -> TrendInfo:
    """Change between the two most recent measurements of ``metric``."""

    ordered = sorted(series, key=lambda item: item.measured_on)
    if len(ordered) < 2:
        label = format_measurement_date(ordered[0].measured_on) if ordered else None
        return TrendInfo(delta=0.0, is_first_measurement=True, count=len(ordered), date_range_label=label)
    previous, latest = ordered[-2], ordered[-1]
    return TrendInfo(
        delta=latest.metric(metric) - previous.metric(metric),
        is_first_measurement=False,
        count=len(ordered),
        date_range_label=(
            f"{format_measurement_date(previous.measured_on)} → {format_measurement_date(latest.measured_on)}"
        ),
    )


class BenchmarkLookup:
    """Benchmark table keyed by canonical player name, with alias resolution."""

    def __init__(
        self,
        benchmarks: Mapping[str, Benchmark] | None = None,
        *,
        extra_aliases: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self.benchmarks: Dict[str, Benchmark] = dict(FAT_BENCHMARKS if benchmarks is None else benchmarks)
        self.resolver: IdentityResolver = player_resolver(self.benchmarks, extra_aliases)

    def get(self, identity: str) -> Optional[Benchmark]:
        canonical = self.resolver.resolve(identity)
        if canonical is None:
            return None
        return self.benchmarks.get(canonical)

    def distance(self, identity: str, value: float) -> float:
        benchmark = self.get(identity)
        if benchmark is None:
            return math.inf
        if benchmark.contains(value):
            return 0.0
        if value < benchmark.min:
            return benchmark.min - value
        return value - benchmark.max

    def status(self, identity: str, value: float) -> BenchmarkStatus:
        benchmark = self.get(identity)
        if benchmark is None:
            return "no_benchmark"
        if value < benchmark.min:
            return "below"
        if value > benchmark.max:
            return "above"
        return "on_target"


def benchmark_distance(identity: str, value: float, lookup: BenchmarkLookup | None = None) -> float:
    """Distance outside the player's target range; +inf when there is none."""

    return (lookup or BenchmarkLookup()).distance(identity, value)


def benchmark_status(identity: str, value: float, lookup: BenchmarkLookup | None = None) -> BenchmarkStatus:
    return (lookup or BenchmarkLookup()).status(identity, value)


@dataclass(frozen=True)
class ComparisonRow:
    player: str
    value: float
    measured_on: str
    trend: float
    is_first_measurement: bool
    measurement_count: int
    date_range_label: Optional[str]
    benchmark_distance: float
    benchmark_status: BenchmarkStatus


def sort_comparison(
    rows: Sequence[ComparisonRow],
    sort_by: SortKey = "value",
    *,
    metric: str = BENCHMARK_METRIC,
) -> List[ComparisonRow]:
    if sort_by == "trend":
        return sorted(rows, key=lambda row: (row.is_first_measurement, -row.trend))
    if sort_by == "benchmark" and metric == BENCHMARK_METRIC:
        return sorted(
            rows,
            key=lambda row: (math.isinf(row.benchmark_distance), -row.benchmark_distance),
        )
    if sort_by not in ("value", "trend", "benchmark"):
        raise ValueError(f"sort_by must be value, trend or benchmark, got {sort_by!r}")
    return sorted(rows, key=lambda row: row.value)


def compare_players(
    measurements: Sequence[Measurement],
    metric: str = BENCHMARK_METRIC,
    sort_by: SortKey = "value",
    *,
    lookup: BenchmarkLookup | None = None,
) -> List[ComparisonRow]:
    """One row per player built from their latest measurement."""

    lookup = lookup or BenchmarkLookup()
    series: Dict[str, List[Measurement]] = defaultdict(list)
    names: Dict[str, str] = {}
    for item in measurements:
        canonical = lookup.resolver.resolve(item.player)
        key = canonical or normalize_identity(item.player)
        series[key].append(item)
        names[key] = canonical or item.player

    rows: List[ComparisonRow] = []
    for key, items in series.items():
        info = trend_info(items, metric)
        latest = max(items, key=lambda item: item.measured_on)
        value = latest.metric(metric)
        if metric == BENCHMARK_METRIC:
            distance = lookup.distance(names[key], value)
            status = lookup.status(names[key], value)
        else:
            distance, status = 0.0, "no_benchmark"
        rows.append(
            ComparisonRow(
                player=names[key],
                value=value,
                measured_on=format_measurement_date(latest.measured_on),
                trend=info.delta,
                is_first_measurement=info.is_first_measurement,
                measurement_count=info.count,
                date_range_label=info.date_range_label,
                benchmark_distance=distance,
                benchmark_status=status,
            )
        )
    return sort_comparison(rows, sort_by, metric=metric)


def team_average(rows: Sequence[ComparisonRow], mode: SortKey = "value") -> float:
    if mode == "trend":
        values = [row.trend for row in rows]
    elif mode == "benchmark":
        values = [row.benchmark_distance for row in rows if not math.isinf(row.benchmark_distance)]
    else:
        values = [row.value for row in rows]
    if not values:
        return 0.0
    return sum(values) / len(values)


def player_series(
    measurements: Sequence[Measurement],
    player: str,
    *,
    lookup: BenchmarkLookup | None = None,
) -> List[Measurement]:
    """Date-ordered measurements for ``player`` under any of their spellings."""

    lookup = lookup or BenchmarkLookup()
    target = lookup.resolver.resolve(player) or normalize_identity(player)
    matched = [
        item
        for item in measurements
        if (lookup.resolver.resolve(item.player) or normalize_identity(item.player)) == target
    ]
    return sorted(matched, key=lambda item: item.measured_on)
