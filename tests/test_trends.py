import math
from datetime import date

import pytest

from clubstats.config import Benchmark
from clubstats.models import Measurement
from clubstats.scoring import (
    BenchmarkLookup,
    benchmark_distance,
    benchmark_status,
    compare_players,
    player_series,
    sort_comparison,
    team_average,
    trend_info,
)


def _measure(player: str, day: date, fat: float, weight: float = 78.0) -> Measurement:
    return Measurement(player=player, measured_on=day, weight=weight, fat=fat)


def test_single_measurement_is_first():
    info = trend_info([_measure("Dor Hugi", date(2025, 1, 5), 9.5)])

    assert info.is_first_measurement is True
    assert info.delta == 0.0
    assert info.count == 1
    assert info.date_range_label == "05/01/2025"


def test_trend_uses_last_two_points_only():
    series = [
        _measure("Dor Hugi", date(2025, 3, 1), 10.5),
        _measure("Dor Hugi", date(2025, 1, 5), 10.0),
        _measure("Dor Hugi", date(2025, 2, 1), 11.0),
    ]
    info = trend_info(series)

    assert info.is_first_measurement is False
    assert info.delta == pytest.approx(-0.5)
    assert info.count == 3
    assert info.date_range_label == "01/02/2025 → 01/03/2025"


def test_trend_on_other_metric():
    series = [
        _measure("Dor Hugi", date(2025, 1, 5), 10.0, weight=80.0),
        _measure("Dor Hugi", date(2025, 2, 5), 10.0, weight=78.5),
    ]
    assert trend_info(series, "weight").delta == pytest.approx(-1.5)


@pytest.mark.parametrize(
    ("value", "distance", "status"),
    [
        (8.2, 0.0, "on_target"),
        (8.0, 0.0, "on_target"),
        (7.5, 0.5, "below"),
        (9.0, 0.5, "above"),
    ],
)
def test_benchmark_distance_and_status(value, distance, status):
    assert benchmark_distance("Ziv Ben Shimol", value) == pytest.approx(distance)
    assert benchmark_status("Ziv Ben Shimol", value) == status


def test_missing_benchmark_is_infinite():
    assert math.isinf(benchmark_distance("Somebody Else", 9.0))
    assert benchmark_status("Somebody Else", 9.0) == "no_benchmark"


def test_benchmark_lookup_resolves_variants():
    lookup = BenchmarkLookup()

    assert lookup.get("Timothy Muzi") == Benchmark(9, 9.5)
    assert lookup.get("  ziv ben SHIMOL ") == Benchmark(8, 8.5)
    assert lookup.get("Brayan Carabali") == Benchmark(9, 9.5)
    assert lookup.get("Nobody") is None
    assert lookup.resolver.unresolved_names() == ["nobody"]


def test_benchmark_lookup_accepts_custom_table_and_aliases():
    lookup = BenchmarkLookup({"New Signing": Benchmark(7, 8)}, extra_aliases={"New Signing": ["N. Signing"]})

    assert lookup.distance("n. signing", 9.0) == pytest.approx(1.0)
    assert math.isinf(lookup.distance("Dor Hugi", 9.0))


def _squad() -> list[Measurement]:
    return [
        _measure("Ziv Ben Shimol", date(2025, 1, 5), 8.0),
        _measure("Ziv Ben Shimol", date(2025, 2, 5), 9.0),
        _measure("Dor Hugy", date(2025, 1, 5), 11.0),
        _measure("Dor Hugi", date(2025, 2, 5), 12.0),
        _measure("Trialist", date(2025, 2, 5), 20.0),
        _measure("Ori Dahan", date(2025, 2, 5), 9.2),
    ]


def test_benchmark_sort_places_missing_last():
    rows = compare_players(_squad(), "fat", "benchmark")

    assert [row.player for row in rows] == ["Dor Hugi", "Ziv Ben Shimol", "Ori Dahan", "Trialist"]
    assert rows[0].benchmark_distance == pytest.approx(2.0)
    assert math.isinf(rows[-1].benchmark_distance)
    assert rows[-1].benchmark_status == "no_benchmark"


def test_trend_sort_places_first_measurements_last():
    rows = compare_players(_squad(), "fat", "trend")

    assert [row.player for row in rows[:2]] == ["Ziv Ben Shimol", "Dor Hugi"]
    assert all(row.is_first_measurement for row in rows[2:])
    assert rows[0].trend == pytest.approx(1.0)


def test_compare_players_merges_spellings_and_uses_latest():
    rows = {row.player: row for row in compare_players(_squad())}

    dor = rows["Dor Hugi"]
    assert dor.value == pytest.approx(12.0)
    assert dor.measurement_count == 2
    assert dor.measured_on == "05/02/2025"
    assert dor.date_range_label == "05/01/2025 → 05/02/2025"


def test_compare_players_value_sort_is_ascending():
    rows = compare_players(_squad(), "fat", "value")
    values = [row.value for row in rows]
    assert values == sorted(values)


def test_non_fat_metric_has_no_benchmark():
    rows = compare_players(_squad(), "weight", "benchmark")

    assert all(row.benchmark_distance == 0.0 for row in rows)
    assert all(row.benchmark_status == "no_benchmark" for row in rows)


def test_compare_players_counts_unresolved_names():
    lookup = BenchmarkLookup()
    compare_players(_squad(), lookup=lookup)
    assert "trialist" in lookup.resolver.unresolved_names()


def test_sort_comparison_rejects_unknown_key():
    with pytest.raises(ValueError):
        sort_comparison([], "height")  # type: ignore[arg-type]


def test_team_average_ignores_missing_benchmarks():
    rows = compare_players(_squad(), "fat", "benchmark")

    assert team_average(rows, "benchmark") == pytest.approx((2.0 + 0.5 + 0.0) / 3)
    assert team_average(rows, "value") == pytest.approx((9.0 + 12.0 + 20.0 + 9.2) / 4)
    assert team_average([], "trend") == 0.0


def test_player_series_collects_every_spelling():
    series = player_series(_squad(), "dor hugi")

    assert [item.fat for item in series] == [11.0, 12.0]
    assert player_series(_squad(), "Unknown Player") == []
