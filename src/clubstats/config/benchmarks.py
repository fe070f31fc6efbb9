"""Body-fat target ranges and player name variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping


DEFAULT_SEASON = "2025-2026"


@dataclass(frozen=True)
class Benchmark:
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


FAT_BENCHMARKS: Dict[str, Benchmark] = {
    "Ori Dahan": Benchmark(9, 9.5),
    "Dor Micha": Benchmark(9, 9.5),
    "Miguel Silva": Benchmark(7, 7.5),
    "Li-On Mizrahi": Benchmark(9, 9.5),
    "Bryan Carabali": Benchmark(9, 9.5),
    "Bryan Cabezas": Benchmark(9, 9.5),
    "Timothy Muzie": Benchmark(9, 9.5),
    "Yarden Cohen": Benchmark(9.5, 10),
    "Yarden Shua": Benchmark(10, 11),
    "Grigori Morozov": Benchmark(8, 8.5),
    "Yuval Shalev": Benchmark(7.5, 8),
    "Yarin Levi": Benchmark(7, 7.5),
    "Gil Cohen": Benchmark(9.5, 10),
    "Ziv Ben Shimol": Benchmark(8, 8.5),
    "Adi Yona": Benchmark(7, 8),
    "Omer Atzili": Benchmark(8.5, 9),
    "Dor Hugi": Benchmark(9, 10),
    "Aviel Zargari": Benchmark(7, 7.5),
    "Yehonatan Ozer": Benchmark(10, 11),
    "Johnbosco Kalu": Benchmark(6.5, 7.5),
    "Adi Yissachar": Benchmark(11, 12),
    "Ilay Hagag": Benchmark(8.5, 9),
    "Luka Gadrani": Benchmark(6.5, 7.5),
    "Ariel Mendi": Benchmark(6.5, 7.5),
    "Ravid Abarjil": Benchmark(8.5, 9),
    "Roi Elimelech": Benchmark(9, 9.5),
    "Ailson Tavares": Benchmark(6.5, 7.5),
}

# Canonical name -> spellings seen in measurement exports. Case, spacing and
# accents are handled by identity normalization and need no entry here.
PLAYER_ALIASES: Dict[str, List[str]] = {
    "Li-On Mizrahi": ["Leon Mizrahi"],
    "Bryan Carabali": ["Brayan Carabali"],
    "Timothy Muzie": ["Timothy Muzi"],
    "Grigori Morozov": ["Grigory Muzurov"],
    "Yarin Levi": ["Yarin Levy"],
    "Dor Hugi": ["Dor Hugy"],
    "Aviel Zargari": ["Aviel Zargary"],
    "Yehonatan Ozer": ["Yonatan Ozer"],
    "Johnbosco Kalu": ["Gonbosco Kalo"],
    "Adi Yissachar": ["Adi Isaschar"],
    "Ilay Hagag": ["Ilay Hajaj"],
    "Ariel Mendi": ["Arial Mendy"],
    "Ravid Abarjil": ["Ravid Abergil"],
    "Roi Elimelech": ["Roey Elimelech"],
    "Ailson Tavares": ["Eilson Tavares"],
}


def merge_benchmarks(
    overrides: Mapping[str, Mapping[str, float]] | None,
) -> Dict[str, Benchmark]:
    """Return the default table with profile overrides applied."""

    merged = dict(FAT_BENCHMARKS)
    for name, bounds in (overrides or {}).items():
        low, high = float(bounds["min"]), float(bounds["max"])
        if low > high:
            raise ValueError(f"benchmark for {name!r} has min {low} above max {high}")
        merged[name] = Benchmark(low, high)
    return merged
