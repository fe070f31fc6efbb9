"""Persist and load scoring profiles (extra aliases and benchmarks)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from clubstats.config import Benchmark, merge_benchmarks


@dataclass
class ScoringProfile:
    field_aliases: Dict[str, List[str]] = field(default_factory=dict)
    player_aliases: Dict[str, List[str]] = field(default_factory=dict)
    benchmarks: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ScoringProfile":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid profile JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Profile {path} must be a JSON object")
        profile = cls(
            field_aliases={key: list(value) for key, value in data.get("field_aliases", {}).items()},
            player_aliases={key: list(value) for key, value in data.get("player_aliases", {}).items()},
            benchmarks=data.get("benchmarks", {}),
        )
        profile.resolved_benchmarks()
        return profile

    def save(self, path: Path) -> None:
        payload = {
            "field_aliases": self.field_aliases,
            "player_aliases": self.player_aliases,
            "benchmarks": self.benchmarks,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def extra_field_aliases(self) -> Dict[str, Tuple[str, ...]]:
        return {key: tuple(value) for key, value in self.field_aliases.items()}

    def resolved_benchmarks(self) -> Dict[str, Benchmark]:
        try:
            return merge_benchmarks(self.benchmarks)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Benchmarks need numeric 'min' and 'max': {exc}") from exc
