"""Canonical records shared across ingestion, scoring and persistence."""

from __future__ import annotations

from datetime import date
from typing import Dict, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class EntityRecord(BaseModel):
    """One team (or player) row with its numeric statistics."""

    identity: str = Field(..., min_length=1)
    team_id: Optional[str] = None
    short_name: Optional[str] = None
    abbrev_name: Optional[str] = None
    image_id: Optional[str] = None
    color: Optional[str] = None
    league_id: Optional[str] = None
    league_name: Optional[str] = None
    opta_team_id: Optional[str] = None
    stats: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class Measurement(BaseModel):
    """Single body-composition measurement for a player."""

    player: str = Field(..., min_length=1)
    measured_on: date
    date_label: str = ""
    height: float = 0.0
    weight: float = Field(..., gt=0.0)
    fat: float = 0.0
    fat_mass: float = 0.0
    lean_mass: float = 0.0

    model_config = ConfigDict(frozen=True)

    def metric(self, name: str) -> float:
        if name not in MEASUREMENT_METRICS:
            raise KeyError(f"Unknown measurement metric {name!r}")
        return float(getattr(self, name))


MEASUREMENT_METRICS = ("weight", "fat", "fat_mass", "lean_mass", "height")
