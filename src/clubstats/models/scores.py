"""Derived, ranked views built by the scoring engine."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .entity import EntityRecord


class ScoredEntity(BaseModel):
    entity: EntityRecord
    metrics: Dict[str, Optional[float]] = Field(default_factory=dict)
    scores: Dict[str, float] = Field(default_factory=dict)
    composite: float
    rank: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def identity(self) -> str:
        return self.entity.identity


class CornerSummaryEntry(BaseModel):
    """Attack and defense corner views of one team, joined."""

    attack: ScoredEntity
    defense: Optional[ScoredEntity] = None
    combined_score: Optional[float] = None
    corners_diff: Optional[float] = None
    shots_from_corner_diff: Optional[float] = None
    goals_from_corner_diff: Optional[float] = None
    xg_from_corner_diff: Optional[float] = None
    rank: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def identity(self) -> str:
        return self.attack.entity.identity
