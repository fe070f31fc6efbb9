from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from clubstats.models import ScoredEntity


class ScoredTeamResponse(BaseModel):
    rank: int
    team: str
    team_id: str | None = None
    metrics: Dict[str, float | None] = Field(default_factory=dict)
    scores: Dict[str, float] = Field(default_factory=dict)
    composite: float

    @classmethod
    def from_scored(cls, scored: ScoredEntity) -> "ScoredTeamResponse":
        return cls(
            rank=scored.rank,
            team=scored.identity,
            team_id=scored.entity.team_id,
            metrics=dict(scored.metrics),
            scores=dict(scored.scores),
            composite=scored.composite,
        )


class ScoreResponse(BaseModel):
    scorer: str
    opponent_analysis: bool = False
    total_teams: int
    teams: List[ScoredTeamResponse]
