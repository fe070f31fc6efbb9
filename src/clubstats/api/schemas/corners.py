from __future__ import annotations

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, model_serializer

from clubstats.models import CornerSummaryEntry
from clubstats.scoring import CornerReport

from .scores import ScoredTeamResponse


class CornerSummaryResponse(BaseModel):
    rank: int
    team: str
    attack_score: float
    defense_score: float | None = None
    combined_score: float | None = None
    corners_diff: float | None = None
    shots_from_corner_diff: float | None = None
    goals_from_corner_diff: float | None = None
    xg_from_corner_diff: float | None = None

    @classmethod
    def from_entry(cls, entry: CornerSummaryEntry) -> "CornerSummaryResponse":
        return cls(
            rank=entry.rank,
            team=entry.identity,
            attack_score=entry.attack.composite,
            defense_score=entry.defense.composite if entry.defense else None,
            combined_score=entry.combined_score,
            corners_diff=entry.corners_diff,
            shots_from_corner_diff=entry.shots_from_corner_diff,
            goals_from_corner_diff=entry.goals_from_corner_diff,
            xg_from_corner_diff=entry.xg_from_corner_diff,
        )

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler) -> dict[str, Any]:
        # unjoined teams omit their defense-side keys
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}


class CornerReportResponse(BaseModel):
    matchday: str | None = None
    season: str | None = None
    total_teams: int
    attack: List[ScoredTeamResponse]
    defense: List[ScoredTeamResponse]
    summary: List[CornerSummaryResponse]

    @classmethod
    def from_report(
        cls,
        report: CornerReport,
        *,
        matchday: str | None = None,
        season: str | None = None,
    ) -> "CornerReportResponse":
        return cls(
            matchday=matchday,
            season=season,
            total_teams=len(report.attack),
            attack=[ScoredTeamResponse.from_scored(item) for item in report.attack],
            defense=[ScoredTeamResponse.from_scored(item) for item in report.defense],
            summary=[CornerSummaryResponse.from_entry(entry) for entry in report.summary],
        )


class MatchdaySummaryResponse(BaseModel):
    matchday: str
    season: str
    csv_filename: str | None = None
    total_teams: int
    notes: str | None = None
    uploaded_at: datetime
