"""Pydantic models for API I/O."""

from .body import (
    ComparisonResponse,
    ComparisonRowResponse,
    SeriesPointResponse,
    TrendResponse,
    UploadSummaryResponse,
)
from .corners import CornerReportResponse, CornerSummaryResponse, MatchdaySummaryResponse
from .scores import ScoreResponse, ScoredTeamResponse

__all__ = [
    "ComparisonResponse",
    "ComparisonRowResponse",
    "CornerReportResponse",
    "CornerSummaryResponse",
    "MatchdaySummaryResponse",
    "ScoreResponse",
    "ScoredTeamResponse",
    "SeriesPointResponse",
    "TrendResponse",
    "UploadSummaryResponse",
]
