"""Statistical scoring engine: normalization, composite ranks, trends."""

from .composite import (
    ASSIST_ZONE_WEIGHTS,
    DUELS_WEIGHTS,
    PRESS_WEIGHTS,
    SHOT_LOCATION_WEIGHTS,
    SHOT_QUALITY_WEIGHTS,
    PLAYER_RUNNING_WEIGHTS,
    MetricComponent,
    ScorerSpec,
    get_scorer,
    iter_scorer_names,
    player_running_scorer,
    press_scorer,
    rank_scored,
    score_entities,
)
from .corners import (
    CORNER_ATTACK_WEIGHTS,
    CORNER_DEFENSE_WEIGHTS,
    CORNER_SUMMARY_WEIGHTS,
    CornerReport,
    build_corner_report,
    score_corner_attack,
    score_corner_defense,
    summarize_corners,
)
from .normalize import NEUTRAL_SCORE, normalize, normalize_all
from .trends import (
    BenchmarkLookup,
    ComparisonRow,
    TrendInfo,
    benchmark_distance,
    benchmark_status,
    compare_players,
    player_series,
    sort_comparison,
    team_average,
    trend_info,
)

__all__ = [
    "ASSIST_ZONE_WEIGHTS",
    "BenchmarkLookup",
    "CORNER_ATTACK_WEIGHTS",
    "CORNER_DEFENSE_WEIGHTS",
    "CORNER_SUMMARY_WEIGHTS",
    "ComparisonRow",
    "CornerReport",
    "DUELS_WEIGHTS",
    "MetricComponent",
    "NEUTRAL_SCORE",
    "PLAYER_RUNNING_WEIGHTS",
    "PRESS_WEIGHTS",
    "SHOT_LOCATION_WEIGHTS",
    "SHOT_QUALITY_WEIGHTS",
    "ScorerSpec",
    "TrendInfo",
    "benchmark_distance",
    "benchmark_status",
    "build_corner_report",
    "compare_players",
    "get_scorer",
    "iter_scorer_names",
    "normalize",
    "normalize_all",
    "player_running_scorer",
    "player_series",
    "press_scorer",
    "rank_scored",
    "score_corner_attack",
    "score_corner_defense",
    "score_entities",
    "sort_comparison",
    "summarize_corners",
    "team_average",
    "trend_info",
]
