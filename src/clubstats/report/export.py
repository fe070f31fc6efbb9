"""CSV export helpers for ranked tables."""

from __future__ import annotations

import csv
from io import StringIO
from typing import List, Optional, Sequence

from clubstats.models import CornerSummaryEntry, ScoredEntity


class ReportExportError(RuntimeError):
    """Raised when a ranking cannot be exported."""


def _fmt(value: Optional[float], decimals: int = 2) -> str:
    if value is None:
        return ""
    return f"{value:.{decimals}f}"


def _column_names(scored: Sequence[ScoredEntity]) -> tuple[List[str], List[str]]:
    metric_names: List[str] = []
    score_names: List[str] = []
    for item in scored:
        for name in item.metrics:
            if name not in metric_names:
                metric_names.append(name)
        for name in item.scores:
            if name not in score_names:
                score_names.append(name)
    return metric_names, score_names


def export_scores_to_csv(scored: Sequence[ScoredEntity]) -> str:
    """Render a ranked scorer output as CSV text, one row per entity."""

    if not scored:
        raise ReportExportError("Nothing to export: the ranking is empty")

    metric_names, score_names = _column_names(scored)
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["rank", "team", "team_id", *metric_names, *score_names, "composite"])
    for item in scored:
        writer.writerow(
            [
                item.rank,
                item.entity.identity,
                item.entity.team_id or "",
                *(_fmt(item.metrics.get(name), 4) for name in metric_names),
                *(_fmt(item.scores.get(name)) for name in score_names),
                _fmt(item.composite),
            ]
        )
    return buffer.getvalue()


def export_corner_summary_to_csv(entries: Sequence[CornerSummaryEntry]) -> str:
    if not entries:
        raise ReportExportError("Nothing to export: the corner summary is empty")

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(
        [
            "rank",
            "team",
            "attack_score",
            "defense_score",
            "combined_score",
            "corners_diff",
            "shots_from_corner_diff",
            "goals_from_corner_diff",
            "xg_from_corner_diff",
        ]
    )
    for entry in entries:
        writer.writerow(
            [
                entry.rank,
                entry.identity,
                _fmt(entry.attack.composite),
                _fmt(entry.defense.composite if entry.defense else None),
                _fmt(entry.combined_score),
                _fmt(entry.corners_diff, 0),
                _fmt(entry.shots_from_corner_diff, 0),
                _fmt(entry.goals_from_corner_diff, 0),
                _fmt(entry.xg_from_corner_diff),
            ]
        )
    return buffer.getvalue()


__all__ = [
    "ReportExportError",
    "export_corner_summary_to_csv",
    "export_scores_to_csv",
]
