"""REST API for the club statistics scoring engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import Response

from clubstats.api.schemas import (
    ComparisonResponse,
    ComparisonRowResponse,
    CornerReportResponse,
    MatchdaySummaryResponse,
    ScoreResponse,
    ScoredTeamResponse,
    SeriesPointResponse,
    TrendResponse,
    UploadSummaryResponse,
)
from clubstats.config import DEFAULT_SEASON
from clubstats.config_loader import ScoringProfile
from clubstats.ingest import (
    apply_extra_aliases,
    merge_our_team_metrics,
    parse_body_composition_csv,
    parse_team_csv,
)
from clubstats.models import MEASUREMENT_METRICS, EntityRecord
from clubstats.persistence import StatsStore
from clubstats.report import ReportExportError, export_corner_summary_to_csv
from clubstats.scoring import (
    BenchmarkLookup,
    build_corner_report,
    compare_players,
    get_scorer,
    player_series,
    score_entities,
    team_average,
    trend_info,
)


SORT_CHOICES = ("value", "trend", "benchmark")


async def _read_csv(upload: UploadFile | None) -> str | None:
    if upload is None:
        return None
    contents = await upload.read()
    if not contents:
        return None
    try:
        return contents.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"{upload.filename or 'upload'} is not UTF-8 text") from exc


def _check_metric(metric: str) -> str:
    if metric not in MEASUREMENT_METRICS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown metric {metric!r}; expected one of {', '.join(MEASUREMENT_METRICS)}",
        )
    return metric


def create_app(db_path: Path | str | None = None, profile: ScoringProfile | None = None) -> FastAPI:
    app = FastAPI(title="clubstats scoring")
    store = StatsStore(db_path or Path(__file__).resolve().parent.parent / "clubstats.sqlite")
    app.state.stats_store = store
    profile = profile or ScoringProfile()
    field_aliases = profile.extra_field_aliases()
    benchmarks = profile.resolved_benchmarks()

    def new_lookup() -> BenchmarkLookup:
        return BenchmarkLookup(benchmarks, extra_aliases=profile.player_aliases)

    async def read_entities(upload: UploadFile | None, label: str) -> List[EntityRecord]:
        text = await _read_csv(upload)
        if text is None:
            raise HTTPException(status_code=400, detail=f"{label} file is empty")
        try:
            entities = parse_team_csv(text)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return apply_extra_aliases(entities, field_aliases)

    async def merge_our_metrics(entities: List[EntityRecord], upload: UploadFile | None) -> List[EntityRecord]:
        our_text = await _read_csv(upload)
        if our_text is None:
            return entities
        try:
            our_rows = apply_extra_aliases(parse_team_csv(our_text), field_aliases)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return merge_our_team_metrics(entities, our_rows)

    def score_response(entities: List[EntityRecord], scorer: str, opponent_analysis: bool) -> ScoreResponse:
        try:
            spec = get_scorer(scorer, is_opponent_analysis=opponent_analysis)
        except KeyError as exc:
            raise HTTPException(status_code=400, detail=exc.args[0]) from exc
        scored = score_entities(entities, spec)
        return ScoreResponse(
            scorer=spec.name,
            opponent_analysis=opponent_analysis,
            total_teams=len(scored),
            teams=[ScoredTeamResponse.from_scored(item) for item in scored],
        )

    def stored_corners_or_404(matchday: str, season: str) -> List[EntityRecord]:
        entities = store.fetch_corners(matchday, season)
        if not entities:
            raise HTTPException(status_code=404, detail=f"No corners data for matchday {matchday} ({season})")
        return entities

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    # corners

    @app.post("/corners/preview", response_model=CornerReportResponse)
    async def preview_corners(file: UploadFile = File(...)) -> CornerReportResponse:
        entities = await read_entities(file, "Corners")
        return CornerReportResponse.from_report(build_corner_report(entities))

    @app.post("/corners/{matchday}", response_model=CornerReportResponse)
    async def upload_corners(
        matchday: str,
        file: UploadFile = File(...),
        season: str = Form(DEFAULT_SEASON),
        notes: str | None = Form(None),
    ) -> CornerReportResponse:
        entities = await read_entities(file, "Corners")
        store.save_corners(
            matchday=matchday,
            season=season,
            entities=entities,
            csv_filename=file.filename,
            notes=notes,
        )
        return CornerReportResponse.from_report(
            build_corner_report(entities), matchday=matchday, season=season
        )

    @app.get("/corners", response_model=list[MatchdaySummaryResponse])
    async def list_corners(limit: int = 50) -> list[MatchdaySummaryResponse]:
        return [
            MatchdaySummaryResponse(
                matchday=item.matchday,
                season=item.season,
                csv_filename=item.csv_filename,
                total_teams=item.total_teams,
                notes=item.notes,
                uploaded_at=item.uploaded_at,
            )
            for item in store.list_matchdays(limit=limit)
        ]

    @app.get("/corners/{matchday}", response_model=CornerReportResponse)
    async def get_corners(matchday: str, season: str = DEFAULT_SEASON) -> CornerReportResponse:
        entities = stored_corners_or_404(matchday, season)
        return CornerReportResponse.from_report(
            build_corner_report(entities), matchday=matchday, season=season
        )

    @app.get("/corners/{matchday}/export.csv")
    async def export_corners(matchday: str, season: str = DEFAULT_SEASON):
        report = build_corner_report(stored_corners_or_404(matchday, season))
        try:
            csv_text = export_corner_summary_to_csv(report.summary)
        except ReportExportError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=corners_{matchday}.csv"},
        )

    # team scorers

    @app.post("/teams/score", response_model=ScoreResponse)
    async def score_teams(
        file: UploadFile = File(...),
        scorer: str = Form(...),
        opponent_analysis: bool = Form(False),
        our_metrics: UploadFile | None = File(None),
    ) -> ScoreResponse:
        entities = await read_entities(file, "Statistics")
        entities = await merge_our_metrics(entities, our_metrics)
        return score_response(entities, scorer, opponent_analysis)

    @app.post("/opponents/{name}")
    async def upload_opponent(
        name: str,
        file: UploadFile = File(...),
        season: str = Form(DEFAULT_SEASON),
        our_metrics: UploadFile | None = File(None),
    ) -> dict[str, Any]:
        entities = await read_entities(file, "Opponent statistics")
        entities = await merge_our_metrics(entities, our_metrics)
        metadata = store.save_opponent(opponent_name=name, entities=entities, season=season)
        return {
            "opponent_name": metadata.opponent_name,
            "season": metadata.season,
            "total_teams": metadata.total_teams,
            "uploaded_at": metadata.uploaded_at.isoformat(),
        }

    @app.get("/opponents/{name}/scores", response_model=ScoreResponse)
    async def opponent_scores(
        name: str,
        scorer: str = Query("press"),
        opponent_analysis: bool = Query(False),
        season: str = Query(DEFAULT_SEASON),
    ) -> ScoreResponse:
        entities = store.fetch_opponent(name, season)
        if not entities:
            raise HTTPException(status_code=404, detail=f"No statistics stored for opponent {name}")
        return score_response(entities, scorer, opponent_analysis)

    # body composition

    @app.post("/body-composition", response_model=UploadSummaryResponse)
    async def upload_body_composition(file: UploadFile = File(...)) -> UploadSummaryResponse:
        text = await _read_csv(file)
        if text is None:
            raise HTTPException(status_code=400, detail="Body composition file is empty")
        try:
            measurements = parse_body_composition_csv(text)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        stored = store.replace_body_composition(measurements)
        lookup = new_lookup()
        players = {item.player for item in measurements}
        for player in players:
            lookup.resolver.resolve(player)
        return UploadSummaryResponse(
            stored=stored,
            players=len(players),
            unresolved_players=lookup.resolver.unresolved_names(),
        )

    @app.get("/body-composition/comparison", response_model=ComparisonResponse)
    async def body_comparison(metric: str = "fat", sort_by: str = "value") -> ComparisonResponse:
        _check_metric(metric)
        if sort_by not in SORT_CHOICES:
            raise HTTPException(
                status_code=400,
                detail=f"sort_by must be one of {', '.join(SORT_CHOICES)}",
            )
        rows = compare_players(store.fetch_body_composition(), metric, sort_by, lookup=new_lookup())
        return ComparisonResponse(
            metric=metric,
            sort_by=sort_by,
            average=team_average(rows, sort_by),
            rows=[ComparisonRowResponse.from_row(row) for row in rows],
        )

    @app.get("/body-composition/{player}/trend", response_model=TrendResponse)
    async def body_trend(player: str, metric: str = "fat") -> TrendResponse:
        _check_metric(metric)
        series = player_series(store.fetch_body_composition(), player, lookup=new_lookup())
        if not series:
            raise HTTPException(status_code=404, detail=f"No measurements for {player}")
        return TrendResponse.from_trend(
            series[-1].player,
            metric,
            trend_info(series, metric),
            [SeriesPointResponse(measured_on=item.measured_on, value=item.metric(metric)) for item in series],
        )

    return app


__all__ = ["create_app"]
