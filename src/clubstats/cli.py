"""Command-line interface for scoring team and player statistics exports."""

from __future__ import annotations

import argparse
import json
import logging
import math
from pathlib import Path
from typing import Sequence

from clubstats.config_loader import ScoringProfile
from clubstats.ingest import (
    apply_extra_aliases,
    load_body_composition_csv,
    load_team_csv,
    merge_our_team_metrics,
)
from clubstats.models import MEASUREMENT_METRICS
from clubstats.report import export_corner_summary_to_csv, export_scores_to_csv
from clubstats.scoring import (
    BenchmarkLookup,
    build_corner_report,
    compare_players,
    get_scorer,
    iter_scorer_names,
    score_entities,
    team_average,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score football statistics exports")
    parser.add_argument("--profile", type=Path, default=None, help="Scoring profile JSON (aliases, benchmarks)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    corners = subparsers.add_parser("corners", help="Rank teams on corner attack and defense")
    corners.add_argument("csv", type=Path, help="Corners statistics CSV")
    corners.add_argument("--output", type=Path, default=None, help="Write the summary ranking as CSV")
    corners.add_argument("--report", type=Path, default=None, help="Write the full report as JSON")

    score = subparsers.add_parser("score", help="Rank teams with a composite scorer")
    score.add_argument("scorer", choices=iter_scorer_names(), help="Scorer to apply")
    score.add_argument("csv", type=Path, help="Team statistics CSV")
    score.add_argument(
        "--opponent-analysis",
        action="store_true",
        help="Score from our team's perspective against each opponent (press only)",
    )
    score.add_argument("--our-metrics", type=Path, default=None, help="Second CSV with our team's metrics")
    score.add_argument("--output", type=Path, default=None, help="Write the ranking as CSV")

    body = subparsers.add_parser("body", help="Compare players' body composition")
    body.add_argument("csv", type=Path, help="Body composition CSV")
    body.add_argument("--metric", choices=[m for m in MEASUREMENT_METRICS if m != "height"], default="fat")
    body.add_argument("--sort-by", choices=["value", "trend", "benchmark"], default="value")
    return parser.parse_args(argv)


def _preview(names: Sequence[str], limit: int = 5) -> str:
    preview = ", ".join(names[:limit])
    more = len(names) - limit
    suffix = f", +{more} more" if more > 0 else ""
    return f"{preview}{suffix}"


def _run_corners(args: argparse.Namespace, profile: ScoringProfile) -> None:
    entities = apply_extra_aliases(load_team_csv(args.csv), profile.extra_field_aliases())
    report = build_corner_report(entities)
    print(f"Scored corners for {len(entities)} teams")
    for entry in report.summary[:10]:
        combined = "-" if entry.combined_score is None else f"{entry.combined_score:.1f}"
        print(f"{entry.rank:>3}. {entry.identity:<30} {combined}")
    unjoined = [entry.identity for entry in report.summary if entry.defense is None]
    if unjoined:
        print(f"Teams without a defense row: {_preview(unjoined)}")

    if args.output:
        args.output.write_text(export_corner_summary_to_csv(report.summary), encoding="utf-8")
        print(f"Wrote corner summary to {args.output}")
    if args.report:
        payload = {
            "attack": [item.model_dump(mode="json") for item in report.attack],
            "defense": [item.model_dump(mode="json") for item in report.defense],
            "summary": [item.model_dump(mode="json", exclude_none=True) for item in report.summary],
        }
        args.report.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote corner report to {args.report}")


def _run_score(args: argparse.Namespace, profile: ScoringProfile) -> None:
    extra = profile.extra_field_aliases()
    entities = apply_extra_aliases(load_team_csv(args.csv), extra)
    if args.our_metrics:
        our_rows = apply_extra_aliases(load_team_csv(args.our_metrics), extra)
        entities = merge_our_team_metrics(entities, our_rows)
        print(f"Merged our-team metrics from {len(our_rows)} rows")
    spec = get_scorer(args.scorer, is_opponent_analysis=args.opponent_analysis)
    scored = score_entities(entities, spec)
    print(f"Scored {len(scored)} teams with {spec.name}")
    for item in scored[:10]:
        print(f"{item.rank:>3}. {item.identity:<30} {item.composite:.1f}")
    if args.output:
        args.output.write_text(export_scores_to_csv(scored), encoding="utf-8")
        print(f"Wrote ranking to {args.output}")


def _run_body(args: argparse.Namespace, profile: ScoringProfile) -> None:
    measurements = load_body_composition_csv(args.csv)
    lookup = BenchmarkLookup(profile.resolved_benchmarks(), extra_aliases=profile.player_aliases)
    rows = compare_players(measurements, args.metric, args.sort_by, lookup=lookup)
    print(f"Compared {len(rows)} players on {args.metric} ({len(measurements)} measurements)")
    for row in rows:
        trend = "first" if row.is_first_measurement else f"{row.trend:+.2f}"
        distance = "-" if math.isinf(row.benchmark_distance) else f"{row.benchmark_distance:.2f}"
        print(f"{row.player:<25} {row.value:>7.2f} {trend:>7} {distance:>6} {row.measured_on}")
    print(f"Team average ({args.sort_by}): {team_average(rows, args.sort_by):.2f}")
    unresolved = lookup.resolver.unresolved_names()
    if unresolved:
        print(f"Players without a benchmark: {_preview(unresolved)}")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        profile = ScoringProfile.load(args.profile) if args.profile else ScoringProfile()
        if args.command == "corners":
            _run_corners(args, profile)
        elif args.command == "score":
            _run_score(args, profile)
        else:
            _run_body(args, profile)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
