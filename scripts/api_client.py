"""Lightweight REST client for the clubstats API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _csv_file(path: Path) -> dict[str, tuple[str, bytes, str]]:
    return {"file": (path.name, path.read_bytes(), "text/csv")}


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the clubstats REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--corners", type=Path, help="Corners CSV to upload")
    parser.add_argument("--matchday", help="Store the corners CSV under this matchday (preview only if omitted)")
    parser.add_argument("--season", default=None, help="Season label, e.g. 2025-2026")
    parser.add_argument("--list-matchdays", action="store_true", help="List stored matchdays and exit")
    parser.add_argument("--export-matchday", metavar="MATCHDAY", help="Download the corner summary CSV")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    parser.add_argument("--score", metavar="SCORER", help="Scorer to apply to --teams")
    parser.add_argument("--teams", type=Path, help="Team statistics CSV for --score")
    parser.add_argument("--our-metrics", type=Path, help="Our-team metrics CSV for --score")
    parser.add_argument("--opponent-analysis", action="store_true")
    parser.add_argument("--body", type=Path, help="Body composition CSV to upload")
    parser.add_argument("--compare", metavar="METRIC", help="Fetch the player comparison for a metric")
    parser.add_argument("--sort-by", default="value")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_matchdays:
            resp = client.get("/corners")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return
        if args.export_matchday:
            resp = client.get(f"/corners/{args.export_matchday}/export.csv")
            if resp.status_code == 404:
                raise SystemExit(f"matchday {args.export_matchday} not found")
            resp.raise_for_status()
            if args.export_path:
                args.export_path.write_text(resp.text)
                print(f"CSV export saved to {args.export_path}")
            else:
                print(resp.text)
            return

        if args.corners:
            data = {"season": args.season} if args.season else {}
            path = f"/corners/{args.matchday}" if args.matchday else "/corners/preview"
            resp = client.post(path, files=_csv_file(args.corners), data=data)
            resp.raise_for_status()
            report = resp.json()
            print(f"Corner summary for {report['total_teams']} teams:")
            print(json.dumps(report["summary"], indent=2))

        if args.score:
            if args.teams is None:
                raise SystemExit("--teams is required with --score")
            files = _csv_file(args.teams)
            if args.our_metrics:
                files["our_metrics"] = (args.our_metrics.name, args.our_metrics.read_bytes(), "text/csv")
            data = {"scorer": args.score, "opponent_analysis": str(args.opponent_analysis).lower()}
            resp = client.post("/teams/score", files=files, data=data)
            if resp.status_code == 400:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            print(json.dumps(resp.json()["teams"], indent=2))

        if args.body:
            resp = client.post("/body-composition", files=_csv_file(args.body))
            resp.raise_for_status()
            print("Upload summary:", json.dumps(resp.json(), indent=2))

        if args.compare:
            resp = client.get(
                "/body-composition/comparison",
                params={"metric": args.compare, "sort_by": args.sort_by},
            )
            resp.raise_for_status()
            payload = resp.json()
            print(f"Team average: {payload['average']:.2f}")
            print(json.dumps(payload["rows"], indent=2))


if __name__ == "__main__":
    main()
