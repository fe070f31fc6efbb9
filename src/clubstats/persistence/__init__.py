"""Persistence layer for uploaded statistics and measurements."""

from __future__ import annotations

import logging
import os
import sqlite3
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from clubstats.config import DEFAULT_SEASON
from clubstats.models import EntityRecord, Measurement


logger = logging.getLogger(__name__)


@dataclass
class CornersMetadata:
    matchday: str
    season: str
    csv_filename: Optional[str]
    total_teams: int
    notes: Optional[str]
    uploaded_at: datetime


@dataclass
class OpponentMetadata:
    opponent_name: str
    season: str
    total_teams: int
    uploaded_at: datetime


class StatsStore:
    """Simple SQLite-backed store for team statistics and measurements."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("CLUBSTATS_DB_PATH")
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS corners_metadata (
                    matchday TEXT NOT NULL,
                    season TEXT NOT NULL,
                    csv_filename TEXT,
                    total_teams INTEGER NOT NULL,
                    notes TEXT,
                    uploaded_at TEXT NOT NULL,
                    PRIMARY KEY (matchday, season)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS corners_statistics (
                    matchday TEXT NOT NULL,
                    season TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    team_full_name TEXT NOT NULL,
                    team_id TEXT,
                    record_json TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS opponent_metadata (
                    opponent_name TEXT NOT NULL,
                    season TEXT NOT NULL,
                    total_teams INTEGER NOT NULL,
                    uploaded_at TEXT NOT NULL,
                    PRIMARY KEY (opponent_name, season)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS opponent_statistics (
                    opponent_name TEXT NOT NULL,
                    season TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    team_full_name TEXT NOT NULL,
                    record_json TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS body_composition (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    player_name TEXT NOT NULL,
                    measurement_date TEXT NOT NULL,
                    date_label TEXT,
                    height REAL NOT NULL,
                    weight REAL NOT NULL,
                    fat REAL NOT NULL,
                    fat_mass REAL NOT NULL,
                    lean_mass REAL NOT NULL
                )
                """
            )
            conn.commit()

    # corners

    def save_corners(
        self,
        *,
        matchday: str,
        entities: Iterable[EntityRecord],
        season: str = DEFAULT_SEASON,
        csv_filename: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CornersMetadata:
        """Store a matchday's corners rows, replacing any earlier upload."""

        rows = list(entities)
        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM corners_statistics WHERE matchday = ? AND season = ?",
                (matchday, season),
            )
            conn.execute(
                "DELETE FROM corners_metadata WHERE matchday = ? AND season = ?",
                (matchday, season),
            )
            conn.execute(
                """
                INSERT INTO corners_metadata (
                    matchday, season, csv_filename, total_teams, notes, uploaded_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (matchday, season, csv_filename, len(rows), notes, now.isoformat()),
            )
            conn.executemany(
                """
                INSERT INTO corners_statistics (
                    matchday, season, position, team_full_name, team_id, record_json
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (matchday, season, index, entity.identity, entity.team_id, entity.model_dump_json())
                    for index, entity in enumerate(rows)
                ],
            )
            conn.commit()
        logger.info("Saved corners data for matchday %s (%s): %d teams", matchday, season, len(rows))
        return CornersMetadata(
            matchday=matchday,
            season=season,
            csv_filename=csv_filename,
            total_teams=len(rows),
            notes=notes,
            uploaded_at=now,
        )

    def fetch_corners(self, matchday: str, season: str = DEFAULT_SEASON) -> List[EntityRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT record_json FROM corners_statistics
                WHERE matchday = ? AND season = ?
                ORDER BY position
                """,
                (matchday, season),
            ).fetchall()
        return [EntityRecord.model_validate_json(row["record_json"]) for row in rows]

    def list_matchdays(self, limit: int = 50) -> List[CornersMetadata]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM corners_metadata ORDER BY datetime(uploaded_at) DESC, rowid DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_corners_metadata(row) for row in rows]

    def corners_exist(self, matchday: str, season: str = DEFAULT_SEASON) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM corners_metadata WHERE matchday = ? AND season = ?",
                (matchday, season),
            ).fetchone()
        return row is not None

    def delete_corners(self, matchday: str, season: str = DEFAULT_SEASON) -> None:
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM corners_statistics WHERE matchday = ? AND season = ?",
                (matchday, season),
            )
            conn.execute(
                "DELETE FROM corners_metadata WHERE matchday = ? AND season = ?",
                (matchday, season),
            )
            conn.commit()

    # opponents

    def save_opponent(
        self,
        *,
        opponent_name: str,
        entities: Iterable[EntityRecord],
        season: str = DEFAULT_SEASON,
    ) -> OpponentMetadata:
        rows = list(entities)
        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO opponent_metadata (opponent_name, season, total_teams, uploaded_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (opponent_name, season)
                DO UPDATE SET total_teams = excluded.total_teams, uploaded_at = excluded.uploaded_at
                """,
                (opponent_name, season, len(rows), now.isoformat()),
            )
            conn.execute(
                "DELETE FROM opponent_statistics WHERE opponent_name = ? AND season = ?",
                (opponent_name, season),
            )
            conn.executemany(
                """
                INSERT INTO opponent_statistics (
                    opponent_name, season, position, team_full_name, record_json
                ) VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (opponent_name, season, index, entity.identity, entity.model_dump_json())
                    for index, entity in enumerate(rows)
                ],
            )
            conn.commit()
        logger.info("Saved opponent statistics for %s (%s): %d teams", opponent_name, season, len(rows))
        return OpponentMetadata(
            opponent_name=opponent_name,
            season=season,
            total_teams=len(rows),
            uploaded_at=now,
        )

    def fetch_opponent(self, opponent_name: str, season: str = DEFAULT_SEASON) -> List[EntityRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT record_json FROM opponent_statistics
                WHERE opponent_name = ? AND season = ?
                ORDER BY position
                """,
                (opponent_name, season),
            ).fetchall()
        return [EntityRecord.model_validate_json(row["record_json"]) for row in rows]

    # body composition

    def replace_body_composition(self, measurements: Iterable[Measurement]) -> int:
        """Drop every stored measurement and insert ``measurements``."""

        rows = list(measurements)
        with self._connect() as conn:
            conn.execute("DELETE FROM body_composition")
            conn.executemany(
                """
                INSERT INTO body_composition (
                    player_name, measurement_date, date_label, height, weight, fat, fat_mass, lean_mass
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        item.player,
                        item.measured_on.isoformat(),
                        item.date_label,
                        item.height,
                        item.weight,
                        item.fat,
                        item.fat_mass,
                        item.lean_mass,
                    )
                    for item in rows
                ],
            )
            conn.commit()
        logger.info("Replaced body composition data with %d measurements", len(rows))
        return len(rows)

    def fetch_body_composition(self) -> List[Measurement]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM body_composition ORDER BY measurement_date, id"
            ).fetchall()
        return [self._row_to_measurement(row) for row in rows]

    def player_measurements(self, player: str) -> List[Measurement]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM body_composition WHERE player_name = ? ORDER BY measurement_date, id",
                (player,),
            ).fetchall()
        return [self._row_to_measurement(row) for row in rows]

    def latest_measurements(self) -> List[Measurement]:
        latest: dict[str, Measurement] = {}
        for item in self.fetch_body_composition():
            latest[item.player] = item
        return sorted(latest.values(), key=lambda item: item.player)

    def _row_to_corners_metadata(self, row: sqlite3.Row) -> CornersMetadata:
        return CornersMetadata(
            matchday=row["matchday"],
            season=row["season"],
            csv_filename=row["csv_filename"],
            total_teams=row["total_teams"],
            notes=row["notes"],
            uploaded_at=datetime.fromisoformat(row["uploaded_at"]),
        )

    def _row_to_measurement(self, row: sqlite3.Row) -> Measurement:
        return Measurement(
            player=row["player_name"],
            measured_on=date.fromisoformat(row["measurement_date"]),
            date_label=row["date_label"] or "",
            height=row["height"],
            weight=row["weight"],
            fat=row["fat"],
            fat_mass=row["fat_mass"],
            lean_mass=row["lean_mass"],
        )
