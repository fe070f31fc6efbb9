"""Load team statistics CSV exports into canonical entity records."""

from __future__ import annotations

import csv
import logging
import math
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from clubstats.config import IDENTITY_ALIASES, identity_columns
from clubstats.identity import normalize_identity
from clubstats.models import EntityRecord

from .fields import get_field_value, has_field


logger = logging.getLogger(__name__)

_TEXT_COLUMNS = identity_columns()


def parse_numeric(raw: Optional[str]) -> Optional[float]:
    """Parse a CSV cell, accepting ``%`` suffixes; blanks, junk and NaN/inf give None."""

    if raw is None:
        return None
    text = str(raw).strip().replace("%", "").replace(",", "")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _first_text(row: Mapping[str, Optional[str]], columns: Sequence[str]) -> Optional[str]:
    for column in columns:
        value = row.get(column)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def row_to_entity(row: Mapping[str, Optional[str]]) -> Optional[EntityRecord]:
    """Build an entity from a raw CSV row; rows with no identity give None."""

    identity = _first_text(row, IDENTITY_ALIASES["identity"])
    if not identity:
        return None
    stats: dict[str, float] = {}
    for column, raw in row.items():
        if column is None or column in _TEXT_COLUMNS:
            continue
        value = parse_numeric(raw)
        if value is not None:
            stats[column] = value
    return EntityRecord(
        identity=identity,
        team_id=_first_text(row, IDENTITY_ALIASES["team_id"]),
        short_name=_first_text(row, IDENTITY_ALIASES["short_name"]),
        abbrev_name=_first_text(row, IDENTITY_ALIASES["abbrev_name"]),
        image_id=_first_text(row, IDENTITY_ALIASES["image_id"]),
        color=_first_text(row, IDENTITY_ALIASES["color"]),
        league_id=_first_text(row, IDENTITY_ALIASES["league_id"]),
        league_name=_first_text(row, IDENTITY_ALIASES["league_name"]),
        opta_team_id=_first_text(row, IDENTITY_ALIASES["opta_team_id"]),
        stats=stats,
    )


def rows_to_entities(rows: Iterable[Mapping[str, Optional[str]]]) -> List[EntityRecord]:
    entities: List[EntityRecord] = []
    skipped = 0
    for row in rows:
        entity = row_to_entity(row)
        if entity is None:
            skipped += 1
            continue
        entities.append(entity)
    if skipped:
        logger.debug("Skipped %d rows without a team or player name", skipped)
    return entities


def parse_team_csv(text: str) -> List[EntityRecord]:
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))
    if not reader.fieldnames:
        raise ValueError("CSV has no header row")
    entities = rows_to_entities(reader)
    if not entities:
        raise ValueError("CSV contains no rows with a team or player name")
    return entities


def load_team_csv(path: Path) -> List[EntityRecord]:
    return parse_team_csv(path.read_text(encoding="utf-8-sig"))


def our_team_metrics(entity: EntityRecord) -> dict[str, float]:
    """Press-framing metrics from a second ("our team") CSV row.

    The progression percentage is (A1->A2 + A1->A3) / sequences started in A1.
    """

    metrics: dict[str, float] = {}
    for logical, target in (
        ("avg_sequence_time", "our_avg_sequence_time"),
        ("long_ball_pct", "our_long_ball_percentage"),
    ):
        if has_field(entity, logical):
            metrics[target] = get_field_value(entity, logical)
    started = get_field_value(entity, "seq_start_a1")
    if started > 0:
        progressed = get_field_value(entity, "start_a1_end_a2") + get_field_value(entity, "start_a1_end_a3")
        metrics["our_a1_to_a2_a3_percentage"] = progressed / started * 100
    return metrics


def merge_our_team_metrics(
    entities: Sequence[EntityRecord],
    our_rows: Sequence[EntityRecord],
) -> List[EntityRecord]:
    """Overlay "our team" metrics onto matching entities by normalized name."""

    lookup = {normalize_identity(row.identity): our_team_metrics(row) for row in our_rows}
    matched: set[str] = set()
    merged: List[EntityRecord] = []
    for entity in entities:
        key = normalize_identity(entity.identity)
        metrics = lookup.get(key)
        if metrics is None:
            merged.append(entity)
            continue
        matched.add(key)
        merged.append(entity.model_copy(update={"stats": {**entity.stats, **metrics}}))
    unmatched = sorted(set(lookup) - matched)
    if unmatched:
        logger.warning("Second CSV rows without a matching team: %s", ", ".join(unmatched))
    return merged
