"""Body-composition CSV ingest."""

from __future__ import annotations

import csv
import logging
from datetime import date, datetime
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from pydantic import ValidationError

from clubstats.models import Measurement

from .teams import parse_numeric


logger = logging.getLogger(__name__)

_COLUMNS: dict[str, tuple[str, ...]] = {
    "player": ("Player", "player"),
    "date": ("Date", "date"),
    "height": ("Height", "height"),
    "weight": ("Weight", "weight"),
    "fat": ("Fat", "fat", "Fat%"),
    "fat_mass": ("Fat Mass", "fatMass", "Fat_Mass", "fat_mass"),
    "lean_mass": ("Lean Mass", "leanMass", "Lean_Mass", "lean_mass"),
}


def parse_measurement_date(raw: str) -> Optional[date]:
    """Parse ``DD/MM/YY``, ``DD/MM/YYYY`` or ISO ``YYYY-MM-DD`` dates."""

    text = raw.strip()
    if not text:
        return None
    if "/" in text:
        parts = text.split("/")
        if len(parts) != 3:
            return None
        day, month, year = parts
        if len(year) == 2:
            year = f"20{year}"
        try:
            return date(int(year), int(month), int(day))
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def format_measurement_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def _cell(row: Mapping[str, Optional[str]], key: str) -> str:
    for column in _COLUMNS[key]:
        value = row.get(column)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def rows_to_measurements(rows: Iterable[Mapping[str, Optional[str]]]) -> List[Measurement]:
    measurements: List[Measurement] = []
    for row in rows:
        player = _cell(row, "player")
        weight = parse_numeric(_cell(row, "weight")) or 0.0
        if not player or weight <= 0:
            continue
        raw_date = _cell(row, "date")
        measured_on = parse_measurement_date(raw_date)
        if measured_on is None:
            logger.debug("Skipping measurement for %s with unreadable date %r", player, raw_date)
            continue
        try:
            measurements.append(
                Measurement(
                    player=player,
                    measured_on=measured_on,
                    date_label=raw_date,
                    height=parse_numeric(_cell(row, "height")) or 0.0,
                    weight=weight,
                    fat=parse_numeric(_cell(row, "fat")) or 0.0,
                    fat_mass=parse_numeric(_cell(row, "fat_mass")) or 0.0,
                    lean_mass=parse_numeric(_cell(row, "lean_mass")) or 0.0,
                )
            )
        except ValidationError as exc:
            logger.debug("Skipping invalid measurement row for %s: %s", player, exc)
    measurements.sort(key=lambda item: item.measured_on)
    return measurements


def parse_body_composition_csv(text: str) -> List[Measurement]:
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))
    if not reader.fieldnames:
        raise ValueError("CSV has no header row")
    measurements = rows_to_measurements(reader)
    if not measurements:
        raise ValueError("CSV contains no valid body composition rows")
    return measurements


def load_body_composition_csv(path: Path) -> List[Measurement]:
    return parse_body_composition_csv(path.read_text(encoding="utf-8-sig"))
