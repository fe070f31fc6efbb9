from datetime import date
from pathlib import Path

import pytest

from clubstats.models import EntityRecord, Measurement
from clubstats.persistence import StatsStore


@pytest.fixture
def store(tmp_path: Path, monkeypatch) -> StatsStore:
    monkeypatch.delenv("CLUBSTATS_DB_PATH", raising=False)
    return StatsStore(tmp_path / "stats.sqlite")


def _teams(*names: str, corners: float = 10.0) -> list[EntityRecord]:
    return [
        EntityRecord(identity=name, team_id=str(index), stats={"corners": corners + index})
        for index, name in enumerate(names)
    ]


def test_save_and_fetch_corners(store: StatsStore):
    metadata = store.save_corners(matchday="12", entities=_teams("Beta", "Alpha"), csv_filename="md12.csv")

    assert metadata.total_teams == 2
    fetched = store.fetch_corners("12")
    assert [entity.identity for entity in fetched] == ["Beta", "Alpha"]
    assert fetched[0].team_id == "0"
    assert fetched[0].stats == {"corners": 10.0}
    assert store.corners_exist("12")
    assert not store.corners_exist("12", season="2024-2025")


def test_save_corners_overwrites_matchday(store: StatsStore):
    store.save_corners(matchday="12", entities=_teams("Alpha", "Beta", "Gamma"))
    store.save_corners(matchday="12", entities=_teams("Delta"), notes="re-export")

    assert [entity.identity for entity in store.fetch_corners("12")] == ["Delta"]
    matchdays = store.list_matchdays()
    assert len(matchdays) == 1
    assert matchdays[0].total_teams == 1
    assert matchdays[0].notes == "re-export"


def test_list_matchdays_newest_first(store: StatsStore):
    store.save_corners(matchday="1", entities=_teams("Alpha"))
    store.save_corners(matchday="2", entities=_teams("Alpha"))

    assert [item.matchday for item in store.list_matchdays()] == ["2", "1"]
    assert len(store.list_matchdays(limit=1)) == 1


def test_delete_corners(store: StatsStore):
    store.save_corners(matchday="3", entities=_teams("Alpha"))
    store.delete_corners("3")

    assert store.fetch_corners("3") == []
    assert not store.corners_exist("3")


def test_opponent_statistics_overwrite(store: StatsStore):
    store.save_opponent(opponent_name="Maccabi Haifa", entities=_teams("Alpha", "Beta"))
    metadata = store.save_opponent(opponent_name="Maccabi Haifa", entities=_teams("Gamma"))

    assert metadata.total_teams == 1
    assert [entity.identity for entity in store.fetch_opponent("Maccabi Haifa")] == ["Gamma"]
    assert store.fetch_opponent("Bnei Sakhnin") == []


def test_body_composition_replace_and_query(store: StatsStore):
    first = [
        Measurement(player="Dor Hugi", measured_on=date(2025, 2, 1), weight=80, fat=10.0),
        Measurement(player="Dor Hugi", measured_on=date(2025, 1, 1), weight=81, fat=10.5, date_label="01/01/25"),
        Measurement(player="Ori Dahan", measured_on=date(2025, 1, 15), weight=75, fat=9.2),
    ]
    assert store.replace_body_composition(first) == 3

    stored = store.fetch_body_composition()
    assert [item.measured_on for item in stored] == [date(2025, 1, 1), date(2025, 1, 15), date(2025, 2, 1)]
    assert stored[0].date_label == "01/01/25"
    assert [item.fat for item in store.player_measurements("Dor Hugi")] == [10.5, 10.0]
    latest = store.latest_measurements()
    assert [(item.player, item.fat) for item in latest] == [("Dor Hugi", 10.0), ("Ori Dahan", 9.2)]

    store.replace_body_composition(first[2:])
    assert [item.player for item in store.fetch_body_composition()] == ["Ori Dahan"]


def test_env_override_db_path(tmp_path: Path, monkeypatch):
    target = tmp_path / "env" / "override.sqlite"
    monkeypatch.setenv("CLUBSTATS_DB_PATH", str(target))
    store = StatsStore(tmp_path / "ignored.sqlite")

    assert store.db_path == target
    assert target.exists()
