import math

import pytest

from clubstats.ingest import parse_team_csv
from clubstats.models import EntityRecord
from clubstats.scoring import (
    ASSIST_ZONE_WEIGHTS,
    CORNER_ATTACK_WEIGHTS,
    CORNER_DEFENSE_WEIGHTS,
    CORNER_SUMMARY_WEIGHTS,
    DUELS_WEIGHTS,
    PLAYER_RUNNING_WEIGHTS,
    PRESS_WEIGHTS,
    SHOT_LOCATION_WEIGHTS,
    SHOT_QUALITY_WEIGHTS,
    get_scorer,
    iter_scorer_names,
    press_scorer,
    score_entities,
)


def _team(name: str, **stats: float) -> EntityRecord:
    return EntityRecord(identity=name, stats=stats)


def _duel_teams() -> list[EntityRecord]:
    return [
        _team("Low", **{"ground%": 40, "Aerial%": 30}),
        _team("Mid", **{"ground%": 55, "Aerial%": 30}),
        _team("High", **{"ground%": 70, "Aerial%": 90}),
    ]


def _press_teams() -> list[EntityRecord]:
    return [
        _team(
            "Hapoel",
            ppda40=8.0,
            AvgSeqTime=11.0,
            **{"LongBall%": 14.0},
            poswonopponenthalf=30.0,
            SeqStartA1=100.0,
            S1E2=20.0,
            S1E3=5.0,
        ),
        _team(
            "Maccabi",
            ppda40=12.0,
            AvgSeqTime=14.0,
            **{"LongBall%": 10.0},
            poswonopponenthalf=22.0,
            SeqStartA1=100.0,
            S1E2=30.0,
            S1E3=10.0,
        ),
        _team(
            "Beitar",
            ppda40=10.0,
            AvgSeqTime=12.5,
            **{"LongBall%": 12.0},
            poswonopponenthalf=25.0,
            SeqStartA1=80.0,
            S1E2=16.0,
            S1E3=8.0,
        ),
    ]


@pytest.mark.parametrize(
    "weights",
    [
        PRESS_WEIGHTS,
        DUELS_WEIGHTS,
        ASSIST_ZONE_WEIGHTS,
        SHOT_LOCATION_WEIGHTS,
        SHOT_QUALITY_WEIGHTS,
        PLAYER_RUNNING_WEIGHTS,
        CORNER_ATTACK_WEIGHTS,
        CORNER_DEFENSE_WEIGHTS,
        CORNER_SUMMARY_WEIGHTS,
    ],
)
def test_weights_sum_to_one(weights):
    assert sum(weights.values()) == pytest.approx(1.0)


def test_scorer_specs_match_weight_tables():
    for name in iter_scorer_names():
        assert get_scorer(name).total_weight == pytest.approx(1.0)


def test_duels_scores_three_team_example():
    scored = score_entities(_duel_teams(), get_scorer("duels"))

    assert [item.identity for item in scored] == ["High", "Mid", "Low"]
    by_name = {item.identity: item for item in scored}
    assert by_name["Low"].scores["ground_duel_pct_score"] == pytest.approx(1.0)
    assert by_name["Mid"].scores["ground_duel_pct_score"] == pytest.approx(50.5)
    assert by_name["High"].scores["ground_duel_pct_score"] == pytest.approx(100.0)
    assert by_name["Mid"].scores["aerial_duel_pct_score"] == pytest.approx(1.0)
    assert by_name["Low"].composite == pytest.approx(1.0)
    assert by_name["Mid"].composite == pytest.approx(35.65)
    assert by_name["High"].composite == pytest.approx(100.0)


def test_ranks_follow_composite_order():
    scored = score_entities(_press_teams(), press_scorer())

    assert [item.rank for item in scored] == [1, 2, 3]
    composites = [item.composite for item in scored]
    assert composites == sorted(composites, reverse=True)


@pytest.mark.parametrize(
    "name", ["press", "duels", "assist_zone", "shot_location", "shot_quality", "player_running"]
)
def test_composites_stay_within_scale(name):
    teams = [
        _team(
            f"Team {index}",
            ppda40=8.0 + index,
            AvgSeqTime=10.0 + index * 0.5,
            poswonopponenthalf=20.0 + index * 3,
            SeqStartA1=90.0,
            S1E2=10.0 + index,
            **{"ground%": 45 + index, "Aerial%": 60 - index, "LongBall%": 9.0 + index},
            passfromassisttogolden=20.0 + index,
            shotfromgolden=15.0 - index,
            CrossOpen=30.0 + 2 * index,
            ShtIncBl=100.0 + index,
            SOG_from_penalty_area=25.0 + index,
        )
        for index in range(5)
    ]
    for item in score_entities(teams, get_scorer(name)):
        assert 1.0 <= item.composite <= 100.0
        assert all(1.0 <= score <= 100.0 for score in item.scores.values())


def test_non_finite_cells_score_as_missing():
    teams = parse_team_csv("teamFullName,ground%,Aerial%\nA,40,30\nB,NaN,30\nC,70,90\n")
    scored = score_entities(teams, get_scorer("duels"))

    assert [item.identity for item in scored] == ["C", "A", "B"]
    assert all(math.isfinite(item.composite) for item in scored)
    assert scored[-1].scores["ground_duel_pct_score"] == pytest.approx(1.0)


RUNNING_CSV = """Player,MinIncET,DistanceRunFirstHalf,DistanceRunScndHalf,FirstHalfDistHSRun,ScndHalfDistHSRun,FirstHalfDistSprint,ScndHalfDistSprint,TopSpeed,KMHSPEED
Keeper,90,2600,2400,20,10,0,0,,24.0
Sub,45,2000,1500,300,200,100,100,31,
Unused,0,0,0,0,0,0,0,,
Runner,90,5500,5000,500,400,200,150,33.5,
"""


def test_player_running_ranks_players():
    scored = score_entities(parse_team_csv(RUNNING_CSV), get_scorer("player_running"))

    assert [item.identity for item in scored] == ["Runner", "Sub", "Keeper", "Unused"]
    by_name = {item.identity: item for item in scored}
    runner = by_name["Runner"]
    assert runner.metrics["intensity"] == pytest.approx(1250 / 10500 * 100)
    assert runner.metrics["distance_per_90"] == pytest.approx(10500.0)
    assert runner.metrics["distance"] == pytest.approx(10500.0)
    assert runner.scores["top_speed_score"] == pytest.approx(100.0)
    assert by_name["Sub"].scores["intensity_score"] == pytest.approx(100.0)
    assert by_name["Keeper"].metrics["top_speed"] == pytest.approx(24.0)


def test_player_running_without_positive_values_scores_lowest():
    scored = score_entities(parse_team_csv(RUNNING_CSV), get_scorer("player_running"))
    unused = next(item for item in scored if item.identity == "Unused")

    assert unused.metrics["intensity"] is None
    assert unused.metrics["top_speed"] is None
    assert unused.metrics["distance_per_90"] is None
    assert unused.composite == pytest.approx(1.0)


def test_press_rewards_low_ppda():
    scored = score_entities(_press_teams(), press_scorer())
    by_name = {item.identity: item for item in scored}

    assert by_name["Hapoel"].scores["ppda_score"] == pytest.approx(100.0)
    assert by_name["Maccabi"].scores["ppda_score"] == pytest.approx(1.0)
    assert by_name["Hapoel"].scores["possession_won_score"] == pytest.approx(100.0)
    assert by_name["Maccabi"].metrics["progression_pct"] == pytest.approx(40.0)
    assert by_name["Hapoel"].scores["progression_pct_score"] == pytest.approx(100.0)


def test_press_opponent_analysis_flips_directions():
    teams = [
        team.model_copy(
            update={
                "stats": {
                    **team.stats,
                    "our_avg_sequence_time": seq,
                    "our_long_ball_percentage": long_ball,
                    "our_a1_to_a2_a3_percentage": progression,
                }
            }
        )
        for team, seq, long_ball, progression in zip(
            _press_teams(), (9.0, 13.0, 11.0), (20.0, 30.0, 25.0), (10.0, 50.0, 30.0)
        )
    ]
    scored = score_entities(teams, press_scorer(is_opponent_analysis=True))
    by_name = {item.identity: item for item in scored}

    assert by_name["Maccabi"].scores["ppda_score"] == pytest.approx(100.0)
    assert by_name["Maccabi"].metrics["sequence_time"] == pytest.approx(13.0)
    assert by_name["Maccabi"].scores["sequence_time_score"] == pytest.approx(100.0)
    assert by_name["Maccabi"].scores["long_ball_pct_score"] == pytest.approx(1.0)
    assert by_name["Hapoel"].scores["possession_won_score"] == pytest.approx(1.0)
    assert by_name["Maccabi"].metrics["progression_pct"] == pytest.approx(50.0)
    assert by_name["Maccabi"].scores["progression_pct_score"] == pytest.approx(100.0)


def test_shot_percentages_with_no_shots_score_lowest():
    teams = [
        _team("A", shotfromgolden=10.0, ShtIncBl=50.0),
        _team("B", shotfromgolden=20.0, ShtIncBl=50.0),
        _team("C", shotfromgolden=0.0, ShtIncBl=0.0),
    ]
    by_name = {item.identity: item for item in score_entities(teams, get_scorer("shot_location"))}

    assert by_name["C"].metrics["golden_zone_shot_pct"] is None
    assert by_name["C"].scores["golden_zone_shot_pct_score"] == pytest.approx(1.0)
    assert by_name["B"].metrics["golden_zone_shot_pct"] == pytest.approx(40.0)
    assert by_name["B"].scores["golden_zone_shot_pct_score"] == pytest.approx(100.0)


def test_assist_zone_prefers_fewer_crosses_per_pass():
    teams = [
        _team("Passers", passfromassisttogolden=20.0, shotfromgolden=10.0, CrossOpen=10.0),
        _team("Crossers", passfromassisttogolden=20.0, shotfromgolden=10.0, CrossOpen=40.0),
        _team("Nothing", passfromassisttogolden=0.0, shotfromgolden=10.0, CrossOpen=40.0),
    ]
    by_name = {item.identity: item for item in score_entities(teams, get_scorer("assist-zone"))}

    assert by_name["Passers"].scores["cross_to_pass_ratio_score"] == pytest.approx(100.0)
    assert by_name["Crossers"].scores["cross_to_pass_ratio_score"] == pytest.approx(1.0)
    assert by_name["Nothing"].scores["cross_to_pass_ratio_score"] == pytest.approx(1.0)
    assert by_name["Passers"].rank == 1


def test_unknown_scorer_raises():
    with pytest.raises(KeyError):
        get_scorer("tiki_taka")
