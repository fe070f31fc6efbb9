"""Column alias table covering the statistics exports we ingest."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Tuple


# Logical field -> raw column spellings, checked in order. The first spelling
# is the short/legacy export header, later ones the long/descriptive schema.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    # corners
    "corners": ("corners", "Corners"),
    "opp_corners": ("oppcorners", "opp_corners"),
    "xg_corner": ("xgcorn", "xg_corner", "xg from corner"),
    "xg_corner_opp": ("xgcornopp", "xg_corner_opp"),
    "shots_from_corner": ("shotfromcorner", "shot_from_corner"),
    "shots_opp_from_corner": ("shotoppfromcorner", "shot_opp_from_corner"),
    "goals_from_corner": ("goalfromcorner", "goal_from_corner"),
    "goals_opp_from_corner": ("goaloppfromcorner", "goal_opp_from_corner"),
    "games": ("gm", "GM"),
    # pressing
    "ppda": ("ppda40", "ppda_40"),
    "avg_sequence_time": ("AvgSeqTime", "avg_sequence_time"),
    "our_avg_sequence_time": ("our_avg_sequence_time", "OurAvgSeqTime"),
    "long_ball_pct": ("LongBall%", "long_ball_percentage"),
    "our_long_ball_pct": ("our_long_ball_percentage", "OurLongBall%"),
    "possession_won_opp_half": ("poswonopponenthalf", "possession_won_opponent_half"),
    "seq_start_a1": ("SeqStartA1", "s1", "seq_start_a1"),
    "start_a1_end_a2": ("Starta1enda2/", "S1E2", "start_a1_end_a2"),
    "start_a1_end_a3": ("Starta1enda3/", "S1E3", "start_a1_end_a3"),
    "our_a1_progression_pct": ("our_a1_to_a2_a3_percentage",),
    # duels
    "ground_duel_pct": ("ground%", "ground_percentage"),
    "aerial_duel_pct": ("Aerial%", "aerial_percentage"),
    # chance creation
    "assists_from_pass": ("passfromassisttogolden", "pass_from_assist_to_golden"),
    "shots_from_golden": ("shotfromgolden", "shot_from_golden"),
    "cross_open": ("CrossOpen", "cross_open"),
    # shooting
    "shots_on_goal_penalty_area": ("SOG_from_penalty_area", "shots_on_goal_penalty_area"),
    "shots_on_goal_box": ("SOG_from_box", "shots_on_goal_from_box"),
    "shots_from_box": ("shotfrombox", "shot_from_box"),
    "shots_total": ("ShtIncBl", "shots_including_blocked"),
    "shots_on_goal": ("SOG", "shots_on_goal"),
    # player running
    "minutes": ("MinIncET", "Min", "minutes"),
    "distance_first_half": ("DistanceRunFirstHalf", "distance_run_first_half"),
    "distance_second_half": ("DistanceRunScndHalf", "distance_run_second_half"),
    "hsr_first_half": ("FirstHalfDistHSRun", "first_half_hsr_distance"),
    "hsr_second_half": ("ScndHalfDistHSRun", "second_half_hsr_distance"),
    "sprint_first_half": ("FirstHalfDistSprint", "first_half_sprint_distance"),
    "sprint_second_half": ("ScndHalfDistSprint", "second_half_sprint_distance"),
    "top_speed": ("TopSpeed", "KMHSPEED", "top_speed"),
}

# Identity and display columns, resolved the same way but kept as text.
IDENTITY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "identity": ("teamFullName", "team_full_name", "Team", "team", "Player", "player"),
    "team_id": ("teamId", "team_id"),
    "short_name": ("teamShortName", "team_short_name"),
    "abbrev_name": ("teamAbbrevName", "team_abbrev_name"),
    "image_id": ("teamImageId", "team_image_id"),
    "color": ("newestTeamColor", "newest_team_color", "team_color"),
    "league_id": ("leagueId", "league_id"),
    "league_name": ("leagueName", "league_name"),
    "opta_team_id": ("optaTeamId", "opta_team_id"),
}


def iter_fields() -> Iterable[str]:
    """Return the logical field names known to the alias table."""

    return FIELD_ALIASES.keys()


def get_aliases(
    logical_name: str,
    extra: Mapping[str, Tuple[str, ...]] | None = None,
) -> Tuple[str, ...]:
    """Column spellings for ``logical_name``; unknown names alias themselves."""

    aliases = FIELD_ALIASES.get(logical_name, (logical_name,))
    if extra and logical_name in extra:
        # profile spellings are tried after the built-in ones
        aliases = aliases + tuple(col for col in extra[logical_name] if col not in aliases)
    return aliases


def identity_columns() -> frozenset[str]:
    """Every column spelling that carries identity/display text."""

    return frozenset(col for cols in IDENTITY_ALIASES.values() for col in cols)
