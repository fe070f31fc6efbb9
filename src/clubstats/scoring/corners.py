"""Corner-kick attack, defense and summary rankings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from clubstats.ingest.fields import get_field_value
from clubstats.models import CornerSummaryEntry, EntityRecord, ScoredEntity

from .composite import MetricComponent, ScorerSpec, score_entities
from .normalize import MAX_SCORE


CORNER_ATTACK_WEIGHTS: Dict[str, float] = {"xg_per_corner": 0.50, "corner_to_goal": 0.50}

CORNER_DEFENSE_WEIGHTS: Dict[str, float] = {"xg_per_corner_opp": 0.50, "corner_to_goal_opp": 0.50}

CORNER_SUMMARY_WEIGHTS: Dict[str, float] = {"attack": 0.50, "defense": 0.50}

# Scores handed to teams whose corners-per-goal ratio has no goals behind it.
NO_GOALS_SCORED_SCORE = 0.0
NO_GOALS_CONCEDED_SCORE = MAX_SCORE


def _per(numerator: str, denominator: str, *, scale: float = 1.0):
    def extract(entity: EntityRecord) -> float:
        bottom = get_field_value(entity, denominator)
        return get_field_value(entity, numerator) / bottom * scale if bottom > 0 else 0.0

    return extract


def _corners_per_goal(corners: str, goals: str):
    def extract(entity: EntityRecord) -> Optional[float]:
        scored = get_field_value(entity, goals)
        if scored <= 0:
            return None
        return get_field_value(entity, corners) / scored

    return extract


def corner_attack_scorer() -> ScorerSpec:
    return ScorerSpec(
        name="corner_attack",
        components=(
            MetricComponent(
                "xg_per_corner",
                CORNER_ATTACK_WEIGHTS["xg_per_corner"],
                True,
                _per("xg_corner", "corners"),
            ),
            MetricComponent(
                "corner_to_goal",
                CORNER_ATTACK_WEIGHTS["corner_to_goal"],
                False,
                _corners_per_goal("corners", "goals_from_corner"),
                undefined_score=NO_GOALS_SCORED_SCORE,
            ),
        ),
        display=(
            ("chance_to_goal_pct", _per("goals_from_corner", "corners", scale=100.0)),
            ("corner_to_shot", _per("corners", "shots_from_corner")),
        ),
    )


def corner_defense_scorer() -> ScorerSpec:
    return ScorerSpec(
        name="corner_defense",
        components=(
            MetricComponent(
                "xg_per_corner_opp",
                CORNER_DEFENSE_WEIGHTS["xg_per_corner_opp"],
                False,
                _per("xg_corner_opp", "opp_corners"),
            ),
            MetricComponent(
                "corner_to_goal_opp",
                CORNER_DEFENSE_WEIGHTS["corner_to_goal_opp"],
                True,
                _corners_per_goal("opp_corners", "goals_opp_from_corner"),
                undefined_score=NO_GOALS_CONCEDED_SCORE,
            ),
        ),
        display=(
            ("chance_to_goal_opp_pct", _per("goals_opp_from_corner", "opp_corners", scale=100.0)),
            ("corner_to_shot_opp", _per("opp_corners", "shots_opp_from_corner")),
        ),
    )


def score_corner_attack(entities: Sequence[EntityRecord]) -> List[ScoredEntity]:
    return score_entities(entities, corner_attack_scorer())


def score_corner_defense(entities: Sequence[EntityRecord]) -> List[ScoredEntity]:
    return score_entities(entities, corner_defense_scorer())


def _find_partner(attack: ScoredEntity, defense: Sequence[ScoredEntity]) -> Optional[ScoredEntity]:
    team_id = attack.entity.team_id
    for candidate in defense:
        if team_id and candidate.entity.team_id == team_id:
            return candidate
    for candidate in defense:
        if candidate.entity.identity == attack.entity.identity:
            return candidate
    return None


def summarize_corners(
    attack: Sequence[ScoredEntity],
    defense: Sequence[ScoredEntity],
) -> List[CornerSummaryEntry]:
    """Join attack and defense views and rank by their combined score.

    Attack entries with no defense partner keep their differential fields
    unset and are ranked after every joined entry.
    """

    joined: List[CornerSummaryEntry] = []
    unjoined: List[CornerSummaryEntry] = []
    for attack_entry in attack:
        partner = _find_partner(attack_entry, defense)
        if partner is None:
            unjoined.append(CornerSummaryEntry(attack=attack_entry))
            continue
        ours, theirs = attack_entry.entity, partner.entity
        joined.append(
            CornerSummaryEntry(
                attack=attack_entry,
                defense=partner,
                combined_score=attack_entry.composite * CORNER_SUMMARY_WEIGHTS["attack"]
                + partner.composite * CORNER_SUMMARY_WEIGHTS["defense"],
                corners_diff=get_field_value(ours, "corners") - get_field_value(theirs, "opp_corners"),
                shots_from_corner_diff=get_field_value(ours, "shots_from_corner")
                - get_field_value(theirs, "shots_opp_from_corner"),
                goals_from_corner_diff=get_field_value(ours, "goals_from_corner")
                - get_field_value(theirs, "goals_opp_from_corner"),
                xg_from_corner_diff=get_field_value(ours, "xg_corner")
                - get_field_value(theirs, "xg_corner_opp"),
            )
        )
    joined.sort(key=lambda entry: entry.combined_score or 0.0, reverse=True)
    return [entry.model_copy(update={"rank": index + 1}) for index, entry in enumerate(joined + unjoined)]


@dataclass(frozen=True)
class CornerReport:
    attack: List[ScoredEntity]
    defense: List[ScoredEntity]
    summary: List[CornerSummaryEntry]


def build_corner_report(entities: Sequence[EntityRecord]) -> CornerReport:
    attack = score_corner_attack(entities)
    defense = score_corner_defense(entities)
    return CornerReport(attack=attack, defense=defense, summary=summarize_corners(attack, defense))
