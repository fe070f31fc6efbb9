"""Weighted composite scorers for team rankings.

Every scorer is a :class:`ScorerSpec`: a handful of metrics pulled off each
entity, each min-max normalized across the current set of entities and
combined with fixed weights. :func:`score_entities` evaluates any scorer and
returns the entities ranked by composite score, best first.

A metric extractor returns ``None`` when its value is undefined, such as a
ratio with a zero denominator. Such values are left out of the normalization
bounds and receive the component's ``undefined_score`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from clubstats.ingest.fields import get_field_value, has_field
from clubstats.models import EntityRecord, ScoredEntity

from .normalize import MIN_SCORE, normalize


Extractor = Callable[[EntityRecord], Optional[float]]


@dataclass(frozen=True)
class MetricComponent:
    name: str
    weight: float
    higher_is_better: bool
    extract: Extractor
    undefined_score: float = MIN_SCORE


@dataclass(frozen=True)
class ScorerSpec:
    name: str
    components: Tuple[MetricComponent, ...]
    display: Tuple[Tuple[str, Extractor], ...] = ()

    @property
    def total_weight(self) -> float:
        return sum(component.weight for component in self.components)


PRESS_WEIGHTS: Dict[str, float] = {
    "ppda": 0.30,
    "sequence_time": 0.10,
    "long_ball_pct": 0.10,
    "possession_won": 0.20,
    "progression_pct": 0.30,
}

DUELS_WEIGHTS: Dict[str, float] = {
    "ground_duel_pct": 0.70,
    "aerial_duel_pct": 0.30,
}

ASSIST_ZONE_WEIGHTS: Dict[str, float] = {
    "assists_from_pass": 0.40,
    "shots_from_golden": 0.20,
    "cross_to_pass_ratio": 0.40,
}

SHOT_LOCATION_WEIGHTS: Dict[str, float] = {"golden_zone_shot_pct": 1.00}

SHOT_QUALITY_WEIGHTS: Dict[str, float] = {"penalty_area_on_target_pct": 1.00}

PLAYER_RUNNING_WEIGHTS: Dict[str, float] = {
    "intensity": 0.40,
    "top_speed": 0.30,
    "distance_per_90": 0.30,
}


def field(logical_name: str) -> Extractor:
    return lambda entity: get_field_value(entity, logical_name)


def ratio(numerator: str, denominator: str, *, scale: float = 1.0) -> Extractor:
    """Extractor for numerator / denominator; None when the denominator is 0."""

    def extract(entity: EntityRecord) -> Optional[float]:
        bottom = get_field_value(entity, denominator)
        if bottom == 0:
            return None
        return get_field_value(entity, numerator) / bottom * scale

    return extract


def rank_scored(scored: Iterable[ScoredEntity]) -> List[ScoredEntity]:
    """Stable sort by composite (descending) and assign 1-based ranks."""

    ordered = sorted(scored, key=lambda item: item.composite, reverse=True)
    return [item.model_copy(update={"rank": index + 1}) for index, item in enumerate(ordered)]


def score_entities(entities: Sequence[EntityRecord], spec: ScorerSpec) -> List[ScoredEntity]:
    entities = list(entities)
    columns: Dict[str, List[Optional[float]]] = {
        component.name: [component.extract(entity) for entity in entities]
        for component in spec.components
    }
    bounds: Dict[str, List[float]] = {
        name: [value for value in values if value is not None] for name, values in columns.items()
    }

    scored: List[ScoredEntity] = []
    for index, entity in enumerate(entities):
        metrics: Dict[str, Optional[float]] = {}
        scores: Dict[str, float] = {}
        composite = 0.0
        for component in spec.components:
            value = columns[component.name][index]
            if value is None:
                score = component.undefined_score
            else:
                score = normalize(value, bounds[component.name], component.higher_is_better)
            metrics[component.name] = value
            scores[f"{component.name}_score"] = score
            composite += component.weight * score
        for name, extract in spec.display:
            metrics[name] = extract(entity)
        scored.append(ScoredEntity(entity=entity, metrics=metrics, scores=scores, composite=composite))
    return rank_scored(scored)


def _progression_pct(entity: EntityRecord, *, own_framing: bool) -> float:
    if own_framing and has_field(entity, "our_a1_progression_pct"):
        return get_field_value(entity, "our_a1_progression_pct")
    started = get_field_value(entity, "seq_start_a1")
    if started <= 0:
        return 0.0
    progressed = get_field_value(entity, "start_a1_end_a2") + get_field_value(entity, "start_a1_end_a3")
    return progressed / started * 100


def press_scorer(is_opponent_analysis: bool = False) -> ScorerSpec:
    """Press score; ``is_opponent_analysis`` mirrors every metric direction.

    By default the rows describe how a team presses its opponents. In
    opponent analysis the same metrics describe how well the team copes with
    being pressed, so lower-is-better and higher-is-better swap and the
    framing-dependent metrics are read from the ``our_*`` columns.
    """

    flip = is_opponent_analysis
    sequence_field = "our_avg_sequence_time" if flip else "avg_sequence_time"
    long_ball_field = "our_long_ball_pct" if flip else "long_ball_pct"
    return ScorerSpec(
        name="press",
        components=(
            MetricComponent("ppda", PRESS_WEIGHTS["ppda"], flip, field("ppda")),
            MetricComponent(
                "sequence_time", PRESS_WEIGHTS["sequence_time"], flip, field(sequence_field)
            ),
            MetricComponent(
                "long_ball_pct", PRESS_WEIGHTS["long_ball_pct"], not flip, field(long_ball_field)
            ),
            MetricComponent(
                "possession_won",
                PRESS_WEIGHTS["possession_won"],
                not flip,
                field("possession_won_opp_half"),
            ),
            MetricComponent(
                "progression_pct",
                PRESS_WEIGHTS["progression_pct"],
                flip,
                lambda entity: _progression_pct(entity, own_framing=flip),
            ),
        ),
    )


def duels_scorer() -> ScorerSpec:
    return ScorerSpec(
        name="duels",
        components=(
            MetricComponent(
                "ground_duel_pct", DUELS_WEIGHTS["ground_duel_pct"], True, field("ground_duel_pct")
            ),
            MetricComponent(
                "aerial_duel_pct", DUELS_WEIGHTS["aerial_duel_pct"], True, field("aerial_duel_pct")
            ),
        ),
    )


def assist_zone_scorer() -> ScorerSpec:
    # crosses per assist-zone pass, lower is better
    return ScorerSpec(
        name="assist_zone",
        components=(
            MetricComponent(
                "assists_from_pass",
                ASSIST_ZONE_WEIGHTS["assists_from_pass"],
                True,
                field("assists_from_pass"),
            ),
            MetricComponent(
                "shots_from_golden",
                ASSIST_ZONE_WEIGHTS["shots_from_golden"],
                True,
                field("shots_from_golden"),
            ),
            MetricComponent(
                "cross_to_pass_ratio",
                ASSIST_ZONE_WEIGHTS["cross_to_pass_ratio"],
                False,
                ratio("cross_open", "assists_from_pass"),
            ),
        ),
    )


def shot_location_scorer() -> ScorerSpec:
    return ScorerSpec(
        name="shot_location",
        components=(
            MetricComponent(
                "golden_zone_shot_pct",
                SHOT_LOCATION_WEIGHTS["golden_zone_shot_pct"],
                True,
                ratio("shots_from_golden", "shots_total", scale=100.0),
            ),
        ),
    )


def shot_quality_scorer() -> ScorerSpec:
    return ScorerSpec(
        name="shot_quality",
        components=(
            MetricComponent(
                "penalty_area_on_target_pct",
                SHOT_QUALITY_WEIGHTS["penalty_area_on_target_pct"],
                True,
                ratio("shots_on_goal_penalty_area", "shots_total", scale=100.0),
            ),
        ),
    )


def _match_distance(entity: EntityRecord) -> float:
    return get_field_value(entity, "distance_first_half") + get_field_value(entity, "distance_second_half")


def _positive(value: float) -> Optional[float]:
    return value if value > 0 else None


def _intensity(entity: EntityRecord) -> Optional[float]:
    distance = _match_distance(entity)
    if distance <= 0:
        return None
    fast = (
        get_field_value(entity, "hsr_first_half")
        + get_field_value(entity, "hsr_second_half")
        + get_field_value(entity, "sprint_first_half")
        + get_field_value(entity, "sprint_second_half")
    )
    return _positive(fast / distance * 100)


def _distance_per_90(entity: EntityRecord) -> Optional[float]:
    minutes = get_field_value(entity, "minutes")
    if minutes <= 0:
        return None
    return _positive(_match_distance(entity) / minutes * 90)


def player_running_scorer() -> ScorerSpec:
    """Running load for player rows of a physical-data export.

    Intensity is high-speed plus sprint distance as a share of total
    distance, and distance is scaled to 90 minutes. Players with no positive
    value for a component sit outside its bounds and get the lowest score.
    """

    return ScorerSpec(
        name="player_running",
        components=(
            MetricComponent("intensity", PLAYER_RUNNING_WEIGHTS["intensity"], True, _intensity),
            MetricComponent(
                "top_speed",
                PLAYER_RUNNING_WEIGHTS["top_speed"],
                True,
                lambda entity: _positive(get_field_value(entity, "top_speed")),
            ),
            MetricComponent(
                "distance_per_90", PLAYER_RUNNING_WEIGHTS["distance_per_90"], True, _distance_per_90
            ),
        ),
        display=(("distance", _match_distance), ("minutes", field("minutes"))),
    )


_SCORER_FACTORIES: Dict[str, Callable[[], ScorerSpec]] = {
    "duels": duels_scorer,
    "assist_zone": assist_zone_scorer,
    "shot_location": shot_location_scorer,
    "shot_quality": shot_quality_scorer,
    "player_running": player_running_scorer,
}


def iter_scorer_names() -> List[str]:
    return ["press", *_SCORER_FACTORIES]


def get_scorer(name: str, *, is_opponent_analysis: bool = False) -> ScorerSpec:
    """Look up a scorer by name, raising KeyError if it does not exist."""

    key = name.strip().lower().replace("-", "_")
    if key == "press":
        return press_scorer(is_opponent_analysis)
    if key not in _SCORER_FACTORIES:
        raise KeyError(f"No scorer named {name!r}; expected one of {', '.join(iter_scorer_names())}")
    return _SCORER_FACTORIES[key]()
