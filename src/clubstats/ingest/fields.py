"""Resolve logical statistic names against whichever column a row carries."""

from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple

from clubstats.config import get_aliases
from clubstats.models import EntityRecord


def get_field_value(
    entity: EntityRecord,
    logical_name: str,
    *,
    extra_aliases: Mapping[str, Tuple[str, ...]] | None = None,
) -> float:
    """Return the first present alias value for ``logical_name``, else 0.0."""

    for column in get_aliases(logical_name, extra_aliases):
        value = entity.stats.get(column)
        if value is not None:
            return value
    return 0.0


def has_field(entity: EntityRecord, logical_name: str) -> bool:
    return any(column in entity.stats for column in get_aliases(logical_name))


def apply_extra_aliases(
    entities: Sequence[EntityRecord],
    extra_aliases: Mapping[str, Tuple[str, ...]],
) -> List[EntityRecord]:
    """Copy profile-only column spellings onto their built-in spelling."""

    if not extra_aliases:
        return list(entities)
    updated: List[EntityRecord] = []
    for entity in entities:
        additions: dict[str, float] = {}
        for logical_name in extra_aliases:
            if has_field(entity, logical_name):
                continue
            for column in extra_aliases[logical_name]:
                if column in entity.stats:
                    additions[get_aliases(logical_name)[0]] = entity.stats[column]
                    break
        if additions:
            entity = entity.model_copy(update={"stats": {**entity.stats, **additions}})
        updated.append(entity)
    return updated
