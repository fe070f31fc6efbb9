"""Input adapters that normalize raw statistics exports."""

from .body_composition import (
    format_measurement_date,
    load_body_composition_csv,
    parse_body_composition_csv,
    parse_measurement_date,
)
from .fields import apply_extra_aliases, get_field_value, has_field
from .teams import (
    load_team_csv,
    merge_our_team_metrics,
    parse_numeric,
    parse_team_csv,
    row_to_entity,
    rows_to_entities,
)

__all__ = [
    "apply_extra_aliases",
    "format_measurement_date",
    "get_field_value",
    "has_field",
    "load_body_composition_csv",
    "load_team_csv",
    "merge_our_team_metrics",
    "parse_body_composition_csv",
    "parse_measurement_date",
    "parse_numeric",
    "parse_team_csv",
    "row_to_entity",
    "rows_to_entities",
]
