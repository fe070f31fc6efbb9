from datetime import date

import pytest
from pydantic import ValidationError

from clubstats.models import EntityRecord, Measurement, ScoredEntity


def test_entity_record_is_frozen():
    entity = EntityRecord(identity="Alpha", stats={"corners": 4.0})
    with pytest.raises(ValidationError):
        entity.identity = "Beta"


def test_entity_record_requires_identity():
    with pytest.raises(ValidationError):
        EntityRecord(identity="")


def test_measurement_requires_positive_weight():
    with pytest.raises(ValidationError):
        Measurement(player="Dor Hugi", measured_on=date(2025, 1, 5), weight=0)


def test_measurement_metric_lookup():
    item = Measurement(player="Dor Hugi", measured_on=date(2025, 1, 5), weight=80, fat=9.5)
    assert item.metric("fat") == 9.5
    assert item.metric("weight") == 80.0
    with pytest.raises(KeyError):
        item.metric("speed")


def test_scored_entity_identity():
    scored = ScoredEntity(entity=EntityRecord(identity="Alpha"), composite=42.0)
    assert scored.identity == "Alpha"
    assert scored.rank == 0
