from .entity import MEASUREMENT_METRICS, EntityRecord, Measurement
from .scores import CornerSummaryEntry, ScoredEntity

__all__ = [
    "CornerSummaryEntry",
    "EntityRecord",
    "MEASUREMENT_METRICS",
    "Measurement",
    "ScoredEntity",
]
