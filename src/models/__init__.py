"""
NetPerfCompare - Data Models Package

Dataclass models for catalogs, entities and derived aggregates.
"""

from src.models.facts import (
    Status,
    FetchableResource,
    CombinedId,
    CombinedTypeAndIds,
    CombinedItem,
    CombinedTimeSeries,
    HourlyEntry,
    SeriesWithStatus,
    FacetItemTimeSeries,
    CombinedGrouping,
    TopFilterResult
)
from src.models.dimensions import (
    FacetTypeValue,
    CombinedType,
    FacetType,
    Metric,
    FACET_TYPES,
    METRICS,
    DIMENSION_PRIORITY,
    Entity,
    EntityTime,
    CombinedRecord
)

from src.models.state import CompareState, CompareQuery

__all__ = [
    "CompareState",
    "CompareQuery",
    "Status",
    "FetchableResource",
    "CombinedId",
    "CombinedTypeAndIds",
    "CombinedItem",
    "CombinedTimeSeries",
    "HourlyEntry",
    "SeriesWithStatus",
    "FacetItemTimeSeries",
    "CombinedGrouping",
    "TopFilterResult",
    "FacetTypeValue",
    "CombinedType",
    "FacetType",
    "Metric",
    "FACET_TYPES",
    "METRICS",
    "DIMENSION_PRIORITY",
    "Entity",
    "EntityTime",
    "CombinedRecord"
]
