"""
NetPerfCompare - Page State Models

The store snapshot read by the compare page selectors, and the query
(URL parameters) describing the current selection.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.models.dimensions import CombinedRecord, Entity
from src.models.facts import FetchableResource


@dataclass
class CompareState:
    """
    Read-only view of the external stores.

    Entity stores map entity id -> Entity, combined stores map composite
    key -> CombinedRecord, top maps a ranking key such as
    "clientIspsForLocations" -> FetchableResource of ranked records.
    """
    locations: Dict[Any, Entity] = field(default_factory=dict)
    client_isps: Dict[Any, Entity] = field(default_factory=dict)
    transit_isps: Dict[Any, Entity] = field(default_factory=dict)
    location_client_isps: Dict[str, CombinedRecord] = field(default_factory=dict)
    location_transit_isps: Dict[str, CombinedRecord] = field(default_factory=dict)
    client_isp_transit_isps: Dict[str, CombinedRecord] = field(default_factory=dict)
    location_client_isp_transit_isps: Dict[str, CombinedRecord] = field(default_factory=dict)
    top: Dict[str, FetchableResource] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CompareState":
        """
        Create CompareState from a JSON snapshot.

        Keys are the camelCase store names
        (locations, clientIsps, locationClientIsps, top, ...). Null store
        entries are skipped, so lookups treat them as missing.

        Args:
            raw: Snapshot dictionary

        Returns:
            CompareState instance
        """
        def entities(key: str) -> Dict[Any, Entity]:
            return {
                entity_id: Entity.from_dict(entity_id, entity)
                for entity_id, entity in (raw.get(key) or {}).items()
                if entity is not None
            }

        def records(key: str) -> Dict[str, CombinedRecord]:
            return {
                combined_id: CombinedRecord.from_dict(record)
                for combined_id, record in (raw.get(key) or {}).items()
                if record is not None
            }

        return cls(
            locations=entities("locations"),
            client_isps=entities("clientIsps"),
            transit_isps=entities("transitIsps"),
            location_client_isps=records("locationClientIsps"),
            location_transit_isps=records("locationTransitIsps"),
            client_isp_transit_isps=records("clientIspTransitIsps"),
            location_client_isp_transit_isps=records("locationClientIspTransitIsps"),
            top={
                key: FetchableResource.from_dict(resource)
                for key, resource in (raw.get("top") or {}).items()
            }
        )


@dataclass
class CompareQuery:
    """
    Current selection, as bound from URL query parameters.

    facet_type and view_metric are raw values; unknown values fall back
    to the first catalog entry when resolved.
    """
    facet_type: Optional[str] = None
    facet_item_ids: Optional[List[Any]] = None
    filter1_ids: Optional[List[Any]] = None
    filter2_ids: Optional[List[Any]] = None
    breakdown_by: Optional[str] = None
    view_metric: Optional[str] = None
    time_aggregation: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
