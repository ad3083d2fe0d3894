"""
NetPerfCompare - Dimension Models

Catalogs of facet types and metrics, and the entity records held in the
location / client ISP / transit ISP stores.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from src.models.facts import FetchableResource


EntityId = Union[str, int]


class FacetTypeValue(str, Enum):
    """The three comparable dimensions."""
    LOCATION = "location"
    CLIENT_ISP = "clientIsp"
    TRANSIT_ISP = "transitIsp"


# Canonical dimension order used for combined types and composite keys
DIMENSION_PRIORITY: Dict[str, int] = {
    FacetTypeValue.LOCATION.value: 0,
    FacetTypeValue.CLIENT_ISP.value: 1,
    FacetTypeValue.TRANSIT_ISP.value: 2,
}


class CombinedType(str, Enum):
    """Recognized joins of two or three dimensions."""
    CLIENT_ISP_TRANSIT_ISP = "clientIsp-transitIsp"
    LOCATION_CLIENT_ISP = "location-clientIsp"
    LOCATION_CLIENT_ISP_TRANSIT_ISP = "location-clientIsp-transitIsp"
    LOCATION_TRANSIT_ISP = "location-transitIsp"

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional["CombinedType"]:
        """Return the member for value, or None for unrecognized strings."""
        for member in cls:
            if member.value == value:
                return member
        return None


@dataclass(frozen=True)
class FacetType:
    """
    Facet type catalog entry.

    id_key is the field holding the entity id in ranked (top N) records,
    store_key the plural prefix used for the ranking store keys.
    """
    value: str
    label: str
    id_key: str
    store_key: str


@dataclass(frozen=True)
class Metric:
    """Metric catalog entry; data_key names the field in series records."""
    value: str
    label: str
    data_key: str
    unit: str = ""
    format: str = ".1f"


FACET_TYPES: List[FacetType] = [
    FacetType(
        value=FacetTypeValue.LOCATION.value,
        label="Location",
        id_key="client_location_key",
        store_key="locations",
    ),
    FacetType(
        value=FacetTypeValue.CLIENT_ISP.value,
        label="Client ISP",
        id_key="client_asn_number",
        store_key="clientIsps",
    ),
    FacetType(
        value=FacetTypeValue.TRANSIT_ISP.value,
        label="Transit ISP",
        id_key="server_asn_number",
        store_key="transitIsps",
    ),
]

METRICS: List[Metric] = [
    Metric(value="download", label="Download Speed", data_key="download_speed_mbps_median", unit="Mbps"),
    Metric(value="upload", label="Upload Speed", data_key="upload_speed_mbps_median", unit="Mbps"),
    Metric(value="rtt", label="Round-trip Time", data_key="rtt_avg", unit="ms", format=".0f"),
    Metric(value="retransmission", label="Retransmission Rate", data_key="retransmit_avg", unit="%", format=".2%"),
]


@dataclass
class EntityTime:
    """Time-based resources of an entity or of a combined record."""
    time_series: FetchableResource = field(default_factory=FetchableResource)
    hourly: FetchableResource = field(default_factory=FetchableResource)

    @classmethod
    def from_dict(cls, raw: Optional[dict]) -> "EntityTime":
        """
        Create EntityTime from a store snapshot.

        Accepts both ``timeSeries`` and ``time_series`` for the series key.
        """
        raw = raw or {}
        time_series = raw.get("timeSeries", raw.get("time_series"))
        return cls(
            time_series=FetchableResource.from_dict(time_series),
            hourly=FetchableResource.from_dict(raw.get("hourly"))
        )


@dataclass
class Entity:
    """
    A location, client ISP or transit ISP.

    Primary Key: id
    """
    id: EntityId
    info: FetchableResource = field(default_factory=FetchableResource)
    time: EntityTime = field(default_factory=EntityTime)

    @classmethod
    def from_dict(cls, entity_id: EntityId, raw: Dict[str, Any]) -> "Entity":
        """
        Create Entity from a store snapshot entry.

        Args:
            entity_id: Store key of the entity
            raw: Dictionary with optional ``info`` and ``time`` resources

        Returns:
            Entity instance
        """
        return cls(
            id=raw.get("id", entity_id),
            info=FetchableResource.from_dict(raw.get("info")),
            time=EntityTime.from_dict(raw.get("time"))
        )


@dataclass
class CombinedRecord:
    """
    Joined time/hourly data stored under a composite key.

    Primary Key: composite id (see src.aggregators.identity)
    """
    time: EntityTime = field(default_factory=EntityTime)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CombinedRecord":
        """Create CombinedRecord from a store snapshot entry."""
        return cls(time=EntityTime.from_dict(raw.get("time")))
