"""
NetPerfCompare - Fact Models

Fetchable resources and the derived aggregates produced by the
compare pipeline.
Grain: combined id (facet item x filter item [x breakdown item])
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union


class Status(str, Enum):
    """Fetch state of a resource."""
    NOT_FETCHED = "not-fetched"
    FETCHING = "fetching"
    SUCCESS = "success"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Any) -> "Status":
        """Parse a raw status value, treating unknown values as not fetched."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        return cls.NOT_FETCHED


@dataclass
class FetchableResource:
    """
    A resource populated by the fetching layer.

    data stays None until the resource has been fetched successfully.
    """
    status: Status = Status.NOT_FETCHED
    data: Any = None

    @classmethod
    def from_dict(cls, raw: Optional[dict]) -> "FetchableResource":
        """Create FetchableResource from a snapshot dictionary (None -> not fetched)."""
        if raw is None:
            return cls()
        return cls(status=Status.parse(raw.get("status")), data=raw.get("data"))


@dataclass(frozen=True)
class CombinedId:
    """
    One combination of entity ids produced by the cross product.

    Roles:
    - facet_item_id: id of the dimension in the facet role
    - filter_item_id: id of the dimension being filtered on
    - breakdown_by_item_id: id of the breakdown dimension (3 dimensions only)
    - combined: composite key of the combination
    """
    facet_item_id: Any
    combined: str
    filter_item_id: Any = None
    breakdown_by_item_id: Any = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        result = {
            "facetItemId": self.facet_item_id,
            "filterItemId": self.filter_item_id,
            "combined": self.combined
        }
        if self.breakdown_by_item_id is not None:
            result["breakdownByItemId"] = self.breakdown_by_item_id
        return result


@dataclass
class CombinedTypeAndIds:
    """Combined type string plus every combination of selected ids."""
    combined_type: str
    combined_ids: List[CombinedId] = field(default_factory=list)


@dataclass
class CombinedItem:
    """A combined id joined with the record stored under its key."""
    id: CombinedId
    data: Any  # CombinedRecord


@dataclass
class CombinedTimeSeries:
    """
    Time series of a group merged into one object.

    statuses has one entry per contributing resource, data only the
    series that are present, counts the per-date sample counts.
    """
    statuses: List[Status] = field(default_factory=list)
    data: List[List[dict]] = field(default_factory=list)
    status: Status = Status.SUCCESS
    counts: List[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "statuses": [s.value for s in self.statuses],
            "data": self.data,
            "status": self.status.value,
            "counts": self.counts
        }


@dataclass
class HourlyEntry:
    """Hourly data for a single item, kept separate within its group."""
    id: Any
    data: Optional[List[dict]]
    status: Status
    wrangled: Optional[dict] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.id,
            "data": self.data,
            "status": self.status.value,
            "wrangled": self.wrangled
        }


@dataclass
class SeriesWithStatus:
    """Single entity time series tagged with its id and status."""
    id: Any
    status: Status
    data: Optional[List[dict]]


@dataclass
class FacetItemTimeSeries:
    """Per facet item series plus the merged series of all facet items."""
    combined: CombinedTimeSeries
    time_series: List[SeriesWithStatus] = field(default_factory=list)


@dataclass
class CombinedGrouping:
    """
    Grouped combine results.

    Flat for two dimensions:  {facet_item_id: result}
    Nested for three:         {facet_item_id: {breakdown_by_item_id: result}}

    result is a CombinedTimeSeries or a list of HourlyEntry depending on
    the combiner used.
    """
    combined_type: str
    groups: Dict[Any, Any] = field(default_factory=dict)

    @property
    def nested(self) -> bool:
        """True when groups are keyed by facet item and then breakdown item."""
        return len(self.combined_type.split("-")) == 3

    def get(self, facet_item_id: Any, breakdown_by_item_id: Any = None) -> Any:
        """
        Look up a group result.

        Args:
            facet_item_id: Facet item id
            breakdown_by_item_id: Breakdown item id (nested groupings only)

        Returns:
            Group result, the breakdown mapping when nested and no breakdown id
            is given, or None if absent
        """
        group = self.groups.get(facet_item_id)
        if group is None or not self.nested or breakdown_by_item_id is None:
            return group
        return group.get(breakdown_by_item_id)

    def leaves(self) -> Iterator[Any]:
        """Iterate over all group results in insertion order."""
        for group in self.groups.values():
            if self.nested:
                yield from group.values()
            else:
                yield group

    def to_dict(self) -> dict:
        """Convert to nested dictionary for JSON output."""
        def convert(result: Any) -> Any:
            if isinstance(result, list):
                return [entry.to_dict() for entry in result]
            return result.to_dict()

        if self.nested:
            return {
                str(facet_id): {str(sub_id): convert(r) for sub_id, r in group.items()}
                for facet_id, group in self.groups.items()
            }
        return {str(facet_id): convert(r) for facet_id, r in self.groups.items()}


@dataclass
class TopFilterResult:
    """Top N candidate filter entities with the ranking resource status."""
    data: List[dict] = field(default_factory=list)
    status: Status = Status.NOT_FETCHED


Extents = Dict[str, List[Union[int, float]]]
