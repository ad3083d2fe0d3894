"""
NetPerfCompare - Combined Aggregator

Joins combined ids with their stored records, then groups the joined
items by facet item (and breakdown item for three dimensions) and merges
each group into chart-ready series.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from src.calculators.series_calculator import compute_time_series_counts, wrangle_hourly
from src.calculators.status_calculator import combine_status, resource_status
from src.models.dimensions import CombinedType, Entity, Metric
from src.models.facts import (
    CombinedGrouping,
    CombinedItem,
    CombinedTimeSeries,
    CombinedTypeAndIds,
    FacetItemTimeSeries,
    HourlyEntry,
    SeriesWithStatus
)


logger = logging.getLogger(__name__)


CombineFunction = Callable[[List[CombinedItem], Optional[Metric]], Any]


def get_combined_items(
    combined_type_and_ids: CombinedTypeAndIds,
    sources: Mapping[str, Optional[Mapping[str, Any]]]
) -> List[CombinedItem]:
    """
    Look up the stored record of every combined id.

    Args:
        combined_type_and_ids: Output of the cross product expander
        sources: Store per combined type value (composite key -> record)

    Returns:
        Joined items in combined id order; ids without a record are dropped
    """
    source = sources.get(combined_type_and_ids.combined_type)
    if not source:
        return []

    items = []
    for combined_id in combined_type_and_ids.combined_ids:
        record = source.get(combined_id.combined)
        if record is not None:
            items.append(CombinedItem(id=combined_id, data=record))

    missing = len(combined_type_and_ids.combined_ids) - len(items)
    if missing:
        logger.debug(f"{missing} combined ids have no {combined_type_and_ids.combined_type} record")

    return items


def _group_by(items: Sequence[CombinedItem], key: Callable[[CombinedItem], Any]) -> Dict[Any, List[CombinedItem]]:
    """Group items by key, keeping first-appearance order."""
    grouped: Dict[Any, List[CombinedItem]] = {}
    for item in items:
        grouped.setdefault(key(item), []).append(item)
    return grouped


def combine_data(
    combine: CombineFunction,
    combined_type: str,
    combined_items: Optional[Sequence[CombinedItem]],
    view_metric: Optional[Metric] = None
) -> Optional[CombinedGrouping]:
    """
    Group combined items and combine each group.

    Ends up with:
        {facet_id: combined, ...}                          (one filter)
        {facet_id: {breakdown_by_item_id: combined}, ...}  (two filters)

    Args:
        combine: Function merging a list of items into one group result
        combined_type: Combined type of the items
        combined_items: Joined items
        view_metric: Active metric, passed through to combine

    Returns:
        CombinedGrouping, or None when there are no items
    """
    if not combined_items:
        return None

    by_facet_item = _group_by(combined_items, lambda item: item.id.facet_item_id)

    groups: Dict[Any, Any] = {}
    if combined_type == CombinedType.LOCATION_CLIENT_ISP_TRANSIT_ISP.value:
        for facet_item_id, facet_items in by_facet_item.items():
            by_breakdown = _group_by(facet_items, lambda item: item.id.breakdown_by_item_id)
            groups[facet_item_id] = {
                breakdown_by_item_id: combine(breakdown_items, view_metric)
                for breakdown_by_item_id, breakdown_items in by_breakdown.items()
            }
    else:
        for facet_item_id, facet_items in by_facet_item.items():
            groups[facet_item_id] = combine(facet_items, view_metric)

    return CombinedGrouping(combined_type=combined_type, groups=groups)


def merge_time_series(resources: Sequence[Any]) -> CombinedTimeSeries:
    """
    Merge time series resources into a single object.

    Every resource contributes its status; only fetched data is kept.
    """
    statuses = []
    data = []
    for resource in resources:
        statuses.append(resource_status(resource))
        if resource is not None and resource.data is not None:
            data.append(resource.data)

    combined = CombinedTimeSeries(statuses=statuses, data=data, status=combine_status(statuses))
    combined.counts = compute_time_series_counts(combined)
    return combined


def combine_time_series(items: List[CombinedItem], view_metric: Optional[Metric] = None) -> CombinedTimeSeries:
    """Combine the time series of a group; each data entry becomes a line."""
    return merge_time_series([item.data.time.time_series for item in items])


def combine_hourly(items: List[CombinedItem], view_metric: Optional[Metric] = None) -> List[HourlyEntry]:
    """
    Build one hourly entry per item, identified by its filter item id.

    Hourly data is not merged: each item stays its own line.
    """
    entries = []
    for item in items:
        hourly = item.data.time.hourly
        entries.append(HourlyEntry(
            id=item.id.filter_item_id,
            data=hourly.data,
            status=resource_status(hourly),
            wrangled=wrangle_hourly(hourly.data, view_metric) if view_metric else None
        ))
    return entries


def combine_facet_item_time_series(facet_items: Optional[Sequence[Entity]]) -> Optional[FacetItemTimeSeries]:
    """
    Time series of the facet items themselves (no filters applied).

    Returns:
        FacetItemTimeSeries with the per item series and their merge
    """
    if facet_items is None:
        return None

    time_series = [
        SeriesWithStatus(
            id=facet_item.id,
            status=resource_status(facet_item.time.time_series),
            data=facet_item.time.time_series.data
        )
        for facet_item in facet_items
        if facet_item.time.time_series is not None
    ]

    combined = merge_time_series([facet_item.time.time_series for facet_item in facet_items
                                  if facet_item.time.time_series is not None])
    return FacetItemTimeSeries(combined=combined, time_series=time_series)


def combine_facet_item_hourly(
    facet_items: Optional[Sequence[Entity]],
    view_metric: Metric
) -> Optional[List[HourlyEntry]]:
    """Hourly entry per facet item, identified by the facet item id."""
    if facet_items is None:
        return None

    return [
        HourlyEntry(
            id=facet_item.id,
            data=facet_item.time.hourly.data,
            status=resource_status(facet_item.time.hourly),
            wrangled=wrangle_hourly(facet_item.time.hourly.data, view_metric)
        )
        for facet_item in facet_items
    ]
