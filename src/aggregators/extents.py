"""
NetPerfCompare - Extent Calculator

Flattens grouped combined series and computes the shared value ranges
used to scale every chart on the same axes.
"""

import logging
from typing import Any, Dict, List, Optional

from src.calculators.series_calculator import compute_hourly_extents, multi_extent
from src.models.facts import CombinedGrouping, Extents, HourlyEntry


logger = logging.getLogger(__name__)


def flatten_combined_time_series(grouping: Optional[CombinedGrouping]) -> Dict[str, List[Any]]:
    """
    Merge the (possibly nested) combined time series into flat lists.

    Returns:
        {"data": every series of every group, "counts": counts per group},
        or an empty dict for no grouping
    """
    if grouping is None:
        return {}

    results = [result for result in grouping.leaves() if result is not None and result.data is not None]

    data: List[Any] = []
    for result in results:
        data.extend(result.data)

    return {
        "data": data,
        "counts": [result.counts for result in results],
    }


def compute_time_series_extents(flattened: Dict[str, List[Any]], data_key: str) -> Extents:
    """
    Value and count extents of flattened time series.

    Args:
        flattened: Output of flatten_combined_time_series
        data_key: Field of the active metric

    Returns:
        {data_key: [min, max], "count": [min, max]}, keys omitted when empty
    """
    extents: Extents = {}

    if flattened.get("data"):
        value_extent = multi_extent(flattened["data"], data_key)
        if value_extent is not None:
            extents[data_key] = value_extent

    if flattened.get("counts"):
        count_extent = multi_extent(flattened["counts"], "count")
        if count_extent is not None:
            extents["count"] = count_extent

    return extents


def flatten_combined_hourly(grouping: Optional[CombinedGrouping]) -> List[HourlyEntry]:
    """Merge the (possibly nested) combined hourly lists into one list."""
    if grouping is None:
        return []

    entries: List[HourlyEntry] = []
    for result in grouping.leaves():
        entries.extend(result or [])
    return entries


def compute_combined_time_series_extents(grouping: Optional[CombinedGrouping], data_key: str) -> Extents:
    """Shared extents of all combined time series."""
    return compute_time_series_extents(flatten_combined_time_series(grouping), data_key)


def compute_combined_hourly_extents(grouping: Optional[CombinedGrouping], data_key: str) -> Extents:
    """Shared extents of all combined hourly data."""
    return compute_hourly_extents(flatten_combined_hourly(grouping), data_key)
