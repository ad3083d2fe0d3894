"""
NetPerfCompare - Selection Resolver

Resolves raw query values (facet type, metric, time aggregation) against
the catalogs, and works out which dimensions serve as filter 1 and
filter 2 for a facet type.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from src.calculators.series_calculator import TIME_AGGREGATIONS, time_aggregation_from_dates
from src.models.dimensions import FACET_TYPES, METRICS, FacetType, FacetTypeValue, Metric
from src.models.facts import Status, TopFilterResult
from src.calculators.status_calculator import combine_status


logger = logging.getLogger(__name__)


# facet type -> [filter1 type, filter2 type]
FILTER_TYPE_VALUES: Dict[str, List[str]] = {
    FacetTypeValue.LOCATION.value: [FacetTypeValue.CLIENT_ISP.value, FacetTypeValue.TRANSIT_ISP.value],
    FacetTypeValue.CLIENT_ISP.value: [FacetTypeValue.LOCATION.value, FacetTypeValue.TRANSIT_ISP.value],
    FacetTypeValue.TRANSIT_ISP.value: [FacetTypeValue.LOCATION.value, FacetTypeValue.CLIENT_ISP.value],
}

TOP_KEY_SUFFIXES: Dict[str, str] = {
    FacetTypeValue.LOCATION.value: "ForLocations",
    FacetTypeValue.CLIENT_ISP.value: "ForClientIsps",
    FacetTypeValue.TRANSIT_ISP.value: "ForTransitIsps",
}


def extract_metric(metric_value: Optional[str], development: bool = False) -> Metric:
    """
    Find a metric by value.

    Args:
        metric_value: Value of the metric to search for
        development: Log a warning when falling back

    Returns:
        The matching metric, or the first (download) metric if not found
    """
    for metric in METRICS:
        if metric.value == metric_value:
            return metric

    if development:
        logger.warning(f"[WARN] Metric not found {metric_value!r} -- using {METRICS[0].value}")
    return METRICS[0]


def extract_facet_type(facet_type_value: Optional[str], development: bool = False) -> FacetType:
    """
    Find a facet type by value.

    Args:
        facet_type_value: Value of the facet type to search for
        development: Log a warning when falling back

    Returns:
        The matching facet type, or the first (location) facet type if not found
    """
    for facet_type in FACET_TYPES:
        if facet_type.value == facet_type_value:
            return facet_type

    if development:
        logger.warning(f"[WARN] Facet type not found {facet_type_value!r} -- using {FACET_TYPES[0].value}")
    return FACET_TYPES[0]


def get_filter_types(facet_type: FacetType) -> List[FacetType]:
    """
    Tell which type is filter 1 and which one is filter 2.

    Args:
        facet_type: Active facet type

    Returns:
        [filter1 type, filter2 type]; empty for an unrecognized facet type
    """
    values = FILTER_TYPE_VALUES.get(facet_type.value)
    if values is None:
        return []
    return [extract_facet_type(value) for value in values]


def get_time_aggregation(
    time_aggregation: Optional[str],
    start_date: Any,
    end_date: Any,
    hourly_max_days: int = 2
) -> str:
    """
    Resolve the time aggregation, defaulting from the date range.

    Args:
        time_aggregation: Explicit aggregation from the query, if any
        start_date: Range start
        end_date: Range end
        hourly_max_days: Longest span still defaulting to hourly

    Returns:
        "daily" or "hourly"
    """
    if time_aggregation is None:
        return time_aggregation_from_dates(start_date, end_date, hourly_max_days)

    if time_aggregation not in TIME_AGGREGATIONS:
        logger.debug(f"Passing through unrecognized time aggregation {time_aggregation!r}")
    return time_aggregation


def top_key_from_types(facet_type: FacetType, filter_type: FacetType) -> str:
    """
    Key of the ranking store for a facet/filter type pair.

    e.g. facet location + filter clientIsp -> "clientIspsForLocations"
    """
    return f"{filter_type.store_key}{TOP_KEY_SUFFIXES.get(facet_type.value, '')}"


def top_filter(
    top_state: Dict[str, Any],
    facet_type: FacetType,
    filter_type: Optional[FacetType],
    filter_ids: Optional[Sequence[Any]] = None,
    limit: int = 20
) -> TopFilterResult:
    """
    Top N candidate entities for a filter, excluding those already selected.

    Args:
        top_state: Ranking store (key -> FetchableResource of ranked records)
        facet_type: Active facet type
        filter_type: Filter dimension type
        filter_ids: Ids already selected for the filter
        limit: Maximum number of candidates returned

    Returns:
        TopFilterResult with at most limit records
    """
    if filter_type is None:
        return TopFilterResult(data=[], status=Status.NOT_FETCHED)

    top_key = top_key_from_types(facet_type, filter_type)
    resource = top_state.get(top_key)

    top_items = (resource.data if resource is not None else None) or []
    selected = {str(filter_id) for filter_id in filter_ids or []}

    # remove already selected ones
    remaining = [item for item in top_items if str(item.get(filter_type.id_key)) not in selected]

    return TopFilterResult(data=remaining[:limit], status=combine_status(resource))
