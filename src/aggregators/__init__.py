"""
NetPerfCompare - Aggregators Package

Composite keys, cross product expansion, grouping and extents.
"""

from src.aggregators.identity import (
    make_composite_id,
    make_location_client_isp_id,
    make_location_transit_isp_id,
    make_client_isp_transit_isp_id,
    make_location_client_isp_transit_isp_id
)
from src.aggregators.cross_product import get_combined_type_and_ids
from src.aggregators.combined_aggregator import (
    get_combined_items,
    combine_data,
    combine_time_series,
    combine_hourly,
    combine_facet_item_time_series,
    combine_facet_item_hourly
)
from src.aggregators.extents import (
    flatten_combined_time_series,
    flatten_combined_hourly,
    compute_time_series_extents,
    compute_combined_time_series_extents,
    compute_combined_hourly_extents
)

__all__ = [
    "make_composite_id",
    "make_location_client_isp_id",
    "make_location_transit_isp_id",
    "make_client_isp_transit_isp_id",
    "make_location_client_isp_transit_isp_id",
    "get_combined_type_and_ids",
    "get_combined_items",
    "combine_data",
    "combine_time_series",
    "combine_hourly",
    "combine_facet_item_time_series",
    "combine_facet_item_hourly",
    "flatten_combined_time_series",
    "flatten_combined_hourly",
    "compute_time_series_extents",
    "compute_combined_time_series_extents",
    "compute_combined_hourly_extents"
]
