"""
NetPerfCompare - Calculators Package

Status and series calculation modules.
"""

from src.calculators.status_calculator import combine_status, resource_status
from src.calculators.series_calculator import (
    multi_extent,
    compute_time_series_counts,
    wrangle_hourly,
    compute_hourly_extents,
    time_aggregation_from_dates,
    TIME_AGGREGATION_DAILY,
    TIME_AGGREGATION_HOURLY
)

__all__ = [
    "combine_status",
    "resource_status",
    "multi_extent",
    "compute_time_series_counts",
    "wrangle_hourly",
    "compute_hourly_extents",
    "time_aggregation_from_dates",
    "TIME_AGGREGATION_DAILY",
    "TIME_AGGREGATION_HOURLY"
]
