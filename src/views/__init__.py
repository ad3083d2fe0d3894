"""
NetPerfCompare - Views Package

Selection resolution and memoized selectors for the compare page.
"""

from src.views.compare_page import ComparePageSelectors
from src.views.selection import (
    extract_facet_type,
    extract_metric,
    get_filter_types,
    get_time_aggregation,
    top_filter
)

__all__ = [
    "ComparePageSelectors",
    "extract_facet_type",
    "extract_metric",
    "get_filter_types",
    "get_time_aggregation",
    "top_filter"
]
