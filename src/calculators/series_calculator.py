"""
NetPerfCompare - Series Calculator

Chart-oriented helpers over time series and hourly records:
extents, per-date sample counts, hourly wrangling and default time
aggregation.
"""

import logging
import statistics
from collections import defaultdict
from datetime import date, datetime
from numbers import Number
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from src.models.dimensions import Metric
from src.models.facts import CombinedTimeSeries, Extents, HourlyEntry


logger = logging.getLogger(__name__)


TIME_AGGREGATION_DAILY = "daily"
TIME_AGGREGATION_HOURLY = "hourly"
TIME_AGGREGATIONS = (TIME_AGGREGATION_DAILY, TIME_AGGREGATION_HOURLY)

HOURS_PER_DAY = 24

Accessor = Union[str, Callable[[Any], Any]]


def _make_accessor(accessor: Accessor) -> Callable[[Any], Any]:
    """Turn a field name into a getter; callables are returned unchanged."""
    if callable(accessor):
        return accessor
    return lambda d: d.get(accessor) if isinstance(d, dict) else None


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool) and value == value


def multi_extent(
    series_list: Optional[Iterable[Any]],
    accessor: Accessor,
    results_accessor: Optional[Callable[[Any], Any]] = None
) -> Optional[List[float]]:
    """
    Compute [min, max] across several series.

    Args:
        series_list: Iterable of series (or objects holding a series)
        accessor: Field name or getter for the value of each record
        results_accessor: Optional getter for the records of each series

    Returns:
        [min, max] or None if no numeric value was found
    """
    if not series_list:
        return None

    get_value = _make_accessor(accessor)
    minimum = None
    maximum = None

    for series in series_list:
        records = results_accessor(series) if results_accessor else series
        for record in records or []:
            value = get_value(record)
            if not _is_number(value):
                continue
            if minimum is None or value < minimum:
                minimum = value
            if maximum is None or value > maximum:
                maximum = value

    if minimum is None:
        return None
    return [minimum, maximum]


def compute_time_series_counts(combined: CombinedTimeSeries) -> List[Dict[str, Any]]:
    """
    Sum sample counts per date across the series of a combined time series.

    Args:
        combined: Combined time series whose data holds one list per entity

    Returns:
        List of {"date", "count"} sorted by date
    """
    totals: Dict[Any, float] = defaultdict(float)

    for series in combined.data:
        for record in series or []:
            record_date = record.get("date")
            if record_date is None:
                continue
            count = record.get("count")
            totals[record_date] += count if _is_number(count) else 0

    return [
        {"date": record_date, "count": int(total) if float(total).is_integer() else total}
        for record_date, total in sorted(totals.items(), key=lambda item: str(item[0]))
    ]


def wrangle_hourly(hourly_data: Optional[List[dict]], metric: Metric) -> Optional[Dict[str, List[dict]]]:
    """
    Shape raw hourly records for an hour-of-day chart.

    Args:
        hourly_data: Raw records with "hour" (0-23), optional "date" and "count"
        metric: Metric whose data_key is charted

    Returns:
        {"points": per-record points, "averages": one entry per hour of day},
        or None if the data has not been fetched
    """
    if hourly_data is None:
        return None

    data_key = metric.data_key
    points = []
    values_by_hour: Dict[int, List[float]] = defaultdict(list)
    counts_by_hour: Dict[int, float] = defaultdict(float)

    for record in hourly_data:
        hour = record.get("hour")
        if not isinstance(hour, int) or not 0 <= hour < HOURS_PER_DAY:
            continue
        value = record.get(data_key)
        points.append({"hour": hour, "date": record.get("date"), data_key: value})
        if _is_number(value):
            values_by_hour[hour].append(value)
        count = record.get("count")
        if _is_number(count):
            counts_by_hour[hour] += count

    averages = [
        {
            "hour": hour,
            data_key: statistics.mean(values_by_hour[hour]) if values_by_hour[hour] else None,
            "count": counts_by_hour.get(hour, 0)
        }
        for hour in range(HOURS_PER_DAY)
    ]

    return {"points": points, "averages": averages}


def compute_hourly_extents(entries: Optional[Iterable[Optional[HourlyEntry]]], data_key: str) -> Extents:
    """
    Shared extents across hourly entries.

    Args:
        entries: Hourly entries (None entries and missing data are skipped)
        data_key: Field of the active metric

    Returns:
        {data_key: [min, max], "count": [min, max]}, keys omitted when empty
    """
    series = [entry.data for entry in entries or [] if entry is not None and entry.data]
    extents: Extents = {}

    value_extent = multi_extent(series, data_key)
    if value_extent is not None:
        extents[data_key] = value_extent

    count_extent = multi_extent(series, "count")
    if count_extent is not None:
        extents["count"] = count_extent

    return extents


def _parse_date(value: Any) -> Optional[datetime]:
    """Parse a date, datetime or ISO 8601 string; None if not parseable."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
        except ValueError:
            logger.debug(f"Unparseable date {value!r}")
    return None


def time_aggregation_from_dates(start_date: Any, end_date: Any, hourly_max_days: int = 2) -> str:
    """
    Pick the default time aggregation for a date range.

    Args:
        start_date: Range start (date, datetime or ISO string)
        end_date: Range end (date, datetime or ISO string)
        hourly_max_days: Longest span in days still shown hourly

    Returns:
        "hourly" for short ranges, otherwise "daily"
    """
    start = _parse_date(start_date)
    end = _parse_date(end_date)

    if start is None or end is None:
        return TIME_AGGREGATION_DAILY

    span_days = abs((end - start).total_seconds()) / 86400
    if span_days <= hourly_max_days:
        return TIME_AGGREGATION_HOURLY
    return TIME_AGGREGATION_DAILY
