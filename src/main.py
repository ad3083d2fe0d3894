"""
NetPerfCompare - Main Entry Point

Runs the compare pipeline over a JSON snapshot of the entity stores and
writes the chart-ready aggregates as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.aggregators.cross_product import BREAKDOWN_OPTIONS
from src.models.dimensions import FACET_TYPES, METRICS
from src.models.state import CompareQuery, CompareState
from src.utils.config import Config
from src.utils.logging_config import setup_logging
from src.utils.performance import format_perf_report, timed
from src.views.compare_page import ComparePageSelectors


logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        description="NetPerfCompare - Compare internet performance across locations and ISPs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two locations, one client ISP
  python -m src.main --state snapshot.json --facet-type location --facet-ids 1,2 --filter1-ids 10

  # All three dimensions, broken down by transit ISP
  python -m src.main --state snapshot.json --facet-type location --facet-ids 1 \\
      --filter1-ids 10,20 --filter2-ids 100 --breakdown-by filter2 --metric rtt
        """
    )

    parser.add_argument(
        "--state",
        type=Path,
        required=True,
        help="JSON snapshot of the entity and combined stores"
    )
    parser.add_argument(
        "--facet-type",
        default=FACET_TYPES[0].value,
        help=f"Facet dimension ({', '.join(f.value for f in FACET_TYPES)})"
    )
    parser.add_argument("--facet-ids", type=_id_list, default=None, help="Comma separated facet item ids")
    parser.add_argument("--filter1-ids", type=_id_list, default=None, help="Comma separated filter 1 ids")
    parser.add_argument("--filter2-ids", type=_id_list, default=None, help="Comma separated filter 2 ids")
    parser.add_argument("--breakdown-by", choices=BREAKDOWN_OPTIONS, default=None, help="Filter used for breakdown")
    parser.add_argument(
        "--metric",
        default=METRICS[0].value,
        help=f"Metric to chart ({', '.join(m.value for m in METRICS)})"
    )
    parser.add_argument("--start", type=str, help="Start date (ISO 8601)")
    parser.add_argument("--end", type=str, help="End date (ISO 8601)")
    parser.add_argument("--time-aggregation", choices=["daily", "hourly"], default=None)

    # Output options
    parser.add_argument("--output", type=Path, help="Write JSON to this file instead of stdout")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")

    return parser.parse_args(argv)


def _id_list(value: str) -> List[str]:
    """Parse a comma separated id list, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def load_state(path: Path) -> CompareState:
    """
    Load a store snapshot.

    Raises:
        FileNotFoundError: If the snapshot does not exist
        ValueError: If the snapshot is not a JSON object
    """
    with path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)

    if not isinstance(raw, dict):
        raise ValueError(f"Snapshot {path} must contain a JSON object")

    return CompareState.from_dict(raw)


def _to_json(grouping: Any) -> Any:
    return grouping.to_dict() if grouping is not None else None


@timed("main.run_pipeline")
def run_pipeline(selectors: ComparePageSelectors, state: CompareState, query: CompareQuery) -> Dict[str, Any]:
    """
    Compute every compare page aggregate.

    Returns:
        JSON-serializable dictionary
    """
    type_and_ids = selectors.get_combined_type_and_ids(state, query)
    facet_time_series = selectors.get_facet_item_time_series(state, query)
    facet_hourly = selectors.get_facet_item_hourly(state, query) or []

    return {
        "facetType": selectors.get_facet_type(state, query).value,
        "filterTypes": [t.value for t in selectors.get_filter_types(state, query)],
        "viewMetric": selectors.get_view_metric(state, query).value,
        "timeAggregation": selectors.get_time_aggregation(state, query),
        "combinedType": type_and_ids.combined_type,
        "combinedIds": [combined_id.to_dict() for combined_id in type_and_ids.combined_ids],
        "facetItemTimeSeries": facet_time_series.combined.to_dict() if facet_time_series else None,
        "facetItemHourly": [entry.to_dict() for entry in facet_hourly],
        "facetItemHourlyExtents": selectors.get_facet_item_hourly_extents(state, query),
        "combinedTimeSeries": _to_json(selectors.get_combined_time_series(state, query)),
        "combinedTimeSeriesExtents": selectors.get_combined_time_series_extents(state, query),
        "combinedHourly": _to_json(selectors.get_combined_hourly(state, query)),
        "combinedHourlyExtents": selectors.get_combined_hourly_extents(state, query),
        "topFilter1": selectors.get_top_filter1(state, query).data,
        "topFilter2": selectors.get_top_filter2(state, query).data,
        "colors": {str(k): v for k, v in selectors.get_colors(state, query).items()},
    }


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)
    config = Config()

    log_level = logging.DEBUG if args.debug else config.log_level
    setup_logging(level=log_level, log_dir=None if args.no_log_file else config.log_dir)

    logger.info("[...] NetPerfCompare starting")

    try:
        state = load_state(args.state)
    except (OSError, ValueError) as error:
        logger.error(f"[ERROR] Could not load snapshot {args.state}: {error}")
        return 1

    query = CompareQuery(
        facet_type=args.facet_type,
        facet_item_ids=args.facet_ids,
        filter1_ids=args.filter1_ids,
        filter2_ids=args.filter2_ids,
        breakdown_by=args.breakdown_by,
        view_metric=args.metric,
        time_aggregation=args.time_aggregation,
        start_date=args.start,
        end_date=args.end
    )

    selectors = ComparePageSelectors(config=config.selection)
    result = run_pipeline(selectors, state, query)

    output = json.dumps(result, indent=2, default=str)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info(f"[OK] Wrote {args.output}")
    else:
        sys.stdout.write(output + "\n")

    logger.debug(format_perf_report(selectors.cache.metrics))
    logger.info(f"[OK] {len(result['combinedIds'])} combined ids for {result['combinedType']!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
