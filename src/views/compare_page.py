"""
NetPerfCompare - Compare Page Selectors

Memoized selectors deriving everything the compare page charts need
from the store snapshot (CompareState) and the selection (CompareQuery).

Each ComparePageSelectors instance owns its SelectorCache, so a derived
value is only recomputed when one of its declared inputs changes.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from src.aggregators.combined_aggregator import (
    combine_data,
    combine_facet_item_hourly,
    combine_facet_item_time_series,
    combine_hourly,
    combine_time_series,
    get_combined_items
)
from src.aggregators.cross_product import get_combined_type_and_ids
from src.aggregators.extents import (
    compute_combined_hourly_extents,
    compute_combined_time_series_extents
)
from src.cache.selector_cache import SelectorCache, create_selector
from src.calculators.series_calculator import compute_hourly_extents
from src.models.dimensions import CombinedType, Entity, FacetType, FacetTypeValue
from src.models.state import CompareQuery, CompareState
from src.utils.colors import colors_for
from src.utils.config import SelectionConfig
from src.views.selection import (
    extract_facet_type,
    extract_metric,
    get_filter_types,
    get_time_aggregation,
    top_filter
)


logger = logging.getLogger(__name__)


def _items_for_type(
    facet_type: Optional[FacetType],
    ids: Optional[Sequence[Any]],
    locations: Dict[Any, Entity],
    client_isps: Dict[Any, Entity],
    transit_isps: Dict[Any, Entity]
) -> List[Entity]:
    """Inflate ids into entities from the store of the given type."""
    if facet_type is None or not ids:
        return []

    stores = {
        FacetTypeValue.LOCATION.value: locations,
        FacetTypeValue.CLIENT_ISP.value: client_isps,
        FacetTypeValue.TRANSIT_ISP.value: transit_isps,
    }
    items = stores.get(facet_type.value)
    if items is None:
        return []

    return [items[entity_id] for entity_id in ids if items.get(entity_id) is not None]


def _infos(items: List[Entity]) -> List[Any]:
    """info data of entities, skipping those not fetched yet."""
    return [item.info.data for item in items if item.info is not None and item.info.data is not None]


def _concat_ids(*id_lists: Optional[Sequence[Any]]) -> List[Any]:
    """Concatenate id lists in order, skipping missing lists."""
    combined: List[Any] = []
    for ids in id_lists:
        if ids is not None:
            combined.extend(ids)
    return combined


class ComparePageSelectors:
    """
    Selector set for the compare page.

    Input selectors read straight from state/query; derived selectors are
    MemoizedSelector instances sharing this object's cache.
    """

    def __init__(
        self,
        config: Optional[SelectionConfig] = None,
        cache: Optional[SelectorCache] = None
    ):
        """
        Initialize the selectors.

        Args:
            config: Selection configuration (defaults used if None)
            cache: Selector cache (a new one is created if None)
        """
        self.config = config or SelectionConfig()
        self.cache = cache or SelectorCache()
        self._build_selectors()
        logger.debug("ComparePageSelectors initialized")

    # ----------------------
    # Input selectors
    # ----------------------

    def get_facet_type(self, state: CompareState, query: CompareQuery) -> FacetType:
        return extract_facet_type(query.facet_type, self.config.development)

    def get_view_metric(self, state: CompareState, query: CompareQuery):
        return extract_metric(query.view_metric, self.config.development)

    def get_time_aggregation(self, state: CompareState, query: CompareQuery) -> str:
        return get_time_aggregation(
            query.time_aggregation, query.start_date, query.end_date, self.config.hourly_max_days
        )

    @staticmethod
    def get_facet_item_ids(state: CompareState, query: CompareQuery):
        return query.facet_item_ids

    @staticmethod
    def get_filter1_ids(state: CompareState, query: CompareQuery):
        return query.filter1_ids

    @staticmethod
    def get_filter2_ids(state: CompareState, query: CompareQuery):
        return query.filter2_ids

    @staticmethod
    def get_breakdown_by(state: CompareState, query: CompareQuery):
        return query.breakdown_by

    @staticmethod
    def get_locations(state: CompareState, query: CompareQuery):
        return state.locations

    @staticmethod
    def get_client_isps(state: CompareState, query: CompareQuery):
        return state.client_isps

    @staticmethod
    def get_transit_isps(state: CompareState, query: CompareQuery):
        return state.transit_isps

    @staticmethod
    def get_top(state: CompareState, query: CompareQuery):
        return state.top

    @staticmethod
    def get_location_client_isps(state: CompareState, query: CompareQuery):
        return state.location_client_isps

    @staticmethod
    def get_location_transit_isps(state: CompareState, query: CompareQuery):
        return state.location_transit_isps

    @staticmethod
    def get_client_isp_transit_isps(state: CompareState, query: CompareQuery):
        return state.client_isp_transit_isps

    @staticmethod
    def get_location_client_isp_transit_isps(state: CompareState, query: CompareQuery):
        return state.location_client_isp_transit_isps

    # ----------------------
    # Derived selectors
    # ----------------------

    def _build_selectors(self) -> None:
        """Wire up the memoized selectors."""
        cache = self.cache
        limit = self.config.top_filter_limit
        stores = (self.get_locations, self.get_client_isps, self.get_transit_isps)

        self.get_filter_types = create_selector(
            cache, "filter_types", self.get_facet_type,
            combiner=get_filter_types
        )

        self.get_facet_items = create_selector(
            cache, "facet_items", self.get_facet_type, self.get_facet_item_ids, *stores,
            combiner=_items_for_type
        )
        self.get_facet_item_infos = create_selector(
            cache, "facet_item_infos", self.get_facet_items,
            combiner=_infos
        )

        self.get_filter1_items = create_selector(
            cache, "filter1_items", self.get_filter_types, self.get_filter1_ids, *stores,
            combiner=lambda types, ids, *s: _items_for_type(types[0] if types else None, ids, *s)
        )
        self.get_filter1_infos = create_selector(
            cache, "filter1_infos", self.get_filter1_items,
            combiner=_infos
        )

        self.get_filter2_items = create_selector(
            cache, "filter2_items", self.get_filter_types, self.get_filter2_ids, *stores,
            combiner=lambda types, ids, *s: _items_for_type(types[1] if len(types) > 1 else None, ids, *s)
        )
        self.get_filter2_infos = create_selector(
            cache, "filter2_infos", self.get_filter2_items,
            combiner=_infos
        )

        self.get_top_filter1 = create_selector(
            cache, "top_filter1", self.get_top, self.get_facet_type, self.get_filter_types, self.get_filter1_ids,
            combiner=lambda top, facet_type, types, ids: top_filter(
                top, facet_type, types[0] if types else None, ids, limit
            )
        )
        self.get_top_filter2 = create_selector(
            cache, "top_filter2", self.get_top, self.get_facet_type, self.get_filter_types, self.get_filter2_ids,
            combiner=lambda top, facet_type, types, ids: top_filter(
                top, facet_type, types[1] if len(types) > 1 else None, ids, limit
            )
        )

        self.get_facet_item_time_series = create_selector(
            cache, "facet_item_time_series", self.get_facet_items,
            combiner=combine_facet_item_time_series
        )
        self.get_facet_item_hourly = create_selector(
            cache, "facet_item_hourly", self.get_facet_items, self.get_view_metric,
            combiner=combine_facet_item_hourly
        )
        self.get_facet_item_hourly_extents = create_selector(
            cache, "facet_item_hourly_extents", self.get_facet_item_hourly, self.get_view_metric,
            combiner=lambda hourly, metric: compute_hourly_extents(hourly, metric.data_key)
        )

        self.get_combined_type_and_ids = create_selector(
            cache, "combined_type_and_ids",
            self.get_facet_type, self.get_facet_item_ids, self.get_filter_types,
            self.get_filter1_ids, self.get_filter2_ids, self.get_breakdown_by,
            combiner=get_combined_type_and_ids
        )

        self.get_combined_sources = create_selector(
            cache, "combined_sources",
            self.get_location_client_isps, self.get_location_transit_isps,
            self.get_client_isp_transit_isps, self.get_location_client_isp_transit_isps,
            combiner=lambda lci, lti, cti, lcti: {
                CombinedType.LOCATION_CLIENT_ISP.value: lci,
                CombinedType.LOCATION_TRANSIT_ISP.value: lti,
                CombinedType.CLIENT_ISP_TRANSIT_ISP.value: cti,
                CombinedType.LOCATION_CLIENT_ISP_TRANSIT_ISP.value: lcti,
            }
        )
        self.get_combined_items = create_selector(
            cache, "combined_items", self.get_combined_type_and_ids, self.get_combined_sources,
            combiner=get_combined_items
        )

        self.get_combined_time_series = create_selector(
            cache, "combined_time_series", self.get_combined_type_and_ids, self.get_combined_items, self.get_view_metric,
            combiner=lambda type_and_ids, items, metric: combine_data(
                combine_time_series, type_and_ids.combined_type, items, metric
            )
        )
        self.get_combined_time_series_extents = create_selector(
            cache, "combined_time_series_extents", self.get_combined_time_series, self.get_view_metric,
            combiner=lambda grouping, metric: compute_combined_time_series_extents(grouping, metric.data_key)
        )

        self.get_combined_hourly = create_selector(
            cache, "combined_hourly", self.get_combined_type_and_ids, self.get_combined_items, self.get_view_metric,
            combiner=lambda type_and_ids, items, metric: combine_data(
                combine_hourly, type_and_ids.combined_type, items, metric
            )
        )
        self.get_combined_hourly_extents = create_selector(
            cache, "combined_hourly_extents", self.get_combined_hourly, self.get_view_metric,
            combiner=lambda grouping, metric: compute_combined_hourly_extents(grouping, metric.data_key)
        )

        # duplicates are left for colors_for to resolve
        self.get_colors = create_selector(
            cache, "colors", self.get_facet_item_ids, self.get_filter1_ids, self.get_filter2_ids,
            combiner=lambda facet_ids, filter1_ids, filter2_ids: colors_for(
                _concat_ids(facet_ids, filter1_ids, filter2_ids)
            )
        )
