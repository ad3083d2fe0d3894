"""
NetPerfCompare - Cross Product Expander

Works out which dimensions are active for the current facet/filter
selection and enumerates every combination of their selected ids.

Possible combined types:
- clientIsp-transitIsp
- location-clientIsp
- location-clientIsp-transitIsp
- location-transitIsp
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from src.aggregators.identity import (
    make_client_isp_transit_isp_id,
    make_location_client_isp_id,
    make_location_client_isp_transit_isp_id,
    make_location_transit_isp_id
)
from src.models.dimensions import DIMENSION_PRIORITY, CombinedType, FacetType
from src.models.facts import CombinedId, CombinedTypeAndIds


logger = logging.getLogger(__name__)


ROLE_FACET = "facet"
ROLE_FILTER1 = "filter1"
ROLE_FILTER2 = "filter2"

BREAKDOWN_NONE = "none"
BREAKDOWN_OPTIONS = (ROLE_FILTER1, ROLE_FILTER2, BREAKDOWN_NONE)

# Composite key builders for the two-dimension combined types
PAIR_KEY_BUILDERS: Dict[CombinedType, Callable[[Any, Any], str]] = {
    CombinedType.LOCATION_CLIENT_ISP: make_location_client_isp_id,
    CombinedType.LOCATION_TRANSIT_ISP: make_location_transit_isp_id,
    CombinedType.CLIENT_ISP_TRANSIT_ISP: make_client_isp_transit_isp_id,
}


@dataclass
class ActiveDimension:
    """
    A dimension taking part in the combination.

    breakdown_by is None for the facet dimension, and True/False for a
    filter dimension depending on whether it was picked for breakdown.
    """
    value: str
    role: str
    ids: Sequence[Any] = field(default_factory=list)
    breakdown_by: Optional[bool] = None

    @property
    def sort(self) -> int:
        return DIMENSION_PRIORITY.get(self.value, len(DIMENSION_PRIORITY))

    @property
    def is_facet(self) -> bool:
        return self.role == ROLE_FACET


def get_active_dimensions(
    facet_type: FacetType,
    facet_item_ids: Optional[Sequence[Any]],
    filter_types: Sequence[FacetType],
    filter1_ids: Optional[Sequence[Any]],
    filter2_ids: Optional[Sequence[Any]],
    breakdown_by: Optional[str]
) -> List[ActiveDimension]:
    """
    Collect the active dimensions sorted in canonical order.

    The facet is always active, a filter only when it has ids.
    """
    dimensions = [ActiveDimension(
        value=facet_type.value,
        role=ROLE_FACET,
        ids=list(facet_item_ids or [])
    )]

    for index, (role, ids) in enumerate(((ROLE_FILTER1, filter1_ids), (ROLE_FILTER2, filter2_ids))):
        if not ids or index >= len(filter_types):
            continue
        dimensions.append(ActiveDimension(
            value=filter_types[index].value,
            role=role,
            ids=list(ids),
            breakdown_by=breakdown_by == role
        ))

    # sorted() is stable, so equal priorities keep role order
    return sorted(dimensions, key=lambda dimension: dimension.sort)


def _pair_ids(
    first: ActiveDimension,
    second: ActiveDimension,
    make_id: Callable[[Any, Any], str]
) -> List[CombinedId]:
    """Cross product of two dimensions; first is the outer loop."""
    combined_ids = []
    for first_id in first.ids:
        for second_id in second.ids:
            combined_ids.append(CombinedId(
                facet_item_id=first_id if first.is_facet else second_id,
                filter_item_id=first_id if not first.is_facet else second_id,
                combined=make_id(first_id, second_id)
            ))
    return combined_ids


def _triple_ids(
    locations: ActiveDimension,
    client_isps: ActiveDimension,
    transit_isps: ActiveDimension
) -> List[CombinedId]:
    """
    Cross product of all three dimensions.

    breakdown_by_item_id: first dimension (in canonical order) whose
    breakdown flag is truthy, falling through to transit ISP.
    filter_item_id: first dimension whose flag is exactly False, falling
    through to transit ISP. The facet's None flag matches neither.
    """
    combined_ids = []
    for location_id in locations.ids:
        for client_isp_id in client_isps.ids:
            for transit_isp_id in transit_isps.ids:
                if locations.is_facet:
                    facet_item_id = location_id
                elif client_isps.is_facet:
                    facet_item_id = client_isp_id
                else:
                    facet_item_id = transit_isp_id

                if locations.breakdown_by:
                    breakdown_by_item_id = location_id
                elif client_isps.breakdown_by:
                    breakdown_by_item_id = client_isp_id
                else:
                    breakdown_by_item_id = transit_isp_id

                if locations.breakdown_by is False:
                    filter_item_id = location_id
                elif client_isps.breakdown_by is False:
                    filter_item_id = client_isp_id
                else:
                    filter_item_id = transit_isp_id

                combined_ids.append(CombinedId(
                    facet_item_id=facet_item_id,
                    breakdown_by_item_id=breakdown_by_item_id,
                    filter_item_id=filter_item_id,
                    combined=make_location_client_isp_transit_isp_id(
                        location_id, client_isp_id, transit_isp_id
                    )
                ))
    return combined_ids


def get_combined_type_and_ids(
    facet_type: FacetType,
    facet_item_ids: Optional[Sequence[Any]],
    filter_types: Sequence[FacetType],
    filter1_ids: Optional[Sequence[Any]],
    filter2_ids: Optional[Sequence[Any]],
    breakdown_by: Optional[str] = None
) -> CombinedTypeAndIds:
    """
    Compute the combined type and the ids of every combined item.

    Args:
        facet_type: Active facet type
        facet_item_ids: Selected facet item ids (may be empty)
        filter_types: [filter1 type, filter2 type] for the facet type
        filter1_ids: Selected filter 1 ids
        filter2_ids: Selected filter 2 ids
        breakdown_by: "filter1", "filter2", "none" or None

    Returns:
        CombinedTypeAndIds; combined_ids is empty unless two or three
        dimensions are active
    """
    dimensions = get_active_dimensions(
        facet_type, facet_item_ids, filter_types, filter1_ids, filter2_ids, breakdown_by
    )

    # sorted so the type is the same no matter which role holds a dimension
    combined_type = "-".join(dimension.value for dimension in dimensions)
    known_type = CombinedType.from_value(combined_type)

    combined_ids: List[CombinedId] = []
    if known_type in PAIR_KEY_BUILDERS:
        combined_ids = _pair_ids(dimensions[0], dimensions[1], PAIR_KEY_BUILDERS[known_type])
    elif known_type is CombinedType.LOCATION_CLIENT_ISP_TRANSIT_ISP:
        combined_ids = _triple_ids(dimensions[0], dimensions[1], dimensions[2])

    logger.debug(f"Combined type {combined_type!r} expanded to {len(combined_ids)} ids")
    return CombinedTypeAndIds(combined_type=combined_type, combined_ids=combined_ids)
