"""
NetPerfCompare - Composite Identity

Builds the keys under which combined (joined) records are stored.
Ids are always passed in canonical dimension order:
location, client ISP, transit ISP.
"""

from typing import Any


KEY_SEPARATOR = "_"
ESCAPE_CHAR = "\\"


def _escape_id(entity_id: Any) -> str:
    """
    Stringify an id so that it cannot contain an unescaped separator.

    Numeric and string forms of the same id (1 and "1") encode identically.
    """
    text = str(entity_id)
    return text.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2).replace(KEY_SEPARATOR, ESCAPE_CHAR + KEY_SEPARATOR)


def make_composite_id(*entity_ids: Any) -> str:
    """
    Join entity ids into a composite key.

    Escaping keeps the encoding injective, e.g. ("a_b", "c") and
    ("a", "b_c") produce different keys.

    Args:
        *entity_ids: Two or three ids in canonical dimension order

    Returns:
        Composite key string
    """
    return KEY_SEPARATOR.join(_escape_id(entity_id) for entity_id in entity_ids)


def make_location_client_isp_id(location_id: Any, client_isp_id: Any) -> str:
    """Key of a location + client ISP record."""
    return make_composite_id(location_id, client_isp_id)


def make_location_transit_isp_id(location_id: Any, transit_isp_id: Any) -> str:
    """Key of a location + transit ISP record."""
    return make_composite_id(location_id, transit_isp_id)


def make_client_isp_transit_isp_id(client_isp_id: Any, transit_isp_id: Any) -> str:
    """Key of a client ISP + transit ISP record."""
    return make_composite_id(client_isp_id, transit_isp_id)


def make_location_client_isp_transit_isp_id(
    location_id: Any,
    client_isp_id: Any,
    transit_isp_id: Any
) -> str:
    """Key of a location + client ISP + transit ISP record."""
    return make_composite_id(location_id, client_isp_id, transit_isp_id)
