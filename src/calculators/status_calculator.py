"""
NetPerfCompare - Status Calculator

Reduces the fetch status of one or more resources to a single status.
"""

import logging
from typing import Any, Iterable, Union

from src.models.facts import FetchableResource, Status


logger = logging.getLogger(__name__)


# Highest precedence first
STATUS_PRECEDENCE = (
    Status.ERROR,
    Status.FETCHING,
    Status.NOT_FETCHED,
)


StatusInput = Union[None, Status, str, FetchableResource, Iterable[Any]]


def resource_status(resource: Any) -> Status:
    """
    Get the status of a single resource or status value.

    Args:
        resource: FetchableResource, Status, raw status string or None

    Returns:
        Status (None is treated as not fetched)
    """
    if resource is None:
        return Status.NOT_FETCHED
    if isinstance(resource, FetchableResource):
        return resource.status
    return Status.parse(resource)


def combine_status(value: StatusInput) -> Status:
    """
    Combine statuses with precedence error > fetching > not-fetched > success.

    Args:
        value: A single resource/status, or an iterable of them

    Returns:
        Summary status; an empty iterable is a success
    """
    if value is None or isinstance(value, (Status, str, FetchableResource)):
        return resource_status(value)

    statuses = {resource_status(item) for item in value}
    for status in STATUS_PRECEDENCE:
        if status in statuses:
            return status
    return Status.SUCCESS
