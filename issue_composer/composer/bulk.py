from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.errors import NoItemsToCompose
from .custom_fields import CustomFieldSet
from .merge import BasePayload, compose

logger = logging.getLogger(__name__)

BULK_COLLECTION_KEY = "issueUpdates"


def _is_blank(payload: Optional[BasePayload]) -> bool:
    if payload is None:
        return True
    if isinstance(payload, Mapping):
        return not payload
    return not payload.to_map()


@dataclass
class BulkItem:
    """One issue of a bulk create request."""
    payload: Optional[BasePayload]
    custom_fields: Optional[CustomFieldSet] = None


# PUBLIC_INTERFACE
def compose_many(items: Sequence[BulkItem]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Compose every item and wrap the bodies for the bulk create endpoint.

    Items with a missing or empty payload are dropped; the rest keep their
    relative order.
    Raises NoItemsToCompose when ``items`` is empty.
    """
    if not items:
        raise NoItemsToCompose()

    bodies: List[Dict[str, Any]] = []
    for position, item in enumerate(items):
        if item is None or _is_blank(item.payload):
            logger.debug("Skipping bulk item %d without payload", position)
            continue
        bodies.append(compose(item.payload, item.custom_fields))

    return {BULK_COLLECTION_KEY: bodies}
