"""Merge typed issue payloads with custom fields and update operations.

The merge is key-wise and one level deep under ``fields`` and ``update``:
keys the base payload already carries survive unless a custom field (or an
operation list) with the same id is supplied, in which case the supplied
value replaces it. When neither custom fields nor operations are given, the
result is exactly the base payload's generic map.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Union, runtime_checkable

from ..core.errors import MissingIssuePayload, MissingTransitionIdentifier
from .custom_fields import CustomFieldSet
from .operations import UpdateOperations

logger = logging.getLogger(__name__)


@runtime_checkable
class SupportsToMap(Protocol):
    def to_map(self) -> Dict[str, Any]: ...


BasePayload = Union[SupportsToMap, Mapping[str, Any]]


def _as_map(base: BasePayload) -> Dict[str, Any]:
    if isinstance(base, Mapping):
        return copy.deepcopy(dict(base))
    return copy.deepcopy(base.to_map())


def _merge_section(body: Dict[str, Any], key: str, overrides: Dict[str, Any]) -> None:
    existing = body.get(key)
    section: Dict[str, Any] = dict(existing) if isinstance(existing, Mapping) else {}
    section.update(overrides)
    body[key] = section


def _overlay(
    body: Dict[str, Any],
    custom_fields: Optional[CustomFieldSet],
    operations: Optional[UpdateOperations],
) -> Dict[str, Any]:
    if custom_fields:
        _merge_section(body, "fields", custom_fields.encode())
    if operations:
        _merge_section(body, "update", operations.encode())
    return body


# PUBLIC_INTERFACE
def compose(
    base: Optional[BasePayload],
    custom_fields: Optional[CustomFieldSet] = None,
    operations: Optional[UpdateOperations] = None,
) -> Dict[str, Any]:
    """
    Build the request body for an issue create or edit.

    Custom field values are merged into ``fields`` and override base keys
    with the same id; operations are merged into a top level ``update`` map.
    Without a base payload the body holds only the custom fields and
    operations, e.g. ``{"update": {...}}`` for an operations-only edit.

    Raises:
        MissingIssuePayload: ``base`` is None and nothing else was supplied.
        FieldEncodingError: a custom field value could not be encoded.
    """
    if base is None:
        if not custom_fields and not operations:
            raise MissingIssuePayload()
        base = {}

    body = _overlay(_as_map(base), custom_fields, operations)
    logger.debug(
        "Composed issue body: custom_fields=%d operations=%d keys=%s",
        len(custom_fields or ()),
        len(operations or ()),
        sorted(body),
    )
    return body


# PUBLIC_INTERFACE
def compose_transition(
    transition_id: str,
    base: Optional[BasePayload] = None,
    custom_fields: Optional[CustomFieldSet] = None,
    operations: Optional[UpdateOperations] = None,
) -> Dict[str, Any]:
    """
    Build the request body for an issue transition.

    The ``transition`` entry sits beside ``fields`` and ``update``. Without a
    base payload only the transition itself is sent; supplying custom fields
    or operations without a base payload is an error.
    """
    if not transition_id:
        raise MissingTransitionIdentifier()

    if base is None:
        if custom_fields or operations:
            raise MissingIssuePayload("field edits on a transition require an issue payload")
        return {"transition": {"id": transition_id}}

    body = _as_map(base)
    body["transition"] = {"id": transition_id}
    body = _overlay(body, custom_fields, operations)
    logger.debug("Composed transition %s body: keys=%s", transition_id, sorted(body))
    return body
