from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, NamedTuple

from ..core.errors import MissingFieldIdentifier, MissingOperation


class OperationEntry(NamedTuple):
    verb: str
    operand: str

    def encode(self) -> Dict[str, str]:
        return {self.verb: self.operand}


class UpdateOperations:
    """
    PUBLIC_INTERFACE
    Incremental edits (add, remove, set, ...) against array valued fields,
    rendered under the ``update`` key of an edit or transition request.

    Entries for the same field accumulate in call order.
    """

    def __init__(self) -> None:
        self._operations: Dict[str, List[OperationEntry]] = {}

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._operations

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __repr__(self) -> str:
        return f"UpdateOperations({self._operations!r})"

    def entries(self, field_id: str) -> List[OperationEntry]:
        return list(self._operations.get(field_id, ()))

    # PUBLIC_INTERFACE
    def add_array_operation(self, field_id: str, mapping: Mapping[str, str]) -> None:
        """
        Append one operation per ``operand -> verb`` pair of ``mapping``.

        The mapping is keyed by the value being edited, so
        ``{"triaged": "remove"}`` becomes ``{"remove": "triaged"}``.
        """
        if not field_id or not field_id.strip():
            raise MissingFieldIdentifier()
        if not mapping:
            raise MissingOperation()
        entries = self._operations.setdefault(field_id, [])
        for operand, verb in mapping.items():
            entries.append(OperationEntry(verb=verb, operand=operand))

    # PUBLIC_INTERFACE
    def add_string_operation(self, field_id: str, verb: str, operand: str) -> None:
        """Append a single ``{verb: operand}`` operation for ``field_id``."""
        if not field_id or not field_id.strip():
            raise MissingFieldIdentifier()
        if not verb:
            raise MissingOperation()
        if not operand:
            raise MissingOperation("no update operation value set")
        self._operations.setdefault(field_id, []).append(OperationEntry(verb=verb, operand=operand))

    def encode(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            field_id: [entry.encode() for entry in entries]
            for field_id, entries in self._operations.items()
        }
