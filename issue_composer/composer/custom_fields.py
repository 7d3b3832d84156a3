from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterator, List

from ..core.errors import FieldEncodingError, MissingFieldIdentifier
from ..models.fields import (
    CascadingValue,
    CheckBoxValue,
    DateTimeValue,
    DateValue,
    FieldValue,
    GroupsValue,
    GroupValue,
    LabelsValue,
    MultiSelectValue,
    NumberValue,
    RadioButtonValue,
    RawValue,
    SelectValue,
    SprintValue,
    TextValue,
    URLValue,
    UsersValue,
    UserValue,
)


class CustomFieldSet:
    """
    PUBLIC_INTERFACE
    Custom field values for a single outgoing request, keyed by field id
    (e.g. ``customfield_10042``). Setting the same id twice keeps the last value.

    Not safe for concurrent mutation; build one instance per request.
    """

    def __init__(self) -> None:
        self._values: Dict[str, FieldValue] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"CustomFieldSet({list(self._values)!r})"

    def get(self, field_id: str) -> FieldValue | None:
        return self._values.get(field_id)

    # PUBLIC_INTERFACE
    def set(self, field_id: str, value: FieldValue) -> None:
        """Store a typed value under ``field_id``, replacing any previous one."""
        if not field_id or not field_id.strip():
            raise MissingFieldIdentifier()
        self._values[field_id] = value

    def text(self, field_id: str, value: str) -> None:
        self.set(field_id, TextValue(value=value))

    def url(self, field_id: str, value: str) -> None:
        self.set(field_id, URLValue(value=value))

    def number(self, field_id: str, value: float) -> None:
        self.set(field_id, NumberValue(value=value))

    def group(self, field_id: str, group: str) -> None:
        self.set(field_id, GroupValue(value=group))

    def groups(self, field_id: str, groups: List[str]) -> None:
        self.set(field_id, GroupsValue(value=groups))

    def user(self, field_id: str, account_id: str) -> None:
        self.set(field_id, UserValue(value=account_id))

    def users(self, field_id: str, account_ids: List[str]) -> None:
        self.set(field_id, UsersValue(value=account_ids))

    def select(self, field_id: str, option: str) -> None:
        self.set(field_id, SelectValue(value=option))

    def radio_button(self, field_id: str, button: str) -> None:
        self.set(field_id, RadioButtonValue(value=button))

    def multi_select(self, field_id: str, options: List[str]) -> None:
        self.set(field_id, MultiSelectValue(value=options))

    def check_box(self, field_id: str, options: List[str]) -> None:
        self.set(field_id, CheckBoxValue(value=options))

    def cascading(self, field_id: str, parent: str, child: str) -> None:
        self.set(field_id, CascadingValue(parent=parent, child=child))

    def date(self, field_id: str, value: date) -> None:
        self.set(field_id, DateValue(value=value))

    def date_time(self, field_id: str, value: datetime) -> None:
        self.set(field_id, DateTimeValue(value=value))

    def labels(self, field_id: str, labels: List[str]) -> None:
        self.set(field_id, LabelsValue(value=labels))

    def sprint(self, field_id: str, sprint_id: int) -> None:
        self.set(field_id, SprintValue(value=sprint_id))

    def raw(self, field_id: str, value: Any) -> None:
        self.set(field_id, RawValue(value=value))

    # PUBLIC_INTERFACE
    def encode(self) -> Dict[str, Any]:
        """Return ``{field_id: encoded value}`` for every stored field."""
        encoded: Dict[str, Any] = {}
        for field_id, value in self._values.items():
            try:
                encoded[field_id] = value.encode()
            except (TypeError, ValueError) as exc:
                raise FieldEncodingError(field_id, str(exc)) from exc
        return encoded
