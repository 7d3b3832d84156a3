"""Typed custom field values and their Jira JSON encodings.

Every variant carries a ``kind`` tag so the union can be validated from
request bodies, and an ``encode()`` method returning the JSON shape the
issue endpoints accept for that category of custom field.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _FieldValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    def encode(self) -> Any:
        raise NotImplementedError


class TextValue(_FieldValue):
    kind: Literal["text"] = "text"
    value: str

    def encode(self) -> Any:
        return self.value


class URLValue(_FieldValue):
    kind: Literal["url"] = "url"
    value: str

    def encode(self) -> Any:
        return self.value


class NumberValue(_FieldValue):
    kind: Literal["number"] = "number"
    value: float

    def encode(self) -> Any:
        return self.value


class GroupValue(_FieldValue):
    kind: Literal["group"] = "group"
    value: str

    def encode(self) -> Any:
        return {"name": self.value}


class GroupsValue(_FieldValue):
    kind: Literal["groups"] = "groups"
    value: List[str]

    def encode(self) -> Any:
        return [{"name": group} for group in self.value]


class UserValue(_FieldValue):
    """Single user picker, addressed by account id."""
    kind: Literal["user"] = "user"
    value: str

    def encode(self) -> Any:
        return {"accountId": self.value}


class UsersValue(_FieldValue):
    kind: Literal["users"] = "users"
    value: List[str]

    def encode(self) -> Any:
        return [{"accountId": account_id} for account_id in self.value]


class SelectValue(_FieldValue):
    kind: Literal["select"] = "select"
    value: str

    def encode(self) -> Any:
        return {"value": self.value}


class RadioButtonValue(_FieldValue):
    kind: Literal["radio_button"] = "radio_button"
    value: str

    def encode(self) -> Any:
        return {"value": self.value}


class MultiSelectValue(_FieldValue):
    kind: Literal["multi_select"] = "multi_select"
    value: List[str]

    def encode(self) -> Any:
        return [{"value": option} for option in self.value]


class CheckBoxValue(_FieldValue):
    kind: Literal["check_box"] = "check_box"
    value: List[str]

    def encode(self) -> Any:
        return [{"value": option} for option in self.value]


class CascadingValue(_FieldValue):
    """Two-level select list: a parent option and one of its children."""
    kind: Literal["cascading"] = "cascading"
    parent: str
    child: str

    def encode(self) -> Any:
        return {"value": self.parent, "child": {"value": self.child}}


class DateValue(_FieldValue):
    kind: Literal["date"] = "date"
    value: date

    def encode(self) -> Any:
        return self.value.strftime("%Y-%m-%d")


class DateTimeValue(_FieldValue):
    """Date-time picker, encoded as RFC 3339 with second precision.

    Naive datetimes are taken to be UTC.
    """
    kind: Literal["date_time"] = "date_time"
    value: datetime

    def encode(self) -> Any:
        moment = self.value.replace(microsecond=0)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        if moment.utcoffset().total_seconds() == 0:
            return moment.strftime("%Y-%m-%dT%H:%M:%SZ")
        return moment.isoformat()


class LabelsValue(_FieldValue):
    kind: Literal["labels"] = "labels"
    value: List[str]

    def encode(self) -> Any:
        return list(self.value)


class SprintValue(_FieldValue):
    kind: Literal["sprint"] = "sprint"
    value: int

    def encode(self) -> Any:
        return self.value


class RawValue(_FieldValue):
    """Escape hatch for categories without a dedicated variant."""
    kind: Literal["raw"] = "raw"
    value: Any

    def encode(self) -> Any:
        return self.value


FieldValue = Annotated[
    Union[
        TextValue,
        URLValue,
        NumberValue,
        GroupValue,
        GroupsValue,
        UserValue,
        UsersValue,
        SelectValue,
        RadioButtonValue,
        MultiSelectValue,
        CheckBoxValue,
        CascadingValue,
        DateValue,
        DateTimeValue,
        LabelsValue,
        SprintValue,
        RawValue,
    ],
    Field(discriminator="kind"),
]
