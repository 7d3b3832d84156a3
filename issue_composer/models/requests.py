from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from ..composer.bulk import BulkItem
from ..composer.custom_fields import CustomFieldSet
from ..composer.operations import UpdateOperations
from .fields import FieldValue

IssueT = TypeVar("IssueT", bound=BaseModel)


class CustomFieldEntry(BaseModel):
    id: str = Field(..., description="Custom field id, e.g. customfield_10042")
    value: FieldValue = Field(..., description="Typed value, tagged by kind")


def _build_custom_fields(entries: List[CustomFieldEntry]) -> Optional[CustomFieldSet]:
    if not entries:
        return None
    custom_fields = CustomFieldSet()
    for entry in entries:
        custom_fields.set(entry.id, entry.value)
    return custom_fields


class IssueComposeRequest(BaseModel, Generic[IssueT]):
    """Issue payload plus custom fields and update operations."""
    issue: Optional[IssueT] = Field(default=None, description="Typed issue payload")
    custom_fields: List[CustomFieldEntry] = Field(default_factory=list, description="Custom field values")
    operations: Dict[str, Dict[str, str]] = Field(
        default_factory=dict,
        description="Per field mapping of operand to verb, e.g. {'labels': {'triaged': 'remove'}}",
    )

    def build_custom_fields(self) -> Optional[CustomFieldSet]:
        return _build_custom_fields(self.custom_fields)

    def build_operations(self) -> Optional[UpdateOperations]:
        if not self.operations:
            return None
        operations = UpdateOperations()
        for field_id, mapping in self.operations.items():
            operations.add_array_operation(field_id, mapping)
        return operations


class TransitionComposeRequest(IssueComposeRequest[IssueT], Generic[IssueT]):
    transition_id: str = Field(..., description="Transition ID to move issue to")


class BulkIssueEntry(BaseModel, Generic[IssueT]):
    issue: Optional[IssueT] = Field(default=None, description="Typed issue payload, entries without one are skipped")
    custom_fields: List[CustomFieldEntry] = Field(default_factory=list, description="Custom field values")

    def build_item(self) -> BulkItem:
        return BulkItem(payload=self.issue, custom_fields=_build_custom_fields(self.custom_fields))


class BulkComposeRequest(BaseModel, Generic[IssueT]):
    issues: List[BulkIssueEntry[IssueT]] = Field(default_factory=list, description="Issues to create")

    def build_items(self) -> List[BulkItem]:
        return [entry.build_item() for entry in self.issues]


class ComposedBody(BaseModel):
    """Request body as it would be sent upstream."""
    body: Dict[str, Any] = Field(default_factory=dict, description="Composed JSON body")


class CreateIssueResponse(BaseModel):
    id: str = Field(..., description="Created issue ID")
    key: str = Field(..., description="Created issue key")
    self: Optional[str] = Field(default=None, description="Self URL")


class GenericResponse(BaseModel):
    """Generic pass-through JSON response for upstream data."""
    data: Dict[str, Any] = Field(default_factory=dict, description="Wrapped upstream response data")


class HealthResponse(BaseModel):
    """Simple health check response."""
    status: str = Field(..., description="Service status")
    app: str = Field(..., description="Application name")
    environment: str = Field(..., description="Application environment")
