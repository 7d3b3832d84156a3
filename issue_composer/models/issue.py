"""Typed issue payloads for the two REST dialects.

``RichIssue`` targets REST v3, where long text fields are Atlassian Document
Format trees. ``PlainIssue`` targets REST v2, where the same fields are plain
strings. Everything else is shared.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .document import DocumentNode

Dialect = Literal["rich", "plain"]

API_VERSIONS: Dict[str, str] = {"rich": "3", "plain": "2"}


class _Scheme(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_map(self) -> Dict[str, Any]:
        """Generic JSON-compatible form of the payload, unset (None) members omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProjectRef(_Scheme):
    id: Optional[str] = None
    key: Optional[str] = None
    name: Optional[str] = None


class IssueTypeRef(_Scheme):
    id: Optional[str] = None
    name: Optional[str] = None
    subtask: Optional[bool] = None


class PriorityRef(_Scheme):
    id: Optional[str] = None
    name: Optional[str] = None


class UserRef(_Scheme):
    account_id: Optional[str] = Field(default=None, alias="accountId")
    name: Optional[str] = None
    email_address: Optional[str] = Field(default=None, alias="emailAddress")
    display_name: Optional[str] = Field(default=None, alias="displayName")


class ResolutionRef(_Scheme):
    id: Optional[str] = None
    name: Optional[str] = None


class ComponentRef(_Scheme):
    id: Optional[str] = None
    name: Optional[str] = None


class VersionRef(_Scheme):
    id: Optional[str] = None
    name: Optional[str] = None


class ParentRef(_Scheme):
    id: Optional[str] = None
    key: Optional[str] = None


class StatusRef(_Scheme):
    id: Optional[str] = None
    name: Optional[str] = None


class SecurityLevelRef(_Scheme):
    id: Optional[str] = None
    name: Optional[str] = None


class IssueFieldsBase(_Scheme):
    parent: Optional[ParentRef] = None
    project: Optional[ProjectRef] = None
    issue_type: Optional[IssueTypeRef] = Field(default=None, alias="issuetype")
    summary: Optional[str] = None
    priority: Optional[PriorityRef] = None
    assignee: Optional[UserRef] = None
    reporter: Optional[UserRef] = None
    resolution: Optional[ResolutionRef] = None
    status: Optional[StatusRef] = None
    security: Optional[SecurityLevelRef] = None
    labels: Optional[List[str]] = None
    components: Optional[List[ComponentRef]] = None
    versions: Optional[List[VersionRef]] = None
    fix_versions: Optional[List[VersionRef]] = Field(default=None, alias="fixVersions")
    due_date: Optional[str] = Field(default=None, alias="duedate")


class RichIssueFields(IssueFieldsBase):
    description: Optional[DocumentNode] = None
    environment: Optional[DocumentNode] = None


class PlainIssueFields(IssueFieldsBase):
    description: Optional[str] = None
    environment: Optional[str] = None


class RichIssue(_Scheme):
    """Issue payload for the rich document (REST v3) dialect."""
    id: Optional[str] = None
    key: Optional[str] = None
    fields: Optional[RichIssueFields] = None


class PlainIssue(_Scheme):
    """Issue payload for the plain text (REST v2) dialect."""
    id: Optional[str] = None
    key: Optional[str] = None
    fields: Optional[PlainIssueFields] = None


ISSUE_MODELS = {"rich": RichIssue, "plain": PlainIssue}
