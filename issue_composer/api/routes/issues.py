from typing import Type

from fastapi import APIRouter, Depends, Path, Query, Response, status
from pydantic import BaseModel

from ...clients.jira_client import JiraClient
from ...composer.bulk import compose_many
from ...composer.merge import compose, compose_transition
from ...models.issue import ISSUE_MODELS, Dialect
from ...models.requests import (
    BulkComposeRequest,
    ComposedBody,
    CreateIssueResponse,
    GenericResponse,
    IssueComposeRequest,
    TransitionComposeRequest,
)
from ..dependencies import jira_client_dependency


# PUBLIC_INTERFACE
def build_issue_router(dialect: Dialect) -> APIRouter:
    """Issue routes for one payload dialect; the composition logic is shared."""
    issue_model: Type[BaseModel] = ISSUE_MODELS[dialect]
    ComposeRequest = IssueComposeRequest[issue_model]
    TransitionRequest = TransitionComposeRequest[issue_model]
    BulkRequest = BulkComposeRequest[issue_model]
    get_jira_client = jira_client_dependency(dialect)

    router = APIRouter(prefix=f"/{dialect}/issues", tags=[f"Issues ({dialect})"])

    @router.post("/compose", summary="Compose Issue Body", response_model=ComposedBody)
    def compose_issue(payload: ComposeRequest):
        """Return the create/edit body without contacting JIRA."""
        body = compose(payload.issue, payload.build_custom_fields(), payload.build_operations())
        return ComposedBody(body=body)

    @router.post("/compose/transition", summary="Compose Transition Body", response_model=ComposedBody)
    def compose_transition_body(payload: TransitionRequest):
        """Return the transition body without contacting JIRA."""
        body = compose_transition(
            payload.transition_id, payload.issue, payload.build_custom_fields(), payload.build_operations()
        )
        return ComposedBody(body=body)

    @router.post("/compose/bulk", summary="Compose Bulk Create Body", response_model=ComposedBody)
    def compose_bulk(payload: BulkRequest):
        """Return the bulk create body without contacting JIRA."""
        return ComposedBody(body=compose_many(payload.build_items()))

    @router.post(
        "",
        summary="Create Issue",
        response_model=CreateIssueResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_issue(payload: ComposeRequest, jira: JiraClient = Depends(get_jira_client)):
        """Create a new JIRA issue with its custom fields."""
        data = await jira.create_issue(payload.issue, payload.build_custom_fields())
        return CreateIssueResponse(id=data.get("id", ""), key=data.get("key", ""), self=data.get("self"))

    @router.post(
        "/bulk",
        summary="Bulk Create Issues",
        response_model=GenericResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_issues(payload: BulkRequest, jira: JiraClient = Depends(get_jira_client)):
        """Create several issues in one request."""
        data = await jira.create_issues(payload.build_items())
        return GenericResponse(data=data)

    @router.put("/{issue_key}", summary="Edit Issue", status_code=status.HTTP_204_NO_CONTENT)
    async def edit_issue(
        payload: ComposeRequest,
        issue_key: str = Path(..., description="JIRA issue key"),
        notify: bool = Query(default=True, description="Send change notifications to watchers"),
        jira: JiraClient = Depends(get_jira_client),
    ):
        """Edit an issue, applying custom fields and update operations."""
        await jira.edit_issue(
            issue_key,
            payload.issue,
            payload.build_custom_fields(),
            payload.build_operations(),
            notify=notify,
        )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post(
        "/{issue_key}/transitions",
        summary="Transition Issue",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def transition_issue(
        payload: TransitionRequest,
        issue_key: str = Path(..., description="JIRA issue key"),
        jira: JiraClient = Depends(get_jira_client),
    ):
        """Transition an issue, optionally editing fields on the transition screen."""
        await jira.transition_issue(
            issue_key,
            payload.transition_id,
            payload.issue,
            payload.build_custom_fields(),
            payload.build_operations(),
        )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
