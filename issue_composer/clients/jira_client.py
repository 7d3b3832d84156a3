from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from ..composer.bulk import BulkItem, compose_many
from ..composer.custom_fields import CustomFieldSet
from ..composer.merge import BasePayload, compose, compose_transition
from ..composer.operations import UpdateOperations
from ..core.config import Settings
from ..core.errors import MissingIssueKey
from ..models.issue import API_VERSIONS, Dialect

logger = logging.getLogger(__name__)


class JiraClient:
    """
    Async HTTP client for the JIRA issue endpoints using basic auth (email + API token).

    Request bodies are composed before anything is sent, so a composition error
    never results in a partial request. ``dialect`` selects the REST version:
    rich document payloads go to v3, plain text payloads to v2.
    """

    def __init__(
        self,
        settings: Settings,
        dialect: Dialect = "rich",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.dialect = dialect
        self.api_version = API_VERSIONS[dialect]
        self.base_url = str(settings.JIRA_BASE_URL).rstrip("/")
        self.timeout = httpx.Timeout(settings.REQUEST_TIMEOUT_SECONDS)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def open(self) -> None:
        if self._client is None:
            auth_header = self._basic_auth_header(self.settings.JIRA_EMAIL, self.settings.JIRA_API_TOKEN)
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Authorization": auth_header, "Accept": "application/json", "Content-Type": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _basic_auth_header(self, username: str, token: str) -> str:
        raw = f"{username}:{token}".encode("utf-8")
        b64 = base64.b64encode(raw).decode("ascii")
        return f"Basic {b64}"

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            await self.open()
        assert self._client is not None
        return self._client

    def _endpoint(self, path: str) -> str:
        return f"/rest/api/{self.api_version}/{path}"

    async def create_issue(self, payload: Optional[BasePayload], custom_fields: Optional[CustomFieldSet] = None) -> Dict[str, Any]:
        body = compose(payload, custom_fields)
        client = await self._ensure_client()
        resp = await client.post(self._endpoint("issue"), json=body)
        resp.raise_for_status()
        return resp.json()

    async def create_issues(self, items: Sequence[BulkItem]) -> Dict[str, Any]:
        body = compose_many(items)
        client = await self._ensure_client()
        logger.debug("Bulk creating %d issues", len(body["issueUpdates"]))
        resp = await client.post(self._endpoint("issue/bulk"), json=body)
        resp.raise_for_status()
        return resp.json()

    async def edit_issue(
        self,
        issue_key: str,
        payload: Optional[BasePayload],
        custom_fields: Optional[CustomFieldSet] = None,
        operations: Optional[UpdateOperations] = None,
        notify: bool = True,
    ) -> None:
        if not issue_key:
            raise MissingIssueKey()
        body = compose(payload, custom_fields, operations)
        client = await self._ensure_client()
        params = None if notify else {"notifyUsers": "false"}
        resp = await client.put(self._endpoint(f"issue/{issue_key}"), json=body, params=params)
        resp.raise_for_status()
        return None

    async def transition_issue(
        self,
        issue_key: str,
        transition_id: str,
        payload: Optional[BasePayload] = None,
        custom_fields: Optional[CustomFieldSet] = None,
        operations: Optional[UpdateOperations] = None,
    ) -> None:
        if not issue_key:
            raise MissingIssueKey()
        body = compose_transition(transition_id, payload, custom_fields, operations)
        client = await self._ensure_client()
        resp = await client.post(self._endpoint(f"issue/{issue_key}/transitions"), json=body)
        resp.raise_for_status()
        return None
