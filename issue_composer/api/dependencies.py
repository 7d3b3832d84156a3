from __future__ import annotations

from typing import AsyncIterator, Callable

from fastapi import Depends

from ..clients.jira_client import JiraClient
from ..core.config import Settings, get_settings
from ..models.issue import Dialect


# PUBLIC_INTERFACE
def get_app_settings() -> Settings:
    """Expose settings as dependency helper (wrapper around core.get_settings)."""
    return get_settings()


# PUBLIC_INTERFACE
def jira_client_dependency(dialect: Dialect) -> Callable[..., AsyncIterator[JiraClient]]:
    """Build a dependency yielding a JiraClient for ``dialect``, opened and closed per request."""

    async def get_jira_client(settings: Settings = Depends(get_app_settings)) -> AsyncIterator[JiraClient]:
        client = JiraClient(settings, dialect=dialect)
        await client.open()
        try:
            yield client
        finally:
            await client.close()

    return get_jira_client
