import pytest
from pydantic import ValidationError

from issue_composer.core.config import Settings


def test_credentials_are_required(monkeypatch):
    monkeypatch.delenv("JIRA_EMAIL", raising=False)
    monkeypatch.delenv("JIRA_API_TOKEN", raising=False)

    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None, JIRA_BASE_URL="https://example.atlassian.net")

    missing = {error["loc"][0] for error in exc_info.value.errors()}
    assert missing == {"JIRA_EMAIL", "JIRA_API_TOKEN"}


def test_empty_credentials_are_rejected():
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            JIRA_BASE_URL="https://example.atlassian.net",
            JIRA_EMAIL="",
            JIRA_API_TOKEN="",
        )


def test_log_level_is_normalized():
    settings = Settings(
        _env_file=None,
        JIRA_BASE_URL="https://example.atlassian.net",
        JIRA_EMAIL="user@example.com",
        JIRA_API_TOKEN="token",
        LOG_LEVEL="debug",
    )
    assert settings.LOG_LEVEL == "DEBUG"
