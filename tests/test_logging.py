import logging
import os

from fastapi.testclient import TestClient

os.environ.setdefault("JIRA_BASE_URL", "https://example.atlassian.net")
os.environ.setdefault("JIRA_EMAIL", "user@example.com")
os.environ.setdefault("JIRA_API_TOKEN", "token")

from issue_composer.api.main import app  # noqa: E402
from issue_composer.core.logging import _dialect_of, configure_logging  # noqa: E402

client = TestClient(app)


def _request_messages(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "issue_composer.request"]


def test_dialect_is_read_from_the_path():
    assert _dialect_of("/api/v1/rich/issues/compose") == "rich"
    assert _dialect_of("/api/v1/plain/issues/ABC-1/transitions") == "plain"
    assert _dialect_of("/") is None


def test_request_log_carries_dialect(caplog):
    caplog.set_level(logging.INFO, logger="issue_composer.request")

    r = client.post("/api/v1/plain/issues/compose", json={"issue": {"fields": {"summary": "S"}}})
    assert r.status_code == 200

    messages = _request_messages(caplog)
    assert any("POST /api/v1/plain/issues/compose dialect=plain -> 200" in m for m in messages)


def test_rejected_compose_is_logged_as_warning(caplog):
    caplog.set_level(logging.INFO, logger="issue_composer.request")

    r = client.post("/api/v1/rich/issues/compose", json={})
    assert r.status_code == 400

    warnings = [
        rec.getMessage()
        for rec in caplog.records
        if rec.name == "issue_composer.request" and rec.levelno == logging.WARNING
    ]
    assert any("dialect=rich rejected=MissingIssuePayload -> 400" in m for m in warnings)


def test_httpx_logger_follows_debug_level():
    configure_logging("DEBUG")
    assert logging.getLogger("httpx").level == logging.DEBUG
    configure_logging("INFO")
    assert logging.getLogger("httpx").level == logging.WARNING
