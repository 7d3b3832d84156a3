import os

from fastapi.testclient import TestClient

# Set minimal env for settings
os.environ["JIRA_BASE_URL"] = "https://example.atlassian.net"
os.environ["JIRA_EMAIL"] = "user@example.com"
os.environ["JIRA_API_TOKEN"] = "token"

from issue_composer.api.main import app  # noqa: E402

client = TestClient(app)

ISSUE = {
    "fields": {
        "summary": "New summary test",
        "project": {"id": "10000"},
        "issuetype": {"name": "Story"},
    }
}
CUSTOM_FIELDS = [
    {"id": "customfield_10042", "value": {"kind": "number", "value": 1000.2222}},
    {
        "id": "customfield_10052",
        "value": {"kind": "groups", "value": ["jira-administrators", "jira-administrators-system"]},
    },
]


def _patch_session(monkeypatch):
    from issue_composer.clients.jira_client import JiraClient

    async def fake_open(self):  # noqa: D401
        self._client = True

    async def fake_close(self):
        self._client = None

    monkeypatch.setattr(JiraClient, "open", fake_open)
    monkeypatch.setattr(JiraClient, "close", fake_close)
    return JiraClient


def test_compose_issue():
    r = client.post("/api/v1/rich/issues/compose", json={"issue": ISSUE, "custom_fields": CUSTOM_FIELDS})
    assert r.status_code == 200
    assert r.json()["body"] == {
        "fields": {
            "summary": "New summary test",
            "project": {"id": "10000"},
            "issuetype": {"name": "Story"},
            "customfield_10042": 1000.2222,
            "customfield_10052": [{"name": "jira-administrators"}, {"name": "jira-administrators-system"}],
        }
    }


def test_compose_issue_without_extras_returns_issue():
    r = client.post("/api/v1/plain/issues/compose", json={"issue": ISSUE})
    assert r.status_code == 200
    assert r.json()["body"] == ISSUE


def test_compose_transition_with_operations():
    payload = {
        "transition_id": "31",
        "issue": {"fields": {"description": "Plain text body"}},
        "operations": {"labels": {"triaged": "remove"}},
    }
    r = client.post("/api/v1/plain/issues/compose/transition", json=payload)
    assert r.status_code == 200
    assert r.json()["body"] == {
        "transition": {"id": "31"},
        "fields": {"description": "Plain text body"},
        "update": {"labels": [{"remove": "triaged"}]},
    }


def test_compose_operations_only():
    r = client.post("/api/v1/rich/issues/compose", json={"operations": {"labels": {"triaged": "remove"}}})
    assert r.status_code == 200
    assert r.json()["body"] == {"update": {"labels": [{"remove": "triaged"}]}}


def test_edit_issue_with_operations_only(monkeypatch):
    JiraClient = _patch_session(monkeypatch)
    captured = {}

    async def fake_edit_issue(self, issue_key, payload, custom_fields=None, operations=None, notify=True):
        captured.update(key=issue_key, payload=payload, custom_fields=custom_fields, operations=operations.encode())

    monkeypatch.setattr(JiraClient, "edit_issue", fake_edit_issue)

    r = client.put("/api/v1/rich/issues/ABC-5", json={"operations": {"labels": {"triaged": "remove"}}})
    assert r.status_code == 204
    assert captured == {
        "key": "ABC-5",
        "payload": None,
        "custom_fields": None,
        "operations": {"labels": [{"remove": "triaged"}]},
    }


def test_compose_bulk_skips_entries_without_issue():
    payload = {"issues": [{"issue": ISSUE}, {"custom_fields": CUSTOM_FIELDS}, {"issue": ISSUE}]}
    r = client.post("/api/v1/rich/issues/compose/bulk", json=payload)
    assert r.status_code == 200
    assert r.json()["body"] == {"issueUpdates": [ISSUE, ISSUE]}


def test_compose_errors_are_bad_requests():
    r = client.post("/api/v1/rich/issues/compose", json={})
    assert r.status_code == 400
    assert r.json()["error"] == "MissingIssuePayload"

    r = client.post(
        "/api/v1/rich/issues/compose",
        json={"issue": ISSUE, "custom_fields": [{"id": "", "value": {"kind": "text", "value": "x"}}]},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "MissingFieldIdentifier"

    r = client.post("/api/v1/rich/issues/compose/bulk", json={"issues": []})
    assert r.status_code == 400
    assert r.json()["error"] == "NoItemsToCompose"


def test_unknown_field_kind_is_rejected():
    r = client.post(
        "/api/v1/rich/issues/compose",
        json={"issue": ISSUE, "custom_fields": [{"id": "customfield_1", "value": {"kind": "nope", "value": 1}}]},
    )
    assert r.status_code == 422


def test_create_issue(monkeypatch):
    JiraClient = _patch_session(monkeypatch)
    captured = {}

    async def fake_create_issue(self, payload, custom_fields=None):
        captured["dialect"] = self.dialect
        captured["fields"] = custom_fields.encode()
        return {"id": "200", "key": "ABC-200", "self": "url"}

    monkeypatch.setattr(JiraClient, "create_issue", fake_create_issue)

    r = client.post("/api/v1/rich/issues", json={"issue": ISSUE, "custom_fields": CUSTOM_FIELDS})
    assert r.status_code == 201
    assert r.json()["key"] == "ABC-200"
    assert captured["dialect"] == "rich"
    assert captured["fields"]["customfield_10042"] == 1000.2222


def test_bulk_create(monkeypatch):
    JiraClient = _patch_session(monkeypatch)

    async def fake_create_issues(self, items):
        return {"issues": [{"id": str(i)} for i, _ in enumerate(items)], "errors": []}

    monkeypatch.setattr(JiraClient, "create_issues", fake_create_issues)

    r = client.post("/api/v1/plain/issues/bulk", json={"issues": [{"issue": ISSUE}, {"issue": ISSUE}]})
    assert r.status_code == 201
    assert len(r.json()["data"]["issues"]) == 2


def test_edit_issue(monkeypatch):
    JiraClient = _patch_session(monkeypatch)
    captured = {}

    async def fake_edit_issue(self, issue_key, payload, custom_fields=None, operations=None, notify=True):
        captured.update(key=issue_key, notify=notify, operations=operations.encode(), dialect=self.dialect)

    monkeypatch.setattr(JiraClient, "edit_issue", fake_edit_issue)

    payload = {"issue": ISSUE, "operations": {"labels": {"triaged": "remove"}}}
    r = client.put("/api/v1/plain/issues/ABC-3?notify=false", json=payload)
    assert r.status_code == 204
    assert captured == {
        "key": "ABC-3",
        "notify": False,
        "operations": {"labels": [{"remove": "triaged"}]},
        "dialect": "plain",
    }


def test_transition_issue(monkeypatch):
    JiraClient = _patch_session(monkeypatch)
    captured = {}

    async def fake_transition_issue(self, issue_key, transition_id, payload=None, custom_fields=None, operations=None):
        captured.update(key=issue_key, transition_id=transition_id, payload=payload)

    monkeypatch.setattr(JiraClient, "transition_issue", fake_transition_issue)

    r = client.post("/api/v1/rich/issues/ABC-4/transitions", json={"transition_id": "31"})
    assert r.status_code == 204
    assert captured == {"key": "ABC-4", "transition_id": "31", "payload": None}
