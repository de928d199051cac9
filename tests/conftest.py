"""Shared pytest fixtures and configuration for all tests."""

import json
import os
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from _pytest.config import Config

from epic_cloner.clients.jira_client import JiraClient
from epic_cloner.settings import Settings

JIRA_ENV_VARS = (
    "JIRA_BASE_URL",
    "JIRA_USER_EMAIL",
    "JIRA_API_TOKEN",
    "JIRA_API_VERSION",
    "JIRA_TIMEOUT",
    "JIRA_SSL_VERIFY",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "LOG_FILE",
)


def pytest_configure(config: Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line(
        "markers",
        "integration: mark a test as an integration test against a live Jira site",
    )


def _env_flag(name: str, default: bool = False) -> bool:
    """Read boolean environment flag (true/false)."""
    val = os.environ.get(name, "true" if default else "false").strip().lower()
    return val in {"1", "true", "yes", "on"}


def pytest_collection_modifyitems(config: Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless EPIC_CLONER_RUN_INTEGRATION is true."""
    if _env_flag("EPIC_CLONER_RUN_INTEGRATION", False):
        return

    skip_integration = pytest.mark.skip(
        reason="Integration tests disabled by default. Set EPIC_CLONER_RUN_INTEGRATION=true to enable.",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


def _make_response(
    status_code: int = 200,
    payload: Any = None,
    text: str | None = None,
    reason: str = "OK",
) -> requests.Response:
    """Build a real ``requests.Response`` with a JSON or text body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if payload is not None:
        response._content = json.dumps(payload).encode()
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode()
    return response


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable the settings read from the environment.

    Each variable is set before being deleted so monkeypatch also undoes
    values a test loads through ``load_dotenv``.
    """
    for name in JIRA_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def settings(clean_env: pytest.MonkeyPatch) -> Settings:
    """Valid settings that do not depend on the real environment."""
    return Settings(
        jira_base_url="https://example.atlassian.net/",
        jira_user_email="bot@example.com",
        jira_api_token="secret-token-123",
    )


@pytest.fixture
def mock_jira_client() -> MagicMock:
    """Create a mock JiraClient with common behavior.

    Create metadata without an "Epic Name" field, epics created as NEW-1 and
    no children found by either query.
    """
    mock_client = MagicMock(spec=JiraClient)
    mock_client.get_create_metadata.return_value = {"projects": []}
    mock_client.create_issue.return_value = {"id": "10001", "key": "NEW-1"}
    mock_client.search_issues.return_value = []
    return mock_client


def _epic_metadata(fields: dict[str, Any], project_key: str = "NEW") -> dict[str, Any]:
    """Build a createmeta body for the Epic issue type of one project."""
    return {
        "projects": [
            {
                "key": project_key,
                "issuetypes": [
                    {"id": "10000", "name": "Epic", "fields": fields},
                ],
            },
        ],
    }


def _search_issue(key: str, summary: str, issue_type_id: str = "10002") -> dict[str, Any]:
    """Build one entry of a ``/search`` response."""
    return {
        "id": f"2{key.rsplit('-', 1)[-1]}",
        "key": key,
        "fields": {
            "summary": summary,
            "issuetype": {"id": issue_type_id, "name": "Task"},
        },
    }


@pytest.fixture
def make_response():
    """Factory for ``requests.Response`` objects."""
    return _make_response


@pytest.fixture
def epic_metadata():
    """Factory for createmeta bodies."""
    return _epic_metadata


@pytest.fixture
def search_issue():
    """Factory for search result entries."""
    return _search_issue
