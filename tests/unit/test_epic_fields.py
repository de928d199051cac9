"""Tests for "Epic Name" field discovery."""

import pytest

from epic_cloner.clients.jira_client import JiraAuthenticationError
from epic_cloner.epics.fields import (
    DEFAULT_EPIC_NAME_FIELD_ID,
    find_epic_name_field_id,
    get_epic_name_field_id,
    resolve_epic_name_field_id,
)

pytestmark = pytest.mark.unit


class TestResolveEpicNameFieldId:
    """Pure resolution from createmeta bodies."""

    @pytest.mark.parametrize("name", ["Epic Name", "epic name", "EPIC NAME", "Epic name"])
    def test_matches_name_case_insensitively(self, epic_metadata, name):
        metadata = epic_metadata(
            {
                "summary": {"name": "Summary"},
                "customfield_10104": {"name": name},
            },
        )

        assert resolve_epic_name_field_id(metadata) == "customfield_10104"

    def test_ignores_similar_field_names(self, epic_metadata):
        metadata = epic_metadata(
            {
                "customfield_10014": {"name": "Epic Link"},
                "customfield_10200": {"name": "Epic Name (old)"},
                "customfield_10201": {"name": "My Epic Name"},
            },
        )

        assert resolve_epic_name_field_id(metadata) == DEFAULT_EPIC_NAME_FIELD_ID

    def test_falls_back_when_field_is_missing(self, epic_metadata):
        metadata = epic_metadata({"summary": {"name": "Summary"}})

        assert resolve_epic_name_field_id(metadata) == DEFAULT_EPIC_NAME_FIELD_ID
        assert find_epic_name_field_id(metadata) is None

    @pytest.mark.parametrize(
        "metadata",
        [
            None,
            {},
            {"projects": []},
            {"projects": None},
            {"projects": [{"key": "NEW"}]},
            {"projects": [{"issuetypes": [{"name": "Story", "fields": {"cf_1": {"name": "Epic Name"}}}]}]},
            {"projects": [{"issuetypes": [{"name": "Epic", "fields": ["unexpected"]}]}]},
            {"projects": [{"issuetypes": [{"name": "Epic", "fields": {"cf_1": "Epic Name"}}]}]},
            {"projects": "unexpected"},
            ["unexpected"],
        ],
    )
    def test_falls_back_on_unexpected_shapes(self, metadata):
        assert resolve_epic_name_field_id(metadata) == DEFAULT_EPIC_NAME_FIELD_ID

    def test_only_looks_at_epic_issue_type(self):
        metadata = {
            "projects": [
                {
                    "issuetypes": [
                        {"name": "Story", "fields": {"customfield_1": {"name": "Epic Name"}}},
                        {"name": "Epic", "fields": {"customfield_2": {"name": "Epic Name"}}},
                    ],
                },
            ],
        }

        assert resolve_epic_name_field_id(metadata) == "customfield_2"

    def test_uses_first_project_only(self, epic_metadata):
        metadata = epic_metadata({"summary": {"name": "Summary"}})
        metadata["projects"].append(
            epic_metadata({"customfield_3": {"name": "Epic Name"}}, project_key="OTHER")["projects"][0],
        )

        assert resolve_epic_name_field_id(metadata) == DEFAULT_EPIC_NAME_FIELD_ID


class TestGetEpicNameFieldId:
    """Lookup through the Jira client."""

    def test_requests_epic_metadata_for_project(self, mock_jira_client, epic_metadata):
        mock_jira_client.get_create_metadata.return_value = epic_metadata(
            {"customfield_10011": {"name": "Epic Name"}},
        )

        assert get_epic_name_field_id(mock_jira_client, "NEW") == "customfield_10011"
        mock_jira_client.get_create_metadata.assert_called_once_with("NEW", "Epic")

    def test_returns_fallback_without_field(self, mock_jira_client):
        mock_jira_client.get_create_metadata.return_value = {"projects": []}

        assert get_epic_name_field_id(mock_jira_client, "NEW") == DEFAULT_EPIC_NAME_FIELD_ID

    def test_propagates_client_errors(self, mock_jira_client):
        mock_jira_client.get_create_metadata.side_effect = JiraAuthenticationError(
            "HTTP Error 401: Unauthorized", 401,
        )

        with pytest.raises(JiraAuthenticationError):
            get_epic_name_field_id(mock_jira_client, "NEW")
