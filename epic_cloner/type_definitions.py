"""Type definitions for the epic cloning workflow.

This module contains data classes and type aliases describing the Jira
records the workflow reads and creates.
"""

from dataclasses import dataclass
from typing import Any, Literal, TypedDict

JiraData = dict[str, Any]
FieldMetadata = dict[str, Any]

CloneStage = Literal["create_epic", "fetch_children", "clone_child"]


class CreatedIssue(TypedDict, total=False):
    """Body returned by ``POST /issue``."""

    id: str
    key: str
    self: str


@dataclass(slots=True, frozen=True)
class JiraEpic:
    """Represents an epic created by the clone workflow."""

    id: str
    key: str
    summary: str
    project_key: str
    epic_name: str


@dataclass(slots=True, frozen=True)
class TemplateIssue:
    """Represents a child issue of the template epic, as returned by search."""

    key: str
    summary: str
    issue_type_id: str
    id: str | None = None
    parent_key: str | None = None

    @classmethod
    def from_api(cls, issue: JiraData, parent_key: str | None = None) -> "TemplateIssue":
        """Build from a ``/search`` result entry requesting ``summary,issuetype``.

        Raises:
            KeyError: If the entry lacks the key, summary or issue type id

        """
        fields = issue.get("fields") or {}
        return cls(
            key=issue["key"],
            summary=fields["summary"],
            issue_type_id=str(fields["issuetype"]["id"]),
            id=issue.get("id"),
            parent_key=parent_key,
        )
