"""Discovery of the "Epic Name" custom field.

Company-managed Jira projects require a value for the "Epic Name" custom field
when creating an epic. Its id differs between sites, so it is looked up in the
project's create metadata. Discovery is best effort: when the metadata does
not expose the field, the common default id is used and Jira decides.
"""

import re
from typing import TYPE_CHECKING, Any

from epic_cloner.display import logger
from epic_cloner.type_definitions import FieldMetadata

if TYPE_CHECKING:
    from epic_cloner.clients.jira_client import JiraClient

EPIC_ISSUE_TYPE = "Epic"
DEFAULT_EPIC_NAME_FIELD_ID = "customfield_10011"

_EPIC_NAME_PATTERN = re.compile(r"^epic name$", re.IGNORECASE)


def _epic_type_fields(metadata: Any) -> dict[str, Any]:
    """Return the field map of the Epic issue type of the first project."""
    if not isinstance(metadata, dict):
        return {}

    projects = metadata.get("projects") or []
    if not isinstance(projects, list) or not projects or not isinstance(projects[0], dict):
        return {}

    issue_types = projects[0].get("issuetypes") or []
    if not isinstance(issue_types, list):
        return {}

    for issue_type in issue_types:
        if isinstance(issue_type, dict) and issue_type.get("name") == EPIC_ISSUE_TYPE:
            fields = issue_type.get("fields") or {}
            return fields if isinstance(fields, dict) else {}

    return {}


def find_epic_name_field_id(metadata: FieldMetadata | None) -> str | None:
    """Return the id of the field named "Epic Name" (any case), if present."""
    for field_id, field_def in _epic_type_fields(metadata).items():
        name = field_def.get("name") if isinstance(field_def, dict) else None
        if isinstance(name, str) and _EPIC_NAME_PATTERN.match(name):
            return field_id

    return None


def resolve_epic_name_field_id(metadata: FieldMetadata | None) -> str:
    """Pick the "Epic Name" field id out of createmeta output.

    Args:
        metadata: ``/issue/createmeta`` body expanded with
            ``projects.issuetypes.fields``

    Returns:
        The discovered field id, or :data:`DEFAULT_EPIC_NAME_FIELD_ID` when
        the metadata has no such field or an unexpected shape

    """
    return find_epic_name_field_id(metadata) or DEFAULT_EPIC_NAME_FIELD_ID


def get_epic_name_field_id(jira_client: "JiraClient", project_key: str) -> str:
    """Look up the "Epic Name" field id for a project.

    Transport and API errors from the client propagate unchanged.
    """
    metadata = jira_client.get_create_metadata(project_key, EPIC_ISSUE_TYPE)
    field_id = find_epic_name_field_id(metadata)

    if field_id is None:
        logger.warning(
            "No 'Epic Name' field in create metadata for project %s, using %s",
            project_key,
            DEFAULT_EPIC_NAME_FIELD_ID,
        )
        return DEFAULT_EPIC_NAME_FIELD_ID

    logger.debug("Resolved 'Epic Name' field for project %s: %s", project_key, field_id)
    return field_id
