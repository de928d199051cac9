"""Epic clone workflow: field discovery, child lookup and re-creation."""

from epic_cloner.epics.children import (
    CHILD_QUERY_STRATEGIES,
    epic_link_query,
    fetch_epic_children,
    parent_epic_query,
)
from epic_cloner.epics.clone import EpicCloneService, clone_child_issue, create_epic
from epic_cloner.epics.fields import (
    DEFAULT_EPIC_NAME_FIELD_ID,
    get_epic_name_field_id,
    resolve_epic_name_field_id,
)

__all__ = [
    "CHILD_QUERY_STRATEGIES",
    "DEFAULT_EPIC_NAME_FIELD_ID",
    "EpicCloneService",
    "clone_child_issue",
    "create_epic",
    "epic_link_query",
    "fetch_epic_children",
    "get_epic_name_field_id",
    "parent_epic_query",
    "resolve_epic_name_field_id",
]
