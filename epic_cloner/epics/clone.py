"""Epic cloning workflow.

Creates a new epic in the target project, then re-creates every child of the
template epic underneath it, one at a time and in search order.
"""

from typing import TYPE_CHECKING

from epic_cloner.clients.jira_client import JiraError
from epic_cloner.display import logger
from epic_cloner.epics.children import fetch_epic_children
from epic_cloner.epics.fields import EPIC_ISSUE_TYPE, get_epic_name_field_id
from epic_cloner.models import CloneEpicRequest, CloneResult, EpicCloneError
from epic_cloner.type_definitions import CreatedIssue, JiraData, JiraEpic, TemplateIssue

if TYPE_CHECKING:
    from epic_cloner.clients.jira_client import JiraClient


def create_epic(
    jira_client: "JiraClient",
    summary: str,
    project_key: str,
    epic_name: str | None = None,
) -> JiraEpic:
    """Create an epic, filling the project's "Epic Name" field.

    Args:
        jira_client: Client used for the metadata lookup and creation
        summary: Summary of the new epic
        project_key: Project to create the epic in
        epic_name: Value for the "Epic Name" field, defaults to ``summary``

    Returns:
        The created epic

    """
    epic_name = epic_name or summary
    epic_name_field_id = get_epic_name_field_id(jira_client, project_key)

    fields: JiraData = {
        "summary": summary,
        "issuetype": {"name": EPIC_ISSUE_TYPE},
        "project": {"key": project_key},
        epic_name_field_id: epic_name,
    }
    created = jira_client.create_issue(fields)

    return JiraEpic(
        id=str(created.get("id", "")),
        key=created["key"],
        summary=summary,
        project_key=project_key,
        epic_name=epic_name,
    )


def clone_child_issue(
    jira_client: "JiraClient",
    project_key: str,
    parent_epic_key: str,
    template: TemplateIssue,
) -> CreatedIssue:
    """Create a copy of a template child under ``parent_epic_key``.

    Only the summary and issue type are copied.
    """
    fields: JiraData = {
        "project": {"key": project_key},
        "summary": template.summary,
        "issuetype": {"id": template.issue_type_id},
        "parent": {"key": parent_epic_key},
    }
    return jira_client.create_issue(fields)


class EpicCloneService:
    """Runs the clone workflow against one Jira site.

    Holds no per-request state, so a single instance serves concurrent
    requests. Failures are not rolled back: whatever was created before the
    failing call stays in Jira and is reported on the raised
    :class:`EpicCloneError`.
    """

    def __init__(self, jira_client: "JiraClient") -> None:
        self.jira_client = jira_client

    def clone_epic(self, request: CloneEpicRequest) -> CloneResult:
        """Clone the template epic described by ``request``.

        Raises:
            EpicCloneError: If any Jira call fails or returns unusable data

        """
        logger.info(
            "Cloning epic %s into project %s as '%s'",
            request.template_epic_key,
            request.target_project_key,
            request.new_epic_summary,
        )

        try:
            new_epic = create_epic(
                self.jira_client,
                summary=request.new_epic_summary,
                project_key=request.target_project_key,
                epic_name=request.new_epic_summary,
            )
        except JiraError as e:
            raise EpicCloneError(
                f"Failed to create epic in project {request.target_project_key}: {e.message}",
                stage="create_epic",
                details=e.details,
            ) from e
        except KeyError as e:
            raise EpicCloneError(
                f"Jira response for the new epic has no {e!s}",
                stage="create_epic",
            ) from e
        logger.info("Created epic %s", new_epic.key)

        try:
            children = fetch_epic_children(self.jira_client, request.template_epic_key)
        except JiraError as e:
            raise EpicCloneError(
                f"Failed to fetch children of {request.template_epic_key}: {e.message}",
                stage="fetch_children",
                details=e.details,
                new_epic_key=new_epic.key,
            ) from e
        logger.info("Template epic %s has %d child issue(s)", request.template_epic_key, len(children))

        created_children: list[str] = []
        for child in children:
            try:
                template = TemplateIssue.from_api(child, parent_key=request.template_epic_key)
                created = clone_child_issue(
                    self.jira_client,
                    project_key=request.target_project_key,
                    parent_epic_key=new_epic.key,
                    template=template,
                )
                created_children.append(created["key"])
            except JiraError as e:
                raise EpicCloneError(
                    f"Failed to clone child {child.get('key')} of {request.template_epic_key}: {e.message}",
                    stage="clone_child",
                    details=e.details,
                    new_epic_key=new_epic.key,
                    created_children=created_children,
                ) from e
            except (KeyError, TypeError) as e:
                raise EpicCloneError(
                    f"Unexpected Jira data while cloning a child of {request.template_epic_key}: missing {e!s}",
                    stage="clone_child",
                    new_epic_key=new_epic.key,
                    created_children=created_children,
                ) from e

            logger.debug("Cloned %s as %s", template.key, created_children[-1])

        logger.success(
            "Cloned epic %s as %s with %d child issue(s)",
            request.template_epic_key,
            new_epic.key,
            len(created_children),
        )
        return CloneResult(new_epic_key=new_epic.key, created_children=created_children)
