"""Lookup of the child issues of an epic.

Team-managed projects relate children to their epic through the parent
hierarchy (``parentEpic``); company-managed projects created before the
hierarchy change use the legacy "Epic Link" field. Both JQL dialects are
tried in order and the first one that matches anything wins.
"""

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from epic_cloner.display import logger
from epic_cloner.type_definitions import JiraData

if TYPE_CHECKING:
    from epic_cloner.clients.jira_client import JiraClient

ChildQuery = Callable[[str], str]

CHILD_FIELDS = ("summary", "issuetype")


def parent_epic_query(epic_key: str) -> str:
    """JQL matching issues under the epic in the parent hierarchy."""
    return f"parentEpic = {epic_key}"


def epic_link_query(epic_key: str) -> str:
    """JQL matching issues linked through the legacy "Epic Link" field."""
    return f'"Epic Link" = {epic_key}'


CHILD_QUERY_STRATEGIES: tuple[ChildQuery, ...] = (parent_epic_query, epic_link_query)


def fetch_epic_children(
    jira_client: "JiraClient",
    epic_key: str,
    strategies: Sequence[ChildQuery] = CHILD_QUERY_STRATEGIES,
) -> list[JiraData]:
    """Return the child issues of an epic.

    Each strategy is tried in order; the first non-empty result is returned.
    An epic without children yields an empty list. Errors raised by a search
    propagate immediately, without trying the remaining strategies.

    Args:
        jira_client: Client used for the searches
        epic_key: Key of the template epic
        strategies: Ordered JQL builders

    Returns:
        Search result entries carrying ``summary`` and ``issuetype``

    """
    for strategy in strategies:
        jql = strategy(epic_key)
        issues = jira_client.search_issues(jql, fields=CHILD_FIELDS)
        if issues:
            logger.debug("Found %d children of %s with %s", len(issues), epic_key, strategy.__name__)
            return issues
        logger.debug("No children of %s matched: %s", epic_key, jql)

    return []
