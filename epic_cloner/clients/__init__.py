"""API clients package for the epic cloning service."""

from epic_cloner.clients.jira_client import (
    JiraApiError,
    JiraAuthenticationError,
    JiraClient,
    JiraConnectionError,
    JiraError,
    JiraResourceNotFoundError,
)

__all__ = [
    "JiraApiError",
    "JiraAuthenticationError",
    "JiraClient",
    "JiraConnectionError",
    "JiraError",
    "JiraResourceNotFoundError",
]
