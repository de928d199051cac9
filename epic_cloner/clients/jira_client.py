"""Jira API client for the epic cloning service.

Provides a clean, exception-based interface to the three Jira REST resources
the clone workflow needs: create metadata, issue creation and JQL search.
"""

from collections.abc import Sequence
from typing import Any

import requests
from requests import Response

from jira import JIRA, JIRAError
from epic_cloner.display import logger
from epic_cloner.settings import Settings
from epic_cloner.type_definitions import CreatedIssue, FieldMetadata, JiraData

HTTP_BAD_REQUEST_MIN = 400
HTTP_NOT_FOUND = 404
HTTP_AUTH_FAILURES = {401, 403}


class JiraError(Exception):
    """Base exception for all Jira client errors.

    Attributes:
        status_code: HTTP status returned by Jira, if a response was received
        details: Jira's error payload (parsed JSON or raw text), or the message

    """

    def __init__(self, message: str, status_code: int | None = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details if details is not None else message


class JiraConnectionError(JiraError):
    """Error when connection to Jira server fails."""


class JiraAuthenticationError(JiraError):
    """Error when authentication to Jira fails."""


class JiraApiError(JiraError):
    """Error when Jira API returns an error response."""


class JiraResourceNotFoundError(JiraError):
    """Error when a requested Jira resource is not found."""


def _response_details(response: Response | None) -> Any:
    """Return the JSON error body of a response, falling back to its text."""
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _error_message(status_code: int, reason: str | None, details: Any) -> str:
    message = f"HTTP Error {status_code}: {reason or 'Unknown'}"
    if isinstance(details, dict):
        if details.get("errorMessages"):
            message = f"{message} - {', '.join(map(str, details['errorMessages']))}"
        elif details.get("errors"):
            message = f"{message} - {details['errors']}"
    return message


def _error_for_status(status_code: int, message: str, details: Any) -> JiraError:
    if status_code == HTTP_NOT_FOUND:
        return JiraResourceNotFoundError(message, status_code, details)
    if status_code in HTTP_AUTH_FAILURES:
        return JiraAuthenticationError(message, status_code, details)
    return JiraApiError(message, status_code, details)


class JiraClient:
    """Jira client for API interactions.

    Instead of returning empty values on failure, methods raise a
    :class:`JiraError` subclass carrying Jira's error payload. Nothing is
    retried: the underlying session is created with ``max_retries=0``.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize the client from explicit settings.

        Args:
            settings: Validated process settings

        """
        self.settings = settings
        self.base_url = settings.jira_base_url
        self.api_url = settings.jira_api_url
        self.timeout = settings.jira_timeout
        self.request_count = 0

        self.jira: JIRA | None = None
        self._connect()

    def _connect(self) -> None:
        """Create the authenticated Jira session.

        No request is sent here; credentials are checked by the first call.

        Raises:
            JiraConnectionError: If the Jira client cannot be constructed

        """
        try:
            self.jira = JIRA(
                server=self.base_url,
                basic_auth=(self.settings.jira_user_email, self.settings.jira_api_token),
                options={"verify": self.settings.jira_ssl_verify},
                get_server_info=False,
                max_retries=0,
                timeout=self.timeout,
            )
        except Exception as e:
            msg = f"Failed to initialize Jira client for {self.base_url}: {e!s}"
            logger.exception(msg)
            raise JiraConnectionError(msg) from e

        logger.debug("Jira client configured for %s (REST %s)", self.base_url, self.api_url)

    def _handle_response(self, response: Response) -> None:
        """Raise the matching :class:`JiraError` for a non-success response."""
        if response.status_code < HTTP_BAD_REQUEST_MIN:
            return

        details = _response_details(response)
        message = _error_message(response.status_code, response.reason, details)
        raise _error_for_status(response.status_code, message, details)

    def _make_request(
        self,
        path: str,
        method: str = "GET",
        content_type: str = "application/json",
        **kwargs: Any,
    ) -> Response:
        """Make API requests with proper error handling.

        Args:
            path: API path relative to the REST API root (e.g. ``/issue``)
            method: HTTP method (GET, POST, etc.)
            content_type: Content type for request headers
            **kwargs: Additional arguments to pass to the session request

        Returns:
            Response object if successful

        Raises:
            JiraConnectionError: If client is not initialized or connection fails
            JiraAuthenticationError: On HTTP 401/403
            JiraResourceNotFoundError: On HTTP 404
            JiraApiError: On any other non-success response

        """
        if not self.jira:
            msg = "Jira client is not initialized"
            raise JiraConnectionError(msg)

        url = f"{self.api_url}{path}"

        headers = {}
        if content_type:
            headers.update(
                {
                    "Content-Type": content_type,
                    "Accept": content_type,
                },
            )
        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))
        if self.timeout is not None:
            kwargs.setdefault("timeout", self.timeout)

        self.request_count += 1
        logger.debug("Jira request #%s: %s %s", self.request_count, method, url)

        try:
            response = self.jira._session.request(method, url, headers=headers, **kwargs)  # noqa: SLF001
        except JIRAError as e:
            # The jira session raises on non-success responses itself
            status_code = e.status_code or 0
            details = _response_details(e.response) or e.text or str(e)
            if not status_code:
                msg = f"Error during API request to {url}: {e!s}"
                raise JiraConnectionError(msg, details=details) from e
            message = _error_message(status_code, getattr(e.response, "reason", None), details)
            raise _error_for_status(status_code, message, details) from e
        except requests.RequestException as e:
            msg = f"Error during API request to {url}: {e!s}"
            raise JiraConnectionError(msg) from e

        self._handle_response(response)
        return response

    def get_create_metadata(self, project_key: str, issue_type_name: str = "Epic") -> FieldMetadata:
        """Get the fields available when creating an issue type in a project.

        Args:
            project_key: Key of the project, e.g. ``PROJ``
            issue_type_name: Issue type name to restrict the metadata to

        Returns:
            Raw ``createmeta`` body with issue type fields expanded

        """
        params = {
            "projectKeys": project_key,
            "issuetypeNames": issue_type_name,
            "expand": "projects.issuetypes.fields",
        }
        response = self._make_request("/issue/createmeta", params=params)
        return response.json() or {}

    def create_issue(self, fields: JiraData) -> CreatedIssue:
        """Create an issue.

        Args:
            fields: The ``fields`` object of the create request

        Returns:
            Jira's created-record body (``id``, ``key``, ``self``)

        """
        response = self._make_request("/issue", method="POST", json={"fields": fields})
        created: CreatedIssue = response.json()
        logger.debug("Created Jira issue %s", created.get("key"))
        return created

    def search_issues(self, jql: str, fields: Sequence[str]) -> list[JiraData]:
        """Run a JQL search and return the matching issues.

        Args:
            jql: JQL query string
            fields: Field projection for each returned issue

        Returns:
            The ``issues`` array of the search response (possibly empty)

        """
        params = {"jql": jql, "fields": ",".join(fields)}
        response = self._make_request("/search", params=params)
        data = response.json() or {}
        return list(data.get("issues") or [])
