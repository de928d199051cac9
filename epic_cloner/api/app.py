"""FastAPI application exposing the epic clone operation over HTTP."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from epic_cloner import __version__
from epic_cloner.clients.jira_client import JiraClient
from epic_cloner.display import logger
from epic_cloner.epics.clone import EpicCloneService
from epic_cloner.models import (
    REQUIRED_REQUEST_FIELDS,
    CloneEpicRequest,
    EpicCloneError,
    ErrorResponse,
)
from epic_cloner.settings import Settings

HEALTH_MESSAGE = "Epic cloner API is live. POST /clone-epic to clone an epic."
MISSING_FIELDS_MESSAGE = f"Missing required fields: {', '.join(REQUIRED_REQUEST_FIELDS)}"
CLONE_FAILED_MESSAGE = "Failed to clone epic. See server logs."


def _error(status_code: int, error: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).to_response(),
    )


async def _read_json_object(request: Request) -> dict[str, Any]:
    """Return the request body as a dict; empty or malformed bodies become ``{}``."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


async def health() -> PlainTextResponse:
    """Liveness probe."""
    return PlainTextResponse(HEALTH_MESSAGE)


async def clone_epic(request: Request) -> JSONResponse:
    """Clone a template epic and its children into a target project."""
    payload = await _read_json_object(request)

    try:
        clone_request = CloneEpicRequest.model_validate(payload)
    except ValidationError:
        logger.info("Rejected clone request with missing fields: %s", sorted(payload))
        return _error(400, MISSING_FIELDS_MESSAGE)

    service: EpicCloneService = request.app.state.clone_service

    try:
        # The Jira client blocks; keep it off the event loop
        result = await run_in_threadpool(service.clone_epic, clone_request)
    except EpicCloneError as e:
        logger.error("Clone failed at %s: %s", e.stage, e.message)
        if e.left_partial_state:
            logger.warning(
                "Clone of %s left epic %s with %d child issue(s) in Jira",
                clone_request.template_epic_key,
                e.new_epic_key,
                len(e.created_children),
            )
        return _error(500, CLONE_FAILED_MESSAGE, e.details)
    except Exception as e:
        logger.exception("Clone failed unexpectedly: %s", e)
        return _error(500, CLONE_FAILED_MESSAGE, str(e))

    return JSONResponse(content=result.to_response())


def create_app(
    settings: Settings | None = None,
    clone_service: EpicCloneService | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Process settings, used to build the Jira client when no
            ``clone_service`` is given
        clone_service: Pre-built service, mainly for tests

    Returns:
        Configured application

    """
    if clone_service is None:
        if settings is None:
            msg = "Either settings or clone_service is required"
            raise ValueError(msg)
        clone_service = EpicCloneService(JiraClient(settings))

    app = FastAPI(
        title="Jira Epic Cloner",
        description="Clone a Jira epic and its child issues into a target project",
        version=__version__,
    )
    app.state.settings = settings
    app.state.clone_service = clone_service

    app.add_api_route("/", health, methods=["GET"], response_class=PlainTextResponse)
    app.add_api_route("/clone-epic", clone_epic, methods=["POST"])

    return app
