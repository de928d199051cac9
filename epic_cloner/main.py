"""Main entry point for the epic cloning service.

``epic-cloner serve`` runs the HTTP API; ``epic-cloner clone`` runs a single
clone from the command line. Settings are loaded once here and handed to
everything else explicitly.
"""

import argparse
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from epic_cloner.clients.jira_client import JiraClient, JiraError
from epic_cloner.config_loader import ConfigurationError, load_settings
from epic_cloner.display import configure_logging, console, logger, render_clone_result
from epic_cloner.epics.clone import EpicCloneService
from epic_cloner.models import CloneEpicRequest, EpicCloneError
from epic_cloner.settings import VALID_LOG_LEVELS, Settings


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="epic-cloner",
        description="Clone a Jira epic and its child issues into a target project",
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        type=str.upper,
        help="Override LOG_LEVEL",
    )

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API (default)")
    serve_parser.add_argument("--host", help="Override HOST")
    serve_parser.add_argument("--port", type=int, help="Override PORT")

    clone_parser = subparsers.add_parser("clone", help="Clone one epic and exit")
    clone_parser.add_argument("template_epic_key", help="Key of the epic to copy, e.g. TPL-1")
    clone_parser.add_argument("target_project_key", help="Project to create the copy in")
    clone_parser.add_argument("new_epic_summary", help="Summary (and Epic Name) of the new epic")

    return parser


def _setting_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in ("log_level", "host", "port"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    return overrides


def serve(settings: Settings) -> None:
    """Run the HTTP API until interrupted."""
    import uvicorn  # noqa: PLC0415

    from epic_cloner.api.app import create_app  # noqa: PLC0415

    app = create_app(settings)
    logger.info("API listening on %s", settings.port)
    # log_config=None keeps the rich handlers installed by configure_logging
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


def run_clone(settings: Settings, args: argparse.Namespace) -> int:
    """Clone a single epic and print the result.

    Returns:
        Process exit status

    """
    try:
        request = CloneEpicRequest(
            template_epic_key=args.template_epic_key,
            target_project_key=args.target_project_key,
            new_epic_summary=args.new_epic_summary,
        )
    except ValidationError:
        logger.error("Template epic key, target project key and summary must not be empty")
        return 1

    try:
        service = EpicCloneService(JiraClient(settings))
        result = service.clone_epic(request)
    except EpicCloneError as e:
        logger.error("Clone failed at %s: %s", e.stage, e.message)
        logger.error("Details: %s", e.details)
        if e.left_partial_state:
            logger.warning(
                "Epic %s and %d child issue(s) were created before the failure: %s",
                e.new_epic_key,
                len(e.created_children),
                ", ".join(e.created_children) or "-",
            )
        return 1
    except JiraError as e:
        logger.error("Could not connect to Jira: %s", e.message)
        return 1

    console.print(render_clone_result(result.new_epic_key, result.created_children))
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, load settings and dispatch the subcommand."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(**_setting_overrides(args))
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.error("Configuration error: %s", e.message)
        logger.error("Set JIRA_BASE_URL, JIRA_USER_EMAIL and JIRA_API_TOKEN in the environment or .env")
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_file)

    if args.command == "clone":
        sys.exit(run_clone(settings, args))

    serve(settings)


if __name__ == "__main__":
    main()
