"""
Centralized display utilities for console output and logging.
Provides standardized logging and result tables using rich.
"""

import logging
import os
from collections.abc import Sequence
from typing import Any, Protocol, cast

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

LOGGER_NAME = "epic_cloner"

# Custom levels: NOTICE sits just above INFO, SUCCESS between INFO and WARNING
NOTICE = 21
SUCCESS = 25


# Define Protocol for extended Logger with success and notice methods
class ExtendedLogger(Protocol):
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def success(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def notice(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


# Create a custom theme for logging
LOGGING_THEME = Theme(
    {
        "logging.level.debug": "dim",
        "logging.level.info": "blue",
        "logging.level.notice": "cyan",
        "logging.level.warning": "bold yellow",
        "logging.level.error": "bold red",
        "logging.level.critical": "bold red on white",
        "logging.level.success": "bold green",
    }
)

# Global console instance with theme
console = Console(theme=LOGGING_THEME)


def _success(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(SUCCESS):
        self._log(SUCCESS, message, args, stacklevel=2, **kwargs)


def _notice(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(NOTICE):
        self._log(NOTICE, message, args, stacklevel=2, **kwargs)


# Register the custom levels at import time so module loggers can use
# success()/notice() before configure_logging() runs (e.g. under pytest)
logging.addLevelName(NOTICE, "NOTICE")
logging.addLevelName(SUCCESS, "SUCCESS")
setattr(logging.Logger, "success", _success)
setattr(logging.Logger, "notice", _notice)

logger = cast(ExtendedLogger, logging.getLogger(LOGGER_NAME))


def _numeric_level(level: str) -> int:
    match level.upper():
        case "NOTICE":
            return NOTICE
        case "SUCCESS":
            return SUCCESS
        case other:
            return getattr(logging, other, logging.INFO)


def configure_logging(
    level: str = "INFO", log_file: str | os.PathLike[str] | None = None
) -> ExtendedLogger:
    """
    Configure logging with rich formatting.

    Args:
        level: Logging level (DEBUG, INFO, NOTICE, SUCCESS, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file

    Returns:
        Configured logger instance
    """
    numeric_level = _numeric_level(level)

    rich_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
        show_time=True,
        show_level=True,
        log_time_format="[%X]",
    )
    handlers: list[logging.Handler] = [rich_handler]

    # Add a file handler if a log file path is provided
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_format = logging.Formatter(
            "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(file_format)
        file_handler.setLevel(numeric_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,  # Ensure we can reconfigure logging if needed
    )

    logger.debug("Rich logging configured at level %s", level.upper())
    if log_file:
        logger.info("Log file: %s", log_file)

    return logger


def render_clone_result(new_epic_key: str, created_children: Sequence[str]) -> Table:
    """Build a rich table summarising a finished clone."""
    table = Table(title=f"Cloned epic {new_epic_key}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Child issue", style="cyan")

    for position, key in enumerate(created_children, start=1):
        table.add_row(str(position), key)

    if not created_children:
        table.add_row("-", "(template epic has no children)")

    return table
