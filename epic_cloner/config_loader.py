"""Configuration loading for the epic cloning service.

Loads ``.env`` files into the process environment and builds the validated
:class:`~epic_cloner.settings.Settings` object exactly once at process entry.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from epic_cloner.settings import Settings

config_logger = logging.getLogger("epic_cloner.config_loader")


class ConfigurationError(Exception):
    """Raised when required startup settings are missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None, invalid: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.missing = missing or []
        self.invalid = invalid or []


def is_test_environment() -> bool:
    """Detect if code is running in a test environment.

    Returns:
        bool: True if running in a test environment, False otherwise

    """
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True

    return os.environ.get("EPIC_CLONER_TEST_MODE", "").lower() in ("true", "1", "yes")


def load_environment_files(base_dir: Path | None = None) -> None:
    """Load environment variables from .env files based on execution context.

    The loading order respects precedence:
    - .env (base config, never overrides variables already exported)
    - .env.local (local development overrides, if present)
    - .env.test (test-specific config, if in test environment)
    - .env.test.local (local test overrides, if in test environment)

    Later files override values from earlier files.
    """
    base_dir = base_dir or Path.cwd()

    load_dotenv(base_dir / ".env")
    config_logger.debug("Loaded base environment from .env")

    layered = [".env.local"]
    if is_test_environment():
        config_logger.debug("Running in test environment")
        layered += [".env.test", ".env.test.local"]

    for name in layered:
        path = base_dir / name
        if path.exists():
            load_dotenv(path, override=True)
            config_logger.debug("Loaded overrides from %s", name)


def _describe_validation_error(error: ValidationError) -> ConfigurationError:
    missing: list[str] = []
    invalid: list[str] = []

    for detail in error.errors():
        field = str(detail["loc"][0]) if detail.get("loc") else "?"
        env_name = field.upper()
        if detail.get("type") == "missing":
            missing.append(env_name)
        else:
            invalid.append(f"{env_name} ({detail.get('msg', 'invalid value')})")

    parts = []
    if missing:
        parts.append(f"Missing required environment variables: {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid configuration values: {'; '.join(invalid)}")

    return ConfigurationError(". ".join(parts) or str(error), missing=missing, invalid=invalid)


def load_settings(*, load_env_files: bool = True, **overrides: Any) -> Settings:
    """Build the process settings.

    Args:
        load_env_files: Load ``.env`` files from the working directory first
        **overrides: Explicit values taking precedence over the environment

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If a required value is missing or any value is invalid

    """
    if load_env_files:
        load_environment_files()

    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        raise _describe_validation_error(e) from e

    config_logger.debug(
        "Configuration loaded for Jira site %s (user %s)",
        settings.jira_base_url,
        settings.jira_user_email,
    )
    return settings
