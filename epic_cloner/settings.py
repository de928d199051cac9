"""Settings schema for the epic cloning service.

Defines the Pydantic settings model with validation and environment variable
handling. The three Jira connection values are mandatory; everything else has
a working default.
"""

from pathlib import Path
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REQUIRED_ENV_VARS = ("JIRA_BASE_URL", "JIRA_USER_EMAIL", "JIRA_API_TOKEN")

VALID_LOG_LEVELS = ("DEBUG", "INFO", "NOTICE", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings, read from the process environment."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
    )

    # ========================================================================
    # JIRA CONNECTION (JIRA_*)
    # ========================================================================

    jira_base_url: str = Field(description="Jira site URL, e.g. https://acme.atlassian.net")
    jira_user_email: str = Field(description="Account email used for basic auth")
    jira_api_token: str = Field(description="Jira API token", repr=False)

    jira_api_version: str = Field(default="3", description="Jira REST API version")
    jira_timeout: float | None = Field(
        default=None, gt=0, description="Per-request timeout in seconds",
    )
    jira_ssl_verify: bool = Field(
        default=True, description="Enable SSL certificate verification",
    )

    # ========================================================================
    # HTTP SERVER
    # ========================================================================

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=10000, ge=1, le=65535, description="Listen port")

    # ========================================================================
    # LOGGING
    # ========================================================================

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Path | None = Field(default=None, description="Optional log file")

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator("jira_base_url", "jira_user_email", "jira_api_token", mode="before")
    @classmethod
    def strip_required(cls, v: object) -> object:
        """Trim surrounding whitespace and reject blank values."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty")
        return v

    @field_validator("jira_base_url")
    @classmethod
    def validate_jira_base_url(cls, v: str) -> str:
        """Validate Jira URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Jira URL must start with http:// or https://")

        parsed = urlparse(v)
        if not parsed.netloc:
            raise ValueError("Jira URL must have a valid hostname")

        return v.rstrip("/")

    @field_validator("jira_user_email")
    @classmethod
    def validate_jira_user_email(cls, v: str) -> str:
        """Validate Jira username format."""
        if "@" not in v:
            raise ValueError("Jira user should be an email address")
        return v

    @field_validator("jira_api_version")
    @classmethod
    def validate_jira_api_version(cls, v: str) -> str:
        v = v.strip().strip("/")
        if v not in {"2", "3", "latest"}:
            raise ValueError("Jira API version must be one of: 2, 3, latest")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f'Log level must be one of: {", ".join(VALID_LOG_LEVELS)}')
        return v.upper()

    # ========================================================================
    # UTILITY METHODS
    # ========================================================================

    @property
    def jira_api_url(self) -> str:
        """Base URL of the Jira REST API, without trailing slash."""
        return f"{self.jira_base_url}/rest/api/{self.jira_api_version}"
