"""
Application Configuration Module.

Manages application settings and environment variables using Pydantic for validation.
Reads both the GitHub Actions runtime variables (``GITHUB_*``, ``INPUT_*``)
and plain environment variables or a ``.env`` file for local runs.

Features:
- Environment variable loading and validation
- Secure credential management
- Translation of raw limit inputs into an immutable LimitConfiguration
"""

import logging
import os
from typing import FrozenSet, Optional, Tuple

from pydantic import AliasChoices, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from errors import ConfigurationError
from enforcer.models import LimitConfiguration
from logger import LogManager

APP_NAME = "pr-limit-enforcer"


def parse_limit(name: str, raw: str) -> Optional[int]:
    """
    Parse a numeric limit input.

    Args:
        name (str): Input name, used in error messages.
        raw (str): Raw input value.

    Returns:
        Optional[int]: The limit, or None if the input is blank.

    Raises:
        ConfigurationError: If the value is not a non-negative integer.
    """
    value = raw.strip()
    if not value:
        return None
    try:
        limit = int(value)
    except ValueError:
        limit = -1
    if limit < 0:
        raise ConfigurationError(
            f"Input '{name}' must be a non-negative integer, got {raw!r}"
        )
    return limit


def parse_limited_labels(raw: str) -> Optional[FrozenSet[str]]:
    """
    Parse a comma-separated label list.

    Entries are trimmed and blanks dropped. An empty result means no labels
    are limited.
    """
    labels = frozenset(label.strip() for label in raw.split(",") if label.strip())
    return labels or None


class Settings(BaseSettings):
    """
    Application configuration settings with validation.

    Attributes:
        dev (bool): Human-readable console logging
        log_dir (Optional[str]): Directory for log files, none by default
        log_level (int): Logging level (default: info)
        runner_debug (bool): Debug logging requested by the Actions runner
        github_actions (bool): Running inside GitHub Actions
        github_token (SecretStr): GitHub API authentication token
        github_repository (str): Repository as ``owner/name``
        github_api_url (str): GitHub REST API base URL
        github_event_name (str): Name of the triggering event
        github_event_path (str): Path of the triggering event payload
        repo_limit (str): Raw repository-wide open PR limit
        per_author_limit (str): Raw per-author open PR limit
        per_label_limit (str): Raw per-label open PR limit
        limited_labels (str): Comma-separated labels the per-label limit applies to
    """

    # Application settings
    dev: bool = Field(default=False, description="Debug mode")
    log_dir: Optional[str] = Field(default=None, description="Logging directory")
    log_level: int = Field(default=logging.INFO, description="Logging level")
    runner_debug: bool = Field(default=False, description="Runner debug logging")

    # GitHub configuration
    github_actions: bool = Field(default=False, description="Running in GitHub Actions")
    github_token: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("INPUT_REPO-TOKEN", "GITHUB_TOKEN"),
        description="GitHub token",
    )
    github_repository: str = Field(default="", description="Repository owner/name")
    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub API base URL"
    )
    github_event_name: str = Field(default="", description="Triggering event name")
    github_event_path: str = Field(default="", description="Triggering event payload")

    # Limit inputs
    repo_limit: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_REPO-LIMIT", "REPO_LIMIT"),
        description="Maximum open PRs in the repository",
    )
    per_author_limit: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_PER-AUTHOR-LIMIT", "PER_AUTHOR_LIMIT"),
        description="Maximum open PRs per author",
    )
    per_label_limit: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_PER-LABEL-LIMIT", "PER_LABEL_LIMIT"),
        description="Maximum open PRs per limited label",
    )
    limited_labels: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_LIMITED-LABELS", "LIMITED_LABELS"),
        description="Comma-separated labels subject to the per-label limit",
    )

    @property
    def effective_log_level(self) -> int:
        """Logging level, forced to debug when the runner asks for it."""
        return logging.DEBUG if self.runner_debug else self.log_level

    def limit_configuration(self) -> LimitConfiguration:
        """
        Build the limits for this run from the raw inputs.

        Returns:
            LimitConfiguration: Immutable limits.

        Raises:
            ConfigurationError: If a numeric input is invalid.
        """
        return LimitConfiguration(
            repo_limit=parse_limit("repo-limit", self.repo_limit),
            per_author_limit=parse_limit("per-author-limit", self.per_author_limit),
            per_label_limit=parse_limit("per-label-limit", self.per_label_limit),
            limited_labels=parse_limited_labels(self.limited_labels),
        )

    def require_github_access(self) -> Tuple[str, str]:
        """
        Return the token and repository needed to talk to GitHub.

        Returns:
            Tuple[str, str]: Token and ``owner/name`` repository.

        Raises:
            ConfigurationError: If either is missing or the repository is malformed.
        """
        token = self.github_token.get_secret_value()
        if not token:
            raise ConfigurationError("A GitHub token is required (input 'repo-token')")

        owner, _, name = self.github_repository.partition("/")
        if not owner or not name or "/" in name:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must be 'owner/name', got {self.github_repository!r}"
            )
        return token, self.github_repository

    # Configure env file loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",  # Ignore extra fields in .env file
    )


def load_settings() -> Settings:
    """
    Read the settings for this run.

    Returns:
        Settings: Validated settings.

    Raises:
        ConfigurationError: If an environment value has the wrong type.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def configure_logging(app_settings: Settings) -> logging.Logger:
    """Apply the logging options of ``app_settings`` to the application logger."""
    return LogManager(
        app_name=APP_NAME,
        log_dir=app_settings.log_dir,
        development=app_settings.dev,
        level=app_settings.effective_log_level,
        github_actions=app_settings.github_actions,
    ).logger


# Startup logging, reconfigured once the run's settings are loaded
logger = LogManager(
    app_name=APP_NAME,
    github_actions=os.environ.get("GITHUB_ACTIONS", "").lower() == "true",
).logger
