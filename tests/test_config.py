"""
Configuration Test Suite.

Covers parsing of the raw limit inputs and reading them from the
environment the way the Actions runner provides them.
"""

import logging

import pytest

from config import Settings, load_settings, parse_limit, parse_limited_labels
from enforcer.models import LimitConfiguration
from errors import ConfigurationError

ENV_VARS = [
    "INPUT_REPO-TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "INPUT_REPO-LIMIT",
    "REPO_LIMIT",
    "INPUT_PER-AUTHOR-LIMIT",
    "PER_AUTHOR_LIMIT",
    "INPUT_PER-LABEL-LIMIT",
    "PER_LABEL_LIMIT",
    "INPUT_LIMITED-LABELS",
    "LIMITED_LABELS",
    "RUNNER_DEBUG",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration variables inherited from the test environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.parametrize("raw,expected", [("", None), ("  ", None), ("0", 0), (" 5 ", 5)])
def test_parse_limit(raw, expected):
    """Test that blank inputs are absent and numbers are parsed."""
    assert parse_limit("repo-limit", raw) == expected


@pytest.mark.parametrize("raw", ["abc", "-1", "2.5"])
def test_parse_limit_invalid(raw):
    """Test that non-numeric and negative inputs are rejected by name."""
    with pytest.raises(ConfigurationError, match="per-author-limit"):
        parse_limit("per-author-limit", raw)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", None),
        (" , ,", None),
        ("bug", frozenset({"bug"})),
        (" bug , ui,,needs review ", frozenset({"bug", "ui", "needs review"})),
    ],
)
def test_parse_limited_labels(raw, expected):
    """Test trimming and dropping of blank label entries."""
    assert parse_limited_labels(raw) == expected


def test_limit_configuration_from_action_inputs(clean_env):
    """Test reading limits from the INPUT_* variables set by the runner."""
    clean_env.setenv("INPUT_REPO-LIMIT", "10")
    clean_env.setenv("INPUT_PER-AUTHOR-LIMIT", "2")
    clean_env.setenv("INPUT_PER-LABEL-LIMIT", "")
    clean_env.setenv("INPUT_LIMITED-LABELS", "bug, ui")

    limits = Settings(_env_file=None).limit_configuration()

    assert limits == LimitConfiguration(
        repo_limit=10,
        per_author_limit=2,
        per_label_limit=None,
        limited_labels=frozenset({"bug", "ui"}),
    )


def test_limit_configuration_from_plain_env(clean_env):
    """Test reading limits from plain variables for local runs."""
    clean_env.setenv("PER_LABEL_LIMIT", "3")
    clean_env.setenv("LIMITED_LABELS", "bug")

    limits = Settings(_env_file=None).limit_configuration()

    assert limits.repo_limit is None
    assert limits.per_label_limit == 3
    assert limits.limited_labels == frozenset({"bug"})


def test_limit_configuration_defaults(clean_env):
    """Test that no inputs give a configuration with every rule disabled."""
    assert Settings(_env_file=None).limit_configuration() == LimitConfiguration()


def test_limit_configuration_invalid(clean_env):
    """Test that invalid inputs surface as configuration errors."""
    clean_env.setenv("INPUT_REPO-LIMIT", "many")

    with pytest.raises(ConfigurationError, match="repo-limit"):
        Settings(_env_file=None).limit_configuration()


def test_require_github_access(clean_env):
    """Test that token and repository are returned when both are set."""
    clean_env.setenv("INPUT_REPO-TOKEN", "ghs_secret")
    clean_env.setenv("GITHUB_REPOSITORY", "octo/widgets")

    assert Settings(_env_file=None).require_github_access() == (
        "ghs_secret",
        "octo/widgets",
    )


@pytest.mark.parametrize("repository", ["", "octo", "octo/", "octo/widgets/extra"])
def test_require_github_access_bad_repository(clean_env, repository):
    """Test that a malformed repository name is rejected."""
    clean_env.setenv("GITHUB_TOKEN", "ghs_secret")
    clean_env.setenv("GITHUB_REPOSITORY", repository)

    with pytest.raises(ConfigurationError, match="GITHUB_REPOSITORY"):
        Settings(_env_file=None).require_github_access()


def test_require_github_access_missing_token(clean_env):
    """Test that a missing token is rejected."""
    clean_env.setenv("GITHUB_REPOSITORY", "octo/widgets")

    with pytest.raises(ConfigurationError, match="token"):
        Settings(_env_file=None).require_github_access()


def test_effective_log_level(clean_env):
    """Test that runner debug mode forces debug logging."""
    assert Settings(_env_file=None).effective_log_level == logging.INFO

    clean_env.setenv("RUNNER_DEBUG", "1")

    assert Settings(_env_file=None).effective_log_level == logging.DEBUG


def test_load_settings(clean_env):
    """Test that valid environment values load."""
    clean_env.setenv("REPO_LIMIT", "4")

    assert load_settings().limit_configuration().repo_limit == 4


def test_load_settings_invalid_value(clean_env):
    """Test that a mistyped environment value is a configuration error."""
    clean_env.setenv("LOG_LEVEL", "DEBUG")

    with pytest.raises(ConfigurationError, match="log_level"):
        load_settings()
