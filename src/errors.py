"""
Application Error Types.

Failures raised by the layer around the limit enforcer. The enforcer itself
raises nothing: every input maps to a decision.
"""

from typing import Optional


class ConfigurationError(Exception):
    """Raised when the run cannot start because its inputs are unusable.

    Covers the wrong event type, an unreadable event payload, non-numeric or
    negative limit inputs, and missing GitHub credentials.
    """


class MalformedPullRequestError(Exception):
    """Raised when a raw pull request payload lacks a required field."""

    def __init__(self, field: str, pr_number: Optional[int] = None):
        self.field = field
        self.pr_number = pr_number
        target = f"pull request #{pr_number}" if pr_number is not None else "pull request"
        super().__init__(f"Malformed {target} payload: missing or invalid '{field}'")
