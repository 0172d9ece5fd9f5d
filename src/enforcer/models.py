"""
Limit Enforcement Data Models.

Defines the limit configuration consumed by the enforcer, the tags used to
identify each rule, and the decision the enforcer hands back to its caller.
"""

from enum import Enum
from typing import FrozenSet, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RuleKind(Enum):
    """
    Limit rules, listed in evaluation order.

    Attributes:
        REPO: Open pull requests across the repository
        AUTHOR: Open pull requests by the triggering author
        LABEL: Open pull requests sharing a limited label
    """

    REPO = "repo"
    AUTHOR = "author"
    LABEL = "label"


class LimitConfiguration(BaseModel):
    """
    Thresholds in effect for one run.

    A threshold that is unset or zero disables its rule. The label rule also
    needs a non-empty ``limited_labels``.
    """

    model_config = ConfigDict(frozen=True)

    repo_limit: Optional[int] = Field(default=None, ge=0)
    per_author_limit: Optional[int] = Field(default=None, ge=0)
    per_label_limit: Optional[int] = Field(default=None, ge=0)
    limited_labels: Optional[FrozenSet[str]] = None

    def describe(self) -> str:
        """One-line summary of the limits for logging."""

        def show(value: Optional[int]) -> str:
            return str(value) if value else "none"

        labels = ", ".join(sorted(self.limited_labels)) if self.limited_labels else "none"
        return (
            f"at most {show(self.repo_limit)} open PRs, "
            f"at most {show(self.per_author_limit)} open PRs per author, "
            f"at most {show(self.per_label_limit)} for each of these labels: {labels}"
        )


class RuleViolation(BaseModel):
    """A tripped rule and the comment to post on the pull request."""

    model_config = ConfigDict(frozen=True)

    rule: RuleKind
    message: str


class NoAction(BaseModel):
    """Leave the triggering pull request open."""

    model_config = ConfigDict(frozen=True)


class Close(BaseModel):
    """Close the triggering pull request with ``message`` as a comment."""

    model_config = ConfigDict(frozen=True)

    pull_request_number: int
    message: str
    rule: RuleKind


Decision = Union[NoAction, Close]
