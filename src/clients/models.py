"""
Pull Request Data Models.

Defines the snapshot of an open pull request that the limit enforcer works
on, and the mapping from a raw REST API payload into it.
Uses Pydantic for validation.
"""

from enum import Enum
from typing import Any, FrozenSet, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errors import MalformedPullRequestError


class PullRequestState(Enum):
    """Pull request states used when listing and closing pull requests."""

    OPEN = "open"
    CLOSED = "closed"


class PullRequestRecord(BaseModel):
    """Point-in-time snapshot of one open pull request."""

    model_config = ConfigDict(frozen=True)

    id: int
    number: int
    author: str = Field(min_length=1)
    draft: bool = False
    head_ref: str = Field(min_length=1)  # Branch name
    base_ref: str = Field(min_length=1)
    labels: FrozenSet[str] = frozenset()

    def describe(self) -> str:
        """Render as ``#<number> (draft|ready; <head> -> <base>)``."""
        state = "draft" if self.draft else "ready"
        return f"#{self.number} ({state}; {self.head_ref} -> {self.base_ref})"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PullRequestRecord":
        """Build a record from a raw pull request payload.

        Args:
            payload (Mapping[str, Any]): Pull request object as returned by the
                REST API (``GET /repos/{owner}/{repo}/pulls``).

        Returns:
            PullRequestRecord: The validated snapshot.

        Raises:
            MalformedPullRequestError: If ``number``, ``user.login``,
                ``head.ref`` or ``base.ref`` is missing or invalid.
        """
        number = payload.get("number")
        if not isinstance(number, int) or isinstance(number, bool):
            raise MalformedPullRequestError("number")

        fields = {
            "id": payload.get("id"),
            "number": number,
            "author": _nested(payload, "user", "login"),
            "draft": payload.get("draft") or False,
            "head_ref": _nested(payload, "head", "ref"),
            "base_ref": _nested(payload, "base", "ref"),
            "labels": [
                label["name"]
                for label in payload.get("labels") or []
                if isinstance(label, Mapping) and label.get("name")
            ],
        }
        for required in ("author", "head_ref", "base_ref"):
            if fields[required] is None:
                raise MalformedPullRequestError(_PAYLOAD_PATHS[required], number)

        try:
            return cls(**fields)
        except ValidationError as e:
            field = str(e.errors()[0]["loc"][0])
            raise MalformedPullRequestError(
                _PAYLOAD_PATHS.get(field, field), number
            ) from e


_PAYLOAD_PATHS = {
    "author": "user.login",
    "head_ref": "head.ref",
    "base_ref": "base.ref",
}


def _nested(payload: Mapping[str, Any], key: str, attribute: str) -> Any:
    value = payload.get(key)
    if not isinstance(value, Mapping):
        return None
    return value.get(attribute)
