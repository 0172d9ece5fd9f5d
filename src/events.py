"""
Triggering Event Module.

Identifies the pull request that triggered the run from the GitHub Actions
event name and payload file.
"""

import json
from typing import Any, Dict

from errors import ConfigurationError

PULL_REQUEST_EVENTS = frozenset({"pull_request", "pull_request_target"})


def load_event_payload(event_path: str) -> Dict[str, Any]:
    """Read the JSON event payload written by the runner."""
    if not event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set")
    try:
        with open(event_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Could not read event payload {event_path}: {e}") from e

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Event payload {event_path} is not a JSON object")
    return payload


def triggering_pull_request_number(event_name: str, payload: Dict[str, Any]) -> int:
    """
    Extract the triggering pull request number from an event.

    Args:
        event_name (str): Event name, e.g. ``pull_request``.
        payload (Dict[str, Any]): Event payload.

    Returns:
        int: The pull request number.

    Raises:
        ConfigurationError: If the event is not a pull request event or the
            payload carries no pull request number.
    """
    pull_request = payload.get("pull_request")
    if event_name not in PULL_REQUEST_EVENTS or not isinstance(pull_request, dict):
        raise ConfigurationError("This action can only be used with pull request events")

    number = pull_request.get("number")
    if not isinstance(number, int) or isinstance(number, bool):
        raise ConfigurationError("The pull request event payload has no pull request number")
    return number


def load_triggering_pull_request_number(event_name: str, event_path: str) -> int:
    """Validate the event name, then read the pull request number from its payload."""
    if event_name not in PULL_REQUEST_EVENTS:
        raise ConfigurationError("This action can only be used with pull request events")
    return triggering_pull_request_number(event_name, load_event_payload(event_path))
