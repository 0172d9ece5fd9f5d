"""
Main Application Entry Point.

Runs one limit enforcement for the pull request event that started the
workflow:
- Triggering event validation
- Limit configuration loading
- Fetching open pull requests
- Limit evaluation
- Closing the pull request when a limit is exceeded

Any failure is logged and turned into a non-zero exit status.
"""

import asyncio
import sys
from typing import Optional

from config import Settings, configure_logging, load_settings, logger
from errors import ConfigurationError
from events import load_triggering_pull_request_number
from clients.base import PullRequestClient
from clients.github_client import GitHubPullRequestClient
from enforcer.enforcer import enforce_limits
from enforcer.models import Close


async def run_enforcement(
    app_settings: Settings, client: Optional[PullRequestClient] = None
) -> int:
    """
    Execute one enforcement run.

    Args:
        app_settings (Settings): Configuration for this run.
        client (Optional[PullRequestClient]): Client to use. A GitHub client
            is built from the settings when omitted.

    Returns:
        int: Exit status, 0 on success and 1 on any failure.
    """
    try:
        triggering_number = load_triggering_pull_request_number(
            app_settings.github_event_name, app_settings.github_event_path
        )
        limits = app_settings.limit_configuration()

        if client is None:
            token, repo_name = app_settings.require_github_access()
            client = GitHubPullRequestClient(
                token, repo_name, base_url=app_settings.github_api_url
            )

        open_prs = await client.get_open_pull_requests()
        decision = enforce_limits(open_prs, limits, triggering_number)

        if isinstance(decision, Close):
            await client.close_pull_request(
                decision.pull_request_number, decision.message
            )
            logger.info(
                {
                    "message": "Pull request closed",
                    "pull_request": decision.pull_request_number,
                    "rule": decision.rule.value,
                }
            )

    except ConfigurationError as e:
        logger.error({"message": "Invalid configuration", "error": str(e)})
        return 1
    except Exception as e:
        logger.error({"message": "Limit enforcement failed", "error": str(e)})
        return 1

    return 0


def run() -> None:
    """Console entry point."""
    try:
        app_settings = load_settings()
    except ConfigurationError as e:
        logger.error({"message": "Invalid configuration", "error": str(e)})
        sys.exit(1)

    configure_logging(app_settings)
    sys.exit(asyncio.run(run_enforcement(app_settings)))


if __name__ == "__main__":
    run()
