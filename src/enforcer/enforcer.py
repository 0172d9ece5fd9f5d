"""
Pull Request Limit Enforcer.

Decides whether the pull request that triggered a run must be closed. The
decision is a pure function of the open pull requests, the limits and the
triggering number; the caller performs the close.
"""

from typing import Optional, Sequence

from config import logger
from clients.models import PullRequestRecord
from enforcer.models import Close, Decision, LimitConfiguration, NoAction
from enforcer.rules import DEFAULT_RULES, LimitRule


class LimitEnforcer:
    """
    Evaluates limit rules in order and stops at the first violation.

    Attributes:
        rules (Sequence[LimitRule]): Rules in priority order.
    """

    def __init__(self, rules: Sequence[LimitRule] = DEFAULT_RULES):
        """Initialize the enforcer.

        Args:
            rules (Sequence[LimitRule]): Rules in priority order. Defaults to
                repo, author, then label limits.
        """
        self.rules = tuple(rules)

    def enforce(
        self,
        open_prs: Sequence[PullRequestRecord],
        limits: LimitConfiguration,
        triggering_number: int,
    ) -> Decision:
        """
        Decide what to do with the triggering pull request.

        Args:
            open_prs (Sequence[PullRequestRecord]): All open pull requests.
            limits (LimitConfiguration): Limits in effect.
            triggering_number (int): Number of the pull request that triggered the run.

        Returns:
            Decision: ``NoAction``, or ``Close`` naming the first violated rule.
        """
        logger.info(f"Using the following limits: {limits.describe()}")

        triggering_pr = find_pull_request(open_prs, triggering_number)
        if triggering_pr is None:
            logger.info("The triggering PR is closed, no action will be taken.")
            return NoAction()

        for rule in self.rules:
            violation = rule.evaluate(open_prs, limits, triggering_pr)
            if violation is not None:
                logger.info(
                    {
                        "message": "Limit exceeded, closing pull request",
                        "pull_request": triggering_number,
                        "rule": violation.rule.value,
                    }
                )
                return Close(
                    pull_request_number=triggering_number,
                    message=violation.message,
                    rule=violation.rule,
                )

        logger.info(
            {
                "message": "No limit exceeded, no action will be taken",
                "pull_request": triggering_number,
            }
        )
        return NoAction()


def find_pull_request(
    open_prs: Sequence[PullRequestRecord], number: int
) -> Optional[PullRequestRecord]:
    """Return the open pull request with ``number``, if any."""
    return next((pr for pr in open_prs if pr.number == number), None)


def enforce_limits(
    open_prs: Sequence[PullRequestRecord],
    limits: LimitConfiguration,
    triggering_number: int,
) -> Decision:
    """Evaluate the default rules against the triggering pull request."""
    return LimitEnforcer().enforce(open_prs, limits, triggering_number)
