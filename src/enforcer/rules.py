"""
Limit Rules.

Each rule is a pure check of (open pull requests, limits, triggering pull
request) that returns a violation or None. ``DEFAULT_RULES`` fixes the order
in which the enforcer evaluates them; the first violation wins.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from config import logger
from clients.models import PullRequestRecord
from enforcer.models import LimitConfiguration, RuleKind, RuleViolation

CLOSING_NOTICE = "Sorry, this pull request will be closed."


class LimitRule(ABC):
    """Base class for limit rules."""

    kind: RuleKind

    @abstractmethod
    def evaluate(
        self,
        open_prs: Sequence[PullRequestRecord],
        limits: LimitConfiguration,
        triggering_pr: PullRequestRecord,
    ) -> Optional[RuleViolation]:
        """
        Check the triggering pull request against this rule.

        Args:
            open_prs (Sequence[PullRequestRecord]): All open pull requests.
            limits (LimitConfiguration): Limits in effect.
            triggering_pr (PullRequestRecord): Pull request that triggered the run.

        Returns:
            Optional[RuleViolation]: The violation, or None if the rule holds
                or is disabled.
        """
        pass


class RepoLimitRule(LimitRule):
    """Caps the number of open pull requests in the repository."""

    kind = RuleKind.REPO

    def evaluate(
        self,
        open_prs: Sequence[PullRequestRecord],
        limits: LimitConfiguration,
        triggering_pr: PullRequestRecord,
    ) -> Optional[RuleViolation]:
        if not limits.repo_limit:
            logger.debug("There is no repo PR limit set")
            return None

        logger.debug(
            {
                "message": "Current number of open PRs in the repo",
                "open_prs": len(open_prs),
                "limit": limits.repo_limit,
            }
        )
        if len(open_prs) > limits.repo_limit:
            logger.debug("There are more PRs open in this repo than the limit allows")
            return RuleViolation(
                rule=self.kind,
                message=f"{CLOSING_NOTICE} The limit for open pull requests was exceeded.",
            )

        logger.debug(
            "This PR has not been limited by the amount of PRs currently open in this repo"
        )
        return None


class AuthorLimitRule(LimitRule):
    """Caps the number of open pull requests per author."""

    kind = RuleKind.AUTHOR

    def evaluate(
        self,
        open_prs: Sequence[PullRequestRecord],
        limits: LimitConfiguration,
        triggering_pr: PullRequestRecord,
    ) -> Optional[RuleViolation]:
        if not limits.per_author_limit:
            logger.debug("There is no author PR limit set")
            return None

        author_prs = [pr for pr in open_prs if pr.author == triggering_pr.author]
        logger.debug(
            {
                "message": "Current number of open PRs for author",
                "author": triggering_pr.author,
                "open_prs": len(author_prs),
                "limit": limits.per_author_limit,
            }
        )
        if len(author_prs) <= limits.per_author_limit:
            logger.debug(
                "This PR has not been limited by the amount of PRs the author has open"
            )
            return None

        logger.debug("The author of this PR has more PRs open than the limit allows")
        others = sorted(
            (pr for pr in author_prs if pr.number != triggering_pr.number),
            key=lambda pr: pr.number,
        )
        return RuleViolation(
            rule=self.kind,
            message=self._message(limits.per_author_limit, triggering_pr.author, others),
        )

    @staticmethod
    def _message(limit: int, author: str, others: List[PullRequestRecord]) -> str:
        header = f"{CLOSING_NOTICE} You have too many open PRs (limit: {limit})."
        if not others:
            return (
                f"{header}\n\nNo other open PRs were found for @{author} "
                "(unexpected if limit exceeded)."
            )

        numbers = ", ".join(f"#{pr.number}" for pr in others)
        details = "\n".join(f"- {pr.describe()}" for pr in others)
        return f"{header}\n\nOther open PRs counted for @{author}: {numbers}\n{details}"


class LabelLimitRule(LimitRule):
    """
    Caps the number of open pull requests carrying any one limited label.

    Counts include the triggering pull request: each label on it starts at 1
    and gains one for every other open pull request with the same label.
    """

    kind = RuleKind.LABEL

    def evaluate(
        self,
        open_prs: Sequence[PullRequestRecord],
        limits: LimitConfiguration,
        triggering_pr: PullRequestRecord,
    ) -> Optional[RuleViolation]:
        limit = limits.per_label_limit
        limited_labels = limits.limited_labels

        if not limit:
            logger.debug("There are no label PR limits set")
            return None

        if not limited_labels:
            logger.debug("There are no labels specified to be limited")
            return None

        labels_on_pr = sorted(triggering_pr.labels & limited_labels)
        if not labels_on_pr:
            logger.debug("This PR does not have any labels that need to be limited")
            return None

        logger.debug(
            {
                "message": "This PR has limited labels",
                "labels": ", ".join(labels_on_pr),
            }
        )

        others = [
            pr
            for pr in open_prs
            if pr.number != triggering_pr.number and pr.labels & limited_labels
        ]
        if not others:
            logger.debug("There are no other open PRs that have limited labels")
            return None

        counts = self.count_labels(labels_on_pr, others)
        logger.debug(
            {"message": "Open PRs per limited label", "counts": counts, "limit": limit}
        )

        exceeded = [(label, count) for label, count in counts.items() if count > limit]
        if not exceeded:
            logger.debug("This PR has not been limited by its labels")
            return None

        logger.debug("There are too many open PRs with these labels")
        return RuleViolation(rule=self.kind, message=self._message(limit, exceeded))

    @staticmethod
    def count_labels(
        labels: Sequence[str], other_prs: Sequence[PullRequestRecord]
    ) -> Dict[str, int]:
        """Count open pull requests per label, starting at 1 for the trigger."""
        return {
            label: 1 + sum(1 for pr in other_prs if label in pr.labels)
            for label in labels
        }

    @staticmethod
    def _message(limit: int, exceeded: List[Tuple[str, int]]) -> str:
        summary = ", ".join(f"{label} ({count})" for label, count in exceeded)
        return (
            f"{CLOSING_NOTICE} The limit for open PRs with these labels was exceeded."
            f"\n\nLabels over the limit (limit: {limit}): {summary}"
        )


DEFAULT_RULES: Tuple[LimitRule, ...] = (
    RepoLimitRule(),
    AuthorLimitRule(),
    LabelLimitRule(),
)
