"""
GitHub Pull Request Client Module.

Lists open pull requests and closes pull requests through the GitHub REST
API using PyGithub. Failures are logged and re-raised; nothing is retried.
"""

from typing import Any, Dict, List, Optional

from github import Auth, Github
from github.PullRequest import PullRequest
from github.Repository import Repository

from config import logger
from clients.base import PullRequestClient
from clients.models import PullRequestRecord, PullRequestState


class GitHubPullRequestClient(PullRequestClient):
    """
    GitHubPullRequestClient reads and closes pull requests of one repository.
    """

    def __init__(
        self,
        github_token: str,
        repo_name: str,
        base_url: Optional[str] = None,
        github: Optional[Github] = None,
    ):
        """Initialize the client with authentication and target repository.

        Args:
            github_token (str): GitHub API token for authentication.
            repo_name (str): Full repository name (e.g., 'owner/repo').
            base_url (Optional[str]): API base URL, for GitHub Enterprise.
            github (Optional[Github]): Preconfigured PyGithub client.
        """
        if github is None:
            kwargs = {"base_url": base_url} if base_url else {}
            github = Github(auth=Auth.Token(github_token), **kwargs)
        self.github = github
        self.repo_name = repo_name
        self._repo: Optional[Repository] = None

    @property
    def repo(self) -> Repository:
        if self._repo is None:
            self._repo = self.github.get_repo(self.repo_name)
        return self._repo

    @staticmethod
    def _get_pr_data(pr: PullRequest) -> Dict[str, Any]:
        """Collect the mapped fields of a listed pull request.

        Reads only attributes filled in by the list response, so PyGithub does
        not fetch each pull request again.

        Args:
            pr (PullRequest): Pull request yielded by ``repo.get_pulls``.

        Returns:
            Dict[str, Any]: Payload in the shape of the REST API response.
        """
        return {
            "id": pr.id,
            "number": pr.number,
            "user": {"login": pr.user.login} if pr.user is not None else None,
            "draft": pr.draft,
            "head": {"ref": pr.head.ref} if pr.head is not None else None,
            "base": {"ref": pr.base.ref} if pr.base is not None else None,
            "labels": [{"name": label.name} for label in pr.labels or []],
        }

    async def get_open_pull_requests(self) -> List[PullRequestRecord]:
        """
        Fetch the open pull requests of the repository.

        Returns:
            List[PullRequestRecord]: One snapshot per open pull request.

        Raises:
            MalformedPullRequestError: If a pull request payload is incomplete.
            GithubException: If the API request fails.
        """
        logger.info(
            {"message": "Fetching open pull requests", "repository": self.repo_name}
        )
        try:
            open_prs = [
                PullRequestRecord.from_payload(self._get_pr_data(pr))
                for pr in self.repo.get_pulls(state=PullRequestState.OPEN.value)
            ]
        except Exception as e:
            logger.error(
                {
                    "message": "Fetching open pull requests failed",
                    "repository": self.repo_name,
                    "error": str(e),
                }
            )
            raise

        logger.debug(
            {
                "message": "Open pull requests",
                "repository": self.repo_name,
                "pull_requests": [pr.model_dump(mode="json") for pr in open_prs],
            }
        )
        return open_prs

    async def close_pull_request(self, pr_number: int, comment: str) -> None:
        """
        Comment on a pull request and close it.

        Args:
            pr_number (int): Pull request number.
            comment (str): Explanation posted before closing.

        Raises:
            GithubException: If the API request fails.
        """
        logger.info(
            {
                "message": "Closing pull request",
                "repository": self.repo_name,
                "pull_request": pr_number,
            }
        )
        try:
            pull = self.repo.get_pull(pr_number)
            pull.create_issue_comment(comment)
            pull.edit(state=PullRequestState.CLOSED.value)
        except Exception as e:
            logger.error(
                {
                    "message": "Closing pull request failed",
                    "repository": self.repo_name,
                    "pull_request": pr_number,
                    "error": str(e),
                }
            )
            raise
