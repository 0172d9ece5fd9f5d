"""
Abstract Base Class for Pull Request Clients.

Defines the interface the enforcement run needs from a repository hosting
service. Implementations handle authentication, transport and pagination.
"""

from abc import ABC, abstractmethod
from typing import List

from clients.models import PullRequestRecord


class PullRequestClient(ABC):
    """
    Abstract base class for pull request clients.

    Implementations should handle:
    - Authentication with the hosting service
    - Listing open pull requests as PullRequestRecord snapshots
    - Commenting on and closing a pull request
    """

    @abstractmethod
    async def get_open_pull_requests(self) -> List[PullRequestRecord]:
        """
        Fetch all currently open pull requests.

        Returns:
            List[PullRequestRecord]: Open pull requests, in no particular order.

        Raises:
            Exception: If fetching fails
        """
        pass

    @abstractmethod
    async def close_pull_request(self, pr_number: int, comment: str) -> None:
        """
        Post ``comment`` on a pull request, then close it.

        Args:
            pr_number (int): Pull request number.
            comment (str): Explanation posted before closing.

        Raises:
            Exception: If commenting or closing fails
        """
        pass
