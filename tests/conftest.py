"""Shared fixtures for the limit enforcer tests."""

from typing import Iterable

import pytest

from clients.models import PullRequestRecord


@pytest.fixture
def make_pr():
    """Factory for open pull request snapshots."""

    def _make_pr(
        number: int,
        author: str = "alice",
        labels: Iterable[str] = (),
        draft: bool = False,
        head_ref: str = "",
        base_ref: str = "main",
    ) -> PullRequestRecord:
        return PullRequestRecord(
            id=1000 + number,
            number=number,
            author=author,
            draft=draft,
            head_ref=head_ref or f"feature/{number}",
            base_ref=base_ref,
            labels=frozenset(labels),
        )

    return _make_pr
