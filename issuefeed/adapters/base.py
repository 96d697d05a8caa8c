"""Abstract base for issue tracker adapters."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Sequence

from issuefeed.errors import TrackerError
from issuefeed.models import Comment, Issue, Repository

__all__ = ["IssueTrackerAdapter", "TrackerError"]


class IssueTrackerAdapter(ABC):
    """Read-only interface to an issue tracker (GitHub and compatible APIs)."""

    @abstractmethod
    def get_repository(self, owner: str, repo: str) -> Repository:
        """Fetch repository metadata."""
        ...

    @abstractmethod
    def list_issues(
        self,
        owner: str,
        repo: str,
        labels: Sequence[str],
        state: str = "open",
    ) -> List[Issue]:
        """List every issue carrying all of the given labels (all pages)."""
        ...

    @abstractmethod
    def list_comments(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        since: datetime | None = None,
    ) -> List[Comment]:
        """List every comment on an issue created at or after since (all pages)."""
        ...
