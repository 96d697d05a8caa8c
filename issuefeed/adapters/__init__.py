"""Issue tracker adapters (base and implementations)."""

from issuefeed.adapters.base import IssueTrackerAdapter, TrackerError
from issuefeed.adapters.github import GitHubAdapter
from issuefeed.adapters.pagination import DEFAULT_PER_PAGE, fetch_all_pages

__all__ = ["DEFAULT_PER_PAGE", "GitHubAdapter", "IssueTrackerAdapter", "TrackerError", "fetch_all_pages"]
