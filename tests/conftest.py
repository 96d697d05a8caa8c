"""Shared fixtures: in-memory issue tracker and helpers to build models."""

from datetime import UTC, datetime, timedelta
from typing import Dict, List, Sequence

import pytest

from issuefeed.adapters.base import IssueTrackerAdapter, TrackerError
from issuefeed.feeds.registry import FeedRegistry
from issuefeed.models import Comment, Issue, Repository
from issuefeed.scanner import RepoScanner

T0 = datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC)


def make_issue(issue_id: int, number: int, comments: int = 0, created_at: datetime = T0, **kw) -> Issue:
    return Issue(
        id=issue_id,
        number=number,
        title=kw.pop("title", f"Issue {number}"),
        body=kw.pop("body", f"Body of {number}"),
        url=f"https://api.github.com/repos/owner/repo/issues/{number}",
        author=kw.pop("author", "octocat"),
        comments=comments,
        created_at=created_at,
        **kw,
    )


def make_comment(comment_id: int, created_at: datetime, author: str = "hubot") -> Comment:
    return Comment(
        id=comment_id,
        url=f"https://api.github.com/repos/owner/repo/issues/comments/{comment_id}",
        body=f"Comment {comment_id}",
        author=author,
        created_at=created_at,
    )


class FakeTracker(IssueTrackerAdapter):
    """Issue tracker backed by dicts; honours since like GitHub (inclusive)."""

    def __init__(self) -> None:
        self.issues: Dict[str, List[Issue]] = {}
        self.comments: Dict[int, List[Comment]] = {}
        self.failing: set[str] = set()
        self.failing_comments: set[int] = set()
        self.repo_failures: set[str] = set()
        self.calls: List[tuple] = []

    def add_issue(self, repo: str, issue: Issue) -> Issue:
        self.issues.setdefault(repo, []).append(issue)
        return issue

    def add_comment(self, repo: str, issue: Issue, comment: Comment) -> Issue:
        """Append a comment and bump the issue's upstream comment count."""
        self.comments.setdefault(issue.number, []).append(comment)
        updated = issue.model_copy(update={"comments": issue.comments + 1})
        self.issues[repo] = [updated if i.id == issue.id else i for i in self.issues[repo]]
        return updated

    def get_repository(self, owner: str, repo: str) -> Repository:
        self.calls.append(("get_repository", owner, repo))
        if f"{owner}/{repo}" in self.repo_failures:
            raise TrackerError("404: Not Found")
        return Repository(
            owner=owner,
            name=repo,
            description="A repo",
            html_url=f"https://github.com/{owner}/{repo}",
            owner_login=owner,
            created_at=T0 - timedelta(days=365),
        )

    def list_issues(self, owner: str, repo: str, labels: Sequence[str], state: str = "open") -> List[Issue]:
        full = f"{owner}/{repo}"
        self.calls.append(("list_issues", full, tuple(labels), state))
        if full in self.failing:
            raise TrackerError("502: Bad Gateway")
        return list(self.issues.get(full, []))

    def list_comments(self, owner: str, repo: str, issue_number: int, since: datetime | None = None) -> List[Comment]:
        self.calls.append(("list_comments", issue_number, since))
        if issue_number in self.failing_comments:
            raise TrackerError("500: Server Error")
        comments = self.comments.get(issue_number, [])
        return [c for c in comments if since is None or c.created_at >= since]


@pytest.fixture
def tracker() -> FakeTracker:
    return FakeTracker()


@pytest.fixture
def scanner(tracker: FakeTracker) -> RepoScanner:
    return RepoScanner(tracker, FeedRegistry(salt="test-salt", min_length=8))
