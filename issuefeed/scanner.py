"""Repository scanner: registration, change detection and feed lookup.

One RepoScanner owns every tracked repository. The scheduler thread calls
scan_all(); HTTP handlers call resolve_feed() and register_repository().

Change detection per issue:

- unknown id: emit the issue, start tracking it, then pull any comments
  that already exist;
- known id whose upstream comment count exceeds the ingested count: pull
  comments created after the last seen activity;
- otherwise: nothing.

A TrackerError aborts the rest of the repository's cycle. State already
updated in that cycle is kept; the next pass picks up where it stopped.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Sequence

from issuefeed.adapters.base import IssueTrackerAdapter
from issuefeed.errors import RegistrationError, TrackerError
from issuefeed.feeds.registry import FeedRegistry
from issuefeed.feeds.stream import FeedStream
from issuefeed.models import FeedInfo, FeedItem, Issue
from issuefeed.tracker import IssueStateTracker

LOG = logging.getLogger("issuefeed.scanner")


@dataclass
class TrackedRepository:
    """One (owner, name, labels) registration with its feed and issue state."""

    owner: str
    name: str
    labels: tuple[str, ...]
    feed: FeedStream
    state: IssueStateTracker = field(default_factory=IssueStateTracker)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}, [{' '.join(self.labels)}]"


def registration_key(owner: str, name: str, labels: Sequence[str]) -> tuple[str, str, frozenset[str]]:
    return owner.lower(), name.lower(), frozenset(labels)


class RepoScanner:
    """Tracks repositories and turns upstream changes into feed items."""

    def __init__(
        self,
        adapter: IssueTrackerAdapter,
        registry: FeedRegistry[TrackedRepository],
        include_closed: bool = False,
    ) -> None:
        self._adapter = adapter
        self._registry = registry
        self._issue_state = "all" if include_closed else "open"
        self._lock = threading.Lock()
        self._tokens: dict[tuple[str, str, frozenset[str]], str] = {}

    @property
    def repositories(self) -> List[TrackedRepository]:
        return [repo for _, repo in self.feeds()]

    def feeds(self) -> List[tuple[str, TrackedRepository]]:
        """(token, repository) pairs in registration order."""
        return self._registry.items()

    def register_repository(self, owner: str, name: str, labels: Sequence[str]) -> str:
        """Start tracking a repository and return its feed token.

        Registering the same owner, name and label set again returns the
        existing token. Raises RegistrationError if repository metadata
        cannot be fetched; nothing is added in that case.
        """
        labels = tuple(labels)
        key = registration_key(owner, name, labels)
        with self._lock:
            if key in self._tokens:
                return self._tokens[key]
            try:
                repository = self._adapter.get_repository(owner, name)
            except TrackerError as e:
                raise RegistrationError(f"Cannot register {owner}/{name}: {e}") from e
            feed = FeedStream(FeedInfo.for_repository(repository, labels))
            tracked = TrackedRepository(owner=owner, name=name, labels=labels, feed=feed)
            token = self._registry.register(tracked)
            self._tokens[key] = token
        LOG.info("Created new feed %s for repo %s", token, tracked)
        return token

    def resolve_feed(self, token: str) -> FeedStream:
        """Feed stream for token; raises InvalidTokenError if it does not resolve."""
        return self._registry.resolve(token).feed

    def scan_all(self) -> int:
        """Scan every repository once, in registration order.

        Errors are logged per repository and never stop the pass. Returns
        the number of feed items emitted.
        """
        emitted = 0
        for repo in self.repositories:
            LOG.info("Scanning %s", repo)
            try:
                emitted += self.scan_repository(repo)
            except TrackerError as e:
                LOG.warning("Scan of %s aborted: %s", repo, e)
            except Exception as e:
                LOG.exception("Unexpected error scanning %s: %s", repo, e)
        return emitted

    def scan_repository(self, repo: TrackedRepository) -> int:
        """Run one scan cycle for repo and return the number of emitted items.

        Raises TrackerError if any listing fails.
        """
        issues = self._adapter.list_issues(repo.owner, repo.name, repo.labels, state=self._issue_state)
        emitted = 0
        for issue in issues:
            if repo.state.is_new(issue):
                LOG.info("Found new issue (%s) in %s", issue.title, repo)
                repo.feed.append(FeedItem.from_issue(issue))
                repo.state.track_issue(issue)
                emitted += 1
                emitted += self._ingest_comments(repo, issue)
            elif repo.state.has_new_comments(issue):
                LOG.info("Repo %s: issue %s has new comments, adding them", repo, issue.title)
                emitted += self._ingest_comments(repo, issue)
        return emitted

    def _ingest_comments(self, repo: TrackedRepository, issue: Issue) -> int:
        since = repo.state.since(issue.id)
        comments = self._adapter.list_comments(repo.owner, repo.name, issue.number, since=since)
        emitted = 0
        for comment in comments:
            # "since" matches on update time upstream; edited older comments are not new
            if comment.created_at < since:
                LOG.debug("Skipping comment %s on #%s created before %s", comment.id, issue.number, since)
                continue
            repo.feed.append(FeedItem.from_comment(issue, comment))
            repo.state.record_comment(issue.id, comment)
            emitted += 1
        return emitted
