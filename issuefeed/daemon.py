"""
issuefeed daemon: scanner thread plus feed HTTP server.

Registers the configured repositories, prints each feed token, then scans
them every scheduler.interval_seconds in a background thread while the
HTTP server answers feed requests.
"""

import logging

from issuefeed.adapters.github import GitHubAdapter
from issuefeed.config import AppConfig
from issuefeed.feeds.registry import FeedRegistry
from issuefeed.logging import IssueFeedLogging
from issuefeed.scanner import RepoScanner
from issuefeed.scheduler import start_scheduler_thread
from issuefeed.server import run_feed_server


def build_scanner(config: AppConfig) -> RepoScanner:
    """Adapter, registry and scanner from config; nothing registered yet."""
    adapter = GitHubAdapter(
        token=config.github_token_resolved,
        api_url=config.github.api_url,
        per_page=config.github.per_page,
        timeout=config.github.timeout,
    )
    registry: FeedRegistry = FeedRegistry(salt=config.feed_salt_resolved, min_length=config.feed.min_length)
    return RepoScanner(adapter, registry, include_closed=config.feed.include_closed)


def register_configured(scanner: RepoScanner, config: AppConfig) -> list[str]:
    """Register every configured repository. RegistrationError propagates."""
    log = logging.getLogger("issuefeed.daemon")
    tokens = []
    for repo in config.repositories:
        token = scanner.register_repository(repo.owner, repo.repo, repo.labels)
        log.info("Hash for feed %s/%s %s is: %s", repo.owner, repo.repo, repo.labels, token)
        tokens.append(token)
    return tokens


def run_daemon(config: AppConfig) -> None:
    """Register repositories, start the scheduler and serve feeds."""
    IssueFeedLogging(config.logging).setup()
    log = logging.getLogger("issuefeed.daemon")

    scanner = build_scanner(config)
    if not config.github_token_resolved:
        log.warning("No GitHub token configured; using unauthenticated API access.")
    register_configured(scanner, config)
    if not config.repositories:
        log.warning("No repositories configured; feeds can only be added via POST /feeds.")
    log.info(
        "issuefeed daemon started | repositories=%s | interval=%ss | registration=%s",
        len(config.repositories),
        config.scheduler.interval_seconds,
        config.server.allow_registration,
    )

    start_scheduler_thread(scanner, config.scheduler.interval_seconds)
    run_feed_server(config, scanner)
