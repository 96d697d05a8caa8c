"""GitHub API adapter."""

import logging
from datetime import UTC, datetime
from typing import Any, Dict, List, Sequence

import requests

from issuefeed.adapters.base import IssueTrackerAdapter, TrackerError
from issuefeed.adapters.pagination import DEFAULT_PER_PAGE, fetch_all_pages
from issuefeed.models import Comment, Issue, Repository
from issuefeed.models.repository import NO_DESCRIPTION

LOG = logging.getLogger("issuefeed.adapters.github")


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _format_since(since: datetime) -> str:
    if since.tzinfo is None:
        since = since.replace(tzinfo=UTC)
    return since.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _issue_from_api(data: Dict[str, Any]) -> Issue:
    user = data.get("user") or {}
    labels = [lb["name"] for lb in (data.get("labels") or []) if isinstance(lb, dict) and "name" in lb]
    return Issue(
        id=data["id"],
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
        url=data["url"],
        html_url=data.get("html_url"),
        author=user.get("login", ""),
        labels=labels,
        state=data.get("state", "open"),
        comments=data.get("comments") or 0,
        created_at=_parse_iso(data["created_at"]),
    )


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        id=data["id"],
        url=data["url"],
        html_url=data.get("html_url"),
        body=data.get("body") or "",
        author=user.get("login", ""),
        created_at=_parse_iso(data["created_at"]),
    )


def _repository_from_api(owner: str, repo: str, data: Dict[str, Any]) -> Repository:
    repo_owner = data.get("owner") or {}
    return Repository(
        owner=owner,
        name=repo,
        description=data.get("description") or NO_DESCRIPTION,
        html_url=data["html_url"],
        owner_login=repo_owner.get("login", owner),
        created_at=_parse_iso(data["created_at"]),
    )


class GitHubAdapter(IssueTrackerAdapter):
    """GitHub REST API implementation (read-only)."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        per_page: int = DEFAULT_PER_PAGE,
        timeout: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._per_page = per_page
        self._timeout = timeout
        self._session = requests.Session()
        if token:
            self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return decoded JSON. Every failure becomes TrackerError."""
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise TrackerError(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise TrackerError(f"{resp.status_code}: {msg}")
        try:
            return resp.json()
        except ValueError as e:
            raise TrackerError(f"Invalid JSON from {path}: {e}") from e

    def _get_page(self, path: str, params: Dict[str, Any], page: int) -> List[Dict[str, Any]]:
        data = self._request("GET", path, params={**params, "page": page, "per_page": self._per_page})
        if not isinstance(data, list):
            raise TrackerError(f"Expected a list from {path}, got {type(data).__name__}")
        LOG.debug("GET %s page %s: %s records", path, page, len(data))
        return data

    def get_repository(self, owner: str, repo: str) -> Repository:
        data = self._request("GET", f"/repos/{owner}/{repo}")
        try:
            return _repository_from_api(owner, repo, data)
        except (KeyError, TypeError, ValueError) as e:
            raise TrackerError(f"Malformed repository {owner}/{repo}: {e}") from e

    def list_issues(
        self,
        owner: str,
        repo: str,
        labels: Sequence[str],
        state: str = "open",
    ) -> List[Issue]:
        path = f"/repos/{owner}/{repo}/issues"
        params: Dict[str, Any] = {"state": state}
        if labels:
            # GitHub returns issues carrying all of the comma-separated labels
            params["labels"] = ",".join(labels)
        raw = fetch_all_pages(lambda page: self._get_page(path, params, page), self._per_page)
        try:
            return [_issue_from_api(d) for d in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise TrackerError(f"Malformed issue in {owner}/{repo}: {e}") from e

    def list_comments(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        since: datetime | None = None,
    ) -> List[Comment]:
        path = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"
        params: Dict[str, Any] = {}
        if since is not None:
            params["since"] = _format_since(since)
        raw = fetch_all_pages(lambda page: self._get_page(path, params, page), self._per_page)
        try:
            return [_comment_from_api(d) for d in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise TrackerError(f"Malformed comment on {owner}/{repo}#{issue_number}: {e}") from e
