"""Feed header and feed entry models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from issuefeed.models.comment import Comment
from issuefeed.models.issue import Issue
from issuefeed.models.repository import Repository


class FeedInfo(BaseModel):
    """Feed-level metadata for one tracked repository."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str
    author: str
    created: datetime

    @classmethod
    def for_repository(cls, repository: Repository, labels: tuple[str, ...]) -> "FeedInfo":
        return cls(
            title=f"{repository.full_name} Labels: [{' '.join(labels)}]",
            link=repository.html_url,
            description=repository.description,
            author=repository.owner_login,
            created=repository.created_at,
        )


class FeedItem(BaseModel):
    """Single feed entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str = ""
    author: str
    created: datetime

    @classmethod
    def from_issue(cls, issue: Issue) -> "FeedItem":
        return cls(
            title=f"New Issue '{issue.title}' with matching labels found",
            link=issue.url,
            description=issue.body,
            author=issue.author,
            created=issue.created_at,
        )

    @classmethod
    def from_comment(cls, issue: Issue, comment: Comment) -> "FeedItem":
        return cls(
            title=f"New Comment on '{issue.title}' from {comment.author}",
            link=comment.url,
            description=comment.body,
            author=comment.author,
            created=comment.created_at,
        )
