"""Data models for issues, comments, repositories and feed items (Pydantic)."""

from issuefeed.models.comment import Comment
from issuefeed.models.feed import FeedInfo, FeedItem
from issuefeed.models.issue import Issue
from issuefeed.models.repository import Repository
from issuefeed.models.state import CommentState

__all__ = ["Comment", "CommentState", "FeedInfo", "FeedItem", "Issue", "Repository"]
