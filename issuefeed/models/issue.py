"""Issue as returned by the issue listing endpoint."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class Issue(BaseModel):
    """Tracked platform issue.

    ``id`` is the platform-wide identity; ``number`` is only unique within
    one repository. ``comments`` is the aggregate comment count reported by
    the listing and is used as the change sentinel.
    """

    id: int
    number: int
    title: str
    body: str = ""
    url: str
    html_url: str | None = None
    author: str
    labels: List[str] = Field(default_factory=list)
    state: str = "open"
    comments: int = 0
    created_at: datetime
