"""Comment on an issue."""

from datetime import datetime

from pydantic import BaseModel


class Comment(BaseModel):
    """Comment on an issue."""

    id: int
    url: str
    html_url: str | None = None
    body: str = ""
    author: str
    created_at: datetime
