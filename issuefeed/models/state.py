"""Per-issue comment bookkeeping."""

from datetime import datetime

from pydantic import BaseModel, Field


class CommentState(BaseModel):
    """Last observed comment count and activity time for one issue."""

    count: int = Field(default=0, ge=0)
    last_activity: datetime
