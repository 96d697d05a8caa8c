"""Repository metadata, fetched once at registration."""

from datetime import datetime

from pydantic import BaseModel

NO_DESCRIPTION = "no description given"


class Repository(BaseModel):
    """Repository metadata used for the feed header."""

    owner: str
    name: str
    description: str = NO_DESCRIPTION
    html_url: str
    owner_login: str
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
