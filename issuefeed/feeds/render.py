"""Serialize a feed stream to RSS 2.0, Atom or JSON Feed 1.1.

RSS and Atom go through feedgen; JSON Feed is built from Pydantic models.
Items are written in emission order.
"""

from datetime import UTC, datetime
from typing import Callable, Dict, List, Sequence

from feedgen.feed import FeedGenerator
from pydantic import BaseModel, Field

from issuefeed.errors import FeedRenderError
from issuefeed.feeds.stream import FeedStream
from issuefeed.models import FeedInfo, FeedItem

JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"


def _aware(dt: datetime) -> datetime:
    # feedgen rejects naive datetimes
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)


def _generator(info: FeedInfo, items: Sequence[FeedItem]) -> FeedGenerator:
    fg = FeedGenerator()
    # RSS <author> needs an email, so item authors go out as dc:creator
    fg.load_extension("dc", atom=False, rss=True)
    fg.id(info.link)
    fg.title(info.title)
    fg.link(href=info.link, rel="alternate")
    fg.description(info.description or info.title)
    fg.author({"name": info.author})
    updated = max((item.created for item in items), key=_aware, default=info.created)
    fg.updated(_aware(updated))
    for item in items:
        fe = fg.add_entry(order="append")
        fe.id(item.link)
        fe.guid(item.link, permalink=False)
        fe.title(item.title)
        fe.link(href=item.link)
        fe.description(item.description or item.title)
        fe.author({"name": item.author})
        fe.dc.dc_creator(item.author)
        fe.published(_aware(item.created))
        fe.updated(_aware(item.created))
    return fg


def to_rss(info: FeedInfo, items: Sequence[FeedItem]) -> str:
    return _generator(info, items).rss_str(pretty=True).decode("utf-8")


def to_atom(info: FeedInfo, items: Sequence[FeedItem]) -> str:
    return _generator(info, items).atom_str(pretty=True).decode("utf-8")


class JsonFeedAuthor(BaseModel):
    name: str


class JsonFeedItem(BaseModel):
    id: str
    url: str
    title: str
    content_text: str
    date_published: datetime
    authors: List[JsonFeedAuthor] = Field(default_factory=list)


class JsonFeed(BaseModel):
    """JSON Feed 1.1 document (https://www.jsonfeed.org/version/1.1/)."""

    version: str = JSON_FEED_VERSION
    title: str
    home_page_url: str
    description: str
    authors: List[JsonFeedAuthor] = Field(default_factory=list)
    items: List[JsonFeedItem] = Field(default_factory=list)


def to_json(info: FeedInfo, items: Sequence[FeedItem]) -> str:
    doc = JsonFeed(
        title=info.title,
        home_page_url=info.link,
        description=info.description,
        authors=[JsonFeedAuthor(name=info.author)],
        items=[
            JsonFeedItem(
                id=item.link,
                url=item.link,
                title=item.title,
                content_text=item.description,
                date_published=_aware(item.created),
                authors=[JsonFeedAuthor(name=item.author)],
            )
            for item in items
        ],
    )
    return doc.model_dump_json(indent=2)


FORMATS: Dict[str, tuple[Callable[[FeedInfo, Sequence[FeedItem]], str], str]] = {
    "rss": (to_rss, "application/rss+xml; charset=utf-8"),
    "atom": (to_atom, "application/atom+xml; charset=utf-8"),
    "json": (to_json, "application/feed+json; charset=utf-8"),
}


def render_feed(stream: FeedStream, fmt: str) -> tuple[str, str]:
    """Render a snapshot of stream in fmt ("rss", "atom" or "json").

    Returns (body, content type). Raises FeedRenderError for unknown
    formats or content the serializer rejects.
    """
    if fmt not in FORMATS:
        raise FeedRenderError(f"Unknown feed format: {fmt}")
    render, content_type = FORMATS[fmt]
    try:
        return render(stream.info, stream.snapshot()), content_type
    except ValueError as e:
        raise FeedRenderError(f"Failed to render {fmt} feed: {e}") from e
