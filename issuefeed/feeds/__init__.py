"""Feed streams, token registry and format rendering."""

from issuefeed.feeds.registry import FeedRegistry, InvalidTokenError
from issuefeed.feeds.render import FORMATS, render_feed
from issuefeed.feeds.stream import FeedStream

__all__ = ["FORMATS", "FeedRegistry", "FeedStream", "InvalidTokenError", "render_feed"]
