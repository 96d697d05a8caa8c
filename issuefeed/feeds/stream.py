"""Append-only feed stream shared between the scanner thread and HTTP readers."""

import threading

from issuefeed.models import FeedInfo, FeedItem


class FeedStream:
    """Feed header plus the items emitted so far, in emission order.

    Appends and snapshots share one lock, so a reader gets either the
    list before an append or after it, never a half-applied append.
    """

    def __init__(self, info: FeedInfo) -> None:
        self.info = info
        self._items: list[FeedItem] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def append(self, item: FeedItem) -> None:
        with self._lock:
            self._items.append(item)

    def snapshot(self) -> tuple[FeedItem, ...]:
        """Immutable copy of the current items."""
        with self._lock:
            return tuple(self._items)
