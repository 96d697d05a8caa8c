"""Walk offset-paginated listings until a short page.

The upstream is assumed never to return a short page followed by a
non-empty one. Page numbers start at 1.
"""

from typing import Callable, List, TypeVar

T = TypeVar("T")

# GitHub caps per_page at 100
DEFAULT_PER_PAGE = 100


def fetch_all_pages(fetch_page: Callable[[int], List[T]], per_page: int = DEFAULT_PER_PAGE) -> List[T]:
    """Call fetch_page(1), fetch_page(2), ... and return all records in order.

    Stops after the first page holding fewer than per_page records
    (including an empty page). Exceptions from fetch_page propagate and
    records from earlier pages are discarded.
    """
    if per_page < 1:
        raise ValueError(f"per_page must be >= 1, got {per_page}")
    records: List[T] = []
    page = 1
    while True:
        batch = fetch_page(page)
        records.extend(batch)
        if len(batch) < per_page:
            return records
        page += 1
