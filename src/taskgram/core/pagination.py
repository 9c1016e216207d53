"""Cursor-following pagination - no I/O of its own."""

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of results from a paginated remote listing."""

    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None
    has_more: bool = False


def iter_pages(fetch: Callable[[str | None], Page[T]]) -> Iterator[Page[T]]:
    """
    Yield pages lazily, following next_cursor while has_more is set.

    The first call gets cursor None. Exceptions from fetch propagate and
    end the iteration. Stopping iteration early fetches no further pages.
    """
    cursor = None
    while True:
        page = fetch(cursor)
        yield page
        if not page.has_more:
            return
        cursor = page.next_cursor


def paginate(fetch: Callable[[str | None], Page[T]]) -> list[T]:
    """Fetch every page and return all items in page order."""
    items: list[T] = []
    for page in iter_pages(fetch):
        items.extend(page.items)
    return items
