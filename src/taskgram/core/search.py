"""Heading and note searches over paginated block children.

The searches take a ``list_children(container_id, cursor)`` callable rather
than a client, so they stay free of I/O and can run against any source.
"""

from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from typing import Callable

from taskgram.errors import AccountNotFound, NotFound

from .blocks import ContentNode
from .pagination import Page, iter_pages, paginate
from .tasks import Account, find_account

ListChildren = Callable[[str, str | None], Page[ContentNode]]


@dataclass
class NoteSearch:
    """Notes collected under a heading. found is False when none qualified."""

    notes: list[str] = field(default_factory=list)
    found: bool = False


def find_heading(
    list_children: ListChildren,
    container_id: str,
    since: datetime | None,
    name: str,
) -> ContentNode:
    """
    Find the first heading named ``name`` edited strictly after ``since``.

    Pages are fetched lazily; once a page yields a match no further pages
    are requested. Raises NotFound if no heading qualifies.
    """
    for page in iter_pages(partial(list_children, container_id)):
        for node in page.items:
            if node.kind.is_heading and node.edited_after(since) and node.text == name:
                return node
    raise NotFound(f"heading {name!r} not found in {container_id}")


def extract_notes(
    list_children: ListChildren,
    container_id: str,
    since: datetime | None,
) -> NoteSearch:
    """Collect paragraph and list item text edited after ``since``, in order."""
    notes = [
        node.text
        for node in paginate(partial(list_children, container_id))
        if node.kind.is_note and node.edited_after(since)
    ]
    return NoteSearch(notes=notes, found=bool(notes))


def resolve_account(
    list_accounts: Callable[[str | None], Page[Account]],
    name: str,
) -> Account:
    """Find an account by display name, stopping at the first matching page."""
    for page in iter_pages(list_accounts):
        account = find_account(page.items, name)
        if account:
            return account
    raise AccountNotFound(name)
