"""Notion source interface."""

from typing import Protocol

from taskgram.core.blocks import ContentNode
from taskgram.core.pagination import Page
from taskgram.core.tasks import Account, WorkItem


class NotionSource(Protocol):
    """Interface for the paginated remote operations taskgram consumes.

    Every call raises RemoteCallError on failure.
    """

    def query_items(self, user_id: str, cursor: str | None = None) -> Page[WorkItem]:
        """One page of work items assigned to user_id."""
        ...

    def list_children(self, container_id: str, cursor: str | None = None) -> Page[ContentNode]:
        """One page of child blocks of a page or block."""
        ...

    def get_content_root(self, item_id: str) -> str:
        """Block id whose children are the item's content."""
        ...

    def list_accounts(self, cursor: str | None = None) -> Page[Account]:
        """One page of workspace users."""
        ...
