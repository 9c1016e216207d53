"""Shared fixtures: an in-memory Notion source and builders for its data."""

import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from taskgram.core.blocks import ContentNode, NodeKind
from taskgram.core.pagination import Page
from taskgram.core.tasks import Account, WorkItem
from taskgram.errors import RemoteCallError

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def ago(**kwargs) -> datetime:
    return NOW - timedelta(**kwargs)


class FakeSource:
    """NotionSource backed by dicts, paging every listing by page_size."""

    def __init__(self, page_size: int = 2):
        self.page_size = page_size
        self.items: list[WorkItem] = []
        self.children: dict[str, list[ContentNode]] = {}
        self.accounts: list[Account] = []
        self.failing: set[str] = set()
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, str, str | None]] = []
        self._lock = threading.Lock()

    def _record(self, op: str, key: str, cursor: str | None) -> None:
        with self._lock:
            self.calls.append((op, key, cursor))
        if key in self.delays:
            time.sleep(self.delays[key])
        if key in self.failing:
            raise RemoteCallError(op, f"boom on {key}", status=500)

    def _slice(self, rows: list, cursor: str | None) -> Page:
        start = int(cursor or 0)
        end = start + self.page_size
        has_more = end < len(rows)
        return Page(items=rows[start:end], next_cursor=str(end) if has_more else None, has_more=has_more)

    def query_items(self, user_id: str, cursor: str | None = None) -> Page[WorkItem]:
        self._record("query_items", user_id, cursor)
        return self._slice(self.items, cursor)

    def list_children(self, container_id: str, cursor: str | None = None) -> Page[ContentNode]:
        self._record("list_children", container_id, cursor)
        return self._slice(self.children.get(container_id, []), cursor)

    def get_content_root(self, item_id: str) -> str:
        self._record("get_content_root", f"root:{item_id}", None)
        return item_id

    def list_accounts(self, cursor: str | None = None) -> Page[Account]:
        self._record("list_accounts", "users", cursor)
        return self._slice(self.accounts, cursor)

    def calls_for(self, op: str) -> list[tuple[str, str, str | None]]:
        return [c for c in self.calls if c[0] == op]


def node(id: str, kind: NodeKind, text: str, edited: datetime) -> ContentNode:
    return ContentNode(id=id, kind=kind, text=text, last_edited=edited)


def heading(id: str, text: str, edited: datetime, level: int = 2) -> ContentNode:
    return node(id, NodeKind(f"heading_{level}"), text, edited)


def bullet(id: str, text: str, edited: datetime) -> ContentNode:
    return node(id, NodeKind.BULLETED_LIST_ITEM, text, edited)


def work_item(
    id: str,
    title: str | None = None,
    edited: datetime = NOW,
    tags: list[str] | None = None,
) -> WorkItem:
    properties: dict = {}
    if title is not None:
        properties["Description"] = {
            "type": "title",
            "title": [{"type": "text", "plain_text": title, "text": {"content": title}}],
        }
    if tags is not None:
        properties["Project"] = {
            "type": "multi_select",
            "multi_select": [{"name": t} for t in tags],
        }
    return WorkItem(
        id=id,
        url=f"https://www.notion.so/{id}",
        last_edited=edited,
        properties=properties,
    )


@pytest.fixture
def source():
    return FakeSource()
