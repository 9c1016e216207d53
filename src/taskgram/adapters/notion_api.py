"""Notion API adapter - HTTP client for pages, blocks and users."""

import logging

import requests

from taskgram.config import NotionTarget
from taskgram.core.blocks import ContentNode
from taskgram.core.pagination import Page
from taskgram.core.tasks import Account, WorkItem
from taskgram.core.window import parse_duration
from taskgram.errors import ConfigError, RemoteCallError

logger = logging.getLogger(__name__)

API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
PAGE_SIZE = 100


class NotionAdapter:
    """
    Notion API adapter.

    Implements NotionSource protocol. One adapter per target; the session is
    shared by every worker thread and never mutated after construction. No
    business logic - just I/O.
    """

    def __init__(self, target: NotionTarget, session: requests.Session | None = None):
        if not target.api_key:
            raise ConfigError(f"Missing Notion API key for target {target.name!r}")
        self.target = target
        self.timeout = parse_duration(target.timeout).total_seconds()
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {target.api_key}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            }
        )

    def _api_request(self, operation: str, method: str, endpoint: str, **kwargs) -> dict:
        """Make an API request with the per-call timeout."""
        logger.debug(f"{operation}: {method} {endpoint}")
        try:
            resp = self._session.request(
                method, f"{API_BASE}{endpoint}", timeout=self.timeout, **kwargs
            )
        except requests.Timeout as e:
            raise RemoteCallError(
                operation, f"timed out after {self.timeout:g}s", timed_out=True
            ) from e
        except requests.RequestException as e:
            raise RemoteCallError(operation, str(e)) from e

        if resp.status_code != 200:
            try:
                message = resp.json().get("message", resp.text)
            except ValueError:
                message = resp.text
            raise RemoteCallError(operation, f"HTTP {resp.status_code}: {message}", resp.status_code)

        return resp.json()

    @staticmethod
    def _page(data: dict, items: list) -> Page:
        return Page(items=items, next_cursor=data.get("next_cursor"), has_more=bool(data.get("has_more")))

    def query_items(self, user_id: str, cursor: str | None = None) -> Page[WorkItem]:
        """Query database pages whose assign property contains user_id."""
        body: dict = {
            "filter": {
                "and": [
                    {
                        "property": self.target.assign_property,
                        "people": {"contains": user_id},
                    }
                ]
            },
            "page_size": PAGE_SIZE,
        }
        if cursor:
            body["start_cursor"] = cursor
        data = self._api_request(
            "query database", "POST", f"/databases/{self.target.database_id}/query", json=body
        )
        return self._page(data, [WorkItem.from_api(p) for p in data.get("results", [])])

    def list_children(self, container_id: str, cursor: str | None = None) -> Page[ContentNode]:
        """List child blocks of a page or block."""
        params: dict = {"page_size": PAGE_SIZE}
        if cursor:
            params["start_cursor"] = cursor
        data = self._api_request(
            "get block children", "GET", f"/blocks/{container_id}/children", params=params
        )
        return self._page(data, [ContentNode.from_api(b) for b in data.get("results", [])])

    def get_content_root(self, item_id: str) -> str:
        """A page is also a block; its block id holds the page content."""
        data = self._api_request("get page content", "GET", f"/blocks/{item_id}")
        return data["id"]

    def list_accounts(self, cursor: str | None = None) -> Page[Account]:
        """List workspace users."""
        params: dict = {"page_size": PAGE_SIZE}
        if cursor:
            params["start_cursor"] = cursor
        data = self._api_request("list users", "GET", "/users", params=params)
        return self._page(data, [Account.from_api(u) for u in data.get("results", [])])
