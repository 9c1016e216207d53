"""Adapters - I/O implementations of ports."""

from .notion_api import NotionAdapter

__all__ = [
    "NotionAdapter",
]
