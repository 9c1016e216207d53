"""Ports - interfaces/protocols for external dependencies."""

from .notion_source import NotionSource

__all__ = [
    "NotionSource",
]
