"""Functional core - pure business logic with no I/O."""

from .blocks import ContentNode, NodeKind
from .pagination import Page, iter_pages, paginate
from .report import format_task, render_report, report_to_json
from .search import NoteSearch, extract_notes, find_heading, resolve_account
from .tasks import Account, PropertyNames, TaskResult, WorkItem
from .window import CutoffWindow, resolve_window

__all__ = [
    # Blocks
    "ContentNode",
    "NodeKind",
    # Pagination
    "Page",
    "iter_pages",
    "paginate",
    # Search
    "NoteSearch",
    "find_heading",
    "extract_notes",
    "resolve_account",
    # Tasks
    "Account",
    "PropertyNames",
    "TaskResult",
    "WorkItem",
    # Window
    "CutoffWindow",
    "resolve_window",
    # Report
    "format_task",
    "render_report",
    "report_to_json",
]
