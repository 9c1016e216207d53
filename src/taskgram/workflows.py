"""Shared workflow layer between the CLI commands.

Resolves the search window and each target's account, queries the
assigned pages, and hands them to the aggregation engine.
"""

import logging
from dataclasses import replace
from datetime import datetime
from functools import partial
from typing import Callable

from .adapters.notion_api import NotionAdapter
from .config import Config, NotionTarget
from .core.pagination import paginate
from .core.search import resolve_account
from .core.tasks import Account, PropertyNames, WorkItem
from .core.window import CutoffWindow, resolve_window
from .engine import Aggregate, aggregate
from .errors import ConfigError
from .ports import NotionSource

logger = logging.getLogger(__name__)

SourceFactory = Callable[[NotionTarget], NotionSource]


def get_window(config: Config, now: datetime | None = None) -> CutoffWindow:
    """Resolve the configured search window. Raises ConfigError."""
    s = config.search
    return resolve_window(
        start_time=s.start_time,
        end_time=s.end_time,
        start_date=s.start_date,
        end_date=s.end_date,
        tz=s.timezone,
        now=now,
    )


def property_names(target: NotionTarget) -> PropertyNames:
    return PropertyNames(
        assign=target.assign_property,
        title=target.title_property,
        tags=target.tags_property,
    )


def find_user(source: NotionSource, username: str) -> Account:
    """Look up a workspace user by display name. Raises AccountNotFound."""
    return resolve_account(source.list_accounts, username)


def resolve_target(target: NotionTarget, source: NotionSource) -> NotionTarget:
    """Return the target with user_id filled in, resolving username if needed."""
    if not target.database_id:
        raise ConfigError(f"Missing Notion database ID for target {target.name!r}")
    if target.user_id:
        return target
    if not target.username:
        raise ConfigError(f"Target {target.name!r} needs a user ID or a username")

    user = find_user(source, target.username)
    logger.warning(
        f"Your user ID in the {target.name!r} Notion target is {user.id!r}. "
        f"Add it to the config as NOTION_USER_ID to skip this lookup."
    )
    return replace(target, user_id=user.id)


def fetch_items(source: NotionSource, user_id: str) -> list[WorkItem]:
    """All pages assigned to user_id. Failure is fatal to the run."""
    return paginate(partial(source.query_items, user_id))


def collect_report(
    config: Config,
    window: CutoffWindow,
    source_factory: SourceFactory = NotionAdapter,
) -> Aggregate:
    """
    Collect done and pending notes across all configured targets.

    Every target's account is resolved before any page query is made, so
    an unknown username stops the run without partial results.
    """
    resolved = []
    for target in config.targets:
        source = source_factory(target)
        resolved.append((resolve_target(target, source), source))

    merged = Aggregate()
    for target, source in resolved:
        items = fetch_items(source, target.user_id)
        logger.info(f"{target.name}: {len(items)} assigned pages")
        part = aggregate(
            source,
            items,
            window,
            done_heading=target.heading_done,
            pending_heading=target.heading_todo,
            fields=property_names(target),
            max_workers=config.max_workers,
        )
        merged.done.extend(part.done)
        merged.pending.extend(part.pending)
        merged.launched += part.launched
        merged.completed += part.completed

    return merged
