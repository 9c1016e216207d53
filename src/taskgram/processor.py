"""Per-page note collection.

collect_notes is the unit of work the engine fans out. It never raises for
a failure that belongs to one page: those are logged and turn into "no
result" so sibling pages keep going.
"""

import logging
from datetime import datetime

from .core.search import extract_notes, find_heading
from .core.tasks import PropertyNames, TaskResult, WorkItem
from .errors import NotFound, RemoteCallError, TitleUnavailable
from .ports import NotionSource

logger = logging.getLogger(__name__)


def collect_notes(
    source: NotionSource,
    item: WorkItem,
    since: datetime | None,
    heading_name: str,
    fields: PropertyNames = PropertyNames(),
) -> TaskResult | None:
    """
    Collect notes under ``heading_name`` on one page.

    ``since`` is the cutoff for both the heading and its notes; None means
    no cutoff. Returns None when the page has nothing to report or a step
    failed.
    """
    try:
        title = item.title(fields.title)
    except TitleUnavailable as e:
        logger.warning(f"get page title {item.id}: {e}")
        return None

    tags = item.tags(fields.tags)

    try:
        root_id = source.get_content_root(item.id)
    except RemoteCallError as e:
        logger.warning(f"get page content {item.id}: {e}")
        return None

    try:
        heading = find_heading(source.list_children, root_id, since, heading_name)
    except NotFound:
        logger.debug(f"No {heading_name!r} heading on {title!r}")
        return None
    except RemoteCallError as e:
        logger.warning(f"search heading {heading_name!r} on {item.id}: {e}")
        return None

    try:
        search = extract_notes(source.list_children, heading.id, since)
    except RemoteCallError as e:
        logger.warning(f"search notes under {heading_name!r} on {item.id}: {e}")
        return None

    if not search.found:
        logger.debug(f"No notes under {heading_name!r} on {title!r}")
        return None

    return TaskResult(title=title, url=item.url, tags=tags, notes=search.notes)
