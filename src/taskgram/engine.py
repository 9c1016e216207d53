"""Fan-out/fan-in aggregation of per-page note collection.

Two invocations of collect_notes are launched per page: one for the done
heading (only for pages edited inside the window) and one for the to-do
heading (every page, no cutoff). Each invocation runs on its own worker
thread unless max_workers bounds the pool. Results are gathered by the
calling thread only, as futures complete; collection ends when every
launched future has completed, whether or not it produced a result.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum

from .core.tasks import PropertyNames, TaskResult, WorkItem
from .core.window import CutoffWindow
from .ports import NotionSource
from .processor import collect_notes

logger = logging.getLogger(__name__)


class Bucket(Enum):
    DONE = "done"
    PENDING = "pending"


@dataclass
class Aggregate:
    """Collected results plus completion accounting."""

    done: list[TaskResult] = field(default_factory=list)
    pending: list[TaskResult] = field(default_factory=list)
    launched: int = 0
    completed: int = 0

    def add(self, bucket: Bucket, result: TaskResult) -> None:
        if bucket is Bucket.DONE:
            self.done.append(result)
        else:
            self.pending.append(result)


def aggregate(
    source: NotionSource,
    items: list[WorkItem],
    window: CutoffWindow,
    done_heading: str,
    pending_heading: str,
    fields: PropertyNames = PropertyNames(),
    max_workers: int | None = None,
) -> Aggregate:
    """
    Collect done and pending notes for every item concurrently.

    Without max_workers the pool is as wide as the number of invocations
    (two per item at most), so total latency tracks the slowest page.
    """
    jobs = []
    for item in items:
        if item.edited_within(window.start, window.end):
            jobs.append((Bucket.DONE, item, window.start, done_heading))
        jobs.append((Bucket.PENDING, item, None, pending_heading))

    result = Aggregate(launched=len(jobs))
    if not jobs:
        return result

    workers = min(max_workers, len(jobs)) if max_workers else len(jobs)
    logger.debug(f"Launching {len(jobs)} note searches on {workers} workers for {len(items)} pages")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="taskgram") as ex:
        futures: dict[Future, tuple[Bucket, WorkItem]] = {
            ex.submit(collect_notes, source, item, since, heading, fields): (bucket, item)
            for bucket, item, since, heading in jobs
        }
        for fut in as_completed(futures):
            bucket, item = futures[fut]
            result.completed += 1
            try:
                task = fut.result()
            except Exception:
                logger.exception(f"Unexpected error collecting {bucket.value} notes for {item.id}")
                continue
            if task is not None:
                result.add(bucket, task)

    logger.debug(
        f"Collected {len(result.done)} done and {len(result.pending)} pending tasks "
        f"from {result.completed}/{result.launched} searches"
    )
    return result
