"""Pure report rendering - no I/O dependencies."""

import json
from dataclasses import asdict

from .tasks import TaskResult

DONE_LABEL = "YESTERDAY:"
PENDING_LABEL = "TODAY:"


def format_task(result: TaskResult) -> str:
    """
    Format one task and its notes.

    - [Title](url) #tag1 #tag2
      - first note
      - second note
    """
    line = f"- [{result.title}]({result.url})"
    for tag in result.tags:
        line += f" #{tag.lower()}"
    lines = [line]
    lines.extend(f"  - {note}" for note in result.notes)
    return "\n".join(lines)


def format_section(label: str, results: list[TaskResult]) -> str:
    """Labeled section, or "" when no task has notes."""
    body = [format_task(r) for r in results if r.notes]
    if not body:
        return ""
    return "\n".join([label, *body])


def render_report(done: list[TaskResult], pending: list[TaskResult]) -> str:
    """Render the done section, then the pending section, skipping empty ones."""
    sections = [
        format_section(DONE_LABEL, done),
        format_section(PENDING_LABEL, pending),
    ]
    return "\n\n".join(s for s in sections if s)


def report_to_json(done: list[TaskResult], pending: list[TaskResult]) -> str:
    return json.dumps(
        {
            "done": [asdict(r) for r in done if r.notes],
            "pending": [asdict(r) for r in pending if r.notes],
        },
        indent=2,
    )
