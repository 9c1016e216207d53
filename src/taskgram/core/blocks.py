"""Content node model for Notion blocks - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class NodeKind(Enum):
    """Block kinds taskgram understands. Everything else is UNSUPPORTED."""

    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    PARAGRAPH = "paragraph"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_api(cls, value: str | None) -> "NodeKind":
        try:
            kind = cls(value)
        except ValueError:
            return cls.UNSUPPORTED
        return kind

    @property
    def is_heading(self) -> bool:
        return self in HEADING_KINDS

    @property
    def is_note(self) -> bool:
        return self in NOTE_KINDS


HEADING_KINDS = frozenset({NodeKind.HEADING_1, NodeKind.HEADING_2, NodeKind.HEADING_3})
NOTE_KINDS = frozenset(
    {NodeKind.PARAGRAPH, NodeKind.BULLETED_LIST_ITEM, NodeKind.NUMBERED_LIST_ITEM}
)


def parse_timestamp(value: str) -> datetime:
    """Parse a Notion ISO timestamp ("2024-03-01T10:15:00.000Z") as aware UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def rich_text(fragments: list[dict] | None) -> str:
    """Concatenate the inline text of a rich text array."""
    text = ""
    for fragment in fragments or []:
        if "plain_text" in fragment:
            text += fragment["plain_text"] or ""
        else:
            text += (fragment.get("text") or {}).get("content", "")
    return text


@dataclass(frozen=True)
class ContentNode:
    """A child block of a page or of another block."""

    id: str
    kind: NodeKind
    text: str
    last_edited: datetime

    def edited_after(self, since: datetime | None) -> bool:
        """Strictly newer than since. A missing cutoff accepts everything."""
        if since is None:
            return True
        return self.last_edited > since

    @classmethod
    def from_api(cls, data: dict) -> "ContentNode":
        """Create ContentNode from a Notion block object."""
        kind = NodeKind.from_api(data.get("type"))
        text = ""
        if kind is not NodeKind.UNSUPPORTED:
            payload = data.get(kind.value) or {}
            # API versions before 2022-02-22 called this field "text"
            text = rich_text(payload.get("rich_text", payload.get("text")))
        return cls(
            id=data["id"],
            kind=kind,
            text=text,
            last_edited=parse_timestamp(data["last_edited_time"]),
        )
