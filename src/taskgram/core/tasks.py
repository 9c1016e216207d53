"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime

from taskgram.errors import TitleUnavailable

from .blocks import parse_timestamp, rich_text


@dataclass(frozen=True)
class PropertyNames:
    """Names of the database properties taskgram reads."""

    assign: str = "Assign"
    title: str = "Description"
    tags: str = "Project"


@dataclass
class WorkItem:
    """A database page assigned to the configured account."""

    id: str
    url: str
    last_edited: datetime
    properties: dict = field(default_factory=dict)

    def edited_within(self, start: datetime, end: datetime) -> bool:
        """Last edit strictly inside (start, end)."""
        return start < self.last_edited < end

    def title(self, name: str = "Description") -> str:
        """
        Title text of the titled property.

        Raises TitleUnavailable if the property is missing or is not a
        title property. A title property with no fragments gives "".
        """
        prop = self.properties.get(name)
        if prop is None:
            raise TitleUnavailable(f"cannot read title, no {name!r} property")
        if prop.get("type") != "title":
            raise TitleUnavailable(f"cannot read title, {name!r} is not a title property")
        return rich_text(prop.get("title"))

    def tags(self, name: str = "Project") -> list[str]:
        """Option names of a multi-select property. Missing property gives []."""
        prop = self.properties.get(name)
        if not prop or prop.get("type") != "multi_select":
            return []
        return [option["name"] for option in prop.get("multi_select") or [] if option.get("name")]

    @classmethod
    def from_api(cls, data: dict) -> "WorkItem":
        """Create WorkItem from a Notion page object."""
        return cls(
            id=data["id"],
            url=data.get("url", ""),
            last_edited=parse_timestamp(data["last_edited_time"]),
            properties=data.get("properties") or {},
        )


@dataclass
class Account:
    """A Notion workspace user."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict) -> "Account":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
        )


@dataclass
class TaskResult:
    """Notes extracted from one work item under one heading."""

    title: str
    url: str
    tags: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def find_account(accounts: list[Account], name: str) -> Account | None:
    """First account whose display name equals name exactly."""
    return next((a for a in accounts if a.name == name), None)

