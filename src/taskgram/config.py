"""Configuration management for taskgram."""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

logger = logging.getLogger(__name__)

TASKGRAM_HOME = Path(os.environ.get("TASKGRAM_HOME", Path.home() / ".taskgram"))
CONFIG_FILE = TASKGRAM_HOME / "taskgram.conf"


@dataclass
class NotionTarget:
    """One Notion database to collect notes from."""

    name: str = "notion"
    api_key: str = ""
    database_id: str = ""
    user_id: str = ""
    username: str = ""
    timeout: str = "30s"
    heading_done: str = "Done"
    heading_todo: str = "To Do"
    assign_property: str = "Assign"
    title_property: str = "Description"
    tags_property: str = "Project"


@dataclass
class SearchSettings:
    """Search window settings. Relative times and absolute dates exclude each other."""

    start_time: str = ""
    end_time: str = ""
    start_date: str = ""
    end_date: str = ""
    timezone: str = "UTC"


@dataclass
class Config:
    """taskgram configuration."""

    notion: NotionTarget = field(default_factory=NotionTarget)
    # Per-target overrides from NOTION_TARGETS; empty means just `notion`
    target_overrides: list[dict] = field(default_factory=list)
    search: SearchSettings = field(default_factory=SearchSettings)
    max_workers: int | None = None

    @property
    def targets(self) -> list[NotionTarget]:
        """Targets to query, with missing fields taken from the top-level keys."""
        if not self.target_overrides:
            return [self.notion]
        known = set(NotionTarget.__dataclass_fields__)
        targets = []
        for i, overrides in enumerate(self.target_overrides):
            values = {k: str(v) for k, v in overrides.items() if k in known and v is not None}
            values.setdefault("name", f"notion-{i + 1}")
            targets.append(replace(self.notion, **values))
        return targets


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from taskgram.conf."""
    config = Config()
    config_file = path or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "notion_api_key":
                config.notion.api_key = value
            case "notion_database_id":
                config.notion.database_id = value
            case "notion_user_id":
                config.notion.user_id = value
            case "notion_username":
                config.notion.username = value
            case "notion_timeout":
                config.notion.timeout = value
            case "notion_targets":
                # JSON format: [{"name": "...", "database_id": "...", ...}]
                try:
                    data = json.loads(value)
                    if not isinstance(data, list):
                        raise ValueError("expected a JSON list")
                    config.target_overrides = [dict(item) for item in data]
                except (json.JSONDecodeError, TypeError, ValueError) as e:
                    logger.warning(f"Failed to parse NOTION_TARGETS JSON: {e}")
            case "heading_done_name":
                config.notion.heading_done = value
            case "heading_todo_name":
                config.notion.heading_todo = value
            case "assign_property":
                config.notion.assign_property = value
            case "title_property":
                config.notion.title_property = value
            case "tags_property":
                config.notion.tags_property = value
            case "start_time":
                config.search.start_time = value
            case "end_time":
                config.search.end_time = value
            case "start_date":
                config.search.start_date = value
            case "end_date":
                config.search.end_date = value
            case "timezone":
                config.search.timezone = value
            case "max_workers":
                try:
                    workers = int(value) if value else None
                except ValueError:
                    logger.warning(f"Ignoring non-integer MAX_WORKERS: {value!r}")
                    continue
                if workers is not None and workers < 1:
                    logger.warning(f"Ignoring non-positive MAX_WORKERS: {value!r}")
                    continue
                config.max_workers = workers

    return config
