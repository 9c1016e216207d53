"""Search window resolution - pure, takes "now" as an argument."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from taskgram.errors import ConfigError

DEFAULT_START_TIME = "24h"

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d|w)")
_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 7 * 86400,
}


@dataclass(frozen=True)
class CutoffWindow:
    """Edits strictly between start and end are in scope."""

    start: datetime
    end: datetime

    def describe(self) -> str:
        fmt = "%a, %d %b %Y %H:%M:%S %Z"
        return f"Finding notes from {self.start.strftime(fmt)!r} to {self.end.strftime(fmt)!r}:"


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration such as "24h", "90m", "2d" or "1h30m".

    A bare number is taken as seconds.
    """
    text = value.strip().lower()
    if not text:
        raise ConfigError("empty duration")
    if re.fullmatch(r"\d+(?:\.\d+)?", text):
        return timedelta(seconds=float(text))

    pos = 0
    seconds = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(text):
        raise ConfigError(f"invalid duration {value!r}")
    return timedelta(seconds=seconds)


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD date."""
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise ConfigError(f"invalid date {value!r}: {e}") from e


def get_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name or "UTC")
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone {name!r}") from e


def resolve_window(
    start_time: str = "",
    end_time: str = "",
    start_date: str = "",
    end_date: str = "",
    tz: str = "UTC",
    now: datetime | None = None,
) -> CutoffWindow:
    """
    Turn relative or absolute window settings into a CutoffWindow.

    Relative settings are durations back from now; absolute settings are
    calendar days in ``tz``, with end_date inclusive. Mixing the two forms
    raises ConfigError. With nothing set the window is the last 24 hours.
    """
    now = now or datetime.now(timezone.utc)
    relative = bool(start_time or end_time)
    absolute = bool(start_date or end_date)

    if relative and absolute:
        raise ConfigError("use either only dates or only times for search, not both")

    if absolute:
        zone = get_zone(tz)
        if not start_date:
            raise ConfigError("end date given without a start date")
        start = datetime.combine(parse_date(start_date), time.min, tzinfo=zone)
        if end_date:
            end = datetime.combine(parse_date(end_date) + timedelta(days=1), time.min, tzinfo=zone)
        else:
            end = now
    else:
        back = parse_duration(start_time or DEFAULT_START_TIME)
        if back <= timedelta(0):
            raise ConfigError(f"start time must be positive, got {start_time!r}")
        start = now - back
        end = now - parse_duration(end_time) if end_time else now

    if start >= end:
        raise ConfigError(f"window start {start.isoformat()} is not before end {end.isoformat()}")

    return CutoffWindow(start=start.astimezone(timezone.utc), end=end.astimezone(timezone.utc))
