"""Live/upcoming/replay classification and listing lines."""

from __future__ import annotations

import enum
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from pydantic import BaseModel

from ..models import ContentItem, Flag

# strftime("%b") follows the process locale; listings must not.
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class TimelineState(str, enum.Enum):
    STARTED = "Started"
    UPCOMING = "Upcoming"
    REPLAY = "Replay"


class Classification(BaseModel):
    state: TimelineState
    air_time: str


def parse_instant(value: Union[int, float, str, datetime]) -> datetime:
    """Normalizes epoch milliseconds or ISO-8601 text into an aware UTC datetime."""

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def local_timezone() -> tzinfo:
    return datetime.now().astimezone().tzinfo


def format_air_time(air: datetime, now: datetime, local_zone: tzinfo) -> str:
    """``HH:MM`` on the same local calendar day as ``now``, else ``MMM DD HH:MM``."""

    local_air = air.astimezone(local_zone)
    local_now = now.astimezone(local_zone)
    clock = f"{local_air.hour:02d}:{local_air.minute:02d}"
    if local_air.date() == local_now.date():
        return clock
    return f"{MONTH_ABBREVIATIONS[local_air.month - 1]} {local_air.day:02d} {clock}"


def is_airing(air: datetime, duration_seconds: Optional[float], now: datetime) -> bool:
    if air > now:
        return False
    if duration_seconds:
        return now <= air + timedelta(seconds=round(duration_seconds))
    return True


def classify(item: ContentItem, now: datetime, local_zone: tzinfo) -> Classification:
    if item.published_at is None:
        raise ValueError(f"item {item.id} has no air date")
    if now.tzinfo is None:
        now = now.replace(tzinfo=local_zone)

    air = parse_instant(item.published_at)
    air_time = format_air_time(air, now, local_zone)
    if item.flag is not Flag.LIVE:
        return Classification(state=TimelineState.REPLAY, air_time=air_time)
    if is_airing(air, item.duration_seconds, now):
        return Classification(state=TimelineState.STARTED, air_time=air_time)
    return Classification(state=TimelineState.UPCOMING, air_time=air_time)


def describe(item: ContentItem, classification: Classification, prefix: str = "") -> str:
    if classification.state is TimelineState.STARTED:
        note = f"(STARTED  @ {classification.air_time}) "
    elif classification.state is TimelineState.UPCOMING:
        note = f"(UPCOMING @ {classification.air_time}) "
    else:
        note = f"({classification.air_time}) "
    return f"{prefix}{item.id} - {note}{item.title}"
