"""
Reminder fire instants.

Only computes *when* a reminder fires; delivery belongs to the notification
scheduler. A timing is one of the preset names or
{"type": "custom", "offset_minutes": N} (minutes before the target).
"""
from datetime import datetime, timedelta
from typing import Any, Iterable

REMINDER_OFFSETS = {
    "at_completion": 0,
    "1_hour": 60,
    "1_day": 24 * 60,
    "1_week": 7 * 24 * 60,
}
DEFAULT_REMINDER_TIMINGS = ("at_completion", "1_day")


def _offset_minutes(timing: Any) -> int | None:
    if isinstance(timing, dict):
        if timing.get("type") != "custom":
            return None
        return timing.get("offset_minutes")
    return REMINDER_OFFSETS.get(timing)


def validate_reminder_timing(timing: Any) -> None:
    offset = _offset_minutes(timing)
    if offset is None or isinstance(offset, bool) or not isinstance(offset, int):
        raise ValueError(f"invalid reminder timing: {timing!r}")
    if offset < 0:
        raise ValueError("offset_minutes must be >= 0")


def reminder_instant(target: datetime, timing: Any, now: datetime) -> datetime | None:
    """target - offset, or None if that instant is not after now (or timing is unknown)."""
    offset = _offset_minutes(timing)
    if offset is None:
        return None
    fire_at = target - timedelta(minutes=offset)
    return fire_at if fire_at > now else None


def reminder_schedule(target: datetime, timings: Iterable[Any], now: datetime) -> list[datetime]:
    """Sorted, de-duplicated fire instants; default timings when none are set."""
    timings = list(timings) or list(DEFAULT_REMINDER_TIMINGS)
    instants = {reminder_instant(target, t, now) for t in timings}
    return sorted(i for i in instants if i is not None)
