"""
Reference clock (fixed UTC+3, Asia/Riyadh without DST).

Every recurrence decision reads "now" from here instead of the host timezone,
so results are the same wherever the process runs. The clock is injected into
services; tests pass FixedClock.
"""
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Callable

REFERENCE_UTC_OFFSET_HOURS = 3
LAST_INSTANT_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class TimeRemaining:
    days: int
    hours: int
    minutes: int
    seconds: int
    total_seconds: int
    is_complete: bool


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SaudiClock:
    def __init__(
        self,
        offset_hours: int = REFERENCE_UTC_OFFSET_HOURS,
        utcnow: Callable[[], datetime] | None = None,
    ):
        self.offset_hours = offset_hours
        self.tz = timezone(timedelta(hours=offset_hours))
        self._utcnow = utcnow or _utcnow

    def reference_now(self) -> datetime:
        """Current instant at the reference offset, as a naive datetime."""
        return self._utcnow().astimezone(self.tz).replace(tzinfo=None)

    def has_passed_end_of_day(self, target: datetime, now: datetime | None = None) -> bool:
        """True once now is strictly after 23:59:59.999 of target's calendar day."""
        if now is None:
            now = self.reference_now()
        return now > datetime.combine(target.date(), LAST_INSTANT_OF_DAY)

    def time_remaining(self, target: datetime, now: datetime | None = None) -> TimeRemaining:
        if now is None:
            now = self.reference_now()
        diff = (target - now).total_seconds()
        if diff <= 0:
            return TimeRemaining(0, 0, 0, 0, 0, True)
        total = int(diff)
        return TimeRemaining(
            days=total // 86400,
            hours=(total % 86400) // 3600,
            minutes=(total % 3600) // 60,
            seconds=total % 60,
            total_seconds=total,
            is_complete=False,
        )


class FixedClock(SaudiClock):
    """Clock frozen at one reference instant (naive, already in reference time)."""

    def __init__(self, instant: datetime, offset_hours: int = REFERENCE_UTC_OFFSET_HOURS):
        super().__init__(offset_hours=offset_hours)
        self.instant = instant

    def reference_now(self) -> datetime:
        return self.instant


def get_clock() -> SaudiClock:
    from nabbihni.config import get_settings

    return SaudiClock(offset_hours=get_settings().REFERENCE_UTC_OFFSET_HOURS)
