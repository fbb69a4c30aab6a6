"""
Serialized instant helpers

Instants are exchanged as "YYYY-MM-DDTHH:MM:SS" strings with no timezone suffix.
They are already in the reference civil calendar (UTC+3) and are parsed without
any shift.
"""
from datetime import date, datetime, time, timedelta, timezone

INSTANT_FMT = "%Y-%m-%dT%H:%M:%S"
START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59)


def format_instant(value: datetime) -> str:
    """
    Serialize an instant without timezone suffix

    Example:
        >>> format_instant(datetime(2026, 2, 17))
        "2026-02-17T00:00:00"
    """
    return value.strftime(INSTANT_FMT)


def parse_instant(raw: str | datetime | date, offset_hours: int = 3) -> datetime:
    """
    Parse a serialized instant into a naive reference-time datetime.

    Strings with an explicit offset ("Z", "+00:00") are converted to the
    reference offset first; strings without one are taken as-is.
    Date-only values become midnight.
    """
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, date):
        return datetime.combine(raw, START_OF_DAY)
    else:
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)

    if value.tzinfo is not None:
        value = value.astimezone(timezone(timedelta(hours=offset_hours))).replace(tzinfo=None)
    return value


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, START_OF_DAY)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)
