"""
Deterministic next-occurrence resolver.

Event recurrence kinds (public holidays / observances):
- LUNAR: fixed Hijri month+day every Hijri year (1 Ramadan)
- FIXED_ANNUAL: fixed Gregorian month+day every year (Sep 23)
- SEASONAL: like FIXED_ANNUAL but almanac-anchored; falls back to SEASONAL_DATES by base id
- ONE_TIME: never recurs

User recurrence types (personal countdowns):
- SALARY / MONTHLY: day of month in the Gregorian or Hijri calendar
- DAILY: tomorrow
- WEEKLY: next given weekday (0=Sunday..6=Saturday)
- YEARLY: day of month within the reference month, this year or next

Event occurrences resolve to 00:00:00 (the holiday occupies the whole day),
user occurrences to 23:59:59 (due by end of day).
"""
import calendar
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta

from nabbihni.domain.hijri import gregorian_to_hijri, hijri_month_length, hijri_to_gregorian
from nabbihni.utils.instants import end_of_day, start_of_day

logger = logging.getLogger(__name__)

LUNAR = "lunar"
FIXED_ANNUAL = "fixed_annual"
SEASONAL = "seasonal"
ONE_TIME = "one_time"
VALID_EVENT_KINDS = frozenset({LUNAR, FIXED_ANNUAL, SEASONAL, ONE_TIME})

VALID_RECURRENCE_TYPES = frozenset({"salary", "daily", "weekly", "monthly", "yearly"})
VALID_CALENDAR_TYPES = frozenset({"gregorian", "hijri"})
VALID_ADJUSTMENT_RULES = frozenset({"smart", "none"})
LEGACY_ADJUSTMENT_RULES = {"earlier": "smart", "later": "smart"}

# Approximate astronomical / star-calendar dates; real dates drift by 1-2 days.
SEASONAL_DATES: dict[str, tuple[int, int]] = {
    "summer-start": (6, 21),   # summer solstice
    "winter-start": (12, 21),  # winter solstice
    "spring-start": (3, 20),   # spring equinox
    "fall-start": (9, 22),     # autumn equinox
    "suhail": (8, 24),         # Suhail star rising
    "al-wasm": (10, 16),
    "al-aqrab": (11, 16),
}

# Fixed Friday/Saturday weekend: Friday -> Thursday, Saturday -> Sunday (date.weekday())
WEEKEND_SHIFT = {4: -1, 5: 1}


class RecurrenceValidationError(ValueError):
    pass


@dataclass(frozen=True)
class EventRecurrence:
    kind: str
    month: int | None = None  # Hijri month for LUNAR, Gregorian otherwise
    day: int | None = None

    def __post_init__(self):
        if self.kind not in VALID_EVENT_KINDS:
            raise RecurrenceValidationError(f"invalid recurrence kind: {self.kind}")
        if self.kind == ONE_TIME and (self.month is not None or self.day is not None):
            raise RecurrenceValidationError("one_time recurrence must not carry month/day")


@dataclass(frozen=True)
class RecurrenceSettings:
    type: str
    calendar_type: str = "gregorian"
    day_of_month: int = 1
    adjustment_rule: str = "smart"
    day_of_week: int | None = None  # WEEKLY only, 0=Sunday..6=Saturday
    last_auto_advanced: datetime | None = None

    def __post_init__(self):
        rule = LEGACY_ADJUSTMENT_RULES.get(self.adjustment_rule, self.adjustment_rule)
        object.__setattr__(self, "adjustment_rule", rule)
        validate_settings(self)

    def advanced_at(self, instant: datetime) -> "RecurrenceSettings":
        return replace(self, last_auto_advanced=instant)


@dataclass(frozen=True)
class NextOccurrence:
    target_date: datetime
    was_adjusted: bool = False
    adjusted_from: datetime | None = None


def validate_settings(settings: RecurrenceSettings) -> None:
    if settings.type not in VALID_RECURRENCE_TYPES:
        raise RecurrenceValidationError(f"invalid recurrence type: {settings.type}")
    if settings.calendar_type not in VALID_CALENDAR_TYPES:
        raise RecurrenceValidationError(f"invalid calendar type: {settings.calendar_type}")
    if settings.adjustment_rule not in VALID_ADJUSTMENT_RULES:
        raise RecurrenceValidationError(f"invalid adjustment rule: {settings.adjustment_rule}")
    max_day = max_day_of_month(settings.calendar_type)
    if settings.day_of_month < 1 or settings.day_of_month > max_day:
        raise RecurrenceValidationError(f"day_of_month must be 1..{max_day}")
    if settings.type == "weekly":
        if settings.day_of_week is None:
            raise RecurrenceValidationError("weekly requires day_of_week")
        if settings.day_of_week < 0 or settings.day_of_week > 6:
            raise RecurrenceValidationError("day_of_week must be 0..6")


def max_day_of_month(calendar_type: str) -> int:
    return 30 if calendar_type == "hijri" else 31


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def sunday_based_weekday(d: date) -> int:
    """0=Sunday..6=Saturday."""
    return (d.weekday() + 1) % 7


# --- Event recurrences ---

def _annual_candidate(year: int, month: int, day: int) -> datetime:
    return start_of_day(date(year, month, min(day, last_day_of_month(year, month))))


def _lunar_candidate(hijri_year: int, month: int, day: int) -> datetime:
    return hijri_to_gregorian(hijri_year, month, min(day, hijri_month_length(hijri_year, month)))


def _next_lunar(month: int, day: int, reference: datetime) -> datetime:
    hijri_year = gregorian_to_hijri(reference).year
    candidate = _lunar_candidate(hijri_year, month, day)
    if candidate <= reference:
        candidate = _lunar_candidate(hijri_year + 1, month, day)
    return candidate


def _next_annual(month: int, day: int, reference: datetime) -> datetime:
    candidate = _annual_candidate(reference.year, month, day)
    if candidate <= reference:
        candidate = _annual_candidate(reference.year + 1, month, day)
    return candidate


def next_occurrence(
    recurrence: EventRecurrence,
    reference: datetime,
    base_id: str | None = None,
    fallback: datetime | None = None,
) -> datetime | None:
    """Next occurrence strictly after reference.

    ONE_TIME returns fallback unchanged. Missing month/day (or an unknown
    seasonal base id) logs a warning and returns fallback."""
    kind = recurrence.kind
    month, day = recurrence.month, recurrence.day

    if kind == ONE_TIME:
        return fallback

    if kind == LUNAR:
        if month is None or day is None:
            logger.warning("Event %s is lunar but has no Hijri month/day", base_id)
            return fallback
        return _next_lunar(month, day, reference)

    if kind == FIXED_ANNUAL:
        if month is None or day is None:
            logger.warning("Event %s is fixed-annual but has no month/day", base_id)
            return fallback
        return _next_annual(month, day, reference)

    if kind == SEASONAL:
        if month is None or day is None:
            if base_id not in SEASONAL_DATES:
                logger.warning("Event %s is seasonal but has no date info", base_id)
                return fallback
            month, day = SEASONAL_DATES[base_id]
        return _next_annual(month, day, reference)

    raise RecurrenceValidationError(f"unhandled recurrence kind: {kind}")


# --- User recurrences ---

def adjust_for_weekend(candidate: datetime, rule: str) -> NextOccurrence:
    if rule == "none":
        return NextOccurrence(target_date=candidate)
    shift = WEEKEND_SHIFT.get(candidate.weekday())
    if shift is None:
        return NextOccurrence(target_date=candidate)
    return NextOccurrence(
        target_date=candidate + timedelta(days=shift),
        was_adjusted=True,
        adjusted_from=candidate,
    )


def _monthly_gregorian(day_of_month: int, reference: datetime) -> datetime:
    year, month = reference.year, reference.month
    if reference.day >= day_of_month:
        month += 1
        if month > 12:
            month = 1
            year += 1
    day = min(day_of_month, last_day_of_month(year, month))
    return end_of_day(date(year, month, day))


def _monthly_hijri(day_of_month: int, reference: datetime) -> datetime:
    hijri = gregorian_to_hijri(reference)
    year, month = hijri.year, hijri.month
    if hijri.day >= day_of_month:
        month += 1
        if month > 12:
            month = 1
            year += 1
    day = min(day_of_month, hijri_month_length(year, month))
    return end_of_day(hijri_to_gregorian(year, month, day).date())


def _weekly(day_of_week: int, reference: datetime) -> datetime:
    days_until = day_of_week - sunday_based_weekday(reference)
    if days_until <= 0:
        days_until += 7
    return end_of_day(reference.date() + timedelta(days=days_until))


def _yearly(day_of_month: int, month: int, reference: datetime) -> datetime:
    year = reference.year
    if reference.month > month or (reference.month == month and reference.day >= day_of_month):
        year += 1
    day = min(day_of_month, last_day_of_month(year, month))
    return end_of_day(date(year, month, day))


def _user_candidate(settings: RecurrenceSettings, reference: datetime) -> datetime:
    rtype = settings.type
    if rtype in ("salary", "monthly"):
        if settings.calendar_type == "hijri":
            candidate = _monthly_hijri(settings.day_of_month, reference)
        else:
            candidate = _monthly_gregorian(settings.day_of_month, reference)
    elif rtype == "weekly":
        candidate = _weekly(settings.day_of_week or 0, reference)
    elif rtype == "yearly":
        # month is not stored on the settings; the reference month is used
        candidate = _yearly(settings.day_of_month, reference.month, reference)
    else:
        raise RecurrenceValidationError(f"unhandled recurrence type: {rtype}")
    return candidate


def next_user_occurrence(settings: RecurrenceSettings, reference: datetime) -> NextOccurrence:
    """Next due instant for a user recurrence, with weekend adjustment applied.

    The result is always after reference: a clamped month end that falls on a
    Friday can shift back onto a day that is already over, in which case the
    following period is used."""
    if settings.type == "daily":
        return NextOccurrence(target_date=end_of_day(reference.date() + timedelta(days=1)))

    candidate = _user_candidate(settings, reference)
    result = adjust_for_weekend(candidate, settings.adjustment_rule)
    while result.target_date <= reference:
        candidate = _user_candidate(settings, start_of_day(candidate.date() + timedelta(days=1)))
        result = adjust_for_weekend(candidate, settings.adjustment_rule)
    return result
