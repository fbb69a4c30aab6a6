"""
Hijri (Islamic lunar) calendar conversion.

Arithmetic (tabular) calendar with the astronomical epoch:
1 Muharram 1 AH = Thursday 15 July 622 (Julian) = proleptic Gregorian ordinal 227014.
Not moon-sighting based, so results are deterministic and may differ by a day
from the announced Umm al-Qura dates.

Month lengths:
- odd months (1, 3, 5, 7, 9, 11): 30 days
- even months (2, 4, 6, 8, 10): 29 days
- month 12: 30 days in leap years, 29 otherwise

Leap years are positions {2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29} of the 30-year cycle.
"""
from dataclasses import dataclass
from datetime import date, datetime

from nabbihni.utils.instants import start_of_day

HIJRI_EPOCH_ORDINAL = 227014
LEAP_YEARS_IN_CYCLE = frozenset({2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29})

ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

HIJRI_MONTH_NAMES_AR = {
    1: "محرم",
    2: "صفر",
    3: "ربيع الأول",
    4: "ربيع الثاني",
    5: "جمادى الأولى",
    6: "جمادى الآخرة",
    7: "رجب",
    8: "شعبان",
    9: "رمضان",
    10: "شوال",
    11: "ذو القعدة",
    12: "ذو الحجة",
}


@dataclass(frozen=True)
class HijriDate:
    year: int
    month: int  # 1..12
    day: int  # 1..30


def is_hijri_leap_year(year: int) -> bool:
    return year % 30 in LEAP_YEARS_IN_CYCLE


def hijri_month_length(year: int, month: int) -> int:
    if month == 12:
        return 30 if is_hijri_leap_year(year) else 29
    return 30 if month % 2 == 1 else 29


def _hijri_to_ordinal(year: int, month: int, day: int) -> int:
    # (59 * n + 1) // 2 == ceil(29.5 * n)
    return (
        day
        + (59 * (month - 1) + 1) // 2
        + (year - 1) * 354
        + (3 + 11 * year) // 30
        + HIJRI_EPOCH_ORDINAL - 1
    )


def hijri_to_gregorian(year: int, month: int, day: int) -> datetime:
    """Convert a Hijri date to the Gregorian instant at 00:00:00.
    Days past the month length are not validated and roll into the next month."""
    return start_of_day(date.fromordinal(_hijri_to_ordinal(year, month, day)))


def gregorian_to_hijri(value: date) -> HijriDate:
    """Convert a Gregorian date (or datetime, time ignored) to Hijri."""
    ordinal = value.toordinal()
    year = (30 * (ordinal - HIJRI_EPOCH_ORDINAL) + 10646) // 10631
    # ceil(x / 29.5) == -((-2 * x) // 59)
    offset = ordinal - (29 + _hijri_to_ordinal(year, 1, 1))
    month = min(12, -((-2 * offset) // 59) + 1)
    day = ordinal - _hijri_to_ordinal(year, month, 1) + 1
    return HijriDate(year=year, month=month, day=day)


def to_arabic_numerals(number: int | str) -> str:
    """'1447' -> '١٤٤٧'. Non-digit characters pass through."""
    return "".join(ARABIC_DIGITS[int(ch)] if ch.isdigit() else ch for ch in str(number))


def format_hijri_date(year: int, month: int, day: int) -> str:
    return f"{day} {HIJRI_MONTH_NAMES_AR[month]} {year}"
