"""
Tests for Hijri <-> Gregorian conversion
"""
import pytest
from datetime import date, datetime, timedelta

from nabbihni.domain.hijri import (
    HijriDate, gregorian_to_hijri, hijri_month_length, hijri_to_gregorian,
    is_hijri_leap_year, to_arabic_numerals, format_hijri_date,
)


def test_first_of_ramadan_1447():
    """1 Ramadan 1447 is 2026-02-17 at midnight."""
    assert hijri_to_gregorian(1447, 9, 1) == datetime(2026, 2, 17, 0, 0, 0)


@pytest.mark.parametrize("hijri, gregorian", [
    ((1447, 10, 1), date(2026, 3, 19)),
    ((1447, 12, 10), date(2026, 5, 26)),
    ((1448, 1, 1), date(2026, 6, 16)),
    ((1448, 9, 1), date(2027, 2, 7)),
    ((1447, 1, 1), date(2025, 6, 26)),
])
def test_known_dates(hijri, gregorian):
    assert hijri_to_gregorian(*hijri).date() == gregorian
    assert gregorian_to_hijri(gregorian) == HijriDate(*hijri)


def test_gregorian_to_hijri_ignores_time():
    assert gregorian_to_hijri(datetime(2026, 10, 18, 23, 59, 59)) == HijriDate(1448, 5, 7)


def test_round_trip_every_day_for_several_years():
    """Consecutive Gregorian days map to consecutive Hijri days and back."""
    day = date(2020, 1, 1)
    previous = gregorian_to_hijri(day - timedelta(days=1))
    while day < date(2031, 1, 1):
        hijri = gregorian_to_hijri(day)
        assert hijri_to_gregorian(hijri.year, hijri.month, hijri.day).date() == day
        if hijri.day == 1:
            assert previous.day == hijri_month_length(previous.year, previous.month)
        else:
            assert hijri.day == previous.day + 1
        previous = hijri
        day += timedelta(days=1)


@pytest.mark.parametrize("year", range(1440, 1471))
def test_month_length_matches_converter(year):
    """Last day + 1 is day 1 of the following month."""
    for month in range(1, 13):
        length = hijri_month_length(year, month)
        last = hijri_to_gregorian(year, month, length)
        next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
        assert last + timedelta(days=1) == hijri_to_gregorian(next_year, next_month, 1)


def test_leap_years():
    assert is_hijri_leap_year(1447)  # 1447 % 30 == 7
    assert not is_hijri_leap_year(1448)
    assert hijri_month_length(1447, 12) == 30
    assert hijri_month_length(1448, 12) == 29


def test_month_lengths_alternate():
    assert hijri_month_length(1448, 1) == 30
    assert hijri_month_length(1448, 2) == 29
    assert hijri_month_length(1448, 9) == 30
    assert hijri_month_length(1448, 10) == 29


def test_day_past_month_end_rolls_over():
    """The converter does not validate: day 30 of a 29-day month is day 1 of the next."""
    assert hijri_to_gregorian(1448, 2, 30) == hijri_to_gregorian(1448, 3, 1)


def test_arabic_numerals():
    assert to_arabic_numerals(1447) == "١٤٤٧"
    assert to_arabic_numerals("2026-09") == "٢٠٢٦-٠٩"


def test_format_hijri_date():
    assert format_hijri_date(1447, 9, 1) == "1 رمضان 1447"
