"""
Tests for serialized instant helpers
"""
from datetime import date, datetime

from nabbihni.utils.instants import format_instant, parse_instant


def test_format_has_no_suffix():
    assert format_instant(datetime(2026, 2, 17)) == "2026-02-17T00:00:00"


def test_parse_naive_taken_as_is():
    assert parse_instant("2026-02-17T00:00:00") == datetime(2026, 2, 17)


def test_parse_utc_suffix_converted_to_reference_time():
    assert parse_instant("2026-02-16T21:00:00Z") == datetime(2026, 2, 17, 0, 0, 0)


def test_parse_explicit_offset():
    assert parse_instant("2026-02-17T01:00:00+04:00") == datetime(2026, 2, 17, 0, 0, 0)


def test_parse_date_only_is_midnight():
    assert parse_instant("2026-02-17") == datetime(2026, 2, 17)
    assert parse_instant(date(2026, 2, 17)) == datetime(2026, 2, 17)
