"""
Tests for the public event instance generator
"""
from dataclasses import replace
from datetime import datetime
from unittest.mock import patch

import pytest

from nabbihni.application import event_instances
from nabbihni.application.event_instances import (
    EventInstanceGenerator, build_titles, events_by_category, update_anniversary,
)
from nabbihni.catalog.public_events import PUBLIC_EVENTS
from nabbihni.domain.clock import FixedClock
from nabbihni.domain.event_template import EventTemplate, strip_year_suffix
from nabbihni.domain.recurrence import (
    EventRecurrence, RecurrenceValidationError, FIXED_ANNUAL, LUNAR, ONE_TIME,
)

NOW = datetime(2026, 10, 18, 10, 0, 0)


@pytest.fixture
def generator():
    return EventInstanceGenerator(FixedClock(NOW))


def _template(**overrides) -> EventTemplate:
    fields = dict(
        id="national-day-2026", base_id="national-day",
        title="National Day 2026", title_ar="اليوم الوطني ٢٠٢٦",
        target_date=datetime(2026, 9, 23), icon="🇸🇦", theme="default", category="national",
        recurrence=EventRecurrence(FIXED_ANNUAL, 9, 23),
    )
    fields.update(overrides)
    return EventTemplate(**fields)


def _by_base_id(instances):
    return {i.base_id: i for i in instances}


class TestMaterialize:
    def test_lunar_event_gets_next_hijri_year(self, generator):
        ramadan = next(t for t in PUBLIC_EVENTS if t.base_id == "ramadan")
        instance = generator.materialize(ramadan)
        assert instance.id == "ramadan-2027"
        assert instance.target_date == datetime(2027, 2, 7)
        assert instance.title == "Ramadan 2027"
        assert instance.title_ar == "رمضان ١٤٤٨"
        assert instance.recurrence_kind == LUNAR

    def test_fixed_annual_rolls_over(self, generator):
        instance = generator.materialize(_template())
        assert instance.id == "national-day-2027"
        assert instance.target_date == datetime(2027, 9, 23)
        assert instance.title == "National Day 2027"
        assert instance.title_ar == "اليوم الوطني ٢٠٢٧"

    def test_national_day_anniversary_updated(self, generator):
        national_day = next(t for t in PUBLIC_EVENTS if t.base_id == "national-day")
        instance = generator.materialize(national_day)
        assert instance.note.startswith("الذكرى ٩٥ ")

    def test_one_time_future_kept(self, generator):
        template = _template(
            id="expo-2030", base_id="expo-2030", title="Expo 2030 Riyadh", title_ar="إكسبو الرياض ٢٠٣٠",
            target_date=datetime(2030, 10, 1), recurrence=EventRecurrence(ONE_TIME),
        )
        instance = generator.materialize(template)
        assert instance.target_date == datetime(2030, 10, 1)
        assert instance.title == "Expo 2030 Riyadh"

    def test_one_time_past_dropped(self, generator):
        template = _template(
            id="worldcup-2026", base_id="worldcup-2026",
            target_date=datetime(2026, 6, 11), recurrence=EventRecurrence(ONE_TIME),
        )
        assert generator.materialize(template) is None

    def test_resolver_error_keeps_static_date(self, generator):
        with patch.object(event_instances, "next_occurrence", side_effect=RecurrenceValidationError("boom")):
            instance = generator.materialize(_template(target_date=datetime(2027, 1, 1)))
        assert instance.target_date == datetime(2027, 1, 1)

    def test_base_id_derived_from_id(self, generator):
        instance = generator.materialize(_template(base_id=""))
        assert instance.base_id == "national-day"

    def test_explicit_now_wins_over_clock(self, generator):
        instance = generator.materialize(_template(), now=datetime(2026, 1, 1))
        assert instance.target_date == datetime(2026, 9, 23)


class TestProcessAll:
    def test_catalog(self, generator):
        instances = generator.process_all(PUBLIC_EVENTS)
        by_base = _by_base_id(instances)

        assert "worldcup-2026" not in by_base
        assert by_base["us-elections-2026"].target_date == datetime(2026, 11, 3)
        assert by_base["eid-adha"].target_date == datetime(2027, 5, 16)
        assert by_base["al-wasm"].target_date == datetime(2027, 10, 16)
        assert all(i.target_date > NOW for i in instances)

    def test_sorted_by_target_date(self, generator):
        dates = [i.target_date for i in generator.process_all(PUBLIC_EVENTS)]
        assert dates == sorted(dates)

    def test_duplicate_base_id_first_wins(self, generator):
        first = _template(id="national-day-2026", note="first")
        second = _template(id="national-day-2027", note="second")
        instances = generator.process_all([first, second])
        assert len(instances) == 1
        assert instances[0].note == "first"

    def test_failing_template_skipped(self, generator):
        real = event_instances.next_occurrence

        def flaky(recurrence, reference, base_id=None, fallback=None):
            if base_id == "broken":
                raise RuntimeError("unexpected")
            return real(recurrence, reference, base_id=base_id, fallback=fallback)

        templates = [_template(id="broken-2026", base_id="broken"), _template()]
        with patch.object(event_instances, "next_occurrence", side_effect=flaky):
            instances = generator.process_all(templates)
        assert [i.base_id for i in instances] == ["national-day"]

    def test_idempotent(self, generator):
        assert generator.process_all(PUBLIC_EVENTS) == generator.process_all(PUBLIC_EVENTS)

    def test_filter_by_category(self, generator):
        instances = generator.process_all(PUBLIC_EVENTS)
        religious = events_by_category(instances, "religious")
        assert {i.base_id for i in religious} == {"ramadan", "eid-fitr", "hajj", "eid-adha"}


class TestTitles:
    def test_lunar_appends_missing_year(self):
        title, title_ar = build_titles("Eid", "عيد", datetime(2027, 3, 9), LUNAR)
        assert title == "Eid 2027"
        assert title_ar == "عيد ١٤٤٨"

    def test_lunar_replaces_western_digits_in_arabic_title(self):
        _, title_ar = build_titles("Hajj", "الحج 1447", datetime(2027, 5, 14), LUNAR)
        assert title_ar == "الحج ١٤٤٨"

    def test_non_lunar_without_year_unchanged(self):
        assert build_titles("Riyadh Season", "موسم الرياض", datetime(2027, 10, 15), FIXED_ANNUAL) == (
            "Riyadh Season", "موسم الرياض",
        )

    def test_anniversary(self):
        assert update_anniversary("الذكرى ٩٦ لتوحيد المملكة", 2027, 1932) == "الذكرى ٩٥ لتوحيد المملكة"


def test_strip_year_suffix():
    assert strip_year_suffix("ramadan-2026") == "ramadan"
    assert strip_year_suffix("new-year") == "new-year"


def test_templates_are_not_mutated(generator):
    template = _template()
    snapshot = replace(template)
    generator.process_all([template])
    assert template == snapshot
