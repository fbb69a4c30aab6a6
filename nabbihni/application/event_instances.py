"""
Event Instance Generator - turns public event templates into upcoming instances.

Instances are computed fresh on every pass (never persisted): the resolver picks
the next occurrence after the reference "now", titles get the resolved year, and
the instance id is "{base_id}-{gregorian_year}" so it stays stable across
refreshes until the event rolls over.
"""
import logging
import re
from datetime import datetime
from typing import Iterable

from nabbihni.domain.clock import SaudiClock
from nabbihni.domain.event_template import EventInstance, EventTemplate
from nabbihni.domain.hijri import gregorian_to_hijri, to_arabic_numerals
from nabbihni.domain.recurrence import FIXED_ANNUAL, LUNAR, ONE_TIME, next_occurrence

logger = logging.getLogger(__name__)

# [0-9] rather than \d: \d also matches Arabic-Indic digits
_WESTERN_YEAR = re.compile(r"[0-9]{4}")
_ARABIC_YEAR = re.compile(r"[٠-٩]{4}")
_ANY_YEAR = re.compile(r"[0-9٠-٩]{4}")
_ANNIVERSARY = re.compile(r"الذكرى [٠-٩]+")


def _replace_or_append(pattern: re.Pattern, text: str, year: str) -> str:
    if pattern.search(text):
        return pattern.sub(year, text, count=1)
    return f"{text} {year}"


def build_titles(title: str, title_ar: str, target: datetime, kind: str) -> tuple[str, str]:
    """Year-qualified (English, Arabic) titles for a resolved date."""
    gregorian_year = str(target.year)

    if kind == LUNAR:
        hijri_year = to_arabic_numerals(gregorian_to_hijri(target).year)
        return (
            _replace_or_append(_WESTERN_YEAR, title, gregorian_year),
            _replace_or_append(_ANY_YEAR, title_ar, hijri_year),
        )

    return (
        _WESTERN_YEAR.sub(gregorian_year, title, count=1),
        _ARABIC_YEAR.sub(to_arabic_numerals(gregorian_year), title_ar, count=1),
    )


def update_anniversary(note: str, year: int, founding_year: int) -> str:
    """'الذكرى ٩٦ ...' -> 'الذكرى ٩٧ ...' for the resolved year."""
    number = to_arabic_numerals(year - founding_year)
    return _ANNIVERSARY.sub(f"الذكرى {number}", note, count=1)


class EventInstanceGenerator:
    def __init__(self, clock: SaudiClock):
        self.clock = clock

    def materialize(self, template: EventTemplate, now: datetime | None = None) -> EventInstance | None:
        """Upcoming instance of a template, or None for an expired one-time event."""
        if now is None:
            now = self.clock.reference_now()
        kind = template.recurrence.kind
        base_id = template.resolved_base_id

        try:
            target = next_occurrence(
                template.recurrence, now, base_id=base_id, fallback=template.target_date,
            )
        except ValueError:
            logger.warning("Could not resolve event %s, keeping static date", template.id, exc_info=True)
            target = template.target_date

        if kind == ONE_TIME and target <= now:
            return None

        title, title_ar = build_titles(template.title, template.title_ar, target, kind)

        note = template.note
        if kind == FIXED_ANNUAL and note and template.founding_year is not None:
            note = update_anniversary(note, target.year, template.founding_year)

        return EventInstance(
            id=f"{base_id}-{target.year}",
            base_id=base_id,
            title=title,
            title_ar=title_ar,
            target_date=target,
            icon=template.icon,
            theme=template.theme,
            category=template.category,
            recurrence_kind=kind,
            note=note,
            date_confidence=template.date_confidence,
            date_source=template.date_source,
            is_hijri_derived=template.is_hijri_derived,
        )

    def process_all(self, templates: Iterable[EventTemplate], now: datetime | None = None) -> list[EventInstance]:
        """Materialize, drop expired, de-duplicate by base_id (first wins), sort by date."""
        if now is None:
            now = self.clock.reference_now()

        seen_base_ids: set[str] = set()
        instances: list[EventInstance] = []
        for template in templates:
            try:
                instance = self.materialize(template, now)
            except Exception:
                logger.exception("Failed to materialize event template %s", template.id)
                continue
            if instance is None or instance.base_id in seen_base_ids:
                continue
            seen_base_ids.add(instance.base_id)
            instances.append(instance)

        instances.sort(key=lambda i: i.target_date)
        return instances


def events_by_category(instances: Iterable[EventInstance], category: str) -> list[EventInstance]:
    return [i for i in instances if i.category == category]
