"""Public event templates and the instances materialized from them"""
import re
from dataclasses import dataclass
from datetime import datetime

from nabbihni.domain.recurrence import EventRecurrence

VALID_CATEGORIES = frozenset({
    "religious", "national", "seasonal", "entertainment", "milestone", "education", "international",
})

_YEAR_SUFFIX = re.compile(r"-\d{4}$")


def strip_year_suffix(event_id: str) -> str:
    """'ramadan-2026' -> 'ramadan'"""
    return _YEAR_SUFFIX.sub("", event_id)


@dataclass(frozen=True)
class EventTemplate:
    id: str
    title: str
    title_ar: str
    target_date: datetime  # last known static date
    icon: str
    theme: str
    category: str
    recurrence: EventRecurrence
    base_id: str = ""
    note: str | None = None
    date_confidence: str | None = None
    date_source: str | None = None
    is_hijri_derived: bool = False
    founding_year: int | None = None  # for anniversary numbers in the note

    @property
    def resolved_base_id(self) -> str:
        return self.base_id or strip_year_suffix(self.id)


@dataclass(frozen=True)
class EventInstance:
    id: str  # "{base_id}-{gregorian_year}"
    base_id: str
    title: str
    title_ar: str
    target_date: datetime
    icon: str
    theme: str
    category: str
    recurrence_kind: str
    note: str | None = None
    date_confidence: str | None = None
    date_source: str | None = None
    is_hijri_derived: bool = False
