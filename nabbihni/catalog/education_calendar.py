"""
Saudi school calendar, 2025-2026 academic year (Ministry of Education).

School dates move too much between years to derive, so every entry is one-time
and the table is replaced when the ministry publishes the next calendar.
"""
from datetime import datetime

from nabbihni.domain.event_template import EventTemplate
from nabbihni.domain.recurrence import EventRecurrence, ONE_TIME

_MOE = "Ministry of Education"


def _school(event_id: str, title: str, title_ar: str, target: datetime, icon: str, theme: str = "default") -> EventTemplate:
    return EventTemplate(
        id=event_id, base_id=event_id,
        title=title, title_ar=title_ar,
        target_date=target, icon=icon, theme=theme, category="education",
        date_confidence="confirmed", date_source=_MOE,
        recurrence=EventRecurrence(ONE_TIME),
    )


EDUCATION_EVENTS: list[EventTemplate] = [
    _school("school-start-2025", "School Year Start 2025", "بداية العام الدراسي ٢٠٢٥",
            datetime(2025, 8, 24), "📚"),
    _school("first-semester-end-2025", "First Semester End 2025", "نهاية الفصل الدراسي الأول ٢٠٢٥",
            datetime(2025, 12, 18), "🎓"),
    _school("winter-break-start-2025", "Winter Break Start 2025", "بداية إجازة الشتاء ٢٠٢٥",
            datetime(2025, 12, 19), "❄️", theme="night"),
    _school("second-semester-start-2026", "Second Semester Start 2026", "بداية الفصل الدراسي الثاني ٢٠٢٦",
            datetime(2026, 1, 4), "📖"),
    _school("spring-break-start-2026", "Spring Break Start 2026", "بداية إجازة الربيع ٢٠٢٦",
            datetime(2026, 3, 22), "🌸", theme="sunset"),
    _school("third-semester-start-2026", "Third Semester Start 2026", "بداية الفصل الدراسي الثالث ٢٠٢٦",
            datetime(2026, 4, 5), "📝"),
    _school("summer-vacation-2026", "Summer Vacation 2026", "بداية الإجازة الصيفية ٢٠٢٦",
            datetime(2026, 6, 25), "☀️", theme="gold"),
]
