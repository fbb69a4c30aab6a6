"""
Public events catalog (Saudi Arabia + international).

Static, read-only. `target_date` is the last known date and is what the
resolver falls back to when a recurrence cannot be computed.
"""
from datetime import datetime

from nabbihni.domain.event_template import EventTemplate
from nabbihni.domain.recurrence import (
    EventRecurrence, LUNAR, FIXED_ANNUAL, SEASONAL, ONE_TIME,
)

NATIONAL_DAY_FOUNDING_YEAR = 1932


def _lunar(month: int, day: int) -> EventRecurrence:
    return EventRecurrence(LUNAR, month, day)


def _annual(month: int, day: int) -> EventRecurrence:
    return EventRecurrence(FIXED_ANNUAL, month, day)


def _seasonal(month: int, day: int) -> EventRecurrence:
    return EventRecurrence(SEASONAL, month, day)


_ONE_TIME = EventRecurrence(ONE_TIME)


PUBLIC_EVENTS: list[EventTemplate] = [
    # --- Religious (Hijri) ---
    EventTemplate(
        id="ramadan-2026", base_id="ramadan",
        title="Ramadan 2026", title_ar="رمضان ١٤٤٧",
        target_date=datetime(2026, 2, 17), icon="🌙", theme="ramadan", category="religious",
        date_confidence="estimated", date_source="Hijri Calendar Calculation", is_hijri_derived=True,
        note="الشهر الكريم - شهر الصيام والقرآن",
        recurrence=_lunar(9, 1),
    ),
    EventTemplate(
        id="eid-fitr-2026", base_id="eid-fitr",
        title="Eid Al-Fitr 2026", title_ar="عيد الفطر ١٤٤٧",
        target_date=datetime(2026, 3, 19), icon="🎉", theme="gold", category="religious",
        date_confidence="estimated", date_source="Hijri Calendar Calculation", is_hijri_derived=True,
        note="عيد الفرحة بعد شهر الصيام",
        recurrence=_lunar(10, 1),
    ),
    EventTemplate(
        id="hajj-2026", base_id="hajj",
        title="Hajj Season 2026", title_ar="موسم الحج ١٤٤٧",
        target_date=datetime(2026, 5, 24), icon="🕋", theme="gold", category="religious",
        date_confidence="estimated", date_source="Hijri Calendar Calculation", is_hijri_derived=True,
        note="الركن الخامس من أركان الإسلام",
        recurrence=_lunar(12, 8),
    ),
    EventTemplate(
        id="eid-adha-2026", base_id="eid-adha",
        title="Eid Al-Adha 2026", title_ar="عيد الأضحى ١٤٤٧",
        target_date=datetime(2026, 5, 26), icon="🐑", theme="gold", category="religious",
        date_confidence="estimated", date_source="Hijri Calendar Calculation", is_hijri_derived=True,
        note="عيد الأضحية - ذكرى فداء إسماعيل عليه السلام",
        recurrence=_lunar(12, 10),
    ),

    # --- Saudi national (fixed annual) ---
    EventTemplate(
        id="founding-day-2026", base_id="founding-day",
        title="Founding Day 2026", title_ar="يوم التأسيس ٢٠٢٦",
        target_date=datetime(2026, 2, 22), icon="🇸🇦", theme="default", category="national",
        date_confidence="confirmed", date_source="Royal Decree 2022",
        note="ذكرى تأسيس الدولة السعودية الأولى ١٧٢٧م",
        recurrence=_annual(2, 22),
    ),
    EventTemplate(
        id="flag-day-2026", base_id="flag-day",
        title="Flag Day 2026", title_ar="يوم العلم ٢٠٢٦",
        target_date=datetime(2026, 3, 11), icon="🇸🇦", theme="default", category="national",
        date_confidence="confirmed", date_source="Royal Decree 2023",
        note="احتفاء بالعلم السعودي ورمزيته الوطنية",
        recurrence=_annual(3, 11),
    ),
    EventTemplate(
        id="national-day-2026", base_id="national-day",
        title="National Day 2026", title_ar="اليوم الوطني ٢٠٢٦",
        target_date=datetime(2026, 9, 23), icon="🇸🇦", theme="default", category="national",
        date_confidence="confirmed", date_source="Fixed since 1932",
        note="الذكرى ٩٦ لتوحيد المملكة العربية السعودية",
        recurrence=_annual(9, 23),
        founding_year=NATIONAL_DAY_FOUNDING_YEAR,
    ),

    # --- Seasons (weather & stars) ---
    EventTemplate(
        id="summer-start-2026", base_id="summer-start",
        title="Summer Begins", title_ar="بداية الصيف ٢٠٢٦",
        target_date=datetime(2026, 6, 21), icon="☀️", theme="sunset", category="seasonal",
        date_confidence="confirmed", date_source="Astronomical Calendar",
        note="الانقلاب الصيفي - أطول نهار في السنة",
        recurrence=_seasonal(6, 21),
    ),
    EventTemplate(
        id="suhail-2026", base_id="suhail",
        title="Suhail Star Rising", title_ar="طلوع سهيل ٢٠٢٦",
        target_date=datetime(2026, 8, 24), icon="⭐", theme="night", category="seasonal",
        date_confidence="confirmed", date_source="Arabian Star Calendar",
        note="بشير انكسار الحرارة - يقول المثل: إذا طلع سهيل، لطّف الليل",
        recurrence=_seasonal(8, 24),
    ),
    EventTemplate(
        id="al-wasm-2026", base_id="al-wasm",
        title="Al-Wasm Season", title_ar="موسم الوسم ٢٠٢٦",
        target_date=datetime(2026, 10, 16), icon="🌧️", theme="default", category="seasonal",
        date_confidence="confirmed", date_source="Arabian Star Calendar",
        note="موسم الأمطار وبداية الخضرة في الصحراء",
        recurrence=_seasonal(10, 16),
    ),
    EventTemplate(
        id="al-aqrab-2026", base_id="al-aqrab",
        title="Al-Aqrab Season", title_ar="موسم العقرب ٢٠٢٦",
        target_date=datetime(2026, 11, 16), icon="🦂", theme="sunset", category="seasonal",
        date_confidence="confirmed", date_source="Arabian Star Calendar",
        note="بداية أقسى فترات البرد - ٤٠ يوم",
        recurrence=_seasonal(11, 16),
    ),
    EventTemplate(
        id="winter-start-2026", base_id="winter-start",
        title="Winter Begins", title_ar="بداية الشتاء ٢٠٢٦",
        target_date=datetime(2026, 12, 21), icon="❄️", theme="night", category="seasonal",
        date_confidence="confirmed", date_source="Astronomical Calendar",
        note="الانقلاب الشتوي - أقصر نهار في السنة",
        recurrence=_seasonal(12, 21),
    ),

    # --- International annual ---
    EventTemplate(
        id="new-year-2027", base_id="new-year",
        title="New Year 2027", title_ar="السنة الجديدة ٢٠٢٧",
        target_date=datetime(2027, 1, 1), icon="🎊", theme="night", category="international",
        date_confidence="confirmed", date_source="Fixed Date",
        note="استقبال العام الجديد حول العالم",
        recurrence=_annual(1, 1),
    ),

    # --- Entertainment (tentative annual) ---
    EventTemplate(
        id="riyadh-season-2026", base_id="riyadh-season",
        title="Riyadh Season 2026", title_ar="موسم الرياض ٢٠٢٦",
        target_date=datetime(2026, 10, 15), icon="🎭", theme="sunset", category="entertainment",
        date_confidence="tentative", date_source="GEA (pending confirmation)",
        note="أكبر موسم ترفيهي في الشرق الأوسط",
        recurrence=_annual(10, 15),
    ),

    # --- One-time ---
    EventTemplate(
        id="worldcup-2026", base_id="worldcup-2026",
        title="FIFA World Cup 2026", title_ar="كأس العالم ٢٠٢٦",
        target_date=datetime(2026, 6, 11), icon="⚽", theme="gold", category="international",
        date_confidence="confirmed", date_source="FIFA Official",
        note="أكبر نسخة في التاريخ - ٤٨ منتخب في أمريكا وكندا والمكسيك",
        recurrence=_ONE_TIME,
    ),
    EventTemplate(
        id="us-elections-2026", base_id="us-elections-2026",
        title="US Midterm Elections", title_ar="انتخابات أمريكا النصفية",
        target_date=datetime(2026, 11, 3), icon="🗳️", theme="default", category="international",
        date_confidence="confirmed", date_source="US Federal Election Commission",
        note="انتخابات الكونغرس النصفية",
        recurrence=_ONE_TIME,
    ),

    # --- Milestones (one-time, far future) ---
    EventTemplate(
        id="expo-2030", base_id="expo-2030",
        title="Expo 2030 Riyadh", title_ar="إكسبو الرياض ٢٠٣٠",
        target_date=datetime(2030, 10, 1), icon="🌍", theme="gold", category="milestone",
        date_confidence="confirmed", date_source="BIE Official",
        note="الرياض تستضيف العالم تحت شعار \"حقبة التغيير\"",
        recurrence=_ONE_TIME,
    ),
    EventTemplate(
        id="vision-2030", base_id="vision-2030",
        title="Vision 2030", title_ar="رؤية السعودية ٢٠٣٠",
        target_date=datetime(2030, 12, 31), icon="🚀", theme="gold", category="milestone",
        date_confidence="confirmed", date_source="Vision 2030 Program",
        note="مستقبل المملكة - تنويع الاقتصاد وجودة الحياة",
        recurrence=_ONE_TIME,
    ),
    EventTemplate(
        id="worldcup-2034", base_id="worldcup-2034",
        title="FIFA World Cup 2034", title_ar="كأس العالم السعودية ٢٠٣٤",
        target_date=datetime(2034, 11, 1), icon="🏆", theme="gold", category="milestone",
        date_confidence="confirmed", date_source="FIFA Official",
        note="المملكة تستضيف كأس العالم لأول مرة!",
        recurrence=_ONE_TIME,
    ),
]
