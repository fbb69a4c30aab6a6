"""Official Hijri holidays resolved per Hijri year (admin can override the computed date)"""
from dataclasses import dataclass

# Hijri months
MUHARRAM = 1
RAMADAN = 9
SHAWWAL = 10
DHU_AL_HIJJAH = 12


@dataclass(frozen=True)
class SaudiHoliday:
    event_id: str
    name_ar: str
    name_en: str
    hijri_month: int
    hijri_day: int
    icon: str
    theme: str
    category: str  # religious | national


SAUDI_HOLIDAYS: list[SaudiHoliday] = [
    SaudiHoliday("ramadan", "رمضان", "Ramadan", RAMADAN, 1, "🌙", "ramadan", "religious"),
    SaudiHoliday("eid-fitr", "عيد الفطر", "Eid Al-Fitr", SHAWWAL, 1, "🎉", "gold", "religious"),
    SaudiHoliday("eid-adha", "عيد الأضحى", "Eid Al-Adha", DHU_AL_HIJJAH, 10, "🐑", "gold", "religious"),
    SaudiHoliday("islamic-new-year", "رأس السنة الهجرية", "Islamic New Year", MUHARRAM, 1, "🌟", "night", "religious"),
]


def find_holiday(event_id: str) -> SaudiHoliday | None:
    return next((h for h in SAUDI_HOLIDAYS if h.event_id == event_id), None)
