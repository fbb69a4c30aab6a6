"""
Official Hijri holidays with admin overrides.

Each holiday is resolved for a Hijri year: the current one, or the next once this
year's date has ended in reference time. The computed date is stored per
(event_id, hijri_year) the first time it is resolved; an admin can pin the
announced date (moon sighting) with an override, which then wins.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nabbihni.catalog.saudi_holidays import SAUDI_HOLIDAYS, SaudiHoliday, find_holiday
from nabbihni.domain.clock import SaudiClock
from nabbihni.domain.hijri import gregorian_to_hijri, hijri_month_length, hijri_to_gregorian
from nabbihni.infrastructure.db.models import HolidayInstanceModel
from nabbihni.infrastructure.db.session import session_scope

logger = logging.getLogger(__name__)


class HolidayNotFoundError(LookupError):
    pass


@dataclass(frozen=True)
class ResolvedHoliday:
    event_id: str
    name_ar: str
    name_en: str
    icon: str
    theme: str
    category: str
    hijri_year: int
    hijri_month: int
    hijri_day: int
    calculated_date: date
    override_date: date | None
    override_reason: str | None
    effective_date: date
    is_confirmed: bool
    last_calculated_at: datetime


def calculate_holiday_date(holiday: SaudiHoliday, hijri_year: int) -> date:
    day = min(holiday.hijri_day, hijri_month_length(hijri_year, holiday.hijri_month))
    return hijri_to_gregorian(hijri_year, holiday.hijri_month, day).date()


class HolidayService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], clock: SaudiClock):
        self.session_factory = session_factory
        self.clock = clock

    def determine_hijri_year(self, holiday: SaudiHoliday, now: datetime) -> int:
        current = gregorian_to_hijri(now).year
        this_year = datetime.combine(calculate_holiday_date(holiday, current), datetime.min.time())
        if self.clock.has_passed_end_of_day(this_year, now):
            return current + 1
        return current

    async def _get_or_create(
        self, session: AsyncSession, holiday: SaudiHoliday, hijri_year: int, now: datetime,
    ) -> HolidayInstanceModel:
        result = await session.execute(
            select(HolidayInstanceModel).where(
                HolidayInstanceModel.event_id == holiday.event_id,
                HolidayInstanceModel.hijri_year == hijri_year,
            )
        )
        instance = result.scalars().first()
        if instance is None:
            instance = HolidayInstanceModel(
                event_id=holiday.event_id,
                hijri_year=hijri_year,
                calculated_date=calculate_holiday_date(holiday, hijri_year),
                override_date=None,
                override_reason=None,
                last_calculated_at=now,
            )
            session.add(instance)
            await session.flush()
        return instance

    async def resolve(self, holiday: SaudiHoliday, now: datetime | None = None) -> ResolvedHoliday:
        if now is None:
            now = self.clock.reference_now()
        hijri_year = self.determine_hijri_year(holiday, now)
        async with session_scope(self.session_factory) as session:
            instance = await self._get_or_create(session, holiday, hijri_year, now)
            return ResolvedHoliday(
                event_id=holiday.event_id,
                name_ar=holiday.name_ar,
                name_en=holiday.name_en,
                icon=holiday.icon,
                theme=holiday.theme,
                category=holiday.category,
                hijri_year=hijri_year,
                hijri_month=holiday.hijri_month,
                hijri_day=holiday.hijri_day,
                calculated_date=instance.calculated_date,
                override_date=instance.override_date,
                override_reason=instance.override_reason,
                effective_date=instance.override_date or instance.calculated_date,
                is_confirmed=instance.override_date is not None,
                last_calculated_at=instance.last_calculated_at,
            )

    async def upcoming(self, now: datetime | None = None) -> list[ResolvedHoliday]:
        if now is None:
            now = self.clock.reference_now()
        resolved = [await self.resolve(h, now) for h in SAUDI_HOLIDAYS]
        return sorted(resolved, key=lambda r: r.effective_date)

    async def set_override(
        self, event_id: str, hijri_year: int, override_date: date, reason: str | None = None,
    ) -> None:
        holiday = find_holiday(event_id)
        if holiday is None:
            raise HolidayNotFoundError(f"unknown holiday: {event_id}")
        now = self.clock.reference_now()
        async with session_scope(self.session_factory) as session:
            instance = await self._get_or_create(session, holiday, hijri_year, now)
            instance.override_date = override_date
            instance.override_reason = reason
        logger.info("Holiday override set: %s %d -> %s", event_id, hijri_year, override_date)

    async def clear_override(self, event_id: str, hijri_year: int) -> bool:
        """Returns False when there was no stored instance to clear."""
        async with session_scope(self.session_factory) as session:
            result = await session.execute(
                select(HolidayInstanceModel).where(
                    HolidayInstanceModel.event_id == event_id,
                    HolidayInstanceModel.hijri_year == hijri_year,
                )
            )
            instance = result.scalars().first()
            if instance is None:
                return False
            instance.override_date = None
            instance.override_reason = None
            return True

    async def recalculate_all(self) -> int:
        """Recompute stored calculated dates (overrides are kept). Returns rows touched."""
        now = self.clock.reference_now()
        count = 0
        async with session_scope(self.session_factory) as session:
            result = await session.execute(select(HolidayInstanceModel))
            for instance in result.scalars().all():
                holiday = find_holiday(instance.event_id)
                if holiday is None:
                    logger.warning("Stored holiday instance for unknown event %s", instance.event_id)
                    continue
                instance.calculated_date = calculate_holiday_date(holiday, instance.hijri_year)
                instance.last_calculated_at = now
                count += 1
        return count
