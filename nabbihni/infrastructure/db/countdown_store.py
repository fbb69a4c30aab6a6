"""
Countdown storage (get / list / create / update / delete).

Rows are mapped to immutable RecurringCountdown values; callers never get an
ORM object back, so no two callers share a mutable record.
"""
import logging
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nabbihni.domain.clock import SaudiClock
from nabbihni.domain.countdown import RecurringCountdown, validate_countdown_data
from nabbihni.domain.recurrence import RecurrenceSettings
from nabbihni.infrastructure.db.models import CountdownModel
from nabbihni.infrastructure.db.session import session_scope
from nabbihni.utils.instants import format_instant, parse_instant

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "title", "target_date", "icon", "theme", "note",
    "is_recurring", "recurrence", "is_starred", "reminder_timing",
)


def settings_to_json(settings: RecurrenceSettings | None) -> dict | None:
    if settings is None:
        return None
    return {
        "type": settings.type,
        "calendar_type": settings.calendar_type,
        "day_of_month": settings.day_of_month,
        "adjustment_rule": settings.adjustment_rule,
        "day_of_week": settings.day_of_week,
        "last_auto_advanced": (
            format_instant(settings.last_auto_advanced) if settings.last_auto_advanced else None
        ),
    }


def settings_from_json(raw: dict | None) -> RecurrenceSettings | None:
    if not raw:
        return None
    last = raw.get("last_auto_advanced")
    return RecurrenceSettings(
        type=raw["type"],
        calendar_type=raw.get("calendar_type", "gregorian"),
        day_of_month=raw.get("day_of_month", 1),
        adjustment_rule=raw.get("adjustment_rule", "smart"),
        day_of_week=raw.get("day_of_week"),
        last_auto_advanced=parse_instant(last) if last else None,
    )


def _row_to_countdown(row: CountdownModel) -> RecurringCountdown:
    try:
        recurrence = settings_from_json(row.recurrence_json)
    except (KeyError, ValueError):
        # Broken settings leave the countdown as a plain one-shot
        logger.error("Countdown %s has invalid recurrence settings: %r", row.id, row.recurrence_json)
        recurrence = None
    is_recurring = bool(row.is_recurring) and recurrence is not None
    return RecurringCountdown(
        id=row.id,
        title=row.title,
        target_date=row.target_date,
        icon=row.icon,
        theme=row.theme,
        is_recurring=is_recurring,
        recurrence=recurrence,
        is_starred=bool(row.is_starred),
        reminder_timing=tuple(row.reminder_timing_json or ()),
        note=row.note,
        created_at=row.created_at,
    )


class CountdownStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], clock: SaudiClock | None = None):
        self.session_factory = session_factory
        self.clock = clock or SaudiClock()

    async def get(self, countdown_id: str) -> RecurringCountdown | None:
        async with session_scope(self.session_factory) as session:
            row = await session.get(CountdownModel, countdown_id)
            return _row_to_countdown(row) if row else None

    async def create(
        self,
        title: str,
        target_date: datetime,
        icon: str = "⏳",
        theme: str = "default",
        is_recurring: bool = False,
        recurrence: RecurrenceSettings | None = None,
        is_starred: bool = False,
        reminder_timing: list | tuple = (),
        note: str | None = None,
    ) -> RecurringCountdown:
        validate_countdown_data(title, theme, is_recurring, recurrence, reminder_timing)
        row = CountdownModel(
            id=str(uuid.uuid4()),
            title=title.strip(),
            target_date=target_date,
            icon=icon,
            theme=theme,
            note=note,
            is_recurring=is_recurring,
            recurrence_json=settings_to_json(recurrence),
            is_starred=is_starred,
            reminder_timing_json=list(reminder_timing),
            created_at=self.clock.reference_now(),
        )
        async with session_scope(self.session_factory) as session:
            session.add(row)
            await session.flush()
            return _row_to_countdown(row)

    async def update(self, countdown_id: str, **changes: Any) -> RecurringCountdown | None:
        """Apply a partial update; None if the countdown does not exist."""
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"cannot update fields: {sorted(unknown)}")

        async with session_scope(self.session_factory) as session:
            row = await session.get(CountdownModel, countdown_id)
            if row is None:
                return None
            for key, value in changes.items():
                if key == "recurrence":
                    row.recurrence_json = settings_to_json(value)
                elif key == "reminder_timing":
                    row.reminder_timing_json = list(value or ())
                else:
                    setattr(row, key, value)
            await session.flush()
            return _row_to_countdown(row)

    async def delete(self, countdown_id: str) -> bool:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(
                delete(CountdownModel).where(CountdownModel.id == countdown_id)
            )
            return result.rowcount > 0

    async def list(self) -> list[RecurringCountdown]:
        """Starred first, then soonest target first."""
        async with session_scope(self.session_factory) as session:
            result = await session.execute(
                select(CountdownModel).order_by(
                    CountdownModel.is_starred.desc(), CountdownModel.target_date,
                )
            )
            return [_row_to_countdown(row) for row in result.scalars().all()]
