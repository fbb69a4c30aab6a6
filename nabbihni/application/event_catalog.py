"""
Public events list with admin edits.

The list shown to users is the static catalog (public events and the school
calendar) run through the instance generator, with admin overrides merged into
matching instances by base id, plus admin-created custom events. Overrides and
custom events live in the database; the static catalog is never modified.
"""
import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nabbihni.application.event_instances import EventInstanceGenerator
from nabbihni.catalog.education_calendar import EDUCATION_EVENTS
from nabbihni.catalog.public_events import PUBLIC_EVENTS
from nabbihni.domain.clock import SaudiClock
from nabbihni.domain.countdown import VALID_THEMES
from nabbihni.domain.event_template import VALID_CATEGORIES, EventInstance, EventTemplate
from nabbihni.domain.recurrence import LUNAR, ONE_TIME, EventRecurrence
from nabbihni.infrastructure.db.models import CustomEventModel, EventOverrideModel
from nabbihni.infrastructure.db.session import session_scope
from nabbihni.utils.instants import format_instant, parse_instant

logger = logging.getLogger(__name__)

CUSTOM_ID_PREFIX = "custom-"

OVERRIDABLE_FIELDS = (
    "title",
    "title_ar",
    "target_date",
    "icon",
    "theme",
    "category",
    "note",
    "date_confidence",
    "date_source",
    "is_hijri_derived",
)
CUSTOM_EVENT_FIELDS = OVERRIDABLE_FIELDS + ("recurrence",)
REQUIRED_FIELDS = ("title", "title_ar", "target_date", "icon", "theme", "category", "is_hijri_derived")


class EventValidationError(ValueError):
    pass


class EventNotFoundError(LookupError):
    pass


def catalog_templates() -> list[EventTemplate]:
    return PUBLIC_EVENTS + EDUCATION_EVENTS


# === Validation ===

def _validate_common(changes: dict[str, Any]) -> None:
    for key in REQUIRED_FIELDS:
        if key in changes and changes[key] is None:
            raise EventValidationError(f"{key} must not be null")
    for key in ("title", "title_ar"):
        if key in changes and not (changes[key] or "").strip():
            raise EventValidationError(f"{key} must not be blank")
    if "theme" in changes and changes["theme"] not in VALID_THEMES:
        raise EventValidationError(f"invalid theme: {changes['theme']}")
    if "category" in changes and changes["category"] not in VALID_CATEGORIES:
        raise EventValidationError(f"invalid category: {changes['category']}")


def validate_override(changes: dict[str, Any]) -> dict[str, Any]:
    """Checked, JSON-ready copy of an override change set."""
    if not changes:
        raise EventValidationError("override has no changes")
    unknown = set(changes) - set(OVERRIDABLE_FIELDS)
    if unknown:
        raise EventValidationError(f"cannot override fields: {sorted(unknown)}")
    _validate_common(changes)

    cleaned = dict(changes)
    if "target_date" in cleaned:
        target = cleaned["target_date"]
        if isinstance(target, str):
            target = parse_instant(target)
        if not isinstance(target, datetime):
            raise EventValidationError("target_date must be an instant")
        cleaned["target_date"] = format_instant(target)
    return cleaned


def validate_event_recurrence(recurrence: EventRecurrence) -> None:
    if recurrence.kind == ONE_TIME:
        return
    if recurrence.month is None or recurrence.day is None:
        raise EventValidationError(f"{recurrence.kind} recurrence needs month and day")
    if not 1 <= recurrence.month <= 12:
        raise EventValidationError(f"month out of range: {recurrence.month}")
    max_day = 30 if recurrence.kind == LUNAR else 31
    if not 1 <= recurrence.day <= max_day:
        raise EventValidationError(f"day out of range: {recurrence.day}")


def apply_override(instance: EventInstance, changes: dict[str, Any]) -> EventInstance:
    """Instance with the stored override fields laid over it."""
    fields = {k: v for k, v in changes.items() if k in OVERRIDABLE_FIELDS}
    if "target_date" in fields:
        fields["target_date"] = parse_instant(fields["target_date"])
    return replace(instance, **fields)


# === Row mapping ===

def recurrence_to_json(recurrence: EventRecurrence) -> dict:
    return {"kind": recurrence.kind, "month": recurrence.month, "day": recurrence.day}


def recurrence_from_json(raw: dict | None) -> EventRecurrence:
    if not raw:
        return EventRecurrence(ONE_TIME)
    return EventRecurrence(raw["kind"], raw.get("month"), raw.get("day"))


def _row_to_template(row: CustomEventModel) -> EventTemplate:
    try:
        recurrence = recurrence_from_json(row.recurrence_json)
    except (KeyError, ValueError):
        logger.error("Custom event %s has invalid recurrence: %r", row.id, row.recurrence_json)
        recurrence = EventRecurrence(ONE_TIME)
    return EventTemplate(
        id=row.id,
        base_id=row.id,
        title=row.title,
        title_ar=row.title_ar,
        target_date=row.target_date,
        icon=row.icon,
        theme=row.theme,
        category=row.category,
        recurrence=recurrence,
        note=row.note,
        date_confidence=row.date_confidence,
        date_source=row.date_source,
        is_hijri_derived=bool(row.is_hijri_derived),
    )


class EventCatalogService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], clock: SaudiClock):
        self.session_factory = session_factory
        self.clock = clock
        self.generator = EventInstanceGenerator(clock)

    # --- Listing ---

    async def upcoming(self, now: datetime | None = None) -> list[EventInstance]:
        """Catalog events with overrides applied, plus custom events, soonest first."""
        if now is None:
            now = self.clock.reference_now()

        overrides = await self.list_overrides()
        custom = await self.list_custom_events()

        instances = [
            apply_override(i, overrides[i.base_id]) if i.base_id in overrides else i
            for i in self.generator.process_all(catalog_templates(), now)
        ]
        instances.extend(self.generator.process_all(custom, now))

        # An override may move an event into the past
        upcoming = [i for i in instances if i.target_date > now]
        upcoming.sort(key=lambda i: i.target_date)
        return upcoming

    # --- Overrides ---

    async def list_overrides(self) -> dict[str, dict]:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(select(EventOverrideModel))
            return {row.base_id: dict(row.changes_json) for row in result.scalars().all()}

    async def save_override(self, base_id: str, changes: dict[str, Any]) -> dict:
        """
        Store (or merge into) the override for a catalog event.

        Returns:
            The full change set now stored for base_id

        Raises:
            EventNotFoundError: base_id is not a catalog event
            EventValidationError: unknown field or invalid value
        """
        if base_id not in {t.resolved_base_id for t in catalog_templates()}:
            raise EventNotFoundError(f"unknown event: {base_id}")
        cleaned = validate_override(changes)

        now = self.clock.reference_now()
        async with session_scope(self.session_factory) as session:
            row = await session.get(EventOverrideModel, base_id)
            if row is None:
                row = EventOverrideModel(base_id=base_id, changes_json=cleaned, overridden_at=now)
                session.add(row)
            else:
                # New dict so the JSON column is seen as changed
                row.changes_json = {**row.changes_json, **cleaned}
                row.overridden_at = now
            await session.flush()
            merged = dict(row.changes_json)

        logger.info("Event override saved: %s %s", base_id, sorted(cleaned))
        return merged

    async def delete_override(self, base_id: str) -> bool:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(
                delete(EventOverrideModel).where(EventOverrideModel.base_id == base_id)
            )
            return result.rowcount > 0

    # --- Custom events ---

    async def list_custom_events(self) -> list[EventTemplate]:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(
                select(CustomEventModel).order_by(CustomEventModel.created_at, CustomEventModel.id)
            )
            return [_row_to_template(row) for row in result.scalars().all()]

    async def get_custom_event(self, event_id: str) -> EventTemplate | None:
        async with session_scope(self.session_factory) as session:
            row = await session.get(CustomEventModel, event_id)
            return _row_to_template(row) if row else None

    async def add_custom_event(
        self,
        title: str,
        target_date: datetime,
        category: str,
        title_ar: str | None = None,
        icon: str = "📅",
        theme: str = "default",
        note: str | None = None,
        date_confidence: str | None = None,
        date_source: str | None = None,
        is_hijri_derived: bool = False,
        recurrence: EventRecurrence | None = None,
    ) -> EventTemplate:
        recurrence = recurrence or EventRecurrence(ONE_TIME)
        title_ar = title_ar if title_ar is not None else title
        _validate_common({"title": title, "title_ar": title_ar, "theme": theme, "category": category})
        validate_event_recurrence(recurrence)

        row = CustomEventModel(
            id=f"{CUSTOM_ID_PREFIX}{uuid.uuid4()}",
            title=title.strip(),
            title_ar=title_ar.strip(),
            target_date=target_date,
            icon=icon,
            theme=theme,
            category=category,
            note=note,
            date_confidence=date_confidence,
            date_source=date_source,
            is_hijri_derived=is_hijri_derived,
            recurrence_json=recurrence_to_json(recurrence),
            created_at=self.clock.reference_now(),
            updated_at=None,
        )
        async with session_scope(self.session_factory) as session:
            session.add(row)
            await session.flush()
            template = _row_to_template(row)

        logger.info("Custom event created: %s (%s)", template.id, template.title)
        return template

    async def update_custom_event(self, event_id: str, **changes: Any) -> EventTemplate | None:
        """Apply a partial update; None if the custom event does not exist."""
        unknown = set(changes) - set(CUSTOM_EVENT_FIELDS)
        if unknown:
            raise EventValidationError(f"cannot update fields: {sorted(unknown)}")
        _validate_common(changes)
        if changes.get("recurrence") is not None:
            validate_event_recurrence(changes["recurrence"])

        async with session_scope(self.session_factory) as session:
            row = await session.get(CustomEventModel, event_id)
            if row is None:
                return None
            for key, value in changes.items():
                if key == "recurrence":
                    row.recurrence_json = recurrence_to_json(value or EventRecurrence(ONE_TIME))
                elif key in ("title", "title_ar"):
                    setattr(row, key, value.strip())
                else:
                    setattr(row, key, value)
            row.updated_at = self.clock.reference_now()
            await session.flush()
            return _row_to_template(row)

    async def delete_custom_event(self, event_id: str) -> bool:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(
                delete(CustomEventModel).where(CustomEventModel.id == event_id)
            )
            return result.rowcount > 0
