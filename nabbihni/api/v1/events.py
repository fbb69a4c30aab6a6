"""
Public events and official holidays API endpoints
"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from nabbihni.api.deps import get_clock, get_event_catalog, get_holiday_service
from nabbihni.application.event_catalog import EventCatalogService, EventNotFoundError
from nabbihni.application.event_instances import events_by_category
from nabbihni.application.holidays import HolidayNotFoundError, HolidayService
from nabbihni.domain.clock import SaudiClock
from nabbihni.domain.event_template import VALID_CATEGORIES, EventTemplate
from nabbihni.domain.hijri import format_hijri_date
from nabbihni.domain.recurrence import EventRecurrence
from nabbihni.utils.instants import format_instant, parse_instant


router = APIRouter(prefix="/api/v1", tags=["events"])


# === Request/Response models ===

class EventResponse(BaseModel):
    id: str
    base_id: str
    title: str
    title_ar: str
    target_date: str  # YYYY-MM-DDTHH:MM:SS, reference time
    icon: str
    theme: str
    category: str
    recurrence_kind: str
    note: str | None = None
    date_confidence: str | None = None
    date_source: str | None = None
    is_hijri_derived: bool = False


class EventOverrideRequest(BaseModel):
    """Only the fields sent are overridden"""
    title: str | None = None
    title_ar: str | None = None
    target_date: str | None = None
    icon: str | None = None
    theme: str | None = None
    category: str | None = None
    note: str | None = None
    date_confidence: str | None = None
    date_source: str | None = None
    is_hijri_derived: bool | None = None


class EventRecurrenceRequest(BaseModel):
    kind: str = "one_time"  # one_time, lunar, fixed_annual, seasonal
    month: int | None = None  # Hijri month for lunar
    day: int | None = None

    def to_recurrence(self) -> EventRecurrence:
        return EventRecurrence(self.kind, self.month, self.day)


class CustomEventRequest(BaseModel):
    title: str
    title_ar: str | None = None
    target_date: str
    category: str
    icon: str = "📅"
    theme: str = "default"
    note: str | None = None
    date_confidence: str | None = None
    date_source: str | None = None
    is_hijri_derived: bool = False
    recurrence: EventRecurrenceRequest | None = None


class CustomEventUpdateRequest(BaseModel):
    title: str | None = None
    title_ar: str | None = None
    target_date: str | None = None
    category: str | None = None
    icon: str | None = None
    theme: str | None = None
    note: str | None = None
    date_confidence: str | None = None
    date_source: str | None = None
    is_hijri_derived: bool | None = None
    recurrence: EventRecurrenceRequest | None = None


class CustomEventResponse(BaseModel):
    id: str
    title: str
    title_ar: str
    target_date: str
    icon: str
    theme: str
    category: str
    recurrence: EventRecurrenceRequest
    note: str | None = None
    date_confidence: str | None = None
    date_source: str | None = None
    is_hijri_derived: bool = False


class HolidayResponse(BaseModel):
    event_id: str
    name_ar: str
    name_en: str
    icon: str
    theme: str
    hijri_year: int
    hijri_date_ar: str
    calculated_date: date
    override_date: date | None = None
    override_reason: str | None = None
    effective_date: date
    is_confirmed: bool


class HolidayOverrideRequest(BaseModel):
    override_date: date
    reason: str | None = None


# === Helper functions ===

def _custom_to_response(template: EventTemplate) -> CustomEventResponse:
    rec = template.recurrence
    return CustomEventResponse(
        id=template.id,
        title=template.title,
        title_ar=template.title_ar,
        target_date=format_instant(template.target_date),
        icon=template.icon,
        theme=template.theme,
        category=template.category,
        recurrence=EventRecurrenceRequest(kind=rec.kind, month=rec.month, day=rec.day),
        note=template.note,
        date_confidence=template.date_confidence,
        date_source=template.date_source,
        is_hijri_derived=template.is_hijri_derived,
    )


# === Endpoints ===

@router.get("/events", response_model=list[EventResponse])
async def list_events(
    category: str | None = None,
    service: EventCatalogService = Depends(get_event_catalog),
):
    """Upcoming public, school and custom events with admin edits, soonest first"""
    if category is not None and category not in VALID_CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")

    instances = await service.upcoming()
    if category is not None:
        instances = events_by_category(instances, category)

    return [
        EventResponse(
            id=i.id,
            base_id=i.base_id,
            title=i.title,
            title_ar=i.title_ar,
            target_date=format_instant(i.target_date),
            icon=i.icon,
            theme=i.theme,
            category=i.category,
            recurrence_kind=i.recurrence_kind,
            note=i.note,
            date_confidence=i.date_confidence,
            date_source=i.date_source,
            is_hijri_derived=i.is_hijri_derived,
        )
        for i in instances
    ]


# --- Admin: custom events ---

@router.get("/events/custom", response_model=list[CustomEventResponse])
async def list_custom_events(service: EventCatalogService = Depends(get_event_catalog)):
    return [_custom_to_response(t) for t in await service.list_custom_events()]


@router.post("/events/custom", response_model=CustomEventResponse)
async def create_custom_event(
    req: CustomEventRequest,
    service: EventCatalogService = Depends(get_event_catalog),
    clock: SaudiClock = Depends(get_clock),
):
    try:
        template = await service.add_custom_event(
            title=req.title,
            title_ar=req.title_ar,
            target_date=parse_instant(req.target_date, clock.offset_hours),
            category=req.category,
            icon=req.icon,
            theme=req.theme,
            note=req.note,
            date_confidence=req.date_confidence,
            date_source=req.date_source,
            is_hijri_derived=req.is_hijri_derived,
            recurrence=req.recurrence.to_recurrence() if req.recurrence else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _custom_to_response(template)


@router.put("/events/custom/{event_id}", response_model=CustomEventResponse)
async def update_custom_event(
    event_id: str,
    req: CustomEventUpdateRequest,
    service: EventCatalogService = Depends(get_event_catalog),
    clock: SaudiClock = Depends(get_clock),
):
    changes = req.model_dump(exclude_unset=True)
    try:
        if changes.get("target_date") is not None:
            changes["target_date"] = parse_instant(changes["target_date"], clock.offset_hours)
        if "recurrence" in changes:
            changes["recurrence"] = req.recurrence.to_recurrence() if req.recurrence else None
        template = await service.update_custom_event(event_id, **changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if template is None:
        raise HTTPException(status_code=404, detail="Custom event not found")
    return _custom_to_response(template)


@router.delete("/events/custom/{event_id}")
async def delete_custom_event(event_id: str, service: EventCatalogService = Depends(get_event_catalog)):
    if not await service.delete_custom_event(event_id):
        raise HTTPException(status_code=404, detail="Custom event not found")
    return {"success": True}


# --- Admin: overrides of catalog events ---

@router.put("/events/{base_id}/override")
async def save_event_override(
    base_id: str,
    req: EventOverrideRequest,
    service: EventCatalogService = Depends(get_event_catalog),
):
    """Merge the sent fields into the event's override"""
    try:
        changes = await service.save_override(base_id, req.model_dump(exclude_unset=True))
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "changes": changes}


@router.delete("/events/{base_id}/override")
async def delete_event_override(base_id: str, service: EventCatalogService = Depends(get_event_catalog)):
    """Revert to the catalog values"""
    if not await service.delete_override(base_id):
        raise HTTPException(status_code=404, detail="Event override not found")
    return {"success": True}


@router.get("/holidays", response_model=list[HolidayResponse])
async def list_holidays(service: HolidayService = Depends(get_holiday_service)):
    """Official holidays with admin overrides applied"""
    holidays = await service.upcoming()
    return [
        HolidayResponse(
            event_id=h.event_id,
            name_ar=h.name_ar,
            name_en=h.name_en,
            icon=h.icon,
            theme=h.theme,
            hijri_year=h.hijri_year,
            hijri_date_ar=format_hijri_date(h.hijri_year, h.hijri_month, h.hijri_day),
            calculated_date=h.calculated_date,
            override_date=h.override_date,
            override_reason=h.override_reason,
            effective_date=h.effective_date,
            is_confirmed=h.is_confirmed,
        )
        for h in holidays
    ]


@router.put("/holidays/{event_id}/{hijri_year}/override")
async def set_holiday_override(
    event_id: str,
    hijri_year: int,
    req: HolidayOverrideRequest,
    service: HolidayService = Depends(get_holiday_service),
):
    """Pin the announced date of a holiday"""
    try:
        await service.set_override(event_id, hijri_year, req.override_date, req.reason)
    except HolidayNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}


@router.delete("/holidays/{event_id}/{hijri_year}/override")
async def clear_holiday_override(
    event_id: str,
    hijri_year: int,
    service: HolidayService = Depends(get_holiday_service),
):
    """Back to the calculated date"""
    if not await service.clear_override(event_id, hijri_year):
        raise HTTPException(status_code=404, detail="Holiday instance not found")
    return {"success": True}
