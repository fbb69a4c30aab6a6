"""
Countdown API endpoints
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from nabbihni.api.deps import get_auto_advance, get_clock, get_store
from nabbihni.application.auto_advance import AutoAdvanceService
from nabbihni.domain.clock import SaudiClock
from nabbihni.domain.countdown import RecurringCountdown
from nabbihni.domain.recurrence import RecurrenceSettings, next_user_occurrence
from nabbihni.domain.reminders import reminder_schedule
from nabbihni.infrastructure.db.countdown_store import CountdownStore, settings_to_json
from nabbihni.utils.instants import format_instant, parse_instant


router = APIRouter(prefix="/api/v1", tags=["countdowns"])


# === Request/Response models ===

class RecurrenceSettingsRequest(BaseModel):
    type: str  # salary, daily, weekly, monthly, yearly
    calendar_type: str = "gregorian"
    day_of_month: int = 1
    adjustment_rule: str = "smart"
    day_of_week: int | None = None  # 0=Sunday..6=Saturday

    def to_settings(self) -> RecurrenceSettings:
        return RecurrenceSettings(
            type=self.type,
            calendar_type=self.calendar_type,
            day_of_month=self.day_of_month,
            adjustment_rule=self.adjustment_rule,
            day_of_week=self.day_of_week,
        )


class CreateCountdownRequest(BaseModel):
    title: str
    target_date: str | None = None  # computed from recurrence when omitted
    icon: str = "⏳"
    theme: str = "default"
    is_recurring: bool = False
    recurrence: RecurrenceSettingsRequest | None = None
    is_starred: bool = False
    reminder_timing: list[str | dict[str, Any]] = []
    note: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title is required")
        return v.strip()


class TimeRemainingResponse(BaseModel):
    days: int
    hours: int
    minutes: int
    seconds: int
    is_complete: bool


class CountdownResponse(BaseModel):
    id: str
    title: str
    target_date: str
    icon: str
    theme: str
    is_recurring: bool
    recurrence: dict | None = None
    is_starred: bool
    reminder_timing: list
    note: str | None = None
    created_at: str | None = None
    time_remaining: TimeRemainingResponse


class NextOccurrenceResponse(BaseModel):
    target_date: str
    was_adjusted: bool
    adjusted_from: str | None = None


# === Helper functions ===

def _to_response(countdown: RecurringCountdown, clock: SaudiClock) -> CountdownResponse:
    remaining = clock.time_remaining(countdown.target_date)
    return CountdownResponse(
        id=countdown.id,
        title=countdown.title,
        target_date=format_instant(countdown.target_date),
        icon=countdown.icon,
        theme=countdown.theme,
        is_recurring=countdown.is_recurring,
        recurrence=settings_to_json(countdown.recurrence),
        is_starred=countdown.is_starred,
        reminder_timing=list(countdown.reminder_timing),
        note=countdown.note,
        created_at=format_instant(countdown.created_at) if countdown.created_at else None,
        time_remaining=TimeRemainingResponse(
            days=remaining.days,
            hours=remaining.hours,
            minutes=remaining.minutes,
            seconds=remaining.seconds,
            is_complete=remaining.is_complete,
        ),
    )


async def _get_or_404(store: CountdownStore, countdown_id: str) -> RecurringCountdown:
    countdown = await store.get(countdown_id)
    if countdown is None:
        raise HTTPException(status_code=404, detail="Countdown not found")
    return countdown


# === Endpoints ===

@router.get("/countdowns", response_model=list[CountdownResponse])
async def list_countdowns(
    store: CountdownStore = Depends(get_store),
    clock: SaudiClock = Depends(get_clock),
):
    """Starred first, then soonest"""
    return [_to_response(c, clock) for c in await store.list()]


@router.post("/countdowns", response_model=CountdownResponse)
async def create_countdown(
    req: CreateCountdownRequest,
    store: CountdownStore = Depends(get_store),
    clock: SaudiClock = Depends(get_clock),
):
    """Create a countdown; a recurring one without target_date gets its next occurrence"""
    try:
        recurrence = req.recurrence.to_settings() if req.recurrence else None
        if req.target_date is not None:
            target_date = parse_instant(req.target_date, clock.offset_hours)
        elif req.is_recurring and recurrence is not None:
            target_date = next_user_occurrence(recurrence, clock.reference_now()).target_date
        else:
            raise HTTPException(status_code=400, detail="target_date is required")

        countdown = await store.create(
            title=req.title,
            target_date=target_date,
            icon=req.icon,
            theme=req.theme,
            is_recurring=req.is_recurring,
            recurrence=recurrence,
            is_starred=req.is_starred,
            reminder_timing=req.reminder_timing,
            note=req.note,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _to_response(countdown, clock)


@router.post("/countdowns/advance")
async def advance_countdowns(service: AutoAdvanceService = Depends(get_auto_advance)):
    """Run auto-advance over every stored countdown now"""
    advanced = await service.advance_stored()
    return {"advanced": advanced}


@router.get("/countdowns/{countdown_id}", response_model=CountdownResponse)
async def get_countdown(
    countdown_id: str,
    store: CountdownStore = Depends(get_store),
    clock: SaudiClock = Depends(get_clock),
):
    return _to_response(await _get_or_404(store, countdown_id), clock)


@router.delete("/countdowns/{countdown_id}")
async def delete_countdown(countdown_id: str, store: CountdownStore = Depends(get_store)):
    if not await store.delete(countdown_id):
        raise HTTPException(status_code=404, detail="Countdown not found")
    return {"success": True}


@router.get("/countdowns/{countdown_id}/reminders")
async def get_countdown_reminders(
    countdown_id: str,
    store: CountdownStore = Depends(get_store),
    clock: SaudiClock = Depends(get_clock),
):
    """Upcoming reminder fire instants (defaults apply when none are set)"""
    countdown = await _get_or_404(store, countdown_id)
    instants = reminder_schedule(countdown.target_date, countdown.reminder_timing, clock.reference_now())
    return {"reminders": [format_instant(i) for i in instants]}


@router.post("/recurrence/preview", response_model=NextOccurrenceResponse)
def preview_recurrence(
    req: RecurrenceSettingsRequest,
    clock: SaudiClock = Depends(get_clock),
):
    """Next occurrence for the posted settings, with weekend adjustment"""
    try:
        result = next_user_occurrence(req.to_settings(), clock.reference_now())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return NextOccurrenceResponse(
        target_date=format_instant(result.target_date),
        was_adjusted=result.was_adjusted,
        adjusted_from=format_instant(result.adjusted_from) if result.adjusted_from else None,
    )
