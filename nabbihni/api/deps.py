"""
FastAPI dependencies (clock, storage, services)

Tests swap these through app.dependency_overrides.
"""
from fastapi import Depends

from nabbihni.application.auto_advance import AutoAdvanceService
from nabbihni.application.event_catalog import EventCatalogService
from nabbihni.application.holidays import HolidayService
from nabbihni.domain.clock import SaudiClock, get_clock as _get_clock
from nabbihni.infrastructure.db.countdown_store import CountdownStore
from nabbihni.infrastructure.db.session import get_session_factory


def get_clock() -> SaudiClock:
    return _get_clock()


def get_store(clock: SaudiClock = Depends(get_clock)) -> CountdownStore:
    return CountdownStore(get_session_factory(), clock)


def get_event_catalog(clock: SaudiClock = Depends(get_clock)) -> EventCatalogService:
    return EventCatalogService(get_session_factory(), clock)


def get_holiday_service(clock: SaudiClock = Depends(get_clock)) -> HolidayService:
    return HolidayService(get_session_factory(), clock)


def get_auto_advance(
    store: CountdownStore = Depends(get_store),
    clock: SaudiClock = Depends(get_clock),
) -> AutoAdvanceService:
    return AutoAdvanceService(store, clock)
