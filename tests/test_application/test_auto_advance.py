"""
Tests for auto-advancing recurring countdowns
"""
from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest

from nabbihni.application.auto_advance import AutoAdvanceError, AutoAdvanceService
from nabbihni.domain.clock import FixedClock
from nabbihni.domain.countdown import RecurringCountdown
from nabbihni.domain.recurrence import RecurrenceSettings

pytestmark = pytest.mark.asyncio

SALARY = RecurrenceSettings(type="salary", day_of_month=27)


async def _create_salary(store, target: datetime) -> RecurringCountdown:
    return await store.create(title="راتب", target_date=target, is_recurring=True, recurrence=SALARY)


@pytest.fixture
def service(store, clock):
    return AutoAdvanceService(store, clock)


async def test_future_target_not_advanced(service, store):
    countdown = await _create_salary(store, datetime(2026, 10, 27, 23, 59, 59))
    assert await service.maybe_advance(countdown) is None


async def test_target_day_not_over_yet(service, store, reference_now):
    countdown = await _create_salary(store, datetime(reference_now.year, reference_now.month, reference_now.day))
    assert await service.maybe_advance(countdown) is None


async def test_past_target_advanced_and_persisted(service, store, reference_now):
    countdown = await _create_salary(store, datetime(2026, 9, 27, 23, 59, 59))

    updated = await service.maybe_advance(countdown)

    assert updated.target_date == datetime(2026, 10, 27, 23, 59, 59)
    assert updated.recurrence.last_auto_advanced == reference_now
    stored = await store.get(countdown.id)
    assert stored.target_date == datetime(2026, 10, 27, 23, 59, 59)
    assert stored.recurrence.last_auto_advanced == reference_now


async def test_second_call_same_day_is_noop(service, store):
    countdown = await _create_salary(store, datetime(2026, 9, 27, 23, 59, 59))
    updated = await service.maybe_advance(countdown)
    assert await service.maybe_advance(updated) is None


async def test_original_value_not_mutated(service, store):
    countdown = await _create_salary(store, datetime(2026, 9, 27, 23, 59, 59))
    await service.maybe_advance(countdown)
    assert countdown.target_date == datetime(2026, 9, 27, 23, 59, 59)


async def test_non_recurring_never_advanced(service, store):
    countdown = await store.create(title="Trip", target_date=datetime(2026, 1, 1))
    assert await service.maybe_advance(countdown) is None


async def test_persistence_failure_propagates(service, store):
    countdown = await _create_salary(store, datetime(2026, 9, 27, 23, 59, 59))

    with patch.object(store, "update", AsyncMock(side_effect=RuntimeError("database is locked"))):
        with pytest.raises(RuntimeError):
            await service.maybe_advance(countdown)

    stored = await store.get(countdown.id)
    assert stored.target_date == datetime(2026, 9, 27, 23, 59, 59)
    assert stored.recurrence.last_auto_advanced is None


async def test_missing_countdown_raises(service):
    ghost = RecurringCountdown(
        id="missing", title="Ghost", target_date=datetime(2026, 9, 27, 23, 59, 59),
        is_recurring=True, recurrence=SALARY,
    )
    with pytest.raises(AutoAdvanceError):
        await service.maybe_advance(ghost)


async def test_weekend_adjusted_target(service, store):
    """Salary on the 23rd: 2026-10-23 is a Friday, paid Thursday the 22nd."""
    settings = RecurrenceSettings(type="salary", day_of_month=23)
    countdown = await store.create(
        title="Salary", target_date=datetime(2026, 9, 23, 23, 59, 59), is_recurring=True, recurrence=settings,
    )
    updated = await service.maybe_advance(countdown)
    assert updated.target_date == datetime(2026, 10, 22, 23, 59, 59)


async def test_advance_all_keeps_order_and_isolates_failures(service, store):
    first = await _create_salary(store, datetime(2026, 9, 27, 23, 59, 59))
    ghost = RecurringCountdown(
        id="missing", title="Ghost", target_date=datetime(2026, 9, 1),
        is_recurring=True, recurrence=SALARY,
    )
    future = await _create_salary(store, datetime(2026, 12, 27, 23, 59, 59))

    result = await service.advance_all([first, ghost, future])

    assert [c.id for c in result] == [first.id, "missing", future.id]
    assert result[0].target_date == datetime(2026, 10, 27, 23, 59, 59)
    assert result[1] is ghost
    assert result[2] is future


async def test_advance_stored_counts(service, store):
    await _create_salary(store, datetime(2026, 9, 27, 23, 59, 59))
    await _create_salary(store, datetime(2026, 8, 27, 23, 59, 59))
    await _create_salary(store, datetime(2026, 11, 27, 23, 59, 59))
    await store.create(title="Old trip", target_date=datetime(2025, 1, 1))

    assert await service.advance_stored() == 2
    assert await service.advance_stored() == 0


async def test_clamped_month_end_on_friday_advances_once(store):
    """Day 31 in April 2027: the 30th is a Friday, so the advance skips to May 31."""
    settings = RecurrenceSettings(type="salary", day_of_month=31)
    countdown = await store.create(
        title="Rent", target_date=datetime(2027, 3, 31, 23, 59, 59), is_recurring=True, recurrence=settings,
    )
    service = AutoAdvanceService(store, FixedClock(datetime(2027, 4, 30, 0, 0, 5)))

    updated = await service.maybe_advance(countdown)

    assert updated.target_date == datetime(2027, 5, 31, 23, 59, 59)
    assert await service.maybe_advance(updated) is None


async def test_clamped_hijri_month_end_on_friday_advances_once(store):
    """29 Dhu al-Hijjah 1448 is a Friday; the countdown moves to 30 Muharram 1449."""
    settings = RecurrenceSettings(type="salary", calendar_type="hijri", day_of_month=30)
    countdown = await store.create(
        title="Hijri salary", target_date=datetime(2027, 5, 6, 23, 59, 59), is_recurring=True, recurrence=settings,
    )
    service = AutoAdvanceService(store, FixedClock(datetime(2027, 6, 4, 0, 0, 5)))

    updated = await service.maybe_advance(countdown)

    assert updated.target_date == datetime(2027, 7, 4, 23, 59, 59)
    assert await service.maybe_advance(updated) is None
