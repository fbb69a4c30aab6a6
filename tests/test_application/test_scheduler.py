"""
Tests for background scheduler jobs
"""
import logging
from unittest.mock import AsyncMock, patch

import pytest

from nabbihni.application import scheduler as scheduler_module
from nabbihni.application.auto_advance import AutoAdvanceService
from nabbihni.application.holidays import HolidayService

pytestmark = pytest.mark.asyncio


async def test_jobs_registered():
    scheduler_module.start_scheduler()
    try:
        job = scheduler_module.scheduler.get_job("auto_advance")
        assert job is not None
        assert str(job.trigger.fields[5]) == "21"  # hour (UTC)
        assert str(job.trigger.fields[7]) == "5"  # second
        assert scheduler_module.scheduler.get_job("holiday_recalculation") is not None
    finally:
        scheduler_module.shutdown_scheduler()


async def test_auto_advance_job_logs_failures(caplog):
    with patch.object(AutoAdvanceService, "advance_stored", AsyncMock(side_effect=RuntimeError("db down"))):
        with caplog.at_level(logging.ERROR):
            await scheduler_module._run_auto_advance()
    assert "Auto-advance job failed" in caplog.text


async def test_auto_advance_job_runs_service():
    mock = AsyncMock(return_value=3)
    with patch.object(AutoAdvanceService, "advance_stored", mock):
        await scheduler_module._run_auto_advance()
    mock.assert_awaited_once()


async def test_holiday_job_logs_failures(caplog):
    with patch.object(HolidayService, "recalculate_all", AsyncMock(side_effect=RuntimeError("db down"))):
        with caplog.at_level(logging.ERROR):
            await scheduler_module._run_holiday_recalculation()
    assert "Holiday recalculation job failed" in caplog.text
