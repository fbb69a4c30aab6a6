"""
Background scheduler - runs periodic jobs inside the FastAPI event loop.

Jobs:
  - Auto-advance of recurring countdowns (00:00:05 reference time / 21:00:05 UTC)
  - Holiday recalculation (03:00 reference time / 00:00 UTC)
"""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler(timezone="UTC")


async def _run_auto_advance():
    from nabbihni.application.auto_advance import AutoAdvanceService
    from nabbihni.domain.clock import get_clock
    from nabbihni.infrastructure.db.countdown_store import CountdownStore
    from nabbihni.infrastructure.db.session import get_session_factory

    clock = get_clock()
    service = AutoAdvanceService(CountdownStore(get_session_factory(), clock), clock)
    try:
        await service.advance_stored()
    except Exception:
        logger.exception("Auto-advance job failed")


async def _run_holiday_recalculation():
    from nabbihni.application.holidays import HolidayService
    from nabbihni.domain.clock import get_clock
    from nabbihni.infrastructure.db.session import get_session_factory

    try:
        count = await HolidayService(get_session_factory(), get_clock()).recalculate_all()
        logger.info("Recalculated %d holiday instance(s)", count)
    except Exception:
        logger.exception("Holiday recalculation job failed")


def start_scheduler():
    """Start the scheduler with all periodic jobs."""
    # Auto-advance - just after midnight UTC+3, when yesterday's targets have ended
    scheduler.add_job(
        _run_auto_advance,
        CronTrigger(hour=21, minute=0, second=5),
        id="auto_advance",
        replace_existing=True,
    )

    # Holiday recalculation - 03:00 UTC+3 (00:00 UTC)
    scheduler.add_job(
        _run_holiday_recalculation,
        CronTrigger(hour=0, minute=0),
        id="holiday_recalculation",
        replace_existing=True,
    )

    scheduler.start()
    logger.info("Scheduler started: auto_advance (21:00:05 UTC), holiday_recalculation (00:00 UTC)")


def shutdown_scheduler():
    """Gracefully stop the scheduler."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
