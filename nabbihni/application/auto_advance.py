"""
Auto-advance for recurring user countdowns.

Once the stored target's day has ended in reference time, the next occurrence is
computed from the reference "now" and persisted. The new target is always in the
future, so a second call on the same day is a no-op.
"""
import logging
from datetime import datetime
from typing import Iterable

from nabbihni.domain.clock import SaudiClock
from nabbihni.domain.countdown import RecurringCountdown
from nabbihni.domain.recurrence import next_user_occurrence
from nabbihni.infrastructure.db.countdown_store import CountdownStore

logger = logging.getLogger(__name__)


class AutoAdvanceError(RuntimeError):
    pass


class AutoAdvanceService:
    def __init__(self, store: CountdownStore, clock: SaudiClock):
        self.store = store
        self.clock = clock

    def should_advance(self, countdown: RecurringCountdown, now: datetime | None = None) -> bool:
        if not countdown.is_recurring or countdown.recurrence is None:
            return False
        return self.clock.has_passed_end_of_day(countdown.target_date, now)

    async def maybe_advance(
        self, countdown: RecurringCountdown, now: datetime | None = None,
    ) -> RecurringCountdown | None:
        """
        Persist the next occurrence if the countdown's day is over.

        Returns:
            The updated countdown as stored, or None when nothing had to change.

        Raises:
            AutoAdvanceError: the countdown no longer exists in storage
            Any storage exception: propagated, the countdown is not advanced
        """
        if now is None:
            now = self.clock.reference_now()
        if not self.should_advance(countdown, now):
            return None

        result = next_user_occurrence(countdown.recurrence, now)
        updated = await self.store.update(
            countdown.id,
            target_date=result.target_date,
            recurrence=countdown.recurrence.advanced_at(now),
        )
        if updated is None:
            raise AutoAdvanceError(f"countdown {countdown.id} not found")

        logger.info(
            "Advanced countdown %s: %s -> %s%s",
            countdown.id,
            countdown.target_date,
            result.target_date,
            " (weekend-adjusted)" if result.was_adjusted else "",
        )
        return updated

    async def advance_all(
        self, countdowns: Iterable[RecurringCountdown], now: datetime | None = None,
    ) -> list[RecurringCountdown]:
        """Advance each countdown; items not advanced (or failing) are returned unchanged, order kept."""
        if now is None:
            now = self.clock.reference_now()

        out: list[RecurringCountdown] = []
        for countdown in countdowns:
            try:
                updated = await self.maybe_advance(countdown, now)
            except Exception:
                logger.exception("Auto-advance failed for countdown %s", countdown.id)
                updated = None
            out.append(updated or countdown)
        return out

    async def advance_stored(self, now: datetime | None = None) -> int:
        """Advance every stored countdown. Returns the number advanced."""
        if now is None:
            now = self.clock.reference_now()
        countdowns = await self.store.list()
        advanced = await self.advance_all(countdowns, now)
        count = sum(1 for before, after in zip(countdowns, advanced) if after is not before)
        logger.info("Auto-advance: %d of %d countdown(s) advanced", count, len(countdowns))
        return count
