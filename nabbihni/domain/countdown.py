"""
User countdown records.

A RecurringCountdown is never mutated in place: updates produce a new value
which storage persists.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from nabbihni.domain.recurrence import RecurrenceSettings
from nabbihni.domain.reminders import validate_reminder_timing

VALID_THEMES = frozenset({"default", "sunset", "night", "gold", "ramadan"})


class CountdownValidationError(ValueError):
    pass


@dataclass(frozen=True)
class RecurringCountdown:
    id: str
    title: str
    target_date: datetime
    icon: str = "⏳"
    theme: str = "default"
    is_recurring: bool = False
    recurrence: RecurrenceSettings | None = None
    is_starred: bool = False
    reminder_timing: tuple[Any, ...] = field(default_factory=tuple)
    note: str | None = None
    created_at: datetime | None = None


def validate_countdown_data(
    title: str,
    theme: str,
    is_recurring: bool,
    recurrence: RecurrenceSettings | None,
    reminder_timing: list | tuple | None = None,
) -> None:
    """Validate a countdown before it is created. Raises CountdownValidationError."""
    if not title.strip():
        raise CountdownValidationError("title is required")
    if theme not in VALID_THEMES:
        raise CountdownValidationError(f"invalid theme: {theme}")
    if is_recurring and recurrence is None:
        raise CountdownValidationError("recurring countdown requires recurrence settings")
    for timing in reminder_timing or ():
        try:
            validate_reminder_timing(timing)
        except ValueError as e:
            raise CountdownValidationError(str(e)) from e
