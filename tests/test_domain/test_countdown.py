"""
Tests for countdown validation
"""
import pytest

from nabbihni.domain.countdown import CountdownValidationError, validate_countdown_data
from nabbihni.domain.recurrence import RecurrenceSettings


def test_valid_countdown():
    validate_countdown_data("راتب", "gold", True, RecurrenceSettings(type="salary", day_of_month=27), ["1_day"])


def test_blank_title_rejected():
    with pytest.raises(CountdownValidationError):
        validate_countdown_data("   ", "default", False, None)


def test_unknown_theme_rejected():
    with pytest.raises(CountdownValidationError):
        validate_countdown_data("Trip", "neon", False, None)


def test_recurring_requires_settings():
    with pytest.raises(CountdownValidationError):
        validate_countdown_data("Salary", "default", True, None)


def test_bad_reminder_rejected():
    with pytest.raises(CountdownValidationError, match="invalid reminder timing"):
        validate_countdown_data("Trip", "default", False, None, ["2_days"])
