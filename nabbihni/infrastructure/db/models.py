"""
SQLAlchemy ORM models
"""
from datetime import date as date_type, datetime
from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nabbihni.infrastructure.db.session import Base


class CountdownModel(Base):
    """User countdowns (personal and recurring)"""
    __tablename__ = "countdowns"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # Naive reference-time (UTC+3) instant, never shifted
    target_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, index=True)
    icon: Mapped[str] = mapped_column(String(16), nullable=False, default="⏳")
    theme: Mapped[str] = mapped_column(String(32), nullable=False, default="default")
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # {"type", "calendar_type", "day_of_month", "adjustment_rule", "day_of_week", "last_auto_advanced"}
    recurrence_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_starred: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # ["at_completion", "1_day", {"type": "custom", "offset_minutes": 90}]
    reminder_timing_json: Mapped[list | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)


class HolidayInstanceModel(Base):
    """Resolved official holiday per Hijri year, with optional admin override"""
    __tablename__ = "holiday_instances"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_id: Mapped[str] = mapped_column(String(64), nullable=False)
    hijri_year: Mapped[int] = mapped_column(Integer, nullable=False)
    calculated_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    override_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)
    override_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_calculated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    __table_args__ = (
        UniqueConstraint("event_id", "hijri_year", name="uq_holiday_instance_event_year"),
    )


class EventOverrideModel(Base):
    """Admin edits to a catalog event, keyed by base id"""
    __tablename__ = "event_overrides"

    base_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # {"title": ..., "target_date": "YYYY-MM-DDTHH:MM:SS", ...}; merged on every save
    changes_json: Mapped[dict] = mapped_column(JSON, nullable=False)
    overridden_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)


class CustomEventModel(Base):
    """Admin-created public events"""
    __tablename__ = "custom_events"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)  # "custom-<uuid4>"
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    title_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    target_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    icon: Mapped[str] = mapped_column(String(16), nullable=False, default="📅")
    theme: Mapped[str] = mapped_column(String(32), nullable=False, default="default")
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_confidence: Mapped[str | None] = mapped_column(String(32), nullable=True)
    date_source: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_hijri_derived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # {"kind": "one_time" | "lunar" | "fixed_annual" | "seasonal", "month": ..., "day": ...}
    recurrence_json: Mapped[dict] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
