"""Bookable time labels for a working day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache

from clinic.core.config import settings

MINUTES_PER_HOUR = 60


def format_slot(hour: int, minute: int) -> str:
    """Zero-padded ``HH:MM`` label."""
    return f"{hour:02d}:{minute:02d}"


@lru_cache(maxsize=32)
def generate_time_slots(start_hour: int, end_hour: int, step_minutes: int = 30) -> tuple[str, ...]:
    """Return every ``HH:MM`` label from ``start_hour:00`` through the last step of ``end_hour``.

    Each hour restarts at ``:00``, so 8..19 at 30 minutes yields the 24 labels
    ``08:00`` .. ``19:30``. A reversed range or a non-positive step yields an
    empty tuple.
    """
    if step_minutes <= 0 or end_hour < start_hour:
        return ()
    return tuple(
        format_slot(hour, minute)
        for hour in range(start_hour, end_hour + 1)
        for minute in range(0, MINUTES_PER_HOUR, step_minutes)
    )


def current_slot_label(now: datetime, step_minutes: int = 30) -> str:
    """Label of the slot containing ``now`` (minutes floored to the step)."""
    step = max(1, step_minutes)
    return format_slot(now.hour, (now.minute // step) * step)


@dataclass(frozen=True)
class GridConfig:
    start_hour: int = 8
    end_hour: int = 19
    slot_minutes: int = 30
    max_visible: int = 4

    @classmethod
    def from_settings(cls) -> "GridConfig":
        return cls(
            start_hour=settings.calendar_start_hour,
            end_hour=settings.calendar_end_hour,
            slot_minutes=settings.calendar_slot_minutes,
            max_visible=settings.day_view_max_visible,
        )

    @property
    def time_slots(self) -> tuple[str, ...]:
        return generate_time_slots(self.start_hour, self.end_hour, self.slot_minutes)
