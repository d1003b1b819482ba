"""Period navigation over weeks and days."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from clinic.shared.enums import ViewMode, Weekday

DAYS_PER_WEEK = 7

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def week_start(value: date) -> date:
    """Monday of the ISO week containing ``value``."""
    return value - timedelta(days=value.weekday())


def month_name(value: date) -> str:
    """English month name of ``value``."""
    return MONTH_NAMES[value.month - 1]


def format_long_date(value: date) -> str:
    """Day-view heading, e.g. ``Wednesday, March 5, 2025``."""
    return f"{Weekday.from_date(value).label}, {month_name(value)} {value.day}, {value.year}"


@dataclass
class PeriodNavigator:
    """The displayed period: a reference date plus week/day granularity.

    Everything derived (visible days, title) is computed from these two
    fields only.
    """

    reference_date: date
    mode: ViewMode = ViewMode.WEEK

    @property
    def step(self) -> timedelta:
        return timedelta(days=DAYS_PER_WEEK if self.mode == ViewMode.WEEK else 1)

    def next(self) -> date:
        self.reference_date += self.step
        return self.reference_date

    def previous(self) -> date:
        self.reference_date -= self.step
        return self.reference_date

    def go_to_today(self, today: date) -> date:
        self.reference_date = today
        return self.reference_date

    def set_mode(self, mode: ViewMode) -> None:
        self.mode = ViewMode(mode)

    def visible_days(self) -> list[date]:
        if self.mode == ViewMode.DAY:
            return [self.reference_date]
        monday = week_start(self.reference_date)
        return [monday + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]

    def includes(self, value: date) -> bool:
        return value in self.visible_days()

    def title(self) -> str:
        if self.mode == ViewMode.DAY:
            return format_long_date(self.reference_date)
        days = self.visible_days()
        first, last = days[0], days[-1]
        if first.month == last.month:
            return f"{month_name(first)} {first.year}"
        return f"{month_name(first)} – {month_name(last)} {first.year}"
