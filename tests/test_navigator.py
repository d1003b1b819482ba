from datetime import date, timedelta

import pytest

from clinic.modules.calendar.navigator import PeriodNavigator, week_start
from clinic.shared.enums import ViewMode


def test_week_of_wednesday_starts_monday_and_ends_sunday():
    navigator = PeriodNavigator(date(2025, 3, 5), ViewMode.WEEK)
    days = navigator.visible_days()
    assert days[0] == date(2025, 3, 3)
    assert days[-1] == date(2025, 3, 9)
    assert len(days) == 7


def test_week_days_are_seven_consecutive_from_monday():
    start = date(2024, 12, 20)
    for offset in range(30):
        reference = start + timedelta(days=offset)
        days = PeriodNavigator(reference, ViewMode.WEEK).visible_days()
        assert len(days) == 7
        assert days[0].weekday() == 0
        assert reference in days
        assert all(later - earlier == timedelta(days=1) for earlier, later in zip(days, days[1:]))


def test_sunday_belongs_to_the_preceding_week():
    assert week_start(date(2025, 3, 9)) == date(2025, 3, 3)


def test_day_mode_shows_only_reference_date():
    navigator = PeriodNavigator(date(2025, 3, 5), ViewMode.DAY)
    assert navigator.visible_days() == [date(2025, 3, 5)]


@pytest.mark.parametrize(("mode", "step"), [(ViewMode.WEEK, 7), (ViewMode.DAY, 1)])
def test_next_and_previous_step_by_mode(mode, step):
    navigator = PeriodNavigator(date(2025, 3, 5), mode)
    assert navigator.next() == date(2025, 3, 5) + timedelta(days=step)
    navigator.previous()
    navigator.previous()
    assert navigator.reference_date == date(2025, 3, 5) - timedelta(days=step)


@pytest.mark.parametrize("mode", list(ViewMode))
def test_next_then_previous_round_trips(mode):
    for reference in (date(2025, 1, 1), date(2024, 2, 29), date(2025, 12, 31)):
        navigator = PeriodNavigator(reference, mode)
        navigator.next()
        navigator.previous()
        assert navigator.reference_date == reference
        navigator.previous()
        navigator.next()
        assert navigator.reference_date == reference


def test_go_to_today_keeps_mode():
    navigator = PeriodNavigator(date(2024, 6, 1), ViewMode.DAY)
    navigator.go_to_today(date(2025, 3, 13))
    assert navigator.reference_date == date(2025, 3, 13)
    assert navigator.mode == ViewMode.DAY


def test_set_mode_keeps_reference_date():
    navigator = PeriodNavigator(date(2025, 3, 5))
    navigator.set_mode(ViewMode.DAY)
    assert navigator.mode == ViewMode.DAY
    assert navigator.reference_date == date(2025, 3, 5)
    navigator.set_mode("week")
    assert navigator.mode == ViewMode.WEEK


def test_visible_days_depend_only_on_state():
    first = PeriodNavigator(date(2025, 3, 5), ViewMode.WEEK)
    second = PeriodNavigator(date(2025, 3, 5), ViewMode.WEEK)
    assert first.visible_days() == second.visible_days() == first.visible_days()


def test_titles():
    assert PeriodNavigator(date(2025, 3, 5), ViewMode.WEEK).title() == "March 2025"
    assert PeriodNavigator(date(2025, 4, 2), ViewMode.WEEK).title() == "March – April 2025"
    assert PeriodNavigator(date(2024, 12, 31), ViewMode.WEEK).title() == "December – January 2024"
    assert PeriodNavigator(date(2025, 3, 5), ViewMode.DAY).title() == "Wednesday, March 5, 2025"


def test_includes_matches_visible_days():
    week = PeriodNavigator(date(2025, 3, 5), ViewMode.WEEK)
    assert week.includes(date(2025, 3, 3))
    assert week.includes(date(2025, 3, 9))
    assert not week.includes(date(2025, 3, 10))
    day = PeriodNavigator(date(2025, 3, 5), ViewMode.DAY)
    assert day.includes(date(2025, 3, 5))
    assert not day.includes(date(2025, 3, 6))
