"""Slot lookup and status tallies over an appointment snapshot."""

from __future__ import annotations

import re
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time

from clinic.modules.calendar.schemas import Appointment, StatusCounts, UnplacedAppointment
from clinic.shared.enums import AppointmentStatus

UNPLACED_REASON_DATE = "invalid-date"
UNPLACED_REASON_TIME = "invalid-time"
UNPLACED_REASON_OUTSIDE_GRID = "outside-grid"

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")

SlotKey = tuple[str, str]
DoctorSlotKey = tuple[str, str, str]


def normalize_date(value: date | str) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def normalize_time(value: time | str) -> str:
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return value


def appointments_for_slot(
    appointments: Iterable[Appointment],
    slot_date: date | str,
    slot_time: time | str,
    doctor_id: str | None = None,
) -> list[Appointment]:
    """Appointments booked exactly at (date, time[, doctor]), in snapshot order.

    Duration is ignored: an appointment occupies only the slot it starts in.
    """
    date_key = normalize_date(slot_date)
    time_key = normalize_time(slot_time)
    return [
        appt
        for appt in appointments
        if appt.date == date_key
        and appt.time == time_key
        and (doctor_id is None or appt.doctor_id == doctor_id)
    ]


class SlotIndex:
    """Single-pass grouping of a snapshot by slot key.

    ``lookup`` returns the same lists as :func:`appointments_for_slot` without
    rescanning the snapshot for every grid cell.
    """

    def __init__(self, appointments: Iterable[Appointment]):
        self._by_slot: dict[SlotKey, list[Appointment]] = defaultdict(list)
        self._by_doctor_slot: dict[DoctorSlotKey, list[Appointment]] = defaultdict(list)
        for appt in appointments:
            self._by_slot[(appt.date, appt.time)].append(appt)
            self._by_doctor_slot[(appt.date, appt.time, appt.doctor_id)].append(appt)

    def lookup(
        self,
        slot_date: date | str,
        slot_time: time | str,
        doctor_id: str | None = None,
    ) -> list[Appointment]:
        date_key = normalize_date(slot_date)
        time_key = normalize_time(slot_time)
        if doctor_id is None:
            found = self._by_slot.get((date_key, time_key), [])
        else:
            found = self._by_doctor_slot.get((date_key, time_key, doctor_id), [])
        return list(found)


def status_counts(appointments: Iterable[Appointment]) -> StatusCounts:
    tally = Counter(appt.status for appt in appointments)
    return StatusCounts(
        scheduled=tally[AppointmentStatus.SCHEDULED],
        completed=tally[AppointmentStatus.COMPLETED],
        cancelled=tally[AppointmentStatus.CANCELLED],
        no_show=tally[AppointmentStatus.NO_SHOW],
    )


def _is_valid_date(value: str) -> bool:
    if not _DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _is_valid_time(value: str) -> bool:
    if not _TIME_PATTERN.match(value):
        return False
    hours, minutes = (int(part) for part in value.split(":"))
    return hours < 24 and minutes < 60


def unplaced_appointments(
    appointments: Iterable[Appointment],
    time_slots: Sequence[str],
) -> list[UnplacedAppointment]:
    """Appointments that no grid cell will ever show, with the reason why."""
    known_slots = set(time_slots)
    unplaced: list[UnplacedAppointment] = []
    for appt in appointments:
        if not _is_valid_date(appt.date):
            reason = UNPLACED_REASON_DATE
        elif not _is_valid_time(appt.time):
            reason = UNPLACED_REASON_TIME
        elif appt.time not in known_slots:
            reason = UNPLACED_REASON_OUTSIDE_GRID
        else:
            continue
        unplaced.append(UnplacedAppointment(appointment=appt, reason=reason))
    return unplaced
