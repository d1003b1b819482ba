"""Week and day grid composition."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime

from clinic.modules.calendar.navigator import PeriodNavigator, format_long_date
from clinic.modules.calendar.resolver import SlotIndex, normalize_date, status_counts
from clinic.modules.calendar.schemas import (
    Appointment,
    CalendarSnapshot,
    CellAction,
    DayCell,
    DayEntry,
    DayGrid,
    DayRow,
    Doctor,
    Patient,
    StatusBadge,
    TimeHeader,
    WeekCell,
    WeekColumn,
    WeekGrid,
    WeekRow,
)
from clinic.modules.calendar.slots import GridConfig, current_slot_label
from clinic.modules.calendar.styles import STATUS_ORDER, legend_entries, status_style
from clinic.shared.enums import ViewMode, Weekday

logger = logging.getLogger(__name__)

CREATE_LABEL = "+"


def build_week_grid(
    reference_date: date,
    appointments: Sequence[Appointment],
    now: datetime,
    config: GridConfig | None = None,
) -> WeekGrid:
    """Time x day grid for the ISO week containing ``reference_date``.

    Cells carry per-status counts rather than individual appointments since a
    single cell aggregates every doctor's bookings.
    """
    config = config or GridConfig()
    navigator = PeriodNavigator(reference_date, ViewMode.WEEK)
    days = navigator.visible_days()
    today = now.date()
    current_label = current_slot_label(now, config.slot_minutes) if navigator.includes(today) else None
    index = SlotIndex(appointments)

    columns = [
        WeekColumn(
            date=normalize_date(day),
            weekday=Weekday.from_date(day).label[:3],
            day_of_month=day.day,
            is_today=day == today,
        )
        for day in days
    ]

    rows: list[WeekRow] = []
    placed = 0
    for slot in config.time_slots:
        cells: list[WeekCell] = []
        for day in days:
            counts = status_counts(index.lookup(day, slot))
            placed += counts.total
            badges = [
                StatusBadge(status=status, count=counts.for_status(status), style=status_style(status))
                for status in STATUS_ORDER
                if counts.for_status(status) > 0
            ]
            cells.append(
                WeekCell(
                    date=normalize_date(day),
                    time=slot,
                    counts=counts,
                    badges=badges,
                    is_empty=counts.total == 0,
                    is_current=day == today and slot == current_label,
                )
            )
        rows.append(WeekRow(time=slot, is_current_time=slot == current_label, cells=cells))

    logger.debug("Rendered week of %s: %d appointments placed", columns[0].date, placed)
    return WeekGrid(title=navigator.title(), columns=columns, rows=rows, legend=legend_entries())


def build_day_cell(
    doctor: Doctor,
    slot_date: date,
    slot_time: str,
    in_slot: Sequence[Appointment],
    patients_by_id: dict[str, Patient],
    max_visible: int,
    is_current: bool = False,
) -> DayCell:
    """Apply the capacity policy to one (doctor, time) cell.

    Up to ``max_visible`` entries are shown, followed by either a create
    button or, when entries were cut off, a ``+K`` indicator. Entries and the
    trailing action split the cell height evenly.
    """
    visible = list(in_slot[:max_visible])
    hidden = len(in_slot) - len(visible)
    action: CellAction | None = None
    entries: list[DayEntry] = []
    if in_slot:
        share = 1 / (len(visible) + 1)
        for appt in visible:
            patient = patients_by_id.get(appt.patient_id)
            entries.append(
                DayEntry(
                    appointment_id=appt.id,
                    patient_id=appt.patient_id,
                    patient_name=patient.full_name if patient else None,
                    duration=appt.duration,
                    status=appt.status,
                    style=status_style(appt.status),
                    size_fraction=share,
                )
            )
        if hidden > 0:
            action = CellAction(kind="overflow", label=f"+{hidden}", hidden_count=hidden, size_fraction=share)
        else:
            action = CellAction(kind="create", label=CREATE_LABEL, size_fraction=share)

    hours = doctor.working_hours
    return DayCell(
        doctor_id=doctor.id,
        date=normalize_date(slot_date),
        time=slot_time,
        total=len(in_slot),
        entries=entries,
        action=action,
        is_empty=not in_slot,
        is_current=is_current,
        within_working_hours=hours.start <= slot_time < hours.end,
    )


def build_day_grid(
    day: date,
    doctors: Sequence[Doctor],
    appointments: Sequence[Appointment],
    patients: Sequence[Patient],
    now: datetime,
    config: GridConfig | None = None,
) -> DayGrid:
    """Doctor x time grid for a single day, one row per doctor."""
    config = config or GridConfig()
    is_today = day == now.date()
    current_label = current_slot_label(now, config.slot_minutes) if is_today else None
    index = SlotIndex(appointments)
    patients_by_id = {patient.id: patient for patient in patients}
    weekday_index = Weekday.from_date(day).sunday_index

    rows: list[DayRow] = []
    for doctor in doctors:
        cells = [
            build_day_cell(
                doctor,
                day,
                slot,
                index.lookup(day, slot, doctor.id),
                patients_by_id,
                config.max_visible,
                is_current=slot == current_label,
            )
            for slot in config.time_slots
        ]
        rows.append(
            DayRow(
                doctor_id=doctor.id,
                doctor_name=doctor.full_name,
                specialization=doctor.specialization,
                is_working_day=weekday_index in doctor.working_hours.working_days,
                cells=cells,
            )
        )

    logger.debug("Rendered day %s for %d doctors", day.isoformat(), len(rows))
    return DayGrid(
        title=format_long_date(day),
        date=normalize_date(day),
        is_today=is_today,
        max_visible=config.max_visible,
        times=[TimeHeader(time=slot, is_current_time=slot == current_label) for slot in config.time_slots],
        rows=rows,
        legend=legend_entries(),
    )


def render_period(
    navigator: PeriodNavigator,
    snapshot: CalendarSnapshot,
    now: datetime,
    config: GridConfig | None = None,
) -> WeekGrid | DayGrid:
    if navigator.mode == ViewMode.DAY:
        return build_day_grid(
            navigator.reference_date,
            snapshot.doctors,
            snapshot.appointments,
            snapshot.patients,
            now,
            config,
        )
    return build_week_grid(navigator.reference_date, snapshot.appointments, now, config)
