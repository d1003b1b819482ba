"""Translate grid gestures into open/create intents."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, time

from fastapi import status

from clinic.core.exceptions import CalendarError
from clinic.modules.calendar.resolver import normalize_date, normalize_time
from clinic.modules.calendar.schemas import Appointment, CalendarIntent, Gesture

logger = logging.getLogger(__name__)

AppointmentClickHandler = Callable[[Appointment], None]
TimeSlotClickHandler = Callable[[str, str], None]


class InteractionDispatcher:
    """Emits exactly one event per gesture.

    An entry click only reaches ``on_appointment_click``; it never bubbles
    to the cell's slot handler. Slot events carry date and time only, also
    in the per-doctor day view.
    """

    def __init__(
        self,
        on_appointment_click: AppointmentClickHandler | None = None,
        on_time_slot_click: TimeSlotClickHandler | None = None,
    ):
        self.on_appointment_click = on_appointment_click
        self.on_time_slot_click = on_time_slot_click

    def click_appointment(self, appointment: Appointment) -> CalendarIntent:
        if self.on_appointment_click is not None:
            self.on_appointment_click(appointment)
        return CalendarIntent(kind="open_appointment", appointment=appointment)

    def click_slot(self, slot_date: date | str, slot_time: time | str) -> CalendarIntent:
        date_key = normalize_date(slot_date)
        time_key = normalize_time(slot_time)
        if self.on_time_slot_click is not None:
            self.on_time_slot_click(date_key, time_key)
        return CalendarIntent(kind="create_booking", date=date_key, time=time_key)

    def dispatch(self, gesture: Gesture, reachable: Sequence[Appointment] = ()) -> CalendarIntent:
        """Resolve ``gesture`` against the entries the addressed cell shows.

        ``reachable`` is the cell's visible entries; appointments hidden
        behind an overflow indicator cannot be clicked directly.
        """
        if gesture.target != "appointment":
            return self.click_slot(gesture.date, gesture.time)

        for appointment in reachable:
            if appointment.id == gesture.appointment_id:
                return self.click_appointment(appointment)

        logger.debug(
            "Appointment %s not reachable at %s %s (doctor %s)",
            gesture.appointment_id,
            gesture.date,
            gesture.time,
            gesture.doctor_id,
        )
        raise CalendarError(
            "Appointment is not shown in the addressed cell",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
