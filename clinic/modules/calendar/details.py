"""Read-only projection of an opened appointment."""

from __future__ import annotations

from collections.abc import Sequence

from clinic.modules.calendar.schemas import Appointment, AppointmentDetails, Doctor, Patient
from clinic.modules.calendar.slots import format_slot
from clinic.modules.calendar.styles import status_style, type_label
from clinic.shared.enums import AppointmentStatus

MINUTES_PER_DAY = 24 * 60


def compute_end_time(start: str, duration_minutes: int) -> str | None:
    """``start`` plus the duration as ``HH:MM``, wrapping past midnight; None when unparseable."""
    try:
        hours, minutes = (int(part) for part in start.split(":"))
    except ValueError:
        return None
    end = (hours * 60 + minutes + duration_minutes) % MINUTES_PER_DAY
    return format_slot(end // 60, end % 60)


def available_actions(appointment: Appointment) -> list[str]:
    actions = ["edit", "duplicate"]
    if appointment.status == AppointmentStatus.SCHEDULED:
        actions.extend(["mark_completed", "cancel"])
    return actions


def build_appointment_details(
    appointment: Appointment,
    patients: Sequence[Patient],
    doctors: Sequence[Doctor],
) -> AppointmentDetails:
    patient = next((p for p in patients if p.id == appointment.patient_id), None)
    doctor = next((d for d in doctors if d.id == appointment.doctor_id), None)
    doctor_label = None
    if doctor is not None:
        doctor_label = doctor.full_name
        if doctor.specialization:
            doctor_label = f"{doctor_label} ({doctor.specialization})"
    return AppointmentDetails(
        appointment=appointment,
        patient_name=patient.full_name if patient else None,
        doctor_label=doctor_label,
        date=appointment.date,
        start_time=appointment.time,
        end_time=compute_end_time(appointment.time, appointment.duration),
        status=status_style(appointment.status),
        type_label=type_label(appointment.appointment_type),
        actions=available_actions(appointment),
    )
