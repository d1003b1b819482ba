"""Status and appointment-type encodings shared by every calendar view."""

from __future__ import annotations

from typing import assert_never

from clinic.modules.calendar.schemas import Legend, StatusStyle, TypeLabel
from clinic.shared.enums import AppointmentStatus, AppointmentType


def _build_status_style(status: AppointmentStatus) -> StatusStyle:
    match status:
        case AppointmentStatus.SCHEDULED:
            return StatusStyle(status=status, label="Scheduled", color="blue", indicator="●")
        case AppointmentStatus.COMPLETED:
            return StatusStyle(status=status, label="Completed", color="green", indicator="✓")
        case AppointmentStatus.CANCELLED:
            return StatusStyle(status=status, label="Cancelled", color="red", indicator="✕")
        case AppointmentStatus.NO_SHOW:
            return StatusStyle(status=status, label="No-show", color="gray", indicator="○")
        case _:
            assert_never(status)


def _build_type_label(appointment_type: AppointmentType) -> str:
    match appointment_type:
        case AppointmentType.CONSULTATION:
            return "Consultation"
        case AppointmentType.FOLLOW_UP:
            return "Follow-up visit"
        case AppointmentType.PROCEDURE:
            return "Procedure"
        case AppointmentType.EMERGENCY:
            return "Emergency visit"
        case _:
            assert_never(appointment_type)


# Built eagerly so a missing member fails at import instead of at render.
STATUS_STYLES: dict[AppointmentStatus, StatusStyle] = {
    status: _build_status_style(status) for status in AppointmentStatus
}
TYPE_LABELS: dict[AppointmentType, str] = {kind: _build_type_label(kind) for kind in AppointmentType}

# Badge order in week cells and legends.
STATUS_ORDER: tuple[AppointmentStatus, ...] = (
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.COMPLETED,
    AppointmentStatus.CANCELLED,
    AppointmentStatus.NO_SHOW,
)


def status_style(status: AppointmentStatus) -> StatusStyle:
    return STATUS_STYLES[AppointmentStatus(status)]


def type_label(appointment_type: AppointmentType) -> str:
    return TYPE_LABELS[AppointmentType(appointment_type)]


def legend_entries() -> list[StatusStyle]:
    return [STATUS_STYLES[status] for status in STATUS_ORDER]


def build_legend() -> Legend:
    return Legend(
        statuses=legend_entries(),
        types=[TypeLabel(appointment_type=kind, label=label) for kind, label in TYPE_LABELS.items()],
    )
