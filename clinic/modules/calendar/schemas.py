"""Calendar schemas: input snapshots, rendered grids, intents and sessions."""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import AliasChoices, Field, computed_field, field_validator, model_validator

from clinic.shared.enums import AppointmentStatus, AppointmentType, ViewMode
from clinic.shared.schemas import CamelModel, SnapshotModel

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock(value: str) -> str:
    """Validate an ``H:MM`` or ``HH:MM`` wall-clock time and return it zero-padded."""
    match = _CLOCK_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"time {value!r} is not in HH:MM format")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"time {value!r} is out of range")
    return f"{hours:02d}:{minutes:02d}"


# Snapshot records ---------------------------------------------------------


class Appointment(SnapshotModel):
    id: str
    patient_id: str
    doctor_id: str
    # Kept as raw strings: a malformed value must not reject the snapshot,
    # it only keeps the appointment out of every slot.
    date: str
    time: str
    duration: int = Field(30, gt=0)
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    appointment_type: AppointmentType = Field(
        AppointmentType.CONSULTATION,
        validation_alias=AliasChoices("type", "appointment_type", "appointmentType"),
        serialization_alias="type",
    )
    symptoms: str | None = None
    notes: str | None = None
    diagnosis: str | None = None
    prescription: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WorkingHours(SnapshotModel):
    start: str = "09:00"
    end: str = "17:00"
    # 0 = Sunday ... 6 = Saturday
    working_days: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5])

    # Padded so grid cells can compare slot labels against the bounds directly.
    @field_validator("start", "end")
    @classmethod
    def normalize_bounds(cls, value: str) -> str:
        return parse_clock(value)

    @model_validator(mode="after")
    def validate_order(self) -> "WorkingHours":
        if self.start >= self.end:
            raise ValueError("working hours start must be before end")
        return self

    @field_validator("working_days")
    @classmethod
    def validate_days(cls, value: list[int]) -> list[int]:
        for day in value:
            if not 0 <= day <= 6:
                raise ValueError(f"working day {day} out of range 0-6")
        return value


class Doctor(SnapshotModel):
    id: str
    first_name: str
    last_name: str = ""
    specialization: str = ""
    working_hours: WorkingHours = Field(default_factory=WorkingHours)
    consultation_fee: Decimal = Decimal("0")
    phone: str | None = None
    email: str | None = None
    license_number: str | None = None
    experience: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Patient(SnapshotModel):
    id: str
    first_name: str
    last_name: str = ""
    phone: str | None = None
    email: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class CalendarSnapshot(SnapshotModel):
    appointments: list[Appointment] = Field(default_factory=list)
    doctors: list[Doctor] = Field(default_factory=list)
    patients: list[Patient] = Field(default_factory=list)


# Status encoding ----------------------------------------------------------


class StatusStyle(CamelModel):
    status: AppointmentStatus
    label: str
    color: str
    indicator: str


class TypeLabel(CamelModel):
    appointment_type: AppointmentType = Field(
        validation_alias=AliasChoices("type", "appointment_type", "appointmentType"),
        serialization_alias="type",
    )
    label: str


class Legend(CamelModel):
    statuses: list[StatusStyle]
    types: list[TypeLabel]


class StatusCounts(CamelModel):
    scheduled: int = 0
    completed: int = 0
    cancelled: int = 0
    no_show: int = 0

    @computed_field(return_type=int)
    def total(self) -> int:
        return self.scheduled + self.completed + self.cancelled + self.no_show

    def for_status(self, status: AppointmentStatus) -> int:
        return getattr(self, status.name.lower())


class StatusBadge(CamelModel):
    status: AppointmentStatus
    count: int
    style: StatusStyle


# Week view ----------------------------------------------------------------


class WeekColumn(CamelModel):
    date: str
    weekday: str
    day_of_month: int
    is_today: bool


class WeekCell(CamelModel):
    date: str
    time: str
    counts: StatusCounts
    badges: list[StatusBadge]
    is_empty: bool
    is_current: bool


class WeekRow(CamelModel):
    time: str
    is_current_time: bool
    cells: list[WeekCell]


class WeekGrid(CamelModel):
    mode: Literal[ViewMode.WEEK] = ViewMode.WEEK
    title: str
    columns: list[WeekColumn]
    rows: list[WeekRow]
    legend: list[StatusStyle]


# Day view -----------------------------------------------------------------


class DayEntry(CamelModel):
    appointment_id: str
    patient_id: str
    patient_name: str | None = None
    duration: int
    status: AppointmentStatus
    style: StatusStyle
    size_fraction: float


class CellAction(CamelModel):
    kind: Literal["create", "overflow"]
    label: str
    hidden_count: int = 0
    size_fraction: float


class DayCell(CamelModel):
    doctor_id: str
    date: str
    time: str
    total: int
    entries: list[DayEntry]
    action: CellAction | None = None
    is_empty: bool
    is_current: bool
    within_working_hours: bool


class DayRow(CamelModel):
    doctor_id: str
    doctor_name: str
    specialization: str
    is_working_day: bool
    cells: list[DayCell]


class TimeHeader(CamelModel):
    time: str
    is_current_time: bool


class DayGrid(CamelModel):
    mode: Literal[ViewMode.DAY] = ViewMode.DAY
    title: str
    date: str
    is_today: bool
    max_visible: int
    times: list[TimeHeader]
    rows: list[DayRow]
    legend: list[StatusStyle]


# Data integrity -----------------------------------------------------------


class UnplacedAppointment(CamelModel):
    appointment: Appointment
    reason: str


class IntegrityReport(CamelModel):
    checked: int
    unplaced: list[UnplacedAppointment]


# Interactions -------------------------------------------------------------


class Gesture(CamelModel):
    target: Literal["cell", "appointment", "create", "overflow"]
    date: date
    time: str
    doctor_id: str | None = None
    appointment_id: str | None = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return parse_clock(value)


class InteractionRequest(CamelModel):
    gesture: Gesture
    snapshot: CalendarSnapshot = Field(default_factory=CalendarSnapshot)


class CalendarIntent(CamelModel):
    kind: Literal["open_appointment", "create_booking"]
    appointment: Appointment | None = None
    date: str | None = None
    time: str | None = None


# Appointment details ------------------------------------------------------


class AppointmentDetails(CamelModel):
    appointment: Appointment
    patient_name: str | None = None
    doctor_label: str | None = None
    date: str
    start_time: str
    end_time: str | None = None
    status: StatusStyle
    type_label: str
    actions: list[Literal["edit", "duplicate", "mark_completed", "cancel"]]


# Sessions -----------------------------------------------------------------


class CalendarSessionCreate(CamelModel):
    reference_date: date | None = None
    mode: ViewMode = ViewMode.WEEK


class CalendarModeUpdate(CamelModel):
    mode: ViewMode


class CalendarSessionPublic(CamelModel):
    session_id: str = Field(
        validation_alias=AliasChoices("id", "session_id", "sessionId"),
        serialization_alias="id",
    )
    reference_date: date
    mode: ViewMode
    title: str
    visible_days: list[date]
    created_at: datetime | None = None
    updated_at: datetime | None = None
