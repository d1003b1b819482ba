import pytest

from clinic.modules.calendar.details import available_actions, build_appointment_details, compute_end_time
from clinic.modules.calendar.schemas import Appointment
from clinic.shared.enums import AppointmentStatus, AppointmentType


@pytest.mark.parametrize(
    ("start", "duration", "expected"),
    [("09:00", 30, "09:30"), ("09:45", 45, "10:30"), ("23:45", 30, "00:15"), ("nine", 30, None)],
)
def test_compute_end_time(start, duration, expected):
    assert compute_end_time(start, duration) == expected


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (AppointmentStatus.SCHEDULED, ["edit", "duplicate", "mark_completed", "cancel"]),
        (AppointmentStatus.COMPLETED, ["edit", "duplicate"]),
        (AppointmentStatus.CANCELLED, ["edit", "duplicate"]),
        (AppointmentStatus.NO_SHOW, ["edit", "duplicate"]),
    ],
)
def test_actions_depend_on_status(status, expected):
    appointment = Appointment(
        id="A1", patient_id="P1", doctor_id="D1", date="2025-03-10", time="09:00", status=status
    )
    assert available_actions(appointment) == expected


def test_details_resolve_names_and_labels(doctors, patients):
    appointment = Appointment(
        id="A1",
        patient_id="P2",
        doctor_id="D1",
        date="2025-03-10",
        time="09:00",
        duration=45,
        type=AppointmentType.FOLLOW_UP,
    )
    details = build_appointment_details(appointment, patients, doctors)
    assert details.patient_name == "Oleg Smirnov"
    assert details.doctor_label == "Anna Petrova (Cardiologist)"
    assert details.start_time == "09:00"
    assert details.end_time == "09:45"
    assert details.type_label == "Follow-up visit"
    assert details.status.label == "Scheduled"


def test_details_tolerate_missing_people():
    appointment = Appointment(id="A1", patient_id="P9", doctor_id="D9", date="2025-03-10", time="09:00")
    details = build_appointment_details(appointment, [], [])
    assert details.patient_name is None
    assert details.doctor_label is None
