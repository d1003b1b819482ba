from datetime import date, time

from clinic.modules.calendar.resolver import (
    UNPLACED_REASON_DATE,
    UNPLACED_REASON_OUTSIDE_GRID,
    UNPLACED_REASON_TIME,
    SlotIndex,
    appointments_for_slot,
    status_counts,
    unplaced_appointments,
)
from clinic.modules.calendar.schemas import Appointment
from clinic.modules.calendar.slots import generate_time_slots
from clinic.shared.enums import AppointmentStatus


def _appointment(appointment_id, date="2025-03-10", time="09:00", doctor_id="D1", **extra):
    return Appointment(
        id=appointment_id,
        patient_id="P1",
        doctor_id=doctor_id,
        date=date,
        time=time,
        **extra,
    )


def test_colliding_appointments_are_counted_per_status():
    appointments = [
        _appointment("A1", status=AppointmentStatus.SCHEDULED),
        _appointment("A2", status=AppointmentStatus.COMPLETED),
    ]
    counts = status_counts(appointments_for_slot(appointments, "2025-03-10", "09:00"))
    assert counts.scheduled == 1
    assert counts.completed == 1
    assert counts.cancelled == 0
    assert counts.no_show == 0
    assert counts.total == 2


def test_slot_lookup_preserves_snapshot_order():
    appointments = [
        _appointment("A1", doctor_id="D1"),
        _appointment("A2", doctor_id="D2"),
        _appointment("A3", doctor_id="D1"),
        _appointment("A4", time="09:30"),
    ]
    assert [a.id for a in appointments_for_slot(appointments, "2025-03-10", "09:00")] == ["A1", "A2", "A3"]
    assert [a.id for a in appointments_for_slot(appointments, "2025-03-10", "09:00", "D1")] == ["A1", "A3"]


def test_date_and_time_objects_are_normalized():
    appointments = [_appointment("A1")]
    found = appointments_for_slot(appointments, date(2025, 3, 10), time(9, 0))
    assert [a.id for a in found] == ["A1"]


def test_appointment_occupies_only_its_start_slot():
    appointments = [_appointment("A1", time="09:00", duration=90)]
    assert appointments_for_slot(appointments, "2025-03-10", "09:30") == []
    assert appointments_for_slot(appointments, "2025-03-10", "10:00") == []


def test_malformed_values_match_nothing():
    appointments = [
        _appointment("A1", date="10.03.2025"),
        _appointment("A2", time="9:00"),
    ]
    assert appointments_for_slot(appointments, "2025-03-10", "09:00") == []


def test_index_agrees_with_linear_lookup():
    appointments = [
        _appointment("A1"),
        _appointment("A2", doctor_id="D2"),
        _appointment("A3", date="2025-03-11", time="14:00"),
        _appointment("A4", time="09:30", doctor_id="D2"),
        _appointment("A5"),
    ]
    index = SlotIndex(appointments)
    for slot_date in ("2025-03-10", "2025-03-11"):
        for slot_time in ("09:00", "09:30", "14:00"):
            assert index.lookup(slot_date, slot_time) == appointments_for_slot(appointments, slot_date, slot_time)
            for doctor_id in ("D1", "D2"):
                assert index.lookup(slot_date, slot_time, doctor_id) == appointments_for_slot(
                    appointments, slot_date, slot_time, doctor_id
                )


def test_counts_sum_to_subset_size():
    statuses = list(AppointmentStatus) * 3 + [AppointmentStatus.SCHEDULED]
    appointments = [_appointment(f"A{i}", status=status) for i, status in enumerate(statuses)]
    counts = status_counts(appointments)
    assert counts.total == len(appointments)
    assert counts.scheduled == 4
    assert counts.no_show == 3


def test_repeated_lookup_is_identical():
    appointments = [_appointment("A1"), _appointment("A2"), _appointment("A3", doctor_id="D2")]
    first = appointments_for_slot(appointments, "2025-03-10", "09:00")
    second = appointments_for_slot(appointments, "2025-03-10", "09:00")
    assert [a.id for a in first] == [a.id for a in second]


def test_unplaced_appointments_report_reason():
    appointments = [
        _appointment("ok"),
        _appointment("bad-date", date="10.03.2025"),
        _appointment("impossible-date", date="2025-02-30"),
        _appointment("bad-time", time="9:00"),
        _appointment("late", time="20:00"),
    ]
    report = unplaced_appointments(appointments, generate_time_slots(8, 19, 30))
    reasons = {item.appointment.id: item.reason for item in report}
    assert reasons == {
        "bad-date": UNPLACED_REASON_DATE,
        "impossible-date": UNPLACED_REASON_DATE,
        "bad-time": UNPLACED_REASON_TIME,
        "late": UNPLACED_REASON_OUTSIDE_GRID,
    }
