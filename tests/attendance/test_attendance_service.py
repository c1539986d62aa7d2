from __future__ import annotations

from datetime import timedelta

import pytest

from src.geofence_attendance.geofence_attendance.attendance.fingerprint import device_fingerprint
from src.geofence_attendance.geofence_attendance.attendance.model import ClientContext
from src.geofence_attendance.geofence_attendance.attendance.service import AttendanceService
from src.geofence_attendance.geofence_attendance.core.exceptions import (
    ConflictError,
    ExpiredError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from src.geofence_attendance.geofence_attendance.sessions.service import SessionService


@pytest.fixture
def session_service(sessions_repo):
    return SessionService(sessions_repo, ttl_minutes=10, code_factory=lambda: "ABC123")


@pytest.fixture
def open_session(session_service, classroom, fixed_now):
    return session_service.create_session(
        "Dr. A", "Physics", classroom.lat, classroom.lng, base_url="http://x", now=fixed_now
    )


@pytest.fixture
def svc(attendance_repo, session_service):
    return AttendanceService(attendance_repo, session_service, max_distance_meters=120)


def test_submit_normalizes_roll_no_and_records_distance(svc, attendance_repo, open_session, fixed_now):
    rec = svc.submit_attendance(
        "abc123", "  Bob ", " cs101 ", 12.9716, 77.5946, now=fixed_now + timedelta(minutes=1)
    )

    assert rec.roll_no == "CS101"
    assert rec.student_name == "Bob"
    assert rec.distance_meters == pytest.approx(0.0)
    assert rec.session_id == open_session.session_id
    assert attendance_repo.records == [rec]


@pytest.mark.parametrize("roll_no", ["CS101", "cs101", "  Cs101\t"])
def test_duplicate_roll_no_in_any_case_is_conflict(svc, attendance_repo, open_session, fixed_now, roll_no):
    svc.submit_attendance("ABC123", "Bob", "cs101", 12.9716, 77.5946, now=fixed_now)

    with pytest.raises(ConflictError) as exc:
        svc.submit_attendance("ABC123", "Mallory", roll_no, 12.9716, 77.5946, now=fixed_now)

    assert exc.value.student_name == "Bob"
    assert exc.value.roll_no == "CS101"
    assert exc.value.submitted_at == fixed_now
    assert len(attendance_repo.records) == 1


def test_same_device_different_roll_no_is_allowed(svc, attendance_repo, open_session, fixed_now):
    client = ClientContext(ip="10.0.0.5", user_agent="Phone")
    svc.submit_attendance("ABC123", "Bob", "CS101", 12.9716, 77.5946, client=client, now=fixed_now)
    svc.submit_attendance("ABC123", "Alice", "CS102", 12.9716, 77.5946, client=client, now=fixed_now)

    assert [r.roll_no for r in attendance_repo.records] == ["CS101", "CS102"]
    assert attendance_repo.records[0].device_fingerprint == attendance_repo.records[1].device_fingerprint


def test_insert_race_is_reported_as_conflict(svc, attendance_repo, open_session, fixed_now):
    svc.submit_attendance("ABC123", "Bob", "CS101", 12.9716, 77.5946, now=fixed_now)

    # Pre-check misses (the other request has not committed yet), insert hits the unique index.
    real_lookup = attendance_repo.get_for_session_and_roll
    calls = {"n": 0}

    def racy_lookup(session_id, roll_no):
        calls["n"] += 1
        return None if calls["n"] == 1 else real_lookup(session_id, roll_no)

    attendance_repo.get_for_session_and_roll = racy_lookup

    with pytest.raises(ConflictError) as exc:
        svc.submit_attendance("ABC123", "Bob again", "cs101", 12.9716, 77.5946, now=fixed_now)

    assert exc.value.student_name == "Bob"
    assert len(attendance_repo.records) == 1


def test_too_far_is_forbidden_with_distance(svc, attendance_repo, open_session, fixed_now):
    # ~0.002 deg latitude north of the classroom, about 222 m
    with pytest.raises(ForbiddenError) as exc:
        svc.submit_attendance("ABC123", "Bob", "CS101", 12.9736, 77.5946, now=fixed_now)

    assert exc.value.distance == pytest.approx(222.4, rel=0.01)
    assert attendance_repo.records == []


def test_expired_session_rejects_submission(svc, open_session):
    with pytest.raises(ExpiredError):
        svc.submit_attendance(
            "ABC123", "Bob", "CS101", 12.9716, 77.5946, now=open_session.expires_at + timedelta(seconds=1)
        )


def test_unknown_session(svc):
    with pytest.raises(NotFoundError):
        svc.submit_attendance("NOPE00", "Bob", "CS101", 12.9716, 77.5946)


@pytest.mark.parametrize(
    "code, name, roll_no, lat, lng",
    [
        (None, "Bob", "CS101", 1.0, 1.0),
        ("ABC123", "", "CS101", 1.0, 1.0),
        ("ABC123", "Bob", "  ", 1.0, 1.0),
        ("ABC123", "Bob", "CS101", "1.0", 1.0),
        ("ABC123", "Bob", "CS101", 1.0, False),
        ("ABC123", "Bob", "CS101", 1.0, 181.0),
        ("ABC123", "B" * 121, "CS101", 1.0, 1.0),
        ("ABC123", "Bob", "R" * 65, 1.0, 1.0),
    ],
)
def test_missing_or_malformed_fields(svc, open_session, code, name, roll_no, lat, lng):
    with pytest.raises(ValidationError):
        svc.submit_attendance(code, name, roll_no, lat, lng)


def test_fingerprint_is_stored_for_audit(svc, attendance_repo, open_session, fixed_now):
    client = ClientContext(ip="10.0.0.5", user_agent="Mozilla/5.0")
    rec = svc.submit_attendance("ABC123", "Bob", "CS101", 12.9716, 77.5946, client=client, now=fixed_now)

    assert rec.client_ip == "10.0.0.5"
    assert rec.user_agent == "Mozilla/5.0"
    assert rec.device_fingerprint == device_fingerprint(client)
    assert len(rec.device_fingerprint) == 32


def test_list_attendance_in_creation_order(svc, open_session, fixed_now):
    svc.submit_attendance("ABC123", "Bob", "CS101", 12.9716, 77.5946, now=fixed_now)
    svc.submit_attendance("ABC123", "Alice", "CS102", 12.9716, 77.5946, now=fixed_now + timedelta(seconds=5))

    rows = svc.list_attendance("abc123", now=fixed_now + timedelta(minutes=1))
    assert [r.student_name for r in rows] == ["Bob", "Alice"]


def test_names_at_column_width_are_accepted(svc, open_session, fixed_now):
    rec = svc.submit_attendance("ABC123", "B" * 120, "r" * 64, 12.9716, 77.5946, now=fixed_now)
    assert len(rec.student_name) == 120
    assert rec.roll_no == "R" * 64
