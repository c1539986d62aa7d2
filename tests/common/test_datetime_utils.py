from __future__ import annotations

from datetime import datetime

from src.geofence_attendance.geofence_attendance.common.datetime_utils import now_utc, to_iso


def test_now_utc_is_naive_and_millisecond_precision():
    now = now_utc()
    assert now.tzinfo is None
    assert now.microsecond % 1000 == 0


def test_to_iso_has_milliseconds_and_z_suffix():
    assert to_iso(datetime(2024, 1, 2, 3, 4, 5, 678000)) == "2024-01-02T03:04:05.678Z"
    assert to_iso(None) is None
