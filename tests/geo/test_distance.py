import math

import pytest

from src.geofence_attendance.geofence_attendance.geo.distance import GeoPoint, distance_meters, is_within


def test_distance_to_self_is_zero():
    p = GeoPoint(lat=12.9716, lng=77.5946)
    assert distance_meters(p, p) == 0


def test_distance_is_symmetric():
    a = GeoPoint(lat=12.9716, lng=77.5946)
    b = GeoPoint(lat=13.0827, lng=80.2707)
    assert distance_meters(a, b) == pytest.approx(distance_meters(b, a))


def test_thousandth_degree_latitude_at_equator():
    a = GeoPoint(lat=0.0, lng=0.0)
    b = GeoPoint(lat=0.001, lng=0.0)
    assert distance_meters(a, b) == pytest.approx(111.19, rel=0.01)


def test_antipodal_points_are_half_circumference():
    a = GeoPoint(lat=0.0, lng=0.0)
    b = GeoPoint(lat=0.0, lng=180.0)
    assert distance_meters(a, b) == pytest.approx(math.pi * 6_371_000)


def test_threshold_is_inclusive():
    assert is_within(120.0, 120.0)
    assert not is_within(120.01, 120.0)
