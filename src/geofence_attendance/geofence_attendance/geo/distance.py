"""Great-circle distance for the classroom geofence."""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_METERS = 6_371_000.0


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def as_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in meters between two points given in degrees."""

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def is_within(distance: float, max_distance: float) -> bool:
    return distance <= max_distance
