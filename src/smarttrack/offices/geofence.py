"""Geofence evaluation.

Overlapping geofences: the default policy returns the first matching office in
store order, so the answer depends on the order the store returns offices in.
``MatchPolicy.NEAREST`` picks the closest matching center instead.
"""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Iterable, Optional

from ..core.constants import EARTH_RADIUS_METERS
from ..core.enums import MatchPolicy
from .model import Office


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def distance_to(office: Office, latitude: float, longitude: float) -> float:
    return haversine_meters(latitude, longitude, office.latitude, office.longitude)


def is_within(office: Office, latitude: float, longitude: float) -> bool:
    # Boundary is inclusive
    return distance_to(office, latitude, longitude) <= office.radius_meters


def locate(
    latitude: float,
    longitude: float,
    offices: Iterable[Office],
    *,
    policy: MatchPolicy = MatchPolicy.FIRST,
) -> Optional[Office]:
    """Return the office whose geofence contains the point, or None."""
    policy = MatchPolicy(policy)

    best: Optional[Office] = None
    best_distance = 0.0
    for office in offices:
        d = distance_to(office, latitude, longitude)
        if d > office.radius_meters:
            continue
        if policy == MatchPolicy.FIRST:
            return office
        if best is None or d < best_distance:
            best, best_distance = office, d
    return best
