from __future__ import annotations

import math

from ..core.exceptions import ValidationError


def require_coordinates(latitude, longitude) -> tuple[float, float]:
    """Validate a GPS fix coming from a request body."""
    if latitude is None or longitude is None:
        raise ValidationError("Coordinates are required")

    if isinstance(latitude, bool) or isinstance(longitude, bool):
        raise ValidationError("Invalid coordinates")
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("Invalid coordinates")

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValidationError("Invalid coordinates")
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        raise ValidationError("Invalid coordinates")
    return lat, lon


def round_hours(value: float) -> float:
    return round(float(value), 2)
