from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Office:
    """Domain entity: an office and its circular geofence."""

    office_id: int
    name: str
    latitude: float
    longitude: float
    radius_meters: float

    def __post_init__(self) -> None:
        if not self.radius_meters or self.radius_meters <= 0:
            raise ValidationError(f"Office {self.name!r} must have a positive radius")
