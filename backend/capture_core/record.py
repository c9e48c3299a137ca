"""Position fixes from providers and immutable location records from storage."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Position:
    """A single fix as reported by a location provider."""

    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    altitude: Optional[float] = None


@dataclass(frozen=True)
class LocationRecord:
    """Read-only copy of a persisted location."""

    id: int
    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    altitude: Optional[float] = None
    captured_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Any) -> "LocationRecord":
        return cls(
            id=row.id,
            latitude=row.latitude,
            longitude=row.longitude,
            accuracy=row.accuracy,
            altitude=row.altitude,
            captured_at=row.captured_at,
        )
