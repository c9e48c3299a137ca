"""Pydantic schemas for location API."""
from datetime import datetime

from pydantic import BaseModel


class LocationResponse(BaseModel):
    """Stored location in API responses."""

    id: int
    latitude: float
    longitude: float
    accuracy: float | None = None
    altitude: float | None = None
    captured_at: datetime | None = None
