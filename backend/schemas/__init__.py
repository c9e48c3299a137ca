# Schemas package
from .health import HealthResponse
from .locations import LocationResponse
from .preferences import DarkModeResponse, DarkModeUpdate

__all__ = [
    "DarkModeResponse",
    "DarkModeUpdate",
    "HealthResponse",
    "LocationResponse",
]
