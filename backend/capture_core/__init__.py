# Capture core: capture flow, providers, location storage, preferences
from capture_core.capture import CaptureFlow, CaptureState
from capture_core.errors import (
    CaptureError,
    CaptureInProgress,
    CaptureTimeout,
    PermissionDenied,
    PreferenceIOError,
    ProviderError,
    StorageError,
)
from capture_core.preferences import PreferenceStore
from capture_core.providers import (
    PermissionStatus,
    PlyerLocationProvider,
    SimulatedLocationProvider,
    build_provider,
)
from capture_core.record import LocationRecord, Position
from capture_core.storage import LocationStore

__all__ = [
    "CaptureError",
    "CaptureFlow",
    "CaptureInProgress",
    "CaptureState",
    "CaptureTimeout",
    "LocationRecord",
    "LocationStore",
    "PermissionDenied",
    "PermissionStatus",
    "PlyerLocationProvider",
    "Position",
    "PreferenceIOError",
    "PreferenceStore",
    "ProviderError",
    "SimulatedLocationProvider",
    "StorageError",
    "build_provider",
]
