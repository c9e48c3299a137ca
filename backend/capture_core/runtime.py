"""Process-wide capture flow and preference store used by the API."""
from typing import Optional

from capture_core.capture import CaptureFlow
from capture_core.preferences import PreferenceStore

_flow: Optional[CaptureFlow] = None
_preferences: Optional[PreferenceStore] = None


def configure(flow: CaptureFlow, preferences: PreferenceStore) -> None:
    """Install the active flow and preference store (startup, tests)."""
    global _flow, _preferences
    _flow = flow
    _preferences = preferences


def get_flow() -> CaptureFlow:
    """Active capture flow. Raises RuntimeError before startup has configured one."""
    if _flow is None:
        raise RuntimeError("Capture flow is not configured")
    return _flow


def get_preferences() -> PreferenceStore:
    """Active preference store. Raises RuntimeError before startup has configured one."""
    if _preferences is None:
        raise RuntimeError("Preference store is not configured")
    return _preferences


def clear() -> None:
    """Drop the active flow and preference store (tests)."""
    global _flow, _preferences
    _flow = None
    _preferences = None
