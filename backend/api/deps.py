"""FastAPI dependencies for the active capture flow and preference store."""
from capture_core import runtime
from capture_core.capture import CaptureFlow
from capture_core.preferences import PreferenceStore


def get_capture_flow() -> CaptureFlow:
    """FastAPI dependency: the process-wide capture flow."""
    return runtime.get_flow()


def get_preference_store() -> PreferenceStore:
    """FastAPI dependency: the process-wide preference store."""
    return runtime.get_preferences()
