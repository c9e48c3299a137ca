"""Errors raised by the capture flow and the preference store."""


class CaptureError(Exception):
    """Base for failures of a single capture attempt. Never fatal; the flow re-arms afterwards."""


class PermissionDenied(CaptureError):
    """Foreground location permission was refused."""


class CaptureTimeout(CaptureError):
    """No position fix arrived within the configured timeout."""


class ProviderError(CaptureError):
    """The location provider failed or has no position available."""


class StorageError(CaptureError):
    """Reading from or writing to durable storage failed."""


class CaptureInProgress(CaptureError):
    """A capture was triggered while another one is still running."""


class PreferenceIOError(Exception):
    """Reading or writing a persisted preference failed. Logged, never surfaced to the user."""
