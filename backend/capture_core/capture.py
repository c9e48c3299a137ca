"""Capture flow: permission -> current position -> durable write -> list refresh."""
import asyncio
import logging
from enum import Enum
from typing import Optional

from capture_core.errors import (
    CaptureError,
    CaptureInProgress,
    CaptureTimeout,
    PermissionDenied,
    ProviderError,
    StorageError,
)
from capture_core.providers import LocationProvider, PermissionStatus
from capture_core.record import LocationRecord, Position
from capture_core.storage import LocationStore
from utils.config import LOCATION_TIMEOUT_S

LOG = logging.getLogger(__name__)


class CaptureState(str, Enum):
    """Where the flow is within a single capture."""
    Idle = "Idle"
    RequestingPermission = "RequestingPermission"
    Capturing = "Capturing"
    Persisting = "Persisting"
    Denied = "Denied"


# Valid state transitions: from_state -> set of allowed to_states
_VALID_TRANSITIONS: dict[CaptureState, set[CaptureState]] = {
    CaptureState.Idle: {CaptureState.RequestingPermission},
    CaptureState.RequestingPermission: {CaptureState.Capturing, CaptureState.Denied, CaptureState.Idle},
    CaptureState.Capturing: {CaptureState.Persisting, CaptureState.Idle},
    CaptureState.Persisting: {CaptureState.Idle},
    CaptureState.Denied: {CaptureState.RequestingPermission},
}


class CaptureFlow:
    """
    Captures one location per trigger and keeps the displayed list as a read of storage.

    Only one capture runs at a time; a trigger while one is in flight raises
    CaptureInProgress instead of starting a second permission/position request.
    The list is refreshed only after the durable write succeeds.
    """

    def __init__(
        self,
        provider: LocationProvider,
        store: Optional[LocationStore] = None,
        timeout_s: Optional[float] = LOCATION_TIMEOUT_S,
    ) -> None:
        self.provider = provider
        self.store = store if store is not None else LocationStore()
        self.timeout_s = timeout_s
        self.state = CaptureState.Idle
        self._in_flight = False
        self._records: tuple[LocationRecord, ...] = ()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def records(self) -> tuple[LocationRecord, ...]:
        """Records as of the last reload, oldest first."""
        return self._records

    def transition_to(self, new_state: CaptureState) -> bool:
        """Validate and perform state transition. Returns True if applied."""
        allowed = _VALID_TRANSITIONS.get(self.state)
        if allowed is None or new_state not in allowed:
            return False
        self.state = new_state
        return True

    def list_all(self) -> list[LocationRecord]:
        """All persisted records in insertion order, read from storage."""
        return self.store.select_all()

    def reload(self) -> list[LocationRecord]:
        """Refresh the displayed list from storage and return it."""
        records = self.list_all()
        self._records = tuple(records)
        return records

    async def _read_position(self) -> Position:
        try:
            if self.timeout_s is None:
                return await self.provider.get_current_position()
            return await asyncio.wait_for(self.provider.get_current_position(), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            raise CaptureTimeout(f"No location fix within {self.timeout_s}s") from e
        except CaptureError:
            raise
        except Exception as e:
            raise ProviderError(f"Location unavailable: {e}") from e

    async def capture(self) -> LocationRecord:
        """
        Run one capture. Raises PermissionDenied, CaptureTimeout, ProviderError,
        StorageError or CaptureInProgress; storage and the list are untouched on failure.
        """
        if self._in_flight:
            raise CaptureInProgress("A location capture is already running")
        self._in_flight = True
        try:
            self.transition_to(CaptureState.RequestingPermission)
            status = await self.provider.request_permission()
            if status != PermissionStatus.Granted:
                self.transition_to(CaptureState.Denied)
                LOG.warning("Location permission denied")
                raise PermissionDenied("Location permission was denied")

            self.transition_to(CaptureState.Capturing)
            position = await self._read_position()

            self.transition_to(CaptureState.Persisting)
            record = await asyncio.to_thread(self.store.insert, position)
            LOG.info("Captured location %s: lat=%s lon=%s", record.id, record.latitude, record.longitude)
            try:
                self.reload()
            except StorageError as e:
                # The write succeeded, so the record may still be shown.
                LOG.warning("List refresh after capture %s failed: %s", record.id, e)
                self._records = self._records + (record,)
            return record
        except CaptureError as e:
            if not isinstance(e, PermissionDenied):
                LOG.warning("Location capture failed: %s", e)
            raise
        finally:
            if self.state != CaptureState.Denied:
                self.state = CaptureState.Idle
            self._in_flight = False
