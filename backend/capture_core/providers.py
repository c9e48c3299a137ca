"""Location providers: permission request and single current-position reading."""
import asyncio
import logging
from enum import Enum
from typing import Any, Optional, Protocol

from capture_core.errors import ProviderError
from capture_core.record import Position
from utils.config import (
    LOCATION_PROVIDER,
    LOCATION_TIMEOUT_S,
    SIMULATED_LATITUDE,
    SIMULATED_LONGITUDE,
    SIMULATED_PERMISSION,
)

LOG = logging.getLogger(__name__)


class PermissionStatus(str, Enum):
    """Outcome of a foreground location permission request."""
    Granted = "granted"
    Denied = "denied"


class LocationProvider(Protocol):
    async def request_permission(self) -> PermissionStatus: ...

    async def get_current_position(self) -> Position: ...


class SimulatedLocationProvider:
    """Fixed coordinates and a fixed permission outcome (desktop runs, tests, demos)."""

    def __init__(
        self,
        latitude: float = SIMULATED_LATITUDE,
        longitude: float = SIMULATED_LONGITUDE,
        permission: PermissionStatus = PermissionStatus.Granted,
        delay_s: float = 0.0,
        accuracy: Optional[float] = None,
        altitude: Optional[float] = None,
    ) -> None:
        self.latitude = latitude
        self.longitude = longitude
        self.permission = permission
        self.delay_s = delay_s
        self.accuracy = accuracy
        self.altitude = altitude

    async def request_permission(self) -> PermissionStatus:
        return self.permission

    async def get_current_position(self) -> Position:
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)
        return Position(
            latitude=self.latitude,
            longitude=self.longitude,
            accuracy=self.accuracy,
            altitude=self.altitude,
        )


# plyer status types that mean no fix will ever arrive.
_FAILED_STATUS_TYPES = frozenset({"provider-disabled", "provider-unavailable"})


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _settle(fut: asyncio.Future, result: Optional[Position], error: Optional[BaseException]) -> None:
    """Resolve fut once; later fixes or statuses are ignored."""
    if fut.done():
        return
    if error is not None:
        fut.set_exception(error)
    else:
        fut.set_result(result)


class PlyerLocationProvider:
    """
    Device GPS through plyer. plyer calls back from the platform thread, so results are
    handed to the event loop with call_soon_threadsafe.

    On Android the runtime permission is requested through python-for-android's
    android.permissions module; other platforms have no runtime prompt.
    """

    def __init__(
        self,
        gps: Any = None,
        platform_name: Optional[str] = None,
        permissions_api: Any = None,
        min_time_ms: int = 1000,
        min_distance_m: float = 0,
        permission_timeout_s: float = LOCATION_TIMEOUT_S,
    ) -> None:
        if gps is None:
            from plyer import gps
        if platform_name is None:
            from plyer.utils import platform
            platform_name = str(platform)
        self._gps = gps
        self._platform = platform_name
        self._permissions_api = permissions_api
        self.min_time_ms = min_time_ms
        self.min_distance_m = min_distance_m
        self.permission_timeout_s = permission_timeout_s

    def _android_permissions(self) -> Any:
        if self._permissions_api is None:
            import android.permissions as permissions_api
            self._permissions_api = permissions_api
        return self._permissions_api

    async def request_permission(self) -> PermissionStatus:
        if self._platform != "android":
            return PermissionStatus.Granted
        api = self._android_permissions()
        wanted = [api.Permission.ACCESS_FINE_LOCATION, api.Permission.ACCESS_COARSE_LOCATION]
        missing = [p for p in wanted if not api.check_permission(p)]
        if not missing:
            return PermissionStatus.Granted

        loop = asyncio.get_running_loop()
        fut: asyncio.Future = loop.create_future()

        def _on_result(permissions: list, grant_results: list) -> None:
            # Coarse location alone is enough for a foreground fix.
            loop.call_soon_threadsafe(_settle, fut, any(grant_results), None)

        api.request_permissions(missing, _on_result)
        try:
            granted = await asyncio.wait_for(fut, timeout=self.permission_timeout_s)
        except asyncio.TimeoutError:
            # An unanswered prompt counts as a refusal so the next trigger can ask again.
            LOG.warning("No answer to location permission request within %ss", self.permission_timeout_s)
            return PermissionStatus.Denied
        return PermissionStatus.Granted if granted else PermissionStatus.Denied

    async def get_current_position(self) -> Position:
        loop = asyncio.get_running_loop()
        fut: asyncio.Future = loop.create_future()

        def _on_location(**kwargs: Any) -> None:
            # kwargs vary by platform backend; normalize common fields
            lat = kwargs.get("lat", kwargs.get("latitude"))
            lon = kwargs.get("lon", kwargs.get("longitude"))
            if lat is None or lon is None:
                return
            position = Position(
                latitude=float(lat),
                longitude=float(lon),
                accuracy=_optional_float(kwargs.get("accuracy")),
                altitude=_optional_float(kwargs.get("altitude")),
            )
            loop.call_soon_threadsafe(_settle, fut, position, None)

        def _on_status(status_type: str, status: Any) -> None:
            if status_type in _FAILED_STATUS_TYPES:
                error = ProviderError(f"Location provider unavailable: {status_type} ({status})")
                loop.call_soon_threadsafe(_settle, fut, None, error)

        self._gps.configure(on_location=_on_location, on_status=_on_status)
        try:
            self._gps.start(minTime=self.min_time_ms, minDistance=self.min_distance_m)
        except NotImplementedError as e:
            raise ProviderError(f"GPS is not available on platform {self._platform!r}") from e
        try:
            return await fut
        finally:
            try:
                self._gps.stop()
            except Exception as e:
                LOG.warning("Stopping GPS failed: %s", e)


def _permission_from_config(value: str) -> PermissionStatus:
    """Parse SIMULATED_PERMISSION case-insensitively; ValueError names the accepted values."""
    try:
        return PermissionStatus(value.strip().lower())
    except ValueError:
        accepted = ", ".join(s.value for s in PermissionStatus)
        raise ValueError(f"SIMULATED_PERMISSION must be one of {accepted}, got {value!r}") from None


def build_provider(name: str = LOCATION_PROVIDER) -> LocationProvider:
    """Provider selected by configuration name ("simulated" or "plyer")."""
    if name == "simulated":
        return SimulatedLocationProvider(permission=_permission_from_config(SIMULATED_PERMISSION))
    if name == "plyer":
        return PlyerLocationProvider()
    raise ValueError(f"Unknown location provider: {name!r}")
