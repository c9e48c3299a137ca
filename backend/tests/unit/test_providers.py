"""Unit tests: simulated and plyer location providers."""
import asyncio
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from capture_core.capture import CaptureFlow
from capture_core.errors import PermissionDenied, ProviderError
from capture_core.providers import (
    PermissionStatus,
    PlyerLocationProvider,
    SimulatedLocationProvider,
    build_provider,
)
from capture_core.record import Position


class FakeGps:
    """Stands in for plyer.gps; start() replays the configured status and fix synchronously."""

    def __init__(self, fix=None, status=None, start_error=None):
        self.fix = fix
        self.status = status
        self.start_error = start_error
        self.start_kwargs = None
        self.stopped = False

    def configure(self, on_location, on_status=None):
        self.on_location = on_location
        self.on_status = on_status

    def start(self, minTime=1000, minDistance=0):
        if self.start_error is not None:
            raise self.start_error
        self.start_kwargs = {"minTime": minTime, "minDistance": minDistance}
        if self.status is not None:
            self.on_status(*self.status)
        if self.fix is not None:
            self.on_location(**self.fix)

    def stop(self):
        self.stopped = True


def _android_api(already_granted=False, grant_results=(True, True)):
    api = SimpleNamespace(
        Permission=SimpleNamespace(ACCESS_FINE_LOCATION="fine", ACCESS_COARSE_LOCATION="coarse"),
        check_permission=lambda p: already_granted,
        request_permissions=MagicMock(),
    )
    api.request_permissions.side_effect = lambda perms, cb: cb(perms, list(grant_results))
    return api


@pytest.mark.unit
class TestSimulatedLocationProvider:
    @pytest.mark.asyncio
    async def test_returns_configured_position(self):
        provider = SimulatedLocationProvider(latitude=1.5, longitude=-2.5, accuracy=3.0)
        assert await provider.get_current_position() == Position(1.5, -2.5, accuracy=3.0)

    @pytest.mark.asyncio
    async def test_permission_outcome(self):
        provider = SimulatedLocationProvider(permission=PermissionStatus.Denied)
        assert await provider.request_permission() == PermissionStatus.Denied


@pytest.mark.unit
class TestPlyerPosition:
    @pytest.mark.asyncio
    async def test_first_fix_resolves_and_stops_gps(self):
        gps = FakeGps(fix={"lat": -23.55, "lon": -46.63, "accuracy": 5.0, "altitude": 760})
        provider = PlyerLocationProvider(gps=gps, platform_name="linux")
        position = await provider.get_current_position()
        assert position == Position(-23.55, -46.63, accuracy=5.0, altitude=760.0)
        assert gps.stopped is True
        assert gps.start_kwargs == {"minTime": 1000, "minDistance": 0}

    @pytest.mark.asyncio
    async def test_long_field_names_are_normalized(self):
        gps = FakeGps(fix={"latitude": 0.0, "longitude": 12.25})
        provider = PlyerLocationProvider(gps=gps, platform_name="ios")
        position = await provider.get_current_position()
        assert (position.latitude, position.longitude) == (0.0, 12.25)
        assert position.accuracy is None

    @pytest.mark.asyncio
    async def test_incomplete_fix_is_ignored(self):
        """A fix without longitude never resolves; cancelling still stops the GPS."""
        gps = FakeGps(fix={"lat": 1.0})
        provider = PlyerLocationProvider(gps=gps, platform_name="linux")
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(provider.get_current_position(), timeout=0.05)
        assert gps.stopped is True

    @pytest.mark.asyncio
    async def test_disabled_provider_raises(self):
        gps = FakeGps(status=("provider-disabled", "gps"))
        provider = PlyerLocationProvider(gps=gps, platform_name="android")
        with pytest.raises(ProviderError):
            await provider.get_current_position()
        assert gps.stopped is True

    @pytest.mark.asyncio
    async def test_unsupported_platform_raises(self):
        gps = FakeGps(start_error=NotImplementedError())
        provider = PlyerLocationProvider(gps=gps, platform_name="win")
        with pytest.raises(ProviderError):
            await provider.get_current_position()


@pytest.mark.unit
class TestPlyerPermission:
    @pytest.mark.asyncio
    async def test_non_android_is_granted(self):
        provider = PlyerLocationProvider(gps=FakeGps(), platform_name="linux")
        assert await provider.request_permission() == PermissionStatus.Granted

    @pytest.mark.asyncio
    async def test_android_already_granted_skips_prompt(self):
        api = _android_api(already_granted=True)
        provider = PlyerLocationProvider(gps=FakeGps(), platform_name="android", permissions_api=api)
        assert await provider.request_permission() == PermissionStatus.Granted
        api.request_permissions.assert_not_called()

    @pytest.mark.asyncio
    async def test_android_coarse_only_is_enough(self):
        api = _android_api(grant_results=(False, True))
        provider = PlyerLocationProvider(gps=FakeGps(), platform_name="android", permissions_api=api)
        assert await provider.request_permission() == PermissionStatus.Granted
        assert api.request_permissions.call_args[0][0] == ["fine", "coarse"]

    @pytest.mark.asyncio
    async def test_android_refused(self):
        api = _android_api(grant_results=(False, False))
        provider = PlyerLocationProvider(gps=FakeGps(), platform_name="android", permissions_api=api)
        assert await provider.request_permission() == PermissionStatus.Denied


@pytest.mark.unit
class TestBuildProvider:
    def test_simulated(self):
        assert isinstance(build_provider("simulated"), SimulatedLocationProvider)

    def test_plyer(self):
        assert isinstance(build_provider("plyer"), PlyerLocationProvider)

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            build_provider("carrier-pigeon")


@pytest.mark.unit
class TestPermissionTimeout:
    @pytest.mark.asyncio
    async def test_unanswered_prompt_counts_as_denied(self):
        """A permission callback that never fires ends in Denied after the bound."""
        api = _android_api()
        api.request_permissions.side_effect = lambda perms, cb: None
        provider = PlyerLocationProvider(
            gps=FakeGps(), platform_name="android", permissions_api=api, permission_timeout_s=0.05
        )
        assert await provider.request_permission() == PermissionStatus.Denied

    @pytest.mark.asyncio
    async def test_flow_rearms_after_unanswered_prompt(self, location_store):
        """The capture after an unanswered prompt is not rejected as already running."""
        answers = iter([None, (True, True)])
        api = _android_api()

        def request(perms, cb):
            result = next(answers)
            if result is not None:
                cb(perms, list(result))

        api.request_permissions.side_effect = request
        gps = FakeGps(fix={"lat": -23.55, "lon": -46.63})
        provider = PlyerLocationProvider(gps=gps, platform_name="android", permissions_api=api, permission_timeout_s=0.05)
        flow = CaptureFlow(provider, location_store, timeout_s=1.0)
        with pytest.raises(PermissionDenied):
            await flow.capture()
        assert flow.in_flight is False
        record = await flow.capture()
        assert (record.latitude, record.longitude) == (-23.55, -46.63)


@pytest.mark.unit
class TestSimulatedPermissionSetting:
    @pytest.mark.parametrize("value,expected", [
        ("granted", PermissionStatus.Granted),
        ("Granted", PermissionStatus.Granted),
        (" DENIED ", PermissionStatus.Denied),
    ])
    def test_setting_is_case_insensitive(self, value, expected):
        with patch("capture_core.providers.SIMULATED_PERMISSION", value):
            assert build_provider("simulated").permission == expected

    def test_invalid_setting_names_accepted_values(self):
        with patch("capture_core.providers.SIMULATED_PERMISSION", "maybe"):
            with pytest.raises(ValueError, match="granted, denied"):
                build_provider("simulated")
