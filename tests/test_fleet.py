"""Tests for the DeviceFleet composition root."""

import logging

import pytest

from thinqbridge.bridge.config import BridgeConfig
from thinqbridge.bridge.fleet import DeviceFleet
from thinqbridge.constants import PlatformType
from thinqbridge.devices.air_conditioner import AirConditioner
from thinqbridge.devices.range_hood import RangeHood
from thinqbridge.errors import CommunicationError, UnsupportedDeviceError


@pytest.fixture
def fleet(transport):
    """Create an empty fleet over the mock transport."""
    return DeviceFleet(transport, BridgeConfig(devices=[{"id": "ac-1", "ac_temperature_unit": "F"}]))


class TestAdd:
    """Tests for adding devices."""

    @pytest.mark.asyncio
    async def test_add_supported_device(self, fleet, make_device, transport):
        """Test that a controller is created with the fleet's collaborators."""
        controller = await fleet.add(make_device("AC", device_id="ac-1"))

        assert isinstance(controller, AirConditioner)
        assert fleet.get("ac-1") is controller
        assert "ac-1" in fleet
        assert len(fleet) == 1
        assert controller.effective_config["ac_temperature_unit"] == "F"

    @pytest.mark.asyncio
    async def test_unsupported_device_is_skipped(self, fleet, make_device, caplog):
        """Test that unsupported devices are dropped, not fatal."""
        with caplog.at_level(logging.WARNING, logger="thinqbridge.bridge.fleet"):
            controller = await fleet.add(make_device("TV", device_id="tv-1"))

        assert controller is None
        assert "tv-1" not in fleet
        assert "unsupported" in caplog.text.lower()

    @pytest.mark.asyncio
    async def test_unsupported_device_strict(self, fleet, make_device):
        """Test strict mode raises UnsupportedDeviceError."""
        with pytest.raises(UnsupportedDeviceError) as exc_info:
            await fleet.add(make_device("TV", platform=PlatformType.THINQ1), strict=True)

        assert exc_info.value.device_type == "TV"
        assert exc_info.value.platform == "thinq1"

    @pytest.mark.asyncio
    async def test_duplicate_device_raises(self, fleet, make_device):
        """Test that a device id can only be added once."""
        await fleet.add(make_device("AC"))

        with pytest.raises(ValueError, match="already registered"):
            await fleet.add(make_device("AC"))

    @pytest.mark.asyncio
    async def test_add_all(self, fleet, make_device):
        """Test adding a mixed device list."""
        added = await fleet.add_all(
            [
                make_device("AC", device_id="ac-1"),
                make_device("TV", device_id="tv-1"),
                make_device("HOOD", device_id="hood-1"),
                make_device("HOOD", device_id="hood-1"),
            ]
        )

        assert [type(c) for c in added] == [AirConditioner, RangeHood]
        assert fleet.list_device_ids() == ["ac-1", "hood-1"]

    @pytest.mark.asyncio
    async def test_remove(self, fleet, make_device):
        """Test removing a device."""
        controller = await fleet.add(make_device("AC"))

        assert fleet.remove("device-1") is controller
        assert fleet.remove("device-1") is None
        assert len(fleet) == 0

    @pytest.mark.asyncio
    async def test_get_all_is_a_copy(self, fleet, make_device):
        """Test that get_all() does not expose internal state."""
        await fleet.add(make_device("AC"))
        fleet.get_all().clear()

        assert len(fleet) == 1


class TestRefresh:
    """Tests for refreshing snapshots."""

    @pytest.mark.asyncio
    async def test_refresh_one(self, fleet, make_device, transport):
        """Test pulling a snapshot for one device."""
        controller = await fleet.add(make_device("AC", device_id="ac-1"))
        transport.snapshots["ac-1"] = {"airState": {"operation": 1}}

        await fleet.refresh("ac-1")

        assert controller.device.snapshot == {"airState": {"operation": 1}}
        assert controller.snapshot_version == 1

    @pytest.mark.asyncio
    async def test_refresh_unknown(self, fleet):
        """Test refreshing a device that is not in the fleet."""
        with pytest.raises(KeyError):
            await fleet.refresh("nope")

    @pytest.mark.asyncio
    async def test_refresh_all_reports_failures(self, fleet, make_device, transport):
        """Test that one failing device does not stop the rest."""
        await fleet.add(make_device("AC", device_id="ac-1"))
        await fleet.add(make_device("HOOD", device_id="hood-1"))
        transport.error = CommunicationError("ac-1", "offline")

        results = await fleet.refresh_all()

        assert results == {"ac-1": False, "hood-1": False}

        transport.error = None
        assert await fleet.refresh_all() == {"ac-1": True, "hood-1": True}

    @pytest.mark.asyncio
    async def test_update(self, fleet, make_device):
        """Test routing a pushed partial snapshot."""
        controller = await fleet.add(make_device("AC", device_id="ac-1"))

        assert fleet.update("ac-1", {"airState": {"operation": 1}}) is True
        assert controller.status.is_power_on is True
        assert fleet.update("nope", {}) is False


class TestKeepMonitoring:
    """Tests for keep_monitoring()."""

    @pytest.mark.asyncio
    async def test_only_devices_that_need_it(self, fleet, make_device, transport):
        """Test that the keep-alive goes to air conditioners only."""
        await fleet.add(make_device("AC", device_id="ac-1"))
        await fleet.add(make_device("HOOD", device_id="hood-1"))

        await fleet.keep_monitoring()

        assert [device_id for device_id, _ in transport.sent] == ["ac-1"]
        assert transport.last_payload.data_key == "airState.mon.timeout"

    @pytest.mark.asyncio
    async def test_failures_are_logged(self, fleet, make_device, transport, caplog):
        """Test that keep-alive failures do not propagate."""
        await fleet.add(make_device("AC", device_id="ac-1"))
        transport.error = CommunicationError("ac-1", "offline")

        with caplog.at_level(logging.WARNING, logger="thinqbridge.bridge.fleet"):
            await fleet.keep_monitoring()

        assert "offline" in caplog.text
