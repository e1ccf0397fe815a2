"""Tests for legacy (ThinQ1) controllers and flat snapshots."""

import pytest

from thinqbridge.bridge.fleet import DeviceFleet
from thinqbridge.constants import PlatformType
from thinqbridge.devices.legacy import (
    LegacyAirConditioner,
    LegacyAirPurifier,
    LegacyRangeHood,
    LegacyRefrigerator,
    LegacyWasher,
)
from thinqbridge.models.control import ControlPayload
from thinqbridge.models.device_model import DeviceModel

ON_OFF_OPTIONS = {"type": "Enum", "option": {"0": "@CP_OFF_EN_W", "1": "@CP_ON_EN_W"}}


@pytest.fixture
def legacy_washer_model():
    return DeviceModel(
        {
            "Value": {
                "State": {
                    "type": "Enum",
                    "option": {
                        "0": "@WM_STATE_POWER_OFF_W",
                        "1": "@WM_STATE_INITIAL_W",
                        "2": "@WM_STATE_RUNNING_W",
                        "3": "@WM_STATE_END_W",
                    },
                },
                "RemoteStart": ON_OFF_OPTIONS,
                "DoorLock": ON_OFF_OPTIONS,
            }
        }
    )


@pytest.fixture
def legacy_fridge_model():
    return DeviceModel(
        {
            "Value": {
                "TempUnit": {
                    "type": "Enum",
                    "option": {"0": "@RE_TERM_CELSIUS_W", "1": "@RE_TERM_FAHRENHEIT_W"},
                },
                "DoorOpenState": {"type": "Enum", "option": {"0": "@CP_CLOSE_W", "1": "@CP_OPEN_W"}},
                "IcePlus": ON_OFF_OPTIONS,
            }
        }
    )


def legacy(make_device, device_type, snapshot, **kwargs):
    return make_device(device_type, snapshot=snapshot, platform=PlatformType.THINQ1, **kwargs)


class TestLegacyAirConditioner:
    """Tests for LegacyAirConditioner."""

    @pytest.mark.asyncio
    async def test_flat_snapshot(self, make_device, transport):
        """Test reading and patching flat dotted keys."""
        ac = LegacyAirConditioner(
            legacy(make_device, "AC", {"airState.operation": 1, "airState.tempState.target": 22}),
            transport,
        )

        assert ac.status.is_power_on is True
        assert ac.status.target_temperature == 22.0

        await ac.set_active(False)

        assert ac.device.snapshot == {"airState.operation": 0, "airState.tempState.target": 22}
        assert ac.status.is_power_on is False
        assert ac.snapshot_version == 1

    @pytest.mark.asyncio
    async def test_keep_monitoring_is_noop(self, make_device, transport):
        """Test that legacy ACs need no keep-alive command."""
        ac = LegacyAirConditioner(legacy(make_device, "AC", {}), transport)

        assert await ac.keep_monitoring() is True
        assert transport.sent == []


class TestLegacyAirPurifier:
    """Tests for LegacyAirPurifier."""

    def test_flat_snapshot(self, make_device, transport):
        """Test purifier properties from flat keys."""
        snapshot = {
            "airState.operation": "1",
            "airState.windStrength": "6",
            "airState.filterMngStates.useTime": 250,
            "airState.filterMngStates.maxTime": 1000,
        }
        purifier = LegacyAirPurifier(legacy(make_device, "AIR_PURIFIER", snapshot), transport)

        values = purifier.characteristics()

        assert values["active"] is True
        assert values["rotation_speed"] == 6
        assert values["filter_life"] == 75


class TestLegacyRangeHood:
    """Tests for LegacyRangeHood."""

    def test_projects_flat_keys(self, make_device, transport, hood_model):
        """Test that prefixed flat keys land in the hood sub-tree."""
        snapshot = {"hoodState.ventSet": "ENABLE", "hoodState.ventLevel": 1, "hoodState.lampLevel": 0}
        hood = LegacyRangeHood(legacy(make_device, "HOOD", snapshot, device_model=hood_model), transport)

        assert hood.status.is_vent_on is True
        assert hood.status.vent_level == 1
        assert hood.status.is_lamp_on is False

    def test_flat_keys_override_nested(self, make_device, transport):
        """Test merging a nested sub-tree with flat keys."""
        snapshot = {"hoodState": {"ventLevel": 1, "lampLevel": 2}, "hoodState.ventLevel": 3}
        hood = LegacyRangeHood(legacy(make_device, "HOOD", snapshot), transport)

        assert hood.status.vent_level == 3
        assert hood.status.lamp_level == 2

    @pytest.mark.asyncio
    async def test_key_value_commands(self, make_device, transport):
        """Test that legacy hoods get plain key/value commands."""
        hood = LegacyRangeHood(legacy(make_device, "HOOD", {"hoodState.ventLevel": 1}), transport)

        await hood.set_hood_rotation_speed(4)
        assert transport.last_payload == ControlPayload.set_value("hoodState.ventLevel", 4)
        assert hood.status.vent_level == 4
        assert hood.snapshot_version == 1

        await hood.set_lamp_active(True)
        assert transport.last_payload == ControlPayload.set_value("hoodState.lampLevel", 2)
        assert hood.status.lamp_level == 2


class TestLegacyWasher:
    """Tests for LegacyWasher."""

    def test_running(self, make_device, transport, legacy_washer_model):
        """Test coded states and legacy time fields."""
        snapshot = {
            "washerDryer": {
                "State": "2",
                "Remain_Time_H": 0,
                "Remain_Time_M": 35,
                "Initial_Time_H": 1,
                "Initial_Time_M": 0,
                "RemoteStart": "1",
                "DoorLock": "0",
            }
        }
        washer = LegacyWasher(
            legacy(make_device, "WASHER", snapshot, device_model=legacy_washer_model), transport
        )
        status = washer.status

        assert status.is_power_on is True
        assert status.is_running is True
        assert status.remain_duration == 2100
        assert status.initial_duration == 3600
        assert status.is_remote_start_on is True
        assert status.is_door_locked is False

    @pytest.mark.parametrize("state,power_on", [("0", False), ("1", True), ("3", True)])
    def test_not_running(self, make_device, transport, legacy_washer_model, state, power_on):
        """Test states that are not an active course."""
        snapshot = {"washerDryer.State": state, "washerDryer.Remain_Time_M": 35}
        washer = LegacyWasher(
            legacy(make_device, "DRYER", snapshot, device_model=legacy_washer_model), transport
        )

        assert washer.status.is_power_on is power_on
        assert washer.status.is_running is False
        assert washer.status.remain_duration == 0

    def test_no_state(self, make_device, transport, legacy_washer_model):
        """Test a washer that has not reported a state."""
        washer = LegacyWasher(
            legacy(make_device, "WASHER", {}, device_model=legacy_washer_model), transport
        )

        assert washer.characteristics()["active"] is False


class TestLegacyRefrigerator:
    """Tests for LegacyRefrigerator."""

    @pytest.fixture
    def fridge(self, make_device, transport, legacy_fridge_model):
        snapshot = {
            "refState.TempRefrigerator": "3",
            "refState.TempFreezer": "-18",
            "refState.TempUnit": "0",
            "refState.DoorOpenState": "1",
            "refState.IcePlus": "1",
        }
        return LegacyRefrigerator(
            legacy(make_device, "REFRIGERATOR", snapshot, device_model=legacy_fridge_model),
            transport,
        )

    def test_status(self, fridge):
        """Test coded refrigerator values."""
        status = fridge.status

        assert status.fridge_temperature == 3.0
        assert status.freezer_temperature == -18.0
        assert status.is_fahrenheit is False
        assert status.is_door_open is True
        assert status.is_express_freezer_on is True
        assert status.is_eco_friendly_on is False

    @pytest.mark.asyncio
    async def test_setters_use_model_codes(self, fridge, transport):
        """Test that on/off values come from the model info."""
        await fridge.set_express_freezer(False)
        assert transport.last_payload == ControlPayload.set_value("refState.IcePlus", "0")
        assert fridge.status.is_express_freezer_on is False

        await fridge.set_eco_friendly(True)
        assert transport.last_payload == ControlPayload.set_value("refState.EcoFriendly", "1")

        await fridge.set_fridge_temperature(4)
        assert transport.last_payload == ControlPayload.set_value("refState.TempRefrigerator", 4)
        assert fridge.status.fridge_temperature == 4.0


class TestLegacyResolution:
    """Tests for legacy devices going through the fleet."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "device_type,expected",
        [
            ("AC", LegacyAirConditioner),
            ("AIR_PURIFIER", LegacyAirPurifier),
            ("REFRIGERATOR", LegacyRefrigerator),
            ("WASHER", LegacyWasher),
            ("DRYER", LegacyWasher),
            ("HOOD", LegacyRangeHood),
        ],
    )
    async def test_fleet_builds_legacy_controllers(self, make_device, transport, device_type, expected):
        """Test that legacy devices get legacy controllers."""
        fleet = DeviceFleet(transport)

        controller = await fleet.add(legacy(make_device, device_type, {}))

        assert type(controller) is expected
