"""Controllers for legacy (ThinQ1) devices.

ThinQ1 devices report flat snapshots whose keys carry the full path
(``"hoodState.ventLevel": 2``) and coded values that only make sense
through the device model. These classes adapt the current controllers to
that shape instead of duplicating them.
"""

from collections.abc import Mapping
from typing import Any, Optional

from thinqbridge.devices.air_conditioner import AirConditioner
from thinqbridge.devices.air_purifier import AirPurifier
from thinqbridge.devices.base import SNAPSHOT_ROOT
from thinqbridge.devices.range_hood import RangeHood
from thinqbridge.devices.refrigerator import Refrigerator, RefrigeratorStatus
from thinqbridge.devices.washer_dryer import WasherDryer, WasherDryerStatus

WASHER_POWER_OFF_LABEL = "@WM_STATE_POWER_OFF_W"
WASHER_RUNNING_LABELS = (
    "@WM_STATE_RUNNING_W",
    "@WM_STATE_RINSING_W",
    "@WM_STATE_SPINNING_W",
    "@WM_STATE_DRYING_W",
    "@WM_STATE_COOLING_W",
    "@WM_STATE_WASH_W",
    "@WM_STATE_REFRESHING_W",
    "@WM_STATE_STEAMSOFTENING_W",
)


class LegacySnapshotMixin:
    """Project flat prefixed snapshot keys onto the status sub-tree."""

    def _status_data(self, key: str) -> Any:
        snapshot = self.device.snapshot  # type: ignore[attr-defined]
        if key == SNAPSHOT_ROOT or not isinstance(snapshot, Mapping):
            return super()._status_data(key)  # type: ignore[misc]

        prefix = f"{key}."
        projected = {
            name[len(prefix):]: value
            for name, value in snapshot.items()
            if name.startswith(prefix)
        }
        nested = snapshot.get(key)
        if isinstance(nested, Mapping):
            return {**nested, **projected}
        return projected or nested


class LegacyAirConditioner(LegacySnapshotMixin, AirConditioner):
    async def keep_monitoring(self) -> bool:
        # ThinQ1 monitoring sessions are kept alive by the polling itself
        return True


class LegacyAirPurifier(LegacySnapshotMixin, AirPurifier):
    pass


class LegacyRangeHood(LegacySnapshotMixin, RangeHood):
    """ThinQ1 hoods take plain key/value commands."""

    async def set_hood_rotation_speed(self, value: int) -> bool:
        return await self.set_device_control("hoodState.ventLevel", int(value))

    async def set_lamp_brightness(self, value: int) -> bool:
        return await self.set_device_control("hoodState.lampLevel", int(value))


class LegacyWasherStatus(WasherDryerStatus):
    REMAIN_HOUR_KEY = "Remain_Time_H"
    REMAIN_MINUTE_KEY = "Remain_Time_M"
    INITIAL_HOUR_KEY = "Initial_Time_H"
    INITIAL_MINUTE_KEY = "Initial_Time_M"

    @property
    def state(self) -> str:
        return self.get_string("State")

    @property
    def state_label(self) -> Optional[str]:
        return self.device_model.lookup_monitor_value("State", self.state)

    @property
    def is_power_on(self) -> bool:
        if not self.has_property("State"):
            return False
        return self.state_label != WASHER_POWER_OFF_LABEL

    @property
    def is_running(self) -> bool:
        return self.is_power_on and self.state_label in WASHER_RUNNING_LABELS

    @property
    def is_remote_start_on(self) -> bool:
        on = self.device_model.lookup_monitor_name("RemoteStart", "@CP_ON_EN_W")
        return on is not None and self.get_string("RemoteStart") == on

    @property
    def is_door_locked(self) -> bool:
        on = self.device_model.lookup_monitor_name("DoorLock", "@CP_ON_EN_W")
        return on is not None and self.get_string("DoorLock") == on


class LegacyWasher(LegacySnapshotMixin, WasherDryer):
    status_class = LegacyWasherStatus


class LegacyRefrigeratorStatus(RefrigeratorStatus):
    def _is_on(self, field_name: str) -> bool:
        on = self.device_model.lookup_monitor_name(field_name, "@CP_ON_EN_W")
        return on is not None and self.get_string(field_name) == on

    @property
    def fridge_temperature(self) -> float:
        return self.get_float("TempRefrigerator")

    @property
    def freezer_temperature(self) -> float:
        return self.get_float("TempFreezer")

    @property
    def is_fahrenheit(self) -> bool:
        unit = self.device_model.lookup_monitor_value("TempUnit", self.get_string("TempUnit"))
        return unit is not None and "FAHRENHEIT" in unit.upper()

    @property
    def is_door_open(self) -> bool:
        opened = self.device_model.lookup_monitor_name("DoorOpenState", "@CP_OPEN_W")
        return opened is not None and self.get_string("DoorOpenState") == opened

    @property
    def is_express_fridge_on(self) -> bool:
        return self._is_on("ExpressFridge")

    @property
    def is_express_freezer_on(self) -> bool:
        return self._is_on("IcePlus")

    @property
    def is_eco_friendly_on(self) -> bool:
        return self._is_on("EcoFriendly")


class LegacyRefrigerator(LegacySnapshotMixin, Refrigerator):
    FRIDGE_TEMP_KEY = "refState.TempRefrigerator"
    FREEZER_TEMP_KEY = "refState.TempFreezer"
    EXPRESS_FRIDGE_KEY = "refState.ExpressFridge"
    EXPRESS_FREEZER_KEY = "refState.IcePlus"
    ECO_FRIENDLY_KEY = "refState.EcoFriendly"

    status_class = LegacyRefrigeratorStatus

    async def _set_on_off(self, key: str, value: Any) -> bool:
        field_name = key.rsplit(".", 1)[-1]
        label = "@CP_ON_EN_W" if value else "@CP_OFF_EN_W"
        code = self.device.device_model.lookup_monitor_name(field_name, label)
        if code is None:
            code = "1" if value else "0"
        return await self.set_device_control(key, code)
