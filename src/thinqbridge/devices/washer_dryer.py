"""Washer, dryer and WashTower support."""

from functools import cached_property
from typing import Any

from thinqbridge.constants import TCL_MAINTENANCE_THRESHOLD, WASHER_NOT_RUNNING_STATUS
from thinqbridge.devices.base import BaseDevice
from thinqbridge.status.base import ApplianceStatus, BaseStatus


class WasherDryerStatus(ApplianceStatus):
    @property
    def state(self) -> str:
        return self.get_string("state", "POWEROFF")

    @property
    def is_power_on(self) -> bool:
        return self.state != "POWEROFF"

    @property
    def is_running(self) -> bool:
        return self.is_power_on and self.state not in WASHER_NOT_RUNNING_STATUS

    @property
    def is_remote_start_on(self) -> bool:
        on = self.device_model.lookup_monitor_name("remoteStart", "@CP_ON_EN_W")
        return on is not None and self.get_string("remoteStart") == on

    @property
    def is_door_locked(self) -> bool:
        on = self.device_model.lookup_monitor_name("doorLock", "@CP_ON_EN_W")
        return on is not None and self.get_string("doorLock") == on

    @property
    def tub_clean_count(self) -> int:
        return self.get_int("TCLCount")

    @property
    def needs_tub_clean(self) -> bool:
        return self.tub_clean_count >= TCL_MAINTENANCE_THRESHOLD


class WasherDryer(BaseDevice):
    status_class: type[WasherDryerStatus] = WasherDryerStatus

    @property
    def status(self) -> WasherDryerStatus:
        return self.get_status(self.status_class)

    @staticmethod
    def _appliance_values(status: WasherDryerStatus) -> dict[str, Any]:
        return {
            "active": status.is_power_on,
            "in_use": status.is_running,
            "remaining_duration": status.remain_duration,
            "set_duration": status.initial_duration,
        }

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        config = self.effective_config
        values = self._appliance_values(status)
        if config.get("washer_trigger"):
            values["remote_start"] = status.is_remote_start_on
        if config.get("washer_door_lock"):
            values["door_lock"] = status.is_door_locked
        if config.get("washer_tub_clean"):
            values["tub_clean"] = status.needs_tub_clean
        return values


class WashTowerStatus(BaseStatus):
    """Washer and dryer stacked in one appliance, one sub-tree each."""

    @cached_property
    def washer(self) -> WasherDryerStatus:
        return WasherDryerStatus(self.get_value("washer", None), self.device_model)

    @cached_property
    def dryer(self) -> WasherDryerStatus:
        return WasherDryerStatus(self.get_value("dryer", None), self.device_model)


class WashTower(WasherDryer):
    @property
    def status(self) -> WashTowerStatus:
        return self.get_status(WashTowerStatus)

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        return {
            "washer": self._appliance_values(status.washer),
            "dryer": self._appliance_values(status.dryer),
        }
