"""Dishwasher support."""

from typing import Any

from thinqbridge.constants import (
    DISHWASHER_RUNNING_STATUS,
    RINSE_LEVEL_EMPTY,
    RINSE_LEVEL_FULL,
)
from thinqbridge.devices.base import BaseDevice
from thinqbridge.status.base import ApplianceStatus


class DishwasherStatus(ApplianceStatus):
    @property
    def state(self) -> str:
        return self.get_string("state", "POWEROFF")

    @property
    def is_power_on(self) -> bool:
        return self.state != "POWEROFF"

    @property
    def is_running(self) -> bool:
        return self.is_power_on and self.state in DISHWASHER_RUNNING_STATUS

    @property
    def is_door_open(self) -> bool:
        return self.get_string("door") == "OPEN"

    @property
    def is_child_lock_on(self) -> bool:
        return self.get_string("childLock") == "ON"

    @property
    def rinse_level(self) -> int:
        # rinseRefill is raised once the rinse aid runs out
        return RINSE_LEVEL_EMPTY if self.get_string("rinseRefill") == "ON" else RINSE_LEVEL_FULL

    @property
    def is_complete(self) -> bool:
        return self.state == "END"


class Dishwasher(BaseDevice):
    @property
    def status(self) -> DishwasherStatus:
        return self.get_status(DishwasherStatus)

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        values: dict[str, Any] = {
            "active": status.is_power_on,
            "in_use": status.is_running,
            "remaining_duration": status.remain_duration,
            "door_open": status.is_door_open,
            "child_lock": status.is_child_lock_on,
            "rinse_level": status.rinse_level,
        }
        if self.effective_config.get("dishwasher_trigger"):
            values["cycle_complete"] = status.is_complete
        return values
