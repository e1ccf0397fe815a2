"""Styler (clothing care) support."""

from typing import Any

from thinqbridge.constants import STYLER_NOT_RUNNING_STATUS
from thinqbridge.devices.base import BaseDevice
from thinqbridge.status.base import ApplianceStatus


class StylerStatus(ApplianceStatus):
    @property
    def state(self) -> str:
        return self.get_string("state", "POWEROFF")

    @property
    def is_power_on(self) -> bool:
        return self.state != "POWEROFF"

    @property
    def is_running(self) -> bool:
        return self.is_power_on and self.state not in STYLER_NOT_RUNNING_STATUS


class Styler(BaseDevice):
    @property
    def status(self) -> StylerStatus:
        return self.get_status(StylerStatus)

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        return {
            "active": status.is_power_on,
            "in_use": status.is_running,
            "remaining_duration": status.remain_duration,
            "set_duration": status.initial_duration,
        }
