"""Oven support."""

from typing import Any

from thinqbridge.constants import COOKING_STATUS
from thinqbridge.devices.base import BaseDevice
from thinqbridge.status.base import ApplianceStatus
from thinqbridge.temperature import TemperatureConverter


class OvenStatus(ApplianceStatus):
    @property
    def state(self) -> str:
        return self.get_string("state", "INITIAL")

    @property
    def is_power_on(self) -> bool:
        return self.state not in ("INITIAL", "POWEROFF")

    @property
    def is_running(self) -> bool:
        return self.state in COOKING_STATUS

    @property
    def is_preheated(self) -> bool:
        return self.state == "PREHEATING_IS_DONE"

    @property
    def is_fahrenheit(self) -> bool:
        return self.get_string("tempUnit", "FAHRENHEIT") == "FAHRENHEIT"

    @property
    def current_temperature(self) -> float:
        return self.get_float("currentTemperature")

    @property
    def target_temperature(self) -> float:
        return self.get_float("targetTemperature")


class Oven(BaseDevice):
    @property
    def status(self) -> OvenStatus:
        return self.get_status(OvenStatus)

    @property
    def temperature_converter(self) -> TemperatureConverter:
        return TemperatureConverter(self.status.is_fahrenheit, self.device.device_model)

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        converter = self.temperature_converter
        return {
            "heating": status.is_running,
            "preheated": status.is_preheated,
            "current_temperature": converter.to_universal(status.current_temperature),
            "target_temperature": converter.to_universal(status.target_temperature),
            "remaining_duration": status.remain_duration,
        }
