"""Over-the-range microwave support."""

from typing import Any

from thinqbridge.constants import COOKING_STATUS
from thinqbridge.devices.base import BaseDevice
from thinqbridge.models.control import ControlPayload
from thinqbridge.status.base import ApplianceStatus
from thinqbridge.temperature import TemperatureConverter


class MicrowaveStatus(ApplianceStatus):
    @property
    def state(self) -> str:
        return self.get_string("mwoState", "INITIAL")

    @property
    def is_power_on(self) -> bool:
        return self.state not in ("INITIAL", "POWEROFF")

    @property
    def is_running(self) -> bool:
        return self.state in COOKING_STATUS

    @property
    def is_fahrenheit(self) -> bool:
        return self.get_string("mwoTempUnit", "FAHRENHEIT") == "FAHRENHEIT"

    @property
    def target_temperature(self) -> float:
        return self.get_float("targetTemperatureValue")

    @property
    def vent_level(self) -> int:
        return self.get_int("mwoVentSpeedLevel")

    @property
    def lamp_level(self) -> int:
        return self.get_int("mwoLampLevel")


class Microwave(BaseDevice):
    @property
    def status(self) -> MicrowaveStatus:
        return self.get_status(MicrowaveStatus)

    @property
    def temperature_converter(self) -> TemperatureConverter:
        return TemperatureConverter(self.status.is_fahrenheit, self.device.device_model)

    async def set_vent_speed(self, level: int) -> bool:
        return await self.dispatch_control(
            ControlPayload.set_list({"microwaveState": {"mwoVentSpeedLevel": int(level)}})
        )

    async def set_lamp_level(self, level: int) -> bool:
        return await self.dispatch_control(
            ControlPayload.set_list({"microwaveState": {"mwoLampLevel": int(level)}})
        )

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        return {
            "heating": status.is_running,
            "target_temperature": self.temperature_converter.to_universal(
                status.target_temperature
            ),
            "remaining_duration": status.remain_duration,
            "vent_rotation_speed": status.vent_level,
            "lamp_brightness": status.lamp_level,
        }
