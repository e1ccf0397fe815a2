"""Dehumidifier support."""

from typing import Any

from thinqbridge.constants import HUMIDITY_MAX
from thinqbridge.devices.base import BaseDevice
from thinqbridge.status.base import BaseStatus


class DehumidifierStatus(BaseStatus):
    @property
    def is_power_on(self) -> bool:
        return self.get_boolean("operation")

    @property
    def current_humidity(self) -> float:
        return self.get_float("humidity.current")

    @property
    def target_humidity(self) -> float:
        return self.get_float("humidity.desired")

    @property
    def wind_strength(self) -> int:
        return self.get_int("windStrength")

    @property
    def is_water_tank_full(self) -> bool:
        return self.get_boolean("notificationExt")


class Dehumidifier(BaseDevice):
    @property
    def status(self) -> DehumidifierStatus:
        return self.get_status(DehumidifierStatus)

    async def set_active(self, value: Any) -> bool:
        return await self.set_boolean_control("dehumidifierState.operation", value)

    async def set_target_humidity(self, humidity: float) -> bool:
        humidity = max(0, min(HUMIDITY_MAX, int(humidity)))
        return await self.set_device_control("dehumidifierState.humidity.desired", humidity)

    async def set_wind_strength(self, speed: int) -> bool:
        return await self.set_device_control("dehumidifierState.windStrength", int(speed))

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        return {
            "active": status.is_power_on,
            "current_humidity": status.current_humidity,
            "target_humidity": status.target_humidity,
            "rotation_speed": status.wind_strength,
            "water_level_full": status.is_water_tank_full,
        }
