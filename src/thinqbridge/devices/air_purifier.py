"""Air purifier and AeroTower support."""

from typing import Any, Optional

from thinqbridge.constants import (
    AIR_PURIFIER_AUTO_MODE,
    AIR_PURIFIER_NORMAL_MODE,
    FILTER_CHANGE_THRESHOLD_PERCENT,
)
from thinqbridge.devices.base import SNAPSHOT_ROOT, BaseDevice
from thinqbridge.status.base import AirQualityData, BaseStatus


class AirPurifierStatus(BaseStatus):
    @property
    def is_power_on(self) -> bool:
        return self.get_boolean("airState.operation")

    @property
    def op_mode(self) -> int:
        return self.get_int("airState.opMode")

    @property
    def is_auto_mode(self) -> bool:
        return self.op_mode == AIR_PURIFIER_AUTO_MODE

    @property
    def rotation_speed(self) -> int:
        return self.get_int("airState.windStrength")

    @property
    def is_swing_on(self) -> bool:
        return self.get_boolean("airState.circulate.rotate")

    @property
    def is_light_on(self) -> bool:
        return self.get_boolean("airState.lightingState.signal")

    @property
    def filter_life(self) -> int:
        return self.get_filter_life_percent(
            "airState.filterMngStates.useTime", "airState.filterMngStates.maxTime"
        )

    @property
    def needs_filter_change(self) -> bool:
        return self.filter_life < 100 - FILTER_CHANGE_THRESHOLD_PERCENT

    @property
    def air_quality(self) -> Optional[AirQualityData]:
        return self.get_air_quality_data(self.is_power_on)


class AirPurifier(BaseDevice):
    @property
    def status(self) -> AirPurifierStatus:
        return self.get_status(AirPurifierStatus, SNAPSHOT_ROOT)

    async def set_active(self, value: Any) -> bool:
        return await self.set_boolean_control("airState.operation", value)

    async def set_auto_mode(self, auto: bool) -> bool:
        mode = AIR_PURIFIER_AUTO_MODE if auto else AIR_PURIFIER_NORMAL_MODE
        return await self.set_device_control("airState.opMode", mode)

    async def set_rotation_speed(self, speed: int) -> bool:
        return await self.set_device_control("airState.windStrength", int(speed))

    async def set_swing(self, value: Any) -> bool:
        return await self.set_boolean_control("airState.circulate.rotate", value)

    async def set_light(self, value: Any) -> bool:
        return await self.set_boolean_control("airState.lightingState.signal", value)

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        values: dict[str, Any] = {
            "active": status.is_power_on,
            "target_state_auto": status.is_auto_mode,
            "rotation_speed": status.rotation_speed,
            "swing_mode": status.is_swing_on,
            "light": status.is_light_on,
            "filter_life": status.filter_life,
            "filter_change_indication": status.needs_filter_change,
        }
        air_quality = status.air_quality
        if air_quality is not None:
            values["air_quality"] = air_quality
        return values


class AeroTowerStatus(AirPurifierStatus):
    @property
    def current_temperature(self) -> float:
        return self.get_float("airState.tempState.current")

    @property
    def current_humidity(self) -> float:
        return self.get_float("airState.humidity.current")

    @property
    def is_uv_nano_on(self) -> bool:
        return self.get_boolean("airState.miscFuncState.Uvnano")


class AeroTower(AirPurifier):
    """AeroTower: purifier fan with a built-in climate sensor."""

    @property
    def status(self) -> AeroTowerStatus:
        return self.get_status(AeroTowerStatus, SNAPSHOT_ROOT)

    async def set_uv_nano(self, value: Any) -> bool:
        return await self.set_boolean_control("airState.miscFuncState.Uvnano", value)

    def characteristics(self) -> dict[str, Any]:
        values = super().characteristics()
        status = self.status
        values["current_temperature"] = status.current_temperature
        values["current_humidity"] = status.current_humidity
        values["uv_nano"] = status.is_uv_nano_on
        return values
