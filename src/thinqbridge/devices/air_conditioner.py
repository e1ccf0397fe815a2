"""Air conditioner (and heat pump) support."""

import logging
from typing import Any, Optional

from thinqbridge.constants import (
    AC_MONITOR_TIMEOUT_VALUE,
    FAN_SPEED_MAX,
    FAN_SPEED_MIN,
    HOMEKIT_TEMP_MAX,
    HOMEKIT_TEMP_MIN,
    HUMIDITY_DIVISOR,
    HUMIDITY_MAX,
    SWING_MODE_OFF,
    SWING_MODE_ON,
    UNDEFINED_OP_MODE,
)
from thinqbridge.devices.base import SNAPSHOT_ROOT, BaseDevice
from thinqbridge.models.control import ControlPayload
from thinqbridge.status.base import AirQualityData, BaseStatus
from thinqbridge.temperature import TemperatureConverter

logger = logging.getLogger(__name__)


class AirConditionerStatus(BaseStatus):
    """Built over the whole snapshot; AC fields live under ``airState.*``."""

    @property
    def is_power_on(self) -> bool:
        return self.get_boolean("airState.operation")

    @property
    def op_mode(self) -> int:
        return self.get_int("airState.opMode", UNDEFINED_OP_MODE)

    @property
    def current_temperature(self) -> float:
        return self.get_float("airState.tempState.current")

    @property
    def target_temperature(self) -> float:
        return self.get_float("airState.tempState.target")

    @property
    def current_humidity(self) -> Optional[float]:
        if not self.has_property("airState.humidity.current"):
            return None
        humidity = self.get_float("airState.humidity.current")
        # some models report tenths of a percent
        if humidity > HUMIDITY_MAX:
            humidity = humidity / HUMIDITY_DIVISOR
        return humidity

    @property
    def wind_strength(self) -> int:
        return self.get_int("airState.windStrength")

    @property
    def is_swing_vertical_on(self) -> bool:
        return self.get_string("airState.wDir.vStep", SWING_MODE_OFF) == SWING_MODE_ON

    @property
    def is_swing_horizontal_on(self) -> bool:
        return self.get_string("airState.wDir.hStep", SWING_MODE_OFF) == SWING_MODE_ON

    @property
    def is_jet_mode_on(self) -> bool:
        return self.get_boolean("airState.wMode.jet")

    @property
    def is_quiet_mode_on(self) -> bool:
        return self.get_boolean("airState.miscFuncState.silentAWHP")

    @property
    def is_energy_save_on(self) -> bool:
        return self.get_boolean("airState.powerSave.basic")

    @property
    def is_air_clean_on(self) -> bool:
        return self.get_boolean("airState.wMode.airClean")

    @property
    def is_light_on(self) -> bool:
        return self.get_boolean("airState.lightingState.displayControl")

    @property
    def air_quality(self) -> Optional[AirQualityData]:
        return self.get_air_quality_data(self.is_power_on)


class AirConditioner(BaseDevice):
    """Air conditioner controller.

    Jet, quiet, energy-save and air-clean modes exist only on some models;
    their setters refuse to send anything on models without the feature.
    """

    @property
    def status(self) -> AirConditionerStatus:
        return self.get_status(AirConditionerStatus, SNAPSHOT_ROOT)

    @property
    def temperature_converter(self) -> TemperatureConverter:
        is_fahrenheit = self.effective_config.get("ac_temperature_unit") == "F"
        return TemperatureConverter(is_fahrenheit, self.device.device_model)

    def features(self) -> dict[str, bool]:
        """Which optional services the accessory should expose."""
        config = self.effective_config
        return {
            "jet_mode": bool(config.get("ac_jet_control")) and self.has_model_feature("jetMode"),
            "quiet_mode": self.has_model_feature("quietMode"),
            "energy_save": bool(config.get("ac_energy_save"))
            and self.has_model_feature("energySaveMode"),
            "air_clean": bool(config.get("ac_air_clean")) and self.has_model_feature("airClean"),
            "air_quality": bool(config.get("ac_air_quality")),
            "humidity_sensor": bool(config.get("ac_humidity_sensor")),
            "temperature_sensor": bool(config.get("ac_temperature_sensor")),
            "fan_control": bool(config.get("ac_fan_control")),
            "led_control": bool(config.get("ac_led_control")),
        }

    async def set_active(self, value: Any) -> bool:
        return await self.set_boolean_control("airState.operation", value)

    async def set_target_temperature(self, celsius: float) -> bool:
        celsius = max(HOMEKIT_TEMP_MIN, min(HOMEKIT_TEMP_MAX, celsius))
        native = self.temperature_converter.to_native(celsius)
        return await self.set_device_control("airState.tempState.target", native)

    async def set_fan_speed(self, speed: int) -> bool:
        speed = max(FAN_SPEED_MIN, min(FAN_SPEED_MAX, int(speed)))
        return await self.set_device_control("airState.windStrength", speed)

    async def set_swing_mode(self, enabled: bool) -> bool:
        """Swing on the axes selected by the ``ac_swing_mode`` setting."""
        value = SWING_MODE_ON if enabled else SWING_MODE_OFF
        mode = self.effective_config.get("ac_swing_mode", "BOTH")
        data_set: dict[str, Any] = {}
        if mode in ("BOTH", "VERTICAL"):
            data_set["airState.wDir.vStep"] = value
        if mode in ("BOTH", "HORIZONTAL"):
            data_set["airState.wDir.hStep"] = value
        if not data_set:
            logger.warning(f"[{self.device.name}] Unknown ac_swing_mode {mode!r}")
            return False
        return await self.dispatch_control(ControlPayload.set_list(data_set))

    async def _set_model_feature(self, feature: str, key: str, value: Any) -> bool:
        if not self.has_model_feature(feature):
            logger.warning(
                f"[{self.device.name}] {feature} not supported by model {self.device.model}"
            )
            return False
        return await self.set_boolean_control(key, value)

    async def set_jet_mode(self, value: Any) -> bool:
        return await self._set_model_feature("jetMode", "airState.wMode.jet", value)

    async def set_quiet_mode(self, value: Any) -> bool:
        return await self._set_model_feature(
            "quietMode", "airState.miscFuncState.silentAWHP", value
        )

    async def set_energy_save(self, value: Any) -> bool:
        return await self._set_model_feature("energySaveMode", "airState.powerSave.basic", value)

    async def set_air_clean(self, value: Any) -> bool:
        return await self._set_model_feature("airClean", "airState.wMode.airClean", value)

    async def set_light(self, value: Any) -> bool:
        return await self.set_boolean_control("airState.lightingState.displayControl", value)

    async def keep_monitoring(self) -> bool:
        """Extend the cloud's monitoring window so pushes keep coming."""
        if self.has_model_feature("noMonitorTimeout"):
            return True
        return await self.set_device_control(
            "airState.mon.timeout", AC_MONITOR_TIMEOUT_VALUE, update_snapshot=False
        )

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        converter = self.temperature_converter
        features = self.features()
        values: dict[str, Any] = {
            "active": status.is_power_on,
            "current_temperature": converter.to_universal(status.current_temperature),
            "target_temperature": converter.to_universal(status.target_temperature),
            "rotation_speed": status.wind_strength,
            "swing_mode": status.is_swing_vertical_on or status.is_swing_horizontal_on,
        }
        if features["humidity_sensor"]:
            values["current_humidity"] = status.current_humidity
        if features["air_quality"]:
            values["air_quality"] = status.air_quality
        if features["jet_mode"]:
            values["jet_mode"] = status.is_jet_mode_on
        if features["quiet_mode"]:
            values["quiet_mode"] = status.is_quiet_mode_on
        if features["energy_save"]:
            values["energy_save"] = status.is_energy_save_on
        if features["air_clean"]:
            values["air_clean"] = status.is_air_clean_on
        if features["led_control"]:
            values["light"] = status.is_light_on
        return values
