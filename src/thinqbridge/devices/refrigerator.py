"""Refrigerator support."""

from typing import Any

from thinqbridge.devices.base import BaseDevice
from thinqbridge.status.base import BaseStatus
from thinqbridge.temperature import TemperatureConverter


class RefrigeratorStatus(BaseStatus):
    @property
    def fridge_temperature(self) -> float:
        return self.get_float("fridgeTemp")

    @property
    def freezer_temperature(self) -> float:
        return self.get_float("freezerTemp")

    @property
    def is_fahrenheit(self) -> bool:
        return self.get_string("tempUnit", "CELSIUS") == "FAHRENHEIT"

    @property
    def is_door_open(self) -> bool:
        return self.get_string("atLeastOneDoorOpen") == "OPEN"

    @property
    def is_express_fridge_on(self) -> bool:
        return self.get_string("expressFridge") == "ON"

    @property
    def is_express_freezer_on(self) -> bool:
        return self.get_string("expressMode") == "ON"

    @property
    def is_eco_friendly_on(self) -> bool:
        return self.get_string("ecoFriendly") == "ON"

    @property
    def has_water_filter(self) -> bool:
        return self.has_property("waterFilter1RemainP")

    @property
    def water_filter_life(self) -> int:
        return self.get_int("waterFilter1RemainP")


class Refrigerator(BaseDevice):
    """Refrigerator controller. Express and eco modes are opt-in per device."""

    FRIDGE_TEMP_KEY = "refState.fridgeTemp"
    FREEZER_TEMP_KEY = "refState.freezerTemp"
    EXPRESS_FRIDGE_KEY = "refState.expressFridge"
    EXPRESS_FREEZER_KEY = "refState.expressMode"
    ECO_FRIENDLY_KEY = "refState.ecoFriendly"

    status_class: type[RefrigeratorStatus] = RefrigeratorStatus

    @property
    def status(self) -> RefrigeratorStatus:
        return self.get_status(self.status_class)

    @property
    def temperature_converter(self) -> TemperatureConverter:
        return TemperatureConverter(self.status.is_fahrenheit, self.device.device_model)

    async def _set_on_off(self, key: str, value: Any) -> bool:
        return await self.set_device_control(key, "ON" if value else "OFF")

    async def set_express_fridge(self, value: Any) -> bool:
        return await self._set_on_off(self.EXPRESS_FRIDGE_KEY, value)

    async def set_express_freezer(self, value: Any) -> bool:
        return await self._set_on_off(self.EXPRESS_FREEZER_KEY, value)

    async def set_eco_friendly(self, value: Any) -> bool:
        return await self._set_on_off(self.ECO_FRIENDLY_KEY, value)

    async def set_fridge_temperature(self, celsius: float) -> bool:
        native = self.temperature_converter.to_native(celsius)
        return await self.set_device_control(self.FRIDGE_TEMP_KEY, native)

    async def set_freezer_temperature(self, celsius: float) -> bool:
        native = self.temperature_converter.to_native(celsius)
        return await self.set_device_control(self.FREEZER_TEMP_KEY, native)

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        converter = self.temperature_converter
        config = self.effective_config
        values: dict[str, Any] = {
            "fridge_temperature": converter.to_universal(status.fridge_temperature),
            "freezer_temperature": converter.to_universal(status.freezer_temperature),
            "door_open": status.is_door_open,
        }
        if config.get("ref_express_fridge"):
            values["express_fridge"] = status.is_express_fridge_on
        if config.get("ref_express_freezer"):
            values["express_freezer"] = status.is_express_freezer_on
        if config.get("ref_eco_friendly"):
            values["eco_friendly"] = status.is_eco_friendly_on
        if status.has_water_filter:
            values["water_filter_life"] = status.water_filter_life
        return values
