"""Temperature conversion between HomeKit (Celsius) and device units."""

import logging
import math
from typing import Optional

from thinqbridge.models.device_model import DeviceModel
from thinqbridge.status.normalize import round_half_up

logger = logging.getLogger(__name__)

# Calibration tables some Fahrenheit models ship in their schema
FAHRENHEIT_TO_CELSIUS_TABLE = "TempFahToCel"
CELSIUS_TO_FAHRENHEIT_TABLE = "TempCelToFah"


def c_to_f(celsius: float) -> int:
    return round_half_up(celsius * 9 / 5 + 32)


def f_to_c(fahrenheit: float) -> float:
    return round_half_up((fahrenheit - 32) * 5 / 9 * 100) / 100


class TemperatureConverter:
    """Convert between HomeKit's Celsius and a device's native unit.

    Fahrenheit devices may carry a lookup table in their schema mapping
    between the two scales. When present, the table wins over the formula.
    A broken or missing table never fails the conversion.
    """

    def __init__(self, is_fahrenheit: bool, device_model: Optional[DeviceModel] = None):
        self._is_fahrenheit = is_fahrenheit
        self._device_model = device_model

    @property
    def use_fahrenheit(self) -> bool:
        return self._is_fahrenheit

    def _lookup(self, table: str, key: float) -> Optional[float]:
        if self._device_model is None:
            return None
        if isinstance(key, float) and key.is_integer():
            key = int(key)
        try:
            mapped = self._device_model.lookup_monitor_value(table, str(key))
            if mapped is None:
                return None
            number = float(mapped)
            return number if math.isfinite(number) else None
        except Exception as e:
            logger.warning(
                f"Temperature lookup in {table} failed for {key}, "
                f"using direct conversion: {type(e).__name__}: {e}"
            )
            return None

    def to_native(self, celsius: float) -> float:
        """Convert a HomeKit temperature to what the device expects."""
        if not self._is_fahrenheit:
            return celsius

        fahrenheit = c_to_f(celsius)
        mapped = self._lookup(FAHRENHEIT_TO_CELSIUS_TABLE, fahrenheit)
        if mapped is not None:
            return mapped
        return fahrenheit

    def to_universal(self, temperature: float) -> float:
        """Convert a device temperature to Celsius for HomeKit."""
        if not self._is_fahrenheit:
            return temperature

        mapped = self._lookup(CELSIUS_TO_FAHRENHEIT_TABLE, temperature)
        if mapped is not None:
            return f_to_c(mapped)
        return f_to_c(temperature)
