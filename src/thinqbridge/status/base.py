"""Typed accessors over raw device snapshots."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

from thinqbridge.models.device_model import DeviceModel
from thinqbridge.status.normalize import (
    normalize_boolean,
    round_half_up,
    safe_parse_float,
    safe_parse_int,
    to_seconds,
)

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class AirQualityData:
    """Air quality readings shared by purifiers and air conditioners."""

    is_on: bool
    overall: int
    pm2: int
    pm10: int


class BaseStatus:
    """Read-only projection of one snapshot sub-tree.

    Every accessor degrades to the caller's default when the data is missing,
    null, or of the wrong shape. Status views never raise on bad data: a
    malformed field costs one property, not the bridge.

    Paths may be flat keys that themselves contain dots (``"airState.operation"``
    as a single key, common on legacy devices) or dot-separated nested paths.
    The flat key wins when both exist.
    """

    def __init__(self, data: Any, device_model: Optional[DeviceModel] = None):
        self._data = data
        self.device_model = device_model if device_model is not None else DeviceModel()

    @property
    def data(self) -> Mapping[str, Any]:
        """Raw data, or an empty mapping when the sub-tree is absent."""
        return self._data if isinstance(self._data, Mapping) else {}

    def _resolve(self, path: str) -> Any:
        data = self._data
        if not isinstance(data, Mapping):
            return _MISSING

        if path in data:
            return data[path]

        value: Any = data
        for key in path.split("."):
            if not isinstance(value, Mapping) or key not in value:
                return _MISSING
            value = value[key]
        return value

    def get_value(self, path: str, default: T) -> T:
        value = self._resolve(path)
        if value is _MISSING or value is None:
            return default
        return value

    def get_boolean(self, path: str, default: bool = False) -> bool:
        return normalize_boolean(self.get_value(path, default))

    def get_int(self, path: str, default: int = 0) -> int:
        return safe_parse_int(self.get_value(path, default), default)

    def get_float(self, path: str, default: float = 0.0) -> float:
        return safe_parse_float(self.get_value(path, default), default)

    def get_string(self, path: str, default: str = "") -> str:
        value = self.get_value(path, default)
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def has_property(self, path: str) -> bool:
        """Check that ``path`` exists, even if its value is null."""
        return self._resolve(path) is not _MISSING

    def get_air_quality_data(self, is_power_on: bool) -> Optional[AirQualityData]:
        """Return air quality readings, or None if the device reports none."""
        has_air_quality = (
            self.has_property("airState.quality.overall")
            or self.has_property("airState.quality.PM2")
            or self.has_property("airState.quality.PM10")
        )
        if not has_air_quality:
            return None

        return AirQualityData(
            is_on=is_power_on or self.get_boolean("airState.quality.sensorMon"),
            overall=self.get_int("airState.quality.overall"),
            pm2=self.get_int("airState.quality.PM2"),
            pm10=self.get_int("airState.quality.PM10"),
        )

    def get_filter_life_percent(self, current_key: str, max_key: str) -> int:
        """Percentage of filter life left, from used and rated hours.

        Returns 0 when the rated lifetime is missing or zero.
        """
        max_time = self.get_int(max_key)
        if not max_time:
            return 0
        current_time = self.get_int(current_key)
        return round_half_up((1 - current_time / max_time) * 100)

    def is_enabled(self, path: str, field_name: str) -> bool:
        """Compare a coded value at ``path`` with the model's enable code."""
        enabled = self.device_model.lookup_monitor_name(field_name, "@CP_ENABLE_W")
        return enabled is not None and self.get_string(path) == enabled


class ApplianceStatus(BaseStatus, ABC):
    """Status for appliances that run timed courses (washer, dryer, styler, dishwasher)."""

    REMAIN_HOUR_KEY = "remainTimeHour"
    REMAIN_MINUTE_KEY = "remainTimeMinute"
    INITIAL_HOUR_KEY = "initialTimeHour"
    INITIAL_MINUTE_KEY = "initialTimeMinute"

    @property
    def remain_duration(self) -> int:
        """Seconds left on the current course; 0 while idle.

        Idle appliances keep reporting the last remaining time, so the field
        is only trusted while running.
        """
        if not self.is_running:
            return 0
        return to_seconds(
            hours=self.get_int(self.REMAIN_HOUR_KEY),
            minutes=self.get_int(self.REMAIN_MINUTE_KEY),
        )

    @property
    def initial_duration(self) -> int:
        if not self.is_running:
            return 0
        return to_seconds(
            hours=self.get_int(self.INITIAL_HOUR_KEY),
            minutes=self.get_int(self.INITIAL_MINUTE_KEY),
        )

    @property
    @abstractmethod
    def is_power_on(self) -> bool:
        ...

    @property
    @abstractmethod
    def is_running(self) -> bool:
        ...
