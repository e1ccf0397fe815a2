"""Read-only view of a device's model-info schema.

The schema ships with each hardware model and describes which raw values a
field may take. Two layouts exist in the wild: the current one keeps fields
under ``MonitoringValue`` with a ``valueMapping`` per field, the legacy one
keeps them under ``Value`` with an ``option`` per field.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ValueType(str, Enum):
    """Kind of value a schema field holds."""

    BIT = "bit"
    ENUM = "enum"
    RANGE = "range"
    REFERENCE = "reference"
    STRING = "string"
    NUMBER = "number"


@dataclass(frozen=True)
class ModelValue:
    """Schema entry for one field."""

    name: str
    type: Optional[ValueType]
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: Mapping[str, str] = field(default_factory=dict)


class DeviceModel:
    """Schema lookups over a model-info document."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Mapping[str, Any] = data or {}

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def model_type(self) -> str:
        info = self._data.get("Info")
        if isinstance(info, Mapping):
            return str(info.get("modelType", ""))
        return ""

    def _fields(self) -> Mapping[str, Any]:
        fields = self._data.get("MonitoringValue") or self._data.get("Value") or {}
        return fields if isinstance(fields, Mapping) else {}

    def _entry(self, name: str) -> Optional[Mapping[str, Any]]:
        entry = self._fields().get(name)
        return entry if isinstance(entry, Mapping) else None

    @staticmethod
    def _mapping(entry: Mapping[str, Any]) -> Mapping[str, Any]:
        mapping = entry.get("valueMapping") or entry.get("option") or {}
        return mapping if isinstance(mapping, Mapping) else {}

    @staticmethod
    def _label(item: Any) -> str:
        if isinstance(item, Mapping):
            return str(item.get("label", item.get("index", "")))
        return str(item)

    def value(self, name: str) -> Optional[ModelValue]:
        """Return the schema entry for ``name``, or None if the model lacks it."""
        entry = self._entry(name)
        if entry is None:
            return None

        raw_type = str(entry.get("dataType") or entry.get("type") or "").lower()
        try:
            value_type: Optional[ValueType] = ValueType(raw_type)
        except ValueError:
            value_type = None

        mapping = self._mapping(entry)
        if value_type is ValueType.RANGE:
            return ModelValue(
                name=name,
                type=value_type,
                min=mapping.get("min"),
                max=mapping.get("max"),
                step=mapping.get("step", 1),
            )

        options = {str(key): self._label(item) for key, item in mapping.items()}
        return ModelValue(name=name, type=value_type, options=options)

    def lookup_monitor_name(self, field_name: str, label: str) -> Optional[str]:
        """Return the raw value whose label is ``label`` (e.g. ``@CP_ENABLE_W``)."""
        entry = self._entry(field_name)
        if entry is None:
            return None
        for key, item in self._mapping(entry).items():
            if self._label(item) == label:
                return str(key)
        return None

    def lookup_monitor_value(
        self, field_name: str, key: str, default: Any = None
    ) -> Any:
        """Return the label mapped to raw value ``key`` in table ``field_name``."""
        entry = self._entry(field_name)
        if entry is None:
            return default
        mapping = self._mapping(entry)
        if key not in mapping:
            return default
        return self._label(mapping[key])
