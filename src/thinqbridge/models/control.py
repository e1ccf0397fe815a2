"""Control payloads sent to appliances."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional


def patch_path(target: dict[str, Any], path: str, value: Any) -> None:
    """Set ``value`` at a dot-separated ``path`` inside ``target``.

    Missing or non-mapping intermediates are replaced by empty dicts. A key
    that already exists literally at the root (``"airState.operation"`` as
    one key) is written directly, mirroring how status views read it.
    """
    if path in target:
        target[path] = value
        return

    keys = path.split(".")
    node = target
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[keys[-1]] = value


@dataclass(frozen=True)
class ControlPayload:
    """A control request: one key/value, or a structured set of fields."""

    data_key: Optional[str] = None
    data_value: Any = None
    data_set_list: Optional[Mapping[str, Any]] = None
    data_get_list: Optional[Mapping[str, Any]] = None

    @classmethod
    def set_value(cls, key: str, value: Any) -> "ControlPayload":
        return cls(data_key=key, data_value=value)

    @classmethod
    def set_list(cls, data_set_list: Mapping[str, Any]) -> "ControlPayload":
        return cls(data_set_list=data_set_list)

    @property
    def is_simple(self) -> bool:
        """True for the plain key/value form."""
        return self.data_key is not None and self.data_set_list is None

    def to_dict(self) -> dict[str, Any]:
        """Vendor field names, as the ThinQ control endpoint expects them."""
        return {
            "dataKey": self.data_key,
            "dataValue": self.data_value,
            "dataSetList": dict(self.data_set_list) if self.data_set_list is not None else None,
            "dataGetList": dict(self.data_get_list) if self.data_get_list is not None else None,
        }

    def as_document(self) -> dict[str, Any]:
        """Expand the payload into a nested state document."""
        if self.data_set_list is not None:
            return dict(self.data_set_list)
        document: dict[str, Any] = {}
        if self.data_key is not None:
            patch_path(document, self.data_key, self.data_value)
        return document
