"""Device record as reported by the ThinQ device list."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from thinqbridge.constants import DeviceType, PlatformType
from thinqbridge.models.device_model import DeviceModel


def _device_type_name(raw: Any) -> str:
    """Map the numeric type code to its name, passing names through."""
    try:
        return DeviceType(int(raw)).name
    except (TypeError, ValueError):
        return str(raw or "")


@dataclass
class Device:
    """One physical appliance.

    ``snapshot`` is the raw, untyped state blob. Once the device is attached
    to a controller, the controller owns it.
    """

    id: str
    name: str
    type: str
    platform: PlatformType = PlatformType.THINQ2
    model: str = ""
    sales_model: str = ""
    serial_number: str = ""
    online: bool = True
    device_model: DeviceModel = field(default_factory=DeviceModel)
    snapshot: dict[str, Any] = field(default_factory=dict)

    @property
    def is_legacy(self) -> bool:
        return self.platform is PlatformType.THINQ1

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], device_model: Optional[DeviceModel] = None
    ) -> "Device":
        """Build a Device from a raw device-list entry.

        Missing fields get empty defaults; an unknown platform string is
        treated as the current generation.
        """
        platform = (
            PlatformType.THINQ1
            if str(data.get("platformType", "")).lower() == PlatformType.THINQ1.value
            else PlatformType.THINQ2
        )
        snapshot = data.get("snapshot")
        return cls(
            id=str(data.get("deviceId", "")),
            name=str(data.get("alias") or data.get("deviceId", "")),
            type=_device_type_name(data.get("deviceType")),
            platform=platform,
            model=str(data.get("modelName", "")),
            sales_model=str(data.get("salesModel", "")),
            serial_number=str(data.get("serialNumber", "")),
            online=bool(data.get("online", True)),
            device_model=device_model or DeviceModel(),
            snapshot=dict(snapshot) if isinstance(snapshot, Mapping) else {},
        )
