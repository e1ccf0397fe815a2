"""Range hood support: a vent fan and a lamp."""

from typing import Any, Optional

from thinqbridge.constants import LAMP_HIGH, LAMP_OFF
from thinqbridge.devices.base import BaseDevice
from thinqbridge.models.control import ControlPayload
from thinqbridge.models.device_model import ModelValue, ValueType
from thinqbridge.status.base import BaseStatus


class RangeHoodStatus(BaseStatus):
    @property
    def is_vent_on(self) -> bool:
        return self.is_enabled("ventSet", "VentSet")

    @property
    def is_lamp_on(self) -> bool:
        return self.is_enabled("lampSet", "LampSet")

    @property
    def vent_level(self) -> int:
        return self.get_int("ventLevel")

    @property
    def lamp_level(self) -> int:
        return self.get_int("lampLevel")


class RangeHood(BaseDevice):
    @property
    def status(self) -> RangeHoodStatus:
        return self.get_status(RangeHoodStatus)

    def _range(self, name: str) -> Optional[ModelValue]:
        spec = self.device.device_model.value(name)
        if spec is None or spec.type is not ValueType.RANGE:
            return None
        return spec

    @property
    def vent_range(self) -> Optional[ModelValue]:
        """Rotation speed bounds for the vent, if the model declares them."""
        return self._range("VentLevel")

    @property
    def lamp_range(self) -> Optional[ModelValue]:
        return self._range("LampLevel")

    async def set_hood_active(self, value: Any) -> bool:
        return await self.set_hood_rotation_speed(1 if value else 0)

    async def set_hood_rotation_speed(self, value: int) -> bool:
        return await self.dispatch_control(
            ControlPayload.set_list({"hoodState": {"ventLevel": int(value)}})
        )

    async def set_lamp_active(self, value: Any) -> bool:
        return await self.set_lamp_brightness(LAMP_HIGH if value else LAMP_OFF)

    async def set_lamp_brightness(self, value: int) -> bool:
        return await self.dispatch_control(
            ControlPayload.set_list({"hoodState": {"lampLevel": int(value)}})
        )

    def characteristics(self) -> dict[str, Any]:
        status = self.status
        return {
            "vent_on": status.is_vent_on,
            "vent_rotation_speed": status.vent_level,
            "lamp_on": status.is_lamp_on,
            "lamp_brightness": status.lamp_level,
        }
