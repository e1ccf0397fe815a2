"""Device records, schema objects and control payloads."""

from thinqbridge.models.control import ControlPayload, patch_path
from thinqbridge.models.device import Device
from thinqbridge.models.device_model import DeviceModel, ModelValue, ValueType

__all__ = ["ControlPayload", "Device", "DeviceModel", "ModelValue", "ValueType", "patch_path"]
