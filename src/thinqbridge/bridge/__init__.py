"""Bridge layer: device type registry, configuration and transport."""

from thinqbridge.bridge.device_registry import DeviceDescriptor, DeviceRegistry, default_registry
from thinqbridge.bridge.config import BridgeConfig, IoTConfig, load_config
from thinqbridge.bridge.transport import ShadowTransport, Transport
from thinqbridge.bridge.fleet import DeviceFleet

__all__ = [
    "BridgeConfig",
    "DeviceDescriptor",
    "DeviceFleet",
    "DeviceRegistry",
    "IoTConfig",
    "ShadowTransport",
    "Transport",
    "default_registry",
    "load_config",
]
