"""Exceptions raised by the bridge core."""


class ThinQBridgeError(Exception):
    """Base class for bridge errors."""


class CommunicationError(ThinQBridgeError):
    """A control command could not be delivered to the appliance.

    Raised at the control-dispatch boundary only. The command may or may not
    have reached the device, so callers must report it as a failed command.
    """

    def __init__(self, device_id: str, message: str):
        super().__init__(f"[{device_id}] {message}")
        self.device_id = device_id


class UnsupportedDeviceError(ThinQBridgeError):
    """No implementation exists for a device's type and protocol generation."""

    def __init__(self, device_type: str, platform: str):
        super().__init__(f"Unsupported device type {device_type} ({platform})")
        self.device_type = device_type
        self.platform = platform
