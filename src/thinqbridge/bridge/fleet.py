"""Fleet of device controllers, keyed by ThinQ device id."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from thinqbridge.bridge.config import BridgeConfig
from thinqbridge.bridge.device_registry import DeviceRegistry, default_registry
from thinqbridge.bridge.transport import Transport
from thinqbridge.errors import UnsupportedDeviceError
from thinqbridge.models.device import Device

if TYPE_CHECKING:
    from thinqbridge.devices.base import BaseDevice

logger = logging.getLogger(__name__)


class DeviceFleet:
    """Holds one controller per supported appliance.

    Devices whose type has no implementation are dropped at add() time, so
    everything in the fleet can be refreshed and controlled.
    """

    def __init__(
        self,
        transport: Transport,
        config: Optional[BridgeConfig] = None,
        registry: Optional[DeviceRegistry] = None,
    ):
        self._transport = transport
        self._config = config or BridgeConfig()
        self._registry = registry or default_registry
        self._controllers: dict[str, "BaseDevice"] = {}

    @property
    def registry(self) -> DeviceRegistry:
        return self._registry

    async def add(self, device: Device, strict: bool = False) -> Optional["BaseDevice"]:
        """Create and hold the controller for ``device``.

        Args:
            device: Device record from the vendor's device list
            strict: Raise instead of skipping unsupported devices

        Returns:
            The new controller, or None if the device was skipped

        Raises:
            ValueError: If a device with the same ID is already held
            UnsupportedDeviceError: If strict and the device is unsupported
        """
        if device.id in self._controllers:
            raise ValueError(f"Device already registered: {device.id}")

        implementation = await self._registry.resolve_implementation(device)
        if implementation is None:
            if strict:
                raise UnsupportedDeviceError(device.type, device.platform.value)
            logger.warning(
                f"Skipping unsupported device {device.name} "
                f"(type={device.type}, platform={device.platform.value})"
            )
            return None

        controller = implementation(device, self._transport, self._config, self._registry)
        self._controllers[device.id] = controller
        logger.info(f"Added {implementation.__name__} for {device.name} ({device.id})")
        return controller

    async def add_all(self, devices: list[Device]) -> list["BaseDevice"]:
        """Add every supported device, skipping ones that fail to set up."""
        added = []
        for device in devices:
            try:
                controller = await self.add(device)
            except Exception as e:
                logger.error(f"Failed to set up {device.name}: {type(e).__name__}: {e}")
                continue
            if controller is not None:
                added.append(controller)
        return added

    def remove(self, device_id: str) -> Optional["BaseDevice"]:
        return self._controllers.pop(device_id, None)

    def get(self, device_id: str) -> Optional["BaseDevice"]:
        return self._controllers.get(device_id)

    def get_all(self) -> dict[str, "BaseDevice"]:
        return dict(self._controllers)

    def list_device_ids(self) -> list[str]:
        return list(self._controllers.keys())

    def update(self, device_id: str, snapshot: dict[str, Any]) -> bool:
        """Merge a pushed partial snapshot into one device.

        Returns:
            False if the device is not in the fleet
        """
        controller = self._controllers.get(device_id)
        if controller is None:
            logger.debug(f"Ignoring update for unknown device {device_id}")
            return False
        controller.update(snapshot)
        return True

    async def refresh(self, device_id: str) -> None:
        """Pull and attach a fresh snapshot for one device.

        Raises:
            KeyError: If the device is not in the fleet
            CommunicationError: If the transport fails
        """
        controller = self._controllers.get(device_id)
        if controller is None:
            raise KeyError(device_id)
        await controller.refresh()

    async def refresh_all(self) -> dict[str, bool]:
        """Refresh every device; one failing device does not stop the rest.

        Returns:
            Mapping of device id to whether its refresh succeeded
        """
        results = {}
        for device_id, controller in list(self._controllers.items()):
            try:
                await controller.refresh()
                results[device_id] = True
            except Exception as e:
                logger.warning(f"Failed to refresh {controller.device.name}: {e}")
                results[device_id] = False
        return results

    async def keep_monitoring(self) -> None:
        """Extend the monitoring window of devices that need it."""
        for controller in list(self._controllers.values()):
            keep_monitoring = getattr(controller, "keep_monitoring", None)
            if keep_monitoring is None:
                continue
            try:
                await keep_monitoring()
            except Exception as e:
                logger.warning(f"Keep-alive failed for {controller.device.name}: {e}")

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, device_id: str) -> bool:
        return device_id in self._controllers
