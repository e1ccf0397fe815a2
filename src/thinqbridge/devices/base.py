"""Base device controller shared by every appliance implementation."""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar

from thinqbridge.bridge.config import BridgeConfig
from thinqbridge.bridge.device_registry import DeviceRegistry, default_registry
from thinqbridge.bridge.transport import Transport
from thinqbridge.errors import CommunicationError
from thinqbridge.models.control import ControlPayload, patch_path
from thinqbridge.models.device import Device
from thinqbridge.status.base import BaseStatus

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseStatus)

# Pass as the snapshot key to build a status view over the whole snapshot
SNAPSHOT_ROOT = ""


class BaseDevice(ABC):
    """Controller for one appliance accessory.

    Owns the device's snapshot. Remote updates come in through
    attach_snapshot() and commands go out through dispatch_control(); both
    bump ``snapshot_version``, which is the only thing the status cache
    checks. A status view is never served from an older snapshot.
    """

    def __init__(
        self,
        device: Device,
        transport: Transport,
        config: Optional[BridgeConfig] = None,
        registry: Optional[DeviceRegistry] = None,
    ):
        """Initialize the controller.

        Args:
            device: Device record, including its initial snapshot
            transport: Client used to fetch snapshots and send commands
            config: Bridge configuration holding per-device user overrides
            registry: Device type registry, defaults to the built-in table
        """
        self._device = device
        self._transport = transport
        self._config = config or BridgeConfig()
        self._registry = registry or default_registry
        self._snapshot_version = 0
        self._cached_status: Optional[BaseStatus] = None
        self._cached_status_version: Optional[int] = None
        self._cached_status_key: Optional[str] = None

    @property
    def device(self) -> Device:
        return self._device

    @property
    def snapshot_version(self) -> int:
        return self._snapshot_version

    @property
    def effective_config(self) -> dict[str, Any]:
        """Type defaults overlaid with the user's record for this device.

        Recomputed on every access; user configuration can change at runtime.
        """
        defaults = self._registry.config_defaults(self._device.type)
        user_config = self._config.device_config(self._device.id)
        return {**defaults, **user_config}

    @property
    def information(self) -> dict[str, str]:
        """Accessory information service values."""
        return {
            "manufacturer": "LG",
            "model": self._device.sales_model or self._device.model or "Unknown",
            "serial_number": (
                self.effective_config.get("serial_number")
                or self._device.serial_number
                or "Unknown"
            ),
        }

    def attach_snapshot(self, device: Device) -> None:
        """Replace the held device and its snapshot wholesale."""
        self._device = device
        self._snapshot_version += 1

    def update(self, snapshot: dict[str, Any]) -> None:
        """Merge a partial snapshot pushed by the vendor into the current one."""
        logger.debug(f"[{self._device.name}] Received snapshot: {snapshot}")
        merged = {**self._device.snapshot, **snapshot}
        self.attach_snapshot(dataclasses.replace(self._device, snapshot=merged))

    async def refresh(self) -> None:
        """Pull a full snapshot from the transport and attach it."""
        snapshot = await self._transport.fetch_snapshot(self._device.id)
        self.attach_snapshot(dataclasses.replace(self._device, snapshot=snapshot))

    def invalidate_status_cache(self) -> None:
        """Force the next get_status() to rebuild its view."""
        self._snapshot_version += 1

    def _status_data(self, key: str) -> Any:
        snapshot = self._device.snapshot
        if key == SNAPSHOT_ROOT:
            return snapshot
        return snapshot.get(key) if isinstance(snapshot, dict) else None

    def get_status(self, status_cls: type[S], key: Optional[str] = None) -> S:
        """Return the status view for the current snapshot version.

        Args:
            status_cls: Status view class to build
            key: Snapshot sub-tree to project; defaults to the registry's
                key for this device type, SNAPSHOT_ROOT for the whole snapshot

        Returns:
            The cached view when it was built at the current version,
            otherwise a new one
        """
        if key is None:
            key = self._registry.snapshot_key(self._device.type) or SNAPSHOT_ROOT

        cached = self._cached_status
        if (
            cached is not None
            and self._cached_status_version == self._snapshot_version
            and self._cached_status_key == key
            and type(cached) is status_cls
        ):
            return cached

        status = status_cls(self._status_data(key), self._device.device_model)
        self._cached_status = status
        self._cached_status_version = self._snapshot_version
        self._cached_status_key = key
        return status

    async def dispatch_control(
        self, payload: ControlPayload, update_snapshot: bool = True
    ) -> bool:
        """Send a control payload to the appliance.

        When the transport accepts a key/value payload, the local snapshot is
        patched at that key right away instead of waiting for the next
        snapshot. The next real snapshot overwrites the guess.

        Args:
            payload: Key/value or structured control payload
            update_snapshot: Patch the local snapshot on success

        Returns:
            True if the transport accepted the command

        Raises:
            CommunicationError: if the transport failed
        """
        device = self._device
        try:
            accepted = await self._transport.send_control(device.id, payload)
        except Exception as e:
            logger.error(f"[{device.name}] Device control failed: {type(e).__name__}: {e}")
            raise CommunicationError(device.id, f"device control failed: {e}") from e

        if not accepted:
            logger.warning(f"[{device.name}] Device control rejected: {payload.to_dict()}")
            return False

        if update_snapshot and payload.is_simple:
            patch_path(self._device.snapshot, payload.data_key, payload.data_value)
            self._snapshot_version += 1
            logger.debug(f"[{device.name}] Patched {payload.data_key}={payload.data_value!r}")
        return True

    async def set_device_control(
        self, key: str, value: Any, update_snapshot: bool = True
    ) -> bool:
        """Set one value by its dot path, e.g. ``airState.operation``."""
        return await self.dispatch_control(ControlPayload.set_value(key, value), update_snapshot)

    async def set_boolean_control(self, key: str, value: Any) -> bool:
        """Set a flag using the device's 0/1 convention."""
        return await self.set_device_control(key, 1 if value else 0)

    def has_model_feature(self, name: str) -> bool:
        """Check whether this hardware model supports an optional feature.

        Table entries are base model names, so regional variants such as
        ``RAC_056905_WW`` match ``RAC_056905``.
        """
        models = self._registry.model_features(self._device.type).get(name, ())
        return any(
            candidate.startswith(model)
            for candidate in (self._device.model, self._device.sales_model)
            if candidate
            for model in models
        )

    @abstractmethod
    def characteristics(self) -> dict[str, Any]:
        """Current typed values for the accessory's characteristics."""
