"""Appliance controllers. Concrete classes are loaded through the device registry."""

from .base import SNAPSHOT_ROOT, BaseDevice

__all__ = ["BaseDevice", "SNAPSHOT_ROOT"]
