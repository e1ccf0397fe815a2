"""Device type registry: maps a ThinQ device type to its implementation."""

import importlib
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Optional

from thinqbridge.constants import AC_MODEL_FEATURES, Category, PlatformType
from thinqbridge.models.device import Device

if TYPE_CHECKING:
    from thinqbridge.devices.base import BaseDevice

logger = logging.getLogger(__name__)

_WASHER_DEFAULTS = {
    "washer_trigger": False,
    "washer_door_lock": False,
    "washer_tub_clean": False,
}


@dataclass(frozen=True)
class DeviceDescriptor:
    """Everything the bridge needs to know about one device type.

    Implementations are import references (``"package.module:Class"``) so a
    device class is only imported once a device of that type shows up.
    ``None`` means the type has no implementation for that protocol generation.
    """

    type: str
    homekit_category: int
    v2_implementation: Optional[str] = None
    v1_implementation: Optional[str] = None
    snapshot_key: Optional[str] = None
    config_defaults: Mapping[str, Any] = field(default_factory=dict)
    model_features: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


DEVICE_DESCRIPTORS: tuple[DeviceDescriptor, ...] = (
    DeviceDescriptor(
        type="AERO_TOWER",
        homekit_category=Category.AIR_PURIFIER,
        v2_implementation="thinqbridge.devices.air_purifier:AeroTower",
        snapshot_key="airState",
        config_defaults={"air_fast_mode": False},
    ),
    DeviceDescriptor(
        type="AIR_PURIFIER",
        homekit_category=Category.AIR_PURIFIER,
        v2_implementation="thinqbridge.devices.air_purifier:AirPurifier",
        v1_implementation="thinqbridge.devices.legacy:LegacyAirPurifier",
        snapshot_key="airState",
        config_defaults={"air_fast_mode": False},
    ),
    DeviceDescriptor(
        type="REFRIGERATOR",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.refrigerator:Refrigerator",
        v1_implementation="thinqbridge.devices.legacy:LegacyRefrigerator",
        snapshot_key="refState",
        config_defaults={
            "ref_express_freezer": False,
            "ref_express_fridge": False,
            "ref_eco_friendly": False,
        },
    ),
    DeviceDescriptor(
        type="WASHER",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.washer_dryer:WasherDryer",
        v1_implementation="thinqbridge.devices.legacy:LegacyWasher",
        snapshot_key="washerDryer",
        config_defaults=_WASHER_DEFAULTS,
    ),
    DeviceDescriptor(
        type="WASHER_NEW",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.washer_dryer:WasherDryer",
        snapshot_key="washerDryer",
        config_defaults=_WASHER_DEFAULTS,
    ),
    DeviceDescriptor(
        type="WASH_TOWER",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.washer_dryer:WasherDryer",
        snapshot_key="washerDryer",
        config_defaults=_WASHER_DEFAULTS,
    ),
    DeviceDescriptor(
        type="WASH_TOWER_2",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.washer_dryer:WashTower",
        snapshot_key="washerDryer",
        config_defaults=_WASHER_DEFAULTS,
    ),
    DeviceDescriptor(
        type="DRYER",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.washer_dryer:WasherDryer",
        v1_implementation="thinqbridge.devices.legacy:LegacyWasher",
        snapshot_key="washerDryer",
        config_defaults=_WASHER_DEFAULTS,
    ),
    DeviceDescriptor(
        type="DISHWASHER",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.dishwasher:Dishwasher",
        snapshot_key="dishwasher",
        config_defaults={"dishwasher_trigger": False},
    ),
    DeviceDescriptor(
        type="DEHUMIDIFIER",
        homekit_category=Category.AIR_DEHUMIDIFIER,
        v2_implementation="thinqbridge.devices.dehumidifier:Dehumidifier",
        snapshot_key="dehumidifierState",
    ),
    DeviceDescriptor(
        type="AC",
        homekit_category=Category.AIR_CONDITIONER,
        v2_implementation="thinqbridge.devices.air_conditioner:AirConditioner",
        v1_implementation="thinqbridge.devices.legacy:LegacyAirConditioner",
        snapshot_key="airState",
        config_defaults={
            "ac_swing_mode": "BOTH",
            "ac_air_quality": False,
            "ac_mode": "BOTH",
            "ac_temperature_sensor": False,
            "ac_humidity_sensor": False,
            "ac_led_control": False,
            "ac_fan_control": False,
            "ac_jet_control": False,
            "ac_temperature_unit": "C",
            "ac_buttons": (),
            "ac_air_clean": True,
            "ac_energy_save": True,
        },
        model_features=AC_MODEL_FEATURES,
    ),
    DeviceDescriptor(
        type="STYLER",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.styler:Styler",
        snapshot_key="styler",
    ),
    DeviceDescriptor(
        type="HOOD",
        homekit_category=Category.OTHER,
        v2_implementation="thinqbridge.devices.range_hood:RangeHood",
        v1_implementation="thinqbridge.devices.legacy:LegacyRangeHood",
        snapshot_key="hoodState",
    ),
    DeviceDescriptor(
        type="MICROWAVE",
        homekit_category=Category.THERMOSTAT,
        v2_implementation="thinqbridge.devices.microwave:Microwave",
        snapshot_key="microwaveState",
    ),
    DeviceDescriptor(
        type="OVEN",
        homekit_category=Category.THERMOSTAT,
        v2_implementation="thinqbridge.devices.oven:Oven",
        snapshot_key="ovenState",
    ),
)

# Known ThinQ device types the bridge deliberately does not expose
UNSUPPORTED_DEVICE_TYPES: Mapping[str, str] = MappingProxyType({
    "KIMCHI_REFRIGERATOR": "no public snapshot layout",
    "WATER_PURIFIER": "read-only usage counters, no accessory mapping",
    "COOKTOP": "remote control of burners is not allowed by the vendor",
    "ROBOT_KING": "vacuums report over a separate robot API",
    "TV": "served by the webOS TV integration",
    "BOILER": "no accessory mapping",
    "SPEAKER": "no accessory mapping",
    "HOMEVU": "no accessory mapping",
    "ARCH": "no accessory mapping",
    "MISSG": "no accessory mapping",
    "SENSOR": "no accessory mapping",
    "SOLAR_SENSOR": "no accessory mapping",
    "IOT_LIGHTING": "ThinQ IoT accessories use a different cloud API",
    "IOT_MOTION_SENSOR": "ThinQ IoT accessories use a different cloud API",
    "IOT_SMART_PLUG": "ThinQ IoT accessories use a different cloud API",
    "IOT_DUST_SENSOR": "ThinQ IoT accessories use a different cloud API",
    "EMS_AIR_STATION": "no accessory mapping",
    "AIR_SENSOR": "no accessory mapping",
    "PURICARE_AIR_DETECTOR": "no accessory mapping",
    "V2PHONE": "not an appliance",
    "HOMEROBOT": "not an appliance",
})


class DeviceRegistry:
    """Registry of supported device types.

    One descriptor per type. Adding an appliance type is a table edit; the
    legacy vs current protocol choice happens only in resolve_implementation().
    """

    def __init__(self, descriptors: Optional[Iterable[DeviceDescriptor]] = None):
        self._descriptors: dict[str, DeviceDescriptor] = {}
        self._loaded: dict[str, type["BaseDevice"]] = {}
        for descriptor in DEVICE_DESCRIPTORS if descriptors is None else descriptors:
            if descriptor.type in self._descriptors:
                raise ValueError(f"Device type already registered: {descriptor.type}")
            self._descriptors[descriptor.type] = descriptor

    def descriptor(self, device_type: str) -> Optional[DeviceDescriptor]:
        return self._descriptors.get(device_type)

    def _load(self, reference: str) -> type["BaseDevice"]:
        """Import an implementation class, once."""
        cls = self._loaded.get(reference)
        if cls is None:
            module_name, _, class_name = reference.partition(":")
            module = importlib.import_module(module_name)
            cls = getattr(module, class_name)
            self._loaded[reference] = cls
            logger.debug(f"Loaded device implementation {reference}")
        return cls

    async def resolve_implementation(self, device: Device) -> Optional[type["BaseDevice"]]:
        """Return the controller class for ``device``, or None if unsupported.

        Legacy (ThinQ1) devices get the v1 implementation when the type has
        one; everything else gets v2.
        """
        descriptor = self._descriptors.get(device.type)
        if descriptor is None:
            return None

        if device.platform is PlatformType.THINQ1 and descriptor.v1_implementation:
            reference: Optional[str] = descriptor.v1_implementation
        else:
            reference = descriptor.v2_implementation

        if reference is None:
            return None
        return self._load(reference)

    def category(self, device: Device) -> int:
        descriptor = self._descriptors.get(device.type)
        if descriptor is None:
            return Category.OTHER
        return descriptor.homekit_category

    def config_defaults(self, device_type: str) -> dict[str, Any]:
        descriptor = self._descriptors.get(device_type)
        if descriptor is None:
            return {}
        return dict(descriptor.config_defaults)

    def snapshot_key(self, device_type: str) -> Optional[str]:
        descriptor = self._descriptors.get(device_type)
        return descriptor.snapshot_key if descriptor else None

    def model_features(self, device_type: str) -> Mapping[str, tuple[str, ...]]:
        descriptor = self._descriptors.get(device_type)
        return descriptor.model_features if descriptor else {}

    def is_supported(self, device_type: str) -> bool:
        return device_type in self._descriptors

    def supported_types(self) -> set[str]:
        return set(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, device_type: str) -> bool:
        return device_type in self._descriptors


default_registry = DeviceRegistry()
