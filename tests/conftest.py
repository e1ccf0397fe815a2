"""Shared fixtures for bridge tests."""

import sys
from pathlib import Path

import pytest

from thinqbridge.bridge.config import BridgeConfig
from thinqbridge.constants import PlatformType
from thinqbridge.models.device import Device
from thinqbridge.models.device_model import DeviceModel

sys.path.insert(0, str(Path(__file__).parent))
from mocks.mock_transport import MockTransport  # noqa: E402


@pytest.fixture
def transport():
    """Return an in-memory transport that accepts every command."""
    return MockTransport()


@pytest.fixture
def bridge_config():
    """Return an empty bridge config; tests append device records to it."""
    return BridgeConfig()


@pytest.fixture
def make_device():
    """Build a Device record with sensible test defaults."""

    def _make(
        device_type: str = "AC",
        snapshot=None,
        device_id: str = "device-1",
        platform: PlatformType = PlatformType.THINQ2,
        model: str = "TEST_MODEL",
        device_model=None,
        **kwargs,
    ) -> Device:
        return Device(
            id=device_id,
            name=kwargs.pop("name", f"Test {device_type}"),
            type=device_type,
            platform=platform,
            model=model,
            device_model=device_model or DeviceModel(),
            snapshot=snapshot if snapshot is not None else {},
            **kwargs,
        )

    return _make


@pytest.fixture
def hood_model():
    """Model info for a range hood with coded enable values."""
    return DeviceModel(
        {
            "Info": {"modelType": "HOOD"},
            "MonitoringValue": {
                "VentSet": {
                    "dataType": "enum",
                    "valueMapping": {
                        "ENABLE": {"index": "1", "label": "@CP_ENABLE_W"},
                        "DISABLE": {"index": "0", "label": "@CP_DISABLE_W"},
                    },
                },
                "LampSet": {
                    "dataType": "enum",
                    "valueMapping": {
                        "ENABLE": {"index": "1", "label": "@CP_ENABLE_W"},
                        "DISABLE": {"index": "0", "label": "@CP_DISABLE_W"},
                    },
                },
                "VentLevel": {
                    "dataType": "range",
                    "valueMapping": {"min": 0, "max": 5, "step": 1},
                },
                "LampLevel": {
                    "dataType": "range",
                    "valueMapping": {"min": 0, "max": 2},
                },
            },
        }
    )
