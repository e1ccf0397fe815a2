"""Configuration loader for the ThinQ bridge."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.thinqbridge/config.json"
DEFAULT_THING_NAME = "thinq-bridge"
DEFAULT_REFRESH_INTERVAL = 60.0


@dataclass
class IoTConfig:
    """AWS IoT Core connection used by the shadow transport."""

    endpoint: str
    thing_name: str
    cert_path: Path
    key_path: Path
    root_ca_path: Path

    def validate(self) -> None:
        """Validate that all certificate files exist."""
        for path, name in [
            (self.cert_path, "certificate"),
            (self.key_path, "private key"),
            (self.root_ca_path, "root CA"),
        ]:
            if not path.exists():
                raise FileNotFoundError(f"{name} not found at {path}")


@dataclass
class BridgeConfig:
    """Bridge settings plus per-device user overrides.

    ``devices`` holds one record per configured appliance, matched by its
    ``id``. Records are read on every lookup so edits made at runtime apply
    to the next access.
    """

    devices: list[dict[str, Any]] = field(default_factory=list)
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    iot: Optional[IoTConfig] = None

    def device_config(self, device_id: str) -> dict[str, Any]:
        """Return the user override record for ``device_id``, or {}."""
        for record in self.devices:
            if isinstance(record, dict) and record.get("id") == device_id:
                return dict(record)
        return {}


def _load_iot_config(data: dict[str, Any], config_dir: Path) -> Optional[IoTConfig]:
    endpoint = os.environ.get("IOT_ENDPOINT", data.get("endpoint", ""))
    if not endpoint:
        return None
    thing_name = os.environ.get("IOT_THING_NAME", data.get("thing_name", DEFAULT_THING_NAME))

    # Certificates default to a directory named after the thing
    cert_dir = config_dir / thing_name
    return IoTConfig(
        endpoint=endpoint,
        thing_name=thing_name,
        cert_path=Path(data.get("cert_path", cert_dir / "certificate.pem")).expanduser(),
        key_path=Path(data.get("key_path", cert_dir / "private.key")).expanduser(),
        root_ca_path=Path(data.get("root_ca_path", cert_dir / "AmazonRootCA1.pem")).expanduser(),
    )


def load_config(config_path: Optional[str] = None) -> BridgeConfig:
    """Load bridge configuration from file with environment variable overrides.

    A ``.env`` file next to the config file is loaded first, so the
    variables below can live there.

    Environment variables:
        THINQ_CONFIG_PATH: Override config file location
        IOT_ENDPOINT: Override AWS IoT Core endpoint
        IOT_THING_NAME: Override IoT Thing name

    Args:
        config_path: Path to config JSON file. Defaults to ~/.thinqbridge/config.json

    Returns:
        BridgeConfig with user device overrides and optional IoT settings
    """
    path_str = config_path or os.environ.get("THINQ_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    config_file = Path(path_str).expanduser()

    env_file = config_file.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    if not config_file.exists():
        raise FileNotFoundError(f"Bridge config not found at {config_file}")

    with open(config_file) as f:
        data = json.load(f)

    devices = [record for record in data.get("devices", []) if isinstance(record, dict)]
    iot_data = data.get("iot") or {}

    config = BridgeConfig(
        devices=devices,
        refresh_interval=float(data.get("refresh_interval", DEFAULT_REFRESH_INTERVAL)),
        iot=_load_iot_config(iot_data, config_file.parent),
    )

    logger.info(
        f"Loaded bridge config: {len(devices)} device override(s), "
        f"iot={'enabled' if config.iot else 'disabled'}"
    )
    return config
