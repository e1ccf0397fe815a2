"""Entry point to start the ThinQ bridge.

Usage:
    uv run python scripts/run_bridge.py
    uv run python scripts/run_bridge.py --config ./config.json --debug

Appliances are listed under "devices" in the config file. Each record with a
"deviceType" becomes a controller; its snapshot is read from the named shadow
"{id}" on the bridge thing and refreshed every "refresh_interval" seconds.
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Any

from awsiot import mqtt_connection_builder

from thinqbridge.bridge.config import BridgeConfig, IoTConfig, load_config
from thinqbridge.bridge.fleet import DeviceFleet
from thinqbridge.bridge.transport import ShadowTransport
from thinqbridge.models.device import Device
from thinqbridge.models.device_model import DeviceModel

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_connection(iot: IoTConfig):
    """Create MQTT connection with TLS certificates."""
    return mqtt_connection_builder.mtls_from_path(
        endpoint=iot.endpoint,
        cert_filepath=str(iot.cert_path),
        pri_key_filepath=str(iot.key_path),
        ca_filepath=str(iot.root_ca_path),
        client_id=iot.thing_name,
        clean_session=False,
        keep_alive_secs=30,
    )


def load_device_model(record: dict[str, Any]) -> DeviceModel:
    """Read the model-info document a record points at, if any."""
    path = record.get("model_info")
    if not path:
        return DeviceModel()
    with open(Path(path).expanduser()) as f:
        return DeviceModel(json.load(f))


def devices_from_config(config: BridgeConfig) -> list[Device]:
    devices = []
    for record in config.devices:
        if "deviceType" not in record or "id" not in record:
            continue
        try:
            device_model = load_device_model(record)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring model info for {record['id']}: {e}")
            device_model = DeviceModel()
        devices.append(Device.from_dict({"deviceId": record["id"], **record}, device_model))
    return devices


async def run_refresh_loop(
    fleet: DeviceFleet, interval: float, shutdown_event: asyncio.Event
) -> None:
    """Refresh every device until shutdown is requested."""
    while not shutdown_event.is_set():
        results = await fleet.refresh_all()
        await fleet.keep_monitoring()
        failed = [device_id for device_id, ok in results.items() if not ok]
        if failed:
            logger.warning(f"Refresh failed for: {failed}")
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass


async def main(args: argparse.Namespace) -> int:
    """Main entry point."""
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    if config.iot is None:
        logger.error("No IoT endpoint configured (set iot.endpoint or IOT_ENDPOINT)")
        return 1

    # Validate certificates exist
    try:
        config.iot.validate()
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    connection = create_connection(config.iot)
    try:
        connection.connect().result(timeout=10.0)
    except Exception as e:
        logger.error(f"Failed to connect to AWS IoT Core: {e}")
        return 1
    logger.info(f"Connected to AWS IoT Core: {config.iot.endpoint}")

    transport = ShadowTransport(connection, config.iot.thing_name)
    fleet = DeviceFleet(transport, config)
    await fleet.add_all(devices_from_config(config))
    logger.info(f"Bridge managing {len(fleet)} device(s): {fleet.list_device_ids()}")

    # Set up graceful shutdown
    shutdown_event = asyncio.Event()

    def handle_signal():
        logger.info("Shutdown signal received")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_signal)

    logger.info("Press Ctrl+C to stop")
    await run_refresh_loop(fleet, config.refresh_interval, shutdown_event)

    logger.info("Stopping bridge...")
    try:
        connection.disconnect().result(timeout=5.0)
    except Exception as e:
        logger.warning(f"Error during disconnect: {e}")
    logger.info("Bridge stopped")

    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Start the ThinQ appliance bridge",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to bridge config file (default: ~/.thinqbridge/config.json)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(asyncio.run(main(args)))
