"""Transport collaborators: where snapshots come from and commands go to."""

import asyncio
import concurrent.futures
import logging
from typing import Any, Optional, Protocol

from awscrt.mqtt import Connection, QoS
from awsiot import iotshadow

from thinqbridge.errors import CommunicationError
from thinqbridge.models.control import ControlPayload

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 5.0


class Transport(Protocol):
    """What a device controller needs from the vendor client.

    Both calls raise on network or protocol failure.
    """

    async def fetch_snapshot(self, device_id: str) -> dict[str, Any]:
        ...

    async def send_control(self, device_id: str, payload: ControlPayload) -> bool:
        ...


class ShadowTransport:
    """Transport over AWS IoT Device Shadows.

    Each appliance has a named shadow (named after its device id) on the
    bridge's thing. The appliance side reports its snapshot as the shadow's
    ``reported`` document; commands are published as ``desired`` documents.
    """

    def __init__(self, connection: Connection, thing_name: str):
        """Initialize the transport.

        Args:
            connection: MQTT connection to AWS IoT Core
            thing_name: IoT Thing holding one named shadow per appliance
        """
        self._connection = connection
        self._thing_name = thing_name
        self._shadow_client: Optional[iotshadow.IotShadowClient] = None
        self._versions: dict[str, int] = {}
        self._subscribed: set[str] = set()
        self._pending: dict[str, asyncio.Future] = {}

    def _get_client(self) -> iotshadow.IotShadowClient:
        """Lazily create the shadow client."""
        if self._shadow_client is None:
            self._shadow_client = iotshadow.IotShadowClient(self._connection)
        return self._shadow_client

    def version(self, device_id: str) -> Optional[int]:
        """Last shadow version seen for ``device_id``."""
        return self._versions.get(device_id)

    @staticmethod
    async def _wait(future: concurrent.futures.Future) -> Any:
        """Await an SDK future without blocking the event loop."""
        return await asyncio.wait_for(asyncio.wrap_future(future), timeout=REQUEST_TIMEOUT)

    def _settle(
        self,
        device_id: str,
        snapshot: Optional[dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Resolve the get request in flight for ``device_id``, if any."""
        pending = self._pending.get(device_id)
        if pending is None or pending.done():
            return
        if error is not None:
            pending.set_exception(error)
        else:
            pending.set_result(snapshot)

    async def _subscribe(self, device_id: str) -> None:
        """Subscribe to the get/accepted and get/rejected topics of a shadow once."""
        if device_id in self._subscribed:
            return

        loop = asyncio.get_running_loop()

        def on_accepted(response: iotshadow.GetShadowResponse):
            if response.version:
                self._versions[device_id] = response.version
            reported = response.state.reported if response.state else None
            loop.call_soon_threadsafe(self._settle, device_id, dict(reported or {}))

        def on_rejected(response: iotshadow.ErrorResponse):
            logger.warning(f"Get shadow rejected for {device_id}: {response.message}")
            error = CommunicationError(device_id, f"shadow rejected: {response.message}")
            loop.call_soon_threadsafe(self._settle, device_id, None, error)

        client = self._get_client()
        subscription = iotshadow.GetNamedShadowSubscriptionRequest(
            thing_name=self._thing_name, shadow_name=device_id
        )

        accepted_future, _ = client.subscribe_to_get_named_shadow_accepted(
            request=subscription,
            qos=QoS.AT_LEAST_ONCE,
            callback=on_accepted,
        )
        await self._wait(accepted_future)

        rejected_future, _ = client.subscribe_to_get_named_shadow_rejected(
            request=subscription,
            qos=QoS.AT_LEAST_ONCE,
            callback=on_rejected,
        )
        await self._wait(rejected_future)

        self._subscribed.add(device_id)
        logger.debug(f"Subscribed to get responses for shadow {device_id}")

    async def fetch_snapshot(self, device_id: str) -> dict[str, Any]:
        """Read the reported document of the appliance's shadow.

        Raises:
            CommunicationError: if the request is rejected or times out
        """
        pending: asyncio.Future = asyncio.get_running_loop().create_future()
        try:
            await self._subscribe(device_id)

            # a newer request supersedes an older one still waiting
            self._pending[device_id] = pending
            request = iotshadow.GetNamedShadowRequest(
                thing_name=self._thing_name, shadow_name=device_id
            )
            publish_future = self._get_client().publish_get_named_shadow(
                request, qos=QoS.AT_LEAST_ONCE
            )
            await self._wait(publish_future)

            snapshot = await asyncio.wait_for(pending, timeout=REQUEST_TIMEOUT)
        except CommunicationError:
            raise
        except Exception as e:
            raise CommunicationError(
                device_id, f"failed to fetch snapshot: {type(e).__name__}: {e}"
            ) from e
        finally:
            if self._pending.get(device_id) is pending:
                del self._pending[device_id]

        logger.debug(f"Fetched snapshot for {device_id}: {snapshot}")
        return snapshot

    async def send_control(self, device_id: str, payload: ControlPayload) -> bool:
        """Publish ``payload`` as the desired state of the appliance's shadow.

        Returns:
            True once the update is accepted by IoT Core

        Raises:
            CommunicationError: if publishing fails
        """
        document = payload.as_document()
        if not document:
            logger.warning(f"Ignoring empty control payload for {device_id}")
            return False

        try:
            client = self._get_client()
            request = iotshadow.UpdateNamedShadowRequest(
                thing_name=self._thing_name,
                shadow_name=device_id,
                state=iotshadow.ShadowState(desired=document),
            )
            future = client.publish_update_named_shadow(request, qos=QoS.AT_LEAST_ONCE)
            await self._wait(future)
        except Exception as e:
            raise CommunicationError(
                device_id, f"failed to send control: {type(e).__name__}: {e}"
            ) from e

        logger.debug(f"Sent control to {device_id}: {document}")
        return True
