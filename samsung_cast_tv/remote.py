"""Samsung TV remote control link.

The remote protocol is stateless: an alive check and a single key send per
request. ``SamsungRemote`` adapts the blocking ``samsungtvws`` client to
asyncio, ``SimpleRemoteLink`` puts the error contract on top of any
``RemoteTransport``.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Protocol

from samsungtvws import SamsungTVWS

from .config import DEFAULT_REMOTE_NAME, DEFAULT_SAMSUNG_PORT
from .exceptions import TransportError
from .executor import run_blocking
from .keys import KEY_POWEROFF, KEY_POWERON

_LOGGER = logging.getLogger(__name__)


class RemoteTransport(Protocol):
    """Request/response remote-control transport."""

    async def async_check_alive(self, timeout: float) -> None:
        """Return if the TV answers within timeout, raise otherwise."""

    async def async_send(self, key: str) -> None:
        """Send a single key, raise unless the TV acknowledged it."""


class SamsungRemote:
    """Async wrapper around the Samsung websocket/REST remote API.

    All blocking operations are run in a thread pool executor.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_SAMSUNG_PORT,
        timeout: float = 1.0,
        name: str = DEFAULT_REMOTE_NAME,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """Initialize the remote.

        Args:
            host: TV IP address
            port: Remote API port (default 8001)
            timeout: Request timeout in seconds
            name: Name the remote registers with on the TV
            executor: Custom ThreadPoolExecutor (uses default if None)
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self.name = name
        self._executor = executor
        # Created lazily in the executor, SamsungTVWS may touch the network
        self._client: Optional[SamsungTVWS] = None

    def _create_client(self, timeout: float) -> SamsungTVWS:
        # Sequencing owns inter-key delays, so the client must not add its own.
        return SamsungTVWS(
            host=self.host,
            port=self.port,
            timeout=timeout,
            key_press_delay=0,
            name=self.name,
        )

    def _ensure_client(self) -> SamsungTVWS:
        if self._client is None:
            self._client = self._create_client(self.timeout)
        return self._client

    async def async_check_alive(self, timeout: Optional[float] = None) -> None:
        """Query device info over REST; raises if the TV does not answer."""
        def _check():
            self._create_client(timeout or self.timeout).rest_device_info()

        await run_blocking(_check, executor=self._executor)

    async def async_send(self, key: str) -> None:
        """Send a key press over the websocket remote channel."""
        def _send():
            try:
                self._ensure_client().send_key(key)
            except Exception:
                # Drop the connection so the next key reconnects.
                client, self._client = self._client, None
                if client is not None:
                    client.close()
                raise

        await run_blocking(_send, executor=self._executor)

    async def async_close(self) -> None:
        """Close the websocket connection if one is open."""
        if self._client is not None:
            client, self._client = self._client, None
            await run_blocking(client.close, executor=self._executor)


class SimpleRemoteLink:
    """Primary link: stateless alive check and fire-and-forget key send.

    No retries happen here, retry policy belongs to the callers.
    """

    def __init__(self, transport: RemoteTransport, timeout: float = 1.0):
        self._transport = transport
        self.timeout = timeout

    async def async_check_alive(self) -> bool:
        """Return whether the TV is reachable. Never raises."""
        try:
            await self._transport.async_check_alive(self.timeout)
        except Exception as err:
            _LOGGER.debug("TV is offline: %s", err)
            return False
        _LOGGER.debug("TV is alive.")
        return True

    async def async_send_key(self, key: str) -> None:
        """Send one key.

        Raises:
            TransportError: The TV did not acknowledge the key
        """
        try:
            await self._transport.async_send(key)
        except Exception as err:
            _LOGGER.debug("Could not send key %s: %s", key, err)
            raise TransportError(f"Could not send key {key}: {err}") from err
        _LOGGER.debug("Sent key %s", key)

    async def async_power_on(self) -> None:
        await self.async_send_key(KEY_POWERON)

    async def async_power_off(self) -> None:
        await self.async_send_key(KEY_POWEROFF)
