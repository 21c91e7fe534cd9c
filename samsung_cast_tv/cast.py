"""Chromecast receiver session link.

``CastReceiver`` adapts the blocking ``pychromecast`` client to asyncio.
``SessionedLink`` owns the connection state machine and fails fast on any
volume or launch request while not connected.
"""

import asyncio
import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Protocol

import pychromecast
from pychromecast.socket_client import (
    CONNECTION_STATUS_FAILED,
    CONNECTION_STATUS_LOST,
    ConnectionStatus,
    ConnectionStatusListener,
)

from .config import DEFAULT_CAST_PORT, DEFAULT_RECEIVER_APP_ID, VOLUME_MAX, VOLUME_MIN
from .exceptions import (
    ConnectError,
    LaunchError,
    NotConnectedError,
    TransportError,
    ValidationError,
)
from .executor import run_blocking

_LOGGER = logging.getLogger(__name__)

ErrorCallback = Callable[[Exception], None]


class ConnectionState(enum.Enum):
    """Receiver session state."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ReceiverTransport(Protocol):
    """Stateful streaming-receiver transport."""

    async def async_connect(self, host: str, on_error: ErrorCallback) -> None:
        """Open the session. on_error fires on the event loop for later failures."""

    async def async_launch(self, app_id: str) -> None:
        """Foreground the given receiver application."""

    async def async_get_volume(self) -> float:
        """Return the receiver volume level in [0.0, 1.0]."""

    async def async_set_volume(self, level: float) -> float:
        """Set the volume level, return the level the receiver settled on."""

    async def async_close(self) -> None:
        """Tear the session down."""


class _ErrorForwarder(ConnectionStatusListener):
    """Hands pychromecast connection failures back to the event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop, on_error: ErrorCallback):
        self._loop = loop
        self._on_error = on_error

    def new_connection_status(self, status: ConnectionStatus) -> None:
        if status.status in (CONNECTION_STATUS_LOST, CONNECTION_STATUS_FAILED):
            err = ConnectionError(f"Chromecast connection {status.status.lower()}")
            self._loop.call_soon_threadsafe(self._on_error, err)


class CastReceiver:
    """Async wrapper for a single Chromecast.

    All blocking operations are run in a thread pool executor.
    """

    def __init__(
        self,
        port: int = DEFAULT_CAST_PORT,
        timeout: float = 10.0,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """Initialize the receiver.

        Args:
            port: Cast control port (default 8009)
            timeout: Connect and request timeout in seconds
            executor: Custom ThreadPoolExecutor (uses default if None)
        """
        self.port = port
        self.timeout = timeout
        self._executor = executor
        self._cast: Optional[pychromecast.Chromecast] = None

    def _require_cast(self) -> pychromecast.Chromecast:
        if self._cast is None:
            raise ConnectionError("Chromecast session is not open")
        return self._cast

    async def async_connect(self, host: str, on_error: ErrorCallback) -> None:
        """Open a new session, closing any previous one first."""
        await self.async_close()
        loop = asyncio.get_running_loop()

        def _connect():
            cast = pychromecast.get_chromecast_from_host(
                (host, self.port, None, None, None),
                tries=1,
                timeout=self.timeout,
            )
            try:
                cast.socket_client.register_connection_listener(_ErrorForwarder(loop, on_error))
                cast.wait(timeout=self.timeout)
            except Exception:
                cast.disconnect(timeout=self.timeout)
                raise
            return cast

        self._cast = await run_blocking(_connect, executor=self._executor)

    async def async_launch(self, app_id: str) -> None:
        cast = self._require_cast()
        await run_blocking(cast.start_app, app_id, timeout=self.timeout, executor=self._executor)
        _LOGGER.debug('App "%s" launched', cast.app_display_name)

    async def async_get_volume(self) -> float:
        status = self._require_cast().status
        if status is None:
            raise ConnectionError("No receiver status received yet")
        return status.volume_level

    async def async_set_volume(self, level: float) -> float:
        cast = self._require_cast()
        return await run_blocking(cast.set_volume, level, timeout=self.timeout, executor=self._executor)

    async def async_close(self) -> None:
        cast, self._cast = self._cast, None
        if cast is not None:
            await run_blocking(cast.disconnect, timeout=self.timeout, executor=self._executor)


class SessionedLink:
    """Secondary link: connect/launch and get/set volume on a receiver.

    State transitions:
        DISCONNECTED -> CONNECTING   on connect attempt
        CONNECTING   -> CONNECTED    when the transport connects
        CONNECTING   -> DISCONNECTED when connecting fails (transport closed)
        CONNECTED    -> DISCONNECTED on a transport error event
    """

    def __init__(
        self,
        transport: ReceiverTransport,
        host: str,
        app_id: str = DEFAULT_RECEIVER_APP_ID,
    ):
        self._transport = transport
        self.host = host
        self.app_id = app_id
        self._state = ConnectionState.DISCONNECTED
        self._connect_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    def _require_connected(self) -> None:
        if self._state is not ConnectionState.CONNECTED:
            raise NotConnectedError("Not connected to Chromecast.")

    async def async_connect(self, host: Optional[str] = None) -> None:
        """Connect to the receiver.

        A call made while a connect is already in flight waits for that
        attempt's result instead of starting a second one.

        Args:
            host: Receiver address, defaults to the configured host

        Raises:
            ConnectError: The transport failed to connect
        """
        if self._state is ConnectionState.CONNECTED:
            return
        if self._connect_task is None or self._connect_task.done():
            self._connect_task = asyncio.ensure_future(self._async_connect(host or self.host))
        task = self._connect_task
        try:
            await asyncio.shield(task)
        finally:
            if task.done() and self._connect_task is task:
                self._connect_task = None

    async def _async_connect(self, host: str) -> None:
        self._state = ConnectionState.CONNECTING
        _LOGGER.debug("Connecting to Chromecast at %s", host)
        try:
            await self._transport.async_connect(host, self._on_transport_error)
        except Exception as err:
            _LOGGER.debug("Error: %s", err)
            self._state = ConnectionState.DISCONNECTED
            try:
                await self._transport.async_close()
            except Exception as close_err:
                _LOGGER.debug("Closing failed session: %s", close_err)
            raise ConnectError(f"Could not connect to Chromecast at {host}: {err}") from err
        self._state = ConnectionState.CONNECTED
        _LOGGER.debug("Connected to Chromecast at %s", host)

    def _on_transport_error(self, err: Exception) -> None:
        if self._state is ConnectionState.CONNECTED:
            _LOGGER.debug("Chromecast connection error: %s", err)
            self._state = ConnectionState.DISCONNECTED

    async def async_close(self) -> None:
        """Close the session and mark the link disconnected."""
        self._state = ConnectionState.DISCONNECTED
        await self._transport.async_close()

    async def async_launch(self, app_id: Optional[str] = None) -> None:
        """Bring the receiver application to the foreground.

        Raises:
            NotConnectedError: Session is not connected
            LaunchError: The receiver refused or the transport failed
        """
        self._require_connected()
        app_id = app_id or self.app_id
        _LOGGER.debug("Launching Chromecast app %s", app_id)
        try:
            await self._transport.async_launch(app_id)
        except Exception as err:
            raise LaunchError(f"Could not launch {app_id}: {err}") from err

    async def async_get_volume(self) -> int:
        """Return the receiver volume in percent.

        Raises:
            NotConnectedError: Session is not connected
            TransportError: Status request failed
        """
        self._require_connected()
        try:
            level = await self._transport.async_get_volume()
        except Exception as err:
            _LOGGER.error("Could not read Chromecast volume: %s", err)
            raise TransportError(f"Could not read volume: {err}") from err
        volume = round(level * 100)
        _LOGGER.debug("Chromecast Volume %s", volume)
        return volume

    async def async_set_volume(self, percent: int) -> int:
        """Set the receiver volume.

        Args:
            percent: Requested volume (0-100)

        Returns:
            The volume the receiver confirmed, which may differ slightly
            from the request due to device-side quantization

        Raises:
            NotConnectedError: Session is not connected
            ValidationError: percent outside 0-100
            TransportError: Volume request failed
        """
        self._require_connected()
        if isinstance(percent, bool) or not isinstance(percent, int) or not VOLUME_MIN <= percent <= VOLUME_MAX:
            raise ValidationError(f"Invalid volume {percent!r}")
        try:
            level = await self._transport.async_set_volume(percent / 100)
        except Exception as err:
            _LOGGER.error("Could not set Chromecast volume: %s", err)
            raise TransportError(f"Could not set volume: {err}") from err
        volume = round(level * 100)
        _LOGGER.debug("Chromecast Volume %s", volume)
        return volume
