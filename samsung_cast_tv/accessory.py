"""Samsung TV + Chromecast accessory.

Composes the two device links, power control, key sequencing and state
reconciliation into the get/set surface a home-automation host drives.
"""

import logging
from typing import Any, Dict, List, Optional

from .cast import CastReceiver, ReceiverTransport, SessionedLink
from .characteristics import (
    DeviceCharacteristic,
    make_channel_characteristic,
    make_key_characteristic,
    make_power_characteristic,
    make_volume_characteristic,
    make_volume_step_characteristic,
)
from .config import (
    DEFAULT_CAST_PORT,
    DEFAULT_CAST_TIMEOUT_MS,
    DEFAULT_NAME,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_RECEIVER_APP_ID,
    DEFAULT_REMOTE_NAME,
    DEFAULT_SAMSUNG_PORT,
    DEFAULT_SAMSUNG_TIMEOUT_MS,
    DEFAULT_SEND_DELAY_MS,
    MANUFACTURER,
    MODEL,
    ms_to_seconds,
    validate_config,
)
from .exceptions import NotConnectedError, ValidationError
from .keys import get_key
from .power import PowerController
from .reconciler import CachedState, Reconciler
from .remote import RemoteTransport, SamsungRemote, SimpleRemoteLink
from .sequencer import KeySequencer

_LOGGER = logging.getLogger(__name__)


class SamsungCastTV:
    """One TV controlled through its remote API and an attached Chromecast.

    Example usage:
        async with SamsungCastTV(config) as tv:
            await tv.async_set_power(True)
            await tv.async_set_channel("42")
            volume = await tv.async_get_volume()
    """

    def __init__(
        self,
        config: Dict[str, Any],
        remote: Optional[RemoteTransport] = None,
        receiver: Optional[ReceiverTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the accessory.

        Args:
            config: Accessory config record (see config.DEFAULT_CONFIG)
            remote: Remote transport (SamsungRemote from config if None)
            receiver: Receiver transport (CastReceiver from config if None)
            logger: Host supplied logger (module logger if None)

        Raises:
            ValidationError: Config is missing required settings
        """
        errors = validate_config(config)
        if errors:
            raise ValidationError("; ".join(errors))

        self.config = config
        self.log = logger or _LOGGER

        samsung = config["samsung"]
        chromecast = config["chromecast"]
        self.ip_address = samsung["ip"]

        samsung_timeout = ms_to_seconds(samsung.get("timeout"), DEFAULT_SAMSUNG_TIMEOUT_MS)
        if remote is None:
            remote = SamsungRemote(
                host=samsung["ip"],
                port=samsung.get("port", DEFAULT_SAMSUNG_PORT),
                timeout=samsung_timeout,
                name=samsung.get("name", DEFAULT_REMOTE_NAME),
            )
        if receiver is None:
            receiver = CastReceiver(
                port=chromecast.get("port", DEFAULT_CAST_PORT),
                timeout=ms_to_seconds(chromecast.get("timeout"), DEFAULT_CAST_TIMEOUT_MS),
            )

        self.primary = SimpleRemoteLink(remote, timeout=samsung_timeout)
        self.secondary = SessionedLink(
            receiver,
            host=chromecast["ip"],
            app_id=chromecast.get("app_id", DEFAULT_RECEIVER_APP_ID),
        )
        self.power = PowerController(self.primary, self.secondary)
        self.sequencer = KeySequencer(
            self.primary,
            delay=ms_to_seconds(config.get("send_delay"), DEFAULT_SEND_DELAY_MS),
        )
        self.reconciler = Reconciler(
            self.primary,
            self.secondary,
            interval=ms_to_seconds(config.get("poll_interval"), DEFAULT_POLL_INTERVAL_MS),
        )

        self.power_characteristic = make_power_characteristic()
        self.volume_characteristic = make_volume_characteristic()
        self.volume_step_characteristic = make_volume_step_characteristic()
        self.channel_characteristic = make_channel_characteristic()
        self.key_characteristic = make_key_characteristic()

        # The TV cannot report its channel, so this is only what was last set here.
        self._channel: str = self.channel_characteristic.default
        self._key: str = self.key_characteristic.default

    @property
    def name(self) -> str:
        return self.config.get("name") or DEFAULT_NAME

    @property
    def information(self) -> Dict[str, str]:
        """Accessory information for the host."""
        return {
            "name": self.name,
            "manufacturer": MANUFACTURER,
            "model": MODEL,
            "serial_number": self.ip_address,
        }

    @property
    def characteristics(self) -> List[DeviceCharacteristic]:
        return [
            self.power_characteristic,
            self.volume_characteristic,
            self.volume_step_characteristic,
            self.channel_characteristic,
            self.key_characteristic,
        ]

    @property
    def state(self) -> CachedState:
        """Last reconciled state."""
        return self.reconciler.state

    # Lifecycle
    async def async_start(self) -> None:
        """Connect the Chromecast once and start polling.

        A failed connect is logged; volume stays unavailable until an
        explicit reconnect succeeds.
        """
        try:
            await self.secondary.async_connect()
        except Exception as err:
            self.log.error("Could not connect to Chromecast: %s", err)
        self.reconciler.start()

    async def async_reconnect(self) -> bool:
        """Retry the Chromecast connection if it is down.

        Returns:
            True if connected afterwards
        """
        if self.secondary.is_connected:
            return True
        try:
            await self.secondary.async_connect()
        except Exception as err:
            self.log.debug("Chromecast reconnect failed: %s", err)
            return False
        return True

    async def async_stop(self) -> None:
        """Stop polling and close the Chromecast session."""
        await self.reconciler.async_stop()
        try:
            await self.secondary.async_close()
        except Exception as err:
            self.log.debug("Error closing Chromecast session: %s", err)

    async def __aenter__(self) -> "SamsungCastTV":
        await self.async_start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.async_stop()

    # Power
    async def async_get_power(self) -> bool:
        """Return whether the TV answers. Never raises."""
        return await self.power.async_get_power()

    async def async_set_power(self, on: bool) -> None:
        self.power_characteristic.validate(on)
        try:
            await self.power.async_set_power(on)
        except Exception as err:
            self.log.error("Could not turn TV %s: %s", "on" if on else "off", err)
            raise

    # Chromecast volume
    async def async_get_volume(self) -> int:
        """Return the Chromecast volume in percent.

        Raises:
            NotConnectedError: Chromecast session is not connected
            TransportError: Nothing cached yet and the live query failed
        """
        if not self.secondary.is_connected:
            raise NotConnectedError("Not connected to Chromecast.")
        volume = self.reconciler.state.volume
        if volume is None:
            volume = await self.secondary.async_get_volume()
        return volume

    async def async_set_volume(self, percent: int) -> int:
        """Set the Chromecast volume.

        Returns:
            Volume the Chromecast confirmed
        """
        return await self.secondary.async_set_volume(percent)

    # TV volume keys
    async def async_set_volume_step(self, steps: int) -> None:
        """Press volume up/down |steps| times; 0 toggles mute."""
        self.volume_step_characteristic.validate(steps)
        await self.sequencer.async_step_volume(steps)

    async def async_toggle_mute(self) -> None:
        await self.sequencer.async_step_volume(0)

    # Channel
    def get_channel(self) -> str:
        return self._channel

    async def async_set_channel(self, channel: str) -> None:
        """Enter a channel (1-9999) digit by digit."""
        number = await self.sequencer.async_send_channel(channel)
        self._channel = str(number)

    # Named key
    def get_key(self) -> str:
        return self._key

    async def async_set_key(self, key: str) -> None:
        """Send any remote key by name, without the KEY_ prefix (e.g. MENU)."""
        self.key_characteristic.validate(key)
        self.log.debug("Sending key %s.", key)
        await self.sequencer.async_send_key(get_key(key))
        self._key = key
