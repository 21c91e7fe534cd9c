"""Power control across the TV remote and the Chromecast."""

import logging

from .cast import SessionedLink
from .remote import SimpleRemoteLink

_LOGGER = logging.getLogger(__name__)


class PowerController:
    """Combine the primary remote and the secondary receiver into one power switch.

    Power on falls back to launching the receiver app when the remote fails,
    which wakes the TV over HDMI-CEC. Power off has no fallback.
    """

    def __init__(self, primary: SimpleRemoteLink, secondary: SessionedLink):
        self.primary = primary
        self.secondary = secondary

    async def async_get_power(self) -> bool:
        """Return whether the TV is on. Never raises."""
        return await self.primary.async_check_alive()

    async def async_set_power(self, on: bool) -> None:
        """Turn the TV on or off.

        Args:
            on: Requested power state

        Raises:
            TransportError: Power off failed, or power on failed on the remote
                and the fallback raised a transport error
            NotConnectedError: Power on failed on the remote and the receiver
                session is not connected
        """
        _LOGGER.debug("isOn %s", on)
        if not on:
            await self.primary.async_power_off()
            return

        try:
            await self.primary.async_power_on()
        except Exception as err:
            # Once the fallback runs, its outcome is the only one reported.
            _LOGGER.debug("Remote power on failed (%s), launching Chromecast instead", err)
            await self.secondary.async_launch()
