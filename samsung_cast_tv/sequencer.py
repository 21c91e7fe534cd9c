"""Serialized multi-key command sending.

Operations the TV only understands as a series of keystrokes (channel digits,
repeated volume nudges) go through a ``KeySequencer``. Only one sequence may
run per accessory; a second request while one is running is rejected, never
queued.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Tuple

from .config import CHANNEL_MAX, CHANNEL_MIN
from .exceptions import BusyError, ValidationError
from .keys import DIGIT_KEYS, KEY_ENTER, KEY_MUTE, KEY_VOLUME_DOWN, KEY_VOLUME_UP
from .remote import SimpleRemoteLink

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeySequence:
    """Ordered keys sent with a fixed delay (seconds) after each key."""

    keys: Tuple[str, ...]
    delay: float

    def __len__(self) -> int:
        return len(self.keys)

    @classmethod
    def for_channel(cls, channel: str, delay: float) -> "KeySequence":
        """Build the digit-by-digit entry for a channel, followed by ENTER.

        Raises:
            ValidationError: channel is not an integer in [1, 9999]
        """
        number = parse_channel(channel)
        keys = [DIGIT_KEYS[digit] for digit in str(number)]
        keys.append(KEY_ENTER)
        return cls(tuple(keys), delay)

    @classmethod
    def for_volume_step(cls, steps: int, delay: float) -> "KeySequence":
        """Build |steps| volume up (positive) or down (negative) presses."""
        key = KEY_VOLUME_UP if steps > 0 else KEY_VOLUME_DOWN
        return cls((key,) * abs(steps), delay)


def parse_channel(channel) -> int:
    """Validate a channel number given as text.

    Raises:
        ValidationError: Not a plain integer in [1, 9999]
    """
    text = str(channel).strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(f'Invalid channel "{channel}"')
    number = int(text)
    if not CHANNEL_MIN <= number <= CHANNEL_MAX:
        raise ValidationError(f'Invalid channel "{channel}"')
    return number


class KeySequencer:
    """Send keys to the remote link one sequence at a time."""

    def __init__(self, link: SimpleRemoteLink, delay: float = 0.4):
        """Initialize the sequencer.

        Args:
            link: Primary remote link the keys go to
            delay: Seconds to wait after each key of a sequence
        """
        self.link = link
        self.delay = delay
        self._guard = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """Whether a sequence or single key is currently being sent."""
        return self._guard.locked()

    def _check_idle(self, what: str) -> None:
        if self._guard.locked():
            _LOGGER.debug("Cannot send %s while sending other key sequence.", what)
            raise BusyError(f"Cannot send {what} while sending other key sequence")

    async def async_send(self, sequence: KeySequence) -> None:
        """Send every key of the sequence in order.

        Each key is followed by the sequence delay. The first failing key
        aborts the run; keys after it are never sent.

        Raises:
            BusyError: Another sequence is running
            TransportError: A key was not acknowledged
        """
        self._check_idle(f"{len(sequence)} keys")
        # No await between the check and the acquire, so nothing can slip in.
        async with self._guard:
            for key in sequence.keys:
                try:
                    await self.link.async_send_key(key)
                except Exception as err:
                    _LOGGER.error("Could not send key %s: %s", key, err)
                    raise
                await asyncio.sleep(sequence.delay)
        _LOGGER.debug("Finished sending %s.", ", ".join(sequence.keys))

    async def async_send_key(self, key: str) -> None:
        """Send a single key under the same guard, without a trailing delay.

        Raises:
            BusyError: A sequence is running
            TransportError: The key was not acknowledged
        """
        self._check_idle(f"key {key}")
        async with self._guard:
            try:
                await self.link.async_send_key(key)
            except Exception as err:
                _LOGGER.error("Could not send key %s: %s", key, err)
                raise
        _LOGGER.debug("Finished sending key %s.", key)

    async def async_send_channel(self, channel: str) -> int:
        """Enter a channel number on the TV.

        Validation happens before the guard is touched, so an invalid channel
        neither sends anything nor reports busy.

        Returns:
            The channel number that was entered

        Raises:
            ValidationError: channel is not an integer in [1, 9999]
            BusyError: Another sequence is running
            TransportError: A key was not acknowledged
        """
        try:
            sequence = KeySequence.for_channel(channel, self.delay)
        except ValidationError:
            _LOGGER.error('Invalid channel "%s".', channel)
            raise
        _LOGGER.debug("Sending channel %s.", channel)
        await self.async_send(sequence)
        return parse_channel(channel)

    async def async_step_volume(self, steps: int) -> None:
        """Nudge the TV volume by steps key presses; 0 toggles mute.

        Raises:
            BusyError: Another sequence is running
            TransportError: A key was not acknowledged
        """
        if steps == 0:
            await self.async_send_key(KEY_MUTE)
            return
        _LOGGER.debug("Changing volume by %s.", steps)
        await self.async_send(KeySequence.for_volume_step(steps, self.delay))
