"""Tests for key sequencing."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, call, patch

import pytest

from samsung_cast_tv.exceptions import BusyError, TransportError, ValidationError
from samsung_cast_tv.remote import SimpleRemoteLink
from samsung_cast_tv.sequencer import KeySequence, KeySequencer, parse_channel

from .conftest import sent_keys


@pytest.fixture
def sequencer(primary: SimpleRemoteLink) -> KeySequencer:
    return KeySequencer(primary, delay=0)


@pytest.fixture
def blocked_remote(mock_remote: MagicMock) -> asyncio.Event:
    """Make every key send wait until the returned event is set."""
    release = asyncio.Event()

    async def slow_send(key):
        await release.wait()

    mock_remote.async_send.side_effect = slow_send
    return release


async def wait_until_busy(sequencer: KeySequencer) -> None:
    for _ in range(10):
        if sequencer.busy:
            return
        await asyncio.sleep(0)
    raise AssertionError("sequencer never became busy")


@pytest.mark.parametrize(
    ("channel", "expected"),
    [("1", 1), ("42", 42), (" 007 ", 7), ("9999", 9999), (12, 12)],
)
def test_parse_channel(channel, expected: int) -> None:
    """Test valid channel input."""
    assert parse_channel(channel) == expected


@pytest.mark.parametrize("channel", ["0", "10000", "-5", "4.2", "abc", "", "1 2", "\u00b2", "1\u00b3", "\u0664\u0662"])
def test_parse_channel_invalid(channel) -> None:
    """Test invalid channel input is rejected."""
    with pytest.raises(ValidationError):
        parse_channel(channel)


def test_channel_sequence() -> None:
    """Test a channel becomes its digits followed by ENTER."""
    sequence = KeySequence.for_channel("705", 0.4)

    assert sequence.keys == ("KEY_7", "KEY_0", "KEY_5", "KEY_ENTER")
    assert sequence.delay == 0.4
    assert len(sequence) == 4


def test_volume_step_sequence() -> None:
    """Test positive steps go up and negative steps go down."""
    assert KeySequence.for_volume_step(2, 0).keys == ("KEY_VOLUP", "KEY_VOLUP")
    assert KeySequence.for_volume_step(-3, 0).keys == ("KEY_VOLDOWN",) * 3


async def test_send_channel(sequencer: KeySequencer, mock_remote: MagicMock) -> None:
    """Test channel 42 sends 4, 2, ENTER in order."""
    assert await sequencer.async_send_channel("42") == 42

    assert sent_keys(mock_remote) == ["KEY_4", "KEY_2", "KEY_ENTER"]
    assert not sequencer.busy


async def test_send_channel_waits_after_each_key(primary: SimpleRemoteLink) -> None:
    """Test the configured delay follows every key of the sequence."""
    sequencer = KeySequencer(primary, delay=0.4)

    with patch("samsung_cast_tv.sequencer.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        await sequencer.async_send_channel("42")

    assert mock_sleep.await_args_list == [call(0.4)] * 3


async def test_invalid_channel_sends_nothing(sequencer: KeySequencer, mock_remote: MagicMock) -> None:
    """Test an invalid channel is rejected before any key is sent."""
    with pytest.raises(ValidationError):
        await sequencer.async_send_channel("12a")

    mock_remote.async_send.assert_not_awaited()


async def test_invalid_channel_while_busy_is_validation_error(
    sequencer: KeySequencer, blocked_remote: asyncio.Event
) -> None:
    """Test validation runs before the busy check."""
    running = asyncio.ensure_future(sequencer.async_send_channel("12"))
    await wait_until_busy(sequencer)

    with pytest.raises(ValidationError):
        await sequencer.async_send_channel("0")

    blocked_remote.set()
    await running


async def test_busy_rejects_second_sequence(
    sequencer: KeySequencer, mock_remote: MagicMock, blocked_remote: asyncio.Event
) -> None:
    """Test a request while a sequence runs is rejected without sending."""
    running = asyncio.ensure_future(sequencer.async_send_channel("12"))
    await wait_until_busy(sequencer)

    with pytest.raises(BusyError):
        await sequencer.async_send_channel("34")
    with pytest.raises(BusyError):
        await sequencer.async_step_volume(2)
    with pytest.raises(BusyError):
        await sequencer.async_send_key("KEY_MENU")

    blocked_remote.set()
    await running

    assert sent_keys(mock_remote) == ["KEY_1", "KEY_2", "KEY_ENTER"]
    assert not sequencer.busy


async def test_failure_aborts_sequence(sequencer: KeySequencer, mock_remote: MagicMock) -> None:
    """Test the first failing key stops the run and releases the guard."""
    mock_remote.async_send.side_effect = [None, OSError("gone"), None]

    with pytest.raises(TransportError):
        await sequencer.async_send_channel("123")

    assert sent_keys(mock_remote) == ["KEY_1", "KEY_2"]
    assert not sequencer.busy

    mock_remote.async_send.side_effect = None
    await sequencer.async_send_key("KEY_MENU")


async def test_step_volume(sequencer: KeySequencer, mock_remote: MagicMock) -> None:
    """Test stepping sends |steps| volume keys."""
    await sequencer.async_step_volume(3)
    await sequencer.async_step_volume(-2)

    assert sent_keys(mock_remote) == ["KEY_VOLUP"] * 3 + ["KEY_VOLDOWN"] * 2


async def test_step_volume_zero_mutes(sequencer: KeySequencer, mock_remote: MagicMock) -> None:
    """Test a zero step sends exactly one MUTE."""
    await sequencer.async_step_volume(0)

    assert sent_keys(mock_remote) == ["KEY_MUTE"]


@pytest.mark.parametrize("channel", ["²", "٤٢"])
async def test_non_ascii_digits_rejected(sequencer: KeySequencer, mock_remote: MagicMock, channel: str) -> None:
    """Test digits outside 0-9 are a validation error, not a channel."""
    with pytest.raises(ValidationError):
        await sequencer.async_send_channel(channel)

    mock_remote.async_send.assert_not_awaited()
