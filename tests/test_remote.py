"""Tests for the Samsung remote link."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from samsung_cast_tv.exceptions import TransportError
from samsung_cast_tv.remote import SamsungRemote, SimpleRemoteLink

from .conftest import sent_keys


async def test_check_alive_true(primary: SimpleRemoteLink, mock_remote: MagicMock) -> None:
    """Test an answering TV is reported alive."""
    assert await primary.async_check_alive() is True
    mock_remote.async_check_alive.assert_awaited_once_with(0.5)


async def test_check_alive_never_raises(primary: SimpleRemoteLink, mock_remote: MagicMock) -> None:
    """Test transport failures turn into False."""
    mock_remote.async_check_alive.side_effect = OSError("host unreachable")

    assert await primary.async_check_alive() is False


async def test_send_key(primary: SimpleRemoteLink, mock_remote: MagicMock) -> None:
    """Test a key goes straight to the transport."""
    await primary.async_send_key("KEY_MENU")

    assert sent_keys(mock_remote) == ["KEY_MENU"]


async def test_send_key_wraps_errors(primary: SimpleRemoteLink, mock_remote: MagicMock) -> None:
    """Test transport errors surface as TransportError with the cause chained."""
    cause = ConnectionResetError("reset")
    mock_remote.async_send.side_effect = cause

    with pytest.raises(TransportError) as exc_info:
        await primary.async_send_key("KEY_MENU")

    assert exc_info.value.__cause__ is cause


async def test_power_keys(primary: SimpleRemoteLink, mock_remote: MagicMock) -> None:
    """Test power on/off send the discrete power keys."""
    await primary.async_power_on()
    await primary.async_power_off()

    assert sent_keys(mock_remote) == ["KEY_POWERON", "KEY_POWEROFF"]


async def test_samsung_remote_send_key() -> None:
    """Test the samsungtvws client is created once without its own key delay."""
    with patch("samsung_cast_tv.remote.SamsungTVWS") as mock_class:
        remote = SamsungRemote("192.168.1.50", timeout=2.0)
        await remote.async_send("KEY_1")
        await remote.async_send("KEY_2")

    mock_class.assert_called_once()
    assert mock_class.call_args.kwargs["key_press_delay"] == 0
    assert mock_class.call_args.kwargs["timeout"] == 2.0
    client = mock_class.return_value
    assert [call.args[0] for call in client.send_key.call_args_list] == ["KEY_1", "KEY_2"]


async def test_samsung_remote_drops_client_on_error() -> None:
    """Test a failed send closes the websocket so the next send reconnects."""
    with patch("samsung_cast_tv.remote.SamsungTVWS") as mock_class:
        first = MagicMock()
        first.send_key.side_effect = BrokenPipeError("closed")
        second = MagicMock()
        mock_class.side_effect = [first, second]

        remote = SamsungRemote("192.168.1.50")
        with pytest.raises(BrokenPipeError):
            await remote.async_send("KEY_1")
        await remote.async_send("KEY_1")

    first.close.assert_called_once()
    second.send_key.assert_called_once_with("KEY_1")


async def test_samsung_remote_check_alive() -> None:
    """Test liveness uses the REST device info endpoint."""
    with patch("samsung_cast_tv.remote.SamsungTVWS") as mock_class:
        mock_class.return_value.rest_device_info.side_effect = OSError("timed out")
        remote = SamsungRemote("192.168.1.50")

        with pytest.raises(OSError):
            await remote.async_check_alive(0.25)

    assert mock_class.call_args.kwargs["timeout"] == 0.25


async def test_samsung_remote_close() -> None:
    """Test close only touches an opened client."""
    with patch("samsung_cast_tv.remote.SamsungTVWS") as mock_class:
        remote = SamsungRemote("192.168.1.50")
        await remote.async_close()
        mock_class.assert_not_called()

        await remote.async_send("KEY_1")
        await remote.async_close()

    mock_class.return_value.close.assert_called_once()
