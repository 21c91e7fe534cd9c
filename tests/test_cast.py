"""Tests for the Chromecast session link."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from pychromecast.socket_client import CONNECTION_STATUS_CONNECTED, CONNECTION_STATUS_LOST

from samsung_cast_tv.cast import CastReceiver, ConnectionState, SessionedLink, _ErrorForwarder
from samsung_cast_tv.exceptions import (
    ConnectError,
    LaunchError,
    NotConnectedError,
    TransportError,
    ValidationError,
)


async def test_connect(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test a successful connect."""
    assert secondary.state is ConnectionState.DISCONNECTED

    await secondary.async_connect()

    assert secondary.is_connected
    mock_receiver.async_connect.assert_awaited_once()
    assert mock_receiver.async_connect.await_args.args[0] == "192.168.1.51"


async def test_connect_failure(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test a failed connect closes the transport and leaves the link disconnected."""
    mock_receiver.async_connect.side_effect = OSError("refused")

    with pytest.raises(ConnectError):
        await secondary.async_connect()

    assert secondary.state is ConnectionState.DISCONNECTED
    mock_receiver.async_close.assert_awaited_once()


async def test_connect_in_flight_is_shared(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test concurrent connects share one attempt."""
    release = asyncio.Event()

    async def slow_connect(host, on_error):
        await release.wait()

    mock_receiver.async_connect.side_effect = slow_connect

    first = asyncio.ensure_future(secondary.async_connect())
    second = asyncio.ensure_future(secondary.async_connect())
    for _ in range(3):
        await asyncio.sleep(0)
    assert secondary.state is ConnectionState.CONNECTING

    release.set()
    await asyncio.gather(first, second)

    assert secondary.is_connected
    mock_receiver.async_connect.assert_awaited_once()


async def test_connect_again_after_failure(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test a later connect starts a fresh attempt."""
    mock_receiver.async_connect.side_effect = [OSError("refused"), None]

    with pytest.raises(ConnectError):
        await secondary.async_connect()
    await secondary.async_connect()

    assert secondary.is_connected
    assert mock_receiver.async_connect.await_count == 2


async def test_transport_error_disconnects(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test a transport error event drops the session."""
    await secondary.async_connect()
    on_error = mock_receiver.async_connect.await_args.args[1]

    on_error(ConnectionError("lost"))

    assert secondary.state is ConnectionState.DISCONNECTED
    with pytest.raises(NotConnectedError):
        await secondary.async_get_volume()


async def test_requests_fail_fast_when_disconnected(
    secondary: SessionedLink, mock_receiver: MagicMock
) -> None:
    """Test nothing reaches the transport while disconnected."""
    with pytest.raises(NotConnectedError):
        await secondary.async_get_volume()
    with pytest.raises(NotConnectedError):
        await secondary.async_set_volume(50)
    with pytest.raises(NotConnectedError):
        await secondary.async_launch()

    mock_receiver.async_get_volume.assert_not_awaited()
    mock_receiver.async_set_volume.assert_not_awaited()
    mock_receiver.async_launch.assert_not_awaited()


async def test_set_volume_checks_connection_before_range(
    secondary: SessionedLink, mock_receiver: MagicMock
) -> None:
    """Test an out of range volume on a disconnected link reports not connected."""
    with pytest.raises(NotConnectedError):
        await secondary.async_set_volume(150)


async def test_get_volume(secondary: SessionedLink) -> None:
    """Test the level is reported as a rounded percentage."""
    await secondary.async_connect()

    assert await secondary.async_get_volume() == 30


async def test_get_volume_error(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test status failures surface as TransportError."""
    await secondary.async_connect()
    mock_receiver.async_get_volume.side_effect = OSError("timeout")

    with pytest.raises(TransportError):
        await secondary.async_get_volume()


async def test_set_volume_returns_confirmed(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test the volume the receiver settled on is returned."""
    await secondary.async_connect()
    mock_receiver.async_set_volume.side_effect = lambda level: 0.31

    assert await secondary.async_set_volume(30) == 31
    mock_receiver.async_set_volume.assert_awaited_once_with(0.3)


@pytest.mark.parametrize("volume", [-1, 101, 50.5, True, "50"])
async def test_set_volume_invalid(secondary: SessionedLink, mock_receiver: MagicMock, volume) -> None:
    """Test invalid volumes are rejected before any transport call."""
    await secondary.async_connect()

    with pytest.raises(ValidationError):
        await secondary.async_set_volume(volume)

    mock_receiver.async_set_volume.assert_not_awaited()


async def test_launch(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test launching the default receiver app."""
    await secondary.async_connect()
    await secondary.async_launch()

    mock_receiver.async_launch.assert_awaited_once_with("CC1AD845")


async def test_launch_error(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test a refused launch surfaces as LaunchError."""
    await secondary.async_connect()
    mock_receiver.async_launch.side_effect = RuntimeError("refused")

    with pytest.raises(LaunchError):
        await secondary.async_launch()


async def test_close(secondary: SessionedLink, mock_receiver: MagicMock) -> None:
    """Test close marks the link disconnected."""
    await secondary.async_connect()
    await secondary.async_close()

    assert not secondary.is_connected
    mock_receiver.async_close.assert_awaited_once()


def test_error_forwarder() -> None:
    """Test only lost/failed connection statuses are forwarded."""
    loop = MagicMock()
    on_error = MagicMock()
    forwarder = _ErrorForwarder(loop, on_error)

    forwarder.new_connection_status(MagicMock(status=CONNECTION_STATUS_CONNECTED))
    loop.call_soon_threadsafe.assert_not_called()

    forwarder.new_connection_status(MagicMock(status=CONNECTION_STATUS_LOST))
    loop.call_soon_threadsafe.assert_called_once()
    assert loop.call_soon_threadsafe.call_args.args[0] is on_error


async def test_cast_receiver() -> None:
    """Test the pychromecast wrapper."""
    cast = MagicMock()
    cast.status.volume_level = 0.42
    cast.set_volume.return_value = 0.5

    with patch(
        "samsung_cast_tv.cast.pychromecast.get_chromecast_from_host",
        return_value=cast,
    ) as mock_get:
        receiver = CastReceiver(timeout=5.0)
        await receiver.async_connect("192.168.1.51", MagicMock())

    assert mock_get.call_args.args[0][:2] == ("192.168.1.51", 8009)
    cast.socket_client.register_connection_listener.assert_called_once()
    cast.wait.assert_called_once_with(timeout=5.0)

    assert await receiver.async_get_volume() == 0.42
    assert await receiver.async_set_volume(0.5) == 0.5
    await receiver.async_launch("CC1AD845")
    cast.start_app.assert_called_once_with("CC1AD845", timeout=5.0)

    await receiver.async_close()
    cast.disconnect.assert_called_once_with(timeout=5.0)
    with pytest.raises(ConnectionError):
        await receiver.async_get_volume()


async def test_sessioned_link_with_cast_receiver() -> None:
    """Test a link over the real wrapper reports the cast volume."""
    cast = MagicMock()
    cast.status.volume_level = 0.25
    with patch("samsung_cast_tv.cast.pychromecast.get_chromecast_from_host", return_value=cast):
        link = SessionedLink(CastReceiver(), host="192.168.1.51")
        await link.async_connect()

    assert await link.async_get_volume() == 25
    await link.async_close()
    cast.disconnect.assert_called_once()


async def test_cast_receiver_reconnect_closes_previous_session() -> None:
    """Test connecting again disconnects the old cast before opening a new one."""
    first = MagicMock()
    second = MagicMock()

    with patch(
        "samsung_cast_tv.cast.pychromecast.get_chromecast_from_host",
        side_effect=[first, second],
    ):
        receiver = CastReceiver(timeout=5.0)
        await receiver.async_connect("192.168.1.51", MagicMock())
        await receiver.async_connect("192.168.1.51", MagicMock())

    first.disconnect.assert_called_once_with(timeout=5.0)
    second.disconnect.assert_not_called()


async def test_cast_receiver_failed_wait_disconnects() -> None:
    """Test a cast that never becomes ready is torn down."""
    cast = MagicMock()
    cast.wait.side_effect = OSError("no route to host")

    with patch("samsung_cast_tv.cast.pychromecast.get_chromecast_from_host", return_value=cast):
        receiver = CastReceiver(timeout=5.0)
        with pytest.raises(OSError):
            await receiver.async_connect("192.168.1.51", MagicMock())

    cast.disconnect.assert_called_once_with(timeout=5.0)
    await receiver.async_close()
    cast.disconnect.assert_called_once()


async def test_sessioned_link_failed_connect_closes_cast() -> None:
    """Test a failed connect over the real wrapper leaves no session open."""
    cast = MagicMock()
    cast.wait.side_effect = OSError("no route to host")

    with patch("samsung_cast_tv.cast.pychromecast.get_chromecast_from_host", return_value=cast):
        link = SessionedLink(CastReceiver(), host="192.168.1.51")
        with pytest.raises(ConnectError):
            await link.async_connect()

    assert link.state is ConnectionState.DISCONNECTED
    cast.disconnect.assert_called_once()
