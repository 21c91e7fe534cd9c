"""Fixtures for Samsung TV + Chromecast tests."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from samsung_cast_tv.accessory import SamsungCastTV
from samsung_cast_tv.cast import SessionedLink
from samsung_cast_tv.config import DEFAULT_CONFIG, deep_merge
from samsung_cast_tv.remote import SimpleRemoteLink

MOCK_CONFIG = deep_merge(
    copy.deepcopy(DEFAULT_CONFIG),
    {
        "name": "Living Room TV",
        "samsung": {"ip": "192.168.1.50"},
        "chromecast": {"ip": "192.168.1.51"},
        "send_delay": 0,
        "poll_interval": 50,
        "mqtt": {"host": "192.168.1.10"},
    },
)


async def hang(*args, **kwargs):
    """Never complete (until cancelled)."""
    await asyncio.Event().wait()


@pytest.fixture
def mock_config() -> dict:
    """Valid accessory and bridge config."""
    return copy.deepcopy(MOCK_CONFIG)


@pytest.fixture
def mock_remote() -> Generator[MagicMock, None, None]:
    """Create a mock remote transport for a TV that is on."""
    mock_instance = MagicMock()
    mock_instance.async_check_alive = AsyncMock(return_value=None)
    mock_instance.async_send = AsyncMock(return_value=None)
    mock_instance.async_close = AsyncMock()

    yield mock_instance


@pytest.fixture
def mock_receiver() -> Generator[MagicMock, None, None]:
    """Create a mock receiver transport at 30% volume."""
    mock_instance = MagicMock()
    mock_instance.async_connect = AsyncMock(return_value=None)
    mock_instance.async_launch = AsyncMock(return_value=None)
    mock_instance.async_get_volume = AsyncMock(return_value=0.3)
    mock_instance.async_set_volume = AsyncMock(side_effect=lambda level: level)
    mock_instance.async_close = AsyncMock()

    yield mock_instance


@pytest.fixture
def primary(mock_remote: MagicMock) -> SimpleRemoteLink:
    return SimpleRemoteLink(mock_remote, timeout=0.5)


@pytest.fixture
def secondary(mock_receiver: MagicMock) -> SessionedLink:
    return SessionedLink(mock_receiver, host="192.168.1.51")


@pytest.fixture
def tv(mock_config: dict, mock_remote: MagicMock, mock_receiver: MagicMock) -> SamsungCastTV:
    """Accessory wired to the mock transports (not started)."""
    return SamsungCastTV(mock_config, remote=mock_remote, receiver=mock_receiver)


def sent_keys(mock_remote: MagicMock) -> list[str]:
    """Keys sent through the mock remote, in order."""
    return [call.args[0] for call in mock_remote.async_send.await_args_list]
