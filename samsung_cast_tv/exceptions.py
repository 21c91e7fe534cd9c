"""Exceptions raised by the Samsung/Chromecast TV control surface."""

import asyncio


class SamsungCastTVError(Exception):
    """Base class for all errors raised by this package."""


class TransportError(SamsungCastTVError):
    """A device transport failed; the underlying error is chained as __cause__."""


class ConnectError(TransportError):
    """Connecting the receiver session failed."""


class LaunchError(TransportError):
    """Launching the receiver application failed."""


class NotConnectedError(SamsungCastTVError):
    """Operation attempted on a receiver session that is not connected."""


class BusyError(SamsungCastTVError):
    """A key sequence is already being sent to this accessory."""


class ValidationError(SamsungCastTVError, ValueError):
    """Malformed or out-of-range input. Raised before any device I/O."""


class TickTimeoutError(SamsungCastTVError, asyncio.TimeoutError):
    """A reconciler query did not finish before the tick deadline."""

    def __init__(self, query: str, deadline: float):
        super().__init__(f"{query} did not complete within {deadline:.3f}s")
        self.query = query
        self.deadline = deadline
