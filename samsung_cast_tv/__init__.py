"""Samsung TV + Chromecast control library.

Power, volume, channel and key control over a Samsung TV's remote API and an
attached Chromecast, with periodic state reconciliation for polling hosts.
"""

from .accessory import SamsungCastTV
from .cast import CastReceiver, ConnectionState, ReceiverTransport, SessionedLink
from .characteristics import (
    DeviceCharacteristic,
    Format,
    Perm,
    Unit,
    make_channel_characteristic,
    make_key_characteristic,
    make_power_characteristic,
    make_volume_characteristic,
    make_volume_step_characteristic,
)
from .exceptions import (
    BusyError,
    ConnectError,
    LaunchError,
    NotConnectedError,
    SamsungCastTVError,
    TickTimeoutError,
    TransportError,
    ValidationError,
)
from .keys import (
    KEY_POWER,
    KEY_POWERON,
    KEY_POWEROFF,
    KEY_ENTER,
    KEY_MENU,
    KEY_VOLUME_UP,
    KEY_VOLUME_DOWN,
    KEY_MUTE,
    DIGIT_KEYS,
    ALL_KEYS,
    KEY_NAME_MAP,
    get_key,
)
from .power import PowerController
from .reconciler import CachedState, Reconciler
from .remote import RemoteTransport, SamsungRemote, SimpleRemoteLink
from .sequencer import KeySequence, KeySequencer, parse_channel
from .config import (
    load_config,
    reload_config,
    validate_config,
    DEFAULT_CONFIG,
)

__version__ = "1.0.0"
__all__ = [
    "SamsungCastTV",
    # Links
    "SimpleRemoteLink",
    "SessionedLink",
    "ConnectionState",
    # Transports
    "RemoteTransport",
    "ReceiverTransport",
    "SamsungRemote",
    "CastReceiver",
    # Core
    "PowerController",
    "KeySequence",
    "KeySequencer",
    "parse_channel",
    "Reconciler",
    "CachedState",
    # Characteristics
    "DeviceCharacteristic",
    "Format",
    "Perm",
    "Unit",
    "make_power_characteristic",
    "make_volume_characteristic",
    "make_volume_step_characteristic",
    "make_channel_characteristic",
    "make_key_characteristic",
    # Errors
    "SamsungCastTVError",
    "TransportError",
    "ConnectError",
    "LaunchError",
    "NotConnectedError",
    "BusyError",
    "ValidationError",
    "TickTimeoutError",
    # Keys
    "KEY_POWER",
    "KEY_POWERON",
    "KEY_POWEROFF",
    "KEY_ENTER",
    "KEY_MENU",
    "KEY_VOLUME_UP",
    "KEY_VOLUME_DOWN",
    "KEY_MUTE",
    "DIGIT_KEYS",
    "ALL_KEYS",
    "KEY_NAME_MAP",
    "get_key",
    # Config
    "load_config",
    "reload_config",
    "validate_config",
    "DEFAULT_CONFIG",
]
