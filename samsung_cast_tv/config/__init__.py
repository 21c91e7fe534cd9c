"""Configuration management for Samsung/Chromecast TV control.

Provides:
- YAML-based configuration with environment variable overrides
- Defaults and validation for the accessory and the MQTT bridge
- Single source of truth for all constants
"""

from .constants import (
    DEFAULT_SAMSUNG_PORT,
    DEFAULT_SAMSUNG_TIMEOUT_MS,
    DEFAULT_REMOTE_NAME,
    DEFAULT_CAST_PORT,
    DEFAULT_CAST_TIMEOUT_MS,
    DEFAULT_RECEIVER_APP_ID,
    DEFAULT_SEND_DELAY_MS,
    DEFAULT_POLL_INTERVAL_MS,
    CHANNEL_MIN,
    CHANNEL_MAX,
    VOLUME_MIN,
    VOLUME_MAX,
    VOLUME_STEP_MIN,
    VOLUME_STEP_MAX,
    DEFAULT_NAME,
    DEFAULT_CHANNEL,
    DEFAULT_KEY,
    MANUFACTURER,
    MODEL,
    DEFAULT_MQTT_PORT,
    DEFAULT_MQTT_CLIENT_ID,
    DEFAULT_DISCOVERY_PREFIX,
    TOPIC_ROOT,
)

from .schema import (
    DEFAULT_CONFIG,
    deep_merge,
    validate_config,
    get_device_id,
)

from .loader import (
    load_config,
    reload_config,
    ms_to_seconds,
    CONFIG_SEARCH_PATHS,
)


__all__ = [
    # Constants
    "DEFAULT_SAMSUNG_PORT",
    "DEFAULT_SAMSUNG_TIMEOUT_MS",
    "DEFAULT_REMOTE_NAME",
    "DEFAULT_CAST_PORT",
    "DEFAULT_CAST_TIMEOUT_MS",
    "DEFAULT_RECEIVER_APP_ID",
    "DEFAULT_SEND_DELAY_MS",
    "DEFAULT_POLL_INTERVAL_MS",
    "CHANNEL_MIN",
    "CHANNEL_MAX",
    "VOLUME_MIN",
    "VOLUME_MAX",
    "VOLUME_STEP_MIN",
    "VOLUME_STEP_MAX",
    "DEFAULT_NAME",
    "DEFAULT_CHANNEL",
    "DEFAULT_KEY",
    "MANUFACTURER",
    "MODEL",
    "DEFAULT_MQTT_PORT",
    "DEFAULT_MQTT_CLIENT_ID",
    "DEFAULT_DISCOVERY_PREFIX",
    "TOPIC_ROOT",
    # Schema
    "DEFAULT_CONFIG",
    "deep_merge",
    "validate_config",
    "get_device_id",
    # Loader
    "load_config",
    "reload_config",
    "ms_to_seconds",
    "CONFIG_SEARCH_PATHS",
]
