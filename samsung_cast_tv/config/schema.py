"""Configuration schema, defaults, and validation."""

from typing import Any, Dict, List

from .constants import (
    DEFAULT_CAST_PORT,
    DEFAULT_CAST_TIMEOUT_MS,
    DEFAULT_DISCOVERY_PREFIX,
    DEFAULT_MQTT_CLIENT_ID,
    DEFAULT_MQTT_PORT,
    DEFAULT_NAME,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_RECEIVER_APP_ID,
    DEFAULT_REMOTE_NAME,
    DEFAULT_SAMSUNG_PORT,
    DEFAULT_SAMSUNG_TIMEOUT_MS,
    DEFAULT_SEND_DELAY_MS,
)


DEFAULT_CONFIG: Dict[str, Any] = {
    "name": DEFAULT_NAME,

    # Primary link - stateless remote control
    "samsung": {
        "ip": None,                              # Required
        "port": DEFAULT_SAMSUNG_PORT,
        "timeout": DEFAULT_SAMSUNG_TIMEOUT_MS,   # ms
        "name": DEFAULT_REMOTE_NAME,
    },

    # Secondary link - streaming receiver session
    "chromecast": {
        "ip": None,                              # Required
        "port": DEFAULT_CAST_PORT,
        "timeout": DEFAULT_CAST_TIMEOUT_MS,      # ms
        "app_id": DEFAULT_RECEIVER_APP_ID,
    },

    "send_delay": DEFAULT_SEND_DELAY_MS,         # ms between sequenced keys
    "poll_interval": DEFAULT_POLL_INTERVAL_MS,   # ms, also the tick deadline

    # MQTT broker settings (for samsungcast2mqtt bridge)
    "mqtt": {
        "host": None,                            # Required for bridge
        "port": DEFAULT_MQTT_PORT,
        "username": None,
        "password": None,
        "discovery_prefix": DEFAULT_DISCOVERY_PREFIX,
        "client_id": DEFAULT_MQTT_CLIENT_ID,
    },

    # Bridge operation options
    "options": {
        "discovery": True,
        "reconnect_interval": 30,                # seconds
        "log_level": "INFO",
    },
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries, override takes precedence.

    Args:
        base: Base dictionary
        override: Override dictionary (values take precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif value is not None:  # Don't override with None
            result[key] = value
    return result


def _is_non_negative_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def validate_config(config: Dict, for_bridge: bool = False) -> List[str]:
    """Validate configuration and return list of errors.

    Args:
        config: Configuration dictionary
        for_bridge: If True, also validate MQTT settings

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    samsung = config.get("samsung") or {}
    chromecast = config.get("chromecast") or {}

    if not samsung.get("ip"):
        errors.append("samsung.ip is required")
    if not chromecast.get("ip"):
        errors.append("chromecast.ip is required")

    for path, value in (
        ("samsung.timeout", samsung.get("timeout")),
        ("chromecast.timeout", chromecast.get("timeout")),
        ("send_delay", config.get("send_delay")),
    ):
        if value is not None and not _is_non_negative_number(value):
            errors.append(f"{path} must be a non-negative number of milliseconds")

    poll_interval = config.get("poll_interval")
    if poll_interval is not None and (not _is_non_negative_number(poll_interval) or poll_interval == 0):
        errors.append("poll_interval must be a positive number of milliseconds")

    if for_bridge:
        mqtt = config.get("mqtt") or {}
        if not mqtt.get("host"):
            errors.append("mqtt.host is required for bridge mode")

    return errors


def get_device_id(config: Dict) -> str:
    """Generate a unique device ID from config."""
    host = (config.get("samsung") or {}).get("ip") or "unknown"
    return host.replace("-", "_").replace(".", "_").replace(":", "_")
