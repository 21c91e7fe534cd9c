"""Configuration loading with YAML support and env overrides."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .schema import DEFAULT_CONFIG, deep_merge

_LOGGER = logging.getLogger(__name__)

# Config search paths (in priority order)
CONFIG_SEARCH_PATHS = [
    Path("config.yaml"),                                          # Current directory (primary)
    Path("/app/config.yaml"),                                     # Docker
    Path.home() / ".config" / "samsung_cast_tv" / "config.yaml",  # User home
    Path("/etc/samsung_cast_tv/config.yaml"),                     # System-wide
]

# Environment variable mappings
# Format: "ENV_VAR": ("section", "key", optional_converter)
# A section of None addresses a top-level key.
ENV_MAPPINGS = {
    # Devices
    "SAMSUNG_IP": ("samsung", "ip"),
    "SAMSUNG_PORT": ("samsung", "port", int),
    "SAMSUNG_TIMEOUT": ("samsung", "timeout", int),
    "CHROMECAST_IP": ("chromecast", "ip"),
    "CHROMECAST_PORT": ("chromecast", "port", int),
    # Accessory
    "TV_NAME": (None, "name"),
    "SEND_DELAY": (None, "send_delay", int),
    "POLL_INTERVAL": (None, "poll_interval", int),
    # MQTT settings
    "MQTT_HOST": ("mqtt", "host"),
    "MQTT_PORT": ("mqtt", "port", int),
    "MQTT_USERNAME": ("mqtt", "username"),
    "MQTT_PASSWORD": ("mqtt", "password"),
    # Options
    "LOG_LEVEL": ("options", "log_level"),
    "RECONNECT_INTERVAL": ("options", "reconnect_interval", int),
}

# Module-level cached config
_cached_config: Optional[Dict] = None


def load_config(config_path: Optional[str] = None, use_cache: bool = True) -> Dict[str, Any]:
    """Load configuration from YAML file with environment overrides.

    Args:
        config_path: Explicit path to config file, or None to search
        use_cache: Use cached config if available

    Returns:
        Merged configuration dictionary
    """
    global _cached_config

    if use_cache and _cached_config is not None:
        return _cached_config

    config = copy.deepcopy(DEFAULT_CONFIG)
    loaded_path = None

    search_paths: List[Path] = []
    if config_path:
        search_paths.append(Path(config_path))
    search_paths.extend(CONFIG_SEARCH_PATHS)

    for path in search_paths:
        if path.suffix in (".yaml", ".yml") and path.exists():
            try:
                with open(path) as f:
                    user_config = yaml.safe_load(f) or {}
                config = deep_merge(config, user_config)
                loaded_path = path
                _LOGGER.info("Loaded config from %s", path)
                break
            except (OSError, yaml.YAMLError) as e:
                _LOGGER.warning("Failed to load %s: %s", path, e)

    config = _apply_env_overrides(config)

    # Store metadata
    config["_loaded_from"] = str(loaded_path) if loaded_path else None

    _cached_config = config

    return config


def _apply_env_overrides(config: Dict) -> Dict:
    """Apply environment variable overrides to config."""
    for env_var, mapping in ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        section = mapping[0]
        key = mapping[1]
        converter = mapping[2] if len(mapping) > 2 else str

        try:
            converted_value = converter(value)
        except ValueError as e:
            _LOGGER.warning("Invalid env var %s=%s: %s", env_var, value, e)
            continue

        if section is None:
            config[key] = converted_value
        else:
            config.setdefault(section, {})[key] = converted_value

    return config


def reload_config(config_path: Optional[str] = None) -> Dict:
    """Force reload configuration from disk."""
    global _cached_config
    _cached_config = None
    return load_config(config_path, use_cache=False)


def ms_to_seconds(value: Optional[float], default_ms: float) -> float:
    """Convert a millisecond config value to seconds, falling back to a default."""
    if value is None:
        value = default_ms
    return float(value) / 1000.0
