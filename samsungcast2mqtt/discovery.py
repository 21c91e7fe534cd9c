"""Home Assistant MQTT Discovery for samsungcast2mqtt."""

from typing import Iterable

from samsung_cast_tv.characteristics import DeviceCharacteristic, Format, Perm, Unit
from samsung_cast_tv.config import DEFAULT_DISCOVERY_PREFIX, MANUFACTURER, TOPIC_ROOT

from . import __version__

# Characteristic key -> icon
ICONS = {
    "power": "mdi:power",
    "volume": "mdi:volume-high",
    "volume_step": "mdi:volume-plus",
    "channel": "mdi:numeric",
    "key": "mdi:remote",
}

# Remote buttons published on the key topic
REMOTE_BUTTONS = [
    ("mute", "Mute", "mdi:volume-off"),
    ("up", "Up", "mdi:chevron-up"),
    ("down", "Down", "mdi:chevron-down"),
    ("left", "Left", "mdi:chevron-left"),
    ("right", "Right", "mdi:chevron-right"),
    ("enter", "OK", "mdi:checkbox-marked-circle"),
    ("return", "Back", "mdi:arrow-left"),
    ("home", "Home", "mdi:home"),
    ("menu", "Menu", "mdi:menu"),
    ("source", "Source", "mdi:import"),
]


def state_topic(device_id: str, name: str) -> str:
    return f"{TOPIC_ROOT}/{device_id}/state/{name}"


def command_topic(device_id: str, name: str) -> str:
    return f"{TOPIC_ROOT}/{device_id}/set/{name}"


def get_device_info(config: dict, device_id: str) -> dict:
    """Generate Home Assistant device info from config."""
    return {
        "identifiers": [f"samsungcast_{device_id}"],
        "name": config.get("name") or "Samsung TV",
        "manufacturer": MANUFACTURER,
        "model": "Samsung TV + Chromecast",
        "sw_version": __version__,
    }


def get_availability(device_id: str) -> list[dict]:
    """Generate availability config."""
    return [
        {
            "topic": state_topic(device_id, "available"),
            "payload_available": "online",
            "payload_not_available": "offline",
        }
    ]


def _component(characteristic: DeviceCharacteristic) -> str:
    if characteristic.format is Format.BOOL:
        return "switch"
    if characteristic.format is Format.INT:
        return "number"
    return "text"


def generate_characteristic_discovery(
    config: dict, device_id: str, discovery_prefix: str, characteristic: DeviceCharacteristic
) -> tuple[str, dict]:
    """Generate the entity for one accessory characteristic.

    Returns:
        Tuple of (topic, payload)
    """
    key = characteristic.key
    component = _component(characteristic)
    topic = f"{discovery_prefix}/{component}/samsungcast_{device_id}_{key}/config"

    payload = {
        "name": characteristic.name,
        "unique_id": f"samsungcast_{device_id}_{key}",
        "object_id": f"samsungcast_{device_id}_{key}",
        "device": get_device_info(config, device_id),
        "availability": get_availability(device_id),
        "command_topic": command_topic(device_id, key),
        "icon": ICONS.get(key, "mdi:television"),
    }
    if Perm.READ in characteristic.perms and key != "volume_step":
        payload["state_topic"] = state_topic(device_id, key)

    if component == "switch":
        payload.update({
            "payload_on": "ON",
            "payload_off": "OFF",
            "state_on": "ON",
            "state_off": "OFF",
        })
    elif component == "number":
        payload.update({
            "min": characteristic.min_value,
            "max": characteristic.max_value,
            "step": characteristic.min_step or 1,
            "mode": "box" if key == "volume_step" else "slider",
        })
        if characteristic.unit is Unit.PERCENTAGE and key == "volume":
            payload["unit_of_measurement"] = "%"
    elif key == "channel":
        payload["pattern"] = "^[0-9]{1,4}$"

    return topic, payload


def generate_button_discovery(
    config: dict, device_id: str, discovery_prefix: str, button_id: str, name: str, icon: str
) -> tuple[str, dict]:
    """Generate button discovery payload for remote keys."""
    topic = f"{discovery_prefix}/button/samsungcast_{device_id}_{button_id}/config"

    payload = {
        "name": name,
        "unique_id": f"samsungcast_{device_id}_{button_id}",
        "object_id": f"samsungcast_{device_id}_{button_id}",
        "device": get_device_info(config, device_id),
        "availability": get_availability(device_id),
        "command_topic": command_topic(device_id, "mute" if button_id == "mute" else "key"),
        "payload_press": button_id.upper(),
        "icon": icon,
    }

    return topic, payload


def generate_all_discoveries(
    config: dict, device_id: str, characteristics: Iterable[DeviceCharacteristic]
) -> list[tuple[str, dict]]:
    """Generate all discovery payloads.

    Args:
        config: Configuration dictionary
        device_id: Unique device identifier
        characteristics: Characteristics exposed by the accessory

    Returns:
        List of (topic, payload) tuples
    """
    discovery_prefix = config.get("mqtt", {}).get("discovery_prefix", DEFAULT_DISCOVERY_PREFIX)
    discoveries = [
        generate_characteristic_discovery(config, device_id, discovery_prefix, characteristic)
        for characteristic in characteristics
    ]

    for button_id, name, icon in REMOTE_BUTTONS:
        discoveries.append(
            generate_button_discovery(config, device_id, discovery_prefix, button_id, name, icon)
        )

    return discoveries

