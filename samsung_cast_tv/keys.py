"""Remote key constants for Samsung TVs.

Key identifiers are those understood by the Samsung remote control API
(legacy port 55000 and websocket port 8001/8002 share the same names).
"""

# Power
KEY_POWER = "KEY_POWER"
KEY_POWERON = "KEY_POWERON"
KEY_POWEROFF = "KEY_POWEROFF"

# Navigation
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_LEFT = "KEY_LEFT"
KEY_RIGHT = "KEY_RIGHT"
KEY_ENTER = "KEY_ENTER"

# Menu/Back
KEY_MENU = "KEY_MENU"
KEY_RETURN = "KEY_RETURN"
KEY_EXIT = "KEY_EXIT"
KEY_HOME = "KEY_HOME"
KEY_TOOLS = "KEY_TOOLS"
KEY_GUIDE = "KEY_GUIDE"
KEY_INFO = "KEY_INFO"
KEY_SOURCE = "KEY_SOURCE"

# Volume
KEY_VOLUME_UP = "KEY_VOLUP"
KEY_VOLUME_DOWN = "KEY_VOLDOWN"
KEY_MUTE = "KEY_MUTE"

# Playback
KEY_PLAY = "KEY_PLAY"
KEY_PAUSE = "KEY_PAUSE"
KEY_STOP = "KEY_STOP"
KEY_FAST_FORWARD = "KEY_FF"
KEY_REWIND = "KEY_REWIND"

# Numbers
KEY_0 = "KEY_0"
KEY_1 = "KEY_1"
KEY_2 = "KEY_2"
KEY_3 = "KEY_3"
KEY_4 = "KEY_4"
KEY_5 = "KEY_5"
KEY_6 = "KEY_6"
KEY_7 = "KEY_7"
KEY_8 = "KEY_8"
KEY_9 = "KEY_9"

# Channel
KEY_CHANNEL_UP = "KEY_CHUP"
KEY_CHANNEL_DOWN = "KEY_CHDOWN"
KEY_PREVIOUS_CHANNEL = "KEY_PRECH"
KEY_CHANNEL_LIST = "KEY_CH_LIST"

# Color buttons
KEY_RED = "KEY_RED"
KEY_GREEN = "KEY_GREEN"
KEY_YELLOW = "KEY_YELLOW"
KEY_BLUE = "KEY_CYAN"

# Sources
KEY_TV = "KEY_TV"
KEY_HDMI = "KEY_HDMI"
KEY_HDMI1 = "KEY_HDMI1"
KEY_HDMI2 = "KEY_HDMI2"
KEY_HDMI3 = "KEY_HDMI3"
KEY_HDMI4 = "KEY_HDMI4"

DIGIT_KEYS = {
    "0": KEY_0,
    "1": KEY_1,
    "2": KEY_2,
    "3": KEY_3,
    "4": KEY_4,
    "5": KEY_5,
    "6": KEY_6,
    "7": KEY_7,
    "8": KEY_8,
    "9": KEY_9,
}

ALL_KEYS = frozenset([
    KEY_POWER, KEY_POWERON, KEY_POWEROFF,
    KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_ENTER,
    KEY_MENU, KEY_RETURN, KEY_EXIT, KEY_HOME, KEY_TOOLS, KEY_GUIDE, KEY_INFO, KEY_SOURCE,
    KEY_VOLUME_UP, KEY_VOLUME_DOWN, KEY_MUTE,
    KEY_PLAY, KEY_PAUSE, KEY_STOP, KEY_FAST_FORWARD, KEY_REWIND,
    *DIGIT_KEYS.values(),
    KEY_CHANNEL_UP, KEY_CHANNEL_DOWN, KEY_PREVIOUS_CHANNEL, KEY_CHANNEL_LIST,
    KEY_RED, KEY_GREEN, KEY_YELLOW, KEY_BLUE,
    KEY_TV, KEY_HDMI, KEY_HDMI1, KEY_HDMI2, KEY_HDMI3, KEY_HDMI4,
])

# Friendly name mapping for the CLI and the MQTT key topic
KEY_NAME_MAP = {
    "power": KEY_POWER,
    "on": KEY_POWERON,
    "off": KEY_POWEROFF,
    "ok": KEY_ENTER,
    "select": KEY_ENTER,
    "back": KEY_RETURN,
    "volumeup": KEY_VOLUME_UP,
    "volup": KEY_VOLUME_UP,
    "vol+": KEY_VOLUME_UP,
    "volumedown": KEY_VOLUME_DOWN,
    "voldown": KEY_VOLUME_DOWN,
    "vol-": KEY_VOLUME_DOWN,
    "channelup": KEY_CHANNEL_UP,
    "ch+": KEY_CHANNEL_UP,
    "channeldown": KEY_CHANNEL_DOWN,
    "ch-": KEY_CHANNEL_DOWN,
    "forward": KEY_FAST_FORWARD,
    "ff": KEY_FAST_FORWARD,
    "blue": KEY_BLUE,
    "cyan": KEY_BLUE,
}


def get_key(name: str) -> str:
    """Get key constant from friendly name.

    Unknown names are passed through as ``KEY_<NAME>`` so any key the TV
    understands can be sent.

    Args:
        name: Key name (e.g., 'menu', 'volup', 'KEY_MENU')

    Returns:
        Key constant string (e.g., 'KEY_MENU')
    """
    name_stripped = name.strip()
    name_lower = name_stripped.lower()

    if name_lower in KEY_NAME_MAP:
        return KEY_NAME_MAP[name_lower]

    upper = name_stripped.upper()
    if upper.startswith("KEY_"):
        return upper

    return f"KEY_{upper}"
