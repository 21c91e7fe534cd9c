"""All constants for Samsung/Chromecast TV control - single source of truth.

Durations in the user-facing config are milliseconds, everything below the
composition root works in seconds.
"""

# === Samsung Remote ===
DEFAULT_SAMSUNG_PORT = 8001          # Websocket remote API (no token pairing)
DEFAULT_SAMSUNG_TIMEOUT_MS = 1000    # Alive check / request timeout
DEFAULT_REMOTE_NAME = "SamsungCastTV"

# === Chromecast ===
DEFAULT_CAST_PORT = 8009
DEFAULT_CAST_TIMEOUT_MS = 10000
DEFAULT_RECEIVER_APP_ID = "CC1AD845"  # Default Media Receiver

# === Sequencing / Polling ===
DEFAULT_SEND_DELAY_MS = 400
DEFAULT_POLL_INTERVAL_MS = 2000

# === Input bounds ===
CHANNEL_MIN = 1
CHANNEL_MAX = 9999
VOLUME_MIN = 0
VOLUME_MAX = 100
VOLUME_STEP_MIN = -10
VOLUME_STEP_MAX = 10

# === Accessory defaults ===
DEFAULT_NAME = "Samsung TV"
DEFAULT_CHANNEL = "1"
DEFAULT_KEY = "TV"
MANUFACTURER = "Samsung TV"
MODEL = "1.0.0"

# === MQTT bridge ===
DEFAULT_MQTT_PORT = 1883
DEFAULT_MQTT_CLIENT_ID = "samsungcast2mqtt"
DEFAULT_DISCOVERY_PREFIX = "homeassistant"
TOPIC_ROOT = "samsungcast2mqtt"
