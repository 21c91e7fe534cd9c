"""MQTT bridge for Samsung TV + Chromecast control."""

__version__ = "1.0.0"
