"""Main bridge class for samsungcast2mqtt."""

import asyncio
import json
import logging
import signal
from typing import Awaitable, Callable, Optional

import paho.mqtt.client as mqtt

from samsung_cast_tv.accessory import SamsungCastTV
from samsung_cast_tv.config import TOPIC_ROOT, get_device_id, validate_config
from samsung_cast_tv.exceptions import BusyError, SamsungCastTVError
from samsung_cast_tv.executor import run_blocking
from samsung_cast_tv.reconciler import CachedState

from .discovery import command_topic, generate_all_discoveries, state_topic

logger = logging.getLogger(__name__)

COMMANDS = ("power", "volume", "volume_step", "mute", "channel", "key")


class SamsungCastMQTTBridge:
    """Bridge between MQTT broker and the Samsung TV + Chromecast accessory."""

    def __init__(self, config: dict, tv: Optional[SamsungCastTV] = None):
        """Initialize the bridge.

        Args:
            config: Configuration dictionary
            tv: Accessory to drive (built from config if None)
        """
        self.config = config
        self.device_id = get_device_id(config)
        self.running = False

        self._tv = tv
        self._broker_client: Optional[mqtt.Client] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._reconnect_task: Optional[asyncio.Task] = None
        self._remove_listener: Optional[Callable[[], None]] = None

        # Last retained value per state topic, to publish changes only
        self._published: dict[str, str] = {}

        self._handlers: dict[str, Callable[[str], Awaitable[None]]] = {
            "power": self._handle_power,
            "volume": self._handle_volume,
            "volume_step": self._handle_volume_step,
            "mute": self._handle_mute,
            "channel": self._handle_channel,
            "key": self._handle_key,
        }

    @property
    def tv(self) -> SamsungCastTV:
        if self._tv is None:
            self._tv = SamsungCastTV(self.config)
        return self._tv

    def _setup_broker_client(self):
        """Set up MQTT broker client."""
        mqtt_config = self.config.get("mqtt", {})
        # Make client_id unique by including device_id
        base_id = mqtt_config.get("client_id", "samsungcast2mqtt")
        client_id = f"{base_id}_{self.device_id}"

        self._broker_client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
        )

        username = mqtt_config.get("username")
        password = mqtt_config.get("password")
        if username:
            self._broker_client.username_pw_set(username, password)

        self._broker_client.on_connect = self._on_broker_connect
        self._broker_client.on_disconnect = self._on_broker_disconnect
        self._broker_client.on_message = self._on_broker_message

        # Last Will and Testament
        self._broker_client.will_set(
            state_topic(self.device_id, "available"),
            payload="offline",
            qos=1,
            retain=True,
        )

    # Broker callbacks (paho network thread)
    def _on_broker_connect(self, client, userdata, flags, reason_code, properties):
        """Handle broker connection."""
        if reason_code.is_failure:
            logger.error(f"Failed to connect to MQTT broker: {reason_code}")
            return

        logger.info("Connected to MQTT broker")

        topics = [(command_topic(self.device_id, command), 0) for command in COMMANDS]
        client.subscribe(topics)
        logger.info(f"Subscribed to command topics: {TOPIC_ROOT}/{self.device_id}/set/#")

        if self.config.get("options", {}).get("discovery", True):
            self._publish_discovery()

        self._publish_availability(True)

        # Retained state may be gone after a broker restart; republish everything.
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._republish_state)

    def _on_broker_disconnect(self, client, userdata, flags, reason_code, properties):
        """Handle broker disconnection."""
        logger.warning(f"Disconnected from MQTT broker: {reason_code}")

    def _on_broker_message(self, client, userdata, msg):
        """Handle incoming MQTT messages."""
        topic = msg.topic
        try:
            payload = msg.payload.decode("utf-8").strip()
        except UnicodeDecodeError:
            logger.warning(f"Ignoring non UTF-8 payload on {topic}")
            return

        logger.debug(f"Received: {topic} = {payload}")

        parts = topic.split("/")
        if len(parts) >= 4 and parts[2] == "set" and self._loop is not None:
            future = asyncio.run_coroutine_threadsafe(self.async_handle_command(parts[3], payload), self._loop)
            future.add_done_callback(self._log_command_result)

    @staticmethod
    def _log_command_result(future):
        """Log anything a dispatched command raised."""
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"Unexpected error handling command: {exc}", exc_info=exc)

    # Commands (event loop)
    async def async_handle_command(self, command: str, payload: str):
        """Handle a command from MQTT."""
        logger.info(f"Command: {command} = {payload}")

        handler = self._handlers.get(command)
        if handler is None:
            logger.warning(f"Unknown command: {command}")
            return

        try:
            await handler(payload)
        except BusyError as e:
            logger.warning(f"Ignored {command}: {e}")
        except (SamsungCastTVError, ValueError, OverflowError) as e:
            logger.error(f"Command {command} failed: {e}")

    async def _handle_power(self, payload: str):
        """Handle power command."""
        payload = payload.upper()
        if payload not in ("ON", "OFF"):
            raise ValueError(f"Invalid power value: {payload}")
        await self.tv.async_set_power(payload == "ON")
        self._publish_state("power", payload)

    async def _handle_volume(self, payload: str):
        """Handle Chromecast volume command."""
        volume = int(float(payload))
        confirmed = await self.tv.async_set_volume(volume)
        self._publish_state("volume", str(confirmed))

    async def _handle_volume_step(self, payload: str):
        """Handle TV volume step command."""
        await self.tv.async_set_volume_step(int(float(payload)))

    async def _handle_mute(self, payload: str):
        """Handle mute command (toggle)."""
        await self.tv.async_toggle_mute()

    async def _handle_channel(self, payload: str):
        """Handle channel command."""
        await self.tv.async_set_channel(payload)
        self._publish_state("channel", self.tv.get_channel())

    async def _handle_key(self, payload: str):
        """Handle key command."""
        await self.tv.async_set_key(payload)
        self._publish_state("key", self.tv.get_key())
        logger.info(f"Sent key: {payload}")

    # Publishing
    def _on_state(self, state: CachedState):
        """Publish reconciled state (reconciler listener)."""
        self._publish_state("power", "ON" if state.power_on else "OFF")
        if state.volume is not None:
            self._publish_state("volume", str(state.volume))

    def _republish_state(self):
        self._published.clear()
        self._on_state(self.tv.state)
        self._publish_state("channel", self.tv.get_channel())
        self._publish_state("key", self.tv.get_key())

    def _publish_state(self, state_type: str, value: str):
        """Publish state to MQTT broker if it changed."""
        if self._published.get(state_type) == value:
            return
        if self._broker_client and self._broker_client.is_connected():
            topic = state_topic(self.device_id, state_type)
            self._broker_client.publish(topic, value, qos=0, retain=True)
            self._published[state_type] = value
            logger.debug(f"Published: {topic} = {value}")

    def _publish_availability(self, available: bool):
        """Publish availability to MQTT broker."""
        if self._broker_client and self._broker_client.is_connected():
            value = "online" if available else "offline"
            self._broker_client.publish(state_topic(self.device_id, "available"), value, qos=1, retain=True)
            logger.info(f"Availability: {value}")

    def _publish_discovery(self):
        """Publish Home Assistant discovery messages."""
        logger.info("Publishing Home Assistant discovery...")

        discoveries = generate_all_discoveries(self.config, self.device_id, self.tv.characteristics)
        for topic, payload in discoveries:
            self._broker_client.publish(topic, json.dumps(payload), qos=0, retain=True)
            logger.debug(f"Discovery: {topic}")

        logger.info(f"Published {len(discoveries)} discovery messages")

    async def _async_reconnect_chromecast(self):
        """Retry the Chromecast session while it is down."""
        interval = self.config.get("options", {}).get("reconnect_interval", 30)
        while self.running:
            await asyncio.sleep(interval)
            if not self.tv.secondary.is_connected:
                logger.info("Chromecast not connected, attempting to reconnect...")
                if await self.tv.async_reconnect():
                    logger.info("Reconnected to Chromecast")

    # Lifecycle
    async def async_start(self):
        """Start the bridge."""
        logger.info("Starting samsungcast2mqtt bridge...")

        errors = validate_config(self.config, for_bridge=True)
        if errors:
            for error in errors:
                logger.error(f"Config error: {error}")
            raise ValueError("Invalid configuration")

        self._loop = asyncio.get_running_loop()
        self.running = True

        # Build the accessory on the loop before paho callbacks can reach it
        tv = self.tv
        self._setup_broker_client()

        mqtt_config = self.config.get("mqtt", {})
        host = mqtt_config.get("host", "localhost")
        port = mqtt_config.get("port", 1883)
        reconnect_interval = self.config.get("options", {}).get("reconnect_interval", 30)

        logger.info(f"Connecting to MQTT broker at {host}:{port}")
        while self.running:
            try:
                await run_blocking(self._broker_client.connect, host, port, keepalive=60)
                break
            except OSError as e:
                logger.error(f"Failed to connect to MQTT broker: {e}")
                logger.info(f"Retrying in {reconnect_interval} seconds...")
                await asyncio.sleep(reconnect_interval)
        if not self.running:
            return
        self._broker_client.loop_start()

        self._remove_listener = tv.reconciler.add_listener(self._on_state)
        await tv.async_start()
        self._reconnect_task = asyncio.ensure_future(self._async_reconnect_chromecast())

        logger.info("samsungcast2mqtt bridge started")

    async def async_stop(self):
        """Stop the bridge."""
        logger.info("Stopping samsungcast2mqtt bridge...")
        self.running = False

        if self._reconnect_task is not None:
            self._reconnect_task.cancel()
            self._reconnect_task = None

        if self._remove_listener is not None:
            self._remove_listener()
            self._remove_listener = None

        self._publish_availability(False)

        if self._tv is not None:
            await self._tv.async_stop()

        if self._broker_client:
            self._broker_client.loop_stop()
            self._broker_client.disconnect()

        if self._stop_event is not None:
            self._stop_event.set()

        logger.info("samsungcast2mqtt bridge stopped")

    async def async_run_forever(self):
        """Run the bridge until SIGINT/SIGTERM."""
        self._stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signum, self._stop_event.set)

        await self.async_start()
        try:
            await self._stop_event.wait()
        finally:
            if self.running:
                await self.async_stop()

    def run_forever(self):
        """Run the bridge until interrupted."""
        asyncio.run(self.async_run_forever())
