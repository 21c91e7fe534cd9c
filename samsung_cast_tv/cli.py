#!/usr/bin/env python3
"""Command-line interface for Samsung TV + Chromecast control."""

import argparse
import asyncio
import logging
import sys

from .accessory import SamsungCastTV
from .config import load_config
from .exceptions import SamsungCastTVError
from .keys import ALL_KEYS, KEY_NAME_MAP
from .reconciler import CachedState


def setup_logging(debug: bool = False):
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    for noisy in ("pychromecast", "websocket", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def create_tv(args) -> SamsungCastTV:
    """Create the accessory from the config file and command-line overrides."""
    config = load_config(args.config, use_cache=False)
    if args.samsung_ip:
        config["samsung"]["ip"] = args.samsung_ip
    if args.chromecast_ip:
        config["chromecast"]["ip"] = args.chromecast_ip

    return SamsungCastTV(config)


async def cmd_status(tv: SamsungCastTV, args) -> int:
    """Show power and volume."""
    power = await tv.async_get_power()
    print(f"Power: {'on' if power else 'off'}")
    if await tv.async_reconnect():
        print(f"Volume: {await tv.async_get_volume()}")
    else:
        print("Volume: unavailable (Chromecast not connected)")
    return 0


async def cmd_power(tv: SamsungCastTV, args) -> int:
    """Turn the TV on or off."""
    on = args.state == "on"
    if on:
        # Power on may fall back to the Chromecast
        await tv.async_reconnect()
    await tv.async_set_power(on)
    print(f"Power {args.state} sent")
    return 0


async def cmd_volume(tv: SamsungCastTV, args) -> int:
    """Chromecast volume get/set, TV volume steps."""
    if args.action == "step":
        await tv.async_set_volume_step(args.amount)
        print(f"Volume stepped by {args.amount}")
        return 0

    await tv.async_reconnect()
    if args.action == "get":
        print(f"Volume: {await tv.async_get_volume()}")
    else:
        if args.amount is None:
            print("volume set needs an amount", file=sys.stderr)
            return 1
        confirmed = await tv.async_set_volume(args.amount)
        print(f"Volume set to {confirmed}")
    return 0


async def cmd_mute(tv: SamsungCastTV, args) -> int:
    """Toggle mute on the TV."""
    await tv.async_toggle_mute()
    print("Mute toggled")
    return 0


async def cmd_channel(tv: SamsungCastTV, args) -> int:
    """Enter a channel number."""
    await tv.async_set_channel(args.channel)
    print(f"Channel {tv.get_channel()} sent")
    return 0


async def cmd_key(tv: SamsungCastTV, args) -> int:
    """Send a key press."""
    await tv.async_set_key(args.key)
    print(f"Key {args.key} sent")
    return 0


async def cmd_watch(tv: SamsungCastTV, args) -> int:
    """Poll both devices and print every state change."""
    last = [None]

    def on_state(state: CachedState):
        current = (state.power_on, state.volume)
        if current != last[0]:
            last[0] = current
            volume = "-" if state.volume is None else state.volume
            print(f"power={'on' if state.power_on else 'off'} volume={volume}", flush=True)

    tv.reconciler.add_listener(on_state)
    async with tv:
        await asyncio.Event().wait()
    return 0


def cmd_keys(args) -> int:
    """List available keys."""
    print("Keys (any other name is sent as KEY_<NAME>):")
    for key in sorted(ALL_KEYS):
        print(f"  {key[len('KEY_'):].lower()}")
    print("\nAliases:")
    for name, key in sorted(KEY_NAME_MAP.items()):
        print(f"  {name:<12} -> {key}")
    return 0


async def run_command(args) -> int:
    tv = create_tv(args)
    try:
        return await args.func(tv, args)
    finally:
        await tv.async_stop()


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="samsung-cast-tv",
        description="Control a Samsung TV and its Chromecast from the command line",
    )
    parser.add_argument("-c", "--config", help="Path to config file (default: config.yaml)")
    parser.add_argument("--samsung-ip", help="TV IP address (overrides config)")
    parser.add_argument("--chromecast-ip", help="Chromecast IP address (overrides config)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    p_status = subparsers.add_parser("status", help="Show power and volume")
    p_status.set_defaults(func=cmd_status)

    p_power = subparsers.add_parser("power", help="Turn the TV on or off")
    p_power.add_argument("state", choices=["on", "off"])
    p_power.set_defaults(func=cmd_power)

    p_vol = subparsers.add_parser("volume", aliases=["vol"], help="Volume control")
    p_vol.add_argument("action", choices=["get", "set", "step"], help="get/set Chromecast volume, step TV volume")
    p_vol.add_argument("amount", type=int, nargs="?", help="Percent for set, key presses for step")
    p_vol.set_defaults(func=cmd_volume)

    p_mute = subparsers.add_parser("mute", help="Toggle mute")
    p_mute.set_defaults(func=cmd_mute)

    p_channel = subparsers.add_parser("channel", aliases=["ch"], help="Enter a channel number")
    p_channel.add_argument("channel", help="Channel number (1-9999)")
    p_channel.set_defaults(func=cmd_channel)

    p_key = subparsers.add_parser("key", help="Send a key press")
    p_key.add_argument("key", help="Key name (e.g., menu, source, hdmi1)")
    p_key.set_defaults(func=cmd_key)

    p_keys = subparsers.add_parser("keys", help="List available keys")
    p_keys.set_defaults(func=None)

    p_watch = subparsers.add_parser("watch", help="Print state changes until interrupted")
    p_watch.set_defaults(func=cmd_watch)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "keys":
        return cmd_keys(args)

    setup_logging(args.debug)

    if getattr(args, "action", None) == "step" and args.amount is None:
        args.amount = 1

    try:
        return asyncio.run(run_command(args))
    except KeyboardInterrupt:
        return 0
    except (SamsungCastTVError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
