#!/usr/bin/env python3

import argparse
import json
import sys

from pathlib import Path
from typing import Any, Optional, TextIO

from .config.loader import get_config_path, load_settings
from .controller import WidgetController
from .errors import PowerWidgetError
from .events import Broadcast, ConfigChanged, Event
from .host import TerminalHost
from .utils.debug import debug_log


def parse_setting_value(value: str) -> Any:
    """Parse a command line setting value, keeping non-integers as strings."""
    try:
        return int(value)
    except ValueError:
        return value


def parse_event_line(line: str) -> Optional[dict[str, Any]]:
    """Parse one JSON line of replay input.

    Args:
        line: Raw input line

    Returns:
        Decoded object, or None for blank lines

    Raises:
        ValueError: If the line is not a JSON object with "action" or "key"
    """
    line = line.strip()
    if not line:
        return None

    data = json.loads(line)
    if not isinstance(data, dict) or ("action" not in data and "key" not in data):
        raise ValueError("expected an object with 'action' or 'key'")
    return data


def build_widget(
    settings_path: Optional[Path] = None, width: Optional[int] = None
) -> tuple[WidgetController, TerminalHost]:
    """Build a widget on a terminal host from the settings file."""
    settings = load_settings(settings_path)
    host = TerminalHost(width)
    controller = WidgetController(host, settings)

    controller.setup_widget()
    controller.update_visibility()
    controller.update_widget()
    return controller, host


def apply_replay_line(controller: WidgetController, data: dict[str, Any]) -> Event:
    """Deliver one replay instruction through the widget's channels.

    Settings lines are written to the store so observers fire as usual;
    action lines go through the broadcast hub.
    """
    if "key" in data:
        key = str(data["key"])
        settings = controller.settings
        if data.get("value") is None:
            settings.remove(key)
        else:
            settings.put(key, data["value"])
        return ConfigChanged(key)

    action = str(data["action"])
    payload = data.get("payload") or {}
    controller.hub.send(action, payload)
    return Broadcast(action, payload)


def replay(controller: WidgetController, host: TerminalHost, stream: TextIO) -> int:
    """Apply JSON-line events from a stream, printing the strip after each.

    The settings file is re-read before each line, so edits made to it by
    other programs are delivered like any other settings change.

    Returns:
        Number of lines that could not be applied
    """
    failures = 0
    for lineno, line in enumerate(stream, start=1):
        controller.settings.reload()
        try:
            data = parse_event_line(line)
        except ValueError as e:
            print(f"Warning: line {lineno}: {e}", file=sys.stderr)
            failures += 1
            continue
        if data is None:
            continue

        event = apply_replay_line(controller, data)
        debug_log(f"Replayed {event}")
        print(host.render())
    return failures


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured argument parser
    """
    from . import __version__

    parser = argparse.ArgumentParser(
        prog="power-widget",
        description="Power widget - a configurable strip of toggle indicators",
        epilog="When no command is given, renders the widget once.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help=f"settings file (default: {get_config_path()})",
    )
    parser.add_argument(
        "--width", type=int, default=None, help="display width in columns"
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("render", help="render the widget once")
    subparsers.add_parser(
        "replay", help="apply JSON-line events from stdin, rendering after each"
    )
    set_parser = subparsers.add_parser("set", help="write one setting")
    set_parser.add_argument("key")
    set_parser.add_argument("value")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.command == "set":
        settings = load_settings(args.settings)
        settings.put(args.key, parse_setting_value(args.value))
        return 0

    try:
        controller, host = build_widget(args.settings, args.width)
    except PowerWidgetError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "replay":
        failures = replay(controller, host, sys.stdin)
        return 1 if failures else 0

    print(host.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
