"""Debug logging utilities."""

import os
import sys
import time


def debug_log(message: str, indicator_id: str = "") -> None:
    """Log debug messages to the widget debug log if debug mode is enabled.

    Args:
        message: Debug message to log
        indicator_id: Optional indicator the message is about
    """
    if not os.getenv("POWER_WIDGET_DEBUG"):
        return

    logs_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "logs")
    log_file = os.path.join(logs_dir, "power_widget_debug.log")
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")

    indicator_prefix = f"[{indicator_id}] " if indicator_id else ""
    log_message = f"[{timestamp}] {indicator_prefix}{message}\n"

    try:
        os.makedirs(logs_dir, exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(log_message)
    except OSError:
        print(
            f"DEBUG (couldn't write to {log_file}): {indicator_prefix}{message}",
            file=sys.stderr,
        )


def warn(message: str, indicator_id: str = "") -> None:
    """Report a non-fatal problem on stderr and in the debug log."""
    indicator_prefix = f"[{indicator_id}] " if indicator_id else ""
    print(f"Warning: {indicator_prefix}{message}", file=sys.stderr)
    debug_log(f"WARNING {message}", indicator_id)


def error(message: str, indicator_id: str = "") -> None:
    """Report a failure on stderr and in the debug log."""
    indicator_prefix = f"[{indicator_id}] " if indicator_id else ""
    print(f"Error: {indicator_prefix}{message}", file=sys.stderr)
    debug_log(f"ERROR {message}", indicator_id)
