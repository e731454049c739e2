"""ANSI styling for indicator cells."""

import re

from typing import Optional

COLORS = {
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "gray": "\033[90m",
    "dim": "\033[2m",
    "bold": "\033[1m",
    "reset": "\033[0m",
}
COLORS["grey"] = COLORS["gray"]

_ANSI_PATTERN = re.compile(r"\033\[[0-9;]*m")


def get_color_code(color_name: Optional[str]) -> str:
    """Look up the escape sequence for a color setting value.

    Unknown names map to "" so a bad color setting leaves the cell unstyled.
    """
    if not color_name:
        return ""
    return COLORS.get(color_name.lower(), "")


def colorize(text: str, color: Optional[str] = None, bold: bool = False) -> str:
    """Wrap text in ANSI codes.

    Args:
        text: Cell text
        color: Color name; None or "none" leaves the text uncolored
        bold: Whether to add bold

    Returns:
        Styled text, or the text unchanged when nothing applies
    """
    if not text or color == "none":
        return text

    prefix = COLORS["bold"] if bold else ""
    prefix += get_color_code(color)
    if not prefix:
        return text
    return f"{prefix}{text}{COLORS['reset']}"


def strip_colors(text: str) -> str:
    return _ANSI_PATTERN.sub("", text)
