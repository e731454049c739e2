"""Button list parsing."""

from collections.abc import Iterable
from typing import Optional

from .defaults import BUTTON_DELIMITER, BUTTONS_DEFAULT


def parse_button_list(raw: Optional[str]) -> list[str]:
    """Split a raw button list setting into indicator ids.

    Tokens are returned in their original order. Duplicates and ids that no
    indicator recognizes are kept; the registry decides what to skip.

    Args:
        raw: Value of the button list setting, or None when unset

    Returns:
        Ordered list of indicator ids (the default list when raw is None)
    """
    if raw is None:
        return list(BUTTONS_DEFAULT)
    return raw.split(BUTTON_DELIMITER)


def join_button_list(ids: Iterable[str]) -> str:
    """Join indicator ids into a button list setting value."""
    return BUTTON_DELIMITER.join(ids)
