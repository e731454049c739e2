"""Row layout selection for the indicator strip."""

from .types import ContainerKind, LayoutDecision

# Above this many indicators the row becomes horizontally scrollable
LAYOUT_SCROLL_BUTTON_THRESHOLD = 6


def get_button_width(total_width: int) -> int:
    """Width of one indicator for a given display width.

    Always a fixed fraction of the display, so indicators keep their size
    when others are added or removed.
    """
    return total_width // LAYOUT_SCROLL_BUTTON_THRESHOLD


def decide(indicator_count: int, total_width: int) -> LayoutDecision:
    """Choose the row container for a number of loaded indicators.

    Args:
        indicator_count: Number of indicators that loaded successfully
        total_width: Display width in pixels

    Returns:
        Layout decision with container kind and per-indicator width
    """
    if indicator_count > LAYOUT_SCROLL_BUTTON_THRESHOLD:
        kind = ContainerKind.SCROLLABLE
    else:
        kind = ContainerKind.FIXED
    return LayoutDecision(
        container_kind=kind, per_item_width=get_button_width(total_width)
    )
