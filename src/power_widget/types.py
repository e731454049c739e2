"""Data types for the power widget."""

from dataclasses import dataclass
from enum import Enum


class IndicatorState(Enum):
    """Toggle state shown by an indicator."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    INTERMEDIATE = "intermediate"


class ContainerKind(Enum):
    """Row container holding the indicator views."""

    FIXED = "fixed"
    SCROLLABLE = "scrollable"


@dataclass(frozen=True)
class LayoutDecision:
    """Container choice and per-indicator width for one build."""

    container_kind: ContainerKind
    per_item_width: int

    @property
    def is_scrollable(self) -> bool:
        return self.container_kind is ContainerKind.SCROLLABLE

    @property
    def fading_edge_length(self) -> int:
        """Fading edge of a scrollable row, one indicator wide."""
        if self.is_scrollable:
            return self.per_item_width
        return 0
