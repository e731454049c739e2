"""Indicator registry for managing available and loaded indicators."""

from collections.abc import Iterator
from enum import Enum
from typing import Any, Callable, Optional

from ..config.loader import SettingsStore
from ..host import IndicatorView
from ..utils.debug import debug_log, error
from .base import Indicator, IndicatorListener

# Catalog of indicator id -> indicator class, filled at import time
_INDICATOR_TYPES: dict[str, type[Indicator]] = {}


def register_indicator(
    indicator_id: str,
    display_name: str = "",
    description: str = "",
) -> Callable[[type[Indicator]], type[Indicator]]:
    """Decorator to register indicator classes with metadata.

    Usage:
        @register_indicator("toggleWifi", display_name="Wi-Fi",
                            description="Wireless network radio")
        class WifiIndicator(SettingToggleIndicator):
            ...

    Args:
        indicator_id: Identifier used in the button list (e.g., "toggleWifi")
        display_name: Human-readable name (defaults to the id without "toggle")
        description: Description of what the indicator controls
    """

    def decorator(cls: type[Indicator]) -> type[Indicator]:
        cls.indicator_id = indicator_id
        cls.display_name = display_name or indicator_id.replace("toggle", "", 1)
        cls.description = description

        _INDICATOR_TYPES[indicator_id] = cls
        return cls

    return decorator


def get_indicator_type(indicator_id: str) -> Optional[type[Indicator]]:
    """Get indicator class by id.

    Args:
        indicator_id: Indicator identifier

    Returns:
        Indicator class or None if not found
    """
    return _INDICATOR_TYPES.get(indicator_id)


def recognized_ids() -> set[str]:
    """Get every indicator id that can be loaded."""
    return set(_INDICATOR_TYPES)


def get_all_indicator_types() -> dict[str, type[Indicator]]:
    return dict(_INDICATOR_TYPES)


class LoadResult(Enum):
    """Outcome of loading one indicator."""

    LOADED = "loaded"
    UNRECOGNIZED_ID = "unrecognized_id"
    INIT_FAILURE = "init_failure"

    def __bool__(self) -> bool:
        return self is LoadResult.LOADED


class IndicatorRegistry:
    """Loaded indicator instances for one widget, in build order.

    Every dispatch goes to every loaded instance; each instance ignores
    events it does not care about. A failure in one instance is reported
    and does not stop delivery to the rest.
    """

    def __init__(self, settings: SettingsStore):
        self._settings = settings
        self._loaded: list[tuple[str, Indicator]] = []
        self._click_listener: Optional[IndicatorListener] = None
        self._long_click_listener: Optional[IndicatorListener] = None

    def __len__(self) -> int:
        return len(self._loaded)

    def __iter__(self) -> Iterator[Indicator]:
        return iter(self.instances)

    @property
    def instances(self) -> list[Indicator]:
        return [indicator for _, indicator in self._loaded]

    @property
    def loaded_ids(self) -> list[str]:
        return [indicator_id for indicator_id, _ in self._loaded]

    def load(self, indicator_id: str, view: IndicatorView) -> LoadResult:
        """Create and retain an indicator for an id.

        The same id loaded twice gives two independent instances.

        Args:
            indicator_id: Identifier from the button list
            view: View handle the indicator draws into

        Returns:
            LoadResult describing the outcome
        """
        indicator_type = get_indicator_type(indicator_id)
        if indicator_type is None:
            return LoadResult.UNRECOGNIZED_ID

        try:
            indicator = indicator_type(self._settings)
            indicator.click_listener = self._dispatch_click
            indicator.long_click_listener = self._dispatch_long_click
            loaded = indicator.load(indicator_id, view)
        except Exception as e:
            error(f"Indicator failed to initialize: {e}", indicator_id)
            return LoadResult.INIT_FAILURE

        if not loaded:
            indicator.unload()
            error("Indicator setup failed", indicator_id)
            return LoadResult.INIT_FAILURE

        self._loaded.append((indicator_id, indicator))
        debug_log("Indicator loaded", indicator_id)
        return LoadResult.LOADED

    def unload_all(self) -> int:
        """Release every loaded indicator.

        Returns:
            Number of indicators released
        """
        released = self._loaded
        self._loaded = []
        for indicator_id, indicator in released:
            try:
                indicator.unload()
            except Exception as e:
                error(f"Indicator failed to unload: {e}", indicator_id)
        return len(released)

    def update_all(self) -> None:
        self._fan_out("update", lambda indicator: indicator.update_visual_state())

    def dispatch_broadcast(
        self, action: str, payload: Optional[dict[str, Any]] = None
    ) -> None:
        data = payload or {}
        self._fan_out(
            f"broadcast {action}",
            lambda indicator: indicator.handle_broadcast(action, data),
        )

    def dispatch_config_change(self, key: str) -> None:
        self._fan_out(
            f"setting change {key}",
            lambda indicator: indicator.handle_config_change(key),
        )

    def collect_observed_keys(self) -> set[str]:
        keys: set[str] = set()
        for indicator in self.instances:
            keys |= indicator.observed_keys()
        return keys

    def collect_event_classes(self) -> set[str]:
        actions: set[str] = set()
        for indicator in self.instances:
            actions |= indicator.broadcast_actions()
        return actions

    def set_global_click_listener(self, listener: Optional[IndicatorListener]) -> None:
        self._click_listener = listener

    def set_global_long_click_listener(
        self, listener: Optional[IndicatorListener]
    ) -> None:
        self._long_click_listener = listener

    def _fan_out(self, what: str, call: Callable[[Indicator], None]) -> None:
        # Snapshot so a handler that triggers a rebuild doesn't skew iteration
        for indicator_id, indicator in list(self._loaded):
            try:
                call(indicator)
            except Exception as e:
                error(f"Indicator failed during {what}: {e}", indicator_id)

    def _dispatch_click(self, indicator_id: str) -> None:
        if self._click_listener is not None:
            self._click_listener(indicator_id)

    def _dispatch_long_click(self, indicator_id: str) -> None:
        if self._long_click_listener is not None:
            self._long_click_listener(indicator_id)
