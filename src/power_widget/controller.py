"""Widget controller: builds the indicator strip and owns its lifecycle."""

from enum import Enum
from typing import Optional

from .config.defaults import (
    EXPANDED_VIEW_WIDGET,
    WIDGET_BUTTONS,
    WIDGET_HIDDEN_VALUE,
    WIDGET_VISIBLE_VALUE,
)
from .config.loader import SettingsStore
from .config.parser import parse_button_list
from .errors import SubscriptionError, WidgetStateError
from .events import BroadcastHub, EventRouter
from .host import WidgetHost
from .indicators import builtin  # noqa: F401
from .indicators.base import IndicatorListener
from .indicators.registry import IndicatorRegistry, LoadResult
from .layout import decide
from .types import LayoutDecision
from .utils.debug import debug_log, error, warn


class WidgetState(Enum):
    UNINITIALIZED = "uninitialized"
    REBUILDING = "rebuilding"
    BUILT = "built"
    TORN_DOWN = "torn_down"


class WidgetController:
    """Top-level orchestrator for one indicator strip.

    Each controller owns its own registry and event router, so several
    widgets can live side by side on the same settings store and hub.
    """

    def __init__(
        self,
        host: WidgetHost,
        settings: SettingsStore,
        hub: Optional[BroadcastHub] = None,
    ):
        self._host = host
        self._settings = settings
        self._hub = hub if hub is not None else BroadcastHub()
        self._registry = IndicatorRegistry(settings)
        self._router = EventRouter(self, self._hub, settings)
        self._state = WidgetState.UNINITIALIZED
        self._display_width = 0
        self._layout: Optional[LayoutDecision] = None

        # get an initial width
        self.update_button_layout_width()

    @property
    def state(self) -> WidgetState:
        return self._state

    @property
    def layout(self) -> Optional[LayoutDecision]:
        return self._layout

    @property
    def settings(self) -> SettingsStore:
        return self._settings

    @property
    def registry(self) -> IndicatorRegistry:
        return self._registry

    @property
    def router(self) -> EventRouter:
        return self._router

    @property
    def hub(self) -> BroadcastHub:
        return self._hub

    @property
    def loaded_count(self) -> int:
        return len(self._registry)

    def setup_widget(self) -> None:
        """Tear down and rebuild the strip from the current button list.

        Indicators that are unknown or fail to load are reported and
        skipped. If re-subscribing to events fails, the controller goes back
        to the state it was in before the call and the error is re-raised.

        Raises:
            SubscriptionError: If event subscription fails
        """
        previous_state = self._state
        self._state = WidgetState.REBUILDING
        try:
            self._rebuild()
        except Exception:
            self._state = previous_state
            raise
        self._state = WidgetState.BUILT

    def update_widget(self) -> None:
        self._require_built("update_widget")
        self._registry.update_all()

    def update_visibility(self) -> None:
        """Show or hide the strip according to the visibility setting."""
        self._require_built("update_visibility")
        debug_log("Updating widget visibility")
        visible = (
            self._settings.get_int(EXPANDED_VIEW_WIDGET, WIDGET_HIDDEN_VALUE)
            == WIDGET_VISIBLE_VALUE
        )
        self._host.set_visible(visible)

    def toggle_visibility(self) -> None:
        """Flip visibility, ignoring the setting until update_visibility()."""
        self._host.set_visible(not self._host.is_visible())

    def update_button_layout_width(self) -> None:
        """Re-read the display width; indicators are not rebuilt."""
        self._display_width = self._host.display_width()
        self._layout = decide(len(self._registry), self._display_width)
        debug_log(
            f"Display width {self._display_width}, "
            f"button width {self._layout.per_item_width}"
        )

    def teardown(self) -> None:
        self._host.clear()
        self._router.unsubscribe()
        self._registry.unload_all()
        self._state = WidgetState.TORN_DOWN

    def set_global_button_on_click_listener(
        self, listener: Optional[IndicatorListener]
    ) -> None:
        self._registry.set_global_click_listener(listener)

    def set_global_button_on_long_click_listener(
        self, listener: Optional[IndicatorListener]
    ) -> None:
        self._registry.set_global_long_click_listener(listener)

    def _rebuild(self) -> None:
        debug_log("Clearing any old widget stuffs")
        self._host.clear()
        self._router.unsubscribe()
        released = self._registry.unload_all()
        debug_log(f"Released {released} indicators")

        raw = self._settings.get_string(WIDGET_BUTTONS)
        if raw is None:
            debug_log("Default buttons being loaded")
        indicator_ids = parse_button_list(raw)
        debug_log(f"Button list: {indicator_ids}")

        views = []
        for indicator_id in indicator_ids:
            view = self._host.inflate_indicator_view()
            result = self._registry.load(indicator_id, view)
            if result:
                views.append(view)
            elif result is LoadResult.UNRECOGNIZED_ID:
                warn(f"Unrecognized indicator {indicator_id!r}, skipping")
            else:
                debug_log("Skipping indicator that failed to load", indicator_id)

        self._layout = decide(len(views), self._display_width)
        container = self._host.create_container(
            self._layout.container_kind, self._layout.per_item_width
        )
        self._host.attach(container, views)

        try:
            self._router.subscribe(
                self._registry.collect_event_classes(),
                self._registry.collect_observed_keys(),
            )
        except SubscriptionError as e:
            error(f"Failed to subscribe to widget events: {e}")
            raise

    def _require_built(self, operation: str) -> None:
        if self._state is not WidgetState.BUILT:
            raise WidgetStateError(
                f"{operation}() requires a built widget (state: {self._state.value})"
            )
