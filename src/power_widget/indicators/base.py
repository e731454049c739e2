"""Base indicator interface for widget strip components."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from ..config.defaults import EXPANDED_VIEW_WIDGET_COLOR
from ..config.loader import SettingsStore
from ..host import IndicatorView
from ..types import IndicatorState

IndicatorListener = Callable[[str], None]


class Indicator(ABC):
    """Base indicator interface - all indicators must implement this.

    Indicator metadata (indicator_id, display_name, description) is set by
    the @register_indicator decorator. Subclasses declare the settings keys
    and broadcast actions they care about in OBSERVED_KEYS and
    BROADCAST_ACTIONS; the registry delivers every event to every instance,
    so the handlers below filter on those.
    """

    # Class attributes set by @register_indicator decorator
    indicator_id: str = ""
    display_name: str = ""
    description: str = ""

    icon_on: str = ""
    icon_off: str = ""

    OBSERVED_KEYS: tuple[str, ...] = ()
    BROADCAST_ACTIONS: tuple[str, ...] = ()

    def __init__(self, settings: SettingsStore):
        self.settings = settings
        self.view: Optional[IndicatorView] = None
        self.state = IndicatorState.DISABLED
        self.color: Optional[str] = None
        # Set by the registry so clicks reach its global listeners
        self.click_listener: Optional[IndicatorListener] = None
        self.long_click_listener: Optional[IndicatorListener] = None

    def load(self, indicator_id: str, view: IndicatorView) -> bool:
        """Bind this indicator to a view.

        Args:
            indicator_id: Identifier the indicator was loaded under
            view: View handle inflated by the host

        Returns:
            False if the indicator could not initialize
        """
        self.indicator_id = indicator_id
        if not self.setup():
            return False

        self.view = view
        self.color = self.settings.get_string(EXPANDED_VIEW_WIDGET_COLOR)
        view.set_on_click(self._on_click)
        view.set_on_long_click(self._on_long_click)
        return True

    def unload(self) -> None:
        if self.view is not None:
            self.view.set_on_click(None)
            self.view.set_on_long_click(None)
        self.view = None
        self.click_listener = None
        self.long_click_listener = None

    def setup(self) -> bool:
        """Indicator-specific initialization, run on load."""
        return True

    def update_visual_state(self) -> None:
        """Recompute the toggle state and push it into the view."""
        if self.view is None:
            return
        self.update_state()
        self.view.set_content(self.get_icon(), self.state, self.color)

    def get_icon(self) -> str:
        if self.state is IndicatorState.DISABLED:
            return self.icon_off or self.icon_on
        return self.icon_on

    def handle_broadcast(self, action: str, payload: dict[str, Any]) -> None:
        if action not in self.broadcast_actions():
            return
        self.on_broadcast(action, payload)

    def handle_config_change(self, key: str) -> None:
        if key == EXPANDED_VIEW_WIDGET_COLOR:
            self.color = self.settings.get_string(EXPANDED_VIEW_WIDGET_COLOR)
        elif key in self.observed_keys():
            self.on_config_change(key)

    def observed_keys(self) -> set[str]:
        return set(self.OBSERVED_KEYS)

    def broadcast_actions(self) -> set[str]:
        return set(self.BROADCAST_ACTIONS)

    def on_broadcast(self, action: str, payload: dict[str, Any]) -> None:
        pass

    def on_config_change(self, key: str) -> None:
        pass

    def handle_long_click(self) -> bool:
        """Handle a long press. Return True if it was consumed."""
        return False

    @abstractmethod
    def update_state(self) -> None:
        """Recompute self.state from settings and received broadcasts."""

    @abstractmethod
    def toggle_state(self) -> None:
        """Perform the indicator's toggle action."""

    def _on_click(self) -> None:
        self.toggle_state()
        self.update_visual_state()
        if self.click_listener is not None:
            self.click_listener(self.indicator_id)

    def _on_long_click(self) -> bool:
        handled = self.handle_long_click()
        if self.long_click_listener is not None:
            self.long_click_listener(self.indicator_id)
        return handled


class SettingToggleIndicator(Indicator):
    """Indicator backed by one on/off integer setting.

    When the indicator also listens for a broadcast, the last broadcast
    state wins over the setting until the indicator is toggled again.
    """

    SETTING_KEY: str = ""

    PAYLOAD_STATES = {
        "on": IndicatorState.ENABLED,
        "off": IndicatorState.DISABLED,
        "turning_on": IndicatorState.INTERMEDIATE,
        "turning_off": IndicatorState.INTERMEDIATE,
    }

    def __init__(self, settings: SettingsStore):
        super().__init__(settings)
        self._broadcast_state: Optional[IndicatorState] = None

    def observed_keys(self) -> set[str]:
        return set(self.OBSERVED_KEYS) | {self.SETTING_KEY}

    def is_setting_enabled(self) -> bool:
        return self.settings.get_int(self.SETTING_KEY, 0) != 0

    def update_state(self) -> None:
        if self._broadcast_state is not None:
            self.state = self._broadcast_state
        elif self.is_setting_enabled():
            self.state = IndicatorState.ENABLED
        else:
            self.state = IndicatorState.DISABLED

    def toggle_state(self) -> None:
        self.update_state()
        enabled = self.state is IndicatorState.ENABLED
        self._broadcast_state = None
        self.settings.put(self.SETTING_KEY, 0 if enabled else 1)

    def on_broadcast(self, action: str, payload: dict[str, Any]) -> None:
        state = self.PAYLOAD_STATES.get(str(payload.get("state", "")))
        if state is not None:
            self._broadcast_state = state

    def on_config_change(self, key: str) -> None:
        # A direct write to the setting supersedes the last broadcast
        self._broadcast_state = None
