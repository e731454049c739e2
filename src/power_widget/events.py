"""Event delivery and routing for the power widget.

Two inbound channels feed the widget: broadcasts (named actions with a
payload) and settings changes (a key). Both are turned into events on one
queue and handled one at a time, to completion, on the caller's thread.
Every handled event ends with a widget refresh, whether or not anything
was interested in it.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from .config.defaults import (
    EXPANDED_VIEW_WIDGET,
    EXPANDED_VIEW_WIDGET_COLOR,
    WIDGET_BUTTONS,
)
from .config.loader import SettingsStore
from .errors import PowerWidgetError, SubscriptionError, WidgetStateError
from .utils.debug import debug_log, error

if TYPE_CHECKING:
    from .controller import WidgetController

ACTION_SETTINGS_CHANGED = "android.settings.SETTINGS_CHANGED"
ACTION_BOOT_COMPLETED = "android.intent.action.BOOT_COMPLETED"
ACTION_CONFIGURATION_CHANGED = "android.intent.action.CONFIGURATION_CHANGED"

# Subscribed on every build, on top of what the loaded indicators ask for
WIDGET_ACTIONS = frozenset(
    {ACTION_SETTINGS_CHANGED, ACTION_BOOT_COMPLETED, ACTION_CONFIGURATION_CHANGED}
)
WIDGET_KEYS = frozenset(
    {WIDGET_BUTTONS, EXPANDED_VIEW_WIDGET, EXPANDED_VIEW_WIDGET_COLOR}
)

BroadcastReceiver = Callable[[str, dict[str, Any]], None]


@dataclass(frozen=True)
class Broadcast:
    """A named system action with an optional payload."""

    action: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ConfigChanged:
    """A settings key whose value changed."""

    key: str


Event = Union[Broadcast, ConfigChanged]


class BroadcastHub:
    """In-process broadcast delivery.

    Receivers register for a set of actions and are called only for those.
    Setting deny_registrations makes every registration fail, the way a
    host can refuse a receiver.
    """

    def __init__(self) -> None:
        self._receivers: list[tuple[BroadcastReceiver, frozenset[str]]] = []
        self.deny_registrations = False

    def register_receiver(self, receiver: BroadcastReceiver, actions) -> None:
        if self.deny_registrations:
            raise SubscriptionError("broadcast receiver registration denied")
        self._receivers.append((receiver, frozenset(actions)))

    def unregister_receiver(self, receiver: BroadcastReceiver) -> None:
        self._receivers = [(r, a) for r, a in self._receivers if r != receiver]

    def receiver_count(self) -> int:
        return len(self._receivers)

    def send(self, action: str, payload: Optional[dict[str, Any]] = None) -> int:
        """Deliver an action to every receiver registered for it.

        Returns:
            Number of receivers the action was delivered to
        """
        data = payload or {}
        delivered = 0
        for receiver, actions in list(self._receivers):
            if action in actions:
                receiver(action, data)
                delivered += 1
        return delivered


class EventRouter:
    """Subscribes the widget to broadcasts and settings, and routes events.

    Structural events (boot, rotation, button list, visibility) go to the
    controller; everything else fans out to the loaded indicators.
    """

    def __init__(
        self,
        controller: "WidgetController",
        hub: BroadcastHub,
        settings: SettingsStore,
    ):
        self._controller = controller
        self._hub = hub
        self._settings = settings
        self._queue: deque[Event] = deque()
        self._dispatching = False
        self._actions: frozenset[str] = frozenset()
        self._keys: frozenset[str] = frozenset()
        self._subscribed = False

    @property
    def subscribed_actions(self) -> frozenset[str]:
        return self._actions

    @property
    def observed_keys(self) -> frozenset[str]:
        return self._keys

    @property
    def is_subscribed(self) -> bool:
        return self._subscribed

    def subscribe(self, actions, keys) -> None:
        """Register for broadcasts and settings changes.

        Any previous subscription is dropped first, so nothing is delivered
        twice.

        Raises:
            SubscriptionError: If the broadcast registration fails
        """
        self.unsubscribe()

        all_actions = frozenset(actions) | WIDGET_ACTIONS
        all_keys = frozenset(keys) | WIDGET_KEYS

        try:
            self._hub.register_receiver(self._on_receive, all_actions)
        except SubscriptionError:
            raise
        except Exception as e:
            raise SubscriptionError(f"broadcast registration failed: {e}") from e

        for key in sorted(all_keys):
            self._settings.register_observer(key, self._on_change)

        self._actions = all_actions
        self._keys = all_keys
        self._subscribed = True
        debug_log(
            f"Subscribed to {len(all_actions)} actions and {len(all_keys)} settings"
        )

    def unsubscribe(self) -> None:
        if not self._subscribed:
            return
        self._hub.unregister_receiver(self._on_receive)
        self._settings.unregister_observer(self._on_change)
        self._actions = frozenset()
        self._keys = frozenset()
        self._subscribed = False

    def post(self, event: Event) -> None:
        """Queue an event and handle the queue unless already handling it.

        Events posted while another event is being handled wait their turn.
        """
        self._queue.append(event)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queue:
                current = self._queue.popleft()
                try:
                    self._route(current)
                except PowerWidgetError as e:
                    error(f"Failed to handle {current}: {e}")
        finally:
            # Anything left here was queued behind an unexpected error
            self._queue.clear()
            self._dispatching = False

    def _on_receive(self, action: str, payload: dict[str, Any]) -> None:
        self.post(Broadcast(action, payload))

    def _on_change(self, key: str) -> None:
        self.post(ConfigChanged(key))

    def _route(self, event: Event) -> None:
        try:
            if isinstance(event, Broadcast):
                self._route_broadcast(event)
            else:
                self._route_config_change(event)
        finally:
            self._refresh()

    def _refresh(self) -> None:
        try:
            self._controller.update_widget()
        except WidgetStateError as e:
            error(f"Failed to refresh widget: {e}")

    def _route_broadcast(self, event: Broadcast) -> None:
        debug_log(f"Broadcast received: {event.action}")
        controller = self._controller

        if event.action == ACTION_BOOT_COMPLETED:
            controller.setup_widget()
            controller.update_visibility()
        elif event.action == ACTION_CONFIGURATION_CHANGED:
            controller.update_button_layout_width()
            controller.setup_widget()
        else:
            controller.registry.dispatch_broadcast(event.action, event.payload)

    def _route_config_change(self, event: ConfigChanged) -> None:
        debug_log(f"Setting change received: {event.key}")
        controller = self._controller

        if event.key == WIDGET_BUTTONS:
            controller.setup_widget()
        elif event.key == EXPANDED_VIEW_WIDGET:
            controller.update_visibility()
        else:
            controller.registry.dispatch_config_change(event.key)
