"""Ringer mode indicator."""

from typing import Any, Optional

from ...config.defaults import BUTTON_SOUND
from ...types import IndicatorState
from ..base import Indicator
from ..registry import register_indicator

RINGER_MODE_CHANGED_ACTION = "android.media.RINGER_MODE_CHANGED"

MODE_RINGER = "mode_ringer"
VIBRATE_ON = "vibrate_on"

RINGER_MODE_SILENT = 0
RINGER_MODE_VIBRATE = 1
RINGER_MODE_NORMAL = 2

_MODE_NAMES = {
    "silent": RINGER_MODE_SILENT,
    "vibrate": RINGER_MODE_VIBRATE,
    "normal": RINGER_MODE_NORMAL,
}

_MODE_ICONS = {
    RINGER_MODE_SILENT: "Silent",
    RINGER_MODE_VIBRATE: "Vibrate",
    RINGER_MODE_NORMAL: "Sound",
}


@register_indicator(
    BUTTON_SOUND,
    display_name="Sound",
    description="Ringer mode (sound/vibrate/silent)",
)
class SoundIndicator(Indicator):
    """Cycle the ringer between normal, vibrate and silent.

    Vibrate is skipped when vibrate_on is 0. A ringer broadcast overrides
    the stored mode until the next toggle or setting change.
    """

    icon_on = "Sound"
    OBSERVED_KEYS = (MODE_RINGER, VIBRATE_ON)
    BROADCAST_ACTIONS = (RINGER_MODE_CHANGED_ACTION,)

    def __init__(self, settings):
        super().__init__(settings)
        self._broadcast_mode: Optional[int] = None

    def ringer_mode(self) -> int:
        if self._broadcast_mode is not None:
            return self._broadcast_mode
        mode = self.settings.get_int(MODE_RINGER, RINGER_MODE_NORMAL)
        if mode not in _MODE_ICONS:
            return RINGER_MODE_NORMAL
        return mode

    def update_state(self) -> None:
        mode = self.ringer_mode()
        if mode == RINGER_MODE_NORMAL:
            self.state = IndicatorState.ENABLED
        elif mode == RINGER_MODE_VIBRATE:
            self.state = IndicatorState.INTERMEDIATE
        else:
            self.state = IndicatorState.DISABLED

    def get_icon(self) -> str:
        return _MODE_ICONS[self.ringer_mode()]

    def toggle_state(self) -> None:
        mode = self.ringer_mode()
        if mode == RINGER_MODE_NORMAL:
            if self.settings.get_int(VIBRATE_ON, 0):
                next_mode = RINGER_MODE_VIBRATE
            else:
                next_mode = RINGER_MODE_SILENT
        elif mode == RINGER_MODE_VIBRATE:
            next_mode = RINGER_MODE_SILENT
        else:
            next_mode = RINGER_MODE_NORMAL

        self._broadcast_mode = None
        self.settings.put(MODE_RINGER, next_mode)

    def on_broadcast(self, action: str, payload: dict[str, Any]) -> None:
        mode = _MODE_NAMES.get(str(payload.get("mode", "")))
        if mode is not None:
            self._broadcast_mode = mode

    def on_config_change(self, key: str) -> None:
        if key == MODE_RINGER:
            self._broadcast_mode = None
