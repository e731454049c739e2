"""Display indicators: brightness, rotation, screen timeout and flashlight."""

from ...config.defaults import (
    BUTTON_AUTOROTATE,
    BUTTON_BRIGHTNESS,
    BUTTON_FLASHLIGHT,
    BUTTON_SCREENTIMEOUT,
)
from ...types import IndicatorState
from ..base import Indicator, SettingToggleIndicator
from ..registry import register_indicator

SCREEN_OFF_TIMEOUT = "screen_off_timeout"

# Timeouts cycled through by the screen timeout indicator, in milliseconds
SCREEN_TIMEOUTS = (15000, 30000, 60000, 120000, 300000, 600000)
DEFAULT_SCREEN_TIMEOUT = 30000
# Timeouts at or above this show as enabled
LONG_SCREEN_TIMEOUT = 60000


def format_timeout(timeout_ms: int) -> str:
    """Format a timeout as a short label (e.g., "30s", "2m")."""
    seconds = timeout_ms // 1000
    if seconds < 60:
        return f"{seconds}s"
    return f"{seconds // 60}m"


@register_indicator(
    BUTTON_AUTOROTATE,
    display_name="Auto Rotate",
    description="Rotate with the accelerometer",
)
class AutoRotateIndicator(SettingToggleIndicator):
    icon_on = "Rotate"
    SETTING_KEY = "accelerometer_rotation"


@register_indicator(
    BUTTON_BRIGHTNESS,
    display_name="Brightness",
    description="Automatic brightness",
)
class BrightnessIndicator(SettingToggleIndicator):
    """Automatic brightness on/off (screen_brightness_mode 1/0)."""

    icon_on = "Auto"
    icon_off = "Bright"
    SETTING_KEY = "screen_brightness_mode"


@register_indicator(
    BUTTON_SCREENTIMEOUT,
    display_name="Screen Timeout",
    description="Cycle the screen-off timeout",
)
class ScreenTimeoutIndicator(Indicator):
    """Step through SCREEN_TIMEOUTS, wrapping at the end."""

    OBSERVED_KEYS = (SCREEN_OFF_TIMEOUT,)

    def timeout(self) -> int:
        return self.settings.get_int(SCREEN_OFF_TIMEOUT, DEFAULT_SCREEN_TIMEOUT)

    def update_state(self) -> None:
        if self.timeout() >= LONG_SCREEN_TIMEOUT:
            self.state = IndicatorState.ENABLED
        else:
            self.state = IndicatorState.DISABLED

    def get_icon(self) -> str:
        return format_timeout(self.timeout())

    def toggle_state(self) -> None:
        current = self.timeout()
        next_timeout = SCREEN_TIMEOUTS[0]
        for timeout in SCREEN_TIMEOUTS:
            if timeout > current:
                next_timeout = timeout
                break
        self.settings.put(SCREEN_OFF_TIMEOUT, next_timeout)


@register_indicator(
    BUTTON_FLASHLIGHT, display_name="Flashlight", description="Camera torch"
)
class FlashlightIndicator(SettingToggleIndicator):
    """Camera torch on/off. Fails to load on devices without a torch."""

    icon_on = "Torch"
    SETTING_KEY = "torch_on"

    def setup(self) -> bool:
        return self.settings.get_int("has_flashlight", 1) != 0
