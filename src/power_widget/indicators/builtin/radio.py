"""Radio indicators: Wi-Fi, Bluetooth, mobile data and airplane mode."""

from ...config.defaults import (
    BUTTON_AIRPLANE,
    BUTTON_BLUETOOTH,
    BUTTON_MOBILEDATA,
    BUTTON_WIFI,
)
from ...types import IndicatorState
from ..base import SettingToggleIndicator
from ..registry import register_indicator

WIFI_STATE_CHANGED_ACTION = "android.net.wifi.WIFI_STATE_CHANGED"
BLUETOOTH_STATE_CHANGED_ACTION = "android.bluetooth.adapter.action.STATE_CHANGED"
AIRPLANE_MODE_ACTION = "android.intent.action.AIRPLANE_MODE"


@register_indicator(
    BUTTON_WIFI, display_name="Wi-Fi", description="Wireless network radio"
)
class WifiIndicator(SettingToggleIndicator):
    """Wi-Fi radio on/off."""

    icon_on = "WiFi"
    SETTING_KEY = "wifi_on"
    BROADCAST_ACTIONS = (WIFI_STATE_CHANGED_ACTION,)


@register_indicator(
    BUTTON_BLUETOOTH, display_name="Bluetooth", description="Bluetooth radio"
)
class BluetoothIndicator(SettingToggleIndicator):
    """Bluetooth radio on/off."""

    icon_on = "BT"
    SETTING_KEY = "bluetooth_on"
    BROADCAST_ACTIONS = (BLUETOOTH_STATE_CHANGED_ACTION,)


@register_indicator(
    BUTTON_AIRPLANE,
    display_name="Airplane Mode",
    description="All radios off",
)
class AirplaneIndicator(SettingToggleIndicator):
    """Airplane mode on/off."""

    icon_on = "Plane"
    SETTING_KEY = "airplane_mode_on"
    BROADCAST_ACTIONS = (AIRPLANE_MODE_ACTION,)


@register_indicator(
    BUTTON_MOBILEDATA, display_name="Mobile Data", description="Cellular data"
)
class MobileDataIndicator(SettingToggleIndicator):
    """Cellular data on/off."""

    icon_on = "Data"
    SETTING_KEY = "mobile_data"

    def update_state(self) -> None:
        super().update_state()
        # No data connection while airplane mode is on
        if self.settings.get_int("airplane_mode_on", 0):
            self.state = IndicatorState.DISABLED

    def observed_keys(self) -> set[str]:
        return super().observed_keys() | {"airplane_mode_on"}
