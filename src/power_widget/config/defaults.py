"""Default settings and well-known setting keys for the power widget."""

from typing import Any

# Widget-level setting keys
WIDGET_BUTTONS = "widget_buttons"
EXPANDED_VIEW_WIDGET = "expanded_view_widget"
EXPANDED_VIEW_WIDGET_COLOR = "expanded_view_widget_color"

BUTTON_DELIMITER = "|"

BUTTON_WIFI = "toggleWifi"
BUTTON_BLUETOOTH = "toggleBluetooth"
BUTTON_GPS = "toggleGPS"
BUTTON_SOUND = "toggleSound"
BUTTON_AIRPLANE = "toggleAirplane"
BUTTON_MOBILEDATA = "toggleMobileData"
BUTTON_AUTOROTATE = "toggleAutoRotate"
BUTTON_SYNC = "toggleSync"
BUTTON_BRIGHTNESS = "toggleBrightness"
BUTTON_SCREENTIMEOUT = "toggleScreenTimeout"
BUTTON_FLASHLIGHT = "toggleFlashlight"

BUTTONS_DEFAULT = (BUTTON_WIFI, BUTTON_BLUETOOTH, BUTTON_GPS, BUTTON_SOUND)

# Widget is shown only when EXPANDED_VIEW_WIDGET holds this value
WIDGET_VISIBLE_VALUE = 2
WIDGET_HIDDEN_VALUE = 1

DEFAULT_WIDGET_COLOR = "cyan"


def get_default_settings() -> dict[str, Any]:
    """Generate the settings written to a fresh settings file."""
    return {
        EXPANDED_VIEW_WIDGET: WIDGET_VISIBLE_VALUE,
        EXPANDED_VIEW_WIDGET_COLOR: DEFAULT_WIDGET_COLOR,
        "wifi_on": 1,
        "bluetooth_on": 0,
        "location_providers_allowed": "network",
        "mode_ringer": 2,
        "vibrate_on": 0,
    }
