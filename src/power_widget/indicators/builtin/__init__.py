"""Built-in indicators for the widget strip.

Importing this module registers all built-in indicators with the registry.
"""

from .display import (
    AutoRotateIndicator,
    BrightnessIndicator,
    FlashlightIndicator,
    ScreenTimeoutIndicator,
)
from .location import GPSIndicator
from .radio import (
    AirplaneIndicator,
    BluetoothIndicator,
    MobileDataIndicator,
    WifiIndicator,
)
from .sound import SoundIndicator
from .sync import SyncIndicator

__all__ = [
    "WifiIndicator",
    "BluetoothIndicator",
    "AirplaneIndicator",
    "MobileDataIndicator",
    "GPSIndicator",
    "SoundIndicator",
    "AutoRotateIndicator",
    "BrightnessIndicator",
    "ScreenTimeoutIndicator",
    "FlashlightIndicator",
    "SyncIndicator",
]
