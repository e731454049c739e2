"""Background sync indicator."""

from ...config.defaults import BUTTON_SYNC
from ..base import SettingToggleIndicator
from ..registry import register_indicator


@register_indicator(
    BUTTON_SYNC, display_name="Sync", description="Automatic account sync"
)
class SyncIndicator(SettingToggleIndicator):
    icon_on = "Sync"
    SETTING_KEY = "sync_automatically"
