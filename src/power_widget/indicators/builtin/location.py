"""Location indicator."""

from ...config.defaults import BUTTON_GPS
from ...types import IndicatorState
from ..base import Indicator
from ..registry import register_indicator

LOCATION_PROVIDERS_ALLOWED = "location_providers_allowed"
GPS_PROVIDER = "gps"


def _split_providers(value: str) -> list[str]:
    return [p.strip() for p in value.split(",") if p.strip()]


@register_indicator(
    BUTTON_GPS, display_name="GPS", description="Satellite location provider"
)
class GPSIndicator(Indicator):
    """GPS provider on/off, stored in the allowed location providers list."""

    icon_on = "GPS"
    OBSERVED_KEYS = (LOCATION_PROVIDERS_ALLOWED,)

    def providers(self) -> list[str]:
        allowed = self.settings.get_string(LOCATION_PROVIDERS_ALLOWED, "")
        return _split_providers(allowed or "")

    def update_state(self) -> None:
        if GPS_PROVIDER in self.providers():
            self.state = IndicatorState.ENABLED
        else:
            self.state = IndicatorState.DISABLED

    def toggle_state(self) -> None:
        providers = self.providers()
        if GPS_PROVIDER in providers:
            providers.remove(GPS_PROVIDER)
        else:
            providers.append(GPS_PROVIDER)
        self.settings.put(LOCATION_PROVIDERS_ALLOWED, ",".join(providers))
