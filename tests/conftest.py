import pytest

from power_widget.config.loader import SettingsStore
from power_widget.controller import WidgetController
from power_widget.events import BroadcastHub
from power_widget.indicators import registry
from power_widget.indicators.base import Indicator
from power_widget.host import TerminalHost
from power_widget.types import IndicatorState


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line("markers", "unit: Unit tests that do not perform real I/O")
    config.addinivalue_line("markers", "integration: Integration tests with mocked I/O")
    config.addinivalue_line("markers", "performance: Benchmarks using pytest-benchmark")


class RecordingIndicator(Indicator):
    """Indicator that records every call made on it."""

    indicator_id = "testRecording"
    icon_on = "Rec"
    OBSERVED_KEYS = ("recording_key",)
    BROADCAST_ACTIONS = ("test.recording",)

    def __init__(self, settings):
        super().__init__(settings)
        self.calls = []

    def update_state(self):
        self.calls.append("update")
        self.state = IndicatorState.ENABLED

    def toggle_state(self):
        self.calls.append("toggle")

    def handle_broadcast(self, action, payload):
        self.calls.append(f"broadcast {action}")
        super().handle_broadcast(action, payload)

    def handle_config_change(self, key):
        self.calls.append(f"config {key}")
        super().handle_config_change(key)


class ChainingIndicator(RecordingIndicator):
    """Writes its own observed setting when it receives its broadcast."""

    indicator_id = "testChaining"

    def on_broadcast(self, action, payload):
        count = self.settings.get_int("recording_key", 0)
        self.settings.put("recording_key", count + 1)


class BrokenSetupIndicator(RecordingIndicator):
    indicator_id = "testBrokenSetup"

    def setup(self):
        raise RuntimeError("no hardware")


class FailingUpdateIndicator(RecordingIndicator):
    indicator_id = "testFailingUpdate"

    def update_state(self):
        raise RuntimeError("update exploded")

    def handle_broadcast(self, action, payload):
        raise RuntimeError("broadcast exploded")


TEST_INDICATORS = (
    RecordingIndicator,
    ChainingIndicator,
    BrokenSetupIndicator,
    FailingUpdateIndicator,
)


@pytest.fixture
def test_indicators(monkeypatch):
    """Add the recording test indicators to the indicator catalog."""
    for cls in TEST_INDICATORS:
        monkeypatch.setitem(registry._INDICATOR_TYPES, cls.indicator_id, cls)
    return {cls.indicator_id: cls for cls in TEST_INDICATORS}


@pytest.fixture
def settings():
    """In-memory settings with the widget shown."""
    return SettingsStore(
        {
            "expanded_view_widget": 2,
            "expanded_view_widget_color": "green",
            "wifi_on": 1,
            "bluetooth_on": 0,
        }
    )


@pytest.fixture
def host():
    """Terminal host 60 columns wide (10 columns per indicator)."""
    return TerminalHost(width=60)


@pytest.fixture
def hub():
    return BroadcastHub()


@pytest.fixture
def make_controller(settings, host, hub):
    """Factory fixture creating a controller with an optional button list."""

    def _make_controller(buttons=None, build=True):
        if buttons is not None:
            settings.put("widget_buttons", buttons)
        controller = WidgetController(host, settings, hub)
        if build:
            controller.setup_widget()
        return controller

    return _make_controller
