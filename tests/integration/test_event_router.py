"""Integration tests for event routing."""

import pytest

from power_widget.controller import WidgetController
from power_widget.events import (
    ACTION_BOOT_COMPLETED,
    ACTION_CONFIGURATION_CHANGED,
    ACTION_SETTINGS_CHANGED,
    Broadcast,
    BroadcastHub,
    ConfigChanged,
)
from power_widget.indicators.builtin.radio import WIFI_STATE_CHANGED_ACTION
from power_widget.types import IndicatorState


@pytest.fixture
def count_updates(monkeypatch):
    """Wrap a controller's update_widget to count calls."""

    def _count_updates(controller):
        calls = []
        original = controller.update_widget

        def counting_update_widget():
            calls.append("update")
            original()

        monkeypatch.setattr(controller, "update_widget", counting_update_widget)
        return calls

    return _count_updates


@pytest.mark.integration
class TestRefreshAfterEveryEvent:
    """Every routed event ends with exactly one widget refresh."""

    @pytest.mark.parametrize(
        "event",
        [
            Broadcast("some.unrelated.action"),
            Broadcast(ACTION_SETTINGS_CHANGED),
            Broadcast(ACTION_BOOT_COMPLETED),
            Broadcast(ACTION_CONFIGURATION_CHANGED),
            ConfigChanged("unrelated_key"),
            ConfigChanged("widget_buttons"),
            ConfigChanged("expanded_view_widget"),
            ConfigChanged("expanded_view_widget_color"),
        ],
    )
    def test_posted_event_refreshes_once(self, make_controller, count_updates, event):
        controller = make_controller()
        calls = count_updates(controller)

        controller.router.post(event)

        assert calls == ["update"]

    def test_hub_broadcast_refreshes_once(self, make_controller, hub, count_updates):
        controller = make_controller("toggleWifi")
        calls = count_updates(controller)

        assert hub.send(WIFI_STATE_CHANGED_ACTION, {"state": "off"}) == 1

        assert calls == ["update"]

    def test_setting_change_refreshes_once(
        self, make_controller, settings, count_updates
    ):
        controller = make_controller("toggleWifi")
        calls = count_updates(controller)

        settings.put("wifi_on", 0)

        assert calls == ["update"]

    def test_unsubscribed_action_is_not_delivered(
        self, make_controller, hub, count_updates
    ):
        controller = make_controller("toggleGPS")
        calls = count_updates(controller)

        assert hub.send(WIFI_STATE_CHANGED_ACTION) == 0
        assert calls == []


@pytest.mark.integration
class TestBroadcastRouting:
    """Tests for broadcast handling."""

    def test_boot_completed_rebuilds_and_updates_visibility(
        self, make_controller, host, hub
    ):
        controller = make_controller()
        before = controller.registry.instances
        host.set_visible(False)

        hub.send(ACTION_BOOT_COMPLETED)

        assert host.is_visible() is True
        assert controller.loaded_count == 4
        assert not set(map(id, before)) & set(map(id, controller.registry.instances))

    def test_orientation_change_updates_width_and_rebuilds(
        self, make_controller, host, hub
    ):
        controller = make_controller("toggleWifi|toggleGPS")
        host.set_display_width(120)

        hub.send(ACTION_CONFIGURATION_CHANGED)

        assert controller.layout.per_item_width == 20
        assert [view.width for view in host.container.children] == [20, 20]

    def test_settings_changed_fans_out(self, make_controller, hub, test_indicators):
        controller = make_controller("testRecording|testRecording")
        for indicator in controller.registry:
            indicator.calls.clear()

        hub.send(ACTION_SETTINGS_CHANGED)

        for indicator in controller.registry:
            assert indicator.calls == [f"broadcast {ACTION_SETTINGS_CHANGED}", "update"]

    def test_indicator_broadcast_updates_view(self, make_controller, host, hub):
        make_controller("toggleWifi")

        hub.send(WIFI_STATE_CHANGED_ACTION, {"state": "off"})

        assert host.container.children[0].state is IndicatorState.DISABLED

    def test_broadcast_delivered_once_after_repeated_setup(
        self, make_controller, hub, test_indicators
    ):
        controller = make_controller("testRecording")
        controller.setup_widget()
        controller.setup_widget()
        indicator = controller.registry.instances[0]
        indicator.calls.clear()

        hub.send("test.recording")

        assert indicator.calls == ["broadcast test.recording", "update"]


@pytest.mark.integration
class TestSettingRouting:
    """Tests for settings change handling."""

    def test_button_list_change_rebuilds(self, make_controller, settings):
        controller = make_controller("toggleWifi")

        settings.put("widget_buttons", "toggleSound|toggleGPS")

        assert controller.registry.loaded_ids == ["toggleSound", "toggleGPS"]
        assert "mode_ringer" in controller.router.observed_keys
        assert "wifi_on" not in controller.router.observed_keys

    def test_removing_button_list_restores_defaults(self, make_controller, settings):
        controller = make_controller("toggleWifi")

        settings.remove("widget_buttons")

        assert controller.loaded_count == 4

    def test_visibility_change(self, make_controller, host, settings):
        make_controller()

        settings.put("expanded_view_widget", 1)
        assert host.is_visible() is False

        settings.put("expanded_view_widget", 2)
        assert host.is_visible() is True

    def test_color_change_retints_indicators(self, make_controller, host, settings):
        make_controller("toggleWifi|toggleGPS")

        settings.put("expanded_view_widget_color", "magenta")

        assert [view.color for view in host.container.children] == [
            "magenta",
            "magenta",
        ]

    def test_indicator_setting_change(self, make_controller, host, settings):
        make_controller("toggleBluetooth")

        settings.put("bluetooth_on", 1)

        assert host.container.children[0].state is IndicatorState.ENABLED

    def test_unobserved_setting_is_not_delivered(
        self, make_controller, settings, count_updates
    ):
        controller = make_controller("toggleWifi")
        calls = count_updates(controller)

        settings.put("torch_on", 1)

        assert calls == []

    def test_click_routes_through_settings(self, make_controller, host, settings):
        make_controller("toggleWifi")

        host.container.children[0].click()

        assert settings.get_int("wifi_on", 1) == 0
        assert host.container.children[0].state is IndicatorState.DISABLED


@pytest.mark.integration
class TestRunToCompletion:
    def test_events_raised_while_handling_wait_their_turn(
        self, make_controller, test_indicators
    ):
        controller = make_controller("testChaining")
        indicator = controller.registry.instances[0]
        indicator.calls.clear()

        controller.router.post(Broadcast("test.recording"))

        assert indicator.calls == [
            "broadcast test.recording",
            "update",
            "config recording_key",
            "update",
        ]

    def test_failed_rebuild_is_reported_and_loop_continues(
        self, make_controller, hub, capsys
    ):
        controller = make_controller()
        hub.deny_registrations = True

        controller.router.post(Broadcast(ACTION_BOOT_COMPLETED))

        assert "denied" in capsys.readouterr().err
        assert not controller.router.is_subscribed

    def test_failed_rebuild_still_refreshes_new_row(
        self, make_controller, host, hub, settings, count_updates
    ):
        controller = make_controller("toggleSound")
        calls = count_updates(controller)
        hub.deny_registrations = True

        settings.put("widget_buttons", "toggleWifi|toggleGPS")

        assert calls == ["update"]
        assert [view.text for view in host.container.children] == ["WiFi", "GPS"]
        assert "GPS" in host.render_plain()

    def test_failed_first_build_reports_refresh_error(
        self, make_controller, hub, capsys
    ):
        controller = make_controller(build=False)
        hub.deny_registrations = True

        controller.router.post(Broadcast(ACTION_BOOT_COMPLETED))

        assert "Failed to refresh widget" in capsys.readouterr().err

    def test_unexpected_error_drops_queued_events(
        self, make_controller, monkeypatch, count_updates
    ):
        controller = make_controller()
        calls = count_updates(controller)

        def exploding_update_visibility():
            controller.router.post(ConfigChanged("unrelated_key"))
            raise RuntimeError("host went away")

        monkeypatch.setattr(
            controller, "update_visibility", exploding_update_visibility
        )

        with pytest.raises(RuntimeError):
            controller.router.post(ConfigChanged("expanded_view_widget"))
        assert calls == ["update"]

        controller.router.post(Broadcast("some.unrelated.action"))

        assert calls == ["update", "update"]

    def test_widgets_on_separate_hubs_do_not_share_events(self, settings, host):
        first_hub, second_hub = BroadcastHub(), BroadcastHub()
        controller = WidgetController(host, settings, first_hub)
        controller.setup_widget()

        assert second_hub.send(ACTION_BOOT_COMPLETED) == 0
        assert first_hub.send(ACTION_BOOT_COMPLETED) == 1
