"""Unit tests for button list parsing."""

import pytest

from power_widget.config.defaults import BUTTONS_DEFAULT
from power_widget.config.parser import join_button_list, parse_button_list


@pytest.mark.unit
class TestParseButtonList:
    """Tests for parse_button_list."""

    def test_absent_setting_gives_default_buttons(self):
        assert parse_button_list(None) == [
            "toggleWifi",
            "toggleBluetooth",
            "toggleGPS",
            "toggleSound",
        ]

    def test_default_list_is_a_fresh_copy(self):
        first = parse_button_list(None)
        first.append("toggleSync")

        assert parse_button_list(None) == list(BUTTONS_DEFAULT)

    def test_empty_string_is_not_collapsed(self):
        assert parse_button_list("") == [""]

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("a|", ["a", ""]),
            ("|a", ["", "a"]),
            ("a||b", ["a", "", "b"]),
        ],
    )
    def test_empty_tokens_are_kept(self, raw, expected):
        assert parse_button_list(raw) == expected

    def test_single_token_without_delimiter(self):
        assert parse_button_list("toggleWifi") == ["toggleWifi"]

    def test_preserves_order_duplicates_and_unknown_ids(self):
        raw = "toggleSound|bogus|toggleWifi|toggleSound"

        assert parse_button_list(raw) == [
            "toggleSound",
            "bogus",
            "toggleWifi",
            "toggleSound",
        ]

    def test_ids_are_case_sensitive(self):
        assert parse_button_list("TOGGLEWIFI|toggleWifi") == [
            "TOGGLEWIFI",
            "toggleWifi",
        ]


@pytest.mark.unit
class TestJoinButtonList:
    def test_joins_with_delimiter(self):
        assert join_button_list(["toggleWifi", "toggleGPS"]) == "toggleWifi|toggleGPS"

    def test_join_then_parse_keeps_ids(self):
        ids = ["toggleGPS", "toggleGPS", "toggleSync"]
        assert parse_button_list(join_button_list(ids)) == ids
