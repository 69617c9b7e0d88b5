"""Tests for station.settings_store — session settings and hide-time input."""

import math

import pytest

from station.models import AppSettings
from station.settings_store import SettingsStore, clamp_hide_time


class TestClampHideTime:
    @pytest.mark.parametrize("raw, expected", [
        ("7", 7), ("7s", 7), ("3.9", 3), (" 4 ", 4), (0, 1), ("-3", 1),
        (25, 10), ("100", 10), (6.7, 6),
    ])
    def test_parses_and_clamps(self, raw, expected) -> None:
        assert clamp_hide_time(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "s5", None, math.nan, math.inf, -math.inf, True])
    def test_unparseable_keeps_fallback(self, raw) -> None:
        assert clamp_hide_time(raw, fallback=8) == 8


class TestSettingsStore:
    def test_defaults(self) -> None:
        assert SettingsStore().settings == AppSettings()

    def test_initial_hide_time_clamped(self) -> None:
        assert SettingsStore(AppSettings(hide_time=99)).settings.hide_time == 10

    def test_update_emits_new_object(self) -> None:
        store = SettingsStore()
        old = store.settings
        seen = []
        store.settings_changed.connect(seen.append)
        store.update(show_clock=False)
        assert store.settings is not old
        assert old.show_clock is True
        assert seen == [store.settings]

    def test_no_change_no_signal(self) -> None:
        store = SettingsStore()
        seen = []
        store.settings_changed.connect(seen.append)
        store.update(show_clock=True)
        assert seen == []

    def test_unknown_key(self) -> None:
        with pytest.raises(KeyError):
            SettingsStore().update(volume=3)

    def test_toggle(self) -> None:
        store = SettingsStore()
        store.toggle("shortcuts")
        assert store.settings.shortcuts is False

    def test_toggle_non_switch(self) -> None:
        with pytest.raises(TypeError):
            SettingsStore().toggle("hide_time")

    def test_set_hide_time_clamps(self) -> None:
        store = SettingsStore()
        store.set_hide_time("15")
        assert store.settings.hide_time == 10

    def test_bad_hide_time_keeps_previous(self) -> None:
        store = SettingsStore()
        store.set_hide_time("3")
        store.set_hide_time("soon")
        assert store.settings.hide_time == 3
