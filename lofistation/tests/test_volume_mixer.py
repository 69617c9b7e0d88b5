"""Tests for station.volume_mixer — master × channel volume math."""

import math

import pytest

from station.volume_mixer import (
    clamp_volume,
    effective_ambient_volume,
    effective_ambient_volumes,
    effective_music_volume,
    toggle_mute,
)


class TestClampVolume:
    @pytest.mark.parametrize("raw, expected", [
        (0.5, 0.5), (-0.2, 0.0), (1.7, 1.0), ("0.25", 0.25),
    ])
    def test_clamps(self, raw, expected) -> None:
        assert clamp_volume(raw) == pytest.approx(expected)

    def test_nan_is_zero(self) -> None:
        assert clamp_volume(math.nan) == 0.0

    def test_garbage_is_zero(self) -> None:
        assert clamp_volume(None) == 0.0
        assert clamp_volume("loud") == 0.0


class TestEffectiveVolumes:
    def test_music_is_product(self) -> None:
        assert effective_music_volume(0.5, 0.8) == pytest.approx(0.4)

    def test_master_zero_silences_music(self) -> None:
        assert effective_music_volume(1.0, 0.0) == 0.0

    def test_inactive_ambient_is_silent(self) -> None:
        assert effective_ambient_volume(0.9, 1.0, active=False) == 0.0

    def test_active_ambient_is_product(self) -> None:
        assert effective_ambient_volume(0.5, 0.8, active=True) == pytest.approx(0.4)

    def test_never_exceeds_master(self) -> None:
        for master in (0.0, 0.3, 0.8, 1.0):
            assert effective_music_volume(1.0, master) <= master
            assert effective_ambient_volume(1.0, master, True) <= master

    def test_bulk_only_listed_ids(self) -> None:
        levels = effective_ambient_volumes(
            {"rain": 0.5, "fire": 0.3, "stale": 1.0},
            active_ids={"rain"},
            master=0.8,
            sound_ids=["rain", "fire"],
        )
        assert set(levels) == {"rain", "fire"}
        assert levels["rain"] == pytest.approx(0.4)
        assert levels["fire"] == 0.0

    def test_bulk_missing_volume_is_zero(self) -> None:
        assert effective_ambient_volumes({}, {"x"}, 1.0, ["x"]) == {"x": 0.0}


class TestToggleMute:
    def test_mutes(self) -> None:
        assert toggle_mute(0.35) == 0.0

    def test_unmute_restores_default(self) -> None:
        assert toggle_mute(0.0) == pytest.approx(0.8)

    def test_custom_restore(self) -> None:
        assert toggle_mute(0.0, restore=0.6) == pytest.approx(0.6)
