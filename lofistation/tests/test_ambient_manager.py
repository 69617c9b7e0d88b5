"""Tests for station.ambient_manager — active set and per-sound levels."""

import pytest

from station.ambient_manager import AmbientSoundManager
from station.models import PLACEHOLDER_SCENE


@pytest.fixture
def manager(rain_scene) -> AmbientSoundManager:
    m = AmbientSoundManager()
    m.on_scene_change(rain_scene)
    return m


class TestSceneChange:
    def test_starts_on_placeholder(self) -> None:
        m = AmbientSoundManager()
        assert m.scene == PLACEHOLDER_SCENE
        assert m.hotspots() == []

    def test_all_sounds_active(self, manager) -> None:
        assert manager.state.active_ids == {"rain", "fire"}

    def test_seeds_defaults(self, manager) -> None:
        assert manager.volume("rain") == pytest.approx(0.5)
        assert manager.volume("fire") == pytest.approx(0.3)

    def test_active_set_reconciled(self, manager, city_scene) -> None:
        manager.on_scene_change(city_scene)
        assert manager.state.active_ids == {"rain", "traffic"}

    def test_volume_survives_scene_switch(self, manager, rain_scene, city_scene) -> None:
        manager.set_volume("rain", 0.2)
        manager.on_scene_change(city_scene)
        # city's default (0.9) does not overwrite the remembered level
        assert manager.volume("rain") == pytest.approx(0.2)
        assert manager.volume("traffic") == pytest.approx(0.4)
        manager.on_scene_change(rain_scene)
        assert manager.volume("traffic") == pytest.approx(0.4)

    def test_toggled_off_sound_back_on_after_reentry(self, manager, rain_scene, city_scene) -> None:
        manager.toggle_ambience("fire")
        manager.on_scene_change(city_scene)
        manager.on_scene_change(rain_scene)
        assert manager.is_active("fire")

    def test_emits_mix_changed(self, city_scene) -> None:
        m = AmbientSoundManager()
        seen = []
        m.mix_changed.connect(lambda: seen.append(True))
        m.on_scene_change(city_scene)
        assert seen == [True]


class TestToggle:
    def test_toggle_off_and_on(self, manager) -> None:
        manager.toggle_ambience("rain")
        assert not manager.is_active("rain")
        manager.toggle_ambience("rain")
        assert manager.is_active("rain")

    def test_toggle_keeps_volume(self, manager) -> None:
        manager.toggle_ambience("rain")
        assert manager.volume("rain") == pytest.approx(0.5)

    def test_unknown_id_ignored(self, manager) -> None:
        manager.toggle_ambience("traffic")
        assert "traffic" not in manager.state.active_ids

    def test_ignored_while_calibrating(self, manager) -> None:
        manager.set_calibration_active(True)
        manager.toggle_ambience("rain")
        assert manager.is_active("rain")
        manager.set_calibration_active(False)
        manager.toggle_ambience("rain")
        assert not manager.is_active("rain")


class TestVolumes:
    def test_set_volume_clamps(self, manager) -> None:
        manager.set_volume("rain", 3.0)
        assert manager.volume("rain") == 1.0

    def test_effective_volumes(self, manager) -> None:
        manager.toggle_ambience("fire")
        levels = manager.effective_volumes(0.8)
        assert levels == {"rain": pytest.approx(0.4), "fire": 0.0}

    def test_master_zero(self, manager) -> None:
        assert all(v == 0.0 for v in manager.effective_volumes(0.0).values())

    def test_hotspots_tuple(self, manager, rain_scene) -> None:
        manager.toggle_ambience("fire")
        (s1, v1, a1), (s2, v2, a2) = manager.hotspots()
        assert s1 is rain_scene.sounds[0] and a1 is True and v1 == pytest.approx(0.5)
        assert s2.id == "fire" and a2 is False and v2 == pytest.approx(0.3)
