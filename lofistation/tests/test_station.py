"""Tests for station.station — controller wiring, volumes, keys, welcome flow."""

import pytest

from station.catalog import Catalog, parse_catalog
from station.idle_controller import SETTINGS, WELCOME
from station.models import AmbientSound, HotspotPosition, PLACEHOLDER_SCENE, Scene
from station.playback_engine import NEXT
from station.session_state import SessionState
from station.shortcuts import Action, KeyPress
from station.station import StationController


@pytest.fixture
def ambient_outputs() -> list:
    return []


@pytest.fixture
def controller(fake_output, ambient_outputs, fake_clipboard, session, fake_clock) -> StationController:
    """Controller wired to fakes; each ambient layer gets its own FakeAudioOutput."""
    factory_cls = type(fake_output)

    def factory():
        out = factory_cls()
        ambient_outputs.append(out)
        return out

    ctl = StationController(
        music_output=fake_output,
        ambient_output_factory=factory,
        clipboard=fake_clipboard,
        session=session,
        clock=fake_clock,
    )
    yield ctl
    ctl.shutdown()


@pytest.fixture
def loaded(controller, catalog_payload) -> StationController:
    """Catalog applied and the first-visit welcome dismissed."""
    controller.complete_welcome()
    controller.apply_catalog(parse_catalog(catalog_payload))
    return controller


# ── catalog ─────────────────────────────────────────────────────────


class TestCatalog:
    def test_loading_until_applied(self, controller) -> None:
        assert controller.is_loading
        assert controller.current_scene == PLACEHOLDER_SCENE

    def test_failed_catalog_uses_placeholders(self, controller) -> None:
        controller.apply_catalog(Catalog(ok=False, error="offline"))
        assert not controller.is_loading
        assert controller.current_scene == PLACEHOLDER_SCENE
        assert controller.current_track.title == "Loading System..."

    def test_enters_first_scene(self, loaded, ambient_outputs) -> None:
        assert loaded.current_scene.name == "Rainy Room"
        assert [o.url for o in ambient_outputs] == ["rain.mp3", "fire.mp3"]
        assert all("play" in o.calls for o in ambient_outputs)

    def test_music_cued_not_playing(self, loaded, fake_output) -> None:
        assert loaded.engine.state.is_playing is False
        assert fake_output.url.endswith("A.mp3")


# ── volumes ─────────────────────────────────────────────────────────


class TestVolumes:
    def test_initial_levels_pushed(self, loaded, fake_output) -> None:
        rain = loaded.ambient_output("rain")
        assert fake_output.volume == pytest.approx(0.5 * 0.8)
        assert rain.volume == pytest.approx(0.5 * 0.8)

    def test_master_zero_silences_everything(self, loaded, fake_output, ambient_outputs) -> None:
        loaded.set_ambient_volume("rain", 1.0)
        loaded.set_music_volume(1.0)
        loaded.set_master_volume(0.0)
        assert fake_output.volume == 0.0
        assert all(o.volume == 0.0 for o in ambient_outputs)

    def test_toggle_mute(self, loaded) -> None:
        loaded.toggle_mute()
        assert loaded.master_volume == 0.0
        assert loaded.displayed_music_volume == 0.0
        loaded.toggle_mute()
        assert loaded.master_volume == pytest.approx(0.8)
        assert loaded.displayed_music_volume == pytest.approx(0.5)

    def test_scene_switch_preserves_shared_volume(self, loaded) -> None:
        loaded.set_ambient_volume("rain", 0.2)
        loaded.engine.change_scene(NEXT)
        assert loaded.current_scene.name == "City"
        assert loaded.ambient.volume("rain") == pytest.approx(0.2)
        assert loaded.ambient.volume("traffic") == pytest.approx(0.4)

    def test_scene_switch_swaps_layers(self, loaded) -> None:
        rain = loaded.ambient_output("rain")
        fire = loaded.ambient_output("fire")
        loaded.engine.change_scene(NEXT)
        assert loaded.ambient_output("rain") is rain
        assert loaded.ambient_output("fire") is None
        assert fire.calls[-1] == "stop"
        assert loaded.ambient_output("traffic").url == "traffic.mp3"

    def test_ambient_rejection_is_not_fatal(self, loaded, ambient_outputs) -> None:
        ambient_outputs[0].reject("autoplay blocked")
        assert loaded.ambient.is_active("rain")


# ── keyboard ────────────────────────────────────────────────────────


class TestKeys:
    def test_space_plays(self, loaded) -> None:
        assert loaded.handle_key(KeyPress("Space")) is True
        assert loaded.engine.state.is_playing

    def test_blocked_by_settings_modal(self, loaded) -> None:
        loaded.idle.set_modal_open(SETTINGS, True)
        assert loaded.handle_key(KeyPress("Space")) is False
        assert not loaded.engine.state.is_playing

    def test_dev_mode_calibration_flow(self, loaded, fake_clipboard) -> None:
        loaded.handle_key(KeyPress("D", ctrl=True))
        assert loaded.dev_mode
        loaded.handle_key(KeyPress("C", ctrl=True))
        assert loaded.calibration.active

        loaded.calibration.set_viewport(1920, 1080)
        loaded.calibration.capture_click(960, 540)
        assert fake_clipboard.text == "{ top: '50%', left: '50%' }"

        # hotspots are inert while calibrating
        loaded.ambient.toggle_ambience("rain")
        assert loaded.ambient.is_active("rain")

        loaded.handle_key(KeyPress("D", ctrl=True))
        assert not loaded.dev_mode
        assert not loaded.calibration.active
        assert len(loaded.calibration.history) == 1

    def test_export_scene_key(self, loaded, fake_clipboard) -> None:
        loaded.toggle_dev_mode()
        loaded.handle_key(KeyPress("C", shift=True))
        assert "Rainy Room" in fake_clipboard.text

    def test_clear_history_asks(self, loaded) -> None:
        loaded.toggle_dev_mode()
        loaded.calibration.set_active(True)
        loaded.calibration.capture_click(1, 1)
        loaded.perform(Action.CLEAR_HISTORY, confirm=lambda: False)
        assert len(loaded.calibration.history) == 1
        loaded.handle_key(KeyPress("Delete", ctrl=True, shift=True), confirm=lambda: True)
        assert loaded.calibration.history == []


# ── welcome ─────────────────────────────────────────────────────────


class TestWelcome:
    def test_first_visit_opens_welcome(self, controller) -> None:
        assert controller.idle.is_modal_open(WELCOME)
        assert controller.handle_key(KeyPress("Space")) is False

    def test_complete_persists_and_closes(self, controller, persistence) -> None:
        seen = []
        controller.welcome_changed.connect(seen.append)
        controller.complete_welcome()
        assert not controller.idle.is_modal_open(WELCOME)
        assert persistence.writes == [("merky_visited", True)]
        assert seen == [False]

    def test_returning_visitor_skips_welcome(self, fake_output, fake_clipboard, persistence) -> None:
        persistence.flags["merky_visited"] = True
        ctl = StationController(
            music_output=fake_output,
            ambient_output_factory=lambda: type(fake_output)(),
            clipboard=fake_clipboard,
            session=SessionState(persistence),
        )
        assert not ctl.idle.is_modal_open(WELCOME)
        ctl.shutdown()


# ── end to end ──────────────────────────────────────────────────────


class TestEndToEnd:
    def test_two_tracks_one_scene_three_sounds(self, controller, sample_tracks) -> None:
        scene = Scene(
            id="s", name="Attic", bg_day="d.jpg", bg_night="n.jpg", theme_color="#abc",
            sounds=tuple(
                AmbientSound(sid, sid.title(), f"{sid}.mp3", vol, HotspotPosition(10, 10))
                for sid, vol in [("rain", 0.5), ("wind", 0.25), ("birds", 0.75)]
            ),
        )
        controller.apply_catalog(Catalog(tracks=sample_tracks[:2], scenes=[scene]))
        amb = controller.ambient
        master = controller.master_volume

        assert amb.state.active_ids == {"rain", "wind", "birds"}
        assert {sid: amb.volume(sid) for sid in scene.sound_ids} == {
            "rain": 0.5, "wind": 0.25, "birds": 0.75,
        }

        before = amb.effective_volume("wind", master)
        amb.toggle_ambience("wind")
        assert amb.effective_volume("wind", master) == 0.0
        assert controller.ambient_output("wind").volume == 0.0
        assert amb.volume("wind") == 0.25

        amb.toggle_ambience("wind")
        assert amb.effective_volume("wind", master) == before
        assert controller.ambient_output("wind").volume == before

    def test_track_cycle_returns_to_start(self, loaded) -> None:
        n = len(loaded.engine.tracks)
        for _ in range(n):
            loaded.engine.change_track(NEXT)
        assert loaded.engine.state.current_track_index == 0

    def test_shutdown_stops_everything(self, loaded, fake_output, ambient_outputs) -> None:
        loaded.shutdown()
        assert fake_output.calls[-1] == "stop"
        assert all(o.calls[-1] == "stop" for o in ambient_outputs)
        assert loaded.idle.idle_deadline is None
