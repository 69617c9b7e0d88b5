"""Station controller — wires the core components to their collaborators.

Owns the playback engine, ambient manager, idle controller, calibration
tool and settings store for one window, plus one looping audio output per
ambient sound of the current scene.  After any change to the mix it
recomputes every effective volume and pushes it to the outputs.
"""

import logging
import time
from typing import Callable, Dict, Optional

from PySide6.QtCore import QObject, Signal

from .ambient_manager import AmbientSoundManager
from .calibration import CoordinateCalibrationTool
from .catalog import Catalog
from .idle_controller import WELCOME, IdleVisibilityController
from .models import DEFAULT_MASTER_VOLUME, DEFAULT_MUSIC_VOLUME, Scene, Track
from .playback_engine import PlaybackEngine
from .settings_store import SettingsStore
from .shortcuts import Action, KeyPress, route
from .volume_mixer import clamp_volume, effective_music_volume, toggle_mute

logger = logging.getLogger(__name__)


class StationController(QObject):
    """One listening session: transport, ambient mix, overlays, dev tools."""

    catalog_loaded = Signal()
    volumes_changed = Signal()
    dev_mode_changed = Signal(bool)
    welcome_changed = Signal(bool)

    def __init__(
        self,
        music_output,
        ambient_output_factory: Callable[[], object],
        clipboard,
        session,
        settings_store: SettingsStore | None = None,
        clock: Callable[[], float] = time.monotonic,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.session = session
        self.settings_store = settings_store or SettingsStore(parent=self)
        self.engine = PlaybackEngine(music_output, parent=self)
        self.ambient = AmbientSoundManager(parent=self)
        self.idle = IdleVisibilityController(self.settings_store.settings, clock=clock, parent=self)
        self.calibration = CoordinateCalibrationTool(clipboard, parent=self)

        self.master_volume: float = DEFAULT_MASTER_VOLUME
        self.music_volume: float = DEFAULT_MUSIC_VOLUME
        self.catalog = Catalog(ok=False)
        self.is_loading: bool = True
        self.dev_mode: bool = False

        self._music_output = music_output
        self._ambient_factory = ambient_output_factory
        self._ambient_outputs: Dict[str, object] = {}

        self.settings_store.settings_changed.connect(self.idle.apply_settings)
        self.engine.scene_changed.connect(self._on_scene_index)
        self.ambient.mix_changed.connect(self.apply_volumes)
        self.calibration.active_changed.connect(self.ambient.set_calibration_active)
        if hasattr(music_output, "time_updated"):
            music_output.time_updated.connect(self.engine.on_time_update)
        if hasattr(music_output, "ended"):
            music_output.ended.connect(self.engine.on_track_ended)

        if self.session.should_show_welcome:
            self.idle.set_modal_open(WELCOME, True)

    # ── catalog / scenes ────────────────────────────────────────────

    def apply_catalog(self, catalog: Catalog) -> None:
        """Install fetched (or empty) catalog data and enter the first scene."""
        self.catalog = catalog
        self.is_loading = False
        self.engine.set_scene_count(len(catalog.scenes))
        self.engine.set_tracks(catalog.tracks)
        self._enter_scene(self.current_scene)
        self.catalog_loaded.emit()

    @property
    def current_scene(self) -> Scene:
        return self.catalog.scene_at(self.engine.state.current_scene_index)

    @property
    def current_track(self) -> Track:
        return self.engine.current_track

    def _on_scene_index(self, index: int) -> None:
        self._enter_scene(self.catalog.scene_at(index))

    def _enter_scene(self, scene: Scene) -> None:
        keep = set(scene.sound_ids)
        for sid in list(self._ambient_outputs):
            if sid not in keep:
                self._ambient_outputs.pop(sid).stop()
        for sound in scene.sounds:
            if sound.id in self._ambient_outputs:
                continue
            out = self._ambient_factory()
            out.set_volume(0.0)
            out.load(sound.src)
            out.play().add_done_callback(
                lambda f, sid=sound.id: self._on_ambient_settled(sid, f)
            )
            self._ambient_outputs[sound.id] = out
        self.ambient.on_scene_change(scene)

    @staticmethod
    def _on_ambient_settled(sound_id: str, fut) -> None:
        exc = fut.exception()
        if exc is not None:
            logger.warning("Ambient layer %s did not start: %s", sound_id, exc)

    def ambient_output(self, sound_id: str) -> Optional[object]:
        return self._ambient_outputs.get(sound_id)

    # ── volumes ─────────────────────────────────────────────────────

    def apply_volumes(self) -> None:
        """Push effective levels to the music output and every ambient layer."""
        self._music_output.set_volume(effective_music_volume(self.music_volume, self.master_volume))
        for sid, level in self.ambient.effective_volumes(self.master_volume).items():
            out = self._ambient_outputs.get(sid)
            if out is not None:
                out.set_volume(level)
        self.volumes_changed.emit()

    def set_master_volume(self, value: float) -> None:
        self.master_volume = clamp_volume(value)
        self.apply_volumes()

    def set_music_volume(self, value: float) -> None:
        self.music_volume = clamp_volume(value)
        self.apply_volumes()

    def set_ambient_volume(self, sound_id: str, value: float) -> None:
        self.ambient.set_volume(sound_id, value)

    def toggle_mute(self) -> None:
        self.set_master_volume(toggle_mute(self.master_volume))

    @property
    def displayed_music_volume(self) -> float:
        """Music slider as the control bar shows it (0 while muted)."""
        return self.music_volume if self.master_volume > 0 else 0.0

    # ── developer mode ──────────────────────────────────────────────

    def toggle_dev_mode(self) -> None:
        self.dev_mode = not self.dev_mode
        if self.dev_mode:
            scene = self.current_scene
            logger.info("Developer mode on | scene=%s | hotspots=%d", scene.name, len(scene.sounds))
            for i, sound in enumerate(scene.sounds, start=1):
                logger.info("  %d. %s: top=%g%% left=%g%%", i, sound.name,
                            sound.position.top, sound.position.left)
        else:
            self.calibration.set_active(False)
            logger.info("Developer mode off")
        self.dev_mode_changed.emit(self.dev_mode)

    # ── keyboard ────────────────────────────────────────────────────

    def handle_key(self, press: KeyPress, confirm: Callable[[], bool] = lambda: False) -> bool:
        """Route a key press; returns True when it was consumed."""
        action = route(press, self.settings_store.settings, self.idle.open_modals, self.dev_mode)
        if action is None:
            return False
        self.perform(action, confirm)
        return True

    def perform(self, action: Action, confirm: Callable[[], bool] = lambda: False) -> None:
        if action is Action.TOGGLE_PLAY:
            self.engine.toggle_play()
        elif action is Action.TOGGLE_MUTE:
            self.toggle_mute()
        elif action is Action.TOGGLE_DEV_MODE:
            self.toggle_dev_mode()
        elif action is Action.TOGGLE_CALIBRATION:
            self.calibration.toggle()
        elif action is Action.EXPORT_SCENE:
            self.calibration.export_scene(self.current_scene)
        elif action is Action.CLEAR_HISTORY:
            self.calibration.clear_history(confirm)

    # ── welcome / lifecycle ─────────────────────────────────────────

    def open_welcome(self) -> None:
        self.idle.set_modal_open(WELCOME, True)
        self.welcome_changed.emit(True)

    def complete_welcome(self) -> None:
        self.session.complete_welcome()
        self.idle.set_modal_open(WELCOME, False)
        self.welcome_changed.emit(False)

    def shutdown(self) -> None:
        """Stop timers, leave calibration and silence every output."""
        self.idle.shutdown()
        self.calibration.set_active(False)
        self._music_output.stop()
        for out in self._ambient_outputs.values():
            out.stop()
        self._ambient_outputs.clear()
