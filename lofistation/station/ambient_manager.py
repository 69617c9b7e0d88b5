"""Ambient sound manager — which scene layers are on, and how loud.

Owns :class:`AmbientMixState`.  Slider levels are remembered per sound id
across scene changes; the on/off set is rebuilt for every scene (all of a
scene's sounds start on).
"""

import logging
from typing import Dict, List, Tuple

from PySide6.QtCore import QObject, Signal

from .models import AmbientMixState, AmbientSound, PLACEHOLDER_SCENE, Scene
from .volume_mixer import clamp_volume, effective_ambient_volume

logger = logging.getLogger(__name__)


class AmbientSoundManager(QObject):
    """Active-set and per-sound volume bookkeeping for the current scene."""

    mix_changed = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.state = AmbientMixState()
        self._scene: Scene = PLACEHOLDER_SCENE
        self._calibrating: bool = False

    @property
    def scene(self) -> Scene:
        return self._scene

    def on_scene_change(self, scene: Scene) -> None:
        """Switch to *scene*: seed unseen volumes, turn every layer on."""
        for sound in scene.sounds:
            if sound.id not in self.state.volumes:
                self.state.volumes[sound.id] = clamp_volume(sound.default_value)
        self._scene = scene
        # reconciled in the same call; no id from the old scene survives
        self.state.active_ids = set(scene.sound_ids)
        logger.debug("Scene %s: %d ambient layers", scene.id, len(scene.sounds))
        self.mix_changed.emit()

    def set_calibration_active(self, active: bool) -> None:
        self._calibrating = active

    def toggle_ambience(self, sound_id: str) -> None:
        """Flip one hotspot on/off.  Ignored while calibrating."""
        if self._calibrating:
            return
        if sound_id not in self._scene.sound_ids:
            logger.warning("Toggle for unknown ambient id %r", sound_id)
            return
        if sound_id in self.state.active_ids:
            self.state.active_ids.discard(sound_id)
        else:
            self.state.active_ids.add(sound_id)
        self.mix_changed.emit()

    def set_volume(self, sound_id: str, value: float) -> None:
        """Set the slider level; a muted layer keeps it for later."""
        self.state.volumes[sound_id] = clamp_volume(value)
        self.mix_changed.emit()

    def is_active(self, sound_id: str) -> bool:
        return sound_id in self.state.active_ids

    def volume(self, sound_id: str) -> float:
        return self.state.volumes.get(sound_id, 0.0)

    def effective_volume(self, sound_id: str, master: float) -> float:
        return effective_ambient_volume(self.volume(sound_id), master, self.is_active(sound_id))

    def effective_volumes(self, master: float) -> Dict[str, float]:
        """Output level for every sound of the current scene."""
        return {sid: self.effective_volume(sid, master) for sid in self._scene.sound_ids}

    def hotspots(self) -> List[Tuple[AmbientSound, float, bool]]:
        """``(sound, slider level, active)`` for rendering."""
        return [(s, self.volume(s.id), self.is_active(s.id)) for s in self._scene.sounds]
