"""Playback engine — track/scene navigation and the play/pause state machine.

Owns :class:`PlaybackState` and drives an :class:`AudioOutput`.  Two rules
hold throughout:

* toggling play/pause never reloads the source (position is kept);
* changing the track always reloads it (position goes back to 0).

``play()`` on the output is asynchronous and may be rejected (autoplay
policy, decode error).  Every command bumps an intent serial; when a play
future settles, only a result belonging to the latest intent may touch
state, so out-of-order settlement after rapid skips is harmless.
"""

import logging
import math
from concurrent.futures import Future
from typing import List, Sequence

from PySide6.QtCore import QObject, Signal

from .models import PLACEHOLDER_TRACK, PlaybackState, Track

logger = logging.getLogger(__name__)

NEXT = "next"
PREV = "prev"


def _step(index: int, direction: str, length: int) -> int:
    """Cyclic index step used for both tracks and scenes."""
    if direction == NEXT:
        index += 1
    elif direction == PREV:
        index -= 1
    else:
        raise ValueError(f"Unknown direction: {direction!r}")
    if index >= length:
        index = 0
    if index < 0:
        index = length - 1
    return index


class PlaybackEngine(QObject):
    """Transport controller for the foreground music track."""

    state_changed = Signal()
    track_changed = Signal(int)
    scene_changed = Signal(int)
    progress_changed = Signal(float)

    def __init__(self, output, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._output = output
        self._tracks: List[Track] = []
        self._scene_count: int = 0
        self._intent_serial: int = 0
        self.state = PlaybackState()

    # ── catalog ─────────────────────────────────────────────────────

    def set_tracks(self, tracks: Sequence[Track]) -> None:
        """Replace the track list and cue the first track (paused)."""
        self._tracks = list(tracks)
        self._intent_serial += 1
        self.state.current_track_index = 0
        self.state.is_playing = False
        self.state.progress = 0.0
        if self._tracks:
            self._reload()
        self.track_changed.emit(0)
        self.state_changed.emit()

    def set_scene_count(self, count: int) -> None:
        self._scene_count = max(0, count)
        if self.state.current_scene_index >= self._scene_count:
            self.state.current_scene_index = 0

    @property
    def tracks(self) -> List[Track]:
        return list(self._tracks)

    @property
    def current_track(self) -> Track:
        if not self._tracks:
            return PLACEHOLDER_TRACK
        return self._tracks[self.state.current_track_index]

    # ── transport ───────────────────────────────────────────────────

    def toggle_play(self) -> None:
        """Flip play/pause without touching the playback position."""
        self._intent_serial += 1
        self.state.is_playing = not self.state.is_playing
        if self.state.is_playing:
            self._start_output()
        else:
            # also cancels a play() that is still in flight
            self._output.pause()
        self.state_changed.emit()

    def change_track(self, direction: str) -> None:
        """Step to the next/previous track with wraparound and auto-play."""
        if not self._tracks:
            return
        index = _step(self.state.current_track_index, direction, len(self._tracks))
        self._intent_serial += 1
        self.state.current_track_index = index
        self.state.is_playing = True
        self.state.progress = 0.0
        self._reload()
        self._start_output()
        logger.info("Track %d/%d: %s", index + 1, len(self._tracks), self.current_track.title)
        self.track_changed.emit(index)
        self.state_changed.emit()

    def on_track_ended(self) -> None:
        self.change_track(NEXT)

    def on_time_update(self, current_time: float, duration: float) -> None:
        """Derive progress (0-100) from the output's position report."""
        if not duration or not math.isfinite(duration) or duration <= 0:
            return
        if not math.isfinite(current_time):
            return
        progress = max(0.0, min(100.0, current_time / duration * 100))
        self.state.progress = progress
        self.progress_changed.emit(progress)

    # ── scenes & mode ───────────────────────────────────────────────

    def select_scene(self, index: int) -> None:
        if not 0 <= index < self._scene_count:
            logger.warning("Scene index %d out of range (0-%d)", index, self._scene_count - 1)
            return
        if index == self.state.current_scene_index:
            return
        self.state.current_scene_index = index
        self.scene_changed.emit(index)
        self.state_changed.emit()

    def change_scene(self, direction: str) -> None:
        if self._scene_count == 0:
            return
        self.select_scene(_step(self.state.current_scene_index, direction, self._scene_count))

    def toggle_day_mode(self) -> None:
        self.state.is_day_mode = not self.state.is_day_mode
        self.state_changed.emit()

    # ── internals ───────────────────────────────────────────────────

    def _reload(self) -> None:
        self._output.stop()
        self._output.load(self.current_track.url)

    def _start_output(self) -> None:
        if self._output.is_playing:
            return
        serial = self._intent_serial
        fut: Future = self._output.play()
        fut.add_done_callback(lambda f, s=serial: self._on_play_settled(s, f))

    def _on_play_settled(self, serial: int, fut: Future) -> None:
        exc = fut.exception()
        latest = serial == self._intent_serial
        if exc is None:
            # a play that won the race against a pause
            if not self.state.is_playing:
                self._output.pause()
            return
        if not latest or not self.state.is_playing:
            logger.debug("Ignoring superseded play rejection: %s", exc)
            return
        logger.warning("Playback prevented: %s", exc)
        self._intent_serial += 1
        self.state.is_playing = False
        self.state_changed.emit()
