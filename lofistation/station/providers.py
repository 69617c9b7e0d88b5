"""External collaborators — audio output and clipboard.

The core only talks to these through the small :class:`AudioOutput` and
:class:`Clipboard` interfaces; the Qt implementations below are what the
application wires in, tests substitute fakes.
"""

import logging
import os
from concurrent.futures import Future
from typing import List, Protocol

from PySide6.QtCore import QObject, QUrl, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

logger = logging.getLogger(__name__)


class PlaybackError(Exception):
    """Raised into a ``play()`` future when playback could not start."""


class AudioOutput(Protocol):
    """Minimal transport surface the playback engine drives."""

    def load(self, url: str) -> None: ...

    def play(self) -> "Future[None]": ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...

    def set_volume(self, volume: float) -> None: ...

    @property
    def is_playing(self) -> bool: ...


class Clipboard(Protocol):
    def write_text(self, text: str) -> bool: ...


def _to_qurl(url: str) -> QUrl:
    if url and os.path.exists(url):
        return QUrl.fromLocalFile(os.path.abspath(url))
    return QUrl(url)


class QtAudioOutput(QObject):
    """``QMediaPlayer``-backed audio output.

    ``play()`` returns a :class:`concurrent.futures.Future` that resolves
    once the player reports ``PlayingState`` and fails with
    :class:`PlaybackError` if the player errors or is paused first.
    Positions are reported in seconds through ``time_updated``.
    """

    time_updated = Signal(float, float)  # current_s, duration_s
    ended = Signal()

    def __init__(self, loop: bool = False, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._audio = QAudioOutput(self)
        self._player = QMediaPlayer(self)
        self._player.setAudioOutput(self._audio)
        if loop:
            self._player.setLoops(-1)  # QMediaPlayer.Loops.Infinite
        self._pending: List[Future] = []
        self._url: str = ""

        self._player.positionChanged.connect(self._on_position)
        self._player.playbackStateChanged.connect(self._on_state)
        self._player.mediaStatusChanged.connect(self._on_media_status)
        self._player.errorOccurred.connect(self._on_error)

    # ── transport ───────────────────────────────────────────────────

    def load(self, url: str) -> None:
        """Stop, rewind and point the player at *url*."""
        self._player.stop()
        self._fail_pending("source replaced")
        self._url = url
        self._player.setSource(_to_qurl(url))
        self._player.setPosition(0)

    def play(self) -> "Future[None]":
        fut: Future = Future()
        if not self._url:
            fut.set_exception(PlaybackError("no source loaded"))
            return fut
        if self.is_playing:
            fut.set_result(None)
            return fut
        self._pending.append(fut)
        self._player.play()
        return fut

    def pause(self) -> None:
        self._player.pause()
        self._fail_pending("interrupted by pause")

    def stop(self) -> None:
        self._player.stop()
        self._fail_pending("interrupted by stop")

    def set_volume(self, volume: float) -> None:
        self._audio.setVolume(float(volume))

    @property
    def is_playing(self) -> bool:
        return self._player.playbackState() == QMediaPlayer.PlaybackState.PlayingState

    @property
    def url(self) -> str:
        return self._url

    # ── player callbacks ────────────────────────────────────────────

    def _resolve_pending(self) -> None:
        pending, self._pending = self._pending, []
        for fut in pending:
            if not fut.done():
                fut.set_result(None)

    def _fail_pending(self, reason: str) -> None:
        pending, self._pending = self._pending, []
        for fut in pending:
            if not fut.done():
                fut.set_exception(PlaybackError(reason))

    def _on_state(self, state) -> None:
        if state == QMediaPlayer.PlaybackState.PlayingState:
            self._resolve_pending()

    def _on_position(self, position_ms: int) -> None:
        self.time_updated.emit(position_ms / 1000.0, self._player.duration() / 1000.0)

    def _on_media_status(self, status) -> None:
        if status == QMediaPlayer.MediaStatus.EndOfMedia:
            self.ended.emit()
        elif status == QMediaPlayer.MediaStatus.InvalidMedia:
            self._fail_pending(f"invalid media: {self._url}")

    def _on_error(self, error, message: str) -> None:
        logger.warning("Audio error on %s: %s", self._url or "<none>", message)
        self._fail_pending(message or str(error))


class QtClipboard:
    """System clipboard through ``QGuiApplication.clipboard()``."""

    def write_text(self, text: str) -> bool:
        try:
            clipboard = QGuiApplication.clipboard()
            if clipboard is None:
                return False
            clipboard.setText(text)
            return clipboard.text() == text
        except RuntimeError as exc:
            logger.warning("Clipboard unavailable: %s", exc)
            return False
