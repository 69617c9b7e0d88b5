"""Bottom control bar — transport, track info and panel toggles."""

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QProgressBar, QPushButton, QVBoxLayout, QWidget

from ..models import Track


class ControlBar(QWidget):
    """Play/pause, prev/next, track title and buttons for every panel."""

    play_clicked = Signal()
    prev_clicked = Signal()
    next_clicked = Signal()
    day_mode_clicked = Signal()
    panel_requested = Signal(str)  # modal name

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("ControlBar")
        self.setMouseTracking(True)

        outer = QVBoxLayout(self)
        outer.setContentsMargins(16, 6, 16, 10)
        outer.setSpacing(6)

        self._progress = QProgressBar()
        self._progress.setObjectName("TrackProgress")
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(4)
        outer.addWidget(self._progress)

        row = QHBoxLayout()
        row.setSpacing(8)

        self._title = QLabel("")
        self._title.setObjectName("TrackTitle")
        self._artist = QLabel("")
        self._artist.setObjectName("TrackArtist")
        info = QVBoxLayout()
        info.setSpacing(0)
        info.addWidget(self._title)
        info.addWidget(self._artist)
        row.addLayout(info)
        row.addStretch()

        self._btn_prev = self._make_btn("⏮", self.prev_clicked.emit)
        self._btn_play = self._make_btn("▶", self.play_clicked.emit)
        self._btn_play.setObjectName("PlayBtn")
        self._btn_next = self._make_btn("⏭", self.next_clicked.emit)
        for btn in (self._btn_prev, self._btn_play, self._btn_next):
            row.addWidget(btn)
        row.addStretch()

        self._btn_mode = self._make_btn("☾", self.day_mode_clicked.emit)
        row.addWidget(self._btn_mode)
        self._btn_volume = self._make_btn("🔊", lambda: self.panel_requested.emit("volume"))
        row.addWidget(self._btn_volume)
        for text, name in [
            ("Scenes", "scene_menu"),
            ("Settings", "settings"),
            ("Info", "info"),
            ("Welcome", "welcome"),
            ("Dev", "developer"),
        ]:
            row.addWidget(self._make_btn(text, lambda n=name: self.panel_requested.emit(n)))
        outer.addLayout(row)

    @staticmethod
    def _make_btn(text: str, slot) -> QPushButton:
        btn = QPushButton(text)
        btn.setObjectName("CtrlBtn")
        btn.clicked.connect(slot)
        return btn

    # ── public ──────────────────────────────────────────────────────

    def set_track(self, track: Track) -> None:
        self._title.setText(track.title)
        self._artist.setText(track.artist)

    def set_titles_visible(self, visible: bool) -> None:
        self._title.setVisible(visible)
        self._artist.setVisible(visible)

    def set_playing(self, playing: bool) -> None:
        self._btn_play.setText("⏸" if playing else "▶")

    def set_progress(self, progress: float) -> None:
        self._progress.setValue(int(progress * 10))

    def set_day_mode(self, is_day: bool) -> None:
        self._btn_mode.setText("☀" if is_day else "☾")

    def set_volume_indicator(self, music_volume: float) -> None:
        self._btn_volume.setText("🔇" if music_volume <= 0 else "🔊")

    def set_theme_color(self, color: str) -> None:
        self._progress.setStyleSheet(
            f"QProgressBar::chunk {{ background-color: {color}; border-radius: 2px; }}"
        )
