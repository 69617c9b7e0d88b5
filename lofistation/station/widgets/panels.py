"""Small overlay panels: scene menu, info, welcome and developer profile."""

from typing import List

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QLabel, QPushButton, QWidget

from ..models import Scene
from .overlay_panel import OverlayPanel


def _text(text: str, name: str = "") -> QLabel:
    lbl = QLabel(text)
    lbl.setWordWrap(True)
    if name:
        lbl.setObjectName(name)
    return lbl


class SceneMenuPanel(OverlayPanel):
    """One button per scene; the current one is checked."""

    scene_selected = Signal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Scenes", parent)
        self._buttons: List[QPushButton] = []

    def set_scenes(self, scenes: List[Scene], current: int) -> None:
        for btn in self._buttons:
            self.body_layout.removeWidget(btn)
            btn.deleteLater()
        self._buttons = []
        for i, scene in enumerate(scenes):
            btn = QPushButton(scene.name)
            btn.setObjectName("SceneBtn")
            btn.setCheckable(True)
            btn.setChecked(i == current)
            btn.clicked.connect(lambda _c=False, idx=i: self.scene_selected.emit(idx))
            self.body_layout.addWidget(btn)
            self._buttons.append(btn)
        self.adjustSize()

    def set_current(self, index: int) -> None:
        for i, btn in enumerate(self._buttons):
            btn.setChecked(i == index)


class InfoPanel(OverlayPanel):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Merky Radio", parent)
        self.setFixedWidth(320)
        self.body_layout.addWidget(_text("Lofi Station & Focus Tool", "Subtitle"))
        self.body_layout.addWidget(_text(
            "Merky Radio is a non-profit hobby project crafted for deep work "
            "and relaxation."
        ))
        self.body_layout.addWidget(_text(
            "Space  play / pause\nM  mute\nCtrl+D  developer mode", "Readout"
        ))


class WelcomePanel(OverlayPanel):
    """First-visit greeting; ``accepted`` completes the welcome flow."""

    accepted = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("MERKY RADIO", parent)
        self.setFixedWidth(360)
        self.body_layout.addWidget(_text("Welcome to Merky Radio", "WelcomeTitle"))
        self.body_layout.addWidget(_text(
            "Experience high-fidelity lo-fi beats curated for deep focus, "
            "relaxation, and coding sessions."
        ))
        btn = QPushButton("Start listening")
        btn.setObjectName("PrimaryBtn")
        btn.clicked.connect(self.accepted.emit)
        self.body_layout.addWidget(btn)
        self.closed.connect(self.accepted.emit)


class DeveloperPanel(OverlayPanel):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("DEV_PROFILE", parent)
        self.setFixedWidth(320)
        self.body_layout.addWidget(_text("Arjen", "WelcomeTitle"))
        self.body_layout.addWidget(_text(
            "Coding is just a hobby; the real passion is exploring the "
            "mechanics of the world. Electronics and aviation on the side."
        ))
        self.body_layout.addWidget(_text(
            "Ctrl+D toggles developer mode. With it on, Ctrl+C opens the "
            "coordinate collector and Shift+C exports the scene.", "Readout"
        ))
