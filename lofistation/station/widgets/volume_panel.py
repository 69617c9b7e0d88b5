"""Volume panel — master, music and one slider per ambient layer."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSlider, QWidget

from .overlay_panel import OverlayPanel


def _slider() -> QSlider:
    s = QSlider(Qt.Orientation.Horizontal)
    s.setRange(0, 100)
    s.setFixedWidth(160)
    return s


class VolumePanel(OverlayPanel):
    """Sliders are 0-100; the controller works in 0.0-1.0."""

    def __init__(self, controller, parent: QWidget | None = None) -> None:
        super().__init__("Volume", parent)
        self._controller = controller
        self._ambient_rows: list[QWidget] = []
        self._ambient_sliders: dict[str, QSlider] = {}

        self._master = self._add_row("Master", self.body_layout)
        self._master.valueChanged.connect(lambda v: controller.set_master_volume(v / 100))
        self._music = self._add_row("Music", self.body_layout)
        self._music.valueChanged.connect(lambda v: controller.set_music_volume(v / 100))

        self._ambient_header = QLabel("Ambience")
        self._ambient_header.setObjectName("SectionLabel")
        self.body_layout.addWidget(self._ambient_header)

        controller.volumes_changed.connect(self.sync)
        controller.catalog_loaded.connect(self.rebuild_ambient)
        controller.engine.scene_changed.connect(lambda _i: self.rebuild_ambient())
        self.rebuild_ambient()

    @staticmethod
    def _add_row(label: str, layout, parent: QWidget | None = None) -> QSlider:
        row = QWidget(parent)
        h = QHBoxLayout(row)
        h.setContentsMargins(0, 0, 0, 0)
        lbl = QLabel(label)
        lbl.setFixedWidth(90)
        h.addWidget(lbl)
        slider = _slider()
        h.addWidget(slider)
        layout.addWidget(row)
        return slider

    def rebuild_ambient(self) -> None:
        for row in self._ambient_rows:
            self.body_layout.removeWidget(row)
            row.deleteLater()
        self._ambient_rows.clear()
        self._ambient_sliders.clear()

        for sound in self._controller.current_scene.sounds:
            slider = self._add_row(sound.name, self.body_layout)
            slider.valueChanged.connect(
                lambda v, sid=sound.id: self._controller.set_ambient_volume(sid, v / 100)
            )
            self._ambient_rows.append(slider.parentWidget())
            self._ambient_sliders[sound.id] = slider
        self._ambient_header.setVisible(bool(self._ambient_sliders))
        self.sync()
        self.adjustSize()

    def sync(self) -> None:
        c = self._controller
        pairs = [(self._master, c.master_volume), (self._music, c.music_volume)]
        pairs += [(s, c.ambient.volume(sid)) for sid, s in self._ambient_sliders.items()]
        for slider, value in pairs:
            slider.blockSignals(True)
            slider.setValue(round(value * 100))
            slider.blockSignals(False)
