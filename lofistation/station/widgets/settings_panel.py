"""Settings panel — overlay preferences and the idle hide delay."""

from PySide6.QtWidgets import QCheckBox, QHBoxLayout, QLabel, QLineEdit, QWidget

from ..models import AppSettings
from ..settings_store import MAX_HIDE_TIME, MIN_HIDE_TIME, SettingsStore
from .overlay_panel import OverlayPanel

_TOGGLES = [
    ("hide_elements", "Hide elements when idle"),
    ("show_titles", "Show track titles"),
    ("show_clock", "Show clock"),
    ("shortcuts", "Keyboard shortcuts"),
]


class SettingsPanel(OverlayPanel):
    def __init__(self, store: SettingsStore, parent: QWidget | None = None) -> None:
        super().__init__("Settings", parent)
        self._store = store
        self._checks: dict[str, QCheckBox] = {}

        for name, label in _TOGGLES:
            cb = QCheckBox(label)
            cb.toggled.connect(lambda checked, n=name: self._store.update(**{n: checked}))
            self.body_layout.addWidget(cb)
            self._checks[name] = cb

        row = QHBoxLayout()
        row.addWidget(QLabel(f"Hide after (seconds, {MIN_HIDE_TIME}-{MAX_HIDE_TIME})"))
        self._hide_time = QLineEdit()
        self._hide_time.setFixedWidth(48)
        self._hide_time.editingFinished.connect(self._commit_hide_time)
        row.addWidget(self._hide_time)
        self.body_layout.addLayout(row)

        store.settings_changed.connect(self.sync)
        self.sync(store.settings)

    def _commit_hide_time(self) -> None:
        self._store.set_hide_time(self._hide_time.text())
        # Rejected or clamped input snaps back to the stored value
        self._hide_time.setText(str(self._store.settings.hide_time))

    def sync(self, settings: AppSettings) -> None:
        for name, cb in self._checks.items():
            cb.blockSignals(True)
            cb.setChecked(getattr(settings, name))
            cb.blockSignals(False)
        self._hide_time.setEnabled(settings.hide_elements)
        if not self._hide_time.hasFocus():
            self._hide_time.setText(str(settings.hide_time))
