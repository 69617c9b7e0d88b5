"""Calibration panel — live readout, copy status and capture history."""

from datetime import datetime
from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QWidget,
)

from ..calibration import CoordinateCalibrationTool
from ..models import CalibrationRecord, Scene
from .overlay_panel import OverlayPanel


class CalibrationPanel(OverlayPanel):
    """Hovering the panel suspends capture so its own clicks are not recorded."""

    def __init__(
        self,
        tool: CoordinateCalibrationTool,
        current_scene: Callable[[], Scene],
        confirm_clear: Callable[[], bool],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__("Coordinate Collector", parent)
        self._tool = tool
        self._current_scene = current_scene
        self._confirm_clear = confirm_clear
        self.setMinimumWidth(300)

        self._pointer = QLabel("Move over the scene")
        self._pointer.setObjectName("Readout")
        self.body_layout.addWidget(self._pointer)
        self._captured = QLabel("")
        self._captured.setObjectName("Readout")
        self.body_layout.addWidget(self._captured)

        self._status = QLabel("")
        self._status.setWordWrap(True)
        self.body_layout.addWidget(self._status)
        self._manual = QPlainTextEdit()
        self._manual.setReadOnly(True)
        self._manual.setFixedHeight(90)
        self._manual.hide()
        self.body_layout.addWidget(self._manual)

        self._history = QListWidget()
        self._history.setFixedHeight(140)
        self._history.itemDoubleClicked.connect(self._recopy_item)
        self.body_layout.addWidget(self._history)

        buttons = QHBoxLayout()
        for text, slot in [
            ("Copy", self._recopy_selected),
            ("Remove", self._remove_selected),
            ("Clear", self._clear),
            ("Export scene", self._export),
        ]:
            btn = QPushButton(text)
            btn.clicked.connect(slot)
            buttons.addWidget(btn)
        self.body_layout.addLayout(buttons)

        self.hovered.connect(tool.set_pointer_exempt)
        self.closed.connect(lambda: tool.set_active(False))
        tool.active_changed.connect(self._on_active)
        tool.pointer_tracked.connect(self._on_pointer)
        tool.coordinate_captured.connect(self._on_captured)
        tool.history_changed.connect(self.refresh_history)
        tool.copy_status.connect(self._on_copy_status)

    # ── tool signals ────────────────────────────────────────────────

    def _on_active(self, active: bool) -> None:
        self.setVisible(active)
        if active:
            self.raise_()
            self.refresh_history()
        else:
            self._pointer.setText("Move over the scene")
            self._captured.setText("")
            self._status.setText("")
            self._manual.hide()

    def _on_pointer(self, left: float, top: float) -> None:
        self._pointer.setText(f"top: {top:g}%   left: {left:g}%")

    def _on_captured(self, record: CalibrationRecord) -> None:
        self._captured.setText(f"Captured {record.literal}")

    def _on_copy_status(self, success: bool, message: str) -> None:
        self._status.setText(message)
        result = self._tool.last_copy
        if success or result is None:
            self._manual.hide()
        else:
            self._manual.setPlainText(result.text)
            self._manual.show()
            self._manual.selectAll()

    def refresh_history(self) -> None:
        self._history.clear()
        for record in self._tool.history:
            stamp = datetime.fromtimestamp(record.timestamp / 1000).strftime("%H:%M:%S")
            item = QListWidgetItem(f"{stamp}  {record.literal}")
            item.setData(Qt.ItemDataRole.UserRole, record.id)
            self._history.addItem(item)

    # ── buttons ─────────────────────────────────────────────────────

    def _record_for(self, item: QListWidgetItem | None) -> CalibrationRecord | None:
        if item is None:
            return None
        rid = item.data(Qt.ItemDataRole.UserRole)
        return next((r for r in self._tool.history if r.id == rid), None)

    def _recopy_item(self, item: QListWidgetItem) -> None:
        record = self._record_for(item)
        if record is not None:
            self._tool.recopy(record)

    def _recopy_selected(self) -> None:
        self._recopy_item(self._history.currentItem())

    def _remove_selected(self) -> None:
        record = self._record_for(self._history.currentItem())
        if record is not None:
            self._tool.remove(record.id)

    def _clear(self) -> None:
        self._tool.clear_history(self._confirm_clear)

    def _export(self) -> None:
        self._tool.export_scene(self._current_scene())
