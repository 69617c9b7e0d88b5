"""Floating panel used for menus, modals and the developer tools."""

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget


class OverlayPanel(QFrame):
    """Titled, draggable panel floating over the scene.

    Emits ``hovered`` on pointer enter/leave so the calibration tool can
    ignore positions over panels.
    """

    closed = Signal()
    hovered = Signal(bool)

    def __init__(self, title: str, parent: QWidget | None = None, closable: bool = True) -> None:
        super().__init__(parent)
        self.setObjectName("OverlayPanel")
        self.setMouseTracking(True)
        self._drag_offset: QPoint | None = None

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        header = QWidget()
        header.setObjectName("OverlayHeader")
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(12, 6, 6, 6)
        self._title = QLabel(title)
        self._title.setObjectName("OverlayTitle")
        header_layout.addWidget(self._title)
        header_layout.addStretch()
        if closable:
            btn = QPushButton("✕")
            btn.setObjectName("OverlayClose")
            btn.setFixedSize(24, 24)
            btn.clicked.connect(self.closed.emit)
            header_layout.addWidget(btn)
        outer.addWidget(header)

        self.body = QWidget()
        self.body_layout = QVBoxLayout(self.body)
        self.body_layout.setContentsMargins(14, 10, 14, 14)
        self.body_layout.setSpacing(8)
        outer.addWidget(self.body)
        self.hide()

    def set_title(self, title: str) -> None:
        self._title.setText(title)

    # ── drag by header ──────────────────────────────────────────────

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton and event.position().y() < 36:
            self._drag_offset = event.position().toPoint()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        if self._drag_offset is not None:
            self.move(self.mapToParent(event.position().toPoint() - self._drag_offset))
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        self._drag_offset = None
        super().mouseReleaseEvent(event)

    def enterEvent(self, event) -> None:  # type: ignore[override]
        self.hovered.emit(True)
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self.hovered.emit(False)
        super().leaveEvent(event)
