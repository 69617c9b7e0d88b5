"""Scene view — the scaled 1920×1080 background with ambient hotspots."""

import logging
import math
from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QWidget

from ..models import AmbientSound
from ..scale_transform import ScaleTransform

logger = logging.getLogger(__name__)

HOTSPOT_RADIUS = 20  # design-space px


class SceneView(QWidget):
    """Paints the current scene and turns clicks into hotspot toggles.

    In calibration mode hotspots ignore clicks; the click position is
    emitted as ``canvas_clicked`` instead and a crosshair follows the
    tracked design-space position.
    """

    hotspot_clicked = Signal(str)          # sound id
    pointer_moved = Signal(float, float)   # widget px
    canvas_clicked = Signal(float, float)  # widget px

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("SceneView")
        self.setMouseTracking(True)
        self._pixmap_cache: Dict[str, Optional[QPixmap]] = {}
        self._background: str = ""
        self._theme_color = QColor("#000")
        self._hotspots: List[Tuple[AmbientSound, float, bool]] = []
        self._calibrating: bool = False
        self._crosshair: Optional[Tuple[float, float]] = None  # (left %, top %)

    # ── public ──────────────────────────────────────────────────────

    def set_background(self, path: str, theme_color: str = "#000") -> None:
        self._background = path
        self._theme_color = QColor(theme_color)
        self.update()

    def set_hotspots(self, hotspots: List[Tuple[AmbientSound, float, bool]]) -> None:
        self._hotspots = list(hotspots)
        self.update()

    def set_calibrating(self, active: bool) -> None:
        self._calibrating = active
        if not active:
            self._crosshair = None
        self.setCursor(Qt.CursorShape.CrossCursor if active else Qt.CursorShape.ArrowCursor)
        self.update()

    def set_crosshair(self, left_pct: float, top_pct: float) -> None:
        self._crosshair = (left_pct, top_pct)
        self.update()

    def transform(self) -> ScaleTransform:
        return ScaleTransform(self.width(), self.height())

    def hotspot_at(self, x: float, y: float) -> Optional[str]:
        tr = self.transform()
        radius = HOTSPOT_RADIUS * tr.scale
        for sound, _vol, _active in self._hotspots:
            hx, hy = tr.to_viewport(sound.position.left, sound.position.top)
            if math.hypot(x - hx, y - hy) <= radius:
                return sound.id
        return None

    # ── events ──────────────────────────────────────────────────────

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        pos = event.position()
        self.pointer_moved.emit(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        if self._calibrating:
            self.canvas_clicked.emit(pos.x(), pos.y())
            return
        sound_id = self.hotspot_at(pos.x(), pos.y())
        if sound_id is not None:
            self.hotspot_clicked.emit(sound_id)
            return
        super().mousePressEvent(event)

    # ── painting ────────────────────────────────────────────────────

    def _pixmap(self, path: str) -> Optional[QPixmap]:
        if path not in self._pixmap_cache:
            pm = QPixmap(path) if path else QPixmap()
            if pm.isNull():
                if path:
                    logger.warning("Background not found: %s", path)
                pm = None
            self._pixmap_cache[path] = pm
        return self._pixmap_cache[path]

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(0, 0, 0))

        tr = self.transform()
        ox, oy = tr.origin
        cw, ch = tr.canvas_size
        canvas = QRectF(ox, oy, cw, ch)

        pm = self._pixmap(self._background)
        if pm is not None:
            painter.drawPixmap(canvas, pm, QRectF(pm.rect()))
        else:
            bg = QColor(self._theme_color)
            bg.setAlpha(60)
            painter.fillRect(canvas, bg)

        self._draw_hotspots(painter, tr)
        if self._calibrating and self._crosshair is not None:
            self._draw_crosshair(painter, tr)
        painter.end()

    def _draw_hotspots(self, painter: QPainter, tr: ScaleTransform) -> None:
        radius = HOTSPOT_RADIUS * tr.scale
        font = QFont()
        font.setPixelSize(max(9, int(10 * tr.scale)))
        painter.setFont(font)
        for sound, _vol, active in self._hotspots:
            cx, cy = tr.to_viewport(sound.position.left, sound.position.top)
            ring = QColor(74, 222, 128) if active else QColor(75, 85, 99)
            if active:
                glow = QColor(34, 197, 94, 77)
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(glow)
                painter.drawEllipse(QPointF(cx, cy), radius + 4, radius + 4)
            painter.setPen(QPen(ring, 2))
            painter.setBrush(QColor(0, 0, 0, 102))
            painter.drawEllipse(QPointF(cx, cy), radius, radius)
            painter.setPen(QColor(229, 231, 235))
            painter.drawText(
                QRectF(cx - radius * 2, cy + radius + 2, radius * 4, 16),
                Qt.AlignmentFlag.AlignHCenter,
                sound.name,
            )

    def _draw_crosshair(self, painter: QPainter, tr: ScaleTransform) -> None:
        left, top = self._crosshair
        cx, cy = tr.to_viewport(left, top)
        painter.setPen(QPen(QColor(239, 68, 68), 2))
        painter.drawLine(QPointF(cx - 16, cy), QPointF(cx + 16, cy))
        painter.drawLine(QPointF(cx, cy - 16), QPointF(cx, cy + 16))
        painter.setPen(QPen(QColor(255, 255, 255), 2))
        painter.setBrush(QColor(239, 68, 68))
        painter.drawEllipse(QPointF(cx, cy), 6, 6)
