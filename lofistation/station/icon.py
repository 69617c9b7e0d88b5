"""Paint the LofiStation app icon (a vinyl record) at runtime using QPainter."""

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QColor, QIcon, QLinearGradient, QPainter, QPen, QPixmap

ICON_SIZES = (16, 24, 32, 48, 64, 128, 256)


def create_app_icon() -> QIcon:
    """Return a multi-size QIcon for the application."""
    icon = QIcon()
    for size in ICON_SIZES:
        icon.addPixmap(render_icon(size))
    return icon


def render_icon(size: int) -> QPixmap:
    """Paint the icon at the given pixel size and return a QPixmap."""
    pm = QPixmap(size, size)
    pm.fill(Qt.GlobalColor.transparent)

    p = QPainter(pm)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)

    s = size
    cx, cy = s / 2, s / 2
    r = s * 0.46

    # ── record body ──────────────────────────────────────────────
    body = QLinearGradient(0, 0, s, s)
    body.setColorAt(0.0, QColor("#27272a"))
    body.setColorAt(1.0, QColor("#09090b"))
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(body)
    p.drawEllipse(QPointF(cx, cy), r, r)

    # ── grooves ──────────────────────────────────────────────────
    p.setBrush(Qt.BrushStyle.NoBrush)
    p.setPen(QPen(QColor(255, 255, 255, 28), max(s * 0.01, 0.6)))
    for k in (0.88, 0.74, 0.6):
        p.drawEllipse(QPointF(cx, cy), r * k, r * k)

    # ── sheen ────────────────────────────────────────────────────
    p.setPen(QPen(QColor(255, 255, 255, 70), max(s * 0.02, 0.8)))
    arc = QRectF(cx - r * 0.8, cy - r * 0.8, r * 1.6, r * 1.6)
    p.drawArc(arc, 100 * 16, 50 * 16)

    # ── label (brand orange) and spindle hole ────────────────────
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(QColor("#FF7626"))
    p.drawEllipse(QPointF(cx, cy), r * 0.36, r * 0.36)
    p.setBrush(QColor("#09090b"))
    p.drawEllipse(QPointF(cx, cy), max(r * 0.06, 0.8), max(r * 0.06, 0.8))

    p.end()
    return pm
