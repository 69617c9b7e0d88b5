"""Coordinate calibration — developer tool for authoring hotspot positions.

While active, pointer positions are converted through
:class:`ScaleTransform` into design-space percentages.  A click copies a
position literal to the clipboard and appends a
:class:`CalibrationRecord` to a bounded history (newest first, at most
:data:`HISTORY_LIMIT` entries, oldest evicted first).

Calibration panels are excluded from capture through a single capability
flag (:meth:`set_pointer_exempt`) rather than widget hit-testing.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from .models import CalibrationRecord, Scene
from .scale_transform import DESIGN_HEIGHT, DESIGN_WIDTH, ScaleTransform

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20

COPY_OK_MESSAGE = "Copied to clipboard."
COPY_MANUAL_MESSAGE = "Automatic copy is unavailable here. Select the text below and press Ctrl+C:"


@dataclass(frozen=True)
class CopyResult:
    """Outcome of a clipboard write; *text* is always the value to copy."""
    success: bool
    message: str
    text: str


def copy_with_fallback(clipboard, text: str) -> CopyResult:
    """Write *text* to *clipboard*, or hand it back for manual copying."""
    try:
        ok = bool(clipboard.write_text(text))
    except Exception as exc:
        logger.warning("Clipboard write failed: %s", exc)
        ok = False
    return CopyResult(success=ok, message=COPY_OK_MESSAGE if ok else COPY_MANUAL_MESSAGE, text=text)


def scene_export_text(scene: Scene) -> str:
    """All hotspot id/name/position triples of *scene* as one pasteable block."""
    lines = [
        f"  {{ id: '{s.id}', name: '{s.name}', position: "
        f"{{ top: '{s.position.top:g}%', left: '{s.position.left:g}%' }} }}"
        for s in scene.sounds
    ]
    return (
        "{\n"
        f"  id: '{scene.id}',\n"
        f"  name: '{scene.name}',\n"
        "  sounds: [\n"
        + ",\n".join(lines)
        + "\n  ]\n}"
    )


class CoordinateCalibrationTool(QObject):
    """Pointer → design-space capture with clipboard export and history."""

    active_changed = Signal(bool)
    pointer_tracked = Signal(float, float)  # left %, top %
    coordinate_captured = Signal(object)  # CalibrationRecord
    history_changed = Signal()
    copy_status = Signal(bool, str)

    def __init__(self, clipboard, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._clipboard = clipboard
        self._active: bool = False
        self._exempt: bool = False
        self._transform = ScaleTransform(DESIGN_WIDTH, DESIGN_HEIGHT)
        self._container: Tuple[float, float] = (0.0, 0.0)
        self.history: List[CalibrationRecord] = []
        self.pointer: Optional[Tuple[float, float]] = None
        self.last_capture: Optional[CalibrationRecord] = None
        self.last_copy: Optional[CopyResult] = None

    # ── mode ────────────────────────────────────────────────────────

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        """Enter/leave capture mode.  Leaving drops all transient state."""
        if active == self._active:
            return
        self._active = active
        if not active:
            self._exempt = False
            self.pointer = None
            self.last_capture = None
            self.last_copy = None
        logger.info("Coordinate collector %s", "on" if active else "off")
        self.active_changed.emit(active)

    def toggle(self) -> bool:
        self.set_active(not self._active)
        return self._active

    def set_viewport(
        self,
        width: float,
        height: float,
        container_left: float | None = None,
        container_top: float | None = None,
    ) -> None:
        """Track a new viewport size.

        The container defaults to the scaled canvas origin so captured
        percentages match where hotspots are drawn.
        """
        self._transform = ScaleTransform(width, height)
        ox, oy = self._transform.origin
        self._container = (
            ox if container_left is None else container_left,
            oy if container_top is None else container_top,
        )

    @property
    def transform(self) -> ScaleTransform:
        return self._transform

    def set_pointer_exempt(self, exempt: bool) -> None:
        """Pointer is over a calibration panel; capture is suspended."""
        self._exempt = exempt

    @property
    def pointer_exempt(self) -> bool:
        return self._exempt

    # ── capture ─────────────────────────────────────────────────────

    def to_design(self, client_x: float, client_y: float) -> Tuple[float, float]:
        return self._transform.to_design_percent(client_x, client_y, *self._container)

    def record_pointer(self, client_x: float, client_y: float) -> Optional[Tuple[float, float]]:
        if not self._active or self._exempt:
            return None
        self.pointer = self.to_design(client_x, client_y)
        self.pointer_tracked.emit(*self.pointer)
        return self.pointer

    def capture_click(self, client_x: float, client_y: float) -> Optional[CalibrationRecord]:
        """Capture, copy and remember the clicked design-space position."""
        if not self._active or self._exempt:
            return None
        left, top = self.to_design(client_x, client_y)
        record = CalibrationRecord.create(top=top, left=left)
        self.last_capture = record
        self._report_copy(copy_with_fallback(self._clipboard, record.literal))

        self.history.insert(0, record)
        del self.history[HISTORY_LIMIT:]
        logger.info("Captured %s", record.literal)
        self.coordinate_captured.emit(record)
        self.history_changed.emit()
        return record

    # ── history ─────────────────────────────────────────────────────

    def recopy(self, record: CalibrationRecord) -> CopyResult:
        result = copy_with_fallback(self._clipboard, record.literal)
        self._report_copy(result)
        return result

    def remove(self, record_id: str) -> bool:
        before = len(self.history)
        self.history = [r for r in self.history if r.id != record_id]
        if len(self.history) == before:
            return False
        self.history_changed.emit()
        return True

    def clear_history(self, confirm: Callable[[], bool]) -> bool:
        """Drop every record, but only after *confirm* returns True."""
        if not self.history or not confirm():
            return False
        self.history.clear()
        self.history_changed.emit()
        return True

    def export_scene(self, scene: Scene) -> CopyResult:
        result = copy_with_fallback(self._clipboard, scene_export_text(scene))
        if not result.success:
            logger.info("Scene data for manual copy:\n%s", result.text)
        self._report_copy(result)
        return result

    def _report_copy(self, result: CopyResult) -> None:
        self.last_copy = result
        self.copy_status.emit(result.success, result.message)
