"""Idle auto-hide — hides the on-screen controls after a quiet period.

A debounced timeout: every pointer movement shows the controls and restarts
a single-shot ``QTimer`` of ``settings.hide_time`` seconds.  Only a full
quiet period hides them.  While any blocking modal is open, or auto-hide is
switched off, no countdown is armed at all.
"""

import enum
import logging
import time
from typing import Callable, Optional, Set

from PySide6.QtCore import QObject, QTimer, Signal

from .models import AppSettings

logger = logging.getLogger(__name__)

SCENE_MENU = "scene_menu"
SETTINGS = "settings"
INFO = "info"
VOLUME = "volume"
DEVELOPER = "developer"
WELCOME = "welcome"

BLOCKING_MODALS = frozenset({SCENE_MENU, SETTINGS, INFO, VOLUME, DEVELOPER, WELCOME})


class VisibilityMode(enum.Enum):
    VISIBLE = "visible"
    VISIBLE_COUNTING_DOWN = "counting_down"
    HIDDEN = "hidden"


class IdleVisibilityController(QObject):
    """Timer-driven visibility state machine for the controls overlay.

    ``idle_deadline`` (clock seconds) is ``None`` whenever no countdown is
    armed.  A timer callback that arrives after its deadline was cancelled
    or moved does nothing.
    """

    visibility_changed = Signal(bool)
    modals_changed = Signal()

    def __init__(
        self,
        settings: AppSettings,
        clock: Callable[[], float] = time.monotonic,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._clock = clock
        self._open_modals: Set[str] = set()
        self._mode = VisibilityMode.VISIBLE
        self.idle_deadline: Optional[float] = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)

    # ── queries ─────────────────────────────────────────────────────

    @property
    def mode(self) -> VisibilityMode:
        return self._mode

    @property
    def visible(self) -> bool:
        return self._mode != VisibilityMode.HIDDEN

    @property
    def blocked(self) -> bool:
        return bool(self._open_modals)

    @property
    def open_modals(self) -> Set[str]:
        return set(self._open_modals)

    def is_modal_open(self, name: str) -> bool:
        return name in self._open_modals

    # ── inputs ──────────────────────────────────────────────────────

    def start(self) -> None:
        """Initial arm, as if the pointer had just moved."""
        self.pointer_moved()

    def pointer_moved(self) -> None:
        self._cancel()
        if self._can_hide():
            self._arm()
        else:
            self._set_mode(VisibilityMode.VISIBLE)

    def set_modal_open(self, name: str, is_open: bool) -> None:
        if name not in BLOCKING_MODALS:
            raise ValueError(f"Unknown modal: {name!r}")
        if is_open:
            if name in self._open_modals:
                return
            self._open_modals.add(name)
            self._cancel()
            self._set_mode(VisibilityMode.VISIBLE)
            self.modals_changed.emit()
        else:
            if name not in self._open_modals:
                return
            self._open_modals.discard(name)
            self.modals_changed.emit()
            if not self._open_modals:
                self.pointer_moved()

    def toggle_modal(self, name: str) -> bool:
        """Open/close *name*; returns the new open state."""
        is_open = name not in self._open_modals
        self.set_modal_open(name, is_open)
        return is_open

    def close_all_modals(self) -> None:
        if not self._open_modals:
            return
        self._open_modals.clear()
        self.modals_changed.emit()
        self.pointer_moved()

    def apply_settings(self, settings: AppSettings) -> None:
        """Pick up new ``hide_elements`` / ``hide_time`` values."""
        self._settings = settings
        if not settings.hide_elements:
            self._cancel()
            self._set_mode(VisibilityMode.VISIBLE)
        else:
            self.pointer_moved()

    def shutdown(self) -> None:
        """Synchronous teardown; a stopped timer can never hide the controls."""
        self._cancel()

    # ── internals ───────────────────────────────────────────────────

    def _can_hide(self) -> bool:
        return self._settings.hide_elements and not self._open_modals

    def _arm(self) -> None:
        delay_s = max(1, int(self._settings.hide_time))
        self.idle_deadline = self._clock() + delay_s
        self._timer.start(delay_s * 1000)
        self._set_mode(VisibilityMode.VISIBLE_COUNTING_DOWN)

    def _cancel(self) -> None:
        self._timer.stop()
        self.idle_deadline = None

    def _on_timeout(self) -> None:
        if self.idle_deadline is None or not self._can_hide():
            return
        if self._clock() < self.idle_deadline:
            # fired early relative to our clock; wait out the remainder
            remaining_ms = int((self.idle_deadline - self._clock()) * 1000) + 1
            self._timer.start(remaining_ms)
            return
        self.idle_deadline = None
        self._set_mode(VisibilityMode.HIDDEN)

    def _set_mode(self, mode: VisibilityMode) -> None:
        was_visible = self.visible
        self._mode = mode
        if was_visible != self.visible:
            logger.debug("Controls %s", "shown" if self.visible else "hidden")
            self.visibility_changed.emit(self.visible)
