"""Session settings — the mutable :class:`AppSettings` behind the settings panel.

Settings are session-scoped: nothing here is written to disk.
"""

import dataclasses
import logging
import math

from PySide6.QtCore import QObject, Signal

from .models import AppSettings

logger = logging.getLogger(__name__)

MIN_HIDE_TIME = 1
MAX_HIDE_TIME = 10


def clamp_hide_time(raw, fallback: int = 5) -> int:
    """Parse and clamp a hide-time input to [1, 10] seconds.

    Mirrors ``parseInt``: ``"7s"`` → 7, ``"3.9"`` → 3.  Input with no
    leading number keeps *fallback*.
    """
    if isinstance(raw, bool):
        return fallback
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw):
            return fallback
        value = int(raw)
    else:
        text = str(raw).strip()
        digits = ""
        for i, ch in enumerate(text):
            if ch.isdigit() or (i == 0 and ch in "+-"):
                digits += ch
            else:
                break
        try:
            value = int(digits)
        except ValueError:
            return fallback
    return max(MIN_HIDE_TIME, min(MAX_HIDE_TIME, value))


class SettingsStore(QObject):
    """Holds the live :class:`AppSettings` and announces every change."""

    settings_changed = Signal(object)  # AppSettings

    def __init__(self, settings: AppSettings | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._settings = settings or AppSettings()
        self._settings.hide_time = clamp_hide_time(self._settings.hide_time)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def update(self, **changes) -> None:
        """Apply field changes; ``hide_time`` is clamped, unknown keys raise."""
        known = {f.name for f in dataclasses.fields(AppSettings)}
        unknown = set(changes) - known
        if unknown:
            raise KeyError(f"Unknown settings: {', '.join(sorted(unknown))}")
        if "hide_time" in changes:
            changes["hide_time"] = clamp_hide_time(changes["hide_time"], self._settings.hide_time)
        new = dataclasses.replace(self._settings, **changes)
        if new == self._settings:
            return
        self._settings = new
        logger.debug("Settings updated: %s", changes)
        self.settings_changed.emit(new)

    def toggle(self, name: str) -> None:
        """Flip one of the boolean switches."""
        current = getattr(self._settings, name)
        if not isinstance(current, bool):
            raise TypeError(f"{name} is not a switch")
        self.update(**{name: not current})

    def set_hide_time(self, raw) -> None:
        self.update(hide_time=raw)
