"""Process-wide session state — the persisted first-visit flag.

The flag is read once when the session starts and written once, when the
welcome flow completes.  Nothing else survives a restart.
"""

import logging

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

VISITED_KEY = "merky_visited"


def _truthy(value) -> bool:
    # QSettings hands booleans back as "true"/"false" on INI/plist backends
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


class QSettingsPersistence:
    """Key-value persistence on top of ``QSettings``."""

    def __init__(self, settings: QSettings | None = None) -> None:
        self._settings = settings or QSettings("Merky", "LofiStation")

    def get_flag(self, key: str) -> bool:
        return _truthy(self._settings.value(key, False))

    def set_flag(self, key: str, value: bool) -> None:
        self._settings.setValue(key, bool(value))
        self._settings.sync()


class SessionState:
    """Explicit holder for state that outlives a single window."""

    def __init__(self, persistence) -> None:
        self._persistence = persistence
        try:
            self._visited = persistence.get_flag(VISITED_KEY)
        except Exception as exc:
            logger.warning("Could not read visited flag: %s", exc)
            self._visited = False
        self._welcome_written = False

    @property
    def has_visited(self) -> bool:
        return self._visited

    @property
    def should_show_welcome(self) -> bool:
        return not self._visited

    def complete_welcome(self) -> None:
        """Mark the welcome flow done; writes the flag at most once."""
        self._visited = True
        if self._welcome_written:
            return
        self._welcome_written = True
        try:
            self._persistence.set_flag(VISITED_KEY, True)
        except Exception as exc:
            logger.warning("Could not persist visited flag: %s", exc)
