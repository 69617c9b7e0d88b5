"""Keyboard shortcut routing.

Maps a key press to a station action.  Shortcuts are off entirely when
``settings.shortcuts`` is false, and swallowed while a modal that takes
keyboard focus is open.  Developer shortcuts only exist in dev mode
(except the one that toggles it).
"""

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from .idle_controller import DEVELOPER, INFO, SETTINGS, VOLUME, WELCOME
from .models import AppSettings

SHORTCUT_BLOCKING_MODALS = frozenset({SETTINGS, WELCOME, VOLUME, INFO, DEVELOPER})


class Action(enum.Enum):
    TOGGLE_PLAY = "toggle_play"
    TOGGLE_MUTE = "toggle_mute"
    TOGGLE_DEV_MODE = "toggle_dev_mode"
    TOGGLE_CALIBRATION = "toggle_calibration"
    EXPORT_SCENE = "export_scene"
    CLEAR_HISTORY = "clear_history"


@dataclass(frozen=True)
class KeyPress:
    """Toolkit-neutral key press: *key* is a name like ``"Space"`` or ``"M"``.

    ``ctrl`` covers Cmd on macOS.
    """
    key: str
    ctrl: bool = False
    shift: bool = False


def route(
    press: KeyPress,
    settings: AppSettings,
    open_modals: Iterable[str] = (),
    dev_mode: bool = False,
) -> Optional[Action]:
    """Return the action for *press*, or None when it should pass through."""
    if not settings.shortcuts:
        return None
    if SHORTCUT_BLOCKING_MODALS.intersection(open_modals):
        return None

    key = press.key.upper()
    if dev_mode:
        if key == "DELETE" and press.ctrl and press.shift:
            return Action.CLEAR_HISTORY
        if key == "C" and press.shift and not press.ctrl:
            return Action.EXPORT_SCENE
        if key == "C" and press.ctrl:
            return Action.TOGGLE_CALIBRATION
    if key == "D" and press.ctrl:
        return Action.TOGGLE_DEV_MODE
    if press.ctrl:
        return None
    if key == "SPACE":
        return Action.TOGGLE_PLAY
    if key == "M":
        return Action.TOGGLE_MUTE
    return None
