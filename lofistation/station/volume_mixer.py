"""Two-tier volume model — master × channel.

Master volume is a multiplicative ceiling applied to every channel, not an
independent channel of its own: a master of 0 silences everything no
matter where the channel sliders sit.
"""

import math
from typing import Dict, Iterable, Mapping

from .models import DEFAULT_MASTER_VOLUME


def clamp_volume(value: float) -> float:
    """Clamp to [0, 1]; NaN and non-numeric values become 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def effective_music_volume(music: float, master: float) -> float:
    return clamp_volume(music) * clamp_volume(master)


def effective_ambient_volume(volume: float, master: float, active: bool) -> float:
    """Output level of one ambient layer; inactive layers are silent."""
    if not active:
        return 0.0
    return clamp_volume(volume) * clamp_volume(master)


def effective_ambient_volumes(
    volumes: Mapping[str, float],
    active_ids: Iterable[str],
    master: float,
    sound_ids: Iterable[str],
) -> Dict[str, float]:
    """Effective level for each id in *sound_ids*."""
    active = set(active_ids)
    return {
        sid: effective_ambient_volume(volumes.get(sid, 0.0), master, sid in active)
        for sid in sound_ids
    }


def toggle_mute(master: float, restore: float = DEFAULT_MASTER_VOLUME) -> float:
    """``M`` shortcut: silence, or bring master back to *restore*."""
    return restore if master == 0 else 0.0
