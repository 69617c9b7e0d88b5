"""Core data models for LofiStation.

Defines the dataclasses shared by the playback engine, the ambient mixer,
the calibration tool and the catalog loader.  Catalog records support
dict serialization via ``to_dict()`` / ``from_dict()`` so they can be read
straight from the station's JSON endpoint.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import time
import uuid


def _parse_percent(value) -> float:
    """Accept ``42.5``, ``"42.5"`` or ``"42.5%"`` and return a float."""
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
    return float(value)


def _fmt_percent(value: float) -> str:
    """Format a percentage the way hotspot literals are authored (``42.5%``)."""
    return f"{value:g}%"


@dataclass(frozen=True)
class HotspotPosition:
    """Position of a hotspot as a percentage of design space (0-100)."""
    top: float
    left: float

    def to_dict(self) -> dict:
        return {"top": _fmt_percent(self.top), "left": _fmt_percent(self.left)}

    @staticmethod
    def from_dict(d: dict) -> "HotspotPosition":
        return HotspotPosition(top=_parse_percent(d["top"]), left=_parse_percent(d["left"]))


@dataclass(frozen=True)
class Track:
    """A music track from the catalog.  Immutable once fetched."""
    title: str
    artist: str
    url: str
    cover: str
    id: Optional[int] = None

    def to_dict(self) -> dict:
        d = {
            "title": self.title,
            "artist": self.artist,
            "url": self.url,
            "cover": self.cover,
        }
        if self.id is not None:
            d["id"] = self.id
        return d

    @staticmethod
    def from_dict(d: dict) -> "Track":
        return Track(
            title=d["title"],
            artist=d.get("artist", ""),
            url=d["url"],
            cover=d.get("cover", ""),
            id=d.get("id"),
        )


@dataclass(frozen=True)
class AmbientSound:
    """A looping ambient layer bound to a hotspot in a scene.

    ``position`` is authored once with the calibration tool and is
    read-only afterwards.
    """
    id: str
    name: str
    src: str
    default_value: float
    position: HotspotPosition

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "src": self.src,
            "defaultValue": self.default_value,
            "position": self.position.to_dict(),
        }

    @staticmethod
    def from_dict(d: dict) -> "AmbientSound":
        default = d.get("defaultValue", d.get("default_value", 0.5))
        return AmbientSound(
            id=str(d["id"]),
            name=d.get("name", str(d["id"])),
            src=d.get("src", ""),
            default_value=float(default),
            position=HotspotPosition.from_dict(d.get("position", {"top": 50, "left": 50})),
        )


@dataclass(frozen=True)
class Scene:
    """A visual scene with day/night backgrounds and its ambient sounds.

    The catalog endpoint returns snake_case columns (``bg_day``,
    ``theme_color``) while hand-authored scenes use camelCase; both are
    accepted by ``from_dict()``.
    """
    id: str
    name: str
    bg_day: str
    bg_night: str
    theme_color: str
    sounds: Tuple[AmbientSound, ...] = ()

    def background(self, is_day_mode: bool) -> str:
        return self.bg_day if is_day_mode else self.bg_night

    @property
    def sound_ids(self) -> List[str]:
        return [s.id for s in self.sounds]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "bgDay": self.bg_day,
            "bgNight": self.bg_night,
            "themeColor": self.theme_color,
            "sounds": [s.to_dict() for s in self.sounds],
        }

    @staticmethod
    def from_dict(d: dict) -> "Scene":
        return Scene(
            id=str(d["id"]),
            name=d.get("name", ""),
            bg_day=d.get("bgDay", d.get("bg_day", "")) or "",
            bg_night=d.get("bgNight", d.get("bg_night", "")) or "",
            theme_color=d.get("themeColor", d.get("theme_color", "#000")) or "#000",
            sounds=tuple(AmbientSound.from_dict(s) for s in d.get("sounds") or []),
        )


@dataclass
class PlaybackState:
    """Transport state.  Mutated only by :class:`PlaybackEngine`."""
    current_track_index: int = 0
    current_scene_index: int = 0
    is_playing: bool = False
    progress: float = 0.0  # 0-100, derived from time updates
    is_day_mode: bool = False


@dataclass
class AmbientMixState:
    """Active ambient ids and per-sound slider levels (0-1)."""
    active_ids: set = field(default_factory=set)
    volumes: dict = field(default_factory=dict)


@dataclass
class CalibrationRecord:
    """A design-space coordinate captured by the calibration tool."""
    id: str
    top: float   # % of design height
    left: float  # % of design width
    timestamp: float  # ms since epoch

    @staticmethod
    def create(top: float, left: float) -> "CalibrationRecord":
        """Factory that stamps the record with a unique id and the current time."""
        return CalibrationRecord(
            id=f"coord_{uuid.uuid4().hex[:12]}",
            top=top,
            left=left,
            timestamp=time.time() * 1000,
        )

    @property
    def literal(self) -> str:
        """Hotspot position literal, ready to paste into a scene definition."""
        return f"{{ top: '{_fmt_percent(self.top)}', left: '{_fmt_percent(self.left)}' }}"

    def to_dict(self) -> dict:
        return {"id": self.id, "top": self.top, "left": self.left, "timestamp": self.timestamp}


@dataclass
class AppSettings:
    """User-facing configuration.  Lives for one session only."""
    hide_elements: bool = True
    show_titles: bool = True
    show_clock: bool = True
    shortcuts: bool = True
    hide_time: int = 5  # seconds, 1-10


PLACEHOLDER_TRACK = Track(
    title="Loading System...",
    artist="Merky OS",
    url="",
    cover="",
)

PLACEHOLDER_SCENE = Scene(
    id="0",
    name="Initializing",
    bg_day="",
    bg_night="",
    theme_color="#000",
)

DEFAULT_MASTER_VOLUME = 0.8
DEFAULT_MUSIC_VOLUME = 0.5
