"""Shared pytest fixtures for LofiStation tests."""

import os
from concurrent.futures import Future

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication

from station.models import AmbientSound, HotspotPosition, Scene, Track
from station.providers import PlaybackError
from station.session_state import SessionState


# ── Qt application ─────────────────────────────────────────────────

@pytest.fixture(scope="session", autouse=True)
def qapp() -> QCoreApplication:
    """One QCoreApplication for the whole run so QObjects and QTimers work."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


# ── Fakes ──────────────────────────────────────────────────────────

class FakeAudioOutput:
    """In-memory AudioOutput whose play() futures are settled by the test."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.url: str = ""
        self.volume: float | None = None
        self.position: float = 0.0
        self.pending: list[Future] = []
        self._playing = False

    @property
    def is_playing(self) -> bool:
        return self._playing

    def load(self, url: str) -> None:
        self.calls.append(f"load:{url}")
        self.url = url
        self.position = 0.0
        self._fail_pending("load")

    def play(self) -> Future:
        self.calls.append("play")
        fut: Future = Future()
        self.pending.append(fut)
        return fut

    def pause(self) -> None:
        self.calls.append("pause")
        self._playing = False
        self._fail_pending("pause")

    def stop(self) -> None:
        self.calls.append("stop")
        self._playing = False
        self.position = 0.0
        self._fail_pending("stop")

    def set_volume(self, volume: float) -> None:
        self.volume = volume

    # ── test helpers ──

    def resolve(self, index: int = -1) -> None:
        fut = self.pending.pop(index)
        self._playing = True
        fut.set_result(None)

    def reject(self, reason: str = "NotAllowedError", index: int = -1) -> None:
        fut = self.pending.pop(index)
        fut.set_exception(PlaybackError(reason))

    def _fail_pending(self, reason: str) -> None:
        pending, self.pending = self.pending, []
        for fut in pending:
            fut.set_exception(PlaybackError(f"interrupted by {reason}"))


class FakeClipboard:
    def __init__(self, ok: bool = True, raises: bool = False) -> None:
        self.ok = ok
        self.raises = raises
        self.text: str | None = None

    def write_text(self, text: str) -> bool:
        if self.raises:
            raise RuntimeError("clipboard unavailable")
        if self.ok:
            self.text = text
        return self.ok


class MemoryPersistence:
    def __init__(self, flags: dict | None = None, fail_read: bool = False) -> None:
        self.flags = dict(flags or {})
        self.fail_read = fail_read
        self.writes: list[tuple[str, bool]] = []

    def get_flag(self, key: str) -> bool:
        if self.fail_read:
            raise OSError("storage unavailable")
        return bool(self.flags.get(key, False))

    def set_flag(self, key: str, value: bool) -> None:
        self.writes.append((key, value))
        self.flags[key] = value


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_output() -> FakeAudioOutput:
    return FakeAudioOutput()


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def persistence() -> MemoryPersistence:
    return MemoryPersistence()


@pytest.fixture
def session(persistence: MemoryPersistence) -> SessionState:
    return SessionState(persistence)


# ── Catalog records ────────────────────────────────────────────────

@pytest.fixture
def sample_tracks() -> list[Track]:
    """Three tracks A, B, C."""
    return [
        Track(title=name, artist="Merky", url=f"https://cdn.test/{name}.mp3", cover="", id=i)
        for i, name in enumerate(["A", "B", "C"], start=1)
    ]


@pytest.fixture
def rain_scene() -> Scene:
    """Scene with rain (0.5) and fire (0.3)."""
    return Scene(
        id="s1",
        name="Rainy Room",
        bg_day="day1.jpg",
        bg_night="night1.jpg",
        theme_color="#FF7626",
        sounds=(
            AmbientSound("rain", "Rain", "rain.mp3", 0.5, HotspotPosition(top=40, left=20)),
            AmbientSound("fire", "Fire", "fire.mp3", 0.3, HotspotPosition(top=70, left=60)),
        ),
    )


@pytest.fixture
def city_scene() -> Scene:
    """Scene with rain (0.9) and traffic (0.4)."""
    return Scene(
        id="s2",
        name="City",
        bg_day="day2.jpg",
        bg_night="night2.jpg",
        theme_color="#22c55e",
        sounds=(
            AmbientSound("rain", "Rain", "rain.mp3", 0.9, HotspotPosition(top=10, left=10)),
            AmbientSound("traffic", "Traffic", "traffic.mp3", 0.4, HotspotPosition(top=80, left=50)),
        ),
    )


@pytest.fixture
def catalog_payload(sample_tracks: list[Track]) -> dict:
    """Endpoint body as the station API returns it (snake_case scene columns)."""
    return {
        "success": True,
        "tracks": [t.to_dict() for t in sample_tracks],
        "scenes": [
            {
                "id": 1,
                "name": "Rainy Room",
                "bg_day": "day1.jpg",
                "bg_night": "night1.jpg",
                "theme_color": "#FF7626",
                "sounds": [
                    {"id": "rain", "name": "Rain", "src": "rain.mp3",
                     "defaultValue": 0.5, "position": {"top": "40%", "left": "20%"}},
                    {"id": "fire", "name": "Fire", "src": "fire.mp3",
                     "defaultValue": 0.3, "position": {"top": "70%", "left": "60%"}},
                ],
            },
            {
                "id": 2,
                "name": "City",
                "bg_day": "day2.jpg",
                "bg_night": "night2.jpg",
                "theme_color": "#22c55e",
                "sounds": [
                    {"id": "rain", "name": "Rain", "src": "rain.mp3",
                     "defaultValue": 0.9, "position": {"top": "10%", "left": "10%"}},
                    {"id": "traffic", "name": "Traffic", "src": "traffic.mp3",
                     "defaultValue": 0.4, "position": {"top": "80%", "left": "50%"}},
                ],
            },
        ],
    }
