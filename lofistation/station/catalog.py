"""Catalog loading — tracks and scenes from the station's JSON endpoint.

The endpoint answers ``{"success": bool, "tracks": [...], "scenes": [...],
"error": str?}``.  A failed request, ``success: false`` or a malformed
body all degrade to an empty catalog; the UI then shows placeholder
records instead of crashing.  A single attempt is made, no retries.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from PySide6.QtCore import QObject, QThread, Signal

from .models import PLACEHOLDER_SCENE, PLACEHOLDER_TRACK, Scene, Track

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class CatalogError(Exception):
    """The catalog endpoint could not be read."""


@dataclass
class Catalog:
    tracks: List[Track] = field(default_factory=list)
    scenes: List[Scene] = field(default_factory=list)
    ok: bool = True
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.tracks and not self.scenes

    def track_at(self, index: int) -> Track:
        if 0 <= index < len(self.tracks):
            return self.tracks[index]
        return PLACEHOLDER_TRACK

    def scene_at(self, index: int) -> Scene:
        if 0 <= index < len(self.scenes):
            return self.scenes[index]
        return PLACEHOLDER_SCENE


def parse_catalog(payload) -> Catalog:
    """Build a :class:`Catalog` from a decoded response body.

    Individual malformed records are skipped (and logged); an unusable
    body yields an empty, not-ok catalog.
    """
    if not isinstance(payload, dict):
        return Catalog(ok=False, error="Malformed catalog response")
    if not payload.get("success"):
        return Catalog(ok=False, error=payload.get("error") or "API Failed")

    tracks: List[Track] = []
    for raw in payload.get("tracks") or []:
        try:
            tracks.append(Track.from_dict(raw))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed track %r: %s", raw, exc)

    scenes: List[Scene] = []
    for raw in payload.get("scenes") or []:
        try:
            scenes.append(Scene.from_dict(raw))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed scene %r: %s", raw, exc)

    return Catalog(tracks=tracks, scenes=scenes)


def load_catalog(provider) -> Catalog:
    """Fetch once through *provider* and never raise."""
    try:
        payload = provider.fetch()
    except Exception as exc:
        logger.error("Data fetch error: %s", exc)
        return Catalog(ok=False, error=str(exc))
    catalog = parse_catalog(payload)
    if not catalog.ok:
        logger.error("Data fetch error: %s", catalog.error)
    else:
        logger.info("Catalog loaded: %d tracks, %d scenes", len(catalog.tracks), len(catalog.scenes))
    return catalog


class HttpCatalogProvider:
    """GETs the catalog JSON with ``requests``."""

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT,
                 session: requests.Session | None = None) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self) -> dict:
        try:
            resp = self._session.get(
                self.url,
                timeout=self.timeout,
                headers={"Cache-Control": "no-store"},
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            raise CatalogError(f"HTTP error: {exc}") from exc
        except ValueError as exc:
            raise CatalogError(f"Invalid JSON from {self.url}") from exc


class StaticCatalogProvider:
    """Serves a payload already in memory."""

    def __init__(self, payload: dict) -> None:
        self._payload = payload

    def fetch(self) -> dict:
        return self._payload


class FileCatalogProvider:
    """Reads the same JSON shape from a local file (offline use)."""

    def __init__(self, path: str) -> None:
        self.path = path

    def fetch(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.loads(f.read())
        except (OSError, ValueError) as exc:
            raise CatalogError(f"Cannot read catalog file {self.path}: {exc}") from exc


class CatalogWorker(QThread):
    """Runs :func:`load_catalog` off the UI thread."""

    loaded = Signal(object)  # Catalog

    def __init__(self, provider, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._provider = provider

    def run(self) -> None:  # noqa: D401
        self.loaded.emit(load_catalog(self._provider))
