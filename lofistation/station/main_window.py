"""Main application window — assembles the scene, overlays and panels."""

import logging
from typing import Dict

logger = logging.getLogger(__name__)

from PySide6.QtCore import Qt, QEvent, QSettings, QByteArray, QTimer
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QMessageBox, QWidget

from .catalog import CatalogWorker
from .idle_controller import DEVELOPER, INFO, SCENE_MENU, SETTINGS, VOLUME, WELCOME
from .playback_engine import NEXT, PREV
from .providers import QtAudioOutput, QtClipboard
from .session_state import QSettingsPersistence, SessionState
from .shortcuts import KeyPress
from .station import StationController
from .theme import DARK_THEME
from .icon import create_app_icon
from .widgets.calibration_panel import CalibrationPanel
from .widgets.clock_overlay import ClockOverlay
from .widgets.control_bar import ControlBar
from .widgets.overlay_panel import OverlayPanel
from .widgets.panels import DeveloperPanel, InfoPanel, SceneMenuPanel, WelcomePanel
from .widgets.scene_view import SceneView
from .widgets.settings_panel import SettingsPanel
from .widgets.volume_panel import VolumePanel

LOADING_TEXT = "CONNECTING TO MERKY CLOUD..."

_KEY_NAMES = {
    Qt.Key.Key_Space: "Space",
    Qt.Key.Key_Delete: "Delete",
    Qt.Key.Key_Backspace: "Backspace",
}


def key_press_from_event(event) -> KeyPress:
    """Translate a ``QKeyEvent`` into a toolkit-neutral :class:`KeyPress`."""
    key = event.key()
    name = _KEY_NAMES.get(key)
    if name is None:
        name = chr(key) if Qt.Key.Key_A <= key <= Qt.Key.Key_Z else event.text()
    mods = event.modifiers()
    ctrl = bool(mods & (Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.MetaModifier))
    shift = bool(mods & Qt.KeyboardModifier.ShiftModifier)
    return KeyPress(name, ctrl=ctrl, shift=shift)


class StationWindow(QMainWindow):
    """Top-level window.

    Owns one :class:`StationController`; every widget is a thin view over
    it.  The catalog is fetched on a ``QThread`` while the loading label is
    shown.  Window geometry is persisted via ``QSettings``.
    """

    def __init__(self, catalog_provider, settings: QSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Merky Radio")
        self.setWindowIcon(create_app_icon())
        self.setMinimumSize(640, 360)
        self.resize(1280, 720)
        self.setStyleSheet(DARK_THEME)

        # ── persistent settings ─────────────────────────────────────
        self._settings = settings or QSettings("Merky", "LofiStation")
        self._restore_geometry()

        # ── core objects ────────────────────────────────────────────
        self._music = QtAudioOutput(parent=self)
        self.controller = StationController(
            music_output=self._music,
            ambient_output_factory=lambda: QtAudioOutput(loop=True, parent=self),
            clipboard=QtClipboard(),
            session=SessionState(QSettingsPersistence(self._settings)),
            parent=self,
        )
        c = self.controller

        # ── build UI ────────────────────────────────────────────────
        self._scene = SceneView()
        self.setCentralWidget(self._scene)

        self._loading = QLabel(LOADING_TEXT, self._scene)
        self._loading.setObjectName("LoadingLabel")
        self._loading.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._clock = ClockOverlay(parent=self._scene)
        self._controls = ControlBar(self._scene)

        self._panels: Dict[str, OverlayPanel] = {
            SCENE_MENU: SceneMenuPanel(self._scene),
            SETTINGS: SettingsPanel(c.settings_store, self._scene),
            VOLUME: VolumePanel(c, self._scene),
            INFO: InfoPanel(self._scene),
            WELCOME: WelcomePanel(self._scene),
            DEVELOPER: DeveloperPanel(self._scene),
        }
        for name, panel in self._panels.items():
            if name != WELCOME:
                panel.closed.connect(lambda n=name: c.idle.set_modal_open(n, False))
        self._calibration_panel = CalibrationPanel(
            c.calibration,
            current_scene=lambda: c.current_scene,
            confirm_clear=self._confirm_clear_history,
            parent=self._scene,
        )

        # ── wiring ──────────────────────────────────────────────────
        self._scene.hotspot_clicked.connect(c.ambient.toggle_ambience)
        self._scene.pointer_moved.connect(c.calibration.record_pointer)
        self._scene.canvas_clicked.connect(c.calibration.capture_click)
        c.calibration.pointer_tracked.connect(self._scene.set_crosshair)
        c.calibration.active_changed.connect(self._scene.set_calibrating)

        self._controls.play_clicked.connect(c.engine.toggle_play)
        self._controls.prev_clicked.connect(lambda: c.engine.change_track(PREV))
        self._controls.next_clicked.connect(lambda: c.engine.change_track(NEXT))
        self._controls.day_mode_clicked.connect(c.engine.toggle_day_mode)
        self._controls.panel_requested.connect(self._on_panel_requested)
        self._panels[SCENE_MENU].scene_selected.connect(c.engine.select_scene)
        self._panels[WELCOME].accepted.connect(c.complete_welcome)

        c.engine.state_changed.connect(self._sync_transport)
        c.engine.progress_changed.connect(self._controls.set_progress)
        c.engine.scene_changed.connect(self._sync_scene)
        c.ambient.mix_changed.connect(self._sync_hotspots)
        c.volumes_changed.connect(
            lambda: self._controls.set_volume_indicator(c.displayed_music_volume)
        )
        c.catalog_loaded.connect(self._on_catalog_ready)
        c.idle.visibility_changed.connect(self._sync_overlays)
        c.idle.modals_changed.connect(self._sync_panels)
        c.settings_store.settings_changed.connect(lambda _s: self._sync_overlays())

        # Pointer activity anywhere in the app counts, not only over the scene
        QApplication.instance().installEventFilter(self)

        self._sync_transport()
        self._sync_overlays()
        self._sync_panels()

        self._catalog_worker = CatalogWorker(catalog_provider, parent=self)
        self._catalog_worker.loaded.connect(self.controller.apply_catalog)
        self._catalog_worker.finished.connect(self._on_catalog_worker_finished)
        self._catalog_worker.start()
        c.idle.start()

    # ── catalog ─────────────────────────────────────────────────────

    def _on_catalog_worker_finished(self) -> None:
        self._catalog_worker.deleteLater()
        self._catalog_worker = None

    def _on_catalog_ready(self) -> None:
        c = self.controller
        logger.info(
            "Catalog ready: %d tracks, %d scenes",
            len(c.catalog.tracks), len(c.catalog.scenes),
        )
        # An empty catalog keeps the placeholder scene behind the loading text
        self._loading.setVisible(c.catalog.is_empty)
        self._panels[SCENE_MENU].set_scenes(c.catalog.scenes, c.engine.state.current_scene_index)
        self._sync_scene(c.engine.state.current_scene_index)
        self._sync_transport()

    # ── view sync ───────────────────────────────────────────────────

    def _sync_transport(self) -> None:
        c = self.controller
        state = c.engine.state
        self._controls.set_track(c.current_track)
        self._controls.set_playing(state.is_playing)
        self._controls.set_progress(state.progress)
        self._controls.set_day_mode(state.is_day_mode)
        scene = c.current_scene
        self._scene.set_background(scene.background(state.is_day_mode), scene.theme_color)

    def _sync_scene(self, index: int) -> None:
        scene = self.controller.current_scene
        self._panels[SCENE_MENU].set_current(index)
        self._controls.set_theme_color(scene.theme_color)
        self._sync_transport()
        self._sync_hotspots()

    def _sync_hotspots(self) -> None:
        self._scene.set_hotspots(self.controller.ambient.hotspots())

    def _sync_overlays(self, *_args) -> None:
        c = self.controller
        settings = c.settings_store.settings
        visible = c.idle.visible
        self._controls.setVisible(visible)
        self._clock.setVisible(visible and settings.show_clock)
        self._controls.set_titles_visible(settings.show_titles)
        self.setCursor(Qt.CursorShape.ArrowCursor if visible else Qt.CursorShape.BlankCursor)

    def _sync_panels(self) -> None:
        idle = self.controller.idle
        for name, panel in self._panels.items():
            should_show = idle.is_modal_open(name)
            if should_show and panel.isHidden():
                panel.adjustSize()
                self._center(panel)
                panel.show()
                panel.raise_()
            elif not should_show and not panel.isHidden():
                panel.hide()

    def _on_panel_requested(self, name: str) -> None:
        if name == WELCOME:
            self.controller.open_welcome()
            return
        self.controller.idle.toggle_modal(name)

    # ── layout ──────────────────────────────────────────────────────

    def _center(self, w: QWidget) -> None:
        area = self._scene.rect()
        w.move(max(0, (area.width() - w.width()) // 2), max(0, (area.height() - w.height()) // 2))

    def _layout_overlays(self) -> None:
        area = self._scene.rect()
        self._loading.setGeometry(area)
        self._clock.adjustSize()
        self._clock.move(32, 24)
        bar_h = self._controls.sizeHint().height()
        self._controls.setGeometry(0, area.height() - bar_h, area.width(), bar_h)
        self._calibration_panel.adjustSize()
        self._calibration_panel.move(area.width() - self._calibration_panel.width() - 16, 16)
        for panel in self._panels.values():
            if not panel.isHidden():
                self._center(panel)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.controller.calibration.set_viewport(self._scene.width(), self._scene.height())
        self._layout_overlays()

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        QTimer.singleShot(0, self._layout_overlays)

    # ── input ───────────────────────────────────────────────────────

    def eventFilter(self, obj, event) -> bool:  # type: ignore[override]
        if event.type() == QEvent.Type.MouseMove:
            self.controller.idle.pointer_moved()
        return False

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Station shortcuts; Escape closes every open panel."""
        c = self.controller
        if event.key() == Qt.Key.Key_Escape:
            if c.idle.is_modal_open(WELCOME):
                c.complete_welcome()
            c.idle.close_all_modals()
            return
        if event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        if c.handle_key(key_press_from_event(event), confirm=self._confirm_clear_history):
            return
        super().keyPressEvent(event)

    def _confirm_clear_history(self) -> bool:
        answer = QMessageBox.question(
            self,
            "Clear history",
            "Delete every captured coordinate?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    # ── cleanup ─────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Persist geometry, stop timers and audio."""
        logger.info("Closing station window")
        self._settings.setValue("windowGeometry", self.saveGeometry())
        self._settings.sync()
        QApplication.instance().removeEventFilter(self)
        self.controller.shutdown()
        if self._catalog_worker is not None:
            self._catalog_worker.wait(2000)
        event.accept()

    def _restore_geometry(self) -> None:
        """Restore window size/position from saved settings."""
        geom = self._settings.value("windowGeometry")
        if geom and isinstance(geom, QByteArray):
            self.restoreGeometry(geom)
