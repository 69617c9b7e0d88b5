"""LofiStation — lo-fi music player with layered ambient soundscapes."""

import argparse
import logging
import os
import sys
from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette, QColor
from PySide6.QtCore import qInstallMessageHandler, QtMsgType
from station.catalog import FileCatalogProvider, HttpCatalogProvider
from station.main_window import StationWindow
from station.icon import create_app_icon
from station.version import __version__

logging.basicConfig(
    level=logging.INFO,
    format="%(name)s | %(levelname)s | %(message)s",
)

_logger = logging.getLogger(__name__)

CATALOG_URL_ENV = "LOFISTATION_CATALOG_URL"


def _global_exception_handler(exc_type, exc_value, exc_tb):
    """Log unhandled exceptions instead of crashing silently."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    _logger.critical("Unhandled exception", exc_info=(exc_type, exc_value, exc_tb))


_original_handler = None


def _message_handler(msg_type, context, message):
    """Qt message handler that drops harmless QFont DPI warnings."""
    if "QFont::setPointSize" in message:
        return
    if _original_handler:
        _original_handler(msg_type, context, message)
    elif msg_type != QtMsgType.QtDebugMsg:
        print(message, file=sys.stderr)


def make_catalog_provider(source: str | None):
    """URL → HTTP provider, anything else → local JSON file."""
    source = source or os.environ.get(CATALOG_URL_ENV, "")
    if not source:
        raise SystemExit(
            f"No catalog given. Pass a URL or JSON file, or set {CATALOG_URL_ENV}."
        )
    if source.startswith(("http://", "https://")):
        return HttpCatalogProvider(source)
    return FileCatalogProvider(source)


def main() -> None:
    """Application entry point — creates QApplication, applies theme, shows StationWindow."""
    parser = argparse.ArgumentParser(prog="lofistation", description=__doc__)
    parser.add_argument("catalog", nargs="?", help="catalog URL or JSON file")
    parser.add_argument("--version", action="version", version=__version__)
    args, qt_args = parser.parse_known_args()
    provider = make_catalog_provider(args.catalog)

    sys.excepthook = _global_exception_handler

    global _original_handler
    _original_handler = qInstallMessageHandler(_message_handler)

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName("LofiStation")
    app.setApplicationVersion(__version__)
    app.setWindowIcon(create_app_icon())

    # dark palette base (QSS handles the rest)
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor("#000000"))
    palette.setColor(QPalette.ColorRole.WindowText, QColor("#e4e4e7"))
    palette.setColor(QPalette.ColorRole.Base, QColor("#18181b"))
    palette.setColor(QPalette.ColorRole.Text, QColor("#e4e4e7"))
    palette.setColor(QPalette.ColorRole.Button, QColor("#27272a"))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor("#e4e4e7"))
    palette.setColor(QPalette.ColorRole.Highlight, QColor("#FF7626"))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor("#ffffff"))
    app.setPalette(palette)

    _logger.info("LofiStation %s starting", __version__)
    window = StationWindow(provider)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
