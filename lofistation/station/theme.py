"""Dark theme QSS stylesheet for the station overlays."""

DARK_THEME = """
/* ── Global ─────────────────────────────────────────── */
QWidget {
    color: #e4e4e7;
    font-family: "Segoe UI Variable", "Segoe UI", "Inter", sans-serif;
    font-size: 13px;
    border: none;
}
QWidget:focus { outline: none; }
QMainWindow, #SceneView { background-color: #000000; }
QLabel { background: transparent; }

/* ── Loading screen ─────────────────────────────────── */
#LoadingLabel {
    color: #a1a1aa;
    font-family: "Consolas", monospace;
    font-size: 12px;
    letter-spacing: 3px;
    background: transparent;
}

/* ── Clock ──────────────────────────────────────────── */
#ClockGreeting {
    color: #a1a1aa;
    font-size: 11px;
    font-weight: 700;
    letter-spacing: 4px;
}
#ClockTime {
    color: #ffffff;
    font-size: 64px;
    font-weight: 700;
}
#ClockDate {
    color: #d4d4d8;
    font-size: 12px;
    letter-spacing: 2px;
}

/* ── Control bar ────────────────────────────────────── */
#ControlBar {
    background-color: rgba(9, 9, 11, 0.78);
}
#TrackTitle { color: #ffffff; font-size: 14px; font-weight: 600; }
#TrackArtist { color: #a1a1aa; font-size: 12px; }
QPushButton#CtrlBtn {
    height: 32px;
    padding: 0 12px;
    border-radius: 6px;
    background-color: rgba(255, 255, 255, 0.06);
    color: #e4e4e7;
    font-size: 13px;
}
QPushButton#CtrlBtn:hover {
    background-color: rgba(255, 255, 255, 0.14);
}
QPushButton#PlayBtn {
    height: 36px;
    min-width: 36px;
    border-radius: 18px;
    background-color: #ffffff;
    color: #09090b;
    font-size: 15px;
}
QProgressBar#TrackProgress {
    background-color: rgba(255, 255, 255, 0.12);
    border-radius: 2px;
}
QProgressBar#TrackProgress::chunk {
    background-color: #FF7626;
    border-radius: 2px;
}

/* ── Overlay panels ─────────────────────────────────── */
#OverlayPanel {
    background-color: rgba(18, 18, 22, 0.94);
    border: 1px solid rgba(255, 255, 255, 0.08);
    border-radius: 12px;
}
#OverlayHeader {
    background: transparent;
    border-bottom: 1px solid rgba(255, 255, 255, 0.06);
}
#OverlayTitle {
    color: #ffffff;
    font-size: 12px;
    font-weight: 700;
    letter-spacing: 2px;
}
QPushButton#OverlayClose {
    background: transparent;
    color: #71717a;
    border-radius: 4px;
}
QPushButton#OverlayClose:hover {
    background-color: #c42b1c;
    color: white;
}
QLabel#Subtitle { color: #71717a; font-size: 12px; }
QLabel#SectionLabel {
    color: #71717a;
    font-size: 10px;
    font-weight: 700;
    letter-spacing: 2px;
}
QLabel#WelcomeTitle { color: #ffffff; font-size: 20px; font-weight: 700; }
QLabel#Readout {
    color: #d4d4d8;
    font-family: "Consolas", monospace;
    font-size: 12px;
}
QPushButton#PrimaryBtn {
    height: 34px;
    border-radius: 6px;
    background-color: #FF7626;
    color: white;
    font-weight: 600;
}
QPushButton#PrimaryBtn:hover { background-color: #ff8c4a; }
QPushButton#SceneBtn {
    height: 30px;
    padding: 0 12px;
    border-radius: 6px;
    text-align: left;
    background: transparent;
}
QPushButton#SceneBtn:hover { background-color: rgba(255, 255, 255, 0.08); }
QPushButton#SceneBtn:checked {
    background-color: rgba(255, 118, 38, 0.18);
    color: #FF7626;
}
QPushButton {
    height: 28px;
    padding: 0 10px;
    border-radius: 6px;
    background-color: #27272a;
}
QPushButton:hover { background-color: #3f3f46; }

/* ── Inputs ─────────────────────────────────────────── */
QCheckBox { spacing: 8px; background: transparent; }
QLineEdit, QPlainTextEdit, QListWidget {
    background-color: #18181b;
    border: 1px solid #3f3f46;
    border-radius: 6px;
    padding: 2px 6px;
}
QListWidget::item:selected { background-color: rgba(255, 118, 38, 0.25); }
QSlider::groove:horizontal {
    height: 4px;
    background: #3f3f46;
    border-radius: 2px;
}
QSlider::sub-page:horizontal {
    background: #FF7626;
    border-radius: 2px;
}
QSlider::handle:horizontal {
    width: 12px;
    margin: -4px 0;
    border-radius: 6px;
    background: #ffffff;
}

/* ── Scrollbar ──────────────────────────────────────── */
QScrollBar:vertical {
    width: 6px;
    background: transparent;
}
QScrollBar::handle:vertical {
    background: #3f3f46;
    border-radius: 3px;
    min-height: 20px;
}
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {
    height: 0;
}

/* ── Tooltips ───────────────────────────────────────── */
QToolTip {
    background-color: #27272a;
    color: #e4e4e7;
    border: 1px solid #3f3f46;
    border-radius: 4px;
    padding: 4px 8px;
    font-size: 12px;
}
"""
