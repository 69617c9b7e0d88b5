"""Digital clock overlay refreshed once per second."""

from datetime import datetime
from typing import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from ..clock import clock_text


class ClockOverlay(QWidget):
    def __init__(self, now: Callable[[], datetime] = datetime.now,
                 parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("ClockOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self._now = now

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)
        self._greeting = QLabel()
        self._greeting.setObjectName("ClockGreeting")
        self._time = QLabel()
        self._time.setObjectName("ClockTime")
        self._date = QLabel()
        self._date.setObjectName("ClockDate")
        for lbl in (self._greeting, self._time, self._date):
            layout.addWidget(lbl)

        self._timer = QTimer(self)
        self._timer.setInterval(1000)
        self._timer.timeout.connect(self.refresh)
        self._timer.start()
        self.refresh()

    def refresh(self) -> None:
        t = clock_text(self._now())
        self._greeting.setText(t.greeting)
        self._time.setText(f"{t.hours}:{t.minutes}")
        self._date.setText(f"{t.day} · {t.date}")
        self.adjustSize()
