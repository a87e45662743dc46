from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent, QMouseEvent, QWheelEvent

from vectorportal.core.geometry import Point


WHEEL_NOTCH = 120
SESSION_KEYS = (Qt.Key_Return, Qt.Key_Enter, Qt.Key_Escape, Qt.Key_Backspace)


class CanvasInputHandler:
    """Translate Qt events on the drawing surface into session input."""

    def __init__(self, app):
        self.app = app

    @property
    def scroll_step(self) -> float:
        return self.app.settings_controller.scroll_step

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return
        self.app.pointer_down(Point.from_qt(event.position()))

    def mouseMoveEvent(self, event: QMouseEvent):
        self.app.pointer_move(Point.from_qt(event.position()))

    def wheelEvent(self, event: QWheelEvent):
        delta = event.angleDelta().y()
        if delta == 0:
            return
        self.app.scroll(delta / WHEEL_NOTCH * self.scroll_step)

    def keyPressEvent(self, event: QKeyEvent):
        key = event.key()
        if key in SESSION_KEYS:
            self.app.key_press(key)
            return
        text = event.text()
        if text:
            self.app.text_input(text)
