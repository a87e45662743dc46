"""Timer that animates the text caret while a text curve is being typed."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal


DEFAULT_BLINK_INTERVAL_MS = 500
MIN_BLINK_INTERVAL_MS = 50


class CaretBlinker(QObject):
    """Emit :attr:`ticked` at a fixed interval between :meth:`start` and :meth:`stop`."""

    ticked = Signal()
    active_changed = Signal(bool)

    def __init__(self, interval_ms: int = DEFAULT_BLINK_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._interval_ms = max(MIN_BLINK_INTERVAL_MS, int(interval_ms))
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def set_interval(self, interval_ms: int) -> None:
        self._interval_ms = max(MIN_BLINK_INTERVAL_MS, int(interval_ms))
        if self._timer.isActive():
            self._timer.start(self._interval_ms)

    def start(self) -> None:
        if self._timer.isActive():
            return
        self._timer.start(self._interval_ms)
        self.active_changed.emit(True)

    def stop(self) -> None:
        if not self._timer.isActive():
            return
        self._timer.stop()
        self.active_changed.emit(False)

    def _on_timeout(self) -> None:
        # A timeout already queued when stop() ran must not reach listeners.
        if not self._timer.isActive():
            return
        self.ticked.emit()
