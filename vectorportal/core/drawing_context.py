from __future__ import annotations

from enum import Enum

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtGui import QColor

from vectorportal.core.curve import DEFAULT_WIDTH, GeometryKind


PALETTE = {
    "Primary": QColor(93, 135, 232),
    "Secondary": QColor(127, 132, 156),
    "Success": QColor(82, 196, 121),
    "Danger": QColor(232, 93, 93),
    "White": QColor(255, 255, 255),
    "Black": QColor(0, 0, 0),
}


class DrawMode(Enum):
    NONE = "None"
    NEW = "New"
    EDIT = "Edit"
    ROTATE = "Rotate"


def palette_color(name: str, fallback: str = "White") -> QColor:
    return QColor(PALETTE.get(name, PALETTE[fallback]))


class DrawingContext(QObject):
    """Mode and style inputs read whenever a new session starts."""

    mode_changed = Signal(object)
    kind_changed = Signal(object)
    color_changed = Signal(QColor)
    background_color_changed = Signal(QColor)
    width_changed = Signal(float)
    side_count_changed = Signal(object)

    def __init__(self):
        super().__init__()
        self.mode = DrawMode.NONE
        self.kind: GeometryKind | None = None
        self.color = palette_color("White")
        self.color_name = "White"
        self.background_color = palette_color("Black")
        self.width = DEFAULT_WIDTH
        self.default_width = DEFAULT_WIDTH
        self.side_count: int | None = 3

    @Slot(object)
    def set_mode(self, mode):
        if isinstance(mode, str):
            mode = DrawMode(mode)
        if mode == self.mode:
            return
        self.mode = mode
        self.mode_changed.emit(self.mode)

    @Slot(object)
    def set_kind(self, kind):
        if isinstance(kind, str):
            kind = GeometryKind(kind)
        if kind == self.kind:
            return
        self.kind = kind
        self.kind_changed.emit(self.kind)

    @Slot(object)
    def set_color(self, color):
        # Accepts a palette name or a QColor
        if isinstance(color, str):
            self.color_name = color if color in PALETTE else "White"
            self.color = palette_color(color)
        else:
            self.color_name = None
            self.color = QColor(color)
        self.color_changed.emit(self.color)

    @Slot(object)
    def set_background_color(self, color):
        if isinstance(color, str):
            self.background_color = palette_color(color, fallback="Black")
        else:
            self.background_color = QColor(color)
        self.background_color_changed.emit(self.background_color)

    @Slot(float)
    def set_width(self, width):
        width = float(width)
        if width <= 0:
            width = self.default_width
        self.width = width
        self.width_changed.emit(self.width)

    @Slot(str)
    def set_width_text(self, text):
        try:
            width = float(text) if text.strip() else self.default_width
        except ValueError:
            width = self.default_width
        self.set_width(width)

    @Slot(object)
    def set_side_count(self, side_count):
        self.side_count = side_count
        self.side_count_changed.emit(self.side_count)

    @Slot(str)
    def set_side_count_text(self, text):
        try:
            side_count = int(text)
        except ValueError:
            side_count = None
        self.set_side_count(side_count)
